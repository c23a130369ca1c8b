"""Launch the user's editor to capture note text."""
import os
import shlex
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from branch_notes.errors import (
    EditorLaunchError,
    EditorReadError,
    NoEditorConfigured,
)
from branch_notes.git_utils import configured_editor
from branch_notes.logger import NotesLogger
from branch_notes.process import CommandRunner


SCRATCH_PREFIX = "branch-notes-"
SCRATCH_SUFFIX = ".md"


def resolve_editor(
    runner: CommandRunner,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    logger: Optional[NotesLogger] = None,
) -> str:
    """
    Get the editor to use for new notes.

    Checks EDITOR first, then `git config core.editor`.

    Returns:
        The editor command, or "" if neither is set
    """
    env = os.environ if environ is None else environ
    if editor := env.get("EDITOR", "").strip():
        return editor
    return configured_editor(runner, cwd=cwd, logger=logger)


def capture_note_text(
    runner: CommandRunner,
    editor: str,
    cwd: Optional[str] = None,
    logger: Optional[NotesLogger] = None,
) -> str:
    """
    Open the editor on a scratch file and return what the user wrote.

    The scratch file is removed on every exit path. Its contents are
    returned exactly, newlines included.

    Raises:
        NoEditorConfigured: If editor is empty
        EditorLaunchError: If the editor cannot start or exits non-zero
        EditorReadError: If the scratch file cannot be read afterwards
    """
    if not editor:
        raise NoEditorConfigured()

    try:
        command = shlex.split(editor)
    except ValueError as e:
        raise EditorLaunchError(editor, str(e)) from e
    if not command:
        raise NoEditorConfigured()

    fd, scratch = tempfile.mkstemp(prefix=SCRATCH_PREFIX, suffix=SCRATCH_SUFFIX)
    os.close(fd)
    path = Path(scratch)

    try:
        if logger:
            logger.debug("launching editor", editor=editor, scratch=str(path))
        try:
            code = runner.launch([*command, str(path)], cwd=cwd)
        except OSError as e:
            raise EditorLaunchError(editor, str(e)) from e
        if code != 0:
            raise EditorLaunchError(editor, f"exited with status {code}")

        try:
            # newline="" keeps the text byte-for-byte, \r\n included
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise EditorReadError(str(path), str(e)) from e
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
