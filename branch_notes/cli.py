#!/usr/bin/env python3
"""
git-branch-notes CLI

Keeps a database of notes on local branches, to help maintainers track
details such as which branches to merge or which commits to cherry-pick.

Usage:
    git branch-notes show           # Show notes for every branch (Markdown)
    git branch-notes add            # Write notes for the current branch
    git branch-notes rm <branch>    # Remove the notes for <branch>
"""
import argparse
import enum
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Sequence, TextIO

from branch_notes import __version__
from branch_notes.colors import dim, error, success
from branch_notes.config import NotesConfig
from branch_notes.editor import capture_note_text, resolve_editor
from branch_notes.errors import (
    BranchNotesError,
    EmptyNote,
    InvalidCommand,
    MissingArgument,
    NoEditorConfigured,
)
from branch_notes.git_utils import current_branch_name, metadata_dir, repository_root
from branch_notes.logger import NotesLogger, get_logger
from branch_notes.note_store import BranchNote, NoteStore
from branch_notes.process import CommandRunner, SubprocessRunner


class Command(enum.Enum):
    """The commands the CLI understands."""

    SHOW = "show"
    ADD = "add"
    RM = "rm"

    @property
    def requires_argument(self) -> bool:
        return self is Command.RM

    @classmethod
    def parse(cls, verb: Optional[str]) -> "Command":
        """
        Map a command-line verb to a Command.

        Raises:
            InvalidCommand: If the verb is missing or unknown
        """
        for command in cls:
            if command.value == verb:
                return command
        raise InvalidCommand(verb)


@dataclass(frozen=True)
class Invocation:
    """A validated command line."""

    command: Command
    argument: str = ""


@dataclass
class Context:
    """Everything a command handler needs for one invocation."""

    repo_root: str
    git_dir: str
    store: NoteStore
    runner: CommandRunner
    logger: NotesLogger
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='git-branch-notes',
        description='Keep notes on local git branches',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Commands:
    show                Show notes for every branch, in Markdown
    add                 Write notes for the current branch in $EDITOR
    rm <branch>         Remove the notes for <branch>

Everything after the command is taken literally, so a branch named
"-wip" is removed with `rm -wip` (or `rm -- -wip`).

Notes are stored in info/branch-notes.sqlite inside the repository's git
directory, shared by all of its worktrees. The editor is taken from
$EDITOR, then from core.editor.
'''
    )
    parser.add_argument('command', nargs='?', help='show, add or rm')
    parser.add_argument('arguments', nargs=argparse.REMAINDER, help='Branch name (rm only)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def parse_invocation(argv: Sequence[str]) -> Invocation:
    """
    Parse and validate the command line.

    Raises:
        InvalidCommand: If the verb is missing or unknown
        MissingArgument: If the command needs an argument and got none
    """
    parser = build_parser()
    args = parser.parse_args(list(argv))
    command = Command.parse(args.command)

    arguments = list(args.arguments)
    if arguments and arguments[0] == '--':
        arguments = arguments[1:]
    if len(arguments) > 1:
        parser.error(f"unrecognized arguments: {' '.join(arguments[1:])}")
    argument = arguments[0] if arguments else ""

    if command.requires_argument and not argument:
        raise MissingArgument(command.value)

    return Invocation(command=command, argument=argument)


def format_notes(entries: Sequence[BranchNote]) -> str:
    """
    Render notes as Markdown.

    Each branch gets its name, an underline of '=' the same length, a
    blank line, the notes, then two blank lines before the next branch.
    """
    chunks = []
    for entry in entries:
        chunks.append(f"{entry.name}\n{'=' * len(entry.name)}\n\n{entry.notes}\n\n\n")
    return "".join(chunks)


def cmd_show(ctx: Context, invocation: Invocation) -> int:
    """Print notes for every branch."""
    entries = ctx.store.list_all()
    ctx.logger.debug("listing notes", count=len(entries))
    if entries:
        ctx.stdout.write(format_notes(entries))
        ctx.stdout.flush()
    return 0


def cmd_add(ctx: Context, invocation: Invocation) -> int:
    """Write notes for the current branch in the user's editor."""
    branch = current_branch_name(ctx.runner, cwd=ctx.repo_root)
    logger = ctx.logger.for_branch(branch)

    editor = resolve_editor(ctx.runner, ctx.environ, cwd=ctx.repo_root, logger=logger)
    if not editor:
        raise NoEditorConfigured()

    print(dim(f"Waiting on {editor}...", stream=ctx.stdout), file=ctx.stdout, flush=True)
    notes = capture_note_text(ctx.runner, editor, cwd=ctx.repo_root, logger=logger)

    if not notes.strip():
        raise EmptyNote(branch)

    replacing = ctx.store.get(branch) is not None
    ctx.store.upsert(branch, notes)
    logger.info("saved notes", replaced=replacing, length=len(notes))

    print(success(f"Saved notes for {branch}", stream=ctx.stdout), file=ctx.stdout)
    return 0


def cmd_rm(ctx: Context, invocation: Invocation) -> int:
    """Remove the notes for a branch."""
    branch = invocation.argument
    removed = ctx.store.delete(branch)
    ctx.logger.for_branch(branch).info("removed notes", removed=removed)

    if removed:
        print(success(f"Removed notes for {branch}", stream=ctx.stdout), file=ctx.stdout)
    else:
        print(dim(f"No notes for {branch}", stream=ctx.stdout), file=ctx.stdout)
    return 0


HANDLERS: dict[Command, Callable[[Context, Invocation], int]] = {
    Command.SHOW: cmd_show,
    Command.ADD: cmd_add,
    Command.RM: cmd_rm,
}


def build_context(
    runner: CommandRunner,
    environ: Mapping[str, str],
    stdout: TextIO,
    command: Command,
) -> Context:
    """Locate the repository, load config and open the note store."""
    repo_root = repository_root(runner)
    git_dir = metadata_dir(runner, repo_root)
    config = NotesConfig(git_dir, environ=environ)
    logger = get_logger(config.get_logging_config(), command=command.value, repo=repo_root)
    store = NoteStore.for_repository(git_dir)
    return Context(
        repo_root=repo_root,
        git_dir=git_dir,
        store=store,
        runner=runner,
        logger=logger,
        environ=environ,
        stdout=stdout,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    runner: Optional[CommandRunner] = None,
    environ: Optional[Mapping[str, str]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """
    CLI entry point.

    Returns:
        Exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    runner = runner or SubprocessRunner()
    environ = os.environ if environ is None else environ
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    ctx = None
    try:
        invocation = parse_invocation(argv)
        ctx = build_context(runner, environ, stdout, invocation.command)
        return HANDLERS[invocation.command](ctx, invocation)
    except BranchNotesError as e:
        if ctx is not None:
            ctx.logger.error(str(e), error=type(e).__name__)
        print(error(f"Error: {e}", stream=stderr), file=stderr)
        return e.exit_code


if __name__ == '__main__':
    sys.exit(main())
