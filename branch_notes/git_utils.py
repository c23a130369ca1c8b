#!/usr/bin/env python3
"""
Git operation helpers for git-branch-notes.

Provides the facts the tool needs from git:
- The top-level directory of the enclosing repository
- The repository's metadata directory (shared by all linked worktrees)
- The name of the checked-out branch
- The core.editor setting (fallback when EDITOR is unset)

All commands go through a CommandRunner so callers can substitute a fake.
"""
from pathlib import Path
from typing import Optional

from branch_notes.errors import NotARepository
from branch_notes.logger import NotesLogger
from branch_notes.process import CommandRunner


def strip_newlines(text: str) -> str:
    """
    Remove every newline from a string.

    Git output can carry newlines in the middle of a value as well as at
    the end, so rstrip() is not enough.
    """
    return text.replace("\r", "").replace("\n", "")


def is_valid_utf8(text: str) -> bool:
    """False if text carries surrogate escapes for bytes that were not UTF-8."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def run_git(runner: CommandRunner, args: list[str], cwd: Optional[str] = None) -> tuple[int, str, str]:
    """
    Run a git command through the runner.

    Args:
        runner: CommandRunner to use
        args: Arguments after "git" (e.g., ["rev-parse", "--show-toplevel"])
        cwd: Working directory (defaults to current)

    Returns:
        Tuple of (exit_code, stdout, stderr)

    Raises:
        NotARepository: If git itself cannot be started
    """
    try:
        return runner.run(["git", *args], cwd=cwd)
    except OSError as e:
        raise NotARepository(f"could not run git: {e}") from e


def _checked_value(out: str, what: str) -> str:
    value = strip_newlines(out)
    if not is_valid_utf8(value):
        raise NotARepository(f"{what} is not valid UTF-8")
    return value


def repository_root(runner: CommandRunner, cwd: Optional[str] = None) -> str:
    """
    Get the root directory of the git repository.

    Args:
        runner: CommandRunner to use
        cwd: Starting directory (defaults to current)

    Returns:
        Absolute path to the repository's working tree root

    Raises:
        NotARepository: If not inside a repository
    """
    code, out, err = run_git(runner, ["rev-parse", "--show-toplevel"], cwd)
    if code != 0 or not strip_newlines(out):
        raise NotARepository(err.strip())
    return _checked_value(out, "repository path")


def metadata_dir(runner: CommandRunner, repo_root: str) -> str:
    """
    Get the repository's metadata directory.

    Uses `git rev-parse --git-common-dir`, so a linked worktree or a
    submodule (where .git is a file) resolves to the real git directory.
    A relative answer is resolved against repo_root.

    Raises:
        NotARepository: If git cannot report the directory
    """
    code, out, err = run_git(runner, ["rev-parse", "--git-common-dir"], repo_root)
    if code != 0 or not strip_newlines(out):
        raise NotARepository(err.strip() or "could not locate the git directory")
    path = Path(_checked_value(out, "git directory"))
    if not path.is_absolute():
        path = Path(repo_root) / path
    return str(path)


def current_branch_name(runner: CommandRunner, cwd: Optional[str] = None) -> str:
    """
    Get the name of the checked-out branch.

    Uses `git symbolic-ref --short -q HEAD`, which names the branch HEAD
    points to even when other branches or tags share its commit. A
    detached HEAD is named by its abbreviated commit id.

    Args:
        runner: CommandRunner to use
        cwd: Working directory (defaults to current)

    Returns:
        Branch name (e.g., "feature/auth") with all newlines removed

    Raises:
        NotARepository: If git fails (not a repo, or detached with no commits)
    """
    code, out, err = run_git(runner, ["symbolic-ref", "--short", "-q", "HEAD"], cwd)
    if code == 0 and strip_newlines(out):
        return _checked_value(out, "branch name")

    # symbolic-ref exits 1 for a detached HEAD
    if code == 1:
        code, out, err = run_git(runner, ["rev-parse", "--short", "HEAD"], cwd)
        if code == 0 and strip_newlines(out):
            return _checked_value(out, "commit id")

    raise NotARepository(err.strip() or "could not determine current branch")


def configured_editor(
    runner: CommandRunner,
    cwd: Optional[str] = None,
    logger: Optional[NotesLogger] = None,
) -> str:
    """
    Get the editor named by `git config core.editor`.

    Args:
        runner: CommandRunner to use
        cwd: Working directory (defaults to current)
        logger: Optional logger for query failures

    Returns:
        The configured editor command, or "" if unset or the query failed
    """
    try:
        code, out, err = run_git(runner, ["config", "--get", "core.editor"], cwd)
    except NotARepository as e:
        if logger:
            logger.warning("core.editor lookup failed", error=str(e))
        return ""

    # git config exits 1 when the key is simply not set
    if code == 1:
        return ""
    if code != 0 or not is_valid_utf8(out):
        if logger:
            logger.warning("core.editor lookup failed", exit_code=code, stderr=err.strip())
        return ""
    return out.strip()
