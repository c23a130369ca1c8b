#!/usr/bin/env python3
"""
Process runner interface for external commands.

Every external process (git queries, the user's editor) is started through a
CommandRunner. Following the Dependency Inversion Principle, the git adapter,
editor launcher and CLI depend on this abstraction rather than on subprocess
directly, so tests can substitute FakeRunner and run without a real
repository or a real editor.

Implementations:
- SubprocessRunner: runs real processes via subprocess.run
- FakeRunner: returns canned output and records every call
"""
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence


class CommandRunner(ABC):
    """
    Abstract base class for starting external processes.

    Both methods block until the process exits; there is no timeout.
    A command that cannot be started at all raises OSError.
    """

    @abstractmethod
    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> tuple[int, str, str]:
        """
        Run a command and capture its output.

        Args:
            args: Command and arguments (e.g., ["git", "rev-parse", "--show-toplevel"])
            cwd: Working directory (defaults to current)

        Returns:
            Tuple of (exit_code, stdout, stderr). Output is NOT stripped;
            callers decide how to clean it.

        Raises:
            OSError: If the command cannot be started
        """
        raise NotImplementedError

    @abstractmethod
    def launch(self, args: Sequence[str], cwd: Optional[str] = None) -> int:
        """
        Run an interactive command attached to the user's terminal.

        Args:
            args: Command and arguments
            cwd: Working directory (defaults to current)

        Returns:
            Exit code of the process

        Raises:
            OSError: If the command cannot be started
        """
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by subprocess.run."""

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> tuple[int, str, str]:
        # Bytes that are not UTF-8 survive as surrogate escapes; git_utils rejects them
        result = subprocess.run(
            list(args),
            capture_output=True,
            encoding="utf-8",
            errors="surrogateescape",
            cwd=cwd,
        )
        return result.returncode, result.stdout, result.stderr

    def launch(self, args: Sequence[str], cwd: Optional[str] = None) -> int:
        # stdin/stdout/stderr inherited so the editor owns the terminal
        result = subprocess.run(list(args), cwd=cwd)
        return result.returncode


class FakeRunner(CommandRunner):
    """
    CommandRunner returning canned results.

    Usage:
        runner = FakeRunner({
            ("git", "rev-parse", "--show-toplevel"): (0, "/repo\\n", ""),
            ("git", "symbolic-ref", "--short", "-q", "HEAD"): (0, "main\\n", ""),
        })

        def editor(args):
            Path(args[-1]).write_text("Merge after review\\n")
            return 0

        runner.on_launch = editor

    Commands without a canned result behave like a missing binary
    (exit code 127). A canned value may also be an exception instance,
    which is raised to simulate a binary that cannot start. Every call is
    recorded in `calls` as a tuple.
    """

    def __init__(
        self,
        responses: Optional[dict] = None,
        on_launch: Optional[Callable[[list[str]], int]] = None,
    ):
        self.responses: dict = dict(responses or {})
        self.on_launch = on_launch
        self.calls: list[tuple] = []

    def set_response(self, args: Sequence[str], code: int, stdout: str = "", stderr: str = "") -> None:
        """Register (or replace) the canned result for a command."""
        self.responses[tuple(args)] = (code, stdout, stderr)

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> tuple[int, str, str]:
        key = tuple(args)
        self.calls.append(key)
        value = self.responses.get(key)
        if value is None:
            return 127, "", f"{args[0]}: command not found"
        if isinstance(value, BaseException):
            raise value
        return value

    def launch(self, args: Sequence[str], cwd: Optional[str] = None) -> int:
        self.calls.append(tuple(args))
        if self.on_launch is None:
            raise FileNotFoundError(2, "No such file or directory", args[0])
        return self.on_launch(list(args))
