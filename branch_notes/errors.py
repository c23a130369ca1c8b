"""
Error types for git-branch-notes.

All errors inherit from BranchNotesError so the CLI can catch them in one
place. None of them are retried: the CLI reports the message on stderr and
exits with the error's exit_code.
"""
from typing import Optional


class BranchNotesError(Exception):
    """Base exception for all git-branch-notes failures."""

    exit_code = 1


class NotARepository(BranchNotesError):
    """Raised when git cannot locate an enclosing repository."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = "Not in a git repository"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class StoreUnavailable(BranchNotesError):
    """Raised when the notes database cannot be opened or initialized."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not open {path}: {reason}")


class StoreWriteError(BranchNotesError):
    """Raised when a write to the notes database fails."""

    def __init__(self, branch: str, reason: str):
        self.branch = branch
        self.reason = reason
        super().__init__(f"Could not write notes for {branch}: {reason}")


class InvalidCommand(BranchNotesError):
    """Raised for a verb other than show, add or rm."""

    exit_code = 2

    def __init__(self, command: Optional[str]):
        self.command = command
        if command:
            super().__init__(f"Invalid command {command}")
        else:
            super().__init__("No command given (expected one of: show, add, rm)")


class MissingArgument(BranchNotesError):
    """Raised when a command that needs an argument was given none."""

    exit_code = 2

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command {command} requires an argument")


class NoEditorConfigured(BranchNotesError):
    """Raised when neither EDITOR nor core.editor names an editor."""

    def __init__(self):
        super().__init__(
            "No editor configured (set EDITOR or run 'git config core.editor <editor>')"
        )


class EditorLaunchError(BranchNotesError):
    """Raised when the editor cannot be started or exits with a failure."""

    def __init__(self, editor: str, reason: str):
        self.editor = editor
        self.reason = reason
        super().__init__(f"Could not run editor '{editor}': {reason}")


class EditorReadError(BranchNotesError):
    """Raised when the scratch file cannot be read back after editing."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read from notes file {path}: {reason}")


class EmptyNote(BranchNotesError):
    """Raised when the editor produced no text to save."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Aborting: empty note for {branch}, nothing saved")
