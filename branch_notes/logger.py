"""
Structured logging for git-branch-notes.

Each record is one JSON object per line:

    {"timestamp": "...Z", "level": "info", "message": "saved notes",
     "command": "add", "repo": "/work/repo", "branch": "feature/auth", ...}

NotesLogger is the one place invocation context is attached: `command` and
`repo` are fixed when the CLI builds its logger, and `branch` is added with
for_branch() once a command knows which branch it is working on. Per-call
keyword fields are merged on top.

Destinations come from the `logging` config section:
    level:        debug | info | warning | error (unknown -> error)
    destinations: any of "file", "stderr"
    file:         log path (default ~/.git-branch-notes.log)

Handlers swallow their own I/O errors; a log write never fails a command.
"""
import json
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, TextIO


LEVELS = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
}

DEFAULT_LEVEL = "error"
DEFAULT_LOG_FILE = Path.home() / ".git-branch-notes.log"


class LogHandler(ABC):
    """Destination for serialized log records."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Write one serialized record (without trailing newline)."""


class StreamHandler(LogHandler):
    """Writes records to a stream, stderr by default so stdout stays clean for `show`."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stderr

    def write(self, line: str) -> None:
        try:
            self.stream.write(line + "\n")
            self.stream.flush()
        except (OSError, ValueError):
            pass


class FileHandler(LogHandler):
    """Appends records to a file, creating its directory on first write."""

    def __init__(self, path: Path):
        self.path = path

    def write(self, line: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            pass


class NotesLogger:
    """JSON-lines logger carrying the context of one CLI invocation."""

    def __init__(
        self,
        level: str = DEFAULT_LEVEL,
        handlers: Sequence[LogHandler] = (),
        command: Optional[str] = None,
        repo: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> None:
        self.level_name = str(level).lower()
        if self.level_name not in LEVELS:
            self.level_name = DEFAULT_LEVEL
        self.threshold = LEVELS[self.level_name]
        self.handlers = tuple(handlers)
        self.command = command
        self.repo = repo
        self.branch = branch

    def for_branch(self, branch: str) -> "NotesLogger":
        """Return a logger whose records also name the branch."""
        return NotesLogger(self.level_name, self.handlers, self.command, self.repo, branch)

    def debug(self, message: str, **fields: object) -> None:
        self._log("debug", message, fields)

    def info(self, message: str, **fields: object) -> None:
        self._log("info", message, fields)

    def warning(self, message: str, **fields: object) -> None:
        self._log("warning", message, fields)

    def error(self, message: str, **fields: object) -> None:
        self._log("error", message, fields)

    def _log(self, level: str, message: str, fields: dict) -> None:
        if LEVELS[level] < self.threshold or not self.handlers:
            return

        record = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "message": message,
            "command": self.command,
            "repo": self.repo,
            "branch": self.branch,
        }
        record.update(fields)
        # default=str keeps odd field values (paths, exceptions) loggable
        line = json.dumps({k: v for k, v in record.items() if v is not None}, default=str)

        for handler in self.handlers:
            handler.write(line)


def get_logger(
    logging_config: Optional[dict] = None,
    command: Optional[str] = None,
    repo: Optional[str] = None,
) -> NotesLogger:
    """
    Build the invocation logger from the `logging` config section.

    Args:
        logging_config: Dict with optional keys: level, destinations, file
        command: The CLI command being run (show, add, rm)
        repo: Repository root

    Returns:
        NotesLogger writing to the configured destinations
    """
    cfg = logging_config or {}

    destinations = cfg.get("destinations", ["file"])
    if isinstance(destinations, str):
        destinations = [destinations]

    handlers: list[LogHandler] = []
    for destination in destinations or []:
        dest = str(destination or "").lower().strip()
        if dest == "stderr":
            handlers.append(StreamHandler())
        elif dest == "file":
            handlers.append(FileHandler(Path(cfg.get("file") or DEFAULT_LOG_FILE).expanduser()))

    return NotesLogger(cfg.get("level", DEFAULT_LEVEL), handlers, command=command, repo=repo)
