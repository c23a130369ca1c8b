"""
Note store for git-branch-notes.

Notes live in a SQLite database inside the info directory of the
repository's git directory, so they are never part of the tracked working
tree:

    <git-dir>/info/branch-notes.sqlite

with a single table:

    branch_notes(name TEXT NOT NULL UNIQUE, notes TEXT NOT NULL)

The branch name is unique; saving notes for a branch that already has some
replaces them in full. Linked worktrees share the git directory, and so
share one set of notes.
"""
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from branch_notes.errors import StoreUnavailable, StoreWriteError


DATABASE_FILENAME = "branch-notes.sqlite"

SCHEMA = """
CREATE TABLE IF NOT EXISTS branch_notes (
    name  TEXT NOT NULL UNIQUE,
    notes TEXT NOT NULL
);
"""


@dataclass(frozen=True)
class BranchNote:
    """Notes attached to one branch."""

    name: str
    notes: str


def get_info_dir(git_dir: str) -> Path:
    """Get the info directory inside a git directory."""
    return Path(git_dir) / "info"


def get_store_path(git_dir: str) -> Path:
    """Get the path to the notes database for a git directory."""
    return get_info_dir(git_dir) / DATABASE_FILENAME


class NoteStore:
    """SQLite-backed store of branch notes."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self._ensure_db()

    @classmethod
    def initialize(cls, db_path: Union[str, Path]) -> "NoteStore":
        """
        Open (creating if absent) the database at db_path.

        Raises:
            StoreUnavailable: If the file cannot be opened or created
        """
        return cls(db_path)

    @classmethod
    def for_repository(cls, git_dir: str) -> "NoteStore":
        """Open the store that belongs to the repository whose git directory is git_dir."""
        return cls(get_store_path(git_dir))

    def _ensure_db(self) -> None:
        """Ensure the database file and table exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as conn:
                conn.executescript(SCHEMA)
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailable(str(self.db_path), str(e)) from e

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def list_all(self) -> list[BranchNote]:
        """Return every note, sorted by branch name."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT name, notes FROM branch_notes ORDER BY name ASC"
                ).fetchall()
        except sqlite3.Error as e:
            raise StoreUnavailable(str(self.db_path), str(e)) from e
        return [BranchNote(name=name, notes=notes) for name, notes in rows]

    def get(self, name: str) -> Optional[BranchNote]:
        """Return the note for one branch, or None."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT name, notes FROM branch_notes WHERE name = ?", (name,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreUnavailable(str(self.db_path), str(e)) from e
        if row:
            return BranchNote(name=row[0], notes=row[1])
        return None

    def upsert(self, name: str, notes: str) -> None:
        """
        Save notes for a branch, replacing any existing notes.

        Raises:
            StoreWriteError: If the write fails
        """
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO branch_notes (name, notes) VALUES (?, ?)",
                    (name, notes),
                )
        except sqlite3.Error as e:
            raise StoreWriteError(name, str(e)) from e

    def delete(self, name: str) -> bool:
        """
        Delete the notes for a branch.

        Deleting a branch without notes is not an error.

        Returns:
            True if a row was removed
        """
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM branch_notes WHERE name = ?", (name,)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StoreWriteError(name, str(e)) from e
