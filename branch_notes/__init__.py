"""
git-branch-notes

Keeps notes on local git branches in a SQLite database stored in the
repository's git directory (info/branch-notes.sqlite under
git rev-parse --git-common-dir, so linked worktrees share it).

Architecture:
- process.py: CommandRunner interface (real subprocess runner + fake)
- git_utils.py: Git operations (repository root, git directory, current branch,
  core.editor)
- note_store.py: SQLite persistence of branch notes
- editor.py: Editor resolution and note capture
- config.py: Configuration loading (defaults → global → repository)
- logger.py: Structured JSON logging
- cli.py: Command parsing and the show/add/rm handlers

Usage:
    from branch_notes.note_store import NoteStore

    store = NoteStore.for_repository('/path/to/repo/.git')
    store.upsert('feature/auth', 'Merge after the API freeze\\n')
    for note in store.list_all():
        print(note.name, note.notes)
"""

__version__ = "1.0.0"
