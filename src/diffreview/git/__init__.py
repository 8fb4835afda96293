"""Git interface layer — adapter, diff parsing, models."""

from diffreview.git.adapter import (
    GitError,
    get_all_file_statuses,
    get_changed_files,
    get_file_at_rev,
    get_file_diff,
    get_file_status,
    get_full_diff,
    get_recent_commits,
    get_repo_root,
    get_unstaged_files,
    has_unstaged_changes,
    is_staged,
    is_untracked,
    split_file_lines,
    stage_file,
    synthesize_new_file_diff,
    unstage_file,
)
from diffreview.git.diff_parser import DiffParser, parse_diff, parse_many, split_files
from diffreview.git.models import Commit, DiffLine, FileStatus, Hunk, LineKind, ParsedDiff, RenderLine

__all__ = [
    "Commit",
    "DiffLine",
    "DiffParser",
    "FileStatus",
    "GitError",
    "Hunk",
    "LineKind",
    "ParsedDiff",
    "RenderLine",
    "get_all_file_statuses",
    "get_changed_files",
    "get_file_at_rev",
    "get_file_diff",
    "get_file_status",
    "get_full_diff",
    "get_recent_commits",
    "get_repo_root",
    "get_unstaged_files",
    "has_unstaged_changes",
    "is_staged",
    "is_untracked",
    "parse_diff",
    "parse_many",
    "split_files",
    "stage_file",
    "synthesize_new_file_diff",
    "unstage_file",
]
