"""Git subprocess wrapper — changed files, per-file diffs, status, review marking."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from diffreview.git.models import Commit, FileStatus

logger = logging.getLogger(__name__)

DEFAULT_BASE = "HEAD"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # git diff exits non-zero without "fatal" for benign cases
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        raise GitError(f"git error: {stderr}")
    return result.stdout


def _non_empty_lines(output: str) -> List[str]:
    return [line for line in output.splitlines() if line.strip()]


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the git repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    if not out.strip():
        raise GitError(f"Not in a git repository: {cwd}")
    return Path(out.strip())


def get_changed_files(repo_root: Path, base: str = DEFAULT_BASE) -> List[str]:
    """Return unstaged, staged, and untracked paths, de-duplicated in that order."""
    seen: set[str] = set()
    files: List[str] = []
    for args in (
        ["diff", "--name-only", "--no-color", base],
        ["diff", "--cached", "--name-only", "--no-color"],
        ["ls-files", "--others", "--exclude-standard"],
    ):
        for path in _non_empty_lines(_run_git(args, cwd=repo_root)):
            if path not in seen:
                seen.add(path)
                files.append(path)
    return files


def is_untracked(repo_root: Path, path: str) -> bool:
    """True if *path* is not yet known to git."""
    out = _run_git(["ls-files", "--others", "--exclude-standard", "--", path], cwd=repo_root)
    return bool(out.strip())


def split_file_lines(content: str) -> List[str]:
    """Split file text on "\\n" only, as git does; a final newline adds no line."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def synthesize_new_file_diff(path: str, lines: Sequence[str]) -> str:
    """Build a unified diff that shows every line of *path* as added."""
    if not lines:
        return ""
    diff_lines = [
        "--- /dev/null",
        f"+++ b/{path}",
        f"@@ -0,0 +1,{len(lines)} @@",
    ]
    diff_lines.extend(f"+{line}" for line in lines)
    return "\n".join(diff_lines)


def _has_only_staged_changes(repo_root: Path, path: str) -> bool:
    unstaged = _run_git(["diff", "--name-only", "--no-color", "--", path], cwd=repo_root)
    if unstaged.strip():
        return False
    staged = _run_git(["diff", "--cached", "--name-only", "--no-color", "--", path], cwd=repo_root)
    return bool(staged.strip())


def get_file_diff(repo_root: Path, path: str, base: str = DEFAULT_BASE) -> str:
    """Return the unified diff of *path* against *base*.

    Untracked files get a synthesized all-additions diff. Files whose only
    changes are staged are diffed from the index.
    """
    if is_untracked(repo_root, path):
        full_path = repo_root / path
        try:
            content = full_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise GitError(f"Cannot read untracked file {path}: {exc}") from exc
        logger.info("Synthesizing new-file diff for untracked %s", path)
        return synthesize_new_file_diff(path, split_file_lines(content))

    if _has_only_staged_changes(repo_root, path):
        return _run_git(["diff", "--cached", "--no-color", "--", path], cwd=repo_root)
    return _run_git(["diff", "--no-color", base, "--", path], cwd=repo_root)


def get_full_diff(repo_root: Path, base: str = DEFAULT_BASE) -> str:
    """Return the unified diff of the whole working tree against *base*."""
    return _run_git(["diff", "--no-color", base], cwd=repo_root)


def _status_from_name_status(output: str) -> Optional[FileStatus]:
    code = output[:1]
    if code == "D":
        return FileStatus.DELETED
    if code == "A":
        return FileStatus.ADDED
    return None


def get_file_status(repo_root: Path, path: str, base: str = DEFAULT_BASE) -> FileStatus:
    """Classify *path* as added, deleted, or modified relative to *base*."""
    if base == DEFAULT_BASE and is_untracked(repo_root, path):
        return FileStatus.ADDED

    out = _run_git(["diff", "--name-status", "--no-renames", "--no-color", base, "--", path], cwd=repo_root)
    status = _status_from_name_status(out)
    if status is not None:
        return status

    if base == DEFAULT_BASE:
        out = _run_git(["diff", "--cached", "--name-status", "--no-renames", "--no-color", "--", path], cwd=repo_root)
        status = _status_from_name_status(out)
        if status is not None:
            return status

    return FileStatus.MODIFIED


def _name_status_codes(output: str) -> Dict[str, str]:
    """Map path -> one-letter status from ``--name-status`` output."""
    codes: Dict[str, str] = {}
    for line in _non_empty_lines(output):
        parts = line.split("\t")
        if len(parts) >= 2:
            codes[parts[-1]] = parts[0][:1]
    return codes


def get_all_file_statuses(
    repo_root: Path,
    files: Sequence[str],
    base: str = DEFAULT_BASE,
) -> Dict[str, FileStatus]:
    """Classify many paths at once, with the same rules as get_file_status.

    Runs at most three git commands regardless of how many files are given.
    """
    untracked: set[str] = set()
    staged: Dict[str, str] = {}
    if base == DEFAULT_BASE:
        untracked = set(_non_empty_lines(
            _run_git(["ls-files", "--others", "--exclude-standard"], cwd=repo_root)
        ))
        staged = _name_status_codes(
            _run_git(["diff", "--cached", "--name-status", "--no-renames", "--no-color"], cwd=repo_root)
        )
    against_base = _name_status_codes(
        _run_git(["diff", "--name-status", "--no-renames", "--no-color", base], cwd=repo_root)
    )

    statuses: Dict[str, FileStatus] = {}
    for path in files:
        if path in untracked:
            statuses[path] = FileStatus.ADDED
            continue
        status = (
            _status_from_name_status(against_base.get(path, ""))
            or _status_from_name_status(staged.get(path, ""))
        )
        statuses[path] = status or FileStatus.MODIFIED
    return statuses


# ---- review marking (the index is the "reviewed" set) ----


def stage_file(repo_root: Path, path: str) -> None:
    """Mark *path* as reviewed by staging it."""
    _run_git(["add", "--", path], cwd=repo_root)


def unstage_file(repo_root: Path, path: str) -> None:
    """Drop *path* from the index again, keeping working-tree changes."""
    _run_git(["reset", "-q", "HEAD", "--", path], cwd=repo_root)


def is_staged(repo_root: Path, path: str) -> bool:
    out = _run_git(["diff", "--cached", "--name-only", "--no-color", "--", path], cwd=repo_root)
    return bool(out.strip())


def has_unstaged_changes(repo_root: Path, path: str) -> bool:
    """True if the working tree differs from the index for *path*."""
    out = _run_git(["diff", "--name-only", "--no-color", "--", path], cwd=repo_root)
    return bool(out.strip())


def get_unstaged_files(repo_root: Path) -> set[str]:
    return set(_non_empty_lines(_run_git(["diff", "--name-only", "--no-color"], cwd=repo_root)))


# ---- history ----

_LOG_SEP = "\x1f"


def get_recent_commits(repo_root: Path, count: int = 20) -> List[Commit]:
    """Return the newest *count* commits on the current branch."""
    fmt = _LOG_SEP.join(("%H", "%h", "%s", "%an", "%ar"))
    out = _run_git(["log", f"--pretty=format:{fmt}", "-n", str(count)], cwd=repo_root)
    commits: List[Commit] = []
    for line in _non_empty_lines(out):
        fields = line.split(_LOG_SEP)
        if len(fields) == 5:
            commits.append(Commit(*fields))
    return commits


def get_file_at_rev(repo_root: Path, path: str, rev: str = DEFAULT_BASE) -> str:
    """Return the content of *path* as of *rev*. Raises GitError if absent."""
    return _run_git(["show", f"{rev}:{path}"], cwd=repo_root)
