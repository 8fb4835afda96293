"""Tests for the git adapter against a real temporary repository."""

import subprocess
from pathlib import Path

import pytest

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
from diffreview.git.diff_parser import parse_diff
from diffreview.git.models import FileStatus, LineKind


class TestSynthesizedDiff:
    def test_shape(self):
        text = synthesize_new_file_diff("new.txt", ["a", "b"])
        assert text == "--- /dev/null\n+++ b/new.txt\n@@ -0,0 +1,2 @@\n+a\n+b"

    def test_parses_like_git_output(self):
        parsed = parse_diff(synthesize_new_file_diff("pkg/mod.py", ["x = 1", "", "y = 2"]))
        assert parsed.old_file_path == "/dev/null"
        assert parsed.new_file_path == "pkg/mod.py"
        hunk = parsed.hunks[0]
        assert hunk.new_count == 3
        assert [l.content for l in hunk.lines] == ["x = 1", "", "y = 2"]
        assert all(l.kind == LineKind.ADD for l in hunk.lines)

    def test_empty_content(self):
        assert synthesize_new_file_diff("empty.txt", []) == ""


class TestRepository:
    def test_repo_root(self, tmp_git_repo: Path):
        assert get_repo_root(tmp_git_repo).resolve() == tmp_git_repo.resolve()

    def test_not_a_repo(self, tmp_path: Path):
        with pytest.raises(GitError):
            get_repo_root(tmp_path)

    def test_changed_files(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Test\nmore\n")
        (tmp_git_repo / "fresh.py").write_text("print('hi')\n")
        (tmp_git_repo / "staged.txt").write_text("staged\n")
        subprocess.run(["git", "add", "staged.txt"], cwd=tmp_git_repo, capture_output=True, check=True)

        files = get_changed_files(tmp_git_repo)
        assert files[0] == "README.md"
        assert set(files) == {"README.md", "fresh.py", "staged.txt"}
        assert len(files) == len(set(files))

    def test_untracked_diff_is_synthesized(self, tmp_git_repo: Path):
        (tmp_git_repo / "fresh.py").write_text("a = 1\nb = 2\n")
        assert is_untracked(tmp_git_repo, "fresh.py")
        parsed = parse_diff(get_file_diff(tmp_git_repo, "fresh.py"))
        assert parsed.is_new_file
        assert [l.content for l in parsed.hunks[0].lines] == ["a = 1", "b = 2"]

    def test_modified_diff(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Test\nmore\n")
        assert not is_untracked(tmp_git_repo, "README.md")
        parsed = parse_diff(get_file_diff(tmp_git_repo, "README.md"))
        assert parsed.new_file_path == "README.md"
        added = [l for l in parsed.hunks[0].lines if l.kind == LineKind.ADD]
        assert [l.content for l in added] == ["more"]
        assert added[0].new_line_number == 2

    def test_staged_only_diff(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Staged\n")
        subprocess.run(["git", "add", "README.md"], cwd=tmp_git_repo, capture_output=True, check=True)
        parsed = parse_diff(get_file_diff(tmp_git_repo, "README.md"))
        kinds = [l.kind for l in parsed.hunks[0].lines]
        assert kinds == [LineKind.DELETE, LineKind.ADD]

    def test_full_diff(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        assert "README.md" in get_full_diff(tmp_git_repo)

    def test_untracked_lines_split_on_newline_only(self, tmp_git_repo: Path):
        (tmp_git_repo / "form.txt").write_bytes(b"a\x0cb\nc\n")
        parsed = parse_diff(get_file_diff(tmp_git_repo, "form.txt"))
        assert [l.content for l in parsed.hunks[0].lines] == ["a\x0cb", "c"]
        assert parsed.hunks[0].new_count == 2


class TestFileStatus:
    def test_added_untracked(self, tmp_git_repo: Path):
        (tmp_git_repo / "fresh.py").write_text("x\n")
        assert get_file_status(tmp_git_repo, "fresh.py") == FileStatus.ADDED

    def test_added_staged(self, tmp_git_repo: Path):
        (tmp_git_repo / "fresh.py").write_text("x\n")
        subprocess.run(["git", "add", "fresh.py"], cwd=tmp_git_repo, capture_output=True, check=True)
        assert get_file_status(tmp_git_repo, "fresh.py") == FileStatus.ADDED

    def test_deleted(self, tmp_git_repo: Path):
        (tmp_git_repo / "obsolete.txt").unlink()
        assert get_file_status(tmp_git_repo, "obsolete.txt") == FileStatus.DELETED

    def test_modified(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        assert get_file_status(tmp_git_repo, "README.md") == FileStatus.MODIFIED


class TestSplitFileLines:
    def test_trailing_newline_adds_no_line(self):
        assert split_file_lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert split_file_lines("a\nb") == ["a", "b"]

    def test_other_separators_stay_in_line(self):
        assert split_file_lines("a\x0cb\x1cc d\r\n") == ["a\x0cb\x1cc d\r"]

    def test_blank_lines_kept(self):
        assert split_file_lines("a\n\n\n") == ["a", "", ""]

    def test_empty(self):
        assert split_file_lines("") == []


class TestAllFileStatuses:
    def _make_changes(self, repo: Path) -> list:
        (repo / "README.md").write_text("# Changed\n")
        (repo / "obsolete.txt").unlink()
        (repo / "fresh.py").write_text("x\n")
        (repo / "staged.txt").write_text("staged\n")
        subprocess.run(["git", "add", "staged.txt"], cwd=repo, capture_output=True, check=True)
        return ["README.md", "obsolete.txt", "fresh.py", "staged.txt"]

    def test_matches_single_file_status(self, tmp_git_repo: Path):
        files = self._make_changes(tmp_git_repo)
        batch = get_all_file_statuses(tmp_git_repo, files)
        assert batch == {p: get_file_status(tmp_git_repo, p) for p in files}

    def test_expected_statuses(self, tmp_git_repo: Path):
        files = self._make_changes(tmp_git_repo)
        batch = get_all_file_statuses(tmp_git_repo, files)
        assert batch["README.md"] == FileStatus.MODIFIED
        assert batch["obsolete.txt"] == FileStatus.DELETED
        assert batch["fresh.py"] == FileStatus.ADDED
        assert batch["staged.txt"] == FileStatus.ADDED

    def test_staged_deletion(self, tmp_git_repo: Path):
        subprocess.run(["git", "rm", "-q", "obsolete.txt"], cwd=tmp_git_repo, capture_output=True, check=True)
        batch = get_all_file_statuses(tmp_git_repo, ["obsolete.txt"])
        assert batch["obsolete.txt"] == FileStatus.DELETED == get_file_status(tmp_git_repo, "obsolete.txt")

    def test_older_base(self, tmp_git_repo: Path):
        (tmp_git_repo / "later.txt").write_text("later\n")
        subprocess.run(["git", "add", "later.txt"], cwd=tmp_git_repo, capture_output=True, check=True)
        subprocess.run(["git", "commit", "-q", "-m", "later"], cwd=tmp_git_repo, capture_output=True, check=True)
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        files = ["later.txt", "README.md"]
        batch = get_all_file_statuses(tmp_git_repo, files, "HEAD~1")
        assert batch == {p: get_file_status(tmp_git_repo, p, "HEAD~1") for p in files}
        assert batch["later.txt"] == FileStatus.ADDED

    def test_no_files(self, tmp_git_repo: Path):
        assert get_all_file_statuses(tmp_git_repo, []) == {}


class TestReviewMarking:
    def test_stage_and_unstage(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        assert not is_staged(tmp_git_repo, "README.md")
        assert has_unstaged_changes(tmp_git_repo, "README.md")
        assert get_unstaged_files(tmp_git_repo) == {"README.md"}

        stage_file(tmp_git_repo, "README.md")
        assert is_staged(tmp_git_repo, "README.md")
        assert not has_unstaged_changes(tmp_git_repo, "README.md")
        assert get_unstaged_files(tmp_git_repo) == set()

        unstage_file(tmp_git_repo, "README.md")
        assert not is_staged(tmp_git_repo, "README.md")
        assert has_unstaged_changes(tmp_git_repo, "README.md")
        assert (tmp_git_repo / "README.md").read_text() == "# Changed\n"

    def test_stage_untracked_file(self, tmp_git_repo: Path):
        (tmp_git_repo / "fresh.py").write_text("x\n")
        stage_file(tmp_git_repo, "fresh.py")
        assert is_staged(tmp_git_repo, "fresh.py")
        assert not is_untracked(tmp_git_repo, "fresh.py")

    def test_edit_after_staging(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        stage_file(tmp_git_repo, "README.md")
        (tmp_git_repo / "README.md").write_text("# Changed again\n")
        assert is_staged(tmp_git_repo, "README.md")
        assert has_unstaged_changes(tmp_git_repo, "README.md")

    def test_stage_missing_path(self, tmp_git_repo: Path):
        with pytest.raises(GitError):
            stage_file(tmp_git_repo, "nope.txt")


class TestHistory:
    def test_recent_commits(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        subprocess.run(
            ["git", "commit", "-q", "-am", "fix: a | b"],
            cwd=tmp_git_repo, capture_output=True, check=True,
        )
        commits = get_recent_commits(tmp_git_repo)
        assert [c.subject for c in commits] == ["fix: a | b", "init"]
        assert commits[0].author == "Test"
        assert len(commits[0].hash) == 40
        assert commits[0].hash.startswith(commits[0].short_hash)
        assert commits[0].date

    def test_count_limit(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        subprocess.run(["git", "commit", "-q", "-am", "second"], cwd=tmp_git_repo, capture_output=True, check=True)
        assert [c.subject for c in get_recent_commits(tmp_git_repo, count=1)] == ["second"]

    def test_file_at_head(self, tmp_git_repo: Path):
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        assert get_file_at_rev(tmp_git_repo, "README.md") == "# Test\n"

    def test_deleted_file_still_at_head(self, tmp_git_repo: Path):
        (tmp_git_repo / "obsolete.txt").unlink()
        assert get_file_at_rev(tmp_git_repo, "obsolete.txt", "HEAD") == "remove me\n"

    def test_file_missing_at_rev(self, tmp_git_repo: Path):
        with pytest.raises(GitError):
            get_file_at_rev(tmp_git_repo, "nope.txt")
