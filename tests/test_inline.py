"""Tests for the tokenizer and word-level inline diff."""

import pytest

from diffreview.render.inline import compute_inline_diff, highlight_ranges, tokenize
from diffreview.render.models import InlineDiffRange, Token


class TestTokenize:
    def test_token_classes(self):
        tokens = tokenize("foo_1  = bar(x);")
        assert [t.text for t in tokens] == ["foo_1", "  ", "=", " ", "bar", "(", "x", ")", ";"]

    def test_offsets_half_open(self):
        tokens = tokenize("ab cd")
        assert tokens == [Token("ab", 0, 2), Token(" ", 2, 3), Token("cd", 3, 5)]

    def test_symbols_are_single_chars(self):
        assert [t.text for t in tokenize("->>")] == ["-", ">", ">"]

    def test_empty(self):
        assert tokenize("") == []

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "the quick fox",
        "\tindent = {'a': [1, 2]}  # trailing  ",
        "naïve café_au_lait!!",
        "line\r",
    ])
    def test_reconstruction(self, text):
        tokens = tokenize(text)
        assert "".join(text[t.start:t.end] for t in tokens) == text
        assert all(text[t.start:t.end] == t.text for t in tokens)


class TestComputeInlineDiff:
    def test_single_word_change(self):
        ranges = compute_inline_diff("the quick fox", "the slow fox")
        assert ranges == [InlineDiffRange(4, 8)]
        assert "the slow fox"[4:8] == "slow"

    @pytest.mark.parametrize("text", ["", "x", "same line", "  return foo(bar)  "])
    def test_identical_is_empty(self, text):
        assert compute_inline_diff(text, text) == []

    def test_missing_operand(self):
        assert compute_inline_diff(None, "x") == []
        assert compute_inline_diff("x", None) == []

    def test_appended_tokens(self):
        assert compute_inline_diff("a", "a b") == [InlineDiffRange(1, 3)]

    def test_removed_tokens_give_nothing_in_new(self):
        assert compute_inline_diff("a b", "a") == []

    def test_disjoint_edits_collapse_to_one_span(self):
        ranges = compute_inline_diff("one two three four", "ONE two three FOUR")
        assert ranges == [InlineDiffRange(0, 18)]

    def test_entire_line_changed(self):
        assert compute_inline_diff("abc", "xyz") == [InlineDiffRange(0, 3)]

    def test_empty_old(self):
        assert compute_inline_diff("", "new") == [InlineDiffRange(0, 3)]


class TestHighlightRanges:
    def test_delete_side_diffed_against_add(self):
        assert highlight_ranges("the quick fox", "the slow fox") == [InlineDiffRange(4, 9)]

    def test_unpaired(self):
        assert highlight_ranges("anything", None) == []
