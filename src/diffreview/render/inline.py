"""Word-level inline diff for a modified line pair.

Only the common token prefix and suffix are trimmed, so at most one range
is reported per pair: several disjoint edits collapse into a single span.
"""

from __future__ import annotations

import re
from typing import List, Optional

from diffreview.render.models import InlineDiffRange, Token

# whitespace run | word run | any single other character
_TOKEN_RE = re.compile(r"\s+|\w+|.", re.DOTALL)


def tokenize(text: str) -> List[Token]:
    """Split *text* into whitespace runs, word runs and single symbols."""
    return [Token(m.group(), m.start(), m.end()) for m in _TOKEN_RE.finditer(text)]


def compute_inline_diff(old_text: Optional[str], new_text: Optional[str]) -> List[InlineDiffRange]:
    """Return the changed span of *new_text* relative to *old_text*.

    Empty list when either side is missing or the lines are token-identical.
    """
    if not isinstance(old_text, str) or not isinstance(new_text, str):
        return []

    old_tokens = tokenize(old_text)
    new_tokens = tokenize(new_text)

    prefix = 0
    limit = min(len(old_tokens), len(new_tokens))
    while prefix < limit and old_tokens[prefix].text == new_tokens[prefix].text:
        prefix += 1

    suffix = 0
    while (
        suffix < len(old_tokens) - prefix
        and suffix < len(new_tokens) - prefix
        and old_tokens[-1 - suffix].text == new_tokens[-1 - suffix].text
    ):
        suffix += 1

    last_changed = len(new_tokens) - suffix - 1
    if prefix > last_changed:
        return []
    return [InlineDiffRange(new_tokens[prefix].start, new_tokens[last_changed].end)]


def highlight_ranges(content: str, paired_content: Optional[str]) -> List[InlineDiffRange]:
    """Ranges to emphasise in *content*, given the line it is paired with.

    Works for either half of a pair: a delete row is diffed against its add
    and vice versa.
    """
    if paired_content is None:
        return []
    return [r for r in compute_inline_diff(paired_content, content) if r.start < r.end]
