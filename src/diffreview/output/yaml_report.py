"""YAML reporter — same document as the JSON reporter."""

from __future__ import annotations

import yaml

from diffreview.git.models import ParsedDiff
from diffreview.output.json_report import to_dict


def render(parsed: ParsedDiff, *, view: str = "unified", inline: bool = True) -> str:
    return yaml.safe_dump(
        to_dict(parsed, view=view, inline=inline),
        sort_keys=False,
        allow_unicode=True,
    )
