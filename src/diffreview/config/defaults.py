"""Starter .diffreview.toml template."""

DEFAULT_TOML = """\
# diffreview configuration
version = "1.0"

[diff]
base = "HEAD"             # revision the working tree is compared against

[ui]
diff_view_mode = "unified"  # unified | split
show_line_numbers = true
inline_highlight = true     # highlight the changed words of modified lines

[output]
format = "terminal"       # terminal | json | yaml
"""
