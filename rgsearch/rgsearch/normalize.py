"""Output normalization: color stripping and empty-output placeholders."""

import re

# CSI sequences (colors, cursor movement) and OSC sequences (hyperlinks,
# titles) terminated by BEL or ST.
_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from text."""
    return _ANSI_RE.sub("", text)


def normalize_output(text: str, use_colors: bool, placeholder: str) -> str:
    """Strip colors unless requested; substitute placeholder for empty output."""
    if not use_colors:
        text = strip_ansi(text)
    if not text.strip():
        return placeholder
    return text
