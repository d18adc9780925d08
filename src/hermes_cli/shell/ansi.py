"""ANSI escape sequence removal."""

import re

# Escape (or 8-bit CSI) followed by optional parameter bytes and a single
# final byte. Applied per chunk, so a sequence split across two reads
# survives partially.
ANSI_PATTERN = re.compile(
    r"[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
)


def strip_ansi(text: str) -> str:
    """Remove all ANSI color and style sequences from ``text``."""
    return ANSI_PATTERN.sub("", text)
