"""
Regex building blocks shared by the heuristic extractors.
"""

import re

# Upper-case letters, including the accented capitals used in pt-BR.
UPPER = "A-ZÀ-ÖØ-Þ"

# Optional emoji variation selector that often trails a symbol.
VS16 = "\ufe0f?"

# Horizontal whitespace only, so patterns never run across lines.
HSPACE = r"[^\S\n]"

# A line of capitals and spaces ending in one or more exclamation marks.
CAPS_EXCLAMATION_RE = re.compile(rf"^[{UPPER}\s!]+!+\s*$")

# Pictographs, dingbats, arrows and their joiners/selectors.
EMOJI_RE = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "⌀-⏿"
    "☀-➿"
    "⬀-⯿"
    "\ufe0f\u200d\u20e3"
    "]+"
)


def emoji_group(*emojis: str) -> str:
    """Non-capturing alternation of emoji, each with an optional VS16."""
    return "(?:" + "|".join(re.escape(e.replace("\ufe0f", "")) + VS16 for e in emojis) + ")"
