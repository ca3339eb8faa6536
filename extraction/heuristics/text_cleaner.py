"""
Removal of promotional footers and call-to-action text.
"""

import re

from .patterns import CAPS_EXCLAMATION_RE, UPPER, emoji_group

_BANNER_EMOJI = emoji_group("📱", "🎯", "💰", "🔥", "✨")

_GROUP_CALL_RE = re.compile(r"💰\ufe0f?\s*entre\s+no\s+nosso\s+grupo", re.IGNORECASE)
_CHANNEL_LABEL_RE = re.compile(r"^(?:telegram|whatsapp):\s*$", re.IGNORECASE)
_CHANNEL_BANNER_RE = re.compile(rf"^{_BANNER_EMOJI}+\s*[{UPPER}\s]+{_BANNER_EMOJI}+\s*$")
_BUY_HERE_RE = re.compile(r"^compre\s+aqui:\s*$", re.IGNORECASE)
_INVITE_LINK_RE = re.compile(r"https?://(?:t\.me|bit\.ly|chat\.whatsapp\.com)", re.IGNORECASE)


def is_footer_line(line: str, found_footer: bool) -> bool:
    """Check a trimmed line against the footer patterns."""
    return bool(
        _GROUP_CALL_RE.search(line)
        or _CHANNEL_LABEL_RE.match(line)
        or _CHANNEL_BANNER_RE.match(line)
        or (found_footer and _INVITE_LINK_RE.search(line))
        or _BUY_HERE_RE.match(line)
        or CAPS_EXCLAMATION_RE.match(line)
    )


def clean_promo_text(text: str) -> str:
    """
    Remove call-to-action footers from a promo message.

    Lines are kept until the first footer line ("💰Entre no nosso grupo",
    "Telegram:", "📱 GARIMPOS DO DE PINHO 📱", "OLHA O COMBOOO!", ...). From
    that line on everything is dropped.

    Args:
        text: Message text to clean

    Returns:
        The kept lines, joined with newlines, trailing whitespace removed
    """
    cleaned_lines = []
    found_footer = False

    for line in text.split("\n"):
        trimmed = line.strip()

        if is_footer_line(trimmed, found_footer):
            found_footer = True
            continue

        if found_footer:
            continue

        cleaned_lines.append(line)

    return "\n".join(cleaned_lines).rstrip()
