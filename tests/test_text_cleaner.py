"""
Tests for promotional footer removal.
"""

import pytest

from extraction.heuristics import clean_promo_text
from extraction.heuristics.text_cleaner import is_footer_line


class TestFooterLines:
    """Test individual footer patterns."""

    @pytest.mark.parametrize(
        "line",
        [
            "💰Entre no nosso grupo",
            "💰 entre no nosso grupo de promoções",
            "Telegram:",
            "WhatsApp:",
            "📱 GARIMPOS DO DE PINHO 📱",
            "🔥 OFERTAS IMPERDÍVEIS 🔥",
            "Compre aqui:",
            "OLHA O COMBOOO!",
            "CORRE!!!",
        ],
    )
    def test_footer_patterns(self, line):
        """Test lines recognized as footers."""
        assert is_footer_line(line, found_footer=False)

    @pytest.mark.parametrize(
        "line",
        [
            "Smart TV 50\" 4K",
            "POR R$ 1.999",
            "cupom: HARDMOB8",
            "Telegram: @canal",
            "",
        ],
    )
    def test_regular_lines(self, line):
        """Test lines that are part of the offer."""
        assert not is_footer_line(line, found_footer=False)

    def test_invite_link_only_after_footer(self):
        """Test that group invite links count only once a footer was seen."""
        line = "https://t.me/garimpos"

        assert not is_footer_line(line, found_footer=False)
        assert is_footer_line(line, found_footer=True)


class TestCleanPromoText:
    """Test clean_promo_text."""

    def test_removes_footer_block(self):
        """Test that the footer and everything after it is dropped."""
        text = (
            "📺 Smart TV 50\" 4K\n"
            "POR R$ 1.999\n"
            "\n"
            "💰Entre no nosso grupo\n"
            "https://t.me/garimpos\n"
            "Telegram:\n"
            "https://chat.whatsapp.com/abc"
        )

        assert clean_promo_text(text) == "📺 Smart TV 50\" 4K\nPOR R$ 1.999"

    def test_no_footer_returns_text_trimmed(self):
        """Test that text without footers is only right-trimmed."""
        text = "Fone JBL Tune 520BT\n\nPOR R$ 199  \n\n"

        assert clean_promo_text(text) == "Fone JBL Tune 520BT\n\nPOR R$ 199"

    def test_keeps_invite_link_before_footer(self):
        """Test that an invite link is kept when no footer precedes it."""
        text = "Produto legal demais\nhttps://t.me/canal\nR$ 10"

        assert clean_promo_text(text) == text

    def test_banner_footer(self):
        """Test that an emoji-bracketed channel banner ends the message."""
        text = "Air Fryer Mondial 4L\nPOR 299\n📱 GARIMPOS DO DE PINHO 📱\nhttps://bit.ly/xyz"

        assert clean_promo_text(text) == "Air Fryer Mondial 4L\nPOR 299"

    def test_latch_drops_everything_after_first_footer(self):
        """Test that regular lines after the first footer are dropped too."""
        text = "Cafeteira Nespresso\nCompre aqui:\nhttps://amzn.to/abc\nPOR 399\ncupom: CAFE10"

        cleaned = clean_promo_text(text)

        assert cleaned == "Cafeteira Nespresso"

    def test_latch_monotonicity(self):
        """Test that no line after a footer survives, whatever it contains."""
        after_footer = ["Mouse Logitech G203", "POR R$ 99", "cupom: MOUSE10", "", "🏪 Amazon"]
        text = "\n".join(["Teclado Redragon Kumara", "Whatsapp:"] + after_footer)

        cleaned = clean_promo_text(text)

        assert cleaned == "Teclado Redragon Kumara"
        for line in after_footer:
            if line:
                assert line not in cleaned

    def test_leading_caps_line_is_a_footer(self):
        """Test that a caps exclamation line at the top also sets the latch."""
        assert clean_promo_text("OLHA O COMBOOO!\n\n📺 Smart TV") == ""
