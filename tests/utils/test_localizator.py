"""
Unit tests for Localizator.

Tests cover:
- Audience sections (admin, user, common)
- Language switching (EN/DE), explicit lang vs. BOT_LANGUAGE
- Both language files carry the same keys
"""

import json

import pytest
from unittest.mock import patch

from enums.audience import Audience
from utils.localizator import Localizator


def load(lang: str) -> dict:
    with open(Localizator.localization_dir / f"{lang}.json", encoding="UTF-8") as f:
        return json.load(f)


class TestLocalizator:

    @patch('config.BOT_LANGUAGE', 'en')
    def test_user_text_english(self):
        assert Localizator.get_text(Audience.USER, "payment_expired") == "Payment session has expired"

    @patch('config.BOT_LANGUAGE', 'de')
    def test_user_text_follows_bot_language(self):
        assert Localizator.get_text(Audience.USER, "order_not_found") == load("de")["user"]["order_not_found"]

    @patch('config.BOT_LANGUAGE', 'de')
    def test_explicit_lang_wins(self):
        assert Localizator.get_text(Audience.USER, "no_order_id", lang="en") == "No order ID found"

    def test_admin_text_has_placeholders(self):
        text = Localizator.get_text(Audience.ADMIN, "manual_payment_received")

        assert "{order_id}" in text
        assert "{amount}" in text

    def test_currency_symbol(self):
        assert Localizator.get_currency_symbol() == "₹"

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            Localizator.get_text(Audience.USER, "does_not_exist")

    @pytest.mark.parametrize("section", ["admin", "user", "common"])
    def test_languages_have_same_keys(self, section):
        assert set(load("en")[section]) == set(load("de")[section])
