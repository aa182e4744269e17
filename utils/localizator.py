import json
from pathlib import Path
from typing import Optional

import config
from enums.audience import Audience


class Localizator:
    localization_dir = Path(__file__).resolve().parent.parent / "l10n"

    @staticmethod
    def get_text(audience: Audience, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given audience and key.

        Args:
            audience: Who reads the text (ADMIN, USER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "de", "en").
                  If None, uses config.BOT_LANGUAGE (default).
                  Use this parameter in concurrent contexts (e.g., one
                  payment session per browser language) to avoid global
                  state race conditions.

        Returns:
            Localized text string
        """
        language = lang if lang is not None else config.BOT_LANGUAGE
        localization_file = Localizator.localization_dir / f"{language}.json"

        with open(localization_file, "r", encoding="UTF-8") as f:
            data = json.loads(f.read())
            if audience == Audience.ADMIN:
                return data["admin"][key]
            elif audience == Audience.USER:
                return data["user"][key]
            else:
                return data["common"][key]

    @staticmethod
    def get_currency_symbol(lang: Optional[str] = None):
        return Localizator.get_text(Audience.COMMON, "currency_symbol", lang=lang)
