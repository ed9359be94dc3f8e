import json
import logging
from dataclasses import asdict, dataclass, replace
from decimal import Decimal
from pathlib import Path
from typing import Union

from spendwise.locales import TRANSLATIONS

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")
LANGUAGES = ("en", "hi")
CURRENCIES = ("USD", "INR")

CURRENCY_SYMBOLS = {"USD": "$", "INR": "₹"}

_ALLOWED = {"theme": THEMES, "language": LANGUAGES, "currency": CURRENCIES}


@dataclass(frozen=True)
class Settings:
    theme: str = "light"
    language: str = "en"
    currency: str = "USD"

    def t(self, key: str) -> str:
        return translate(key, self.language)

    def money(self, amount: Union[Decimal, float, int], fraction_digits: int = 2) -> str:
        return format_currency(amount, self.currency, fraction_digits)


def translate(key: str, language: str = "en") -> str:
    """Look up a UI string, falling back to the key itself."""
    return TRANSLATIONS.get(language, {}).get(key) or key


def format_currency(
    amount: Union[Decimal, float, int], currency: str = "USD", fraction_digits: int = 2
) -> str:
    """Format an amount the way en-US currency formatting does.

    >>> format_currency(Decimal("1234.5"))
    '$1,234.50'
    >>> format_currency(-5, "INR", 0)
    '-₹5'
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency + " ")
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{fraction_digits}f}"


class SettingsStore:
    """Persists user preferences to a small JSON file, like browser storage would."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.settings = self._load()

    def _load(self) -> Settings:
        if not self.path.exists():
            return Settings()
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("ignoring unreadable settings file %s", self.path)
            return Settings()
        if not isinstance(stored, dict):
            return Settings()
        valid = {k: v for k, v in stored.items() if v in _ALLOWED.get(k, ())}
        return Settings(**valid)

    def update(self, **changes) -> Settings:
        for key, value in changes.items():
            if key not in _ALLOWED:
                raise ValueError(f"Unknown setting: {key}")
            if value not in _ALLOWED[key]:
                raise ValueError(f"Invalid {key}: {value!r}")
        self.settings = replace(self.settings, **changes)
        self.save()
        return self.settings

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(self.settings)), encoding="utf-8")
