import datetime
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from finance_dashboard.models.enums import TransactionKind

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# locale -> (grouping separator, decimal separator)
SEPARATORS: dict[str, tuple[str, str]] = {
    "pt_BR": (".", ","),
    "en_US": (",", "."),
    "en_GB": (",", "."),
    "de_DE": (".", ","),
    "es_ES": (".", ","),
    "fr_FR": (" ", ","),
}

DATE_FORMATS: dict[str, str] = {
    "pt_BR": "%d/%m/%Y",
    "en_US": "%m/%d/%Y",
    "en_GB": "%d/%m/%Y",
    "de_DE": "%d.%m.%Y",
    "es_ES": "%d/%m/%Y",
    "fr_FR": "%d/%m/%Y",
}


@dataclass(frozen=True)
class AmountStyle:
    sign: str
    color_class: str


INCOME_STYLE = AmountStyle(sign="+", color_class="positive")
EXPENSE_STYLE = AmountStyle(sign="-", color_class="negative")


def parse_amount(amount_text: str) -> Decimal | None:
    """Parse a decimal string, returning ``None`` for anything not finite."""
    try:
        value = Decimal(str(amount_text).strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def monthly_amount(amount: Decimal, installment_count: int) -> Decimal:
    """Split an amount across its installments, rounded half-up to cents.

    Raises ``InvalidOperation`` when the result has more digits than the
    decimal context can hold.
    """
    if installment_count > 1:
        return (amount / installment_count).quantize(CENTS, rounding=ROUND_HALF_UP)
    return amount


class MonetaryFormatter:
    def __init__(
        self,
        locale: str = "pt_BR",
        currency_symbol: str = "R$",
        placeholder: str = "--",
    ) -> None:
        if locale not in SEPARATORS:
            raise ValueError(f"Unsupported locale: {locale}")
        group, decimal = SEPARATORS[locale]
        self.locale = locale
        self.currency_symbol = currency_symbol
        self.placeholder = placeholder
        self._separators = str.maketrans({",": group, ".": decimal})
        self._date_format = DATE_FORMATS[locale]

    def format_amount(self, amount_text: str) -> str:
        value = parse_amount(amount_text)
        if value is None:
            logger.warning("Cannot format malformed amount %r", amount_text)
            return self.placeholder
        try:
            rounded = value.quantize(CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            logger.warning("Amount %r is too large to format", amount_text)
            return self.placeholder
        return f"{rounded:,.2f}".translate(self._separators)

    def format_currency(self, amount_text: str) -> str:
        formatted = self.format_amount(amount_text)
        if formatted == self.placeholder:
            return formatted
        return f"{self.currency_symbol} {formatted}"

    def format_date(self, value: datetime.date) -> str:
        return value.strftime(self._date_format)

    @staticmethod
    def classify(kind: TransactionKind) -> AmountStyle:
        if kind == TransactionKind.INCOME:
            return INCOME_STYLE
        return EXPENSE_STYLE

    @staticmethod
    def classify_balance(amount_text: str) -> str:
        value = parse_amount(amount_text)
        if value is None:
            return "neutral"
        return "positive" if value >= 0 else "negative"
