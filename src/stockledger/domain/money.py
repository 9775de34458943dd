"""Exact decimal money primitive.

All ledger arithmetic goes through ``Money`` so that running sums over
thousands of quantity x rate products never pick up floating-point drift.
Values keep full decimal precision; rounding to two places only happens when
formatting.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from functools import total_ordering
from typing import Iterable, Union

CURRENCY_SYMBOL = "₹"
FRACTION_DIGITS = 2
_QUANTUM = Decimal(1).scaleb(-FRACTION_DIGITS)


def to_decimal(value: Union["Money", Decimal, int, str]) -> Decimal:
    """Convert a supported value to Decimal.

    Raises:
        TypeError: If value is a float, bool or unsupported type
        ValueError: If value is not a finite decimal number
    """
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(
            f"Cannot use {type(value).__name__} {value!r} as an exact amount; "
            "pass a Decimal, int or string"
        )
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal value '{value}'") from e
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{value}'")
    return result


@total_ordering
@dataclass(frozen=True)
class Money:
    """Immutable currency value with exact decimal semantics."""

    amount: Decimal = Decimal(0)

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal(0))

    @classmethod
    def total(cls, values: Iterable["Money"]) -> "Money":
        """Sum an iterable of Money values (zero when empty)."""
        result = cls.zero()
        for value in values:
            result = result + value
        return result

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount - other.amount)

    def __mul__(self, quantity: Union[Decimal, int, str]) -> "Money":
        if isinstance(quantity, Money):
            raise TypeError("Cannot multiply Money by Money")
        return Money(self.amount * to_decimal(quantity))

    __rmul__ = __mul__

    def __neg__(self) -> "Money":
        return Money(-self.amount)

    def __abs__(self) -> "Money":
        return Money(abs(self.amount))

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __bool__(self) -> bool:
        return not self.amount.is_zero()

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def quantize(self) -> "Money":
        """Round half-up to the currency's fractional digits."""
        return Money(self.amount.quantize(_QUANTUM, rounding=ROUND_HALF_UP))

    def format(self, symbol: bool = False, grouping: bool = True) -> str:
        """Format with exactly two fractional digits.

        Args:
            symbol: Prefix the currency symbol
            grouping: Use thousands separators

        Returns:
            Formatted string, e.g. ``"-₹1,234.50"``
        """
        rounded = self.quantize().amount
        text = f"{abs(rounded):,.{FRACTION_DIGITS}f}" if grouping else f"{abs(rounded):.{FRACTION_DIGITS}f}"
        if symbol:
            text = f"{CURRENCY_SYMBOL}{text}"
        if rounded < 0:
            text = f"-{text}"
        return text

    def __str__(self) -> str:
        return self.format(grouping=False)
