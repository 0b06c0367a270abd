"""
Amount Normalizer
=================

Turns a human amount such as "1.5", "100" or "2e6" into an integer
number of units plus a decimal shift, so the generated contract never
needs floating point:

    value = units * 10 ** (decimals() - max(0, decimal_shift))

The decimals part is emitted as a Solidity expression because
`decimals()` is evaluated on-chain and may be overridden.
"""

import re
from dataclasses import dataclass
from typing import Optional

AMOUNT_PATTERN = re.compile(r"^(\d*)(?:\.(\d+))?(?:e(\d+))?$")


@dataclass(frozen=True)
class NormalizedAmount:
    units: str
    decimal_shift: int

    def decimals_expression(self) -> str:
        if self.decimal_shift <= 0:
            return "decimals()"
        return f"(decimals() - {self.decimal_shift})"

    def to_solidity(self) -> str:
        """Solidity expression for the amount in base units"""
        # Solidity rejects leading zeros in number literals
        return f"{self.units.lstrip('0')} * 10 ** {self.decimals_expression()}"

    def to_decimal_string(self) -> str:
        """Canonical rendering, e.g. (15, 1) -> "1.5" and (1000, -3) -> "1e3" """
        if self.units.startswith("0") and self.decimal_shift < len(self.units):
            # zeros leading the fraction only survive as ".<fraction>e<exponent>"
            fraction = self.units[:self.decimal_shift] if self.decimal_shift < 0 else self.units
            return f".{fraction}e{len(fraction) - self.decimal_shift}"
        if self.decimal_shift == 0:
            return self.units
        if self.decimal_shift < 0:
            return f"{self.units[:self.decimal_shift]}e{-self.decimal_shift}"
        digits = self.units.rjust(self.decimal_shift + 1, "0")
        return f"{digits[:-self.decimal_shift]}.{digits[-self.decimal_shift:]}"


def normalize_amount(amount: str) -> Optional[NormalizedAmount]:
    """
    Normalize a decimal or scientific amount string.

    Returns None when the string does not match the amount grammar or its
    value is zero. Callers treat both cases as "feature not requested".
    """
    m = AMOUNT_PATTERN.fullmatch(amount or "")
    if not m:
        return None

    integer = (m.group(1) or "").lstrip("0")
    decimals = (m.group(2) or "").rstrip("0")
    exponent = int(m.group(3) or 0)

    if int(integer + decimals or "0") == 0:
        return None

    decimal_shift = len(decimals) - exponent
    zeroes = "0" * max(0, -decimal_shift)
    return NormalizedAmount(units=integer + decimals + zeroes, decimal_shift=decimal_shift)
