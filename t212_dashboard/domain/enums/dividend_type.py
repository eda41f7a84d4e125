"""Dividend payment types as labelled by the export `Action` column."""

from enum import Enum


class DividendType(str, Enum):
    """Dividend sub-classification.

    Derived from keywords in the `Action` value, e.g.
    `Dividend (Dividend manufactured payment)` or `Dividend (Tax Exempted)`.
    """

    REGULAR = "Regular Dividend"
    MANUFACTURED_PAYMENT = "Manufactured Payment"
    TAX_EXEMPTED = "Tax Exempted"

    @classmethod
    def from_action(cls, action: str) -> "DividendType":
        """Classify a dividend row by its `Action` text."""
        lowered = action.lower()
        if "manufactured payment" in lowered:
            return cls.MANUFACTURED_PAYMENT
        if "tax exempted" in lowered:
            return cls.TAX_EXEMPTED
        return cls.REGULAR
