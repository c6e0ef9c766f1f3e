"""Domain constants for family finance analytics."""

from decimal import Decimal


QUANTITY_EPSILON = Decimal("0.0001")

DEFAULT_INCOME_CATEGORY = "Other Income"
DEFAULT_EXPENSE_CATEGORY = "Other Expense"

SIP_ID_SUFFIX = "-SIP"

ALL_MEMBERS_TOKEN = "all"


__all__ = [
    "QUANTITY_EPSILON",
    "DEFAULT_INCOME_CATEGORY",
    "DEFAULT_EXPENSE_CATEGORY",
    "SIP_ID_SUFFIX",
    "ALL_MEMBERS_TOKEN",
]
