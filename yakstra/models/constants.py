"""Domain constants and enumerations.

Categories are plain strings; transactions are not validated against these
lists, they only drive pickers, icons and chart colors.
"""

from typing import Dict, List, Tuple

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES: Tuple[str, ...] = (INCOME, EXPENSE)

DEFAULT_TYPE = EXPENSE
DEFAULT_CURRENCY = "USD"

EXPENSE_CATEGORIES: List[str] = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Entertainment",
    "Travel",
    "Education",
    "Others",
]

INCOME_CATEGORIES: List[str] = [
    "Salary",
    "Freelance",
    "Business",
    "Investments",
    "Rental",
    "Gifts",
    "Refunds",
    "Others",
]

EXPENSE_ICONS: Dict[str, str] = {
    "Food & Dining": "\U0001F354",
    "Transportation": "\U0001F697",
    "Shopping": "\U0001F6CD️",
    "Bills & Utilities": "\U0001F4A1",
    "Healthcare": "\U0001F3E5",
    "Entertainment": "\U0001F3AC",
    "Travel": "✈️",
    "Education": "\U0001F4DA",
    "Others": "\U0001F4E6",
}

INCOME_ICONS: Dict[str, str] = {
    "Salary": "\U0001F4BC",
    "Freelance": "\U0001F4BB",
    "Business": "\U0001F3E2",
    "Investments": "\U0001F4C8",
    "Rental": "\U0001F3E0",
    "Gifts": "\U0001F381",
    "Refunds": "\U0001F4B0",
    "Others": "\U0001F4B5",
}

FALLBACK_ICON = "\U0001F4E6"

THEMES: Tuple[str, ...] = ("light", "dark")
DEFAULT_THEME = "light"


def categories_for(type_: str) -> List[str]:
    return list(INCOME_CATEGORIES if type_ == INCOME else EXPENSE_CATEGORIES)


def all_categories() -> List[str]:
    """Union of both enumerations, sorted, for filter pickers."""
    return sorted(set(EXPENSE_CATEGORIES) | set(INCOME_CATEGORIES))


def category_icon(category: str, type_: str) -> str:
    icons = INCOME_ICONS if type_ == INCOME else EXPENSE_ICONS
    return icons.get(category, FALLBACK_ICON)
