# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from daybook.model.entity_id import EntityId

FinanceCategory = Literal[
    "salary",
    "food",
    "coffee",
    "transport",
    "shopping",
    "health",
    "home",
    "fun",
    "other",
]

FINANCE_CATEGORIES: tuple[FinanceCategory, ...] = (
    "salary",
    "food",
    "coffee",
    "transport",
    "shopping",
    "health",
    "home",
    "fun",
    "other",
)

FINANCE_CATEGORY_DISPLAY_NAMES: dict[FinanceCategory, str] = {
    "salary": "💼 Salary",
    "food": "🍔 Food",
    "coffee": "☕️ Coffee",
    "transport": "🚗 Transport",
    "shopping": "🛍️ Shopping",
    "health": "🩺 Health",
    "home": "🏠 Home",
    "fun": "🎉 Fun",
    "other": "🧩 Other",
}


class Transaction(TypedDict):
    id: Optional[EntityId]
    title: str
    amount: float  # positive is income, negative is expense
    date: pendulum.DateTime
    category: FinanceCategory
