# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from daybook.model.transaction import FinanceCategory, Transaction
from daybook.time import now_utc


def get_transaction_template(
    title: str,
    amount: float,
    date: Optional[pendulum.DateTime] = None,
    category: FinanceCategory = "other",
) -> Transaction:
    return {
        "id": None,
        "title": title,
        "amount": amount,
        "date": date if date is not None else now_utc(),
        "category": category,
    }
