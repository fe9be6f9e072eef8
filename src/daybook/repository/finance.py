# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from daybook import configuration, time
from daybook.model.entity_id import EntityId, generate_entity_id
from daybook.model.transaction import FINANCE_CATEGORIES, FinanceCategory, Transaction
from daybook.repository.persistent_map import PersistentJsonMap

logger = logging.getLogger(__name__)


class FinanceRepository:
    """Transaction list (most recent first) and the wallet balance.

    The balance follows every add/replace/remove by the amount delta but can
    also be overridden directly to match a real account.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._finance_file: Optional[PersistentJsonMap] = None
        self._transactions: Optional[list[Transaction]] = None
        self._wallet_balance = 0.0

    @property
    def finance_file(self) -> PersistentJsonMap:
        if self._finance_file is None:
            path = self._path if self._path is not None else configuration.DATA_FINANCE_PATH
            self._finance_file = PersistentJsonMap(path)
        return self._finance_file

    @property
    def transactions(self) -> list[Transaction]:
        if self._transactions is None:
            self.__load_data()
        if self._transactions is None:
            raise ValueError()
        return self._transactions

    @property
    def wallet_balance(self) -> float:
        if self._transactions is None:
            self.__load_data()
        return self._wallet_balance

    def __load_data(self) -> None:
        self._transactions = []
        self._wallet_balance = 0.0

        document = self.finance_file.read()
        if document is None:
            return
        try:
            with self.finance_file.loading():
                if isinstance(document, dict):
                    raw_transactions = document["transactions"]
                    wallet_balance = float(document["walletBalance"])
                elif isinstance(document, list):
                    # Older files hold a bare list of transactions
                    raw_transactions = document
                    wallet_balance = 0.0
                else:
                    raise TypeError("unexpected finance document")
                self._transactions = [
                    self.__convert_transaction_for_deserialization(raw_transaction)
                    for raw_transaction in raw_transactions
                ]
                self._wallet_balance = wallet_balance
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("Could not decode %s", self.finance_file.path, exc_info=True)
            self._transactions = []
            self._wallet_balance = 0.0

    def __convert_transaction_for_serialization(
        self, transaction: Transaction
    ) -> dict[str, Any]:
        return {
            "id": transaction["id"],
            "title": transaction["title"],
            "amount": transaction["amount"],
            "date": time.datetime_to_iso_str(transaction["date"]),
            "category": transaction["category"],
        }

    def __convert_transaction_for_deserialization(
        self, transaction: dict[str, Any]
    ) -> Transaction:
        category = transaction.get("category") or "other"
        if category not in FINANCE_CATEGORIES:
            category = "other"
        return {
            "id": str(transaction["id"]),
            "title": str(transaction["title"]),
            "amount": float(transaction["amount"]),
            "date": time.datetime_from_str(transaction["date"]),
            "category": cast(FinanceCategory, category),
        }

    def __commit(self, transactions: list[Transaction], wallet_balance: float) -> bool:
        document = {
            "walletBalance": wallet_balance,
            "transactions": [
                self.__convert_transaction_for_serialization(transaction)
                for transaction in transactions
            ],
        }
        if not self.finance_file.save(document):
            return False
        self._transactions = transactions
        self._wallet_balance = wallet_balance
        return True

    def __index_of(self, id: EntityId) -> Optional[int]:
        for index, transaction in enumerate(self.transactions):
            if transaction["id"] == id:
                return index
        return None

    def add(self, transaction: Transaction) -> EntityId:
        new_transaction = deepcopy(transaction)
        if new_transaction["id"] is None:
            new_transaction["id"] = generate_entity_id()

        self.__commit(
            [new_transaction] + self.transactions,
            self.wallet_balance + new_transaction["amount"],
        )
        return new_transaction["id"]

    def replace(self, old_id: EntityId, transaction: Transaction) -> None:
        index = self.__index_of(old_id)
        if index is None:
            return

        new_transaction = deepcopy(transaction)
        if new_transaction["id"] is None:
            new_transaction["id"] = old_id
        old_amount = self.transactions[index]["amount"]

        transactions = list(self.transactions)
        transactions[index] = new_transaction
        self.__commit(
            transactions,
            self.wallet_balance + (new_transaction["amount"] - old_amount),
        )

    def remove(self, id: EntityId) -> None:
        index = self.__index_of(id)
        if index is None:
            return

        transactions = list(self.transactions)
        removed_transaction = transactions.pop(index)
        self.__commit(
            transactions, self.wallet_balance - removed_transaction["amount"]
        )

    def set_wallet_balance(self, value: float) -> None:
        self.__commit(list(self.transactions), value)

    def get_all_transactions(self) -> list[Transaction]:
        return deepcopy(self.transactions)

    def get_transaction(self, id: EntityId) -> Optional[Transaction]:
        index = self.__index_of(id)
        if index is None:
            return None
        return deepcopy(self.transactions[index])


FINANCE_REPO = FinanceRepository()
