import datetime
from decimal import Decimal
from enum import Enum
from typing import TypedDict, List, Optional, Dict, Any, Tuple


class TransactionStatus(str, Enum):
    IN_PROCESS = "In Process"
    DONE = "Done"


class Account(TypedDict):
    """The banking profile owned by a single conversation session."""

    username: str
    balance: Decimal
    times_helped: int
    transactions_made: int
    recommended_upsell: bool


class Transaction(TypedDict):
    id: int
    amount: Decimal
    status: TransactionStatus
    timestamp: datetime.date


class InsufficientFundsError(Exception):
    """Raised when a debit would take the balance below zero."""

    def __init__(self, balance: Decimal, amount: Decimal):
        super().__init__(f"Balance {balance} is lower than requested amount {amount}")
        self.balance = balance
        self.amount = amount


def new_account(seed: Dict[str, Any]) -> Account:
    """Creates an account from the `account` section of the configuration."""
    balance = Decimal(str(seed.get("balance", 0)))
    if balance < 0:
        raise ValueError("Seed balance cannot be negative.")
    return {
        "username": seed.get("username", "John Doe"),
        "balance": balance,
        "times_helped": 0,
        "transactions_made": 0,
        "recommended_upsell": False,
    }


def seed_transactions(seed: List[Dict[str, Any]], today: Optional[datetime.date] = None) -> List[Transaction]:
    """Builds the historical ledger, numbering entries from 0 in order."""
    today = today or datetime.date.today()
    transactions: List[Transaction] = []
    for index, entry in enumerate(seed or []):
        transactions.append({
            "id": index,
            "amount": Decimal(str(entry["amount"])),
            "status": TransactionStatus(entry.get("status", TransactionStatus.DONE.value)),
            "timestamp": today - datetime.timedelta(days=int(entry.get("days_ago", 0))),
        })
    return transactions


def next_transaction_id(transactions: List[Transaction]) -> int:
    return len(transactions)


def find_transaction(transactions: List[Transaction], txn_id: int) -> Optional[Transaction]:
    return next((t for t in transactions if t["id"] == txn_id), None)


def debit(
    account: Account,
    transactions: List[Transaction],
    amount: Decimal,
    today: Optional[datetime.date] = None,
) -> Tuple[Account, List[Transaction], Transaction]:
    """
    Takes `amount` out of the account and records it in the ledger.

    Args:
        account: The account to debit. It is not modified.
        transactions: The current ledger. It is not modified.
        amount: A strictly positive amount.
        today: Date stamped on the new transaction, defaults to today.

    Returns:
        The updated account, the updated ledger and the new transaction.

    Raises:
        InsufficientFundsError: If the balance is lower than `amount`.
    """
    if amount <= 0:
        raise ValueError("Debit amount must be positive.")
    if account["balance"] < amount:
        raise InsufficientFundsError(account["balance"], amount)

    transaction: Transaction = {
        "id": next_transaction_id(transactions),
        "amount": amount,
        "status": TransactionStatus.IN_PROCESS,
        "timestamp": today or datetime.date.today(),
    }
    updated_account: Account = {
        **account,
        "balance": account["balance"] - amount,
        "transactions_made": account["transactions_made"] + 1,
    }
    return updated_account, transactions + [transaction], transaction
