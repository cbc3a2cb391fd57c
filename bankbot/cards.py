"""Card attachments sent by the assistant."""
import datetime
from typing import Dict, Any, List, Optional

from .accounts import Account, Transaction

THUMBNAIL_CARD = "application/vnd.microsoft.card.thumbnail"
ADAPTIVE_CARD = "application/vnd.microsoft.card.adaptive"


def format_date(value: datetime.date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def account_card(account: Account, cards_config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Account summary: the user's name, current balance and a log-in link."""
    cards_config = cards_config or {}
    images = [{"url": cards_config["logo_url"]}] if cards_config.get("logo_url") else []
    return {
        "contentType": THUMBNAIL_CARD,
        "content": {
            "title": account["username"],
            "subtitle": "My account",
            "text": f"Amount in account: {account['balance']}",
            "images": images,
            "buttons": [{
                "type": "openUrl",
                "title": "Log In",
                "value": cards_config.get("login_url", ""),
            }],
        },
    }


def transactions_card(account: Account, transactions: List[Transaction], cards_config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Transaction list with one row per transaction: id, amount, status and date."""
    body: List[Dict[str, Any]] = [
        {"type": "TextBlock", "text": f"User: {account['username']}", "weight": "bolder", "isSubtle": False},
        {"type": "TextBlock", "text": "Transactions:", "weight": "bolder", "spacing": "medium"},
    ]
    for transaction in transactions:
        body.extend(_transaction_rows(transaction, (cards_config or {}).get("transaction_icon_url")))

    return {
        "contentType": ADAPTIVE_CARD,
        "content": {
            "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
            "version": "1.0",
            "type": "AdaptiveCard",
            "body": body,
        },
    }


def _transaction_rows(transaction: Transaction, icon_url: Optional[str]) -> List[Dict[str, Any]]:
    icon_items = [{"type": "Image", "url": icon_url, "size": "small", "spacing": "none"}] if icon_url else []
    return [
        {"type": "TextBlock", "text": format_date(transaction["timestamp"]), "weight": "bolder", "spacing": "none"},
        {
            "type": "ColumnSet",
            "spacing": "medium",
            "separator": True,
            "columns": [
                {
                    "type": "Column",
                    "width": "1",
                    "items": [
                        {"type": "TextBlock", "text": f"ID: {transaction['id']}", "size": "medium", "isSubtle": True},
                        {"type": "TextBlock", "text": f"Amount: ${transaction['amount']}", "size": "medium", "isSubtle": True, "spacing": "none"},
                    ],
                },
                {"type": "Column", "width": "auto", "items": icon_items},
                {
                    "type": "Column",
                    "width": "1",
                    "items": [
                        {"type": "TextBlock", "horizontalAlignment": "right", "text": transaction["status"].value, "size": "medium", "weight": "bolder"},
                    ],
                },
            ],
        },
    ]
