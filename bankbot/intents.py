from decimal import Decimal
from enum import Enum
from typing import TypedDict, List, Optional, Any

from .validators import parse_number

# Top-level labels produced by the classifier.
BANKING = "Banking"
BANKING_QNA = "BankingQnA"

# Entity types the classifier extracts.
NUMBER_ENTITY = "number"
HISTORICAL_ENTITY = "historical"


class Intent(str, Enum):
    """Every intent the dispatcher knows how to handle."""

    MAKE_TRANSACTION = "Make transaction"
    VIEW_ACCOUNT = "View account"
    VIEW_TRANSACTIONS = "View transactions"
    OTHER_BANKING = "Other banking"
    QNA = "QnA"
    UNRECOGNIZED = "Unrecognized"


BANKING_ACTIONS = {
    Intent.MAKE_TRANSACTION.value: Intent.MAKE_TRANSACTION,
    Intent.VIEW_ACCOUNT.value: Intent.VIEW_ACCOUNT,
    Intent.VIEW_TRANSACTIONS.value: Intent.VIEW_TRANSACTIONS,
}


class Entity(TypedDict):
    type: str
    value: Any


class Recognition(TypedDict):
    top_intent: str
    banking_intent: Optional[str]
    entities: List[Entity]


def resolve_intent(recognition: Recognition) -> Intent:
    top_intent = recognition.get("top_intent")
    if top_intent == BANKING:
        return BANKING_ACTIONS.get(recognition.get("banking_intent") or "", Intent.OTHER_BANKING)
    if top_intent == BANKING_QNA:
        return Intent.QNA
    return Intent.UNRECOGNIZED


def number_entity(entities: List[Entity]) -> Optional[Decimal]:
    """The first number entity, or None when the utterance carried no number."""
    for entity in entities:
        if entity.get("type") == NUMBER_ENTITY:
            return parse_number(entity.get("value"))
    return None


def has_historical_qualifier(entities: List[Entity]) -> bool:
    return any(entity.get("type") == HISTORICAL_ENTITY for entity in entities)
