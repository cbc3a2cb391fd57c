from enum import Enum
from typing import TypedDict, List, Optional, Dict, Any

from .accounts import Account, Transaction, new_account, seed_transactions


class MainStep(str, Enum):
    """Steps of the top-level sequence, in the order they run."""

    INTRO = "intro"
    ACT = "act"
    SURVEY_GATE = "survey_gate"
    WRAP_UP = "wrap_up"


class State(TypedDict):
    """Represents the state of one conversation session."""

    conversation_id: str
    utterance: Optional[str]

    account: Account
    transactions: List[Transaction]

    # Turn cursor: where the next inbound message resumes.
    main_step: Optional[str]
    pending_task: Optional[Dict[str, Any]]
    restart_message: Optional[str]
    awaiting_input: bool

    current_intent: Optional[str]
    outbox: List[Dict[str, Any]]

    # Audit-related fields
    timestamp: Optional[str]


def new_session(conversation_id: str, account_seed: Dict[str, Any]) -> State:
    return {
        "conversation_id": conversation_id,
        "utterance": None,
        "account": new_account(account_seed),
        "transactions": seed_transactions(account_seed.get("seed_transactions", [])),
        "main_step": None,
        "pending_task": None,
        "restart_message": None,
        "awaiting_input": False,
        "current_intent": None,
        "outbox": [],
        "timestamp": None,
    }


def clear_cursor(state: State) -> State:
    """Drops the turn cursor so the next message starts a fresh main sequence."""
    return {
        **state,
        "utterance": None,
        "main_step": None,
        "pending_task": None,
        "restart_message": None,
        "awaiting_input": False,
    }
