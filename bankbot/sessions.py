from typing import Dict, Any, Optional

from .config import APP_CONFIG
from .logger import logger
from .state import State, new_session, clear_cursor


class SessionStore:
    """
    In-memory session storage keyed by conversation id.

    Sessions live for the lifetime of the process. There is no locking: turns
    of one conversation must be processed one after another, and two
    conversations never share a session.
    """

    def __init__(self, account_seed: Optional[Dict[str, Any]] = None):
        self.account_seed = account_seed if account_seed is not None else APP_CONFIG["account"]
        self._sessions: Dict[str, State] = {}

    def load(self, conversation_id: str) -> State:
        state = self._sessions.get(conversation_id)
        if state is None:
            logger.info(f"--- New session for conversation {conversation_id} ---")
            state = new_session(conversation_id, self.account_seed)
            self._sessions[conversation_id] = state
        return state

    def save(self, conversation_id: str, state: State) -> None:
        self._sessions[conversation_id] = state

    def reset_turn(self, conversation_id: str) -> None:
        """Clears the turn cursor but keeps the account and ledger."""
        state = self._sessions.get(conversation_id)
        if state is not None:
            self._sessions[conversation_id] = clear_cursor(state)

    def delete(self, conversation_id: str) -> None:
        self._sessions.pop(conversation_id, None)

    def __contains__(self, conversation_id: str) -> bool:
        return conversation_id in self._sessions
