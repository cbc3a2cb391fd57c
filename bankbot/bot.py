from typing import Dict, Any, List
from .activities import text_message, EXPECTING_INPUT
from .intent_classifier import IntentClassifier
from .knowledge_base import KnowledgeBase
from .logger import logger
from .main import create_graph
from .response_generator import response_generator
from .sentiment import SentimentAnalyzer
from .sessions import SessionStore

class BankingBot:
    """Runs one graph turn per inbound message and keeps each conversation's session."""

    def __init__(self, classifier=None, knowledge_base=None, sentiment_analyzer=None, sessions: SessionStore = None, config: dict = None):
        self.classifier = classifier or IntentClassifier(config)
        self.knowledge_base = knowledge_base or KnowledgeBase(config)
        self.sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer(config)
        self.sessions = sessions or SessionStore(account_seed=config["account"] if config else None)
        self.app = create_graph(self.classifier, self.knowledge_base, self.sentiment_analyzer, config)

    def on_message(self, conversation_id: str, text: str) -> List[Dict[str, Any]]:
        """
        Processes one inbound message.

        Args:
            conversation_id: Identity of the conversation the message belongs to.
            text: The user's message.

        Returns:
            The activities to deliver to the user, in order.
        """
        state = self.sessions.load(conversation_id)
        turn_input = {**state, "utterance": text, "outbox": [], "awaiting_input": False}

        try:
            final_state = self.app.invoke(turn_input)
        except Exception:
            logger.exception(f"[on_turn_error] unhandled error in conversation {conversation_id}")
            # Clear the cursor so the conversation does not stay stuck on the failing step.
            self.sessions.reset_turn(conversation_id)
            return [
                text_message(response_generator.generate("TURN_ERROR"), EXPECTING_INPUT),
                text_message(response_generator.generate("TURN_ERROR_FIX"), EXPECTING_INPUT),
            ]

        outbox = final_state.get("outbox", [])
        self.sessions.save(conversation_id, {**final_state, "outbox": []})
        return outbox
