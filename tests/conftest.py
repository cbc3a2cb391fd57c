from typing import Dict, Any, List

import pytest

from bankbot.bot import BankingBot
from bankbot.sessions import SessionStore
from tests.helpers import (
    CONVERSATION_ID,
    SEED_WITH_HISTORY,
    FakeClassifier,
    FakeKnowledgeBase,
    FakeSentimentAnalyzer,
)


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def knowledge_base():
    return FakeKnowledgeBase()


@pytest.fixture
def sentiment_analyzer():
    return FakeSentimentAnalyzer()


@pytest.fixture
def make_bot(classifier, knowledge_base, sentiment_analyzer):
    def _make_bot(account_seed=SEED_WITH_HISTORY, configured=True):
        classifier.is_configured = configured
        return BankingBot(
            classifier=classifier,
            knowledge_base=knowledge_base,
            sentiment_analyzer=sentiment_analyzer,
            sessions=SessionStore(account_seed=account_seed),
        )
    return _make_bot


@pytest.fixture
def bot(make_bot):
    return make_bot()


@pytest.fixture
def chat(bot):
    """Sends one message to the test conversation and returns the replies."""
    def _chat(text: str) -> List[Dict[str, Any]]:
        return bot.on_message(CONVERSATION_ID, text)
    return _chat


@pytest.fixture
def session(bot):
    """Returns the test conversation's stored session."""
    def _session():
        return bot.sessions.load(CONVERSATION_ID)
    return _session
