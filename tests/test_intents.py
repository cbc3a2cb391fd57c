from decimal import Decimal

import pytest

from bankbot.intent_classifier import IntentClassifier
from bankbot.intents import (
    BANKING,
    BANKING_QNA,
    Intent,
    has_historical_qualifier,
    number_entity,
    resolve_intent,
)
from bankbot.main import build_dispatch_handlers
from bankbot.transaction_flow import TransactionFlow
from tests.helpers import HISTORICAL, FakeKnowledgeBase, banking, number


@pytest.mark.parametrize("recognition, expected", [
    (banking("Make transaction"), Intent.MAKE_TRANSACTION),
    (banking("View account"), Intent.VIEW_ACCOUNT),
    (banking("View transactions"), Intent.VIEW_TRANSACTIONS),
    (banking("Close account"), Intent.OTHER_BANKING),
    (banking(None), Intent.OTHER_BANKING),
    ({"top_intent": BANKING_QNA, "banking_intent": None, "entities": []}, Intent.QNA),
    ({"top_intent": "None", "banking_intent": None, "entities": []}, Intent.UNRECOGNIZED),
    ({"top_intent": "Weather", "banking_intent": None, "entities": []}, Intent.UNRECOGNIZED),
])
def test_resolve_intent(recognition, expected):
    assert resolve_intent(recognition) is expected


def test_number_entity_takes_the_first_number():
    entities = [HISTORICAL, number(12), number(40)]

    assert number_entity(entities) == Decimal("12")


def test_number_entity_reads_thousands_separators():
    assert number_entity([number("1,000")]) == Decimal("1000")


def test_number_entity_is_none_without_numbers():
    assert number_entity([HISTORICAL]) is None
    assert number_entity([]) is None


def test_historical_qualifier():
    assert has_historical_qualifier([number(1), HISTORICAL])
    assert not has_historical_qualifier([number(1)])


def test_every_intent_has_a_dispatch_handler():
    handlers = build_dispatch_handlers(TransactionFlow(), FakeKnowledgeBase())

    assert set(handlers) == set(Intent)


def test_classifier_is_not_configured_without_api_key():
    config = {"nlu_enabled": True, "openai_api_key": None}

    assert IntentClassifier(config).is_configured is False


def test_classifier_can_be_disabled():
    config = {"nlu_enabled": False, "openai_api_key": "sk-test"}

    assert IntentClassifier(config).is_configured is False


@pytest.mark.parametrize("utterance, banking_intent", [
    ("Make a transaction", "Make transaction"),
    ("view transactions", "View transactions"),
    (" View account ", "View account"),
])
def test_menu_titles_are_recognised_without_the_llm(utterance, banking_intent):
    classifier = IntentClassifier({"nlu_enabled": True, "openai_api_key": None})

    recognition = classifier.classify(utterance)

    assert recognition == {"top_intent": BANKING, "banking_intent": banking_intent, "entities": []}
    assert classifier._chain is None


def test_llm_response_is_normalised():
    classifier = IntentClassifier({"nlu_enabled": True, "openai_api_key": "sk-test"})
    classifier._chain = type("StubChain", (), {"invoke": lambda self, inputs: {
        "intent": "Banking",
        "banking_intent": "View transactions",
        "entities": [{"type": "Number", "value": "1"}, {"type": "historical"}, "garbage", {"value": "x"}],
    }})()

    recognition = classifier.classify("show me transaction 1")

    assert recognition == {
        "top_intent": BANKING,
        "banking_intent": "View transactions",
        "entities": [{"type": "number", "value": "1"}, {"type": "historical", "value": None}],
    }


def test_llm_without_intent_is_unrecognized():
    classifier = IntentClassifier({"nlu_enabled": True, "openai_api_key": "sk-test"})
    classifier._chain = type("StubChain", (), {"invoke": lambda self, inputs: {}})()

    recognition = classifier.classify("blah")

    assert recognition["top_intent"] == "None"
    assert resolve_intent(recognition) is Intent.UNRECOGNIZED
