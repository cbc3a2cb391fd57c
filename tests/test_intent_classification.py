import pytest
from bankbot.intent_classifier import IntentClassifier
from bankbot.intents import Intent, number_entity, resolve_intent
from tests.test_e2e_conversation import requires_llm

intent_test_cases = [
    ("I want to transfer 40 dollars", Intent.MAKE_TRANSACTION, 40),
    ("What's left in my account?", Intent.VIEW_ACCOUNT, None),
    ("Show me transaction number 1", Intent.VIEW_TRANSACTIONS, 1),
    ("How can I order a new checkbook?", Intent.QNA, None),
    ("What is the capital of France?", Intent.UNRECOGNIZED, None),
]

@pytest.mark.e2e
@requires_llm
@pytest.mark.parametrize("user_input, expected_intent, expected_number", intent_test_cases)
def test_intent_classification(user_input, expected_intent, expected_number):
    """Tests classification of typical banking requests against the live model."""
    recognition = IntentClassifier().classify(user_input)

    assert resolve_intent(recognition) is expected_intent
    if expected_number is not None:
        assert number_entity(recognition["entities"]) == expected_number
