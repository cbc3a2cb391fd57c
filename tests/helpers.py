from typing import Dict, Any, List

from bankbot.intents import BANKING
from bankbot.sentiment import Sentiment

CONVERSATION_ID = "test-conversation"

SEED_WITH_HISTORY = {
    "username": "John Doe",
    "balance": 500,
    "seed_transactions": [
        {"amount": 25, "status": "Done", "days_ago": 7},
        {"amount": 60, "status": "Done", "days_ago": 2},
    ],
}

EMPTY_SEED = {"username": "John Doe", "balance": 500, "seed_transactions": []}

HISTORICAL = {"type": "historical", "value": "history"}


def banking(banking_intent: str, *entities) -> Dict[str, Any]:
    return {"top_intent": BANKING, "banking_intent": banking_intent, "entities": list(entities)}


def number(value) -> Dict[str, Any]:
    return {"type": "number", "value": str(value)}


class FakeClassifier:
    """Stands in for the LLM classifier; unknown utterances classify as 'None'."""

    def __init__(self, configured: bool = True):
        self.is_configured = configured
        self.responses: Dict[str, Dict[str, Any]] = {
            "View account": banking("View account"),
            "View transactions": banking("View transactions"),
            "Make a transaction": banking("Make transaction"),
        }
        self.errors: Dict[str, Exception] = {}
        self.calls: List[str] = []

    def classify(self, utterance: str) -> Dict[str, Any]:
        self.calls.append(utterance)
        if utterance in self.errors:
            raise self.errors[utterance]
        return self.responses.get(utterance, {"top_intent": "None", "banking_intent": None, "entities": []})


class FakeKnowledgeBase:
    def __init__(self):
        self.answers: Dict[str, List[Dict[str, Any]]] = {}
        self.queries: List[str] = []

    def query(self, utterance: str) -> List[Dict[str, Any]]:
        self.queries.append(utterance)
        return self.answers.get(utterance, [])


class FakeSentimentAnalyzer:
    def __init__(self, sentiment: Sentiment = Sentiment.POSITIVE):
        self.sentiment = sentiment
        self.texts: List[str] = []

    def analyze(self, text: str) -> Dict[str, Sentiment]:
        self.texts.append(text)
        return {"sentiment": self.sentiment}


def texts(activities: List[Dict[str, Any]]) -> List[str]:
    return [a["text"] for a in activities if a.get("text")]


def cards(activities: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [attachment for a in activities for attachment in a.get("attachments", [])]


def card_transaction_ids(card: Dict[str, Any]) -> List[str]:
    ids = []
    for block in card["content"]["body"]:
        if block["type"] != "ColumnSet":
            continue
        for column in block["columns"]:
            for item in column["items"]:
                if item.get("type") == "TextBlock" and item["text"].startswith("ID: "):
                    ids.append(item["text"][len("ID: "):])
    return ids
