import pytest

from bankbot.sentiment import Sentiment, SentimentAnalyzer


class StubChain:
    def __init__(self, response):
        self.response = response
        self.inputs = []

    def invoke(self, inputs):
        self.inputs.append(inputs)
        return self.response


def analyzer_returning(response):
    analyzer = SentimentAnalyzer({"openai_api_key": None, "llm_model": "gpt-4o"})
    analyzer._chain = StubChain(response)
    return analyzer


@pytest.mark.parametrize("label, expected", [
    ("positive", Sentiment.POSITIVE),
    ("Negative", Sentiment.NEGATIVE),
    ("MIXED", Sentiment.MIXED),
    ("neutral", Sentiment.NEUTRAL),
])
def test_known_labels(label, expected):
    assert analyzer_returning({"sentiment": label}).analyze("text") == {"sentiment": expected}


def test_unknown_label_is_reported_as_neutral():
    assert analyzer_returning({"sentiment": "furious"}).analyze("text") == {"sentiment": Sentiment.NEUTRAL}


def test_comment_is_passed_to_the_model():
    analyzer = analyzer_returning({"sentiment": "positive"})

    analyzer.analyze("Great service")

    assert analyzer._chain.inputs == [{"text": "Great service"}]


def test_missing_api_key_raises():
    analyzer = SentimentAnalyzer({"openai_api_key": None, "llm_model": "gpt-4o"})

    with pytest.raises(RuntimeError):
        analyzer.analyze("Great service")
