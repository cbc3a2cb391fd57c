import os
from enum import Enum
from typing import Dict
from langchain_openai import ChatOpenAI
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser
from .config import APP_CONFIG
from .logger import logger


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    MIXED = "mixed"


def _load_prompt_template() -> str:
    """Loads the sentiment analysis prompt template from the file."""
    prompt_path = os.path.join(os.path.dirname(__file__), "prompts", "sentiment.txt")
    with open(prompt_path, "r") as f:
        return f.read()


class SentimentAnalyzer:
    """Labels free-text survey comments with their overall sentiment."""

    def __init__(self, config: dict = None):
        self.config = config or APP_CONFIG
        self._chain = None

    def _get_chain(self):
        if self._chain is None:
            if not self.config.get("openai_api_key"):
                raise RuntimeError("Sentiment analysis is not configured: OPENAI_API_KEY is missing.")
            prompt = ChatPromptTemplate.from_template(_load_prompt_template())
            llm = ChatOpenAI(
                model=self.config["llm_model"],
                temperature=0.0,
                api_key=self.config["openai_api_key"],
            )
            self._chain = prompt | llm | JsonOutputParser()
        return self._chain

    def analyze(self, text: str) -> Dict[str, Sentiment]:
        """
        Analyzes the sentiment of a comment using an LLM.
        """
        logger.info("--- Analyzing sentiment ---")
        response = self._get_chain().invoke({"text": text})

        label = str(response.get("sentiment", "")).lower()
        try:
            sentiment = Sentiment(label)
        except ValueError:
            logger.warning(f"Unexpected sentiment label '{label}', reporting neutral.")
            sentiment = Sentiment.NEUTRAL
        return {"sentiment": sentiment}
