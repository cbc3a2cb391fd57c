from enum import Enum
from typing import Dict, Any, Optional
from .flow_agent import FlowAgent
from .logger import logger
from .response_generator import response_generator
from .state import State
from .validators import is_valid_rating, parse_confirmation, parse_number


class SurveyStep(str, Enum):
    OFFER = "offer"
    RATE = "rate"
    COMMENT = "comment"


QUESTIONS = {
    SurveyStep.OFFER.value: "OFFER_SURVEY",
    SurveyStep.RATE.value: "ASK_RATING",
    SurveyStep.COMMENT.value: "ASK_COMMENT",
}


class SurveyFlow(FlowAgent):
    """Asks for a rating and a comment, then reports the comment's sentiment."""

    name = "survey_flow"

    def __init__(self, sentiment_analyzer):
        super().__init__()
        self.sentiment_analyzer = sentiment_analyzer
        self.steps = {
            SurveyStep.OFFER.value: self._handle_offer,
            SurveyStep.RATE.value: self._handle_rate,
            SurveyStep.COMMENT.value: self._handle_comment,
        }

    def begin(self, state: State) -> State:
        logger.info(f"--- Starting {self.name} ---")
        return self._ask(state, SurveyStep.OFFER.value, {})

    def _ask(self, state: State, step: str, fields: Dict[str, Any]) -> State:
        return self._prompt(state, step, fields, self.get_current_step_question(step, fields))

    def _handle_offer(self, state: State, fields: Dict[str, Any], reply: Optional[str]) -> State:
        accepted = parse_confirmation(reply)
        if accepted is None:
            question = response_generator.generate("REPROMPT_CONFIRM", prompt=response_generator.generate("OFFER_SURVEY"))
            return self._prompt(state, SurveyStep.OFFER.value, fields, question)
        if not accepted:
            return self._end_flow(state)
        return self._ask(state, SurveyStep.RATE.value, fields)

    def _handle_rate(self, state: State, fields: Dict[str, Any], reply: Optional[str]) -> State:
        rating = parse_number(reply)
        if not is_valid_rating(rating):
            return self._prompt(state, SurveyStep.RATE.value, fields, response_generator.generate("RETRY_RATING"))
        # The rating only lives for the rest of the flow; nothing stores it.
        return self._ask(state, SurveyStep.COMMENT.value, {**fields, "rating": rating})

    def _handle_comment(self, state: State, fields: Dict[str, Any], reply: Optional[str]) -> State:
        result = self.sentiment_analyzer.analyze(reply or "")
        sentiment = result["sentiment"]
        label = getattr(sentiment, "value", sentiment)
        return self._end_flow(state, response_generator.generate("SURVEY_THANKS", sentiment=label))

    def get_current_step_question(self, current_step: str, fields: Dict[str, Any]) -> str:
        return response_generator.generate(QUESTIONS[current_step])
