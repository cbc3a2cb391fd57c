import os
from langchain_openai import ChatOpenAI
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser
from .activities import MENU_ACTIONS
from .config import APP_CONFIG
from .intents import BANKING, Intent, Recognition
from .logger import logger

# Suggested-action postbacks carry these exact titles.
MENU_INTENTS = {
    MENU_ACTIONS[0].lower(): Intent.MAKE_TRANSACTION.value,
    MENU_ACTIONS[1].lower(): Intent.VIEW_TRANSACTIONS.value,
    MENU_ACTIONS[2].lower(): Intent.VIEW_ACCOUNT.value,
}

def _load_prompt_template() -> str:
    """Loads the intent classifier prompt template from the file."""
    prompt_path = os.path.join(os.path.dirname(__file__), "prompts", "intent_classifier.txt")
    with open(prompt_path, "r") as f:
        return f.read()

class IntentClassifier:
    """Maps an utterance to a top intent, a banking sub-intent and entities."""

    def __init__(self, config: dict = None):
        self.config = config or APP_CONFIG
        self._chain = None

    @property
    def is_configured(self) -> bool:
        return bool(self.config.get("nlu_enabled") and self.config.get("openai_api_key"))

    def _get_chain(self):
        if self._chain is None:
            prompt = ChatPromptTemplate.from_messages([
                ("system", _load_prompt_template()),
                ("human", "{message}"),
            ])
            llm = ChatOpenAI(
                model=self.config["llm_model"],
                temperature=self.config["llm_temperature"],
                api_key=self.config["openai_api_key"],
            )
            self._chain = prompt | llm | JsonOutputParser()
        return self._chain

    def classify(self, utterance: str) -> Recognition:
        """
        Classifies the user's utterance and extracts entities.
        """
        logger.info("--- Classifying intent ---")

        menu_intent = MENU_INTENTS.get((utterance or "").strip().lower())
        if menu_intent:
            logger.info(f"Intent matched suggested action: {menu_intent}")
            return {"top_intent": BANKING, "banking_intent": menu_intent, "entities": []}

        response = self._get_chain().invoke({"message": utterance})

        entities = []
        for entity in response.get("entities") or []:
            if isinstance(entity, dict) and entity.get("type"):
                entities.append({"type": str(entity["type"]).lower(), "value": entity.get("value")})

        recognition: Recognition = {
            "top_intent": str(response.get("intent", "None")),
            "banking_intent": response.get("banking_intent"),
            "entities": entities,
        }
        logger.info(f"Intent classified as: {recognition['top_intent']} / {recognition['banking_intent']}")
        return recognition
