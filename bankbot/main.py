from typing import Callable, Dict, Optional
from langgraph.graph import StateGraph, START, END
from .accounts import find_transaction
from .activities import text_message, card_message, menu_message, send, IGNORING_INPUT
from .audit import audit_log
from .cards import account_card, transactions_card
from .config import APP_CONFIG
from .intents import Intent, Recognition, resolve_intent, number_entity, has_historical_qualifier
from .logger import logger
from .response_generator import response_generator
from .state import State, MainStep
from .survey_flow import SurveyFlow
from .transaction_flow import TransactionFlow

DispatchHandler = Callable[[State, Recognition, Optional[str]], State]

FLOW_NODES = {
    TransactionFlow.name: "transaction_flow_node",
    SurveyFlow.name: "survey_flow_node",
}

STEP_NODES = {
    MainStep.INTRO.value: "intro_node",
    MainStep.ACT.value: "dispatch_node",
    MainStep.SURVEY_GATE.value: "survey_gate_node",
    MainStep.WRAP_UP.value: "wrap_up_node",
}

ROUTES = {node: node for node in [*FLOW_NODES.values(), *STEP_NODES.values(), "audit_node"]}

# --- Router ---
def route_next(state: State) -> str:
    """Ends the turn when a prompt is waiting for a reply, otherwise picks the next step."""
    if state.get("awaiting_input"):
        return "audit_node"

    pending_task = state.get("pending_task")
    if pending_task:
        return FLOW_NODES[pending_task["flow_name"]]

    return STEP_NODES[state.get("main_step") or MainStep.INTRO.value]

# --- Dispatch handlers, one per Intent ---
def build_dispatch_handlers(transaction_flow: TransactionFlow, knowledge_base, cards_config: dict = None) -> Dict[Intent, DispatchHandler]:
    """Builds the handler for every recognised intent."""
    cards_config = cards_config or {}

    def make_transaction(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        return transaction_flow.begin(state, number_entity(recognition["entities"]))

    def view_account(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        return {**state, "outbox": send(state, card_message(account_card(state["account"], cards_config)))}

    def view_transactions(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        entities = recognition["entities"]
        txn_id = number_entity(entities)
        if txn_id is not None and has_historical_qualifier(entities):
            txn_id = None

        transactions = state["transactions"]
        if txn_id is not None:
            transaction = find_transaction(transactions, txn_id)
            if transaction is None:
                message = response_generator.generate("TRANSACTION_NOT_FOUND", txn_id=txn_id)
                return {**state, "outbox": send(state, text_message(message))}
            transactions = [transaction]

        card = transactions_card(state["account"], transactions, cards_config)
        return {**state, "outbox": send(state, card_message(card))}

    def other_banking(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        return state

    def banking_qna(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        answers = knowledge_base.query(utterance or "")
        if answers:
            message = answers[0]["answer"]
        else:
            message = response_generator.generate("QNA_NO_ANSWER")
        return {**state, "outbox": send(state, text_message(message))}

    def unrecognized(state: State, recognition: Recognition, utterance: Optional[str]) -> State:
        intent = recognition["top_intent"]
        logger.warning(f"Dispatch unrecognized intent: {intent}.")
        message = response_generator.generate("UNRECOGNIZED_INTENT", intent=intent)
        return {**state, "outbox": send(state, text_message(message))}

    return {
        Intent.MAKE_TRANSACTION: make_transaction,
        Intent.VIEW_ACCOUNT: view_account,
        Intent.VIEW_TRANSACTIONS: view_transactions,
        Intent.OTHER_BANKING: other_banking,
        Intent.QNA: banking_qna,
        Intent.UNRECOGNIZED: unrecognized,
    }

def create_graph(classifier, knowledge_base, sentiment_analyzer, config: dict = None):
    """Creates the LangGraph workflow that runs one conversational turn."""
    config = config or APP_CONFIG
    survey_cadence = config["survey"]["cadence"]
    upsell_threshold = config["upsell"]["transactions_threshold"]

    transaction_flow = TransactionFlow()
    survey_flow = SurveyFlow(sentiment_analyzer)
    dispatch_handlers = build_dispatch_handlers(transaction_flow, knowledge_base, config.get("cards"))

    def intro_node(state: State) -> State:
        """Offers the main actions and waits for the user's request."""
        logger.info("--- Intro ---")
        text = state.get("restart_message") or response_generator.generate("GREETING")
        state = {**state, "utterance": None, "main_step": MainStep.ACT.value, "restart_message": None}

        if not classifier.is_configured:
            message = response_generator.generate("NLU_NOT_CONFIGURED")
            return {**state, "outbox": send(state, text_message(message, IGNORING_INPUT))}

        return {**state, "outbox": send(state, menu_message(text)), "awaiting_input": True}

    def dispatch_node(state: State) -> State:
        """Classifies the request and routes it to a banking action or to Q&A."""
        logger.info("--- Dispatch ---")
        utterance = state.get("utterance")
        state = {**state, "utterance": None, "main_step": MainStep.SURVEY_GATE.value}

        if not classifier.is_configured:
            return transaction_flow.begin(state)

        recognition = classifier.classify(utterance or "")
        intent = resolve_intent(recognition)
        state = {**state, "current_intent": intent.value}
        return dispatch_handlers[intent](state, recognition, utterance)

    def survey_gate_node(state: State) -> State:
        logger.info("--- Survey gate ---")
        account = {**state["account"], "times_helped": state["account"]["times_helped"] + 1}
        state = {**state, "account": account, "main_step": MainStep.WRAP_UP.value}
        if account["times_helped"] % survey_cadence == 0:
            return survey_flow.begin(state)
        return state

    def wrap_up_node(state: State) -> State:
        """Shows the upsell once, then restarts the main sequence."""
        logger.info("--- Wrap up ---")
        account = state["account"]
        outbox = state.get("outbox", [])
        if account["transactions_made"] == upsell_threshold and not account["recommended_upsell"]:
            outbox = send(state, text_message(response_generator.generate("UPSELL")))
            account = {**account, "recommended_upsell": True}
        return {
            **state,
            "account": account,
            "outbox": outbox,
            "main_step": MainStep.INTRO.value,
            "restart_message": response_generator.generate("RESTART"),
        }

    def transaction_flow_node(state: State) -> State:
        return transaction_flow.run_flow(state)

    def survey_flow_node(state: State) -> State:
        return survey_flow.run_flow(state)

    workflow = StateGraph(State)

    workflow.add_node("intro_node", intro_node)
    workflow.add_node("dispatch_node", dispatch_node)
    workflow.add_node("survey_gate_node", survey_gate_node)
    workflow.add_node("wrap_up_node", wrap_up_node)
    workflow.add_node("transaction_flow_node", transaction_flow_node)
    workflow.add_node("survey_flow_node", survey_flow_node)
    workflow.add_node("audit_node", audit_log)

    # Resume wherever the previous turn stopped.
    workflow.add_conditional_edges(START, route_next, ROUTES)

    for node in ROUTES:
        if node != "audit_node":
            workflow.add_conditional_edges(node, route_next, ROUTES)

    workflow.add_edge("audit_node", END)

    return workflow.compile()
