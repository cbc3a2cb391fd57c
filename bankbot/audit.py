import datetime
from .logger import logger
from .state import State

def audit_log(state: State) -> State:
    """
    Logs a summary of the turn for audit purposes.

    Args:
        state: The current state of the conversation.

    Returns:
        The state, stamped with the time of the turn.
    """
    logger.info("--- Auditing ---")

    timestamp = datetime.datetime.now().isoformat()
    pending_task = state.get("pending_task")
    log_entry = {
        "timestamp": timestamp,
        "conversation_id": state.get("conversation_id"),
        "main_step": state.get("main_step"),
        "pending_flow": pending_task.get("flow_name") if pending_task else None,
        "pending_step": pending_task.get("current_step") if pending_task else None,
        "current_intent": state.get("current_intent"),
        "balance": str(state["account"]["balance"]),
        "transactions": len(state["transactions"]),
        "activities_sent": len(state.get("outbox", [])),
    }
    logger.info(log_entry)

    return {**state, "timestamp": timestamp}
