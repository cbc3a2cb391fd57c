from typing import Dict, Any, Callable, Optional
from .activities import text_message, send, EXPECTING_INPUT, IGNORING_INPUT
from .logger import logger
from .response_generator import response_generator
from .state import State

HELP_WORDS = {"help", "?"}
CANCEL_WORDS = {"cancel", "quit"}

StepHandler = Callable[[State, Dict[str, Any], Optional[str]], State]

class FlowAgent:
    """
    Base class for the sub-flows started by the main sequence.

    A flow is a small state machine. Its position and partial input live in
    `state["pending_task"]` as plain data:

        {"flow_name": ..., "current_step": ..., "fields": {...}}

    `current_step` is always the step whose prompt was sent last, so the next
    reply is routed to that step's handler.
    """

    name = ""

    def __init__(self):
        self.steps: Dict[str, StepHandler] = {}

    def _update_flow_state(self, state: State, current_step: str, fields: Dict[str, Any]) -> State:
        """Updates the state to reflect the current position in the flow."""
        return {
            **state,
            "pending_task": {
                "flow_name": self.name,
                "current_step": current_step,
                "fields": fields,
            },
        }

    def _prompt(self, state: State, step: str, fields: Dict[str, Any], text: str) -> State:
        """Sends a prompt and suspends the flow at `step` until the user replies."""
        state = self._update_flow_state(state, step, fields)
        return {
            **state,
            "outbox": send(state, text_message(text, EXPECTING_INPUT)),
            "awaiting_input": True,
        }

    def _end_flow(self, state: State, text: Optional[str] = None) -> State:
        """Handles the end of a flow, clearing the pending task."""
        logger.info(f"--- Ending {self.name} ---")
        outbox = send(state, text_message(text, IGNORING_INPUT)) if text else state.get("outbox", [])
        return {**state, "pending_task": None, "awaiting_input": False, "outbox": outbox}

    def run_flow(self, state: State) -> State:
        """Feeds the user's reply to the step the flow is suspended at."""
        pending_task = state.get("pending_task")
        if not pending_task or pending_task.get("flow_name") != self.name:
            raise RuntimeError(f"{self.name} was resumed but it is not the active flow.")

        current_step = pending_task["current_step"]
        fields = dict(pending_task.get("fields") or {})
        reply = state.get("utterance")
        logger.info(f"--- {self.name} processing step '{current_step}' ---")

        interrupted = self._handle_interruption(state, current_step, fields, reply)
        if interrupted is not None:
            return interrupted

        handler = self.steps.get(current_step)
        if handler is None:
            raise RuntimeError(f"Step '{current_step}' not found in flow '{self.name}'.")
        return handler({**state, "utterance": None}, fields, reply)

    def _handle_interruption(self, state: State, current_step: str, fields: Dict[str, Any], reply: Optional[str]) -> Optional[State]:
        """Handles 'help' and 'cancel' typed while the flow is waiting for a reply."""
        text = (reply or "").strip().lower()
        if text in HELP_WORDS:
            state = {
                **state,
                "utterance": None,
                "outbox": send(state, text_message(response_generator.generate("HELP"), IGNORING_INPUT)),
            }
            return self._prompt(state, current_step, fields, self.get_current_step_question(current_step, fields))
        if text in CANCEL_WORDS:
            logger.info(f"--- {self.name} cancelled by the user ---")
            return {
                **state,
                "utterance": None,
                "pending_task": None,
                "main_step": None,
                "restart_message": None,
                "awaiting_input": True,
                "outbox": send(state, text_message(response_generator.generate("CANCELLING"), IGNORING_INPUT)),
            }
        return None

    def get_current_step_question(self, current_step: str, fields: Dict[str, Any]) -> str:
        """Returns the question for the given step of the flow."""
        raise NotImplementedError
