from decimal import Decimal
from enum import Enum
from typing import Dict, Any, Optional
from .accounts import InsufficientFundsError, debit
from .flow_agent import FlowAgent
from .logger import logger
from .response_generator import response_generator
from .state import State
from .validators import is_valid_amount, parse_confirmation, parse_number


class TransactionStep(str, Enum):
    AMOUNT = "amount"
    CONFIRM = "confirm"


class TransactionFlow(FlowAgent):
    """Collects a transfer amount, confirms it and debits the account."""

    name = "transaction_flow"

    def __init__(self):
        super().__init__()
        self.steps = {
            TransactionStep.AMOUNT.value: self._handle_amount,
            TransactionStep.CONFIRM.value: self._handle_confirm,
        }

    def begin(self, state: State, amount: Optional[Decimal] = None) -> State:
        """Starts the flow, skipping the amount prompt when a valid amount is already known."""
        logger.info(f"--- Starting {self.name} (amount={amount}) ---")
        fields = {"amount": amount}
        if amount is None:
            return self._prompt(state, TransactionStep.AMOUNT.value, fields, response_generator.generate("ASK_AMOUNT"))
        if not is_valid_amount(amount):
            return self._prompt(state, TransactionStep.AMOUNT.value, fields, response_generator.generate("ASK_AMOUNT_IN_RANGE"))
        return self._ask_confirmation(state, fields)

    def _handle_amount(self, state: State, fields: Dict[str, Any], reply: Optional[str]) -> State:
        amount = parse_number(reply)
        if not is_valid_amount(amount):
            return self._prompt(state, TransactionStep.AMOUNT.value, fields, response_generator.generate("RETRY_AMOUNT"))
        return self._ask_confirmation(state, {**fields, "amount": amount})

    def _ask_confirmation(self, state: State, fields: Dict[str, Any]) -> State:
        return self._prompt(state, TransactionStep.CONFIRM.value, fields, self._confirm_question(fields))

    def _handle_confirm(self, state: State, fields: Dict[str, Any], reply: Optional[str]) -> State:
        confirmed = parse_confirmation(reply)
        if confirmed is None:
            question = response_generator.generate("REPROMPT_CONFIRM", prompt=self._confirm_question(fields))
            return self._prompt(state, TransactionStep.CONFIRM.value, fields, question)
        if not confirmed:
            return self._end_flow(state)
        return self._finalize(state, Decimal(fields["amount"]))

    def _finalize(self, state: State, amount: Decimal) -> State:
        try:
            account, transactions, transaction = debit(state["account"], state["transactions"], amount)
        except InsufficientFundsError as e:
            logger.info(f"Transaction refused: {e}")
            return self._end_flow(state, response_generator.generate("INSUFFICIENT_FUNDS"))

        logger.info(f"Transaction {transaction['id']} recorded for {amount}")
        state = {**state, "account": account, "transactions": transactions}
        return self._end_flow(state, response_generator.generate("TRANSACTION_SENT", amount=amount, balance=account["balance"]))

    def _confirm_question(self, fields: Dict[str, Any]) -> str:
        return response_generator.generate("CONFIRM_TRANSACTION", amount=fields["amount"])

    def get_current_step_question(self, current_step: str, fields: Dict[str, Any]) -> str:
        if current_step == TransactionStep.CONFIRM.value:
            return self._confirm_question(fields)
        return response_generator.generate("ASK_AMOUNT")
