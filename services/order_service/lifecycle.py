"""
Order state machine.

    Created --submit_proof--> ProofSubmitted --mark_processed--> Processed
                              ProofSubmitted --submit_proof--> ProofSubmitted

Processed is terminal. Marking an already processed order again is allowed
and changes nothing; every other move out of Processed is rejected, as is
processing an order that has no payment proof yet.
"""
from enum import Enum

from shared.errors import PreconditionFailedError


class OrderState(str, Enum):
    CREATED = "created"
    PROOF_SUBMITTED = "proof_submitted"
    PROCESSED = "processed"


class OrderEvent(str, Enum):
    SUBMIT_PROOF = "submit_proof"
    MARK_PROCESSED = "mark_processed"


TRANSITIONS = {
    (OrderState.CREATED, OrderEvent.SUBMIT_PROOF): OrderState.PROOF_SUBMITTED,
    (OrderState.PROOF_SUBMITTED, OrderEvent.SUBMIT_PROOF): OrderState.PROOF_SUBMITTED,
    (OrderState.PROOF_SUBMITTED, OrderEvent.MARK_PROCESSED): OrderState.PROCESSED,
    (OrderState.PROCESSED, OrderEvent.MARK_PROCESSED): OrderState.PROCESSED,
}

_REJECTIONS = {
    (OrderState.CREATED, OrderEvent.MARK_PROCESSED): "Cannot process order without payment proof.",
    (OrderState.PROCESSED, OrderEvent.SUBMIT_PROOF): "Order has already been processed; payment proof can no longer be changed.",
}


def state_of(order) -> OrderState:
    if order.is_processed:
        return OrderState.PROCESSED
    if order.payment_proof:
        return OrderState.PROOF_SUBMITTED
    return OrderState.CREATED


def next_state(state: OrderState, event: OrderEvent) -> OrderState:
    target = TRANSITIONS.get((state, event))
    if target is None:
        message = _REJECTIONS.get(
            (state, event), f"Transition '{event.value}' is not allowed from '{state.value}'."
        )
        raise PreconditionFailedError(message)
    return target
