import pytest

from shared.errors import PreconditionFailedError
from services.order_service.lifecycle import OrderEvent, OrderState, next_state, state_of
from services.order_service.models import Order, Store


def make_order(**overrides):
    fields = dict(
        order_id="NB-1",
        created_at=1,
        full_name="Ada Obi",
        phone="080",
        email="ada@example.com",
        address="Lagos",
        store=Store.TEMU,
        screenshot="mem://shot",
    )
    fields.update(overrides)
    return Order(**fields)


def test_state_is_derived_from_proof_and_processed_flag():
    assert state_of(make_order()) == OrderState.CREATED
    assert state_of(make_order(payment_proof="mem://proof")) == OrderState.PROOF_SUBMITTED
    assert state_of(make_order(payment_proof="mem://proof", is_processed=True)) == OrderState.PROCESSED


@pytest.mark.parametrize("state, event, expected", [
    (OrderState.CREATED, OrderEvent.SUBMIT_PROOF, OrderState.PROOF_SUBMITTED),
    (OrderState.PROOF_SUBMITTED, OrderEvent.SUBMIT_PROOF, OrderState.PROOF_SUBMITTED),
    (OrderState.PROOF_SUBMITTED, OrderEvent.MARK_PROCESSED, OrderState.PROCESSED),
    (OrderState.PROCESSED, OrderEvent.MARK_PROCESSED, OrderState.PROCESSED),
])
def test_allowed_transitions(state, event, expected):
    assert next_state(state, event) == expected


def test_processing_without_proof_is_rejected():
    with pytest.raises(PreconditionFailedError, match="without payment proof"):
        next_state(OrderState.CREATED, OrderEvent.MARK_PROCESSED)


def test_proof_is_frozen_once_processed():
    with pytest.raises(PreconditionFailedError, match="already been processed"):
        next_state(OrderState.PROCESSED, OrderEvent.SUBMIT_PROOF)
