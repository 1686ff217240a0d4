import pytest

from services.order_service.saga import SagaOrchestrator


def recorder(log, name, fail=False):
    async def step(ctx):
        log.append(name)
        if fail:
            raise RuntimeError(f"{name} failed")
    return step


async def test_steps_run_in_order_and_return_context():
    log = []
    saga = (
        SagaOrchestrator()
        .add_step("a", recorder(log, "a"))
        .add_step("b", recorder(log, "b"))
    )

    ctx = await saga.execute({"seed": 1})

    assert log == ["a", "b"]
    assert ctx == {"seed": 1}


async def test_failure_compensates_completed_steps_in_reverse():
    log = []
    saga = (
        SagaOrchestrator()
        .add_step("a", recorder(log, "a"), recorder(log, "undo-a"))
        .add_step("b", recorder(log, "b"), recorder(log, "undo-b"))
        .add_step("c", recorder(log, "c", fail=True), recorder(log, "undo-c"))
    )

    with pytest.raises(RuntimeError, match="c failed"):
        await saga.execute({})

    assert log == ["a", "b", "c", "undo-b", "undo-a"]


async def test_failing_compensation_does_not_block_the_rest():
    log = []
    saga = (
        SagaOrchestrator()
        .add_step("a", recorder(log, "a"), recorder(log, "undo-a"))
        .add_step("b", recorder(log, "b"), recorder(log, "undo-b", fail=True))
        .add_step("c", recorder(log, "c", fail=True))
    )

    with pytest.raises(RuntimeError, match="c failed"):
        await saga.execute({})

    assert log == ["a", "b", "c", "undo-b", "undo-a"]
