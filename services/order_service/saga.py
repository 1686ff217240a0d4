import structlog
from shared.observability import ecomm_saga_compensation_total

logger = structlog.get_logger(__name__)

class SagaStep:
    def __init__(self, name, action, compensation=None):
        self.name = name
        self.action = action
        self.compensation = compensation

class SagaOrchestrator:
    """
    Runs steps in order and, if one fails, undoes the completed ones in
    reverse. Compensations are best effort: this is not a transaction, and a
    compensation that fails leaves the earlier side effect in place.
    """

    def __init__(self):
        self.steps = []

    def add_step(self, name: str, action, compensation=None):
        """Builder pattern to add a step and its rollback compensation."""
        self.steps.append(SagaStep(name, action, compensation))
        return self

    async def execute(self, ctx: dict):
        """Executes steps sequentially. Triggers rollback on any exception."""
        executed_steps = []
        step = None
        try:
            for step in self.steps:
                await step.action(ctx)
                executed_steps.append(step)
            return ctx
        except Exception as e:
            logger.error("saga_step_failed", step=step.name, error=str(e))
            await self._rollback(executed_steps, ctx)
            raise

    async def _rollback(self, executed_steps: list, ctx: dict):
        """Executes compensations in reverse order. Wraps each in a try/except."""
        logger.info("saga_rollback_started", completed_steps=[s.name for s in executed_steps])
        for step in reversed(executed_steps):
            if step.compensation:
                try:
                    await step.compensation(ctx)
                    logger.info("saga_compensation_succeeded", step=step.name)
                    ecomm_saga_compensation_total.labels(step_name=step.name).inc()
                except Exception as ce:
                    # A failing compensation MUST NOT block other compensations
                    logger.critical(
                        "saga_compensation_failed",
                        step=step.name,
                        error=str(ce),
                        action="manual intervention may be required",
                    )
