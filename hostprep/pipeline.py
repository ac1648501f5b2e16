from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .context import ProvisionCtx

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent stage."""

    step_id: str

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


class StageFailed(RuntimeError):
    def __init__(self, step_id: str, cause: BaseException) -> None:
        super().__init__(f"Stage {step_id} failed: {cause}")
        self.step_id = step_id
        self.cause = cause


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: ProvisionCtx,
    steps: Sequence[Step],
    state: Optional[Dict[str, Any]] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order, stopping at the first failure.

    Nothing done by earlier steps is undone when a later one fails.
    """

    state = {} if state is None else state
    ran: List[str] = []

    for step in steps:
        state["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        try:
            state = step.run(ctx, state)
        except Exception as e:
            logger.exception("Step %s failed", step.step_id)
            raise StageFailed(step.step_id, e) from e
        ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
