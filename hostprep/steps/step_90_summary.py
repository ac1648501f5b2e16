from __future__ import annotations

from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..report import render_summary


class SummaryStep:
    step_id = "90_summary"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        console.text(render_summary(ctx, state), ctx.out)
        return state
