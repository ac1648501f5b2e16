from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console

logger = logging.getLogger(__name__)


class PrepareWorkdirStep:
    step_id = "30_prepare_workdir"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        console.section("Directory setup", ctx.out)
        console.info(f"Working directory: {ctx.work_dir}", ctx.out)

        if ctx.dry_run:
            logger.info("Would create %s", ctx.work_dir)
        else:
            ctx.work_dir.mkdir(parents=True, exist_ok=True)

        state["work_dir"] = str(ctx.work_dir)
        return state
