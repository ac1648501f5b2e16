from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.pkg import require_apt

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        require_apt(dry_run=ctx.dry_run)

        if not ctx.privilege.is_root:
            console.info("Non-root user detected; sudo will be used.", ctx.out)

        state["privileged"] = ctx.privilege.is_root
        logger.info(
            "Preflight ok (profile=%s version=%s root=%s dry_run=%s)",
            ctx.profile.profile_id,
            ctx.artifact.version,
            ctx.privilege.is_root,
            ctx.dry_run,
        )
        return state
