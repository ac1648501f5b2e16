from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.archive import extract_zip, list_dir, verify_binary

logger = logging.getLogger(__name__)


class ExtractVerifyStep:
    step_id = "50_extract_verify"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        console.section("Extract & verify", ctx.out)

        console.info("Extracting archive ...", ctx.out)
        extract_zip(ctx.archive_path, ctx.work_dir, dry_run=ctx.dry_run)
        if not ctx.dry_run:
            logger.info("Work dir contents: %s", ", ".join(list_dir(ctx.work_dir)))

        console.info("Verifying binary ...", ctx.out)
        verify_binary(ctx.binary_path, smoke_args=ctx.profile.smoke_args, dry_run=ctx.dry_run)
        console.ok(f"{ctx.profile.name} binary is executable and runs.", ctx.out)

        state["binary"] = str(ctx.binary_path)
        return state
