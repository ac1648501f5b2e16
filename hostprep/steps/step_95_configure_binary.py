from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..errors import CommandError, InstallError
from ..lib import console
from ..lib.command import run_cmd
from .step_75_write_app_config import render_template

logger = logging.getLogger(__name__)


class ConfigureBinaryStep:
    """Feed the profile's configuration transcript to the binary on stdin."""

    step_id = "95_configure_binary"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        lines = render_template(ctx.profile.configure_stdin, ctx.template_fields())
        if not lines:
            logger.info("No configuration transcript for %s", ctx.profile.profile_id)
            return state

        console.info(f"Applying initial configuration to {ctx.profile.name} ...", ctx.out)
        try:
            run_cmd(
                [str(ctx.binary_path)],
                cwd=str(ctx.work_dir),
                input_text="\n".join(lines) + "\n",
                dry_run=ctx.dry_run,
            )
        except CommandError as e:
            raise InstallError(f"configuration transcript failed (exit {e.returncode})") from e
        console.ok("Configuration applied.", ctx.out)

        state["configured"] = lines
        return state
