from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.pkg import apt_update, apt_upgrade, ensure_tools

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "20_install_dependencies"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        console.section("System preparation", ctx.out)

        if ctx.cfg.upgrade_system:
            console.info("Updating system packages ...", ctx.out)
            apt_update(ctx.privilege, dry_run=ctx.dry_run)
            apt_upgrade(ctx.privilege, dry_run=ctx.dry_run)
            console.ok("System updated.", ctx.out)

        tools = ctx.profile.tools
        console.info(f"Checking required tools ({', '.join(tools)}) ...", ctx.out)
        installed = ensure_tools(ctx.privilege, tools, dry_run=ctx.dry_run)
        if installed:
            console.ok(f"Installed: {', '.join(installed)}", ctx.out)
        else:
            console.ok("All required tools already present.", ctx.out)

        state["installed_packages"] = installed
        return state
