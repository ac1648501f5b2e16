from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.dns import check_dns
from ..lib.pkg import ensure_tools

logger = logging.getLogger(__name__)


class CheckDnsStep:
    """Report whether the domain points at this host. Never fails the run."""

    step_id = "60_check_dns"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        domain = ctx.target.domain
        expected = ctx.target.public_ip

        console.section("DNS check", ctx.out)
        console.info(f"Checking DNS A record for: {domain}", ctx.out)

        ensure_tools(ctx.privilege, ctx.profile.dns_tool, dry_run=ctx.dry_run)
        result = check_dns(domain, expected, dry_run=ctx.dry_run)

        if result.status == "absent":
            console.warn(f"No DNS A record found for {domain}", ctx.out)
        elif result.status == "match":
            console.ok(f"DNS A record resolves to: {result.resolved_ip}", ctx.out)
            console.ok("DNS is correctly pointing to this host.", ctx.out)
        else:
            console.ok(f"DNS A record resolves to: {result.resolved_ip}", ctx.out)
            console.warn("DNS mismatch detected!", ctx.out)
            console.text(f"    Expected: {expected}\n    Got:      {result.resolved_ip}", ctx.out)

        state["dns"] = result
        return state
