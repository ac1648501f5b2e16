from __future__ import annotations

from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console


class DnsInstructionsStep:
    step_id = "55_dns_instructions"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        domain = ctx.target.domain
        console.section("DNS setup (manual, in your DNS provider)", ctx.out)
        console.text(
            f"Create an A record for {domain}:\n"
            "\n"
            "   Type:  A\n"
            "   Host:  @\n"
            f"   Value: {ctx.target.public_ip}\n"
            "   TTL:   1 minute (or lowest allowed)\n"
            "\n"
            "A certificate request follows, which needs a TXT record as well.\n"
            "Keep your DNS provider dashboard open.\n",
            ctx.out,
        )
        ctx.input_fn("Press ENTER once the A record is in place...")
        return state
