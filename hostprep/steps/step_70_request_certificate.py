from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.acme import request_certificate

logger = logging.getLogger(__name__)


class RequestCertificateStep:
    step_id = "70_request_certificate"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        domain = ctx.target.domain
        console.section("Request TLS certificate (DNS challenge)", ctx.out)
        console.text(
            "Certbot will now guide you through DNS domain validation.\n"
            "\n"
            "When prompted, create a TXT record:\n"
            f"    Name/Host: _acme-challenge.{domain}\n"
            "    Type:      TXT\n"
            "    Value:     (token provided by certbot)\n"
            "    TTL:       1 minute\n"
            "\n"
            "Wait 1-2 minutes for DNS to propagate, then let certbot continue.\n",
            ctx.out,
        )
        ctx.input_fn("Press ENTER to start certbot and request a TLS certificate...")

        paths = request_certificate(
            ctx.privilege,
            domain,
            live_dir=ctx.cfg.acme_live_dir,
            dry_run=ctx.dry_run,
        )
        console.ok("Certificate issued.", ctx.out)
        console.text(f"  CERT_PATH = {paths.cert_path}\n  KEY_PATH  = {paths.key_path}", ctx.out)

        state["certificate"] = paths
        return state
