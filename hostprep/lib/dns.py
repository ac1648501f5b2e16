from __future__ import annotations

import logging
from typing import Optional

from ..models import DnsCheckResult
from .command import run_cmd

logger = logging.getLogger(__name__)


def resolve_a(domain: str, *, dry_run: bool = False) -> Optional[str]:
    """Resolve ``domain`` to one IPv4 address through the system resolver.

    When several A records come back the last one wins.
    """

    r = run_cmd(["dig", "+short", domain, "A"], check=False, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("dig exited %s for %s", r.returncode, domain)
        return None

    lines = [line.strip() for line in r.stdout.splitlines() if line.strip()]
    if not lines:
        return None
    return lines[-1]


def check_dns(domain: str, expected_ip: str, *, dry_run: bool = False) -> DnsCheckResult:
    result = DnsCheckResult(expected_ip=expected_ip, resolved_ip=resolve_a(domain, dry_run=dry_run))
    logger.info("DNS %s -> %s (%s)", domain, result.resolved_ip, result.status)
    return result
