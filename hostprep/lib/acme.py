from __future__ import annotations

import logging
from pathlib import PurePosixPath

from ..errors import CommandError, InstallError
from ..models import CertificatePaths
from .command import run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)

DEFAULT_LIVE_DIR = "/etc/letsencrypt/live"


def certificate_paths(domain: str, live_dir: str = DEFAULT_LIVE_DIR) -> CertificatePaths:
    base = PurePosixPath(live_dir) / domain
    return CertificatePaths(cert_path=str(base / "fullchain.pem"), key_path=str(base / "privkey.pem"))


def certbot_manual_dns_argv(domain: str) -> list[str]:
    return [
        "certbot",
        "certonly",
        "--manual",
        "--preferred-challenges",
        "dns",
        "--register-unsafely-without-email",
        "-d",
        domain,
    ]


def request_certificate(
    privilege: Privilege,
    domain: str,
    *,
    live_dir: str = DEFAULT_LIVE_DIR,
    dry_run: bool = False,
) -> CertificatePaths:
    """Hand the DNS-01 flow to certbot; the operator answers its prompts."""

    try:
        run_cmd(privilege.argv(certbot_manual_dns_argv(domain)), interactive=True, dry_run=dry_run)
    except CommandError as e:
        raise InstallError(f"certificate request failed for {domain} (exit {e.returncode})") from e

    paths = certificate_paths(domain, live_dir)
    logger.info("Certificate paths: cert=%s key=%s", paths.cert_path, paths.key_path)
    return paths
