"""Guided (interactive) variant: prompts for the target, then provisions it
with manual DNS instructions, a certificate request and an app config write."""

from __future__ import annotations

import logging
from typing import IO, Callable, List, Optional

from .errors import UsageError
from .lib import console
from .main import UsageParser, add_common_args, config_from_args, provision, run_cli
from .models import ProvisioningTarget, parse_ipv4
from .pipeline import Step
from .steps import (
    CheckDnsStep,
    DnsInstructionsStep,
    ExtractVerifyStep,
    FetchReleaseStep,
    InstallDependenciesStep,
    PreflightStep,
    PrepareWorkdirStep,
    RequestCertificateStep,
    SummaryStep,
    WriteAppConfigStep,
)

logger = logging.getLogger(__name__)

BANNER = """
============================================================
                    hostprep guided setup
============================================================

This will:
  - Install required system packages
  - Download and extract the release
  - Check DNS for your domain
  - Obtain a TLS certificate via certbot (DNS challenge)
  - Write the application config file
"""


def build_guided_steps() -> List[Step]:
    return [
        PreflightStep(),
        InstallDependenciesStep(),
        PrepareWorkdirStep(),
        FetchReleaseStep(),
        ExtractVerifyStep(),
        DnsInstructionsStep(),
        CheckDnsStep(),
        RequestCertificateStep(),
        WriteAppConfigStep(),
        SummaryStep(),
    ]


def ask(prompt: str, input_fn: Callable[[str], str], *, validate: Callable[[str], str]) -> str:
    """Prompt until ``validate`` accepts the answer."""
    while True:
        answer = input_fn(prompt).strip()
        try:
            return validate(answer)
        except UsageError as e:
            console.warn(str(e))


def _non_empty(value: str) -> str:
    if not value:
        raise UsageError("a value is required")
    return value


def collect_target(input_fn: Callable[[str], str], out: Optional[IO[str]] = None) -> ProvisioningTarget:
    console.section("Step 1: Collect required information", out)
    domain = ask("Enter your domain (e.g. example.com): ", input_fn, validate=_non_empty)
    ip = ask("Enter this host's public IPv4 address: ", input_fn, validate=parse_ipv4)
    target = ProvisioningTarget(domain=domain, public_ip=ip)
    console.text("", out)
    console.ok(f"Using domain: {target.domain}", out)
    console.ok(f"Using IP:     {target.public_ip}", out)
    return target


def main(
    argv: Optional[list[str]] = None,
    *,
    out: Optional[IO[str]] = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    p = UsageParser(prog="hostprep-guided", description="Interactive release setup.")
    add_common_args(p)
    args = p.parse_args(argv)

    try:
        cfg = config_from_args(args)
    except (ValueError, FileNotFoundError) as e:
        p.error(f"cannot load config: {e}")

    try:
        console.text(BANNER, out)
        input_fn("Press ENTER to continue or Ctrl+C to abort...")
        target = collect_target(input_fn, out)
    except (EOFError, KeyboardInterrupt):
        console.error("Aborted.")
        return 1

    try:
        return run_cli(
            lambda: provision(
                cfg=cfg,
                target=target,
                steps=build_guided_steps(),
                stop_after=args.stop_after,
                out=out,
                input_fn=input_fn,
            )
        )
    except KeyboardInterrupt:
        console.error("Interrupted; completed stages are left in place.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
