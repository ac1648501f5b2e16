from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Any, Callable, Dict, List, Optional, Sequence

from .config import ProvisionConfig, load_config
from .context import ProvisionCtx
from .errors import ProvisionError, UsageError
from .lib import console
from .lib.privilege import detect_privilege
from .logging_utils import configure_logging
from .models import ProvisioningTarget
from .pipeline import StageFailed, Step, run_pipeline
from .profiles import profile_for
from .steps import (
    CheckDnsStep,
    ConfigureBinaryStep,
    ExtractVerifyStep,
    FetchReleaseStep,
    InstallDependenciesStep,
    PreflightStep,
    PrepareWorkdirStep,
    SummaryStep,
)

logger = logging.getLogger(__name__)


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_steps() -> List[Step]:
    return [
        PreflightStep(),
        InstallDependenciesStep(),
        PrepareWorkdirStep(),
        FetchReleaseStep(),
        ExtractVerifyStep(),
        CheckDnsStep(),
        SummaryStep(),
        ConfigureBinaryStep(),
    ]


def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Path to a YAML config file")
    p.add_argument("--profile", default=None, help="Built-in release profile (default: gophish)")
    p.add_argument("--profile-file", default=None, help="Path to a custom profile YAML")
    p.add_argument("--release-version", default=None, help="Override the profile's release version")
    p.add_argument("--mirror", default=None, help="Override the release download base URL")
    p.add_argument("--work-dir", default=None, help="Working directory (archive cache + extraction)")
    p.add_argument("--sha256", default=None, help="Expected SHA-256 of the release archive")
    p.add_argument("--log", default=None, help="Path to the log file")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 50_extract_verify)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")


def config_from_args(args: argparse.Namespace) -> ProvisionConfig:
    return load_config(args.config).with_overrides(
        profile=args.profile,
        profile_file=args.profile_file,
        version=args.release_version,
        mirror=args.mirror,
        work_dir=args.work_dir,
        sha256=args.sha256,
        log_path=args.log,
        dry_run=True if args.dry_run else None,
    )


def provision(
    *,
    cfg: ProvisionConfig,
    target: ProvisioningTarget,
    steps: Sequence[Step],
    stop_after: Optional[str] = None,
    out: Optional[IO[str]] = None,
    input_fn: Callable[[str], str] = input,
) -> Dict[str, Any]:
    """Resolve the run context once, then hand the stages to the sequencer."""

    actual_log_path = configure_logging(log_path=cfg.log_path, console_level=None)

    profile = profile_for(cfg)
    artifact = profile.resolve_artifact(cfg)
    privilege = detect_privilege(dry_run=cfg.dry_run)

    ctx = ProvisionCtx(
        cfg=cfg,
        profile=profile,
        target=target,
        artifact=artifact,
        privilege=privilege,
        out=out,
        input_fn=input_fn,
    )
    logger.info(
        "Provisioning %s for %s (%s), log=%s",
        artifact.archive_filename,
        target.domain,
        target.public_ip,
        actual_log_path,
    )

    result = run_pipeline(ctx=ctx, steps=steps, stop_after=stop_after)
    logger.info("Completed steps: %s", ", ".join(result.ran_steps))
    return result.state


def run_cli(fn: Callable[[], Dict[str, Any]]) -> int:
    """Run ``fn`` and map failures to a single diagnostic line and exit 1."""
    try:
        fn()
    except StageFailed as e:
        console.error(str(e))
        return 1
    except (ProvisionError, ValueError, FileNotFoundError) as e:
        console.error(str(e))
        return 1
    return 0


def main(argv: Optional[list[str]] = None, *, out: Optional[IO[str]] = None) -> int:
    p = UsageParser(
        prog="hostprep",
        description="Download, verify and configure a release binary on this host.",
    )
    p.add_argument("domain", help="Domain that should point at this host")
    p.add_argument("public_ip", help="Public IPv4 address of this host")
    add_common_args(p)

    args = p.parse_args(argv)

    try:
        target = ProvisioningTarget(domain=args.domain, public_ip=args.public_ip)
    except UsageError as e:
        p.error(str(e))

    try:
        cfg = config_from_args(args)
    except (ValueError, FileNotFoundError) as e:
        p.error(f"cannot load config: {e}")

    return run_cli(
        lambda: provision(
            cfg=cfg,
            target=target,
            steps=build_steps(),
            stop_after=args.stop_after,
            out=out,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
