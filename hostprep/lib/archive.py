from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Sequence

from ..errors import CommandError, InstallError, VerificationError
from .command import run_cmd

logger = logging.getLogger(__name__)


def extract_zip(archive: Path, dest: Path, *, dry_run: bool = False) -> None:
    """Unpack ``archive`` into ``dest``, overwriting earlier extractions."""
    try:
        run_cmd(["unzip", "-o", str(archive), "-d", str(dest)], dry_run=dry_run)
    except CommandError as e:
        raise InstallError(f"extraction failed: {archive.name} (exit {e.returncode})") from e


def list_dir(dest: Path) -> list[str]:
    return sorted(p.name for p in dest.iterdir())


def make_executable(binary: Path) -> None:
    mode = binary.stat().st_mode
    binary.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def verify_binary(
    binary: Path,
    *,
    smoke_args: Sequence[str] = ("-h",),
    dry_run: bool = False,
) -> None:
    """Existence check, chmod +x and smoke test, in that order."""

    if dry_run:
        logger.info("Would verify %s (%s)", binary, " ".join(smoke_args))
        return

    if not binary.is_file():
        raise VerificationError(f"binary missing after extraction: {binary}")

    make_executable(binary)
    logger.info("Applied execute permissions to %s", binary)

    try:
        r = run_cmd([str(binary), *smoke_args], check=False, cwd=str(binary.parent))
    except OSError as e:
        # Wrong architecture or a corrupt file never starts at all.
        raise VerificationError(f"binary failed to run: {binary} ({e.strerror})") from e
    if r.returncode != 0:
        raise VerificationError(f"binary failed to run: {binary} (exit {r.returncode})")
