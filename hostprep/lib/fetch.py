from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from ..errors import CommandError, DownloadError, VerificationError
from .command import run_cmd

logger = logging.getLogger(__name__)


def ensure_archive(path: Path, url: str, *, dry_run: bool = False) -> bool:
    """Make sure ``path`` exists, downloading ``url`` once if it does not.

    An existing file is trusted as-is; no freshness check is made.
    Returns True when a download happened.
    """

    if path.is_file():
        logger.info("Existing archive found: %s", path)
        return False

    logger.info("Downloading %s -> %s", url, path)
    try:
        run_cmd(["wget", "-q", url, "-O", str(path)], dry_run=dry_run)
    except CommandError as e:
        # wget leaves an empty file behind, which would look like a cache hit next run.
        if path.exists():
            path.unlink()
        raise DownloadError(f"download failed: {url} (exit {e.returncode})") from e
    return True


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1 << 20), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_sha256(path: Path, expected: str) -> None:
    actual = sha256_file(path)
    if actual.lower() != expected.strip().lower():
        raise VerificationError(f"checksum mismatch for {path.name}: expected {expected}, got {actual}")
    logger.info("Checksum verified for %s", path.name)
