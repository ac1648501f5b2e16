from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib import console
from ..lib.fetch import ensure_archive, verify_sha256

logger = logging.getLogger(__name__)


class FetchReleaseStep:
    step_id = "40_fetch_release"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        console.section("Download", ctx.out)
        artifact = ctx.artifact
        archive = ctx.archive_path

        if archive.is_file():
            console.ok(f"Existing archive found; using {artifact.archive_filename}", ctx.out)
        else:
            console.info(f"Downloading {ctx.profile.name} {artifact.version}:", ctx.out)
            console.text(f"    {artifact.download_url}", ctx.out)

        downloaded = ensure_archive(archive, artifact.download_url, dry_run=ctx.dry_run)
        if downloaded:
            console.ok("Download complete.", ctx.out)

        if artifact.sha256 and not ctx.dry_run:
            verify_sha256(archive, artifact.sha256)
            console.ok("Archive checksum verified.", ctx.out)
        elif not artifact.sha256:
            logger.warning("No checksum configured for %s; archive is unverified", artifact.archive_filename)

        state["archive"] = str(archive)
        state["downloaded"] = downloaded
        return state
