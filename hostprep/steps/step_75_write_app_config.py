from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from ..context import ProvisionCtx
from ..lib import console
from ..lib.acme import certificate_paths

logger = logging.getLogger(__name__)


def render_template(obj: Any, fields: Mapping[str, str]) -> Any:
    """Substitute ``{name}`` placeholders in every string of a nested structure."""
    if isinstance(obj, str):
        for k, v in fields.items():
            obj = obj.replace("{" + k + "}", v)
        return obj
    if isinstance(obj, dict):
        return {k: render_template(v, fields) for k, v in obj.items()}
    if isinstance(obj, list):
        return [render_template(v, fields) for v in obj]
    return obj


class WriteAppConfigStep:
    step_id = "75_write_app_config"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        app_cfg = ctx.profile.app_config
        if app_cfg is None:
            logger.info("Profile %s has no app_config; nothing to write", ctx.profile.profile_id)
            return state

        paths = state.get("certificate") or certificate_paths(ctx.target.domain, ctx.cfg.acme_live_dir)
        fields = ctx.template_fields(cert_path=paths.cert_path, key_path=paths.key_path)
        content = render_template(app_cfg["content"], fields)
        target = ctx.work_dir / str(app_cfg["file"])

        console.section(f"Write {target.name}", ctx.out)
        if ctx.dry_run:
            logger.info("Would write %s", target)
        else:
            if target.exists():
                console.info(f"Removing existing {target.name} ...", ctx.out)
                target.unlink()
            target.write_text(json.dumps(content, indent=4) + "\n", encoding="utf-8")
        console.ok(f"{target.name} has been recreated.", ctx.out)

        state["app_config"] = str(target)
        return state
