from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.acme import DEFAULT_LIVE_DIR

DEFAULT_PROFILE = "gophish"
DEFAULT_LOG_PATH = "~/.hostprep/hostprep.log"


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def profile(self) -> str:
        return str(self.raw.get("profile") or DEFAULT_PROFILE)

    @property
    def profile_file(self) -> Optional[str]:
        v = self.raw.get("profile_file")
        return str(v) if v else None

    @property
    def version(self) -> Optional[str]:
        v = self.raw.get("version")
        return str(v) if v else None

    @property
    def mirror(self) -> Optional[str]:
        v = self.raw.get("mirror")
        return str(v).rstrip("/") if v else None

    @property
    def work_dir(self) -> Optional[str]:
        v = self.raw.get("work_dir")
        return str(v) if v else None

    @property
    def sha256(self) -> Optional[str]:
        v = self.raw.get("sha256")
        return str(v) if v else None

    @property
    def log_path(self) -> str:
        return str(Path(str(self.raw.get("log_path") or DEFAULT_LOG_PATH)).expanduser())

    @property
    def acme_live_dir(self) -> str:
        return str(((self.raw.get("acme") or {}).get("live_dir")) or DEFAULT_LIVE_DIR)

    @property
    def upgrade_system(self) -> bool:
        return bool((self.raw.get("system") or {}).get("upgrade", False))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def with_overrides(self, **overrides: Any) -> "ProvisionConfig":
        """Return a copy with non-None overrides applied on top of the raw mapping."""
        merged = dict(self.raw)
        for k, v in overrides.items():
            if v is not None:
                merged[k] = v
        return replace(self, raw=merged)


def load_config(path: Optional[str]) -> ProvisionConfig:
    if not path:
        return ProvisionConfig()

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the config file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1})" if mark is not None else ""
        raise ValueError(f"{p} is not valid YAML{where}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return ProvisionConfig(raw=raw)
