"""Release profiles: declarative YAML manifests describing one release binary.

Profiles do not execute logic. They name the archive, the binary inside it,
the tools the host needs and the operator-facing summary details.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ProvisionConfig
from .models import ReleaseArtifact

PROFILES_DIR = Path(__file__).resolve().parent / "manifests" / "profiles"

DEFAULT_TOOLS = {
    "unzip": "unzip",
    "wget": "wget",
    "dig": "dnsutils",
}


def _load_yaml(p: Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load profiles") from e

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1})" if mark is not None else ""
        raise ValueError(f"Profile {p} is not valid YAML{where}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a mapping/dict: {p}")
    return data


@dataclass(frozen=True)
class ReleaseProfile:
    raw: Dict[str, Any]

    @property
    def profile_id(self) -> str:
        return str(self.raw.get("id") or "release")

    @property
    def name(self) -> str:
        return str(self.raw.get("name") or self.profile_id)

    @property
    def version(self) -> str:
        v = self.raw.get("version")
        if not v:
            raise ValueError(f"profile {self.profile_id}: version is required")
        return str(v)

    @property
    def mirror(self) -> str:
        v = self.raw.get("mirror")
        if not v:
            raise ValueError(f"profile {self.profile_id}: mirror is required")
        return str(v).rstrip("/")

    @property
    def archive_template(self) -> str:
        return str(self.raw.get("archive") or "{id}-{version}-linux-64bit.zip")

    @property
    def url_template(self) -> str:
        return str(self.raw.get("url") or "{mirror}/{version}/{archive}")

    @property
    def binary(self) -> str:
        return str(self.raw.get("binary") or self.profile_id)

    @property
    def smoke_args(self) -> List[str]:
        return [str(a) for a in (self.raw.get("smoke_args") or ["-h"])]

    @property
    def checksums(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in (self.raw.get("checksums") or {}).items()}

    @property
    def work_dir(self) -> str:
        return str(self.raw.get("work_dir") or f"~/{self.profile_id}")

    @property
    def tools(self) -> Dict[str, str]:
        tools = self.raw.get("tools")
        if tools is None:
            return dict(DEFAULT_TOOLS)
        if not isinstance(tools, dict):
            raise ValueError(f"profile {self.profile_id}: tools must be a mapping of tool -> package")
        return {str(k): str(v) for k, v in tools.items()}

    @property
    def dns_tool(self) -> Dict[str, str]:
        return {"dig": self.tools.get("dig", DEFAULT_TOOLS["dig"])}

    @property
    def firewall_ports(self) -> List[int]:
        return [int(p) for p in (self.raw.get("firewall_ports") or [80, 443])]

    @property
    def admin_url(self) -> Optional[str]:
        v = self.raw.get("admin_url")
        return str(v) if v else None

    @property
    def launch_notes(self) -> List[str]:
        return [str(x) for x in (self.raw.get("launch_notes") or [])]

    @property
    def configure_stdin(self) -> List[str]:
        return [str(x) for x in (self.raw.get("configure_stdin") or [])]

    @property
    def app_config(self) -> Optional[Dict[str, Any]]:
        v = self.raw.get("app_config")
        if not v:
            return None
        if not isinstance(v, dict) or "file" not in v or "content" not in v:
            raise ValueError(f"profile {self.profile_id}: app_config needs 'file' and 'content'")
        return v

    def resolve_artifact(self, cfg: ProvisionConfig) -> ReleaseArtifact:
        """Combine profile defaults with caller overrides into a concrete artifact."""

        version = cfg.version or self.version
        mirror = cfg.mirror or self.mirror
        fields = {"id": self.profile_id, "version": version, "mirror": mirror}
        archive = self.archive_template.format(**fields)
        url = self.url_template.format(archive=archive, **fields)
        return ReleaseArtifact(
            version=version,
            archive_filename=archive,
            download_url=url,
            binary_name=self.binary,
            sha256=cfg.sha256 or self.checksums.get(version),
        )


def available_profiles() -> List[str]:
    return sorted(p.stem for p in PROFILES_DIR.glob("*.yaml"))


def load_profile(profile_id: str) -> ReleaseProfile:
    p = PROFILES_DIR / f"{profile_id}.yaml"
    if not p.exists():
        raise ValueError(f"unknown profile {profile_id!r} (available: {', '.join(available_profiles())})")
    return ReleaseProfile(raw=_load_yaml(p))


def load_profile_file(path: str) -> ReleaseProfile:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)
    return ReleaseProfile(raw=_load_yaml(p))


def profile_for(cfg: ProvisionConfig) -> ReleaseProfile:
    if cfg.profile_file:
        return load_profile_file(cfg.profile_file)
    return load_profile(cfg.profile)
