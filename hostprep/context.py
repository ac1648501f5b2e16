from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable, Optional

from .config import ProvisionConfig
from .lib.privilege import Privilege
from .models import ProvisioningTarget, ReleaseArtifact
from .profiles import ReleaseProfile


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisionConfig
    profile: ReleaseProfile
    target: ProvisioningTarget
    artifact: ReleaseArtifact
    privilege: Privilege
    out: Optional[IO[str]] = None
    input_fn: Callable[[str], str] = field(default=input)

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run

    @property
    def work_dir(self) -> Path:
        return Path(self.cfg.work_dir or self.profile.work_dir).expanduser()

    @property
    def archive_path(self) -> Path:
        return self.artifact.archive_path(self.work_dir)

    @property
    def binary_path(self) -> Path:
        return self.artifact.binary_path(self.work_dir)

    def template_fields(self, **extra: str) -> dict[str, str]:
        return {"domain": self.target.domain, "ip": self.target.public_ip, **extra}
