from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import UsageError


def parse_ipv4(value: str) -> str:
    try:
        return str(ipaddress.IPv4Address(value.strip()))
    except ValueError as e:
        raise UsageError(f"not a valid IPv4 address: {value!r}") from e


@dataclass(frozen=True)
class ProvisioningTarget:
    domain: str
    public_ip: str

    def __post_init__(self) -> None:
        domain = self.domain.strip().rstrip(".").lower()
        if not domain:
            raise UsageError("domain must not be empty")
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "public_ip", parse_ipv4(self.public_ip))


@dataclass(frozen=True)
class ReleaseArtifact:
    version: str
    archive_filename: str
    download_url: str
    binary_name: str
    sha256: Optional[str] = None

    def archive_path(self, work_dir: Path) -> Path:
        return work_dir / self.archive_filename

    def binary_path(self, work_dir: Path) -> Path:
        return work_dir / self.binary_name


@dataclass(frozen=True)
class DnsCheckResult:
    expected_ip: str
    resolved_ip: Optional[str]

    @property
    def matches(self) -> bool:
        return self.resolved_ip is not None and self.resolved_ip == self.expected_ip

    @property
    def status(self) -> str:
        if self.resolved_ip is None:
            return "absent"
        return "match" if self.matches else "mismatch"


@dataclass(frozen=True)
class CertificatePaths:
    cert_path: str
    key_path: str
