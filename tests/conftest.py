from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

import pytest

DEMO_PROFILE = """\
id: demo
name: Demo
version: v1.0.0
mirror: https://releases.invalid/demo
binary: demo
smoke_args: ["-h"]
tools:
  unzip: unzip
  wget: wget
  dig: dnsutils
firewall_ports: [80, 443]
admin_url: "https://{domain}/admin"
configure_stdin:
  - "set domain {domain}"
  - "set ipv4 {ip}"
"""


@dataclass
class Call:
    argv: List[str]
    input: Optional[str]
    cwd: Optional[str]


@dataclass
class Rule:
    match: Callable[[List[str]], bool]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


@dataclass
class FakeRunner:
    """Stands in for subprocess.run and records every command."""

    rules: List[Rule] = field(default_factory=list)
    calls: List[Call] = field(default_factory=list)

    def on(self, match: Callable[[List[str]], bool], *, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.rules.insert(0, Rule(match=match, returncode=returncode, stdout=stdout, stderr=stderr))

    def on_tool(self, tool: str, **kwargs) -> None:
        self.on(lambda argv: Path(argv[0]).name == tool, **kwargs)

    def commands(self, tool: str) -> List[Call]:
        return [c for c in self.calls if Path(c.argv[0]).name == tool]

    def __call__(self, argv, input=None, text=None, stdout=None, stderr=None, cwd=None, env=None):
        argv = list(argv)
        self.calls.append(Call(argv=argv, input=input, cwd=cwd))
        for rule in self.rules:
            if rule.match(argv):
                return subprocess.CompletedProcess(argv, rule.returncode, rule.stdout, rule.stderr)
        return subprocess.CompletedProcess(argv, 0, "", "")


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    fake = FakeRunner()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def which(monkeypatch):
    """Every tool resolves on PATH unless listed in the returned set."""
    missing: set[str] = set()

    def fake_which(name, *args, **kwargs):
        return None if name in missing else f"/usr/bin/{name}"

    monkeypatch.setattr(shutil, "which", fake_which)
    return missing


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr("hostprep.lib.privilege.os.geteuid", lambda: 0)


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if type(h) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(h)
            h.close()
    for attr in ("_hostprep_configured", "_hostprep_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
    root.setLevel(level)


@pytest.fixture
def demo_profile(tmp_path) -> Path:
    p = tmp_path / "demo.yaml"
    p.write_text(DEMO_PROFILE, encoding="utf-8")
    return p


@pytest.fixture
def work_dir(tmp_path) -> Path:
    return tmp_path / "work"


@pytest.fixture
def cached_release(work_dir) -> Path:
    """Archive already downloaded and binary already unpacked."""
    work_dir.mkdir(parents=True)
    (work_dir / "demo-v1.0.0-linux-64bit.zip").write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    binary = work_dir / "demo"
    binary.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    binary.chmod(0o644)
    return work_dir


@pytest.fixture
def cli_args(demo_profile, work_dir, tmp_path) -> List[str]:
    return [
        "--profile-file",
        str(demo_profile),
        "--work-dir",
        str(work_dir),
        "--log",
        str(tmp_path / "logs" / "hostprep.log"),
    ]
