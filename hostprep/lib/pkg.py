from __future__ import annotations

import logging
import shutil
from typing import Mapping, Sequence

from ..errors import CommandError, HostEnvironmentError, InstallError
from .command import run_cmd
from .privilege import Privilege

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def require_apt(*, dry_run: bool = False) -> None:
    if shutil.which("apt-get") is None and not dry_run:
        raise HostEnvironmentError("only apt-based systems are supported (apt-get not found)")


def _apt(privilege: Privilege, args: Sequence[str], *, dry_run: bool) -> None:
    argv = privilege.argv(["apt-get", *args], env=APT_ENV)
    try:
        run_cmd(argv, env=APT_ENV, dry_run=dry_run)
    except CommandError as e:
        raise InstallError(f"package manager failed: {e}") from e


def apt_update(privilege: Privilege, *, dry_run: bool = False) -> None:
    _apt(privilege, ["update", "-y"], dry_run=dry_run)


def apt_upgrade(privilege: Privilege, *, dry_run: bool = False) -> None:
    _apt(privilege, ["upgrade", "-y"], dry_run=dry_run)


def apt_install(privilege: Privilege, packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    _apt(privilege, ["install", "-y", *packages], dry_run=dry_run)


def missing_tools(tools: Mapping[str, str]) -> dict[str, str]:
    """Return the subset of ``tool -> package`` whose tool is not on PATH."""
    return {tool: pkg for tool, pkg in tools.items() if shutil.which(tool) is None}


def ensure_tools(
    privilege: Privilege,
    tools: Mapping[str, str],
    *,
    dry_run: bool = False,
) -> list[str]:
    """Install packages for tools that are not resolvable on PATH.

    Tools already present are left alone. Returns the packages installed.
    """

    missing = missing_tools(tools)
    for tool in tools:
        if tool not in missing:
            logger.info("Tool %s already present", tool)

    packages: list[str] = []
    for pkg in missing.values():
        if pkg not in packages:
            packages.append(pkg)
    if not packages:
        return []

    logger.info("Installing packages for missing tools %s: %s", ",".join(missing), ",".join(packages))
    apt_update(privilege, dry_run=dry_run)
    apt_install(privilege, packages, dry_run=dry_run)
    return packages
