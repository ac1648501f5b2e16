from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from ..errors import HostEnvironmentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Privilege:
    """Whether privileged commands need an escalation wrapper.

    Resolved once at startup and handed to every privileged call.
    """

    is_root: bool
    escalation: Tuple[str, ...] = ("sudo",)

    def argv(self, argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> list[str]:
        """Wrap ``argv`` for privileged execution.

        sudo resets the environment, so ``env`` is carried through ``env(1)``
        on the command line instead of the subprocess environment.
        """
        if self.is_root:
            return list(argv)
        if env:
            return [*self.escalation, "env", *(f"{k}={v}" for k, v in env.items()), *argv]
        return [*self.escalation, *argv]


def detect_privilege(*, dry_run: bool = False) -> Privilege:
    if os.geteuid() == 0:
        return Privilege(is_root=True)

    logger.info("Non-root user detected; privileged commands will use sudo")
    if shutil.which("sudo") is None and not dry_run:
        raise HostEnvironmentError("not running as root and sudo is not available")
    return Privilege(is_root=False)
