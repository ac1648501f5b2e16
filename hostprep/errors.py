from __future__ import annotations


class ProvisionError(RuntimeError):
    """Base class for fatal provisioning failures."""


class UsageError(ProvisionError):
    pass


class HostEnvironmentError(ProvisionError):
    """The host cannot run the workflow (no apt-get, no privilege path)."""


class InstallError(ProvisionError):
    pass


class DownloadError(ProvisionError):
    pass


class VerificationError(ProvisionError):
    pass


class CommandError(ProvisionError):
    """An external command exited non-zero."""

    def __init__(self, message: str, *, returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
