"""hostprep: release provisioning for fresh apt-based hosts.

Core design goals:
- Ordered, fail-fast stages
- Idempotent steps (cached downloads, skip installed tools)
- Verification gates before reporting success
- Explicit context, no ambient globals
- Centralized logging
"""

__all__ = []
