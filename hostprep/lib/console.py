"""Operator-facing output, kept apart from the log file."""

from __future__ import annotations

import sys
from typing import IO, Optional

RULE = "-" * 60


def _out(stream: Optional[IO[str]]) -> IO[str]:
    return stream if stream is not None else sys.stdout


def section(title: str, stream: Optional[IO[str]] = None) -> None:
    out = _out(stream)
    out.write(f"\n{RULE}\n{title}\n{RULE}\n\n")


def info(msg: str, stream: Optional[IO[str]] = None) -> None:
    _out(stream).write(f"[*] {msg}\n")


def ok(msg: str, stream: Optional[IO[str]] = None) -> None:
    _out(stream).write(f"[+] {msg}\n")


def warn(msg: str, stream: Optional[IO[str]] = None) -> None:
    _out(stream).write(f"[!] {msg}\n")


def error(msg: str, stream: Optional[IO[str]] = None) -> None:
    (stream if stream is not None else sys.stderr).write(f"[x] {msg}\n")


def text(block: str, stream: Optional[IO[str]] = None) -> None:
    out = _out(stream)
    out.write(block)
    if not block.endswith("\n"):
        out.write("\n")
