# calgrid/util/console.py
from __future__ import annotations

import sys
from typing import Any


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def die(tool: str, msg: str, rc: int = 2) -> int:
    """Report a tool failure on stderr and hand back the exit code."""
    eprint(f"[{tool}] ERROR: {msg}")
    return rc
