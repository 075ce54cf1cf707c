"""calgrid Python package.

Calendar event layout engine: overlap clustering, column packing, and
day/week/month geometry.

Public API:
  - import from `calgrid.api` (preferred) or `import calgrid` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

__version__ = "0.1.0"
