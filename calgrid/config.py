# calgrid/config.py
"""Layout profiles, palette, and environment defaults."""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Dict, Optional

from .model import CATEGORY_EVENT, CATEGORY_MEETING, CATEGORY_TASK, LayoutProfile, RowHeightTable, WorkingHours

# =============================================================================
# WORKING HOURS
# =============================================================================

DEFAULT_WORKING_HOURS = WorkingHours(start_hour=8, end_hour=20)

# =============================================================================
# PROFILES (one per calendar surface)
# =============================================================================

# Editable schedule: taller rows.
SKED_PROFILE = LayoutProfile(
    name="sked",
    working_hours=DEFAULT_WORKING_HOURS,
    row_heights=RowHeightTable(day=128, week=48, month=40),
    min_height=20,
)

# Read-only agenda: compact rows.
AGENDA_PROFILE = LayoutProfile(
    name="agenda",
    working_hours=DEFAULT_WORKING_HOURS,
    row_heights=RowHeightTable(day=100, week=40, month=35),
    min_height=15,
)

PROFILES: Dict[str, LayoutProfile] = {
    SKED_PROFILE.name: SKED_PROFILE,
    AGENDA_PROFILE.name: AGENDA_PROFILE,
}

# =============================================================================
# PALETTE
# =============================================================================

EVENT_COLORS: Dict[str, str] = {
    CATEGORY_MEETING: "#ef4444",
    CATEGORY_EVENT: "#3b82f6",
    CATEGORY_TASK: "#8b5cf6",
}
CURRENT_TIME_COLOR = "#dc2626"
FALLBACK_COLOR = "#6b7280"

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENV_TZ = "CALGRID_TZ"
ENV_PROFILE = "CALGRID_PROFILE"
ENV_WORKHOURS = "CALGRID_WORKHOURS"


def event_color(category: str) -> str:
    return EVENT_COLORS.get(category, FALLBACK_COLOR)


def get_profile(name: Optional[str] = None, *, workhours: Optional[str] = None) -> LayoutProfile:
    """Look up a profile by name, optionally overriding its working hours.

    Raises ValueError for unknown names or malformed working hours.
    """
    key = (name or SKED_PROFILE.name).strip().lower()
    if key not in PROFILES:
        raise ValueError(f"unknown profile: {name!r} (known: {', '.join(sorted(PROFILES))})")
    profile = PROFILES[key]
    if workhours:
        profile = replace(profile, working_hours=WorkingHours.parse(workhours))
    return profile


def env_default(var: str, fallback: str) -> str:
    v = os.getenv(var)
    return v if v and v.strip() else fallback


__all__ = [
    "AGENDA_PROFILE",
    "CURRENT_TIME_COLOR",
    "DEFAULT_WORKING_HOURS",
    "ENV_PROFILE",
    "ENV_TZ",
    "ENV_WORKHOURS",
    "EVENT_COLORS",
    "PROFILES",
    "SKED_PROFILE",
    "env_default",
    "event_color",
    "get_profile",
]
