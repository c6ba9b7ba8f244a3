"""
Data models for GPT ad slot registration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AdUnit:
    """One ad slot registered during a request."""

    unit_name: str                      # Ad unit name as set up in Ad Manager
    size: str                           # JS literal, e.g. "[300,250]" or "[[728,90],[970,250]]"
    container_id: str                   # DOM id the slot renders into
    display: bool = True                # Call googletag.display() once services are enabled
    size_mapping: Optional[str] = None  # Name of a SizeMapping defined earlier in the request


@dataclass(frozen=True)
class SizeMapping:
    """
    Responsive size rules for an ad slot.

    Each variation is a JS literal mapping a browser size to the slot sizes
    allowed at that size, e.g. ``[[1024,768],[[970,250],[728,90]]]``.
    Variations are ordered from highest to lowest priority.
    """

    name: str
    variations: tuple[str, ...] = ()
