"""Catenary, tether, timing and mission-path tools for a tethered ground and aerial vehicle pair."""

__version__ = "0.1.0"