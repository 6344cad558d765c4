"""Vessel Tracker - resilient AIS position lookup by IMO number."""

__version__ = "1.0.0"
