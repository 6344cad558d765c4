"""Test data layer

Rules:
- no logic (plain dict/str/primitive)
- no engine or network dependency
"""

from .vessel_payloads import VESSEL_PAYLOADS
from .challenge_pages import CHALLENGE_PAGES

__all__ = [
    "VESSEL_PAYLOADS",
    "CHALLENGE_PAGES",
]
