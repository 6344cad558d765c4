"""Outcome classification for a single profile attempt

This module holds the policy that separates "this identifier has no data"
(404, stop) from "this fingerprint was rejected" (try the next profile). It is
pure: no network, no logging.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from selectolax.lexbor import LexborHTMLParser

from vessel_tracker.core.exceptions import NetworkException
from vessel_tracker.crawlers.http_client import HttpResponse


class AttemptOutcome(str, Enum):
    """Classified result of one HTTP attempt"""

    SUCCESS = "success"
    CHALLENGE = "challenge"  # bot-challenge page or JSON error body
    DEFINITIVE_NOT_FOUND = "definitive_not_found"  # 404, authoritative
    RATE_LIMITED_OR_FORBIDDEN = "rate_limited_or_forbidden"  # 403/429/503
    CONNECTION_FAILURE = "connection_failure"  # timeout, refused, DNS...
    UNEXPECTED_SHAPE = "unexpected_shape"


RATE_LIMIT_STATUSES = frozenset({403, 429, 503})

_CHALLENGE_MARKERS = (
    # only phrases that clearly identify an anti-bot interstitial
    "challenge-platform",
    "cf-browser-verification",
    "_cf_chl_opt",
    "just a moment",
    "checking your browser",
    "verify you are human",
    "attention required",
    "captcha",
    "access denied",
    "forbidden",
)


@dataclass(frozen=True)
class AttemptResult:
    """One classified attempt

    Attributes:
        profile_name: profile used for the attempt
        outcome: classification
        status_code: HTTP status, None on transport failure
        payload: parsed JSON object on SUCCESS
        detail: human-readable reason
    """

    profile_name: str
    outcome: AttemptOutcome
    status_code: Optional[int] = None
    payload: Optional[dict[str, Any]] = None
    detail: str = ""

    @property
    def is_success(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS


def get_challenge_marker(body: str) -> Optional[str]:
    """First challenge marker found in body, case-insensitive"""
    if not body:
        return None
    lowered = body.lower()
    for marker in _CHALLENGE_MARKERS:
        if marker in lowered:
            return marker
    return None


def is_challenge_body(body: str) -> bool:
    return get_challenge_marker(body) is not None


def extract_page_title(body: str) -> Optional[str]:
    """<title> text of an HTML body, None when absent"""
    if not body or "<" not in body:
        return None
    try:
        node = LexborHTMLParser(body).css_first("title")
    except Exception:
        return None
    if node is None:
        return None
    title = " ".join(node.text(strip=True).split())
    return title or None


def _parse_json(body: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(body)
    except (TypeError, ValueError):
        return False, None


def _describe_html(prefix: str, body: str) -> str:
    marker = get_challenge_marker(body)
    title = extract_page_title(body)
    parts = [prefix]
    if marker:
        parts.append(f"marker='{marker}'")
    if title:
        parts.append(f"title='{title[:80]}'")
    return " ".join(parts)


def classify_response(profile_name: str, response: HttpResponse) -> AttemptResult:
    """Classify a completed HTTP exchange

    | raw outcome                                   | outcome                   |
    |-----------------------------------------------|---------------------------|
    | 2xx, JSON object, no error field              | SUCCESS                   |
    | 2xx, HTML/text body with challenge markers    | CHALLENGE                 |
    | 2xx, JSON object with an error field          | CHALLENGE                 |
    | 404                                           | DEFINITIVE_NOT_FOUND      |
    | 403 / 429 / 503                               | RATE_LIMITED_OR_FORBIDDEN |
    | anything else                                 | UNEXPECTED_SHAPE          |
    """
    status = response.status_code
    body = response.text or ""

    if status == 404:
        return AttemptResult(profile_name, AttemptOutcome.DEFINITIVE_NOT_FOUND, status,
                             detail="HTTP 404 from provider")

    if status in RATE_LIMIT_STATUSES:
        return AttemptResult(profile_name, AttemptOutcome.RATE_LIMITED_OR_FORBIDDEN, status,
                             detail=_describe_html(f"HTTP {status}", body))

    if not 200 <= status < 300:
        return AttemptResult(profile_name, AttemptOutcome.UNEXPECTED_SHAPE, status,
                             detail=f"Unexpected HTTP status {status}")

    is_json, data = _parse_json(body)

    if is_json and isinstance(data, dict):
        error = data.get("error")
        if error:
            return AttemptResult(profile_name, AttemptOutcome.CHALLENGE, status,
                                 detail=f"Provider error field: {str(error)[:120]}")
        return AttemptResult(profile_name, AttemptOutcome.SUCCESS, status, payload=data,
                             detail="OK")

    if is_json:
        return AttemptResult(profile_name, AttemptOutcome.UNEXPECTED_SHAPE, status,
                             detail=f"JSON body is {type(data).__name__}, expected object")

    if is_challenge_body(body):
        return AttemptResult(profile_name, AttemptOutcome.CHALLENGE, status,
                             detail=_describe_html("Bot challenge page", body))

    return AttemptResult(profile_name, AttemptOutcome.UNEXPECTED_SHAPE, status,
                         detail=f"Non-JSON body (len={len(body)})")


def classify_transport_error(profile_name: str, error: NetworkException) -> AttemptResult:
    """Timeout / refused / DNS failure -> CONNECTION_FAILURE"""
    return AttemptResult(profile_name, AttemptOutcome.CONNECTION_FAILURE, None,
                         detail=error.message)
