"""Custom exceptions (structured exception hierarchy)"""
from typing import Any, Optional, Sequence


class VesselTrackerException(Exception):
    """Base class for every application exception"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# Validation
class ValidationException(VesselTrackerException):
    """Input validation failure"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        self.field = field
        self.reason = reason
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidImoException(ValidationException):
    """Identifier is missing or is not exactly 7 ASCII digits"""
    def __init__(self, value: Optional[str], reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("imo", reason, details or {"field": "imo", "reason": reason, "provided": value})
        self.value = value
        self.error_code = "INVALID_IMO"
        # the reason alone is the user-facing message
        self.message = reason


# Remote fetch
class FetchException(VesselTrackerException):
    """Base class for remote provider failures"""
    def __init__(self, message: str, error_code: str = "FETCH_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "FETCH_ERROR", details)


class VesselNotFoundException(FetchException):
    """Provider answered 404 for the identifier (authoritative)"""
    def __init__(self, imo: str, details: Optional[dict[str, Any]] = None):
        message = f"Vessel not found for IMO: {imo}"
        self.imo = imo
        super().__init__(message, "VESSEL_NOT_FOUND", details or {"imo": imo})


class AllProfilesExhaustedException(FetchException):
    """Every request profile was rejected or failed"""
    def __init__(self, imo: str, attempts: Sequence[Any], details: Optional[dict[str, Any]] = None):
        self.imo = imo
        self.attempts = list(attempts)
        message = f"All {len(self.attempts)} request profiles failed for IMO: {imo}"
        super().__init__(message, "ALL_PROFILES_EXHAUSTED", details or {
            "imo": imo,
            "tried_profiles": len(self.attempts),
            "last_error": self.last_error,
        })

    @property
    def last_error(self) -> Optional[str]:
        """Detail of the final attempt, if any"""
        if not self.attempts:
            return None
        return getattr(self.attempts[-1], "detail", None) or str(self.attempts[-1])


class NetworkException(FetchException):
    """Transport-level failure (no HTTP response received)"""
    def __init__(self, message: str, error_code: str = "NETWORK_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "NETWORK_ERROR", details)


class NetworkTimeoutException(NetworkException):
    """Request exceeded its timeout"""
    def __init__(self, url: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        message = f"Request to '{url}' timed out after {timeout_s:.1f}s"
        super().__init__(message, "NETWORK_TIMEOUT",
                        details or {"url": url, "timeout_s": timeout_s})


class ConnectionFailedException(NetworkException):
    """Connection refused, DNS failure, TLS error..."""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Connection to '{url}' failed: {reason}"
        super().__init__(message, "CONNECTION_FAILED",
                        details or {"url": url, "reason": reason})
