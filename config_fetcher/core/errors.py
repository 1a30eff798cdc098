"""Custom exceptions for the config fetcher."""

from typing import Any, Optional


class ConfigFetcherError(Exception):
    """Base exception for config fetcher errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class UpstreamUnavailableError(ConfigFetcherError):
    """Raised when an upstream (recommendation or config source) cannot be reached."""

    def __init__(
        self,
        source: str,
        url: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message or f"{source} unavailable: {url}",
            details={"source": source, "url": url, **(details or {})},
        )
        self.source = source
        self.url = url


class UpstreamTimeoutError(UpstreamUnavailableError):
    """Raised when an upstream call exceeds its deadline."""

    def __init__(self, source: str, url: str, timeout_seconds: float) -> None:
        super().__init__(
            source,
            url,
            message=f"{source} did not answer within {timeout_seconds:g}s",
            details={"timeout_seconds": timeout_seconds},
        )


class UpstreamStatusError(UpstreamUnavailableError):
    """Raised when an upstream answers with a non-2xx status."""

    def __init__(self, source: str, url: str, status_code: int) -> None:
        super().__init__(
            source,
            url,
            message=f"{source} returned HTTP {status_code}",
            details={"status": status_code},
        )
        self.status_code = status_code


class MalformedRecommendationError(ConfigFetcherError):
    """Raised when the recommendation payload cannot be decoded into hostname records."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details=details)


class NoAvailableHostError(ConfigFetcherError):
    """Raised when every recommended hostname is already held by another node."""

    def __init__(self, node_id: str, candidates: int) -> None:
        super().__init__(
            "failed to find available vpn hostname",
            details={"node_id": node_id, "candidates": candidates},
        )
        self.node_id = node_id


class ListenFailureError(ConfigFetcherError):
    """Raised when the listening socket cannot be bound. Fatal at startup."""

    def __init__(self, address: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"failed to listen on {address}",
            details={"address": address},
        )
        self.address = address
