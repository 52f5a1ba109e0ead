"""Custom exceptions for configuration and request handling."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class DatabaseURLError(ConfigurationError):
    """Error when the configured database cannot be reached."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Cannot open database at {url}: {reason}",
            "Set BUILDABLE_DATABASE_URL or database_url in config.yaml.",
        )


class ShowcaseError(Exception):
    """Request-level failure mapped to an HTTP-style status code."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_envelope(self) -> dict[str, object]:
        """Render as a failed response body."""
        return {"success": False, "error": self.message}


class BadRequestError(ShowcaseError):
    """Invalid input or a request the current state does not allow."""

    status_code = 400


class InvalidPeriodError(BadRequestError):
    """Unknown analytics period name."""

    def __init__(self, period: str, allowed: tuple[str, ...]) -> None:
        super().__init__(f"Invalid period '{period}'. Expected one of: {', '.join(allowed)}")


class ForbiddenError(ShowcaseError):
    """The caller does not own the resource."""

    status_code = 403


class NotFoundError(ShowcaseError):
    """Referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found")
