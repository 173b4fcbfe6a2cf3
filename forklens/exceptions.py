"""ForkLens exception classes."""

from datetime import datetime


class ForkLensError(Exception):
    """Base exception for all ForkLens errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(ForkLensError):
    """Raised when client configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class InvalidUrlError(ForkLensError):
    """Raised when a repository URL is malformed or does not point at GitHub."""

    def __init__(self, url: str, message: str = "Invalid GitHub repository URL format.") -> None:
        super().__init__("INVALID_URL", message)
        self.url = url


class AuthenticationError(ForkLensError):
    """Raised when GitHub rejects the access token (HTTP 401)."""

    def __init__(
        self,
        message: str = "GitHub API authentication failed. Please check your access token.",
    ) -> None:
        super().__init__("AUTHENTICATION_FAILED", message)


class RateLimitError(ForkLensError):
    """Raised when GitHub refuses a request because of rate limiting (HTTP 403)."""

    def __init__(self, reset_at: datetime | None) -> None:
        self.reset_at = reset_at
        self.reset_time = reset_at.strftime("%X") if reset_at else "unknown"
        super().__init__(
            "RATE_LIMITED",
            f"GitHub API rate limit exceeded. Please try again after {self.reset_time}. "
            "Or provide an access token.",
        )


class UpstreamError(ForkLensError):
    """Raised for any other unsuccessful GitHub response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "UPSTREAM_ERROR",
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code


class NotFoundError(UpstreamError):
    """Raised when a non-listing resource does not exist (HTTP 404)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404, code="NOT_FOUND")


class StatsUnavailableError(ForkLensError):
    """Raised when GitHub keeps answering 202 after every allowed retry."""

    def __init__(self, endpoint: str, attempts: int) -> None:
        super().__init__(
            "STATS_UNAVAILABLE",
            f"GitHub is still computing {endpoint} after {attempts} attempts",
        )
        self.endpoint = endpoint
        self.attempts = attempts


class DeadlineExceededError(ForkLensError):
    """Raised when an aggregation request runs past the client deadline."""

    def __init__(self, deadline: float) -> None:
        super().__init__(
            "DEADLINE_EXCEEDED",
            f"Repository analysis did not finish within {deadline:g} seconds",
        )
        self.deadline = deadline
