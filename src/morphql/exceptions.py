"""Exceptions raised by the MorphQL client.

Every error carries a human-readable ``message`` plus the structured fields
callers need to branch on (exit code, HTTP status, offending path).
"""

from pathlib import Path


class MorphQLError(Exception):
    """Base exception for MorphQL client errors"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(MorphQLError, ValueError):
    """Raised when call arguments are missing or unusable"""


class ProcessStartError(MorphQLError):
    """Raised when the engine process cannot be spawned"""

    def __init__(self, message: str, command: list[str] | None = None) -> None:
        super().__init__(message)
        self.command = command


class ExecutionError(MorphQLError):
    """Raised when the engine process exits with a non-zero code"""

    def __init__(self, message: str, exit_code: int | None, detail: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.detail = detail


class ProcessTimeoutError(ExecutionError):
    """Raised when the engine process outlives the configured timeout"""

    def __init__(self, message: str, timeout: float, detail: str = "") -> None:
        super().__init__(message, exit_code=None, detail=detail)
        self.timeout = timeout


class ResourceMissingError(MorphQLError):
    """Raised when a bundled artifact required by the runtime is absent"""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NetworkError(MorphQLError):
    """Raised when the server is unreachable or the request times out"""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ServerError(MorphQLError):
    """Raised on HTTP errors or an unsuccessful response envelope"""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
