"""Error Hierarchy: typed exceptions for every Hanoi Scores failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_text() produces the free-text body sent to the client
    - Storage errors render the underlying exception (type and message)
    - PoolInitError is startup-only and never reaches an HTTP response

Design Decisions:
    - Single hierarchy with ScoreServiceError base: one global handler catches all
    - No machine-readable envelope: bodies are diagnostics for a human operator
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ScoreServiceError(Exception):
    """Base exception for all Hanoi Scores errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_text(self) -> str:
        """Render as a plain-text response body."""
        return self.message


def describe_exception(exc: BaseException) -> str:
    """Human-readable rendering of an exception: ``Type: message``."""
    # SQLAlchemy wraps driver errors; the DBAPI error carries the real text
    orig = getattr(exc, "orig", None)
    if orig is not None:
        exc = orig
    text = str(exc).strip()
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


class StorageError(ScoreServiceError):
    """Database checkout, query, or commit failed."""
    def __init__(self, operation: str, cause: BaseException):
        super().__init__(
            f"Database {operation} failed: {describe_exception(cause)}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
        self.cause = cause


class PoolInitError(ScoreServiceError):
    """Connection pool could not be built or verified at startup."""
    def __init__(self, message: str, cause: BaseException | None = None):
        if cause is not None:
            message = f"{message}: {describe_exception(cause)}"
        super().__init__(
            message, "POOL_INIT_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )
        self.cause = cause
