"""Error definitions and handling for setwise."""

from typing import Any, Dict, Optional


class SetwiseError(Exception):
    """Base exception for setwise errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigInvalidError(SetwiseError):
    """Comparison configuration is invalid."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Invalid configuration for {field}: {reason}",
            details={"field": field, "reason": reason},
        )


class SourceNotFoundError(SetwiseError):
    """Input source path does not exist."""

    def __init__(self, source: str):
        super().__init__(
            code="SOURCE_NOT_FOUND",
            message=f"File does not exist: {source}",
            details={"source": source},
        )


class SourceReadError(SetwiseError):
    """Input source could not be opened or read."""

    def __init__(self, source: str, reason: str, code: str = "SOURCE_READ_FAILED"):
        super().__init__(
            code=code,
            message=f"Failed to read {source}: {reason}",
            details={"source": source, "reason": reason},
        )


class LineTooLongError(SourceReadError):
    """A line exceeds the reader buffer size."""

    def __init__(self, source: str, line_number: int, limit: int):
        super().__init__(
            source,
            f"line {line_number} exceeds {limit} bytes",
            code="LINE_TOO_LONG",
        )
        self.details.update({"line_number": line_number, "limit": limit})


class SinkOpenError(SetwiseError):
    """Output file could not be created."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code="SINK_OPEN_FAILED",
            message=f"Failed to create output file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class SinkWriteError(SetwiseError):
    """Writing to the output failed after it was opened."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code="SINK_WRITE_FAILED",
            message=f"Failed to write output to {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InvalidOperationError(SetwiseError):
    """Set operation name is not recognized."""

    def __init__(self, operation: str):
        super().__init__(
            code="INVALID_OPERATION",
            message=f"Invalid operation: {operation}",
            details={"operation": operation},
        )
