"""Exception hierarchy for scaffolding operations."""

from typing import Any, Dict, Optional


class TspError(Exception):
    """Base exception for all tsp errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize tsp error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reporting."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ConfigurationGapError(TspError):
    """Raised when a framework lacks the install strategy the target requires."""

    def __init__(
        self,
        message: str,
        framework: Optional[str] = None,
        strategy: Optional[str] = None,
        project_path: Optional[str] = None
    ):
        """Initialize configuration gap error."""
        details = {}
        if framework:
            details["framework"] = framework
        if strategy:
            details["strategy"] = strategy
        if project_path:
            details["project_path"] = project_path

        super().__init__(message, details)


class UserAbortError(TspError):
    """Raised when the user declines a confirmation prompt."""

    def __init__(self, message: str = "Setup aborted!", project_path: Optional[str] = None):
        """Initialize user abort error."""
        details = {}
        if project_path:
            details["project_path"] = project_path

        super().__init__(message, details)


class ExternalFetchError(TspError):
    """Raised when no usable version metadata could be obtained from the registry."""

    def __init__(self, message: str, package: Optional[str] = None, url: Optional[str] = None):
        """Initialize external fetch error."""
        details = {}
        if package:
            details["package"] = package
        if url:
            details["url"] = url

        super().__init__(message, details)


class SubprocessFailureError(TspError):
    """Raised when an install or setup statement exits non-zero or cannot be started."""

    def __init__(
        self,
        message: str,
        statement: str,
        returncode: Optional[int] = None,
        cwd: Optional[str] = None
    ):
        """Initialize subprocess failure error."""
        details: Dict[str, Any] = {"statement": statement}
        if returncode is not None:
            details["returncode"] = returncode
        if cwd:
            details["cwd"] = cwd

        super().__init__(message, details)
        self.statement = statement
        self.returncode = returncode
