"""Scaffold operation model and related enums."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class OperationType(str, Enum):
    """Types of scaffold operations."""

    FRAMEWORK = "framework"
    PLAIN = "plain"
    MENU = "menu"


class OperationStatus(str, Enum):
    """Status of a scaffold operation."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OperationStatus.PENDING: [
        OperationStatus.IN_PROGRESS,
        OperationStatus.CANCELLED,
    ],
    OperationStatus.IN_PROGRESS: [
        OperationStatus.COMPLETED,
        OperationStatus.SKIPPED,
        OperationStatus.CANCELLED,
        OperationStatus.FAILED,
    ],
    OperationStatus.COMPLETED: [],  # Terminal state
    OperationStatus.SKIPPED: [],  # Terminal state
    OperationStatus.CANCELLED: [],  # Terminal state
    OperationStatus.FAILED: [],  # Terminal state
}


class ScaffoldOperation(BaseModel):
    """Outcome of one trip through the scaffolding flow."""

    operation_type: OperationType = Field(
        description="Type of operation being performed"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When operation started (UTC)"
    )
    status: OperationStatus = Field(
        default=OperationStatus.PENDING,
        description="Current status of the operation"
    )
    error_kind: Optional[str] = Field(
        default=None,
        description="Exception class that failed or cancelled the operation"
    )
    error_message: Optional[str] = Field(
        default=None,
        description="Error details if operation failed or was cancelled"
    )
    message: Optional[str] = Field(
        default=None,
        description="Human readable summary of the outcome"
    )
    user_selections: Dict[str, Any] = Field(
        default_factory=dict,
        description="Choices made during operation"
    )

    def transition_to(
        self,
        new_status: OperationStatus,
        error: Optional[BaseException] = None,
        message: Optional[str] = None
    ) -> None:
        """Transition to a new status with validation."""
        if new_status not in _VALID_TRANSITIONS.get(self.status, []):
            raise ValueError(
                f"Invalid transition from {self.status.value} to {new_status.value}"
            )

        self.status = new_status

        if error is not None:
            self.error_kind = type(error).__name__
            self.error_message = getattr(error, "message", None) or str(error)
        if message is not None:
            self.message = message

    def is_terminal(self) -> bool:
        """Check if operation is in a terminal state."""
        return not _VALID_TRANSITIONS[self.status]

    def returns_to_menu(self) -> bool:
        """Skipped and cancelled setups hand control back to the main menu."""
        return self.status in (OperationStatus.SKIPPED, OperationStatus.CANCELLED)

    def add_selection(self, key: str, value: Any) -> None:
        """Add a user selection to the operation."""
        self.user_selections[key] = value
