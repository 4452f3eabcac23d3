"""Unit tests for the ScaffoldOperation model."""

import pytest

from tsp.lib.exceptions import UserAbortError
from tsp.logic.scaffold.models.operation import OperationStatus, OperationType, ScaffoldOperation


class TestScaffoldOperation:
    """Test status transitions and bookkeeping."""

    def test_defaults(self):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        assert operation.status == OperationStatus.PENDING
        assert operation.timestamp.tzinfo is not None
        assert not operation.is_terminal()

    def test_valid_flow(self):
        operation = ScaffoldOperation(operation_type=OperationType.PLAIN)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.transition_to(OperationStatus.COMPLETED, message="done")

        assert operation.is_terminal()
        assert operation.message == "done"
        assert not operation.returns_to_menu()

    def test_invalid_transition(self):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        with pytest.raises(ValueError, match="Invalid transition from pending to completed"):
            operation.transition_to(OperationStatus.COMPLETED)

    def test_terminal_states_are_final(self):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.transition_to(OperationStatus.FAILED)
        with pytest.raises(ValueError):
            operation.transition_to(OperationStatus.IN_PROGRESS)

    def test_error_recorded(self):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.transition_to(OperationStatus.CANCELLED, error=UserAbortError("Overwrite declined"))

        assert operation.error_kind == "UserAbortError"
        assert operation.error_message == "Overwrite declined"
        assert operation.returns_to_menu()

    @pytest.mark.parametrize("status,returns", [
        (OperationStatus.SKIPPED, True),
        (OperationStatus.CANCELLED, True),
        (OperationStatus.COMPLETED, False),
        (OperationStatus.FAILED, False),
    ])
    def test_returns_to_menu(self, status, returns):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        operation.transition_to(OperationStatus.IN_PROGRESS)
        operation.transition_to(status)
        assert operation.returns_to_menu() is returns

    def test_selections(self):
        operation = ScaffoldOperation(operation_type=OperationType.FRAMEWORK)
        operation.add_selection("framework", "nextjs")
        assert operation.user_selections == {"framework": "nextjs"}
