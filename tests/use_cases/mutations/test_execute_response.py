"""
Tests for the ExecuteAgentResponseUseCase.
"""

from unittest.mock import MagicMock

import pytest

from ide_agent.entities.operations import (
    AgentResponse,
    BatchState,
    LineEdit,
    MutationOperation,
)
from ide_agent.exceptions import ResponseValidationError
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine
from ide_agent.use_cases.mutations.execute_response import ExecuteAgentResponseUseCase


class TestExecuteAgentResponseUseCase:
    """Test cases for the ExecuteAgentResponseUseCase."""

    def test_rejected_response_dispatches_nothing(self, mock_logger):
        """A response without a message never reaches the engine."""
        engine = MagicMock(spec=TransactionalEditEngine)
        use_case = ExecuteAgentResponseUseCase(engine, mock_logger)
        response = AgentResponse(
            message=None,
            operations=[MutationOperation(type="create", path="a.txt", content="x")],
        )

        with pytest.raises(ResponseValidationError):
            use_case.execute(response)

        engine.apply_batch.assert_not_called()
        engine.apply.assert_not_called()
        mock_logger.warning.assert_called_once()

    def test_operations_then_edits_as_one_batch(self, mock_logger):
        engine = MagicMock(spec=TransactionalEditEngine)
        use_case = ExecuteAgentResponseUseCase(engine, mock_logger)
        op = MutationOperation(type="create", path="a.txt", content="x")
        edit = LineEdit(type="insert", path="a.txt", start_line=1, content="y")

        use_case.execute(AgentResponse(message="m", operations=[op], edits=[edit]))

        engine.apply_batch.assert_called_once_with([op, edit])

    def test_failed_edit_rolls_back_operations(self, engine, mock_logger, workspace):
        """Operations and edits share one batch, so a failing edit undoes the operations."""
        use_case = ExecuteAgentResponseUseCase(engine, mock_logger)
        response = AgentResponse(
            message="Create and edit",
            operations=[MutationOperation(type="create", path="a.txt", content="one")],
            edits=[LineEdit(type="replace", path="a.txt", start_line=3, content="x")],
        )

        result = use_case.execute(response)

        assert not result.success
        assert result.state is BatchState.ROLLED_BACK
        assert result.message == "Code edit failed: Invalid line numbers for file a.txt"
        assert not workspace.exists("a.txt")

    def test_successful_response(self, engine, mock_logger, read_file):
        use_case = ExecuteAgentResponseUseCase(engine, mock_logger)
        response = AgentResponse(
            message="Create and edit",
            operations=[MutationOperation(type="create", path="a.txt", content="one")],
            edits=[LineEdit(type="insert", path="a.txt", start_line=1, content="zero")],
        )

        result = use_case.execute(response)

        assert result.success
        assert read_file("a.txt") == "zero\none"
