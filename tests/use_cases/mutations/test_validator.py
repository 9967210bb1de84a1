"""
Tests for agent response validation.
"""

import pytest

from ide_agent.entities.operations import AgentResponse, LineEdit, MutationOperation
from ide_agent.exceptions import ResponseValidationError
from ide_agent.use_cases.mutations.validator import (
    ensure_valid,
    validate_agent_response,
    validate_edit,
    validate_operation,
)


class TestValidateOperation:
    """Test cases for validate_operation."""

    def test_valid_create(self):
        assert validate_operation(MutationOperation(type="create", path="a", content="")) == []

    def test_delete_and_mkdir_need_no_content(self):
        assert validate_operation(MutationOperation(type="delete", path="a")) == []
        assert validate_operation(MutationOperation(type="mkdir", path="a")) == []

    @pytest.mark.parametrize("kind", ["create", "edit"])
    def test_content_required(self, kind):
        problems = validate_operation(MutationOperation(type=kind, path="a"), "op")
        assert problems == [f"op: {kind} requires content"]

    def test_missing_type_and_path(self):
        problems = validate_operation(MutationOperation(type="", path=""), "op")
        assert problems == ["op: missing type", "op: missing path"]


class TestValidateEdit:
    """Test cases for validate_edit."""

    def test_delete_needs_no_content(self):
        assert validate_edit(LineEdit(type="delete", path="a", start_line=1)) == []

    def test_missing_start_line(self):
        problems = validate_edit(
            LineEdit(type="insert", path="a", start_line=None, content="x"), "e"
        )
        assert problems == ["e: missing startLine"]

    @pytest.mark.parametrize("kind", ["insert", "replace"])
    def test_content_required(self, kind):
        problems = validate_edit(LineEdit(type=kind, path="a", start_line=1), "e")
        assert problems == [f"e: {kind} requires content"]

    def test_unknown_type_is_left_to_the_engine(self):
        """Structural validation does not reject unknown variants."""
        assert validate_edit(LineEdit(type="append", path="a", start_line=1, content="x")) == []


class TestValidateAgentResponse:
    """Test cases for whole-response validation."""

    def test_valid_response(self):
        response = AgentResponse(
            message="Adding a module",
            operations=[MutationOperation(type="create", path="a.py", content="x")],
            edits=[LineEdit(type="delete", path="b.py", start_line=2)],
        )
        assert validate_agent_response(response) == []

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_message_required(self, message):
        problems = validate_agent_response(AgentResponse(message=message))
        assert problems == ["message: must be a non-empty string"]

    def test_problems_are_labelled_by_position(self):
        response = AgentResponse(
            message="m",
            operations=[
                MutationOperation(type="create", path="a", content="x"),
                MutationOperation(type="edit", path="b"),
            ],
            edits=[LineEdit(type="replace", path="", start_line=1, content="x")],
        )

        assert validate_agent_response(response) == [
            "operations[1]: edit requires content",
            "edits[0]: missing path",
        ]

    def test_ensure_valid_raises_with_problems(self):
        with pytest.raises(ResponseValidationError) as exc_info:
            ensure_valid(AgentResponse(message=""))

        assert exc_info.value.problems == ["message: must be a non-empty string"]
