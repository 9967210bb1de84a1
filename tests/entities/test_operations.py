"""
Tests for the mutation entities.
"""

from ide_agent.entities.conversation import ConversationMessage, ToolInvocation
from ide_agent.entities.operations import (
    AgentResponse,
    BatchResult,
    BatchState,
    ErrorKind,
    LineEdit,
    MutationOperation,
    OperationMetadata,
    OperationResult,
    OperationType,
)


class TestOperationEntities:
    """Test cases for operation serialisation."""

    def test_operation_to_dict(self):
        op = MutationOperation(
            type=OperationType.CREATE,
            path="a.py",
            content="x",
            metadata=OperationMetadata(file_type="python", overwrite=True),
        )

        assert op.to_dict() == {
            "type": "create",
            "path": "a.py",
            "content": "x",
            "metadata": {"overwrite": True, "fileType": "python"},
        }

    def test_line_edit_to_dict(self):
        edit = LineEdit(type="delete", path="a.py", start_line=2, end_line=3)

        assert edit.to_dict() == {
            "type": "delete",
            "path": "a.py",
            "startLine": 2,
            "endLine": 3,
            "description": "",
        }

    def test_batch_result_to_dict(self):
        failed = OperationResult.failure(ErrorKind.FILE_NOT_FOUND, "File b does not exist", "b")
        result = BatchResult(
            success=False,
            state=BatchState.ROLLED_BACK,
            message="File operation failed: File b does not exist",
            results=[OperationResult.ok("Created file a", "a"), failed],
            failed_index=1,
        )

        data = result.to_dict()

        assert result.error is ErrorKind.FILE_NOT_FOUND
        assert data["state"] == "rolled_back"
        assert data["error"] == "FILE_NOT_FOUND"
        assert data["failedIndex"] == 1
        assert len(data["operations"]) == 2
        assert "rollbackErrors" not in data

    def test_agent_response_batch_order(self):
        op = MutationOperation(type="mkdir", path="a")
        edit = LineEdit(type="delete", path="b", start_line=1)

        assert AgentResponse(message="m", operations=[op], edits=[edit]).batch() == [op, edit]


class TestConversationEntities:
    """Test cases for conversation messages."""

    def test_tool_invocation_from_wire_shape(self):
        invocation = ToolInvocation.from_dict(
            {"id": "c1", "type": "function", "function": {"name": "code_edit", "arguments": "{}"}}
        )

        assert (invocation.id, invocation.name, invocation.arguments) == ("c1", "code_edit", "{}")

    def test_tool_invocation_from_flat_dict_arguments(self):
        invocation = ToolInvocation.from_dict(
            {"id": "c1", "name": "code_edit", "arguments": {"path": "a"}}
        )

        assert invocation.arguments == '{"path": "a"}'

    def test_message_round_trip(self):
        message = ConversationMessage(
            role="assistant",
            content=None,
            tool_calls=[ToolInvocation(id="c1", name="code_edit", arguments="{}")],
        )

        assert ConversationMessage.from_dict(message.to_dict()) == message

    def test_tool_result_message(self):
        message = ConversationMessage.tool_result("c1", "{}")

        assert message.to_dict() == {"role": "tool", "content": "{}", "tool_call_id": "c1"}
