"""
Tests for the ToolCallOrchestrator.
"""

import json
from unittest.mock import MagicMock

import pytest

from ide_agent.entities.conversation import ConversationMessage, EngineReply, ToolInvocation
from ide_agent.exceptions import ReasoningEngineError, ToolArgumentsError, UnknownToolError
from ide_agent.ports.llm.llm_port import ReasoningEnginePort
from ide_agent.use_cases.chat.orchestrator import (
    ChatTurnRequest,
    ProtocolState,
    ToolCallOrchestrator,
    merge_usage,
)
from ide_agent.use_cases.tools.workspace_tools import WorkspaceToolsHandler
from ide_agent.use_cases.workspace.snapshot import WorkspaceSnapshotUseCase


def reply(content=None, tool_calls=None, usage=None):
    return EngineReply(
        message=ConversationMessage(
            role="assistant", content=content, tool_calls=list(tool_calls or [])
        ),
        usage=usage or {},
    )


def call(call_id, name, arguments):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return ToolInvocation(id=call_id, name=name, arguments=arguments)


@pytest.fixture
def llm():
    return MagicMock(spec=ReasoningEnginePort)


@pytest.fixture
def orchestrator(llm, engine, workspace, mock_logger):
    return ToolCallOrchestrator(
        llm,
        WorkspaceToolsHandler(engine, mock_logger),
        WorkspaceSnapshotUseCase(workspace, mock_logger),
        mock_logger,
        temperature=0.7,
        max_tokens=2000,
    )


@pytest.fixture
def request_():
    return ChatTurnRequest(
        messages=[ConversationMessage(role="user", content="Please help")],
        open_files=["test2.py"],
        current_file="test2.py",
    )


class TestPlainReply:
    """Turns where the engine answers without tool calls."""

    def test_plain_reply_is_done(self, orchestrator, llm, request_):
        llm.complete.return_value = reply("Hello!", usage={"total_tokens": 10})

        result = orchestrator.run_turn(request_)

        assert result.success
        assert result.message.content == "Hello!"
        assert result.usage == {"total_tokens": 10}
        assert result.tool_results == []
        assert result.states == [ProtocolState.AWAITING_INITIAL, ProtocolState.DONE]
        assert llm.complete.call_count == 1

    def test_initial_request_carries_context_and_tools(self, orchestrator, llm, request_):
        llm.complete.return_value = reply("ok")

        orchestrator.run_turn(request_)

        messages = llm.complete.call_args.args[0]
        kwargs = llm.complete.call_args.kwargs
        assert messages[0].role == "system"
        assert "test2.py" in messages[0].content
        assert "Currently viewing: test2.py" in messages[0].content
        assert messages[1].content == "Please help"
        assert [t["function"]["name"] for t in kwargs["tools"]] == [
            "file_system_operation",
            "code_edit",
        ]
        assert all(t["function"]["strict"] for t in kwargs["tools"])
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 2000


class TestToolDispatch:
    """Turns where the engine requests tool calls."""

    def test_tool_results_are_sent_back(self, orchestrator, llm, request_, read_file):
        first = reply(
            tool_calls=[
                call("c1", "file_system_operation", {"type": "create", "path": "a.py", "content": "x"})
            ],
            usage={"prompt_tokens": 100, "completion_tokens": 20, "total_tokens": 120},
        )
        final = reply(
            "Created a.py",
            usage={"prompt_tokens": 150, "completion_tokens": 5, "total_tokens": 155},
        )
        llm.complete.side_effect = [first, final]

        result = orchestrator.run_turn(request_)

        assert result.success
        assert result.error is None
        assert result.message.content == "Created a.py"
        assert result.usage == {
            "prompt_tokens": 250,
            "completion_tokens": 25,
            "total_tokens": 275,
        }
        assert result.states == [
            ProtocolState.AWAITING_INITIAL,
            ProtocolState.DISPATCHING_TOOLS,
            ProtocolState.AWAITING_FINAL,
            ProtocolState.DONE,
        ]
        assert read_file("a.py") == "x"

        final_messages = llm.complete.call_args_list[1].args[0]
        assert "tools" not in llm.complete.call_args_list[1].kwargs
        assert final_messages[-2] is first.message
        tool_message = final_messages[-1]
        assert tool_message.role == "tool"
        assert tool_message.tool_call_id == "c1"
        assert json.loads(tool_message.content)["success"] is True

    def test_failed_invocation_does_not_stop_the_next(self, orchestrator, llm, request_, read_file):
        """Each invocation is its own batch; a failure is reported and the next still runs."""
        first = reply(
            tool_calls=[
                call("c1", "file_system_operation", {"type": "edit", "path": "missing.txt", "content": "x"}),
                call(
                    "c2",
                    "code_edit",
                    {"type": "insert", "path": "test2.py", "startLine": 1, "content": "top", "description": "d"},
                ),
            ]
        )
        llm.complete.side_effect = [first, reply("Partly done")]

        result = orchestrator.run_turn(request_)

        assert not result.success
        assert "File operation failed: File missing.txt does not exist" in result.error
        assert [r.result.success for r in result.tool_results] == [False, True]
        assert read_file("test2.py") == "top\nline1\nline2\nline3"

        tool_messages = llm.complete.call_args_list[1].args[0][-2:]
        assert [m.tool_call_id for m in tool_messages] == ["c1", "c2"]
        assert json.loads(tool_messages[0].content)["error"] == "FILE_NOT_FOUND"

    def test_malformed_arguments_abort_before_any_dispatch(
        self, orchestrator, llm, request_, tree_snapshot
    ):
        before = tree_snapshot()
        llm.complete.return_value = reply(
            tool_calls=[
                call("c1", "file_system_operation", {"type": "create", "path": "a.py", "content": "x"}),
                call("c2", "code_edit", "{broken"),
            ]
        )

        with pytest.raises(ToolArgumentsError):
            orchestrator.run_turn(request_)

        assert tree_snapshot() == before
        assert llm.complete.call_count == 1

    def test_unknown_tool_aborts(self, orchestrator, llm, request_, tree_snapshot):
        before = tree_snapshot()
        llm.complete.return_value = reply(tool_calls=[call("c1", "run_shell", {"cmd": "ls"})])

        with pytest.raises(UnknownToolError):
            orchestrator.run_turn(request_)

        assert tree_snapshot() == before

    def test_transport_error_on_initial_request(self, orchestrator, llm, request_):
        llm.complete.side_effect = ReasoningEngineError("Reasoning engine unreachable")

        with pytest.raises(ReasoningEngineError):
            orchestrator.run_turn(request_)

    def test_transport_error_on_final_request(self, orchestrator, llm, request_, workspace):
        """A Phase 3 failure aborts the turn; the dispatched batch stays committed."""
        first = reply(
            tool_calls=[call("c1", "file_system_operation", {"type": "mkdir", "path": "docs"})]
        )
        llm.complete.side_effect = [first, ReasoningEngineError("timed out")]

        with pytest.raises(ReasoningEngineError):
            orchestrator.run_turn(request_)

        assert llm.complete.call_count == 2
        assert workspace.is_dir("docs")


class TestMergeUsage:
    """Test cases for merge_usage."""

    def test_sums_nested_counters(self):
        merged = merge_usage(
            {"total_tokens": 3, "prompt_tokens_details": {"cached_tokens": 1}},
            {"total_tokens": 4, "prompt_tokens_details": {"cached_tokens": 2}},
        )
        assert merged == {"total_tokens": 7, "prompt_tokens_details": {"cached_tokens": 3}}

    def test_missing_usage(self):
        assert merge_usage({}, {"total_tokens": 5}) == {"total_tokens": 5}

    def test_none_values_are_kept_until_a_number_arrives(self):
        assert merge_usage({"cached": None}, {"cached": 2}) == {"cached": 2}
