"""
Tests for the DependencyContainer wiring.
"""

from unittest.mock import patch

from ide_agent.use_cases.chat.orchestrator import ToolCallOrchestrator
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine


class TestDependencyContainer:
    """Test cases for the DependencyContainer."""

    def test_workspace_bound_to_root(self, dependency_container, temp_directory):
        assert dependency_container.get_workspace().root == temp_directory

    def test_instances_are_shared(self, dependency_container):
        engine = dependency_container.get_edit_engine()

        assert isinstance(engine, TransactionalEditEngine)
        assert dependency_container.get_edit_engine() is engine
        assert dependency_container.get_primitives().workspace is dependency_container.get_workspace()

    def test_orchestrator_uses_reasoning_engine(self, dependency_container):
        with patch("ide_agent.container.OpenAIAdapter") as mock_adapter:
            orchestrator = dependency_container.get_orchestrator()

        assert isinstance(orchestrator, ToolCallOrchestrator)
        mock_adapter.assert_called_once()

    def test_reset(self, dependency_container):
        engine = dependency_container.get_edit_engine()
        dependency_container.reset()

        assert dependency_container.get_edit_engine() is not engine
