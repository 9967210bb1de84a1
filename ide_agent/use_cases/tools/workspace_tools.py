"""
Tools "file_system_operation" and "code_edit" mapped to the edit engine.
"""

import logging
from typing import Optional

from typing_extensions import override

from ide_agent.entities.operations import BatchResult, LineEdit
from ide_agent.entities.tool_arguments import (
    CODE_EDIT_TOOL_NAME,
    FILE_SYSTEM_TOOL_NAME,
    ToolArguments,
    parse_tool_arguments,
)
from ide_agent.exceptions import ToolArgumentsError
from ide_agent.ports.llm.tools_port import ToolsHandlerPort, ToolSpec
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine
from ide_agent.use_cases.mutations.validator import validate_edit, validate_operation

FILE_SYSTEM_TOOL: ToolSpec = {
    "name": FILE_SYSTEM_TOOL_NAME,
    "description": (
        "Perform file system operations like creating, editing, or deleting "
        "files and directories"
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "type": {
                "type": "string",
                "description": "The type of operation to perform",
                "enum": ["create", "edit", "delete", "mkdir"],
            },
            "path": {
                "type": "string",
                "description": "The path to the file or directory, relative to workspace root",
            },
            "content": {
                "type": "string",
                "description": "The content to write to the file (for create/edit operations)",
            },
            "metadata": {
                "type": "object",
                "description": "Additional metadata about the operation",
                "properties": {
                    "fileType": {"type": "string"},
                    "description": {"type": "string"},
                    "requires": {"type": "array", "items": {"type": "string"}},
                    "overwrite": {"type": "boolean"},
                },
                "additionalProperties": False,
            },
        },
        "required": ["type", "path"],
        "additionalProperties": False,
    },
}

CODE_EDIT_TOOL: ToolSpec = {
    "name": CODE_EDIT_TOOL_NAME,
    "description": "Perform precise line-level edits to code files",
    "parameters": {
        "type": "object",
        "properties": {
            "type": {
                "type": "string",
                "description": "The type of edit to perform",
                "enum": ["insert", "replace", "delete"],
            },
            "path": {"type": "string", "description": "The path to the file to edit"},
            "startLine": {
                "type": "number",
                "description": "The line number to start editing at (1-based)",
            },
            "endLine": {
                "type": "number",
                "description": "The line number to end editing at (1-based, inclusive)",
            },
            "content": {
                "type": "string",
                "description": "The content to insert or replace with",
            },
            "description": {
                "type": "string",
                "description": "A description of what this edit does",
            },
        },
        "required": ["type", "path", "startLine", "description"],
        "additionalProperties": False,
    },
}


class WorkspaceToolsHandler(ToolsHandlerPort):
    """Handler for the workspace mutation tools that can be called by an LLM."""

    def __init__(
        self,
        engine: TransactionalEditEngine,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the workspace tools handler.

        Args:
            engine: Edit engine every invocation is submitted to
            logger: Logger instance to use for logging
        """
        self._engine = engine
        self._logger = logger or logging.getLogger(__name__)

    @override
    def available_tools(self) -> list[ToolSpec]:
        return [FILE_SYSTEM_TOOL, CODE_EDIT_TOOL]

    @override
    def parse(self, name: str, arguments: str) -> ToolArguments:
        parsed = parse_tool_arguments(name, arguments)
        item = parsed.to_item()
        if isinstance(item, LineEdit):
            problems = validate_edit(item, name)
        else:
            problems = validate_operation(item, name)
        if problems:
            raise ToolArgumentsError("; ".join(problems))
        return parsed

    @override
    def dispatch(self, arguments: ToolArguments) -> BatchResult:
        item = arguments.to_item()
        self._logger.info(f"Dispatching {item.type} on {item.path}")
        return self._engine.apply(item)
