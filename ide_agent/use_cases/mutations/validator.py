"""
Structural validation of agent proposals before anything is dispatched.

All functions here are pure: they only inspect the values they are given.
"""

from ide_agent.entities.operations import (
    AgentResponse,
    EditType,
    LineEdit,
    MutationOperation,
    OperationType,
)
from ide_agent.exceptions import ResponseValidationError

_CONTENT_REQUIRED = {OperationType.CREATE.value, OperationType.EDIT.value}


def validate_operation(op: MutationOperation, label: str = "operation") -> list[str]:
    problems: list[str] = []
    kind = getattr(op.type, "value", op.type)
    if not kind:
        problems.append(f"{label}: missing type")
    if not op.path:
        problems.append(f"{label}: missing path")
    if kind in _CONTENT_REQUIRED and op.content is None:
        problems.append(f"{label}: {kind} requires content")
    return problems


def validate_edit(edit: LineEdit, label: str = "edit") -> list[str]:
    problems: list[str] = []
    kind = getattr(edit.type, "value", edit.type)
    if not kind:
        problems.append(f"{label}: missing type")
    if not edit.path:
        problems.append(f"{label}: missing path")
    if edit.start_line is None:
        problems.append(f"{label}: missing startLine")
    if kind and kind != EditType.DELETE.value and edit.content is None:
        problems.append(f"{label}: {kind} requires content")
    return problems


def validate_agent_response(response: AgentResponse) -> list[str]:
    """
    Check a proposal for structural well-formedness.

    Returns:
        Human-readable problems; an empty list means the proposal may be dispatched
    """
    problems: list[str] = []
    if not isinstance(response.message, str) or not response.message.strip():
        problems.append("message: must be a non-empty string")
    for i, op in enumerate(response.operations):
        problems.extend(validate_operation(op, f"operations[{i}]"))
    for i, edit in enumerate(response.edits):
        problems.extend(validate_edit(edit, f"edits[{i}]"))
    return problems


def ensure_valid(response: AgentResponse) -> None:
    """
    Raises:
        ResponseValidationError: If the proposal is not well-formed
    """
    problems = validate_agent_response(response)
    if problems:
        raise ResponseValidationError(problems)
