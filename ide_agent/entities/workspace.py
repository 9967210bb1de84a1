"""
Workspace entities used to build conversation context.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class WorkspaceStructure:
    files: list[str]
    directories: list[str]


@dataclass(frozen=True)
class Selection:
    file: str
    start_line: int
    end_line: int


@dataclass
class WorkspaceContext:
    """Everything the reasoning engine is told about the workspace for one turn."""

    workspace_path: str
    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    open_files: list[str] = field(default_factory=list)
    current_file: Optional[str] = None
    selection: Optional[Selection] = None
