"""
System prompt carrying the workspace context and tool usage rules.
"""

from __future__ import annotations

import json
import textwrap

from ide_agent.entities.workspace import WorkspaceContext
from ide_agent.ports.llm.tools_port import ToolSpec

SYSTEM_PROMPT = textwrap.dedent(
    """
    You are an expert AI coding assistant with full access to modify the codebase.
    You are currently working in the following workspace:
    {workspace_path}

    WORKSPACE STRUCTURE:
    {file_tree}

    CURRENT CONTEXT:
    {current_context}

    AVAILABLE TOOLS:
    {tools}

    RULES:
    1. ALL file and code changes MUST be made through tool calls.
    2. Paths are relative to the workspace root and use forward slashes.
    3. Line numbers are 1-based; endLine is inclusive and defaults to startLine.
    4. 'create' fails if the file exists unless metadata.overwrite is true.
    5. Each tool call is applied atomically; a failed call is rolled back and
       its error is reported back to you so you can explain or recover.
    6. After the tools have run, reply with a short, clear summary for the user.
    """
).strip()


def _current_context(context: WorkspaceContext) -> str:
    lines: list[str] = []
    if context.current_file:
        lines.append(f"- Currently viewing: {context.current_file}")
    else:
        lines.append("- No file currently open")
    if context.selection is not None:
        sel = context.selection
        lines.append(f"- Selected lines {sel.start_line}-{sel.end_line} in {sel.file}")
    if context.open_files:
        lines.append("- Open files:")
        lines.extend(f"  - {f}" for f in context.open_files)
    return "\n".join(lines)


def generate_system_prompt(context: WorkspaceContext, tools: list[ToolSpec]) -> str:
    file_tree = "\n".join(
        f"  {p}" for p in [*context.directories, *context.files]
    ) or "  (empty)"
    tools_text = "\n\n".join(
        f"{i}. {spec['name']}:\n{json.dumps(spec, indent=2, ensure_ascii=False)}"
        for i, spec in enumerate(tools, start=1)
    )
    return SYSTEM_PROMPT.format(
        workspace_path=context.workspace_path,
        file_tree=file_tree,
        current_context=_current_context(context),
        tools=tools_text,
    )
