"""
Line-oriented content transforms and their inverses.

Content is split on "\\n" only, so a "\\r" stays attached to its line and
``join_lines(split_lines(text)) == text`` for every text. An empty file has
zero lines. Inserted or replacing content always contributes
``content.split("\\n")`` lines, so an empty string is one empty line.
"""

from typing import Optional

from ide_agent.entities.operations import EditType, LineEdit


class InvalidLineRange(ValueError):
    pass


class UnknownEditType(ValueError):
    pass


def split_lines(content: str) -> list[str]:
    if content == "":
        return []
    return content.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


def content_lines(content: Optional[str]) -> list[str]:
    return (content or "").split("\n")


def edit_type(edit: LineEdit) -> EditType:
    try:
        return EditType(edit.type)
    except ValueError:
        raise UnknownEditType(f"Unknown edit type: {edit.type}")


def check_range(edit: LineEdit, line_count: int) -> None:
    """
    Enforce ``1 <= startLine <= lineCount`` and ``startLine <= endLine <= lineCount``.

    Raises:
        InvalidLineRange: If the edit's range does not fit the file
    """
    start = edit.start_line
    end = edit.last_line
    if (
        not isinstance(start, int)
        or not isinstance(end, int)
        or isinstance(start, bool)
        or isinstance(end, bool)
    ):
        raise InvalidLineRange("Line numbers must be integers")
    if start < 1 or start > line_count or end < start or end > line_count:
        raise InvalidLineRange(
            f"Lines {start}-{end} are outside of 1-{line_count}"
        )


def splice(
    lines: list[str], index: int, remove: int, insert: list[str]
) -> list[str]:
    return lines[:index] + list(insert) + lines[index + remove :]


def apply_unchecked(lines: list[str], edit: LineEdit) -> list[str]:
    """Apply an edit without range checks; used for inverses, which may target the end of a file."""
    kind = edit_type(edit)
    index = int(edit.start_line or 1) - 1
    span = int(edit.last_line or 1) - int(edit.start_line or 1) + 1
    if kind is EditType.INSERT:
        return splice(lines, index, 0, content_lines(edit.content))
    if kind is EditType.REPLACE:
        return splice(lines, index, span, content_lines(edit.content))
    return splice(lines, index, span, [])


def apply_edit(lines: list[str], edit: LineEdit) -> list[str]:
    """
    Compute the new line sequence for an edit.

    Insert places content before ``startLine``; Replace substitutes the
    ``[startLine, endLine]`` span; Delete removes that span.

    Raises:
        UnknownEditType: If the edit type is not insert, replace or delete
        InvalidLineRange: If the range does not fit the file
    """
    edit_type(edit)
    check_range(edit, len(lines))
    return apply_unchecked(lines, edit)


def invert(edit: LineEdit, original: list[str]) -> LineEdit:
    """
    Build the edit that undoes ``edit`` once it has been applied to ``original``.

    * Insert(n, k lines)       -> Delete(n, n+k-1)
    * Replace(a..b, k lines)   -> Replace(a, a+k-1) with the original span
    * Delete(a..b)             -> Insert(a) of the original span
    """
    kind = edit_type(edit)
    start = int(edit.start_line or 1)
    end = int(edit.last_line or start)
    description = f"Revert {kind.value} at line {start} of {edit.path}"
    if kind is EditType.INSERT:
        inserted = len(content_lines(edit.content))
        return LineEdit(
            type=EditType.DELETE.value,
            path=edit.path,
            start_line=start,
            end_line=start + inserted - 1,
            description=description,
        )
    span = original[start - 1 : end]
    if kind is EditType.REPLACE:
        written = len(content_lines(edit.content))
        return LineEdit(
            type=EditType.REPLACE.value,
            path=edit.path,
            start_line=start,
            end_line=start + written - 1,
            content=join_lines(span),
            description=description,
        )
    return LineEdit(
        type=EditType.INSERT.value,
        path=edit.path,
        start_line=start,
        content=join_lines(span),
        description=description,
    )
