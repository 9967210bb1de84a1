"""ide_agent package: an AI coding collaborator that edits a workspace through tool calls.

Every batch of file operations and line edits is applied atomically, with
rollback on the first failure. Submodules are imported directly; keep
__all__ empty.
"""

__all__: list[str] = []
