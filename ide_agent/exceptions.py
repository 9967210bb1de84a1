"""
Custom exceptions for the application.
"""

from typing import Optional


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class WorkspaceError(BaseAppError):
    """Exception raised for workspace storage and path errors."""

    pass


class LLMError(BaseAppError):
    """Exception raised for LLM-related errors."""

    pass


class ReasoningEngineError(LLMError):
    """Reasoning engine unreachable, timed out or answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ToolError(BaseAppError):
    """Exception raised when a tool invocation cannot be dispatched."""

    pass


class ToolArgumentsError(ToolError):
    """Tool invocation arguments are not valid JSON or do not match the schema."""

    pass


class UnknownToolError(ToolError):
    """Tool invocation names a tool that is not declared."""

    pass


class ResponseValidationError(BaseAppError):
    """Exception raised when a proposed agent response is not well-formed."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems) or "Invalid agent response")
        self.problems = problems
