"""
Use case for applying a complete agent proposal as one batch.
"""

import logging
from typing import Optional

from ide_agent.entities.operations import AgentResponse, BatchResult
from ide_agent.exceptions import ResponseValidationError
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine
from ide_agent.use_cases.mutations.validator import ensure_valid


class ExecuteAgentResponseUseCase:
    """Validate a proposal, then apply its operations and edits atomically."""

    def __init__(
        self,
        engine: TransactionalEditEngine,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            engine: Edit engine bound to the target workspace
            logger: Logger instance to use for logging
        """
        self._engine = engine
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, response: AgentResponse) -> BatchResult:
        """
        Apply the proposal's operations followed by its edits as a single batch.

        Raises:
            ResponseValidationError: If the proposal is rejected; nothing is dispatched
        """
        try:
            ensure_valid(response)
        except ResponseValidationError as e:
            self._logger.warning(f"Rejected agent response: {e}")
            raise

        items = response.batch()
        self._logger.info(
            f"Executing agent response with {len(response.operations)} operation(s) "
            f"and {len(response.edits)} edit(s)"
        )
        return self._engine.apply_batch(items)
