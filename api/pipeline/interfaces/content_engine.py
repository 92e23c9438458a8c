"""Execution engine interface.

Defines the contract for running a structured ContentQuery against a
content store (in-memory seed, CMS adapter, etc.).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain_models import ContentRecord, ExecutionOptions
from pipeline.timeout_guard import CancellationToken


class ContentQueryEngine(ABC):
    """Interface for content query execution engines.

    Contract:
        - run() returns raw ContentRecords, already scoped, filtered,
          ordered and paginated as the query describes
        - run() should check the cancellation token between units of work
          and stop early once it is cancelled
        - failures are raised; the caller decides how to degrade
    """

    @abstractmethod
    async def run(
        self,
        query,
        options: ExecutionOptions,
        cancellation: Optional[CancellationToken] = None
    ) -> List[ContentRecord]:
        """Execute query.

        Args:
            query: ContentQuery to execute
            options: Preview / secured-item visibility flags
            cancellation: Effective cancellation token (deadline or caller)

        Returns:
            Matching content records
        """
        pass

    @property
    def name(self) -> str:
        """Identifier used in logs"""
        return type(self).__name__
