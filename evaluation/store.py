"""
Evaluation Store Interface

Abstract interface for persisting evaluation runs.
Storage-agnostic - implementations can write to files, databases, cloud, etc.

DESIGN RULES:
- Failures propagate to the caller (no silent skips)
- load() on a missing run returns None; delete() on a missing run raises
- list() preserves insertion order and never returns None
"""

from abc import ABC, abstractmethod
from typing import Optional

from schemas.eval import EvalRun, ListEvalKeysRequest, ListEvalKeysResponse


class EvalStore(ABC):
    """
    Abstract base for evaluation run persistence.
    
    Implementations:
    - LocalFileEvalStore (JSON record files + index log, local)
    - DatabaseStore (future)
    """
    
    @abstractmethod
    async def save(self, eval_run: EvalRun) -> None:
        """
        Persist a run, overwriting any previous record with the same id.
        
        Args:
            eval_run: The validated run to store
        """
        pass
    
    @abstractmethod
    async def load(self, eval_run_id: str) -> Optional[EvalRun]:
        """
        Load a run by id.
        
        Returns:
            The stored EvalRun, or None if no such run exists
        """
        pass
    
    @abstractmethod
    async def list(
        self, query: Optional[ListEvalKeysRequest] = None
    ) -> ListEvalKeysResponse:
        """
        List stored run keys, optionally filtered by actionRef.
        """
        pass
    
    @abstractmethod
    async def delete(self, eval_run_id: str) -> None:
        """
        Remove a run and its index entries.
        
        Raises:
            EvalRunNotFoundError: if the run is not stored
        """
        pass
