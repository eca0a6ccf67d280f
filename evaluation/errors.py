"""
Evaluation Store Errors

Not-found and malformed-data conditions raised by EvalStore implementations.
Filesystem failures are not wrapped: OSError reaches the caller as-is.
"""

from pathlib import Path
from typing import Optional


class EvalStoreError(Exception):
    """Base class for eval store failures."""


class EvalRunNotFoundError(EvalStoreError, LookupError):
    """Raised when an operation requires a run that is not stored."""

    def __init__(self, eval_run_id: str):
        super().__init__(f"Cannot find evalRun with id '{eval_run_id}'")
        self.eval_run_id = eval_run_id


class MalformedEvalDataError(EvalStoreError, ValueError):
    """
    Stored content is not valid JSON or does not match its schema.

    The underlying JSONDecodeError / ValidationError is chained as __cause__.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
