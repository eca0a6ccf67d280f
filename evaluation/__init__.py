# Evaluation Package
from evaluation.errors import EvalStoreError, EvalRunNotFoundError, MalformedEvalDataError
from evaluation.store import EvalStore
from evaluation.file_store import LocalFileEvalStore

__all__ = [
    "EvalStore",
    "LocalFileEvalStore",
    "EvalStoreError",
    "EvalRunNotFoundError",
    "MalformedEvalDataError",
]
