"""
Store Dependencies

All store creation happens here, not per call.
Callers share one handle via get_eval_store().

RULE: get_eval_store.cache_clear() is the only reset; the next call
re-resolves settings and the working directory.
"""

from functools import lru_cache

from evaluation.file_store import LocalFileEvalStore


@lru_cache(maxsize=1)
def get_eval_store() -> LocalFileEvalStore:
    """
    Create and cache the local eval store.
    
    The root comes from settings.eval_store_root, resolved against the
    current working directory on first call.
    
    Returns:
        LocalFileEvalStore: Ready for I/O (root and index exist).
    """
    return LocalFileEvalStore.open_or_create()
