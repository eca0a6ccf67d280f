"""
Index Log Reader

Parses the eval store index log (one JSON EvalRunKey per line).

DESIGN RULES:
- Read-only operations
- No side effects
- A malformed line is an error, never skipped
"""

import json
from pathlib import Path
from typing import Iterator, List, Optional

from pydantic import ValidationError

from evaluation.errors import MalformedEvalDataError
from schemas.eval import EvalRunKey, ListEvalKeysRequest

INDEX_DELIMITER = "\n"


def iter_index_lines(path: Path) -> Iterator[str]:
    """
    Lazily yield index lines without their delimiter.

    Reads one line at a time so the index never has to fit in memory.
    The iterator is single-use: it holds the file open until exhausted.

    Args:
        path: Path to the index log

    Yields:
        Each serialized key, in append order
    """
    with open(path, "r", encoding="utf-8", newline=INDEX_DELIMITER) as f:
        for line in f:
            if line.endswith(INDEX_DELIMITER):
                line = line[: -len(INDEX_DELIMITER)]
            yield line


def split_index_text(text: str) -> List[str]:
    """
    Split the full index text into lines.

    Exactly one trailing delimiter is stripped first; an empty index
    yields no lines.
    """
    if text.endswith(INDEX_DELIMITER):
        text = text[: -len(INDEX_DELIMITER)]
    if not text:
        return []
    return text.split(INDEX_DELIMITER)


def parse_index_line(line: str, path: Optional[Path] = None) -> EvalRunKey:
    """
    Parse one index line into an EvalRunKey.

    Raises:
        MalformedEvalDataError: if the line is not JSON or not a valid key
    """
    try:
        return EvalRunKey.model_validate(json.loads(line))
    except json.JSONDecodeError as e:
        raise MalformedEvalDataError(
            f"Index line is not valid JSON: {line!r}", path=path
        ) from e
    except ValidationError as e:
        raise MalformedEvalDataError(
            f"Index line is not a valid EvalRunKey: {line!r}", path=path
        ) from e


def filter_keys(
    keys: List[EvalRunKey],
    query: Optional[ListEvalKeysRequest] = None,
) -> List[EvalRunKey]:
    """
    Filter keys by query criteria.

    Args:
        keys: Keys in index order
        query: Optional list request; only filter.action_ref is honoured

    Returns:
        Matching keys, order preserved
    """
    action_ref = query.filter.action_ref if query and query.filter else None

    if action_ref:
        return [k for k in keys if k.action_ref == action_ref]

    return list(keys)
