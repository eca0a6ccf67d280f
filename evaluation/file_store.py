"""
File-based Evaluation Store

One JSON file per run plus an append-only index log of run keys.
Human-readable, easy to inspect, no database.

Layout:
    <root>/index.txt          one JSON EvalRunKey + "\\n" per line
    <root>/<evalRunId>.json   full serialized EvalRun

DESIGN RULES:
- save() writes the record, then appends to the index (not atomic)
- delete() removes the record, then rebuilds the index (read old, write new, swap)
- No locking: callers needing multi-writer safety must serialize access
- Errors propagate; nothing is retried or repaired
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from app.core.config import settings
from evaluation.errors import EvalRunNotFoundError, MalformedEvalDataError
from evaluation.reader import (
    INDEX_DELIMITER,
    filter_keys,
    iter_index_lines,
    parse_index_line,
    split_index_text,
)
from evaluation.store import EvalStore
from schemas.eval import EvalRun, EvalRunKey, ListEvalKeysRequest, ListEvalKeysResponse

logger = logging.getLogger(__name__)


class LocalFileEvalStore(EvalStore):
    """
    Local filesystem evaluation storage.

    Construct with open_or_create() to get a handle ready for I/O;
    the constructor itself touches nothing on disk.
    """

    def __init__(self, root: Union[str, Path], index_file_name: Optional[str] = None):
        """
        Bind a store handle to a root directory.

        Args:
            root: Directory owning the record files and index log
            index_file_name: Index log name. Defaults to settings.index_file_name.
        """
        self._root = Path(root).resolve()
        self._index_path = self._root / (index_file_name or settings.index_file_name)

    @classmethod
    def open_or_create(
        cls,
        root: Union[str, Path, None] = None,
        index_file_name: Optional[str] = None,
    ) -> "LocalFileEvalStore":
        """
        Create the root directory and empty index if missing.

        Args:
            root: Store root. Defaults to settings.eval_store_root under cwd.
            index_file_name: Optional override for the index log name

        Returns:
            A store whose directory and index log exist

        Raises:
            OSError: if the root or index cannot be created
        """
        store = cls(root or Path.cwd() / settings.eval_store_root, index_file_name)
        store._root.mkdir(parents=True, exist_ok=True)
        if not store._index_path.exists():
            store._index_path.write_text("", encoding="utf-8")

        logger.debug(f"Initialized local file eval store at root: {store._root}")
        return store

    @property
    def root(self) -> Path:
        return self._root

    @property
    def index_path(self) -> Path:
        return self._index_path

    def record_path(self, eval_run_id: str) -> Path:
        """Deterministic record file path for a run id (not sanitized)."""
        return self._root / f"{eval_run_id}.json"

    # --- EvalStore ---

    async def save(self, eval_run: EvalRun) -> None:
        """Write the record file, then append its key to the index."""
        key = eval_run.key
        record_path = self.record_path(key.eval_run_id)

        logger.debug(f"Saving EvalRun {key.eval_run_id} to {record_path}")
        await asyncio.to_thread(self._write_text, record_path, eval_run.to_json())

        line = key.to_json()
        logger.debug(f"Save EvalRunKey {line} to {self._index_path}")
        await asyncio.to_thread(self._append_text, self._index_path, line + INDEX_DELIMITER)

    async def load(self, eval_run_id: str) -> Optional[EvalRun]:
        """Load a run; None if its record file does not exist."""
        record_path = self.record_path(eval_run_id)
        if not await asyncio.to_thread(record_path.exists):
            logger.debug(f"EvalRun {eval_run_id} not found at {record_path}")
            return None

        data = await asyncio.to_thread(record_path.read_text, encoding="utf-8")
        return self._parse_record(data, record_path)

    async def list(
        self, query: Optional[ListEvalKeysRequest] = None
    ) -> ListEvalKeysResponse:
        """Parse the whole index; any malformed line fails the call."""
        text = await asyncio.to_thread(self._index_path.read_text, encoding="utf-8")
        keys = [
            parse_index_line(line, self._index_path)
            for line in split_index_text(text)
        ]
        logger.debug(f"Found keys: {[k.eval_run_id for k in keys]}")

        if query and query.filter and query.filter.action_ref:
            keys = filter_keys(keys, query)
            logger.debug(f"Filtered keys: {[k.eval_run_id for k in keys]}")

        return ListEvalKeysResponse(eval_run_keys=keys)

    async def delete(self, eval_run_id: str) -> None:
        """
        Remove the record file, then drop every index line for the id.

        Raises:
            EvalRunNotFoundError: if no record file exists for the id
            MalformedEvalDataError: if an index line cannot be parsed
        """
        record_path = self.record_path(eval_run_id)
        if not await asyncio.to_thread(record_path.exists):
            raise EvalRunNotFoundError(eval_run_id)

        logger.debug(f"Deleting EvalRun {eval_run_id} at {record_path}")
        await asyncio.to_thread(record_path.unlink)
        removed = await asyncio.to_thread(self._rebuild_index_without, eval_run_id)
        logger.debug(f"Removed {removed} index entries for EvalRun {eval_run_id}")

    # --- Internal helpers ---

    def _parse_record(self, data: str, path: Path) -> EvalRun:
        try:
            return EvalRun.model_validate(json.loads(data))
        except json.JSONDecodeError as e:
            raise MalformedEvalDataError(
                f"EvalRun record is not valid JSON: {path}", path=path
            ) from e
        except ValidationError as e:
            raise MalformedEvalDataError(
                f"EvalRun record failed validation: {path}", path=path
            ) from e

    def _rebuild_index_without(self, eval_run_id: str) -> int:
        """
        Stream the index into a fresh file, skipping eval_run_id, then swap.

        Returns:
            Number of index lines dropped
        """
        tmp_path = self._index_path.with_name(self._index_path.name + ".tmp")
        removed = 0

        try:
            with open(tmp_path, "w", encoding="utf-8", newline=INDEX_DELIMITER) as out:
                for line in iter_index_lines(self._index_path):
                    entry: EvalRunKey = parse_index_line(line, self._index_path)
                    if entry.eval_run_id == eval_run_id:
                        removed += 1
                        continue
                    out.write(line + INDEX_DELIMITER)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        os.replace(tmp_path, self._index_path)
        return removed

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)

    @staticmethod
    def _append_text(path: Path, text: str) -> None:
        with open(path, "a", encoding="utf-8", newline=INDEX_DELIMITER) as f:
            f.write(text)

