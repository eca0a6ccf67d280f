"""
Evaluation Run Schemas

Pydantic models for persisted evaluation runs.
Field names are snake_case in Python and camelCase on disk.

DESIGN RULES:
- Keys are immutable once created
- Unknown fields are preserved, never dropped
- Serialize with to_json() so aliases are always used
- Parsing never invents values (createdAt stays missing if absent)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _EvalModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_json(self) -> str:
        """Compact camelCase JSON. Nulls are written as-is so payloads round-trip."""
        return self.model_dump_json(by_alias=True)


class EvalRunKey(_EvalModel):
    """
    Identity of a single evaluation run.

    This is what the index log stores, one per line.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    eval_run_id: str = Field(..., alias="evalRunId", min_length=1)
    action_ref: Optional[str] = Field(default=None, alias="actionRef")
    dataset_id: Optional[str] = Field(default=None, alias="datasetId")
    dataset_version: Optional[int] = Field(default=None, alias="datasetVersion")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    action_config: Optional[Any] = Field(default=None, alias="actionConfig")

    @classmethod
    def create(cls, eval_run_id: str, action_ref: Optional[str] = None, **fields: Any) -> "EvalRunKey":
        """Build a new key stamped with the current UTC time."""
        fields.setdefault("created_at", _utc_now_iso())
        return cls(eval_run_id=eval_run_id, action_ref=action_ref, **fields)


class EvalMetric(_EvalModel):
    """A single evaluator verdict for one test case."""
    evaluator: str
    score: Optional[Union[bool, int, float, str]] = None
    status: Optional[str] = None
    rationale: Optional[str] = None
    error: Optional[str] = None
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    span_id: Optional[str] = Field(default=None, alias="spanId")


class EvalResult(_EvalModel):
    """Inputs, outputs and metrics for one test case of a run."""
    test_case_id: str = Field(..., alias="testCaseId")
    input: Any = None
    output: Any = None
    error: Optional[str] = None
    context: Optional[List[Any]] = None
    reference: Any = None
    trace_ids: List[str] = Field(default_factory=list, alias="traceIds")
    metrics: Optional[List[EvalMetric]] = None


class MetricMetadata(_EvalModel):
    display_name: str = Field(..., alias="displayName")
    definition: str


class EvalRun(_EvalModel):
    """
    Full evaluation run record.

    The store only interprets `key`; everything else is payload.
    """
    key: EvalRunKey
    results: List[EvalResult] = Field(default_factory=list)
    metrics_metadata: Optional[Dict[str, MetricMetadata]] = Field(
        default=None, alias="metricsMetadata"
    )


# --- List API ---

class ListEvalKeysFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action_ref: Optional[str] = Field(default=None, alias="actionRef")


class ListEvalKeysRequest(BaseModel):
    """Optional query for EvalStore.list()."""
    filter: Optional[ListEvalKeysFilter] = None


class ListEvalKeysResponse(BaseModel):
    """Keys in index order. Never None; empty when nothing is stored."""
    model_config = ConfigDict(populate_by_name=True)

    eval_run_keys: List[EvalRunKey] = Field(default_factory=list, alias="evalRunKeys")
