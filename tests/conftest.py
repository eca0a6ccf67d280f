import pytest

from app.dependencies import get_eval_store
from evaluation.file_store import LocalFileEvalStore
from schemas.eval import EvalMetric, EvalResult, EvalRun, EvalRunKey


def create_test_run(eval_run_id: str, action_ref: str = "/flow/summarize") -> EvalRun:
    """Create a small but fully populated EvalRun."""
    return EvalRun(
        key=EvalRunKey(
            eval_run_id=eval_run_id,
            action_ref=action_ref,
            dataset_id="dataset-1",
            dataset_version=2,
            created_at="2026-01-27T10:00:00+00:00",
        ),
        results=[
            EvalResult(
                test_case_id="case-1",
                input={"question": "What is the refund policy?"},
                output="30 days",
                context=["Refunds are accepted within 30 days."],
                trace_ids=["trace-abc"],
                metrics=[
                    EvalMetric(evaluator="faithfulness", score=0.9, rationale="grounded"),
                    EvalMetric(evaluator="exact_match", score=True),
                ],
            )
        ],
        metrics_metadata={
            "faithfulness": {"displayName": "Faithfulness", "definition": "Grounded in context"},
        },
    )


@pytest.fixture
def store(tmp_path) -> LocalFileEvalStore:
    return LocalFileEvalStore.open_or_create(tmp_path / "evals")


@pytest.fixture(autouse=True)
def reset_eval_store_cache():
    get_eval_store.cache_clear()
    yield
    get_eval_store.cache_clear()


@pytest.fixture
def make_run():
    return create_test_run
