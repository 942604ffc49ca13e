import logging
from fastapi import APIRouter, HTTPException

from config import settings
from schemas.text_compare import (
    BatchCheckRequest,
    BatchCheckResponse,
    BatchCheckResult,
    CheckRequest,
    CheckResponse,
    NormalizeRequest,
    NormalizeResponse,
)
from services.text_compare_service import (
    diff_words,
    is_correct,
    normalize,
    word_count,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _ensure_size(text: str, field: str) -> None:
    words = len(text.split())
    if words > settings.MAX_COMPARE_WORDS:
        logger.warning(f"Rejected {field} with {words} words")
        raise HTTPException(
            status_code=413,
            detail=f"{field} exceeds {settings.MAX_COMPARE_WORDS} words",
        )


def _check(user: str, answer: str) -> CheckResponse:
    normalized_user = normalize(user)
    normalized_answer = normalize(answer)
    return CheckResponse(
        correct=is_correct(user, answer),
        normalizedUser=normalized_user,
        normalizedAnswer=normalized_answer,
        answerWordCount=word_count(answer),
        tokens=diff_words(user, answer),
    )


@router.post("/listen-type/check", response_model=CheckResponse)
def check_answer(req: CheckRequest):
    """
    Grade one dictation attempt against the reference answer.
    """
    _ensure_size(req.user, "user")
    _ensure_size(req.answer, "answer")

    try:
        return _check(req.user, req.answer)
    except Exception as e:
        logger.error(f"Listen & type check error: {e}")
        raise HTTPException(
            status_code=500,
            detail="Listen & type check service error",
        )


@router.post("/listen-type/check-batch", response_model=BatchCheckResponse)
def check_answers_batch(req: BatchCheckRequest):
    """
    Grade every segment of a topic at once and report the progress summary.
    """
    if len(req.items) > settings.MAX_BATCH_ITEMS:
        raise HTTPException(
            status_code=413,
            detail=f"At most {settings.MAX_BATCH_ITEMS} items per batch",
        )
    for item in req.items:
        _ensure_size(item.user, "user")
        _ensure_size(item.answer, "answer")

    try:
        results = []
        for index, item in enumerate(req.items):
            checked = _check(item.user, item.answer)
            results.append(BatchCheckResult(
                **checked.model_dump(),
                index=index,
                status="correct" if checked.correct else "incorrect",
            ))

        correct_count = sum(1 for r in results if r.correct)
        logger.info(f"Batch check: {correct_count}/{len(results)} correct")

        return BatchCheckResponse(
            correctCount=correct_count,
            total=len(results),
            results=results,
        )
    except Exception as e:
        logger.error(f"Listen & type batch check error: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Listen & type check service error",
        )


@router.post("/listen-type/normalize", response_model=NormalizeResponse)
def normalize_text(req: NormalizeRequest):
    return NormalizeResponse(normalized=normalize(req.text))
