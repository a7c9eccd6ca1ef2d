# services/pathway_engine/scorer.py
# Turns 100 Likert answers into 14 dimension scores and the two personality codes.

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping

from .definitions import (
    INTEREST_BLOCKS,
    INTEREST_DIMENSIONS,
    INTEREST_LETTERS,
    INTEREST_MAX_SCORE,
    TYPE_BLOCKS,
    TYPE_DIMENSIONS,
    TYPE_MAX_SCORE,
    TYPE_PAIRS,
)
from .models import DimensionScore, ScoringResult

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def calculate_percentage(raw: int, max_score: int) -> float:
    """raw / max * 100, rounded half-up to 2 decimal places."""
    if max_score <= 0:
        return 0.0
    ratio = Decimal(raw) * 100 / Decimal(max_score)
    return float(ratio.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _answer_value(answers: Mapping[Any, Any], index: int) -> int:
    # JSON payloads arrive with string keys
    value = answers.get(index)
    if value is None:
        value = answers.get(str(index))
    return int(value) if value is not None else 0


def _score_dimensions(
    answers: Mapping[Any, Any],
    dimensions: List[Dict[str, str]],
    blocks: Dict[str, range],
    max_score: int,
) -> List[DimensionScore]:
    scores = []
    for dim in dimensions:
        raw = sum(_answer_value(answers, index) for index in blocks[dim["code"]])
        scores.append(
            DimensionScore(
                code=dim["code"],
                letter=dim["letter"],
                raw=raw,
                percentage=calculate_percentage(raw, max_score),
                label=dim["label"],
                description=dim["description"],
            )
        )
    return scores


def compute_interest_scores(answers: Mapping[Any, Any]) -> List[DimensionScore]:
    """Scores the six RIASEC blocks (questions 0-59). Missing answers count as 0."""
    return _score_dimensions(answers, INTEREST_DIMENSIONS, INTEREST_BLOCKS, INTEREST_MAX_SCORE)


def compute_type_scores(answers: Mapping[Any, Any]) -> List[DimensionScore]:
    """Scores the eight MBTI blocks (questions 60-99). Missing answers count as 0."""
    return _score_dimensions(answers, TYPE_DIMENSIONS, TYPE_BLOCKS, TYPE_MAX_SCORE)


def resolve_interest_code(interest_scores: List[DimensionScore]) -> str:
    """
    Returns the letters of the two highest interest percentages, highest first.

    Equal percentages are ordered by the fixed R, I, A, S, E, C priority.
    """
    priority = {letter: index for index, letter in enumerate(INTEREST_LETTERS)}
    ranked = sorted(
        interest_scores,
        key=lambda score: (-score.percentage, priority.get(score.letter, len(priority))),
    )
    return "".join(score.letter for score in ranked[:2])


def resolve_type_code(type_scores: List[DimensionScore]) -> str:
    """One letter per opposing pair; the first-listed letter (E, S, T, J) wins ties."""
    by_code = {score.code: score for score in type_scores}
    letters = []
    for first, second in TYPE_PAIRS:
        first_score = by_code.get(first)
        second_score = by_code.get(second)
        first_pct = first_score.percentage if first_score else 0.0
        second_pct = second_score.percentage if second_score else 0.0
        winner = first if first_pct >= second_pct else second
        letters.append(next(d["letter"] for d in TYPE_DIMENSIONS if d["code"] == winner))
    return "".join(letters)


def score_answers(answers: Mapping[Any, Any]) -> ScoringResult:
    interest_scores = compute_interest_scores(answers)
    type_scores = compute_type_scores(answers)
    interest_code = resolve_interest_code(interest_scores)
    type_code = resolve_type_code(type_scores)
    logger.debug(f"Scored {len(answers)} answers: interest={interest_code} type={type_code}")
    return ScoringResult(
        interest_scores=interest_scores,
        type_scores=type_scores,
        interest_code=interest_code,
        type_code=type_code,
    )
