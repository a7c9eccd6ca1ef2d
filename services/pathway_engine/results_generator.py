# services/pathway_engine/results_generator.py
# Builds chart payloads and personality guidance text for a scored assessment.

import logging
from typing import Any, Dict, List, Optional

from .definitions import (
    INTEREST_LABELS,
    INTEREST_MAX_SCORE,
    TYPE_MAX_SCORE,
    TYPE_PAIRS,
    normalise_code,
)
from .models import DimensionScore, PersonalityDetails, RecommendationRules
from .repository import ReferenceRepository

logger = logging.getLogger(__name__)


def _chart_point(score: DimensionScore) -> Dict[str, Any]:
    return {
        "dimension": score.code,
        "label": score.label,
        "raw": score.raw,
        "percentage": score.percentage,
        "description": score.description,
    }


def build_interest_chart(interest_scores: List[DimensionScore]) -> Dict[str, Any]:
    """Bar-chart payload for the six RIASEC dimensions, in R..C order."""
    return {
        "type": "riasec",
        "title": "RIASEC Personality Dimensions",
        "maxValue": INTEREST_MAX_SCORE,
        "data": [_chart_point(score) for score in interest_scores],
    }


def build_type_chart(type_scores: List[DimensionScore]) -> Dict[str, Any]:
    """Paired-bar payload for the four MBTI axes, keyed "E/I", "S/N", "T/F", "J/P"."""
    by_code = {score.code: score for score in type_scores}
    pairs = {}
    for first, second in TYPE_PAIRS:
        if first not in by_code or second not in by_code:
            logger.warning(f"Missing type score for pair {first}/{second}, leaving it out of the chart")
            continue
        key = f"{by_code[first].letter}/{by_code[second].letter}"
        pairs[key] = [_chart_point(by_code[first]), _chart_point(by_code[second])]
    return {
        "type": "mbti",
        "title": "MBTI Personality Dimensions",
        "maxValue": TYPE_MAX_SCORE,
        "pairs": pairs,
    }


def _details_dump(details: Optional[PersonalityDetails]) -> Optional[Dict[str, Any]]:
    return details.model_dump() if details is not None else None


def build_guidance(
    repository: ReferenceRepository,
    rules: RecommendationRules,
    type_code: str,
    interest_code: str,
    explanation: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Personality guidance for the result page.

    Type details are looked up by type code, interest details by the full name
    of the top interest letter (e.g. "Realistic"). Each summary line falls back
    to configured text when the reference row or field is missing.
    """
    type_code = normalise_code(type_code)
    interest_code = normalise_code(interest_code)
    fallbacks = rules.guidance_fallbacks

    type_details = None
    try:
        type_details = repository.find_type_details(type_code)
        if type_details is None:
            logger.warning(f"Type details not found for: {type_code}")
    except Exception as e:
        logger.error(f"Error looking up type details for {type_code}: {e}", exc_info=True)

    interest_details = None
    interest_name = INTEREST_LABELS.get(interest_code[:1])
    if interest_name:
        try:
            interest_details = repository.find_interest_details(interest_name)
            if interest_details is None:
                logger.warning(f"Interest details not found for: {interest_name}")
        except Exception as e:
            logger.error(f"Error looking up interest details for {interest_name}: {e}", exc_info=True)

    learning_style = fallbacks.learning_style
    study_tips = fallbacks.study_tips
    growth_tips = explanation.strip() if explanation and explanation.strip() else None
    if type_details is not None:
        learning_style = type_details.learning_style_summary or learning_style
        study_tips = type_details.study_tips_summary or study_tips
        growth_tips = growth_tips or type_details.growth_challenges
    growth_tips = growth_tips or fallbacks.growth_tips

    return {
        "type_code": type_code,
        "interest_code": interest_code,
        "interest_name": interest_name,
        "type_details": _details_dump(type_details),
        "interest_details": _details_dump(interest_details),
        "learning_style": learning_style,
        "study_tips": study_tips,
        "growth_tips": growth_tips,
    }
