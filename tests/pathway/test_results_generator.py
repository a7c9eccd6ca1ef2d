from unittest.mock import MagicMock

import pytest

from services.pathway_engine.models import InterestDetails, ReferenceData, TypeDetails
from services.pathway_engine.repository import InMemoryReferenceRepository
from services.pathway_engine.results_generator import (
    build_guidance,
    build_interest_chart,
    build_type_chart,
)
from services.pathway_engine.scorer import score_answers

REALISTIC_MAXED = {i: (7 if i < 10 else 1) for i in range(100)}


@pytest.fixture
def scoring():
    return score_answers(REALISTIC_MAXED)


@pytest.fixture
def details_repository():
    return InMemoryReferenceRepository(
        ReferenceData(
            type_details=[
                TypeDetails(
                    type_code="ESTJ",
                    title="The Executive",
                    learning_style_summary="Structured and practical.",
                    growth_challenges="Stay open to unconventional ideas.",
                )
            ],
            interest_details=[InterestDetails(interest_name="Realistic", title="The Doers")],
        )
    )


def test_interest_chart_payload(scoring):
    chart = build_interest_chart(scoring.interest_scores)

    assert chart["type"] == "riasec"
    assert chart["title"] == "RIASEC Personality Dimensions"
    assert chart["maxValue"] == 70
    assert [point["dimension"] for point in chart["data"]] == list("RIASEC")
    assert chart["data"][0] == {
        "dimension": "R",
        "label": "Realistic",
        "raw": 70,
        "percentage": 100.0,
        "description": "Realistic - Practical, hands-on, mechanical",
    }


def test_type_chart_groups_pairs(scoring):
    chart = build_type_chart(scoring.type_scores)

    assert chart["type"] == "mbti"
    assert chart["maxValue"] == 35
    assert list(chart["pairs"]) == ["E/I", "S/N", "T/F", "J/P"]
    assert [point["label"] for point in chart["pairs"]["T/F"]] == ["Thinking", "Feeling"]


def test_type_chart_skips_incomplete_pair(scoring):
    chart = build_type_chart([s for s in scoring.type_scores if s.code != "Pe"])
    assert "J/P" not in chart["pairs"]


def test_guidance_uses_reference_details(details_repository, rules):
    guidance = build_guidance(details_repository, rules, "estj", "RI")

    assert guidance["type_details"]["title"] == "The Executive"
    assert guidance["interest_name"] == "Realistic"
    assert guidance["interest_details"]["title"] == "The Doers"
    assert guidance["learning_style"] == "Structured and practical."
    assert guidance["study_tips"] == "Focus on your strengths and preferred learning methods."
    assert guidance["growth_tips"] == "Stay open to unconventional ideas."


def test_guidance_prefers_mapping_explanation(details_repository, rules):
    guidance = build_guidance(details_repository, rules, "ESTJ", "RI", explanation="From the mapping row.")
    assert guidance["growth_tips"] == "From the mapping row."


def test_guidance_fallbacks_without_details(empty_repository, rules):
    guidance = build_guidance(empty_repository, rules, "INFP", "AS")

    assert guidance["type_details"] is None
    assert guidance["interest_details"] is None
    assert guidance["learning_style"] == "Mixed learning approach"
    assert guidance["growth_tips"] == (
        "Continue developing your natural strengths while working on areas for improvement."
    )


def test_guidance_survives_lookup_errors(rules):
    repo = MagicMock()
    repo.find_type_details.side_effect = RuntimeError("db down")
    repo.find_interest_details.side_effect = RuntimeError("db down")

    guidance = build_guidance(repo, rules, "INTJ", "IR")

    assert guidance["learning_style"] == "Mixed learning approach"
    assert guidance["interest_name"] == "Investigative"
