import pytest

from services.pathway_engine.config import ASSETS_DIR
from services.pathway_engine.loader import load_recommendation_rules
from services.pathway_engine.models import (
    CareerInfoRow,
    CareerPlanRow,
    CoursePlanRow,
    MappingEntry,
    NamedDescription,
    ReferenceData,
)
from services.pathway_engine.repository import InMemoryReferenceRepository

RULES_PATH = str(ASSETS_DIR / "recommendation_rules.yml")
REFERENCE_DATA_PATH = str(ASSETS_DIR / "reference_data.yml")


@pytest.fixture(scope="session")
def rules():
    """Recommendation rules loaded from the shipped YAML asset."""
    return load_recommendation_rules(RULES_PATH)


@pytest.fixture
def empty_repository():
    """A repository with no reference rows at all."""
    return InMemoryReferenceRepository(ReferenceData())


@pytest.fixture
def sample_reference():
    """Small, fully controlled reference tables."""
    return ReferenceData(
        mappings=[
            MappingEntry(
                type_code="INTJ",
                interest_code="IR",
                courses=["BS Computer Science", "BS Mathematics"],
                careers=["Software Engineer", "Data Scientist"],
                explanation="Exact INTJ/IR row.",
            ),
            MappingEntry(
                type_code="INTJ",
                interest_code="AS",
                courses=["BS Architecture"],
                careers=["Architect"],
                explanation="Type-only candidate.",
            ),
            MappingEntry(
                type_code="ENFP",
                interest_code="RI",
                courses=["BS Physics"],
                careers=["Physicist"],
                explanation="Interest-only candidate.",
            ),
        ],
        course_descriptions=[
            NamedDescription(name="BS Computer Science", description="Curated computer science description."),
            NamedDescription(name="BS Nursing Science", description="Curated nursing description."),
        ],
        career_descriptions=[
            NamedDescription(name="Software Engineer", description="Curated software engineer description."),
        ],
        course_plans=[
            CoursePlanRow(
                name="BS Computer Science",
                course_overview="Overview of computer science.",
                core_competencies="Programming.",
                soft_skills="  ",
            ),
        ],
        career_plans=[
            CareerPlanRow(
                name="Software Engineer",
                introduction="Intro to software engineering.",
                key_skills="Coding.",
            ),
        ],
        career_info=[
            CareerInfoRow(name="Software Engineer", career_fit="Logical builders."),
        ],
    )


@pytest.fixture
def repository(sample_reference):
    return InMemoryReferenceRepository(sample_reference)
