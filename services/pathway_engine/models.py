# services/pathway_engine/models.py
# Pydantic models for scores, reference data, recommendation rules and results.

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .definitions import LIKERT_MAX, LIKERT_MIN, QUESTION_COUNT, normalise_code

logger = logging.getLogger(__name__)

RecommendationKind = Literal["course", "career"]


def parse_text_array(value: Any) -> List[str]:
    """
    Normalises an array-valued reference column into a list of names.

    Accepts a real list, or the Postgres text-array literal form
    (``{Engineering,"Computer Science",Law}``). Anything else yields an
    empty list so the row is treated as carrying no names.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("{") and text.endswith("}"):
            text = text[1:-1]
        if not text:
            return []
        names = []
        for part in text.split(","):
            cleaned = part.strip().strip('"').strip()
            if cleaned:
                names.append(cleaned)
        return names
    logger.warning(f"Unexpected array encoding of type {type(value).__name__}, treating as empty")
    return []


def _normalise_code(value: Any) -> Optional[str]:
    return normalise_code(value) or None


# --- Scoring ---

class DimensionScore(BaseModel):
    code: str  # R..C for interests, Ex/In/Se/Nt/Th/Fe/Jd/Pe for type dimensions
    letter: str
    raw: int
    percentage: float
    label: str
    description: str


class PersonalityCode(BaseModel):
    interest_code: str
    type_code: str


class ScoringResult(BaseModel):
    interest_scores: List[DimensionScore]
    type_scores: List[DimensionScore]
    interest_code: str
    type_code: str

    @property
    def personality_code(self) -> PersonalityCode:
        return PersonalityCode(interest_code=self.interest_code, type_code=self.type_code)

    def score_for(self, code: str) -> Optional[DimensionScore]:
        for score in self.interest_scores + self.type_scores:
            if score.code == code:
                return score
        return None


class AssessmentSubmission(BaseModel):
    """Boundary payload: question index to Likert answer, checked before scoring."""
    answers: Dict[int, int] = Field(..., description="Question index (0-99) to Likert answer (1-7)")

    @field_validator("answers")
    @classmethod
    def check_answers(cls, answers: Dict[int, int]) -> Dict[int, int]:
        if not answers:
            raise ValueError("Answers dictionary cannot be empty.")
        for index, value in answers.items():
            if not 0 <= index < QUESTION_COUNT:
                raise ValueError(f"Question index {index} is outside 0-{QUESTION_COUNT - 1}.")
            if not LIKERT_MIN <= value <= LIKERT_MAX:
                raise ValueError(
                    f"Answer {value} for question {index} is outside {LIKERT_MIN}-{LIKERT_MAX}."
                )
        return answers


# --- Reference Data ---

class MappingEntry(BaseModel):
    type_code: Optional[str] = None
    interest_code: Optional[str] = None
    courses: List[str] = Field(default_factory=list)
    careers: List[str] = Field(default_factory=list)
    explanation: Optional[str] = None

    @field_validator("type_code", "interest_code", mode="before")
    @classmethod
    def normalise_codes(cls, value: Any) -> Optional[str]:
        return _normalise_code(value)

    @field_validator("courses", "careers", mode="before")
    @classmethod
    def coerce_text_array(cls, value: Any) -> List[str]:
        return parse_text_array(value)

    def has_recommendations(self) -> bool:
        return bool(self.courses or self.careers)


class NamedDescription(BaseModel):
    name: str
    description: str


class CoursePlanRow(BaseModel):
    name: str
    course_overview: Optional[str] = None
    core_competencies: Optional[str] = None
    acads_extra: Optional[str] = None
    subj_master: Optional[str] = None
    soft_skills: Optional[str] = None
    career_readiness: Optional[str] = None
    growth: Optional[str] = None


class CareerPlanRow(BaseModel):
    name: str
    introduction: Optional[str] = None
    key_skills: Optional[str] = None
    academics_activities: Optional[str] = None
    soft_skills: Optional[str] = None
    growth_opportunities: Optional[str] = None


class CareerInfoRow(BaseModel):
    name: str
    career_fit: Optional[str] = None
    education_level: Optional[str] = None
    work_environment: Optional[str] = None
    career_path: Optional[str] = None


class PersonalityDetails(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    learning_style_summary: Optional[str] = None
    learning_style_details: Optional[str] = None
    learning_style_environments: Optional[str] = None
    learning_style_resources: Optional[str] = None
    study_tips_summary: Optional[str] = None
    study_tips_details: Optional[str] = None
    study_tips_dos: Optional[str] = None
    study_tips_donts: Optional[str] = None
    study_tips_common_mistakes: Optional[str] = None
    growth_strengths: Optional[str] = None
    growth_weaknesses: Optional[str] = None
    growth_opportunities: Optional[str] = None
    growth_challenges: Optional[str] = None


class TypeDetails(PersonalityDetails):
    type_code: str

    @field_validator("type_code", mode="before")
    @classmethod
    def normalise_type_code(cls, value: Any) -> Optional[str]:
        return _normalise_code(value)


class InterestDetails(PersonalityDetails):
    interest_name: str  # full dimension name, e.g. "Realistic"


class ReferenceData(BaseModel):
    version: str = "unversioned"
    mappings: List[MappingEntry] = Field(default_factory=list)
    course_descriptions: List[NamedDescription] = Field(default_factory=list)
    career_descriptions: List[NamedDescription] = Field(default_factory=list)
    course_plans: List[CoursePlanRow] = Field(default_factory=list)
    career_plans: List[CareerPlanRow] = Field(default_factory=list)
    career_info: List[CareerInfoRow] = Field(default_factory=list)
    type_details: List[TypeDetails] = Field(default_factory=list)
    interest_details: List[InterestDetails] = Field(default_factory=list)


# --- Recommendation Rules ---

class SuggestionLists(BaseModel):
    courses: List[str] = Field(default_factory=list)
    careers: List[str] = Field(default_factory=list)


class FieldCategory(BaseModel):
    id: str
    keywords: List[str]
    action: str


class LearningClauses(BaseModel):
    introverted: str
    extraverted: str


class CoursePlanPlaceholders(BaseModel):
    course_overview: str
    core_competencies: str
    acads_extra: str
    subj_master: str
    soft_skills: str
    career_readiness: str
    growth: str


class CareerPlanPlaceholders(BaseModel):
    introduction: str
    key_skills: str
    academics_activities: str
    soft_skills: str
    growth_opportunities: str


class CareerInfoPlaceholders(BaseModel):
    career_fit: str
    education_level: str
    work_environment: str
    career_path: str


class PlanPlaceholders(BaseModel):
    course: CoursePlanPlaceholders
    career: CareerPlanPlaceholders
    career_info: CareerInfoPlaceholders


class GuidanceFallbacks(BaseModel):
    learning_style: str
    study_tips: str
    growth_tips: str


class RecommendationRules(BaseModel):
    version: str
    type_defaults: Dict[str, SuggestionLists]
    fallback_defaults: SuggestionLists
    interest_suggestions: Dict[str, SuggestionLists]
    field_categories: List[FieldCategory]
    general_action: str
    learning_clauses: LearningClauses
    career_focus: Dict[str, str]
    career_focus_default: str
    placeholders: PlanPlaceholders
    guidance_fallbacks: GuidanceFallbacks


# --- Results ---

class RecommendationItem(BaseModel):
    name: str
    description: str


class Resolution(BaseModel):
    tier: Literal["exact", "type_only", "interest_only", "synthesized"]
    course_names: List[str]
    career_names: List[str]
    explanation: Optional[str] = None


class CategorizedRecommendations(BaseModel):
    """Mapping rows grouped by how closely they match a code pair, for browsing."""
    type_code: str
    interest_code: str
    exact_matches: List[MappingEntry] = Field(default_factory=list)
    type_matches: List[MappingEntry] = Field(default_factory=list)
    interest_matches: List[MappingEntry] = Field(default_factory=list)
    top_recommendations: List[MappingEntry] = Field(default_factory=list)
    total_exact_matches: int = 0
    total_type_matches: int = 0
    total_interest_matches: int = 0


class FilterOptions(BaseModel):
    type_codes: List[str] = Field(default_factory=list)
    interest_codes: List[str] = Field(default_factory=list)


class CourseDevelopmentPlanEntry(BaseModel):
    name: str
    description: str
    course_overview: str
    core_competencies: str
    acads_extra: str
    subj_master: str
    soft_skills: str
    career_readiness: str
    growth: str


class CareerDevelopmentPlanEntry(BaseModel):
    name: str
    description: str
    introduction: str
    key_skills: str
    academics_activities: str
    soft_skills: str
    growth_opportunities: str
    career_fit: str
    education_level: str
    work_environment: str
    career_path: str


DevelopmentPlanEntry = Union[CourseDevelopmentPlanEntry, CareerDevelopmentPlanEntry]


class DevelopmentPlan(BaseModel):
    type_code: str
    interest_code: str
    kind: RecommendationKind
    entries: List[DevelopmentPlanEntry] = Field(default_factory=list)


class AssessmentResult(BaseModel):
    scoring: ScoringResult
    resolution_tier: str
    explanation: Optional[str] = None
    course_recommendations: List[RecommendationItem]
    career_recommendations: List[RecommendationItem]
    course_path: str  # "Name: Description; ..." wire form
    career_suggestions: str
    course_plan: DevelopmentPlan
    career_plan: DevelopmentPlan
    charts: Dict[str, Any] = Field(default_factory=dict)
    guidance: Dict[str, Any] = Field(default_factory=dict)


# Custom Error Classes
class InvalidSubmissionError(ValueError):
    """Custom exception for invalid submission data (e.g., bad question index or answer value)."""
    pass
