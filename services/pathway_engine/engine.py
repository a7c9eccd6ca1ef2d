# services/pathway_engine/engine.py
# Runs the full assessment flow: scoring, code resolution, recommendations and plans.

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from .config import EngineSettings, engine_settings
from .describer import DescriptionEnricher
from .development_plan import DevelopmentPlanAssembler
from .encoding import encode_recommendations
from .loader import load_recommendation_rules, load_reference_data
from .logging_config import setup_logging
from .models import (
    AssessmentResult,
    AssessmentSubmission,
    InvalidSubmissionError,
    RecommendationItem,
    RecommendationRules,
    Resolution,
    ScoringResult,
)
from .recommender import DEFAULT_MAX_ITEMS, RecommendationResolver, select_top_names
from .repository import InMemoryReferenceRepository, ReferenceRepository
from .results_generator import build_guidance, build_interest_chart, build_type_chart
from .scorer import score_answers

logger = logging.getLogger(__name__)


class PathwayEngine:
    """
    Turns a questionnaire answer set into scores, personality codes, described
    course/career recommendations and development plans.

    Reference tables and rules are injected; ``from_files`` builds an engine
    from the YAML assets named in the settings.
    """

    def __init__(
        self,
        repository: ReferenceRepository,
        rules: RecommendationRules,
        max_items: int = DEFAULT_MAX_ITEMS,
    ):
        self.repository = repository
        self.rules = rules
        self.max_items = max_items
        self.resolver = RecommendationResolver(repository, rules)
        self.enricher = DescriptionEnricher(repository, rules)
        self.plan_assembler = DevelopmentPlanAssembler(repository, rules, self.enricher, max_items)

    @classmethod
    def from_files(
        cls,
        reference_data_path: Optional[str] = None,
        rules_path: Optional[str] = None,
        settings: Optional[EngineSettings] = None,
    ) -> "PathwayEngine":
        """
        Configures logging at the settings level, then loads the reference
        tables and rules from YAML.

        Raises:
            ReferenceDataError: If either file is missing, unparseable or inconsistent.
        """
        settings = settings or engine_settings
        setup_logging(settings.log_level)
        reference = load_reference_data(reference_data_path or settings.reference_data_path)
        rules = load_recommendation_rules(rules_path or settings.rules_path)
        return cls(InMemoryReferenceRepository(reference), rules, max_items=settings.max_items)

    def score(self, answers: Mapping[Any, Any]) -> ScoringResult:
        return score_answers(answers)

    def recommend(
        self, type_code: str, interest_code: str
    ) -> Tuple[Resolution, List[RecommendationItem], List[RecommendationItem]]:
        """Resolved names, capped and described, for each list."""
        resolution = self.resolver.resolve(type_code, interest_code)
        course_names = select_top_names(resolution.course_names, self.max_items)
        career_names = select_top_names(resolution.career_names, self.max_items)
        courses = self.enricher.enrich(course_names, "course", type_code, interest_code)
        careers = self.enricher.enrich(career_names, "career", type_code, interest_code)
        return resolution, courses, careers

    def evaluate(self, answers: Mapping[Any, Any]) -> AssessmentResult:
        scoring = self.score(answers)
        type_code = scoring.type_code
        interest_code = scoring.interest_code

        resolution, courses, careers = self.recommend(type_code, interest_code)

        course_plan = self.plan_assembler.assemble_plan(
            [item.name for item in courses], type_code, interest_code, "course"
        )
        career_plan = self.plan_assembler.assemble_plan(
            [item.name for item in careers], type_code, interest_code, "career"
        )

        charts = {
            "riasec": build_interest_chart(scoring.interest_scores),
            "mbti": build_type_chart(scoring.type_scores),
        }
        guidance = build_guidance(
            self.repository, self.rules, type_code, interest_code, resolution.explanation
        )

        logger.info(
            f"Assessment evaluated: type={type_code} interest={interest_code} "
            f"tier={resolution.tier} courses={len(courses)} careers={len(careers)}"
        )
        return AssessmentResult(
            scoring=scoring,
            resolution_tier=resolution.tier,
            explanation=resolution.explanation,
            course_recommendations=courses,
            career_recommendations=careers,
            course_path=encode_recommendations(courses),
            career_suggestions=encode_recommendations(careers),
            course_plan=course_plan,
            career_plan=career_plan,
            charts=charts,
            guidance=guidance,
        )

    def evaluate_submission(self, payload: Dict[str, Any]) -> AssessmentResult:
        """
        Validates a submitted payload (``{"answers": {index: value}}``) before evaluating it.

        Raises:
            InvalidSubmissionError: If an index is outside 0-99 or a value outside 1-7.
        """
        try:
            submission = AssessmentSubmission.model_validate(payload)
        except ValidationError as e:
            raise InvalidSubmissionError(f"Invalid assessment submission: {e}") from e
        return self.evaluate(submission.answers)
