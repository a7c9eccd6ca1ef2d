# services/pathway_engine/development_plan.py
# Builds structured development plans for the top resolved course or career names.

import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel

from .describer import DescriptionEnricher
from .models import (
    CareerDevelopmentPlanEntry,
    CourseDevelopmentPlanEntry,
    DevelopmentPlan,
    RecommendationKind,
    RecommendationRules,
)
from .recommender import DEFAULT_MAX_ITEMS, select_top_names
from .repository import ReferenceRepository, match_name

logger = logging.getLogger(__name__)


def fill_plan_fields(row: Optional[Any], placeholders: BaseModel) -> Dict[str, str]:
    """
    Copies each placeholder-backed field from ``row``; a missing row or a blank
    field gets that field's placeholder text.
    """
    filled = {}
    for field_name, placeholder in placeholders.model_dump().items():
        value = getattr(row, field_name, None) if row is not None else None
        if isinstance(value, str) and value.strip():
            filled[field_name] = value.strip()
        else:
            filled[field_name] = placeholder
    return filled


class DevelopmentPlanAssembler:
    """
    Assembles one plan entry per resolved name (up to ``max_items``), keeping the
    resolver's order. A name whose lookups fail is logged and left out.
    """

    def __init__(
        self,
        repository: ReferenceRepository,
        rules: RecommendationRules,
        enricher: DescriptionEnricher,
        max_items: int = DEFAULT_MAX_ITEMS,
    ):
        self.repository = repository
        self.rules = rules
        self.enricher = enricher
        self.max_items = max_items

    def assemble_plan(
        self,
        names: Iterable[str],
        type_code: str,
        interest_code: str,
        kind: RecommendationKind,
    ) -> DevelopmentPlan:
        entries = []
        for name in select_top_names(names, self.max_items):
            try:
                if kind == "course":
                    entry = self._course_entry(name, type_code, interest_code)
                else:
                    entry = self._career_entry(name, type_code, interest_code)
            except Exception as e:
                logger.error(f"Skipping {kind} plan entry for '{name}': {e}", exc_info=True)
                continue
            entries.append(entry)

        logger.info(f"Assembled {kind} plan with {len(entries)} entries for {type_code}/{interest_code}")
        return DevelopmentPlan(
            type_code=type_code,
            interest_code=interest_code,
            kind=kind,
            entries=entries,
        )

    def _course_entry(self, name: str, type_code: str, interest_code: str) -> CourseDevelopmentPlanEntry:
        description = self.enricher.describe(name, "course", type_code, interest_code)
        row = match_name(self.repository.course_plans(), name, lambda r: r.name)
        if row is None:
            logger.debug(f"No course plan row for '{name}', using placeholders")
        fields = fill_plan_fields(row, self.rules.placeholders.course)
        return CourseDevelopmentPlanEntry(name=name, description=description, **fields)

    def _career_entry(self, name: str, type_code: str, interest_code: str) -> CareerDevelopmentPlanEntry:
        description = self.enricher.describe(name, "career", type_code, interest_code)
        plan_row = match_name(self.repository.career_plans(), name, lambda r: r.name)
        info_row = match_name(self.repository.career_info(), name, lambda r: r.name)

        fields = fill_plan_fields(plan_row, self.rules.placeholders.career)
        fields.update(fill_plan_fields(info_row, self.rules.placeholders.career_info))
        return CareerDevelopmentPlanEntry(name=name, description=description, **fields)
