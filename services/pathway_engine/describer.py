# services/pathway_engine/describer.py
# Turns bare course/career names into display descriptions.

import logging
from typing import Iterable, List, Optional

from .definitions import normalise_code
from .models import FieldCategory, RecommendationItem, RecommendationKind, RecommendationRules
from .repository import ReferenceRepository, match_exact, match_partial

logger = logging.getLogger(__name__)


class DescriptionEnricher:
    """
    Resolves a description for a course or career name.

    Order: exact name match in the description table, partial match in the same
    table, then a sentence generated from the field category of the name, the
    type code (learning style) and the first interest letter (career focus).
    Never returns an empty string.
    """

    def __init__(self, repository: ReferenceRepository, rules: RecommendationRules):
        self.repository = repository
        self.rules = rules

    def describe(
        self, name: str, kind: RecommendationKind, type_code: str, interest_code: str
    ) -> str:
        description = self.lookup_description(name, kind)
        if description:
            return description
        return self.generate_description(name, type_code, interest_code)

    def enrich(
        self, names: Iterable[str], kind: RecommendationKind, type_code: str, interest_code: str
    ) -> List[RecommendationItem]:
        return [
            RecommendationItem(name=name, description=self.describe(name, kind, type_code, interest_code))
            for name in names
        ]

    def lookup_description(self, name: str, kind: RecommendationKind) -> Optional[str]:
        """
        Table description for ``name``, or None on a miss or a failed lookup.
        A blank exact row falls through to the partial match.
        """
        try:
            rows = self.repository.descriptions(kind)
            row = match_exact(rows, name, lambda r: r.name)
            if row is None or not row.description.strip():
                row = match_partial(
                    [r for r in rows if r.description.strip()], name, lambda r: r.name
                )
        except Exception as e:
            logger.warning(f"Description lookup failed for {kind} '{name}': {e}", exc_info=True)
            return None

        if row is None:
            return None
        return row.description.strip()

    def classify_field(self, name: str) -> Optional[FieldCategory]:
        """First field category (in configured order) with a keyword contained in the name."""
        lowered = (name or "").lower()
        for category in self.rules.field_categories:
            if any(keyword.lower() in lowered for keyword in category.keywords):
                return category
        return None

    def generate_description(self, name: str, type_code: str, interest_code: str) -> str:
        category = self.classify_field(name)
        action = category.action if category else self.rules.general_action

        if normalise_code(type_code).startswith("I"):
            learning = self.rules.learning_clauses.introverted
        else:
            learning = self.rules.learning_clauses.extraverted

        focus_letter = normalise_code(interest_code)[:1]
        focus = self.rules.career_focus.get(focus_letter, self.rules.career_focus_default)

        logger.debug(
            f"Generated description for '{name}' "
            f"(field={category.id if category else 'general'}, focus={focus_letter or '-'})"
        )
        return f"{action} {learning} {focus}."
