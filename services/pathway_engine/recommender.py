# services/pathway_engine/recommender.py
# Resolves personality codes into course and career name lists through ordered fallback tiers.

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .definitions import INTEREST_LETTERS, is_interest_code, is_type_code, normalise_code
from .models import (
    CategorizedRecommendations,
    FilterOptions,
    MappingEntry,
    RecommendationRules,
    Resolution,
)
from .repository import ReferenceRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 6

EXACT_MATCH_LIMIT = 10
RELATED_MATCH_LIMIT = 5
TOP_RECOMMENDATION_LIMIT = 10
DEFAULT_SEARCH_LIMIT = 10

TierLookup = Callable[[str, str], Optional[MappingEntry]]


def select_top_names(names: Iterable[str], limit: int = DEFAULT_MAX_ITEMS) -> List[str]:
    """Trimmed, non-blank, first-occurrence-distinct names in their original order, capped at ``limit``."""
    selected: List[str] = []
    seen = set()
    for name in names:
        if name is None:
            continue
        cleaned = str(name).strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        selected.append(cleaned)
        if len(selected) >= limit:
            break
    return selected


class RecommendationResolver:
    """
    Looks up course and career names for a (type code, interest code) pair.

    Tiers are tried in order and the first one that yields a row with names wins:
    exact pair, type code only, interest code only. When none does, a default list
    is synthesized from the per-type table plus per-letter interest suggestions.
    A tier that raises is logged and treated as having found nothing.
    """

    def __init__(self, repository: ReferenceRepository, rules: RecommendationRules):
        self.repository = repository
        self.rules = rules
        self.tiers: List[Tuple[str, TierLookup]] = [
            ("exact", self._exact_tier),
            ("type_only", self._type_only_tier),
            ("interest_only", self._interest_only_tier),
        ]

    def resolve(self, type_code: str, interest_code: str) -> Resolution:
        type_code = normalise_code(type_code)
        interest_code = normalise_code(interest_code)
        if not is_type_code(type_code) or not is_interest_code(interest_code):
            logger.warning(
                f"Malformed personality code type='{type_code}' interest='{interest_code}', "
                f"lookups will likely fall through to defaults"
            )

        for tier_name, lookup in self.tiers:
            entry = self._run_tier(tier_name, lookup, type_code, interest_code)
            if entry is not None:
                logger.info(f"Resolved {type_code}/{interest_code} at tier '{tier_name}'")
                return self._resolution_from_entry(tier_name, entry, type_code, interest_code)

        logger.info(f"No mapping row for {type_code}/{interest_code}, synthesizing defaults")
        return self.synthesize_defaults(type_code, interest_code)

    def _run_tier(
        self, tier_name: str, lookup: TierLookup, type_code: str, interest_code: str
    ) -> Optional[MappingEntry]:
        try:
            entry = lookup(type_code, interest_code)
        except Exception as e:
            logger.warning(
                f"Recommendation tier '{tier_name}' failed for {type_code}/{interest_code}: {e}",
                exc_info=True,
            )
            return None
        if entry is None or not entry.has_recommendations():
            return None
        return entry

    # --- Tiers ---

    def _exact_tier(self, type_code: str, interest_code: str) -> Optional[MappingEntry]:
        return self.repository.find_exact_mapping(type_code, interest_code)

    def _type_only_tier(self, type_code: str, interest_code: str) -> Optional[MappingEntry]:
        return _first_with_names(self.repository.find_mappings_by_type(type_code))

    def _interest_only_tier(self, type_code: str, interest_code: str) -> Optional[MappingEntry]:
        return _first_with_names(self.repository.find_mappings_by_interest(interest_code))

    def _resolution_from_entry(
        self, tier_name: str, entry: MappingEntry, type_code: str, interest_code: str
    ) -> Resolution:
        course_names = list(entry.courses)
        career_names = list(entry.careers)
        if not course_names or not career_names:
            # A row carrying only one list borrows the other from the defaults
            defaults = self.synthesize_defaults(type_code, interest_code)
            course_names = course_names or defaults.course_names
            career_names = career_names or defaults.career_names
        return Resolution(
            tier=tier_name,
            course_names=course_names,
            career_names=career_names,
            explanation=entry.explanation,
        )

    # --- Synthesized defaults ---

    def synthesize_defaults(self, type_code: str, interest_code: str) -> Resolution:
        """Per-type curated lists followed by suggestions for each RIASEC letter in the interest code."""
        type_code = normalise_code(type_code)
        interest_code = normalise_code(interest_code)

        base = self.rules.type_defaults.get(type_code, self.rules.fallback_defaults)
        course_names = list(base.courses)
        career_names = list(base.careers)

        for letter in INTEREST_LETTERS:
            if letter not in interest_code:
                continue
            suggestions = self.rules.interest_suggestions.get(letter)
            if suggestions is None:
                continue
            course_names.extend(suggestions.courses)
            career_names.extend(suggestions.careers)

        return Resolution(
            tier="synthesized",
            course_names=course_names,
            career_names=career_names,
            explanation=None,
        )

    # --- Categorized browsing ---

    def categorize(self, type_code: str, interest_code: str) -> CategorizedRecommendations:
        """
        Mapping rows grouped into exact pair matches, other rows for the type code,
        and other rows sharing an interest letter, plus a combined top list.
        """
        type_code = normalise_code(type_code)
        interest_code = normalise_code(interest_code)

        type_rows = self.repository.find_mappings_by_type(type_code)
        exact_rows = [entry for entry in type_rows if entry.interest_code == interest_code]
        interest_rows = self.repository.find_mappings_by_interest_letters(list(interest_code))

        top_rows: List[MappingEntry] = []
        for entry in exact_rows + type_rows + interest_rows:
            if len(top_rows) >= TOP_RECOMMENDATION_LIMIT:
                break
            if entry not in top_rows:
                top_rows.append(entry)

        logger.debug(
            f"Categorized {type_code}/{interest_code}: exact={len(exact_rows)} "
            f"type={len(type_rows)} interest={len(interest_rows)}"
        )
        return CategorizedRecommendations(
            type_code=type_code,
            interest_code=interest_code,
            exact_matches=exact_rows[:EXACT_MATCH_LIMIT],
            type_matches=_without(type_rows, exact_rows)[:RELATED_MATCH_LIMIT],
            interest_matches=_without(interest_rows, exact_rows)[:RELATED_MATCH_LIMIT],
            top_recommendations=top_rows,
            total_exact_matches=len(exact_rows),
            total_type_matches=len(type_rows),
            total_interest_matches=len(interest_rows),
        )

    def search_courses(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[MappingEntry]:
        """Mapping rows offering a course whose name contains ``query``."""
        return self.repository.search_mappings_by_course(query)[:limit]

    def filter_options(self) -> FilterOptions:
        return FilterOptions(
            type_codes=self.repository.distinct_type_codes(),
            interest_codes=self.repository.distinct_interest_codes(),
        )


def _without(entries: List[MappingEntry], excluded: List[MappingEntry]) -> List[MappingEntry]:
    return [entry for entry in entries if entry not in excluded]


def _first_with_names(entries: List[MappingEntry]) -> Optional[MappingEntry]:
    for entry in entries:
        if entry.has_recommendations():
            return entry
    return None
