# services/pathway_engine/loader.py
# Loads and validates the YAML reference tables and recommendation rules.

import logging
from typing import Any, Dict, Iterable

import yaml
from pydantic import ValidationError

from .definitions import INTEREST_LETTERS, is_type_code
from .models import RecommendationRules, ReferenceData

logger = logging.getLogger(__name__)


class ReferenceDataError(ValueError):
    """Custom exception for reference data or rules problems not covered by Pydantic."""
    pass


def _check_unique(names: Iterable[str], table: str) -> None:
    seen = set()
    for name in names:
        key = name.strip().lower()
        if key in seen:
            raise ReferenceDataError(f"Duplicate entry '{name}' in {table}")
        seen.add(key)


def load_reference_data_dict(data: Dict[str, Any]) -> ReferenceData:
    """
    Validates raw reference tables against the ReferenceData model
    and checks that every name-keyed table is unique per name.
    """
    try:
        reference = ReferenceData.model_validate(data)
    except ValidationError as e:
        # Schema problems surface as Pydantic's own error
        raise e

    _check_unique((row.name for row in reference.course_descriptions), "course_descriptions")
    _check_unique((row.name for row in reference.career_descriptions), "career_descriptions")
    _check_unique((row.name for row in reference.course_plans), "course_plans")
    _check_unique((row.name for row in reference.career_plans), "career_plans")
    _check_unique((row.name for row in reference.career_info), "career_info")
    _check_unique((row.type_code for row in reference.type_details), "type_details")
    _check_unique((row.interest_name for row in reference.interest_details), "interest_details")

    logger.info(
        f"Loaded reference data version {reference.version}: "
        f"{len(reference.mappings)} mappings, "
        f"{len(reference.course_descriptions)} course descriptions, "
        f"{len(reference.career_descriptions)} career descriptions"
    )
    return reference


def load_recommendation_rules_dict(data: Dict[str, Any]) -> RecommendationRules:
    """
    Validates the rules document and checks that its keys use known
    type codes and RIASEC letters.
    """
    rules = RecommendationRules.model_validate(data)

    for type_code in rules.type_defaults:
        if not is_type_code(type_code):
            raise ReferenceDataError(f"Unknown type code in type_defaults: {type_code}")
    for letter in rules.interest_suggestions:
        if letter not in INTEREST_LETTERS:
            raise ReferenceDataError(f"Unknown interest letter in interest_suggestions: {letter}")
    for letter in rules.career_focus:
        if letter not in INTEREST_LETTERS:
            raise ReferenceDataError(f"Unknown interest letter in career_focus: {letter}")

    _check_unique((category.id for category in rules.field_categories), "field_categories")
    for category in rules.field_categories:
        if not category.keywords:
            raise ReferenceDataError(f"Field category '{category.id}' has no keywords")

    return rules


def _read_yaml(file_path: str) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ReferenceDataError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ReferenceDataError(f"Error parsing YAML file {file_path}: {e}")

    if not isinstance(data, dict):
        raise ReferenceDataError(f"YAML file is empty or invalid: {file_path}")
    return data


def load_reference_data(file_path: str) -> ReferenceData:
    """Loads reference tables from a YAML file."""
    return load_reference_data_dict(_read_yaml(file_path))


def load_recommendation_rules(file_path: str) -> RecommendationRules:
    """Loads recommendation rules (defaults, clauses, placeholders) from a YAML file."""
    return load_recommendation_rules_dict(_read_yaml(file_path))
