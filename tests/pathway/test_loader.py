import pytest
import yaml
from pathlib import Path
from pydantic import ValidationError

from services.pathway_engine.loader import (
    ReferenceDataError,
    load_recommendation_rules,
    load_recommendation_rules_dict,
    load_reference_data,
    load_reference_data_dict,
)
from services.pathway_engine.config import ASSETS_DIR
from services.pathway_engine.models import parse_text_array

RULES_PATH = str(ASSETS_DIR / "recommendation_rules.yml")
REFERENCE_DATA_PATH = str(ASSETS_DIR / "reference_data.yml")


# Helper function to create temporary YAML files for testing
def create_temp_yaml(tmp_path: Path, filename: str, content) -> str:
    filepath = tmp_path / filename
    with open(filepath, 'w') as f:
        yaml.dump(content, f)
    return str(filepath)


@pytest.fixture(scope="module")
def rules_data():
    with open(RULES_PATH, 'r') as f:
        return yaml.safe_load(f)


# --- Shipped assets ---

def test_shipped_reference_data_loads():
    reference = load_reference_data(REFERENCE_DATA_PATH)

    assert reference.mappings
    istj = next(m for m in reference.mappings if m.type_code == "ISTJ")
    assert istj.courses[2] == "BS Business Administration"
    assert istj.careers == ["Accountant", "Auditor", "Financial Analyst", "Budget Officer"]


def test_shipped_rules_cover_all_sixteen_types(rules):
    assert len(rules.type_defaults) == 16
    assert set(rules.interest_suggestions) == set("RIASEC")
    assert [c.id for c in rules.field_categories] == [
        "technology", "business", "healthcare", "science", "social_sciences", "arts", "design",
    ]


# --- Reference data validation ---

def test_duplicate_description_names_rejected():
    data = {
        "course_descriptions": [
            {"name": "BS Nursing", "description": "one"},
            {"name": "bs nursing ", "description": "two"},
        ]
    }
    with pytest.raises(ReferenceDataError, match="Duplicate entry"):
        load_reference_data_dict(data)


def test_duplicate_type_details_rejected():
    data = {"type_details": [{"type_code": "INTJ"}, {"type_code": "intj"}]}
    with pytest.raises(ReferenceDataError, match="type_details"):
        load_reference_data_dict(data)


def test_schema_errors_surface_as_validation_error():
    with pytest.raises(ValidationError):
        load_reference_data_dict({"course_descriptions": [{"name": "No description"}]})


def test_empty_reference_document_is_valid():
    reference = load_reference_data_dict({})
    assert reference.mappings == []


def test_mapping_codes_are_normalised():
    reference = load_reference_data_dict(
        {"mappings": [{"type_code": " intj", "interest_code": "ri ", "courses": ["Law"]}]}
    )
    assert reference.mappings[0].type_code == "INTJ"
    assert reference.mappings[0].interest_code == "RI"


def test_unexpected_array_encoding_becomes_empty_list():
    reference = load_reference_data_dict({"mappings": [{"type_code": "INTJ", "courses": 42}]})
    assert reference.mappings[0].courses == []
    assert not reference.mappings[0].has_recommendations()


# --- Rules validation ---

def test_unknown_type_code_in_rules_rejected(rules_data):
    data = dict(rules_data)
    data["type_defaults"] = dict(rules_data["type_defaults"], XYZW={"courses": ["Law"], "careers": []})
    with pytest.raises(ReferenceDataError, match="Unknown type code"):
        load_recommendation_rules_dict(data)


def test_unknown_interest_letter_rejected(rules_data):
    data = dict(rules_data)
    data["career_focus"] = dict(rules_data["career_focus"], Z="with zeal")
    with pytest.raises(ReferenceDataError, match="Unknown interest letter"):
        load_recommendation_rules_dict(data)


def test_missing_placeholders_rejected(rules_data):
    data = dict(rules_data)
    del data["placeholders"]
    with pytest.raises(ValidationError):
        load_recommendation_rules_dict(data)


# --- File handling ---

def test_missing_file(tmp_path):
    with pytest.raises(ReferenceDataError, match="File not found"):
        load_recommendation_rules(str(tmp_path / "nope.yml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("mappings: [unclosed\n")
    with pytest.raises(ReferenceDataError, match="Error parsing YAML"):
        load_reference_data(str(path))


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    with pytest.raises(ReferenceDataError, match="empty or invalid"):
        load_reference_data(str(path))


def test_round_trip_through_temp_file(tmp_path):
    path = create_temp_yaml(
        tmp_path,
        "reference.yml",
        {"version": "test", "mappings": [{"type_code": "ENFP", "interest_code": "AS", "courses": ["Art"]}]},
    )
    reference = load_reference_data(path)
    assert reference.version == "test"
    assert reference.mappings[0].courses == ["Art"]


# --- Text arrays ---

@pytest.mark.parametrize(
    "value, expected",
    [
        ('{Engineering,"Computer Science",Law}', ["Engineering", "Computer Science", "Law"]),
        ("{}", []),
        ("Engineering, Law", ["Engineering", "Law"]),
        (["  Art ", "", None, "Music"], ["Art", "Music"]),
        (None, []),
        (3.5, []),
    ],
)
def test_parse_text_array(value, expected):
    assert parse_text_array(value) == expected
