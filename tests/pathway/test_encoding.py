from services.pathway_engine.encoding import decode_recommendations, encode_recommendations
from services.pathway_engine.models import RecommendationItem


def _items(*pairs):
    return [RecommendationItem(name=name, description=description) for name, description in pairs]


def test_encode_exact_format():
    items = _items(("BS Nursing", "Care for patients"), ("BS Biology", "Study living things"))
    assert encode_recommendations(items) == "BS Nursing: Care for patients; BS Biology: Study living things"


def test_encode_single_item_has_no_separator():
    assert encode_recommendations(_items(("Law", "Study legal systems"))) == "Law: Study legal systems"


def test_encode_empty_list():
    assert encode_recommendations([]) == ""


def test_round_trip_recovers_pairs():
    items = _items(
        ("BS Computer Science", "Master cutting-edge technologies, with practical applications."),
        ("Teacher", "Plans lessons and assesses progress."),
        ("Accountant", "Keeps records accurate: audits, taxes and reports."),
    )
    assert decode_recommendations(encode_recommendations(items)) == items


def test_decode_splits_on_first_colon_only():
    decoded = decode_recommendations("Data Analyst: Ratio: numbers to insight")
    assert decoded == _items(("Data Analyst", "Ratio: numbers to insight"))


def test_decode_entry_without_colon():
    decoded = decode_recommendations("Engineering; Law: Study legal systems")
    assert decoded == _items(("Engineering", ""), ("Law", "Study legal systems"))


def test_decode_legacy_comma_list():
    decoded = decode_recommendations("Engineering, Law , Medicine")
    assert [item.name for item in decoded] == ["Engineering", "Law", "Medicine"]
    assert all(item.description == "" for item in decoded)


def test_decode_ignores_blank_entries():
    assert decode_recommendations("Law: Legal systems; ;") == _items(("Law", "Legal systems"))
    assert decode_recommendations("") == []
    assert decode_recommendations("   ") == []


def test_round_trip_keeps_bare_separators_inside_descriptions():
    items = _items(
        ("BS Chemistry", "Lab work;theory and practice"),
        ("Law", "Study legal systems"),
        ("Statistician", "Ratios:odds and models"),
    )
    assert decode_recommendations(encode_recommendations(items)) == items


def test_round_trip_empty_description():
    items = _items(("Engineering", ""), ("Law", "Study legal systems"))
    assert decode_recommendations(encode_recommendations(items)) == items


def test_decode_legacy_unspaced_separators():
    decoded = decode_recommendations("Engineering:Build things;Law:Legal systems")
    assert decoded == _items(("Engineering", "Build things"), ("Law", "Legal systems"))
