# services/pathway_engine/definitions.py
# Static definitions for the 14 questionnaire dimensions and their question blocks.

from typing import Dict, List, Tuple

QUESTION_COUNT = 100
LIKERT_MIN = 1
LIKERT_MAX = 7

INTEREST_BLOCK_SIZE = 10
TYPE_BLOCK_SIZE = 5

INTEREST_MAX_SCORE = INTEREST_BLOCK_SIZE * LIKERT_MAX  # 70
TYPE_MAX_SCORE = TYPE_BLOCK_SIZE * LIKERT_MAX  # 35

# --- Interest (RIASEC) Dimensions ---
# Order matters: blocks are laid out contiguously from question 0 in this order,
# and the same order breaks ties when ranking the interest code.

INTEREST_DIMENSIONS: List[Dict[str, str]] = [
    {
        "code": "R",
        "letter": "R",
        "label": "Realistic",
        "description": "Realistic - Practical, hands-on, mechanical",
    },
    {
        "code": "I",
        "letter": "I",
        "label": "Investigative",
        "description": "Investigative - Analytical, scientific, intellectual",
    },
    {
        "code": "A",
        "letter": "A",
        "label": "Artistic",
        "description": "Artistic - Creative, expressive, original",
    },
    {
        "code": "S",
        "letter": "S",
        "label": "Social",
        "description": "Social - Helpful, cooperative, caring",
    },
    {
        "code": "E",
        "letter": "E",
        "label": "Enterprising",
        "description": "Enterprising - Leadership, persuasive, ambitious",
    },
    {
        "code": "C",
        "letter": "C",
        "label": "Conventional",
        "description": "Conventional - Organized, detail-oriented, systematic",
    },
]

# --- Type (MBTI) Dimensions ---
# Blocks start at question 60, five questions each.

TYPE_DIMENSIONS: List[Dict[str, str]] = [
    {
        "code": "Ex",
        "letter": "E",
        "label": "Extraversion",
        "description": "Extraversion - Outgoing, social, energetic",
    },
    {
        "code": "In",
        "letter": "I",
        "label": "Introversion",
        "description": "Introversion - Reflective, reserved, focused",
    },
    {
        "code": "Se",
        "letter": "S",
        "label": "Sensing",
        "description": "Sensing - Practical, concrete, detail-oriented",
    },
    {
        "code": "Nt",
        "letter": "N",
        "label": "Intuition",
        "description": "Intuition - Abstract, theoretical, future-focused",
    },
    {
        "code": "Th",
        "letter": "T",
        "label": "Thinking",
        "description": "Thinking - Logical, objective, analytical",
    },
    {
        "code": "Fe",
        "letter": "F",
        "label": "Feeling",
        "description": "Feeling - Values-based, empathetic, personal",
    },
    {
        "code": "Jd",
        "letter": "J",
        "label": "Judging",
        "description": "Judging - Structured, decisive, organized",
    },
    {
        "code": "Pe",
        "letter": "P",
        "label": "Perceiving",
        "description": "Perceiving - Flexible, adaptable, spontaneous",
    },
]

# Opposing pairs, first-listed code wins a tie.
TYPE_PAIRS: List[Tuple[str, str]] = [
    ("Ex", "In"),
    ("Se", "Nt"),
    ("Th", "Fe"),
    ("Jd", "Pe"),
]

INTEREST_LETTERS = [d["letter"] for d in INTEREST_DIMENSIONS]
INTEREST_LABELS = {d["letter"]: d["label"] for d in INTEREST_DIMENSIONS}
TYPE_LETTER_PAIRS = [("E", "I"), ("S", "N"), ("T", "F"), ("J", "P")]


def _build_blocks(dimensions: List[Dict[str, str]], start: int, size: int) -> Dict[str, range]:
    return {
        dim["code"]: range(start + i * size, start + (i + 1) * size)
        for i, dim in enumerate(dimensions)
    }


INTEREST_BLOCKS: Dict[str, range] = _build_blocks(INTEREST_DIMENSIONS, 0, INTEREST_BLOCK_SIZE)
TYPE_BLOCKS: Dict[str, range] = _build_blocks(
    TYPE_DIMENSIONS, len(INTEREST_DIMENSIONS) * INTEREST_BLOCK_SIZE, TYPE_BLOCK_SIZE
)

# Every code across both families, in questionnaire order.
ALL_BLOCKS: Dict[str, range] = {**INTEREST_BLOCKS, **TYPE_BLOCKS}


def normalise_code(code) -> str:
    """Strips and upper-cases a personality code; None becomes an empty string."""
    if code is None:
        return ""
    return str(code).strip().upper()


def is_type_code(code: str) -> bool:
    return len(code) == 4 and all(code[i] in pair for i, pair in enumerate(TYPE_LETTER_PAIRS))


def is_interest_code(code: str) -> bool:
    return len(code) == 2 and code[0] != code[1] and all(letter in INTEREST_LETTERS for letter in code)
