# services/pathway_engine/encoding.py
# Wire format for recommendation lists: "Name: Description; Name2: Description2".

from typing import Iterable, List

from .models import RecommendationItem

ENTRY_SEPARATOR = "; "
NAME_SEPARATOR = ": "


def encode_recommendations(items: Iterable[RecommendationItem]) -> str:
    """
    Serialises items as ``Name: Description`` joined by ``"; "``.

    No trailing separator; an empty list encodes to an empty string.
    """
    return ENTRY_SEPARATOR.join(f"{item.name}{NAME_SEPARATOR}{item.description}" for item in items)


def decode_recommendations(text: str) -> List[RecommendationItem]:
    """
    Parses the wire string back into items.

    Entries are split on ``"; "`` and each entry on its first ``": "``, so
    descriptions may contain bare ``;`` and ``:`` characters. An entry without
    a name separator becomes a name with an empty description.

    Older stored values written without the spaced separators are split on bare
    ``;`` and ``:``, and plain comma lists (no ``;`` and no ``:``) on commas.
    """
    if not text or not text.strip():
        return []

    if ENTRY_SEPARATOR in text or NAME_SEPARATOR in text:
        entries = text.split(ENTRY_SEPARATOR)
        name_separator = NAME_SEPARATOR
    elif ";" in text or ":" in text:
        entries = text.split(";")
        name_separator = ":"
    else:
        entries = text.split(",")
        name_separator = ":"

    items = []
    for entry in entries:
        # Stray separators left by older writers
        if not entry.strip("; "):
            continue
        separator = name_separator if name_separator in entry else ":"
        name, _, description = entry.partition(separator)
        name = name.strip()
        if not name:
            continue
        items.append(RecommendationItem(name=name, description=description.strip()))
    return items
