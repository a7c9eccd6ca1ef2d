# services/pathway_engine/repository.py
# Read-only access to the reference tables the resolver and enrichers consult.

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from .models import (
    CareerInfoRow,
    CareerPlanRow,
    CoursePlanRow,
    InterestDetails,
    MappingEntry,
    NamedDescription,
    RecommendationKind,
    ReferenceData,
    TypeDetails,
)


Row = TypeVar("Row")


def match_exact(rows: Sequence[Row], name: str, key: Callable[[Row], str]) -> Optional[Row]:
    """First row whose key equals ``name``, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    if not wanted:
        return None
    for row in rows:
        if key(row).strip().lower() == wanted:
            return row
    return None


def match_partial(rows: Sequence[Row], name: str, key: Callable[[Row], str]) -> Optional[Row]:
    """
    First row (in table order) where ``name`` is a substring of the key or the
    key is a substring of ``name``, ignoring case. Blank names never match.
    """
    wanted = name.strip().lower()
    if not wanted:
        return None
    for row in rows:
        candidate = key(row).strip().lower()
        if not candidate:
            continue
        if wanted in candidate or candidate in wanted:
            return row
    return None


def match_name(rows: Sequence[Row], name: str, key: Callable[[Row], str]) -> Optional[Row]:
    return match_exact(rows, name, key) or match_partial(rows, name, key)


class ReferenceRepository(ABC):
    """
    Read-only view over the reference tables.

    Implementations may be backed by a database; any exception they raise is
    caught by the caller and treated as a lookup miss.
    """

    @abstractmethod
    def find_exact_mapping(self, type_code: str, interest_code: str) -> Optional[MappingEntry]:
        ...

    @abstractmethod
    def find_mappings_by_type(self, type_code: str) -> List[MappingEntry]:
        ...

    @abstractmethod
    def find_mappings_by_interest(self, interest_code: str) -> List[MappingEntry]:
        ...

    @abstractmethod
    def find_mappings_by_interest_letters(self, letters: Iterable[str]) -> List[MappingEntry]:
        """Rows whose interest code contains any of ``letters``."""
        ...

    @abstractmethod
    def search_mappings_by_course(self, query: str) -> List[MappingEntry]:
        """Rows with a course name containing ``query``, ignoring case."""
        ...

    @abstractmethod
    def distinct_type_codes(self) -> List[str]:
        ...

    @abstractmethod
    def distinct_interest_codes(self) -> List[str]:
        ...

    @abstractmethod
    def descriptions(self, kind: RecommendationKind) -> List[NamedDescription]:
        ...

    @abstractmethod
    def course_plans(self) -> List[CoursePlanRow]:
        ...

    @abstractmethod
    def career_plans(self) -> List[CareerPlanRow]:
        ...

    @abstractmethod
    def career_info(self) -> List[CareerInfoRow]:
        ...

    @abstractmethod
    def find_type_details(self, type_code: str) -> Optional[TypeDetails]:
        ...

    @abstractmethod
    def find_interest_details(self, interest_name: str) -> Optional[InterestDetails]:
        ...


class InMemoryReferenceRepository(ReferenceRepository):
    """Serves lookups from a loaded ReferenceData document, preserving table order."""

    def __init__(self, reference: Optional[ReferenceData] = None):
        self.reference = reference or ReferenceData()

    def find_exact_mapping(self, type_code: str, interest_code: str) -> Optional[MappingEntry]:
        for entry in self.reference.mappings:
            if entry.type_code == type_code and entry.interest_code == interest_code:
                return entry
        return None

    def find_mappings_by_type(self, type_code: str) -> List[MappingEntry]:
        return [entry for entry in self.reference.mappings if entry.type_code == type_code]

    def find_mappings_by_interest(self, interest_code: str) -> List[MappingEntry]:
        return [entry for entry in self.reference.mappings if entry.interest_code == interest_code]

    def find_mappings_by_interest_letters(self, letters: Iterable[str]) -> List[MappingEntry]:
        wanted = {letter for letter in letters if letter}
        return [
            entry for entry in self.reference.mappings
            if entry.interest_code and wanted.intersection(entry.interest_code)
        ]

    def search_mappings_by_course(self, query: str) -> List[MappingEntry]:
        wanted = (query or "").strip().lower()
        if not wanted:
            return []
        return [
            entry for entry in self.reference.mappings
            if any(wanted in course.lower() for course in entry.courses)
        ]

    def distinct_type_codes(self) -> List[str]:
        return sorted({entry.type_code for entry in self.reference.mappings if entry.type_code})

    def distinct_interest_codes(self) -> List[str]:
        return sorted({entry.interest_code for entry in self.reference.mappings if entry.interest_code})

    def descriptions(self, kind: RecommendationKind) -> List[NamedDescription]:
        if kind == "course":
            return self.reference.course_descriptions
        return self.reference.career_descriptions

    def course_plans(self) -> List[CoursePlanRow]:
        return self.reference.course_plans

    def career_plans(self) -> List[CareerPlanRow]:
        return self.reference.career_plans

    def career_info(self) -> List[CareerInfoRow]:
        return self.reference.career_info

    def find_type_details(self, type_code: str) -> Optional[TypeDetails]:
        return match_exact(self.reference.type_details, type_code, lambda row: row.type_code)

    def find_interest_details(self, interest_name: str) -> Optional[InterestDetails]:
        return match_exact(self.reference.interest_details, interest_name, lambda row: row.interest_name)
