"""
Dataset descriptors and the atomic record shapes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional


class Orientation(str, Enum):
    YEAR_KEYED = "year_keyed"          # identifier = year, fields = categories
    CATEGORY_KEYED = "category_keyed"  # identifier = category, fields = years


class ViewKind(str, Enum):
    TREND = "trend"
    COMPOSITION = "composition"
    COMPARISON = "comparison"
    DISTRIBUTION = "distribution"
    RELATIONSHIP = "relationship"
    HIERARCHICAL = "hierarchical"
    GEOGRAPHIC = "geographic"


class NormalizedTuple(NamedTuple):
    """Atomic (category, year, count) fact every record decomposes into."""
    category: str
    year: int
    count: int


@dataclass(frozen=True)
class DatasetDescriptor:
    """Static shape of one supported dataset."""
    id: str
    display_name: str
    file_name: str
    orientation: Orientation
    key_field: str                      # column label in the source CSV
    year_range: tuple[int, int]         # inclusive
    view_kind: ViewKind
    categories: tuple[str, ...] = ()    # ordered vocabulary; empty = free text

    @property
    def is_year_keyed(self) -> bool:
        return self.orientation == Orientation.YEAR_KEYED

    @property
    def id_field(self) -> str:
        """Identifier field name inside a normalized record."""
        return "year" if self.is_year_keyed else "category"

    @property
    def years(self) -> list[int]:
        start, end = self.year_range
        return list(range(start, end + 1))

    @property
    def fields(self) -> list[str]:
        """Non-identifying field names: year strings or category names."""
        if self.is_year_keyed:
            return list(self.categories)
        return [str(y) for y in self.years]

    def contains_year(self, year: int) -> bool:
        start, end = self.year_range
        return start <= year <= end

    def canonical_category(self, label: str) -> str:
        """Snap a label to its vocabulary entry (case-insensitive), else keep it."""
        cleaned = " ".join(str(label).split())
        upper = cleaned.upper()
        for cat in self.categories:
            if cat.upper() == upper:
                return cat
        return cleaned

    def category_rank(self, category: str) -> Optional[int]:
        """Position in the declared vocabulary, or None for free-text labels."""
        try:
            return self.categories.index(category)
        except ValueError:
            return None


@dataclass
class DemographicRow:
    """One generic-fallback row: a year broken out by sex or civil status."""
    kind: str                      # "sex" | "civil_status"
    year: int
    destination: str = "Unknown"
    values: dict[str, int] = field(default_factory=dict)

    def total(self) -> int:
        return sum(v for v in self.values.values() if v > 0)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "year": self.year, "destination": self.destination, **self.values}
