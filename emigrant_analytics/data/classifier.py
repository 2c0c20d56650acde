"""
Heuristic classifier & row parser for CSV extracts with no header contract.

A file is fingerprinted into dataset families from its lower-cased text, then
each line is classified independently in a fixed priority order:

    destination > education > region > occupation > generic

Family rows carry a category label followed by positional year columns;
generic rows are located by a 4-digit year token and read as a sex or civil
status breakdown.
"""
from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass, field
from typing import Optional

from emigrant_analytics.config import (
    FAMILY_FINGERPRINTS, KNOWN_COUNTRIES, EDUCATION_TERMS, REGION_TERMS, OCCUPATION_TERMS,
    CIVIL_STATUS_KEYWORDS, BOILERPLATE_MARKERS, HEADER_LABELS, TOTAL_LABELS,
    TRAILING_SUMMARY_COLUMNS, YEAR_MIN, YEAR_MAX,
)
from emigrant_analytics.data.errors import EmptyOrUnrecognizedFormat
from emigrant_analytics.data.normalize import clean_label, parse_count, parse_year
from emigrant_analytics.data.registry import (
    ALL_COUNTRIES, CIVIL_STATUSES, SEXES, FAMILY_DATASETS, get_descriptor,
)
from emigrant_analytics.data.schemas import DatasetDescriptor, DemographicRow, NormalizedTuple

FAMILY_PRIORITY = ("destination", "education", "region", "occupation")
SHORT_TOKEN_LEN = 4


def _term_pattern(terms: list[str]) -> re.Pattern:
    """Case-insensitive alternation that only matches whole words."""
    alternation = "|".join(re.escape(t) for t in sorted(terms, key=len, reverse=True))
    return re.compile(rf"(?<![A-Za-z])(?:{alternation})(?![A-Za-z])", re.IGNORECASE)


_COUNTRY_RE = _term_pattern(KNOWN_COUNTRIES)
_ROW_PATTERNS = {
    "education": _term_pattern(EDUCATION_TERMS),
    "region": _term_pattern(REGION_TERMS),
    "occupation": _term_pattern(OCCUPATION_TERMS),
}
_ALL_COUNTRIES_UPPER = {c.upper() for c in ALL_COUNTRIES}
_HAS_LETTER_RE = re.compile(r"[A-Za-z]")
_NUMERIC_CELL_RE = re.compile(r"\d[\d,]*")
_YEAR_CELL_RE = re.compile(r"(?:19|20)\d\d")


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class ParseResult:
    """Facts recovered from one raw CSV text."""
    families: list[str] = field(default_factory=list)
    tuples_by_dataset: dict[str, list[NormalizedTuple]] = field(default_factory=dict)
    demographics: list[DemographicRow] = field(default_factory=list)
    rows_read: int = 0
    rows_skipped: int = 0

    @property
    def tuples(self) -> list[NormalizedTuple]:
        """Flat list of every family-row tuple."""
        return [t for rows in self.tuples_by_dataset.values() for t in rows]

    def is_empty(self) -> bool:
        return not self.tuples and not self.demographics

    def dataset_tuples(self, dataset_id: str) -> list[NormalizedTuple]:
        """Tuples destined for one dataset, demographic rows included."""
        out = list(self.tuples_by_dataset.get(dataset_id, []))
        for row in self.demographics:
            if FAMILY_DATASETS.get(row.kind) != dataset_id:
                continue
            out.extend(
                NormalizedTuple(cat, row.year, count)
                for cat, count in row.values.items() if count > 0
            )
        return out

    def to_dict(self) -> dict:
        return {
            "families": self.families,
            "rows_read": self.rows_read,
            "rows_skipped": self.rows_skipped,
            "tuples": {
                ds: [t._asdict() for t in rows] for ds, rows in self.tuples_by_dataset.items()
            },
            "demographics": [row.to_dict() for row in self.demographics],
        }


# ---------------------------------------------------------------------------
# Fingerprinting
# ---------------------------------------------------------------------------

def _fingerprint_matcher(keywords: list[str]):
    """Phrases match as substrings; short tokens ("ncr", "usa") only as whole words."""
    phrases = [kw for kw in keywords if len(kw) > SHORT_TOKEN_LEN]
    tokens = [kw for kw in keywords if len(kw) <= SHORT_TOKEN_LEN]
    token_re = _term_pattern(tokens) if tokens else None
    return lambda lowered: (
        any(kw in lowered for kw in phrases)
        or (token_re is not None and bool(token_re.search(lowered)))
    )


_FINGERPRINTS = {fam: _fingerprint_matcher(kws) for fam, kws in FAMILY_FINGERPRINTS.items()}


def detect_families(text: str) -> list[str]:
    """Dataset families whose keywords appear anywhere in the text, in priority order."""
    lowered = text.lower()
    return [fam for fam in FAMILY_PRIORITY if _FINGERPRINTS[fam](lowered)]


def is_year_header(fields: list[str]) -> bool:
    """Rows whose numeric cells are a run of consecutive years (column headers)."""
    numeric = [f.strip() for f in fields if _NUMERIC_CELL_RE.fullmatch(f.strip())]
    if len(numeric) < 3 or not all(_YEAR_CELL_RE.fullmatch(f) for f in numeric):
        return False
    years = [int(f) for f in numeric]
    return all(b - a == 1 for a, b in zip(years, years[1:]))


def is_boilerplate(line: str, fields: list[str]) -> bool:
    """Totals, legends, source citations, and header rows."""
    upper = line.upper()
    if any(marker in upper for marker in BOILERPLATE_MARKERS):
        return True
    first = clean_label(fields[0]).upper() if fields else ""
    if first in HEADER_LABELS or is_year_header(fields):
        return True
    return first.startswith(TOTAL_LABELS)


def is_known_country(label: str) -> bool:
    upper = label.upper()
    return upper in _ALL_COUNTRIES_UPPER or bool(_COUNTRY_RE.search(label))


# ---------------------------------------------------------------------------
# Row classification
# ---------------------------------------------------------------------------

def classify_row(fields: list[str], line: str, families: list[str]) -> str:
    """Return the family a row belongs to, or "generic"."""
    label = clean_label(fields[0]) if fields else ""
    labelled = bool(_HAS_LETTER_RE.search(label))

    if "destination" in families and labelled and is_known_country(label):
        return "destination"
    for fam in ("education", "region", "occupation"):
        if fam not in families or not labelled:
            continue
        pattern = _ROW_PATTERNS[fam]
        if pattern.search(label) or pattern.search(line):
            return fam
    return "generic"


def parse_family_row(fields: list[str], descriptor: DatasetDescriptor) -> list[NormalizedTuple]:
    """Read a labelled row as sequential year columns from the dataset's base year.

    The last two columns (TOTAL, %) are never read; non-positive counts are dropped.
    """
    label = clean_label(fields[0])
    if not label:
        return []
    category = descriptor.canonical_category(label)
    start, end = descriptor.year_range
    last = len(fields) - TRAILING_SUMMARY_COLUMNS

    out = []
    for offset, idx in enumerate(range(1, last)):
        year = start + offset
        if year > end:
            break
        count = parse_count(fields[idx])
        if count > 0:
            out.append(NormalizedTuple(category, year, count))
    return out


def _find_year_column(fields: list[str], year_range: tuple[int, int]) -> tuple[int, Optional[int]]:
    lo, hi = year_range
    for idx, token in enumerate(fields):
        year = parse_year(token)
        if year is not None and lo <= year <= hi:
            return idx, year
    return -1, None


def parse_generic_row(
    fields: list[str],
    line: str,
    year_range: tuple[int, int],
    civil_file: bool = False,
    destination_file: bool = False,
) -> Optional[DemographicRow]:
    """Locate the year column and read the following columns as a breakdown.

    A "single"-type keyword (in the line or anywhere in the file) or at least
    seven fields selects the six civil status columns; otherwise at least four
    fields select (male, female). Returns None for rows with no positive value.
    """
    year_idx, year = _find_year_column(fields, year_range)
    if year is None:
        return None

    def col(offset: int) -> int:
        idx = year_idx + offset
        return parse_count(fields[idx]) if idx < len(fields) else 0

    lowered = line.lower()
    has_keyword = civil_file or any(kw in lowered for kw in CIVIL_STATUS_KEYWORDS)
    if has_keyword or len(fields) >= 7:
        row = DemographicRow("civil_status", year)
        row.values = {name: col(i) for i, name in enumerate(CIVIL_STATUSES, 1)}
    elif len(fields) >= 4:
        row = DemographicRow("sex", year)
        row.values = {name: col(i) for i, name in enumerate(SEXES, 1)}
    else:
        return None

    if destination_file:
        for k in range(min(3, len(fields))):
            if k == year_idx:
                continue
            candidate = clean_label(fields[k])
            if candidate and is_known_country(candidate):
                row.destination = candidate
                break

    if not any(v > 0 for v in row.values.values()):
        return None
    return row


# ---------------------------------------------------------------------------
# Whole-file entry point
# ---------------------------------------------------------------------------

def _split_line(line: str) -> list[str]:
    return next(csv.reader(io.StringIO(line)), [])


def classify_csv(text: str, year_range: tuple[int, int] | None = None) -> ParseResult:
    """Turn raw CSV text of unknown layout into normalized facts.

    ``year_range`` bounds the generic fallback's year search (defaults to the
    global YEAR_MIN..YEAR_MAX window). Raises EmptyOrUnrecognizedFormat when
    no usable row is found.
    """
    year_range = year_range or (YEAR_MIN, YEAR_MAX)
    families = detect_families(text)
    lowered = text.lower()
    civil_file = any(kw in lowered for kw in CIVIL_STATUS_KEYWORDS)
    result = ParseResult(families=families)

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        fields = [f.strip() for f in _split_line(line)]
        if sum(1 for f in fields if f) < 3 or is_boilerplate(line, fields):
            result.rows_skipped += 1
            continue

        family = classify_row(fields, line, families)
        if family != "generic":
            descriptor = get_descriptor(FAMILY_DATASETS[family])
            tuples = parse_family_row(fields, descriptor)
            if tuples:
                result.tuples_by_dataset.setdefault(descriptor.id, []).extend(tuples)
                result.rows_read += 1
            else:
                result.rows_skipped += 1
            continue

        row = parse_generic_row(
            fields, line, year_range,
            civil_file=civil_file,
            destination_file="destination" in families,
        )
        if row is None:
            result.rows_skipped += 1
            continue
        result.demographics.append(row)
        result.rows_read += 1

    if result.is_empty():
        raise EmptyOrUnrecognizedFormat(
            "No valid data found in CSV file",
            families=families,
            rows_skipped=result.rows_skipped,
        )
    return result
