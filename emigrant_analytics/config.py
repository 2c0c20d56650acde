"""
Emigrant Analytics configuration: paths, fingerprints and vocabularies.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths. Override with EMIGRANT_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("EMIGRANT_DATA_DIR", str(Path.home() / "Emigrant Analytics")))
BASE_FOLDER = _data_dir
INBOX_FOLDER = _data_dir / "inbox"
STORE_FOLDER = _data_dir / "store"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Global year window (generic rows with no active dataset)
# ---------------------------------------------------------------------------
YEAR_MIN = int(os.environ.get("EMIGRANT_YEAR_MIN", "1981"))
YEAR_MAX = int(os.environ.get("EMIGRANT_YEAR_MAX", "2020"))

# ---------------------------------------------------------------------------
# Dataset-family fingerprints (matched against the lower-cased file text)
# ---------------------------------------------------------------------------
FAMILY_FINGERPRINTS = {
    "destination": ["country", "destination", "usa", "canada", "australia"],
    "education": ["educational attainment", "schooling", "college", "graduate"],
    "occupation": ["occupational group", "major occupation", "professional", "housewives"],
    "region": ["region of origin", "place of origin", "region i", "region ii", "ncr"],
}

# Row-level vocabularies used to confirm a family match on a single line
KNOWN_COUNTRIES = [
    "USA", "UNITED STATES OF AMERICA", "CANADA", "AUSTRALIA", "JAPAN", "SAUDI ARABIA",
    "UAE", "UNITED ARAB EMIRATES", "SINGAPORE", "UNITED KINGDOM", "UK", "ITALY",
    "GERMANY", "SPAIN", "FRANCE", "NETHERLANDS", "NORWAY", "SWEDEN", "NEW ZEALAND",
    "SOUTH KOREA",
]

EDUCATION_TERMS = [
    "Not of Schooling Age", "No Formal Education", "Elementary", "High School",
    "Vocational", "College", "Post Graduate", "Non-Formal Education",
]

REGION_TERMS = [
    "Region I", "Region II", "Region III", "Region IV", "Region V", "Region VI",
    "Region VII", "Region VIII", "Region IX", "Region X", "Region XI", "Region XII",
    "Region XIII", "NCR", "CAR", "ARMM",
]

OCCUPATION_TERMS = [
    "Workers", "Professional", "Prof'l", "Manager", "Managerial", "Clerical", "Sales",
    "Service", "Agriculture", "Production", "Housewives", "Students", "Retirees",
    "Minors", "Armed Forces", "Executive", "Administrative", "Out of School",
    "No Occupation",
]

# Civil-status keywords: a row (or file) mentioning any of these is read
# as a six-column civil status breakdown by the generic fallback
CIVIL_STATUS_KEYWORDS = ["single", "married", "widow"]

# ---------------------------------------------------------------------------
# Boilerplate: lines containing a marker, or whose first field is a known
# header label, never carry data
# ---------------------------------------------------------------------------
BOILERPLATE_MARKERS = [
    "NUMBER OF REGISTERED",
    "MAJOR OCCUPATION",
    "SOURCE:",
    "A. EMPLOYED",
    "B. UNEMPLOYED",
    "LEGEND",
    "NOTE:",
]

HEADER_LABELS = {
    "YEAR", "COUNTRY", "REGION", "PROVINCE", "AGE_GROUP", "AGE GROUP", "OCCUPATION",
    "EDUCATIONAL ATTAINMENT", "CIVIL STATUS", "SEX", "DESTINATION",
}

TOTAL_LABELS = ("TOTAL", "GRAND TOTAL", "SUBTOTAL")

# Trailing TOTAL and % columns on family extracts
TRAILING_SUMMARY_COLUMNS = 2

# ---------------------------------------------------------------------------
# Enumeration / pagination defaults
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 200

# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------
CORS_ORIGINS = [o.strip() for o in os.environ.get("EMIGRANT_CORS_ORIGINS", "*").split(",") if o.strip()]
