"""
Colors, fonts, fills, borders and alignments for exported workbooks.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
NAVY = "0D3B66"
SKY = "3A86C8"
PALE_SKY = "E7F1FA"
STRIPE = "F4F6F8"
WHITE = "FFFFFF"
BLACK = "000000"
SLATE = "5F6B76"
GREEN = "2E7D32"
RED = "C62828"
TOTAL_BG = "FFF4D6"
GRID = "CBD2D9"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=20, bold=True, color=NAVY)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=SLATE)
SECTION_FONT = Font(name="Calibri", size=13, bold=True, color=NAVY)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=BLACK)
KPI_VALUE_FONT = Font(name="Calibri", size=24, bold=True, color=NAVY)
KPI_LABEL_FONT = Font(name="Calibri", size=9, color=SLATE)
RISE_KPI_FONT = Font(name="Calibri", size=24, bold=True, color=GREEN)
FALL_KPI_FONT = Font(name="Calibri", size=24, bold=True, color=RED)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=NAVY, end_color=NAVY, fill_type="solid")
STRIPE_FILL = PatternFill(start_color=STRIPE, end_color=STRIPE, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_BG, end_color=TOTAL_BG, fill_type="solid")
PEAK_FILL = PatternFill(start_color=PALE_SKY, end_color=PALE_SKY, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color=GRID),
    right=Side(style="thin", color=GRID),
    top=Side(style="thin", color=GRID),
    bottom=Side(style="thin", color=GRID),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=NAVY),
    right=Side(style="thin", color=NAVY),
    top=Side(style="thin", color=NAVY),
    bottom=Side(style="medium", color=SKY),
)
TOTAL_BORDER = Border(
    left=Side(style="thin", color=GRID),
    right=Side(style="thin", color=GRID),
    top=Side(style="medium", color=SLATE),
    bottom=Side(style="medium", color=SLATE),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

HIGHLIGHT_FILLS = {
    "peak": PEAK_FILL,
    "total": TOTAL_FILL,
}
