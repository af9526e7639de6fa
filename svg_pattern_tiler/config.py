"""
Shared configuration, constants and layout value types.
"""

import dataclasses
import math


MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
PX_TO_MM = MM_PER_INCH / 96.0

UNIT_FACTORS_MM = {
	"mm": 1.0,
	"cm": 10.0,
	"in": MM_PER_INCH,
	"pt": MM_PER_INCH / 72.0,
	"pc": MM_PER_INCH / 6.0,
}

# A4 portrait, used when a document declares no usable size
DEFAULT_DOCUMENT_WIDTH_MM = 210.0
DEFAULT_DOCUMENT_HEIGHT_MM = 297.0

MIN_MARGIN_MM = 10.0
DEFAULT_MARGIN_MM = 10.0
DEFAULT_PAPER = "a4"
PAPER_PRESETS = {
	"a4": (210.0, 297.0),
	"letter": (215.9, 279.4),
	"a0": (841.0, 1189.0),
}

BORDER_NONE = "none"
BORDER_CUT = "cut"
BORDER_GLUE = "glue"
EDGES = ("top", "right", "bottom", "left")

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"

# annotation styling, colors are 0-255 RGB
CUT_BORDER_COLOR = (150, 150, 150)
CUT_BORDER_LINE_WIDTH = 0.2
CUT_BORDER_DASH = (3.0, 3.0)
TILE_LABEL_COLOR = (150, 150, 150)
TILE_LABEL_FONT_SIZE = 8.0
TILE_LABEL_OFFSET = (2.0, 4.0)

MARK_COLOR = (0, 0, 0)
MARK_LINE_WIDTH = 0.2

CROSS_OUTER_LENGTH = 6.0
CROSS_INNER_LENGTH = 2.0

DIAMOND_HALF_SIZE = 3.0
DIAMOND_FILL_COLOR = (60, 60, 60)
DIAMOND_CROSSHAIR_COLOR = (255, 255, 255)
DIAMOND_CROSSHAIR_WIDTH = 0.3

RULER_LENGTH = 50.0
RULER_OFFSET = 5.0
RULER_TICK = 1.5
RULER_LABEL = "5cm"
RULER_LABEL_FONT_SIZE = 7.0
RULER_LABEL_COLOR = (50, 50, 50)
# label positions relative to the start of each ruler line
RULER_H_LABEL_OFFSET = (20.0, -2.0)
RULER_V_LABEL_OFFSET = (-2.0, 35.0)

EDGE_LABEL_TEXT = {
	BORDER_CUT: "[ CUT OUT ]",
	BORDER_GLUE: "[ GLUE ]",
}
EDGE_LABEL_FONT_SIZE = 7.0
EDGE_LABEL_COLOR = (80, 80, 80)
ICON_COLOR = (80, 80, 80)
ICON_LINE_WIDTH = 0.2


@dataclasses.dataclass(frozen=True)
class EdgeCalibration:
	# rotation of the label text, degrees counter-clockwise as seen on paper
	rotation: float
	# label baseline anchor, offset from the diamond center in page mm
	label_dx: float
	label_dy: float
	# icon center, offset from the text end along the rotated text frame
	icon_dx: float
	icon_dy: float


# hand-tuned so rotated labels and icons clear the diamond on every edge
EDGE_CALIBRATION = {
	"top": EdgeCalibration(rotation=0.0, label_dx=0.0, label_dy=-4.5, icon_dx=2.5, icon_dy=-0.9),
	"bottom": EdgeCalibration(rotation=0.0, label_dx=0.0, label_dy=6.5, icon_dx=2.5, icon_dy=-0.9),
	"left": EdgeCalibration(rotation=90.0, label_dx=-4.5, label_dy=0.0, icon_dx=2.6, icon_dy=-0.8),
	"right": EdgeCalibration(rotation=-90.0, label_dx=4.5, label_dy=0.0, icon_dx=2.6, icon_dy=-1.0),
}

PROGRESS_BAR_WIDTH = 20
OUTPUT_SUFFIX = "_tiled.pdf"


@dataclasses.dataclass(frozen=True)
class PaperSpec:
	paper_width: float
	paper_height: float
	margin: float


@dataclasses.dataclass(frozen=True)
class Grid:
	rows: int
	cols: int
	usable_width: float
	usable_height: float

	@property
	def total_tiles(self) -> int:
		return self.rows * self.cols


@dataclasses.dataclass(frozen=True)
class Region:
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class BorderSet:
	top: str = BORDER_NONE
	right: str = BORDER_NONE
	bottom: str = BORDER_NONE
	left: str = BORDER_NONE

	def as_dict(self) -> dict[str, str]:
		return {edge: getattr(self, edge) for edge in EDGES}


@dataclasses.dataclass(frozen=True)
class Tile:
	row: int
	col: int
	source_region: Region
	borders: BorderSet

	@property
	def label(self) -> str:
		return f"{self.row + 1}-{self.col + 1}"


@dataclasses.dataclass(frozen=True)
class AnnotationMark:
	kind: str
	position: tuple[float, float]
	rotation: float = 0.0
	anchor: str | None = None
	text: str = ""


@dataclasses.dataclass
class TilingResult:
	total_tiles: int
	rows: int
	cols: int
	document: bytes


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to PDF points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH / MM_PER_INCH


#============================================
def points_to_mm(value: float) -> float:
	"""
	Convert PDF points to millimeters.
	"""
	return value * MM_PER_INCH / POINTS_PER_INCH


#============================================
def round_half_up(value: float) -> int:
	"""
	Round to the nearest integer with halves going up, so 12.5 gives 13.

	Args:
		value: Value to round.

	Returns:
		Rounded integer.
	"""
	return math.floor(value + 0.5)
