"""
Length parsing and physical size resolution.
"""

# Standard Library
import re

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config


PX_TO_MM = spt.config.PX_TO_MM
UNIT_FACTORS_MM = spt.config.UNIT_FACTORS_MM
DEFAULT_DOCUMENT_WIDTH_MM = spt.config.DEFAULT_DOCUMENT_WIDTH_MM
DEFAULT_DOCUMENT_HEIGHT_MM = spt.config.DEFAULT_DOCUMENT_HEIGHT_MM

LENGTH_PATTERN = re.compile(
	r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-z%]*)",
	re.IGNORECASE,
)
VIEW_BOX_SEPARATOR = re.compile(r"[\s,]+")


#============================================
def parse_length_mm(value: str | None) -> float | None:
	"""
	Convert an SVG length string to millimeters.

	Unsuffixed values and unknown suffixes are read as CSS pixels.

	Args:
		value: Length string like "10cm" or "96".

	Returns:
		Millimeters, or None when the value is missing or not numeric.
	"""
	if value is None:
		return None
	match = LENGTH_PATTERN.match(value)
	if match is None:
		return None
	number = float(match.group(1))
	unit = match.group(2).lower()
	factor = UNIT_FACTORS_MM.get(unit, PX_TO_MM)
	return number * factor


#============================================
def parse_view_box(value: str | None) -> tuple[float, float, float, float] | None:
	"""
	Parse a viewBox attribute.

	Args:
		value: Attribute text like "0 0 100 50" or "0,0,100,50".

	Returns:
		Tuple of (x, y, width, height), or None unless exactly four numbers.
	"""
	if not value:
		return None
	parts = [part for part in VIEW_BOX_SEPARATOR.split(value.strip()) if part]
	if len(parts) != 4:
		return None
	try:
		numbers = [float(part) for part in parts]
	except ValueError:
		return None
	return (numbers[0], numbers[1], numbers[2], numbers[3])


#============================================
def _is_known(value: float | None) -> bool:
	return value is not None and value > 0.0


#============================================
def resolve_dimensions_mm(
	width_attr: str | None,
	height_attr: str | None,
	view_box_attr: str | None,
) -> tuple[float, float]:
	"""
	Resolve a document's physical size, one axis at a time.

	Each axis prefers its explicit attribute, then the viewBox extent read
	as pixels, then the A4 default.

	Args:
		width_attr: Raw width attribute.
		height_attr: Raw height attribute.
		view_box_attr: Raw viewBox attribute.

	Returns:
		Tuple of (width_mm, height_mm).
	"""
	width_mm = parse_length_mm(width_attr)
	height_mm = parse_length_mm(height_attr)

	view_box = parse_view_box(view_box_attr)
	if view_box is not None:
		if not _is_known(width_mm):
			width_mm = view_box[2] * PX_TO_MM
		if not _is_known(height_mm):
			height_mm = view_box[3] * PX_TO_MM

	if not _is_known(width_mm):
		width_mm = DEFAULT_DOCUMENT_WIDTH_MM
	if not _is_known(height_mm):
		height_mm = DEFAULT_DOCUMENT_HEIGHT_MM
	return (width_mm, height_mm)
