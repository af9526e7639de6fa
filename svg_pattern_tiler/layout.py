"""
Grid planning, tile coordinate mapping and border instructions.
"""

# Standard Library
import dataclasses
import math
import typing

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.svg_document


PaperSpec = spt.config.PaperSpec
Grid = spt.config.Grid
Region = spt.config.Region
BorderSet = spt.config.BorderSet
Tile = spt.config.Tile
PhysicalDocument = spt.svg_document.PhysicalDocument
ValidationError = spt.errors.ValidationError
LayoutError = spt.errors.LayoutError
round_half_up = spt.config.round_half_up

MIN_MARGIN_MM = spt.config.MIN_MARGIN_MM
BORDER_NONE = spt.config.BORDER_NONE
BORDER_CUT = spt.config.BORDER_CUT
BORDER_GLUE = spt.config.BORDER_GLUE


@dataclasses.dataclass
class TilingPlan:
	document: PhysicalDocument
	paper: PaperSpec
	grid: Grid

	def tiles(self) -> typing.Iterator[Tile]:
		"""
		Yield every tile in row-major order.
		"""
		for row in range(self.grid.rows):
			for col in range(self.grid.cols):
				yield build_tile(self.document, self.grid, row, col)

	def summary(self) -> str:
		return (
			f"Real Size: {round_half_up(self.document.width_mm)}mm x {round_half_up(self.document.height_mm)}mm. "
			f"Creates {self.grid.total_tiles} tiles "
			f"({self.grid.rows} rows x {self.grid.cols} cols)."
		)


#============================================
def validate_paper(paper: PaperSpec) -> None:
	"""
	Reject paper settings that break the printing policy.

	Args:
		paper: Paper specification.
	"""
	if not paper.paper_width > 0.0 or not paper.paper_height > 0.0:
		raise ValidationError(
			f"Paper size must be positive, got {paper.paper_width} x {paper.paper_height}mm"
		)
	if not paper.margin >= MIN_MARGIN_MM:
		raise ValidationError(f"Margin must be at least {MIN_MARGIN_MM:g}mm")


#============================================
def plan_grid(
	width_mm: float,
	height_mm: float,
	paper_width: float,
	paper_height: float,
	margin: float,
) -> Grid:
	"""
	Compute the tile grid covering a physical extent.

	The last row and column may be only partly used.

	Args:
		width_mm: Document width.
		height_mm: Document height.
		paper_width: Paper width.
		paper_height: Paper height.
		margin: Margin on every side.

	Returns:
		Grid.
	"""
	usable_width = paper_width - 2.0 * margin
	usable_height = paper_height - 2.0 * margin
	if usable_width <= 0.0 or usable_height <= 0.0:
		raise LayoutError(
			f"Margins larger than paper: usable area is {usable_width:g} x {usable_height:g}mm"
		)
	cols = math.ceil(width_mm / usable_width)
	rows = math.ceil(height_mm / usable_height)
	return Grid(rows=rows, cols=cols, usable_width=usable_width, usable_height=usable_height)


#============================================
def map_tile_region(
	view_box: tuple[float, float, float, float],
	width_mm: float,
	height_mm: float,
	grid: Grid,
	row: int,
	col: int,
) -> Region:
	"""
	Map a grid cell to the viewBox sub-rectangle it shows.

	Args:
		view_box: Document viewBox (x, y, width, height).
		width_mm: Document physical width.
		height_mm: Document physical height.
		grid: Tile grid.
		row: Zero based row.
		col: Zero based column.

	Returns:
		Region in viewBox units.
	"""
	vx, vy, vw, vh = view_box
	scale_x = vw / width_mm
	scale_y = vh / height_mm
	return Region(
		x=vx + col * grid.usable_width * scale_x,
		y=vy + row * grid.usable_height * scale_y,
		width=grid.usable_width * scale_x,
		height=grid.usable_height * scale_y,
	)


#============================================
def resolve_borders(row: int, col: int, total_rows: int, total_cols: int) -> BorderSet:
	"""
	Decide the assembly instruction for each edge of a tile.

	Tiles overlap to the right and below, so a tile's top and left edges
	are cut and its bottom and right edges carry glue.

	Args:
		row: Zero based row.
		col: Zero based column.
		total_rows: Grid rows.
		total_cols: Grid columns.

	Returns:
		BorderSet.
	"""
	return BorderSet(
		top=BORDER_NONE if row == 0 else BORDER_CUT,
		right=BORDER_NONE if col == total_cols - 1 else BORDER_GLUE,
		bottom=BORDER_NONE if row == total_rows - 1 else BORDER_GLUE,
		left=BORDER_NONE if col == 0 else BORDER_CUT,
	)


#============================================
def build_tile(document: PhysicalDocument, grid: Grid, row: int, col: int) -> Tile:
	region = map_tile_region(document.view_box, document.width_mm, document.height_mm, grid, row, col)
	borders = resolve_borders(row, col, grid.rows, grid.cols)
	return Tile(row=row, col=col, source_region=region, borders=borders)


#============================================
def plan_document(svg_text: str | bytes, paper: PaperSpec) -> TilingPlan:
	"""
	Validate inputs, load the document and plan its grid.

	Args:
		svg_text: SVG document text.
		paper: Paper specification.

	Returns:
		TilingPlan.
	"""
	validate_paper(paper)
	document = spt.svg_document.load_document(svg_text)
	grid = plan_grid(
		document.width_mm,
		document.height_mm,
		paper.paper_width,
		paper.paper_height,
		paper.margin,
	)
	return TilingPlan(document=document, paper=paper, grid=grid)
