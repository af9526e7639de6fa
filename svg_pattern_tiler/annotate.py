"""
Assembly and print-accuracy marks drawn around each tile.

Mark geometry is computed by pure functions returning AnnotationMark
values; the draw_* functions turn them into writer primitives. All
positions are page millimeters, origin top-left, y down.
"""

# Standard Library
import typing

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config
import svg_pattern_tiler.geometry


AnnotationMark = spt.config.AnnotationMark
Grid = spt.config.Grid
Region = spt.config.Region
Tile = spt.config.Tile
Affine2D = spt.geometry.Affine2D

BORDER_NONE = spt.config.BORDER_NONE
EDGES = spt.config.EDGES
DEFAULT_FONT_REGULAR = spt.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = spt.config.DEFAULT_FONT_BOLD
CUT_BORDER_COLOR = spt.config.CUT_BORDER_COLOR
CUT_BORDER_LINE_WIDTH = spt.config.CUT_BORDER_LINE_WIDTH
CUT_BORDER_DASH = spt.config.CUT_BORDER_DASH
TILE_LABEL_COLOR = spt.config.TILE_LABEL_COLOR
TILE_LABEL_FONT_SIZE = spt.config.TILE_LABEL_FONT_SIZE
TILE_LABEL_OFFSET = spt.config.TILE_LABEL_OFFSET
MARK_COLOR = spt.config.MARK_COLOR
MARK_LINE_WIDTH = spt.config.MARK_LINE_WIDTH
CROSS_OUTER_LENGTH = spt.config.CROSS_OUTER_LENGTH
CROSS_INNER_LENGTH = spt.config.CROSS_INNER_LENGTH
DIAMOND_HALF_SIZE = spt.config.DIAMOND_HALF_SIZE
DIAMOND_FILL_COLOR = spt.config.DIAMOND_FILL_COLOR
DIAMOND_CROSSHAIR_COLOR = spt.config.DIAMOND_CROSSHAIR_COLOR
DIAMOND_CROSSHAIR_WIDTH = spt.config.DIAMOND_CROSSHAIR_WIDTH
RULER_LENGTH = spt.config.RULER_LENGTH
RULER_OFFSET = spt.config.RULER_OFFSET
RULER_TICK = spt.config.RULER_TICK
RULER_LABEL = spt.config.RULER_LABEL
RULER_LABEL_FONT_SIZE = spt.config.RULER_LABEL_FONT_SIZE
RULER_LABEL_COLOR = spt.config.RULER_LABEL_COLOR
RULER_H_LABEL_OFFSET = spt.config.RULER_H_LABEL_OFFSET
RULER_V_LABEL_OFFSET = spt.config.RULER_V_LABEL_OFFSET
EDGE_LABEL_TEXT = spt.config.EDGE_LABEL_TEXT
EDGE_LABEL_FONT_SIZE = spt.config.EDGE_LABEL_FONT_SIZE
EDGE_LABEL_COLOR = spt.config.EDGE_LABEL_COLOR
EDGE_CALIBRATION = spt.config.EDGE_CALIBRATION
ICON_COLOR = spt.config.ICON_COLOR
ICON_LINE_WIDTH = spt.config.ICON_LINE_WIDTH

Point = tuple[float, float]
Segment = tuple[Point, Point]

# outward direction of each marked corner; top-left holds the ruler
CORNER_DIRECTIONS = {
	"top-right": (1.0, -1.0),
	"bottom-left": (-1.0, 1.0),
	"bottom-right": (1.0, 1.0),
}

# glyphs in the text frame, centered on the origin, y down
SCISSORS_LOOPS = [(-1.3, -0.6), (-1.3, 0.6)]
SCISSORS_LOOP_RADIUS = 0.45
SCISSORS_BLADES = [
	((-0.9, -0.4), (1.5, 0.45)),
	((-0.9, 0.4), (1.5, -0.45)),
]
DROP_TIP = [(0.0, -1.5), (-0.75, 0.1), (0.75, 0.1)]
DROP_BULB_CENTER = (0.0, 0.35)
DROP_BULB_RADIUS = 0.78


#============================================
def content_box(grid: Grid, margin: float) -> Region:
	"""
	Box on the page that receives the rendered tile.
	"""
	return Region(x=margin, y=margin, width=grid.usable_width, height=grid.usable_height)


#============================================
def edge_midpoints(box: Region) -> dict[str, Point]:
	center_x = box.x + box.width / 2.0
	center_y = box.y + box.height / 2.0
	return {
		"top": (center_x, box.y),
		"right": (box.x + box.width, center_y),
		"bottom": (center_x, box.y + box.height),
		"left": (box.x, center_y),
	}


#============================================
def corner_points(box: Region) -> dict[str, Point]:
	right = box.x + box.width
	bottom = box.y + box.height
	return {
		"top-left": (box.x, box.y),
		"top-right": (right, box.y),
		"bottom-left": (box.x, bottom),
		"bottom-right": (right, bottom),
	}


#============================================
def neighbor_edges(tile: Tile, grid: Grid) -> list[str]:
	"""
	Edges of a tile that touch another tile.

	Args:
		tile: Tile.
		grid: Tile grid.

	Returns:
		Edge names in top, right, bottom, left order.
	"""
	edges = []
	if tile.row > 0:
		edges.append("top")
	if tile.col < grid.cols - 1:
		edges.append("right")
	if tile.row < grid.rows - 1:
		edges.append("bottom")
	if tile.col > 0:
		edges.append("left")
	return edges


#============================================
def corner_cross_marks(box: Region) -> list[AnnotationMark]:
	corners = corner_points(box)
	return [
		AnnotationMark(kind="cross", position=corners[name], anchor=name)
		for name in CORNER_DIRECTIONS
	]


#============================================
def cross_segments(mark: AnnotationMark) -> list[Segment]:
	"""
	Arms of a corner cross, long outward and short inward.

	Args:
		mark: Cross mark anchored at a corner.

	Returns:
		Horizontal and vertical segments.
	"""
	x, y = mark.position
	dir_x, dir_y = CORNER_DIRECTIONS[mark.anchor]
	horizontal = (
		(x - dir_x * CROSS_INNER_LENGTH, y),
		(x + dir_x * CROSS_OUTER_LENGTH, y),
	)
	vertical = (
		(x, y - dir_y * CROSS_INNER_LENGTH),
		(x, y + dir_y * CROSS_OUTER_LENGTH),
	)
	return [horizontal, vertical]


#============================================
def diamond_marks(tile: Tile, grid: Grid, box: Region) -> list[AnnotationMark]:
	midpoints = edge_midpoints(box)
	return [
		AnnotationMark(kind="diamond", position=midpoints[edge], anchor=edge)
		for edge in neighbor_edges(tile, grid)
	]


#============================================
def diamond_points(center: Point, half_size: float = DIAMOND_HALF_SIZE) -> list[Point]:
	x, y = center
	return [
		(x, y - half_size),
		(x + half_size, y),
		(x, y + half_size),
		(x - half_size, y),
	]


#============================================
def ruler_marks(box: Region) -> list[AnnotationMark]:
	"""
	Scale rulers in the margin beside the top-left corner.

	The horizontal ruler sits above the content box and the vertical one to
	its left, both anchored to the content box rather than the paper edge.

	Args:
		box: Content box.

	Returns:
		Ruler and ruler label marks.
	"""
	start_x = box.x - RULER_OFFSET
	start_y = box.y - RULER_OFFSET
	horizontal_start = (start_x, start_y)
	vertical_start = (start_x, box.y)
	return [
		AnnotationMark(kind="ruler", position=horizontal_start, rotation=0.0, anchor="horizontal"),
		AnnotationMark(kind="ruler", position=vertical_start, rotation=-90.0, anchor="vertical"),
		AnnotationMark(
			kind="ruler_label",
			position=(start_x + RULER_H_LABEL_OFFSET[0], start_y + RULER_H_LABEL_OFFSET[1]),
			anchor="horizontal",
			text=RULER_LABEL,
		),
		AnnotationMark(
			kind="ruler_label",
			position=(start_x + RULER_V_LABEL_OFFSET[0], box.y + RULER_V_LABEL_OFFSET[1]),
			rotation=90.0,
			anchor="vertical",
			text=RULER_LABEL,
		),
	]


#============================================
def ruler_segments(mark: AnnotationMark) -> list[Segment]:
	"""
	Ruler line and its two end ticks.

	Args:
		mark: Ruler mark; rotation -90 runs down the page.

	Returns:
		Segments in page mm.
	"""
	transform = Affine2D.rotation(mark.rotation).then(Affine2D.translation(*mark.position))
	local_segments = [
		((0.0, 0.0), (RULER_LENGTH, 0.0)),
		((0.0, -RULER_TICK), (0.0, RULER_TICK)),
		((RULER_LENGTH, -RULER_TICK), (RULER_LENGTH, RULER_TICK)),
	]
	return [(transform.apply(start), transform.apply(end)) for start, end in local_segments]


#============================================
def edge_label_marks(tile: Tile, box: Region) -> list[AnnotationMark]:
	"""
	Cut and glue labels for every edge that carries an instruction.

	Args:
		tile: Tile with its border instructions.
		box: Content box.

	Returns:
		Label marks, anchored at the text baseline center.
	"""
	midpoints = edge_midpoints(box)
	borders = tile.borders.as_dict()
	marks = []
	for edge in EDGES:
		instruction = borders[edge]
		if instruction == BORDER_NONE:
			continue
		calibration = EDGE_CALIBRATION[edge]
		mid_x, mid_y = midpoints[edge]
		marks.append(
			AnnotationMark(
				kind=f"{instruction}_label",
				position=(mid_x + calibration.label_dx, mid_y + calibration.label_dy),
				rotation=calibration.rotation,
				anchor=edge,
				text=EDGE_LABEL_TEXT[instruction],
			)
		)
	return marks


#============================================
def icon_transform(mark: AnnotationMark, text_width: float) -> Affine2D:
	"""
	Transform from glyph coordinates to the page for a label's icon.

	The icon sits just past the end of the centered label text, in the
	rotated frame of the text.

	Args:
		mark: Edge label mark.
		text_width: Width of the label text in mm.

	Returns:
		Affine2D.
	"""
	calibration = EDGE_CALIBRATION[mark.anchor]
	offset_x = text_width / 2.0 + calibration.icon_dx
	return (
		Affine2D.translation(offset_x, calibration.icon_dy)
		.then(Affine2D.rotation(mark.rotation))
		.then(Affine2D.translation(*mark.position))
	)


#============================================
def draw_cut_border(writer: typing.Any, box: Region) -> None:
	with writer.saved_state():
		writer.set_stroke_color(CUT_BORDER_COLOR)
		writer.set_line_width(CUT_BORDER_LINE_WIDTH)
		writer.set_dash(CUT_BORDER_DASH)
		writer.rect(box.x, box.y, box.width, box.height)
		writer.set_dash(None)


#============================================
def draw_tile_label(writer: typing.Any, tile: Tile, box: Region) -> None:
	with writer.saved_state():
		writer.set_font(DEFAULT_FONT_REGULAR, TILE_LABEL_FONT_SIZE)
		writer.set_fill_color(TILE_LABEL_COLOR)
		writer.text(box.x + TILE_LABEL_OFFSET[0], box.y + TILE_LABEL_OFFSET[1], f"Tile: {tile.label}")


#============================================
def draw_corner_crosses(writer: typing.Any, box: Region) -> None:
	with writer.saved_state():
		writer.set_stroke_color(MARK_COLOR)
		writer.set_line_width(MARK_LINE_WIDTH)
		for mark in corner_cross_marks(box):
			for start, end in cross_segments(mark):
				writer.line(start[0], start[1], end[0], end[1])


#============================================
def draw_diamonds(writer: typing.Any, tile: Tile, grid: Grid, box: Region) -> None:
	"""
	Overlap diamonds with a light crosshair that stays visible under tape.
	"""
	for mark in diamond_marks(tile, grid, box):
		x, y = mark.position
		with writer.saved_state():
			writer.set_stroke_color(MARK_COLOR)
			writer.set_fill_color(DIAMOND_FILL_COLOR)
			writer.set_line_width(MARK_LINE_WIDTH)
			writer.path(diamond_points(mark.position), close=True, stroke=True, fill=True)
			writer.set_stroke_color(DIAMOND_CROSSHAIR_COLOR)
			writer.set_line_width(DIAMOND_CROSSHAIR_WIDTH)
			writer.line(x - DIAMOND_HALF_SIZE, y, x + DIAMOND_HALF_SIZE, y)
			writer.line(x, y - DIAMOND_HALF_SIZE, x, y + DIAMOND_HALF_SIZE)


#============================================
def draw_scale_ruler(writer: typing.Any, box: Region) -> None:
	with writer.saved_state():
		writer.set_stroke_color(MARK_COLOR)
		writer.set_line_width(MARK_LINE_WIDTH)
		writer.set_font(DEFAULT_FONT_REGULAR, RULER_LABEL_FONT_SIZE)
		writer.set_fill_color(RULER_LABEL_COLOR)
		for mark in ruler_marks(box):
			if mark.kind == "ruler":
				for start, end in ruler_segments(mark):
					writer.line(start[0], start[1], end[0], end[1])
				continue
			writer.text(mark.position[0], mark.position[1], mark.text, rotation=mark.rotation)


#============================================
def draw_scissors(writer: typing.Any, transform: Affine2D) -> None:
	for center in transform.apply_all(SCISSORS_LOOPS):
		writer.circle(center[0], center[1], SCISSORS_LOOP_RADIUS, stroke=True, fill=False)
	for start, end in SCISSORS_BLADES:
		page_start = transform.apply(start)
		page_end = transform.apply(end)
		writer.line(page_start[0], page_start[1], page_end[0], page_end[1])


#============================================
def draw_drop(writer: typing.Any, transform: Affine2D) -> None:
	writer.triangle(transform.apply_all(DROP_TIP), stroke=False, fill=True)
	center = transform.apply(DROP_BULB_CENTER)
	writer.circle(center[0], center[1], DROP_BULB_RADIUS, stroke=False, fill=True)


#============================================
def draw_edge_labels(writer: typing.Any, tile: Tile, box: Region) -> None:
	"""
	Rotated cut/glue text with a scissors or drop icon after it.

	Args:
		writer: Document writer.
		tile: Tile with its border instructions.
		box: Content box.
	"""
	for mark in edge_label_marks(tile, box):
		with writer.saved_state():
			writer.set_font(DEFAULT_FONT_BOLD, EDGE_LABEL_FONT_SIZE)
			writer.set_fill_color(EDGE_LABEL_COLOR)
			writer.text(mark.position[0], mark.position[1], mark.text, align="center", rotation=mark.rotation)
			transform = icon_transform(mark, writer.text_width(mark.text))
			writer.set_stroke_color(ICON_COLOR)
			writer.set_fill_color(ICON_COLOR)
			writer.set_line_width(ICON_LINE_WIDTH)
			if mark.kind == "cut_label":
				draw_scissors(writer, transform)
			else:
				draw_drop(writer, transform)


#============================================
def draw_tile_annotations(writer: typing.Any, tile: Tile, grid: Grid, margin: float) -> None:
	"""
	Draw every mark for one tile on the writer's current page.

	Args:
		writer: Document writer.
		tile: Tile being drawn.
		grid: Tile grid.
		margin: Page margin in mm.
	"""
	box = content_box(grid, margin)
	draw_cut_border(writer, box)
	draw_tile_label(writer, tile, box)
	draw_corner_crosses(writer, box)
	draw_diamonds(writer, tile, grid, box)
	draw_scale_ruler(writer, box)
	draw_edge_labels(writer, tile, box)
