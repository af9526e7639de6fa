"""
PDF document writer working in page millimeters.

Annotations are drawn with a ReportLab canvas. Rendered tile content is
kept as separate one-page PDFs and merged underneath the annotations with
pypdf when the document is saved.
"""

# Standard Library
import contextlib
import io
import typing

# PIP3 modules
import pypdf
import reportlab.lib.pagesizes
import reportlab.pdfgen.canvas

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config


Region = spt.config.Region

DEFAULT_FONT_REGULAR = spt.config.DEFAULT_FONT_REGULAR
mm_to_points = spt.config.mm_to_points
points_to_mm = spt.config.points_to_mm

TEXT_ALIGNMENTS = ("left", "center", "right")


#============================================
def page_size_points(width: float, height: float) -> tuple[float, float]:
	"""
	Convert a paper size in millimeters to an oriented ReportLab page size.

	Args:
		width: Paper width in mm.
		height: Paper height in mm.

	Returns:
		Tuple of (width_pt, height_pt).
	"""
	size = (mm_to_points(width), mm_to_points(height))
	if width > height:
		return reportlab.lib.pagesizes.landscape(size)
	return reportlab.lib.pagesizes.portrait(size)


class PdfDocumentWriter:
	"""
	Drawing surface with a top-left origin and millimeter units.
	"""

	def __init__(self, page_width: float, page_height: float) -> None:
		self.orientation = "landscape" if page_width > page_height else "portrait"
		self._buffer = io.BytesIO()
		self._canvas = reportlab.pdfgen.canvas.Canvas(
			self._buffer,
			pagesize=page_size_points(page_width, page_height),
		)
		self._page_sizes: list[tuple[float, float]] = [(page_width, page_height)]
		self._contents: list[list[tuple[bytes, Region]]] = [[]]
		self._font_name = DEFAULT_FONT_REGULAR
		self._font_size = 10.0
		self._saved = False

	@property
	def page_count(self) -> int:
		return len(self._page_sizes)

	@property
	def page_size(self) -> tuple[float, float]:
		return self._page_sizes[-1]

	#============================================
	def _point(self, x: float, y: float) -> tuple[float, float]:
		page_height = self._page_sizes[-1][1]
		return (mm_to_points(x), mm_to_points(page_height - y))

	#============================================
	def add_page(self, page_width: float, page_height: float) -> None:
		"""
		Finish the current page and start a new one.

		Args:
			page_width: New page width in mm.
			page_height: New page height in mm.
		"""
		self._canvas.showPage()
		self._canvas.setPageSize(page_size_points(page_width, page_height))
		self._page_sizes.append((page_width, page_height))
		self._contents.append([])

	#============================================
	def set_stroke_color(self, rgb: tuple[int, int, int]) -> None:
		self._canvas.setStrokeColorRGB(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)

	def set_fill_color(self, rgb: tuple[int, int, int]) -> None:
		self._canvas.setFillColorRGB(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)

	def set_line_width(self, width: float) -> None:
		self._canvas.setLineWidth(mm_to_points(width))

	def set_dash(self, pattern: typing.Sequence[float] | None = None, phase: float = 0.0) -> None:
		"""
		Set a dash pattern in mm, or a solid line when pattern is empty.
		"""
		if not pattern:
			self._canvas.setDash([], 0)
			return
		self._canvas.setDash([mm_to_points(value) for value in pattern], mm_to_points(phase))

	def set_font(self, font_name: str, font_size: float) -> None:
		"""
		Set the text font; size is in points.
		"""
		self._font_name = font_name
		self._font_size = font_size
		self._canvas.setFont(font_name, font_size)

	#============================================
	def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
		start = self._point(x1, y1)
		end = self._point(x2, y2)
		self._canvas.line(start[0], start[1], end[0], end[1])

	def rect(
		self,
		x: float,
		y: float,
		width: float,
		height: float,
		stroke: bool = True,
		fill: bool = False,
	) -> None:
		# ReportLab anchors rectangles at their bottom-left corner
		left, bottom = self._point(x, y + height)
		self._canvas.rect(
			left,
			bottom,
			mm_to_points(width),
			mm_to_points(height),
			stroke=int(stroke),
			fill=int(fill),
		)

	def circle(self, x: float, y: float, radius: float, stroke: bool = True, fill: bool = False) -> None:
		center = self._point(x, y)
		self._canvas.circle(center[0], center[1], mm_to_points(radius), stroke=int(stroke), fill=int(fill))

	def triangle(
		self,
		points: typing.Sequence[tuple[float, float]],
		stroke: bool = True,
		fill: bool = False,
	) -> None:
		if len(points) != 3:
			raise ValueError(f"A triangle needs 3 points, got {len(points)}")
		self.path(points, close=True, stroke=stroke, fill=fill)

	def path(
		self,
		points: typing.Sequence[tuple[float, float]],
		close: bool = True,
		stroke: bool = True,
		fill: bool = False,
	) -> None:
		"""
		Draw a polyline or polygon through page points.

		Args:
			points: Points in page mm.
			close: Close the path back to the first point.
			stroke: Stroke the outline.
			fill: Fill the interior.
		"""
		if len(points) < 2:
			return
		pdf_path = self._canvas.beginPath()
		first = self._point(*points[0])
		pdf_path.moveTo(first[0], first[1])
		for point in points[1:]:
			x, y = self._point(*point)
			pdf_path.lineTo(x, y)
		if close:
			pdf_path.close()
		self._canvas.drawPath(pdf_path, stroke=int(stroke), fill=int(fill))

	#============================================
	def text(
		self,
		x: float,
		y: float,
		value: str,
		align: str = "left",
		rotation: float = 0.0,
	) -> None:
		"""
		Draw a line of text with its baseline anchored at a page point.

		Args:
			x: Anchor x in mm.
			y: Anchor baseline y in mm.
			value: Text to draw.
			align: "left", "center" or "right" relative to the anchor.
			rotation: Degrees counter-clockwise on paper.
		"""
		if align not in TEXT_ALIGNMENTS:
			raise ValueError(f"Unknown text alignment: {align}")
		anchor = self._point(x, y)
		self._canvas.saveState()
		self._canvas.setFont(self._font_name, self._font_size)
		self._canvas.translate(anchor[0], anchor[1])
		if rotation:
			self._canvas.rotate(rotation)
		if align == "center":
			self._canvas.drawCentredString(0, 0, value)
		elif align == "right":
			self._canvas.drawRightString(0, 0, value)
		else:
			self._canvas.drawString(0, 0, value)
		self._canvas.restoreState()

	def text_width(self, value: str) -> float:
		"""
		Width of a text in mm with the current font.
		"""
		return points_to_mm(self._canvas.stringWidth(value, self._font_name, self._font_size))

	@contextlib.contextmanager
	def saved_state(self) -> typing.Iterator[None]:
		"""
		Scope drawing state changes; restores colors, line width and dash.
		"""
		font = (self._font_name, self._font_size)
		self._canvas.saveState()
		try:
			yield
		finally:
			self._canvas.restoreState()
			self._font_name, self._font_size = font

	#============================================
	def place_content(self, pdf_bytes: bytes, box: Region) -> None:
		"""
		Queue a one-page PDF to be scaled into a box on the current page.

		Args:
			pdf_bytes: Rendered single-page PDF.
			box: Target box in page mm.
		"""
		self._contents[-1].append((pdf_bytes, box))

	#============================================
	def save(self) -> bytes:
		"""
		Finish the document and return the PDF bytes.

		Returns:
			Final PDF document.
		"""
		if self._saved:
			raise RuntimeError("Document already saved")
		self._saved = True
		self._canvas.save()
		self._buffer.seek(0)
		overlay_pages = pypdf.PdfReader(self._buffer).pages

		writer = pypdf.PdfWriter()
		for index, (page_width, page_height) in enumerate(self._page_sizes):
			page_width_pt, page_height_pt = page_size_points(page_width, page_height)
			page = pypdf.PageObject.create_blank_page(width=page_width_pt, height=page_height_pt)
			writer.add_page(page)
			page = writer.pages[-1]
			# merged pages are clipped to their own crop box
			for pdf_bytes, box in self._contents[index]:
				merge_content(page, pdf_bytes, box, page_height)
			# ReportLab skips a trailing page that has no drawing
			if index < len(overlay_pages):
				page.merge_page(overlay_pages[index])

		output = io.BytesIO()
		writer.write(output)
		return output.getvalue()


#============================================
def merge_content(page: pypdf.PageObject, pdf_bytes: bytes, box: Region, page_height: float) -> None:
	"""
	Scale the first page of a PDF into a box on a page.

	Args:
		page: Target page.
		pdf_bytes: Source PDF.
		box: Target box in page mm, top-left origin.
		page_height: Target page height in mm.
	"""
	content_page = pypdf.PdfReader(io.BytesIO(pdf_bytes)).pages[0]
	mediabox = content_page.mediabox
	source_width = float(mediabox.width)
	source_height = float(mediabox.height)
	if source_width <= 0.0 or source_height <= 0.0:
		return
	x_scale = mm_to_points(box.width) / source_width
	y_scale = mm_to_points(box.height) / source_height
	transform = (
		pypdf.Transformation()
		.translate(-float(mediabox.left), -float(mediabox.bottom))
		.scale(x_scale, y_scale)
		.translate(mm_to_points(box.x), mm_to_points(page_height - box.y - box.height))
	)
	page.merge_transformed_page(content_page, transform)
