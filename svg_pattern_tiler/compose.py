"""
Page composition: render each tile and annotate it on its own page.
"""

# Standard Library
import typing

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.annotate
import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.layout
import svg_pattern_tiler.pdf_writer
import svg_pattern_tiler.render


PaperSpec = spt.config.PaperSpec
TilingResult = spt.config.TilingResult
TilingPlan = spt.layout.TilingPlan
ConversionCancelled = spt.errors.ConversionCancelled
round_half_up = spt.config.round_half_up

ProgressCallback = typing.Callable[[int, str], None]
CancelCheck = typing.Callable[[], bool]
WriterFactory = typing.Callable[[float, float], typing.Any]


class PageComposer:
	"""
	Drives the per-tile render and annotate sequence in row-major order.

	The renderer and writer factory are injected so the composer can run
	against fakes.
	"""

	def __init__(
		self,
		renderer: typing.Any | None = None,
		writer_factory: WriterFactory | None = None,
	) -> None:
		if renderer is None:
			renderer = spt.render.PyMuPdfRenderer()
		if writer_factory is None:
			writer_factory = spt.pdf_writer.PdfDocumentWriter
		self.renderer = renderer
		self.writer_factory = writer_factory

	#============================================
	def compose(
		self,
		plan: TilingPlan,
		on_progress: ProgressCallback | None = None,
		should_cancel: CancelCheck | None = None,
	) -> TilingResult:
		"""
		Render and annotate every tile of a plan into one document.

		Args:
			plan: Validated tiling plan.
			on_progress: Called with (percent, message) before each render.
			should_cancel: Checked between tiles; True aborts the conversion.

		Returns:
			TilingResult with the serialized document.
		"""
		paper = plan.paper
		grid = plan.grid
		total_tiles = grid.total_tiles
		box = spt.annotate.content_box(grid, paper.margin)
		writer = self.writer_factory(paper.paper_width, paper.paper_height)

		for index, tile in enumerate(plan.tiles()):
			if should_cancel is not None and should_cancel():
				raise ConversionCancelled(f"Conversion cancelled before tile {tile.label}")
			if index > 0:
				writer.add_page(paper.paper_width, paper.paper_height)
			if on_progress is not None:
				percent = round_half_up(100.0 * (index + 1) / total_tiles)
				on_progress(percent, f"Generating Tile {tile.label}...")
			self.renderer.render(plan.document, tile.source_region, writer, box)
			spt.annotate.draw_tile_annotations(writer, tile, grid, paper.margin)

		document = writer.save()
		return TilingResult(
			total_tiles=total_tiles,
			rows=grid.rows,
			cols=grid.cols,
			document=document,
		)


#============================================
def generate_tiled_pdf(
	svg_text: str | bytes,
	paper: PaperSpec,
	on_progress: ProgressCallback | None = None,
	renderer: typing.Any | None = None,
	writer_factory: WriterFactory | None = None,
	should_cancel: CancelCheck | None = None,
) -> TilingResult:
	"""
	Convert one SVG document into a tiled, annotated PDF.

	Args:
		svg_text: SVG document text.
		paper: Paper size and margin in mm.
		on_progress: Optional progress callback.
		renderer: Optional renderer, PyMuPDF by default.
		writer_factory: Optional writer factory, ReportLab/pypdf by default.
		should_cancel: Optional cancellation check.

	Returns:
		TilingResult.
	"""
	plan = spt.layout.plan_document(svg_text, paper)
	composer = PageComposer(renderer=renderer, writer_factory=writer_factory)
	return composer.compose(plan, on_progress=on_progress, should_cancel=should_cancel)
