"""
Vector rendering of tile regions with PyMuPDF.
"""

# Standard Library
import typing

# PIP3 modules
import pymupdf

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.svg_document


Region = spt.config.Region
PhysicalDocument = spt.svg_document.PhysicalDocument
RenderError = spt.errors.RenderError


class Renderer(typing.Protocol):
	def render(
		self,
		document: PhysicalDocument,
		region: Region,
		writer: typing.Any,
		box: Region,
	) -> None:
		...


#============================================
def svg_to_pdf_bytes(svg_bytes: bytes) -> bytes:
	"""
	Convert an SVG to a one-page PDF the size of its width and height.

	Args:
		svg_bytes: SVG document.

	Returns:
		PDF bytes.
	"""
	svg_doc = pymupdf.open(stream=svg_bytes, filetype="svg")
	try:
		pdf_bytes = svg_doc.convert_to_pdf()
	finally:
		svg_doc.close()
	return pdf_bytes


class PyMuPdfRenderer:
	"""
	Renders a viewBox region of a document into a box on the writer's page.
	"""

	def render(
		self,
		document: PhysicalDocument,
		region: Region,
		writer: typing.Any,
		box: Region,
	) -> None:
		svg_bytes = spt.svg_document.build_tile_svg(document, region, box.width, box.height)
		try:
			pdf_bytes = svg_to_pdf_bytes(svg_bytes)
		except (RuntimeError, ValueError) as error:
			raise RenderError(f"Rendering failed for region {region}: {error}") from error
		writer.place_content(pdf_bytes, box)
