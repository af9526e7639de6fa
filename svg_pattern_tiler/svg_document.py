"""
SVG loading, sanitizing and per-tile document building.
"""

# Standard Library
import copy
import dataclasses
import xml.etree.ElementTree as StdElementTree

# PIP3 modules
import defusedxml
import defusedxml.ElementTree as ElementTree

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.units


Region = spt.config.Region
ValidationError = spt.errors.ValidationError

PX_TO_MM = spt.config.PX_TO_MM

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
HREF_ATTRIBUTES = ("href", f"{{{XLINK_NAMESPACE}}}href")

StdElementTree.register_namespace("", SVG_NAMESPACE)
StdElementTree.register_namespace("xlink", XLINK_NAMESPACE)


@dataclasses.dataclass
class PhysicalDocument:
	root: StdElementTree.Element
	width_mm: float
	height_mm: float
	view_box: tuple[float, float, float, float]
	# height as declared or defaulted, before the aspect lock
	declared_height_mm: float

	@property
	def view_box_attribute(self) -> str:
		return format_view_box(self.view_box)


#============================================
def local_name(tag: str) -> str:
	"""
	Strip an XML namespace from a tag or attribute name.

	Args:
		tag: Name like "{http://www.w3.org/2000/svg}script".

	Returns:
		Local name like "script".
	"""
	if not isinstance(tag, str):
		return ""
	if "}" in tag:
		return tag.rsplit("}", 1)[1]
	return tag


#============================================
def format_view_box(view_box: tuple[float, float, float, float]) -> str:
	"""
	Format a viewBox tuple as attribute text.
	"""
	return " ".join(str(value) for value in view_box)


#============================================
def strip_active_content(root: StdElementTree.Element) -> int:
	"""
	Remove scripts and event handlers from an SVG tree in place.

	Removes script elements, on* attributes and javascript: links.

	Args:
		root: SVG root element.

	Returns:
		Number of elements and attributes removed.
	"""
	removed = 0
	for parent in root.iter():
		for child in list(parent):
			if local_name(child.tag).lower() == "script":
				parent.remove(child)
				removed += 1
	for element in root.iter():
		for name in list(element.attrib):
			if local_name(name).lower().startswith("on"):
				del element.attrib[name]
				removed += 1
				continue
			if name in HREF_ATTRIBUTES:
				value = element.attrib[name].strip().lower()
				if value.startswith("javascript:"):
					del element.attrib[name]
					removed += 1
	return removed


#============================================
def parse_svg(svg_text: str | bytes) -> StdElementTree.Element:
	"""
	Parse untrusted SVG text into a sanitized element tree.

	Args:
		svg_text: SVG document text.

	Returns:
		SVG root element with active content removed.
	"""
	if isinstance(svg_text, str):
		# encoding declarations are rejected on str input
		svg_text = svg_text.encode("utf-8")
	try:
		root = ElementTree.fromstring(svg_text)
	except (StdElementTree.ParseError, defusedxml.DefusedXmlException) as error:
		raise ValidationError(f"Could not parse SVG: {error}") from error
	if local_name(root.tag) != "svg":
		raise ValidationError(f"Expected an <svg> root element, found <{local_name(root.tag)}>")
	strip_active_content(root)
	return root


#============================================
def load_document(svg_text: str | bytes) -> PhysicalDocument:
	"""
	Load an SVG and resolve its physical size and viewBox.

	The physical height always follows the width and the viewBox aspect
	ratio, even when a different height attribute is declared.

	Args:
		svg_text: SVG document text.

	Returns:
		PhysicalDocument.
	"""
	root = parse_svg(svg_text)
	view_box_attr = root.attrib.get("viewBox")
	width_mm, height_mm = spt.units.resolve_dimensions_mm(
		root.attrib.get("width"),
		root.attrib.get("height"),
		view_box_attr,
	)

	view_box = spt.units.parse_view_box(view_box_attr)
	if view_box is None:
		view_box = (0.0, 0.0, width_mm / PX_TO_MM, height_mm / PX_TO_MM)
		root.set("viewBox", format_view_box(view_box))
	if view_box[2] <= 0.0 or view_box[3] <= 0.0:
		raise ValidationError(f"viewBox must have a positive width and height: {view_box_attr}")

	aspect = view_box[2] / view_box[3]
	document = PhysicalDocument(
		root=root,
		width_mm=width_mm,
		height_mm=width_mm / aspect,
		view_box=view_box,
		declared_height_mm=height_mm,
	)
	return document


#============================================
def build_tile_svg(
	document: PhysicalDocument,
	region: Region,
	width_mm: float,
	height_mm: float,
) -> bytes:
	"""
	Serialize a copy of the document showing only one source region.

	Args:
		document: Loaded document.
		region: viewBox sub-rectangle to show.
		width_mm: Physical output width.
		height_mm: Physical output height.

	Returns:
		UTF-8 SVG bytes.
	"""
	tile_root = copy.deepcopy(document.root)
	if tile_root.tag == "svg":
		# unqualified input, children inherit this default namespace on reparse
		tile_root.set("xmlns", SVG_NAMESPACE)
	tile_root.set("width", f"{width_mm}mm")
	tile_root.set("height", f"{height_mm}mm")
	tile_root.set("viewBox", format_view_box((region.x, region.y, region.width, region.height)))
	return StdElementTree.tostring(tile_root, encoding="utf-8")
