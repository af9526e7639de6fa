import xml.etree.ElementTree as StdElementTree

import pytest

import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.svg_document


SVG_NS = "{http://www.w3.org/2000/svg}"


#============================================
def test_scripts_and_handlers_removed() -> None:
	"""
	Untrusted active content is stripped at load time.
	"""
	svg_text = (
		'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
		'width="100mm" height="100mm" viewBox="0 0 100 100" onload="alert(1)">'
		'<script>alert(2)</script>'
		'<g><script type="text/javascript">alert(3)</script>'
		'<a xlink:href="javascript:alert(4)"><rect width="10" height="10" onclick="alert(5)"/></a>'
		'<a href="https://example.com"><circle r="4"/></a></g>'
		'</svg>'
	)
	document = svg_pattern_tiler.svg_document.load_document(svg_text)
	root = document.root
	assert list(root.iter(f"{SVG_NS}script")) == []
	assert "onload" not in root.attrib
	rect = next(root.iter(f"{SVG_NS}rect"))
	assert "onclick" not in rect.attrib
	links = list(root.iter(f"{SVG_NS}a"))
	assert links[0].attrib == {}
	assert links[1].attrib["href"] == "https://example.com"


#============================================
def test_height_locked_to_view_box_aspect() -> None:
	"""
	A declared height that disagrees with the viewBox aspect is replaced.
	"""
	svg_text = '<svg width="200mm" height="50mm" viewBox="0 0 400 200"></svg>'
	document = svg_pattern_tiler.svg_document.load_document(svg_text)
	assert document.width_mm == pytest.approx(200.0)
	assert document.height_mm == pytest.approx(100.0)
	assert document.declared_height_mm == pytest.approx(50.0)


#============================================
def test_missing_view_box_is_normalized() -> None:
	"""
	Documents without a viewBox get one matching their size in pixels.
	"""
	svg_text = '<svg width="1in" height="2in"></svg>'
	document = svg_pattern_tiler.svg_document.load_document(svg_text)
	assert document.view_box == pytest.approx((0.0, 0.0, 96.0, 192.0))
	assert document.root.attrib["viewBox"] == document.view_box_attribute
	assert document.height_mm == pytest.approx(50.8)


#============================================
@pytest.mark.parametrize(
	"svg_text",
	[
		"<svg",
		"<html><body/></html>",
		'<svg viewBox="0 0 0 10"></svg>',
	],
)
def test_invalid_documents_rejected(svg_text: str) -> None:
	with pytest.raises(svg_pattern_tiler.errors.ValidationError):
		svg_pattern_tiler.svg_document.load_document(svg_text)


#============================================
def test_entity_expansion_rejected() -> None:
	"""
	defusedxml refuses entity declarations.
	"""
	svg_text = (
		'<!DOCTYPE svg [<!ENTITY boom "boom">]>'
		'<svg xmlns="http://www.w3.org/2000/svg"><text>&boom;</text></svg>'
	)
	with pytest.raises(svg_pattern_tiler.errors.ValidationError):
		svg_pattern_tiler.svg_document.load_document(svg_text)


#============================================
def test_build_tile_svg_sets_region() -> None:
	"""
	The tile SVG shows only the requested region at physical size.
	"""
	svg_text = '<svg width="400mm" height="400mm" viewBox="0 0 400 400"><rect width="400" height="400"/></svg>'
	document = svg_pattern_tiler.svg_document.load_document(svg_text)
	region = svg_pattern_tiler.config.Region(x=190.0, y=0.0, width=190.0, height=277.0)
	tile_bytes = svg_pattern_tiler.svg_document.build_tile_svg(document, region, 190.0, 277.0)

	tile_root = StdElementTree.fromstring(tile_bytes)
	assert tile_root.tag == f"{SVG_NS}svg"
	assert tile_root.attrib["width"] == "190.0mm"
	assert tile_root.attrib["height"] == "277.0mm"
	assert tile_root.attrib["viewBox"] == "190.0 0.0 190.0 277.0"
	assert len(list(tile_root.iter(f"{SVG_NS}rect"))) == 1
	# the loaded document itself is untouched
	assert document.root.attrib["viewBox"] == "0 0 400 400"
