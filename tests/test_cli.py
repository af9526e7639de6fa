import json
import pathlib

import pytest

import conftest
import svg_pattern_tiler.cli


#============================================
def test_build_paper_spec_presets() -> None:
	"""
	Presets resolve to their paper sizes with the default margin.
	"""
	args = svg_pattern_tiler.cli.parse_args(["in.svg"])
	paper = svg_pattern_tiler.cli.build_paper_spec(args)
	assert (paper.paper_width, paper.paper_height, paper.margin) == (210.0, 297.0, 10.0)

	args = svg_pattern_tiler.cli.parse_args(["in.svg", "-p", "letter"])
	paper = svg_pattern_tiler.cli.build_paper_spec(args)
	assert (paper.paper_width, paper.paper_height) == (215.9, 279.4)

	args = svg_pattern_tiler.cli.parse_args(["in.svg", "--paper", "a0", "--landscape"])
	paper = svg_pattern_tiler.cli.build_paper_spec(args)
	assert (paper.paper_width, paper.paper_height) == (1189.0, 841.0)


#============================================
def test_build_paper_spec_overrides() -> None:
	args = svg_pattern_tiler.cli.parse_args(["in.svg", "-W", "300", "-H", "400", "-M", "15"])
	paper = svg_pattern_tiler.cli.build_paper_spec(args)
	assert (paper.paper_width, paper.paper_height, paper.margin) == (300.0, 400.0, 15.0)


#============================================
def test_default_output_path() -> None:
	path = svg_pattern_tiler.cli.default_output_path(pathlib.Path("patterns/dress.svg"))
	assert path == pathlib.Path("patterns/dress_tiled.pdf")


#============================================
def test_plan_only_prints_summary(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
	"""
	Plan-only runs stop before writing any output.
	"""
	input_path = tmp_path / "square.svg"
	input_path.write_text(conftest.square_svg(400), encoding="utf-8")
	svg_pattern_tiler.cli.main([str(input_path), "--plan-only"])

	captured = capsys.readouterr().out
	assert "Real Size: 400mm x 400mm. Creates 6 tiles (2 rows x 3 cols)." in captured
	assert "Plan only: True" in captured
	assert not (tmp_path / "square_tiled.pdf").exists()


#============================================
def test_main_reports_validation_error(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
	input_path = tmp_path / "square.svg"
	input_path.write_text(conftest.square_svg(400), encoding="utf-8")
	with pytest.raises(SystemExit) as excinfo:
		svg_pattern_tiler.cli.main([str(input_path), "--margin", "9"])
	assert excinfo.value.code == 1
	assert "Error: Margin must be at least 10mm" in capsys.readouterr().out


#============================================
def test_full_run_writes_pdf_and_manifest(tmp_path: pathlib.Path) -> None:
	"""
	A full run writes the tiled PDF next to the input and a JSON manifest.
	"""
	input_path = tmp_path / "square.svg"
	input_path.write_text(conftest.square_svg(400), encoding="utf-8")
	svg_pattern_tiler.cli.main([str(input_path)])

	output_path = tmp_path / "square_tiled.pdf"
	assert output_path.read_bytes().startswith(b"%PDF")

	manifest_path = tmp_path / "square_tiled.pdf.json"
	manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert manifest["total_tiles"] == 6
	assert manifest["grid"]["rows"] == 2
	assert manifest["grid"]["cols"] == 3
	assert [tile["label"] for tile in manifest["tiles"]] == ["1-1", "1-2", "1-3", "2-1", "2-2", "2-3"]
	assert manifest["tiles"][4]["borders"] == {"top": "cut", "right": "glue", "bottom": "none", "left": "cut"}
	assert manifest["tiles"][4]["page"] == 5
