"""
CLI entry points for SVG to tiled PDF conversion.
"""

# Standard Library
import argparse
import json
import pathlib
import time

# local repo modules
import svg_pattern_tiler as spt
import svg_pattern_tiler.compose
import svg_pattern_tiler.config
import svg_pattern_tiler.errors
import svg_pattern_tiler.layout


PaperSpec = spt.config.PaperSpec
TilingResult = spt.config.TilingResult
TilingPlan = spt.layout.TilingPlan
TilingError = spt.errors.TilingError

PAPER_PRESETS = spt.config.PAPER_PRESETS
DEFAULT_PAPER = spt.config.DEFAULT_PAPER
DEFAULT_MARGIN_MM = spt.config.DEFAULT_MARGIN_MM
PROGRESS_BAR_WIDTH = spt.config.PROGRESS_BAR_WIDTH
OUTPUT_SUFFIX = spt.config.OUTPUT_SUFFIX
round_half_up = spt.config.round_half_up


#============================================
def build_paper_spec(args: argparse.Namespace) -> PaperSpec:
	"""
	Build the paper spec from a preset and optional overrides.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PaperSpec.
	"""
	paper_width, paper_height = PAPER_PRESETS[args.paper]
	if args.paper_width is not None:
		paper_width = args.paper_width
	if args.paper_height is not None:
		paper_height = args.paper_height
	if args.landscape:
		paper_width, paper_height = max(paper_width, paper_height), min(paper_width, paper_height)
	return PaperSpec(paper_width=paper_width, paper_height=paper_height, margin=args.margin)


#============================================
def default_output_path(input_path: pathlib.Path) -> pathlib.Path:
	"""
	Output PDF path next to the input, like "pattern_tiled.pdf".
	"""
	return input_path.with_name(input_path.stem + OUTPUT_SUFFIX)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Split an SVG into printable tiled PDF pages at 1:1 scale.")
	parser.add_argument("input_path", help="Input SVG file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	paper_group = parser.add_argument_group("Paper")
	paper_group.add_argument("-p", "--paper", dest="paper", choices=sorted(PAPER_PRESETS), help="Paper size preset.")
	paper_group.add_argument("-W", "--paper-width", dest="paper_width", type=float, default=None, help="Paper width in mm.")
	paper_group.add_argument("-H", "--paper-height", dest="paper_height", type=float, default=None, help="Paper height in mm.")
	paper_group.add_argument("-l", "--landscape", dest="landscape", action="store_true", help="Use the paper in landscape.")
	paper_group.add_argument("-M", "--margin", dest="margin", type=float, default=DEFAULT_MARGIN_MM, help="Margin in mm (at least 10).")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument(
		"--plan-only",
		dest="plan_only",
		action="store_true",
		help="Print the tile plan and stop before rendering.",
	)

	parser.set_defaults(
		paper=DEFAULT_PAPER,
		landscape=False,
		plan_only=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def print_progress(percent: int, message: str) -> None:
	"""
	Print a simple progress bar.

	Args:
		percent: Percent complete.
		message: Status text.
	"""
	filled = round_half_up(PROGRESS_BAR_WIDTH * percent / 100.0)
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"[{bar}] {percent:3d}% {message}", end="\r")


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	output_path: pathlib.Path,
	plan: TilingPlan,
	result: TilingResult,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Input SVG path.
		output_path: Output PDF path.
		plan: Tiling plan.
		result: Tiling result.
	"""
	data = {
		"input": str(input_path),
		"output": str(output_path),
		"paper": {
			"width": plan.paper.paper_width,
			"height": plan.paper.paper_height,
			"margin": plan.paper.margin,
		},
		"document": {
			"width_mm": plan.document.width_mm,
			"height_mm": plan.document.height_mm,
			"declared_height_mm": plan.document.declared_height_mm,
			"view_box": list(plan.document.view_box),
		},
		"grid": {
			"rows": result.rows,
			"cols": result.cols,
			"usable_width": plan.grid.usable_width,
			"usable_height": plan.grid.usable_height,
		},
		"total_tiles": result.total_tiles,
		"tiles": [
			{
				"page": index + 1,
				"label": tile.label,
				"row": tile.row,
				"col": tile.col,
				"borders": tile.borders.as_dict(),
			}
			for index, tile in enumerate(plan.tiles())
		],
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from SVG input to tiled PDF output.

	Args:
		args: Parsed argparse namespace.
	"""
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path) if args.output_path else default_output_path(input_path)
	paper = build_paper_spec(args)

	print("SVG to tiled PDF pipeline")
	print(f"Input SVG: {input_path}")
	print(f"Output PDF: {output_path}")
	print(f"Paper: {paper.paper_width:g} x {paper.paper_height:g}mm, margin {paper.margin:g}mm")

	start_time = time.perf_counter()
	svg_text = input_path.read_bytes()
	plan = spt.layout.plan_document(svg_text, paper)
	print(plan.summary())
	if plan.document.declared_height_mm != plan.document.height_mm:
		print(
			"Declared height {:.1f}mm differs from viewBox aspect; using {:.1f}mm".format(
				plan.document.declared_height_mm,
				plan.document.height_mm,
			)
		)
	if args.plan_only:
		print("Plan only: True")
		return

	render_start = time.perf_counter()
	composer = spt.compose.PageComposer()
	result = composer.compose(plan, on_progress=print_progress)
	render_end = time.perf_counter()
	print()
	output_path.write_bytes(result.document)
	print(f"Pages written: {result.total_tiles}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	write_manifest(pathlib.Path(manifest_path), input_path, output_path, plan, result)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except TilingError as error:
		print(f"Error: {error}")
		raise SystemExit(1) from error
