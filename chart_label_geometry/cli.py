"""
CLI entry points for rendering label specs from JSON.
"""

# Standard Library
import argparse
import dataclasses
import json
import pathlib
import time

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.config
import chart_label_geometry.render


LabelSpec = clg.config.LabelSpec
RenderConfig = clg.config.RenderConfig

DEFAULT_PAGE_WIDTH = clg.config.DEFAULT_PAGE_WIDTH
DEFAULT_PAGE_HEIGHT = clg.config.DEFAULT_PAGE_HEIGHT
DEFAULT_PNG_DPI = clg.config.DEFAULT_PNG_DPI

# props that only make sense as live Python objects
NON_JSON_FIELDS = {
	"scale",
	"background_component",
	"text_component",
	"tspan_component",
	"group_component",
}
SPEC_FIELDS = {field.name for field in dataclasses.fields(LabelSpec)}


#============================================
def build_label_spec(data: dict, index: int) -> LabelSpec:
	"""
	Build a LabelSpec from one JSON object.

	Args:
		data: Decoded JSON object with LabelSpec field names.
		index: Position in the input list, for error messages.

	Returns:
		LabelSpec.
	"""
	if not isinstance(data, dict):
		raise ValueError(f"Label {index}: expected an object, got {type(data).__name__}")
	unknown = sorted(set(data) - SPEC_FIELDS)
	if unknown:
		raise ValueError(f"Label {index}: unknown keys {', '.join(unknown)}")
	unsupported = sorted(set(data) & NON_JSON_FIELDS)
	if unsupported:
		raise ValueError(f"Label {index}: keys not supported in JSON input: {', '.join(unsupported)}")
	for key in ("x", "y"):
		value = data.get(key)
		if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
			raise ValueError(f"Label {index}: {key} must be a number")
	return LabelSpec(**data)


#============================================
def load_label_specs(path: pathlib.Path) -> list[LabelSpec]:
	"""
	Load label specs from a JSON file holding a list of objects.

	Args:
		path: JSON file path.

	Returns:
		List of LabelSpec.
	"""
	with path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	if not isinstance(data, list):
		raise ValueError(f"{path}: expected a JSON list of label objects")
	return [build_label_spec(entry, index) for index, entry in enumerate(data)]


#============================================
def build_render_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	return RenderConfig(
		page_width=args.page_width,
		page_height=args.page_height,
		draw_boxes=args.draw_boxes,
		png_dpi=args.png_dpi,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out chart labels from JSON specs and render them to PDF.")
	parser.add_argument("input", help="JSON file with a list of label specs.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("--png", dest="png_path", default=None, help="Also write a PNG preview of the page.")
	output_group.add_argument("--dpi", dest="png_dpi", type=int, default=DEFAULT_PNG_DPI, help="PNG preview resolution.")

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("--page-width", dest="page_width", type=float, default=DEFAULT_PAGE_WIDTH, help="Page width in points.")
	page_group.add_argument("--page-height", dest="page_height", type=float, default=DEFAULT_PAGE_HEIGHT, help="Page height in points.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-d", "--draw-boxes", dest="draw_boxes", action="store_true", help="Outline background boxes and mark anchors.")
	behavior_group.add_argument("-D", "--no-draw-boxes", dest="draw_boxes", action="store_false", help="Disable debug outlines.")

	parser.set_defaults(draw_boxes=False)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Load specs, render the PDF and write the manifest.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Chart label geometry")
	print(f"Input: {args.input}")
	print(f"Output PDF: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	print(f"Draw boxes: {args.draw_boxes}")

	start_time = time.perf_counter()
	input_path = pathlib.Path(args.input)
	specs = load_label_specs(input_path)
	print(f"Labels loaded: {len(specs)}")

	config = build_render_config(args)
	output_path = pathlib.Path(args.output_path)
	render_start = time.perf_counter()
	result = clg.render.render_labels_to_pdf(specs, output_path, config)
	render_end = time.perf_counter()
	print(f"Labels rendered: {result.rendered_labels}")
	print(f"Labels empty: {result.empty_labels}")
	print(f"Background boxes: {result.background_boxes}")

	if args.png_path:
		clg.render.render_pdf_to_png(output_path, pathlib.Path(args.png_path), config.png_dpi)
		print(f"PNG preview written: {args.png_path}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	clg.render.write_manifest(pathlib.Path(manifest_path), input_path, specs, result, config)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
