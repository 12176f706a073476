"""
Reference renderer: draw label element trees onto a ReportLab canvas.
"""

# Standard Library
import json
import pathlib
import re
import typing

# PIP3 modules
import fitz
import reportlab.lib.colors
import reportlab.pdfgen.canvas

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.elements
import chart_label_geometry.helpers
import chart_label_geometry.label
import chart_label_geometry.textsize


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
RenderConfig = clg.config.RenderConfig
RenderResult = clg.config.RenderResult
ResolvedStyle = clg.config.ResolvedStyle
Element = clg.elements.Element

PROGRESS_BAR_WIDTH = clg.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = clg.config.PROGRESS_UPDATE_EVERY
BOX_OUTLINE_COLOR = clg.config.BOX_OUTLINE_COLOR
BOX_OUTLINE_WIDTH = clg.config.BOX_OUTLINE_WIDTH

TRANSFORM_PATTERN = re.compile(r"(\w+)\s*\(([^)]*)\)")
NO_PAINT = ("", "none", "transparent")


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def parse_color(value: typing.Any, warn: typing.Callable[[str], None]) -> reportlab.lib.colors.Color | None:
	"""
	Parse a CSS color into a ReportLab color.

	Args:
		value: Color like "#AABBCC", "red" or "rgb(1,2,3)".
		warn: Warning sink for unknown colors.

	Returns:
		ReportLab color, or None for no paint.
	"""
	if value is None:
		return None
	if isinstance(value, str) and value.strip().lower() in NO_PAINT:
		return None
	try:
		return reportlab.lib.colors.toColor(value)
	except ValueError:
		warn(f"unknown color {value!r}")
		return None


#============================================
def style_value(style: typing.Any, key: str) -> typing.Any:
	"""
	Read a style entry from a ResolvedStyle or a plain mapping.
	"""
	if style is None:
		return None
	if isinstance(style, ResolvedStyle):
		if hasattr(style, key):
			return getattr(style, key)
		return style.extra.get(key)
	return style.get(key)


#============================================
def apply_transform(
	pdf: reportlab.pdfgen.canvas.Canvas,
	transform: str | None,
	page_height: float,
) -> None:
	"""
	Apply an SVG transform string to the canvas.

	Element coordinates are y-down with the origin at the top left; the
	canvas is y-up, so angles flip sign and y offsets flip direction.

	Args:
		pdf: ReportLab canvas.
		transform: Transform string like "rotate(30,100,50)".
		page_height: Page height in points.
	"""
	if not transform:
		return
	for name, raw_args in TRANSFORM_PATTERN.findall(transform):
		args = [float(arg) for arg in re.split(r"[\s,]+", raw_args.strip()) if arg]
		if name == "rotate" and args:
			center_x = args[1] if len(args) > 2 else 0.0
			center_y = page_height - (args[2] if len(args) > 2 else 0.0)
			pdf.translate(center_x, center_y)
			pdf.rotate(-args[0])
			pdf.translate(-center_x, -center_y)
		elif name == "translate" and args:
			offset_y = args[1] if len(args) > 1 else 0.0
			pdf.translate(args[0], -offset_y)
		elif name == "scale" and args:
			scale_y = args[1] if len(args) > 1 else args[0]
			pdf.translate(0.0, page_height)
			pdf.scale(args[0], scale_y)
			pdf.translate(0.0, -page_height)


#============================================
def draw_rect_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: Element,
	page_height: float,
	warn: typing.Callable[[str], None],
	draw_boxes: bool = False,
) -> None:
	"""
	Draw a rect element onto the PDF canvas.

	Args:
		pdf: ReportLab canvas.
		element: Rect element.
		page_height: Page height in points.
		warn: Warning sink.
		draw_boxes: Also outline the rect for debugging.
	"""
	props = element.props
	style = props.get("style") or {}
	fill = parse_color(style_value(style, "fill"), warn)
	stroke = parse_color(style_value(style, "stroke"), warn)
	x = props.get("x", 0.0)
	width = props.get("width", 0.0)
	height = props.get("height", 0.0)
	bottom = page_height - props.get("y", 0.0) - height

	pdf.saveState()
	apply_transform(pdf, props.get("transform"), page_height)
	if fill is not None:
		pdf.setFillColor(fill)
	if stroke is not None:
		pdf.setStrokeColor(stroke)
		pdf.setLineWidth(style_value(style, "stroke_width") or 1.0)
	if fill is not None or stroke is not None:
		pdf.rect(x, bottom, width, height, stroke=int(stroke is not None), fill=int(fill is not None))
	if draw_boxes:
		pdf.setStrokeColorRGB(*BOX_OUTLINE_COLOR)
		pdf.setLineWidth(BOX_OUTLINE_WIDTH)
		pdf.rect(x, bottom, width, height, stroke=1, fill=0)
	pdf.restoreState()


#============================================
def draw_text_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: Element,
	page_height: float,
	warn: typing.Callable[[str], None],
	draw_boxes: bool = False,
) -> None:
	"""
	Draw a text element and its line runs.

	Each run moves a text cursor the way SVG tspans do: an absolute x
	resets it, dx/dy shift it.

	Args:
		pdf: ReportLab canvas.
		element: Text element.
		page_height: Page height in points.
		warn: Warning sink.
		draw_boxes: Also mark the anchor point.
	"""
	props = element.props
	cursor_x = props.get("x", 0.0)
	cursor_y = props.get("y", 0.0)
	rtl = props.get("direction") == "rtl"

	pdf.saveState()
	apply_transform(pdf, props.get("transform"), page_height)
	for tspan in element.children:
		run = tspan.props
		style = run.get("style") or ResolvedStyle()
		if run.get("x") is not None:
			cursor_x = run["x"]
		cursor_x += run.get("dx") or 0.0
		cursor_y += run.get("dy") or 0.0

		text = run.get("text", "")
		font_name = clg.textsize.font_name_for_style(style)
		pdf.setFont(font_name, style.font_size)
		fill = parse_color(style.fill, warn)
		if fill is not None:
			pdf.setFillColor(fill)
		anchor = run.get("text_anchor") or "start"
		if rtl and anchor in ("start", "end"):
			anchor = "end" if anchor == "start" else "start"

		baseline_y = page_height - cursor_y
		if fill is not None:
			if anchor == "middle":
				pdf.drawCentredString(cursor_x, baseline_y, text)
			elif anchor == "end":
				pdf.drawRightString(cursor_x, baseline_y, text)
			else:
				pdf.drawString(cursor_x, baseline_y, text)
		if run.get("x") is None:
			cursor_x += pdf.stringWidth(text, font_name, style.font_size)

	if draw_boxes:
		anchor_y = page_height - props.get("y", 0.0)
		pdf.setStrokeColorRGB(*BOX_OUTLINE_COLOR)
		pdf.setLineWidth(BOX_OUTLINE_WIDTH)
		pdf.line(props.get("x", 0.0) - 3.0, anchor_y, props.get("x", 0.0) + 3.0, anchor_y)
		pdf.line(props.get("x", 0.0), anchor_y - 3.0, props.get("x", 0.0), anchor_y + 3.0)
	pdf.restoreState()


#============================================
def draw_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: Element,
	page_height: float,
	warn: typing.Callable[[str], None] = clg.helpers.warn,
	draw_boxes: bool = False,
) -> None:
	"""
	Draw an element tree onto the PDF canvas.

	Args:
		pdf: ReportLab canvas.
		element: Root element.
		page_height: Page height in points.
		warn: Warning sink.
		draw_boxes: Outline rects and mark anchors.
	"""
	if element.kind == "rect":
		draw_rect_element(pdf, element, page_height, warn, draw_boxes)
		return
	if element.kind == "text":
		draw_text_element(pdf, element, page_height, warn, draw_boxes)
		return
	for child in element.children:
		draw_element(pdf, child, page_height, warn, draw_boxes)


#============================================
def render_labels_to_pdf(
	specs: list[LabelSpec],
	output_path: pathlib.Path,
	config: RenderConfig,
	capabilities: Capabilities | None = None,
) -> RenderResult:
	"""
	Render labels onto a single PDF page.

	Args:
		specs: Label specs, each positioned at its own anchor.
		output_path: Output PDF path.
		config: Render configuration.
		capabilities: Host capabilities.

	Returns:
		RenderResult.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(config.page_width, config.page_height),
	)
	total_labels = len(specs)
	rendered_labels = 0
	background_boxes = 0
	for index, spec in enumerate(specs):
		element = clg.label.render_label(spec, capabilities)
		if element is not None:
			draw_element(pdf, element, config.page_height, capabilities.warn, config.draw_boxes)
			rendered_labels += 1
			background_boxes += len(list(clg.elements.iter_elements(element, "rect")))
		if (index + 1) % PROGRESS_UPDATE_EVERY == 0 or index + 1 == total_labels:
			print_progress("Rendering", index + 1, total_labels)
	if total_labels:
		print()
	pdf.showPage()
	pdf.save()

	result = RenderResult(
		total_labels=total_labels,
		rendered_labels=rendered_labels,
		empty_labels=total_labels - rendered_labels,
		background_boxes=background_boxes,
	)
	return result


#============================================
def render_pdf_to_png(pdf_path: pathlib.Path, png_path: pathlib.Path, dpi: int) -> None:
	"""
	Rasterize the first PDF page to a PNG preview.

	Args:
		pdf_path: Input PDF path.
		png_path: Output PNG path.
		dpi: Raster resolution.
	"""
	with fitz.open(str(pdf_path)) as document:
		page = document.load_page(0)
		pixmap = page.get_pixmap(dpi=dpi, alpha=False)
		pixmap.save(str(png_path))


#============================================
def layout_to_dict(layout: clg.label.LabelLayout) -> dict:
	"""
	Summarise a label layout for the manifest.
	"""
	calculated = layout.calculated
	return {
		"id": clg.elements.to_plain(layout.spec.id),
		"lines": [
			{
				"text": line.text,
				"width": line.width,
				"font_size": line.font_size,
				"line_height": line.line_height,
				"background_dy": line.background_dy,
				"tspan_dy": line.tspan_dy,
			}
			for line in layout.lines
		],
		"anchor": {
			"x": calculated.x,
			"y": calculated.y,
			"direction": calculated.direction,
			"text_anchor": calculated.text_anchor,
			"vertical_anchor": calculated.vertical_anchor,
			"dx": calculated.dx,
			"dy": calculated.dy,
			"transform": calculated.transform,
		},
		"per_line_background": layout.per_line_background,
		"backgrounds": [
			{"x": box.x, "y": box.y, "width": box.width, "height": box.height}
			for box in layout.backgrounds
		],
	}


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	input_path: pathlib.Path,
	specs: list[LabelSpec],
	result: RenderResult,
	config: RenderConfig,
	capabilities: Capabilities | None = None,
) -> None:
	"""
	Write a manifest JSON file with the computed geometry of every label.

	Args:
		manifest_path: Output path.
		input_path: Label spec JSON path.
		specs: Label specs.
		result: Render result.
		config: Render configuration.
		capabilities: Host capabilities.
	"""
	labels = []
	for spec in specs:
		layout = clg.label.compute_label_layout(spec, capabilities)
		labels.append(None if layout is None else layout_to_dict(layout))
	data = {
		"input": str(input_path),
		"total_labels": result.total_labels,
		"rendered_labels": result.rendered_labels,
		"empty_labels": result.empty_labels,
		"background_boxes": result.background_boxes,
		"page": {
			"width": config.page_width,
			"height": config.page_height,
		},
		"labels": labels,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
