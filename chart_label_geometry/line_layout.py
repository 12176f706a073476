"""
Per-line measurement and vertical stacking.
"""

# Standard Library
import math
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.geometry
import chart_label_geometry.resolve


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
CalculatedProps = clg.config.CalculatedProps
LineLayout = clg.config.LineLayout
Padding = clg.config.Padding

style_for_line = clg.resolve.style_for_line
padding_for_line = clg.geometry.padding_for_line


#============================================
def size_dimensions(size: typing.Any) -> tuple[float, float]:
	"""
	Read (width, height) from a measurement result.

	Measurement capabilities may return an object with width/height
	attributes or a mapping with the same keys.
	"""
	if isinstance(size, typing.Mapping):
		return (size.get("width", 0.0), size.get("height", 0.0))
	return (size.width, size.height)


#============================================
def get_tspan_dy(
	prev_font_size: float,
	prev_line_height: float,
	font_size: float,
	line_height: float,
	prev_cap_height_px: float,
	cap_height_px: float,
	prev_padding: Padding,
) -> int:
	"""
	Baseline-to-baseline delta between two stacked lines.

	Moves past the remaining half of the previous line box and its padding,
	then into the current line box, correcting for the gap between cap
	height and font size on both lines so mixed font sizes stay aligned.

	Args:
		prev_font_size: Font size of the previous line.
		prev_line_height: Line height multiplier of the previous line.
		font_size: Font size of this line.
		line_height: Line height multiplier of this line.
		prev_cap_height_px: Cap height of the previous line in pixels.
		cap_height_px: Cap height of this line in pixels.
		prev_padding: Background padding of the previous line.

	Returns:
		Delta in whole pixels.
	"""
	return math.floor(
		-0.5 * prev_font_size
		- 0.5 * (prev_font_size * prev_line_height)
		+ prev_font_size * prev_line_height
		+ prev_padding.top
		+ prev_padding.bottom
		+ 0.5 * font_size
		+ 0.5 * font_size * line_height
		- (font_size - cap_height_px) * 0.5
		+ (prev_font_size - prev_cap_height_px) * 0.5
	)


#============================================
def get_line_layouts(
	spec: LabelSpec,
	calculated: CalculatedProps,
	capabilities: Capabilities | None = None,
) -> tuple[LineLayout, ...]:
	"""
	Measure every line and compute its vertical deltas.

	``background_dy`` stacks line boxes edge to edge from the anchor y;
	``tspan_dy`` is the baseline delta handed to the text renderer.

	Args:
		spec: Evaluated spec with resolved lines.
		calculated: Calculated props.
		capabilities: Host capabilities.

	Returns:
		One LineLayout per line.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	layouts = []
	for index, text in enumerate(spec.text):
		style = style_for_line(spec.style, index)
		prev_style = style_for_line(spec.style, index - 1)
		line_height = calculated.line_heights[index]
		prev_line_height = calculated.line_heights[max(index - 1, 0)]
		padding = padding_for_line(calculated.padding, index)
		prev_padding = padding_for_line(calculated.padding, index - 1)

		width, height = size_dimensions(capabilities.measure(text, style))
		cap_height_px = clg.resolve.get_cap_height_px(calculated.cap_ratio, style.font_size)
		prev_cap_height_px = clg.resolve.get_cap_height_px(calculated.cap_ratio, prev_style.font_size)
		total_line_height = style.font_size * line_height

		if index and not spec.inline:
			background_dy = (
				math.floor(prev_style.font_size * prev_line_height)
				+ prev_padding.top
				+ prev_padding.bottom
			)
			tspan_dy = get_tspan_dy(
				prev_style.font_size,
				prev_line_height,
				style.font_size,
				line_height,
				prev_cap_height_px,
				cap_height_px,
				prev_padding,
			)
		else:
			background_dy = math.floor(
				calculated.dy - total_line_height * 0.5 - (style.font_size - cap_height_px)
			)
			tspan_dy = calculated.dy + padding.top

		layouts.append(
			LineLayout(
				index=index,
				text=text,
				style=style,
				width=width,
				height=height,
				font_size=style.font_size,
				line_height=line_height,
				total_line_height=total_line_height,
				text_height=math.ceil(total_line_height),
				cap_height_px=cap_height_px,
				prev_cap_height_px=prev_cap_height_px,
				padding=padding,
				background_dy=background_dy,
				tspan_dy=tspan_dy,
			)
		)
	return tuple(layouts)
