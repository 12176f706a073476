"""
Background boxes sized and positioned to fit the label text.
"""

# Standard Library
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.geometry
import chart_label_geometry.helpers
import chart_label_geometry.line_layout
import chart_label_geometry.resolve


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
CalculatedProps = clg.config.CalculatedProps
LineLayout = clg.config.LineLayout
BackgroundBox = clg.config.BackgroundBox

get_x_coordinate = clg.geometry.get_x_coordinate
get_y_coordinate = clg.geometry.get_y_coordinate


#============================================
def is_per_line_background(spec: LabelSpec) -> bool:
	"""
	Per-line mode is selected by a list of background styles.
	"""
	return isinstance(spec.background_style, (list, tuple))


#============================================
def has_background(spec: LabelSpec) -> bool:
	"""
	Check whether the label asks for any background.

	An empty style list asks for none; an empty mapping still draws a box.
	"""
	if is_per_line_background(spec):
		return len(spec.background_style) > 0
	return spec.background_style is not None


#============================================
def get_block_text_height(lines: typing.Sequence[LineLayout], cap_height_px: float) -> float:
	"""
	Height of the stacked text block with one cap-height allowance.

	Args:
		lines: Line layouts.
		cap_height_px: Cap height allowance in pixels.

	Returns:
		Block height in pixels.
	"""
	return sum(line.total_line_height for line in lines) + cap_height_px


#============================================
def get_inline_width(
	lines: typing.Sequence[LineLayout],
	capabilities: Capabilities,
) -> float:
	"""
	Width of lines laid side by side, separated by one space each.
	"""
	width = sum(line.width for line in lines)
	for line in lines[:-1]:
		space_width, _space_height = clg.line_layout.size_dimensions(
			capabilities.measure(" ", line.style)
		)
		width += space_width
	return width


#============================================
def get_full_background(
	spec: LabelSpec,
	calculated: CalculatedProps,
	lines: typing.Sequence[LineLayout],
	capabilities: Capabilities | None = None,
) -> BackgroundBox:
	"""
	One box around the whole label.

	Args:
		spec: Evaluated spec.
		calculated: Calculated props.
		lines: Line layouts.
		capabilities: Host capabilities.

	Returns:
		BackgroundBox positioned with the aggregate width and height.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	max_font_size = max(line.font_size for line in lines)
	line_height = calculated.line_heights[0]
	cap_height_px = clg.resolve.get_cap_height_px(calculated.cap_ratio, max_font_size)
	if spec.inline:
		text_height = max_font_size * line_height + cap_height_px
		width = get_inline_width(lines, capabilities) + calculated.dx * len(lines)
	else:
		text_height = get_block_text_height(lines, cap_height_px)
		width = max(line.width for line in lines) + calculated.dx

	padding = clg.geometry.block_padding(calculated.padding)
	style = clg.helpers.evaluate_style(spec.background_style, spec, capabilities.evaluate)
	return BackgroundBox(
		x=get_x_coordinate(calculated, width),
		y=get_y_coordinate(calculated, spec.inline, text_height),
		width=width + padding.left + padding.right,
		height=text_height + padding.top + padding.bottom,
		style=style,
		transform=calculated.transform,
	)


#============================================
def get_child_backgrounds(
	spec: LabelSpec,
	calculated: CalculatedProps,
	lines: typing.Sequence[LineLayout],
	capabilities: Capabilities | None = None,
) -> tuple[BackgroundBox, ...]:
	"""
	One box per line, stacked with the line layout's background deltas.

	Background styles shorter than the line count reuse their last entry.

	Args:
		spec: Evaluated spec with a list of background styles.
		calculated: Calculated props.
		lines: Line layouts.
		capabilities: Host capabilities.

	Returns:
		Tuple with one BackgroundBox per line.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	styles = spec.background_style
	boxes = []
	y_cursor = calculated.y
	for line in lines:
		y_cursor += line.background_dy
		raw_style = styles[min(line.index, len(styles) - 1)]
		padding = line.padding
		boxes.append(
			BackgroundBox(
				x=get_x_coordinate(calculated, line.width),
				y=y_cursor,
				width=line.width + padding.left + padding.right,
				height=line.text_height + padding.top + padding.bottom,
				style=clg.helpers.evaluate_style(raw_style, spec, capabilities.evaluate),
				transform=calculated.transform,
			)
		)
	return tuple(boxes)


#============================================
def get_background_boxes(
	spec: LabelSpec,
	calculated: CalculatedProps,
	lines: typing.Sequence[LineLayout],
	capabilities: Capabilities | None = None,
) -> tuple[BackgroundBox, ...]:
	"""
	Background boxes for a label: none, one block box, or one per line.
	"""
	if not has_background(spec) or not lines:
		return ()
	if is_per_line_background(spec):
		return get_child_backgrounds(spec, calculated, lines, capabilities)
	return (get_full_background(spec, calculated, lines, capabilities),)
