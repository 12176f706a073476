"""
Shared positioning facts for a label: anchors, offsets, transform, padding.
"""

# Standard Library
import math
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.helpers
import chart_label_geometry.resolve


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
Padding = clg.config.Padding
CalculatedProps = clg.config.CalculatedProps

DEFAULT_DIRECTION = clg.config.DEFAULT_DIRECTION
DEFAULT_TEXT_ANCHOR = clg.config.DEFAULT_TEXT_ANCHOR
DEFAULT_VERTICAL_ANCHOR = clg.config.DEFAULT_VERTICAL_ANCHOR

style_for_line = clg.resolve.style_for_line


#============================================
def to_offset(
	value: typing.Any,
	font_size: float,
	capabilities: Capabilities,
) -> float:
	"""
	Coerce an evaluated dx/dy value to pixels.

	Numbers pass through, strings may carry a unit ("1em", "4px").

	Args:
		value: Evaluated offset.
		font_size: Font size for relative units.
		capabilities: Host capabilities.

	Returns:
		Offset in pixels, 0 when unset.
	"""
	if value is None or value == "":
		return 0.0
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		return value
	return float(capabilities.convert_length(str(value), font_size))


#============================================
def get_position(spec: LabelSpec, dimension: str) -> float:
	"""
	Project the label's datum through its scales.

	Args:
		spec: Label spec.
		dimension: "x" or "y".

	Returns:
		Canvas coordinate, 0 without a datum or scale.
	"""
	if spec.datum is None or not spec.scale:
		return 0
	point = clg.helpers.scale_point(
		spec.scale,
		spec.datum,
		polar=spec.polar,
		horizontal=spec.horizontal,
		origin=spec.origin,
	)
	if dimension == "x":
		return point[0]
	return point[1]


#============================================
def get_vertical_anchor(spec: LabelSpec, capabilities: Capabilities) -> str:
	"""
	Vertical anchor, with the first line's style overriding the label spec.
	"""
	first_style = style_for_line(spec.style, 0)
	anchor = first_style.vertical_anchor or spec.vertical_anchor
	if not anchor:
		return DEFAULT_VERTICAL_ANCHOR
	return capabilities.evaluate(anchor, spec) or DEFAULT_VERTICAL_ANCHOR


#============================================
def get_dy(
	spec: LabelSpec,
	line_heights: tuple[float, ...],
	cap_ratio: float,
	vertical_anchor: str,
	literal_dy: float,
) -> float:
	"""
	Vertical offset of the first baseline relative to the anchor point.

	Args:
		spec: Evaluated spec.
		line_heights: Per-line line-height multipliers.
		cap_ratio: Cap height ratio in em.
		vertical_anchor: Resolved vertical anchor.
		literal_dy: Caller dy offset.

	Returns:
		dy in pixels.
	"""
	font_size = style_for_line(spec.style, 0).font_size
	line_height = line_heights[0]
	length = 1 if spec.inline else len(spec.text)
	if vertical_anchor == "end":
		return literal_dy + (cap_ratio / 2 + (0.5 - length) * line_height) * font_size
	if vertical_anchor == "middle":
		return literal_dy + (cap_ratio / 2 + (0.5 - length / 2) * line_height) * font_size
	return literal_dy + (cap_ratio / 2 + line_height / 2) * font_size


#============================================
def get_angle(spec: LabelSpec, capabilities: Capabilities) -> float | None:
	"""
	Rotation angle: style angle, then spec angle, then polar placement.

	Args:
		spec: Evaluated spec.
		capabilities: Host capabilities.

	Returns:
		Angle in degrees, or None when the label is not rotated.
	"""
	first_style = style_for_line(spec.style, 0)
	base_angle = first_style.angle
	if base_angle is None:
		base_angle = capabilities.evaluate(spec.angle, spec)
	if base_angle is None:
		if not spec.polar or spec.datum is None or not spec.scale:
			return None
		degrees = clg.helpers.get_degrees(spec.scale, spec.datum)
		return clg.helpers.get_polar_angle(spec.label_placement, degrees)
	if isinstance(base_angle, str):
		try:
			return float(base_angle)
		except ValueError:
			capabilities.warn(f"angle should be a number, got {base_angle!r}")
			return None
	return base_angle


#============================================
def get_transform(
	spec: LabelSpec,
	x: float,
	y: float,
	angle: float | None,
	capabilities: Capabilities,
) -> str | None:
	"""
	Combine an explicit transform with the rotation about (x, y).

	Returns:
		Transform string, or None when the label is neither transformed
		nor rotated.
	"""
	first_style = style_for_line(spec.style, 0)
	transform = spec.transform or first_style.transform
	transform_part = capabilities.evaluate(transform, spec) if transform else None
	rotate_part = {"rotate": (angle, x, y)} if angle else None
	if not transform_part and not angle:
		return None
	return clg.helpers.to_transform_string(transform_part, rotate_part)


#============================================
def padding_side(value: typing.Any) -> float:
	"""
	Numeric padding side; missing or malformed sides count as zero.
	"""
	if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
		return value
	return 0


#============================================
def get_background_padding(padding: typing.Any) -> Padding:
	"""
	Normalise a scalar or per-side mapping into a Padding record.
	"""
	if padding is None:
		return Padding()
	if isinstance(padding, typing.Mapping):
		return Padding(
			top=padding_side(padding.get("top")),
			bottom=padding_side(padding.get("bottom")),
			left=padding_side(padding.get("left")),
			right=padding_side(padding.get("right")),
		)
	side = padding_side(padding)
	return Padding(top=side, bottom=side, left=side, right=side)


#============================================
def normalize_padding(padding: typing.Any) -> Padding | tuple[Padding, ...]:
	"""
	Normalise background padding, keeping per-line lists as tuples.
	"""
	if not padding:
		return Padding()
	if isinstance(padding, (list, tuple)):
		return tuple(get_background_padding(entry) for entry in padding)
	return get_background_padding(padding)


#============================================
def padding_for_line(padding: Padding | tuple[Padding, ...], index: int) -> Padding:
	"""
	Padding of one line; per-line lists without an entry give zero padding.
	"""
	if isinstance(padding, tuple):
		if 0 <= index < len(padding):
			return padding[index]
		return Padding()
	return padding


#============================================
def block_padding(padding: Padding | tuple[Padding, ...]) -> Padding:
	"""
	Padding for a single box around the whole block.
	"""
	return padding_for_line(padding, 0)


#============================================
def get_calculated_props(spec: LabelSpec, capabilities: Capabilities | None = None) -> CalculatedProps:
	"""
	Compute positioning facts shared by every line of a label.

	Args:
		spec: Evaluated spec (resolved text and styles).
		capabilities: Host capabilities.

	Returns:
		CalculatedProps.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	first_font_size = style_for_line(spec.style, 0).font_size

	line_heights = clg.resolve.get_line_heights(spec, capabilities)
	cap_height = clg.resolve.get_cap_height(spec, capabilities)
	direction = capabilities.evaluate(spec.direction, spec) or DEFAULT_DIRECTION
	text_anchor = capabilities.evaluate(spec.text_anchor, spec) or DEFAULT_TEXT_ANCHOR
	vertical_anchor = get_vertical_anchor(spec, capabilities)
	dx = to_offset(capabilities.evaluate(spec.dx, spec), first_font_size, capabilities)
	literal_dy = to_offset(capabilities.evaluate(spec.dy, spec), first_font_size, capabilities)
	cap_ratio = clg.resolve.get_cap_height_ratio(cap_height, first_font_size, capabilities)
	dy = get_dy(spec, line_heights, cap_ratio, vertical_anchor, literal_dy)
	x = spec.x if spec.x is not None else get_position(spec, "x")
	y = spec.y if spec.y is not None else get_position(spec, "y")
	angle = get_angle(spec, capabilities)
	transform = get_transform(spec, x, y, angle, capabilities)
	padding = normalize_padding(spec.background_padding)

	return CalculatedProps(
		x=x,
		y=y,
		direction=direction,
		text_anchor=text_anchor,
		vertical_anchor=vertical_anchor,
		angle=angle,
		transform=transform,
		dx=dx,
		dy=dy,
		literal_dy=literal_dy,
		line_heights=line_heights,
		cap_ratio=cap_ratio,
		padding=padding,
	)


#============================================
def get_x_coordinate(calculated: CalculatedProps, width: float) -> float:
	"""
	Left edge of an element of ``width`` placed at the anchor.

	Args:
		calculated: Calculated props.
		width: Element width.

	Returns:
		x coordinate.
	"""
	x = calculated.x
	if calculated.direction == "rtl":
		return x - width
	if calculated.text_anchor == "start":
		return x
	if calculated.text_anchor == "middle":
		return clg.helpers.js_round(x - width / 2)
	if calculated.text_anchor == "end":
		return clg.helpers.js_round(x - width)
	return x


#============================================
def get_y_coordinate(calculated: CalculatedProps, inline: bool, text_height: float) -> int:
	"""
	Top edge of a block of ``text_height`` placed at the anchor.

	Args:
		calculated: Calculated props.
		inline: Whether lines run side by side.
		text_height: Height of the text block.

	Returns:
		y coordinate.
	"""
	offset = calculated.y + calculated.literal_dy
	anchor = calculated.vertical_anchor
	if anchor == "start":
		return math.floor(offset)
	if anchor == "middle":
		return math.floor(offset - text_height / 2)
	if anchor == "end":
		if inline:
			return math.floor(offset)
		return math.ceil(offset - text_height)
	if inline:
		return math.floor(offset)
	return math.floor(offset - text_height / 2)
