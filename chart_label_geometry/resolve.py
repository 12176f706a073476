"""
Style and content resolution for label specs.
"""

# Standard Library
import dataclasses
import math
import re
import types
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.helpers


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
ResolvedStyle = clg.config.ResolvedStyle

DEFAULT_STYLE = clg.config.DEFAULT_STYLE
DEFAULT_FONT_SIZE = clg.config.DEFAULT_FONT_SIZE
DEFAULT_LINE_HEIGHT = clg.config.DEFAULT_LINE_HEIGHT
DEFAULT_CAP_HEIGHT = clg.config.DEFAULT_CAP_HEIGHT
STYLE_FIELDS = clg.config.STYLE_FIELDS

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
DIGIT_PATTERN = re.compile(r"[0-9]")
UNIT_PATTERN = re.compile(r"[a-zA-Z%]")
FONT_SIZE_WARNING = "font_size should be expressed as a number of pixels"


#============================================
def get_font_size(style: typing.Mapping[str, typing.Any], warn: typing.Callable[[str], None]) -> float:
	"""
	Resolve the font size of a style to a pixel number.

	Args:
		style: Style mapping with an optional "font_size" entry.
		warn: Warning sink for unparsable values.

	Returns:
		Finite, non-negative font size in pixels.
	"""
	base_size = style.get("font_size") if style else None
	if base_size is None:
		return DEFAULT_FONT_SIZE
	if isinstance(base_size, str):
		number_text = base_size.replace("px", "").strip()
		if not number_text:
			return 0
		try:
			base_size = float(number_text)
		except ValueError:
			warn(FONT_SIZE_WARNING)
			return DEFAULT_FONT_SIZE
	if isinstance(base_size, bool) or not isinstance(base_size, (int, float)):
		warn(FONT_SIZE_WARNING)
		return DEFAULT_FONT_SIZE
	if not math.isfinite(base_size) or base_size < 0:
		warn(FONT_SIZE_WARNING)
		return DEFAULT_FONT_SIZE
	return base_size


#============================================
def build_resolved_style(style: typing.Mapping[str, typing.Any]) -> ResolvedStyle:
	"""
	Split an evaluated style mapping into known fields and pass-through extras.
	"""
	known = {key: style[key] for key in STYLE_FIELDS if key in style}
	extra = {key: value for key, value in style.items() if key not in STYLE_FIELDS}
	return ResolvedStyle(extra=types.MappingProxyType(extra), **known)


#============================================
def get_styles(
	style: typing.Any,
	context: typing.Any,
	capabilities: Capabilities | None = None,
) -> tuple[ResolvedStyle, ...]:
	"""
	Resolve a single style or a per-line style list.

	Args:
		style: Mapping, callable, or sequence of them.
		context: Evaluation context for callable fields.
		capabilities: Host capabilities.

	Returns:
		Tuple with at least one ResolvedStyle.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)

	def resolve_single(single: typing.Any) -> ResolvedStyle:
		evaluated = clg.helpers.evaluate_style(single, context, capabilities.evaluate)
		merged = clg.helpers.merge_props(DEFAULT_STYLE, evaluated)
		merged["font_size"] = get_font_size(merged, capabilities.warn)
		return build_resolved_style(merged)

	if isinstance(style, (list, tuple)):
		if style:
			return tuple(resolve_single(single) for single in style)
		return (resolve_single(None),)
	return (resolve_single(style),)


#============================================
def format_line(value: typing.Any) -> str:
	"""
	Coerce a resolved line value to its display string.
	"""
	if value is None:
		return ""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value)


#============================================
def get_content(
	text: typing.Any,
	context: typing.Any,
	capabilities: Capabilities | None = None,
) -> tuple[str, ...] | None:
	"""
	Resolve a text spec into ordered lines.

	Args:
		text: Literal, callable, or sequence of literals/callables.
		context: Evaluation context.
		capabilities: Host capabilities.

	Returns:
		Tuple of lines, or None when there is nothing to render.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	if text is None:
		return None
	if isinstance(text, (list, tuple)):
		lines = tuple(format_line(capabilities.evaluate(line, context)) for line in text)
		return lines or None
	child = capabilities.evaluate(text, context)
	if child is None:
		return None
	if isinstance(child, (list, tuple)):
		lines = tuple(format_line(line) for line in child)
		return lines or None
	return tuple(LINE_BREAK_PATTERN.split(format_line(child)))


#============================================
def evaluate_spec(spec: LabelSpec, capabilities: Capabilities | None = None) -> LabelSpec:
	"""
	Resolve text, style and id of a spec.

	Text is resolved first so callable style fields see the resolved lines.

	Args:
		spec: Raw label spec.
		capabilities: Host capabilities.

	Returns:
		Spec copy whose text is a tuple of lines (or None) and whose style
		is a tuple of ResolvedStyle.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	text = get_content(spec.text, spec, capabilities)
	text_context = dataclasses.replace(spec, text=text)
	style = get_styles(spec.style, text_context, capabilities)
	label_id = capabilities.evaluate(spec.id, text_context)
	return dataclasses.replace(spec, text=text, style=style, id=label_id)


#============================================
def style_for_line(styles: typing.Sequence[ResolvedStyle], index: int) -> ResolvedStyle:
	"""
	Style of line ``index``; lines past the supplied styles reuse the last one.
	"""
	if index < 0:
		index = 0
	return styles[min(index, len(styles) - 1)]


#============================================
def coerce_line_height(value: typing.Any, warn: typing.Callable[[str], None]) -> float:
	"""
	Coerce one line-height entry to a float multiplier.
	"""
	if value is None:
		return float(DEFAULT_LINE_HEIGHT)
	try:
		line_height = float(value)
	except (TypeError, ValueError):
		warn(f"line_height should be a number, got {value!r}")
		return float(DEFAULT_LINE_HEIGHT)
	if not math.isfinite(line_height) or line_height < 0:
		warn(f"line_height should be a non-negative number, got {value!r}")
		return float(DEFAULT_LINE_HEIGHT)
	return line_height


#============================================
def get_line_heights(spec: LabelSpec, capabilities: Capabilities | None = None) -> tuple[float, ...]:
	"""
	Normalise the line-height spec into one multiplier per line.

	A scalar repeats for every line, a sequence is read per line with
	missing entries falling back to 1, and an empty sequence means 1.
	A scalar also reaches the baseline deltas between lines, so text and
	per-line boxes always stack with the same line height.

	Args:
		spec: Evaluated spec (text already resolved to lines).
		capabilities: Host capabilities.

	Returns:
		Tuple with one line height per line, at least one entry.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	count = max(len(spec.text or ()), 1)
	line_height = capabilities.evaluate(spec.line_height, spec)
	if isinstance(line_height, (list, tuple)):
		values = [capabilities.evaluate(value, spec) for value in line_height]
		heights = []
		for index in range(count):
			value = values[index] if index < len(values) else None
			heights.append(coerce_line_height(value, capabilities.warn))
		return tuple(heights)
	return (coerce_line_height(line_height, capabilities.warn),) * count


#============================================
def get_cap_height(spec: LabelSpec, capabilities: Capabilities | None = None) -> typing.Any:
	"""
	Evaluated cap-height ratio of a spec.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	return capabilities.evaluate(spec.cap_height, spec)


#============================================
def get_cap_height_ratio(
	cap_height: typing.Any,
	font_size: float,
	capabilities: Capabilities | None = None,
) -> float:
	"""
	Cap height as a plain em ratio.

	Lengths with an absolute unit are taken relative to ``font_size``.
	Values without a usable number warn and fall back to the default ratio.

	Args:
		cap_height: Ratio, numeric string, or length with its own unit.
		font_size: Font size of the first line in pixels.
		capabilities: Host capabilities.

	Returns:
		Ratio in em.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	if isinstance(cap_height, (int, float)) and not isinstance(cap_height, bool):
		if math.isfinite(cap_height):
			return float(cap_height)
	elif isinstance(cap_height, str) and DIGIT_PATTERN.search(cap_height):
		text = cap_height.strip()
		if UNIT_PATTERN.search(text):
			base_size = font_size or DEFAULT_FONT_SIZE
			return float(capabilities.convert_length(text, base_size)) / base_size
		try:
			return float(text)
		except ValueError:
			pass
	capabilities.warn(f"cap_height should be a number, got {cap_height!r}")
	return float(DEFAULT_CAP_HEIGHT)


#============================================
def get_cap_height_px(cap_ratio: float, font_size: float) -> float:
	"""
	Cap height in pixels for a resolved em ratio.
	"""
	return cap_ratio * font_size
