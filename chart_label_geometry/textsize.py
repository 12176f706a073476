"""
Text measurement and length conversion backed by ReportLab font metrics.
"""

# Standard Library
import re
import typing

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.config


ResolvedStyle = clg.config.ResolvedStyle
TextSize = clg.config.TextSize

DEFAULT_FONT_SIZE = clg.config.DEFAULT_FONT_SIZE
DEFAULT_FONT_REGULAR = clg.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = clg.config.DEFAULT_FONT_BOLD
DEFAULT_FONT_ITALIC = clg.config.DEFAULT_FONT_ITALIC
DEFAULT_FONT_BOLD_ITALIC = clg.config.DEFAULT_FONT_BOLD_ITALIC
SERIF_FONTS = clg.config.SERIF_FONTS
MONOSPACE_FONTS = clg.config.MONOSPACE_FONTS
BOLD_WEIGHT = clg.config.BOLD_WEIGHT
LENGTH_UNITS_TO_PIXELS = clg.config.LENGTH_UNITS_TO_PIXELS
RELATIVE_LENGTH_UNITS = clg.config.RELATIVE_LENGTH_UNITS

UNIT_PATTERN = re.compile(r"[a-zA-Z%]+")
VALUE_PATTERN = re.compile(r"-?[0-9.]+")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


#============================================
def is_bold(font_weight: typing.Any) -> bool:
	"""
	Check whether a CSS font weight maps to a bold face.
	"""
	if font_weight is None:
		return False
	if isinstance(font_weight, str):
		normalized = font_weight.strip().lower()
		if normalized in ("bold", "bolder"):
			return True
		if not normalized.isdigit():
			return False
		font_weight = int(normalized)
	return font_weight >= BOLD_WEIGHT


#============================================
def map_font_name(font_family: str | None, font_weight: typing.Any, font_style: str | None) -> str:
	"""
	Map CSS font metadata to a standard PDF font name.

	Args:
		font_family: CSS font family stack.
		font_weight: CSS font weight.
		font_style: CSS font style.

	Returns:
		ReportLab font name.
	"""
	family = (font_family or "").lower()
	bold = is_bold(font_weight)
	italic = (font_style or "").lower() in ("italic", "oblique")
	if "mono" in family or "courier" in family:
		faces = MONOSPACE_FONTS
	elif "times" in family or ("serif" in family and "sans-serif" not in family):
		faces = SERIF_FONTS
	else:
		faces = (DEFAULT_FONT_REGULAR, DEFAULT_FONT_BOLD, DEFAULT_FONT_ITALIC, DEFAULT_FONT_BOLD_ITALIC)
	if italic and bold:
		return faces[3]
	if italic:
		return faces[2]
	if bold:
		return faces[1]
	return faces[0]


#============================================
def font_name_for_style(style: ResolvedStyle) -> str:
	"""
	ReportLab font name for a resolved style.
	"""
	return map_font_name(style.font_family, style.font_weight, style.font_style)


#============================================
def convert_length_to_pixels(length: typing.Any, font_size: float | None) -> float:
	"""
	Convert a unit-suffixed length to pixels.

	Absolute units use fixed CSS ratios; "em" and "ex" scale with the font
	size. A bare number is returned unchanged.

	Args:
		length: Value like "0.71em", "12pt" or 10.
		font_size: Font size in pixels for relative units.

	Returns:
		Length in pixels.
	"""
	if isinstance(length, (int, float)):
		return float(length)
	text = str(length)
	value_match = VALUE_PATTERN.search(text)
	if value_match is None:
		return 0.0
	try:
		value = float(value_match.group(0))
	except ValueError:
		return 0.0
	unit_match = UNIT_PATTERN.search(text)
	if unit_match is None:
		return value
	unit = unit_match.group(0).lower()
	if unit in LENGTH_UNITS_TO_PIXELS:
		return value * LENGTH_UNITS_TO_PIXELS[unit]
	if unit in RELATIVE_LENGTH_UNITS:
		base_size = font_size if font_size else DEFAULT_FONT_SIZE
		return value * base_size * RELATIVE_LENGTH_UNITS[unit]
	return value


#============================================
def measure_line(text: str, style: ResolvedStyle) -> TextSize:
	"""
	Measure one line of text.

	Args:
		text: Line text.
		style: Resolved style.

	Returns:
		TextSize with advance width and ascent-to-descent height.
	"""
	font_name = font_name_for_style(style)
	font_size = style.font_size
	width = reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)
	if style.letter_spacing:
		spacing = convert_length_to_pixels(style.letter_spacing, font_size)
		width += spacing * len(text)
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font_size / 1000.0
	return TextSize(width=width, height=ascent - descent)


#============================================
def approximate_text_size(text: str, style: ResolvedStyle) -> TextSize:
	"""
	Measure possibly multi-line text under a style.

	Width is the widest line; height stacks the line heights.

	Args:
		text: Text, may contain line breaks.
		style: Resolved style.

	Returns:
		TextSize.
	"""
	lines = LINE_BREAK_PATTERN.split(str(text))
	sizes = [measure_line(line, style) for line in lines]
	width = max(size.width for size in sizes)
	height = sum(size.height for size in sizes)
	return TextSize(width=width, height=height)
