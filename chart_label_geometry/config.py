"""
Shared configuration, constants and geometry records.
"""

# Standard Library
import dataclasses
import types
import typing


DEFAULT_FONT_SIZE = 14
DEFAULT_CAP_HEIGHT = 0.71
DEFAULT_LINE_HEIGHT = 1
DEFAULT_DIRECTION = "inherit"
DEFAULT_TEXT_ANCHOR = "start"
DEFAULT_VERTICAL_ANCHOR = "middle"

DEFAULT_STYLE = types.MappingProxyType({
	"fill": "#252525",
	"font_size": DEFAULT_FONT_SIZE,
	"font_family": "'Gill Sans', 'Gill Sans MT', 'Seravek', 'Trebuchet MS', sans-serif",
	"stroke": "transparent",
})

STYLE_FIELDS = (
	"font_size",
	"fill",
	"stroke",
	"font_family",
	"font_weight",
	"font_style",
	"letter_spacing",
	"text_anchor",
	"vertical_anchor",
	"angle",
	"transform",
)

# absolute units in CSS pixels, relative units as a fraction of the font size
LENGTH_UNITS_TO_PIXELS = types.MappingProxyType({
	"px": 1.0,
	"cm": 37.8,
	"mm": 3.78,
	"in": 96.0,
	"pt": 4.0 / 3.0,
	"pc": 16.0,
})
RELATIVE_LENGTH_UNITS = types.MappingProxyType({
	"em": 1.0,
	"ex": 0.5,
})

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_ITALIC = "Helvetica-Oblique"
DEFAULT_FONT_BOLD_ITALIC = "Helvetica-BoldOblique"
SERIF_FONTS = ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic")
MONOSPACE_FONTS = ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique")
BOLD_WEIGHT = 600

DEFAULT_PAGE_WIDTH = 612.0
DEFAULT_PAGE_HEIGHT = 792.0
DEFAULT_PNG_DPI = 150
BOX_OUTLINE_COLOR = (0.85, 0.1, 0.1)
BOX_OUTLINE_WIDTH = 0.3
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass(frozen=True)
class LabelSpec:
	text: typing.Any = None
	style: typing.Any = None
	x: float | None = None
	y: float | None = None
	datum: typing.Any = None
	scale: typing.Mapping[str, typing.Callable] | None = None
	polar: bool = False
	origin: typing.Mapping[str, float] | None = None
	horizontal: bool = False
	label_placement: str | None = None
	text_anchor: typing.Any = None
	vertical_anchor: typing.Any = None
	direction: typing.Any = None
	angle: typing.Any = None
	transform: typing.Any = None
	line_height: typing.Any = DEFAULT_LINE_HEIGHT
	cap_height: typing.Any = DEFAULT_CAP_HEIGHT
	background_style: typing.Any = None
	background_padding: typing.Any = None
	inline: bool = False
	dx: typing.Any = None
	dy: typing.Any = None
	render_in_portal: bool = False
	id: typing.Any = None
	class_name: str | None = None
	title: str | None = None
	desc: typing.Any = None
	tab_index: typing.Any = None
	index: typing.Any = None
	background_component: typing.Any = None
	text_component: typing.Any = None
	tspan_component: typing.Any = None
	group_component: typing.Any = None


@dataclasses.dataclass(frozen=True)
class ResolvedStyle:
	font_size: float = DEFAULT_FONT_SIZE
	fill: typing.Any = None
	stroke: typing.Any = None
	font_family: str | None = None
	font_weight: typing.Any = None
	font_style: str | None = None
	letter_spacing: typing.Any = None
	text_anchor: str | None = None
	vertical_anchor: str | None = None
	angle: float | None = None
	transform: typing.Any = None
	extra: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Padding:
	top: float = 0.0
	bottom: float = 0.0
	left: float = 0.0
	right: float = 0.0


@dataclasses.dataclass(frozen=True)
class TextSize:
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class CalculatedProps:
	x: float
	y: float
	direction: str
	text_anchor: str
	vertical_anchor: str
	angle: float | None
	transform: str | None
	dx: float
	dy: float
	literal_dy: float
	line_heights: tuple[float, ...]
	cap_ratio: float
	padding: Padding | tuple[Padding, ...]


@dataclasses.dataclass(frozen=True)
class LineLayout:
	index: int
	text: str
	style: ResolvedStyle
	width: float
	height: float
	font_size: float
	line_height: float
	total_line_height: float
	text_height: int
	cap_height_px: float
	prev_cap_height_px: float
	padding: Padding
	background_dy: float
	tspan_dy: float


@dataclasses.dataclass(frozen=True)
class BackgroundBox:
	x: float
	y: float
	width: float
	height: float
	style: typing.Any = None
	transform: str | None = None


@dataclasses.dataclass
class RenderConfig:
	page_width: float
	page_height: float
	draw_boxes: bool
	png_dpi: int


@dataclasses.dataclass
class RenderResult:
	total_labels: int
	rendered_labels: int
	empty_labels: int
	background_boxes: int
