import math

import pytest

import chart_label_geometry as clg
import chart_label_geometry.config
import chart_label_geometry.geometry
import chart_label_geometry.helpers
import chart_label_geometry.resolve


LabelSpec = clg.config.LabelSpec
Padding = clg.config.Padding


#============================================
def calculate(capabilities, **kwargs) -> tuple[LabelSpec, clg.config.CalculatedProps]:
	"""
	Evaluate a spec and compute its shared geometry.

	Args:
		capabilities: Host capabilities fixture.
		kwargs: LabelSpec fields.

	Returns:
		Tuple of (evaluated spec, calculated props).
	"""
	spec = clg.resolve.evaluate_spec(LabelSpec(**kwargs), capabilities)
	return spec, clg.geometry.get_calculated_props(spec, capabilities)


#============================================
def test_defaults(capabilities) -> None:
	"""
	Unset anchors, direction and position fall back to their defaults.
	"""
	_spec, calculated = calculate(capabilities, text="Hello")
	assert calculated.direction == "inherit"
	assert calculated.text_anchor == "start"
	assert calculated.vertical_anchor == "middle"
	assert calculated.x == 0
	assert calculated.y == 0
	assert calculated.angle is None
	assert calculated.transform is None
	assert calculated.padding == Padding()


#============================================
def test_x_coordinate_by_anchor(capabilities) -> None:
	"""
	Horizontal anchors place the element relative to x.
	"""
	width = 35
	for anchor, expected in (("start", 100), ("middle", 83), ("end", 65), ("inherit", 100)):
		_spec, calculated = calculate(capabilities, text="Hello", x=100, y=50, text_anchor=anchor)
		assert clg.geometry.get_x_coordinate(calculated, width) == expected

	_spec, calculated = calculate(capabilities, text="Hello", x=100, text_anchor="middle")
	assert clg.geometry.get_x_coordinate(calculated, 33) == clg.helpers.js_round(100 - 33 / 2)


#============================================
def test_x_coordinate_rtl_ignores_anchor(capabilities) -> None:
	"""
	Right-to-left labels end at x regardless of the text anchor.
	"""
	_spec, calculated = calculate(capabilities, text="Hello", x=100, direction="rtl", text_anchor="middle")
	assert clg.geometry.get_x_coordinate(calculated, 35) == 65


#============================================
def test_y_coordinate_by_anchor(capabilities) -> None:
	"""
	Vertical anchors place a block of height h relative to y + dy.
	"""
	expected = {"start": 50, "middle": 40, "end": 30}
	for anchor, value in expected.items():
		_spec, calculated = calculate(capabilities, text="Hello", y=50, vertical_anchor=anchor)
		assert clg.geometry.get_y_coordinate(calculated, False, 20) == value

	_spec, calculated = calculate(capabilities, text="Hello", y=50, vertical_anchor="end")
	assert clg.geometry.get_y_coordinate(calculated, True, 20) == 50

	_spec, calculated = calculate(capabilities, text="Hello", y=50, dy=4, vertical_anchor="start")
	assert clg.geometry.get_y_coordinate(calculated, False, 20) == 54

	_spec, calculated = calculate(capabilities, text="Hello", y=50.5, vertical_anchor="end")
	assert clg.geometry.get_y_coordinate(calculated, False, 20) == 31


#============================================
def test_dy_formulas(capabilities) -> None:
	"""
	The first baseline offset follows the vertical anchor formulas.
	"""
	lines = ["Line1", "Line2"]
	style = {"font_size": 20}
	_spec, middle = calculate(capabilities, text=lines, style=style)
	assert math.isclose(middle.dy, (0.71 / 2 + (0.5 - 2 / 2) * 1) * 20)

	_spec, end = calculate(capabilities, text=lines, style=style, vertical_anchor="end")
	assert math.isclose(end.dy, (0.71 / 2 + (0.5 - 2) * 1) * 20)

	_spec, start = calculate(capabilities, text=lines, style=style, vertical_anchor="start")
	assert math.isclose(start.dy, (0.71 / 2 + 1 / 2) * 20)

	_spec, inline = calculate(capabilities, text=lines, style=style, vertical_anchor="end", inline=True)
	assert math.isclose(inline.dy, (0.71 / 2 + (0.5 - 1) * 1) * 20)

	_spec, shifted = calculate(capabilities, text=lines, style=style, vertical_anchor="start", dy=3, line_height=2)
	assert math.isclose(shifted.dy, 3 + (0.71 / 2 + 2 / 2) * 20)
	assert shifted.literal_dy == 3


#============================================
def test_style_vertical_anchor_wins(capabilities) -> None:
	"""
	A vertical anchor on the first style overrides the label spec.
	"""
	_spec, calculated = calculate(
		capabilities,
		text="Hello",
		style={"vertical_anchor": "start"},
		vertical_anchor="end",
	)
	assert calculated.vertical_anchor == "start"


#============================================
def test_string_offsets_use_units(capabilities) -> None:
	"""
	String dx values are converted with the first line's font size.
	"""
	_spec, calculated = calculate(capabilities, text="Hello", style={"font_size": 20}, dx="1em")
	assert math.isclose(calculated.dx, 20.0)
	_spec, calculated = calculate(capabilities, text="Hello", dx=lambda context: 7)
	assert calculated.dx == 7


#============================================
def test_transform_strings(capabilities) -> None:
	"""
	Rotation and explicit transforms combine into one string.
	"""
	_spec, rotated = calculate(capabilities, text="Hi", x=10, y=20, angle=30)
	assert rotated.angle == 30
	assert rotated.transform == "rotate(30,10,20)"

	_spec, combined = calculate(capabilities, text="Hi", x=10, y=20, angle=30, transform="translate(5,5)")
	assert combined.transform == "translate(5,5) rotate(30,10,20)"

	_spec, mapped = calculate(capabilities, text="Hi", transform={"translate": (1, 2)})
	assert mapped.transform == "translate(1,2)"

	_spec, styled = calculate(capabilities, text="Hi", x=1, y=2, angle=30, style={"angle": 45})
	assert styled.transform == "rotate(45,1,2)"

	_spec, zero = calculate(capabilities, text="Hi", angle=0)
	assert zero.transform is None


#============================================
def test_position_from_datum(capabilities) -> None:
	"""
	Without x/y the datum is projected through the scales.
	"""
	scale = {"x": lambda value: value * 10, "y": lambda value: 200 - value}
	_spec, calculated = calculate(capabilities, text="Hi", datum={"x": 3, "y": 20}, scale=scale)
	assert calculated.x == 30
	assert calculated.y == 180

	_spec, swapped = calculate(capabilities, text="Hi", datum={"x": 3, "y": 20}, scale=scale, horizontal=True)
	assert swapped.x == 180
	assert swapped.y == 30

	_spec, explicit = calculate(capabilities, text="Hi", x=5, datum={"x": 3, "y": 20}, scale=scale)
	assert explicit.x == 5
	assert explicit.y == 180


#============================================
def test_polar_position_and_angle(capabilities) -> None:
	"""
	Polar labels sit on the circle and rotate with their placement.
	"""
	scale = {"x": math.radians, "y": lambda value: value}
	_spec, calculated = calculate(
		capabilities,
		text="Hi",
		datum={"x": 90, "y": 10},
		scale=scale,
		polar=True,
		origin={"x": 50, "y": 50},
		label_placement="parallel",
	)
	assert calculated.x == pytest.approx(50.0)
	assert calculated.y == pytest.approx(40.0)
	assert calculated.angle == pytest.approx(-90.0)

	_spec, vertical = calculate(
		capabilities,
		text="Hi",
		datum={"x": 90, "y": 10},
		scale=scale,
		polar=True,
		label_placement="vertical",
	)
	assert vertical.angle == 0
	assert vertical.transform is None


#============================================
def test_polar_angle_placements() -> None:
	"""
	Parallel labels follow the tangent, perpendicular ones the radius.
	"""
	assert clg.helpers.get_polar_angle("perpendicular", 45) == 45
	assert clg.helpers.get_polar_angle("parallel", 45) == -45
	assert clg.helpers.get_polar_angle("perpendicular", 0) == 90
	assert clg.helpers.get_polar_angle("perpendicular", 225) == 45
	assert clg.helpers.get_polar_angle("parallel", 135) == 45
	assert clg.helpers.get_polar_angle(None, 135) == 0


#============================================
def test_background_padding_normalisation() -> None:
	"""
	Padding scalars, per-side mappings and lists normalise to Padding.
	"""
	assert clg.geometry.get_background_padding(5) == Padding(5, 5, 5, 5)
	assert clg.geometry.get_background_padding({"top": 2, "left": 3}) == Padding(top=2, left=3)
	assert clg.geometry.get_background_padding({"top": "x"}) == Padding()
	assert clg.geometry.normalize_padding(None) == Padding()
	assert clg.geometry.normalize_padding(0) == Padding()

	per_line = clg.geometry.normalize_padding([1, {"bottom": 4}])
	assert per_line == (Padding(1, 1, 1, 1), Padding(bottom=4))
	assert clg.geometry.padding_for_line(per_line, 1) == Padding(bottom=4)
	assert clg.geometry.padding_for_line(per_line, 5) == Padding()
	assert clg.geometry.padding_for_line(Padding(2, 2, 2, 2), 5) == Padding(2, 2, 2, 2)
	assert clg.geometry.block_padding(per_line) == Padding(1, 1, 1, 1)
