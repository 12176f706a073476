"""
Value-or-callable evaluation, scale projection and small shared helpers.
"""

# Standard Library
import math
import sys
import typing


#============================================
def evaluate_prop(value: typing.Any, context: typing.Any) -> typing.Any:
	"""
	Resolve a prop that may be a literal value or a callable.

	Args:
		value: Literal value or callable taking the context.
		context: Evaluation context, usually the label spec.

	Returns:
		The literal value, or the callable's result.
	"""
	if callable(value):
		return value(context)
	return value


#============================================
def evaluate_style(
	style: typing.Any,
	context: typing.Any,
	evaluate: typing.Callable = evaluate_prop,
) -> dict:
	"""
	Evaluate a style mapping whose fields may be callables.

	Args:
		style: Style mapping, callable returning one, or None.
		context: Evaluation context.
		evaluate: Value-or-callable capability.

	Returns:
		New dict with every field resolved.
	"""
	if style is None:
		return {}
	if callable(style):
		style = evaluate(style, context) or {}
	return {key: evaluate(value, context) for key, value in style.items()}


#============================================
def merge_props(
	defaults: typing.Mapping[str, typing.Any],
	explicit: typing.Mapping[str, typing.Any] | None,
) -> dict:
	"""
	Layer explicitly set props over computed defaults.

	Explicit entries set to None do not count as set.

	Args:
		defaults: Computed props.
		explicit: Caller-set props, which take priority.

	Returns:
		Merged props.
	"""
	merged = dict(defaults)
	for key, value in (explicit or {}).items():
		if value is not None:
			merged[key] = value
	return merged


#============================================
def js_round(value: float) -> int:
	"""
	Round half up, so -2.5 becomes -2 and 2.5 becomes 3.
	"""
	return math.floor(value + 0.5)


#============================================
def format_number(value: typing.Any) -> str:
	"""
	Format a number for transform strings, dropping a trailing .0.

	Args:
		value: Number or other value.

	Returns:
		String form.
	"""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value)


#============================================
def to_transform_string(*parts: typing.Any) -> str | None:
	"""
	Join transform fragments into one SVG transform string.

	Each fragment is either a string, a mapping such as
	{"rotate": (30, 10, 20)}, or None.

	Returns:
		Combined transform string, or None when every fragment is None.
	"""
	pieces = []
	for part in parts:
		if part is None:
			continue
		if isinstance(part, str):
			pieces.append(part)
			continue
		for key, value in part.items():
			if isinstance(value, (list, tuple)):
				args = ",".join(format_number(item) for item in value)
			else:
				args = format_number(value)
			pieces.append(f"{key}({args})")
	if not pieces and all(part is None for part in parts):
		return None
	return " ".join(pieces).strip()


#============================================
def get_point(datum: typing.Any) -> tuple[typing.Any, typing.Any]:
	"""
	Extract the (x, y) data values from a datum.

	Mappings may carry pre-processed "_x"/"_y" keys which win over "x"/"y".

	Args:
		datum: Mapping or (x, y) pair.

	Returns:
		Tuple of (x, y).
	"""
	if isinstance(datum, typing.Mapping):
		x_value = datum.get("_x", datum.get("x"))
		y_value = datum.get("_y", datum.get("y"))
		return (x_value, y_value)
	return (datum[0], datum[1])


#============================================
def scale_point(
	scale: typing.Mapping[str, typing.Callable],
	datum: typing.Any,
	polar: bool = False,
	horizontal: bool = False,
	origin: typing.Mapping[str, float] | None = None,
) -> tuple[float, float]:
	"""
	Project a datum through x/y scale functions.

	In polar mode the scaled x is an angle in radians and the scaled y a
	radius around the origin.

	Args:
		scale: Mapping with "x" and "y" scale callables.
		datum: Datum to project.
		polar: Whether to use polar projection.
		horizontal: Whether the chart swaps its axes.
		origin: Polar origin, defaults to (0, 0).

	Returns:
		Tuple of (x, y) in canvas coordinates.
	"""
	data_x, data_y = get_point(datum)
	if horizontal:
		scaled_x = scale["y"](data_y)
		scaled_y = scale["x"](data_x)
	else:
		scaled_x = scale["x"](data_x)
		scaled_y = scale["y"](data_y)
	if not polar:
		return (scaled_x, scaled_y)
	origin = origin or {"x": 0.0, "y": 0.0}
	polar_x = scaled_y * math.cos(scaled_x) + origin["x"]
	polar_y = -scaled_y * math.sin(scaled_x) + origin["y"]
	return (polar_x, polar_y)


#============================================
def get_degrees(
	scale: typing.Mapping[str, typing.Callable],
	datum: typing.Any,
) -> float:
	"""
	Angular position of a datum in degrees, normalised to [0, 360).
	"""
	data_x, _data_y = get_point(datum)
	radians = scale["x"](data_x)
	if not isinstance(radians, (int, float)):
		return 0.0
	return math.degrees(radians) % 360.0


#============================================
def get_polar_angle(
	label_placement: str | None,
	degrees: float,
) -> float:
	"""
	Rotation for a label sitting at a polar position.

	Args:
		label_placement: "parallel", "perpendicular", "vertical" or None.
		degrees: Angular position of the label.

	Returns:
		Rotation angle in degrees; 0 for vertical placement.
	"""
	if not label_placement or label_placement == "vertical":
		return 0.0
	if (90 < degrees < 180) or degrees > 270:
		sign = 1
	else:
		sign = -1
	if degrees in (0, 180):
		angle = 90.0
	elif 0 < degrees < 180:
		angle = 90.0 - degrees
	else:
		angle = 270.0 - degrees
	label_rotation = 0 if label_placement == "perpendicular" else 90
	return angle + sign * label_rotation


#============================================
def warn(message: str) -> None:
	"""
	Default warning sink.
	"""
	print(f"Warning: {message}", file=sys.stderr)
