"""
Drawable element records handed to renderers.
"""

# Standard Library
import dataclasses
import types
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.config
import chart_label_geometry.helpers


ResolvedStyle = clg.config.ResolvedStyle


@dataclasses.dataclass(frozen=True)
class Element:
	kind: str
	props: typing.Mapping[str, typing.Any] = dataclasses.field(
		default_factory=lambda: types.MappingProxyType({})
	)
	children: tuple["Element", ...] = ()


RECT = Element("rect")
TEXT = Element("text")
TSPAN = Element("tspan")
GROUP = Element("group")
PORTAL = Element("portal")


#============================================
def as_template(value: typing.Any, default: Element) -> Element:
	"""
	Normalise a caller-supplied component into an Element template.

	Args:
		value: None, an Element, or a mapping of explicit props.
		default: Template used when value is None or a bare mapping.

	Returns:
		Element template.
	"""
	if value is None:
		return default
	if isinstance(value, Element):
		return value
	return Element(default.kind, types.MappingProxyType(dict(value)), default.children)


#============================================
def clone_element(
	template: Element,
	props: typing.Mapping[str, typing.Any],
	children: typing.Sequence[Element] | None = None,
) -> Element:
	"""
	Copy a template, filling computed props the template does not set.

	Args:
		template: Caller-supplied element whose explicit props win.
		props: Computed default props.
		children: Replacement children, or None to keep the template's.

	Returns:
		New Element.
	"""
	merged = clg.helpers.merge_props(props, template.props)
	if children is None:
		children = template.children
	return Element(template.kind, types.MappingProxyType(merged), tuple(children))


#============================================
def iter_elements(element: Element, kind: str | None = None) -> typing.Iterator[Element]:
	"""
	Depth-first walk of an element tree, optionally filtered by kind.
	"""
	if kind is None or element.kind == kind:
		yield element
	for child in element.children:
		yield from iter_elements(child, kind)


#============================================
def to_plain(value: typing.Any) -> typing.Any:
	"""
	Convert prop values into JSON-friendly structures.
	"""
	if isinstance(value, ResolvedStyle):
		data = {
			field.name: getattr(value, field.name)
			for field in dataclasses.fields(value)
			if field.name != "extra"
		}
		data.update(dict(value.extra))
		return {key: to_plain(item) for key, item in data.items() if item is not None}
	if isinstance(value, typing.Mapping):
		return {str(key): to_plain(item) for key, item in value.items()}
	if isinstance(value, (list, tuple)):
		return [to_plain(item) for item in value]
	if callable(value):
		return None
	return value


#============================================
def element_to_dict(element: Element) -> dict:
	"""
	Serialise an element tree for manifests.
	"""
	return {
		"kind": element.kind,
		"props": to_plain(element.props),
		"children": [element_to_dict(child) for child in element.children],
	}
