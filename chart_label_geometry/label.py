"""
Label assembly: resolve, lay out, and build the element tree.
"""

# Standard Library
import dataclasses

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.background
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.elements
import chart_label_geometry.geometry
import chart_label_geometry.line_layout
import chart_label_geometry.resolve


Capabilities = clg.capabilities.Capabilities
LabelSpec = clg.config.LabelSpec
CalculatedProps = clg.config.CalculatedProps
LineLayout = clg.config.LineLayout
BackgroundBox = clg.config.BackgroundBox
Element = clg.elements.Element

clone_element = clg.elements.clone_element
as_template = clg.elements.as_template


@dataclasses.dataclass(frozen=True)
class LabelLayout:
	spec: LabelSpec
	calculated: CalculatedProps
	lines: tuple[LineLayout, ...]
	backgrounds: tuple[BackgroundBox, ...]
	per_line_background: bool


#============================================
def compute_label_layout(spec: LabelSpec, capabilities: Capabilities | None = None) -> LabelLayout | None:
	"""
	Compute all geometry for a label.

	Args:
		spec: Raw label spec.
		capabilities: Host capabilities.

	Returns:
		LabelLayout, or None when the text resolves to nothing.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	evaluated = clg.resolve.evaluate_spec(spec, capabilities)
	if evaluated.text is None:
		return None
	calculated = clg.geometry.get_calculated_props(evaluated, capabilities)
	lines = clg.line_layout.get_line_layouts(evaluated, calculated, capabilities)
	backgrounds = clg.background.get_background_boxes(evaluated, calculated, lines, capabilities)
	return LabelLayout(
		spec=evaluated,
		calculated=calculated,
		lines=lines,
		backgrounds=backgrounds,
		per_line_background=bool(backgrounds) and clg.background.is_per_line_background(evaluated),
	)


#============================================
def build_tspan_elements(layout: LabelLayout) -> tuple[Element, ...]:
	"""
	One positioned text run per line.
	"""
	spec = layout.spec
	calculated = layout.calculated
	template = as_template(spec.tspan_component, clg.elements.TSPAN)
	tspans = []
	for line in layout.lines:
		props = {
			"key": f"{spec.id}-key-{line.index}",
			"x": None if spec.inline else calculated.x,
			"dx": calculated.dx + line.padding.left,
			"dy": line.tspan_dy,
			"text_anchor": line.style.text_anchor or calculated.text_anchor,
			"style": line.style,
			"text": line.text,
		}
		tspans.append(clone_element(template, props, ()))
	return tuple(tspans)


#============================================
def build_text_element(layout: LabelLayout, capabilities: Capabilities) -> Element:
	"""
	Text element holding the line runs.
	"""
	spec = layout.spec
	calculated = layout.calculated
	props = {
		"id": spec.id,
		"direction": calculated.direction,
		"dx": calculated.dx,
		"dy": calculated.dy,
		"x": calculated.x,
		"y": calculated.y,
		"inline": spec.inline,
		"transform": calculated.transform,
		"class_name": spec.class_name,
		"title": spec.title,
		"desc": capabilities.evaluate(spec.desc, spec),
		"tab_index": capabilities.evaluate(spec.tab_index, spec),
	}
	template = as_template(spec.text_component, clg.elements.TEXT)
	return clone_element(template, props, build_tspan_elements(layout))


#============================================
def build_background_elements(layout: LabelLayout) -> tuple[Element, ...]:
	"""
	Rect elements for the background boxes, caller props winning.
	"""
	template = as_template(layout.spec.background_component, clg.elements.RECT)
	elements = []
	for index, box in enumerate(layout.backgrounds):
		props = {
			"x": box.x,
			"y": box.y,
			"width": box.width,
			"height": box.height,
			"style": box.style,
			"transform": box.transform,
		}
		if layout.per_line_background:
			props["key"] = f"bgKey-{index}"
		elements.append(clone_element(template, props))
	return tuple(elements)


#============================================
def render_label(spec: LabelSpec, capabilities: Capabilities | None = None) -> Element | None:
	"""
	Build the element tree for a label.

	Args:
		spec: Raw label spec.
		capabilities: Host capabilities.

	Returns:
		A text element, a group of background(s) beneath the text, either
		wrapped in a portal element when requested; None when there is
		nothing to render.
	"""
	capabilities = clg.capabilities.resolve_capabilities(capabilities)
	layout = compute_label_layout(spec, capabilities)
	if layout is None:
		return None
	text_element = build_text_element(layout, capabilities)
	result = text_element
	if layout.backgrounds:
		children = build_background_elements(layout) + (text_element,)
		template = as_template(layout.spec.group_component, clg.elements.GROUP)
		result = clone_element(template, {}, children)
	if layout.spec.render_in_portal:
		result = clone_element(clg.elements.PORTAL, {}, (result,))
	return result
