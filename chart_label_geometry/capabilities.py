"""
Host capabilities consumed by the layout core.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import chart_label_geometry as clg
import chart_label_geometry.helpers
import chart_label_geometry.textsize


@dataclasses.dataclass(frozen=True)
class Capabilities:
	evaluate: typing.Callable[[typing.Any, typing.Any], typing.Any] = clg.helpers.evaluate_prop
	measure: typing.Callable[..., typing.Any] = clg.textsize.approximate_text_size
	convert_length: typing.Callable[[typing.Any, float], float] = clg.textsize.convert_length_to_pixels
	warn: typing.Callable[[str], None] = clg.helpers.warn


DEFAULT_CAPABILITIES = Capabilities()


#============================================
def resolve_capabilities(capabilities: Capabilities | None) -> Capabilities:
	"""
	Fall back to the ReportLab-backed defaults when none are given.
	"""
	if capabilities is None:
		return DEFAULT_CAPABILITIES
	return capabilities
