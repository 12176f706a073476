import pytest
import reportlab.pdfbase.pdfmetrics

import chart_label_geometry as clg
import chart_label_geometry.capabilities
import chart_label_geometry.config
import chart_label_geometry.textsize


ResolvedStyle = clg.config.ResolvedStyle


#============================================
@pytest.mark.parametrize(
	"length, font_size, expected",
	[
		("1in", 14, 96.0),
		("12pt", 14, 16.0),
		("1cm", 14, 37.8),
		("2pc", 14, 32.0),
		("2em", 10, 20.0),
		("1ex", 10, 5.0),
		("2em", None, 28.0),
		("10px", 14, 10.0),
		("10", 14, 10.0),
		(7, 14, 7.0),
		("abc", 14, 0.0),
	],
)
def test_convert_length_to_pixels(length, font_size, expected: float) -> None:
	"""
	Lengths convert with CSS unit ratios.
	"""
	assert clg.textsize.convert_length_to_pixels(length, font_size) == pytest.approx(expected)


#============================================
def test_map_font_name() -> None:
	"""
	CSS font metadata maps onto the standard PDF faces.
	"""
	assert clg.textsize.map_font_name("Times New Roman", "bold", None) == "Times-Bold"
	assert clg.textsize.map_font_name("monospace", None, "italic") == "Courier-Oblique"
	assert clg.textsize.map_font_name("Gill Sans, sans-serif", 700, None) == "Helvetica-Bold"
	assert clg.textsize.map_font_name("serif", "400", None) == "Times-Roman"
	assert clg.textsize.map_font_name(None, None, None) == "Helvetica"
	assert clg.textsize.is_bold("bolder")
	assert not clg.textsize.is_bold("normal")


#============================================
def test_measurement_uses_font_metrics() -> None:
	"""
	Widths come from ReportLab and multi-line heights stack.
	"""
	style = ResolvedStyle(font_size=20)
	size = clg.textsize.approximate_text_size("Hello", style)
	expected = reportlab.pdfbase.pdfmetrics.stringWidth("Hello", "Helvetica", 20)
	assert size.width == pytest.approx(expected)
	assert size.height > 0

	stacked = clg.textsize.approximate_text_size("Hello\nHi", style)
	assert stacked.width == pytest.approx(expected)
	assert stacked.height == pytest.approx(size.height * 2)


#============================================
def test_letter_spacing_widens_text() -> None:
	"""
	Letter spacing adds to every character advance.
	"""
	plain = clg.textsize.measure_line("abc", ResolvedStyle(font_size=10))
	spaced = clg.textsize.measure_line("abc", ResolvedStyle(font_size=10, letter_spacing="2px"))
	assert spaced.width == pytest.approx(plain.width + 6)


#============================================
def test_default_capabilities_measure_with_reportlab() -> None:
	"""
	Without explicit capabilities the ReportLab measurement is used.
	"""
	capabilities = clg.capabilities.resolve_capabilities(None)
	assert capabilities is clg.capabilities.DEFAULT_CAPABILITIES
	assert capabilities.measure is clg.textsize.approximate_text_size
