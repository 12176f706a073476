import pathlib

import fitz
import PIL.Image

import chart_label_geometry as clg
import chart_label_geometry.config
import chart_label_geometry.label
import chart_label_geometry.render


LabelSpec = clg.config.LabelSpec
RenderConfig = clg.config.RenderConfig

DPI = 72
PAGE_SIZE = 200.0


#============================================
def _render_pdf_first_page(path: pathlib.Path) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		path: PDF path.

	Returns:
		PIL image.
	"""
	document = fitz.open(path)
	page = document[0]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def test_background_box_is_painted(tmp_path: pathlib.Path) -> None:
	"""
	A filled background lands where the layout puts it.
	"""
	spec = LabelSpec(
		text="Hello",
		x=60,
		y=100,
		style={"font_size": 20, "fill": "white"},
		background_style={"fill": "#000000"},
		background_padding=6,
	)
	config = RenderConfig(page_width=PAGE_SIZE, page_height=PAGE_SIZE, draw_boxes=False, png_dpi=DPI)
	output_pdf = tmp_path / "smoke.pdf"
	result = clg.render.render_labels_to_pdf([spec, LabelSpec()], output_pdf, config)
	assert result.total_labels == 2
	assert result.rendered_labels == 1
	assert result.empty_labels == 1
	assert result.background_boxes == 1

	layout = clg.label.compute_label_layout(spec)
	box = layout.backgrounds[0]
	gray = _render_pdf_first_page(output_pdf).convert("L")
	assert gray.size == (int(PAGE_SIZE), int(PAGE_SIZE))

	# box edge, inside the padding
	edge_x = int(box.x + 2)
	edge_y = int(box.y + box.height / 2)
	assert gray.getpixel((edge_x, edge_y)) < 64
	assert gray.getpixel((2, 2)) > 240
	assert gray.getpixel((int(PAGE_SIZE) - 3, int(PAGE_SIZE) - 3)) > 240


#============================================
def test_png_preview(tmp_path: pathlib.Path) -> None:
	"""
	The PNG preview matches the page size at the requested DPI.
	"""
	config = RenderConfig(page_width=PAGE_SIZE, page_height=PAGE_SIZE, draw_boxes=True, png_dpi=DPI)
	output_pdf = tmp_path / "preview.pdf"
	clg.render.render_labels_to_pdf(
		[LabelSpec(text="Hi", x=20, y=20, angle=30, background_style={"fill": "yellow"})],
		output_pdf,
		config,
	)
	png_path = tmp_path / "preview.png"
	clg.render.render_pdf_to_png(output_pdf, png_path, DPI * 2)
	with PIL.Image.open(png_path) as image:
		assert image.size == (int(PAGE_SIZE) * 2, int(PAGE_SIZE) * 2)


#============================================
def test_parse_color_warns_on_unknown(warnings_seen: list[str]) -> None:
	"""
	Transparent paints are skipped and unknown colors warn.
	"""
	assert clg.render.parse_color("transparent", warnings_seen.append) is None
	assert clg.render.parse_color(None, warnings_seen.append) is None
	assert clg.render.parse_color("#ff0000", warnings_seen.append) is not None
	assert warnings_seen == []
	assert clg.render.parse_color("not-a-color", warnings_seen.append) is None
	assert len(warnings_seen) == 1
