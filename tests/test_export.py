import base64
import io
import re
import zlib

import pytest
from PIL import Image
from reportlab.lib.units import mm

from carte_visite import export as card_export
from carte_visite.errors import CaptureTargetMissingError
from carte_visite.export import export_pdf, export_png, pdf_page_size, png_filename
from carte_visite.models import AppState


def test_png_export(preview_state, missing_logo):
    exported = export_png(preview_state, logo_path=missing_logo)

    assert exported.filename == "awa_kone_signature.png"
    assert exported.media_type == "image/png"
    image = Image.open(io.BytesIO(exported.content))
    assert image.format == "PNG"
    assert image.size == (272, 228)


def test_png_filename_from_name():
    assert png_filename("Jean-Paul O'Brien") == "jean_paul_o_brien_signature.png"


def test_pdf_export(preview_state, missing_logo):
    exported = export_pdf(preview_state, logo_path=missing_logo)

    assert exported.filename == "carte-visite.pdf"
    assert exported.media_type == "application/pdf"
    assert exported.content.startswith(b"%PDF")


def test_pdf_filename_ignores_name(preview_state, missing_logo):
    card = preview_state.card.model_copy(update={"name": "Someone Else"})
    exported = export_pdf(preview_state.model_copy(update={"card": card}), logo_path=missing_logo)
    assert exported.filename == "carte-visite.pdf"


def test_pdf_page_is_landscape_83_by_65_mm():
    width, height = pdf_page_size()
    assert width == pytest.approx(83 * mm)
    assert height == pytest.approx(65 * mm)


@pytest.mark.parametrize("export", [export_png, export_pdf])
def test_export_without_capture_target_raises(export):
    with pytest.raises(CaptureTargetMissingError):
        export(AppState())


def _pdf_streams(content):
    for header, data in re.findall(rb"obj\s*<<((?:(?!endobj).)*?)>>\s*stream\r?\n(.*?)endstream", content, re.S):
        try:
            if b"ASCII85Decode" in header:
                data = base64.a85decode(data.strip(), adobe=True)
            if b"FlateDecode" in header:
                data = zlib.decompressobj().decompress(data)
        except (ValueError, zlib.error):
            continue
        yield data


def test_pdf_page_and_image_geometry(preview_state, missing_logo):
    content = export_pdf(preview_state, logo_path=missing_logo).content

    # 83x65 mm landscape page
    assert re.search(rb"/MediaBox\s*\[\s*0 0 235.2756 184.252\s*\]", content)
    # 85x55 mm image anchored at the top-left corner (y = 65 - 55 mm)
    matrix = b"240.9449 0 0 155.9055 0 28.34646 cm"
    assert any(matrix in stream for stream in _pdf_streams(content))


def test_pdf_rasterizes_natural_box_at_5x(preview_state, missing_logo, monkeypatch):
    captured = []
    rasterize = card_export.rasterize

    def spy(view, **kwargs):
        image = rasterize(view, **kwargs)
        captured.append((kwargs, image.size))
        return image

    monkeypatch.setattr(card_export, "rasterize", spy)
    export_pdf(preview_state, logo_path=missing_logo)

    ((kwargs, size),) = captured
    assert kwargs["scale"] == 5
    assert kwargs.get("size") is None
    assert size == (350, 325)
