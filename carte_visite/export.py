from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from carte_visite import config as card_config
from carte_visite.errors import CaptureTargetMissingError, ExportError
from carte_visite.models import AppState, Stage
from carte_visite.rendering import CardView, DisplayMode, rasterize, render_card
from carte_visite.utils import slugify_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    media_type: str
    content: bytes


def capture_target(state: AppState) -> CardView:
    """The export-mode card; it only exists while the preview is shown."""
    if state.stage is not Stage.PREVIEW:
        raise CaptureTargetMissingError("No card is rendered outside the preview")
    return render_card(state.card, DisplayMode.EXPORT)


def png_filename(name: str) -> str:
    return f"{slugify_name(name)}{card_config.PNG_SUFFIX}"


def pdf_page_size() -> Tuple[float, float]:
    width, height = card_config.PDF_PAGE_SIZE
    # Landscape: the long side is the width
    return max(width, height) * mm, min(width, height) * mm


# -------- PNG --------
def export_png(state: AppState, logo_path: Optional[Path] = None) -> ExportedFile:
    view = capture_target(state)
    try:
        image = rasterize(
            view,
            scale=card_config.PNG_SCALE,
            size=card_config.PNG_CAPTURE_SIZE,
            background=card_config.BACKGROUND_COLOR,
            logo_path=logo_path,
        )
        buf = io.BytesIO()
        image.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise ExportError(f"PNG export failed: {exc}") from exc

    filename = png_filename(state.card.name)
    logger.info("Exported %s (%dx%d)", filename, image.width, image.height)
    return ExportedFile(filename, "image/png", buf.getvalue())


# -------- PDF --------
def export_pdf(state: AppState, logo_path: Optional[Path] = None) -> ExportedFile:
    view = capture_target(state)
    page_width, page_height = pdf_page_size()
    image_width, image_height = (side * mm for side in card_config.PDF_IMAGE_SIZE)
    try:
        image = rasterize(
            view,
            scale=card_config.PDF_SCALE,
            background=card_config.BACKGROUND_COLOR,
            logo_path=logo_path,
        )
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=(page_width, page_height))
        # Top-left placement; the image is wider than the page and gets clipped
        pdf.drawImage(
            ImageReader(image),
            0,
            page_height - image_height,
            width=image_width,
            height=image_height,
        )
        pdf.showPage()
        pdf.save()
    except (OSError, ValueError) as exc:
        raise ExportError(f"PDF export failed: {exc}") from exc

    logger.info("Exported %s (%dx%d image)", card_config.PDF_FILENAME, image.width, image.height)
    return ExportedFile(card_config.PDF_FILENAME, "application/pdf", buf.getvalue())
