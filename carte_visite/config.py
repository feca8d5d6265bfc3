from __future__ import annotations

import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"


class Config:
    CARD_LOGO_PATH: Path = Path(os.getenv("CARD_LOGO_PATH", str(STATIC_DIR / "logo.png")))
    CARD_LOG_LEVEL: str = os.getenv("CARD_LOG_LEVEL", "INFO").upper()

    CARD_HOST: str = os.getenv("CARD_HOST", "127.0.0.1")
    _port_raw: str = os.getenv("CARD_PORT", "8000")
    CARD_PORT: int = int(_port_raw) if _port_raw.isdigit() else 8000


config = Config()

# Fixed card content
PHONE_PREFIX = "+229 01"
FAX_NUMBER = "+229 01 21 30 05 18"
WEBSITE = "www.fnm.bj"

# Card box, in CSS pixels
CARD_WIDTH = 70
CARD_HEIGHT = 65
CARD_PADDING = 2
LOGO_HEIGHT = 12
LINE_HEIGHT = 1.25

NAME_SIZE = 4.5
TEXT_SIZE = 4.0
NAME_COLOR = "#1f2937"
ACCENT_COLOR = "#0066CC"
TEXT_COLOR = "#000000"
BACKGROUND_COLOR = "#ffffff"

PREVIEW_SCALE = 4

# PNG export
PNG_SCALE = 4
PNG_CAPTURE_SIZE = (68, 57)
PNG_SUFFIX = "_signature.png"

# PDF export, page and image geometry in millimetres
PDF_SCALE = 5
PDF_PAGE_SIZE = (83, 65)
PDF_IMAGE_SIZE = (85, 55)
PDF_FILENAME = "carte-visite.pdf"
