"""
Card layout and rasterization.

`render_card` is the only place the card content is laid out. The preview page
draws its result as scaled HTML, the exporters rasterize it with Pillow, so the
downloaded file always carries what the user inspected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from carte_visite import config as card_config
from carte_visite.models import CardInfo
from carte_visite.utils import format_phone

logger = logging.getLogger(__name__)

_REGULAR_FONTS = ("DejaVuSans.ttf", "arial.ttf", "Arial.ttf")
_BOLD_FONTS = ("DejaVuSans-Bold.ttf", "arialbd.ttf", "Arial Bold.ttf")


class DisplayMode(str, Enum):
    PREVIEW = "preview"
    EXPORT = "export"


@dataclass(frozen=True)
class CardLine:
    text: str
    size: float
    color: str
    weight: int = 400

    @property
    def bold(self) -> bool:
        return self.weight >= 600

    @property
    def line_height(self) -> float:
        return self.size * card_config.LINE_HEIGHT


@dataclass(frozen=True)
class CardView:
    mode: DisplayMode
    scale: float
    shadow: bool
    lines: Tuple[CardLine, ...]
    width: int = card_config.CARD_WIDTH
    height: int = card_config.CARD_HEIGHT
    padding: int = card_config.CARD_PADDING
    logo_height: int = card_config.LOGO_HEIGHT

    @property
    def texts(self) -> Tuple[str, ...]:
        return tuple(line.text for line in self.lines)


def card_lines(card: CardInfo) -> Tuple[CardLine, ...]:
    return (
        CardLine(card.name, card_config.NAME_SIZE, card_config.NAME_COLOR, weight=700),
        CardLine(card.position, card_config.TEXT_SIZE, card_config.ACCENT_COLOR, weight=500),
        CardLine(
            f"M. {card_config.PHONE_PREFIX} {format_phone(card.phone)}",
            card_config.TEXT_SIZE,
            card_config.TEXT_COLOR,
        ),
        CardLine(f"F. {card_config.FAX_NUMBER}", card_config.TEXT_SIZE, card_config.TEXT_COLOR),
        CardLine(card_config.WEBSITE, card_config.TEXT_SIZE, card_config.TEXT_COLOR),
    )


def render_card(card: CardInfo, mode: DisplayMode) -> CardView:
    if mode is DisplayMode.PREVIEW:
        return CardView(mode=mode, scale=card_config.PREVIEW_SCALE, shadow=True, lines=card_lines(card))
    return CardView(mode=mode, scale=1, shadow=False, lines=card_lines(card))


@lru_cache(maxsize=32)
def _font(size: float, bold: bool):
    for name in _BOLD_FONTS if bold else _REGULAR_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def load_logo(path: Optional[Path] = None) -> Optional[Image.Image]:
    """Open the logo, or return None so the card is drawn without it."""
    path = Path(path or card_config.config.CARD_LOGO_PATH)
    try:
        with Image.open(path) as logo:
            return logo.convert("RGBA")
    except OSError as exc:
        logger.warning("Logo %s unavailable, hiding it: %s", path, exc)
        return None


def rasterize(
    view: CardView,
    scale: float,
    size: Optional[Tuple[int, int]] = None,
    background: str = card_config.BACKGROUND_COLOR,
    logo_path: Optional[Path] = None,
) -> Image.Image:
    """
    Capture the card into an RGB bitmap at `scale` pixels per CSS pixel.

    `size` clips the capture to a box anchored at the card's top-left corner;
    without it the card's natural box is captured.
    """
    width, height = size or (view.width, view.height)
    image = Image.new("RGB", (round(width * scale), round(height * scale)), background)
    draw = ImageDraw.Draw(image)
    draw.rectangle(
        [(0, 0), (round(view.width * scale) - 1, round(view.height * scale) - 1)],
        fill=card_config.BACKGROUND_COLOR,
    )

    x = view.padding * scale
    y = view.padding * scale

    logo = load_logo(logo_path)
    if logo is not None:
        logo_h = round(view.logo_height * scale)
        logo_w = max(1, round(logo.width * logo_h / logo.height))
        logo = logo.resize((logo_w, logo_h), Image.Resampling.LANCZOS)
        image.paste(logo, (round(x), round(y)), mask=logo.split()[3])
        y += logo_h

    for line in view.lines:
        font_px = line.size * scale
        box = line.line_height * scale
        draw.text((x, y + (box - font_px) / 2), line.text, fill=line.color, font=_font(font_px, line.bold))
        y += box

    return image
