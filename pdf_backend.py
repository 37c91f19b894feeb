"""
Banner Watermarker v1.2 - PDF Backend
=====================================
Page-based document backend on top of reportlab.

Callers work in top-left page coordinates; the backend flips them to PDF's
bottom-left origin.
"""

import io
from typing import Optional, Tuple
from PIL import Image
import config
from errors import DependencyUnavailable
from logger import get_logger
from models import Rect

# reportlab is optional: single image export works without it
try:
    from reportlab.lib.utils import ImageReader
    from reportlab.pdfgen import canvas as rl_canvas
    PDF_SUPPORT = True
except ImportError:
    PDF_SUPPORT = False

logger = get_logger(__name__)

Color = Tuple[int, int, int]

def require_pdf_support() -> None:
    if not PDF_SUPPORT:
        raise DependencyUnavailable("reportlab", "PDF export")

def _rgb(color: Color) -> Tuple[float, float, float]:
    return tuple(c / 255 for c in color[:3])

class PdfDocument:
    """One multi-page PDF; the first page exists from construction"""

    def __init__(self, page_width: float = None, page_height: float = None, title: str = config.APP_NAME):
        require_pdf_support()
        self.page_width = page_width or config.PDF_PAGE_SIZE[0]
        self.page_height = page_height or config.PDF_PAGE_SIZE[1]
        self._buffer = io.BytesIO()
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=(self.page_width, self.page_height))
        self._canvas.setTitle(title)
        self._data: Optional[bytes] = None
        self.page_count = 1

    def _flip(self, rect: Rect) -> Tuple[float, float, float, float]:
        return rect.x, self.page_height - rect.y - rect.height, rect.width, rect.height

    def add_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1

    def draw_filled_rect(self, rect: Rect, color: Color) -> None:
        x, y, w, h = self._flip(rect)
        self._canvas.setFillColorRGB(*_rgb(color))
        self._canvas.rect(x, y, w, h, stroke=0, fill=1)

    def draw_filled_rounded_rect(self, rect: Rect, color: Color, radius: float = config.BANNER_CORNER_RADIUS) -> None:
        x, y, w, h = self._flip(rect)
        self._canvas.setFillColorRGB(*_rgb(color))
        self._canvas.roundRect(x, y, w, h, radius, stroke=0, fill=1)

    def draw_image(self, raster: Image.Image, rect: Rect) -> None:
        x, y, w, h = self._flip(rect)
        self._canvas.drawImage(ImageReader(raster), x, y, width=w, height=h, mask='auto')

    def draw_text(self, text: str, pos: Tuple[float, float], font: str = "Helvetica-Bold",
                  size: float = 12, color: Color = (0, 0, 0), align: str = "center") -> None:
        """pos is the baseline anchor in top-left coordinates"""
        x, y = pos[0], self.page_height - pos[1]
        self._canvas.setFont(font, size)
        self._canvas.setFillColorRGB(*_rgb(color))
        if align == "center":
            self._canvas.drawCentredString(x, y, text)
        elif align == "right":
            self._canvas.drawRightString(x, y, text)
        else:
            self._canvas.drawString(x, y, text)

    def add_link(self, rect: Rect, url: str) -> None:
        x, y, w, h = self._flip(rect)
        self._canvas.linkURL(url, (x, y, x + w, y + h), relative=0)

    def to_bytes(self) -> bytes:
        if self._data is None:
            self._canvas.save()
            self._data = self._buffer.getvalue()
            logger.info(f"PDF finalized: {self.page_count} page(s), {len(self._data)} bytes")
        return self._data

    def save(self, filename: str) -> str:
        data = self.to_bytes()
        with open(filename, "wb") as f:
            f.write(data)
        return filename
