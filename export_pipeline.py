"""
Banner Watermarker v1.2 - Export Pipeline
=========================================
Runs the renderer over a batch and emits single files, a ZIP, or one PDF
"""

import io
import time
import zipfile
from typing import Iterator, Optional, Sequence, Tuple
from PIL import Image
import config
import layout_engine
import pdf_backend
import watermarker_engine as engine
from logger import get_logger
from models import ImageItem, PageDecorations, PageLayoutSettings, Rect, Transform, WatermarkSettings
from transform_store import TransformStore
from validators import sanitize_filename

logger = get_logger(__name__)

def export_filename(name: str) -> str:
    return f"{config.EXPORT_PREFIX}{sanitize_filename(name)}"

def _lookup(transforms, image_id: str) -> Transform:
    if isinstance(transforms, TransformStore):
        return transforms.get(image_id)
    return transforms.get(image_id, Transform.identity())

def render_batch(items: Sequence[ImageItem], transforms, settings: WatermarkSettings,
                 logo: Optional[Image.Image] = None) -> Iterator[Tuple[ImageItem, Image.Image]]:
    """
    Render every item in input order.

    An item that fails to render is logged and skipped; the rest of the
    batch still renders.
    """
    for item in items:
        try:
            raster = engine.render(item, _lookup(transforms, item.id), settings, logo)
        except (OSError, ValueError) as e:
            logger.error(f"Render failed for {item.name}: {e}")
            continue
        yield item, raster

# === INDIVIDUAL FILES ===
def export_individually(items: Sequence[ImageItem], transforms, settings: WatermarkSettings,
                        logo: Optional[Image.Image] = None, out_fmt: str = "PNG",
                        stagger: float = None) -> Iterator[Tuple[str, bytes]]:
    """Yield (watermarked-<name>, encoded bytes) per image, in input order"""
    stagger = config.EXPORT_STAGGER_SECONDS if stagger is None else stagger
    for i, (item, raster) in enumerate(render_batch(items, transforms, settings, logo)):
        if i and stagger > 0:
            time.sleep(stagger)
        yield export_filename(item.name), engine.encode_image(raster, out_fmt)

def export_zip(items: Sequence[ImageItem], transforms, settings: WatermarkSettings,
               logo: Optional[Image.Image] = None, out_fmt: str = "PNG") -> bytes:
    zip_buffer = io.BytesIO()
    count = 0
    with zipfile.ZipFile(zip_buffer, "w") as zf:
        for filename, data in export_individually(items, transforms, settings, logo, out_fmt, stagger=0):
            zf.writestr(filename, data)
            count += 1
    logger.info(f"ZIP export: {count} file(s)")
    return zip_buffer.getvalue()

# === DOCUMENT ===
def _draw_decorations(doc: "pdf_backend.PdfDocument", decorations: PageDecorations,
                      logo: Optional[Image.Image], page_width: float, page_height: float) -> None:
    if decorations.show_top_banner:
        doc.draw_filled_rect(Rect(0, 0, page_width, config.HEADER_HEIGHT), config.HEADER_FILL_COLOR)
        if decorations.top_banner_text:
            doc.draw_text(decorations.top_banner_text, (page_width / 2, config.HEADER_HEIGHT / 2 + 8),
                          size=config.HEADER_FONT_SIZE, color=config.HEADER_TEXT_COLOR)

    if decorations.show_logo and logo is not None:
        size, inset = config.PAGE_LOGO_SIZE, config.PAGE_LOGO_INSET
        logo_rect = Rect(page_width - size - inset, inset, size, size)
        doc.draw_image(logo, layout_engine.fit_within(logo_rect, logo.width, logo.height))
        if decorations.link_url:
            doc.add_link(logo_rect, decorations.link_url)

def _draw_join_button(doc: "pdf_backend.PdfDocument", decorations: PageDecorations,
                      page_width: float, page_height: float) -> None:
    bw, bh = config.JOIN_BUTTON_SIZE
    button = Rect((page_width - bw) / 2, page_height - bh - config.JOIN_BUTTON_BOTTOM_MARGIN, bw, bh)
    doc.draw_filled_rounded_rect(button, config.JOIN_BUTTON_COLOR, config.JOIN_BUTTON_RADIUS)
    doc.draw_text(decorations.join_button_text, (page_width / 2, button.y + bh / 2 + 5),
                  size=config.JOIN_BUTTON_FONT_SIZE, color=(255, 255, 255))
    if decorations.link_url:
        doc.add_link(button, decorations.link_url)

def _finish_page(doc: "pdf_backend.PdfDocument", decorations: PageDecorations,
                 logo: Optional[Image.Image], page_width: float, page_height: float) -> None:
    """Overlays go on top of the page's images"""
    _draw_decorations(doc, decorations, logo, page_width, page_height)
    if decorations.show_join_button:
        _draw_join_button(doc, decorations, page_width, page_height)

def export_document(items: Sequence[ImageItem], transforms, watermark_settings: WatermarkSettings,
                    layout: PageLayoutSettings, page_width: float = None, page_height: float = None,
                    logo: Optional[Image.Image] = None, decorations: Optional[PageDecorations] = None,
                    output_path: Optional[str] = None) -> bytes:
    """
    Render every item and stack the results into one PDF.

    A new page starts exactly when an image lands in slot 0 of a page after
    the first. Page decorations are drawn once the page's last slot is done,
    even if that slot failed to render. output_path is written only once the
    whole document is built.

    Raises:
        DependencyUnavailable: If reportlab is not installed
    """
    pdf_backend.require_pdf_support()

    if not items:
        logger.info("PDF export skipped: empty batch")
        return b""

    page_width = page_width or config.PDF_PAGE_SIZE[0]
    page_height = page_height or config.PDF_PAGE_SIZE[1]
    decorations = decorations or PageDecorations()
    layout = layout.effective
    total = len(items)

    doc = pdf_backend.PdfDocument(page_width, page_height)

    placed = 0
    for index, item in enumerate(items):
        entry = layout_engine.plan_page(index, total, layout, page_width, page_height)
        if index > 0 and entry.position_in_page == 0:
            doc.add_page()

        try:
            raster = engine.render(item, _lookup(transforms, item.id), watermark_settings, logo)
        except (OSError, ValueError) as e:
            logger.error(f"Render failed for {item.name}: {e}")
            raster = None

        if raster is not None:
            if layout.image_padding > 0:
                doc.draw_filled_rect(entry.rect, config.PADDING_FILL_COLOR)
            doc.draw_image(raster, layout_engine.fit_within(entry.rect, raster.width, raster.height))
            placed += 1

        if entry.position_in_page == layout.images_per_page - 1 or index == total - 1:
            _finish_page(doc, decorations, logo, page_width, page_height)

    data = doc.to_bytes()
    logger.info(f"PDF export: {placed}/{total} image(s) on {doc.page_count} page(s)")

    if output_path:
        with open(output_path, "wb") as f:
            f.write(data)
    return data
