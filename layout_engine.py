"""
Banner Watermarker v1.2 - Layout Engine
=======================================
Vertical stacking of N images per page with spacing, padding and margins.

With spacing and padding both zero the page margin is dropped and rows
share exact edges: row i spans [i*H/k, (i+1)*H/k] and the last row ends at
exactly H.
"""

from typing import List
import config
from logger import get_logger
from models import PageLayoutSettings, PagePlanEntry, Rect
from validators import ValidationError

logger = get_logger(__name__)

def page_count(total: int, layout: PageLayoutSettings) -> int:
    if total <= 0:
        return 0
    return (total + layout.images_per_page - 1) // layout.images_per_page

def _row_boundary(position: int, per_page: int, page_height: float) -> float:
    if position >= per_page:
        return page_height
    return position * page_height / per_page

def row_rect(position_in_page: int, layout: PageLayoutSettings,
             page_width: float, page_height: float) -> Rect:
    """Slot rectangle for a position on any page"""
    layout = layout.effective
    k = layout.images_per_page
    spacing, padding = layout.image_spacing, layout.image_padding

    if spacing == 0 and padding == 0:
        top = _row_boundary(position_in_page, k, page_height)
        bottom = _row_boundary(position_in_page + 1, k, page_height)
        return Rect(0, top, page_width, bottom - top)

    margin = config.PAGE_MARGIN
    available_height = page_height - 2 * margin - spacing * (k - 1) - 2 * padding * k
    row_height = available_height / k
    width = page_width - 2 * margin - 2 * padding
    if row_height <= 0 or width <= 0:
        raise ValidationError(
            f"Spacing {spacing} and padding {padding} leave no room for "
            f"{k} images on a {page_width}x{page_height} page"
        )

    y = margin + position_in_page * (row_height + spacing) + padding
    return Rect(margin + padding, y, width, row_height)

def plan_page(index: int, total: int, layout: PageLayoutSettings,
              page_width: float, page_height: float) -> PagePlanEntry:
    """
    Page index, slot, and slot rectangle of the image at batch position index.

    Raises:
        IndexError: If index is outside [0, total)
        ValidationError: If spacing and padding leave no positive row height
    """
    if not 0 <= index < total:
        raise IndexError(f"Image index {index} out of range for batch of {total}")

    k = layout.images_per_page
    position = index % k
    return PagePlanEntry(
        page_index=index // k,
        position_in_page=position,
        rect=row_rect(position, layout, page_width, page_height),
    )

def plan_document(total: int, layout: PageLayoutSettings,
                  page_width: float, page_height: float) -> List[PagePlanEntry]:
    """Plan entries for a whole batch; an empty batch has no pages"""
    return [plan_page(i, total, layout, page_width, page_height) for i in range(total)]

def fit_within(rect: Rect, image_width: float, image_height: float) -> Rect:
    """Largest aspect-preserving rectangle inside rect, centered both ways"""
    if image_width <= 0 or image_height <= 0:
        raise ValidationError(f"Invalid dimensions: {image_width}x{image_height}")

    ratio = min(rect.width / image_width, rect.height / image_height)
    width = image_width * ratio
    height = image_height * ratio
    return Rect(
        rect.x + (rect.width - width) / 2,
        rect.y + (rect.height - height) / 2,
        width,
        height,
    )
