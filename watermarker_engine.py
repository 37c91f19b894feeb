"""
Banner Watermarker v1.2 - Engine Module
=======================================
Per-image compositing: affine transform, logo and rounded watermark banner
"""

import io
import math
import os
from typing import Dict, Optional, Tuple
from PIL import Image, ImageDraw, ImageEnhance, ImageFilter, ImageFont, ImageOps
import config
from logger import get_logger
from models import ImageItem, LogoSettings, Rect, Transform, WatermarkSettings

logger = get_logger(__name__)
_font_cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}

Matrix = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]

# === GEOMETRY ===
def transform_matrix(width: int, height: int, transform: Transform) -> Matrix:
    """
    Forward affine matrix mapping source pixels to canvas pixels.

    Composition order: translate to center, rotate, scale, then translate
    back by (-w/2 + translate_x, -h/2 + translate_y). Pan therefore acts in
    the pre-rotation frame.
    """
    cx, cy = width / 2, height / 2
    theta = math.radians(transform.rotation)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    s = transform.scale
    ox = -cx + transform.translate_x
    oy = -cy + transform.translate_y
    return (
        (s * cos_t, -s * sin_t, cx + s * (cos_t * ox - sin_t * oy)),
        (s * sin_t, s * cos_t, cy + s * (sin_t * ox + cos_t * oy)),
        (0.0, 0.0, 1.0),
    )

def apply_matrix(matrix: Matrix, x: float, y: float) -> Tuple[float, float]:
    return (
        matrix[0][0] * x + matrix[0][1] * y + matrix[0][2],
        matrix[1][0] * x + matrix[1][1] * y + matrix[1][2],
    )

def _inverse_affine_data(matrix: Matrix) -> Tuple[float, ...]:
    """Pillow's AFFINE wants the canvas -> source mapping"""
    (a, b, c), (d, e, f), _ = matrix
    det = a * e - b * d
    ia, ib = e / det, -b / det
    id_, ie = -d / det, a / det
    return (ia, ib, -(ia * c + ib * f), id_, ie, -(id_ * c + ie * f))

def banner_rect(canvas_width: float, canvas_height: float, settings: WatermarkSettings) -> Rect:
    """Banner anchored at (canvas_width - offset_x, canvas_height - offset_y); never clamped"""
    banner_height = canvas_height * settings.banner_height_percent / 100
    banner_width = canvas_width * settings.banner_width_percent / 100
    x = canvas_width - banner_width - settings.offset_x
    y = canvas_height - banner_height - settings.offset_y
    return Rect(x, y, banner_width, banner_height)

def logo_box(canvas_width: int, canvas_height: int, logo: LogoSettings, logo_size: Tuple[int, int]) -> Tuple[int, int]:
    """Top-left corner of a logo of logo_size placed per its position and margin"""
    lw, lh = logo_size
    vertical, horizontal = logo.position.split('-')
    if horizontal == 'left':
        x = logo.margin
    elif horizontal == 'center':
        x = (canvas_width - lw) // 2
    else:
        x = canvas_width - lw - logo.margin
    y = logo.margin if vertical == 'top' else canvas_height - lh - logo.margin
    return int(x), int(y)

# === FONTS ===
def _find_font_file(family: str) -> Optional[str]:
    for filename in config.FONT_CANDIDATES.get(family, config.FONT_CANDIDATES['Arial']):
        for directory in config.FONT_SEARCH_DIRS:
            path = os.path.join(directory, filename)
            if os.path.exists(path):
                return path
    return None

def resolve_font(family: str, size: int) -> ImageFont.FreeTypeFont:
    """Bold face for the family, falling back to Pillow's bundled font"""
    size = max(1, int(round(size)))
    cache_key = (family, size)
    if cache_key not in _font_cache:
        path = _find_font_file(family)
        font = None
        if path:
            try:
                font = ImageFont.truetype(path, size)
            except OSError as e:
                logger.warning(f"Font {path} unusable: {e}")
        if font is None:
            font = ImageFont.load_default(size=size)
        _font_cache[cache_key] = font
    return _font_cache[cache_key]

def _is_bold(font) -> bool:
    try:
        return 'bold' in font.getname()[1].lower()
    except (AttributeError, TypeError):
        return False

# === LOGO ===
def load_logo_from_bytes(logo_bytes: bytes) -> Image.Image:
    if not logo_bytes:
        raise ValueError("Logo file is empty")
    return Image.open(io.BytesIO(logo_bytes)).convert("RGBA")

def apply_opacity(image: Image.Image, opacity: float) -> Image.Image:
    if opacity >= 1.0:
        return image
    image = image.copy()
    alpha = image.split()[3]
    alpha = ImageEnhance.Brightness(alpha).enhance(max(0.0, min(1.0, opacity)))
    image.putalpha(alpha)
    return image

def _draw_logo(canvas: Image.Image, logo: Image.Image, settings: LogoSettings) -> None:
    fitted = ImageOps.contain(logo.convert("RGBA"), (settings.size, settings.size), Image.Resampling.LANCZOS)
    fitted = apply_opacity(fitted, settings.opacity)
    x, y = logo_box(canvas.width, canvas.height, settings, fitted.size)
    canvas.paste(fitted, (x, y), fitted)

# === BANNER ===
def _shadow_box(canvas: Image.Image, text: str, font, stroke: int, anchor_xy) -> Optional[Tuple[int, int, int, int]]:
    """Canvas region the blurred shadow can touch, or None when fully off canvas"""
    left, top, right, bottom = ImageDraw.Draw(canvas).textbbox(
        anchor_xy, text, font=font, anchor="mm", stroke_width=stroke)
    pad = 3 * config.TEXT_SHADOW_BLUR + 1
    box = (max(0, math.floor(left) - pad), max(0, math.floor(top) - pad),
           min(canvas.width, math.ceil(right) + pad), min(canvas.height, math.ceil(bottom) + pad))
    if box[0] >= box[2] or box[1] >= box[3]:
        return None
    return box

def _draw_text_shadow(canvas: Image.Image, text: str, font, stroke: int, center) -> None:
    dx, dy = config.TEXT_SHADOW_OFFSET
    anchor_xy = (center[0] + dx, center[1] + dy)
    box = _shadow_box(canvas, text, font, stroke, anchor_xy)
    if box is None:
        return

    x0, y0, x1, y1 = box
    shadow = Image.new('RGBA', (x1 - x0, y1 - y0), (0, 0, 0, 0))
    ImageDraw.Draw(shadow).text(
        (anchor_xy[0] - x0, anchor_xy[1] - y0), text, font=font, anchor="mm",
        fill=config.TEXT_SHADOW_COLOR, stroke_width=stroke, stroke_fill=config.TEXT_SHADOW_COLOR,
    )
    shadow = shadow.filter(ImageFilter.GaussianBlur(config.TEXT_SHADOW_BLUR))
    canvas.alpha_composite(shadow, dest=(x0, y0))

def _draw_banner(canvas: Image.Image, settings: WatermarkSettings) -> None:
    rect = banner_rect(canvas.width, canvas.height, settings)
    draw = ImageDraw.Draw(canvas)
    draw.rounded_rectangle(
        [round(rect.x), round(rect.y), round(rect.right), round(rect.bottom)],
        radius=config.BANNER_CORNER_RADIUS,
        fill=settings.bg_rgb + (255,),
    )

    text = settings.watermark_text or config.DEFAULT_SETTINGS['watermark_text']
    font = resolve_font(settings.font_family, rect.height * settings.font_size_multiplier)
    stroke = 0 if _is_bold(font) else max(1, round(font.size / 30))
    center = rect.center

    _draw_text_shadow(canvas, text, font, stroke, center)

    text_fill = settings.text_rgb + (255,)
    ImageDraw.Draw(canvas).text(
        center, text, font=font, anchor="mm",
        fill=text_fill, stroke_width=stroke, stroke_fill=text_fill,
    )

# === RENDER ===
def render(item: ImageItem, transform: Transform, settings: WatermarkSettings,
           logo: Optional[Image.Image] = None) -> Image.Image:
    """
    Composite one image: transformed source, optional logo, banner.

    The output is always item.width x item.height. Logo and banner are drawn
    in untransformed canvas space.
    """
    size = (item.width, item.height)
    source = item.image if item.image.mode == "RGBA" else item.image.convert("RGBA")
    if source.size != size:
        source = source.resize(size, Image.Resampling.LANCZOS)

    if transform.is_identity:
        canvas = source.copy()
    else:
        matrix = transform_matrix(item.width, item.height, transform)
        canvas = source.transform(
            size, Image.Transform.AFFINE, _inverse_affine_data(matrix),
            resample=Image.Resampling.BICUBIC, fillcolor=(0, 0, 0, 0),
        )

    if logo is not None:
        _draw_logo(canvas, logo, settings.logo)

    _draw_banner(canvas, settings)
    logger.debug(f"Rendered {item.name} ({item.width}x{item.height})")
    return canvas

# === EXPORT ===
def encode_image(img: Image.Image, fmt: str = "PNG", quality: int = 95) -> bytes:
    fmt = fmt.upper()
    if fmt == "JPG":
        fmt = "JPEG"
    if fmt == "JPEG":
        bg = Image.new("RGB", img.size, (255, 255, 255))
        bg.paste(img, mask=img.split()[3])
        img = bg
    buf = io.BytesIO()
    sk = {"format": fmt}
    if fmt == "JPEG":
        sk.update({"quality": quality, "optimize": True, "subsampling": 0})
    elif fmt == "WEBP":
        sk.update({"quality": quality, "method": 6})
    elif fmt == "PNG":
        sk.update({"optimize": True})
    img.save(buf, **sk)
    return buf.getvalue()
