"""
Banner Watermarker v1.2 - Data Models
=====================================
Immutable values shared by the engine, layout and export modules.

Settings objects clamp their numeric fields on construction, so an
out-of-range value never reaches the renderer or the layout engine.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Optional
from PIL import Image
import config
from validators import clamp, clamp_setting, clamp_text, coerce_number, validate_color_hex, validate_dimensions

def _set(obj, name, value):
    object.__setattr__(obj, name, value)

# === IMAGES ===

@dataclass(frozen=True)
class ImageItem:
    """
    A decoded image in the batch.

    Attributes:
        id: Opaque unique identifier
        name: Display (original file) name
        image: Decoded RGBA raster
        width: Intrinsic width in pixels
        height: Intrinsic height in pixels
    """
    id: str
    name: str
    image: Image.Image = field(repr=False, compare=False)
    width: int
    height: int

    def __post_init__(self):
        validate_dimensions(self.width, self.height)

    @classmethod
    def from_image(cls, name: str, image: Image.Image, item_id: Optional[str] = None) -> "ImageItem":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(
            id=item_id or f"img-{uuid.uuid4().hex[:12]}",
            name=name,
            image=image,
            width=image.width,
            height=image.height,
        )

# === TRANSFORM ===

@dataclass(frozen=True)
class Transform:
    """Per-image pan/zoom/rotate state, applied before compositing"""
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0

    def __post_init__(self):
        _set(self, 'scale', clamp(self.scale, config.MIN_SCALE, config.MAX_SCALE))

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @property
    def is_identity(self) -> bool:
        return self == Transform.identity()

    @property
    def display_rotation(self) -> float:
        """Rotation normalized to [0, 360) for presentation only"""
        return self.rotation % 360

    def with_changes(self, **changes) -> "Transform":
        return replace(self, **changes)

# === SETTINGS ===

@dataclass(frozen=True)
class LogoSettings:
    enabled: bool = False
    size: int = config.DEFAULT_SETTINGS['logo_size']
    position: str = config.DEFAULT_SETTINGS['logo_position']
    opacity: float = config.DEFAULT_SETTINGS['logo_opacity']
    margin: int = config.DEFAULT_SETTINGS['logo_margin']

    def __post_init__(self):
        if self.position not in config.LOGO_POSITIONS:
            _set(self, 'position', config.DEFAULT_SETTINGS['logo_position'])
        _set(self, 'size', int(clamp_setting('logo_size', self.size, config.LOGO_SIZE_RANGE)))
        _set(self, 'opacity', clamp_setting('logo_opacity', self.opacity, config.LOGO_OPACITY_RANGE))
        _set(self, 'margin', int(clamp_setting('logo_margin', self.margin, config.LOGO_MARGIN_RANGE)))

@dataclass(frozen=True)
class WatermarkSettings:
    """
    Banner settings applied uniformly to every image of a batch.

    Offsets are measured from the bottom-right corner and are left
    unclamped: a banner pushed past the canvas edge is cropped.
    """
    banner_height_percent: float = config.DEFAULT_SETTINGS['banner_height_percent']
    banner_width_percent: float = config.DEFAULT_SETTINGS['banner_width_percent']
    bg_color: str = config.DEFAULT_SETTINGS['bg_color']
    text_color: str = config.DEFAULT_SETTINGS['text_color']
    font_family: str = config.DEFAULT_SETTINGS['font_family']
    watermark_text: str = config.DEFAULT_SETTINGS['watermark_text']
    offset_x: float = config.DEFAULT_SETTINGS['offset_x']
    offset_y: float = config.DEFAULT_SETTINGS['offset_y']
    font_size_multiplier: float = config.DEFAULT_SETTINGS['font_size_multiplier']
    logo: LogoSettings = field(default_factory=LogoSettings)

    def __post_init__(self):
        validate_color_hex(self.bg_color)
        validate_color_hex(self.text_color)
        _set(self, 'banner_height_percent',
             clamp_setting('banner_height_percent', self.banner_height_percent, config.BANNER_HEIGHT_RANGE))
        _set(self, 'banner_width_percent',
             clamp_setting('banner_width_percent', self.banner_width_percent, config.BANNER_WIDTH_RANGE))
        _set(self, 'font_size_multiplier',
             clamp_setting('font_size_multiplier', self.font_size_multiplier, config.FONT_SIZE_MULTIPLIER_RANGE))
        _set(self, 'watermark_text', clamp_text(self.watermark_text))
        # offsets are unbounded
        _set(self, 'offset_x', coerce_number('offset_x', self.offset_x))
        _set(self, 'offset_y', coerce_number('offset_y', self.offset_y))

    @property
    def bg_rgb(self):
        return validate_color_hex(self.bg_color)

    @property
    def text_rgb(self):
        return validate_color_hex(self.text_color)

@dataclass(frozen=True)
class PageLayoutSettings:
    images_per_page: int = config.DEFAULT_SETTINGS['images_per_page']
    image_spacing: float = config.DEFAULT_SETTINGS['image_spacing']
    image_padding: float = config.DEFAULT_SETTINGS['image_padding']

    def __post_init__(self):
        _set(self, 'images_per_page',
             int(clamp_setting('images_per_page', self.images_per_page, config.IMAGES_PER_PAGE_RANGE)))
        _set(self, 'image_spacing', clamp_setting('image_spacing', self.image_spacing, config.SPACING_RANGE))
        _set(self, 'image_padding', clamp_setting('image_padding', self.image_padding, config.PADDING_RANGE))

    @property
    def effective(self) -> "PageLayoutSettings":
        """A single image per page ignores spacing and padding"""
        if self.images_per_page == 1 and (self.image_spacing or self.image_padding):
            return replace(self, image_spacing=0, image_padding=0)
        return self

    @property
    def is_zero_gap(self) -> bool:
        eff = self.effective
        return eff.image_spacing == 0 and eff.image_padding == 0

@dataclass(frozen=True)
class PageDecorations:
    """Optional per-page extras drawn over the PDF layout"""
    show_top_banner: bool = False
    top_banner_text: str = ""
    show_join_button: bool = False
    join_button_text: str = config.DEFAULT_SETTINGS['join_button_text']
    show_logo: bool = False
    link_url: str = ""

# === GEOMETRY ===

@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, top-left origin"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

@dataclass(frozen=True)
class PagePlanEntry:
    """Placement of one image: page, slot on that page, and the slot rectangle"""
    page_index: int
    position_in_page: int
    rect: Rect

    @property
    def starts_page(self) -> bool:
        return self.position_in_page == 0
