"""
Banner Watermarker v1.2 - Settings Store
========================================
Flat key-value persistence for watermark and page layout settings
"""

import json
from pathlib import Path
from typing import Dict, Optional, Tuple
import config
from logger import get_logger
from models import LogoSettings, PageDecorations, PageLayoutSettings, WatermarkSettings
from validators import ValidationError

logger = get_logger(__name__)

SettingsBundle = Tuple[WatermarkSettings, PageLayoutSettings, PageDecorations]

def settings_to_record(watermark: WatermarkSettings, layout: PageLayoutSettings,
                       decorations: Optional[PageDecorations] = None) -> Dict:
    decorations = decorations or PageDecorations()
    return {
        'version': config.APP_VERSION,
        'banner_height_percent': watermark.banner_height_percent,
        'banner_width_percent': watermark.banner_width_percent,
        'bg_color': watermark.bg_color,
        'text_color': watermark.text_color,
        'font_size_multiplier': watermark.font_size_multiplier,
        'offset_x': watermark.offset_x,
        'offset_y': watermark.offset_y,
        'font_family': watermark.font_family,
        'watermark_text': watermark.watermark_text,
        'images_per_page': layout.images_per_page,
        'image_spacing': layout.image_spacing,
        'image_padding': layout.image_padding,
        'show_logo': watermark.logo.enabled,
        'logo_size': watermark.logo.size,
        'logo_position': watermark.logo.position,
        'logo_opacity': watermark.logo.opacity,
        'logo_margin': watermark.logo.margin,
        'show_top_banner': decorations.show_top_banner,
        'top_banner_text': decorations.top_banner_text,
        'show_join_button': decorations.show_join_button,
        'join_button_text': decorations.join_button_text,
        'link_url': decorations.link_url,
    }

def record_to_settings(record: Dict) -> SettingsBundle:
    """
    Build settings from a flat record.

    Unknown keys are ignored, missing keys take their defaults, and
    out-of-range numbers are clamped by the settings classes.
    """
    r = dict(config.DEFAULT_SETTINGS)
    r.update({k: v for k, v in record.items() if k in config.DEFAULT_SETTINGS})

    logo = LogoSettings(
        enabled=bool(r['show_logo']),
        size=r['logo_size'],
        position=r['logo_position'],
        opacity=r['logo_opacity'],
        margin=r['logo_margin'],
    )
    watermark = WatermarkSettings(
        banner_height_percent=r['banner_height_percent'],
        banner_width_percent=r['banner_width_percent'],
        bg_color=r['bg_color'],
        text_color=r['text_color'],
        font_family=r['font_family'],
        watermark_text=r['watermark_text'],
        offset_x=r['offset_x'],
        offset_y=r['offset_y'],
        font_size_multiplier=r['font_size_multiplier'],
        logo=logo,
    )
    layout = PageLayoutSettings(
        images_per_page=r['images_per_page'],
        image_spacing=r['image_spacing'],
        image_padding=r['image_padding'],
    )
    decorations = PageDecorations(
        show_top_banner=bool(r['show_top_banner']),
        top_banner_text=str(r['top_banner_text']),
        show_join_button=bool(r['show_join_button']),
        join_button_text=str(r['join_button_text']),
        show_logo=bool(r['show_logo']),
        link_url=str(r['link_url']),
    )
    return watermark, layout, decorations

def settings_to_json(watermark: WatermarkSettings, layout: PageLayoutSettings,
                     decorations: Optional[PageDecorations] = None) -> str:
    return json.dumps(settings_to_record(watermark, layout, decorations), indent=4)

def apply_settings_json(text: str) -> SettingsBundle:
    """
    Raises:
        ValidationError: If the text is not a JSON object or holds bad colors
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid settings file: {e}")
    if not isinstance(data, dict):
        raise ValidationError("Settings file must contain a JSON object")
    return record_to_settings(data)

def save_settings(path, watermark: WatermarkSettings, layout: PageLayoutSettings,
                  decorations: Optional[PageDecorations] = None) -> Path:
    path = Path(path) if path else config.get_settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(settings_to_json(watermark, layout, decorations), encoding='utf-8')
    logger.debug(f"Settings saved to {path}")
    return path

def load_settings(path=None) -> SettingsBundle:
    """Load persisted settings; a missing or unreadable file yields defaults"""
    path = Path(path) if path else config.get_settings_file()
    if not path.exists():
        return record_to_settings({})
    try:
        return apply_settings_json(path.read_text(encoding='utf-8'))
    except (OSError, ValidationError) as e:
        logger.error(f"Settings load failed, using defaults: {e}")
        return record_to_settings({})
