"""
Banner Watermarker v1.2 - Utils Module
======================================
Streamlit session state glue between the UI and the engine
"""

import streamlit as st
import threading
from typing import List, Optional, Tuple
from PIL import Image
import config
import settings_store
import watermarker_engine as engine
from batch import ImageBatch, load_batch
from logger import get_logger
from models import ImageItem, PageDecorations, PageLayoutSettings, WatermarkSettings
from validators import ValidationError

logger = get_logger(__name__)
_session_lock = threading.Lock()

def inject_css():
    st.markdown("""
    <style>
        div[data-testid="column"] { background-color: #f8f9fa; border-radius: 8px; padding: 10px; border: 1px solid #eee; }
        .preview-placeholder { border: 2px dashed #e0e0e0; border-radius: 10px; padding: 40px; text-align: center; color: #888; }
    </style>
    """, unsafe_allow_html=True)

def _store_settings(watermark: WatermarkSettings, layout: PageLayoutSettings, decorations: PageDecorations):
    record = settings_store.settings_to_record(watermark, layout, decorations)
    for key in config.DEFAULT_SETTINGS:
        st.session_state[f'{key}_key'] = record[key]

def init_session_state():
    """Initializes all state variables"""
    if 'batch' not in st.session_state:
        st.session_state['batch'] = new_batch()
    if 'current_index' not in st.session_state: st.session_state['current_index'] = 0
    if 'uploader_key' not in st.session_state: st.session_state['uploader_key'] = 0
    if 'lang_code' not in st.session_state: st.session_state['lang_code'] = 'en'
    if 'logo_bytes' not in st.session_state: st.session_state['logo_bytes'] = None
    if 'pdf_bytes' not in st.session_state: st.session_state['pdf_bytes'] = None
    if 'render_cache' not in st.session_state: st.session_state['render_cache'] = {}

    if 'banner_height_percent_key' not in st.session_state:
        _store_settings(*settings_store.load_settings())

def new_batch(items=()) -> ImageBatch:
    batch = ImageBatch(items)
    batch.transforms.subscribe(invalidate_preview)
    return batch

def invalidate_preview(image_id: str):
    cache = st.session_state.get('render_cache')
    if cache is not None:
        cache.pop(image_id, None)

def process_uploaded_files(uploaded_files) -> Tuple[List[ImageItem], int]:
    """Decode all uploads; returns the decoded items and the number skipped"""
    files = [(f.name, f.getvalue()) for f in uploaded_files]
    items = load_batch(files)
    return items, len(files) - len(items)

def replace_batch(items: List[ImageItem]):
    with _session_lock:
        st.session_state['batch'] = new_batch(items)
        st.session_state['current_index'] = 0
        st.session_state['render_cache'] = {}
        st.session_state['pdf_bytes'] = None

def current_settings() -> Tuple[WatermarkSettings, PageLayoutSettings, PageDecorations]:
    record = {key: st.session_state.get(f'{key}_key', value) for key, value in config.DEFAULT_SETTINGS.items()}
    return settings_store.record_to_settings(record)

def reset_settings():
    for k, v in config.DEFAULT_SETTINGS.items():
        st.session_state[f'{k}_key'] = v

def get_logo() -> Optional[Image.Image]:
    data = st.session_state.get('logo_bytes')
    if not data:
        return None
    try:
        return engine.load_logo_from_bytes(data)
    except (OSError, ValueError) as e:
        logger.error(f"Logo load failed: {e}")
        return None

def active_logo(watermark: WatermarkSettings) -> Optional[Image.Image]:
    return get_logo() if watermark.logo.enabled else None

def get_preview(item: ImageItem) -> Image.Image:
    """Composited raster for item, re-rendered when its transform or the settings change"""
    watermark, _, _ = current_settings()
    batch = st.session_state['batch']
    transform = batch.transforms.get(item.id)
    key = (watermark, transform, st.session_state.get('logo_bytes'))
    cache = st.session_state['render_cache']
    cached = cache.get(item.id)
    if cached is None or cached[0] != key:
        cached = (key, engine.render(item, transform, watermark, active_logo(watermark)))
        cache[item.id] = cached
    return cached[1]

def get_current_settings_json() -> str:
    return settings_store.settings_to_json(*current_settings())

def apply_settings_from_json(json_file):
    try:
        _store_settings(*settings_store.apply_settings_json(json_file.getvalue().decode('utf-8')))
        return True, None
    except (UnicodeDecodeError, ValidationError) as e:
        return False, str(e)

def remember_settings():
    settings_store.save_settings(None, *current_settings())

def safe_state_update(k, v):
    with _session_lock: st.session_state[k] = v
