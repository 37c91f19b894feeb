"""
Banner Watermarker v1.2.0 - Configuration Module
================================================
Centralized configuration and constants
"""

from pathlib import Path

# === APPLICATION INFO ===
APP_VERSION = "1.2.0"
APP_NAME = "Banner Watermarker"
APP_LICENSE = "Proprietary"

# === FILE SETTINGS ===
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB
MAX_FILENAME_LENGTH = 255
SUPPORTED_INPUT_FORMATS = ['.jpg', '.jpeg', '.png', '.webp', '.gif', '.bmp']
SUPPORTED_OUTPUT_FORMATS = ['PNG', 'JPEG', 'WEBP']
EXPORT_PREFIX = "watermarked-"
PDF_FILENAME = "Watermarked.pdf"
ZIP_FILENAME = "watermarked_images.zip"

# === TRANSFORM ===
MIN_SCALE = 0.1
MAX_SCALE = 3.0
ZOOM_STEP = 0.1
ROTATE_STEP = 15
PAN_STEP = 10

# === WATERMARK BANNER ===
BANNER_CORNER_RADIUS = 8
MAX_WATERMARK_TEXT_LENGTH = 30
BANNER_HEIGHT_RANGE = (2.0, 10.0)
BANNER_WIDTH_RANGE = (10.0, 40.0)
FONT_SIZE_MULTIPLIER_RANGE = (0.3, 0.8)
TEXT_SHADOW_COLOR = (0, 0, 0, 77)  # rgba(0, 0, 0, 0.3)
TEXT_SHADOW_OFFSET = (1, 1)
TEXT_SHADOW_BLUR = 2

FONT_OPTIONS = [
    'Arial', 'Helvetica', 'Impact', 'Arial Black', 'Georgia',
    'Times New Roman', 'Verdana', 'Trebuchet MS', 'Courier New', 'Comic Sans MS',
]

# Bold faces first; the first existing file wins
FONT_CANDIDATES = {
    'Arial': ['arialbd.ttf', 'Arial Bold.ttf', 'LiberationSans-Bold.ttf', 'DejaVuSans-Bold.ttf'],
    'Helvetica': ['Helvetica-Bold.ttf', 'LiberationSans-Bold.ttf', 'DejaVuSans-Bold.ttf'],
    'Impact': ['impact.ttf', 'Impact.ttf', 'DejaVuSans-Bold.ttf'],
    'Arial Black': ['ariblk.ttf', 'Arial Black.ttf', 'DejaVuSans-Bold.ttf'],
    'Georgia': ['georgiab.ttf', 'Georgia Bold.ttf', 'DejaVuSerif-Bold.ttf'],
    'Times New Roman': ['timesbd.ttf', 'Times New Roman Bold.ttf', 'LiberationSerif-Bold.ttf', 'DejaVuSerif-Bold.ttf'],
    'Verdana': ['verdanab.ttf', 'Verdana Bold.ttf', 'DejaVuSans-Bold.ttf'],
    'Trebuchet MS': ['trebucbd.ttf', 'Trebuchet MS Bold.ttf', 'DejaVuSans-Bold.ttf'],
    'Courier New': ['courbd.ttf', 'Courier New Bold.ttf', 'LiberationMono-Bold.ttf', 'DejaVuSansMono-Bold.ttf'],
    'Comic Sans MS': ['comicbd.ttf', 'Comic Sans MS Bold.ttf', 'DejaVuSans-Bold.ttf'],
}

FONT_SEARCH_DIRS = [
    "/usr/share/fonts/truetype/dejavu",
    "/usr/share/fonts/truetype/liberation",
    "/usr/share/fonts/truetype/msttcorefonts",
    "/System/Library/Fonts/Supplemental",
    "/Library/Fonts",
    "C:/Windows/Fonts",
]

# === LOGO ===
LOGO_POSITIONS = [
    'top-left', 'top-center', 'top-right',
    'bottom-left', 'bottom-center', 'bottom-right',
]
LOGO_SIZE_RANGE = (20, 300)
LOGO_OPACITY_RANGE = (0.1, 1.0)
LOGO_MARGIN_RANGE = (0, 200)

# === PAGE LAYOUT ===
PAGE_MARGIN = 20
IMAGES_PER_PAGE_RANGE = (1, 6)
SPACING_RANGE = (0, 100)
PADDING_RANGE = (0, 100)
PADDING_FILL_COLOR = (245, 245, 245)

# A4 portrait in PDF points
PDF_PAGE_SIZE = (595.2756, 841.8898)

# === PAGE DECORATIONS ===
HEADER_HEIGHT = 60
HEADER_FILL_COLOR = (240, 240, 240)
HEADER_TEXT_COLOR = (50, 50, 50)
HEADER_FONT_SIZE = 24
JOIN_BUTTON_SIZE = (120, 40)
JOIN_BUTTON_BOTTOM_MARGIN = 20
JOIN_BUTTON_COLOR = (59, 130, 246)
JOIN_BUTTON_RADIUS = 5
JOIN_BUTTON_FONT_SIZE = 14
PAGE_LOGO_SIZE = 40
PAGE_LOGO_INSET = 10

# === DEFAULT SETTINGS ===
DEFAULT_SETTINGS = {
    'banner_height_percent': 4.5,
    'banner_width_percent': 22.0,
    'bg_color': '#FFD400',
    'text_color': '#000000',
    'font_size_multiplier': 0.55,
    'offset_x': 20,
    'offset_y': 20,
    'font_family': 'Arial',
    'watermark_text': 'TGDSCGROUP',
    'images_per_page': 2,
    'image_spacing': 0,
    'image_padding': 0,
    'show_logo': False,
    'logo_size': 80,
    'logo_position': 'top-right',
    'logo_opacity': 0.9,
    'logo_margin': 20,
    'show_top_banner': False,
    'top_banner_text': '',
    'show_join_button': False,
    'join_button_text': 'Join our group',
    'link_url': '',
}

# === PERFORMANCE ===
MIN_THREADS = 1
MAX_THREADS = 8
DEFAULT_THREADS = 4
EXPORT_STAGGER_SECONDS = 0.0

# === PATHS ===
def get_project_root() -> Path:
    """Get project root directory"""
    return Path(__file__).parent

def get_settings_file() -> Path:
    """Get persisted settings file"""
    return Path.home() / ".banner_watermarker" / "settings.json"

# === LOGGING ===
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = 'INFO'
LOG_FILE = 'watermarker.log'
