"""
Banner Watermarker v1.2 - Validation Module
===========================================
Input validation, sanitization and setting clamps
"""

import math
import os
import re
from pathlib import Path
from typing import Tuple
import config
from logger import get_logger

logger = get_logger(__name__)

class ValidationError(Exception):
    """Custom validation error"""
    pass

def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename by removing dangerous characters

    Args:
        filename: Original filename

    Returns:
        Safe filename
    """
    if not filename:
        return "unnamed.png"

    # Keep only filename (remove path)
    filename = Path(filename.replace('\\', '/')).name

    # Remove dangerous characters
    filename = re.sub(r'[<>:"|?*\x00-\x1f]', '', filename)

    # Limit length
    if len(filename) > config.MAX_FILENAME_LENGTH:
        name, ext = os.path.splitext(filename)
        max_name_len = config.MAX_FILENAME_LENGTH - len(ext)
        filename = name[:max_name_len] + ext

    # Ensure not empty
    if not filename or filename == '.':
        filename = "unnamed.png"

    return filename

def validate_color_hex(color_hex: str) -> Tuple[int, int, int]:
    """
    Validate and parse hex color

    Args:
        color_hex: Hex color string (e.g., "#FFD400")

    Returns:
        RGB tuple

    Raises:
        ValidationError: If color is invalid
    """
    if not isinstance(color_hex, str) or not color_hex.startswith('#'):
        raise ValidationError(f"Invalid color format: {color_hex}")

    color = color_hex[1:]
    if len(color) != 6:
        raise ValidationError(f"Invalid color format: {color_hex}")

    try:
        return tuple(int(color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValidationError(f"Invalid hex color: {color_hex}")

def validate_dimensions(width: int, height: int) -> bool:
    """
    Validate intrinsic image dimensions

    Raises:
        ValidationError: If dimensions are not positive integers
    """
    if not isinstance(width, int) or not isinstance(height, int):
        raise ValidationError(f"Dimensions must be integers: {width}x{height}")

    if width <= 0 or height <= 0:
        raise ValidationError(f"Invalid dimensions: {width}x{height}")

    return True

def validate_file_size(size_bytes: int) -> bool:
    """
    Raises:
        ValidationError: If an upload exceeds the size limit
    """
    if size_bytes > config.MAX_FILE_SIZE:
        size_mb = size_bytes / (1024 * 1024)
        max_mb = config.MAX_FILE_SIZE / (1024 * 1024)
        raise ValidationError(f"File too large: {size_mb:.1f} MB (max: {max_mb:.1f} MB)")
    return True

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(max_val, value))

def coerce_number(name: str, value) -> float:
    """
    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Setting '{name}' must be numeric, got: {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"Setting '{name}' must be finite, got: {value!r}")
    return value

def clamp_setting(name: str, value, bounds: Tuple[float, float]):
    """
    Clamp a numeric setting into its declared range.

    Out-of-range values are never rejected, only pulled back to the nearest
    bound and logged.

    Raises:
        ValidationError: If the value is not numeric at all
    """
    value = coerce_number(name, value)

    min_val, max_val = bounds
    clamped = clamp(value, min_val, max_val)
    if clamped != value:
        logger.warning(f"Setting '{name}' out of range: {value} (clamped to {clamped})")
    return clamped

def clamp_text(text: str, max_length: int = None) -> str:
    """Truncate watermark text to its bounded length"""
    max_length = max_length or config.MAX_WATERMARK_TEXT_LENGTH
    text = "" if text is None else str(text)
    if len(text) > max_length:
        logger.warning(f"Watermark text longer than {max_length} characters, truncated")
        return text[:max_length]
    return text
