"""
Banner Watermarker v1.2 - Batch Module
======================================
Decoding uploads into a ready batch and keeping transforms in step with it
"""

import io
import concurrent.futures
from typing import Iterable, List, Optional, Sequence, Tuple
from PIL import Image, ImageOps, UnidentifiedImageError
import config
from errors import DecodeFailure
from logger import get_logger
from models import ImageItem
from transform_store import TransformStore
from validators import ValidationError, validate_file_size

logger = get_logger(__name__)

# === DECODING ===
def decode_image(name: str, data: bytes) -> ImageItem:
    """
    Decode raw bytes into an RGBA ImageItem.

    Raises:
        DecodeFailure: If the bytes are not a readable image
    """
    if not data:
        raise DecodeFailure(name, "empty file")
    try:
        validate_file_size(len(data))
        with Image.open(io.BytesIO(data)) as img_temp:
            img = ImageOps.exif_transpose(img_temp)
            img = img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, ValidationError) as e:
        raise DecodeFailure(name, str(e))
    return ImageItem.from_image(name, img)

def load_batch(files: Sequence[Tuple[str, bytes]], max_workers: Optional[int] = None) -> List[ImageItem]:
    """
    Decode every file on its own worker and wait for all of them.

    The result is returned only after every decode has resolved. Files that
    fail to decode are logged and dropped; the rest keep their input order.
    """
    if not files:
        return []

    workers = max_workers or config.DEFAULT_THREADS
    workers = max(config.MIN_THREADS, min(config.MAX_THREADS, workers))

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(decode_image, name, data) for name, data in files]
        concurrent.futures.wait(futures)

    items = []
    for (name, _), fut in zip(files, futures):
        try:
            items.append(fut.result())
        except DecodeFailure as e:
            logger.error(f"Skipped {name}: {e.reason}")
    logger.info(f"Batch ready: {len(items)}/{len(files)} images decoded")
    return items

# === BATCH ===
class ImageBatch:
    """Ordered images plus their transforms; the two key sets always match"""

    def __init__(self, items: Iterable[ImageItem] = ()):
        self.transforms = TransformStore()
        self._items: List[ImageItem] = []
        self.replace(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index: int) -> ImageItem:
        return self._items[index]

    @property
    def items(self) -> List[ImageItem]:
        return list(self._items)

    @property
    def ids(self) -> List[str]:
        return [item.id for item in self._items]

    def find(self, image_id: str) -> Optional[ImageItem]:
        for item in self._items:
            if item.id == image_id:
                return item
        return None

    def replace(self, items: Iterable[ImageItem]) -> None:
        self._items = list(items)
        self.transforms.sync(self.ids)

    def add(self, items: Iterable[ImageItem]) -> None:
        for item in items:
            self._items.append(item)
            self.transforms.ensure(item.id)

    def remove(self, image_id: str) -> None:
        self._items = [item for item in self._items if item.id != image_id]
        self.transforms.discard(image_id)

    def reset(self) -> None:
        self._items = []
        self.transforms.clear()

    @classmethod
    def from_files(cls, files: Sequence[Tuple[str, bytes]], max_workers: Optional[int] = None) -> "ImageBatch":
        return cls(load_batch(files, max_workers))
