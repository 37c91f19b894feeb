"""
Banner Watermarker v1.2 - Transform Store
=========================================
Per-image pan/zoom/rotate state keyed by image id
"""

from typing import Callable, Dict, Iterable, List
import config
from logger import get_logger
from models import Transform
from validators import clamp

logger = get_logger(__name__)

class TransformStore:
    """
    Table of transforms keyed by image id.

    Every mutation notifies subscribers with the affected image id so the
    caller can re-render that image's composited output.
    """

    def __init__(self):
        self._transforms: Dict[str, Transform] = {}
        self._listeners: List[Callable[[str], None]] = []

    def __contains__(self, image_id: str) -> bool:
        return image_id in self._transforms

    def __len__(self) -> int:
        return len(self._transforms)

    def keys(self):
        return set(self._transforms)

    # === ACCESS ===

    def get(self, image_id: str) -> Transform:
        """Stored transform, or identity when none has been recorded"""
        return self._transforms.get(image_id, Transform.identity())

    def ensure(self, image_id: str) -> Transform:
        """Return the stored transform, recording identity first if missing"""
        if image_id not in self._transforms:
            self._transforms[image_id] = Transform.identity()
        return self._transforms[image_id]

    def snapshot(self) -> Dict[str, Transform]:
        return dict(self._transforms)

    # === MUTATIONS ===

    def move(self, image_id: str, dx: float, dy: float) -> Transform:
        t = self.ensure(image_id)
        return self._store(image_id, t.with_changes(
            translate_x=t.translate_x + dx,
            translate_y=t.translate_y + dy,
        ))

    def zoom(self, image_id: str, delta: float) -> Transform:
        t = self.ensure(image_id)
        return self._set_scale(image_id, t, t.scale + delta)

    def zoom_to(self, image_id: str, value: float) -> Transform:
        t = self.ensure(image_id)
        return self._set_scale(image_id, t, value)

    def pinch(self, image_id: str, ratio: float) -> Transform:
        """Relative zoom, e.g. the distance ratio of a two-finger gesture"""
        t = self.ensure(image_id)
        return self._set_scale(image_id, t, t.scale * ratio)

    def rotate(self, image_id: str, delta_degrees: float) -> Transform:
        t = self.ensure(image_id)
        return self._store(image_id, t.with_changes(rotation=t.rotation + delta_degrees))

    def reset(self, image_id: str) -> Transform:
        return self._store(image_id, Transform.identity())

    # === MEMBERSHIP ===

    def discard(self, image_id: str) -> None:
        self._transforms.pop(image_id, None)

    def sync(self, image_ids: Iterable[str]) -> None:
        """Make the stored keys equal to image_ids, keeping surviving transforms"""
        ids = list(image_ids)
        self._transforms = {i: self._transforms.get(i, Transform.identity()) for i in ids}

    def clear(self) -> None:
        self._transforms.clear()

    # === NOTIFICATION ===

    def subscribe(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[str], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _set_scale(self, image_id: str, t: Transform, value: float) -> Transform:
        scale = clamp(value, config.MIN_SCALE, config.MAX_SCALE)
        return self._store(image_id, t.with_changes(scale=scale))

    def _store(self, image_id: str, transform: Transform) -> Transform:
        self._transforms[image_id] = transform
        logger.debug(f"Transform {image_id}: {transform}")
        for callback in list(self._listeners):
            callback(image_id)
        return transform
