"""
Banner Watermarker v1.2 - Unit Tests
====================================
Test suite for the transform store and image batch
"""

import io
import os
import sys
import pytest
from PIL import Image

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from batch import ImageBatch, decode_image, load_batch
from errors import DecodeFailure
from models import ImageItem, Transform
from transform_store import TransformStore

IDENTITY = Transform(0, 0, 1, 0)

# === FIXTURES ===

@pytest.fixture
def store():
    return TransformStore()

def _png_bytes(size=(40, 30), color='red'):
    buf = io.BytesIO()
    Image.new('RGB', size, color=color).save(buf, 'PNG')
    return buf.getvalue()

def _item(name="a.png", size=(40, 30)):
    return ImageItem.from_image(name, Image.new('RGB', size, 'white'))

# === TRANSFORM STORE ===

def test_get_unknown_returns_identity_without_recording(store):
    """get() on an unseen id is identity and does not grow the table"""
    assert store.get("img-x") == IDENTITY
    assert "img-x" not in store

def test_ensure_records_identity(store):
    """ensure() records the identity default explicitly"""
    assert store.ensure("img-x") == IDENTITY
    assert "img-x" in store

def test_move_is_unbounded(store):
    """Panning accumulates without limits"""
    store.move("a", 5000, -7000)
    store.move("a", 1, 2)
    t = store.get("a")
    assert (t.translate_x, t.translate_y) == (5001, -6998)

@pytest.mark.parametrize("delta", [0.1, 0.5, 1.7, -0.1, -0.4, -2.5])
def test_repeated_zoom_stays_in_bounds(store, delta):
    """No sequence of zoom deltas leaves [0.1, 3.0]"""
    for _ in range(50):
        t = store.zoom("a", delta)
        assert config.MIN_SCALE <= t.scale <= config.MAX_SCALE
    expected = config.MAX_SCALE if delta > 0 else config.MIN_SCALE
    assert store.get("a").scale == expected

def test_zoom_clamp_is_idempotent_at_boundary(store):
    """Zooming past the bound repeatedly keeps the bound exactly"""
    store.zoom_to("a", 3.0)
    store.zoom("a", 0.1)
    store.zoom("a", 0.1)
    assert store.get("a").scale == 3.0

def test_zoom_to_and_pinch_use_clamp(store):
    """Absolute and relative zoom go through the same clamp"""
    assert store.zoom_to("a", 12).scale == config.MAX_SCALE
    assert store.zoom_to("a", 0).scale == config.MIN_SCALE
    store.zoom_to("a", 1.0)
    assert store.pinch("a", 2.0).scale == pytest.approx(2.0)
    assert store.pinch("a", 4.0).scale == config.MAX_SCALE
    assert store.pinch("a", 0.001).scale == config.MIN_SCALE

def test_rotation_accumulates_past_360(store):
    """Rotation is unbounded; only the display value wraps"""
    for _ in range(5):
        store.rotate("a", 90)
    t = store.get("a")
    assert t.rotation == 450
    assert t.display_rotation == 90

def test_reset_yields_identity_after_any_history(store):
    """reset() restores {0, 0, 1, 0}"""
    store.move("a", 13, -4)
    store.zoom("a", 1.2)
    store.rotate("a", -725)
    store.pinch("a", 0.3)
    assert store.reset("a") == IDENTITY
    assert store.get("a") == IDENTITY

def test_mutations_notify_subscribers(store):
    """Every mutation reports the image id for re-rendering"""
    seen = []
    store.subscribe(seen.append)
    store.move("a", 1, 1)
    store.zoom("b", 0.1)
    store.rotate("a", 15)
    store.reset("b")
    assert seen == ["a", "b", "a", "b"]

    store.unsubscribe(seen.append)
    store.move("a", 1, 1)
    assert len(seen) == 4

def test_transforms_are_not_shared(store):
    """Mutating one image leaves the others untouched"""
    store.ensure("a")
    store.ensure("b")
    store.rotate("a", 30)
    assert store.get("b") == IDENTITY

# === BATCH ===

def test_batch_keys_follow_items():
    """Transform keys equal batch ids through add, remove and reset"""
    first, second, third = _item("1.png"), _item("2.png"), _item("3.png")
    batch = ImageBatch([first, second])
    assert batch.transforms.keys() == set(batch.ids)

    batch.transforms.rotate(first.id, 90)
    batch.add([third])
    assert batch.transforms.keys() == {first.id, second.id, third.id}

    batch.remove(first.id)
    assert batch.transforms.keys() == set(batch.ids) == {second.id, third.id}

    batch.replace([second])
    assert batch.transforms.keys() == {second.id}

    batch.reset()
    assert len(batch) == 0
    assert len(batch.transforms) == 0

def test_batch_replace_keeps_surviving_transforms():
    """Images that stay in the batch keep their transform"""
    keep, drop = _item("keep.png"), _item("drop.png")
    batch = ImageBatch([keep, drop])
    batch.transforms.zoom(keep.id, 0.5)
    batch.replace([keep])
    assert batch.transforms.get(keep.id).scale == pytest.approx(1.5)

def test_decode_image():
    """Decoded items are RGBA with intrinsic dimensions"""
    item = decode_image("photo.png", _png_bytes((64, 48)))
    assert item.name == "photo.png"
    assert (item.width, item.height) == (64, 48)
    assert item.image.mode == "RGBA"
    assert item.id.startswith("img-")

def test_decode_image_failure():
    """Garbage bytes raise DecodeFailure"""
    with pytest.raises(DecodeFailure, match="broken.jpg"):
        decode_image("broken.jpg", b"not an image at all")

    with pytest.raises(DecodeFailure, match="empty"):
        decode_image("empty.png", b"")

def test_load_batch_skips_failures_in_order():
    """5 inputs with one undecodable file give 4 items in input order"""
    files = [
        ("one.png", _png_bytes((10, 10))),
        ("two.png", _png_bytes((20, 10))),
        ("bad.png", b"\x89PNG broken"),
        ("four.png", _png_bytes((40, 10))),
        ("five.png", _png_bytes((50, 10))),
    ]
    items = load_batch(files, max_workers=3)
    assert [i.name for i in items] == ["one.png", "two.png", "four.png", "five.png"]
    assert [i.width for i in items] == [10, 20, 40, 50]
    assert len({i.id for i in items}) == 4

def test_load_batch_skips_oversized_image(monkeypatch):
    """An image over Pillow's pixel limit is skipped like any other bad file"""
    ok, big = _png_bytes((5, 5)), _png_bytes((30, 30))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(DecodeFailure, match="big.png"):
        decode_image("big.png", big)
    items = load_batch([("ok.png", ok), ("big.png", big)])
    assert [i.name for i in items] == ["ok.png"]

def test_load_batch_empty():
    """No files, no items"""
    assert load_batch([]) == []

def test_batch_from_files():
    """A batch built from uploads has one identity transform per image"""
    batch = ImageBatch.from_files([("a.png", _png_bytes()), ("b.txt", b"hello")])
    assert len(batch) == 1
    assert batch.transforms.get(batch[0].id) == IDENTITY
    assert batch.transforms.keys() == set(batch.ids)

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
