"""
Banner Watermarker v1.2 - Unit Tests
====================================
Test suite for batch export (single images, ZIP, PDF)
"""

import io
import os
import sys
import zipfile
import pytest
from PIL import Image
from pypdf import PdfReader

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
import export_pipeline
import layout_engine
import pdf_backend
import watermarker_engine as engine
from errors import DependencyUnavailable
from models import ImageItem, PageDecorations, PageLayoutSettings, Transform, WatermarkSettings
from transform_store import TransformStore

PAGE = (600.0, 800.0)

# === FIXTURES ===

def _item(name, size=(120, 90), color='white'):
    return ImageItem.from_image(name, Image.new('RGB', size, color=color))

@pytest.fixture
def items():
    return [_item(f"img{i}.jpg", size=(100 + 10 * i, 80)) for i in range(7)]

@pytest.fixture
def store(items):
    s = TransformStore()
    s.sync(i.id for i in items)
    return s

@pytest.fixture
def settings():
    return WatermarkSettings()

class RecordingDocument:
    """Stands in for the PDF backend and records every call"""

    instances = []

    def __init__(self, page_width=None, page_height=None, title=None):
        self.page_width, self.page_height = page_width, page_height
        self.calls = []
        self.page_count = 1
        RecordingDocument.instances.append(self)

    def add_page(self):
        self.page_count += 1
        self.calls.append(("add_page",))

    def draw_filled_rect(self, rect, color):
        self.calls.append(("rect", self.page_count - 1, rect, color))

    def draw_filled_rounded_rect(self, rect, color, radius=8):
        self.calls.append(("rounded_rect", self.page_count - 1, rect, color))

    def draw_image(self, raster, rect):
        self.calls.append(("image", self.page_count - 1, raster.size, rect))

    def draw_text(self, text, pos, font="Helvetica-Bold", size=12, color=(0, 0, 0), align="center"):
        self.calls.append(("text", self.page_count - 1, text))

    def add_link(self, rect, url):
        self.calls.append(("link", self.page_count - 1, url))

    def to_bytes(self):
        return b"%PDF-recorded"

@pytest.fixture
def recorder(monkeypatch):
    RecordingDocument.instances = []
    monkeypatch.setattr(pdf_backend, "PdfDocument", RecordingDocument)
    monkeypatch.setattr(pdf_backend, "PDF_SUPPORT", True)
    return RecordingDocument

# === INDIVIDUAL EXPORT ===

def test_export_filename():
    """photo.jpg exports as watermarked-photo.jpg"""
    assert export_pipeline.export_filename("photo.jpg") == "watermarked-photo.jpg"

def test_export_individually_order_and_names(items, store, settings):
    """One file per image, in input order, named after the original"""
    results = list(export_pipeline.export_individually(items, store, settings, out_fmt="PNG"))
    assert [name for name, _ in results] == [f"watermarked-img{i}.jpg" for i in range(7)]
    for (name, data), item in zip(results, items):
        decoded = Image.open(io.BytesIO(data))
        assert decoded.size == (item.width, item.height)

def test_export_individually_stagger_does_not_change_output(items, store, settings, monkeypatch):
    """Stagger only sleeps between items"""
    sleeps = []
    monkeypatch.setattr(export_pipeline.time, "sleep", sleeps.append)
    fast = list(export_pipeline.export_individually(items[:3], store, settings, stagger=0))
    slow = list(export_pipeline.export_individually(items[:3], store, settings, stagger=0.2))
    assert fast == slow
    assert sleeps == [0.2, 0.2]

def test_export_individually_accepts_plain_mapping(items, settings):
    """Transforms may be a plain dict; missing ids mean identity"""
    transforms = {items[0].id: Transform(rotation=90)}
    results = list(export_pipeline.export_individually(items[:2], transforms, settings))
    assert len(results) == 2

def test_export_individually_skips_failed_render(items, store, settings, monkeypatch):
    """A failing image is skipped and the batch continues"""
    real_render = engine.render

    def flaky(item, transform, s, logo=None):
        if item.name == "img1.jpg":
            raise OSError("broken pixels")
        return real_render(item, transform, s, logo)

    monkeypatch.setattr(engine, "render", flaky)
    names = [n for n, _ in export_pipeline.export_individually(items[:3], store, settings)]
    assert names == ["watermarked-img0.jpg", "watermarked-img2.jpg"]

def test_export_individually_empty_batch(store, settings):
    """Empty batch is a no-op"""
    assert list(export_pipeline.export_individually([], store, settings)) == []

def test_export_individually_without_pdf_backend(items, store, settings, monkeypatch):
    """Single image export works when reportlab is missing"""
    monkeypatch.setattr(pdf_backend, "PDF_SUPPORT", False)
    assert len(list(export_pipeline.export_individually(items[:2], store, settings))) == 2

def test_export_zip(items, store, settings):
    """ZIP holds every watermarked file"""
    data = export_pipeline.export_zip(items[:3], store, settings, out_fmt="JPEG")
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == ["watermarked-img0.jpg", "watermarked-img1.jpg", "watermarked-img2.jpg"]

# === DOCUMENT EXPORT ===

def test_document_page_breaks(items, store, settings, recorder):
    """7 images at 2 per page: new pages exactly before images 2, 4 and 6"""
    layout = PageLayoutSettings(images_per_page=2, image_spacing=0, image_padding=0)
    data = export_pipeline.export_document(items, store, settings, layout, *PAGE)
    assert data == b"%PDF-recorded"

    doc = recorder.instances[0]
    assert doc.page_count == 4
    sequence = [c[0] for c in doc.calls]
    image_positions = [i for i, kind in enumerate(sequence) if kind == "image"]
    breaks = [sum(1 for kind in sequence[:pos] if kind == "image")
              for pos, kind in enumerate(sequence) if kind == "add_page"]
    assert breaks == [2, 4, 6]
    assert len(image_positions) == 7
    assert [c[1] for c in doc.calls if c[0] == "image"] == [0, 0, 1, 1, 2, 2, 3]

def test_document_uses_layout_rects(items, store, settings, recorder):
    """Each image is fitted into its planned row"""
    layout = PageLayoutSettings(images_per_page=3, image_spacing=10, image_padding=6)
    export_pipeline.export_document(items[:3], store, settings, layout, *PAGE)

    doc = recorder.instances[0]
    drawn = [c for c in doc.calls if c[0] == "image"]
    fills = [c for c in doc.calls if c[0] == "rect"]
    assert len(fills) == 3
    for index, (call, item) in enumerate(zip(drawn, items)):
        entry = layout_engine.plan_page(index, 3, layout, *PAGE)
        assert call[2] == (item.width, item.height)
        assert call[3] == layout_engine.fit_within(entry.rect, item.width, item.height)
        assert fills[index][2] == entry.rect
        assert fills[index][3] == config.PADDING_FILL_COLOR

def test_document_zero_gap_has_no_padding_fill(items, store, settings, recorder):
    """Zero-gap mode draws images only"""
    layout = PageLayoutSettings(images_per_page=2, image_spacing=0, image_padding=0)
    export_pipeline.export_document(items[:2], store, settings, layout, *PAGE)
    kinds = {c[0] for c in recorder.instances[0].calls}
    assert kinds == {"image"}

def test_document_decorations(items, store, settings, recorder):
    """Header and button once per page, link on the button"""
    layout = PageLayoutSettings(images_per_page=2)
    decorations = PageDecorations(
        show_top_banner=True, top_banner_text="HEADER",
        show_join_button=True, join_button_text="Join", link_url="https://example.org",
    )
    export_pipeline.export_document(items[:3], store, settings, layout, *PAGE, decorations=decorations)

    doc = recorder.instances[0]
    headers = [c for c in doc.calls if c[0] == "text" and c[2] == "HEADER"]
    buttons = [c for c in doc.calls if c[0] == "rounded_rect"]
    links = [c for c in doc.calls if c[0] == "link"]
    assert [c[1] for c in headers] == [0, 1]
    assert [c[1] for c in buttons] == [0, 1]
    assert all(c[2] == "https://example.org" for c in links)

def test_document_decorations_drawn_over_images(store, settings, recorder):
    """Header and page logo come after the page's images so they stay visible"""
    items = [_item("wide.jpg", size=(600, 300)), _item("b.jpg"), _item("c.jpg")]
    logo = Image.new('RGBA', (40, 40), (255, 0, 0, 255))
    layout = PageLayoutSettings(images_per_page=2, image_spacing=0, image_padding=0)
    decorations = PageDecorations(show_top_banner=True, top_banner_text="HEADER", show_logo=True)
    export_pipeline.export_document(items, store, settings, layout, *PAGE, logo=logo, decorations=decorations)

    calls = recorder.instances[0].calls
    for page in (0, 1):
        on_page = [i for i, c in enumerate(calls) if len(c) > 1 and c[1] == page]
        page_images = [i for i in on_page if calls[i][0] == "image" and calls[i][2] != logo.size]
        overlays = [i for i in on_page if calls[i][0] in ("rect", "text")
                    or (calls[i][0] == "image" and calls[i][2] == logo.size)]
        assert page_images and overlays
        assert max(page_images) < min(overlays)

def test_document_join_button_survives_failed_last_slot(items, store, settings, recorder, monkeypatch):
    """A page whose last image fails to render still gets its button"""
    real_render = engine.render

    def flaky(item, transform, s, logo=None):
        if item.name == "img1.jpg":
            raise ValueError("cannot render")
        return real_render(item, transform, s, logo)

    monkeypatch.setattr(engine, "render", flaky)
    layout = PageLayoutSettings(images_per_page=2)
    decorations = PageDecorations(show_join_button=True, join_button_text="Join")
    export_pipeline.export_document(items[:4], store, settings, layout, *PAGE, decorations=decorations)

    doc = recorder.instances[0]
    assert [c[1] for c in doc.calls if c[0] == "rounded_rect"] == [0, 1]
    assert [c[1] for c in doc.calls if c[0] == "image"] == [0, 1, 1]

def test_document_empty_batch(store, settings, recorder):
    """Empty batch produces nothing and never opens a document"""
    assert export_pipeline.export_document([], store, settings, PageLayoutSettings()) == b""
    assert recorder.instances == []

def test_document_dependency_unavailable(items, store, settings, tmp_path, monkeypatch):
    """Missing reportlab fails before any write"""
    monkeypatch.setattr(pdf_backend, "PDF_SUPPORT", False)
    target = tmp_path / "out.pdf"
    with pytest.raises(DependencyUnavailable, match="reportlab"):
        export_pipeline.export_document(items, store, settings, PageLayoutSettings(), output_path=str(target))
    assert not target.exists()

def test_document_real_pdf(items, store, settings, tmp_path):
    """reportlab produces one PDF with the planned page count"""
    target = tmp_path / "batch.pdf"
    store.rotate(items[0].id, 30)
    layout = PageLayoutSettings(images_per_page=2, image_spacing=0, image_padding=0)
    data = export_pipeline.export_document(items, store, settings, layout, output_path=str(target))

    assert data.startswith(b"%PDF")
    assert target.read_bytes() == data
    reader = PdfReader(io.BytesIO(data))
    assert len(reader.pages) == layout_engine.page_count(len(items), layout)
    width, height = config.PDF_PAGE_SIZE
    assert float(reader.pages[0].mediabox.width) == pytest.approx(width)
    assert float(reader.pages[0].mediabox.height) == pytest.approx(height)

def test_pdf_document_save(tmp_path):
    """Backend save writes the finalized bytes"""
    doc = pdf_backend.PdfDocument(200, 300)
    doc.draw_filled_rounded_rect(layout_engine.fit_within(
        layout_engine.row_rect(0, PageLayoutSettings(images_per_page=1), 200, 300), 20, 10), (255, 212, 0))
    doc.add_page()
    doc.draw_text("hello", (100, 150))
    path = doc.save(str(tmp_path / "doc.pdf"))
    reader = PdfReader(path)
    assert len(reader.pages) == 2

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
