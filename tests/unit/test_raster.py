import random
import sys
import unittest
from io import BytesIO
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

try:
    from PIL import Image

    from lifecal_renderer.raster import png_data_url, rasterize
except (ImportError, OSError):  # pragma: no cover
    rasterize = None

from lifecal_core.models import ProgressData, Variant
from lifecal_renderer.models import CanvasSpec, RasterizationError
from lifecal_renderer.scene import generate

SMALL = CanvasSpec(width=150, height=267, top_offset=84)


class RasterTests(unittest.TestCase):
    def setUp(self):
        if rasterize is None:
            self.skipTest("CairoSVG/Pillow not installed")

    def test_png_matches_canvas(self):
        scene = generate("goal", ProgressData(10, 3, 7, Variant.GOAL), SMALL, rng=random.Random(0))
        png = rasterize(scene)
        self.assertTrue(png.startswith(b"\x89PNG"))
        image = Image.open(BytesIO(png))
        self.assertEqual(image.size, (150, 267))
        self.assertEqual(image.mode, "RGBA")

    def test_every_variant_rasterizes(self):
        for variant in ("life", "year"):
            scene = generate(variant, ProgressData(365, 120, 245), SMALL, rng=random.Random(0))
            self.assertTrue(rasterize(scene).startswith(b"\x89PNG"))

    def test_raw_markup_with_explicit_size(self):
        markup = '<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"><rect width="4" height="4" fill="red"/></svg>'
        image = Image.open(BytesIO(rasterize(markup, width=8, height=8)))
        self.assertEqual(image.size, (8, 8))

    def test_bad_markup_raises(self):
        with self.assertRaises(RasterizationError):
            rasterize("<svg><unclosed")

    def test_data_url(self):
        self.assertTrue(png_data_url(b"\x89PNG").startswith("data:image/png;base64,"))


if __name__ == "__main__":
    unittest.main()
