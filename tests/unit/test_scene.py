import math
import random
import re
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from lifecal_core.models import ProgressData, Variant
from lifecal_renderer.layouts import MOUND_MAX, hourglass_geometry, ring_geometry
from lifecal_renderer.models import CanvasSpec, InvalidCanvasError
from lifecal_renderer.scene import YEAR_LAYOUT_GRID, YEAR_LAYOUT_HOURGLASS, generate, select_layout

IPHONE = CanvasSpec(width=750, height=1334, top_offset=420)
RANDOM_ROLES = {"speck", "grain"}


def _progress(total, elapsed, variant=Variant.LIFE, label=None):
    return ProgressData(total=total, elapsed=elapsed, remaining=max(0, total - elapsed), variant=variant, label=label)


class LifeGridTests(unittest.TestCase):
    def test_nothing_lived(self):
        scene = generate("life", _progress(4160, 0), IPHONE, rng=random.Random(1))
        self.assertEqual(scene.count("lived"), 0)
        self.assertEqual(scene.count("unlived"), 4160)

    def test_lived_count_matches_elapsed(self):
        for elapsed in (1, 52, 1234, 4160, 5000):
            scene = generate("life", _progress(4160, elapsed), IPHONE, rng=random.Random(1))
            self.assertEqual(scene.count("lived"), min(elapsed, 4160))
            self.assertEqual(len(scene.elements), 4160)

    def test_lived_capped_at_total(self):
        progress = ProgressData(total=100, elapsed=200, remaining=0, variant=Variant.LIFE)
        scene = generate("life", progress, IPHONE, rng=random.Random(1))
        self.assertEqual(scene.count("lived"), 100)
        self.assertEqual(scene.count("unlived"), 4060)

    def test_every_400th_lived_cell_glows(self):
        scene = generate("life", _progress(4160, 1000), IPHONE, rng=random.Random(1))
        glowing = [e for e in scene.foreground("lived") if e.style.filter == "glow"]
        self.assertEqual(len(glowing), 3)

    def test_grid_centered_horizontally(self):
        scene = generate("life", _progress(4160, 0), IPHONE, rng=random.Random(1))
        first, last = scene.elements[0], scene.elements[51]
        self.assertAlmostEqual(first.cx, IPHONE.width - last.cx, places=6)

    def test_unknown_variant_uses_life(self):
        scene = generate("decade", _progress(4160, 10), IPHONE, rng=random.Random(1))
        self.assertEqual(scene.variant, Variant.LIFE)
        self.assertEqual(scene.count("lived"), 10)
        self.assertIn("#FF2D55", scene.to_svg())


class YearGridTests(unittest.TestCase):
    def test_full_year(self):
        scene = generate(
            "year", _progress(365, 365, Variant.YEAR, "2025"), IPHONE, rng=random.Random(1), year_layout=YEAR_LAYOUT_GRID
        )
        self.assertEqual(scene.count("elapsed"), 365)
        self.assertEqual(scene.count("future"), 0)
        self.assertEqual(scene.foreground("caption-remaining")[0].content, "0 DAYS LEFT")
        self.assertEqual(scene.foreground("caption-elapsed")[0].content, "365 DAYS GONE")
        self.assertEqual(scene.foreground("label")[0].content, "2025")

    def test_partial_year(self):
        scene = generate(
            "year", _progress(366, 100, Variant.YEAR), IPHONE, rng=random.Random(1), year_layout=YEAR_LAYOUT_GRID
        )
        self.assertEqual(scene.count("elapsed"), 100)
        self.assertEqual(scene.count("future"), 266)
        self.assertEqual(scene.count("label"), 0)

    def test_elapsed_beyond_total_is_clamped(self):
        scene = generate(
            "year", _progress(365, 400, Variant.YEAR), IPHONE, rng=random.Random(1), year_layout=YEAR_LAYOUT_GRID
        )
        self.assertEqual(scene.count("elapsed"), 365)


class HourglassTests(unittest.TestCase):
    def test_mound_height_non_decreasing(self):
        heights = []
        for elapsed in range(0, 366, 5):
            geometry = hourglass_geometry(_progress(365, elapsed, Variant.YEAR), IPHONE)
            heights.append(geometry.mound_height)
        self.assertEqual(heights[0], 0)
        self.assertEqual(heights, sorted(heights))

    def test_mound_height_capped_when_full(self):
        geometry = hourglass_geometry(_progress(365, 365, Variant.YEAR), IPHONE)
        self.assertAlmostEqual(geometry.mound_height, MOUND_MAX * geometry.scale)
        self.assertLess(geometry.mound_height, geometry.fill_height_bottom)

    def test_no_bottom_sand_at_start(self):
        scene = generate("year", _progress(365, 0, Variant.YEAR), IPHONE, rng=random.Random(3))
        self.assertEqual(scene.count("sand-bottom"), 0)
        self.assertEqual(scene.count("sand-top"), 1)

    def test_no_top_sand_at_end(self):
        scene = generate("year", _progress(365, 365, Variant.YEAR), IPHONE, rng=random.Random(3))
        self.assertEqual(scene.count("sand-bottom"), 1)
        self.assertEqual(scene.count("sand-top"), 0)

    def test_decorations(self):
        scene = generate("year", _progress(365, 180, Variant.YEAR), IPHONE, rng=random.Random(3))
        self.assertEqual(scene.count("speck"), 30)
        self.assertEqual(scene.count("glass"), 1)
        self.assertEqual(scene.count("cap-top") + scene.count("cap-bottom"), 2)
        grains = scene.foreground("grain")
        self.assertTrue(0 < len(grains) <= 22)
        for grain in grains:
            self.assertTrue(3 * 0.8 <= grain.r <= 3 * 1.2)
            self.assertLessEqual(abs(grain.cx - IPHONE.width / 2), 1.8 + 1e-9)

    def test_total_zero_does_not_raise(self):
        scene = generate("year", _progress(0, 0, Variant.YEAR), IPHONE, rng=random.Random(3))
        self.assertEqual(scene.count("sand-bottom"), 0)

    def test_default_layout_is_hourglass(self):
        scene = generate("year", _progress(365, 10, Variant.YEAR), IPHONE, rng=random.Random(3))
        self.assertEqual(scene.count("glass"), 1)
        self.assertEqual(scene.count("elapsed"), 0)

    def test_unknown_year_layout_rejected(self):
        with self.assertRaises(ValueError):
            select_layout(Variant.YEAR, "spiral")
        self.assertIs(select_layout(Variant.YEAR, None), select_layout(Variant.YEAR, YEAR_LAYOUT_HOURGLASS))


class GoalRingTests(unittest.TestCase):
    def _arc_fraction(self, scene):
        arc = scene.foreground("arc")[0]
        return 1 - arc.style.stroke_dashoffset / arc.style.stroke_dasharray

    def test_scenario_thirty_percent(self):
        scene = generate("goal", _progress(10, 3, Variant.GOAL), IPHONE, rng=random.Random(1))
        self.assertAlmostEqual(self._arc_fraction(scene), 0.3, places=9)
        self.assertEqual(scene.foreground("numeral")[0].content, "7")
        self.assertEqual(scene.foreground("caption")[0].content, "DAYS LEFT")
        arc = scene.foreground("arc")[0]
        self.assertAlmostEqual(arc.r, 750 * 0.35)
        self.assertAlmostEqual(arc.style.stroke_width, 750 * 0.08)
        self.assertAlmostEqual(arc.style.stroke_dasharray, 2 * math.pi * 750 * 0.35)
        self.assertIn("rotate(-90", arc.style.transform)

    def test_zero_total_has_empty_arc(self):
        scene = generate("goal", _progress(0, 0, Variant.GOAL), IPHONE, rng=random.Random(1))
        self.assertEqual(self._arc_fraction(scene), 0)

    def test_overshoot_is_clamped(self):
        scene = generate("goal", ProgressData(10, 15, 0, Variant.GOAL), IPHONE, rng=random.Random(1))
        self.assertEqual(self._arc_fraction(scene), 1)

    def test_ring_centered_in_content_region(self):
        ring = ring_geometry(IPHONE)
        self.assertAlmostEqual(ring.cy, 420 + (1334 * 0.8 - 420) / 2)

    def test_ring_shrinks_on_short_canvas(self):
        canvas = CanvasSpec(width=750, height=800, top_offset=400)
        ring = ring_geometry(canvas)
        self.assertLess(ring.radius, 750 * 0.35)
        self.assertLessEqual(ring.radius + ring.stroke_width / 2, canvas.content_height / 2 + 1e-9)


class SceneInvariantTests(unittest.TestCase):
    CANVASES = [
        CanvasSpec(750, 1334, 420),
        CanvasSpec(1170, 2532, 790),
        CanvasSpec(750, 1334, 0),
        CanvasSpec(320, 480, 100),
        CanvasSpec(2000, 600, 50),
        CanvasSpec(100, 100, 90),
        CanvasSpec(10, 10, 0),
    ]
    CASES = [
        ("life", None, _progress(4160, 2000)),
        ("year", YEAR_LAYOUT_HOURGLASS, _progress(365, 200, Variant.YEAR, "2025")),
        ("year", YEAR_LAYOUT_GRID, _progress(365, 200, Variant.YEAR, "2025")),
        ("goal", None, _progress(30, 12, Variant.GOAL)),
    ]

    def test_nothing_drawn_in_clock_region(self):
        rng = random.Random(42)
        for canvas in self.CANVASES:
            for variant, layout, progress in self.CASES:
                scene = generate(variant, progress, canvas, rng=rng, year_layout=layout)
                for element in scene.elements:
                    top, bottom = element.vertical_extent()
                    label = f"{variant}/{layout} {canvas} {element.role}"
                    self.assertGreaterEqual(top, canvas.top_offset - 1e-6, label)
                    self.assertLessEqual(bottom, canvas.height + 1e-6, label)

    def test_degenerate_region_yields_empty_foreground(self):
        canvas = CanvasSpec(width=100, height=100, top_offset=90)
        for variant, layout, progress in self.CASES:
            scene = generate(variant, progress, canvas, rng=random.Random(0), year_layout=layout)
            self.assertEqual(scene.elements, ())
            self.assertTrue(scene.to_svg().startswith("<svg"))

    def test_invalid_canvas_rejected(self):
        for width, height in ((0, 100), (100, 0), (-5, 100)):
            with self.assertRaises(InvalidCanvasError):
                generate("life", _progress(4160, 1), CanvasSpec(width, height, 0))
        self.assertTrue(issubclass(InvalidCanvasError, ValueError))

    def test_deterministic_geometry_is_stable(self):
        for variant, layout, progress in self.CASES:
            a = generate(variant, progress, IPHONE, rng=random.Random(1), year_layout=layout)
            b = generate(variant, progress, IPHONE, rng=random.Random(2), year_layout=layout)
            fixed_a = [e.to_svg() for e in a.elements if e.role not in RANDOM_ROLES]
            fixed_b = [e.to_svg() for e in b.elements if e.role not in RANDOM_ROLES]
            self.assertEqual(fixed_a, fixed_b)
            self.assertEqual(a.defs, b.defs)

    def test_same_seed_is_byte_identical(self):
        progress = _progress(365, 200, Variant.YEAR)
        a = generate("year", progress, IPHONE, rng=random.Random(7)).to_svg()
        b = generate("year", progress, IPHONE, rng=random.Random(7)).to_svg()
        self.assertEqual(a, b)

    def test_default_rng_varies_decoration(self):
        progress = _progress(365, 200, Variant.YEAR)
        a = generate("year", progress, IPHONE).to_svg()
        b = generate("year", progress, IPHONE).to_svg()
        self.assertNotEqual(a, b)

    def test_referenced_ids_are_defined(self):
        for variant, layout, progress in self.CASES:
            scene = generate(variant, progress, IPHONE, rng=random.Random(0), year_layout=layout)
            svg = scene.to_svg()
            defined = set(re.findall(r'id="([^"]+)"', svg))
            referenced = set(re.findall(r"url\(#([^)]+)\)", svg))
            self.assertTrue(referenced <= defined, referenced - defined)
            self.assertIn("meshGradient", referenced)

    def test_document_shape(self):
        svg = generate("goal", _progress(10, 3, Variant.GOAL), IPHONE, rng=random.Random(0)).to_svg()
        self.assertTrue(svg.startswith('<svg width="750" height="1334" viewBox="0 0 750 1334"'))
        self.assertLess(svg.index("<defs>"), svg.index('fill="url(#meshGradient)"'))
        self.assertTrue(svg.rstrip().endswith("</svg>"))


if __name__ == "__main__":
    unittest.main()
