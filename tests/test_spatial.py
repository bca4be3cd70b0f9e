import unittest

import numpy as np
import pytest

from analytics.spatial import SpatialProjector


class ProjectionTests(unittest.TestCase):
    def test_linear_scales(self):
        proj = SpatialProjector(width=800, height=400)
        self.assertEqual(proj.project(0, 0), (0.0, 0.0))
        self.assertEqual(proj.project(50, 50), (400.0, 200.0))
        self.assertEqual(proj.project(100, 100), (800.0, 400.0))

    def test_flip_mirrors_x_only(self):
        proj = SpatialProjector(width=800, height=400, flip=True)
        self.assertEqual(proj.project_x(0), 800.0)
        self.assertEqual(proj.project_x(100), 0.0)
        self.assertEqual(proj.project_y(25), 100.0)
        self.assertEqual(proj.project(25, 25), (600.0, 100.0))

    def test_projector_rebuilt_from_its_fields(self):
        proj = SpatialProjector(width=640, height=320, flip=True)
        clone = SpatialProjector(proj.width, proj.height, proj.flip)
        self.assertEqual(proj, clone)
        self.assertEqual(proj.project(10, 90), clone.project(10, 90))

    def test_non_positive_dimensions_rejected(self):
        with self.assertRaises(ValueError):
            SpatialProjector(width=0, height=400)
        with self.assertRaises(ValueError):
            SpatialProjector(width=800, height=-1)


def test_project_many_matches_scalar_projection():
    proj = SpatialProjector(width=1000, height=500, flip=True)
    xs, ys = [0, 12.5, 100], [100, 40, 0]
    px, py = proj.project_many(xs, ys)
    expected = [proj.project(x, y) for x, y in zip(xs, ys)]
    np.testing.assert_allclose(px, [e[0] for e in expected])
    np.testing.assert_allclose(py, [e[1] for e in expected])


def test_project_many_requires_equal_lengths():
    with pytest.raises(ValueError):
        SpatialProjector().project_many([1, 2], [3])


def test_pitch_markings_stay_on_surface():
    proj = SpatialProjector(width=800, height=400)
    markings = {m.name: m for m in proj.pitch_markings()}
    assert {"outline", "halfway_line", "centre_circle", "penalty_area_left", "goal_right"} <= set(markings)
    assert markings["outline"].closed
    assert markings["halfway_line"].points == ((400.0, 0.0), (400.0, 400.0))
    for marking in markings.values():
        for x, y in marking.points:
            assert -1e-9 <= x <= 800 + 1e-9
            assert -1e-9 <= y <= 400 + 1e-9


def test_penalty_areas_mirror_each_other():
    markings = {m.name: m for m in SpatialProjector(width=1050, height=680).pitch_markings()}
    left = markings["penalty_area_left"].points
    right = markings["penalty_area_right"].points
    assert left[1][0] == pytest.approx(165.0)
    assert right[1][0] == pytest.approx(1050 - 165.0)
    assert [p[1] for p in left] == pytest.approx([p[1] for p in right])
