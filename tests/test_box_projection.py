import numpy as np

import pytest
from worldscape.core.math3d import Vec3
from worldscape.view.projection import BOX_EDGES, box_corners, project, project_box


def test_box_corners_layout():
    corners = box_corners(Vec3(10, 20, 30), 100, 50, 20)
    
    assert corners.shape == (8, 3)
    np.testing.assert_allclose(corners[0], [-40, -5, 20])    # front TL
    np.testing.assert_allclose(corners[2], [60, 45, 20])     # front BR
    np.testing.assert_allclose(corners[6], [60, 45, 40])     # back BR

def test_box_edges_close_every_face():
    assert len(BOX_EDGES) == 12
    assert len(set(BOX_EDGES)) == 12
    
    degree = [0] * 8
    for a, b in BOX_EDGES:
        degree[a] += 1
        degree[b] += 1
    assert degree == [3] * 8

def test_project_box_matches_point_projection():
    center = Vec3(0, 500, -200)
    corners = project_box(center, 200, 100, 400, 300, 1280, 720, 5.0)
    
    assert len(corners) == 8
    expected = project(Vec3(100, 550, 0), 300, 1280, 720, 5.0)
    assert corners[6] == expected

def test_front_face_is_smaller_than_back_face():
    corners = project_box(Vec3(0, 0, 0), 100, 100, 400, 0, 1000, 800)
    
    front = corners[:4]
    back = corners[4:]
    for f, b in zip(front, back):
        assert f.scale < b.scale

def test_flat_box_projects_to_one_face():
    corners = project_box(Vec3(0, 0, 0), 100, 100, 0, 0, 1000, 800)
    
    for f, b in zip(corners[:4], corners[4:]):
        assert f == b
    assert corners[0].screen_x == pytest.approx(450.0)
    assert corners[0].screen_y == pytest.approx(350.0)
