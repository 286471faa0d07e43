import math

import numpy as np
import pytest

from perlin2d.core import GRADIENTS, fade, lerp
from perlin2d.noise_2d import NoiseField, evaluate, noise
from perlin2d.permutation import PermutationTable


def _reference(x, y, table):
    # Straight transcription of the algorithm, corner by corner.
    x0 = math.floor(x)
    y0 = math.floor(y)
    corners = [(x0, y0), (x0 + 1, y0), (x0, y0 + 1), (x0 + 1, y0 + 1)]
    p = [int(v) for v in table.table]
    d = []
    for cx, cy in corners:
        h = p[p[cx % 256] + cy % 256]
        gx, gy = GRADIENTS[h % 4]
        d.append((x - cx) * gx + (y - cy) * gy)
    u = fade(x - x0)
    v = fade(y - y0)
    return (lerp(v, lerp(u, d[0], d[1]), lerp(u, d[2], d[3])) + 1.0) / 2.0


def test_evaluate_deterministic_for_seed():
    t1 = PermutationTable.from_seed(123)
    t2 = PermutationTable.from_seed(123)
    pts = [(0.1, 0.2), (1.25, 2.75), (10.5, 9.0), (0.37, 0.81)]
    assert [evaluate(x, y, t1) for x, y in pts] == [evaluate(x, y, t2) for x, y in pts]


def test_evaluate_changes_with_seed():
    t1 = PermutationTable.from_seed(1)
    t2 = PermutationTable.from_seed(2)
    pts = [(0.37, 0.81), (0.1, 0.2), (1.25, 2.75), (10.5, 9.3), (40.6, 7.2), (3.3, 77.7)]
    a = np.array([evaluate(x, y, t1) for x, y in pts])
    b = np.array([evaluate(x, y, t2) for x, y in pts])
    assert not np.allclose(a, b)


def test_evaluate_is_half_at_lattice_points():
    table = PermutationTable()
    assert evaluate(3.0, 5.0, table) == pytest.approx(0.5, abs=1e-9)
    seeded = PermutationTable.from_seed(-8)
    for x in range(-3, 8):
        for y in range(-3, 8):
            assert evaluate(float(x), float(y), seeded) == pytest.approx(0.5, abs=1e-9)


def test_evaluate_reasonable_range_default_table():
    table = PermutationTable()
    xs = np.linspace(0.0, 50.0, 401)
    xg, yg = np.meshgrid(xs, xs)
    z = noise(xg, yg, table)
    assert float(np.min(z)) >= -0.05
    assert float(np.max(z)) <= 1.05
    assert np.isfinite(z).all()


def test_evaluate_matches_reference_transcription():
    table = PermutationTable.from_seed(99)
    for x, y in [(0.37, 0.81), (2.25, 3.75), (-4.6, 1.1), (300.2, -17.9), (255.5, 255.5)]:
        assert evaluate(x, y, table) == pytest.approx(_reference(x, y, table), abs=1e-12)


def test_evaluate_continuity_small_step():
    table = PermutationTable()
    a = evaluate(1.000, 1.000, table)
    b = evaluate(1.001, 1.000, table)
    assert abs(a - b) < 0.01


def test_noise_continuity_across_cell_edges():
    table = PermutationTable.from_seed(4)
    eps = 1e-7
    edges = np.arange(1.0, 20.0)
    y = np.full_like(edges, 0.4)
    left = noise(edges - eps, y, table)
    right = noise(edges + eps, y, table)
    assert float(np.max(np.abs(left - right))) < 1e-5


def test_noise_matches_evaluate_elementwise():
    table = PermutationTable.from_seed(17)
    rng = np.random.default_rng(0)
    x = rng.uniform(-300.0, 300.0, size=200)
    y = rng.uniform(-300.0, 300.0, size=200)
    z = noise(x, y, table)
    expected = np.array([evaluate(a, b, table) for a, b in zip(x, y)])
    assert z.shape == x.shape
    assert np.allclose(z, expected, rtol=0.0, atol=1e-12)


def test_noise_broadcasts_and_accepts_scalars():
    table = PermutationTable()
    xs = np.linspace(0.0, 3.0, 7)
    z = noise(xs[None, :], np.array([[0.5], [1.5]]), table)
    assert z.shape == (2, 7)
    assert float(noise(0.37, 0.81, table)) == pytest.approx(evaluate(0.37, 0.81, table))


def test_lattice_repeats_every_256_cells():
    table = PermutationTable.from_seed(21)
    for x, y in [(0.37, 0.81), (5.5, 9.25)]:
        assert evaluate(x + 256.0, y, table) == pytest.approx(evaluate(x, y, table), abs=1e-9)
        assert evaluate(x, y - 256.0, table) == pytest.approx(evaluate(x, y, table), abs=1e-9)


def test_corner_order_is_top_then_bottom():
    table = PermutationTable.from_seed(2)
    field = NoiseField()
    dbg = field.debug_point(0.25, 0.75, table)
    c = dbg["corners"]
    assert (c["top_left"]["cx"], c["top_left"]["cy"]) == (0, 0)
    assert (c["top_right"]["cx"], c["top_right"]["cy"]) == (1, 0)
    assert (c["bottom_left"]["cx"], c["bottom_left"]["cy"]) == (0, 1)
    assert (c["bottom_right"]["cx"], c["bottom_right"]["cy"]) == (1, 1)
    u = fade(0.25)
    v = fade(0.75)
    top = c["top_left"]["dot"] + u * (c["top_right"]["dot"] - c["top_left"]["dot"])
    bottom = c["bottom_left"]["dot"] + u * (c["bottom_right"]["dot"] - c["bottom_left"]["dot"])
    assert dbg["interpolation"]["top"] == pytest.approx(top)
    assert dbg["interpolation"]["bottom"] == pytest.approx(bottom)
    assert dbg["raw"] == pytest.approx(top + v * (bottom - top))


def test_debug_point_matches_evaluate():
    table = PermutationTable.from_seed(5)
    field = NoiseField()
    for x, y in [(2.25, 3.75), (-0.5, -0.5), (3.0, 5.0)]:
        dbg = field.debug_point(x, y, table)
        assert dbg["noise"] == pytest.approx(field.evaluate(x, y, table), abs=1e-12)
        for corner in dbg["corners"].values():
            assert 0 <= corner["hash"] <= 255
            assert (corner["gx"], corner["gy"]) == GRADIENTS[corner["hash"] & 3]


def test_negative_coordinates_use_floor():
    table = PermutationTable()
    dbg = NoiseField().debug_point(-0.25, -1.5, table)
    assert dbg["cell"] == {"x0": -1, "y0": -2, "x1": 0, "y1": -1}
    assert dbg["relative"]["xf"] == pytest.approx(0.75)
    assert dbg["relative"]["yf"] == pytest.approx(0.5)


def test_field_holds_no_table_state():
    field = NoiseField()
    a = PermutationTable.from_seed(1)
    b = PermutationTable.from_seed(2)
    va = field.evaluate(0.37, 0.81, a)
    field.evaluate(0.37, 0.81, b)
    assert field.evaluate(0.37, 0.81, a) == va


@pytest.mark.parametrize(
    "x, y",
    [(math.nan, 0.5), (0.5, math.nan), (math.inf, 0.5), (0.5, -math.inf)],
)
def test_evaluate_propagates_nan(x, y):
    table = PermutationTable()
    assert math.isnan(evaluate(x, y, table))
    with np.errstate(invalid="ignore"):
        z = noise(np.array([x]), np.array([y]), table)
    assert np.isnan(z).all()

    dbg = NoiseField().debug_point(x, y, table)
    assert math.isnan(dbg["noise"])
    assert dbg["corners"] == {}


def test_evaluate_non_finite_does_not_disturb_finite_points():
    table = PermutationTable.from_seed(8)
    before = evaluate(0.37, 0.81, table)
    evaluate(math.nan, math.inf, table)
    assert evaluate(0.37, 0.81, table) == before
