import numpy as np
import pytest

from fluid2d import BoundaryCondition
from fluid2d.boundary import as_boundary_condition, set_boundary, zero_boundary


def _ring_mask(N):
    mask = np.zeros((N + 2, N + 2), dtype=bool)
    mask[0, :] = mask[-1, :] = True
    mask[:, 0] = mask[:, -1] = True
    return mask.ravel()


class TestDirichlet:

    def test_ring_zeroed_interior_untouched(self, rng):
        N = 7
        x = rng.uniform(0.5, 2.0, (N + 2) ** 2).astype(np.float32)
        original = x.copy()
        mask = _ring_mask(N)

        applied = set_boundary(x, N, BoundaryCondition.DIRICHLET)

        assert applied is True
        assert np.all(x[mask] == 0.0)
        np.testing.assert_array_equal(x[~mask], original[~mask])

    def test_corners_are_zeroed(self):
        N = 3
        x = np.ones((N + 2) ** 2, dtype=np.float32)
        zero_boundary(x, N)
        for k in [0, N + 1, (N + 2) * (N + 1), (N + 2) ** 2 - 1]:
            assert x[k] == 0.0
        assert x.reshape(N + 2, N + 2)[1:-1, 1:-1].sum() == N * N

    def test_single_cell_interior(self):
        x = np.ones(9, dtype=np.float32)
        zero_boundary(x, 1)
        np.testing.assert_array_equal(x, [0, 0, 0, 0, 1, 0, 0, 0, 0])

    def test_strided_view_is_zeroed_in_place(self):
        N = 4
        backing = np.ones(2 * (N + 2) ** 2, dtype=np.float32)
        x = backing[::2]
        mask = _ring_mask(N)

        zero_boundary(x, N)

        assert np.all(x[mask] == 0.0)
        assert np.all(x[~mask] == 1.0)
        assert np.all(backing[1::2] == 1.0)


class TestUnimplementedModes:

    @pytest.mark.parametrize("mode", [BoundaryCondition.NEUMANN, BoundaryCondition.PERIODIC])
    def test_buffer_left_as_is_and_reported(self, mode, rng, capsys):
        N = 5
        x = rng.uniform(0.0, 1.0, (N + 2) ** 2).astype(np.float32)
        original = x.copy()

        applied = set_boundary(x, N, mode)

        assert applied is False
        np.testing.assert_array_equal(x, original)
        assert "not yet implemented" in capsys.readouterr().out

    def test_reported_once_with_tracking_set(self, capsys):
        N = 4
        x = np.zeros((N + 2) ** 2, dtype=np.float32)
        seen = set()
        for _ in range(5):
            set_boundary(x, N, BoundaryCondition.PERIODIC, seen)
        out = capsys.readouterr().out
        assert out.count("Periodic boundary condition not yet implemented") == 1
        assert seen == {BoundaryCondition.PERIODIC}


def test_invalid_mode_rejected():
    x = np.zeros(16, dtype=np.float32)
    with pytest.raises(ValueError):
        set_boundary(x, 2, "dirichlet")


def test_as_boundary_condition():
    assert as_boundary_condition("neumann") is BoundaryCondition.NEUMANN
    assert as_boundary_condition(BoundaryCondition.DIRICHLET) is BoundaryCondition.DIRICHLET
    with pytest.raises(ValueError, match="Invalid boundary condition"):
        as_boundary_condition("reflective")
