"""
grid.py — Collocated Grid with a Boundary Ring
================================================
The foundation of the entire simulation.

Layout:
  - N interior cells per axis, plus one boundary cell on every side
    → side length N+2, (N+2)² cells in total
  - Density `density`, velocity `u` (x) and `v` (y) all live at CELL CENTERS
  - Every field is a FLAT float32 buffer of length (N+2)²

Cell (i, j) lives at flat index  i + (N+2) * j
  - i = x / column, 0 .. N+1
  - j = y / row,    0 .. N+1
  - i or j equal to 0 or N+1 → boundary ring, never "physical" fluid

Reshaping a buffer to (N+2, N+2) in C order gives a view addressed [j, i].

Each field has a "current" and a "previous" buffer. Swapping exchanges the
two buffer objects (no copy), which is the double-buffering the solver's
diffuse/advect passes depend on.
"""

from enum import Enum

import numpy as np


class FieldType(Enum):
    """Selector for the three simulated fields."""
    DENSITY    = "density"
    VELOCITY_U = "velocity_u"
    VELOCITY_V = "velocity_v"


# field → (current attribute, previous attribute)
_FIELD_SLOTS = {
    FieldType.DENSITY:    ("density", "density_prev"),
    FieldType.VELOCITY_U: ("u", "u_prev"),
    FieldType.VELOCITY_V: ("v", "v_prev"),
}


def as_field_type(field) -> FieldType:
    """
    Coerce a FieldType or its string value ("density", "velocity_u",
    "velocity_v") to a FieldType.

    Raises ValueError for anything else, so callers can reject a bad
    selector before touching any buffer.
    """
    if isinstance(field, FieldType):
        return field
    try:
        return FieldType(field)
    except ValueError:
        valid = ", ".join(repr(f.value) for f in FieldType)
        raise ValueError(f"Invalid field type: {field!r}. Use one of {valid}.") from None


class Grid:
    """
    (N+2)² grid storing all simulation state.
    Owned exclusively by one FluidSolver for its whole lifetime.
    """

    def __init__(self, N: int):
        """
        Args:
            N : Interior cells per axis (must be a positive int)
        """
        if isinstance(N, bool) or not isinstance(N, (int, np.integer)):
            raise ValueError(f"Grid dimension must be an int, got {type(N).__name__}")
        if N <= 0:
            raise ValueError(f"Grid dimension must be positive, got N={N}")

        self.N = int(N)
        self.size = (self.N + 2) * (self.N + 2)

        # ── Simulated fields (current + previous) ──────────────────────────
        self.density      = np.zeros(self.size, dtype=np.float32)
        self.density_prev = np.zeros(self.size, dtype=np.float32)
        self.u            = np.zeros(self.size, dtype=np.float32)
        self.u_prev       = np.zeros(self.size, dtype=np.float32)
        self.v            = np.zeros(self.size, dtype=np.float32)
        self.v_prev       = np.zeros(self.size, dtype=np.float32)

        # ── Projection scratch ─────────────────────────────────────────────
        # Dedicated so projection never overwrites u_prev / v_prev.
        self.pressure   = np.zeros(self.size, dtype=np.float32)
        self.divergence = np.zeros(self.size, dtype=np.float32)

        print(f"[Grid] Initialized with N={self.N}, size={self.size} (all fields zeroed)")

    def index(self, i: int, j: int) -> int:
        """
        Flat index of cell (i, j): i + (N+2) * j.

        Precondition: 0 <= i, j <= N+1. Nothing is checked or clamped here;
        an out-of-range pair maps to some other cell or past the buffer end.
        Use `is_interior` to validate first.
        """
        return i + (self.N + 2) * j

    def is_interior(self, i: int, j: int) -> bool:
        """True if (i, j) is a physical (non-boundary) cell."""
        return 1 <= i <= self.N and 1 <= j <= self.N

    def swap_buffers(self, field):
        """
        Exchange the current and previous buffers of a field.
        O(1): the two array objects trade places, no data is copied.
        """
        cur, prev = _FIELD_SLOTS[as_field_type(field)]
        a, b = getattr(self, cur), getattr(self, prev)
        setattr(self, cur, b)
        setattr(self, prev, a)

    def current(self, field) -> np.ndarray:
        """The writable current buffer of a field."""
        return getattr(self, _FIELD_SLOTS[as_field_type(field)][0])

    def previous(self, field) -> np.ndarray:
        """The writable previous-step buffer of a field."""
        return getattr(self, _FIELD_SLOTS[as_field_type(field)][1])

    # ── Read-only accessors for rendering ──────────────────────────────────
    # The views alias the live buffers: valid until the next step, after
    # which they may point at the "previous" storage.

    def get_density(self) -> np.ndarray:
        return _readonly(self.density)

    def get_velocity_u(self) -> np.ndarray:
        return _readonly(self.u)

    def get_velocity_v(self) -> np.ndarray:
        return _readonly(self.v)

    def as_2d(self, buffer: np.ndarray) -> np.ndarray:
        """View a flat buffer as (N+2, N+2), addressed [j, i]."""
        return buffer.reshape(self.N + 2, self.N + 2)

    def reset(self):
        """Zero out all fields. Useful for running multiple simulations."""
        for arr in [self.density, self.density_prev, self.u, self.u_prev,
                    self.v, self.v_prev, self.pressure, self.divergence]:
            arr[:] = 0.0

    def __repr__(self):
        speed = np.sqrt(self.u.astype(np.float64) ** 2 + self.v.astype(np.float64) ** 2)
        return (
            f"Grid(N={self.N}, size={self.size})\n"
            f"  density  : max={self.density.max():.4f}, sum={self.density.sum():.2f}\n"
            f"  velocity : max_magnitude={speed.max():.4f}"
        )


def _readonly(buffer: np.ndarray) -> np.ndarray:
    view = buffer.view()
    view.flags.writeable = False
    return view
