"""
solver.py — Master Physics Loop
================================
One call to `step()` advances the fluid by dt.

Physics pipeline per frame:
  Velocity
    1. Swap u/v current ↔ previous
    2. Diffuse u, v (Gauss-Seidel, 20 sweeps)
    3. Project (keep the diffused field divergence-free)
    4. Swap u/v again
    5. Advect u, v (self-advection)
    6. Project again (clean up divergence introduced by interpolation)
  Density
    7. Swap density current ↔ previous
    8. Diffuse density
    9. Swap again
   10. Advect density through the settled velocity field

This follows the "Stable Fluids" paper by Jos Stam.
"""

import time

import numpy as np

from .advect import advect as advect_field
from .boundary import BoundaryCondition, as_boundary_condition, set_boundary
from .diffuse import diffuse as diffuse_field
from .grid import FieldType, Grid, as_field_type
from .projection import compute_divergence, project as project_velocity


# ── Defaults ──────────────────────────────────────────────────────────────────
DEFAULT_DT         = 0.8
DEFAULT_DIFFUSION  = 0.0001
DEFAULT_ITERATIONS = 20


class FluidSolver:
    """
    The complete 2D fluid simulation.

    Usage:
        solver = FluidSolver(N=64)
        solver.add_input_to_field(FieldType.DENSITY, 32, 32, 30.0)
        for frame in range(100):
            solver.step()
            density = solver.get_density()     # Hand to renderer
    """

    def __init__(self, N: int, boundary=BoundaryCondition.DIRICHLET,
                 dt: float = DEFAULT_DT, diff: float = DEFAULT_DIFFUSION,
                 iterations: int = DEFAULT_ITERATIONS):
        """
        Args:
            N          : Interior cells per axis (must be positive)
            boundary   : BoundaryCondition (only DIRICHLET is implemented)
            dt         : Fixed timestep
            diff       : Diffusion coefficient, shared by density and velocity
            iterations : Gauss-Seidel sweeps for diffusion and pressure
        """
        self.boundary = as_boundary_condition(boundary)
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        if diff < 0:
            raise ValueError(f"Diffusion coefficient must be non-negative, got {diff}")
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")

        self.grid = Grid(N)
        self.N = self.grid.N
        self.dt = dt
        self.diff = diff
        self.iterations = iterations

        self.frame = 0
        self.perf_log = []   # stores timing data per frame
        self._reported_modes = set()
        self._last_projection = None

        print(f"[FluidSolver] Initialized with N={self.N} "
              f"({self.grid.size} cells), boundary={self.boundary.value}")

    # ── Input ──────────────────────────────────────────────────────────────

    def add_input_to_field(self, field, i: int, j: int, amount: float):
        """
        Add `amount * dt` to a field's current buffer at interior cell (i, j).

        Raises:
            ValueError : unknown field selector
            IndexError : (i, j) outside 1..N
        Nothing is modified when either is raised.
        """
        x = self.grid.current(field)
        if not self.grid.is_interior(i, j):
            raise IndexError(f"Cell ({i}, {j}) is outside the interior 1..{self.N}")
        x[self.grid.index(i, j)] += amount * self.dt

    # ── Stages ─────────────────────────────────────────────────────────────

    def set_boundary(self, field):
        """Apply the configured boundary condition to a field's current buffer."""
        self._apply_boundary(self.grid.current(field))

    def diffuse(self, field, iterations: int = None):
        """
        Implicit diffusion of the field's previous buffer into its current one.
        Modifies: the field's current buffer (in-place)
        """
        field = as_field_type(field)
        if iterations is None:
            iterations = self.iterations
        diffuse_field(self.grid.current(field), self.grid.previous(field),
                      self.N, self.dt, self.diff, iterations, self._apply_boundary)

    def advect(self, field):
        """
        Semi-Lagrangian advection of the field's previous buffer through the
        current velocity into its current buffer.
        """
        field = as_field_type(field)
        g = self.grid
        advect_field(g.current(field), g.previous(field), g.u, g.v,
                     self.N, self.dt, self._apply_boundary)

    def project(self) -> dict:
        """Make the current velocity field divergence-free."""
        g = self.grid
        self._last_projection = project_velocity(
            g.u, g.v, g.pressure, g.divergence,
            self.N, self.iterations, self._apply_boundary,
        )
        return self._last_projection

    def step_velocity(self):
        g = self.grid
        g.swap_buffers(FieldType.VELOCITY_U)
        g.swap_buffers(FieldType.VELOCITY_V)

        self.diffuse(FieldType.VELOCITY_U)
        self.diffuse(FieldType.VELOCITY_V)

        self.project()

        g.swap_buffers(FieldType.VELOCITY_U)
        g.swap_buffers(FieldType.VELOCITY_V)

        self.advect(FieldType.VELOCITY_U)
        self.advect(FieldType.VELOCITY_V)

        self.project()

    def step_density(self):
        g = self.grid
        g.swap_buffers(FieldType.DENSITY)
        self.diffuse(FieldType.DENSITY)
        g.swap_buffers(FieldType.DENSITY)
        self.advect(FieldType.DENSITY)

    def step(self) -> dict:
        """
        Advance simulation by one timestep: velocity first, then density
        carried by the settled velocity.

        Returns performance metrics dict for benchmarking.
        """
        t_total_start = time.perf_counter()

        t0 = time.perf_counter()
        self.step_velocity()
        t_velocity = (time.perf_counter() - t0) * 1000

        t0 = time.perf_counter()
        self.step_density()
        t_density = (time.perf_counter() - t0) * 1000

        # ── Frame bookkeeping ──────────────────────────────────────────────
        self.frame += 1
        t_total = (time.perf_counter() - t_total_start) * 1000

        metrics = {
            "frame"           : self.frame,
            "total_ms"        : t_total,
            "fps"             : 1000.0 / t_total if t_total > 0 else 0,
            "velocity_ms"     : t_velocity,
            "density_ms"      : t_density,
            "divergence_max"  : self._last_projection["divergence_after_max"],
            "divergence_mean" : self._last_projection["divergence_after_mean"],
            "density_total"   : float(self.grid.density.sum()),
        }
        self.perf_log.append(metrics)
        return metrics

    # ── Output ─────────────────────────────────────────────────────────────

    def get_density(self) -> np.ndarray:
        return self.grid.get_density()

    def get_velocity_u(self) -> np.ndarray:
        return self.grid.get_velocity_u()

    def get_velocity_v(self) -> np.ndarray:
        return self.grid.get_velocity_v()

    def compute_divergence(self) -> np.ndarray:
        """Interior divergence of the current velocity, shape (N, N)."""
        return compute_divergence(self.grid.u, self.grid.v, self.N)

    def reset(self):
        """Zero all buffers and forget frame history."""
        self.grid.reset()
        self.frame = 0
        self.perf_log = []
        self._last_projection = None

    def print_status(self):
        """Pretty-print current simulation state."""
        g = self.grid
        div = self.compute_divergence()
        print(f"\n{'='*50}")
        print(f"  Frame: {self.frame}  |  Boundary: {self.boundary.value}")
        print(f"  Density   : max={g.density.max():.4f}, total={g.density.sum():.2f}")
        print(f"  Velocity  : max_u={np.abs(g.u).max():.4f}, max_v={np.abs(g.v).max():.4f}")
        print(f"  Divergence: max={np.abs(div).max():.6f}, mean={np.abs(div).mean():.8f}")
        if self.perf_log:
            last = self.perf_log[-1]
            print(f"  Perf      : {last['total_ms']:.1f}ms/frame ({last['fps']:.1f} FPS)")
        print(f"{'='*50}")

    # ── Internals ──────────────────────────────────────────────────────────

    def _apply_boundary(self, x: np.ndarray):
        set_boundary(x, self.N, self.boundary, self._reported_modes)
