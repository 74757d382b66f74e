"""
projection.py — Pressure Projection
=====================================
The pressure projection step enforces INCOMPRESSIBILITY:
  div(v) = 0 everywhere

Diffusion and advection generally leave the velocity field with some
divergence (fluid "piles up" in some cells). We fix this by:
  1. Computing divergence of the current velocity field
  2. Solving the Poisson equation for pressure: ∇²p = div(v)
  3. Subtracting the pressure gradient from velocity: v = v - ∇p

This is called "Helmholtz-Hodge decomposition" — any vector field
can be decomposed into a divergence-free part + a curl-free part (gradient).
We want the divergence-free part.

Pressure and divergence live in the Grid's own scratch buffers, never in
u_prev / v_prev. Their rings are always zeroed, whatever boundary mode the
solver is configured with.
"""

import time

import numba
import numpy as np

from .boundary import zero_boundary
from .diffuse import gauss_seidel_solve


@numba.jit(nopython=True)
def _divergence_into(u, v, div, p, h, N):
    """div ← -0.5·h·(∂u/∂x + ∂v/∂y) (central differences), p ← 0."""
    row = N + 2
    for i in range(1, N + 1):
        for j in range(1, N + 1):
            k = i + row * j
            div[k] = -0.5 * h * (u[k + 1] - u[k - 1] + v[k + row] - v[k - row])
            p[k] = 0.0


@numba.jit(nopython=True)
def _subtract_pressure_gradient(u, v, p, h, N):
    """u -= ∂p/∂x, v -= ∂p/∂y (central differences, interior only)."""
    row = N + 2
    for i in range(1, N + 1):
        for j in range(1, N + 1):
            k = i + row * j
            u[k] -= 0.5 * (p[k + 1] - p[k - 1]) / h
            v[k] -= 0.5 * (p[k + row] - p[k - row]) / h


def compute_divergence(u: np.ndarray, v: np.ndarray, N: int) -> np.ndarray:
    """
    Discrete divergence of (u, v) at interior cells.
    div(v) = du/dx + dv/dy, central differences with h = 1/N.

    For an incompressible fluid, this should be ~0 everywhere.

    Returns: (N, N) array addressed [j-1, i-1].
    """
    U = u.reshape(N + 2, N + 2)
    V = v.reshape(N + 2, N + 2)
    return 0.5 * N * (
        (U[1:-1, 2:].astype(np.float64) - U[1:-1, :-2]) +
        (V[2:, 1:-1].astype(np.float64) - V[:-2, 1:-1])
    )


def project(u: np.ndarray, v: np.ndarray, pressure: np.ndarray, divergence: np.ndarray,
            N: int, iterations: int, apply_velocity_boundary) -> dict:
    """
    Pressure projection: make the velocity field divergence-free.

    Args:
        u, v                    : Velocity buffers, modified in place
        pressure, divergence    : Scratch buffers, overwritten
        N                       : Interior dimension
        iterations              : Gauss-Seidel sweeps for the pressure solve
        apply_velocity_boundary : Callable fixing up the ring of a velocity buffer

    Returns:
        dict with timing and divergence metrics (for benchmarking)
    """
    t_start = time.perf_counter()
    h = 1.0 / N

    div_before = np.abs(compute_divergence(u, v, N)).max()

    # Step 1: divergence of the current velocity field, pressure guess = 0
    _divergence_into(u, v, divergence, pressure, h, N)
    zero_boundary(divergence, N)
    zero_boundary(pressure, N)

    # Step 2: Poisson solve, p = (div + sum of 4 neighbors) / 4
    gauss_seidel_solve(pressure, divergence, 1.0, 4.0, N, iterations,
                       lambda x: zero_boundary(x, N))

    # Step 3: subtract pressure gradient, re-apply velocity boundary
    _subtract_pressure_gradient(u, v, pressure, h, N)
    apply_velocity_boundary(u)
    apply_velocity_boundary(v)

    t_end = time.perf_counter()

    div_after = np.abs(compute_divergence(u, v, N))

    return {
        "time_ms"               : (t_end - t_start) * 1000,
        "iterations"            : iterations,
        "divergence_before_max" : float(div_before),
        "divergence_after_max"  : float(div_after.max()),
        "divergence_after_mean" : float(div_after.mean()),
    }
