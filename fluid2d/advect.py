"""
advect.py — Semi-Lagrangian Advection
======================================
This is what makes fluid look like it's *actually flowing*.

The algorithm (per interior cell):
  1. Look at the current cell center position (i, j).
  2. Trace BACKWARD along the velocity field by one timestep (dt).
     → "Where did the stuff in this cell come FROM?"
  3. Clamp that position into [0.5, N+0.5] so it always lands inside the
     lattice (boundary ring included).
  4. Sample the snapshot there with bilinear interpolation of the 4
     surrounding lattice points.

Because the backtrace can never leave the lattice, this is unconditionally
stable: no CFL limit on dt, however fast the flow.

Key reference: Jos Stam, "Stable Fluids" (SIGGRAPH 1999)
"""

import numba
import numpy as np


@numba.jit(nopython=True)
def backtrace(d, d0, u, v, dt0, N):
    """
    d[i,j] ← d0 sampled at (i, j) - dt0 * (u[i,j], v[i,j]).

    `u` / `v` are read as the loop runs. When `d` is itself `u` or `v`,
    cells later in the sweep trace back through already-advected velocity.
    """
    row = N + 2
    for i in range(1, N + 1):
        for j in range(1, N + 1):
            k = i + row * j
            x = i - dt0 * u[k]
            y = j - dt0 * v[k]

            if x < 0.5:
                x = 0.5
            if x > N + 0.5:
                x = N + 0.5
            i0 = int(x)
            i1 = i0 + 1

            if y < 0.5:
                y = 0.5
            if y > N + 0.5:
                y = N + 0.5
            j0 = int(y)
            j1 = j0 + 1

            # Fractional weights
            s1 = x - i0
            s0 = 1.0 - s1
            t1 = y - j0
            t0 = 1.0 - t1

            d[k] = (s0 * (t0 * d0[i0 + row * j0] + t1 * d0[i0 + row * j1]) +
                    s1 * (t0 * d0[i1 + row * j0] + t1 * d0[i1 + row * j1]))


def advect(d: np.ndarray, d0: np.ndarray, u: np.ndarray, v: np.ndarray,
           N: int, dt: float, apply_boundary):
    """
    Advect snapshot `d0` through the velocity field (u, v) into `d`, then
    fix up the boundary ring of `d`.

    Modifies: d (in-place)
    """
    # Multiply dt by N to convert from world-space to grid-index-space
    backtrace(d, d0, u, v, dt * N, N)
    apply_boundary(d)
