"""
diffuse.py — Diffusion via Gauss-Seidel Relaxation
===================================================
Diffusion makes fluids spread out over time.
  - High diffusion  → density spreads fast (watercolor bleed)
  - Low diffusion   → density stays tight

The math: We need to solve the implicit heat equation:
  x = x0 + a·∇²x

where a = dt * diff * N²

Why implicit? Because explicit diffusion (just adding the Laplacian each step)
is only stable when dt is tiny. Implicit diffusion is unconditionally stable —
you can use large dt and the simulation won't blow up.

We relax it with Gauss-Seidel: every interior cell becomes a weighted
average of its 4 neighbors and its own snapshot value, updated IN PLACE,
so later cells in the same sweep already see the new values of earlier ones.

Gauss-Seidel is order-dependent. Sweeps always run i (x) in the outer loop
and j (y) in the inner loop, 1..N each. Changing that changes the numbers.

The same sweep also solves the pressure Poisson equation in projection.py
(a = 1, c = 4).
"""

import numba
import numpy as np


@numba.jit(nopython=True)
def gauss_seidel_sweep(x, x0, a, c, N):
    """
    One in-place sweep of
        x[i,j] = (x0[i,j] + a * (x[i-1,j] + x[i+1,j] + x[i,j-1] + x[i,j+1])) / c
    over the interior of flat (N+2)² buffers.
    """
    row = N + 2
    for i in range(1, N + 1):
        for j in range(1, N + 1):
            k = i + row * j
            x[k] = (x0[k] + a * (x[k - 1] + x[k + 1] + x[k - row] + x[k + row])) / c


def gauss_seidel_solve(x: np.ndarray, x0: np.ndarray, a: float, c: float, N: int,
                       iterations: int, apply_boundary):
    """
    Run `iterations` Gauss-Seidel sweeps, calling `apply_boundary(x)` after
    each one.

    Args:
        x              : Buffer being solved for (refined in place)
        x0             : Right-hand side / snapshot, read only
        a, c           : Neighbor weight and normalization
        N              : Interior dimension
        iterations     : Number of sweeps (20 is usually enough)
        apply_boundary : Callable fixing up the ring of `x`
    """
    for _ in range(iterations):
        gauss_seidel_sweep(x, x0, a, c, N)
        apply_boundary(x)


def diffuse(x: np.ndarray, x0: np.ndarray, N: int, dt: float, diff: float,
            iterations: int, apply_boundary):
    """
    Implicit diffusion of snapshot `x0` into `x`.

    Modifies: x (in-place)
    """
    # N² factor accounts for the fact that we work in grid-index space
    a = dt * diff * N * N
    gauss_seidel_solve(x, x0, a, 1.0 + 4.0 * a, N, iterations, apply_boundary)
