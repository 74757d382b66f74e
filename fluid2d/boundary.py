"""
boundary.py — Boundary Conditions on the (N+2)² Ring
======================================================
After every sweep over the interior, the one-cell ring around the domain
must be fixed up, otherwise stale ring values leak back into the next sweep.

Only DIRICHLET is implemented: every ring cell (4 edges + 4 corners) is
forced to 0.0. These are walls that absorb rather than reflect.

NEUMANN (zero gradient) and PERIODIC (wrap-around) exist as selectors only.
Asking for them leaves the ring untouched and prints a notice.
"""

from enum import Enum

import numpy as np


class BoundaryCondition(Enum):
    DIRICHLET = "dirichlet"
    NEUMANN   = "neumann"
    PERIODIC  = "periodic"


def as_boundary_condition(mode) -> BoundaryCondition:
    """Coerce a BoundaryCondition or its string value, else ValueError."""
    if isinstance(mode, BoundaryCondition):
        return mode
    try:
        return BoundaryCondition(mode)
    except ValueError:
        valid = ", ".join(repr(m.value) for m in BoundaryCondition)
        raise ValueError(f"Invalid boundary condition: {mode!r}. Use one of {valid}.") from None


def zero_boundary(x: np.ndarray, N: int):
    """
    Set every ring cell of a flat (N+2)² buffer to 0.0.
    Interior cells are not touched.
    """
    row = N + 2
    x[:row]          = 0.0     # bottom edge + corners
    x[-row:]         = 0.0     # top edge + corners
    x[::row]         = 0.0     # left edge
    x[row - 1::row]  = 0.0     # right edge


def set_boundary(x: np.ndarray, N: int, mode: BoundaryCondition, reported: set = None) -> bool:
    """
    Apply a boundary policy to one flat buffer, in place.

    Args:
        x        : Flat (N+2)² buffer to fix up
        N        : Interior dimension
        mode     : BoundaryCondition to apply
        reported : Modes already reported as unimplemented. When given,
                   each unimplemented mode is printed once and then added;
                   when None the notice is printed on every call.

    Returns:
        True if the ring was fixed up, False for an unimplemented mode.
    """
    if mode is BoundaryCondition.DIRICHLET:
        zero_boundary(x, N)
        return True

    if mode is BoundaryCondition.NEUMANN or mode is BoundaryCondition.PERIODIC:
        if reported is None or mode not in reported:
            print(f"[Boundary] {mode.value.capitalize()} boundary condition not yet implemented "
                  f"(boundary cells left unchanged).")
            if reported is not None:
                reported.add(mode)
        return False

    raise ValueError(f"Invalid boundary condition: {mode!r}")
