"""
fluid2d/ — 2D Stable Fluids Physics Package
============================================
Exports the main interfaces the renderer / interaction layer uses.

visualizer.py imports: FluidSolver, FieldType → add_input_to_field(), step(), get_density()
main.py imports:       FluidSolver, BoundaryCondition → step(), print_status()
"""

from .boundary import BoundaryCondition
from .grid import FieldType, Grid
from .solver import FluidSolver

__all__ = ["BoundaryCondition", "FieldType", "FluidSolver", "Grid"]
