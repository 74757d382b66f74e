"""
main.py — Entry Point
======================
Runs the 2D fluid solver live or without a display.

Usage:
    python main.py                    # Headless run with a fixed source (default)
    python main.py --mode live        # Interactive window (N=150)
    python main.py --mode benchmark   # Per-stage timing breakdown
"""

import argparse
import numpy as np


def _inject_source(solver):
    """Density plume with an upward push at bottom center."""
    from fluid2d import FieldType

    N = solver.N
    c = N // 2
    solver.add_input_to_field(FieldType.DENSITY, c, 2, 30.0)
    solver.add_input_to_field(FieldType.VELOCITY_V, c, 2, 2.0)


def run_live(N: int = 150, boundary: str = "dirichlet"):
    """Live interactive visualization."""
    from fluid2d import FluidSolver
    from visualizer import FluidVisualizer

    print(f"Starting live simulation (N={N})...")
    print("Right-drag adds density, left-drag pushes fluid. Esc or close the window to exit.\n")

    solver = FluidSolver(N, boundary)
    viz = FluidVisualizer(solver)
    viz.run()


def run_headless(N: int = 64, frames: int = 100, boundary: str = "dirichlet"):
    """Run simulation without display — prints stats every 10 frames."""
    from fluid2d import FluidSolver

    print(f"\nHeadless simulation | N={N} | {frames} frames")
    print(f"{'─'*60}")

    solver = FluidSolver(N, boundary)
    total_times = []

    for f in range(frames):
        _inject_source(solver)
        metrics = solver.step()
        total_times.append(metrics["total_ms"])

        if f % 10 == 0:
            print(f"  Frame {f:03d} | {metrics['total_ms']:6.1f}ms "
                  f"({metrics['fps']:.1f} FPS) | "
                  f"div_max={metrics['divergence_max']:.5f} | "
                  f"density={metrics['density_total']:.1f}")

    solver.print_status()
    print(f"  Average: {np.mean(total_times):.1f}ms/frame ({1000/np.mean(total_times):.1f} FPS)")
    print(f"  Min:     {np.min(total_times):.1f}ms")
    print(f"  Max:     {np.max(total_times):.1f}ms")


def run_benchmark(N: int = 64, frames: int = 50, boundary: str = "dirichlet"):
    """
    Detailed performance breakdown.
    Shows how long the velocity and density stages take.
    """
    from fluid2d import FluidSolver

    print(f"\n{'='*60}")
    print(f"  BENCHMARK | N={N} | {frames} frames")
    print(f"{'='*60}")

    solver = FluidSolver(N, boundary)

    # Warm up (first calls compile the numba kernels)
    for _ in range(5):
        _inject_source(solver)
        solver.step()

    logs = []
    for _ in range(frames):
        _inject_source(solver)
        logs.append(solver.step())

    keys = ["velocity_ms", "density_ms", "total_ms"]

    print(f"\n{'Step':<20} {'Mean':>8} {'Min':>8} {'Max':>8}")
    print(f"{'─'*50}")
    for k in keys:
        vals = [m[k] for m in logs]
        print(f"  {k:<18} {np.mean(vals):>7.1f}ms {np.min(vals):>7.1f}ms {np.max(vals):>7.1f}ms")

    total_vals = [m["total_ms"] for m in logs]
    print(f"\n{'─'*50}")
    print(f"  FPS (physics only): {1000/np.mean(total_vals):.1f}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="2D Stable Fluids Simulation")
    parser.add_argument(
        "--mode", choices=["live", "headless", "benchmark"],
        default="headless",
        help="Run mode (default: headless)"
    )
    parser.add_argument("--N",        type=int, default=None, help="Grid resolution (default: 150 live, 64 otherwise)")
    parser.add_argument("--frames",   type=int, default=100,  help="Number of frames")
    parser.add_argument(
        "--boundary", choices=["dirichlet", "neumann", "periodic"],
        default="dirichlet",
        help="Boundary condition (only dirichlet is implemented)"
    )

    args = parser.parse_args()

    if args.mode == "live":
        run_live(N=args.N or 150, boundary=args.boundary)
    elif args.mode == "headless":
        run_headless(N=args.N or 64, frames=args.frames, boundary=args.boundary)
    elif args.mode == "benchmark":
        run_benchmark(N=args.N or 64, frames=args.frames, boundary=args.boundary)
