"""
visualizer.py — Interactive Density Viewer
===========================================
Renders the density field of a 2D FluidSolver (boundary ring included) and
lets the mouse push impulses into it:

  - Right button held : add density at the pointer cell
  - Left button held  : add velocity following the pointer's movement

Uses matplotlib FuncAnimation for real-time updates. The viewer only reads
`get_density()` and writes through `add_input_to_field()`; it never touches
solver buffers directly.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.colors import LinearSegmentedColormap

from fluid2d import FieldType

# Near-grayscale ramp with a slight blue tint
INK_COLORS = ["#000000", "#1b2a3a", "#c8d8e8", "#ffffff"]
ink_cmap = LinearSegmentedColormap.from_list("ink", INK_COLORS)

# ── Interaction parameters ────────────────────────────────────────────────────
DENSITY_INJECTION = 30.0   # density added per frame while right button is held
VELOCITY_SCALE    = 0.1    # pixels of pointer movement → velocity units

BUTTON_LEFT  = 1
BUTTON_RIGHT = 3


class PointerState:
    """
    Pointer position and buttons between input polls.
    Owned by one viewer, which feeds it mouse events and polls it once per frame.
    """

    def __init__(self, N: int):
        self.N = N
        self.cell = None        # (i, j) under the pointer, already clamped
        self.pos = None         # display (x, y) in pixels
        self.last_pos = None    # display (x, y) at the previous poll
        self.buttons = set()

    def to_cell(self, xdata: float, ydata: float) -> tuple:
        """
        Map data coordinates of the density image to an interior cell.
        Pixel centers sit on integer coordinates, so round then clamp to 1..N.
        """
        i = min(max(int(round(xdata)), 1), self.N)
        j = min(max(int(round(ydata)), 1), self.N)
        return i, j

    def move(self, x: float, y: float, xdata: float = None, ydata: float = None):
        """Record a new pointer position; data coords are None outside the image."""
        self.pos = (x, y)
        if xdata is not None and ydata is not None:
            self.cell = self.to_cell(xdata, ydata)

    def poll(self, solver):
        """
        Push the impulses for this frame into the solver, then remember the
        current position for the next poll's movement.
        """
        if self.cell is not None:
            i, j = self.cell
            if BUTTON_RIGHT in self.buttons:
                solver.add_input_to_field(FieldType.DENSITY, i, j, DENSITY_INJECTION)
            if BUTTON_LEFT in self.buttons and self.pos is not None and self.last_pos is not None:
                # Display y already grows upward, no inversion needed
                du = (self.pos[0] - self.last_pos[0]) * VELOCITY_SCALE
                dv = (self.pos[1] - self.last_pos[1]) * VELOCITY_SCALE
                solver.add_input_to_field(FieldType.VELOCITY_U, i, j, du)
                solver.add_input_to_field(FieldType.VELOCITY_V, i, j, dv)
        self.last_pos = self.pos


class FluidVisualizer:
    """
    Real-time viewer of the fluid simulation.

    Usage (standalone):
        from fluid2d import FluidSolver
        from visualizer import FluidVisualizer

        solver = FluidSolver(N=150)
        viz = FluidVisualizer(solver)
        viz.run()  # Opens live window
    """

    def __init__(self, solver, vmax: float = 1.0):
        """
        Args:
            solver : FluidSolver instance
            vmax   : Density mapped to full white
        """
        self.solver = solver
        self.N = solver.N
        self.vmax = vmax
        self.pointer = PointerState(self.N)

        self._setup_figure()

    def _setup_figure(self):
        """Initialize the matplotlib figure and hook up mouse events."""
        self.fig, self.ax = plt.subplots(figsize=(7, 7))
        self.fig.patch.set_facecolor('#0a0a0a')
        self.ax.set_facecolor('#0a0a0a')
        self.ax.set_xticks([])
        self.ax.set_yticks([])

        dummy = np.zeros((self.N + 2, self.N + 2))
        self.img = self.ax.imshow(
            dummy, cmap=ink_cmap,
            vmin=0, vmax=self.vmax,
            interpolation='nearest',
            origin='lower',
            aspect='equal'
        )

        self.title_text = self.ax.set_title(
            "Fluid Sim — Frame 0 | 0.0 FPS",
            color='#cccccc', fontsize=10, fontfamily='monospace'
        )

        self.fig.canvas.mpl_connect("button_press_event", self._on_press)
        self.fig.canvas.mpl_connect("button_release_event", self._on_release)
        self.fig.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.fig.canvas.mpl_connect("key_press_event", self._on_key)

        plt.tight_layout()

    def _on_press(self, event):
        if event.inaxes is self.ax:
            self.pointer.buttons.add(int(event.button))
            self.pointer.move(event.x, event.y, event.xdata, event.ydata)

    def _on_release(self, event):
        self.pointer.buttons.discard(int(event.button))

    def _on_motion(self, event):
        if event.inaxes is self.ax:
            self.pointer.move(event.x, event.y, event.xdata, event.ydata)
        else:
            self.pointer.move(event.x, event.y)

    def _on_key(self, event):
        if event.key == "escape":
            plt.close(self.fig)

    def update(self, frame_num):
        """Called by FuncAnimation each frame. Polls input, steps, redraws."""
        self.pointer.poll(self.solver)

        metrics = self.solver.step()

        density = self.solver.get_density()
        self.img.set_data(self.solver.grid.as_2d(density))

        self.title_text.set_text(
            f"Fluid Sim — Frame {metrics['frame']} | "
            f"{metrics['fps']:.1f} FPS | "
            f"density={metrics['density_total']:.1f}"
        )

        return [self.img, self.title_text]

    def run(self, fps: int = 30, frames: int = None):
        """
        Start the live animation window.

        Args:
            fps    : Target animation frame rate
            frames : Total frames to render (None = until the window closes)
        """
        interval_ms = 1000 // fps
        self.anim = animation.FuncAnimation(
            self.fig,
            self.update,
            frames=frames,
            interval=interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        plt.show()
