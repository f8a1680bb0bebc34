# region Imports
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from matplotlib.lines import Line2D

from .models import DirectionField, GridModel
# endregion


# region Visualization Function
def show_direction_field(
    field: DirectionField,
    grid: GridModel,
    path=None,
    title="Direction field",
    arrows=True,
    show=True,
):
    """
    Distance heatmap for one source with obstructions, predecessor arrows and
    an optional traced path (list of (x, y)). Returns (fig, ax).
    """
    # region Base Image
    dist = field.distance_array().astype(np.float32)
    dist[dist < 0] = np.nan
    # endregion

    fig, ax = plt.subplots(figsize=(8, 8))
    heat = ax.imshow(dist, origin="upper", cmap="viridis", alpha=0.9)
    cbar = fig.colorbar(heat, ax=ax, fraction=0.046, pad=0.04)
    cbar.set_label("steps to source")

    # region Obstruction Overlay
    blocked = np.ma.masked_where(~grid.blocked, np.ones(grid.blocked.shape))
    ax.imshow(blocked, origin="upper", cmap="gray_r", vmin=0, vmax=1, alpha=1.0)
    # endregion

    # region Predecessor Arrows
    if arrows and len(field):
        xs, ys, us, vs = [], [], [], []
        for (x, y), entry in field.items():
            dx, dy = entry.predecessor.delta
            xs.append(x); ys.append(y); us.append(dx); vs.append(-dy)
        ax.quiver(xs, ys, us, vs, color="white", scale=grid.n * 2.5, width=0.003)
    # endregion

    # region Path Overlay
    if path:
        px, py = zip(*path)
        ax.plot(px, py, color="cyan", linewidth=2.5, label="Path")
    sx, sy = field.source
    ax.scatter(sx, sy, s=100, edgecolors="black", facecolors="white", label="Source", zorder=3)
    # endregion

    # region Legend / Layout
    legend_elements = [
        Line2D([0], [0], color="cyan", lw=2, label="Path"),
        Line2D([0], [0], marker="o", color="w", label="Source",
               markerfacecolor="white", markeredgecolor="black", markersize=9),
        Patch(facecolor="black", edgecolor="black", label="Obstructed"),
        Patch(facecolor="white", edgecolor="black", label="Unreached"),
    ]
    ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    ax.set_title(title)
    ax.set_axis_off()
    plt.tight_layout()
    if show:
        plt.show()
    # endregion
    return fig, ax
# endregion
