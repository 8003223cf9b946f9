"""
Chart rendering for recurrence trajectories.

Draws the main x chart and, on request, the coefficient and W evolution
charts from the per-step records produced by ``pkgs.recurrence.to_records``.
matplotlib is imported lazily and always with the headless Agg backend.
"""
import logging
import os
from typing import Dict, List, Sequence, Tuple

logger = logging.getLogger('RecurrenceCore')

SERIES_STYLE = {
    'x': ('#8884d8', 'x value'),
    'multiplier': ('#ff7300', 'a[i][0] (multiplier)'),
    'constant': ('#00b894', 'a[i][1] (constant)'),
    'w00': ('#e84393', 'W[0][0]'),
    'w01': ('#00cec9', 'W[0][1]'),
    'w10': ('#fdcb6e', 'W[1][0]'),
    'w11': ('#6c5ce7', 'W[1][1]'),
}

Panel = Tuple[str, Tuple[str, ...]]


def chart_panels(records: Sequence[Dict[str, float]],
                 show_coefficients: bool = False,
                 show_transition_matrix: bool = False) -> List[Panel]:
    """Titles and series keys of the panels to draw, top to bottom."""
    panels: List[Panel] = [("System Evolution", ('x',))]
    if show_coefficients:
        panels.append(("Coefficient Evolution", ('multiplier', 'constant')))
    has_w = bool(records) and 'w00' in records[0]
    if show_transition_matrix and has_w:
        panels.append(("W Matrix Evolution", ('w00', 'w01', 'w10', 'w11')))
    return panels


def render_chart(records: Sequence[Dict[str, float]], path: str,
                 show_coefficients: bool = False,
                 show_transition_matrix: bool = False,
                 title: str = "Dynamic System Evolution") -> str:
    """Render the selected panels to an image file and return its path."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    panels = chart_panels(records, show_coefficients, show_transition_matrix)
    steps = [r['step'] for r in records]

    fig, axes = plt.subplots(len(panels), 1, figsize=(10, 3.6 * len(panels)), squeeze=False)
    for ax, (panel_title, keys) in zip(axes[:, 0], panels):
        for key in keys:
            color, label = SERIES_STYLE[key]
            ax.plot(steps, [r[key] for r in records], color=color, label=label,
                    linewidth=2 if key == 'x' else 1)
        ax.set_title(panel_title)
        ax.grid(True, linestyle='--', alpha=0.5)
        ax.legend()
    axes[0, 0].set_ylabel("Value")
    axes[-1, 0].set_xlabel("Step")
    fig.suptitle(title)
    fig.tight_layout()

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    logger.info(f"Saved chart with {len(panels)} panel(s) to {path}")
    return path
