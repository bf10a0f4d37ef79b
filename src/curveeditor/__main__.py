"""
Command-line interface.

Builds the default curve (or loads a project file given as the first
argument) and plots the X and Y paths over normalized time.

Usage:
    $ python -m curveeditor [project.h5]
"""
import logging
import sys

import matplotlib.pyplot as plt

from curveeditor.config import load_settings
from curveeditor.logging_config import setup_logging
from curveeditor.model.graph import ControlPointGraph
from curveeditor.model.io import IOManager


def main() -> None:
    logger = setup_logging(level=logging.INFO)
    config = load_settings()

    if len(sys.argv) > 1:
        graph = IOManager.load_project(sys.argv[1], config)
    else:
        graph = ControlPointGraph(config=config)
        graph.create_main_controls()

    logger.info(f"Previewing {len(graph.path_x)} segments over {config.duration:g} s.")

    times, xs = graph.path_x.sample(300)
    _, ys = graph.path_y.sample(300)

    plt.rcParams["figure.constrained_layout.use"] = True
    fig, (ax_t, ax_xy) = plt.subplots(1, 2, figsize=(12, 5))

    ax_t.plot(times * config.duration, xs, 'b', lw=2, label="x")
    ax_t.plot(times * config.duration, ys, 'r', lw=2, label="y")
    ax_t.set_xlabel("Time [s]")
    ax_t.set_ylabel("Value")
    ax_t.legend()
    ax_t.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

    anchors = graph.anchor_positions()
    ax_xy.plot(xs, ys, 'k', lw=2)
    ax_xy.plot(anchors[:, 0], anchors[:, 1], 'o', color='tab:orange')
    ax_xy.set_xlim(0, graph.width)
    ax_xy.set_ylim(graph.height, 0)  # canvas y points down
    ax_xy.set_xlabel("x")
    ax_xy.set_ylabel("y")
    ax_xy.grid(visible=True, which='major', axis='both', linestyle=':', color='gray', lw=0.5)

    plt.show()


if __name__ == "__main__":
    main()
