#!/usr/bin/env python3
"""
Animated Maze Viewer

Drives a MazeGenerator with a matplotlib animation: one generator step per
frame, each reported slot change repainted on an image of the board.
Press "r" to restart with a fresh maze.
"""

import argparse
import dataclasses
from pathlib import Path

import matplotlib.animation as animation
import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import numpy as np

from maze_sim import CellState, GenerationState, MazeConfig, MazeGenerator, utils

STATE_CMAP = mcolors.ListedColormap(utils.STATE_COLORS)
STATE_NORM = mcolors.BoundaryNorm([-0.5, 0.5, 1.5, 2.5], STATE_CMAP.N)


class BoardView:
    """Render sink that keeps an image of the expanded board in sync."""

    def __init__(self, ax, height: int, width: int) -> None:
        self.board = np.zeros((2 * height + 1, 2 * width + 1), dtype=np.uint8)
        self.image = ax.imshow(
            self.board,
            cmap=STATE_CMAP,
            norm=STATE_NORM,
            interpolation="nearest",
            origin="lower",
        )
        ax.set_axis_off()

    def __call__(self, slot, state: CellState) -> None:
        self.board[slot.row, slot.column] = state

    def clear(self) -> None:
        self.board[:] = CellState.UNTOUCHED

    def sync(self, board: np.ndarray) -> None:
        """Repaint the whole board from a snapshot."""
        self.board[:] = board

    def draw(self):
        self.image.set_data(self.board)
        return (self.image,)


def main():
    parser = argparse.ArgumentParser(
        description="Watch a maze being generated one step per frame",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--height", type=int, default=37, help="maze rows (default: 37)")
    parser.add_argument("--width", type=int, default=49, help="maze columns (default: 49)")
    parser.add_argument(
        "--start",
        choices=["origin", "entrance"],
        default="origin",
        help="start at (0, 0) or open a random entrance/exit (default: origin)",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--params",
        type=Path,
        default=None,
        help="JSON/TOML parameter file (overrides the flags above)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=16,
        help="milliseconds between frames (default: 16)",
    )
    args = parser.parse_args()

    if args.params is not None:
        config = MazeConfig.from_dict(utils.load_params(args.params))
    else:
        config = MazeConfig(
            height=args.height, width=args.width, start=args.start, seed=args.seed
        )
    config = dataclasses.replace(config, verbose=True)

    fig, ax = plt.subplots(figsize=(8, 6))
    fig.patch.set_facecolor(utils.STATE_COLORS[CellState.UNTOUCHED])
    view = BoardView(ax, config.height, config.width)
    generator = MazeGenerator(config, sink=view, on_reset=view.clear)

    def on_key(event):
        if event.key == "r":
            generator.restart()
            view.sync(generator.graph.slots())

    def first_frame():
        # matplotlib may call this again on resize
        if generator.state is GenerationState.TRIGGER_GENERATION:
            generator.advance()
        view.sync(generator.graph.slots())
        return view.draw()

    def update(_frame):
        generator.advance()
        return view.draw()

    fig.canvas.mpl_connect("key_press_event", on_key)
    anim = animation.FuncAnimation(
        fig,
        update,
        init_func=first_frame,
        interval=args.interval,
        blit=True,
        cache_frame_data=False,
    )
    plt.show()
    return anim


if __name__ == "__main__":
    main()
