#!/usr/bin/env python3
"""
Batch Maze Generator

Generates many mazes headlessly (optionally in parallel), checks that each
one is perfect, and reports corridor statistics. Useful for seeing how the
straight-ahead bias changes the shape of the mazes.
"""

import argparse
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Optional

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import numpy as np

from maze_sim import MazeConfig, analysis, run_model, utils


def run_single_maze(
    height: int,
    width: int,
    start: str,
    straight_bias: float,
    seed: int,
    output_path: Optional[str],
) -> Dict[str, Any]:
    """
    Generate one maze and summarise it.

    Module level so ProcessPoolExecutor can pickle it.
    """
    config = MazeConfig(
        height=height, width=width, start=start, straight_bias=straight_bias, seed=seed
    )
    result = run_model(config)
    slots = result.slots
    summary = {
        "seed": seed,
        "ticks": result.meta["ticks"],
        "max_depth": result.meta["max_depth"],
        "perfect": analysis.is_perfect(slots),
        "straight_fraction": analysis.straight_fraction(slots),
        **analysis.corridor_shape(slots),
    }
    if output_path:
        rgb = mcolors.to_rgba_array(utils.STATE_COLORS)[:, :3]
        colors = np.round(rgb * 255).astype(np.uint8)
        plt.imsave(output_path, colors[slots], origin="lower")
        summary["output_path"] = output_path
    return summary


def main():
    parser = argparse.ArgumentParser(
        description="Generate a batch of mazes and report their statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--height", type=int, default=37, help="maze rows (default: 37)")
    parser.add_argument("--width", type=int, default=49, help="maze columns (default: 49)")
    parser.add_argument(
        "--start",
        choices=["origin", "entrance"],
        default="origin",
        help="start policy (default: origin)",
    )
    parser.add_argument(
        "--bias",
        type=float,
        default=0.8,
        help="probability of continuing straight (default: 0.8)",
    )
    parser.add_argument("--count", type=int, default=10, help="number of mazes (default: 10)")
    parser.add_argument("--seed", type=int, default=42, help="first seed (default: 42)")
    parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="number of parallel processes (default: 1)",
    )
    parser.add_argument(
        "--png-dir",
        type=Path,
        default=None,
        help="write one PNG per maze into this directory",
    )
    args = parser.parse_args()

    if args.png_dir is not None:
        args.png_dir.mkdir(parents=True, exist_ok=True)

    tasks = []
    for i in range(args.count):
        seed = args.seed + i
        out = None
        if args.png_dir is not None:
            out = str(args.png_dir / f"maze_{args.height}x{args.width}_seed{seed}.png")
        tasks.append((args.height, args.width, args.start, args.bias, seed, out))

    print(f"Generating {args.count} mazes ({args.height}x{args.width}, bias={args.bias})")
    start_time = time.time()
    results = []
    if args.jobs > 1:
        with ProcessPoolExecutor(max_workers=args.jobs) as executor:
            futures = [executor.submit(run_single_maze, *task) for task in tasks]
            for future in as_completed(futures):
                results.append(future.result())
    else:
        for task in tasks:
            results.append(run_single_maze(*task))
    elapsed = time.time() - start_time

    results.sort(key=lambda r: r["seed"])
    for r in results:
        print(
            f"  seed={r['seed']}: perfect={r['perfect']} dead_ends={r['dead_ends']} "
            f"straight={r['straight_fraction']:.2f} max_depth={r['max_depth']}"
        )

    imperfect = [r["seed"] for r in results if not r["perfect"]]
    print(
        f"Done in {elapsed:.1f}s: mean dead_ends="
        f"{np.mean([r['dead_ends'] for r in results]):.1f}, mean straight="
        f"{np.mean([r['straight_fraction'] for r in results]):.2f}"
    )
    if imperfect:
        print(f"⚠️  Imperfect mazes for seeds: {imperfect}")
    if args.png_dir is not None:
        print(f"✅ Images saved to {args.png_dir}")


if __name__ == "__main__":
    main()
