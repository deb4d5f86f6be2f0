"""Per-layout metrics and seed sweeps.

Used to check generator changes across many seeds: how long the courses
are, how many hazards they carry, how wide the gaps run and how much of
each course the reachability audit can reach.

Usage:
    # Single layout
    metrics = compute_layout_metrics(layout, JumpKinematics(KinematicsConstants()))

    # Sweep -> DataFrame
    df = survey_seeds(range(100), CONFIGS["default"])
    df[["platforms", "hazard_ratio", "reachable_fraction"]].describe()
"""

import numpy as np
import pandas as pd
from typing import Iterable, Optional

from ..config import GenerationConfig
from ..kinematics import JumpKinematics
from ..layout import LevelLayout
from ..level_gen import LevelGenerator
from ..reachability import reachable_ids


def _gaps(layout: LevelLayout) -> np.ndarray:
    """Horizontal gaps between platforms sorted by left edge; overlaps dropped."""
    ordered = sorted(layout.platforms, key=lambda p: p.left)
    if len(ordered) < 2:
        return np.array([])
    lefts = np.array([p.left for p in ordered[1:]])
    rights = np.maximum.accumulate(np.array([layout.body_width(p) / 2 + p.x for p in ordered[:-1]]))
    gaps = lefts - rights
    return gaps[gaps > 0]


def compute_layout_metrics(layout: LevelLayout, kinematics: JumpKinematics) -> dict:
    """Compute all metrics for one layout.

    Returns:
        Dict of metric name -> value. Flat structure (no nesting)
    """
    ys = np.array([p.y for p in layout.platforms])
    widths = np.array([p.width for p in layout.platforms])
    gaps = _gaps(layout)
    reached = reachable_ids(layout.platforms, kinematics)
    n = len(layout.platforms)

    metrics = {
        "seed": layout.seed,
        "platforms": n,
        "hazards": len(layout.hazardous()),
        "hazard_ratio": len(layout.hazardous()) / n,
        "span": layout.goal.body_right(layout.hazard_widening) - layout.start.left,
        "mean_width": float(widths.mean()),
        "min_y": float(ys.min()),
        "max_y": float(ys.max()),
        "y_std": float(ys.std()),
        "reachable_fraction": len(reached) / n,
        "goal_reachable": layout.goal.id in reached,
        "diagnostics": len(layout.diagnostics),
        "fallbacks": len(layout.fallback_ids),
    }

    if gaps.size:
        metrics["mean_gap"] = float(gaps.mean())
        metrics["max_gap"] = float(gaps.max())
        metrics["gap_to_safe_jump"] = float(gaps.max() / kinematics.safe_jump_distance)
    else:
        metrics["mean_gap"] = np.nan
        metrics["max_gap"] = np.nan
        metrics["gap_to_safe_jump"] = np.nan

    return metrics


def survey_seeds(seeds: Iterable[int], config: Optional[GenerationConfig] = None) -> pd.DataFrame:
    """Generate one layout per seed and tabulate their metrics.

    Returns:
        DataFrame with one row per seed, indexed by seed.
    """
    generator = LevelGenerator(config)
    rows = [
        compute_layout_metrics(generator.generate(seed), generator.kinematics)
        for seed in seeds
    ]
    return pd.DataFrame(rows).set_index("seed")
