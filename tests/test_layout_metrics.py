"""Tests for layout metrics and seed surveys."""

import math

import pandas as pd
import pytest

from platform_course.analysis.layout_metrics import compute_layout_metrics, survey_seeds
from platform_course.config import CONFIGS
from platform_course.layout import LevelLayout, Platform


class TestComputeLayoutMetrics:
    def test_keys_and_ranges(self, layout, kinematics):
        metrics = compute_layout_metrics(layout, kinematics)
        assert metrics["seed"] == 12345
        assert metrics["platforms"] == len(layout)
        assert 0.0 <= metrics["hazard_ratio"] < 1.0
        assert 0.0 < metrics["reachable_fraction"] <= 1.0
        assert metrics["min_y"] <= 450.0 <= metrics["max_y"]
        assert metrics["span"] > 3000.0
        assert metrics["mean_width"] >= 100.0

    def test_gaps_measured(self, layout, kinematics):
        metrics = compute_layout_metrics(layout, kinematics)
        assert metrics["mean_gap"] > 0
        assert metrics["max_gap"] >= metrics["mean_gap"]

    def test_single_platform_has_no_gaps(self, kinematics):
        start = Platform(id=0, x=150, y=450, width=100, is_start=True, is_goal=True)
        layout = LevelLayout(platforms=(start,), start=start, goal=start)
        metrics = compute_layout_metrics(layout, kinematics)
        assert math.isnan(metrics["mean_gap"])
        assert metrics["reachable_fraction"] == 1.0
        assert metrics["goal_reachable"]

    def test_sparse_course_fully_reachable(self, sparse_generator):
        layout = sparse_generator.generate(4)
        metrics = compute_layout_metrics(layout, sparse_generator.kinematics)
        assert metrics["reachable_fraction"] == 1.0
        assert metrics["goal_reachable"]


class TestSurveySeeds:
    def test_one_row_per_seed(self):
        df = survey_seeds(range(3))
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 3
        assert df.index.name == "seed"
        assert list(df.index) == [0, 1, 2]

    def test_uses_config(self):
        short = survey_seeds([1, 2], CONFIGS["short"])
        default = survey_seeds([1, 2])
        assert (short["span"] < default["span"]).all()

    def test_describe(self):
        df = survey_seeds(range(4), CONFIGS["sparse"])
        summary = df[["platforms", "hazard_ratio", "reachable_fraction"]].describe()
        assert summary.loc["min", "reachable_fraction"] == pytest.approx(1.0)
