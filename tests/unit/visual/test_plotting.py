"""Tests for summary plotting."""

from prioritysim import Simulation, SimulationConfig
from prioritysim.visual.plotting import plot_summary


def test_plot_summary_writes_png(test_output_dir):
    summary = Simulation(SimulationConfig.default().with_overrides(seed=7, max_time=200.0)).run()

    path = plot_summary(summary, test_output_dir / "charts" / "summary.png")

    assert path.exists()
    assert path.stat().st_size > 0
