"""Charts of a finished run."""

from __future__ import annotations

import logging
from pathlib import Path

from prioritysim.instrumentation.summary import SimulationSummary

logger = logging.getLogger(__name__)


def plot_summary(summary: SimulationSummary, path: str | Path) -> Path:
    """Save per-source blocking/latency and per-device utilization bar charts.

    Args:
        summary: Summary returned by Simulation.run().
        path: Output image file; parent directories are created.

    Returns:
        The path the figure was written to.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    sources = summary.sources_frame()
    devices = summary.devices_frame()

    fig, axes = plt.subplots(1, 3, figsize=(15, 4.5))

    ax1 = axes[0]
    ax1.bar(sources.index, sources["rejection_probability"], color="tab:red", alpha=0.8)
    ax1.set_title("Rejection probability by source")
    ax1.set_ylabel("P(reject)")
    ax1.set_ylim(0, 1)
    ax1.grid(True, axis="y", alpha=0.3)

    ax2 = axes[1]
    ax2.bar(sources.index, sources["mean_sojourn_time"], color="tab:blue", alpha=0.8, label="Sojourn")
    ax2.bar(sources.index, sources["mean_waiting_time"], color="tab:orange", alpha=0.8, label="Waiting")
    ax2.set_title("Mean time in system by source")
    ax2.set_ylabel("Time (units)")
    ax2.legend(loc="upper left")
    ax2.grid(True, axis="y", alpha=0.3)

    ax3 = axes[2]
    ax3.bar(devices.index, devices["utilization"], color="tab:green", alpha=0.8)
    ax3.set_title("Device utilization")
    ax3.set_ylabel("Busy fraction")
    ax3.set_ylim(0, 1)
    ax3.grid(True, axis="y", alpha=0.3)

    fig.suptitle(
        f"t={summary.elapsed_time:.1f}  generated={summary.generated}  "
        f"served={summary.served}  rejected={summary.rejected}"
    )
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved summary plot to %s", path)
    return path
