"""Independent replications of one configuration.

A single run gives one noisy estimate of each blocking probability and
utilization. run_replications() repeats the run with seeds base_seed,
base_seed + 1, ... and reports, per metric, the mean, the sample standard
deviation and a Student t confidence half-width with replications - 1
degrees of freedom.

Example:
    report = run_replications(SimulationConfig.default(), replications=20, base_seed=1)
    print(report.table)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import pandas as pd
from scipy import stats

from prioritysim.config import SimulationConfig
from prioritysim.instrumentation.summary import SimulationSummary
from prioritysim.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass
class ReplicationReport:
    """Results of a replication study.

    Attributes:
        summaries: Summary of every replication, in seed order.
        samples: One row per (replication, entity, metric) observation.
        table: Mean, std and CI half-width per (entity, metric).
        confidence: Confidence level used for the half-widths.
    """
    summaries: list[SimulationSummary]
    samples: pd.DataFrame
    table: pd.DataFrame
    confidence: float

    def __str__(self) -> str:
        return (
            f"Replications: {len(self.summaries)} "
            f"(CI {self.confidence * 100:.0f}%)\n{self.table.to_string(float_format=lambda v: f'{v:.4f}')}"
        )


def _samples_from(replication: int, seed: int, summary: SimulationSummary) -> list[dict]:
    rows = []
    for s in summary.sources:
        rows.append({"replication": replication, "seed": seed, "entity": s.name,
                     "metric": "rejection_probability", "value": s.rejection_probability})
        rows.append({"replication": replication, "seed": seed, "entity": s.name,
                     "metric": "mean_sojourn_time", "value": s.mean_sojourn_time})
        rows.append({"replication": replication, "seed": seed, "entity": s.name,
                     "metric": "mean_waiting_time", "value": s.mean_waiting_time})
    for d in summary.devices:
        rows.append({"replication": replication, "seed": seed, "entity": d.name,
                     "metric": "utilization", "value": d.utilization})
    return rows


def run_replications(
    config: SimulationConfig,
    replications: int,
    base_seed: int = 0,
    confidence: float = 0.95,
) -> ReplicationReport:
    """Run ``replications`` seeded copies of ``config`` and aggregate them.

    Raises:
        ValueError: If replications < 1 or confidence is outside (0, 1).
    """
    if replications < 1:
        raise ValueError(f"replications must be >= 1, got {replications}")
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")

    summaries: list[SimulationSummary] = []
    rows: list[dict] = []
    for rep in range(replications):
        seed = base_seed + rep
        summary = Simulation(config.with_overrides(seed=seed)).run()
        summaries.append(summary)
        rows.extend(_samples_from(rep, seed, summary))
        logger.debug("Replication %d (seed=%d) done: served=%d rejected=%d",
                     rep, seed, summary.served, summary.rejected)

    samples = pd.DataFrame(rows)
    grouped = samples.groupby(["entity", "metric"], sort=True)["value"]
    table = grouped.agg(["mean", "std", "count"])
    # A single replication has no spread estimate
    table["std"] = table["std"].fillna(0.0)

    counts = table["count"]
    t_crit = pd.Series(
        stats.t.ppf(1.0 - (1.0 - confidence) / 2.0, (counts - 1).clip(lower=1)),
        index=table.index,
    )
    half_width = t_crit * table["std"] / counts.map(math.sqrt)
    table["half_width"] = half_width.where(counts > 1, 0.0)
    table = table.drop(columns="count")

    logger.info("Completed %d replications", replications)
    return ReplicationReport(summaries=summaries, samples=samples, table=table, confidence=confidence)
