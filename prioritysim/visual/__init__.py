"""Plotting helpers for run summaries."""

from prioritysim.visual.plotting import plot_summary

__all__ = ["plot_summary"]
