"""Charts for batch rating results."""

from __future__ import annotations
import os
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..core.types import Strategy
from .report import RatingResult


class Visualizer:
    """
    Chart generator for rating results.

    Creates an effort histogram and a per-strategy usage chart.
    """

    def __init__(self, results: List[RatingResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: Rating results to plot.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        sns.set_theme(style="whitegrid")
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [self.plot_effort_histogram(), self.plot_strategy_usage()]

    def plot_effort_histogram(self) -> str:
        """Histogram of effort over the solved puzzles."""
        fig, ax = plt.subplots(figsize=(10, 6))

        efforts = [r.effort for r in self.results if r.solved]
        if efforts:
            sns.histplot(efforts, bins=min(30, max(5, len(efforts))), kde=len(efforts) > 1, ax=ax,
                         color="#3498db", edgecolor="black", linewidth=0.5)
            ax.axvline(float(np.mean(efforts)), color="#e74c3c", linestyle="--",
                       label=f"mean {np.mean(efforts):.2f}")
            ax.legend()

        ax.set_xlabel("Effort", fontsize=12)
        ax.set_ylabel("Puzzles", fontsize=12)
        ax.set_title("Effort Distribution of Solved Puzzles", fontsize=14, fontweight="bold")

        plt.tight_layout()
        path = os.path.join(self.output_dir, "effort_histogram.png")
        plt.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return path

    def plot_strategy_usage(self) -> str:
        """Bar chart of total eliminations per strategy, easiest first."""
        fig, ax = plt.subplots(figsize=(12, 6))

        totals: Dict[str, int] = {}
        for r in self.results:
            for label, count in r.eliminations.items():
                totals[label] = totals.get(label, 0) + count
        order = [s.label for s in Strategy if s.label in totals]
        counts = [totals[label] for label in order]

        bars = ax.bar(order, counts, color=sns.color_palette("husl", len(order)),
                      edgecolor="black", linewidth=0.5)
        for bar, count in zip(bars, counts):
            ax.annotate(f"{count}",
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha="center", va="bottom", fontsize=9)

        ax.set_xlabel("Strategy", fontsize=12)
        ax.set_ylabel("Candidates eliminated", fontsize=12)
        ax.set_title("Eliminations by Strategy", fontsize=14, fontweight="bold")
        ax.tick_params(axis="x", rotation=30)
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "strategy_usage.png")
        plt.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return path
