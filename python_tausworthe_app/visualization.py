"""Visualization of generated sequences and run results using matplotlib."""

import os

import numpy as np
from scipy import stats

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend by default
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False


def _require_matplotlib():
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install matplotlib"
        )


class SequencePlotter:
    """Histogram and lag plots of uniform and normal deviate streams."""

    def __init__(self, uniform=None, normal=None, title=None):
        _require_matplotlib()
        self.uniform = None if uniform is None else np.asarray(
            getattr(uniform, 'values', uniform), dtype=np.float64
        )
        self.normal = None if normal is None else np.asarray(normal, dtype=np.float64)
        self.title = title

    def plot_uniform_histogram(self, ax=None, save_path=None, bins=20):
        """Histogram of U(0,1) deviates with the flat reference density."""
        if self.uniform is None:
            return ax

        own_fig = ax is None
        if own_fig:
            fig, ax = plt.subplots(figsize=(8, 6))

        ax.hist(self.uniform, bins=bins, range=(0.0, 1.0), density=True,
                color='skyblue', edgecolor='black')
        ax.axhline(1.0, color='tab:red', linestyle='--', label='U(0,1) density')
        ax.set_xlabel('u')
        ax.set_ylabel('Density')
        ax.set_title('Uniform deviates')
        ax.legend()

        if save_path and own_fig:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)

        return ax

    def plot_normal_histogram(self, ax=None, save_path=None, bins=40):
        """Histogram of normal deviates with the N(0,1) pdf overlay."""
        if self.normal is None:
            return ax

        own_fig = ax is None
        if own_fig:
            fig, ax = plt.subplots(figsize=(8, 6))

        ax.hist(self.normal, bins=bins, density=True, color='salmon', edgecolor='black')
        xs = np.linspace(-4.0, 4.0, 200)
        ax.plot(xs, stats.norm.pdf(xs), color='tab:blue', label='N(0,1) pdf')
        ax.set_xlabel('z')
        ax.set_ylabel('Density')
        ax.set_title('Normal deviates (Box-Muller)')
        ax.legend()

        if save_path and own_fig:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)

        return ax

    def plot_lag(self, ax=None, save_path=None, lag=1):
        """Scatter of u[i] against u[i + lag]."""
        if self.uniform is None or self.uniform.size <= lag:
            return ax

        own_fig = ax is None
        if own_fig:
            fig, ax = plt.subplots(figsize=(7, 7))

        ax.scatter(self.uniform[:-lag], self.uniform[lag:], s=2, alpha=0.5)
        ax.set_xlabel('u[i]')
        ax.set_ylabel(f'u[i+{lag}]')
        ax.set_title(f'Lag-{lag} plot')
        ax.set_xlim(0.0, 1.0)
        ax.set_ylim(0.0, 1.0)

        if save_path and own_fig:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)

        return ax

    def plot_combined_dashboard(self, save_dir=None, lag=1):
        """Uniform histogram, lag plot and (if present) normal histogram."""
        panels = 3 if self.normal is not None else 2
        fig, axes = plt.subplots(1, panels, figsize=(6 * panels, 5))
        if self.title:
            fig.suptitle(self.title, fontsize=13)

        self.plot_uniform_histogram(ax=axes[0])
        self.plot_lag(ax=axes[1], lag=lag)
        if self.normal is not None:
            self.plot_normal_histogram(ax=axes[2])

        fig.tight_layout(rect=[0, 0, 1, 0.95])

        if save_dir:
            os.makedirs(save_dir, exist_ok=True)
            fig.savefig(
                os.path.join(save_dir, 'dashboard.png'),
                dpi=150, bbox_inches='tight'
            )

        return fig

    @staticmethod
    def plot_comparison(results, save_path=None):
        """Bar chart of test p-values of several RunResult objects.

        Args:
            results: list of RunResult
            save_path: optional path to save the figure
        """
        _require_matplotlib()

        fig, ax = plt.subplots(figsize=(10, 7))

        names = []
        for r in results:
            for t in r.tests:
                key = f"{t.stream}:{t.name}"
                if key not in names:
                    names.append(key)

        width = 0.8 / max(len(results), 1)
        positions = np.arange(len(names))
        for i, r in enumerate(results):
            by_key = {f"{t.stream}:{t.name}": t.p_value for t in r.tests}
            heights = [by_key.get(k, 0.0) for k in names]
            label = f"r,q,l={r.config.params_1}"
            if r.config.params_2 is not None:
                label += f" / {r.config.params_2}"
            ax.bar(positions + i * width, heights, width=width, label=label)

        if results:
            ax.axhline(results[0].config.alpha, color='tab:red', linestyle='--', label='alpha')
        ax.set_xticks(positions + width * (len(results) - 1) / 2)
        ax.set_xticklabels(names, rotation=30, ha='right')
        ax.set_ylabel('p-value')
        ax.set_title('Test p-values')
        ax.legend()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')

        return fig
