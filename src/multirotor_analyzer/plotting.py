"""
Multirotor Analyzer Plotting Module
===================================

Charts of a performance result: the range estimator and the motor
characteristics at full load.

Plot Types Available:
--------------------
- Range estimator: flight time and range with and without drag vs airspeed
- Motor characteristics: input power, efficiency, RPM, waste power and case
  temperature vs motor current

Classes:
--------
- MultirotorPlotter: Main class for generating performance plots

Usage:
-----
    from src.multirotor_analyzer.plotting import MultirotorPlotter

    plotter = MultirotorPlotter()
    fig = plotter.plot_performance(result)
    plt.show()
"""

from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .config import MultirotorAnalyzerConfig, DEFAULT_CONFIG
from .result import PerformanceResult


class MultirotorPlotter:
    """
    Performance result visualization class.

    Attributes:
    ----------
    config : MultirotorAnalyzerConfig
        Configuration object containing plot settings.

    Example:
    -------
        plotter = MultirotorPlotter()

        plotter.plot_range_curve(result)
        plotter.plot_motor_curve(result)

        plt.show()
    """

    # =========================================================================
    # Default Plot Styling
    # =========================================================================

    RANGE_SERIES = [
        ("flight_time_no_drag", "Flight Time (no drag)", "#FDE047", "--"),
        ("range_no_drag", "Range (no drag)", "#FB923C", "--"),
        ("range_incl_drag", "Range incl. std. Drag", "#22D3EE", "-"),
        ("flight_time_incl_drag", "Flight Time incl. std. Drag", "#A5F3FC", "-"),
    ]

    MOTOR_SERIES = [
        ("input_power", "el. Power [in 1W]", "#FBBF24", 1.0),
        ("efficiency", "Efficiency [%]", "#38BDF8", 1.0),
        ("rpm", "max. Revolutions [in 100rpm]", "#C084FC", 0.01),
        ("waste_power", "waste Power [in 1W]", "#FB7185", 1.0),
        ("temperature", "Motor Case Temp. [°C]", "#4ADE80", 1.0),
    ]

    OVERLIMIT_COLOR = "#EF4444"
    DEFAULT_GRID_ALPHA = 0.3
    DEFAULT_LEGEND_LOC = "upper left"

    def __init__(self, config: Optional[MultirotorAnalyzerConfig] = None):
        """
        Initialize the MultirotorPlotter with configuration settings.

        Parameters:
        ----------
        config : MultirotorAnalyzerConfig, optional
            Configuration object. Uses default if not specified.
        """
        self.config = config if config is not None else DEFAULT_CONFIG

    def _get_axes(self, ax: Optional[Axes], figsize: Optional[Tuple[int, int]]):
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize or self.config.figure_size)
        else:
            fig = ax.get_figure()
        return fig, ax

    # =========================================================================
    # Range Estimator
    # =========================================================================

    def plot_range_curve(
        self,
        result: PerformanceResult,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot flight time and range versus airspeed.

        Parameters:
        ----------
        result : PerformanceResult
            Calculation result.

        figsize : tuple, optional
            Figure size (width, height) in inches.

        ax : Axes, optional
            Existing axes to plot on.

        Returns:
        -------
        Figure
            Matplotlib figure object.
        """
        fig, ax = self._get_axes(ax, figsize)
        df = result.range_dataframe()

        for column, label, color, style in self.RANGE_SERIES:
            ax.plot(df["speed"], df[column], style, color=color,
                    linewidth=2, label=label)

        ax.set_xlabel("Air Speed (km/h)")
        ax.set_ylabel("Time (min) / Range (km)")
        ax.set_title("Range Estimator")
        ax.grid(True, alpha=self.DEFAULT_GRID_ALPHA)
        ax.legend(loc=self.DEFAULT_LEGEND_LOC, fontsize=8)

        return fig

    # =========================================================================
    # Motor Characteristics
    # =========================================================================

    def plot_motor_curve(
        self,
        result: PerformanceResult,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot motor characteristics versus motor current.

        RPM is drawn in units of 100 rpm so all series share one axis.
        The temperature above the case limit is drawn as a filled area.

        Parameters:
        ----------
        result : PerformanceResult
            Calculation result.

        figsize : tuple, optional
            Figure size (width, height) in inches.

        ax : Axes, optional
            Existing axes to plot on.

        Returns:
        -------
        Figure
            Matplotlib figure object.
        """
        fig, ax = self._get_axes(ax, figsize)
        df = result.motor_dataframe()

        for column, label, color, scale in self.MOTOR_SERIES:
            ax.plot(df["current"], df[column] * scale, color=color,
                    linewidth=2, label=label)

        ax.fill_between(
            df["current"], df["temperature_over_limit"],
            color=self.OVERLIMIT_COLOR, alpha=0.5,
            label="Motor Case Temp. overlimit [°C]",
        )

        ax.set_xlabel("Current (A)")
        ax.set_title("Motor Characteristics (at full load)")
        ax.grid(True, alpha=self.DEFAULT_GRID_ALPHA)
        ax.legend(loc=self.DEFAULT_LEGEND_LOC, fontsize=8)

        return fig

    def plot_performance(
        self,
        result: PerformanceResult,
        figsize: Optional[Tuple[int, int]] = None
    ) -> Figure:
        """
        Plot both charts side by side.

        Returns:
        -------
        Figure
            Matplotlib figure with two axes.
        """
        fig, (ax_range, ax_motor) = plt.subplots(
            1, 2, figsize=figsize or self.config.figure_size
        )

        self.plot_range_curve(result, ax=ax_range)
        self.plot_motor_curve(result, ax=ax_motor)

        fig.tight_layout()
        return fig
