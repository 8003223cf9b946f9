"""
Plotting application package: chart rendering for recurrence trajectories.
"""

from .charts import SERIES_STYLE, chart_panels, render_chart

__all__ = ['SERIES_STYLE', 'chart_panels', 'render_chart']
