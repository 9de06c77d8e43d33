"""
Interactive dashboard of data science salaries.

Three linked views: mean salary per experience level, salary trends per
year, and a Sankey flow from experience level through job title to salary
range. Bar clicks and a year brush on the trend chart drive the flow
diagram.
"""

__version__ = "0.1.0"
