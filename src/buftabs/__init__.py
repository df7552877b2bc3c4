"""
buftabs: workspace (tab) awareness for a buffer list.

Documents may belong to any number of named workspaces. This package answers
membership queries against a live workspace source and derives the filter,
grouping, sort order and columns a buffer list needs from them.
"""

__version__ = "0.1.0"
