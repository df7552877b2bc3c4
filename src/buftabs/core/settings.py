"""
Project-wide constants that are unlikely to change at runtime.
"""

# Names the workspace integration registers with the list host
WORKSPACE_FILTER = "workspace"
WORKSPACE_GROUPING = "workspaces"
WORKSPACE_SORTER = "workspace"
NAME_SORTER = "name"

# Column headers
TAB_COLUMN = "Tab"
TAB_COUNT_COLUMN = "#Tabs"
