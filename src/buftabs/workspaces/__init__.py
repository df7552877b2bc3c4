"""
Workspace collection owned outside the buffer list.

This package provides the in-memory workspace manager the membership queries
read from, and a loader building one from a JSON state snapshot.
"""
