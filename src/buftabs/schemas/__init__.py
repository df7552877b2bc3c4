"""Pydantic schemas shared across buftabs."""
