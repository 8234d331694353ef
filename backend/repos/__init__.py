"""
Repository layer for Inspector.

All SQL lives here and ONLY here. No database access outside this module.
"""

from backend.repos.component_repo import (
    ComponentRepo,
    MemoryComponentRepo,
    PostgresComponentRepo,
    get_component_repo,
)

__all__ = ["ComponentRepo", "MemoryComponentRepo", "PostgresComponentRepo", "get_component_repo"]
