"""Test fixtures for bootmap.

Provides temporary project trees and failure handlers.
"""

from .projects import LOAD_LOG, create_project, project_map

__all__ = [
    "LOAD_LOG",
    "create_project",
    "project_map",
]
