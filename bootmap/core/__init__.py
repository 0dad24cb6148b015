"""Core bootmap modules.

This package contains:
- builder: the Builder contract and a manifest-backed Builder
- writer: path resolution, map serialization and bootstrap emission
"""
