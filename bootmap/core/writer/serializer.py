"""Autoload map serialization."""

from typing import Dict, Mapping

from .codegen import render_literal
from .resolver import PathResolver


def relativize_map(
    autoload_map: Mapping[str, Mapping[str, str]], resolver: PathResolver
) -> Dict[str, Dict[str, str]]:
    """
    Resolve every leaf path of an autoload map against the project root.

    Kinds and symbol names are inserted in sorted order so the result is
    identical across runs for the same logical map. Any resolution error
    propagates and aborts the whole map.
    """
    return {
        kind: {
            name: resolver.resolve(autoload_map[kind][name])
            for name in sorted(autoload_map[kind])
        }
        for kind in sorted(autoload_map)
    }


def serialize_map(
    autoload_map: Mapping[str, Mapping[str, str]],
    resolver: PathResolver,
    indent: int = 0,
) -> str:
    """Render the resolved autoload map as a Python dict literal."""
    return render_literal(relativize_map(autoload_map, resolver), indent)
