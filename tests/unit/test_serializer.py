"""Unit tests for autoload map serialization."""

import ast
import os

import pytest

from bootmap.core.writer import (
    PathOutsideRootError,
    PathResolver,
    relativize_map,
    serialize_map,
)


class TestSerializeMap:
    """Tests for relativize_map and serialize_map."""

    def test_round_trip(self, project_root, autoload_map):
        """Test the literal evaluates to the relativized map."""
        resolver = PathResolver(str(project_root))
        literal = serialize_map(autoload_map, resolver)
        assert ast.literal_eval(literal) == {
            "class": {"Foo": "src/Foo.py"},
            "constant": {"ANSWER": "src/helpers.py"},
            "function": {"make_foo": "src/helpers.py"},
        }
        assert ast.literal_eval(literal) == relativize_map(autoload_map, resolver)

    def test_paths_rejoin_to_originals(self, project_root, autoload_map):
        """Test every relative leaf re-joined with root is the original file."""
        resolved = relativize_map(autoload_map, PathResolver(str(project_root)))
        for kind, names in resolved.items():
            for name, relative in names.items():
                rejoined = os.path.realpath(os.path.join(str(project_root), relative))
                assert rejoined == os.path.realpath(autoload_map[kind][name])

    def test_order_independent_of_insertion(self, project_root, autoload_map):
        """Test output is identical regardless of input dict ordering."""
        reversed_map = {
            kind: dict(reversed(list(names.items())))
            for kind, names in reversed(list(autoload_map.items()))
        }
        reversed_map["class"]["Bar"] = str(project_root / "boot.py")
        forward_map = dict(autoload_map)
        forward_map["class"] = {"Bar": str(project_root / "boot.py"), **autoload_map["class"]}

        first = serialize_map(forward_map, PathResolver(str(project_root)))
        second = serialize_map(reversed_map, PathResolver(str(project_root)))
        assert first == second
        assert list(relativize_map(reversed_map, PathResolver(str(project_root)))) == [
            "class",
            "constant",
            "function",
        ]

    def test_outside_path_aborts(self, project_root, autoload_map, tmp_path):
        """Test one bad leaf aborts the whole serialization."""
        outside = tmp_path / "stray.py"
        outside.write_text("")
        autoload_map["class"]["Stray"] = str(outside)
        with pytest.raises(PathOutsideRootError):
            serialize_map(autoload_map, PathResolver(str(project_root)))

    def test_shared_paths_resolved_once(self, project_root, autoload_map):
        """Test the same file used twice is canonicalized once."""
        resolver = PathResolver(str(project_root))
        relativize_map(autoload_map, resolver)
        stats = resolver.cache_info()
        assert stats.size == 2
        assert stats.hits == 1
