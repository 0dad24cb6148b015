"""Unit tests for the runtime symbol loader."""

import sys

import pytest

from bootmap.runtime import loader


class TestRequireFile:
    """Tests for require_file."""

    def test_loads_once(self, project_root):
        """Test a file is executed once and cached in sys.modules."""
        from tests.fixtures import LOAD_LOG

        first = loader.require_file(str(project_root / "boot.py"))
        second = loader.require_file(str(project_root / "src" / ".." / "boot.py"))
        assert first is second
        assert LOAD_LOG == ["boot"]
        assert sys.modules[loader.module_name_for(str(project_root / "boot.py"))] is first

    def test_failed_load_not_cached(self, project_root):
        """Test a file raising during import can be retried."""
        broken = project_root / "broken.py"
        broken.write_text("raise RuntimeError('boom')\n")
        with pytest.raises(RuntimeError):
            loader.require_file(str(broken))
        assert loader.module_name_for(str(broken)) not in sys.modules


class TestResolve:
    """Tests for resolve and fallback handling."""

    def test_resolves_mapped_symbol(self, project_root):
        """Test a mapped symbol is loaded from its file."""
        loader.set_paths({"class": {"Foo": "src/Foo.py"}}, str(project_root) + "/")
        assert loader.resolve("class", "Foo").__name__ == "Foo"

    def test_mapped_file_without_symbol(self, project_root):
        """Test a mapped file lacking the attribute is a lookup failure."""
        loader.set_paths({"class": {"Nope": "src/Foo.py"}}, str(project_root) + "/")
        with pytest.raises(loader.SymbolNotFoundError):
            loader.resolve("class", "Nope")

    def test_failure_slot_before_fallbacks(self):
        """Test the failure slot is consulted before fallback loaders."""
        calls = []
        loader.register_fallback(lambda kind, name: calls.append("fallback") or "fb")
        loader.set_paths(
            {loader.FAILURE_SLOT: lambda kind, name: calls.append("slot")}, "/proj/"
        )
        assert loader.resolve("function", "thing") == "fb"
        assert calls == ["slot", "fallback"]

    def test_failure_kind_is_a_map_miss(self):
        """Test resolving the reserved kind goes to the handler, not the slot."""
        calls = []

        def handle_failure(kind, name):
            calls.append((kind, name))

        loader.set_paths({loader.FAILURE_SLOT: handle_failure}, "/proj/")
        with pytest.raises(loader.SymbolNotFoundError):
            loader.resolve(loader.FAILURE_SLOT, "Anything")
        assert calls == [(loader.FAILURE_SLOT, "Anything")]

    def test_non_table_entry_is_a_map_miss(self):
        """Test a kind whose entry is not a mapping falls through."""
        loader.set_paths({"class": "src/Foo.py"}, "/proj/")
        with pytest.raises(loader.SymbolNotFoundError):
            loader.resolve("class", "Foo")

    def test_disable_fallback_loaders(self):
        """Test disabled fallbacks are no longer consulted."""
        loader.register_fallback(lambda kind, name: "fb")
        loader.disable_fallback_loaders()
        with pytest.raises(LookupError):
            loader.resolve("class", "Anything")

    def test_not_found_error_fields(self):
        """Test the not-found error carries kind and name."""
        with pytest.raises(loader.SymbolNotFoundError) as exc_info:
            loader.resolve("constant", "MISSING")
        assert exc_info.value.kind == "constant"
        assert exc_info.value.name == "MISSING"

    def test_reset(self):
        """Test reset clears map, root and fallbacks."""
        loader.set_paths({"class": {}}, "/proj/")
        loader.register_fallback(lambda kind, name: None)
        loader.reset()
        assert loader.get_map() == {}
        assert loader.get_root() is None
        assert loader.fallback_loaders() == []


class TestFailureHandler:
    """Tests for the FailureHandler base class."""

    def test_enabled_by_default(self):
        """Test handlers are enabled unless they override is_enabled."""

        class Handler(loader.FailureHandler):
            def handle_failure(self, kind, name):
                return None

        assert Handler.is_enabled() is True
        Handler().initialize()

    def test_abstract(self):
        """Test handle_failure must be implemented."""
        with pytest.raises(TypeError):
            loader.FailureHandler()
