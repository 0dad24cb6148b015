"""bootmap: compile autoload maps into a generated bootstrap module.

This package provides tools for:
- Resolving project files relative to a canonical project root
- Serializing a symbol-to-file autoload map into a Python literal
- Emitting an idempotent ``autoload.py`` bootstrap module plus legacy shims
- Resolving symbols lazily at runtime through ``bootmap.runtime.loader``

The set of files and the autoload map are supplied by a Builder; bootmap
does not scan source trees itself.

Example usage:
    >>> from bootmap.core.writer import BootstrapWriter, WriterConfigBuilder
    >>>
    >>> config = (
    ...     WriterConfigBuilder()
    ...     .root("/proj")
    ...     .dev(True)
    ...     .files(["/proj/boot.py"])
    ...     .autoload_map({"class": {"Foo": "/proj/src/foo.py"}})
    ...     .build()
    ... )
    >>> BootstrapWriter(config).write_to_directory("/proj/vendor")
"""

__version__ = "0.1.0"
