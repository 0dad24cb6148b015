"""Errors raised while configuring and emitting a bootstrap module."""

from typing import Optional


class BootmapError(Exception):
    """Base class for all bootmap emission errors."""

    pass


class ConfigurationError(BootmapError):
    """Raised when the writer configuration is invalid."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration field was never set."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required configuration: {field}")


class RootNotSetError(ConfigurationError):
    """Raised when a path is resolved before the project root is configured."""

    def __init__(self):
        super().__init__("Project root must be set before resolving paths")


class InvalidFailureHandlerError(ConfigurationError):
    """Raised when the failure handler is not a dotted Python name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Failure handler must be a fully-qualified name like "
            f"'package.module.Handler', got {name!r}"
        )


class ReservedKindError(ConfigurationError):
    """Raised when the autoload map uses the reserved failure slot as a kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Symbol kind {kind!r} is reserved for the failure handler")


class PathOutsideRootError(BootmapError):
    """Raised when a path canonicalizes outside the project root."""

    def __init__(self, path: str, root: str):
        self.path = path
        self.root = root
        super().__init__(f"Path {path} is not inside root {root}")


class FilesystemError(BootmapError):
    """Raised when canonicalizing or writing a path fails."""

    def __init__(self, path: str, cause: Optional[OSError] = None):
        self.path = str(path)
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"Filesystem error for {self.path}{detail}")
