"""Custom exceptions for the terminal mode adapter."""


class ModetermError(Exception):
    """Base class for modeterm errors."""


class PreconditionError(ModetermError):
    """Exception raised when an operation needs a terminal-backed surface."""

    def __init__(self, operation: str, surface_name: str = ""):
        self.operation = operation
        self.surface_name = surface_name
        where = f" on '{surface_name}'" if surface_name else ""
        super().__init__(f"{operation} requires a terminal-backed surface{where}")


class ConfigurationError(ModetermError):
    """Exception raised when a remap table cannot be built."""

    def __init__(self, message: str, entry: tuple[object, object] | None = None):
        self.entry = entry
        super().__init__(message)
