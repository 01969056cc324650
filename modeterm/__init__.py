"""modeterm: keep a modal editor and a terminal session in step."""

__version__ = "0.1.0"
