"""Exceptions raised by ffdiag.

The parsers never raise on malformed ffmpeg output. These exceptions cover
the places where a caller asked for something that cannot be delivered:
a required tool that is not installed, an invalid filter graph file, or
an invalid configuration.
"""


class FfdiagError(Exception):
    """Base exception for ffdiag errors.

    All ffdiag exceptions inherit from this class, allowing callers
    to catch them with a single except clause if desired.
    """


class ToolNotFoundError(FfdiagError):
    """Raised when a required executable cannot be resolved.

    Attributes:
        tool_name: Name of the executable that was looked up.
    """

    def __init__(self, tool_name: str, hint: str | None = None) -> None:
        """Initialize the exception.

        Args:
            tool_name: Name of the executable that was looked up.
            hint: Optional installation hint appended to the message.
        """
        self.tool_name = tool_name
        message = f"Required tool not available: {tool_name}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class FilterGraphError(FfdiagError):
    """Error while loading or validating a filter graph description."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ConfigError(FfdiagError):
    """Raised when a configuration file cannot be read or is invalid."""
