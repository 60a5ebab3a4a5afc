"""Exception hierarchy for gerberkit.

File and archive I/O failures are not wrapped: the underlying ``OSError``
reaches the caller unchanged.
"""


class GerberKitError(Exception):
    """Base exception for all gerberkit errors."""

    pass


class FontError(GerberKitError):
    """Errors related to font loading or lookup."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class FontNotFoundError(FontError):
    """Requested font is not registered."""

    def __init__(self, font_id: str, available: list[str] | None = None) -> None:
        self.font_id = font_id
        self.available = available or []
        message = f"Font '{font_id}' not found"
        if self.available:
            message += f" (available: {', '.join(sorted(self.available))})"
        super().__init__(message)


class GlyphError(GerberKitError):
    """Errors related to glyph outline data."""

    pass


class PathCommandError(GlyphError):
    """Malformed or unsupported glyph path data."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Bad path command {command!r}: {reason}")
