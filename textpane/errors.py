"""Exceptions raised by the textpane primitives."""


class TextPaneError(Exception):
    """Base class for all textpane errors."""


class InvalidPosition(TextPaneError):
    """A coordinate lies outside the valid range."""

    def __init__(self, x: int, y: int, message: str = "invalid point"):
        super().__init__(f"{message}: ({x}, {y})")
        self.x = x
        self.y = y


class LastLine(TextPaneError):
    """A merge was requested on the final line of the buffer."""

    def __init__(self, y: int):
        super().__init__(f"last line: {y}")
        self.y = y


class WrapWidthZero(TextPaneError):
    """Wrapping is enabled but the wrap width is not positive."""

    def __init__(self, width: int):
        super().__init__(f"wrap width must be positive, got {width}")
        self.width = width


class NotFound(TextPaneError):
    """A named view or group does not exist."""

    def __init__(self, name: str, what: str = "view"):
        super().__init__(f"unknown {what}: {name!r}")
        self.name = name
