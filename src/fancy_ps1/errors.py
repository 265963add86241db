from __future__ import annotations


class Ps1Error(Exception):
    """Base class for all errors raised by ``fancy-ps1``"""


class StyleError(Ps1Error, ValueError):
    """Raised when a style cannot be resolved to an escape sequence"""


class UnknownColor(StyleError):
    """Raised for a color name that is not in the palette"""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown color: {self.name!r}"


class UnknownEffect(StyleError):
    """Raised for a text effect name that is not supported"""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown text effect: {self.name!r}"


class MalformedConfig(Ps1Error):
    """
    Raised when a configuration file, or a single line of one, cannot be
    parsed
    """

    def __init__(self, path: str, msg: str, lineno: int | None = None) -> None:
        super().__init__(path, msg, lineno)
        self.path = path
        self.msg = msg
        self.lineno = lineno

    def __str__(self) -> str:
        where = self.path if self.lineno is None else f"{self.path}:{self.lineno}"
        return f"{where}: {self.msg}"
