from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Protocol, Union
from .errors import UnknownColor, UnknownEffect

ESC = "\x1B"


class Color(Enum):
    """
    An enumeration of the named colors.  Each color's value equals its xterm
    number.
    """

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHT_GRAY = 7
    DARK_GRAY = 8
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_MAGENTA = 13
    LIGHT_CYAN = 14
    WHITE = 15

    def asfg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        c = self.value
        return c + 30 if c < 8 else c + 82

    def asbg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the background
        color
        """
        return self.asfg() + 10


class Effect(Enum):
    """Text effects.  Each effect's value is its SGR parameter."""

    RESET = "0"
    BOLD = "1"
    DIM = "2"
    ITALIC = "3"
    UNDERLINE = "4"
    BLINK = "5"
    INVERSE = "7"
    HIDE = "8"


#: A named color or a color number from the 256-color palette
ColorSpec = Union[Color, int]


def parse_color(name: str) -> ColorSpec | None:
    """
    Convert a color name like ``"light-blue"`` or a number from ``0`` to
    ``255`` into a color.  ``"none"`` (or the empty string) yields `None`.

    :raises UnknownColor: if ``name`` is not a supported color
    """
    key = name.strip().lower()
    if key in ("", "none"):
        return None
    if key.isdigit():
        n = int(key)
        if n <= 255:
            return n
        raise UnknownColor(name)
    try:
        return Color[key.upper().replace("-", "_").replace(" ", "_")]
    except KeyError:
        raise UnknownColor(name) from None


def parse_effect(name: str) -> Effect | None:
    """
    Convert an effect name like ``"bold"`` into an `Effect`.  ``"none"`` (or
    the empty string) yields `None`.

    :raises UnknownEffect: if ``name`` is not a supported effect
    """
    key = name.strip().lower()
    if key in ("", "none"):
        return None
    try:
        return Effect[key.upper().replace("-", "_")]
    except KeyError:
        raise UnknownEffect(name) from None


def fg_param(color: ColorSpec) -> str:
    if isinstance(color, Color):
        return str(color.asfg())
    return f"38;5;{color}"


def bg_param(color: ColorSpec) -> str:
    if isinstance(color, Color):
        return str(color.asbg())
    return f"48;5;{color}"


@dataclass(frozen=True)
class Style:
    fg: ColorSpec | None = None
    bg: ColorSpec | None = None
    effect: Effect | None = None

    @classmethod
    def parse(cls, fg: str, bg: str = "none", effect: str = "none") -> Style:
        """
        Construct a `Style` from configuration-file names.

        :raises UnknownColor: if ``fg`` or ``bg`` is not a supported color
        :raises UnknownEffect: if ``effect`` is not a supported effect
        """
        return cls(
            fg=parse_color(fg), bg=parse_color(bg), effect=parse_effect(effect)
        )

    def as_params(self) -> list[str]:
        # Every sequence starts by resetting all attributes so that a style
        # without a background falls back to the terminal's own background.
        params = ["0"]
        if self.effect is not None and self.effect is not Effect.RESET:
            params.append(self.effect.value)
        if self.fg is not None:
            params.append(fg_param(self.fg))
        if self.bg is not None:
            params.append(bg_param(self.bg))
        return params

    def sgr(self) -> str:
        """Return the raw SGR escape sequence for the style"""
        return f"{ESC}[{';'.join(self.as_params())}m"


class Styler(Protocol):
    #: The prompt symbol used by the unstyled fallback prompt
    prompt_suffix: ClassVar[str]

    #: Line break within a prompt string
    newline: ClassVar[str]

    def code(self, style: Style) -> str: ...

    def reset(self) -> str: ...

    def escape(self, s: str) -> str: ...

    @property
    def user(self) -> str: ...

    @property
    def host(self) -> str: ...

    def var(self, name: str) -> str: ...

    def title(self, s: str) -> str: ...


class BashStyler:
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    prompt_suffix: ClassVar[str] = r"\$"
    newline: ClassVar[str] = r"\n"
    user: ClassVar[str] = r"\u"
    host: ClassVar[str] = r"\h"

    def code(self, style: Style) -> str:
        r"""
        Return the escape sequence for ``style``, wrapped in ``\[ ... \]`` so
        that Bash does not count it towards the length of the prompt
        """
        return rf"\[\e[{';'.join(style.as_params())}m\]"

    def reset(self) -> str:
        return r"\[\e[0m\]"

    def escape(self, s: str) -> str:
        """
        Escape characters in the string ``s`` that have special meaning in a
        PS1 variable
        """
        return s.replace("\\", r"\\")

    def var(self, name: str) -> str:
        return f"${{{name}}}"

    def title(self, s: str) -> str:
        return rf"\[\e]0;{s}\a\]"


class ZshStyler:
    """Class for escaping & styling strings for use in zsh's PS1 variable"""

    prompt_suffix: ClassVar[str] = "%#"
    newline: ClassVar[str] = "\n"
    user: ClassVar[str] = "%n"
    host: ClassVar[str] = "%m"

    def code(self, style: Style) -> str:
        """
        Return the escape sequence for ``style``, wrapped in ``%{ ... %}`` so
        that zsh treats it as zero-width
        """
        return f"%{{{style.sgr()}%}}"

    def reset(self) -> str:
        return f"%{{{ESC}[0m%}}"

    def escape(self, s: str) -> str:
        return s.replace("%", "%%")

    def var(self, name: str) -> str:
        # Requires the PROMPT_SUBST option
        return f"${{{name}}}"

    def title(self, s: str) -> str:
        return f"%{{{ESC}]0;{s}\a%}}"


@dataclass
class ANSIStyler:
    """
    Class for styling strings for display immediately in the terminal.
    Placeholders that a shell would expand are replaced by the entries of
    ``values`` instead.
    """

    values: Mapping[str, str] = field(default_factory=dict)

    prompt_suffix: ClassVar[str] = "$"
    newline: ClassVar[str] = "\n"

    def code(self, style: Style) -> str:
        return style.sgr()

    def reset(self) -> str:
        return f"{ESC}[0m"

    def escape(self, s: str) -> str:
        return s

    @property
    def user(self) -> str:
        return self.values.get("user", "")

    @property
    def host(self) -> str:
        return self.values.get("host", "")

    def var(self, name: str) -> str:
        return self.values.get(name, "")

    def title(self, s: str) -> str:
        return f"{ESC}]0;{s}\a"

