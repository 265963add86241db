from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import unicodedata
from .config import Configuration
from .errors import StyleError
from .styles import Style, Styler

log = logging.getLogger(__name__)

#: Name of the shell variable holding the shortened working directory
PWD_VAR = "SHORT_PWD"

#: Name of the shell variable holding the current Git branch
BRANCH_VAR = "FANCY_PS1_BRANCH"

#: Prefixes of $TERM values for terminals that accept a window title in the
#: prompt
TITLE_TERMS = ("xterm", "rxvt")


class Segment(Enum):
    """
    The segments of the prompt, in display order.  Each segment's value is
    the suffix of its keys in the configuration file.
    """

    USER = "user"
    HOST = "host"
    PWD = "pwd"
    GIT = "git"
    INPUT = "input"


@dataclass
class PromptSegment:
    segment: Segment
    style: Style
    #: The segment's text, including the shell placeholders to expand
    text: str
    visible: bool = True


@dataclass
class PromptComposer:
    """
    Builds the styled prompt templates for a shell from a `Configuration`.
    The templates contain shell placeholders for the user, host, shortened
    working directory and Git branch, which the shell fills in each time it
    displays the prompt.
    """

    config: Configuration
    styler: Styler
    #: The terminal type (:envvar:`TERM`) the prompt will be shown in
    term: str | None = None

    def style(self, segment: Segment) -> Style:
        """
        Resolve the configured style for ``segment``.  If a color or effect
        name is not recognized, a warning is logged and an unstyled `Style` is
        returned instead.
        """
        fg, bg, effect = self.config.style_names(segment.value)
        try:
            return Style.parse(fg, bg, effect)
        except StyleError as e:
            log.warning("%s; not styling %s segment", e, segment.value)
            return Style()

    def text(self, segment: Segment) -> str:
        if segment is Segment.USER:
            return f" {self.styler.user} "
        elif segment is Segment.HOST:
            return f" {self.styler.host} "
        elif segment is Segment.PWD:
            return f" {self.styler.var(PWD_VAR)} "
        elif segment is Segment.GIT:
            return f" {self.styler.var(BRANCH_VAR)} "
        else:
            # The user's input is typed in the style of this segment
            return " "

    def segments(self, git: bool) -> list[PromptSegment]:
        """
        Return the segments of the prompt in display order, including hidden
        ones.  The Git segment is only included at all if ``git`` is true.
        """
        segs = []
        for seg in Segment:
            if seg is Segment.GIT and not git:
                continue
            segs.append(
                PromptSegment(
                    segment=seg,
                    style=self.style(seg),
                    text=self.text(seg),
                    visible=seg is Segment.INPUT or self.config.shows(seg.value),
                )
            )
        return segs

    def separator(self) -> str:
        sep = self.config.separator_char
        # Powerline glyphs live in the Private Use Area, which isprintable()
        # rejects
        if len(sep) != 1 or not (
            sep.isprintable() or unicodedata.category(sep) == "Co"
        ):
            raise StyleError(f"Invalid separator character: {sep!r}")
        return self.styler.escape(sep)

    def template(self, git: bool) -> str:
        """
        Construct & return the prompt template, with or without the Git
        segment.

        :raises StyleError: if the separator character is not a single
            printable character
        """
        sep = self.separator()
        ps1 = ""
        if self.term is not None and self.term.startswith(TITLE_TERMS):
            ps1 += self.styler.title(f"{self.styler.user}:{self.styler.var(PWD_VAR)}")
        if self.config.enable_vertical_padding:
            ps1 += self.styler.newline
        prev: Style | None = None
        for seg in self.segments(git):
            if not seg.visible:
                continue
            if prev is not None:
                # The arrow takes the color of the previous segment's
                # background and is drawn on the next segment's background,
                # except before the input, where it is drawn on the terminal's
                # background.
                bg = None if seg.segment is Segment.INPUT else seg.style.bg
                ps1 += self.styler.code(Style(fg=prev.bg, bg=bg)) + sep
            ps1 += self.styler.code(seg.style) + seg.text
            prev = seg.style
        return ps1

    def templates(self) -> tuple[str, str]:
        """
        Return the prompt templates to use outside of a Git repository and
        inside one, respectively
        """
        plain = self.template(git=False)
        with_git = self.template(git=True) if self.config.show_git else plain
        return (plain, with_git)

    def render(self, branch: str) -> str:
        """Return the template appropriate for the given Git branch"""
        return self.template(git=bool(branch) and self.config.show_git)


def fallback_template(styler: Styler) -> str:
    """
    Return an unstyled prompt showing just the shortened working directory,
    for when the styled prompt cannot be built
    """
    return f"{styler.var(PWD_VAR)} {styler.prompt_suffix} "
