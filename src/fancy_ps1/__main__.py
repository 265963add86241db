from __future__ import annotations
import argparse
import getpass
import logging
import os
import shlex
import socket
import sys
from . import __version__
from .config import load_user_config
from .errors import Ps1Error
from .git import GIT_TIMEOUT
from .hook import Redraw, init_script
from .paths import MAX_PWD_LEN
from .prompt import BRANCH_VAR, PWD_VAR, PromptComposer, fallback_template
from .styles import ANSIStyler, BashStyler, Style, ZshStyler

log = logging.getLogger("fancy_ps1")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="fancy-ps1",
        description="Colorful powerline-style bash/zsh prompt",
    )
    parser.add_argument(
        "--ansi",
        action="store_const",
        dest="shell",
        const="ansi",
        help="Format prompt for direct display (implied by `show`)",
    )
    parser.add_argument(
        "--bash",
        action="store_const",
        dest="shell",
        const="bash",
        help="Set up the prompt for Bash (default)",
    )
    parser.add_argument(
        "--zsh",
        action="store_const",
        dest="shell",
        const="zsh",
        help="Set up the prompt for zsh",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Read configuration from FILE instead of the default locations",
    )
    parser.add_argument(
        "-n",
        "--max-length",
        type=positive_int,
        metavar="LEN",
        help="Shorten the working directory to LEN characters  [refresh only]",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not look up the current Git branch  [refresh only]",
    )
    parser.add_argument(
        "--git-timeout",
        type=float,
        metavar="SECONDS",
        default=GIT_TIMEOUT,
        help=(
            "Omit the Git branch if Git takes longer than SECONDS to answer"
            f"  [default: {GIT_TIMEOUT}]"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more details to stderr (may be repeated)",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["init", "refresh", "show"],
        default="init",
        help=(
            "init: print shell code that installs the prompt (default);"
            " refresh: print the per-prompt variable assignments;"
            " show: display the prompt for the current directory"
        ),
    )
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if args.command == "refresh":
        s = Redraw.get(
            max_len=args.max_length or MAX_PWD_LEN,
            git=not args.no_git,
            git_timeout=args.git_timeout,
        ).assignments(args.shell or "bash")
    elif args.command == "show" or args.shell == "ansi":
        s = show(args.config, args.git_timeout)
    else:
        s = init(args.shell or "bash", args.config, args.git_timeout)
    sys.stdout.write(s)


def init(shell: str, config_file: str | None, git_timeout: float) -> str:
    """
    Return the shell code that sets up the prompt for the rest of the session
    """
    config = load_user_config(config_file)
    styler = BashStyler() if shell == "bash" else ZshStyler()
    composer = PromptComposer(config, styler, term=os.environ.get("TERM"))
    try:
        plain, with_git = composer.templates()
    except Ps1Error as e:
        log.warning("%s; using plain prompt", e)
        plain = with_git = fallback_template(styler)
    refresh = [
        sys.executable,
        "-m",
        "fancy_ps1",
        f"--{shell}",
        "--max-length",
        str(config.max_pwd_length),
        "--git-timeout",
        str(git_timeout),
    ]
    if not config.show_git:
        refresh.append("--no-git")
    refresh.append("refresh")
    return init_script(
        shell,
        plain=plain,
        with_git=with_git,
        refresh_cmd=shlex.join(refresh),
        reset=Style().sgr(),
    )


def show(config_file: str | None, git_timeout: float) -> str:
    """Return the prompt for the current directory, ready for display"""
    config = load_user_config(config_file)
    redraw = Redraw.get(
        max_len=config.max_pwd_length, git=config.show_git, git_timeout=git_timeout
    )
    styler = ANSIStyler(
        {
            "user": getpass.getuser(),
            "host": socket.gethostname().split(".")[0],
            PWD_VAR: redraw.short_pwd,
            BRANCH_VAR: redraw.branch,
        }
    )
    try:
        ps1 = PromptComposer(config, styler).render(redraw.branch)
    except Ps1Error as e:
        log.warning("%s; using plain prompt", e)
        ps1 = fallback_template(styler)
    return ps1 + styler.reset() + "\n"


def positive_int(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {n}")
    return n


def configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


if __name__ == "__main__":
    main()
