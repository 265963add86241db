"""
Shell integration: the per-redraw state and the code that installs the prompt
in a shell session
"""

from __future__ import annotations
from dataclasses import dataclass
import os
from shlex import quote
from .git import GIT_TIMEOUT, current_branch
from .paths import MAX_PWD_LEN, shorten
from .prompt import BRANCH_VAR, PWD_VAR
from .styles import ZshStyler

#: Shell variable holding the template used outside of Git repositories
PLAIN_TEMPLATE_VAR = "FANCY_PS1_PLAIN"

#: Shell variable holding the template used inside Git repositories
GIT_TEMPLATE_VAR = "FANCY_PS1_GIT"

HOOK_FUNCTION = "__fancy_ps1_refresh"

RESET_FUNCTION = "__fancy_ps1_reset"

SHELLS = ("bash", "zsh")


@dataclass
class Redraw:
    """The values that change from one display of the prompt to the next"""

    #: The current working directory, shortened
    short_pwd: str

    #: The current Git branch, or the empty string if there is none
    branch: str

    @classmethod
    def get(
        cls,
        max_len: int = MAX_PWD_LEN,
        git: bool = True,
        git_timeout: float = GIT_TIMEOUT,
    ) -> Redraw:
        # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
        cwd = os.environ.get("PWD") or os.getcwd()
        # The branch is only looked up once per redraw so that the choice of
        # template and the branch displayed in it always agree.
        branch = current_branch(cwd, timeout=git_timeout) if git else ""
        return cls(short_pwd=shorten(cwd, max_len), branch=branch)

    def assignments(self, shell: str = "bash") -> str:
        """
        Return shell code that stores the values in the variables referenced
        by the prompt templates and selects the template to display.

        zsh expands prompt escapes in the values of variables substituted into
        the prompt, so for zsh any `%` in the values is escaped.
        """
        short_pwd, branch = self.short_pwd, self.branch
        if shell == "zsh":
            zsh = ZshStyler()
            short_pwd, branch = zsh.escape(short_pwd), zsh.escape(branch)
        template = GIT_TEMPLATE_VAR if self.branch else PLAIN_TEMPLATE_VAR
        return (
            f"{PWD_VAR}={quote(short_pwd)}\n"
            f"{BRANCH_VAR}={quote(branch)}\n"
            f'PS1="${template}"\n'
        )


def init_script(
    shell: str, plain: str, with_git: str, refresh_cmd: str, reset: str
) -> str:
    """
    Return the shell code that installs the prompt: it stores the two prompt
    templates in shell variables, registers ``refresh_cmd`` (whose output is
    evaluated) to run before every prompt, and arranges for the terminal's
    text attributes to be reset to ``reset`` before a command runs so that
    the input style does not leak into the command's output
    """
    if shell not in SHELLS:
        raise ValueError(f"Unsupported shell: {shell!r}")
    s = (
        f"{PLAIN_TEMPLATE_VAR}={quote(plain)}\n"
        f"{GIT_TEMPLATE_VAR}={quote(with_git)}\n"
        f"{HOOK_FUNCTION}() {{\n"
        f'    eval "$({refresh_cmd})"\n'
        "}\n"
        f"{RESET_FUNCTION}() {{\n"
        f"    printf '%s' {quote(reset)}\n"
        "}\n"
    )
    # Guard against registering the hooks twice when the init script is
    # evaluated again in the same session
    if shell == "bash":
        s += (
            f'case ";$PROMPT_COMMAND;" in *";{HOOK_FUNCTION};"*) ;; *)\n'
            f'    PROMPT_COMMAND="{HOOK_FUNCTION}${{PROMPT_COMMAND:+;'
            ' $PROMPT_COMMAND}";;\n'
            "esac\n"
            f"trap {RESET_FUNCTION} DEBUG\n"
        )
    else:
        s += (
            "setopt PROMPT_SUBST\n"
            f"(( ${{precmd_functions[(I){HOOK_FUNCTION}]}} ))"
            f" || precmd_functions+=( {HOOK_FUNCTION} )\n"
            f"(( ${{preexec_functions[(I){RESET_FUNCTION}]}} ))"
            f" || preexec_functions+=( {RESET_FUNCTION} )\n"
        )
    return s
