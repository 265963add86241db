from __future__ import annotations
import logging
import os
import subprocess

log = logging.getLogger(__name__)

#: Default number of seconds to wait for Git before giving up on the branch
GIT_TIMEOUT = 3


def current_branch(
    cwd: str | os.PathLike[str] | None = None, timeout: float | None = GIT_TIMEOUT
) -> str:
    """
    Return the name of the branch currently checked out in the Git repository
    containing ``cwd`` (default: the current directory).

    If Git is not installed, if ``cwd`` is not inside a Git repository, if
    ``HEAD`` is detached, or if Git takes longer than ``timeout`` seconds to
    answer, ``current_branch()`` returns the empty string.

    On an unborn branch (a repository with no commits yet), the name of the
    branch is returned even though `git branch` lists nothing.
    """
    try:
        branch = git(
            "symbolic-ref", "--quiet", "--short", "HEAD", cwd=cwd, timeout=timeout
        )
    except FileNotFoundError:
        log.debug("Git is not installed; not showing branch")
        return ""
    except subprocess.TimeoutExpired:
        log.warning("Git took more than %s seconds; not showing branch", timeout)
        return ""
    if branch is None:
        # Not a repository, or HEAD is detached
        return ""
    return branch


def git(
    *args: str,
    cwd: str | os.PathLike[str] | None = None,
    timeout: float | None = None,
) -> str | None:
    """
    Run a Git command (suppressing stderr) and return its stdout with leading &
    trailing whitespace stripped.  If the command fails, return `None`.
    """
    try:
        return subprocess.run(
            ["git", *args],
            check=True,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            cwd=cwd,
            timeout=timeout,
        ).stdout.strip()
    except subprocess.CalledProcessError:
        return None
