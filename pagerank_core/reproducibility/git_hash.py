"""Git hash capture with dirty-tree detection.

Stored with written results so a set of scores can be traced back to the
code version that computed it.
"""

import subprocess


def _git_succeeds(*args: str) -> bool:
    try:
        subprocess.check_output(["git", *args], stderr=subprocess.DEVNULL)
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash() -> str:
    """Short SHA of HEAD, suffixed with ``-dirty`` for uncommitted changes.

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout or
        when git is not installed.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"

    # Unstaged, then staged changes
    if not _git_succeeds("diff", "--quiet") or not _git_succeeds(
        "diff", "--quiet", "--cached"
    ):
        sha += "-dirty"

    return sha
