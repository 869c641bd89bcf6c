from __future__ import annotations
import os
import pwd
from typing import Mapping, Optional, Sequence, Tuple

DEFAULT_DIR = "~/files"


def home_directory(environ: Optional[Mapping[str, str]] = None) -> str:
    """``$HOME`` if set, otherwise the password database entry of the current user."""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home:
        return home
    return pwd.getpwuid(os.getuid()).pw_dir


def expand_home(path: str, environ: Optional[Mapping[str, str]] = None) -> str:
    if not path.startswith("~"):
        return path
    if path == "~" or path.startswith("~" + os.sep):
        return home_directory(environ) + path[1:]
    # ~user/...
    return os.path.expanduser(path)


def is_directory(path: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    try:
        return os.path.isdir(expand_home(path, environ))
    except KeyError:
        # no password entry to expand ~ against
        return False


def resolve_arguments(
    positionals: Sequence[str],
    default_dir: str = DEFAULT_DIR,
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[str, str, Optional[str]]:
    """Split one or two positionals into ``(word, directory, ignored)``.

    Whichever argument names an existing directory is the directory and the
    other one is the word. If neither does, the first argument is the word,
    the default directory is used and the second argument is returned as
    ``ignored``.
    """
    if len(positionals) == 1:
        return positionals[0], default_dir, None
    if len(positionals) != 2:
        raise ValueError("expected one or two positional arguments")

    first, second = positionals
    if is_directory(first, environ):
        return second, first, None
    if is_directory(second, environ):
        return first, second, None
    return first, default_dir, second
