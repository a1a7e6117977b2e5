"""File-system helpers: copying trees, creating directories, searching PATH."""

from __future__ import annotations

import logging
import os
import stat
from typing import BinaryIO

_log = logging.getLogger(__name__)

_CHUNK_SIZE = 4096


def copy_dir(path_from: str, path_to: str) -> None:
    """Recursively copy a directory, keeping file modes and symbolic links.

    Raises OSError if anything cannot be read, created or copied.
    """
    with os.scandir(path_from) as entries:
        dir_mode = os.lstat(path_from).st_mode
        safe_create_dir(path_to, None, stat.S_IMODE(dir_mode))

        for entry in entries:
            new_from = os.path.join(path_from, entry.name)
            new_to = os.path.join(path_to, entry.name)
            st = os.lstat(new_from)

            if stat.S_ISDIR(st.st_mode):
                copy_dir(new_from, new_to)
            elif stat.S_ISLNK(st.st_mode):
                os.symlink(get_symlink_target(new_from), new_to)
            elif stat.S_ISREG(st.st_mode):
                written = copy_file(new_to, new_from, st.st_mode & 0o777)
                if written != st.st_size:
                    raise OSError(
                        f"cannot copy from '{new_from}' to '{new_to}'; "
                        f"copied {written} of {st.st_size} bytes"
                    )
            else:
                raise OSError(
                    f"cannot copy from '{new_from}' to '{new_to}'; unexpected file"
                )


def copy_file(dest: str, src: str, mode: int) -> int:
    """Copy ``src`` to a new file ``dest`` created with ``mode``.

    The destination must not already exist. Returns the number of bytes written.
    """
    if src == dest:
        raise ValueError(f"cannot copy '{src}' onto itself")

    with open(src, "rb") as src_file:
        fd = os.open(dest, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        with os.fdopen(fd, "wb") as dest_file:
            written = copy_stream(dest_file, src_file)

    _log.debug("file copied from '%s' to '%s'", src, dest)
    return written


def copy_stream(dest: BinaryIO, src: BinaryIO) -> int:
    """Copy all remaining data from ``src`` to ``dest``; return the byte count."""
    if src is dest:
        raise ValueError("source and destination streams are the same")

    written = 0
    while chunk := src.read(_CHUNK_SIZE):
        dest.write(chunk)
        written += len(chunk)
    return written


def get_symlink_target(symlink_path: str) -> str:
    """Return the path a symbolic link points to."""
    return os.readlink(symlink_path)


def get_cwd() -> str:
    """Return the current working directory."""
    return os.getcwd()


def safe_create_dir(base_path: str, dir: str | None, mode: int) -> str:
    """Create ``base_path/dir`` (or ``base_path``) unless it already exists.

    Returns the path of the directory.
    """
    path = f"{base_path}/{dir}" if dir else base_path
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        _log.warning("directory '%s' already exists", path)
    else:
        _log.debug("created new directory '%s'", path)
    return path


def find_in_path(file: str) -> str | None:
    """Search $PATH for an executable named ``file``, as execvp would.

    An empty PATH entry stands for the current directory.
    """
    search_path = os.environ.get("PATH")
    if not search_path:
        return None

    for directory in search_path.split(":"):
        candidate = f"{directory}/{file}" if directory else file
        if is_executable(candidate):
            return candidate
    return None


def is_executable(name: str) -> bool:
    """Return True if ``name`` is a regular file executable by its owner."""
    try:
        st = os.stat(name)
    except OSError:
        return False
    return stat.S_ISREG(st.st_mode) and bool(st.st_mode & stat.S_IXUSR)


def set_cloexec(fd: int) -> None:
    """Mark ``fd`` to be closed when a new program is executed."""
    os.set_inheritable(fd, False)