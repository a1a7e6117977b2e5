"""Parsing raw git commit objects and pretty-printing chat messages."""

from __future__ import annotations

import enum
import re
import time
from dataclasses import dataclass, field
from typing import TextIO

from gitchat.oid import GIT_HEX_OBJECT_ID, git_str_to_oid

_WHITESPACE = " \t\n\r\v\f"
_INTEGER = re.compile(r"[ \t\n\r\v\f]*([+-]?\d+)")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

ANSI_COLOR_RED = "\x1b[31m"
ANSI_COLOR_GREEN = "\x1b[32m"
ANSI_COLOR_CYAN = "\x1b[36m"
ANSI_COLOR_RESET = "\x1b[0m"


class CommitParseError(ValueError):
    """Raised when a raw commit object cannot be parsed."""


@dataclass
class GitTime:
    """Seconds since the epoch and a timezone offset in minutes."""

    time: int = 0
    offset: int = 0


@dataclass
class GitSignature:
    name: str = ""
    email: str = ""
    timestamp: GitTime = field(default_factory=GitTime)


@dataclass
class GitCommit:
    commit_id: bytes = bytes(20)
    tree_id: bytes = bytes(20)
    parents: list[bytes] = field(default_factory=list)
    author: GitSignature = field(default_factory=GitSignature)
    committer: GitSignature = field(default_factory=GitSignature)
    body: str = ""


class MessageType(enum.Enum):
    PLAINTEXT = "PLN"
    DECRYPTED = "DEC"
    UNKNOWN_ERROR = "ERR"


_TYPE_COLORS = {
    MessageType.PLAINTEXT: ANSI_COLOR_CYAN,
    MessageType.DECRYPTED: ANSI_COLOR_GREEN,
    MessageType.UNKNOWN_ERROR: ANSI_COLOR_RED,
}


def _parse_header_oid(data: str, pos: int, prefix: str) -> tuple[bytes, int] | None:
    """Read ``<prefix><hex id>\\n`` at ``pos``; return the id and the next position."""
    if not data.startswith(prefix, pos):
        return None
    start = pos + len(prefix)
    if len(data) - start < GIT_HEX_OBJECT_ID:
        return None
    oid = git_str_to_oid(data[start:start + GIT_HEX_OBJECT_ID])
    return oid, min(start + GIT_HEX_OBJECT_ID + 1, len(data))


def _parse_integer(data: str, pos: int) -> tuple[int, int]:
    """Read a decimal integer like strtoimax; return the value and the tail index."""
    match = _INTEGER.match(data, pos)
    if not match:
        return 0, pos
    return int(match.group(1)), match.end()


def _minutes_from_hhmm(offset: int) -> int:
    sign = -1 if offset < 0 else 1
    magnitude = abs(offset)
    return sign * (magnitude // 100 * 60 + magnitude % 100)


def _parse_header_signature(
    data: str, pos: int, prefix: str
) -> tuple[GitSignature, int] | None:
    """Read ``<prefix>name <email> time offset\\n``; return it and the next position."""
    if not data.startswith(prefix, pos):
        return None
    start = pos + len(prefix)
    lf = data.find("\n", start)
    if lf < 0:
        return None
    email_start = data.find("<", start, lf)
    if email_start < 0:
        return None
    email_end = data.find(">", email_start, lf)
    if email_end < 0:
        return None

    epoch = 0
    offset = 0
    if email_end + 2 < lf:
        epoch, tail = _parse_integer(data, email_end + 2)
        if tail >= len(data) or data[tail] not in _WHITESPACE:
            return None
        if epoch >= _INT64_MAX or epoch <= _INT64_MIN:
            epoch = 0

        if tail + 1 < lf:
            offset, tail = _parse_integer(data, tail + 1)
            if tail >= len(data) or data[tail] not in _WHITESPACE:
                return None
            if offset < -2400 or offset > 2400:
                offset = 0

    email = ""
    if email_start + 1 < email_end:
        email = data[email_start + 1:email_end].strip(_WHITESPACE)

    signature = GitSignature(
        name=data[start:email_start].strip(_WHITESPACE),
        email=email,
        timestamp=GitTime(time=epoch, offset=_minutes_from_hhmm(offset)),
    )
    return signature, lf + 1


def parse_commit(commit_id: str, data: str) -> GitCommit:
    """Parse a raw commit object, as printed by git cat-file.

    Raises CommitParseError if the tree, author or committer header is
    missing or malformed, and InvalidObjectIdError for a bad object id.
    """
    commit = GitCommit(commit_id=git_str_to_oid(commit_id))

    tree = _parse_header_oid(data, 0, "tree ")
    if tree is None:
        raise CommitParseError("commit object has no valid tree header")
    commit.tree_id, pos = tree

    while (parent := _parse_header_oid(data, pos, "parent ")) is not None:
        parent_id, pos = parent
        commit.parents.append(parent_id)

    author = _parse_header_signature(data, pos, "author ")
    if author is None:
        raise CommitParseError("commit object has no valid author header")
    commit.author, pos = author

    # extra author lines are skipped
    while (extra := _parse_header_signature(data, pos, "author ")) is not None:
        pos = extra[1]

    committer = _parse_header_signature(data, pos, "committer ")
    if committer is None:
        raise CommitParseError("commit object has no valid committer header")
    commit.committer, pos = committer

    # skip remaining headers up to the blank line before the message
    while pos < len(data):
        if data[pos - 1] == "\n" and data[pos] == "\n":
            break
        lf = data.find("\n", pos)
        pos = len(data) if lf < 0 else lf + 1

    commit.body = data[pos:].strip(_WHITESPACE)
    return commit


def _format_header(commit: GitCommit, message_type: MessageType, no_color: bool) -> str:
    color = "" if no_color else _TYPE_COLORS.get(message_type, ANSI_COLOR_RED)
    reset = "" if no_color else ANSI_COLOR_RESET
    stamp = time.asctime(time.localtime(commit.author.timestamp.time))
    meta = f"{stamp} {message_type.value} {commit.author.name}".strip(_WHITESPACE)
    return f"{color}[{meta}]{reset}\n"


def _format_body(message: str) -> str:
    text = message.strip(_WHITESPACE)
    lines = text.split("\n") if text else []
    return "".join(f"\n\t{line}" for line in lines) + "\n\n"


def format_pretty_message(
    commit: GitCommit, message: str, message_type: MessageType, no_color: bool
) -> str:
    """Format a message as a ``[<time> <type> <author>]`` header and indented lines."""
    return _format_header(commit, message_type, no_color) + _format_body(message)


def pretty_print_message(
    commit: GitCommit,
    message: str,
    message_type: MessageType,
    no_color: bool,
    output: TextIO,
) -> None:
    """Write the formatted message to ``output``."""
    output.write(format_pretty_message(commit, message, message_type, no_color))