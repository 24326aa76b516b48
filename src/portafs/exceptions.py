"""Exceptions for portafs.

Every native ``OSError`` raised below the host boundary is classified
once into an :class:`ErrorKind` and re-raised as the matching
:class:`FsError` subclass.  Each subclass also derives from the closest
Python builtin, so ``except FileNotFoundError`` keeps working for
callers who never import this module.

Engine policy violations (self-copy, copying a directory into itself,
replacing a directory with a non-directory) raise
:class:`InvalidOperationError` instead; they are not OS conditions.
"""

from __future__ import annotations

import errno
from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class ErrorKind(str, Enum):
    """Platform-independent failure classification.

    Members: ``NOT_FOUND``, ``ALREADY_EXISTS``, ``PERMISSION_DENIED``,
    ``BUSY``, ``INTERRUPTED``, ``INVALID_DATA``, ``BROKEN_PIPE``,
    ``BAD_RESOURCE``, ``TIMED_OUT``, ``UNEXPECTED_EOF``, ``WRITE_ZERO``,
    ``OTHER``.
    """
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    PERMISSION_DENIED = "PermissionDenied"
    BUSY = "Busy"
    INTERRUPTED = "Interrupted"
    INVALID_DATA = "InvalidData"
    BROKEN_PIPE = "BrokenPipe"
    BAD_RESOURCE = "BadResource"
    TIMED_OUT = "TimedOut"
    UNEXPECTED_EOF = "UnexpectedEof"
    WRITE_ZERO = "WriteZero"
    OTHER = "Other"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class FsError(OSError):
    """Base class for classified filesystem errors.

    The :attr:`kind` class attribute names the :class:`ErrorKind`.
    ``errno``, ``strerror`` and ``filename`` are carried over from the
    native error when there was one.
    """
    kind: ErrorKind = ErrorKind.OTHER


# please keep sorted
class AlreadyExists(FsError, FileExistsError):
    kind = ErrorKind.ALREADY_EXISTS


class BadResource(FsError):
    kind = ErrorKind.BAD_RESOURCE


class BrokenPipe(FsError, BrokenPipeError):
    kind = ErrorKind.BROKEN_PIPE


class Busy(FsError):
    kind = ErrorKind.BUSY


class Interrupted(FsError, InterruptedError):
    kind = ErrorKind.INTERRUPTED


class InvalidData(FsError):
    kind = ErrorKind.INVALID_DATA


class NotFound(FsError, FileNotFoundError):
    kind = ErrorKind.NOT_FOUND


class Other(FsError):
    kind = ErrorKind.OTHER


class PermissionDenied(FsError, PermissionError):
    kind = ErrorKind.PERMISSION_DENIED


class TimedOut(FsError, TimeoutError):
    kind = ErrorKind.TIMED_OUT


class UnexpectedEof(FsError):
    kind = ErrorKind.UNEXPECTED_EOF


class WriteZero(FsError):
    kind = ErrorKind.WRITE_ZERO


class InvalidOperationError(ValueError):
    """Raised when a copy would violate an engine invariant.

    Attributes:
        src: Resolved source path.
        dest: Resolved destination path.
    """

    def __init__(self, message: str, src: str | None = None, dest: str | None = None) -> None:
        super().__init__(message)
        self.src = src
        self.dest = dest


_ERRNO_TO_KIND: dict[int, ErrorKind] = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.EBUSY: ErrorKind.BUSY,
    errno.EINTR: ErrorKind.INTERRUPTED,
    errno.EILSEQ: ErrorKind.INVALID_DATA,
    errno.EPIPE: ErrorKind.BROKEN_PIPE,
    errno.EBADF: ErrorKind.BAD_RESOURCE,
    errno.ETIMEDOUT: ErrorKind.TIMED_OUT,
}
# Not every errno exists on every host
for _name, _kind in (
    ("EBADMSG", ErrorKind.INVALID_DATA),
    ("ETXTBSY", ErrorKind.BUSY),
    ("ENOTCONN", ErrorKind.BROKEN_PIPE),
):
    if hasattr(errno, _name):
        _ERRNO_TO_KIND[getattr(errno, _name)] = _kind

# Checked in order; subclasses before their bases
_CLASS_TO_KIND: tuple[tuple[type[BaseException], ErrorKind], ...] = (
    (FileNotFoundError, ErrorKind.NOT_FOUND),
    (FileExistsError, ErrorKind.ALREADY_EXISTS),
    (PermissionError, ErrorKind.PERMISSION_DENIED),
    (InterruptedError, ErrorKind.INTERRUPTED),
    (BrokenPipeError, ErrorKind.BROKEN_PIPE),
    (TimeoutError, ErrorKind.TIMED_OUT),
    (EOFError, ErrorKind.UNEXPECTED_EOF),
    (UnicodeError, ErrorKind.INVALID_DATA),
)

_KIND_TO_ERROR: dict[ErrorKind, type[FsError]] = {
    cls.kind: cls
    for cls in (
        AlreadyExists, BadResource, BrokenPipe, Busy, Interrupted,
        InvalidData, NotFound, Other, PermissionDenied, TimedOut,
        UnexpectedEof, WriteZero,
    )
}


def classify(exc: BaseException) -> ErrorKind:
    """Return the :class:`ErrorKind` for a native error.

    Looks at ``errno`` first, then at the builtin exception class.
    Anything unrecognized is ``ErrorKind.OTHER``; this never raises.
    """
    if isinstance(exc, FsError):
        return exc.kind
    code = getattr(exc, "errno", None)
    if isinstance(code, int) and code in _ERRNO_TO_KIND:
        return _ERRNO_TO_KIND[code]
    for cls, kind in _CLASS_TO_KIND:
        if isinstance(exc, cls):
            return kind
    return ErrorKind.OTHER


def error_class(kind: ErrorKind) -> type[FsError]:
    """Return the :class:`FsError` subclass for *kind*."""
    return _KIND_TO_ERROR[kind]


def to_fs_error(exc: BaseException) -> FsError:
    """Build the classified :class:`FsError` for *exc*.

    An already-classified error is returned unchanged.
    """
    if isinstance(exc, FsError):
        return exc
    cls = error_class(classify(exc))
    if isinstance(exc, OSError) and exc.errno is not None:
        return cls(exc.errno, exc.strerror, exc.filename, None, exc.filename2)
    return cls(str(exc))


@contextmanager
def classified() -> Iterator[None]:
    """Re-raise any native ``OSError`` inside the block as an :class:`FsError`."""
    try:
        yield
    except FsError:
        raise
    except OSError as exc:
        raise to_fs_error(exc) from exc
