# Copyright 2006 Joe Wreschnig
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Utility classes for id3frames.

You should not rely on the interfaces here being stable. They are
intended for internal use in id3frames only.
"""

from __future__ import annotations

import codecs
import errno
import os
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from typing import IO, Any, Final

from ._filething import FileThing


class ID3FramesError(Exception):
    """Base class for all custom exceptions in id3frames"""

    __module__: Final = "id3frames"


def convert_error(
        exc_src: type[BaseException] | tuple[type[BaseException], ...],
        exc_dest: type[Exception]):
    """A decorator for reraising exceptions with a different type.
    Mostly useful for IOError.

    Args:
        exc_src (type): The source exception type
        exc_dest (type): The target exception type.
    """

    def wrap(func):

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exc_dest:
                raise
            except exc_src as err:
                raise exc_dest(err) from err

        return wrapper

    return wrap


def verify_fileobj(fileobj: IO[bytes]) -> None:
    """Verifies that the passed fileobj is a file like object which
    we can use.

    Raises:
        ValueError: In case the object is not a file object that is readable
            or the file object is not opened in bytes mode.
    """

    try:
        data = fileobj.read(0)
    except Exception as e:
        if not hasattr(fileobj, "read"):
            raise ValueError(f"{fileobj!r} not a valid file object") from e
        raise ValueError(f"Can't read from file object {fileobj!r}") from e

    if not isinstance(data, bytes):
        raise ValueError(
            f"file object {fileobj!r} not opened in binary mode")


def fileobj_name(fileobj: IO[bytes]) -> str:
    """
    Returns:
        text: A potential filename for a file object. Always a valid
            path type, but might be empty or non-existent.
    """

    value = getattr(fileobj, "name", "")
    if not isinstance(value, (str, bytes)):
        value = str(value)
    return os.fsdecode(value)


@contextmanager
def _openfile(filething: object):
    """yields a FileThing

    Args:
        filething: Either a file name, a file object or None
    Raises:
        ID3FramesError: In case opening the file failed
        TypeError: in case neither a file name or a file object is passed
    """

    if filething is None:
        raise TypeError("filename or fileobj must be given")

    if hasattr(filething, "read"):
        fileobj = filething
        verify_fileobj(fileobj)
        yield FileThing(fileobj, None, fileobj_name(fileobj))
        return

    if not isinstance(filething, (str, bytes, os.PathLike)):
        raise TypeError(f"Invalid filename or file object: {filething!r}")

    filename = os.fspath(filething)
    try:
        fileobj = open(filename, "rb")
    except OSError as e:
        if e.errno == errno.ENOENT:
            raise ID3FramesError(f"No such file: {filename!r}") from e
        raise ID3FramesError(e) from e

    with fileobj:
        yield FileThing(fileobj, filename, os.fsdecode(filename))


def loadfile[R](method: bool = True) -> Callable[
        [Callable[..., R]], Callable[..., R]]:
    """A decorator for functions taking a `filething` as a first argument.

    Passes a FileThing instance as the first argument to the wrapped
    function.

    Args:
        method (bool): If the wrapped functions is a method
    """

    def convert_file_args(args: tuple[Any, ...], kwargs: dict[str, Any]):
        filething = args[0] if args else None
        filename = kwargs.pop("filename", None)
        fileobj = kwargs.pop("fileobj", None)
        return filething or filename or fileobj, args[1:], kwargs

    def wrap(func: Callable[..., R]) -> Callable[..., R]:

        @wraps(func)
        def wrapper_func(*args, **kwargs) -> R:
            filething, args, kwargs = convert_file_args(args, kwargs)
            with _openfile(filething) as h:
                return func(h, *args, **kwargs)

        @wraps(func)
        def wrapper(self, *args, **kwargs) -> R:
            filething, args, kwargs = convert_file_args(args, kwargs)
            with _openfile(filething) as h:
                return func(self, h, *args, **kwargs)

        return wrapper if method else wrapper_func

    return wrap


def read_full(fileobj: IO[bytes], size: int) -> bytes:
    """Like fileobj.read but raises IOError if not all requested data is
    returned.

    If you want to distinguish IOError and the EOS case, better handle
    the error yourself instead of using this.

    Args:
        fileobj (fileobj)
        size (int): amount of bytes to read
    Raises:
        IOError: In case read fails or not enough data is read
    """

    if size < 0:
        raise ValueError(f"size must not be negative: {size}")

    data = fileobj.read(size)
    if len(data) != size:
        raise OSError("not enough data")
    return data


def get_size(fileobj: IO[bytes]) -> int:
    """Returns the size of the file.
    The position when passed in will be preserved if no error occurs.

    Args:
        fileobj (fileobj)
    Returns:
        int: The size of the file
    Raises:
        IOError
    """

    old_pos = fileobj.tell()
    try:
        fileobj.seek(0, 2)
        return fileobj.tell()
    finally:
        fileobj.seek(old_pos, 0)


def decode_terminated(data: bytes, encoding: str,
                      strict: bool = True) -> tuple[str, bytes]:
    """Returns the decoded data until the first NULL terminator
    and all data after it.

    Args:
        data (bytes): data to decode
        encoding (str): The codec to use
        strict (bool): If True will raise ValueError in case no NULL is found
            but the available data decoded successfully.
    Returns:
        Tuple[`text`, `bytes`]: A tuple containing the decoded text and the
            remaining data after the found NULL termination.

    Raises:
        UnicodeError: In case the data can't be decoded.
        LookupError:In case the encoding is not found.
        ValueError: In case the data isn't null terminated (even if it is
            encoded correctly) except if strict is False, then the decoded
            string will be returned anyway.
    """

    codec_info = codecs.lookup(encoding)

    # normalize encoding name so we can compare by name
    encoding = codec_info.name

    # fast path
    if encoding in ("utf-8", "iso8859-1"):
        index = data.find(b"\x00")
        if index == -1:
            # make sure we raise UnicodeError first, like in the slow path
            res = data.decode(encoding), b""
            if strict:
                raise ValueError("not null terminated")
            else:
                return res
        return data[:index].decode(encoding), data[index + 1:]

    # slow path
    decoder = codec_info.incrementaldecoder()
    r: list[str] = []
    for i in range(len(data)):
        c = decoder.decode(data[i:i + 1])
        if c == "\x00":
            return "".join(r), data[i + 1:]
        r.append(c)

    # make sure the decoder is finished
    r.append(decoder.decode(b"", True))
    if strict:
        raise ValueError("not null terminated")
    return "".join(r), b""
