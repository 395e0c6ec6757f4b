# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import re
from struct import error as StructError
from struct import unpack
from typing import IO, Final, NamedTuple

from id3frames._constants import GENRES

from ._factory import FrameFactory
from ._frameid import Frames
from ._frames import Frame
from ._specs import TimingCode

V1_SIZE: Final = 128
"""Size of an ID3v1 tag"""

V1_EXTENDED_SIZE: Final = 227
"""Size of an ID3v1 Extended tag, found right before the ID3v1 tag"""

_EXTENDED_TIME: Final = re.compile(r"^\s*(\d+):(\d{1,2})")


def genre_name(index: int) -> str:
    """The ID3v1 genre with the given number, "" if there is none"""

    if 0 <= index < len(GENRES):
        return GENRES[index]
    return ""


def _text(data: bytes) -> str:
    return data.split(b"\x00", 1)[0].rstrip(b" ").decode("latin-1")


def find_id3v1(fileobj: IO[bytes]) -> tuple[bytes | None, bytes | None]:
    """Returns the raw ID3v1 tag and the raw ID3v1 Extended tag of a file.

    Either is None if it doesn't exist. The Extended tag is only looked
    for if there is an ID3v1 tag.

    Raises:
        IOError
    """

    fileobj.seek(0, 2)
    filesize = fileobj.tell()
    if filesize < V1_SIZE:
        return None, None

    fileobj.seek(-V1_SIZE, 2)
    data = fileobj.read(V1_SIZE)
    if len(data) != V1_SIZE or not data.startswith(b"TAG"):
        return None, None

    extended = None
    if filesize > V1_SIZE + V1_EXTENDED_SIZE:
        fileobj.seek(-(V1_SIZE + V1_EXTENDED_SIZE), 2)
        ext = fileobj.read(V1_EXTENDED_SIZE)
        if len(ext) == V1_EXTENDED_SIZE and ext.startswith(b"TAG+"):
            extended = ext

    return data, extended


def is_id3v11(data: bytes) -> bool:
    """If an ID3v1 tag keeps a track number in its comment (ID3v1.1)"""

    return len(data) >= V1_SIZE and data[125] == 0 and data[126] != 0


def ParseID3v1(data: bytes,
               factory: FrameFactory | None = None) -> list[Frame] | None:
    """Parse an ID3v1 or ID3v1.1 tag, returning a list of ID3v2.4 frames.

    Returns None if the data is not an ID3v1 tag. Frames without content
    are left out.
    """

    if factory is None:
        factory = FrameFactory()

    try:
        tag, title, artist, album, year, comment, genre = unpack(
            "3s30s30s30s4s30sB", data)
    except StructError:
        return None

    if tag != b"TAG":
        return None

    track = 0
    if is_id3v11(data):
        # ID3v1.1 keeps the track number in the last comment byte
        track = comment[29]
        comment = comment[:28]

    frames = [
        factory.create_text(Frames.TIT2, _text(title)),
        factory.create_text(Frames.TPE1, _text(artist)),
        factory.create_text(Frames.TALB, _text(album)),
        factory.create_text(Frames.TYER, _text(year)),
        factory.create_text(Frames.COMM, _text(comment), language="eng"),
        factory.create_text(Frames.TCON, genre_name(genre)),
    ]
    if track:
        frames.append(factory.create_text(Frames.TRCK, str(track)))

    return [f for f in frames if not f.null and not f.empty]


def _extended_time(value: bytes) -> int | None:
    match = _EXTENDED_TIME.match(_text(value))
    if match is None:
        return None
    minutes, seconds = map(int, match.groups())
    return (minutes * 60 + seconds) * 1000


class ID3v1Extended(NamedTuple):
    """The content of an ID3v1 Extended ("TAG+") tag"""

    frames: list[Frame]
    speed: int
    start: int | None
    """Start of the music in milliseconds, None if not set"""
    end: int | None
    """End of the music in milliseconds, None if not set"""


def ParseID3v1Extended(data: bytes, factory: FrameFactory | None = None
                       ) -> ID3v1Extended | None:
    """Parse an ID3v1 Extended tag.

    Returns None if the data is not an ID3v1 Extended tag.
    """

    if factory is None:
        factory = FrameFactory()

    try:
        tag, title, artist, album, speed, genre, start, end = unpack(
            "4s60s60s60sB30s6s6s", data)
    except StructError:
        return None

    if tag != b"TAG+":
        return None

    frames = [
        factory.create_text(Frames.TIT2, _text(title)),
        factory.create_text(Frames.TPE1, _text(artist)),
        factory.create_text(Frames.TALB, _text(album)),
        factory.create_text(Frames.TCON, _text(genre)),
    ]
    frames = [f for f in frames if not f.null and not f.empty]

    return ID3v1Extended(
        frames, speed, _extended_time(start), _extended_time(end))


AUDIO_START: Final = TimingCode.INITIAL_SILENCE_END
"""Timing code the Extended tag start time is stored as"""

AUDIO_END: Final = TimingCode.AUDIO_END
"""Timing code the Extended tag end time is stored as"""
