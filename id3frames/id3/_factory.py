# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from struct import pack
from typing import IO, Any, Final

from id3frames._util import read_full

from ._frameid import Frames, FrameID
from ._frames import (
    DescriptiveTextFrame,
    EventTimingFrame,
    Frame,
    NumericTextFrame,
    PictureFrame,
    PlayCountFrame,
    PopularimeterFrame,
    TextFrame,
    UnknownFrame,
    UrlFrame,
)
from ._specs import PictureType, TimeStampFormat
from ._util import (
    HEADER_SIZE,
    V22_HEADER_SIZE,
    WRITE_VERSION,
    decode_int,
    encode_int,
)

_NUMERICAL: Final = frozenset([
    Frames.TYER, Frames.TBPM, Frames.TDAT, Frames.TLEN, Frames.TDLY,
    Frames.TIME, Frames.TORY])
"""Text frames which only hold numbers. TRCK and TPOS are not part of this
since they can carry a total after a '/'."""

_DESCRIPTIVE: Final[dict[Frames, int]] = {
    Frames.TXXX: 0,
    Frames.WXXX: DescriptiveTextFrame.LATIN1_TEXT,
    Frames.COMM: DescriptiveTextFrame.LANGUAGE,
    Frames.USLT: DescriptiveTextFrame.LANGUAGE,
    Frames.USER: (DescriptiveTextFrame.LANGUAGE |
                  DescriptiveTextFrame.NO_DESCRIPTION),
}
"""Descriptive text frames and their options"""

_SPECIAL: Final[dict[Frames, type[Frame]]] = {
    Frames.APIC: PictureFrame,
    Frames.PCNT: PlayCountFrame,
    Frames.POPM: PopularimeterFrame,
    Frames.ETCO: EventTimingFrame,
}

type FramePair = tuple[FrameID, Frame]


def frame_class(frame_id: str | Frames | FrameID) -> tuple[
        type[Frame], dict[str, Any]]:
    """Returns the Frame sub class used for `frame_id` and the keyword
    arguments it needs.

    Unknown frame IDs and frames without a dedicated class map to
    `UnknownFrame`.
    """

    frame = FrameID(frame_id).frame

    if frame in _DESCRIPTIVE:
        return DescriptiveTextFrame, {"options": _DESCRIPTIVE[frame]}
    elif frame in _NUMERICAL:
        return NumericTextFrame, {}
    elif frame in _SPECIAL:
        return _SPECIAL[frame], {}
    elif frame is not Frames.XXXX:
        if frame.name.startswith("T"):
            return TextFrame, {}
        elif frame.name.startswith("W"):
            return UrlFrame, {}
    return UnknownFrame, {}


class FrameFactory:
    """Creates frames, either from a tag in a file or in memory.

    ::

        factory = FrameFactory(fileobj, 4, tag_end)
        frame = factory.create(10)
        if not frame.null:
            ...

    Reading frames never raises: anything that goes wrong gives a null
    `UnknownFrame`.

    Args:
        fileobj (fileobj): the file holding the tag, or `None` if only
            in memory frames are needed
        version (int): ID3v2 major version of the tag
        tag_end (int): offset of the first byte after the tag
    """

    def __init__(self, fileobj: IO[bytes] | None = None,
                 version: int = WRITE_VERSION, tag_end: int = 0):
        self._fileobj = fileobj
        self.version = version
        self.tag_end = tag_end

    @property
    def header_size(self) -> int:
        """Size of a frame header in this tag"""

        return V22_HEADER_SIZE if self.version < 3 else HEADER_SIZE

    def create(self, offset: int) -> Frame:
        """Reads the frame which starts at `offset`"""

        return self.read_frame(offset)[0]

    def create_pair(self, offset: int) -> FramePair:
        frame = self.create(offset)
        return frame.frame_id, frame

    def read_frame(self, offset: int) -> tuple[Frame, int]:
        """Reads the frame which starts at `offset`.

        Returns:
            tuple[Frame, int]: the frame and the number of bytes it takes
                up in the file, 0 if it couldn't be read
        """

        fileobj = self._fileobj
        header_size = self.header_size

        if fileobj is None or offset < 0 or \
                offset + header_size > self.tag_end:
            return UnknownFrame.null_frame(), 0

        try:
            fileobj.seek(offset)
            header = read_full(fileobj, header_size)
        except (OSError, ValueError):
            return UnknownFrame.null_frame(), 0

        if self.version < 3:
            name, size = header[:3], decode_int(header[3:6])
        else:
            name, size = header[:4], decode_int(
                header[4:8], synchsafe=self.version >= 4)

        end = offset + header_size + size
        if size == 0 or end > self.tag_end:
            return UnknownFrame.null_frame(), 0

        try:
            body = read_full(fileobj, size)
        except (OSError, ValueError):
            return UnknownFrame.null_frame(), 0

        frame_id = FrameID(name, self.version)
        if self.version < 3:
            # same shape as a v2.3 header, so frames don't need to care
            header = (frame_id.id.encode("ascii") +
                      encode_int(size, 4, synchsafe=True) +
                      pack(">H", Frame.FLAG23_ALTERTAG))

        cls, kwargs = frame_class(frame_id)
        return cls._fromData(frame_id, self.version, header + body,
                             **kwargs), end - offset

    def create_text(self, frame_id: str | Frames | FrameID, text: str,
                    description: str = "", language: str = "") -> Frame:
        """Creates a text, numerical, URL or descriptive text frame.

        Other frame IDs give a null `UnknownFrame`.
        """

        cls, kwargs = frame_class(frame_id)
        if cls is DescriptiveTextFrame:
            return DescriptiveTextFrame(
                frame_id, text, description, language, **kwargs)
        elif cls in (TextFrame, NumericTextFrame, UrlFrame):
            return cls(frame_id, text)
        return UnknownFrame.null_frame(frame_id)

    def create_picture(self, data: bytes, mime: str, description: str = "",
                       type: int = PictureType.COVER_FRONT) -> PictureFrame:
        return PictureFrame(Frames.APIC, data, mime, description, type)

    def create_play_count(self, count: int) -> PlayCountFrame:
        return PlayCountFrame(Frames.PCNT, count)

    def create_popularimeter(self, count: int = 0, rating: int = 0,
                             email: str = "") -> PopularimeterFrame:
        return PopularimeterFrame(Frames.POPM, count, rating, email)

    def create_event_timing(
            self, format: int = TimeStampFormat.MILLISECONDS
    ) -> EventTimingFrame:
        return EventTimingFrame(Frames.ETCO, format)

    def create_text_pair(self, frame_id: str | Frames | FrameID, text: str,
                         description: str = "",
                         language: str = "") -> FramePair:
        frame = self.create_text(frame_id, text, description, language)
        return frame.frame_id, frame

    def create_picture_pair(self, *args, **kwargs) -> FramePair:
        frame = self.create_picture(*args, **kwargs)
        return frame.frame_id, frame

    def create_play_count_pair(self, count: int) -> FramePair:
        frame = self.create_play_count(count)
        return frame.frame_id, frame

    def create_popularimeter_pair(self, *args, **kwargs) -> FramePair:
        frame = self.create_popularimeter(*args, **kwargs)
        return frame.frame_id, frame

    def create_event_timing_pair(self, *args, **kwargs) -> FramePair:
        frame = self.create_event_timing(*args, **kwargs)
        return frame.frame_id, frame
