# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import warnings
from typing import IO

from id3frames._filething import FileThing
from id3frames._tags import Metadata
from id3frames._util import convert_error, loadfile

from ._factory import FrameFactory
from ._frameid import Frames
from ._frames import Frame
from ._id3v1 import (
    AUDIO_END,
    AUDIO_START,
    ParseID3v1,
    ParseID3v1Extended,
    find_id3v1,
    is_id3v11,
)
from ._tags import ID3Header, ID3Tags
from ._util import (
    ID3NoHeaderError,
    ID3UnsupportedVersionError,
    ID3Warning,
    error,
)


class ID3(ID3Tags, Metadata):
    """ID3(filething=None, load_v1=True)

    The ID3 tags of a file.

    If any arguments are given, the :meth:`load` is called with them. If no
    arguments are given then an empty `ID3` object is created.

    ::

        ID3("foo.mp3")
        # same as
        t = ID3()
        t.load("foo.mp3")

    Arguments:
        filething (filething): or `None`

    Attributes:
        version (tuple[int]): ID3v2 tag version as a tuple, (1, 1) if only
            an ID3v1 tag was found
        padding_start (int): offset of the first byte after the last frame
            that could be read
        filename (str): the file name the tags were loaded from, if any
    """

    __module__ = "id3frames.id3"

    _header: ID3Header | None = None
    _version: tuple[int, ...] = ID3Header._V24
    _v1: tuple[int, int] | None = None
    _v1_extended: bool = False

    padding_start: int = 0
    filename: str | bytes | None = None

    @property
    def version(self) -> tuple[int, ...]:
        if self._header is not None:
            return self._header.version
        return self._version

    @version.setter
    def version(self, value: tuple[int, ...]):
        self._version = value

    @property
    def f_unsynch(self) -> bool:
        return self._header is not None and self._header.f_unsynch

    @property
    def f_extended(self) -> bool:
        return self._header is not None and self._header.f_extended

    @property
    def f_experimental(self) -> bool:
        return self._header is not None and self._header.f_experimental

    @property
    def f_footer(self) -> bool:
        return self._header is not None and self._header.f_footer

    @property
    def size(self) -> int:
        """Size of the ID3v2 tag including its header and footer, 0 if
        there is none"""

        if self._header is not None:
            return self._header.tag_end
        return 0

    @convert_error(IOError, error)
    @loadfile()
    def load(self, filething: FileThing, load_v1: bool = True) -> None:
        """Load tags from a filename.

        Args:
            filething (filething): filename or file object to load tag
                data from
            load_v1 (bool): Load tags from ID3v1 header if present. If both
                ID3v1 and ID3v2 headers are present, combine the tags from
                the two, with ID3v2 having precedence.

        Raises:
            ID3NoHeaderError: if there is neither an ID3v2 nor an ID3v1 tag
            ID3UnsupportedVersionError: if the ID3v2 tag can't be read and
                there is no ID3v1 tag
            error: for everything else that goes wrong
        """

        fileobj = filething.fileobj

        self.clear()
        self._header = None
        self.version = ID3Header._V24
        self._v1 = None
        self._v1_extended = False
        self.padding_start = 0
        self.filename = filething.filename

        try:
            self._header = ID3Header(fileobj)
        except (ID3NoHeaderError, ID3UnsupportedVersionError):
            if not load_v1 or not self._load_v1(fileobj):
                raise
            self.version = ID3Header._V11
        else:
            self._read_frames(fileobj, self._header)
            if load_v1:
                self._load_v1(fileobj)

    def _read_frames(self, fileobj: IO[bytes], header: ID3Header) -> None:
        factory = FrameFactory(fileobj, header.version[1], header.frames_end)
        end = header.frames_end
        offset = header.frames_start

        while offset + factory.header_size < end:
            frame, consumed = factory.read_frame(offset)
            if not frame.null:
                self.add(frame)
            if consumed == 0 or frame.frame_id.unknown:
                break
            offset += consumed

        self.padding_start = offset

        if offset + factory.header_size < end:
            fileobj.seek(offset)
            if fileobj.read(1) not in (b"", b"\x00"):
                warnings.warn(
                    f"stopped reading frames at offset {offset} before the "
                    f"end of the tag at {end}", ID3Warning)

    def _add_v1(self, frame: Frame) -> None:
        if frame.frame_id == Frames.COMM and Frames.COMM in self:
            return
        self.add(frame)

    def _load_v1(self, fileobj: IO[bytes]) -> bool:
        """Merges the ID3v1 and ID3v1 Extended tags into the frames.

        Returns:
            bool: if there was an ID3v1 tag
        """

        data, extended_data = find_id3v1(fileobj)
        if data is None:
            return False

        frames = ParseID3v1(data, self._factory)
        if frames is None:
            return False

        if extended_data is not None:
            extended = ParseID3v1Extended(extended_data, self._factory)
            if extended is not None:
                self._v1_extended = True
                # the longer extended fields go first
                for frame in extended.frames:
                    self._add_v1(frame)
                for code, time in ((AUDIO_START, extended.start),
                                   (AUDIO_END, extended.end)):
                    if time is not None and \
                            self.timing_code(code).value == 0:
                        self.set_timing_code(code, time, True)

        self._v1 = (1, 1) if is_id3v11(data) else (1, 0)
        for frame in frames:
            self._add_v1(frame)
        return True

    def version_string(self, verbose: bool = False) -> str:
        """The ID3 versions found in the file, e.g. "v1.1 v2.4.0".

        With `verbose` the ID3v2 header flags get listed too.
        """

        parts = []
        if self._v1 is not None:
            parts.append("v1.1" if self._v1 == (1, 1) else "v1")
        if self._v1_extended:
            parts.append("v1Extended")

        header = self._header
        if header is not None:
            v2 = "v2.%d.%d" % header.version[1:]
            if verbose:
                for flag, name in ((header.f_unsynch, "unsynchronisation"),
                                   (header.f_extended, "extendedheader"),
                                   (header.f_experimental, "experimental"),
                                   (header.f_footer, "footer")):
                    if flag:
                        v2 += " -" + name
            parts.append(v2)

        return " ".join(parts)
