# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from collections.abc import Iterable, Iterator
from struct import pack, unpack
from typing import Final, NamedTuple, Self, override

from id3frames._util import decode_terminated

from ._frameid import Frames, FrameID
from ._specs import (
    ALLOWED_MIME_TYPES,
    Encoding,
    PictureType,
    TimeStampFormat,
    TimingCode,
    atoll,
    decode_text,
    find_terminator,
    is_numerical,
)
from ._util import (
    HEADER_SIZE,
    WRITE_VERSION,
    ID3EncryptionUnsupportedError,
    ID3JunkFrameError,
    decode_int,
    encode_int,
    unsynch,
)

_LEGACY_SEPARATED: Final = frozenset([
    Frames.TCOM, Frames.TEXT, Frames.TOLY, Frames.TOPE, Frames.TPE1])
"""Frames which separate multiple values with '/' in ID3v2.3 and older"""


class Frame:
    """Fundamental unit of ID3 data.

    A frame keeps the raw bytes it was decoded from (header included)
    next to the typed fields of its sub class. Frames that can't be
    decoded are not an error, they are `null`: a null frame keeps
    default values in its typed fields and should be skipped.

    Frames created in memory have no bytes until `write` is called.
    """

    FLAG23_ALTERTAG: int = 0x8000
    FLAG23_ALTERFILE: int = 0x4000
    FLAG23_READONLY: int = 0x2000
    FLAG23_COMPRESS: int = 0x0080
    FLAG23_ENCRYPT: int = 0x0040
    FLAG23_GROUP: int = 0x0020

    FLAG24_ALTERTAG: int = 0x4000
    FLAG24_ALTERFILE: int = 0x2000
    FLAG24_READONLY: int = 0x1000
    FLAG24_GROUPID: int = 0x0040
    FLAG24_COMPRESS: int = 0x0008
    FLAG24_ENCRYPT: int = 0x0004
    FLAG24_UNSYNCH: int = 0x0002
    FLAG24_DATALEN: int = 0x0001

    version: int
    """ID3v2 major version of the stored bytes"""

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.XXXX):
        self._frame_id = FrameID(frame_id)
        self.version = WRITE_VERSION
        self._data = b""
        self._null = False
        self._edited = False
        self._from_file = False

    @classmethod
    def _fromData(cls, frame_id: str | Frames | FrameID, version: int,
                  data: bytes, **kwargs) -> Self:
        """Construct a frame from its raw bytes (header included).

        Never raises for broken data, the returned frame is null instead.
        """

        frame = cls(frame_id, **kwargs)
        frame.version = version
        frame._data = bytes(data)
        frame._from_file = True
        if len(frame._data) > HEADER_SIZE and frame.unsynchronised and \
                not (frame.compressed or frame.encrypted):
            data = unsynch.decode(frame._data)
            # the header has to match the shorter body
            flags = frame.flags & ~cls.FLAG24_UNSYNCH
            frame._data = (data[:4] +
                           encode_int(len(data) - HEADER_SIZE, 4,
                                      synchsafe=True) +
                           pack(">H", flags) + data[HEADER_SIZE:])
        frame.read()
        return frame

    def read(self) -> None:
        """Decodes the typed fields from the stored bytes.

        Resets the typed fields first. Marks the frame null if decoding
        fails.
        """

        self._null = False
        self._reset()
        try:
            if len(self._data) <= HEADER_SIZE:
                raise ID3JunkFrameError("frame too small")
            if self.encrypted:
                raise ID3EncryptionUnsupportedError
            if self.compressed:
                raise ID3JunkFrameError("compressed frames are not supported")
            if len(self._data) <= self.header_size:
                raise ID3JunkFrameError("no data after the frame header")
            self._readData(self._data[self.header_size:])
        except (ID3JunkFrameError, ID3EncryptionUnsupportedError):
            self._null = True
            self._reset()

    def _readData(self, data: bytes) -> None:
        """Raises ID3JunkFrameError"""

        raise NotImplementedError

    def _writeData(self) -> bytes:
        raise NotImplementedError

    def _reset(self) -> None:
        """Sets the typed fields to their defaults"""

    def write(self) -> bytes:
        """Encodes the frame as an ID3v2.4 frame and stores the result.

        Status flags are kept, format flags are dropped since the written
        body is never compressed, encrypted or unsynchronised. Null and
        empty frames are written as b"".

        Returns:
            bytes: the new frame bytes
        """

        flags = self._status_flags()
        self.version = WRITE_VERSION
        self._edited = False

        if self._null or self.empty:
            self._data = b""
            return self._data

        body = self._writeData()
        header = (self._frame_id.id.encode("ascii") +
                  encode_int(len(body), 4, synchsafe=True) +
                  pack(">H", flags))
        self._data = header + body
        return self._data

    def revert(self) -> None:
        """Drops all changes by decoding the stored bytes again"""

        self.read()
        self._edited = False

    def bytes(self, header: bool = True) -> bytes:
        """The stored frame bytes, without the header if `header` is False"""

        if header:
            return self._data
        if len(self._data) < self.header_size:
            return b""
        return self._data[self.header_size:]

    def size(self, header: bool = False) -> int:
        """Size of the stored frame body, or of the whole frame if `header`"""

        if header:
            return len(self._data)
        return max(len(self._data) - self.header_size, 0)

    @property
    def frame_id(self) -> FrameID:
        return self._frame_id

    @property
    def FrameID(self) -> str:
        """ID3v2.4 four character frame ID, "XXXX" if unknown"""

        return self._frame_id.id

    @property
    def null(self) -> bool:
        """If the frame failed to decode or holds invalid values"""

        return self._null

    @property
    def empty(self) -> bool:
        """If there is nothing worth writing"""

        return False

    @property
    def edited(self) -> bool:
        """If a setter was used since the last read or write"""

        return self._edited

    @property
    def from_file(self) -> bool:
        return self._from_file

    @property
    def flags(self) -> int:
        """The two raw flag bytes, 0 if there is no header"""

        if len(self._data) < HEADER_SIZE:
            return 0
        return unpack(">H", self._data[8:10])[0]

    def _flag(self, flag23: int, flag24: int) -> bool:
        flag = flag23 if self.version <= 3 else flag24
        return bool(self.flags & flag)

    @property
    def discard_on_tag_alter(self) -> bool:
        return self._flag(self.FLAG23_ALTERTAG, self.FLAG24_ALTERTAG)

    @property
    def discard_on_audio_alter(self) -> bool:
        return self._flag(self.FLAG23_ALTERFILE, self.FLAG24_ALTERFILE)

    @property
    def read_only(self) -> bool:
        return self._flag(self.FLAG23_READONLY, self.FLAG24_READONLY)

    @property
    def compressed(self) -> bool:
        return self._flag(self.FLAG23_COMPRESS, self.FLAG24_COMPRESS)

    @property
    def encrypted(self) -> bool:
        return self._flag(self.FLAG23_ENCRYPT, self.FLAG24_ENCRYPT)

    @property
    def grouping(self) -> bool:
        return self._flag(self.FLAG23_GROUP, self.FLAG24_GROUPID)

    @property
    def unsynchronised(self) -> bool:
        return self._flag(0, self.FLAG24_UNSYNCH)

    @property
    def data_length_indicator(self) -> bool:
        return self._flag(0, self.FLAG24_DATALEN)

    @property
    def header_size(self) -> int:
        """Size of the frame header including the extra bytes announced
        by the format flags"""

        size = HEADER_SIZE
        if self.compressed:
            size += 4
        if self.encrypted:
            size += 1
        if self.grouping:
            size += 1
        if self.data_length_indicator:
            size += 4
        return size

    @property
    def group_identity(self) -> int:
        """The group identity byte, 0 if the frame isn't grouped"""

        if not self.grouping:
            return 0
        if self.version <= 3:
            index = self.header_size - 1
        else:
            index = HEADER_SIZE
        if index >= len(self._data):
            return 0
        return self._data[index]

    def _writable(self) -> bool:
        """Marks the frame edited, False if it is read-only"""

        if self.read_only:
            return False
        self._edited = True
        return True

    def _status_flags(self) -> int:
        flags = 0
        if self.discard_on_tag_alter:
            flags |= self.FLAG24_ALTERTAG
        if self.discard_on_audio_alter:
            flags |= self.FLAG24_ALTERFILE
        if self.read_only:
            flags |= self.FLAG24_READONLY
        return flags

    def _key(self) -> tuple[object, ...]:
        return (self._data,)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        if type(other) is not type(self) or \
                other._frame_id != self._frame_id or other._null != self._null:
            return False
        return self._null or self._key() == other._key()

    @override
    def __hash__(self):
        raise TypeError("Frame objects are unhashable")

    @override
    def __repr__(self) -> str:
        state = " null" if self._null else ""
        return f"<{type(self).__name__} {self.FrameID}{state}>"

    def pprint(self) -> str:
        """Return a human-readable representation of the frame."""
        return f"{self.FrameID}={self._pprint()}"

    def _pprint(self) -> str:
        return "[unrepresentable data]"


class UnknownFrame(Frame):
    """A frame of unknown type, kept as opaque bytes.

    Also the result of every frame that couldn't be read at all.
    """

    @classmethod
    def null_frame(cls,
                   frame_id: str | Frames | FrameID = Frames.XXXX) -> Self:
        frame = cls(frame_id)
        frame._null = True
        return frame

    @override
    def read(self) -> None:
        self._null = len(self._data) <= HEADER_SIZE or \
            self.compressed or self.encrypted

    @property
    @override
    def empty(self) -> bool:
        return len(self._data) <= HEADER_SIZE

    @override
    def write(self) -> bytes:
        """Keeps the bytes as they are, apart from the frame size which
        becomes synchsafe for frames coming from an ID3v2.3 tag.

        Frames flagged for discarding on tag alteration are dropped.
        """

        old_version = self.version
        discard = self.discard_on_tag_alter
        flags = self._status_flags()
        if self.grouping:
            flags |= self.FLAG24_GROUPID
        self.version = WRITE_VERSION
        self._edited = False

        if discard or self._null or self.empty:
            self._data = b""
            self._null = True
            return self._data

        if old_version == 3:
            size = len(self._data) - HEADER_SIZE
            self._data = (self._data[:4] +
                          encode_int(size, 4, synchsafe=True) +
                          pack(">H", flags) + self._data[HEADER_SIZE:])
        return self._data

    @override
    def _pprint(self) -> str:
        return f"[{self.size()} bytes]"


class TextFrame(Frame):
    """Text strings.

    Multiple values are stored in one string, separated by
    `separator`. ID3v2.3 uses '/' for a few artist like frames,
    everything else uses NUL.

    ::

        TextFrame("TPE1", "a\\x00b").contents == ["a", "b"]
    """

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.XXXX,
                 text: str = ""):
        super().__init__(frame_id)
        self._text = text

    @override
    def _reset(self) -> None:
        self._text = ""

    @override
    def _readData(self, data: bytes) -> None:
        self._text = decode_text(data[0], data, 1).rstrip("\x00")

    def _encoded_text(self) -> tuple[Encoding, bytes]:
        if self._text.isascii():
            return Encoding.LATIN1, self._text.encode("latin-1")
        return Encoding.UTF8, self._text.encode("utf-8")

    @override
    def _writeData(self) -> bytes:
        encoding, text = self._encoded_text()
        return bytes([encoding]) + text

    @override
    def write(self) -> bytes:
        separator = self.separator
        if separator != "\x00":
            self._text = self._text.replace(separator, "\x00")
        return super().write()

    @property
    def separator(self) -> str:
        """Character between multiple values"""

        if self.version <= 3 and self._frame_id.frame in _LEGACY_SEPARATED:
            return "/"
        return "\x00"

    @property
    @override
    def empty(self) -> bool:
        return self._text == ""

    @property
    def content(self) -> str:
        """The whole text, multiple values included"""

        return self._text

    @content.setter
    def content(self, value: str) -> None:
        if self._writable():
            self._text = value

    @property
    def contents(self) -> list[str]:
        """The separated values. Never empty, [""] if there is no text."""

        values = [v for v in self._text.split(self.separator) if v]
        return values or [""]

    @contents.setter
    def contents(self, values: Iterable[str]) -> None:
        if self._writable():
            self._text = self.separator.join(values)

    def __iadd__(self, value: str) -> Self:
        if self._writable():
            if self._text:
                self._text += self.separator + value
            else:
                self._text = value
        return self

    def __str__(self) -> str:
        return self._text

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self._text == other
        return super().__eq__(other)

    __hash__ = Frame.__hash__

    def __iter__(self) -> Iterator[str]:
        return iter(self.contents)

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._text,)

    @override
    def _pprint(self) -> str:
        return " / ".join(self.contents)


class NumericTextFrame(TextFrame):
    """Numerical text strings.

    Values which are not made of ASCII digits only are rejected: a
    single value becomes "" and lists lose their non-numerical parts.
    """

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.XXXX,
                 text: str | int = ""):
        super().__init__(frame_id, self._validate(text))

    @staticmethod
    def _validate(value: str | int) -> str:
        value = str(value)
        return value if is_numerical(value) else ""

    @override
    def _readData(self, data: bytes) -> None:
        super()._readData(data)
        self._text = self.separator.join(
            v for v in self.contents if is_numerical(v))

    @property
    @override
    def content(self) -> str:
        return self._text

    @content.setter
    def content(self, value: str | int) -> None:
        if self._writable():
            self._text = self._validate(value)

    @property
    @override
    def contents(self) -> list[str]:
        return super().contents

    @contents.setter
    def contents(self, values: Iterable[str | int]) -> None:
        if self._writable():
            self._text = self.separator.join(
                str(v) for v in values if is_numerical(str(v)))

    @property
    def value(self) -> int:
        """The leading integer of the text, 0 if there is none"""

        return atoll(self._text)

    @property
    def int_contents(self) -> list[int]:
        return [atoll(v) for v in self.contents]

    @int_contents.setter
    def int_contents(self, values: Iterable[int]) -> None:
        self.contents = [str(v) for v in values]

    @override
    def __iadd__(self, value: str | int) -> Self:
        value = str(value)
        if is_numerical(value):
            super().__iadd__(value)
        return self

    def __int__(self) -> int:
        return self.value

    def __pos__(self) -> int:
        return self.value


class DescriptiveTextFrame(TextFrame):
    """Text with a description and, depending on `options`, a language.

    Used for TXXX, WXXX, COMM, USLT and USER.

    Args:
        options (int): A combination of `LANGUAGE` (a three byte language
            code follows the encoding), `LATIN1_TEXT` (the text is always
            Latin-1, whatever the encoding says) and `NO_DESCRIPTION`
            (there is no description field).
    """

    LANGUAGE: Final = 0x1
    LATIN1_TEXT: Final = 0x2
    NO_DESCRIPTION: Final = 0x4

    LANGUAGE_SIZE: Final = 3

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.XXXX,
                 text: str = "", description: str = "", language: str = "",
                 options: int = 0):
        super().__init__(frame_id, text)
        self.options = options
        self._description = "" if self.no_description else description
        self._language = language if self.has_language and \
            len(language) == self.LANGUAGE_SIZE else ""

    @property
    def has_language(self) -> bool:
        return bool(self.options & self.LANGUAGE)

    @property
    def latin1_text(self) -> bool:
        return bool(self.options & self.LATIN1_TEXT)

    @property
    def no_description(self) -> bool:
        return bool(self.options & self.NO_DESCRIPTION)

    @override
    def _reset(self) -> None:
        super()._reset()
        self._description = ""
        self._language = ""

    @override
    def _readData(self, data: bytes) -> None:
        if len(data) <= (4 if self.has_language else 1):
            raise ID3JunkFrameError("frame too small")

        encoding = Encoding.from_byte(data[0])
        gap = 2 if encoding.wide else 1
        start = 1

        if self.has_language:
            self._language = data[1:4].decode("latin-1")
            start = 4

        end = -1
        if not self.no_description:
            end = find_terminator(data, encoding, start)
        if end == -1:
            # no description, everything after the language is text
            end = start
            gap = 0
        else:
            self._description = decode_text(encoding, data, start, end)

        text_encoding = Encoding.LATIN1 if self.latin1_text else encoding
        self._text = decode_text(text_encoding, data, end + gap).rstrip("\x00")

    @override
    def _writeData(self) -> bytes:
        data = [bytes([Encoding.UTF8])]
        if self.has_language:
            data.append((self._language or "xxx").encode("latin-1"))
        if not self.no_description:
            data.append(self._description.encode("utf-8") + b"\x00")
        if self.latin1_text:
            data.append(self._text.encode("latin-1", "replace"))
        else:
            data.append(self._text.encode("utf-8"))
        return b"".join(data)

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        if not self.no_description and self._writable():
            self._description = value

    @property
    def language(self) -> str:
        """Three character ISO-639-2 language code, or "" """

        return self._language

    @language.setter
    def language(self, value: str) -> None:
        if self.has_language and self._writable():
            self._language = value if len(value) == self.LANGUAGE_SIZE else ""

    def set_content(self, content: str, description: str | None = None,
                    language: str | None = None) -> None:
        """Sets the text and, if given, the description and language"""

        self.content = content
        if description is not None:
            self.description = description
        if language is not None:
            self.language = language

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._text, self._description, self._language)

    @override
    def _pprint(self) -> str:
        parts = [p for p in (self._description, self._language) if p]
        prefix = "[{}]=".format("][".join(parts)) if parts else ""
        return prefix + self._text


class UrlFrame(TextFrame):
    """A frame containing a URL string.

    The URL is stored without an encoding byte and is always Latin-1.
    """

    @override
    def _readData(self, data: bytes) -> None:
        self._text = decode_text(Encoding.LATIN1, data).rstrip("\x00")

    @override
    def _writeData(self) -> bytes:
        return self._text.encode("latin-1", "replace")

    @property
    @override
    def separator(self) -> str:
        return "\x00"

    @override
    def _pprint(self) -> str:
        return self._text


class Picture(NamedTuple):
    """An attached picture, as returned by the tag level getters"""

    data: bytes = b""
    mime: str = ""
    description: str = ""
    type: PictureType = PictureType.OTHER

    @property
    def null(self) -> bool:
        return not PictureFrame.allowed_mime(self.mime)


class PictureFrame(Frame):
    """Attached (or linked) Picture.

    Only PNG and JPEG images are accepted, a picture with any other MIME
    type makes the frame null.
    """

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.APIC,
                 data: bytes = b"", mime: str = "", description: str = "",
                 type: int = PictureType.OTHER):
        super().__init__(frame_id)
        self._picture = bytes(data)
        self._mime = mime
        self._description = description
        self._type = PictureType.from_byte(type)
        if mime:
            self._null = not self.allowed_mime(mime)

    @staticmethod
    def allowed_mime(mime: str) -> bool:
        return mime in ALLOWED_MIME_TYPES

    @override
    def _reset(self) -> None:
        self._picture = b""
        self._mime = ""
        self._description = ""
        self._type = PictureType.OTHER

    @override
    def _readData(self, data: bytes) -> None:
        encoding = Encoding.from_byte(data[0])

        end = data.find(b"\x00", 1)
        if end == -1:
            raise ID3JunkFrameError("MIME type not terminated")
        mime = data[1:end].decode("latin-1")
        if not self.allowed_mime(mime):
            raise ID3JunkFrameError(f"MIME type not allowed: {mime!r}")
        self._mime = mime

        if end + 1 >= len(data):
            raise ID3JunkFrameError("missing picture type")
        self._type = PictureType.from_byte(data[end + 1])

        start = end + 2
        end = find_terminator(data, encoding, start)
        if end == -1:
            raise ID3JunkFrameError("description not terminated")
        self._description = decode_text(encoding, data, start, end)
        self._picture = data[end + (2 if encoding.wide else 1):]

    @override
    def _writeData(self) -> bytes:
        return b"".join([
            bytes([Encoding.UTF8]),
            self._mime.encode("latin-1", "replace"), b"\x00",
            bytes([self._type]),
            self._description.encode("utf-8"), b"\x00",
            self._picture,
        ])

    @property
    @override
    def empty(self) -> bool:
        return not self._picture

    @property
    def mime(self) -> str:
        return self._mime

    @property
    def data(self) -> bytes:
        """The image data"""

        return self._picture

    @property
    def picture_type(self) -> PictureType:
        return self._type

    @picture_type.setter
    def picture_type(self, value: int) -> None:
        if self._writable():
            self._type = PictureType.from_byte(value)

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        if self._writable():
            self._description = value

    def set_picture(self, data: bytes, mime: str) -> None:
        """Replaces the image. The frame is null afterwards if `mime` is
        not an allowed MIME type."""

        if not self._writable():
            return
        self._null = not self.allowed_mime(mime)
        self._picture = bytes(data)
        self._mime = mime

    @property
    def picture(self) -> Picture:
        return Picture(self._picture, self._mime, self._description,
                       self._type)

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._mime, self._picture)

    @override
    def _pprint(self) -> str:
        type_desc = self._type._pprint()
        if self._description:
            type_desc += f" ({self._description})"
        return f"{type_desc} ({self._mime}, {len(self._picture)} bytes)"


class PlayCountFrame(Frame):
    """Play counter.

    The count is a big-endian integer of at least four bytes.
    A count of 0 is a valid value, so the frame is never empty.
    """

    MIN_COUNT_SIZE: Final = 4

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.PCNT,
                 count: int = 0):
        super().__init__(frame_id)
        self._count = count

    @override
    def _reset(self) -> None:
        self._count = 0

    @override
    def _readData(self, data: bytes) -> None:
        self._count = decode_int(data)

    @override
    def _writeData(self) -> bytes:
        return self._encode_count()

    def _encode_count(self) -> bytes:
        return encode_int(self._count).rjust(self.MIN_COUNT_SIZE, b"\x00")

    @property
    def play_count(self) -> int:
        return self._count

    @play_count.setter
    def play_count(self, value: int) -> None:
        if value < 0:
            raise ValueError("play count must not be negative")
        if self._writable():
            self._count = value

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._count,)

    @override
    def _pprint(self) -> str:
        return str(self._count)


class PopularimeterFrame(PlayCountFrame):
    """Popularimeter.

    This frame keys a rating (out of 5 stars) and play count to an email
    address. On disk the rating is a byte (1-255, 0 for unknown) which
    gets mapped to stars with a fixed non-linear table.
    """

    RATING_BYTES: Final = (0, 1, 64, 128, 196, 255)
    """On disk rating byte for each star count"""

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.POPM,
                 count: int = 0, rating: int = 0, email: str = ""):
        super().__init__(frame_id, count)
        self._rating = self._stars(rating)
        self._email = email

    @staticmethod
    def rating_from_byte(value: int) -> int:
        """Star count for an on disk rating byte"""

        if value == 0:
            return 0
        elif value <= 31:
            return 1
        elif value <= 95:
            return 2
        elif value <= 159:
            return 3
        elif value <= 223:
            return 4
        return 5

    @classmethod
    def _stars(cls, value: int) -> int:
        if value <= 5:
            return max(value, 0)
        return cls.rating_from_byte(min(value, 255))

    @override
    def _reset(self) -> None:
        super()._reset()
        self._rating = 0
        self._email = ""

    @override
    def _readData(self, data: bytes) -> None:
        try:
            email, data = decode_terminated(data, "latin1")
        except ValueError as e:
            raise ID3JunkFrameError(e) from e
        self._email = email
        if data:
            self._rating = self.rating_from_byte(data[0])
            self._count = decode_int(data[1:])

    @override
    def _writeData(self) -> bytes:
        return (self._email.encode("latin-1", "replace") + b"\x00" +
                bytes([self.rating_byte]) + self._encode_count())

    @property
    @override
    def empty(self) -> bool:
        return self._count == 0 and self._rating == 0 and self._email == ""

    @property
    def rating(self) -> int:
        """Rating from 0 to 5 stars"""

        return self._rating

    @rating.setter
    def rating(self, value: int) -> None:
        if self._writable():
            self._rating = self._stars(value)

    @property
    def rating_byte(self) -> int:
        return self.RATING_BYTES[self._rating]

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        if self._writable():
            self._email = value

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._count, self._rating, self._email)

    @override
    def _pprint(self) -> str:
        return f"{self._email}={self._rating}/5 count={self._count}"


class EventTimingFrame(Frame):
    """Event timing codes.

    Maps a `TimingCode` to the time the event happens at, in the unit
    given by `format`. Reserved codes are never stored.
    """

    TIME_SIZE: Final = 4

    def __init__(self, frame_id: str | bytes | Frames | FrameID = Frames.ETCO,
                 format: int = TimeStampFormat.MILLISECONDS):
        super().__init__(frame_id)
        self._format = TimeStampFormat(format)
        self._events: dict[int, int] = {}

    @override
    def _reset(self) -> None:
        self._format = TimeStampFormat.MILLISECONDS
        self._events = {}

    @override
    def _readData(self, data: bytes) -> None:
        try:
            self._format = TimeStampFormat(data[0])
        except ValueError as e:
            raise ID3JunkFrameError(
                f"unknown time stamp format {data[0]}") from e

        size = len(data)
        i = 1
        while i + self.TIME_SIZE < size:
            code = data[i]
            if not TimingCode.reserved(code):
                self._events.setdefault(
                    code, decode_int(data[i + 1:i + 1 + self.TIME_SIZE]))
            i += 1 + self.TIME_SIZE

    @override
    def _writeData(self) -> bytes:
        data = [bytes([self._format])]
        for code, time in self._events.items():
            data.append(bytes([code]) + encode_int(time, self.TIME_SIZE))
        return b"".join(data)

    @property
    @override
    def empty(self) -> bool:
        return not self._events

    @property
    def format(self) -> TimeStampFormat:
        return self._format

    @format.setter
    def format(self, value: int) -> None:
        value = TimeStampFormat(value)
        if self._writable():
            self._format = value

    @property
    def codes(self) -> list[TimingCode]:
        """The stored timing codes, in insertion order"""

        return [TimingCode(c) for c in self._events]

    def value(self, code: int) -> int:
        """The time of the event, 0 if it is not stored"""

        return self._events.get(code, 0)

    def set_value(self, code: int, time: int) -> None:
        if not TimingCode.reserved(code) and self._writable():
            self._events[int(code)] = time

    def clear(self) -> None:
        """Drops every event and switches to milliseconds"""

        if self._writable():
            self._events = {}
            self._format = TimeStampFormat.MILLISECONDS

    @override
    def _key(self) -> tuple[object, ...]:
        return (self._format, self._events)

    @override
    def _pprint(self) -> str:
        return " ".join(
            f"{TimingCode(c)._pprint()}={t}" for c, t in self._events.items())
