# Copyright 2005 Michael Urman
# Copyright 2016 Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import re
import struct
from collections.abc import Iterable, Iterator
from typing import IO, Final, NamedTuple

from id3frames._util import get_size, read_full

from ._factory import FrameFactory
from ._frameid import Frames, FrameID
from ._frames import (
    DescriptiveTextFrame,
    EventTimingFrame,
    Frame,
    Picture,
    PictureFrame,
    PlayCountFrame,
    PopularimeterFrame,
    TextFrame,
    UnknownFrame,
)
from ._id3v1 import genre_name
from ._specs import PictureType, TimeStampFormat, is_numerical
from ._util import (
    HEADER_SIZE,
    MAX_TAG_SIZE,
    WRITE_VERSION,
    BitPaddedInt,
    ID3NoHeaderError,
    ID3SaveConfig,
    ID3TagError,
    ID3UnsupportedVersionError,
    decode_int,
)

type FrameKey = str | Frames | FrameID

_V1_GENRE: Final = re.compile(r"^\(\d+\)")

_YEAR_LENGTH: Final = 4

_PADDING_ALIGNMENT: Final = 4096


class ID3Header:
    """The header of an ID3v2 tag.

    Reading it leaves the file positioned at the first frame, after the
    extended header if there is one.

    Raises:
        ID3NoHeaderError: the file doesn't start with an ID3v2 tag
        ID3UnsupportedVersionError: the tag can't be read
        ID3TagError: the tag header is damaged
        IOError
    """

    _V24: Final = (2, 4, 0)
    _V23: Final = (2, 3, 0)
    _V22: Final = (2, 2, 0)
    _V11: Final = (1, 1)

    FLAG_UNSYNCH: Final = 0x80
    FLAG_EXTENDED: Final = 0x40
    FLAG_EXPERIMENTAL: Final = 0x20
    FLAG_FOOTER: Final = 0x10

    version: tuple[int, int, int] = _V24
    size: int = 0
    """Size of the tag including the header, but not the footer"""

    _flags: int = 0
    _extdata: bytes = b""

    def __init__(self, fileobj: IO[bytes] | None = None):
        """Raises ID3NoHeaderError, ID3UnsupportedVersionError, ID3TagError
        or IOError"""

        if fileobj is None:
            # for testing
            self._flags = 0
            return

        fn = getattr(fileobj, "name", "<unknown>")
        data = fileobj.read(HEADER_SIZE)
        if len(data) != HEADER_SIZE:
            raise ID3NoHeaderError(f"{fn!r}: too small")

        id3, vmaj, vrev, flags, size = struct.unpack(">3sBBB4s", data)
        self._flags = flags
        self.size = BitPaddedInt(size) + HEADER_SIZE
        self.version = (2, vmaj, vrev)

        if id3 != b"ID3":
            raise ID3NoHeaderError(f"{fn!r} doesn't start with an ID3 tag")

        if vmaj not in [2, 3, 4]:
            raise ID3UnsupportedVersionError(
                f"{fn!r} ID3v2.{vmaj} not supported")

        if vrev != 0:
            raise ID3UnsupportedVersionError(
                f"{fn!r} ID3v2.{vmaj}.{vrev} not supported")

        if not BitPaddedInt.has_valid_padding(size):
            raise ID3TagError("Header size not synchsafe")

        if self.f_unsynch and vmaj <= 3:
            raise ID3UnsupportedVersionError(
                f"{fn!r} tag-wide unsynchronisation in ID3v2.{vmaj} "
                "not supported")

        if vmaj == 2 and self.f_extended:
            # the same bit means compression in ID3v2.2
            raise ID3UnsupportedVersionError(
                f"{fn!r} compressed ID3v2.2 tags not supported")

        if self.tag_end > get_size(fileobj):
            raise ID3TagError(f"{fn!r} tag is larger than the file")

        if self.f_extended:
            extsize_data = read_full(fileobj, 4)
            if vmaj >= 4:
                # the synchsafe size includes the size field itself
                skip = BitPaddedInt(extsize_data) - 4
            else:
                skip = decode_int(extsize_data)
            if skip < 0 or HEADER_SIZE + 4 + skip > self.size:
                raise ID3TagError("invalid extended header size")
            self._extdata = read_full(fileobj, skip)

    @property
    def f_unsynch(self) -> bool:
        return bool(self._flags & self.FLAG_UNSYNCH)

    @property
    def f_extended(self) -> bool:
        return bool(self._flags & self.FLAG_EXTENDED)

    @property
    def f_experimental(self) -> bool:
        return bool(self._flags & self.FLAG_EXPERIMENTAL)

    @property
    def f_footer(self) -> bool:
        return bool(self._flags & self.FLAG_FOOTER)

    @property
    def frames_start(self) -> int:
        """Offset of the first frame"""

        if self.f_extended:
            return HEADER_SIZE + 4 + len(self._extdata)
        return HEADER_SIZE

    @property
    def tag_end(self) -> int:
        """Offset of the first byte after the tag, footer included"""

        if self.f_footer:
            return self.size + HEADER_SIZE
        return self.size

    @property
    def frames_end(self) -> int:
        """Offset of the first byte after the frames and the padding"""

        return self.size


class Text(NamedTuple):
    """The content of a text frame"""

    text: str = ""
    description: str = ""
    language: str = ""


class EventTimingCode(NamedTuple):
    """A single value of the event timing frame"""

    code: int
    value: int = 0
    milliseconds: bool = True


def process_genre(genre: str) -> str:
    """Resolves ID3v1 genre references.

    A plain number or a leading "(NN)" with nothing after it is replaced
    by the name of the ID3v1 genre. A leading "(NN)" followed by text is
    removed.
    """

    if not genre:
        return ""
    if is_numerical(genre):
        return genre_name(int(genre))

    match = _V1_GENRE.match(genre)
    if match is None:
        return genre
    rest = genre[match.end():]
    if rest:
        return rest
    return genre_name(int(match.group()[1:-1]))


def _split_number(value: str) -> tuple[str, str]:
    number, _, total = value.partition("/")
    return number, total


class ID3Tags:
    """An insertion ordered collection of frames, keyed by frame ID.

    IDs which allow multiple frames (`FrameID.allows_multiple`) can hold
    more than one frame, every other ID at most one. Frames which turned
    null are kept so `revert` can bring them back, but they are skipped by
    every accessor.
    """

    _frames: list[Frame]

    def __init__(self, *args, **kwargs):
        self._frames = []
        self._factory = FrameFactory()
        super().__init__(*args, **kwargs)

    def add(self, frame: Frame) -> bool:
        """Add a frame to the tag.

        Returns:
            bool: False if the frame is null or empty, or if the tag has a
                frame with that ID already and the ID doesn't allow
                multiple frames
        """

        if frame.null or frame.empty:
            return False
        if not frame.frame_id.allows_multiple and frame.frame_id in self:
            return False
        self._frames.append(frame)
        return True

    def getall(self, key: FrameKey) -> list[Frame]:
        """Return all frames with a given ID.

        Args:
            key (str): the frame ID, e.g. "TIT2" or Frames.TIT2
        Returns:
            List[`Frame`]: all non-null frames with the ID, in the order they
                were added
        """

        frame_id = FrameID(key)
        return [f for f in self._frames
                if not f.null and f.frame_id == frame_id]

    def get_frame[F: Frame](self, key: FrameKey,
                            cls: type[F] = Frame) -> F | None:
        """The first frame with the ID if it is an instance of `cls`,
        None otherwise"""

        frames = self.getall(key)
        if frames and isinstance(frames[0], cls):
            return frames[0]
        return None

    def _typed[F: Frame](self, key: FrameKey, cls: type[F]) -> list[F]:
        return [f for f in self.getall(key) if isinstance(f, cls)]

    def delall(self, key: FrameKey) -> None:
        """Delete all frames with the ID, null ones included."""

        frame_id = FrameID(key)
        self._frames = [f for f in self._frames if f.frame_id != frame_id]

    def setall(self, key: FrameKey, values: Iterable[Frame]) -> None:
        """Delete frames of the given type and add frames in 'values'.

        Args:
            key (str): key for frames to delete
            values (list[Frame]): frames to add
        """

        self.delall(key)
        for frame in values:
            self.add(frame)

    def clear(self) -> None:
        del self._frames[:]

    def __getitem__(self, key: FrameKey) -> Frame:
        frame = self.get_frame(key)
        if frame is None:
            raise KeyError(key)
        return frame

    def __delitem__(self, key: FrameKey) -> None:
        if key not in self:
            raise KeyError(key)
        self.delall(key)

    def __contains__(self, key: object) -> bool:
        try:
            frame_id = FrameID(key)  # type: ignore[arg-type]
        except (TypeError, AttributeError):
            return False
        return any(not f.null and f.frame_id == frame_id
                   for f in self._frames)

    def __len__(self) -> int:
        return sum(1 for f in self._frames if not f.null)

    def __iter__(self) -> Iterator[FrameID]:
        return iter(self.keys())

    def keys(self) -> list[FrameID]:
        """The IDs of all non-null frames, each once"""

        keys: list[FrameID] = []
        for frame in self._frames:
            if not frame.null and frame.frame_id not in keys:
                keys.append(frame.frame_id)
        return keys

    def values(self) -> list[Frame]:
        return [f for f in self._frames if not f.null]

    def items(self) -> list[tuple[FrameID, Frame]]:
        return [(f.frame_id, f) for f in self.values()]

    def pprint(self) -> str:
        """
        Returns:
            text: tags in a human-readable format.

        "Human-readable" is used loosely here. One line per frame, sorted,
        e.g.

            ``TIT2=My Title``

        Some frames have more than one key:

            ``POPM=user@example.org=3/5 count=12``
        """

        frames = sorted(frame.pprint() for frame in self.values())
        return "\n".join(frames)

    def revert(self) -> None:
        """Reverts every frame, dropping the ones which end up null or
        empty."""

        kept = []
        for frame in self._frames:
            frame.revert()
            if not frame.null and not frame.empty:
                kept.append(frame)
        self._frames = kept

    # Text frames

    def text(self, key: FrameKey) -> str:
        """The content of the first text frame with the ID, "" if there is
        none"""

        frame = self.get_frame(key, TextFrame)
        return "" if frame is None else frame.content

    def texts(self, key: FrameKey) -> list[str]:
        """For IDs allowing multiple frames the content of every frame,
        otherwise the separated values of the single frame.

        Never empty, [""] if there is no such frame.
        """

        frame_id = FrameID(key)
        if frame_id.allows_multiple:
            frames = self._typed(frame_id, TextFrame)
            return [f.content for f in frames] or [""]

        frame = self.get_frame(frame_id, TextFrame)
        return [""] if frame is None else frame.contents

    def texts_full(self, key: FrameKey) -> list[Text]:
        """Text, description and language of every text frame with the ID.

        Never empty, [Text()] if there is no such frame.
        """

        return [self._text_of(f) for f in self._typed(key, TextFrame)] \
            or [Text()]

    @staticmethod
    def _text_of(frame: TextFrame) -> Text:
        if isinstance(frame, DescriptiveTextFrame):
            return Text(frame.content, frame.description, frame.language)
        return Text(frame.content)

    def set_text(self, key: FrameKey, text: str | Iterable[str],
                 description: str | None = None,
                 language: str | None = None) -> bool:
        """Sets the content of the first text frame with the ID, creating it
        if needed.

        A list sets the separated values. Description and language only
        apply to descriptive text frames. A frame with the ID that isn't a
        text frame gets replaced.

        Returns:
            bool: False if no text frame exists for the ID
        """

        frame_id = FrameID(key)
        current = self.getall(frame_id)
        if current and not isinstance(current[0], TextFrame):
            self._frames.remove(current[0])

        frame = self.get_frame(frame_id, TextFrame)
        if frame is None:
            content = text if isinstance(text, str) else ""
            frame = self._factory.create_text(
                frame_id, content, description or "", language or "")
            if not isinstance(frame, TextFrame):
                return False
            if not isinstance(text, str):
                frame.contents = text
            return self.add(frame)

        if not isinstance(text, str):
            frame.contents = text
        elif isinstance(frame, DescriptiveTextFrame):
            frame.set_content(text, description, language)
        else:
            frame.content = text
        return True

    def title(self) -> str:
        return self.text(Frames.TIT2)

    def set_title(self, title: str) -> None:
        self.set_text(Frames.TIT2, title)

    def artist(self) -> str:
        return self.text(Frames.TPE1)

    def artists(self) -> list[str]:
        return self.texts(Frames.TPE1)

    def set_artist(self, artist: str | Iterable[str]) -> None:
        self.set_text(Frames.TPE1, artist)

    def album(self) -> str:
        return self.text(Frames.TALB)

    def albums(self) -> list[str]:
        return self.texts(Frames.TALB)

    def set_album(self, album: str | Iterable[str]) -> None:
        self.set_text(Frames.TALB, album)

    def album_artist(self) -> str:
        return self.text(Frames.TPE2)

    def album_artists(self) -> list[str]:
        return self.texts(Frames.TPE2)

    def set_album_artist(self, album_artist: str | Iterable[str]) -> None:
        self.set_text(Frames.TPE2, album_artist)

    def composer(self) -> str:
        return self.text(Frames.TCOM)

    def composers(self) -> list[str]:
        return self.texts(Frames.TCOM)

    def set_composer(self, composer: str | Iterable[str]) -> None:
        self.set_text(Frames.TCOM, composer)

    def bpm(self) -> str:
        return self.text(Frames.TBPM)

    def set_bpm(self, bpm: str | int) -> None:
        self.set_text(Frames.TBPM, str(bpm))

    def genre(self, process: bool = True) -> str:
        """The genre, see `process_genre` for `process`"""

        genre = self.text(Frames.TCON)
        return process_genre(genre) if process else genre

    def genres(self, process: bool = True) -> list[str]:
        genres = self.texts(Frames.TCON)
        if process:
            genres = [process_genre(g) for g in genres]
        return genres

    def set_genre(self, genre: str | int) -> None:
        """Sets the genre, a number selects an ID3v1 genre"""

        if isinstance(genre, int):
            genre = genre_name(genre)
        self.set_text(Frames.TCON, genre)

    def year(self) -> str:
        """The year from TDRC, or from TYER if there is no TDRC"""

        recording_time = self.text(Frames.TDRC)
        if recording_time:
            return recording_time[:_YEAR_LENGTH]
        return self.text(Frames.TYER)

    def set_year(self, year: str | int) -> None:
        """Sets TYER and the year part of TDRC.

        The year is cut to four characters and padded with zeros. Anything
        that isn't a number clears both.
        """

        year = str(year)[:_YEAR_LENGTH]
        if is_numerical(year):
            year = year.rjust(_YEAR_LENGTH, "0")
            recording_time = self.text(Frames.TDRC)
            self.set_text(Frames.TDRC, year + recording_time[_YEAR_LENGTH:])
        else:
            year = ""
            self.set_text(Frames.TDRC, year)
        self.set_text(Frames.TYER, year)

    def _number(self, key: FrameKey, process: bool) -> str:
        number = _split_number(self.text(key))[0]
        if process and not is_numerical(number):
            return ""
        return number

    def _total(self, key: FrameKey, process: bool) -> str:
        total = _split_number(self.text(key))[1]
        if process and not is_numerical(total):
            return ""
        return total

    def _set_number(self, key: FrameKey, number: str | int) -> None:
        number = str(number)
        if not is_numerical(number):
            number = ""
        total = self._total(key, False)
        self.set_text(key, f"{number}/{total}" if total else number)

    def _set_total(self, key: FrameKey, total: str | int) -> None:
        total = str(total)
        number = self._number(key, False)
        if is_numerical(total):
            self.set_text(key, f"{number}/{total}")
        else:
            self.set_text(key, number)

    def track(self, process: bool = True) -> str:
        """The track number from TRCK, without any total.

        With `process` anything that isn't a number gives "".
        """

        return self._number(Frames.TRCK, process)

    def track_total(self, process: bool = True) -> str:
        return self._total(Frames.TRCK, process)

    def set_track(self, track: str | int) -> None:
        self._set_number(Frames.TRCK, track)

    def set_track_total(self, total: str | int) -> None:
        self._set_total(Frames.TRCK, total)

    def disc(self, process: bool = True) -> str:
        return self._number(Frames.TPOS, process)

    def disc_total(self, process: bool = True) -> str:
        return self._total(Frames.TPOS, process)

    def set_disc(self, disc: str | int) -> None:
        self._set_number(Frames.TPOS, disc)

    def set_disc_total(self, total: str | int) -> None:
        self._set_total(Frames.TPOS, total)

    def comments(self) -> list[Text]:
        """Every comment. Never empty, [Text()] if there is none."""

        return self.texts_full(Frames.COMM)

    def set_comment(self, text: str, description: str = "",
                    language: str = "eng") -> None:
        """Sets the comment with the given description, adding one if
        there is none."""

        for frame in self._typed(Frames.COMM, DescriptiveTextFrame):
            if frame.description == description:
                frame.set_content(text, description, language)
                return
        self.add(self._factory.create_text(
            Frames.COMM, text, description, language))

    # Pictures

    def picture(self) -> Picture:
        """The first attached picture, an empty Picture if there is none"""

        frame = self.get_frame(Frames.APIC, PictureFrame)
        return Picture() if frame is None else frame.picture

    def pictures(self) -> list[Picture]:
        """Every attached picture, empty if there are none"""

        return [f.picture for f in self._typed(Frames.APIC, PictureFrame)]

    def set_picture(self, picture: Picture) -> None:
        """Replaces the picture with the same description, or with the same
        type for the icon types which can only exist once. Other pictures
        matching the same way are nulled. Adds a new picture if none
        matches.

        Raises:
            ID3TagError: if the picture can't fit into a tag
        """

        if len(picture.data) + HEADER_SIZE > MAX_TAG_SIZE:
            raise ID3TagError("picture too large for a tag")

        single_type = picture.type in (PictureType.FILE_ICON,
                                       PictureType.OTHER_FILE_ICON)
        target = None
        for frame in self._typed(Frames.APIC, PictureFrame):
            if not (frame.description == picture.description or
                    (single_type and frame.picture_type == picture.type)):
                continue
            if target is None:
                target = frame
            else:
                # kept for revert(), but never written
                frame.set_picture(b"", "")

        if target is None:
            self.add(self._factory.create_picture(
                picture.data, picture.mime, picture.description, picture.type))
        else:
            target.set_picture(picture.data, picture.mime)
            target.description = picture.description
            target.picture_type = picture.type

    # Play counts and ratings

    def play_count(self, email: str | None = None) -> int:
        """The play count.

        Without `email` this is the PCNT counter, or the counter of the
        first POPM frame. With `email` it is the counter of the POPM frame
        of that user, or the PCNT counter if there are no POPM frames.
        """

        pcnt = self.get_frame(Frames.PCNT, PlayCountFrame)
        popms = self._typed(Frames.POPM, PopularimeterFrame)

        if email is None:
            if pcnt is not None:
                return pcnt.play_count
            return popms[0].play_count if popms else 0

        for popm in popms:
            if popm.email == email:
                return popm.play_count
        if not popms and pcnt is not None:
            return pcnt.play_count
        return 0

    def set_play_count(self, count: int, email: str | None = None) -> None:
        """Sets the PCNT counter, or the POPM counter of `email`"""

        if email is None:
            pcnt = self.get_frame(Frames.PCNT, PlayCountFrame)
            if pcnt is None:
                self.add(self._factory.create_play_count(count))
            else:
                pcnt.play_count = count
            return

        for popm in self._typed(Frames.POPM, PopularimeterFrame):
            if popm.email == email:
                popm.play_count = count
                return
        self.add(self._factory.create_popularimeter(count, 0, email))

    def rating(self, email: str | None = None) -> int:
        """The rating in stars (0-5) of the first POPM frame, or of the one
        of `email`. 0 if there is none."""

        for popm in self._typed(Frames.POPM, PopularimeterFrame):
            if email is None or popm.email == email:
                return popm.rating
        return 0

    def set_rating(self, rating: int, email: str = "") -> None:
        for popm in self._typed(Frames.POPM, PopularimeterFrame):
            if popm.email == email:
                popm.rating = rating
                return
        self.add(self._factory.create_popularimeter(0, rating, email))

    # Event timing

    def timing_code(self, code: int) -> EventTimingCode:
        frame = self.get_frame(Frames.ETCO, EventTimingFrame)
        if frame is None:
            return EventTimingCode(code)
        return EventTimingCode(
            code, frame.value(code),
            frame.format == TimeStampFormat.MILLISECONDS)

    def set_timing_code(self, code: int, value: int,
                        force_milliseconds: bool = False) -> None:
        """Sets an event time, adding the event timing frame if needed.

        With `force_milliseconds` a frame using MPEG frames is cleared
        first, so it switches to milliseconds.
        """

        frame = self.get_frame(Frames.ETCO, EventTimingFrame)
        if frame is None:
            frame = self._factory.create_event_timing()
            frame.set_value(code, value)
            self.add(frame)
            return

        if force_milliseconds and \
                frame.format == TimeStampFormat.MPEG_FRAMES:
            frame.clear()
        frame.set_value(code, value)

    # Writing

    def _write(self, config: ID3SaveConfig) -> bytes:
        framedata = []
        found_cover = False
        for frame in self._frames:
            if frame.null or frame.empty:
                continue
            if config.discard_non_cover_pictures and \
                    isinstance(frame, PictureFrame):
                if found_cover or \
                        frame.picture_type != PictureType.COVER_FRONT:
                    continue
                found_cover = True
            if config.discard_unknown and isinstance(frame, UnknownFrame):
                continue
            data = frame.write()
            if len(data) > HEADER_SIZE:
                framedata.append(data)
        return b"".join(framedata)

    def render(self, config: ID3SaveConfig | None = None) -> bytes:
        """Serializes the tag as an ID3v2.4.0 tag.

        Args:
            config (ID3SaveConfig): write options, the defaults if None
        Returns:
            bytes: header, frames and padding
        Raises:
            ValueError: for a `v2_version` other than 4
            ID3TagError: if the tag is too large
        """

        if config is None:
            config = ID3SaveConfig()

        if config.v2_version != WRITE_VERSION:
            raise ValueError(f"Only ID3v2.{WRITE_VERSION} can be written")

        framedata = self._write(config)
        needed = HEADER_SIZE + len(framedata)

        padding = 0
        if config.padding > 0:
            padded = int(needed + needed * config.padding)
            padded = -(-padded // _PADDING_ALIGNMENT) * _PADDING_ALIGNMENT
            if padded < MAX_TAG_SIZE:
                padding = padded - needed

        size = len(framedata) + padding
        if size > MAX_TAG_SIZE:
            raise ID3TagError(
                f"tag exceeds the maximum size of {MAX_TAG_SIZE} bytes")

        header = struct.pack(
            ">3sBBB4s", b"ID3", WRITE_VERSION, 0, 0,
            BitPaddedInt.to_str(size, width=4))
        return header + framedata + b"\x00" * padding
