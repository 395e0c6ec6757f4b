# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import re
from enum import IntEnum
from typing import Final


class Encoding(IntEnum):
    """Text Encoding"""

    LATIN1 = 0
    """ISO-8859-1"""

    UTF16 = 1
    """UTF-16 with BOM"""

    UTF16BE = 2
    """UTF-16BE without BOM"""

    UTF8 = 3
    """UTF-8"""

    @property
    def wide(self) -> bool:
        """If characters take at least two bytes"""

        return self in (Encoding.UTF16, Encoding.UTF16BE)

    @classmethod
    def from_byte(cls, value: int) -> Encoding:
        """Unknown encoding bytes fall back to Latin-1"""

        try:
            return cls(value)
        except ValueError:
            return cls.LATIN1


class PictureType(IntEnum):
    """Enumeration of image types defined by the ID3 standard for the APIC
    frame.
    """

    OTHER = 0
    """Other"""

    FILE_ICON = 1
    """32x32 pixels 'file icon' (PNG only)"""

    OTHER_FILE_ICON = 2
    """Other file icon"""

    COVER_FRONT = 3
    """Cover (front)"""

    COVER_BACK = 4
    """Cover (back)"""

    LEAFLET_PAGE = 5
    """Leaflet page"""

    MEDIA = 6
    """Media (e.g. label side of CD)"""

    LEAD_ARTIST = 7
    """Lead artist/lead performer/soloist"""

    ARTIST = 8
    """Artist/performer"""

    CONDUCTOR = 9
    """Conductor"""

    BAND = 10
    """Band/Orchestra"""

    COMPOSER = 11
    """Composer"""

    LYRICIST = 12
    """Lyricist/text writer"""

    RECORDING_LOCATION = 13
    """Recording Location"""

    DURING_RECORDING = 14
    """During recording"""

    DURING_PERFORMANCE = 15
    """During performance"""

    SCREEN_CAPTURE = 16
    """Movie/video screen capture"""

    FISH = 17
    """A bright coloured fish"""

    ILLUSTRATION = 18
    """Illustration"""

    BAND_LOGOTYPE = 19
    """Band/artist logotype"""

    PUBLISHER_LOGOTYPE = 20
    """Publisher/Studio logotype"""

    @classmethod
    def from_byte(cls, value: int) -> PictureType:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    def _pprint(self) -> str:
        return self.name.lower().replace("_", " ")


class TimeStampFormat(IntEnum):
    """Units of the values in an event timing frame"""

    MPEG_FRAMES = 1
    """Absolute time, using MPEG frames as unit"""

    MILLISECONDS = 2
    """Absolute time, using milliseconds as unit"""


class TimingCode(IntEnum):
    """Event types of the ETCO frame.

    0x17-0xDF, 0xF0-0xFC and 0xFF are reserved and never stored.
    """

    PADDING = 0x00
    INITIAL_SILENCE_END = 0x01
    INTRO_START = 0x02
    MAIN_PART_START = 0x03
    OUTRO_START = 0x04
    OUTRO_END = 0x05
    VERSE_START = 0x06
    REFRAIN_START = 0x07
    INTERLUDE_START = 0x08
    THEME_START = 0x09
    VARIATION_START = 0x0A
    KEY_CHANGE = 0x0B
    TIME_CHANGE = 0x0C
    MOMENTARY_UNWANTED_NOISE = 0x0D
    SUSTAINED_NOISE = 0x0E
    SUSTAINED_NOISE_END = 0x0F
    INTRO_END = 0x10
    MAIN_PART_END = 0x11
    VERSE_END = 0x12
    REFRAIN_END = 0x13
    THEME_END = 0x14
    PROFANITY = 0x15
    PROFANITY_END = 0x16
    NOT_PREDEFINED_SYNCH_0 = 0xE0
    NOT_PREDEFINED_SYNCH_1 = 0xE1
    NOT_PREDEFINED_SYNCH_2 = 0xE2
    NOT_PREDEFINED_SYNCH_3 = 0xE3
    NOT_PREDEFINED_SYNCH_4 = 0xE4
    NOT_PREDEFINED_SYNCH_5 = 0xE5
    NOT_PREDEFINED_SYNCH_6 = 0xE6
    NOT_PREDEFINED_SYNCH_7 = 0xE7
    NOT_PREDEFINED_SYNCH_8 = 0xE8
    NOT_PREDEFINED_SYNCH_9 = 0xE9
    NOT_PREDEFINED_SYNCH_A = 0xEA
    NOT_PREDEFINED_SYNCH_B = 0xEB
    NOT_PREDEFINED_SYNCH_C = 0xEC
    NOT_PREDEFINED_SYNCH_D = 0xED
    NOT_PREDEFINED_SYNCH_E = 0xEE
    NOT_PREDEFINED_SYNCH_F = 0xEF
    AUDIO_END = 0xFD
    """Audio end (start of silence)"""
    AUDIO_FILE_END = 0xFE

    @staticmethod
    def reserved(code: int) -> bool:
        return 0x17 <= code <= 0xDF or 0xF0 <= code <= 0xFC or code == 0xFF

    def _pprint(self) -> str:
        return self.name.lower().replace("_", " ")


ALLOWED_MIME_TYPES: Final = frozenset(
    ["png", "jpeg", "image/png", "image/jpeg"])


def decode_text(encoding: int, data: bytes, start: int = 0,
                end: int | None = None) -> str:
    """Decodes data[start:end] written in the given ID3 text encoding.

    UTF-16 data may start with a byte order mark which selects the byte
    order and gets removed; without one big-endian is assumed. Bytes
    that can't be decoded are replaced.
    """

    data = data[start:end]
    encoding = Encoding.from_byte(encoding)

    if encoding.wide:
        codec = "utf-16-be"
        if data[:2] == b"\xff\xfe":
            codec = "utf-16-le"
            data = data[2:]
        elif data[:2] == b"\xfe\xff":
            data = data[2:]
        if len(data) % 2:
            data = data[:-1]
    elif encoding == Encoding.UTF8:
        codec = "utf-8"
    else:
        codec = "latin-1"

    return data.decode(codec, "replace")


def find_terminator(data: bytes, encoding: int, start: int = 0) -> int:
    """Returns the index of the first NULL terminator at or after `start`
    or -1.

    Wide encodings are searched in steps of two bytes and a 0x00 only
    counts if the byte after it is 0x00 as well.
    """

    step = 2 if Encoding.from_byte(encoding).wide else 1
    size = len(data)
    i = start
    while i + step <= size:
        if data[i] == 0x00 and (step == 1 or data[i + 1] == 0x00):
            return i
        i += step
    return -1


def is_numerical(text: str) -> bool:
    """If text is non-empty and made of ASCII digits only"""

    return text.isascii() and text.isdigit()


_LEADING_INT: Final = re.compile(r"\s*([+-]?[0-9]+)")


def atoll(text: str) -> int:
    """The integer at the start of text, 0 if there is none"""

    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0
