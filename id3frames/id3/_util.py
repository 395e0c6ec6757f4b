# Copyright (C) 2005  Michael Urman
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from typing import Final, NamedTuple, Self

from id3frames._util import ID3FramesError

HEADER_SIZE: Final = 10
"""Size of an ID3v2 tag header and of an ID3v2.3/2.4 frame header"""

V22_HEADER_SIZE: Final = 6
"""Size of an ID3v2.2 frame header"""

WRITE_VERSION: Final = 4
"""The ID3v2 major version every frame and tag gets written as"""

MAX_TAG_SIZE: Final = (1 << 28) - 1
"""The largest size a synchsafe tag size can describe"""


class error(ID3FramesError):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


class ID3TagError(error, ValueError):
    pass


class ID3UnsupportedVersionError(error, NotImplementedError):
    pass


class ID3EncryptionUnsupportedError(error, NotImplementedError):
    pass


class ID3JunkFrameError(error):
    pass


class ID3Warning(error, UserWarning):
    pass


class ID3SaveConfig(NamedTuple):

    v2_version: int = WRITE_VERSION
    """The ID3v2 major version to write. Only 4 is supported."""

    padding: float = 0.0
    """Padding factor. The frame data size is grown by this factor and
    rounded up to the next multiple of 4096. 0 disables padding."""

    discard_non_cover_pictures: bool = False
    """Only write the first front cover picture"""

    discard_unknown: bool = False
    """Don't write frames of unknown type"""


def is_valid_frame_id(frame_id: str) -> bool:
    return frame_id.isalnum() and frame_id.isupper()


class unsynch:
    """Removal of the unsynchronisation scheme."""

    @staticmethod
    def decode(value: bytes, offset: int = HEADER_SIZE) -> bytes:
        """Drops every 0x00 that was inserted after a 0xFF.

        The first `offset` bytes (the frame header) are copied through
        unchanged. A 0x00 is treated as inserted when it follows a 0xFF and
        the byte after it has any of its three high bits set.
        """

        output = bytearray(value[:offset])
        size = len(value)
        i = offset
        while i < size:
            val = value[i]
            output.append(val)
            if val == 0xFF and i + 2 < size and value[i + 1] == 0x00 and \
                    value[i + 2] & 0xE0:
                i += 2
            else:
                i += 1
        return bytes(output)


class BitPaddedInt(int):
    """An integer stored in bytes which only use `bits` bits each.

    Synchsafe integers use 7 bits per byte, plain big-endian integers 8.
    """

    bits: int
    bigendian: bool

    def __new__(cls, value: int | bytes, bits: int = 7,
                bigendian: bool = True) -> Self:

        mask = (1 << bits) - 1
        numeric_value = 0
        shift = 0

        if isinstance(value, int):
            if value < 0:
                raise ValueError
            while value:
                numeric_value += (value & mask) << shift
                value >>= 8
                shift += bits
        elif isinstance(value, (bytes, bytearray)):
            if bigendian:
                value = bytes(reversed(value))
            for byte in value:
                numeric_value += (byte & mask) << shift
                shift += bits
        else:
            raise TypeError

        self = int.__new__(cls, numeric_value)
        self.bits = bits
        self.bigendian = bigendian
        return self

    def as_str(self, width: int = 4, minwidth: int = 4) -> bytes:
        return self.to_str(self, self.bits, self.bigendian, width, minwidth)

    @staticmethod
    def to_str(value: int, bits: int = 7, bigendian: bool = True,
               width: int = 4, minwidth: int = 4) -> bytes:
        """Distributes `value` over `width` bytes of `bits` bits each.

        A value too large for `width` bytes is clamped to the largest value
        that fits. With a width of 0 the smallest number of bytes (but at
        least `minwidth`) is used.
        """

        if value < 0:
            raise ValueError("Value must not be negative")

        mask = (1 << bits) - 1

        if width > 0:
            if value >> (bits * width):
                value = (1 << (bits * width)) - 1
            bytes_ = bytearray(width)
            index = 0
            while value:
                bytes_[index] = value & mask
                value >>= bits
                index += 1
        else:
            # PCNT and POPM use growing integers
            # of at least 4 bytes (=minwidth) as counters.
            bytes_ = bytearray()
            append = bytes_.append
            while value:
                append(value & mask)
                value >>= bits
            bytes_ = bytes_.ljust(minwidth, b"\x00")

        if bigendian:
            bytes_.reverse()
        return bytes(bytes_)

    @staticmethod
    def has_valid_padding(value: int | bytes, bits: int = 7) -> bool:
        """Whether the padding bits are all zero"""

        assert bits <= 8

        mask = (((1 << (8 - bits)) - 1) << bits)

        if isinstance(value, int):
            while value:
                if value & mask:
                    return False
                value >>= 8
        elif isinstance(value, (bytes, bytearray)):
            for byte in value:
                if byte & mask:
                    return False
        else:
            raise TypeError

        return True


def decode_int(data: bytes, synchsafe: bool = False) -> int:
    """Big-endian integer of `data`, 7 bits per byte if `synchsafe`.

    The high bit of each synchsafe byte is ignored, not validated.
    Empty input gives 0.
    """

    return int(BitPaddedInt(data, bits=7 if synchsafe else 8))


def encode_int(value: int, length: int = 0, synchsafe: bool = False) -> bytes:
    """Big-endian bytes of `value`, 7 bits per byte if `synchsafe`.

    A `length` of 0 gives the minimal number of bytes (a single 0x00 for
    0). Values that don't fit into `length` bytes are clamped to the
    largest representable value.
    """

    return BitPaddedInt.to_str(
        value, bits=7 if synchsafe else 8, width=length, minwidth=1)
