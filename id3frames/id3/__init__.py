# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""ID3v2 frame reading and writing.

This is based off of the following references:

* http://id3.org/id3v2.4.0-structure
* http://id3.org/id3v2.4.0-frames
* http://id3.org/id3v2.3.0
* http://id3.org/id3v2-00
* http://id3.org/ID3v1

Frames of ID3v2.2, 2.3 and 2.4 tags are read, every frame is written as
an ID3v2.4 frame. In ID3v2.3 and older the text frames TCOM, TEXT, TOLY,
TOPE and TPE1 use '/' to separate multiple values, every other text frame
(and every text frame in ID3v2.4) uses a null character.

A frame that can't be decoded doesn't raise, it becomes "null" instead
and has to be checked with :attr:`Frame.null`.

Since this file's documentation is a little unwieldy, you are probably
interested in the :class:`ID3` class to start with.
"""

from ._factory import FrameFactory as FrameFactory, frame_class as frame_class
from ._file import ID3 as ID3
from ._frameid import FrameID as FrameID, Frames as Frames, \
    Frames_2_2 as Frames_2_2
from ._frames import DescriptiveTextFrame as DescriptiveTextFrame, \
    EventTimingFrame as EventTimingFrame, Frame as Frame, \
    NumericTextFrame as NumericTextFrame, Picture as Picture, \
    PictureFrame as PictureFrame, PlayCountFrame as PlayCountFrame, \
    PopularimeterFrame as PopularimeterFrame, TextFrame as TextFrame, \
    UnknownFrame as UnknownFrame, UrlFrame as UrlFrame
from ._id3v1 import ParseID3v1 as ParseID3v1, \
    ParseID3v1Extended as ParseID3v1Extended, genre_name as genre_name
from ._specs import Encoding as Encoding, PictureType as PictureType, \
    TimeStampFormat as TimeStampFormat, TimingCode as TimingCode
from ._tags import EventTimingCode as EventTimingCode, \
    ID3Header as ID3Header, ID3Tags as ID3Tags, Text as Text, \
    process_genre as process_genre
from ._util import ID3EncryptionUnsupportedError as \
    ID3EncryptionUnsupportedError, ID3JunkFrameError as ID3JunkFrameError, \
    ID3NoHeaderError as ID3NoHeaderError, ID3SaveConfig as ID3SaveConfig, \
    ID3TagError as ID3TagError, \
    ID3UnsupportedVersionError as ID3UnsupportedVersionError, \
    ID3Warning as ID3Warning, MAX_TAG_SIZE as MAX_TAG_SIZE, \
    WRITE_VERSION as WRITE_VERSION, error as error

__all__ = [
    "FrameFactory", "frame_class", "ID3", "FrameID", "Frames", "Frames_2_2",
    "DescriptiveTextFrame", "EventTimingFrame", "Frame", "NumericTextFrame",
    "Picture", "PictureFrame", "PlayCountFrame", "PopularimeterFrame",
    "TextFrame", "UnknownFrame", "UrlFrame", "ParseID3v1",
    "ParseID3v1Extended", "genre_name", "Encoding", "PictureType",
    "TimeStampFormat", "TimingCode", "EventTimingCode", "ID3Header",
    "ID3Tags", "Text", "process_genre", "ID3EncryptionUnsupportedError",
    "ID3JunkFrameError", "ID3NoHeaderError", "ID3SaveConfig", "ID3TagError",
    "ID3UnsupportedVersionError", "ID3Warning", "MAX_TAG_SIZE",
    "WRITE_VERSION", "error",
]
