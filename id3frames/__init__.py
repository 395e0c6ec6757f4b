# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""id3frames reads and writes the frames of ID3 tags.

::

    from id3frames.id3 import ID3
    tag = ID3("song.mp3")
    tag.title()

The tag behaves like a multi-valued mapping of frame IDs to frames.
Each frame decodes itself from the raw bytes it was read from and can
re-encode itself as an ID3v2.4 frame.
"""

from id3frames._util import ID3FramesError

version: tuple[int, int, int] = (0, 3, 0)
"""Version tuple."""

version_string: str = ".".join(map(str, version))
"""Version string."""

__all__ = ["ID3FramesError", "version", "version_string"]
