#!/usr/bin/python
# Copyright 2013 Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""
./id3_frames_gen.py > api/id3_frames.rst
"""

import os
import sys

sys.path.insert(0, os.path.abspath('../'))

import id3frames.id3
from id3frames.id3 import Frame, Frames, Frames_2_2, frame_class

BaseFrames = dict([(k, v) for (k, v) in vars(id3frames.id3).items()
                   if isinstance(v, type) and
                   (issubclass(v, Frame) or v is Frame)])


def print_header(header, type_="-"):
    print(header)
    print(type_ * len(header))
    print("")


def print_frames(frames):
    # less bases first, then by name
    sort_func = lambda x: (len(x[1].__mro__), x[0])

    for name, cls in sorted(frames.items(), key=sort_func):
        print(f"""
.. autoclass:: id3frames.id3.{name}
    :show-inheritance:
    :members:
""")


def print_frame_ids():
    legacy = {}
    for old, new in Frames_2_2.items():
        legacy.setdefault(new, []).append(old)

    print(".. list-table::")
    print("    :header-rows: 1")
    print("")
    print("    * - Frame ID")
    print("      - ID3v2.2")
    print("      - Class")
    for frame in Frames:
        if frame is Frames.XXXX:
            continue
        cls = frame_class(frame)[0]
        print(f"    * - {frame.name}")
        print(f"      - {', '.join(sorted(legacy.get(frame.name, [])))}")
        print(f"      - :class:`{cls.__name__}`")
    print("")


if __name__ == "__main__":

    print_header("Frame Classes")
    print_frames(BaseFrames)
    print_header("Frame IDs")
    print_frame_ids()
