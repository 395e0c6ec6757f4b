# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.


class Metadata:
    """An abstract dict-like object.

    Metadata is the base class of the tag objects in id3frames.
    """

    __module__ = "id3frames"

    def __init__(self, *args, **kwargs):
        if args or kwargs:
            self.load(*args, **kwargs)

    def load(self, *args, **kwargs):
        raise NotImplementedError

    def pprint(self) -> str:
        """Return a human-readable representation of the tags."""

        raise NotImplementedError
