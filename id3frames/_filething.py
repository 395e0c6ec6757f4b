from typing import IO, NamedTuple


class FileThing(NamedTuple):
    """
    filename is None if the source is not a filename.
    name is a filename which can be used for file type detection.
    """
    fileobj: IO[bytes]
    filename: str | bytes | None
    name: str | None
