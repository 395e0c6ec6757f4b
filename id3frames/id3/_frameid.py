# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from enum import IntEnum
from functools import total_ordering
from typing import Final, override

from ._util import WRITE_VERSION


class Frames(IntEnum):
    """All ID3v2.3/2.4 frame IDs known to id3frames.

    `XXXX` stands for every frame ID that is not in this list.
    """

    AENC = 0
    APIC = 1
    ASPI = 2
    COMM = 3
    COMR = 4
    ENCR = 5
    EQU2 = 6
    EQUA = 7
    ETCO = 8
    GEOB = 9
    GRID = 10
    IPLS = 11
    LINK = 12
    MCDI = 13
    MLLT = 14
    OWNE = 15
    PCNT = 16
    POPM = 17
    POSS = 18
    PRIV = 19
    RBUF = 20
    RVA2 = 21
    RVAD = 22
    RVRB = 23
    SEEK = 24
    SIGN = 25
    SYLT = 26
    SYTC = 27
    TALB = 28
    TBPM = 29
    TCOM = 30
    TCON = 31
    TCOP = 32
    TDAT = 33
    TDEN = 34
    TDLY = 35
    TDOR = 36
    TDRC = 37
    TDRL = 38
    TDTG = 39
    TENC = 40
    TEXT = 41
    TFLT = 42
    TIPL = 43
    TIME = 44
    TIT1 = 45
    TIT2 = 46
    TIT3 = 47
    TKEY = 48
    TLAN = 49
    TLEN = 50
    TMCL = 51
    TMED = 52
    TMOO = 53
    TOAL = 54
    TOFN = 55
    TOLY = 56
    TOPE = 57
    TORY = 58
    TOWN = 59
    TPE1 = 60
    TPE2 = 61
    TPE3 = 62
    TPE4 = 63
    TPOS = 64
    TPRO = 65
    TPUB = 66
    TRCK = 67
    TRDA = 68
    TRSN = 69
    TRSO = 70
    TSO2 = 71
    TSOA = 72
    TSOC = 73
    TSOP = 74
    TSOT = 75
    TSIZ = 76
    TSRC = 77
    TSSE = 78
    TSST = 79
    TXXX = 80
    TYER = 81
    UFID = 82
    USER = 83
    USLT = 84
    WCOM = 85
    WCOP = 86
    WOAF = 87
    WOAR = 88
    WOAS = 89
    WORS = 90
    WPAY = 91
    WPUB = 92
    WXXX = 93
    XXXX = 94


Frames_2_2: Final[dict[str, str]] = {
    "BUF": "RBUF", "COM": "COMM", "CNT": "PCNT", "CRA": "AENC",
    "ETC": "ETCO", "EQU": "EQUA", "GEO": "GEOB", "IPL": "TIPL",
    "LNK": "LINK", "MLL": "MLLT", "PIC": "APIC", "POP": "POPM",
    "RVA": "RVAD", "REV": "RVRB", "STC": "SYTC", "SLT": "SYLT",
    "TT1": "TIT1", "TT2": "TIT2", "TT3": "TIT3", "TP1": "TPE1",
    "TP2": "TPE2", "TP3": "TPE3", "TP4": "TPE4", "TCM": "TCOM",
    "TXT": "TOLY", "TLA": "TLAN", "TCO": "TCON", "TAL": "TALB",
    "TPA": "TPOS", "TRK": "TRCK", "TRC": "TSRC", "TYE": "TYER",
    "TDA": "TDAT", "TIM": "TIME", "TRD": "TRDA", "TMT": "TMED",
    "TBP": "TBPM", "TEN": "TENC", "TSS": "TSSE", "TOF": "TOFN",
    "TLE": "TLEN", "TDY": "TDLY", "TKE": "TKEY", "TOT": "TOAL",
    "TOA": "TOPE", "TOL": "TOLY", "TOR": "TDOR", "TXX": "TXXX",
    "ULT": "USLT", "WAF": "WOAF", "WAR": "WOAR", "WCM": "WCOM",
    "WCP": "WCOP", "WPB": "WPUB", "WXX": "WXXX",
}
"""ID3v2.2 frame IDs mapped to their ID3v2.3/2.4 equivalent"""


_MULTIPLE: Final = frozenset([
    Frames.AENC, Frames.APIC, Frames.COMM, Frames.COMR, Frames.ENCR,
    Frames.EQU2, Frames.GEOB, Frames.GRID, Frames.LINK, Frames.POPM,
    Frames.PRIV, Frames.RVA2, Frames.SIGN, Frames.SYLT, Frames.TXXX,
    Frames.UFID, Frames.USER, Frames.USLT, Frames.WCOM, Frames.WOAR,
    Frames.WXXX,
])


@total_ordering
class FrameID:
    """Identity of a frame type.

    ::

        FrameID("TIT2") == FrameID("TT2", 2) == Frames.TIT2
        FrameID("ABCD").id == "XXXX"

    Args:
        name (str): a frame ID, a `Frames` member or another FrameID
        version (int): the ID3v2 major version `name` comes from. Below
            3 the three letter ID3v2.2 IDs get translated.
    """

    __slots__ = ("_frame",)

    _frame: Frames

    def __init__(self, name: str | bytes | Frames | FrameID = Frames.XXXX,
                 version: int = WRITE_VERSION):
        if isinstance(name, FrameID):
            frame = name.frame
        elif isinstance(name, Frames):
            frame = name
        else:
            if isinstance(name, bytes):
                name = name.decode("latin-1")
            name = name.strip(" \x00").upper()
            if version < 3:
                name = Frames_2_2.get(name, "")
            frame = Frames.__members__.get(name, Frames.XXXX)
        object.__setattr__(self, "_frame", frame)

    @override
    def __setattr__(self, name: str, value: object):
        raise AttributeError("FrameID objects are immutable")

    @property
    def frame(self) -> Frames:
        """The `Frames` member, `Frames.XXXX` if unknown"""

        return self._frame

    @property
    def id(self) -> str:
        """The four character frame ID, "XXXX" if unknown"""

        return self._frame.name

    @property
    def unknown(self) -> bool:
        return self._frame is Frames.XXXX

    @property
    def allows_multiple(self) -> bool:
        """If a tag can hold more than one frame with this ID"""

        return self._frame in _MULTIPLE

    def _coerce(self, other: object) -> Frames | None:
        if isinstance(other, FrameID):
            return other.frame
        elif isinstance(other, Frames):
            return other
        elif isinstance(other, (str, bytes)):
            return FrameID(other).frame
        return None

    @override
    def __eq__(self, other: object) -> bool:
        frame = self._coerce(other)
        if frame is None:
            return NotImplemented
        return self._frame is frame

    def __lt__(self, other: object) -> bool:
        frame = self._coerce(other)
        if frame is None:
            return NotImplemented
        return self._frame < frame

    @override
    def __hash__(self) -> int:
        return hash(self._frame)

    @override
    def __str__(self) -> str:
        return self.id

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"
