import os
import warnings
from io import BytesIO

from tests import TestCase, get_temp_file
from tests.test__id3frames import frame_data

from id3frames import ID3FramesError
from id3frames.id3 import ID3, ID3Tags, ID3Header, ID3SaveConfig, Frames, \
    FrameID, TextFrame, DescriptiveTextFrame, PictureFrame, Picture, \
    PlayCountFrame, PopularimeterFrame, EventTimingFrame, UnknownFrame, \
    PictureType, TimingCode, TimeStampFormat, Text, EventTimingCode, \
    ID3NoHeaderError, ID3UnsupportedVersionError, ID3TagError, ID3Warning, \
    ParseID3v1, ParseID3v1Extended, genre_name, process_genre, error
from id3frames.id3._util import BitPaddedInt, encode_int


def make_tag(frames=b"", version=4, flags=0, padding=0, size=None):
    body = frames + b"\x00" * padding
    if size is None:
        size = len(body)
    return (b"ID3" + bytes([version, 0, flags]) +
            BitPaddedInt.to_str(size) + body)


def make_v1(title=b"", artist=b"", album=b"", year=b"", comment=b"",
            genre=255, track=0):
    if track:
        comment = comment[:28].ljust(28, b"\x00") + b"\x00" + bytes([track])
    return (b"TAG" + title.ljust(30, b"\x00") + artist.ljust(30, b"\x00") +
            album.ljust(30, b"\x00") + year.ljust(4, b"\x00") +
            comment.ljust(30, b"\x00") + bytes([genre]))


def make_v1_extended(title=b"", artist=b"", album=b"", genre=b"",
                     start=b"", end=b""):
    return (b"TAG+" + title.ljust(60, b"\x00") + artist.ljust(60, b"\x00") +
            album.ljust(60, b"\x00") + b"\x00" + genre.ljust(30, b"\x00") +
            start.ljust(6, b"\x00") + end.ljust(6, b"\x00"))


TIT2 = frame_data("TIT2", b"\x00Hello")
TPE1 = frame_data("TPE1", b"\x00Artist")


class TID3Header(TestCase):

    def test_empty(self):
        header = ID3Header()
        self.assertEqual(header.version, (2, 4, 0))
        self.assertFalse(header.f_extended)
        self.assertEqual(header.frames_start, 10)

    def test_sizes(self):
        header = ID3Header(BytesIO(make_tag(TIT2, padding=14)))
        self.assertEqual(header.version, (2, 4, 0))
        self.assertEqual(header.size, 40)
        self.assertEqual(header.frames_start, 10)
        self.assertEqual(header.frames_end, 40)
        self.assertEqual(header.tag_end, 40)

    def test_footer(self):
        data = make_tag(TIT2, flags=0x10) + b"3DI" + b"\x00" * 7
        header = ID3Header(BytesIO(data))
        self.assertTrue(header.f_footer)
        self.assertEqual(header.frames_end, 26)
        self.assertEqual(header.tag_end, 36)

    def test_no_header(self):
        self.assertRaises(
            ID3NoHeaderError, ID3Header, BytesIO(b"NOTID3" + b"\x00" * 20))

    def test_too_small(self):
        self.assertRaises(ID3NoHeaderError, ID3Header, BytesIO(b"ID3"))

    def test_bad_major(self):
        for version in [0, 1, 5, 255]:
            self.assertRaises(ID3UnsupportedVersionError, ID3Header,
                              BytesIO(make_tag(TIT2, version=version)))

    def test_bad_revision(self):
        data = b"ID3\x04\x01\x00\x00\x00\x00\x10" + TIT2
        self.assertRaises(ID3UnsupportedVersionError, ID3Header,
                          BytesIO(data))

    def test_not_synchsafe(self):
        data = b"ID3\x04\x00\x00\x00\x00\x00\x80" + b"\x00" * 200
        self.assertRaises(ID3TagError, ID3Header, BytesIO(data))

    def test_unsynch_v3(self):
        data = make_tag(frame_data("TIT2", b"\x00Hi", version=3), 3, 0x80)
        self.assertRaises(ID3UnsupportedVersionError, ID3Header,
                          BytesIO(data))

    def test_unsynch_v4(self):
        header = ID3Header(BytesIO(make_tag(TIT2, flags=0x80)))
        self.assertTrue(header.f_unsynch)

    def test_compressed_v22(self):
        data = make_tag(b"TT2\x00\x00\x03\x00Hi", 2, 0x40)
        self.assertRaises(ID3UnsupportedVersionError, ID3Header,
                          BytesIO(data))

    def test_larger_than_file(self):
        data = make_tag(TIT2, size=100)
        self.assertRaises(ID3TagError, ID3Header, BytesIO(data))

    def test_extended_v4(self):
        data = make_tag(b"\x00\x00\x00\x06\x01\x00" + TIT2, flags=0x40)
        fileobj = BytesIO(data)
        header = ID3Header(fileobj)
        self.assertTrue(header.f_extended)
        self.assertEqual(header.frames_start, 16)
        self.assertEqual(fileobj.tell(), 16)

    def test_extended_v3(self):
        frame = frame_data("TIT2", b"\x00Hi", version=3)
        data = make_tag(b"\x00\x00\x00\x06" + b"\x00" * 6 + frame, 3, 0x40)
        header = ID3Header(BytesIO(data))
        self.assertEqual(header.frames_start, 20)

    def test_extended_invalid(self):
        data = make_tag(b"\x00\x00\x00\x02" + TIT2, flags=0x40)
        self.assertRaises(ID3TagError, ID3Header, BytesIO(data))
        frame = frame_data("TIT2", b"\x00Hi", version=3)
        data = make_tag(b"\x00\x00\x01\x00" + frame, 3, 0x40, padding=10)
        self.assertRaises(ID3TagError, ID3Header, BytesIO(data))


class TID3Read(TestCase):

    def test_single_frame(self):
        tags = ID3(BytesIO(make_tag(TIT2)))
        self.assertEqual(tags.version, (2, 4, 0))
        self.assertEqual(tags.title(), "Hello")
        self.assertEqual(len(tags), 1)
        self.assertEqual(list(tags), ["TIT2"])
        frame = tags["TIT2"]
        self.assertFalse(frame.null)
        self.assertFalse(frame.empty)
        self.assertEqual(tags.padding_start, 26)
        self.assertEqual(tags.size, 26)
        self.assertTrue(tags.filename is None)

    def test_padding(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            tags = ID3(BytesIO(make_tag(TIT2 + TPE1, padding=100)))
        self.assertEqual(tags.artist(), "Artist")
        self.assertEqual(tags.padding_start, 10 + len(TIT2) + len(TPE1))
        self.assertEqual(tags.size, 10 + len(TIT2) + len(TPE1) + 100)

    def test_frame_past_tag_end(self):
        broken = b"TPE1" + encode_int(100, 4, True) + b"\x00\x00\x00abc"
        with self.assertWarns(ID3Warning):
            tags = ID3(BytesIO(make_tag(TIT2 + broken)))
        self.assertEqual(tags.title(), "Hello")
        self.assertFalse("TPE1" in tags)
        self.assertEqual(tags.padding_start, 26)

    def test_stops_at_unknown_frame(self):
        unknown = frame_data("ABCD", b"xyz")
        with self.assertWarns(ID3Warning):
            tags = ID3(BytesIO(make_tag(TIT2 + unknown + TPE1)))
        self.assertTrue("TIT2" in tags)
        self.assertTrue(Frames.XXXX in tags)
        self.assertFalse("TPE1" in tags)

    def test_skips_unreadable_frame(self):
        compressed = frame_data("TALB", b"\x00\x00\x00\x05\x00abcd", 0x0008)
        tags = ID3(BytesIO(make_tag(TIT2 + compressed + TPE1)))
        self.assertFalse("TALB" in tags)
        self.assertEqual(tags.artist(), "Artist")

    def test_v23(self):
        frames = (frame_data("TIT2", b"\x00" + b"x" * 199, version=3) +
                  frame_data("TPE1", b"\x00a/b", version=3))
        tags = ID3(BytesIO(make_tag(frames, 3)))
        self.assertEqual(tags.version, (2, 3, 0))
        self.assertEqual(tags.title(), "x" * 199)
        self.assertEqual(tags.artists(), ["a", "b"])

    def test_v23_extended_header(self):
        frame = frame_data("TIT2", b"\x00Hi", version=3)
        data = make_tag(b"\x00\x00\x00\x06" + b"\x00" * 6 + frame, 3, 0x40)
        tags = ID3(BytesIO(data))
        self.assertTrue(tags.f_extended)
        self.assertEqual(tags.title(), "Hi")

    def test_v24_extended_header(self):
        data = make_tag(b"\x00\x00\x00\x06\x01\x00" + TIT2, flags=0x40)
        self.assertEqual(ID3(BytesIO(data)).title(), "Hello")

    def test_v22(self):
        frames = b"TT2\x00\x00\x06\x00Hello" + b"TP1\x00\x00\x04\x00Art"
        tags = ID3(BytesIO(make_tag(frames, 2)))
        self.assertEqual(tags.version, (2, 2, 0))
        self.assertEqual(tags.title(), "Hello")
        self.assertEqual(tags.artist(), "Art")

    def test_duplicate_frame_ignored(self):
        second = frame_data("TIT2", b"\x00Other")
        tags = ID3(BytesIO(make_tag(TIT2 + second)))
        self.assertEqual(tags.title(), "Hello")
        self.assertEqual(len(tags.getall("TIT2")), 1)

    def test_multiple_comments(self):
        frames = (frame_data("COMM", b"\x00enga\x00one") +
                  frame_data("COMM", b"\x00engb\x00two"))
        tags = ID3(BytesIO(make_tag(frames)))
        self.assertEqual(tags.comments(), [Text("one", "a", "eng"),
                                           Text("two", "b", "eng")])
        self.assertEqual(tags.texts("COMM"), ["one", "two"])

    def test_no_tag(self):
        self.assertRaises(ID3NoHeaderError, ID3, BytesIO(b"\x00" * 200))
        self.assertRaises(ID3NoHeaderError, ID3, BytesIO(b""))

    def test_unsupported_without_v1(self):
        data = make_tag(TIT2, version=5)
        self.assertRaises(ID3UnsupportedVersionError, ID3, BytesIO(data))

    def test_damaged_header_raises(self):
        self.assertRaises(ID3TagError, ID3, BytesIO(make_tag(TIT2, size=99)))
        self.assertTrue(issubclass(ID3TagError, error))

    def test_load_fileobj_keyword(self):
        tags = ID3()
        tags.load(fileobj=BytesIO(make_tag(TIT2)))
        self.assertEqual(tags.title(), "Hello")

    def test_load_resets(self):
        tags = ID3(BytesIO(make_tag(TIT2 + TPE1)))
        tags.load(BytesIO(make_tag(frame_data("TALB", b"\x00Album"))))
        self.assertEqual(list(tags), ["TALB"])

    def test_load_filename(self):
        filename = get_temp_file(make_tag(TIT2, padding=10))
        try:
            tags = ID3(filename)
            self.assertEqual(tags.filename, filename)
            self.assertEqual(tags.title(), "Hello")
        finally:
            os.remove(filename)

    def test_missing_file(self):
        self.assertRaises(ID3FramesError, ID3,
                          os.path.join("nonexistent", "file.mp3"))

    def test_version_string(self):
        self.assertEqual(ID3(BytesIO(make_tag(TIT2))).version_string(),
                         "v2.4.0")
        data = make_tag(TIT2, flags=0xB0) + b"3DI" + b"\x00" * 7
        tags = ID3(BytesIO(data))
        self.assertEqual(tags.version_string(), "v2.4.0")
        self.assertEqual(
            tags.version_string(verbose=True),
            "v2.4.0 -unsynchronisation -experimental -footer")
        self.assertTrue(tags.f_unsynch)
        self.assertTrue(tags.f_experimental)
        self.assertTrue(tags.f_footer)
        self.assertEqual(tags.size, 36)

    def test_version_string_extended(self):
        data = make_tag(b"\x00\x00\x00\x06\x01\x00" + TIT2, flags=0x40)
        self.assertEqual(ID3(BytesIO(data)).version_string(True),
                         "v2.4.0 -extendedheader")


class TID3v1(TestCase):

    V1 = make_v1(b"Title", b"Artist", b"Album", b"2004", b"Comment", 17, 3)

    def test_parse(self):
        frames = ParseID3v1(self.V1)
        self.assertEqual([f.FrameID for f in frames],
                         ["TIT2", "TPE1", "TALB", "TYER", "COMM", "TCON",
                          "TRCK"])
        self.assertEqual(frames[-2].content, "Rock")
        self.assertEqual(frames[-1].content, "3")

    def test_parse_skips_empty(self):
        frames = ParseID3v1(make_v1(b"Title", genre=255))
        self.assertEqual([f.FrameID for f in frames], ["TIT2"])

    def test_parse_not_v1(self):
        self.assertTrue(ParseID3v1(b"TAG") is None)
        self.assertTrue(ParseID3v1(b"XXX" + self.V1[3:]) is None)

    def test_parse_trailing_spaces(self):
        frames = ParseID3v1(make_v1(b"Title   "))
        self.assertEqual(frames[0].content, "Title")

    def test_v1_only(self):
        tags = ID3(BytesIO(b"\x00" * 200 + self.V1))
        self.assertEqual(tags.version, (1, 1))
        self.assertEqual(tags.version_string(), "v1.1")
        self.assertEqual(tags.size, 0)
        self.assertEqual(tags.title(), "Title")
        self.assertEqual(tags.artist(), "Artist")
        self.assertEqual(tags.album(), "Album")
        self.assertEqual(tags.year(), "2004")
        self.assertEqual(tags.genre(), "Rock")
        self.assertEqual(tags.track(), "3")
        self.assertEqual(tags.comments(), [Text("Comment", "", "eng")])

    def test_v10(self):
        data = b"\x00" * 200 + make_v1(b"Title", comment=b"x" * 30)
        tags = ID3(BytesIO(data))
        self.assertEqual(tags.version_string(), "v1")
        self.assertEqual(tags.track(), "")
        self.assertEqual(tags.comments()[0].text, "x" * 30)

    def test_load_v1_false(self):
        self.assertRaises(ID3NoHeaderError, ID3,
                          BytesIO(b"\x00" * 200 + self.V1), load_v1=False)
        tags = ID3(BytesIO(make_tag(TIT2) + self.V1), load_v1=False)
        self.assertFalse("TPE1" in tags)

    def test_unsupported_v2_with_v1(self):
        data = make_tag(TIT2, version=5) + self.V1
        tags = ID3(BytesIO(data))
        self.assertEqual(tags.version, (1, 1))
        self.assertEqual(tags.title(), "Title")

    def test_v2_precedence(self):
        comment = frame_data("COMM", b"\x00engd\x00v2 comment")
        v1 = make_v1(b"V1 Title", b"V1 Artist", comment=b"v1 comment")
        tags = ID3(BytesIO(make_tag(TIT2 + comment, padding=20) + v1))
        self.assertEqual(tags.version, (2, 4, 0))
        self.assertEqual(tags.version_string(), "v1 v2.4.0")
        self.assertEqual(tags.title(), "Hello")
        self.assertEqual(tags.artist(), "V1 Artist")
        self.assertEqual(tags.comments(), [Text("v2 comment", "d", "eng")])

    def test_extended(self):
        extended = make_v1_extended(b"T" * 40, genre=b"Psychedelic",
                                    start=b"1:05", end=b"3:30")
        v1 = make_v1(b"T" * 30, b"Artist", genre=17)
        tags = ID3(BytesIO(b"\x00" * 100 + extended + v1))
        self.assertEqual(tags.version_string(), "v1 v1Extended")
        self.assertEqual(tags.title(), "T" * 40)
        self.assertEqual(tags.artist(), "Artist")
        self.assertEqual(tags.genre(), "Psychedelic")
        self.assertEqual(tags.timing_code(TimingCode.INITIAL_SILENCE_END),
                         EventTimingCode(TimingCode.INITIAL_SILENCE_END,
                                         65000, True))
        self.assertEqual(tags.timing_code(TimingCode.AUDIO_END).value,
                         210000)

    def test_parse_extended(self):
        extended = ParseID3v1Extended(
            make_v1_extended(b"Title", start=b"bad", end=b"10:00"))
        self.assertEqual([f.FrameID for f in extended.frames], ["TIT2"])
        self.assertTrue(extended.start is None)
        self.assertEqual(extended.end, 600000)
        self.assertTrue(ParseID3v1Extended(b"TAG+") is None)

    def test_genre_name(self):
        self.assertEqual(genre_name(0), "Blues")
        self.assertEqual(genre_name(17), "Rock")
        self.assertEqual(genre_name(-1), "")
        self.assertEqual(genre_name(255), "")


class TID3Tags(TestCase):

    def setUp(self):
        self.tags = ID3()

    def test_empty(self):
        self.assertEqual(len(self.tags), 0)
        self.assertEqual(self.tags.version, (2, 4, 0))
        self.assertEqual(self.tags.version_string(), "")
        self.assertEqual(self.tags.title(), "")
        self.assertEqual(self.tags.texts("TPE1"), [""])
        self.assertEqual(self.tags.texts_full("TXXX"), [Text()])
        self.assertEqual(self.tags.comments(), [Text()])
        self.assertEqual(self.tags.picture(), Picture())
        self.assertEqual(self.tags.pictures(), [])

    def test_add(self):
        self.assertTrue(self.tags.add(TextFrame("TIT2", "a")))
        self.assertFalse(self.tags.add(TextFrame("TIT2", "b")))
        self.assertEqual(self.tags.title(), "a")

    def test_add_multiple(self):
        self.assertTrue(self.tags.add(DescriptiveTextFrame("TXXX", "a")))
        self.assertTrue(self.tags.add(DescriptiveTextFrame("TXXX", "b")))
        self.assertEqual(len(self.tags.getall("TXXX")), 2)

    def test_add_refuses_null_and_empty(self):
        self.assertFalse(self.tags.add(TextFrame("TIT2", "")))
        self.assertFalse(self.tags.add(UnknownFrame.null_frame()))
        self.assertFalse(self.tags.add(PictureFrame(data=b"x", mime="bmp")))
        self.assertEqual(len(self.tags), 0)

    def test_mapping(self):
        self.tags.add(TextFrame("TIT2", "a"))
        self.tags.add(TextFrame("TPE1", "b"))
        self.assertTrue("TIT2" in self.tags)
        self.assertTrue(Frames.TPE1 in self.tags)
        self.assertTrue(FrameID("TPE1") in self.tags)
        self.assertFalse("TALB" in self.tags)
        self.assertFalse(5 in self.tags)
        self.assertEqual(self.tags.keys(), ["TIT2", "TPE1"])
        self.assertEqual([f.content for f in self.tags.values()], ["a", "b"])
        self.assertEqual([k for k, v in self.tags.items()], ["TIT2", "TPE1"])
        self.assertEqual(self.tags["TPE1"].content, "b")
        self.assertRaises(KeyError, self.tags.__getitem__, "TALB")

    def test_delete(self):
        self.tags.add(TextFrame("TIT2", "a"))
        del self.tags["TIT2"]
        self.assertFalse("TIT2" in self.tags)
        self.assertRaises(KeyError, self.tags.__delitem__, "TIT2")

    def test_setall(self):
        self.tags.add(DescriptiveTextFrame("TXXX", "a"))
        self.tags.setall("TXXX", [DescriptiveTextFrame("TXXX", "b"),
                                  DescriptiveTextFrame("TXXX", "c")])
        self.assertEqual(self.tags.texts("TXXX"), ["b", "c"])
        self.tags.delall("TXXX")
        self.assertEqual(len(self.tags), 0)

    def test_get_frame(self):
        self.tags.add(TextFrame("TIT2", "a"))
        self.assertEqual(self.tags.get_frame("TIT2").content, "a")
        self.assertTrue(self.tags.get_frame("TIT2", PictureFrame) is None)
        self.assertTrue(self.tags.get_frame("TALB") is None)

    def test_null_frames_hidden(self):
        frame = PictureFrame(data=b"x", mime="png")
        self.tags.add(frame)
        frame.set_picture(b"y", "image/gif")
        self.assertFalse("APIC" in self.tags)
        self.assertEqual(len(self.tags), 0)
        self.assertEqual(self.tags.getall("APIC"), [])
        self.assertTrue(self.tags.add(PictureFrame(data=b"z", mime="png")))

    def test_clear(self):
        self.tags.set_title("a")
        self.tags.clear()
        self.assertEqual(len(self.tags), 0)

    def test_pprint(self):
        self.tags.set_artist("b")
        self.tags.set_title("a")
        self.assertEqual(self.tags.pprint(), "TIT2=a\nTPE1=b")

    def test_set_text(self):
        self.assertTrue(self.tags.set_text("TIT2", "a"))
        self.assertTrue(self.tags.set_text("TIT2", "b"))
        self.assertEqual(self.tags.title(), "b")
        self.assertFalse(self.tags.set_text("APIC", "x"))
        self.assertFalse(self.tags.set_text("TYER", "abc"))

    def test_set_text_list(self):
        self.tags.set_artist(["a", "b"])
        self.assertEqual(self.tags.artists(), ["a", "b"])
        self.tags.set_artist(["c"])
        self.assertEqual(self.tags.artists(), ["c"])

    def test_set_text_descriptive(self):
        self.tags.set_text("TXXX", "v", "d")
        self.assertEqual(self.tags.texts_full("TXXX"), [Text("v", "d", "")])
        self.tags.set_text("TXXX", "w")
        self.assertEqual(self.tags.texts_full("TXXX"), [Text("w", "d", "")])

    def test_set_text_replaces_other_frame(self):
        self.tags.add(UnknownFrame._fromData(
            "TIT2", 4, frame_data("TIT2", b"abc", 0x0000)))
        self.assertTrue(self.tags.set_text("TIT2", "x"))
        self.assertEqual(self.tags.title(), "x")
        self.assertEqual(len(self.tags.getall("TIT2")), 1)

    def test_named_texts(self):
        self.tags.set_album("al")
        self.tags.set_album_artist("aa")
        self.tags.set_composer(["c1", "c2"])
        self.assertEqual(self.tags.album(), "al")
        self.assertEqual(self.tags.albums(), ["al"])
        self.assertEqual(self.tags.album_artist(), "aa")
        self.assertEqual(self.tags.album_artists(), ["aa"])
        self.assertEqual(self.tags.composers(), ["c1", "c2"])
        self.assertEqual(self.tags.composer(), "c1\x00c2")

    def test_bpm(self):
        self.tags.set_bpm(120)
        self.assertEqual(self.tags.bpm(), "120")
        self.tags.set_bpm("fast")
        self.assertEqual(self.tags.bpm(), "")

    def test_genre(self):
        self.tags.set_genre(17)
        self.assertEqual(self.tags.genre(), "Rock")
        self.tags.set_genre("(17)")
        self.assertEqual(self.tags.genre(), "Rock")
        self.assertEqual(self.tags.genre(process=False), "(17)")
        self.tags.set_text("TCON", ["a", "(0)"])
        self.assertEqual(self.tags.genres(), ["a", "Blues"])
        self.assertEqual(self.tags.genres(False), ["a", "(0)"])

    def test_process_genre(self):
        self.assertEqual(process_genre(""), "")
        self.assertEqual(process_genre("17"), "Rock")
        self.assertEqual(process_genre("(17)"), "Rock")
        self.assertEqual(process_genre("(17)Live"), "Live")
        self.assertEqual(process_genre("Jazz"), "Jazz")
        self.assertEqual(process_genre("(999)"), "")
        self.assertEqual(process_genre("999"), "")
        self.assertEqual(process_genre("Rock (live)"), "Rock (live)")

    def test_year(self):
        self.tags.set_year(2004)
        self.assertEqual(self.tags.year(), "2004")
        self.assertEqual(self.tags.text("TYER"), "2004")
        self.assertEqual(self.tags.text("TDRC"), "2004")

    def test_year_keeps_date(self):
        self.tags.set_text("TDRC", "2004-05-06")
        self.assertEqual(self.tags.year(), "2004")
        self.tags.set_year("1999")
        self.assertEqual(self.tags.text("TDRC"), "1999-05-06")
        self.assertEqual(self.tags.text("TYER"), "1999")

    def test_year_padded_and_cut(self):
        self.tags.set_year("99")
        self.assertEqual(self.tags.year(), "0099")
        self.tags.set_year("12345")
        self.assertEqual(self.tags.year(), "1234")

    def test_year_invalid(self):
        self.tags.set_year(2004)
        self.tags.set_year("abc")
        self.assertEqual(self.tags.year(), "")
        self.assertEqual(self.tags.text("TYER"), "")

    def test_year_from_tyer(self):
        self.tags.set_text("TYER", "1987")
        self.assertEqual(self.tags.year(), "1987")

    def test_track(self):
        self.tags.set_track(3)
        self.assertEqual(self.tags.track(), "3")
        self.assertEqual(self.tags.track_total(), "")
        self.tags.set_track_total(10)
        self.assertEqual(self.tags.text("TRCK"), "3/10")
        self.assertEqual(self.tags.track_total(), "10")
        self.tags.set_track(4)
        self.assertEqual(self.tags.text("TRCK"), "4/10")
        self.tags.set_track_total("x")
        self.assertEqual(self.tags.text("TRCK"), "4")

    def test_track_unprocessed(self):
        self.tags.set_text("TRCK", "a/b")
        self.assertEqual(self.tags.track(), "")
        self.assertEqual(self.tags.track(False), "a")
        self.assertEqual(self.tags.track_total(), "")
        self.assertEqual(self.tags.track_total(False), "b")

    def test_disc(self):
        self.tags.set_disc("1")
        self.tags.set_disc_total(2)
        self.assertEqual(self.tags.text("TPOS"), "1/2")
        self.assertEqual(self.tags.disc(), "1")
        self.assertEqual(self.tags.disc_total(), "2")

    def test_comments(self):
        self.tags.set_comment("c1")
        self.tags.set_comment("c2", "d")
        self.tags.set_comment("c3")
        self.assertEqual(self.tags.comments(), [Text("c3", "", "eng"),
                                                Text("c2", "d", "eng")])

    def test_set_picture(self):
        front = Picture(b"a", "image/png", "front", PictureType.COVER_FRONT)
        self.tags.set_picture(front)
        self.assertEqual(self.tags.picture(), front)
        other = Picture(b"b", "image/jpeg", "front", PictureType.COVER_BACK)
        self.tags.set_picture(other)
        self.assertEqual(self.tags.pictures(), [other])
        back = Picture(b"c", "png", "back", PictureType.COVER_BACK)
        self.tags.set_picture(back)
        self.assertEqual(self.tags.pictures(), [other, back])

    def test_set_picture_icon(self):
        self.tags.set_picture(
            Picture(b"1", "png", "a", PictureType.FILE_ICON))
        self.tags.set_picture(
            Picture(b"2", "png", "b", PictureType.FILE_ICON))
        self.assertEqual(self.tags.pictures(),
                         [Picture(b"2", "png", "b", PictureType.FILE_ICON)])

    def test_set_picture_nulls_duplicates(self):
        self.tags.add(PictureFrame(Frames.APIC, b"1", "png", "same"))
        self.tags.add(PictureFrame(Frames.APIC, b"2", "png", "same"))
        picture = Picture(b"3", "png", "same", PictureType.COVER_FRONT)
        self.tags.set_picture(picture)
        self.assertEqual(self.tags.pictures(), [picture])

    def test_set_picture_bad_mime(self):
        self.tags.set_picture(Picture(b"x", "image/gif", "d"))
        self.assertEqual(self.tags.pictures(), [])

    def test_play_count(self):
        self.assertEqual(self.tags.play_count(), 0)
        self.tags.set_play_count(5)
        self.assertEqual(self.tags.play_count(), 5)
        self.assertEqual(self.tags.play_count("a@b"), 5)
        self.tags.set_play_count(7, "a@b")
        self.assertEqual(self.tags.play_count("a@b"), 7)
        self.assertEqual(self.tags.play_count("other"), 0)
        self.assertEqual(self.tags.play_count(), 5)
        self.tags.set_play_count(8)
        self.assertEqual(self.tags.get_frame("PCNT").play_count, 8)

    def test_play_count_from_popm(self):
        self.tags.add(PopularimeterFrame(Frames.POPM, 3, 0, "x"))
        self.assertEqual(self.tags.play_count(), 3)

    def test_rating(self):
        self.assertEqual(self.tags.rating(), 0)
        self.tags.set_play_count(7, "a@b")
        self.assertEqual(self.tags.rating(), 0)
        self.tags.set_rating(4, "a@b")
        self.assertEqual(self.tags.rating(), 4)
        self.assertEqual(self.tags.rating("a@b"), 4)
        self.assertEqual(self.tags.rating("x"), 0)
        self.tags.set_rating(2)
        self.assertEqual(self.tags.rating(""), 2)
        self.assertEqual(len(self.tags.getall("POPM")), 2)

    def test_timing_code(self):
        code = TimingCode.INTRO_START
        self.assertEqual(self.tags.timing_code(code),
                         EventTimingCode(code, 0, True))
        self.tags.set_timing_code(code, 500)
        self.assertEqual(self.tags.timing_code(code),
                         EventTimingCode(code, 500, True))

    def test_timing_code_force_milliseconds(self):
        frame = EventTimingFrame(format=TimeStampFormat.MPEG_FRAMES)
        frame.set_value(TimingCode.INTRO_START, 10)
        self.tags.add(frame)
        self.assertEqual(self.tags.timing_code(TimingCode.INTRO_START),
                         EventTimingCode(TimingCode.INTRO_START, 10, False))
        self.tags.set_timing_code(TimingCode.OUTRO_START, 20)
        self.assertFalse(
            self.tags.timing_code(TimingCode.OUTRO_START).milliseconds)
        self.tags.set_timing_code(TimingCode.OUTRO_END, 30, True)
        self.assertEqual(self.tags.timing_code(TimingCode.INTRO_START).value,
                         0)
        self.assertEqual(self.tags.timing_code(TimingCode.OUTRO_END),
                         EventTimingCode(TimingCode.OUTRO_END, 30, True))

    def test_revert(self):
        tags = ID3(BytesIO(make_tag(TIT2)))
        tags.set_title("x")
        tags.set_artist("y")
        tags.revert()
        self.assertEqual(tags.title(), "Hello")
        self.assertFalse("TPE1" in tags)
        self.assertEqual(len(tags), 1)
        self.assertFalse(tags["TIT2"].edited)

    def test_tags_without_file(self):
        tags = ID3Tags()
        tags.set_title("a")
        self.assertEqual(tags.title(), "a")


class TID3Render(TestCase):

    def test_empty(self):
        self.assertEqual(ID3Tags().render(),
                         b"ID3\x04\x00\x00\x00\x00\x00\x00")

    def test_render(self):
        tags = ID3()
        tags.set_title("Hello")
        self.assertEqual(tags.render(), b"ID3\x04\x00\x00\x00\x00\x00\x10" +
                         TIT2)

    def test_padding(self):
        tags = ID3()
        tags.set_title("Hello")
        data = tags.render(ID3SaveConfig(padding=0.1))
        self.assertEqual(len(data), 4096)
        self.assertEqual(BitPaddedInt(data[6:10]), 4086)
        self.assertEqual(data[26:], b"\x00" * 4070)

    def test_padding_grows(self):
        tags = ID3()
        tags.set_comment("x" * 5000)
        data = tags.render(ID3SaveConfig(padding=0.5))
        self.assertEqual(len(data) % 4096, 0)
        self.assertTrue(len(data) > 5000 * 1.5)

    def test_padding_already_aligned(self):
        tags = ID3()
        tags.set_title("x" * 2027)
        self.assertEqual(len(tags.render()), 2048)
        data = tags.render(ID3SaveConfig(padding=1.0))
        self.assertEqual(len(data), 4096)

    def test_only_v24(self):
        self.assertRaises(ValueError, ID3().render,
                          ID3SaveConfig(v2_version=3))

    def test_discard_unknown(self):
        tags = ID3()
        tags.set_title("Hello")
        tags.add(UnknownFrame._fromData(
            "PRIV", 4, frame_data("PRIV", b"xyz")))
        self.assertEqual(len(tags.render()), 10 + len(TIT2) + 13)
        data = tags.render(ID3SaveConfig(discard_unknown=True))
        self.assertEqual(data[10:], TIT2)

    def test_discard_non_cover_pictures(self):
        tags = ID3()
        for description, type_ in [("a", PictureType.BAND),
                                   ("b", PictureType.COVER_FRONT),
                                   ("c", PictureType.COVER_FRONT)]:
            tags.set_picture(Picture(b"x", "png", description, type_))
        data = tags.render(ID3SaveConfig(discard_non_cover_pictures=True))
        pictures = ID3(BytesIO(data)).pictures()
        self.assertEqual([p.description for p in pictures], ["b"])

    def test_reload(self):
        tags = ID3()
        tags.set_title("Title")
        tags.set_artist(["a", "b"])
        tags.set_comment("comment", "d")
        tags.set_picture(
            Picture(b"data", "image/png", "", PictureType.COVER_FRONT))
        tags.set_play_count(12)
        tags.set_rating(3, "a@b.com")
        tags.set_timing_code(TimingCode.AUDIO_END, 1000)
        tags.set_track(2)
        tags.set_track_total(9)

        other = ID3(BytesIO(tags.render(ID3SaveConfig(padding=0.1))))
        self.assertEqual(other.version, (2, 4, 0))
        self.assertEqual(other.title(), "Title")
        self.assertEqual(other.artists(), ["a", "b"])
        self.assertEqual(other.comments(), [Text("comment", "d", "eng")])
        self.assertEqual(other.picture(), tags.picture())
        self.assertEqual(other.play_count(), 12)
        self.assertEqual(other.rating("a@b.com"), 3)
        self.assertEqual(other.timing_code(TimingCode.AUDIO_END).value, 1000)
        self.assertEqual(other.track(), "2")
        self.assertEqual(other.track_total(), "9")
        self.assertEqual(other.pprint(), tags.pprint())

    def test_v23_written_as_v24(self):
        frames = frame_data("TPE1", b"\x00a/b", version=3)
        tags = ID3(BytesIO(make_tag(frames, 3)))
        other = ID3(BytesIO(tags.render()))
        self.assertEqual(other.version, (2, 4, 0))
        self.assertEqual(other.artists(), ["a", "b"])

    def test_discarded_frames(self):
        frames = (frame_data("TIT2", b"\x00Hi", version=3) +
                  frame_data("PRIV", b"xyz", 0x8000, version=3))
        tags = ID3(BytesIO(make_tag(frames, 3)))
        self.assertTrue("PRIV" in tags)
        self.assertEqual(ID3(BytesIO(tags.render())).keys(), ["TIT2"])

    def test_unsynchronised_unknown_frame(self):
        private = frame_data("PRIV", b"me\x00\xff\x00\xe0ab", 0x0002)
        tags = ID3(BytesIO(make_tag(private + TIT2)))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            other = ID3(BytesIO(tags.render()))
        self.assertEqual(other.keys(), ["PRIV", "TIT2"])
        self.assertEqual(other.title(), "Hello")
        self.assertEqual(other["PRIV"].bytes(),
                         frame_data("PRIV", b"me\x00\xff\xe0ab"))

    def test_pcnt_written(self):
        tags = ID3()
        tags.add(PlayCountFrame())
        self.assertEqual(ID3(BytesIO(tags.render())).play_count(), 0)
        self.assertTrue("PCNT" in ID3(BytesIO(tags.render())))
