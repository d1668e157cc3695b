"""
Tests for the deletion tie-break policy — critical for data safety.
The older file must survive; ties must resolve deterministically.
"""
import pytest
from unittest import mock
from dupesniff.core.resolver import ResolutionPolicy
from dupesniff.core.models import FileRecord, ClassifiedPair, Classification, TieBreak


def _pair(first: FileRecord, second: FileRecord) -> ClassifiedPair:
    return ClassifiedPair(first, second, Classification.DUPLICATE, fingerprint=1)


class TestResolutionPolicy:

    def test_newer_second_file_is_deleted(self):
        older = FileRecord("/photos/a.bin", creation_time=1000.0)
        newer = FileRecord("/photos/b.bin", creation_time=2000.0)
        assert ResolutionPolicy().resolve(_pair(older, newer)) is newer

    def test_newer_first_file_is_deleted(self):
        newer = FileRecord("/photos/a.bin", creation_time=2000.0)
        older = FileRecord("/photos/b.bin", creation_time=1000.0)
        assert ResolutionPolicy().resolve(_pair(newer, older)) is newer

    def test_tie_falls_back_to_first(self):
        first = FileRecord("/a", creation_time=1000.0)
        second = FileRecord("/b", creation_time=1000.0)
        assert ResolutionPolicy().resolve(_pair(first, second)) is first

    def test_unreadable_time_falls_back_to_first(self, tmp_path):
        first = FileRecord(str(tmp_path / "missing.bin"))
        second = FileRecord("/b", creation_time=1000.0)
        assert ResolutionPolicy().resolve(_pair(first, second)) is first

    def test_shortest_path_keeps_shorter_path(self):
        short = FileRecord("/a/x.bin", creation_time=5.0)
        long = FileRecord("/a/deep/nested/x.bin", creation_time=5.0)
        policy = ResolutionPolicy(TieBreak.SHORTEST_PATH)
        assert policy.resolve(_pair(short, long)) is long
        assert policy.resolve(_pair(long, short)) is long

    def test_shortest_path_equal_lengths_fall_back_to_first(self):
        first = FileRecord("/a/1.bin", creation_time=5.0)
        second = FileRecord("/a/2.bin", creation_time=5.0)
        assert ResolutionPolicy(TieBreak.SHORTEST_PATH).resolve(_pair(first, second)) is first

    def test_shortest_path_does_not_override_creation_time(self):
        long_older = FileRecord("/a/very/long/path.bin", creation_time=1.0)
        short_newer = FileRecord("/b.bin", creation_time=2.0)
        policy = ResolutionPolicy(TieBreak.SHORTEST_PATH)
        assert policy.resolve(_pair(long_older, short_newer)) is short_newer

    def test_empty_pair_resolves_to_its_file(self):
        record = FileRecord("/empty.bin")
        pair = ClassifiedPair(record, record, Classification.EMPTY, fingerprint=0)
        assert ResolutionPolicy().resolve(pair) is record

    def test_creation_time_read_lazily_from_disk(self, tmp_path):
        first_path = tmp_path / "first.bin"
        second_path = tmp_path / "second.bin"
        first_path.write_bytes(b"same")
        second_path.write_bytes(b"same")
        first = FileRecord(str(first_path))
        second = FileRecord(str(second_path))

        stats = {
            str(first_path): mock.Mock(st_ctime=100.0, st_mtime=100.0, spec=["st_ctime", "st_mtime"]),
            str(second_path): mock.Mock(st_ctime=300.0, st_mtime=300.0, spec=["st_ctime", "st_mtime"]),
        }
        with mock.patch("dupesniff.core.models.os.stat", side_effect=lambda p: stats[p]):
            assert ResolutionPolicy().resolve(_pair(first, second)) is second

        assert first.creation_time == 100.0
        assert second.creation_time == 300.0

    @pytest.mark.parametrize("value", ["first", "shortest-path"])
    def test_tie_break_enum_values(self, value):
        assert TieBreak(value).value == value

    def test_metadata_change_does_not_make_original_newer(self, tmp_path):
        """
        CRITICAL: without a birth time, a chmod on the original moves st_ctime
        forward; the older st_mtime must still mark it as the original.
        """
        original = FileRecord(str(tmp_path / "original.bin"))
        copy = FileRecord(str(tmp_path / "copy.bin"))

        stats = {
            original.path: mock.Mock(st_ctime=900.0, st_mtime=100.0, spec=["st_ctime", "st_mtime"]),
            copy.path: mock.Mock(st_ctime=500.0, st_mtime=500.0, spec=["st_ctime", "st_mtime"]),
        }
        with mock.patch("dupesniff.core.models.os.stat", side_effect=lambda p: stats[p]):
            assert ResolutionPolicy().resolve(_pair(original, copy)) is copy

        assert original.creation_time == 100.0

    def test_birth_time_preferred_when_available(self, tmp_path):
        record = FileRecord(str(tmp_path / "a.bin"))
        stat_result = mock.Mock(st_birthtime=50.0, st_ctime=900.0, st_mtime=700.0,
                                spec=["st_birthtime", "st_ctime", "st_mtime"])
        with mock.patch("dupesniff.core.models.os.stat", return_value=stat_result):
            assert record.resolve_creation_time() == 50.0
