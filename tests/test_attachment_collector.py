"""Tests for the compose-side attachment collector."""

import pytest

from mailrelay.clients import AttachmentCollector, SelectedFile

CEILING = 100


def _file(name: str, size: int, content_type: str = "text/plain") -> SelectedFile:
    return SelectedFile(name=name, data=b"x" * size, content_type=content_type)


class TestAddFiles:
    @pytest.fixture
    def collector(self):
        return AttachmentCollector(max_file_size=CEILING)

    def test_file_at_ceiling_is_accepted(self, collector):
        collector.add_files([_file("exact.txt", CEILING)])

        assert [f.name for f in collector.files] == ["exact.txt"]
        assert collector.error == ""

    def test_file_one_byte_over_ceiling_is_rejected(self, collector):
        collector.add_files([_file("big.bin", CEILING + 1)])

        assert collector.files == []
        assert collector.error == "One or more files exceed the maximum allowed size (100 bytes)"

    def test_mixed_selection_keeps_the_acceptable_files_in_order(self, collector):
        collector.add_files(
            [_file("a.txt", 10), _file("big.bin", CEILING + 1), _file("b.txt", 20)]
        )

        assert [f.name for f in collector.files] == ["a.txt", "b.txt"]
        assert collector.error != ""

    def test_error_reflects_only_latest_call(self, collector):
        collector.add_files([_file("big.bin", CEILING + 1)])
        collector.add_files([_file("a.txt", 1)])

        assert collector.error == ""

    def test_files_accumulate_across_calls(self, collector):
        collector.add_files([_file("a.txt", 1)])
        collector.add_files([_file("b.txt", 1)])

        assert [f.name for f in collector] == ["a.txt", "b.txt"]

    def test_default_ceiling_message_uses_megabytes(self):
        collector = AttachmentCollector(max_file_size=10 * 1024 * 1024)
        collector.add_files([_file("huge.bin", 10 * 1024 * 1024 + 1)])

        assert collector.error == "One or more files exceed the maximum allowed size (10MB)"


class TestRemoveFile:
    @pytest.fixture
    def collector(self):
        collector = AttachmentCollector(max_file_size=CEILING)
        collector.add_files([_file("a.txt", 1), _file("b.txt", 2), _file("c.txt", 3)])
        return collector

    def test_remove_keeps_order_of_remaining_files(self, collector):
        removed = collector.remove_file(1)

        assert removed.name == "b.txt"
        assert [f.name for f in collector] == ["a.txt", "c.txt"]

    def test_removing_last_file_clears_error(self, collector):
        collector.add_files([_file("big.bin", CEILING + 1)])
        assert collector.error

        for _ in range(len(collector)):
            collector.remove_file(0)

        assert len(collector) == 0
        assert collector.error == ""

    def test_error_survives_while_files_remain(self, collector):
        collector.add_files([_file("big.bin", CEILING + 1)])
        collector.remove_file(0)

        assert collector.error

    def test_same_file_can_be_selected_again_after_removal(self, collector):
        removed = collector.remove_file(0)
        collector.add_files([removed])

        assert [f.name for f in collector] == ["b.txt", "c.txt", "a.txt"]

    def test_invalid_index(self, collector):
        with pytest.raises(IndexError):
            collector.remove_file(5)


def test_selected_file_from_path(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4")

    selected = SelectedFile.from_path(path)

    assert selected.name == "report.pdf"
    assert selected.size == 8
    assert selected.content_type == "application/pdf"
