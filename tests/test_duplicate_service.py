"""
Tests for the reporter/deleter — validates the keep-first policy and report format.
These tests verify that only files after the first in each group are ever deleted.
"""
import io
from unittest import mock

import pytest

from dupfinder.core.errors import DeletionError, ErrorCollector
from dupfinder.core.grouper import GroupingMap
from dupfinder.core.models import ErrorPolicy, File
from dupfinder.services.duplicate_service import DuplicateService
from dupfinder.services.file_service import FileService


def _write_group(tmp_path, names, content=b"identical", key=1):
    groups = GroupingMap()
    for name in names:
        path = tmp_path / name
        path.write_bytes(content)
        groups.add(key, File(path=str(path), size=len(content)))
    return groups


class TestKeepFirstFilePerGroup:

    def test_marks_all_but_first_for_deletion(self):
        groups = GroupingMap()
        for path in ["/keep/me.jpg", "/delete/this1.jpg", "/delete/this2.jpg"]:
            groups.add(1, File(path=path, size=100))

        files_to_delete = DuplicateService.keep_first_file_per_group(groups)

        assert files_to_delete == ["/delete/this1.jpg", "/delete/this2.jpg"]

    def test_handles_multiple_groups_and_ignores_singletons(self):
        groups = GroupingMap()
        groups.add(1, File(path="/g1/keep.jpg", size=100))
        groups.add(1, File(path="/g1/delete.jpg", size=100))
        groups.add(2, File(path="/alone.jpg", size=50))
        groups.add(3, File(path="/g3/keep.jpg", size=200))
        groups.add(3, File(path="/g3/delete.jpg", size=200))

        files_to_delete = DuplicateService.keep_first_file_per_group(groups)

        assert files_to_delete == ["/g1/delete.jpg", "/g3/delete.jpg"]


class TestReport:

    def test_report_format_without_deletion(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b"], key=1234)
        out = io.StringIO()

        result = DuplicateService.process_results(groups, stream=out)

        assert out.getvalue() == (
            "1234 (2)\n"
            f"{tmp_path / 'a'}\t\n"
            f"{tmp_path / 'b'}\t\n"
            "\n"
        )
        assert result.groups_reported == 1
        assert result.deleted == []
        assert (tmp_path / "b").exists()

    def test_singleton_groups_produce_no_output(self, tmp_path):
        groups = _write_group(tmp_path, ["only"])
        out = io.StringIO()

        result = DuplicateService.process_results(groups, delete_duplicates=True, stream=out)

        assert out.getvalue() == ""
        assert result.groups_reported == 0
        assert (tmp_path / "only").exists()

    def test_report_is_repeatable_without_deletion(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b", "c"])
        first, second = io.StringIO(), io.StringIO()

        DuplicateService.process_results(groups, stream=first)
        DuplicateService.process_results(groups, stream=second)

        assert first.getvalue() == second.getvalue()


class TestDeletion:

    def test_keeps_first_and_deletes_rest(self, tmp_path):
        groups = _write_group(tmp_path, ["first", "second", "third"], key=9)
        out = io.StringIO()

        result = DuplicateService.process_results(groups, delete_duplicates=True, stream=out)

        assert (tmp_path / "first").exists()
        assert not (tmp_path / "second").exists()
        assert not (tmp_path / "third").exists()
        assert result.deleted == [str(tmp_path / "second"), str(tmp_path / "third")]
        assert result.freed_bytes == 2 * len(b"identical")
        assert out.getvalue() == (
            "9 (3)\n"
            f"{tmp_path / 'first'}\t\n"
            f"{tmp_path / 'second'}\t...\tDeleting duplicate.\n"
            f"{tmp_path / 'third'}\t...\tDeleting duplicate.\n"
            "\n"
        )

    def test_byte_mismatch_is_not_deleted(self, tmp_path):
        """Two files forced into one hash group but with different bytes must both survive."""
        groups = GroupingMap()
        (tmp_path / "kept").write_bytes(b"aaaa")
        (tmp_path / "collision").write_bytes(b"bbbb")
        groups.add(5, File(path=str(tmp_path / "kept"), size=4))
        groups.add(5, File(path=str(tmp_path / "collision"), size=4))
        out = io.StringIO()

        result = DuplicateService.process_results(groups, delete_duplicates=True, stream=out)

        assert (tmp_path / "collision").exists()
        assert result.skipped == [str(tmp_path / "collision")]
        assert "Skipped: content differs from kept file." in out.getvalue()

    def test_verification_can_be_disabled(self, tmp_path):
        groups = GroupingMap()
        (tmp_path / "kept").write_bytes(b"aaaa")
        (tmp_path / "collision").write_bytes(b"bbbb")
        groups.add(5, File(path=str(tmp_path / "kept"), size=4))
        groups.add(5, File(path=str(tmp_path / "collision"), size=4))

        DuplicateService.process_results(
            groups, delete_duplicates=True, verify_before_delete=False, stream=io.StringIO()
        )

        assert not (tmp_path / "collision").exists()

    def test_deletion_failure_aborts_without_rollback(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b"], key=1)
        for name in ["c", "d"]:
            (tmp_path / name).write_bytes(b"other")
            groups.add(2, File(path=str(tmp_path / name), size=5))

        service = mock.Mock(spec=FileService)
        service.delete_file.side_effect = [None, DeletionError(str(tmp_path / "d"), "Permission denied")]

        with pytest.raises(DeletionError, match="delete failed for"):
            DuplicateService.process_results(
                groups, delete_duplicates=True, file_service=service, stream=io.StringIO()
            )

        deleted = [call.args[0] for call in service.delete_file.call_args_list]
        assert deleted == [str(tmp_path / "b"), str(tmp_path / "d")]

    def test_deletion_failure_skipped_under_skip_policy(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b", "c"], key=7)
        service = mock.Mock(spec=FileService)
        service.delete_file.side_effect = [DeletionError(str(tmp_path / "b"), "busy"), None]
        collector = ErrorCollector(ErrorPolicy.SKIP)
        out = io.StringIO()

        result = DuplicateService.process_results(
            groups, delete_duplicates=True, file_service=service,
            on_error=collector, stream=out
        )

        assert result.deleted == [str(tmp_path / "c")]
        assert result.skipped == [str(tmp_path / "b")]
        assert [e.path for e in collector.errors] == [str(tmp_path / "b")]
        assert out.getvalue() == (
            "7 (3)\n"
            f"{tmp_path / 'a'}\t\n"
            f"{tmp_path / 'b'}\t...\tSkipped: busy\n"
            f"{tmp_path / 'c'}\t...\tDeleting duplicate.\n"
            "\n"
        )

    def test_vanished_duplicate_is_reported_as_deletion_error(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b"])
        (tmp_path / "b").unlink()
        collector = ErrorCollector(ErrorPolicy.SKIP)
        out = io.StringIO()

        result = DuplicateService.process_results(
            groups, delete_duplicates=True, on_error=collector, stream=out
        )

        assert result.deleted == []
        assert result.skipped == [str(tmp_path / "b")]
        assert collector.errors[0].operation == "delete"
        assert collector.errors[0].path == str(tmp_path / "b")
        assert f"{tmp_path / 'b'}\t...\tSkipped: File not found\n" in out.getvalue()

    def test_vanished_duplicate_aborts_with_deletion_error(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b"])
        (tmp_path / "b").unlink()

        with pytest.raises(DeletionError, match="File not found"):
            DuplicateService.process_results(groups, delete_duplicates=True, stream=io.StringIO())

    def test_unreadable_kept_file_stays_a_read_error(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b"])
        (tmp_path / "a").unlink()
        collector = ErrorCollector(ErrorPolicy.SKIP)

        result = DuplicateService.process_results(
            groups, delete_duplicates=True, on_error=collector, stream=io.StringIO()
        )

        assert (tmp_path / "b").exists()
        assert result.skipped == [str(tmp_path / "b")]
        assert collector.errors[0].operation == "read"

    def test_deletes_exactly_the_keep_first_selection(self, tmp_path):
        groups = _write_group(tmp_path, ["a", "b", "c"], key=1)
        for name in ["d", "e"]:
            (tmp_path / name).write_bytes(b"other")
            groups.add(2, File(path=str(tmp_path / name), size=5))
        expected = DuplicateService.keep_first_file_per_group(groups)

        result = DuplicateService.process_results(
            groups, delete_duplicates=True, stream=io.StringIO()
        )

        assert result.deleted == expected
        assert (tmp_path / "a").exists()
        assert (tmp_path / "d").exists()
