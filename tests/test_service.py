"""Tests for the workspace state transitions and the assembly service."""

import pymupdf
import pytest

from pagebinder.service import AssemblyService
from pagebinder.state import (
    MERGE,
    SPLIT,
    UploadedFile,
    WorkspaceState,
    add_files,
    begin_processing,
    change_tab,
    finish_processing,
    remove_file,
    set_split_range,
    set_total_pages,
)


def create_test_pdf(page_count, width=612, height=792):
    doc = pymupdf.open()
    for i in range(page_count):
        page = doc.new_page(width=width, height=height)
        page.insert_text(pymupdf.Point(72, 72), f"Page {i + 1}", fontsize=12)
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


def upload(name="doc.pdf", pages=3):
    return UploadedFile(name=name, data=create_test_pdf(pages))


class TestWorkspaceState:
    """Tests for the pure state transitions."""

    def test_defaults(self):
        state = WorkspaceState()
        assert state.active_tab == MERGE
        assert state.files == ()
        assert state.max_files == 3
        assert not state.can_submit

    def test_add_files_truncates_for_merge(self):
        files = [UploadedFile(f"{i}.pdf", b"x") for i in range(5)]
        state = add_files(WorkspaceState(), files)
        assert [f.name for f in state.files] == ["0.pdf", "1.pdf", "2.pdf"]
        assert not state.can_add_files

    def test_add_files_truncates_for_split(self):
        state = change_tab(WorkspaceState(), SPLIT)
        state = add_files(state, [UploadedFile("a.pdf", b"x"), UploadedFile("b.pdf", b"y")])
        assert [f.name for f in state.files] == ["a.pdf"]

    def test_transitions_do_not_mutate(self):
        original = WorkspaceState()
        updated = add_files(original, [UploadedFile("a.pdf", b"x")])
        assert original.files == ()
        assert len(updated.files) == 1

    def test_remove_file(self):
        state = add_files(WorkspaceState(), [UploadedFile("a.pdf", b"x"), UploadedFile("b.pdf", b"y")])
        state = remove_file(state, 0)
        assert [f.name for f in state.files] == ["b.pdf"]

    def test_change_tab_clears_inputs(self):
        state = change_tab(WorkspaceState(), SPLIT)
        state = add_files(state, [UploadedFile("a.pdf", b"x")])
        state = set_total_pages(state, 5)
        state = set_split_range(state, "9")

        state = change_tab(state, MERGE)

        assert state.files == ()
        assert state.split_range == ""
        assert state.split_error == ""
        assert state.total_pages == 0

    def test_unknown_tab(self):
        with pytest.raises(ValueError):
            change_tab(WorkspaceState(), "rotate")

    def test_live_validation_needs_page_count(self):
        state = change_tab(WorkspaceState(), SPLIT)
        state = set_split_range(state, "1-3,7")
        assert state.split_error == ""

        state = set_total_pages(state, 5)
        assert state.split_error == "Page 7 is out of range. This PDF has 5 pages."

        state = set_split_range(state, "1-3")
        assert state.split_error == ""

    def test_empty_range_shows_no_live_error(self):
        state = set_total_pages(change_tab(WorkspaceState(), SPLIT), 5)
        state = set_split_range(state, "")
        assert state.split_error == ""

    def test_no_live_validation_in_merge(self):
        state = set_total_pages(WorkspaceState(), 5)
        state = set_split_range(state, "abc")
        assert state.split_error == ""

    def test_finish_success_clears_split_inputs(self):
        state = change_tab(WorkspaceState(), SPLIT)
        state = add_files(state, [UploadedFile("a.pdf", b"x")])
        state = set_split_range(set_total_pages(state, 5), "1-2")

        state = finish_processing(begin_processing(state), success=True)

        assert not state.is_processing
        assert state.files == ()
        assert state.split_range == ""
        assert state.total_pages == 0

    def test_finish_failure_keeps_inputs(self):
        state = add_files(WorkspaceState(), [UploadedFile("a.pdf", b"x")])

        state = finish_processing(begin_processing(state), success=False)

        assert not state.is_processing
        assert len(state.files) == 1
        assert state.notice == "Failed to merge PDFs. Please try again."


class TestAssemblyService:
    """Tests for AssemblyService."""

    def setup_method(self):
        self.service = AssemblyService()

    def test_health_check(self):
        health = self.service.health_check()
        assert health["healthy"] is True
        assert health["supported_operations"] == ["inspect", "merge", "split"]

    def test_supports_operation(self):
        assert self.service.supports_operation("merge")
        assert not self.service.supports_operation("extract")

    def test_unknown_operation(self):
        result = self.service.process_document("rotate", [])
        assert not result.success
        assert result.error_code == "INVALID_OPERATION"

    def test_decode_failure_is_generic(self):
        result = self.service.process_document(
            "merge", [("bad.pdf", b"not a pdf at all")]
        )
        assert not result.success
        assert result.error_code == "DECODE_FAILED"
        assert result.error_message == "Failed to merge PDFs. Please try again."
        assert result.output_data == b""

    def test_selection_error_is_precise(self):
        result = self.service.process_document(
            "split", [("doc.pdf", create_test_pdf(3))], {"pages": "1--2"}
        )
        assert not result.success
        assert result.error_code == "INVALID_SELECTION"
        assert result.error_message == (
            "Invalid format. Check your input for extra commas or hyphens."
        )

    def test_request_error_is_reported(self):
        result = self.service.process_document(
            "merge", [("a.pdf", create_test_pdf(1))], {"paper_size": "napkin"}
        )
        assert not result.success
        assert result.error_code == "VALIDATION_ERROR"
        assert result.error_message == "Unknown paper size 'napkin'"

    def test_submit_merge(self):
        state = add_files(WorkspaceState(), [upload("a.pdf", 3), upload("b.pdf", 2)])

        state, result = self.service.submit(state)

        assert result.success
        assert result.metadata["pages_merged"] == "5"
        assert state.files == ()
        assert not state.is_processing

    def test_submit_merge_failure_keeps_files(self):
        files = [upload("a.pdf", 1), UploadedFile("broken.pdf", b"garbage")]
        state = add_files(WorkspaceState(), files)

        state, result = self.service.submit(state)

        assert not result.success
        assert len(state.files) == 2
        assert state.notice == "Failed to merge PDFs. Please try again."

    def test_load_split_info(self):
        state = add_files(change_tab(WorkspaceState(), SPLIT), [upload("a.pdf", 4)])

        state = self.service.load_split_info(state)

        assert state.total_pages == 4

    def test_submit_split(self):
        state = add_files(change_tab(WorkspaceState(), SPLIT), [upload("a.pdf", 10)])
        state = self.service.load_split_info(state)
        state = set_split_range(state, "2, 5-7")

        state, result = self.service.submit(state)

        assert result.success
        assert result.metadata["pages_selected"] == "4"
        assert result.metadata["filename"] == "splitted.pdf"
        assert state.files == ()
        assert state.split_range == ""

    def test_submit_split_rejects_bad_selection(self):
        state = add_files(change_tab(WorkspaceState(), SPLIT), [upload("a.pdf", 5)])
        state = set_split_range(state, "1-3,7,9")

        state, result = self.service.submit(state)

        assert not result.success
        assert state.split_error == "Pages 7, 9 are out of range. This PDF has 5 pages."
        assert state.total_pages == 5
        assert len(state.files) == 1
        assert not state.is_processing

    def test_submit_while_processing(self):
        state = begin_processing(add_files(WorkspaceState(), [upload()]))

        new_state, result = self.service.submit(state)

        assert new_state is state
        assert result.error_code == "BUSY"

    def test_submit_without_files(self):
        _, result = self.service.submit(WorkspaceState())
        assert result.error_code == "NO_FILES"
