"""Workspace state for a merge/split session and its pure transitions.

Every transition takes a state and returns a new one; nothing is mutated.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from .config import get_config
from .utils.page_selection import validate_page_input

MERGE = "merge"
SPLIT = "split"

FAILURE_NOTICES = {
    MERGE: "Failed to merge PDFs. Please try again.",
    SPLIT: "Failed to split PDF. Please try again.",
}


@dataclass(frozen=True)
class UploadedFile:
    """A file picked by the user, held as raw bytes."""
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class WorkspaceState:
    """Everything the user has entered for the current operation."""
    active_tab: str = MERGE
    files: Tuple[UploadedFile, ...] = ()
    split_range: str = ""
    split_error: str = ""
    total_pages: int = 0
    is_processing: bool = False
    notice: str = ""

    @property
    def max_files(self) -> int:
        if self.active_tab == SPLIT:
            return 1
        return get_config().assembly.max_merge_files

    @property
    def can_add_files(self) -> bool:
        return len(self.files) < self.max_files

    @property
    def can_submit(self) -> bool:
        return bool(self.files) and not self.is_processing


def change_tab(state: WorkspaceState, tab: str) -> WorkspaceState:
    """Switch between merge and split, dropping files and selection."""
    if tab not in (MERGE, SPLIT):
        raise ValueError(f"Unknown tab '{tab}'")
    return replace(
        state,
        active_tab=tab,
        files=(),
        split_range="",
        split_error="",
        total_pages=0,
        notice="",
    )


def add_files(state: WorkspaceState, files: Iterable[UploadedFile]) -> WorkspaceState:
    """Append files, keeping only as many as the active tab allows."""
    combined = (state.files + tuple(files))[:state.max_files]
    return replace(state, files=combined, notice="")


def remove_file(state: WorkspaceState, index: int) -> WorkspaceState:
    files = tuple(f for i, f in enumerate(state.files) if i != index)
    new_state = replace(state, files=files)
    if state.active_tab == SPLIT and not files:
        new_state = set_total_pages(new_state, 0)
    return new_state


def set_total_pages(state: WorkspaceState, total_pages: int) -> WorkspaceState:
    """Record the page count of the split file and re-check the selection."""
    return _revalidate(replace(state, total_pages=total_pages))


def set_split_range(state: WorkspaceState, text: str) -> WorkspaceState:
    """Update the typed selection and re-check it."""
    return _revalidate(replace(state, split_range=text))


def begin_processing(state: WorkspaceState) -> WorkspaceState:
    return replace(state, is_processing=True, notice="")


def finish_processing(state: WorkspaceState, success: bool) -> WorkspaceState:
    """
    Leave the processing state.

    On success the inputs are cleared so the next operation starts fresh.
    On failure they are kept so the user can retry without re-uploading.
    """
    if not success:
        return replace(
            state,
            is_processing=False,
            notice=FAILURE_NOTICES[state.active_tab],
        )

    cleared = replace(state, is_processing=False, files=(), notice="")
    if state.active_tab == SPLIT:
        cleared = replace(
            cleared, split_range="", split_error="", total_pages=0
        )
    return cleared


def _revalidate(state: WorkspaceState) -> WorkspaceState:
    # Only check while the user is typing against a known page count
    if state.active_tab == SPLIT and state.split_range and state.total_pages > 0:
        error = validate_page_input(state.split_range, state.total_pages)
        return replace(state, split_error=error or "")
    return replace(state, split_error="")
