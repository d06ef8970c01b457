"""The nine-slot block hotbar."""

from __future__ import annotations

from typing import Optional


class Hotbar:
    """A fixed row of slots, each optionally holding a block ID, with one selected."""

    SLOT_COUNT = 9

    def __init__(self) -> None:
        self._slots: list[Optional[int]] = [None] * self.SLOT_COUNT
        self._selected = 0

    def _valid(self, slot: int) -> bool:
        return 0 <= slot < self.SLOT_COUNT

    def set_slot(self, slot: int, block_id: int) -> None:
        """Put ``block_id`` in ``slot``; out-of-range slots are ignored."""
        if self._valid(slot):
            self._slots[slot] = block_id

    def clear_slot(self, slot: int) -> None:
        """Empty ``slot``; out-of-range slots are ignored."""
        if self._valid(slot):
            self._slots[slot] = None

    def slot_has_block(self, slot: int) -> bool:
        """Return True if ``slot`` holds a block."""
        return self._valid(slot) and self._slots[slot] is not None

    def select_slot(self, slot: int) -> None:
        """Select ``slot``; out-of-range slots are ignored."""
        if self._valid(slot):
            self._selected = slot

    def select_next(self) -> None:
        """Select the next slot, wrapping to the first."""
        self._selected = (self._selected + 1) % self.SLOT_COUNT

    def select_prev(self) -> None:
        """Select the previous slot, wrapping to the last."""
        self._selected = (self._selected - 1) % self.SLOT_COUNT

    @property
    def selected_slot(self) -> int:
        """Index of the selected slot."""
        return self._selected

    def current_block_id(self) -> int:
        """Block ID in the selected slot, or 0 when it is empty."""
        block_id = self._slots[self._selected]
        return 0 if block_id is None else block_id