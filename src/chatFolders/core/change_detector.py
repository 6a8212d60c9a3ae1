"""Pure helpers deciding whether an edited folder diverged from its baseline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

from ..models.folder import VOLATILE_FIELDS, Folder, SessionMode


def semantic_view(folder: Folder) -> Dict[str, Any]:
    """Return the comparable fields of *folder* with bookkeeping projected out.

    Peer lists keep their order, so callers that treat them as sets must
    normalise them before comparing.
    """

    return {
        item.name: getattr(folder, item.name)
        for item in fields(folder)
        if item.name not in VOLATILE_FIELDS
    }


def is_dirty(original: Folder, working: Folder) -> bool:
    """Return ``True`` when *working* differs semantically from *original*."""

    return semantic_view(original) != semantic_view(working)


@dataclass(frozen=True, slots=True)
class HeaderState:
    """Visibility and interactivity of the panel header actions."""

    save_visible: bool
    save_enabled: bool
    options_visible: bool


def next_header_state(mode: SessionMode, dirty: bool, save_in_flight: bool) -> HeaderState:
    """Decide which header action the panel should expose.

    Create mode always offers the save button alone.  Edit mode shows exactly
    one of save or the options menu depending on *dirty*.
    """

    if SessionMode(mode) is SessionMode.CREATE:
        save_visible = True
        options_visible = False
    else:
        save_visible = dirty
        options_visible = not dirty
    return HeaderState(
        save_visible=save_visible,
        save_enabled=not save_in_flight,
        options_visible=options_visible,
    )


__all__ = ["HeaderState", "is_dirty", "next_header_state", "semantic_view"]
