"""Per-mode user interface state and the display state that bundles them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .image import Image


class Mode(Enum):
    """Which screen the user interface is showing."""

    STATUS = "status"
    MENU = "menu"
    EJECT = "eject"
    SELECT = "select"
    INFO = "info"
    NEW_IMAGE = "new_image"


class EjectEntry(Enum):
    """Entries on the eject confirmation screen."""

    EJECT = "eject"
    BACK = "back"


class MenuEntry(Enum):
    """Entries of the main menu."""

    EJECT = "eject"
    SELECT = "select"
    NEW = "new"
    BACK = "back"
    INFO = "info"


_MENU_NEXT = {
    MenuEntry.EJECT: MenuEntry.BACK,
    MenuEntry.SELECT: MenuEntry.EJECT,
    MenuEntry.INFO: MenuEntry.SELECT,
    MenuEntry.BACK: MenuEntry.INFO,
}

_MENU_PREVIOUS = {
    MenuEntry.EJECT: MenuEntry.SELECT,
    MenuEntry.SELECT: MenuEntry.INFO,
    MenuEntry.INFO: MenuEntry.BACK,
    MenuEntry.BACK: MenuEntry.EJECT,
}


@dataclass
class EjectState:
    """State of the eject screen: which of its two entries is highlighted."""

    current_entry: EjectEntry = EjectEntry.EJECT

    def move_to_next_entry(self) -> None:
        """Toggle between the eject and back entries."""
        if self.current_entry is EjectEntry.EJECT:
            self.current_entry = EjectEntry.BACK
        else:
            self.current_entry = EjectEntry.EJECT

    def copy(self) -> EjectState:
        return dataclasses.replace(self)


@dataclass
class InfoState:
    """State of the information screen: scroll offset of the firmware text."""

    firmware_offset: int = 0

    def copy(self) -> InfoState:
        return dataclasses.replace(self)


@dataclass
class MenuState:
    """State of the main menu: the highlighted entry."""

    current_entry: MenuEntry = MenuEntry.EJECT

    def move_to_next_entry(self) -> None:
        """Advance the highlight; the 'new' entry is not part of the cycle."""
        self.current_entry = _MENU_NEXT.get(self.current_entry, self.current_entry)

    def move_to_previous_entry(self) -> None:
        """Move the highlight back; the 'new' entry is not part of the cycle."""
        self.current_entry = _MENU_PREVIOUS.get(self.current_entry, self.current_entry)

    def copy(self) -> MenuState:
        return dataclasses.replace(self)


@dataclass
class NewImageState:
    """State of the new-image screen: index of the image template chosen."""

    image_index: int = 0

    def increment(self) -> NewImageState:
        """Step to the next index and return self."""
        self.image_index += 1
        return self

    def decrement(self) -> NewImageState:
        """Step to the previous index and return self."""
        self.image_index -= 1
        return self

    def copy(self) -> NewImageState:
        return dataclasses.replace(self)


@dataclass
class StatusState:
    """State of the status screen: scroll offset of the loaded image name."""

    image_name_offset: int = 0

    def increment_image_name_offset(self) -> None:
        self.image_name_offset += 1

    def decrement_image_name_offset(self) -> None:
        """Scroll back by one, never below zero."""
        self.image_name_offset = max(0, self.image_name_offset - 1)

    def reset_image_name_offset(self) -> None:
        self.image_name_offset = 0

    def copy(self) -> StatusState:
        return dataclasses.replace(self)


@dataclass
class SelectState:
    """State of the image selection screen."""

    image_name_offset: int = 0
    current_image: Image | None = None
    is_showing_back: bool = False

    @property
    def has_current_image(self) -> bool:
        """True if an image is shown for selection."""
        return self.current_image is not None

    def copy(self) -> SelectState:
        """Return a copy holding its own duplicate of the current image."""
        image = self.current_image
        return SelectState(
            image_name_offset=self.image_name_offset,
            current_image=None if image is None else dataclasses.replace(image),
            is_showing_back=self.is_showing_back,
        )


ModeState = Union[StatusState, MenuState, SelectState, NewImageState, EjectState, InfoState]


@dataclass
class DisplayState:
    """The current mode together with the state of every screen."""

    current_mode: Mode = Mode.EJECT
    status_state: StatusState = field(default_factory=StatusState)
    menu_state: MenuState = field(default_factory=MenuState)
    select_state: SelectState = field(default_factory=SelectState)
    new_image_state: NewImageState = field(default_factory=NewImageState)
    eject_state: EjectState = field(default_factory=EjectState)
    info_state: InfoState = field(default_factory=InfoState)

    def copy(self) -> DisplayState:
        """Return a deep copy that shares no state objects with this one."""
        return DisplayState(
            current_mode=self.current_mode,
            status_state=self.status_state.copy(),
            menu_state=self.menu_state.copy(),
            select_state=self.select_state.copy(),
            new_image_state=self.new_image_state.copy(),
            eject_state=self.eject_state.copy(),
            info_state=self.info_state.copy(),
        )


def make_display_state(state: ModeState) -> DisplayState:
    """Build a display state in the mode the given screen state belongs to.

    The screen state is copied; other screens get their defaults.
    Raises TypeError for anything that is not a screen state.
    """
    if isinstance(state, StatusState):
        return DisplayState(current_mode=Mode.STATUS, status_state=state.copy())
    if isinstance(state, MenuState):
        return DisplayState(current_mode=Mode.MENU, menu_state=state.copy())
    if isinstance(state, SelectState):
        return DisplayState(current_mode=Mode.SELECT, select_state=state.copy())
    if isinstance(state, NewImageState):
        return DisplayState(current_mode=Mode.NEW_IMAGE, new_image_state=state.copy())
    if isinstance(state, EjectState):
        return DisplayState(current_mode=Mode.EJECT, eject_state=state.copy())
    if isinstance(state, InfoState):
        return DisplayState(current_mode=Mode.INFO, info_state=state.copy())
    raise TypeError(f"not a screen state: {type(state).__name__}")