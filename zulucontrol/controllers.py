"""Controllers that change the user interface state of one screen each.

Every controller keeps the state of its screen, changes it in response to
input and hands the result to the display controller that owns it.
"""

from __future__ import annotations

import os
from typing import Protocol, Union

from .image_iterator import ImageIterator
from .states import (
    EjectEntry,
    EjectState,
    InfoState,
    MenuEntry,
    MenuState,
    Mode,
    NewImageState,
    SelectState,
    StatusState,
)
from .status_controller import DeviceControl

_ScreenState = Union[StatusState, MenuState, SelectState, NewImageState, EjectState, InfoState]


class DisplayHost(Protocol):
    """What a screen controller needs from the display controller that owns it."""

    def update_state(self, state: _ScreenState) -> None:
        """Show the given screen state."""

    def set_mode(self, mode: Mode) -> None:
        """Switch to another screen, starting it from its default state."""


_MENU_TARGETS = {
    MenuEntry.EJECT: Mode.EJECT,
    MenuEntry.SELECT: Mode.SELECT,
    MenuEntry.INFO: Mode.INFO,
    MenuEntry.NEW: Mode.NEW_IMAGE,
    MenuEntry.BACK: Mode.STATUS,
}


class StatusModeController:
    """Handles input while the status screen is shown."""

    def __init__(self, controller: DisplayHost) -> None:
        self._controller = controller
        self._state = StatusState()

    def increment_image_name_offset(self) -> None:
        self._state.increment_image_name_offset()
        self._controller.update_state(self._state)

    def decrease_image_name_offset(self) -> None:
        self._state.decrement_image_name_offset()
        self._controller.update_state(self._state)

    def reset_image_name_offset(self) -> None:
        self._state.reset_image_name_offset()
        self._controller.update_state(self._state)

    def change_to_menu(self) -> None:
        self._controller.set_mode(Mode.MENU)

    def reset(self, state: StatusState) -> None:
        """Start again from the given state, without showing it."""
        self._state = state.copy()


class MenuController:
    """Handles input while the main menu is shown."""

    def __init__(self, controller: DisplayHost) -> None:
        self._controller = controller
        self._state = MenuState()

    def move_to_next_entry(self) -> None:
        self._state.move_to_next_entry()
        self._controller.update_state(self._state)

    def move_to_previous_entry(self) -> None:
        self._state.move_to_previous_entry()
        self._controller.update_state(self._state)

    def change_to_selected_entry(self) -> None:
        """Switch to the screen the highlighted entry leads to."""
        self._controller.set_mode(_MENU_TARGETS[self._state.current_entry])

    def reset(self, state: MenuState) -> None:
        """Start again from the given state, without showing it."""
        self._state = state.copy()


class EjectController:
    """Handles input while the eject confirmation is shown."""

    def __init__(self, controller: DisplayHost, device_control: DeviceControl) -> None:
        self._controller = controller
        self._device_control = device_control
        self._state = EjectState()

    def move_to_next_entry(self) -> None:
        self._state.move_to_next_entry()
        self._controller.update_state(self._state)

    def move_to_previous_entry(self) -> None:
        # With only two entries, moving back is the same as moving on.
        self._state.move_to_next_entry()
        self._controller.update_state(self._state)

    def do_selected_entry(self) -> None:
        """Request an eject if that entry is highlighted, then return to status."""
        if self._state.current_entry is EjectEntry.EJECT:
            self._device_control.eject_image_safe()
        self._controller.set_mode(Mode.STATUS)

    def reset(self, state: EjectState) -> None:
        """Start again from the given state, without showing it."""
        self._state = state.copy()


class InfoController:
    """Handles input while the information screen is shown."""

    def __init__(self, controller: DisplayHost) -> None:
        self._controller = controller
        self._state = InfoState()

    def increment_firmware_offset(self) -> None:
        self._state.firmware_offset += 1
        self._controller.update_state(self._state)

    def decrease_firmware_offset(self) -> None:
        """Scroll back by one; nothing happens at the start."""
        if self._state.firmware_offset > 0:
            self._state.firmware_offset -= 1
            self._controller.update_state(self._state)

    def reset_firmware_offset(self) -> None:
        self._state.firmware_offset = 0
        self._controller.update_state(self._state)

    def reset(self, state: InfoState) -> None:
        """Start again from the given state, without showing it."""
        self._state = state.copy()


class NewController:
    """Handles input while the new-image screen is shown."""

    def __init__(self, controller: DisplayHost, device_control: DeviceControl) -> None:
        self._controller = controller
        self._device_control = device_control
        self._state = NewImageState()

    def increment_image_index(self) -> None:
        self._state.increment()
        self._controller.update_state(self._state)

    def decrease_image_index(self) -> None:
        self._state.decrement()
        self._controller.update_state(self._state)

    def reset_image_index(self) -> None:
        self._state = NewImageState(0)
        self._controller.update_state(self._state)

    def create_and_select(self) -> None:
        """Leave the screen and return to status."""
        self._controller.set_mode(Mode.STATUS)

    def reset(self, state: NewImageState) -> None:
        """Start again from the given state, without showing it."""
        self._state = state.copy()


class SelectController:
    """Handles input while an image is being chosen from the card.

    The list of images wraps around through a 'back' entry placed after the
    last image and before the first.
    """

    def __init__(
        self,
        controller: DisplayHost,
        device_control: DeviceControl,
        image_root: str | os.PathLike[str],
    ) -> None:
        self._controller = controller
        self._device_control = device_control
        self._state = SelectState()
        self._iterator = ImageIterator(image_root)

    def reset(self, state: SelectState) -> None:
        """Rescan the images, start from the given state and show the first entry."""
        self._iterator.reset()
        self._state = state.copy()
        self.next_image_entry()

    def increment_image_name_offset(self) -> None:
        """Scroll the image name on, as long as some of it remains visible."""
        state = self._state
        value = state.image_name_offset
        if (
            not state.is_showing_back
            and state.current_image is not None
            and value + 1 < len(state.current_image.filename)
        ):
            state.image_name_offset = value + 1
            self._controller.update_state(state)

    def decrease_image_name_offset(self) -> None:
        """Scroll the image name back; nothing happens at the start."""
        if self._state.image_name_offset > 0:
            self._state.image_name_offset -= 1
            self._controller.update_state(self._state)

    def reset_image_name_offset(self) -> None:
        self._state.image_name_offset = 0
        self._controller.update_state(self._state)

    def select_image(self) -> None:
        """Request the shown image be loaded, then return to status."""
        if self._state.is_showing_back:
            self._controller.set_mode(Mode.MENU)
        elif self._state.current_image is not None:
            self._device_control.load_image_safe(self._state.current_image)
        self._controller.set_mode(Mode.STATUS)
        self._iterator.cleanup()

    def change_to_menu(self) -> None:
        self._controller.set_mode(Mode.MENU)
        self._iterator.cleanup()

    def _show_current(self) -> None:
        self._state.current_image = self._iterator.get()
        self._state.is_showing_back = False

    def next_image_entry(self) -> None:
        """Show the next image, or the back entry after the last one."""
        iterator = self._iterator
        state = self._state
        if iterator.is_last and not state.is_showing_back:
            state.is_showing_back = True
            state.current_image = None
        elif iterator.is_last and state.is_showing_back and iterator.move_first():
            self._show_current()
        elif iterator.is_first and state.is_showing_back:
            self._show_current()
        elif iterator.move_next():
            self._show_current()
        else:
            # No images on the card.
            state.is_showing_back = True
        self._controller.update_state(state)

    def previous_image_entry(self) -> None:
        """Show the previous image, or the back entry before the first one."""
        iterator = self._iterator
        state = self._state
        if iterator.is_first and not state.is_showing_back:
            state.is_showing_back = True
            state.current_image = None
        elif iterator.is_first and state.is_showing_back and iterator.move_last():
            self._show_current()
        elif iterator.is_last and state.is_showing_back:
            self._show_current()
        elif iterator.move_previous():
            self._show_current()
        else:
            # No images on the card.
            state.is_showing_back = True
        self._controller.update_state(state)