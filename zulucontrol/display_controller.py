"""The display controller: owns the user interface state and its screens."""

from __future__ import annotations

import os
from typing import Callable

from .controllers import (
    EjectController,
    InfoController,
    MenuController,
    NewController,
    SelectController,
    StatusModeController,
)
from .states import (
    DisplayState,
    EjectState,
    InfoState,
    MenuEntry,
    MenuState,
    Mode,
    ModeState,
    NewImageState,
    SelectState,
    StatusState,
    make_display_state,
)
from .status_controller import DeviceControl

DisplayObserver = Callable[[DisplayState], None]


class DisplayController:
    """Holds the current display state and tells observers about every change.

    Each screen has a controller of its own; they report their state back
    through :meth:`update_state` and switch screens through :meth:`set_mode`.
    """

    def __init__(
        self, device_control: DeviceControl, image_root: str | os.PathLike[str]
    ) -> None:
        self._observers: list[DisplayObserver] = []
        self._current_state = DisplayState()
        self._status_controller = StatusModeController(self)
        self._menu_controller = MenuController(self)
        self._eject_controller = EjectController(self, device_control)
        self._select_controller = SelectController(self, device_control, image_root)
        self._new_controller = NewController(self, device_control)
        self._info_controller = InfoController(self)

    def add_observer(self, callback: DisplayObserver) -> None:
        """Call the callback with a copy of the display state after every change."""
        self._observers.append(callback)

    @property
    def current_state(self) -> DisplayState:
        """The state currently shown; callers must not modify it."""
        return self._current_state

    @property
    def status_controller(self) -> StatusModeController:
        return self._status_controller

    @property
    def menu_controller(self) -> MenuController:
        return self._menu_controller

    @property
    def eject_controller(self) -> EjectController:
        return self._eject_controller

    @property
    def select_controller(self) -> SelectController:
        return self._select_controller

    @property
    def new_controller(self) -> NewController:
        return self._new_controller

    @property
    def info_controller(self) -> InfoController:
        return self._info_controller

    def update_state(self, state: ModeState) -> None:
        """Show the given screen state, switching to its mode, and notify observers.

        Raises TypeError for anything that is not a screen state.
        """
        self._current_state = make_display_state(state)
        self._notify_observers()

    def _notify_observers(self) -> None:
        for observer in self._observers:
            observer(self._current_state.copy())

    def set_mode(self, mode: Mode) -> None:
        """Switch to a screen, starting it from its default state."""
        if mode is Mode.STATUS:
            status = StatusState()
            self.update_state(status)
            self._status_controller.reset(status)
        elif mode is Mode.MENU:
            menu = MenuState(MenuEntry.SELECT)
            self.update_state(menu)
            self._menu_controller.reset(menu)
        elif mode is Mode.EJECT:
            eject = EjectState()
            self.update_state(eject)
            self._eject_controller.reset(eject)
        elif mode is Mode.SELECT:
            select = SelectState()
            self.update_state(select)
            self._select_controller.reset(select)
        elif mode is Mode.NEW_IMAGE:
            new_image = NewImageState()
            self.update_state(new_image)
            self._new_controller.reset(new_image)
        elif mode is Mode.INFO:
            info = InfoState()
            self.update_state(info)
            self._info_controller.reset(info)
        else:
            raise ValueError(f"unknown mode: {mode!r}")