"""Turns user input into changes of the display state."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .display_controller import DisplayController
from .states import DisplayState, Mode
from .status_controller import StatusController
from .system_status import SystemStatus

log = logging.getLogger(__name__)


class InputReceiver(ABC):
    """Receives input events from a hardware user interface."""

    @abstractmethod
    def rotary_update(self, offset: int) -> None:
        """The rotary encoder moved by offset; the sign gives the direction."""

    @abstractmethod
    def rotary_button_pressed(self) -> None:
        """The button of the rotary encoder was pressed."""

    @abstractmethod
    def primary_button_pressed(self) -> None:
        """The primary button was pressed."""

    @abstractmethod
    def secondary_button_pressed(self) -> None:
        """The secondary button was pressed."""


class InputInterface(ABC):
    """A hardware input device that sends events to a receiver."""

    @abstractmethod
    def set_receiver(self, receiver: InputReceiver) -> None:
        """Set the receiver events are sent to."""

    @abstractmethod
    def start_sending_events(self) -> None:
        """Start sending events to the receiver."""

    @abstractmethod
    def stop_sending_events(self) -> None:
        """Stop sending events to the receiver."""

    @abstractmethod
    def check_for_device(self) -> bool:
        """Look for the device, disabling polling if absent; True if present."""

    @property
    @abstractmethod
    def device_exists(self) -> bool:
        """True if the last check found the device."""


class ControlInterface(InputReceiver):
    """Maps input events to actions of the controller of the current screen."""

    def __init__(self) -> None:
        self._display_controller: DisplayController | None = None
        self._status_controller: StatusController | None = None
        self._current_status = SystemStatus()
        self._current_mode = Mode.STATUS

    def set_display_controller(self, controller: DisplayController) -> None:
        """Use this display controller and follow its mode changes."""
        self._display_controller = controller
        controller.add_observer(self._handle_display_state_update)

    def set_status_controller(self, controller: StatusController) -> None:
        """Follow the system status kept by this controller."""
        controller.add_observer(self._handle_system_status_update)
        self._status_controller = controller

    def _handle_display_state_update(self, state: DisplayState) -> None:
        self._current_mode = state.current_mode

    def _handle_system_status_update(self, status: SystemStatus) -> None:
        self._current_status = status.copy()

    def _display(self) -> DisplayController:
        if self._display_controller is None:
            raise RuntimeError("no display controller set")
        return self._display_controller

    def rotary_update(self, offset: int) -> None:
        log.info("Rotary update received: %d", offset)
        display = self._display()
        mode = self._current_mode
        steps = range(abs(offset))

        if mode is Mode.EJECT:
            display.eject_controller.move_to_next_entry()
        elif mode is Mode.STATUS:
            status = display.status_controller
            for _ in steps:
                if offset > 0:
                    status.decrease_image_name_offset()
                else:
                    status.increment_image_name_offset()
        elif mode is Mode.MENU:
            menu = display.menu_controller
            for _ in steps:
                if offset > 0:
                    menu.move_to_next_entry()
                else:
                    menu.move_to_previous_entry()
        elif mode is Mode.SELECT:
            select = display.select_controller
            select.reset_image_name_offset()
            for _ in steps:
                if offset > 0:
                    select.next_image_entry()
                else:
                    select.previous_image_entry()
        elif mode is Mode.NEW_IMAGE:
            display.new_controller.create_and_select()
        elif mode is Mode.INFO:
            info = display.info_controller
            for _ in steps:
                if offset > 0:
                    info.decrease_firmware_offset()
                else:
                    info.increment_firmware_offset()

    def rotary_button_pressed(self) -> None:
        log.info("Rotary Button Pressed")
        display = self._display()
        mode = self._current_mode
        if mode is Mode.STATUS:
            display.status_controller.change_to_menu()
        elif mode is Mode.MENU:
            display.menu_controller.change_to_selected_entry()
        elif mode is Mode.EJECT:
            display.eject_controller.do_selected_entry()
        elif mode is Mode.SELECT:
            display.select_controller.select_image()
        elif mode is Mode.NEW_IMAGE:
            display.new_controller.create_and_select()
        elif mode is Mode.INFO:
            display.set_mode(Mode.STATUS)

    def primary_button_pressed(self) -> None:
        log.info("Primary Button Pressed")
        display = self._display()
        if self._current_mode is Mode.SELECT:
            display.select_controller.decrease_image_name_offset()

    def secondary_button_pressed(self) -> None:
        log.info("Secondary Button Pressed")
        display = self._display()
        mode = self._current_mode
        if mode is Mode.SELECT:
            display.select_controller.increment_image_name_offset()
        elif mode is Mode.STATUS and self._current_status.has_loaded_image:
            display.set_mode(Mode.EJECT)