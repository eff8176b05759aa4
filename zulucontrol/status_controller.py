"""Central holder of the system status and the entry point for changing it."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import Callable

from .device_status import DeviceStatus
from .image import Image
from .system_status import SystemStatus

log = logging.getLogger(__name__)

_UPDATE_QUEUE_SIZE = 5

StatusObserver = Callable[[SystemStatus], None]


class DeviceControl(ABC):
    """Thread-safe way for a user interface to change the device state.

    Requests are queued and carried out later by the thread that owns the
    status, so they may be made from any thread.
    """

    @abstractmethod
    def load_image_safe(self, image: Image) -> bool:
        """Request that the image be loaded; False if the request was dropped."""

    @abstractmethod
    def eject_image_safe(self) -> bool:
        """Request that the loaded image be ejected; False if the request was dropped."""


@dataclass(frozen=True)
class _UpdateAction:
    # None means eject.
    to_load: Image | None = None


class StatusController(DeviceControl):
    """Owns the system status and tells observers about every change.

    Callback observers are called with a copy of the status; queue observers
    receive a copy through their queue, and miss updates while it is full.
    """

    def __init__(self) -> None:
        self._status = SystemStatus()
        self._updating = False
        self._observers: list[StatusObserver] = []
        self._observer_queues: list[Queue[SystemStatus]] = []
        self._update_queue: Queue[_UpdateAction] = Queue(_UPDATE_QUEUE_SIZE)

    def add_observer(self, callback: StatusObserver) -> None:
        """Call the callback with a copy of the status after every change."""
        self._observers.append(callback)

    def add_queue_observer(self, queue: Queue[SystemStatus]) -> None:
        """Put a copy of the status on the queue after every change."""
        self._observer_queues.append(queue)

    @property
    def status(self) -> SystemStatus:
        """The current status; callers must not modify it."""
        return self._status

    @property
    def updating(self) -> bool:
        """True between begin_update and end_update, when no one is notified."""
        return self._updating

    def _notify_observers(self) -> None:
        if self._updating:
            return
        for observer in self._observers:
            observer(self._status.copy())
        for destination in self._observer_queues:
            try:
                destination.put_nowait(self._status.copy())
            except Full:
                pass

    def load_image(self, image: Image) -> None:
        """Load the image now and notify observers."""
        self._status.loaded_image = image
        self._notify_observers()

    def eject_image(self) -> None:
        """Eject the loaded image now and notify observers."""
        self._status.loaded_image = None
        self._notify_observers()

    def begin_update(self) -> None:
        """Hold back notifications until end_update."""
        self._updating = True

    def end_update(self) -> None:
        """Resume notifications and notify observers of the changes made."""
        self._updating = False
        self._notify_observers()

    def update_device_status(self, device_status: DeviceStatus | None) -> None:
        """Replace the device status without notifying observers."""
        self._status.device_status = device_status

    def set_is_primary(self, value: bool) -> None:
        self._status.is_primary = value
        self._notify_observers()

    def set_firmware_version(self, version: str) -> None:
        self._status.firmware_version = version
        self._notify_observers()

    def set_is_card_present(self, value: bool) -> None:
        """Record card presence; removing the card also unloads the image."""
        self._status.is_card_present = value
        if not value:
            self._status.loaded_image = None
        self._notify_observers()

    def reset(self) -> None:
        """Discard all pending load and eject requests."""
        self._update_queue = Queue(_UPDATE_QUEUE_SIZE)

    def _enqueue(self, action: _UpdateAction, failure: str) -> bool:
        try:
            self._update_queue.put_nowait(action)
        except Full:
            log.warning(failure)
            return False
        return True

    def load_image_safe(self, image: Image) -> bool:
        return self._enqueue(_UpdateAction(image), "Load image failed to enqueue.")

    def eject_image_safe(self) -> bool:
        return self._enqueue(_UpdateAction(), "Eject image failed to enqueue.")

    def process_updates(self) -> bool:
        """Carry out at most one queued request; True if one was carried out."""
        try:
            action = self._update_queue.get_nowait()
        except Empty:
            return False
        if action.to_load is not None:
            self.load_image(action.to_load)
        else:
            self.eject_image()
        return True