"""Serves device status to an I2C client and carries out its requests.

The server writes length-prefixed strings to the client's registers. The
client is polled for a command byte, followed by a length-prefixed payload.
"""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from enum import IntEnum

from .image_iterator import ImageIterator, load_image_by_filename
from .status_controller import DeviceControl
from .system_status import SystemStatus

log = logging.getLogger(__name__)

CLIENT_ADDR = 0x45
BUFFER_LENGTH = 8
_MAX_LENGTH = 0xFFFF


class ServerRegister(IntEnum):
    """Client registers the server writes to."""

    SYSTEM_STATUS_JSON = 0xA
    IMAGE_JSON = 0xB
    POLL_CLIENT = 0xC
    SSID = 0xD
    SSID_PASS = 0xE
    RESET = 0xF


class ClientCommand(IntEnum):
    """Command bytes the client can send to the server."""

    NOOP = 0x0
    SUBSCRIBE_STATUS_JSON = 0xA
    LOAD_IMAGE = 0xB
    EJECT_IMAGE = 0xC
    FETCH_IMAGES_JSON = 0xD
    FETCH_SSID = 0xE
    FETCH_SSID_PASS = 0xF
    FETCH_ITR_IMAGE = 0x10
    IP_ADDRESS = 0x11
    NET_DOWN = 0x12


class Wire(ABC):
    """An I2C bus controller."""

    @abstractmethod
    def begin_transmission(self, address: int) -> None:
        """Start a write transaction to the device at the address."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Queue bytes for the current write transaction."""

    @abstractmethod
    def end_transmission(self) -> int:
        """Send the queued bytes; 0 on success, an error code otherwise."""

    @abstractmethod
    def request_from(self, address: int, count: int) -> None:
        """Read up to count bytes from the device into the receive buffer."""

    @abstractmethod
    def read(self) -> int:
        """Take one byte from the receive buffer; -1 if it is empty."""

    @abstractmethod
    def available(self) -> int:
        """Number of bytes waiting in the receive buffer."""


def write_length_prefixed_string(wire: Wire, register: int, data: bytes | str) -> bool:
    """Write data to a client register, preceded by its 16-bit big-endian length.

    Returns False if the client did not acknowledge the header.
    Raises ValueError if the data is longer than 65535 bytes.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if len(payload) > _MAX_LENGTH:
        raise ValueError(f"payload of {len(payload)} bytes does not fit a 16-bit length")

    wire.begin_transmission(CLIENT_ADDR)
    wire.write(bytes([register]) + len(payload).to_bytes(2, "big"))
    if wire.end_transmission() != 0:
        return False

    # Larger transfers than BUFFER_LENGTH are not reliable on the bus.
    for start in range(0, len(payload), BUFFER_LENGTH):
        wire.begin_transmission(CLIENT_ADDR)
        wire.write(payload[start:start + BUFFER_LENGTH])
        wire.end_transmission()
    return True


def _read_length(wire: Wire) -> int:
    high = wire.read() & 0xFF
    low = wire.read() & 0xFF
    return (high << 8) | low


def _read_payload(wire: Wire) -> str:
    wire.request_from(CLIENT_ADDR, 2)
    length = _read_length(wire)
    received = bytearray()
    while len(received) < length:
        to_receive = min(BUFFER_LENGTH, length - len(received))
        wire.request_from(CLIENT_ADDR, to_receive)
        for _ in range(to_receive):
            while wire.available() == 0:
                pass
            received.append(wire.read() & 0xFF)
    text = bytes(received).split(b"\0", 1)[0]
    return text.decode("utf-8", errors="replace")


def _expect_empty(wire: Wire, request: str) -> None:
    wire.request_from(CLIENT_ADDR, 2)
    if _read_length(wire) != 0:
        log.warning("Length was not 0 for %s request.", request)


class I2CServer:
    """Talks to an I2C client: sends status and image lists, obeys its commands."""

    def __init__(self, image_root: str | os.PathLike[str]) -> None:
        self._image_root = image_root
        self._wire: Wire | None = None
        self._device_control: DeviceControl | None = None
        self._is_subscribed = False
        self._initialized = False
        self._send_files = False
        self._send_next_image = False
        self._is_iterating = False
        self._is_present = False
        self._iterator = ImageIterator(image_root)
        self._status = ""
        self._ssid = ""
        self._password = ""
        self._lock = threading.Lock()

    def attach(self, wire: Wire, device_control: DeviceControl) -> None:
        """Set the bus and the device control requests are passed to."""
        self._wire = wire
        self._device_control = device_control
        self._initialized = True

    def _bus(self) -> Wire:
        if self._wire is None:
            raise RuntimeError("no I2C bus attached")
        return self._wire

    def check_for_device(self) -> bool:
        """Send a reset to the client; True if it acknowledged."""
        self._is_present = write_length_prefixed_string(
            self._bus(), ServerRegister.RESET, b""
        )
        return self._is_present

    def handle_update(self, status: SystemStatus) -> None:
        """Remember the status and send it if the client is subscribed."""
        self._status = status.to_json()
        if self._is_subscribed:
            write_length_prefixed_string(
                self._bus(), ServerRegister.SYSTEM_STATUS_JSON, self._status
            )
        else:
            log.info("Received an update, but I2C client is not subscribed.")

    def set_ssid(self, value: str) -> None:
        """Set the network name handed to the client."""
        self._ssid = value

    def set_password(self, value: str) -> None:
        """Set the network password handed to the client."""
        self._password = value

    def _send_image(self, json_text: str) -> None:
        if json_text:
            log.info("Sending image: %s", json_text)
        else:
            log.info("Sending end of images as empty string")
        write_length_prefixed_string(self._bus(), ServerRegister.IMAGE_JSON, json_text)

    def _send_all_images(self) -> None:
        with self._lock:
            self._send_files = False
            self._iterator.reset()
            while self._iterator.move_next():
                self._send_image(self._iterator.get().to_json())
            self._send_image("")
            self._iterator.cleanup()

    def _send_one_image(self) -> None:
        with self._lock:
            if not self._is_iterating:
                self._is_iterating = True
                self._iterator.reset()
            if self._iterator.move_next():
                self._send_image(self._iterator.get().to_json())
            else:
                self._send_image("")
                self._is_iterating = False
                self._iterator.cleanup()
            self._send_next_image = False

    def _load_image(self, filename: str) -> None:
        log.info("Client requested the current image be set to: %s", filename)
        iterator = ImageIterator(self._image_root)
        iterator.reset()
        try:
            image = load_image_by_filename(filename, iterator)
        finally:
            iterator.cleanup()
        if image is not None and self._device_control is not None:
            self._device_control.load_image_safe(image)

    def poll(self) -> None:
        """Send any requested images, then read and carry out one client command."""
        if not self._initialized or not self._is_present:
            return
        wire = self._bus()

        if self._send_files:
            self._send_all_images()
        if self._send_next_image:
            self._send_one_image()

        wire.request_from(CLIENT_ADDR, 1)
        try:
            command = ClientCommand(wire.read() & 0xFF)
        except ValueError:
            return

        if command is ClientCommand.SUBSCRIBE_STATUS_JSON:
            _expect_empty(wire, "subscribe")
            log.info("I2C Client subscribed to updates.")
            self._is_subscribed = True
            write_length_prefixed_string(wire, ServerRegister.SYSTEM_STATUS_JSON, self._status)
        elif command is ClientCommand.LOAD_IMAGE:
            filename = _read_payload(wire)
            if filename:
                self._load_image(filename)
        elif command is ClientCommand.EJECT_IMAGE:
            _expect_empty(wire, "eject image")
            if self._device_control is not None:
                self._device_control.eject_image_safe()
        elif command is ClientCommand.FETCH_IMAGES_JSON:
            _expect_empty(wire, "fetch images")
            log.info("Client is fetching images.")
            self._send_files = True
        elif command is ClientCommand.FETCH_ITR_IMAGE:
            _expect_empty(wire, "fetch iterate image")
            log.info("Client is fetching iterate image.")
            self._send_next_image = True
        elif command is ClientCommand.FETCH_SSID:
            _expect_empty(wire, "fetch ssid")
            write_length_prefixed_string(wire, ServerRegister.SSID, self._ssid)
        elif command is ClientCommand.FETCH_SSID_PASS:
            _expect_empty(wire, "fetch ssid pass")
            write_length_prefixed_string(wire, ServerRegister.SSID_PASS, self._password)
        elif command is ClientCommand.IP_ADDRESS:
            address = _read_payload(wire)
            if address:
                log.info("Client IP address is: %s", address)
        elif command is ClientCommand.NET_DOWN:
            _expect_empty(wire, "NET_DOWN")
            log.info("Client network is down.")