"""Overall status of the device as shown to user interfaces."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .device_status import DeviceStatus, DriveType
from .image import Image


def _field(name: str, value: str) -> str:
    return f'"{name}":"{value}"'


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class SystemStatus:
    """Device status, firmware version, card presence and loaded image."""

    device_status: DeviceStatus | None = None
    firmware_version: str = ""
    loaded_image: Image | None = None
    is_primary: bool = False
    is_card_present: bool = False

    def copy(self) -> SystemStatus:
        """Return a deep copy; device status and image are duplicated."""
        return SystemStatus(
            device_status=None if self.device_status is None else self.device_status.clone(),
            firmware_version=self.firmware_version,
            loaded_image=None
            if self.loaded_image is None
            else dataclasses.replace(self.loaded_image),
            is_primary=self.is_primary,
            is_card_present=self.is_card_present,
        )

    @property
    def has_loaded_image(self) -> bool:
        """True if an image is loaded."""
        return self.loaded_image is not None

    def loaded_images_are_equal(self, other: SystemStatus) -> bool:
        """True only if both statuses hold the very same image object."""
        if self.loaded_image is None or other.loaded_image is None:
            return False
        return self.loaded_image == other.loaded_image

    @property
    def device_type(self) -> DriveType:
        """Drive type of the device status; LookupError if none is set."""
        if self.device_status is None:
            raise LookupError("no device status set")
        return self.device_status.drive_type

    def to_json(self) -> str:
        """Return the status as a JSON object with string-valued fields."""
        parts = [
            _field("isPrimary", _bool_text(self.is_primary)),
            _field("isCardPresent", _bool_text(self.is_card_present)),
            _field("fwVer", self.firmware_version),
        ]
        if self.loaded_image is not None:
            parts.append(self.loaded_image.to_json_field("image"))
        return "{" + ",".join(parts) + "}"