"""Status of the emulated IDE device, one class per kind of drive."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum


class DriveType(IntEnum):
    """Kind of drive presented on the IDE bus."""

    VIA_PREFIX = 0
    CDROM = 1
    ZIP100 = 2
    ZIP250 = 3
    REMOVABLE = 4
    RIGID = 5


class MediaStatus(Enum):
    """State of the medium attached to a drive."""

    IMAGE_PRESENT = "image_present"
    """An image is attached and valid."""
    INVALID_IMAGE = "invalid_image"
    """An image is attached, but is invalid."""
    NO_IMAGE = "no_image"
    """No image is attached."""
    WRITEABLE_IMAGE = "writeable_image"
    """An image is attached, writable, and valid."""


class DriveSpeed(Enum):
    """Speed a CD-ROM drive reports."""

    SINGLE = "single"
    DOUBLE = "double"
    QUAD = "quad"


class ZipDriveType(Enum):
    """Capacity class of a Zip drive."""

    ZIP100 = "zip100"
    ZIP250 = "zip250"
    ZIP750 = "zip750"


class DeviceStatus(ABC):
    """Common interface of all device status objects."""

    @abstractmethod
    def clone(self) -> DeviceStatus:
        """Return an independent copy of this status."""

    @property
    @abstractmethod
    def drive_type(self) -> DriveType:
        """The drive type this status describes."""


@dataclass(frozen=True)
class CDROMStatus(DeviceStatus):
    """Status of an emulated CD-ROM drive."""

    status: MediaStatus
    drive_speed: DriveSpeed

    def clone(self) -> CDROMStatus:
        return dataclasses.replace(self)

    @property
    def drive_type(self) -> DriveType:
        return DriveType.CDROM


@dataclass(frozen=True)
class RemovableStatus(DeviceStatus):
    """Status of an emulated generic removable drive."""

    status: MediaStatus

    def clone(self) -> RemovableStatus:
        return dataclasses.replace(self)

    @property
    def drive_type(self) -> DriveType:
        return DriveType.REMOVABLE


@dataclass(frozen=True)
class RigidStatus(DeviceStatus):
    """Status of an emulated fixed hard disk."""

    status: MediaStatus

    def clone(self) -> RigidStatus:
        return dataclasses.replace(self)

    @property
    def drive_type(self) -> DriveType:
        return DriveType.RIGID


@dataclass(frozen=True)
class ZipStatus(DeviceStatus):
    """Status of an emulated Zip drive."""

    status: MediaStatus
    zip_drive_type: ZipDriveType

    def clone(self) -> ZipStatus:
        return dataclasses.replace(self)

    @property
    def drive_type(self) -> DriveType:
        if self.zip_drive_type is ZipDriveType.ZIP250:
            return DriveType.ZIP250
        # Zip 750 has no drive type of its own and is presented as a Zip 100.
        return DriveType.ZIP100