"""Disk image descriptions and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ImageType(Enum):
    """Kind of media an image holds; the value is its JSON name."""

    CDROM = "cdrom"
    ZIP100 = "zip100"
    ZIP250 = "zip250"
    ZIP750 = "zip750"
    GENERIC = "generic"
    UNKNOWN = "unknown"


def _field(name: str, value: str) -> str:
    return f'"{name}":"{value}"'


@dataclass(frozen=True, eq=False)
class Image:
    """An image file on the card.

    Images compare by identity: two separately built images are never equal.
    """

    filename: str
    size_bytes: int = 0
    image_type: ImageType = ImageType.UNKNOWN

    def to_json(self) -> str:
        """Return the image as a JSON object with string-valued fields."""
        fields = ",".join(
            (
                _field("filename", self.filename),
                _field("size", str(self.size_bytes)),
                _field("type", self.image_type.value),
            )
        )
        return "{" + fields + "}"

    def to_json_field(self, field_name: str) -> str:
        """Return the image as a named JSON member, for embedding in an object."""
        return f'"{field_name}":{self.to_json()}'