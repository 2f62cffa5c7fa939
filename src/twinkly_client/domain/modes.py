"""Device operating modes."""

from enum import Enum


class DeviceMode(Enum):
    """Operating modes accepted by the device, keyed to their wire values."""

    OFF = "off"
    MOVIE = "movie"
    DEMO = "demo"
    REALTIME = "rt"

    @classmethod
    def from_name(cls, name: str) -> "DeviceMode | None":
        """Look up a mode by its case-insensitive member name."""
        wanted = name.strip().lower()
        for mode in cls:
            if mode.name.lower() == wanted:
                return mode
        return None
