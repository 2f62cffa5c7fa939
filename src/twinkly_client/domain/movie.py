"""Movie frame models and their binary wire encoding."""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

BYTES_PER_LED = 3


class Pixel(BaseModel):
    """Single LED color with 8-bit RGB channels."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(default=0, ge=0, le=255)
    g: int = Field(default=0, ge=0, le=255)
    b: int = Field(default=0, ge=0, le=255)

    @classmethod
    def clamped(cls, r: int, g: int, b: int) -> "Pixel":
        """Build a pixel, clamping each channel into 0..255."""
        return cls(r=_clamp_u8(r), g=_clamp_u8(g), b=_clamp_u8(b))

    @classmethod
    def from_hex(cls, value: str) -> "Pixel":
        """Parse a #RRGGBB color string."""
        digits = value.strip().removeprefix("#")
        if len(digits) != 6:
            raise ValueError(f"Hex color must be #RRGGBB, got {value!r}")
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_bytes(self) -> bytes:
        """Return the pixel as three bytes in R, G, B order."""
        return bytes((self.r, self.g, self.b))


BLACK = Pixel()


class Frame:
    """One full-strand snapshot of per-LED colors.

    The length is fixed at construction and every position always holds a
    Pixel; new frames start black.
    """

    def __init__(self, led_count: int) -> None:
        if led_count < 0:
            raise ValueError(f"led_count must be non-negative, got {led_count}")
        self.led_count = led_count
        self._pixels: list[Pixel] = [BLACK] * led_count

    def __len__(self) -> int:
        return len(self._pixels)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self._pixels)

    def __getitem__(self, index: int) -> Pixel:
        return self._pixels[index]

    def __setitem__(self, index: int, pixel: Pixel) -> None:
        if not isinstance(pixel, Pixel):
            raise TypeError(f"Frame positions hold Pixel values, got {type(pixel).__name__}")
        self._pixels[index] = pixel

    @property
    def pixels(self) -> tuple[Pixel, ...]:
        """Return a snapshot of the frame's pixels."""
        return tuple(self._pixels)

    def fill(self, color: Pixel) -> None:
        """Set every LED in the frame to the given color."""
        if not isinstance(color, Pixel):
            raise TypeError(f"fill expects a Pixel, got {type(color).__name__}")
        for index in range(len(self._pixels)):
            self._pixels[index] = color

    def encode(self) -> bytes:
        """Encode the frame as consecutive R, G, B bytes in LED order."""
        return b"".join(pixel.to_bytes() for pixel in self._pixels)


class Movie:
    """Ordered frames plus the playback delay between them in milliseconds.

    Frames are only added through `append`, so every frame always has
    `led_count` LEDs and the encoded buffer matches the config payload.
    """

    def __init__(
        self, led_count: int, frame_delay: int, frames: Iterable[Frame] = ()
    ) -> None:
        self._led_count = led_count
        self.frame_delay = frame_delay
        self._frames: list[Frame] = []
        for frame in frames:
            self.append(frame)

    def __repr__(self) -> str:
        return (
            f"Movie(led_count={self._led_count}, frame_delay={self.frame_delay}, "
            f"frame_count={self.frame_count})"
        )

    @property
    def led_count(self) -> int:
        """Return the number of LEDs in every frame."""
        return self._led_count

    @property
    def frames(self) -> tuple[Frame, ...]:
        """Return a snapshot of the movie's frames in playback order."""
        return tuple(self._frames)

    @property
    def frame_count(self) -> int:
        """Return the number of frames in the movie."""
        return len(self._frames)

    def append(self, frame: Frame) -> None:
        """Append a frame; its length must match the movie's LED count."""
        self._check_frame(frame)
        self._frames.append(frame)

    def encode(self) -> bytes:
        """Concatenate every frame's encoding in frame order."""
        return b"".join(frame.encode() for frame in self._frames)

    def config_payload(self) -> dict[str, int]:
        """Return the metadata the device needs to split the movie buffer."""
        return {
            "leds_number": self.led_count,
            "frames_number": self.frame_count,
            "frame_delay": self.frame_delay,
        }

    def _check_frame(self, frame: Frame) -> None:
        if len(frame) != self.led_count:
            raise ValueError(
                f"Frame has {len(frame)} LEDs but the movie expects {self.led_count}"
            )


def _clamp_u8(value: int) -> int:
    """Clamp an integer into the 0..255 byte range."""
    return max(0, min(255, value))
