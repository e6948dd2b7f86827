from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class Point(BaseModel):
    """A pixel coordinate. ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    class Config:
        frozen = True

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Rectangle(BaseModel):
    """Half-open pixel region ``[min, max)`` on both axes."""

    min: Point
    max: Point

    class Config:
        frozen = True

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rectangle":
        return cls(min=Point(x=0, y=0), max=Point(x=width, y=height))

    def __str__(self) -> str:
        return f"{self.min}-{self.max}"


class RGBAChannel(str, Enum):
    RED = "R"
    GREEN = "G"
    BLUE = "B"
    ALPHA = "A"


class BitPlaneOptions(BaseModel):
    bit_position: Optional[int] = Field(default=None, ge=0, le=7, description="Bit of the red channel carrying the payload (0 = LSB), None for the service default")
    output_filename: Optional[str] = None
    convert: bool = Field(default=False, description="Convert non-RGBA carriers to RGBA before encoding")


class EncodeResult(BaseModel):
    start: Point
    end: Point
    message_length: int
    bit_position: int = 0
    output_path: Optional[Path] = None


class DecodeResult(BaseModel):
    message: bytes
    start: Point
    end: Point
    bit_position: int = 0
    discarded_bits: int = 0

    @property
    def text(self) -> str:
        return self.message.decode("utf-8", errors="replace")


class BitPlaneVisualizerResult(BaseModel):
    output_images: List[Path]
    channel: str
    bit_plane: int
