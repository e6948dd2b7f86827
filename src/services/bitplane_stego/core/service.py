"""
Main service class for bit-plane steganography operations
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..models.stego_models import (
    BitPlaneOptions,
    BitPlaneVisualizerResult,
    DecodeResult,
    EncodeResult,
    Point,
    RGBAChannel,
)
from ..utils.image_utils import decode_image, prepare_carrier
from ..utils.validation import validate_bit_position, validate_message, validate_ordering
from .bits import BITS_PER_BYTE
from .coordinates import offset_from_origin
from .errors import InvalidInputError, OutputError
from .steganography import BitPlaneCodec
from .visualization import generate_all_bit_planes, generate_single_bit_plane

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageStegoService:
    """
    Main service class for bit-plane steganography operations

    Wraps a BitPlaneCodec with byte, text and file level entry points and
    logs each operation. The codec's bit position is the default for every
    call that does not pass its own.
    """

    def __init__(self, bit_position: int = 0):
        self.codec = BitPlaneCodec(bit_position)

    @property
    def bit_position(self) -> int:
        return self.codec.bit_position

    def encode(
        self,
        image_bytes: bytes,
        message: bytes,
        start: Point,
        options: Optional[BitPlaneOptions] = None,
    ) -> Tuple[bytes, EncodeResult]:
        """
        Hide message in an image

        Args:
            image_bytes: Encoded carrier image
            message: Payload bytes
            start: First pixel to write
            options: Bit position and carrier conversion

        Returns:
            Tuple of (png_bytes, result_metadata)
        """
        if options is None or options.bit_position is None:
            bit = self.codec.bit_position
        else:
            bit = options.bit_position
        validate_message(message)

        if options is not None and options.convert:
            image_bytes = prepare_carrier(image_bytes)

        end, encoded = self.codec.encode(image_bytes, message, start, bit)
        logger.info(f"Encoded {len(message)} bytes from {start} to {end} in bit {bit}")

        result = EncodeResult(
            start=start,
            end=end,
            message_length=len(message),
            bit_position=bit,
            output_path=Path(options.output_filename) if options is not None and options.output_filename else None,
        )
        return encoded, result

    def decode(
        self,
        image_bytes: bytes,
        start: Point,
        end: Point,
        bit_position: Optional[int] = None,
    ) -> DecodeResult:
        """
        Reveal the message stored between start and end

        Returns:
            DecodeResult with the raw message and the number of trailing
            bits that did not fill a whole byte
        """
        validate_ordering(start, end)
        bit = self.codec.bit_position if bit_position is None else bit_position

        grid = decode_image(image_bytes)
        message = self.codec.decode_grid(grid, start, end, bit)

        span = offset_from_origin(grid.bounds, end) - offset_from_origin(grid.bounds, start)
        discarded = span % BITS_PER_BYTE
        if discarded:
            logger.warning(f"Region {start}-{end} holds {span} bits, dropping {discarded} trailing bits")
        logger.info(f"Decoded {len(message)} bytes from {start} to {end} in bit {bit}")

        return DecodeResult(
            message=message,
            start=start,
            end=end,
            bit_position=bit,
            discarded_bits=discarded,
        )

    def hide_text(
        self,
        image_bytes: bytes,
        text: str,
        start: Point,
        options: Optional[BitPlaneOptions] = None,
    ) -> Tuple[bytes, EncodeResult]:
        return self.encode(image_bytes, text.encode("utf-8"), start, options)

    def reveal_text(
        self,
        image_bytes: bytes,
        start: Point,
        end: Point,
        bit_position: Optional[int] = None,
    ) -> str:
        return self.decode(image_bytes, start, end, bit_position).text

    def encode_file(
        self,
        src: PathLike,
        dst: PathLike,
        message: bytes,
        start: Point,
        bit_position: Optional[int] = None,
    ) -> EncodeResult:
        """
        Copy the image at src to dst with message stored inside it

        dst is only written once the encoded PNG has been produced.

        Args:
            src: Carrier image path
            dst: Output path
            message: Payload bytes
            start: First pixel to write
            bit_position: Overrides the service default

        Returns:
            EncodeResult including the resolved output path
        """
        validate_message(message)
        bit = self.codec.bit_position if bit_position is None else bit_position
        validate_bit_position(bit)
        src_path = Path(src).resolve()
        dst_path = Path(dst).resolve()

        image_bytes = _read_bytes(src_path)
        options = BitPlaneOptions(
            bit_position=bit,
            output_filename=str(dst_path),
        )
        encoded, result = self.encode(image_bytes, message, start, options)

        try:
            dst_path.write_bytes(encoded)
        except OSError as exc:
            raise OutputError(f"failed to write {dst_path}: {exc}") from exc

        logger.info(f"Wrote {len(encoded)} bytes to {dst_path}")
        return result

    def decode_file(
        self,
        src: PathLike,
        start: Point,
        end: Point,
        bit_position: Optional[int] = None,
    ) -> DecodeResult:
        validate_ordering(start, end)
        return self.decode(_read_bytes(Path(src).resolve()), start, end, bit_position)

    def visualize_bit_planes(
        self,
        image_bytes: bytes,
        channel: RGBAChannel = RGBAChannel.RED,
        output_dir: Path = Path("./bit_planes"),
    ) -> BitPlaneVisualizerResult:
        """
        Create visualizations for all bit planes of a specified channel
        """
        return generate_all_bit_planes(image_bytes, channel, output_dir)

    def visualize_single_bit_plane(
        self,
        image_bytes: bytes,
        bit_plane: int,
        channel: RGBAChannel = RGBAChannel.RED,
        output_dir: Path = Path("./bit_planes"),
    ) -> BitPlaneVisualizerResult:
        """
        Create a visualization for a specific bit plane of a specified channel
        """
        return generate_single_bit_plane(image_bytes, bit_plane, channel, output_dir)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InvalidInputError(f"failed to read {path}: {exc}") from exc
