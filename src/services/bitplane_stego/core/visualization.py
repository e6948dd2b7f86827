"""
Bit plane visualization utilities for locating embedded payloads
"""

from pathlib import Path

import numpy as np
from PIL import Image

from ..models.stego_models import BitPlaneVisualizerResult, RGBAChannel
from ..utils.image_utils import PixelGrid, decode_image, prepare_carrier
from ..utils.validation import validate_bit_position


CHANNEL_INDEX = {
    RGBAChannel.RED: 0,
    RGBAChannel.GREEN: 1,
    RGBAChannel.BLUE: 2,
    RGBAChannel.ALPHA: 3,
}


def extract_bit_plane(grid: PixelGrid, channel: RGBAChannel, bit_plane: int) -> Image.Image:
    """
    Extract a specific bit plane from the grid

    Args:
        grid: Decoded RGBA pixels
        channel: Channel to inspect
        bit_plane: Bit plane to extract (0-7, where 0 is LSB)

    Returns:
        Grayscale image, white where the bit is set
    """
    validate_bit_position(bit_plane)

    samples = grid.pixels[:, :, CHANNEL_INDEX[channel]]
    bit_plane_data = ((samples & (1 << bit_plane)) > 0).astype(np.uint8) * 255
    return Image.fromarray(bit_plane_data)


def load_grid(image_bytes: bytes) -> PixelGrid:
    # visualization accepts any mode, not just RGBA carriers
    return decode_image(prepare_carrier(image_bytes))


def generate_single_bit_plane(
    image_bytes: bytes,
    bit_plane: int,
    channel: RGBAChannel,
    output_dir: Path,
) -> BitPlaneVisualizerResult:
    """
    Generate visualization for a specific bit plane of a specified channel

    Args:
        image_bytes: Encoded image
        bit_plane: The bit plane to visualize (0-7, where 0 is LSB)
        channel: Color channel to visualize
        output_dir: Directory to save bit plane image

    Returns:
        BitPlaneVisualizerResult with output path and metadata
    """
    grid = load_grid(image_bytes)

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / f"bit_plane_{channel.value}_{bit_plane}.png"
    extract_bit_plane(grid, channel, bit_plane).save(out_path)

    return BitPlaneVisualizerResult(
        output_images=[out_path],
        channel=channel.value,
        bit_plane=bit_plane,
    )


def generate_all_bit_planes(
    image_bytes: bytes,
    channel: RGBAChannel,
    output_dir: Path,
) -> BitPlaneVisualizerResult:
    grid = load_grid(image_bytes)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_paths = []
    for bit in range(8):
        out_path = output_dir / f"bit_plane_{channel.value}_{bit}.png"
        extract_bit_plane(grid, channel, bit).save(out_path)
        output_paths.append(out_path)

    return BitPlaneVisualizerResult(
        output_images=output_paths,
        channel=channel.value,
        bit_plane=-1,  # All bit planes
    )
