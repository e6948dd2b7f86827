"""
API routes for the Bit-Plane Steganography Service
"""

import logging
import traceback
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import JSONResponse

from src.utility.constants_manager import ConstantsManager

from ..core.errors import InvalidInputError, OutputError, StegoError
from ..core.service import ImageStegoService
from ..models.stego_models import BitPlaneOptions, Point, RGBAChannel
from ..utils.image_utils import load_image_bytes
from .responses import StegoAPIResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stego", tags=["stego"])

settings = ConstantsManager()

# Service instance
stego_service = ImageStegoService(settings.get_default_bit_position())


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses

    Args:
        status_code: HTTP status code
        message: Response message
        path: Optional file path
        details: Optional additional details

    Returns:
        JSONResponse with consistent format
    """
    return JSONResponse(
        status_code=status_code,
        content=StegoAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).dict()
    )


def status_for(exc: StegoError) -> int:
    if isinstance(exc, InvalidInputError):
        return 422
    if isinstance(exc, OutputError):
        return 500
    return 400


def parse_channel(channel: str) -> RGBAChannel:
    try:
        return RGBAChannel(channel.upper())
    except ValueError:
        raise ValueError("Channel must be R, G, B or A") from None


def save_output(output_path: Path, data: bytes) -> None:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as exc:
        raise OutputError(f"failed to write {output_path}: {exc}") from exc


async def read_carrier(file: Optional[UploadFile], url: Optional[str]) -> bytes:
    if file is not None:
        return load_image_bytes(file=BytesIO(await file.read()))
    return load_image_bytes(url=url)


@router.get("/health")
async def health():
    return {"status": "ok", "bit_position": stego_service.bit_position}


@router.post("/encode", response_model=StegoAPIResult)
async def encode(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    secret: Optional[UploadFile] = File(None),
    start_x: int = Form(0),
    start_y: int = Form(0),
    bit_position: Optional[int] = Form(None),
    convert: bool = Form(False),
    output_filename: Optional[str] = Form(None),
):
    """
    Hide a message in an image

    Args:
        file: Carrier image (or url)
        url: URL of the carrier image
        message: UTF-8 text to hide (or secret)
        secret: Raw bytes to hide
        start_x: Column of the first pixel to write
        start_y: Row of the first pixel to write
        bit_position: Bit of the red channel to use (0-7), defaults to the service setting
        convert: Convert RGB, greyscale or palette carriers to RGBA first
        output_filename: Optional custom output filename

    Returns:
        StegoAPIResult with the end point needed for decoding
    """
    try:
        if (message is None) == (secret is None):
            return send_response(400, "Provide exactly one of message or secret")

        payload = message.encode("utf-8") if message is not None else await secret.read()
        start = Point(x=start_x, y=start_y)
        output_dir = Path(settings.get_output_dir())
        name = Path(output_filename).name if output_filename else f"stego_{uuid.uuid4().hex}.png"
        output_path = output_dir / name

        options = BitPlaneOptions(
            bit_position=bit_position,
            output_filename=str(output_path),
            convert=convert,
        )
        logger.info(f"Received encode request: start={start}, message_len={len(payload)}, bit={bit_position}")

        carrier = await read_carrier(file, url)
        encoded, result = stego_service.encode(carrier, payload, start, options)
        save_output(output_path, encoded)

        return send_response(
            200,
            f"Message hidden successfully in bit {result.bit_position} from {result.start} to {result.end}",
            str(result.output_path),
            {
                "start": result.start.dict(),
                "end": result.end.dict(),
                "message_length": result.message_length,
                "bit_position": result.bit_position,
            }
        )
    except StegoError as e:
        logger.warning(f"Rejected encode request: {e}")
        return send_response(status_for(e), str(e))
    except ValueError as e:
        logger.warning(f"ValueError in encode: {e}")
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in encode: {e}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/decode", response_model=StegoAPIResult)
async def decode(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    start_x: int = Form(...),
    start_y: int = Form(...),
    end_x: int = Form(...),
    end_y: int = Form(...),
    bit_position: Optional[int] = Form(None),
):
    """
    Reveal a message stored between start and end

    Returns:
        StegoAPIResult with the message as text and hex
    """
    try:
        start = Point(x=start_x, y=start_y)
        end = Point(x=end_x, y=end_y)
        logger.info(f"Received decode request: start={start}, end={end}, bit={bit_position}")

        carrier = await read_carrier(file, url)
        result = stego_service.decode(carrier, start, end, bit_position)

        return send_response(
            200,
            f"Message revealed successfully from bit {result.bit_position}",
            None,
            {
                "text": result.text,
                "message_hex": result.message.hex(),
                "message_length": len(result.message),
                "discarded_bits": result.discarded_bits,
                "bit_position": result.bit_position,
            }
        )
    except StegoError as e:
        logger.warning(f"Rejected decode request: {e}")
        return send_response(status_for(e), str(e))
    except ValueError as e:
        logger.warning(f"ValueError in decode: {e}")
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in decode: {e}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/visualize-bit-planes", response_model=StegoAPIResult)
async def visualize_bit_planes(
    file: UploadFile = File(...),
    channel: str = Form("R"),
):
    """
    Visualize all bit planes of an image for a specified channel
    """
    try:
        rgba_channel = parse_channel(channel)
        output_dir = Path(settings.get_bit_planes_dir())
        result = stego_service.visualize_bit_planes(await file.read(), rgba_channel, output_dir)

        return send_response(
            200,
            f"Generated {len(result.output_images)} bit plane visualizations for channel {result.channel}",
            None,
            {
                "output_images": [str(path) for path in result.output_images],
                "channel": result.channel,
            }
        )
    except StegoError as e:
        return send_response(status_for(e), str(e))
    except ValueError as e:
        return send_response(400, str(e))


@router.post("/visualize-bit-plane", response_model=StegoAPIResult)
async def visualize_single_bit_plane(
    file: UploadFile = File(...),
    bit_plane: int = Form(...),
    channel: str = Form("R"),
):
    """
    Visualize a specific bit plane of an image for a specified channel

    Args:
        file: The image to visualize
        bit_plane: The bit plane to visualize (0-7, where 0 is LSB)
        channel: Color channel to visualize (R, G, B or A)
    """
    try:
        rgba_channel = parse_channel(channel)
        output_dir = Path(settings.get_bit_planes_dir())
        result = stego_service.visualize_single_bit_plane(await file.read(), bit_plane, rgba_channel, output_dir)

        return send_response(
            200,
            f"Generated bit plane {bit_plane} visualization for channel {result.channel}",
            str(result.output_images[0]),
            {
                "output_image": str(result.output_images[0]),
                "channel": result.channel,
                "bit_plane": result.bit_plane,
            }
        )
    except StegoError as e:
        return send_response(status_for(e), str(e))
    except ValueError as e:
        return send_response(400, str(e))
