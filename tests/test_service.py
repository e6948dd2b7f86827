import logging

import numpy as np
import pytest
from PIL import Image

from conftest import png16_bytes, png_bytes, read_pixels
from src.services.bitplane_stego.core.errors import InvalidArgumentError, InvalidInputError, OutOfBoundsError
from src.services.bitplane_stego.core.service import ImageStegoService
from src.services.bitplane_stego.models.stego_models import BitPlaneOptions, Point, RGBAChannel


@pytest.fixture
def service():
    return ImageStegoService()


def test_encode_reports_region(service, carrier):
    encoded, result = service.encode(carrier, b"Hi", Point(x=2, y=0), BitPlaneOptions(bit_position=4))

    assert result.start == Point(x=2, y=0)
    assert result.end == Point(x=8, y=1)
    assert result.message_length == 2
    assert result.bit_position == 4
    assert service.decode(encoded, result.start, result.end, 4).message == b"Hi"


def test_encode_uses_service_default_bit(carrier):
    service = ImageStegoService(bit_position=6)
    encoded, result = service.encode(carrier, b"Hi", Point(x=0, y=0))

    assert result.bit_position == 6
    assert service.decode(encoded, result.start, result.end).message == b"Hi"


def test_text_round_trip(service, make_carrier):
    text = "héllo wörld ✓"
    encoded, result = service.hide_text(make_carrier(40, 40), text, Point(x=1, y=1))

    assert service.reveal_text(encoded, result.start, result.end) == text


def test_decode_reports_discarded_bits(service, carrier, caplog):
    start = Point(x=0, y=0)
    encoded, _ = service.encode(carrier, b"AB", start)

    with caplog.at_level(logging.WARNING):
        result = service.decode(encoded, start, Point(x=2, y=1))

    assert result.message == b"A"
    assert result.discarded_bits == 4
    assert "dropping 4 trailing bits" in caplog.text


def test_convert_option_accepts_rgb_carrier(service, rgb_carrier):
    with pytest.raises(InvalidInputError):
        service.encode(rgb_carrier, b"Hi", Point(x=0, y=0))

    encoded, result = service.encode(rgb_carrier, b"Hi", Point(x=0, y=0), BitPlaneOptions(convert=True))

    assert read_pixels(encoded).shape == (10, 10, 4)
    assert service.decode(encoded, result.start, result.end).message == b"Hi"


def test_options_without_bit_use_service_default(rgb_carrier):
    service = ImageStegoService(bit_position=6)

    encoded, result = service.encode(rgb_carrier, b"Hi", Point(x=0, y=0), BitPlaneOptions(convert=True))

    assert result.bit_position == 6
    assert service.decode(encoded, result.start, result.end).message == b"Hi"


def test_options_bit_overrides_service_default(carrier):
    service = ImageStegoService(bit_position=6)

    encoded, result = service.encode(carrier, b"Hi", Point(x=0, y=0), BitPlaneOptions(bit_position=2))

    assert result.bit_position == 2
    assert service.decode(encoded, result.start, result.end, 2).message == b"Hi"


def test_sixteen_bit_carrier_needs_convert(service):
    carrier = png16_bytes(10, 10, 0x1234)
    with pytest.raises(InvalidInputError):
        service.encode(carrier, b"Hi", Point(x=0, y=0))

    encoded, result = service.encode(carrier, b"Hi", Point(x=0, y=0), BitPlaneOptions(convert=True))

    assert service.decode(encoded, result.start, result.end).message == b"Hi"


class TestFiles:
    def test_encode_then_decode_file(self, service, carrier, tmp_path):
        src = tmp_path / "cover.png"
        dst = tmp_path / "out" / "stego.png"
        src.write_bytes(carrier)
        dst.parent.mkdir()

        result = service.encode_file(src, dst, b"Hi", Point(x=1, y=0))

        assert result.output_path == dst.resolve()
        assert dst.exists()
        assert service.decode_file(dst, result.start, result.end).message == b"Hi"
        # source is left as it was
        assert src.read_bytes() == carrier

    def test_relative_paths_are_resolved(self, service, carrier, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cover.png").write_bytes(carrier)

        result = service.encode_file("cover.png", "stego.png", b"Hi", Point(x=0, y=0))

        assert result.output_path == tmp_path.resolve() / "stego.png"

    def test_out_of_bounds_writes_nothing(self, service, carrier, tmp_path):
        src = tmp_path / "cover.png"
        dst = tmp_path / "stego.png"
        src.write_bytes(carrier)

        with pytest.raises(OutOfBoundsError):
            service.encode_file(src, dst, b"x" * 50, Point(x=0, y=0))

        assert not dst.exists()

    def test_empty_message_writes_nothing(self, service, tmp_path):
        dst = tmp_path / "stego.png"
        with pytest.raises(InvalidArgumentError):
            service.encode_file(tmp_path / "missing.png", dst, b"", Point(x=0, y=0))
        assert not dst.exists()

    def test_missing_source(self, service, tmp_path):
        with pytest.raises(InvalidInputError):
            service.encode_file(tmp_path / "missing.png", tmp_path / "out.png", b"Hi", Point(x=0, y=0))

    def test_bad_bit_position(self, service, carrier, tmp_path):
        src = tmp_path / "cover.png"
        src.write_bytes(carrier)
        with pytest.raises(InvalidArgumentError):
            service.encode_file(src, tmp_path / "out.png", b"Hi", Point(x=0, y=0), bit_position=8)


class TestVisualization:
    def test_single_bit_plane(self, service, tmp_path):
        pixels = np.zeros((4, 6, 4), dtype=np.uint8)
        pixels[:, :3, 0] = 0b00000010

        result = service.visualize_single_bit_plane(png_bytes(pixels), 1, RGBAChannel.RED, tmp_path)

        assert result.bit_plane == 1
        assert result.channel == "R"
        plane = np.array(Image.open(result.output_images[0]))
        assert (plane[:, :3] == 255).all()
        assert (plane[:, 3:] == 0).all()

    def test_all_bit_planes(self, service, carrier, tmp_path):
        result = service.visualize_bit_planes(carrier, RGBAChannel.ALPHA, tmp_path / "planes")

        assert result.bit_plane == -1
        assert len(result.output_images) == 8
        assert all(path.exists() for path in result.output_images)

    def test_accepts_rgb_images(self, service, rgb_carrier, tmp_path):
        result = service.visualize_single_bit_plane(rgb_carrier, 0, RGBAChannel.GREEN, tmp_path)
        assert result.output_images[0].name == "bit_plane_G_0.png"

    def test_rejects_bad_bit_plane(self, service, carrier, tmp_path):
        with pytest.raises(InvalidArgumentError):
            service.visualize_single_bit_plane(carrier, 8, RGBAChannel.RED, tmp_path)
