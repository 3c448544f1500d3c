import io
import os

import pytest
from PIL import Image

from utils.image_utils import (ImageDecodeError, decode_image, detect_mime_type, draw_on_surface,
                               encode_surface, is_valid_image_type, load_qimage, read_image_bytes,
                               MAX_FILENAME_BYTES, fit_filename, truncate_display_name,
                               unique_path)


@pytest.mark.parametrize("mime_type,expected", [
    ("image/png", True),
    ("image/jpeg", True),
    ("image/jpg", True),
    ("image/webp", True),
    ("image/gif", False),
    ("image/bmp", False),
    ("text/plain", False),
    ("", False),
])
def test_is_valid_image_type(mime_type, expected):
    assert is_valid_image_type(mime_type) is expected


def test_detect_mime_type_by_extension(make_image):
    assert detect_mime_type(make_image("a.png")) == "image/png"
    assert detect_mime_type(make_image("b.jpg", fmt="JPEG")) == "image/jpeg"
    assert detect_mime_type(make_image("c.webp", fmt="WEBP")) == "image/webp"


def test_read_image_bytes_rejects_other_types(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    assert read_image_bytes(str(path)) is None


def test_read_image_bytes_returns_data(make_image):
    path = make_image("a.png")
    mime_type, data = read_image_bytes(path)
    assert mime_type == "image/png"
    assert data.startswith(b"\x89PNG")


def test_truncate_keeps_short_names():
    name = "x" * 35
    assert truncate_display_name(name) == name


def test_truncate_long_name_keeps_both_ends():
    name = "a" * 20 + "MIDDLE" + "b" * 20 + ".png"
    short = truncate_display_name(name)
    assert len(short) == 35
    assert short == name[:16] + "..." + name[-16:]


def test_decode_image_returns_rgba_natural_size(make_image):
    with open(make_image("a.jpg", fmt="JPEG", size=(30, 20)), "rb") as f:
        image = decode_image(f.read())
    assert image.mode == "RGBA"
    assert image.size == (30, 20)


def test_decode_image_raises_on_garbage():
    with pytest.raises(ImageDecodeError):
        decode_image(b"not an image at all")


def test_draw_on_surface_matches_size():
    image = Image.new("RGBA", (7, 5), (10, 20, 30, 255))
    surface = draw_on_surface(image)
    assert surface.size == (7, 5)
    assert surface.getpixel((3, 2)) == (10, 20, 30, 255)


def test_encode_jpeg_flattens_transparency_to_black():
    surface = Image.new("RGBA", (4, 4), (255, 255, 255, 0))
    data = encode_surface(surface, "JPEG")
    assert data is not None
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"
        r, g, b = decoded.getpixel((1, 1))
        assert r < 10 and g < 10 and b < 10


@pytest.mark.parametrize("pillow_format", ["PNG", "WEBP"])
def test_encode_keeps_format(pillow_format):
    surface = Image.new("RGBA", (4, 4), (0, 128, 255, 255))
    data = encode_surface(surface, pillow_format)
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == pillow_format
        assert decoded.size == (4, 4)


def test_encode_unknown_format_returns_none():
    surface = Image.new("RGBA", (4, 4))
    assert encode_surface(surface, "NOT_A_FORMAT") is None


def test_load_qimage_scales_to_fit(make_image):
    with open(make_image("wide.png", size=(200, 100)), "rb") as f:
        qimage = load_qimage(f.read(), (50, 50))
    assert qimage is not None
    assert qimage.width() == 50
    assert qimage.height() == 25


def test_load_qimage_returns_none_for_garbage():
    assert load_qimage(b"garbage") is None


def test_unique_path_appends_counter(tmp_path):
    assert unique_path(str(tmp_path), "Photo_1.png") == str(tmp_path / "Photo_1.png")
    (tmp_path / "Photo_1.png").write_bytes(b"x")
    assert unique_path(str(tmp_path), "Photo_1.png") == str(tmp_path / "Photo_1 (1).png")
    (tmp_path / "Photo_1 (1).png").write_bytes(b"x")
    assert unique_path(str(tmp_path), "Photo_1.png") == str(tmp_path / "Photo_1 (2).png")


def test_fit_filename_leaves_short_names_alone():
    assert fit_filename("Photo", "_1.png") == "Photo_1.png"


def test_fit_filename_cuts_on_character_boundary():
    # 3-byte characters: 248 bytes of budget hold 82 whole characters
    name = fit_filename("图" * 100, "_10.png")
    assert name == "图" * 82 + "_10.png"
    assert len(name.encode('utf-8')) <= MAX_FILENAME_BYTES


def test_unique_path_keeps_counter_within_byte_limit(tmp_path):
    filename = "x" * (MAX_FILENAME_BYTES - 4) + ".png"
    (tmp_path / filename).write_bytes(b"x")

    path = unique_path(str(tmp_path), filename)

    name = os.path.basename(path)
    assert name.endswith(" (1).png")
    assert len(name.encode('utf-8')) == MAX_FILENAME_BYTES
    with open(path, 'wb') as f:
        f.write(b"y")
