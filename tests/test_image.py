import pytest
from PIL import Image as PILImage

from raycub.image import (
    ErrorCode,
    Image,
    ImageError,
    Texture,
    load_png,
    strerror,
    texture_to_image,
)


def test_strerror_messages_from_table():
    assert strerror(ErrorCode.SUCCESS) == "No Errors"
    assert strerror(ErrorCode.INVPNG) == "PNG file is invalid or corrupted"
    assert strerror(15) == "String is too big to be drawn"


def test_strerror_rejects_unknown_code():
    with pytest.raises(ValueError):
        strerror(16)
    with pytest.raises(ValueError):
        strerror(-1)


def test_image_error_carries_code():
    err = ImageError(ErrorCode.INVDIM)
    assert err.code is ErrorCode.INVDIM
    assert str(err) == strerror(ErrorCode.INVDIM)


def test_new_image_is_transparent():
    image = Image(3, 2)
    assert len(image.pixels) == 3 * 2 * 4
    assert all(b == 0 for b in image.pixels)


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (32768, 1), (1, 32768)])
def test_invalid_dimensions(width, height):
    with pytest.raises(ImageError) as info:
        Image(width, height)
    assert info.value.code is ErrorCode.INVDIM


def test_put_pixel_byte_layout():
    image = Image(2, 2)
    image.put_pixel(1, 0, 0x11223344)
    assert image.pixels[4:8] == bytes([0x11, 0x22, 0x33, 0x44])
    assert image.get_pixel(1, 0) == 0x11223344
    assert image.get_pixel(0, 0) == 0


def test_put_pixel_out_of_bounds():
    image = Image(2, 2)
    with pytest.raises(ImageError) as info:
        image.put_pixel(2, 0, 0xFFFFFFFF)
    assert info.value.code is ErrorCode.INVPOS
    with pytest.raises(ImageError):
        image.get_pixel(0, -1)


def test_fill_sets_all_pixels():
    image = Image(4, 3)
    image.fill(0xAABBCCDD)
    assert {image.get_pixel(x, y) for x in range(4) for y in range(3)} == {0xAABBCCDD}


def test_resize_upscale_repeats_pixels():
    image = Image(2, 2)
    colors = {(0, 0): 0x10000001, (1, 0): 0x20000002, (0, 1): 0x30000003, (1, 1): 0x40000004}
    for (x, y), c in colors.items():
        image.put_pixel(x, y, c)
    image.resize(4, 4)
    assert (image.width, image.height) == (4, 4)
    assert len(image.pixels) == 4 * 4 * 4
    for y in range(4):
        for x in range(4):
            assert image.get_pixel(x, y) == colors[(x // 2, y // 2)]


def test_resize_downscale_samples_top_left():
    image = Image(4, 4)
    for y in range(4):
        for x in range(4):
            image.put_pixel(x, y, (y << 8) | x)
    image.resize(2, 2)
    assert image.get_pixel(1, 1) == (2 << 8) | 2
    assert image.get_pixel(0, 1) == 2 << 8


def test_resize_same_size_keeps_pixels():
    image = Image(3, 3)
    image.put_pixel(2, 2, 0x01020304)
    before = bytes(image.pixels)
    image.resize(3, 3)
    assert bytes(image.pixels) == before


def test_resize_invalid_dimensions():
    image = Image(3, 3)
    with pytest.raises(ImageError) as info:
        image.resize(0, 3)
    assert info.value.code is ErrorCode.INVDIM
    assert (image.width, image.height) == (3, 3)


def test_texture_pixel_and_bounds():
    texture = Texture(2, 1, bytearray([1, 2, 3, 4, 5, 6, 7, 8]))
    assert texture.pixel(1, 0) == 0x05060708
    with pytest.raises(ImageError):
        texture.pixel(0, 1)


def test_texture_rejects_wrong_buffer_size():
    with pytest.raises(ValueError):
        Texture(2, 2, bytearray(4))


def test_texture_to_image_copies_pixels():
    data = bytearray(range(16))
    texture = Texture(2, 2, data)
    image = texture_to_image(texture)
    assert bytes(image.pixels) == bytes(data)
    image.put_pixel(0, 0, 0)
    assert texture.pixel(0, 0) == 0x00010203


def test_load_png_round_trip(tmp_path):
    path = tmp_path / "wall.png"
    source = PILImage.new("RGBA", (3, 2))
    source.putpixel((2, 1), (10, 20, 30, 40))
    source.putpixel((0, 0), (255, 0, 128, 255))
    source.save(path)
    texture = load_png(path)
    assert (texture.width, texture.height, texture.bytes_per_pixel) == (3, 2, 4)
    assert texture.pixel(2, 1) == (10 << 24) | (20 << 16) | (30 << 8) | 40
    assert texture.pixel(0, 0) == (255 << 24) | (0 << 16) | (128 << 8) | 255


def test_load_png_converts_rgb(tmp_path):
    path = tmp_path / "rgb.png"
    PILImage.new("RGB", (1, 1), (7, 8, 9)).save(path)
    texture = load_png(str(path))
    assert texture.pixel(0, 0) == (7 << 24) | (8 << 16) | (9 << 8) | 0xFF


def test_load_png_invalid_data(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png at all")
    with pytest.raises(ImageError) as info:
        load_png(path)
    assert info.value.code is ErrorCode.INVPNG


def test_load_png_missing_file(tmp_path):
    with pytest.raises(ImageError) as info:
        load_png(tmp_path / "missing.png")
    assert info.value.code is ErrorCode.INVPNG