import pytest

from fdfkit.errors import ErrorCode, MlxError
from fdfkit.images import Image, Instance, Texture, encode_pixel


def test_encode_pixel_is_rgba_order():
    assert encode_pixel(0x11223344) == bytes([0x11, 0x22, 0x33, 0x44])


def test_encode_pixel_masks_to_32_bits():
    assert encode_pixel(0x1AABBCCDD) == encode_pixel(0xAABBCCDD)


def test_new_image_is_blank():
    img = Image(3, 2)
    assert len(img.pixels) == 3 * 2 * 4
    assert not any(img.pixels)
    assert img.enabled
    assert img.instances == []


@pytest.mark.parametrize("w,h", [(0, 5), (5, 0), (32768, 1), (1, 32768)])
def test_invalid_dimensions(w, h):
    with pytest.raises(MlxError) as info:
        Image(w, h)
    assert info.value.code is ErrorCode.INVDIM


def test_max_dimension_accepted():
    img = Image(32767, 1)
    assert img.width == 32767


def test_put_get_roundtrip():
    img = Image(4, 4)
    img.put_pixel(2, 3, 0xDEADBEEF)
    assert img.get_pixel(2, 3) == 0xDEADBEEF
    assert img.get_pixel(3, 2) == 0
    start = (3 * 4 + 2) * 4
    assert bytes(img.pixels[start:start + 4]) == encode_pixel(0xDEADBEEF)


@pytest.mark.parametrize("x,y", [(4, 0), (0, 4), (-1, 0)])
def test_pixel_out_of_bounds(x, y):
    img = Image(4, 4)
    with pytest.raises(MlxError) as info:
        img.put_pixel(x, y, 0xFFFFFFFF)
    assert info.value.code is ErrorCode.INVPOS


def test_resize_upscale_single_pixel():
    img = Image(1, 1)
    img.put_pixel(0, 0, 0x12345678)
    img.resize(3, 3)
    assert (img.width, img.height) == (3, 3)
    assert all(img.get_pixel(x, y) == 0x12345678 for x in range(3) for y in range(3))


def test_resize_double_maps_to_source_blocks():
    img = Image(2, 2)
    colors = {(0, 0): 0x10, (1, 0): 0x20, (0, 1): 0x30, (1, 1): 0x40}
    for (x, y), c in colors.items():
        img.put_pixel(x, y, c)
    img.resize(4, 4)
    for y in range(4):
        for x in range(4):
            assert img.get_pixel(x, y) == colors[(x // 2, y // 2)]


def test_resize_downscale_samples_even_pixels():
    img = Image(4, 4)
    for y in range(4):
        for x in range(4):
            img.put_pixel(x, y, y * 4 + x + 1)
    img.resize(2, 2)
    assert len(img.pixels) == 2 * 2 * 4
    for y in range(2):
        for x in range(2):
            assert img.get_pixel(x, y) == (2 * y) * 4 + 2 * x + 1


def test_resize_same_size_keeps_buffer():
    img = Image(2, 2)
    before = img.pixels
    img.resize(2, 2)
    assert img.pixels is before


def test_resize_invalid():
    img = Image(2, 2)
    with pytest.raises(MlxError) as info:
        img.resize(0, 2)
    assert info.value.code is ErrorCode.INVDIM


def test_add_instance_returns_indices():
    img = Image(1, 1)
    assert img.add_instance(5, 6, 0) == 0
    assert img.add_instance(7, 8, 1) == 1
    assert img.instances[1] == Instance(7, 8, 1, True)


def test_from_texture_copies_pixels():
    data = bytearray(range(2 * 3 * 4))
    tex = Texture(2, 3, data)
    img = Image.from_texture(tex)
    assert (img.width, img.height) == (2, 3)
    assert img.pixels == data
    data[0] = 99
    assert img.pixels[0] == 0


def test_from_texture_short_data():
    with pytest.raises(MlxError):
        Image.from_texture(Texture(2, 2, bytearray(4)))