import numpy as np
import pytest
import imgico.preview as preview
from imgico.config import STANDARD_SIZES
from imgico.errors import InvalidArgument
from imgico.ico import create_ico
from imgico.raster import SourceImage

def solid_source(bgra, size=256):
    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[:, :] = bgra
    return SourceImage(pixels)

def split_source(size=32):
    # top half red, bottom half blue, both opaque
    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[:size // 2, :, 2] = 255
    pixels[size // 2:, :, 0] = 255
    pixels[:, :, 3] = 255
    return SourceImage(pixels)

def test_decode_ico_round_trip():
    data = create_ico(solid_source((10, 20, 200, 255)), STANDARD_SIZES)
    images = preview.decode_ico(data)
    assert set(images) == set(STANDARD_SIZES)
    for (width, height), image in images.items():
        assert image.size == (width, height)
        assert image.mode == 'RGBA'
        assert image.getpixel((0, 0)) == (200, 20, 10, 255)

def test_decode_ico_subset():
    sizes = [(48, 48), (16, 16)]
    images = preview.decode_ico(create_ico(solid_source((0, 0, 0, 255)), sizes))
    assert set(images) == set(sizes)

def test_decode_ico_keeps_alpha():
    images = preview.decode_ico(create_ico(solid_source((50, 60, 70, 128)), [(32, 32)]))
    assert images[(32, 32)].getpixel((5, 5)) == (70, 60, 50, 128)

def test_decode_ico_orientation():
    images = preview.decode_ico(create_ico(split_source(), [(32, 32), (16, 16)]))
    for (width, height), image in images.items():
        assert image.getpixel((0, 0)) == (255, 0, 0, 255)
        assert image.getpixel((width - 1, height - 1)) == (0, 0, 255, 255)

def test_load_preview_is_largest():
    data = create_ico(solid_source((1, 2, 3, 255)), [(16, 16), (128, 128), (32, 32)])
    assert preview.load_preview(data).size == (128, 128)

def test_read_ico_directory_matches_request():
    sizes = [(64, 64), (256, 256), (16, 16)]
    data = create_ico(solid_source((0, 0, 0, 0)), sizes)
    entries = preview.read_ico_directory(data)
    assert [(e.width, e.height, e.bit_count) for e in entries] == [(64, 64, 32), (256, 256, 32), (16, 16, 32)]

def test_describe_ico():
    data = create_ico(solid_source((0, 0, 0, 0)), [(16, 16), (32, 32)])
    lines = preview.describe_ico(data)
    assert lines[0] == "icon, 2 image(s), 5238 bytes"
    assert lines[1] == "  #0: 16x16 32-bit, 1064 bytes at offset 38"
    assert lines[2] == "  #1: 32x32 32-bit, 4136 bytes at offset 1102"

def test_decode_ico_invalid_data():
    with pytest.raises(InvalidArgument):
        preview.decode_ico(b"definitely not an icon")

def test_decode_ico_duplicate_sizes_share_a_key():
    data = create_ico(solid_source((0, 0, 0, 255)), [(16, 16), (16, 16), (32, 32)])
    assert len(preview.read_ico_directory(data)) == 3
    assert set(preview.decode_ico(data)) == {(16, 16), (32, 32)}
