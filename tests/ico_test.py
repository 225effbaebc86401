import struct
import numpy as np
import pytest
import imgico.ico as ico
from imgico.config import STANDARD_SIZES
from imgico.directory import read_ico_directory
from imgico.errors import InvalidArgument, RasterizationFailed
from imgico.raster import SourceImage

def make_source(width=64, height=64):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, 2] = 255
    pixels[:, :, 3] = np.linspace(0, 255, width, dtype=np.uint8)[np.newaxis, :]
    return SourceImage(pixels)

class FailingSource:
    """Source that cannot be rasterized at one size."""

    def __init__(self, failing_size):
        self.failing_size = failing_size
        self.calls = []

    def resize(self, width, height):
        self.calls.append((width, height))
        if (width, height) == self.failing_size:
            raise OSError("corrupt image data")
        return np.zeros((height, width, 4), dtype=np.uint8)

def test_create_ico_two_sizes():
    data = ico.create_ico(make_source(), [(16, 16), (32, 32)])
    assert len(data) == 5238
    assert struct.unpack_from('<HHH', data, 0) == (0, 1, 2)
    assert data[6] == 16 and data[7] == 16
    assert struct.unpack_from('<I', data, 6 + 12)[0] == 38
    assert data[22] == 32 and data[23] == 32
    assert struct.unpack_from('<I', data, 22 + 12)[0] == 1102

def test_create_ico_offsets_are_contiguous():
    data = ico.create_ico(make_source(), STANDARD_SIZES)
    entries = read_ico_directory(data)
    assert len(entries) == len(STANDARD_SIZES)
    assert entries[0].offset == 6 + 16 * len(STANDARD_SIZES)
    for current, following in zip(entries, entries[1:]):
        assert current.offset + current.size == following.offset
    assert entries[-1].offset + entries[-1].size == len(data)
    assert len(data) == ico.expected_ico_length(STANDARD_SIZES)

def test_create_ico_preserves_order_and_duplicates():
    sizes = [(48, 48), (16, 16), (48, 48), (20, 10)]
    data = ico.create_ico(make_source(), sizes)
    entries = read_ico_directory(data)
    assert [(e.width, e.height) for e in entries] == sizes
    assert all(e.bit_count == 32 and e.planes == 1 and e.color_count == 0 for e in entries)

def test_create_ico_256():
    data = ico.create_ico(make_source(), [(256, 256)])
    assert data[6] == 0
    assert data[7] == 0
    offset = struct.unpack_from('<I', data, 6 + 12)[0]
    assert struct.unpack_from('<ii', data, offset + 4) == (256, 512)

def test_create_ico_doubles_header_height():
    sizes = [(16, 16), (32, 24), (7, 100)]
    data = ico.create_ico(make_source(), sizes)
    for (width, height), entry in zip(sizes, read_ico_directory(data)):
        assert struct.unpack_from('<i', data, entry.offset + 8)[0] == 2 * height

def test_create_ico_accepts_square_ints():
    data = ico.create_ico(make_source(), [16, 32])
    assert len(data) == 5238

def test_create_ico_empty_sizes():
    with pytest.raises(InvalidArgument):
        ico.create_ico(make_source(), [])

@pytest.mark.parametrize("sizes", [[(0, 16)], [(16, 257)], [(16.0, 16)], [(16, 16, 16)], [True], ["16"]])
def test_create_ico_invalid_sizes(sizes):
    with pytest.raises(InvalidArgument):
        ico.create_ico(make_source(), sizes)

def test_create_ico_rasterization_failure():
    source = FailingSource((32, 32))
    with pytest.raises(RasterizationFailed) as excinfo:
        ico.create_ico(source, [(16, 16), (32, 32), (48, 48)])
    assert (excinfo.value.width, excinfo.value.height) == (32, 32)
    assert "corrupt image data" in str(excinfo.value)
    assert source.calls == [(16, 16), (32, 32)]

def test_create_ico_rejects_wrong_raster_size():
    class WrongSize:
        def resize(self, width, height):
            return np.zeros((height + 1, width, 4), dtype=np.uint8)

    with pytest.raises(RasterizationFailed):
        ico.create_ico(WrongSize(), [(16, 16)])

def test_create_ico_accepts_array_rasters():
    data = ico.create_ico(FailingSource(None), [(16, 16), (32, 32)])
    assert len(data) == 5238

def test_create_ico_is_repeatable():
    source = make_source()
    before = source.pixels.copy()
    first = ico.create_ico(source, [(16, 16), (48, 48)])
    second = ico.create_ico(source, [(16, 16), (48, 48)])
    assert first == second
    assert (source.pixels == before).all()

def test_create_ico_rejects_files_beyond_32bit_offsets():
    source = FailingSource(None)
    sizes = [(256, 256)] * 20000
    with pytest.raises(InvalidArgument):
        ico.create_ico(source, sizes)
    assert source.calls == []
    with pytest.raises(InvalidArgument):
        ico.expected_ico_length(sizes)

def test_expected_ico_length_near_limit():
    # 16000 images of 256x256 still fit below 4 GiB
    assert ico.expected_ico_length([(256, 256)] * 16000) == 6 + 16 * 16000 + 16000 * (40 + 256 * 256 * 4)
