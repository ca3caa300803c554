import pytest
from click.testing import CliRunner

# Ten bytes starting like a JPEG; the content is never decoded.
IMAGE_BYTES = b'\xff\xd8\xff\xe0\x00\x10JFIF'


@pytest.fixture
def image_bytes():
    return IMAGE_BYTES


@pytest.fixture
def photo(tmp_path):
    path = tmp_path / 'photo.png'
    path.write_bytes(IMAGE_BYTES)
    return path


@pytest.fixture
def runner():
    return CliRunner()
