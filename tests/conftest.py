"""Shared fixtures: small images generated on the fly."""
import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write a solid-colour image and return its path."""

    def _make(name, size=(500, 300), color=(255, 0, 0), mode='RGB', directory=None, **save_kwargs):
        directory = directory or tmp_path / 'images'
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        Image.new(mode, size, color).save(path, **save_kwargs)
        return path

    return _make


@pytest.fixture
def logo_path(tmp_path):
    """An opaque white 40x20 RGB watermark (no alpha channel)."""
    path = tmp_path / 'logo.png'
    Image.new('RGB', (40, 20), (255, 255, 255)).save(path)
    return path
