import io

import pytest
from PIL import Image

from zeroplugins.gif.canvas import (
    Frame,
    Workspace,
    load_all_frames,
    load_first_frame,
    resize,
    rotate,
    save_gif,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def _solid(colour, size=(10, 10)):
    return Image.new("RGBA", size, colour)


def _png_bytes(colour, size=(12, 12)):
    buffer = io.BytesIO()
    Image.new("RGBA", size, colour).save(buffer, "PNG")
    return buffer.getvalue()


class _Fetcher:
    def __init__(self, data):
        self.data = data
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)
        return self.data


def test_resize_keeps_or_scales():
    picture = _solid(RED, (40, 20))
    assert resize(picture, 0, 0).image.size == (40, 20)
    assert resize(picture, 20, 0).image.size == (20, 10)
    assert resize(picture, 7, 9).image.size == (7, 9)


def test_insert_up_draws_over():
    frame = Frame(_solid(RED)).insert_up(_solid(BLUE, (4, 4)), 0, 0, 2, 2)
    assert frame.image.size == (10, 10)
    assert frame.image.getpixel((3, 3)) == BLUE
    assert frame.image.getpixel((0, 0)) == RED
    assert frame.image.getpixel((6, 6)) == RED


def test_insert_bottom_is_hidden_by_opaque_frame():
    covered = Frame(_solid(RED)).insert_bottom(_solid(BLUE), 4, 4, 2, 2)
    assert covered.image.getpixel((3, 3)) == RED
    shown = Frame(_solid(CLEAR)).insert_bottom(_solid(BLUE), 4, 4, 2, 2)
    assert shown.image.getpixel((3, 3)) == BLUE
    assert shown.image.getpixel((0, 0)) == CLEAR


def test_insert_with_negative_offset():
    frame = Frame(_solid(RED)).insert_up(_solid(BLUE, (4, 4)), 0, 0, -2, -2)
    assert frame.image.getpixel((1, 1)) == BLUE
    assert frame.image.getpixel((2, 2)) == RED


def test_centered_inserts():
    up = Frame(_solid(RED)).insert_up_centered(_solid(BLUE, (4, 4)), 0, 0, 5, 5)
    assert up.image.getpixel((3, 3)) == BLUE
    assert up.image.getpixel((2, 2)) == RED
    down = Frame(_solid(CLEAR)).insert_bottom_centered(_solid(BLUE, (4, 4)), 0, 0, 5, 5)
    assert down.image.getpixel((6, 6)) == BLUE
    assert down.image.getpixel((7, 7)) == CLEAR


def test_circle_clears_corners():
    disc = Frame(_solid(RED, (12, 10))).circle()
    assert disc.width == disc.height == 10
    assert disc.image.getpixel((0, 0))[3] == 0
    assert disc.image.getpixel((5, 5)) == RED


def test_rotate_quarter_turn_swaps_sides():
    assert rotate(_solid(RED, (4, 2)), 90, 0, 0).image.size == (2, 4)
    assert rotate(_solid(RED, (4, 2)), 0, 8, 8).image.size == (8, 8)


def test_gif_round_trip(tmp_path):
    path = save_gif(tmp_path / "out.gif", 7, [_solid(RED), Frame(_solid(BLUE)), _solid(RED)])
    assert len(load_all_frames(path, 0, 0)) == 3
    first = load_first_frame(path, 5, 5)
    assert first.image.size == (5, 5)
    assert first.image.getpixel((2, 2))[:3] == (255, 0, 0)
    with Image.open(path) as picture:
        assert picture.info["duration"] == 70


def test_save_gif_needs_frames(tmp_path):
    with pytest.raises(ValueError):
        save_gif(tmp_path / "none.gif", 7, [])


def test_download_is_cached(tmp_path):
    fetch = _Fetcher(_png_bytes(RED))
    space = Workspace(tmp_path, 42, "http://materials.example.com/", fetch)
    first = space.download("mo/0.png")
    second = space.download("mo/0.png")
    assert first == second == tmp_path / "materials" / "mo" / "0.png"
    assert fetch.urls == ["http://materials.example.com/mo/0.png"]
    assert first.read_bytes() == fetch.data


def test_download_failure_leaves_nothing(tmp_path):
    def broken(url):
        raise OSError("offline")

    space = Workspace(tmp_path, 42, "http://materials.example.com/", broken)
    with pytest.raises(OSError):
        space.download("pa/1.png")
    assert not (tmp_path / "materials" / "pa" / "1.png").exists()


def test_download_range_keeps_order(tmp_path):
    fetch = _Fetcher(_png_bytes(BLUE))
    space = Workspace(tmp_path, 7, "http://materials.example.com/", fetch)
    paths = space.download_range("cuo", 5)
    assert [path.name for path in paths] == ["0.png", "1.png", "2.png", "3.png", "4.png"]
    frames = space.frames(paths)
    assert all(frame.image.getpixel((0, 0)) == BLUE for frame in frames)


def test_prepare_logos_and_logo(tmp_path):
    fetch = _Fetcher(_png_bytes(RED, (20, 20)))
    space = Workspace(tmp_path, 7, "http://materials.example.com/", fetch)
    stored = space.prepare_logos(
        ["12345", "abcdef"],
        "http://avatar.example.com/{}",
        "http://pic.example.com/{}",
    )
    assert fetch.urls == ["http://avatar.example.com/12345", "http://pic.example.com/ABCDEF"]
    assert stored == list(space.head_images)
    logo = space.logo(10, 10)
    assert logo.size == (10, 10)
    assert logo.getpixel((0, 0))[3] == 0
    assert logo.getpixel((5, 5)) == RED
    assert space.logo2(0, 0).size == (20, 20)