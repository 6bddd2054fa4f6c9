import io
import threading
from pathlib import Path
from urllib.parse import unquote, urlparse

import pytest
from PIL import Image, ImageSequence

from zeroplugins.gif import motion
from zeroplugins.gif.canvas import Workspace

MATERIAL_SIZE = (64, 64)
MATERIAL_URL = "https://materials.example.com/"


class _Fetcher:
    def __init__(self):
        self.urls = []
        self._lock = threading.Lock()

    def __call__(self, url):
        with self._lock:
            self.urls.append(url)
        shade = sum(url.encode()) % 256
        picture = Image.new("RGBA", MATERIAL_SIZE, (shade, 255 - shade, 90, 200))
        buffer = io.BytesIO()
        picture.save(buffer, "PNG")
        return buffer.getvalue()


def _avatar(path):
    picture = Image.new("RGBA", (40, 40))
    for x in range(40):
        for y in range(40):
            picture.putpixel((x, y), (x * 6, y * 6, (x + y) * 3, 255))
    picture.save(path, "PNG")


@pytest.fixture
def setup(tmp_path):
    fetcher = _Fetcher()
    workspace = Workspace(tmp_path, 1001, MATERIAL_URL, fetch=fetcher)
    for path in workspace.head_images:
        _avatar(path)
    return workspace, fetcher


def _path(uri):
    return Path(unquote(urlparse(uri).path))


def _total_duration(path):
    with Image.open(path) as picture:
        return sum(frame.info.get("duration", 0) for frame in ImageSequence.Iterator(picture))


@pytest.mark.parametrize(
    "name, frames",
    [
        ("捶", 4),
        ("啾啾", 8),
        ("2敲", 8),
        ("永远爱你", 2),
        ("捣", 8),
        ("打拳", 13),
        ("滚", 8),
        ("吸", 12),
        ("嗦", 12),
        ("锤", 7),
        ("紧贴", 20),
        ("紧紧贴着", 20),
        ("听音乐", 36),
    ],
)
def test_animation_length_and_size(setup, name, frames):
    workspace, _ = setup
    uri = motion.render(workspace, name)
    path = _path(uri)
    assert uri.startswith("file://")
    assert path.parent == workspace.user_dir.resolve()
    assert _total_duration(path) == frames * 70
    with Image.open(path) as picture:
        assert picture.size == MATERIAL_SIZE


def test_turn_needs_no_materials(setup):
    workspace, fetcher = setup
    uri = motion.render(workspace, "转")
    path = _path(uri)
    assert fetcher.urls == []
    assert path.name == "Turn.gif"
    with Image.open(path) as picture:
        assert picture.size == (250, 250)
    assert _total_duration(path) == 36 * 70


def test_pat_fetches_ten_materials_and_repeats_them(setup):
    workspace, fetcher = setup
    path = _path(motion.render(workspace, "2拍"))
    pat_urls = [url for url in fetcher.urls if "/pat/" in url]
    assert len(pat_urls) == 10
    assert _total_duration(path) > 10 * 70


def test_jack_up_uses_play_materials(setup):
    workspace, fetcher = setup
    path = _path(motion.render(workspace, "顶"))
    assert len([url for url in fetcher.urls if "/play/" in url]) == 23
    assert _total_duration(path) > 23 * 70
    assert path.name == "JackUp.gif"


def test_materials_are_cached(setup):
    workspace, fetcher = setup
    motion.render(workspace, "捶")
    first = len(fetcher.urls)
    motion.render(workspace, "捶")
    assert first == 4
    assert len(fetcher.urls) == first


def test_material_urls_follow_prefix(setup):
    workspace, fetcher = setup
    motion.render(workspace, "锤")
    assert sorted(fetcher.urls) == sorted(
        f"{MATERIAL_URL}hammer/{number}.png" for number in range(7)
    )


def test_aliases_share_output_file(setup):
    workspace, _ = setup
    assert motion.render(workspace, "吸") == motion.render(workspace, "嗦")


def test_names_lists_commands():
    listed = motion.names()
    assert "转" in listed and "2拍" in listed
    assert len(listed) == len(set(listed))


def test_unknown_command(setup):
    workspace, _ = setup
    with pytest.raises(ValueError):
        motion.render(workspace, "摸")


def test_missing_avatar_raises(tmp_path):
    workspace = Workspace(tmp_path, 7, MATERIAL_URL, fetch=_Fetcher())
    with pytest.raises(FileNotFoundError):
        motion.render(workspace, "转")