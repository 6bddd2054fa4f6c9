import io
import itertools
import threading

import pytest
from PIL import Image

from zeroplugins.gif import extra
from zeroplugins.gif.canvas import Workspace


class _Fetcher:
    def __init__(self):
        self.calls = []
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self, url):
        with self._lock:
            self.calls.append(url)
            n = next(self._counter)
        colour = (n * 37 % 256, n * 91 % 256, n * 53 % 256, 255)
        picture = Image.new("RGBA", (64, 64), colour)
        buffer = io.BytesIO()
        picture.save(buffer, "PNG")
        return buffer.getvalue()


@pytest.fixture
def setup(tmp_path):
    fetch = _Fetcher()
    workspace = Workspace(tmp_path, 10001, "mem://", fetch)
    workspace.prepare_logos(["12345", "67890"], avatar_url="avatar/{}")
    return workspace, fetch


def test_names_cover_extra_commands():
    assert set(extra.names()) == {
        "抬棺", "揍", "吞", "膜拜", "2蹭", "炖", "2滚", "砰",
        "可莉吃", "胡桃啃", "2舔", "踢球", "踩", "2转",
    }


def test_unknown_name_raises(setup):
    workspace, _ = setup
    with pytest.raises(ValueError):
        extra.render(workspace, "摸")


@pytest.mark.parametrize(
    "name, filename, count",
    [
        ("抬棺", "taiguan.gif", 20),
        ("揍", "zou.gif", 3),
        ("吞", "ci.gif", 26),
        ("膜拜", "worship.gif", 9),
        ("2蹭", "ceng2.gif", 4),
        ("炖", "dun.gif", 5),
        ("2滚", "push.gif", 16),
        ("砰", "peng.gif", 25),
        ("可莉吃", "klee.gif", 31),
        ("胡桃啃", "hutaoken.gif", 2),
        ("2舔", "lick.gif", 2),
        ("踢球", "tiqiu.gif", 15),
        ("踩", "cai.gif", 5),
        ("2转", "whirl.gif", 15),
    ],
)
def test_render_writes_animation(setup, name, filename, count):
    workspace, _ = setup
    uri = extra.render(workspace, name)
    path = workspace.user_dir / filename
    assert uri == path.resolve().as_uri()
    with Image.open(path) as picture:
        assert picture.n_frames == count
        assert picture.size == (64, 64)


def test_materials_are_cached(setup):
    workspace, fetch = setup
    extra.render(workspace, "炖")
    first = len(fetch.calls)
    extra.render(workspace, "炖")
    assert len(fetch.calls) == first
    assert sorted(p.name for p in (workspace.materials / "dun").iterdir()) == [
        f"{n}.png" for n in range(5)
    ]