"""Meme animations that carry, spin or swallow the avatar."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from PIL import Image

from zeroplugins.gif.canvas import Workspace, load_first_frame, rotate, save_gif


def _write(workspace: Workspace, filename: str, delay: int, frames: Sequence) -> str:
    path: Path = workspace.user_dir / filename
    save_gif(path, delay, frames)
    return path.resolve().as_uri()


_TAIGUAN_X = [180, 180, 180, 180, 177, 175, 173, 171] + [170] * 11 + [175]


def _taiguan(workspace: Workspace) -> str:
    head = workspace.logo(0, 0)
    frames = workspace.frames(workspace.download_range("taiguan", len(_TAIGUAN_X)))
    result = [
        frame.insert_up(head, 85, 85, x, 65).image
        for frame, x in zip(frames, _TAIGUAN_X)
    ]
    return _write(workspace, "taiguan.gif", 7, result)


_ZOU = [(98, 138, 100, 45), (98, 138, 101, 45), (89, 140, 99, 40)]


def _zou(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    other = workspace.logo2(100, 100)
    frames = workspace.frames(workspace.download_range("zou", len(_ZOU)))
    result = [
        frame.insert_up(head, 40, 40, x, y).insert_up(other, 55, 55, x2, y2).image
        for frame, (x, y, x2, y2) in zip(frames, _ZOU)
    ]
    return _write(workspace, "zou.gif", 8, result)


_CI = [(25, 57), (27, 58), (28, 57), (30, 57), (30, 58), (30, 59)]


def _ci(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    frames = workspace.frames(workspace.download_range("ci", 26))
    result = [
        frame.insert_bottom(head, 25, 25, x, y).image
        for frame, (x, y) in zip(frames, _CI)
    ]
    result += [frame.image for frame in frames[len(_CI):]]
    return _write(workspace, "ci.gif", 7, result)


def _worship(workspace: Workspace) -> str:
    paths = workspace.download_range("worship", 9)
    face: Image.Image = load_first_frame(workspace.head_images[0], 0, 0).image
    frames = workspace.frames(paths)
    result = [frame.insert_bottom(face, 140, 140, 0, 0).image for frame in frames]
    return _write(workspace, "worship.gif", 7, result)


def _ceng2(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    frames = workspace.frames(workspace.download_range("ceng2", 4))
    result = [frame.insert_bottom(head, 175, 175, 78, 263).image for frame in frames]
    return _write(workspace, "ceng2.gif", 7, result)


def _dun(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    frames = workspace.frames(workspace.download_range("dun", 5))
    result = [frame.insert_bottom(head, 80, 80, 85, 45).image for frame in frames]
    return _write(workspace, "dun.gif", 7, result)


def _push(workspace: Workspace) -> str:
    paths = workspace.download_range("push", 16)
    head = workspace.logo(0, 0)
    frames = workspace.frames(paths)
    result = [
        frame.insert_up_centered(rotate(head, -22 * step, 280, 280).image, 0, 0, 523, 291).image
        for step, frame in enumerate(frames)
    ]
    return _write(workspace, "push.gif", 7, result)


def _peng(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    m1 = rotate(head, 1, 80, 80).image
    m2 = rotate(head, 30, 80, 80).image
    m3 = rotate(head, 45, 85, 85).image
    m4 = rotate(head, 90, 80, 80).image
    frames = workspace.frames(workspace.download_range("peng", 25))
    places = [(m1, 205, 80)] * 9 + [
        (m1, 200, 80),
        (m2, 169, 65),
        (m2, 160, 69),
        (m3, 113, 90),
        (m4, 89, 159),
        (m4, 89, 159),
        (m4, 86, 160),
        (m4, 89, 159),
        (m4, 86, 160),
    ]
    result = [frame.image for frame in frames[:7]]
    result += [
        frame.insert_up(picture, 0, 0, x, y).image
        for frame, (picture, x, y) in zip(frames[7:], places)
    ]
    return _write(workspace, "peng.gif", 8, result)


_KLEE = [
    (0, 174), (0, 174), (0, 174), (0, 174), (0, 174), (12, 160), (19, 152),
    (23, 148), (26, 145), (32, 140), (37, 136), (42, 131), (49, 127),
    (70, 126), (88, 128), (-30, 210), (-19, 207), (-14, 200), (-10, 188),
    (-7, 179), (-3, 170), (-3, 175), (-1, 174), (0, 174), (0, 174),
    (0, 174), (0, 174), (0, 174), (0, 174), (0, 174), (0, 174),
]


def _klee(workspace: Workspace) -> str:
    paths = workspace.download_range("klee", len(_KLEE))
    head = load_first_frame(workspace.head_images[0], 82, 83).image
    frames = workspace.frames(paths)
    result = [
        frame.insert_bottom(head, 0, 0, x, y).image
        for frame, (x, y) in zip(frames, _KLEE)
    ]
    return _write(workspace, "klee.gif", 7, result)


_HUTAOKEN = [(98, 101, 108, 234), (96, 100, 108, 237)]


def _hutaoken(workspace: Workspace) -> str:
    head = workspace.logo(55, 55)
    frames = workspace.frames(workspace.download_range("hutaoken", len(_HUTAOKEN)))
    result = [
        frame.insert_bottom(head, *place).image
        for frame, place in zip(frames, _HUTAOKEN)
    ]
    return _write(workspace, "hutaoken.gif", 8, result)


def _lick(workspace: Workspace) -> str:
    head = workspace.logo(100, 100)
    frames = workspace.frames(workspace.download_range("lick", 2))
    result = [frame.insert_up(head, 44, 44, 10, 138).image for frame in frames]
    return _write(workspace, "lick.gif", 8, result)


_TIQIU = [
    (58, 137), (57, 118), (56, 100), (53, 114), (51, 127), (49, 140),
    (48, 113), (48, 86), (48, 58), (49, 98), (51, 137), (52, 177),
    (53, 170), (56, 182), (59, 154),
]


def _tiqiu(workspace: Workspace) -> str:
    paths = workspace.download_range("tiqiu", len(_TIQIU))
    head = workspace.logo(78, 78)
    frames = workspace.frames(paths)
    result = [
        frame.insert_up_centered(
            rotate(head, -24 * step, 0, 0).image, 0, 0, x + 38, y + 38
        ).image
        for step, (frame, (x, y)) in enumerate(zip(frames, _TIQIU))
    ]
    return _write(workspace, "tiqiu.gif", 7, result)


def _cai(workspace: Workspace) -> str:
    head = workspace.logo(0, 0)
    frames = workspace.frames(workspace.download_range("cai", 5))
    turned = rotate(head, -20, 130, 80).image
    places = [
        (turned, 123, 105, 39, 188),
        (turned, 123, 105, 39, 188),
        (head, 90, 71, 50, 209),
        (head, 85, 76, 52, 203),
        (head, 88, 82, 49, 198),
    ]
    result = [
        frame.insert_bottom(picture, width, height, x, y).image
        for frame, (picture, width, height, x, y) in zip(frames, places)
    ]
    return _write(workspace, "cai.gif", 7, result)


def _whirl(workspace: Workspace) -> str:
    paths = workspace.download_range("whirl", 15)
    head = workspace.logo(0, 0)
    frames = workspace.frames(paths)
    result = [
        frame.insert_up_centered(rotate(head, -24 * step, 145, 145).image, 0, 0, 115, 89).image
        for step, frame in enumerate(frames)
    ]
    return _write(workspace, "whirl.gif", 7, result)


_COMMANDS: dict[str, Callable[[Workspace], str]] = {
    "抬棺": _taiguan,
    "揍": _zou,
    "吞": _ci,
    "膜拜": _worship,
    "2蹭": _ceng2,
    "炖": _dun,
    "2滚": _push,
    "砰": _peng,
    "可莉吃": _klee,
    "胡桃啃": _hutaoken,
    "2舔": _lick,
    "踢球": _tiqiu,
    "踩": _cai,
    "2转": _whirl,
}


def names() -> tuple[str, ...]:
    """Command names this module renders."""
    return tuple(_COMMANDS)


def render(workspace: Workspace, name: str, *args: str) -> str:
    """Render the animation for command ``name`` and return its file URI."""
    try:
        command = _COMMANDS[name]
    except KeyError:
        raise ValueError(f"unknown command: {name!r}") from None
    return command(workspace)