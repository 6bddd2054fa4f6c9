"""Meme animations that move, turn or press the avatar."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from PIL import Image

from zeroplugins.gif.canvas import (
    Frame,
    Workspace,
    load_first_frame,
    resize,
    rotate,
    save_gif,
)

_DELAY = 7


def _write(workspace: Workspace, filename: str, frames: Sequence) -> str:
    path: Path = workspace.user_dir / filename
    save_gif(path, _DELAY, frames)
    return path.resolve().as_uri()


def _head(workspace: Workspace, width: int, height: int) -> Image.Image:
    return load_first_frame(workspace.head_images[0], width, height).image


def _placed(
    workspace: Workspace,
    folder: str,
    filename: str,
    places: Sequence[tuple[int, int, int, int]],
) -> str:
    """Put the first picture under each material frame; places are (x, y, w, h)."""
    paths = workspace.download_range(folder, len(places))
    head = _head(workspace, 0, 0)
    frames = workspace.frames(paths)
    result = [
        frame.insert_bottom(head, width, height, x, y).image
        for frame, (x, y, width, height) in zip(frames, places)
    ]
    return _write(workspace, filename, result)


_THUMP = [(65, 128, 77, 72), (67, 128, 73, 72), (54, 139, 94, 61), (57, 135, 86, 65)]


def _thump(workspace: Workspace) -> str:
    return _placed(workspace, "thump", "Thump.gif", _THUMP)


def _jiujiu(workspace: Workspace) -> str:
    paths = workspace.download_range("jiujiu", 8)
    head = _head(workspace, 75, 51)
    frames = workspace.frames(paths)
    result = [frame.insert_bottom(head, 0, 0, 0, 0).image for frame in frames]
    return _write(workspace, "Jiujiu.gif", result)


_KNOCK = [
    (60, 308, 210, 195), (60, 308, 210, 198), (45, 330, 250, 172),
    (58, 320, 218, 180), (60, 310, 215, 193), (40, 320, 250, 285),
    (48, 308, 226, 192), (51, 301, 223, 200),
]


def _knock(workspace: Workspace) -> str:
    return _placed(workspace, "knock", "Knock.gif", _KNOCK)


def _listen_music(workspace: Workspace) -> str:
    paths = workspace.download_range("listen_music", 1)
    face = workspace.logo(0, 0)
    record = workspace.frames(paths)[0]
    result = [
        record.insert_bottom_centered(
            rotate(face, -step * 10, 215, 215).image, 0, 0, 207, 207
        ).image
        for step in range(36)
    ]
    return _write(workspace, "ListenMusic.gif", result)


_LOVE_YOU = [(68, 65, 70, 70), (63, 59, 80, 80)]


def _love_you(workspace: Workspace) -> str:
    return _placed(workspace, "love_you", "LoveYou.gif", _LOVE_YOU)


_PAT_PLACES = [(11, 73, 106, 100), (8, 79, 112, 96)]
_PAT_SEQUENCE = [
    0, 1, 2, 3, 1, 2, 3, 0, 1, 2, 3, 0, 0, 1, 2, 3, 0, 0, 0, 0, 4, 5, 5, 5, 6, 7, 8, 9,
]


def _pat(workspace: Workspace) -> str:
    paths = workspace.download_range("pat", 10)
    head = _head(workspace, 0, 0)
    frames = workspace.frames(paths)
    pictures = []
    for number, frame in enumerate(frames):
        x, y, width, height = _PAT_PLACES[1 if number == 2 else 0]
        pictures.append(frame.insert_bottom(head, width, height, x, y).image)
    return _write(workspace, "Pat.gif", [pictures[number] for number in _PAT_SEQUENCE])


_JACK_UP = [
    (180, 60, 100, 100), (184, 75, 100, 100), (183, 98, 100, 100),
    (179, 118, 110, 100), (156, 194, 150, 48), (178, 136, 122, 69),
    (175, 66, 122, 85), (170, 42, 130, 96), (175, 34, 118, 95),
    (179, 35, 110, 93), (180, 54, 102, 93), (183, 58, 97, 92),
    (174, 35, 120, 94), (179, 35, 109, 93), (181, 54, 101, 92),
    (182, 59, 98, 92), (183, 71, 90, 96), (180, 131, 92, 101),
]


def _jack_up(workspace: Workspace) -> str:
    paths = workspace.download_range("play", 23)
    head = _head(workspace, 0, 0)
    frames: list[Frame] = workspace.frames(paths)
    pictures = []
    for number, frame in enumerate(frames):
        if number < len(_JACK_UP):
            x, y, width, height = _JACK_UP[number]
            frame = frame.insert_bottom(head, width, height, x, y)
        pictures.append(frame.image)
    play = pictures[0:12] + pictures[0:12] + pictures[0:8] + pictures[12:18] + pictures[18:23]
    return _write(workspace, "JackUp.gif", play)


_POUND = [
    (135, 240, 138, 47), (135, 240, 138, 47), (150, 190, 105, 95),
    (150, 190, 105, 95), (148, 188, 106, 98), (146, 196, 110, 88),
    (145, 223, 112, 61), (145, 223, 112, 61),
]


def _pound(workspace: Workspace) -> str:
    return _placed(workspace, "pound", "Pound.gif", _POUND)


_PUNCH = [
    (-50, 20), (-40, 10), (-30, 0), (-20, -10), (-10, -10), (0, 0), (10, 10),
    (20, 20), (10, 10), (0, 0), (-10, -10), (10, 0), (-30, 10),
]


def _punch(workspace: Workspace) -> str:
    paths = workspace.download_range("punch", len(_PUNCH))
    head = _head(workspace, 260, 260)
    frames = workspace.frames(paths)
    result = [
        frame.insert_bottom(head, 0, 0, x, y - 15).image
        for frame, (x, y) in zip(frames, _PUNCH)
    ]
    return _write(workspace, "Punch.gif", result)


_ROLL = [
    (87, 77, 0), (96, 85, -45), (92, 79, -90), (92, 78, -135),
    (92, 75, -180), (92, 75, -225), (93, 76, -270), (90, 80, -315),
]


def _roll(workspace: Workspace) -> str:
    paths = workspace.download_range("roll", len(_ROLL))
    head = _head(workspace, 210, 210)
    frames = workspace.frames(paths)
    result = [
        frame.insert_bottom_centered(
            rotate(head, angle, 0, 0).image, 0, 0, x + 105, y + 105
        ).image
        for frame, (x, y, angle) in zip(frames, _ROLL)
    ]
    return _write(workspace, "roll.gif", result)


_SUCK = [
    (82, 100, 130, 119), (82, 94, 126, 125), (82, 120, 128, 99),
    (81, 164, 132, 55), (79, 163, 132, 55), (82, 140, 127, 79),
    (83, 152, 125, 67), (75, 157, 140, 62), (72, 165, 144, 54),
    (80, 132, 128, 87), (81, 127, 127, 92), (79, 111, 132, 108),
]


def _suck(workspace: Workspace) -> str:
    return _placed(workspace, "suck", "Suck.gif", _SUCK)


_HAMMER = [
    (62, 143, 158, 113), (52, 177, 173, 105), (42, 192, 192, 92),
    (46, 182, 184, 100), (54, 169, 174, 110), (69, 128, 144, 135),
    (65, 130, 152, 124),
]


def _hammer(workspace: Workspace) -> str:
    return _placed(workspace, "hammer", "Hammer.gif", _HAMMER)


_TIGHTLY = [
    (39, 169, 267, 141), (40, 167, 264, 143), (38, 174, 270, 135),
    (40, 167, 264, 143), (38, 174, 270, 135), (40, 167, 264, 143),
    (38, 174, 270, 135), (40, 167, 264, 143), (38, 174, 270, 135),
    (28, 176, 293, 134), (5, 215, 333, 96), (10, 210, 321, 102),
    (3, 210, 330, 104), (4, 210, 328, 102), (4, 212, 328, 100),
    (4, 212, 328, 100), (4, 212, 328, 100), (4, 212, 328, 100),
    (4, 212, 328, 100), (29, 195, 285, 120),
]


def _tightly(workspace: Workspace) -> str:
    return _placed(workspace, "tightly", "Tightly.gif", _TIGHTLY)


def _turn(workspace: Workspace) -> str:
    face = workspace.logo(0, 0)
    background = Image.new("RGBA", (250, 250), (255, 255, 255, 255))
    result = [
        resize(background, 0, 0)
        .insert_up_centered(rotate(face, 10 * step, 250, 250).image, 0, 0, 125, 125)
        .image
        for step in range(36)
    ]
    return _write(workspace, "Turn.gif", result)


_COMMANDS: dict[str, Callable[[Workspace], str]] = {
    "捶": _thump,
    "啾啾": _jiujiu,
    "2敲": _knock,
    "听音乐": _listen_music,
    "永远爱你": _love_you,
    "2拍": _pat,
    "顶": _jack_up,
    "捣": _pound,
    "打拳": _punch,
    "滚": _roll,
    "吸": _suck,
    "嗦": _suck,
    "锤": _hammer,
    "紧贴": _tightly,
    "紧紧贴着": _tightly,
    "转": _turn,
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