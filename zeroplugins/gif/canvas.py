"""Picture frames, avatars and downloaded materials for meme pictures."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import requests
from PIL import Image, ImageChops, ImageDraw, ImageSequence

AVATAR_URL = "http://q4.qlogo.cn/g?b=qq&nk={}&s=640"
PICTURE_URL = "https://gchat.qpic.cn/gchatpic_new//--{}/0"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _rgba(image: Image.Image | Frame) -> Image.Image:
    picture = image.image if isinstance(image, Frame) else image
    return picture if picture.mode == "RGBA" else picture.convert("RGBA")


def _fit(image: Image.Image, width: int, height: int) -> Image.Image:
    original_width, original_height = image.size
    if width <= 0 and height <= 0:
        return image.copy()
    if width <= 0:
        width = max(1, round(original_width * height / original_height))
    elif height <= 0:
        height = max(1, round(original_height * width / original_width))
    return image.resize((width, height), Image.Resampling.LANCZOS)


def _over(base: Image.Image, picture: Image.Image, x: int, y: int) -> Image.Image:
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    layer.paste(picture, (x, y))
    return Image.alpha_composite(base, layer)


@dataclass(frozen=True)
class Frame:
    """One RGBA picture; every operation returns a new frame."""

    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def insert_up(self, image, width: int, height: int, x: int, y: int) -> Frame:
        """Draw ``image``, resized (0 keeps a side), over this frame at (x, y)."""
        picture = _fit(_rgba(image), width, height)
        return Frame(_over(_rgba(self), picture, x, y))

    def insert_bottom(self, image, width: int, height: int, x: int, y: int) -> Frame:
        """Draw ``image``, resized, under this frame at (x, y)."""
        picture = _fit(_rgba(image), width, height)
        base = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        return Frame(_over(_over(base, picture, x, y), _rgba(self), 0, 0))

    def insert_up_centered(self, image, width: int, height: int, x: int, y: int) -> Frame:
        """Draw ``image`` over this frame with its centre at (x, y)."""
        picture = _fit(_rgba(image), width, height)
        left, top = x - picture.width // 2, y - picture.height // 2
        return Frame(_over(_rgba(self), picture, left, top))

    def insert_bottom_centered(
        self, image, width: int, height: int, x: int, y: int
    ) -> Frame:
        """Draw ``image`` under this frame with its centre at (x, y)."""
        picture = _fit(_rgba(image), width, height)
        left, top = x - picture.width // 2, y - picture.height // 2
        base = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        return Frame(_over(_over(base, picture, left, top), _rgba(self), 0, 0))

    def circle(self) -> Frame:
        """Cut the largest centred disc out of the frame."""
        picture = _rgba(self)
        side = min(picture.size) // 2 * 2
        left = (picture.width - side) // 2
        top = (picture.height - side) // 2
        square = picture.crop((left, top, left + side, top + side))
        mask = Image.new("L", square.size, 0)
        ImageDraw.Draw(mask).ellipse((0, 0, side - 1, side - 1), fill=255)
        square.putalpha(ImageChops.multiply(square.getchannel("A"), mask))
        return Frame(square)


def resize(image, width: int, height: int) -> Frame:
    """Resize a picture; a side given as 0 follows the aspect ratio, both 0 keep it."""
    return Frame(_fit(_rgba(image), width, height))


def rotate(image, angle: float, width: int, height: int) -> Frame:
    """Resize a picture, then turn it ``angle`` degrees counter-clockwise, growing to fit."""
    picture = _fit(_rgba(image), width, height)
    return Frame(picture.rotate(angle, resample=Image.Resampling.BICUBIC, expand=True))


def load_first_frame(path: str | Path, width: int, height: int) -> Frame:
    """Load the first frame of a picture file, resized."""
    with Image.open(path) as picture:
        picture.seek(0)
        first = picture.convert("RGBA")
    return Frame(_fit(first, width, height))


def load_all_frames(path: str | Path, width: int, height: int) -> list[Image.Image]:
    """Load every frame of a picture file, resized."""
    with Image.open(path) as picture:
        return [
            _fit(frame.convert("RGBA"), width, height)
            for frame in ImageSequence.Iterator(picture)
        ]


def save_gif(path: str | Path, delay: int, frames: Sequence) -> Path:
    """Write an endlessly looping GIF; ``delay`` is in hundredths of a second."""
    pictures = [_rgba(frame) for frame in frames]
    if not pictures:
        raise ValueError("a GIF needs at least one frame")
    target = Path(path)
    pictures[0].save(
        target,
        "GIF",
        save_all=True,
        append_images=pictures[1:],
        duration=delay * 10,
        loop=0,
        disposal=2,
    )
    return target


def _http_get(url: str) -> bytes:
    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=60)
    response.raise_for_status()
    return response.content


class Workspace:
    """A user's working directory and the shared material cache."""

    def __init__(
        self,
        data_dir: str | Path,
        user_id: int,
        material_url: str,
        fetch: Callable[[str], bytes] | None = None,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.material_url = material_url
        self._fetch = fetch if fetch is not None else _http_get
        self.materials = self.data_dir / "materials"
        self.user_dir = self.data_dir / "users" / str(user_id)
        self.user_dir.mkdir(parents=True, exist_ok=True)
        self.head_images = (self.user_dir / "0.gif", self.user_dir / "1.gif")

    def _store(self, url: str, target: Path) -> None:
        try:
            data = self._fetch(url)
            target.write_bytes(data)
        except BaseException:
            target.unlink(missing_ok=True)
            raise

    def download(self, name: str) -> Path:
        """Return the cached material ``name``, fetching it first if missing."""
        target = self.materials / name
        if not target.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
            self._store(self.material_url + name, target)
        return target

    def download_range(self, prefix: str, count: int) -> list[Path]:
        """Fetch ``prefix/0.png`` to ``prefix/<count-1>.png`` in parallel."""
        (self.materials / prefix).mkdir(parents=True, exist_ok=True)
        names = [f"{prefix}/{number}.png" for number in range(count)]
        if not names:
            return []
        with ThreadPoolExecutor(max_workers=min(8, len(names))) as pool:
            return list(pool.map(self.download, names))

    def prepare_logos(
        self,
        sources: Iterable[str],
        avatar_url: str = AVATAR_URL,
        picture_url: str = PICTURE_URL,
    ) -> list[Path]:
        """Fetch the pictures to work on: user numbers as avatars, others as picture ids."""
        stored = []
        for number, source in enumerate(sources):
            if _INTEGER.fullmatch(source):
                url = avatar_url.format(source)
            else:
                url = picture_url.format(source.upper())
            target = self.user_dir / f"{number}.gif"
            self._store(url, target)
            stored.append(target)
        return stored

    def logo(self, width: int, height: int) -> Image.Image:
        """The first picture, resized and cut to a disc."""
        return load_first_frame(self.head_images[0], width, height).circle().image

    def logo2(self, width: int, height: int) -> Image.Image:
        """The second picture, resized and cut to a disc."""
        return load_first_frame(self.head_images[1], width, height).circle().image

    def frames(self, paths: Iterable[str | Path]) -> list[Frame]:
        """Load the first frame of each file at its own size."""
        return [load_first_frame(path, 0, 0) for path in paths]