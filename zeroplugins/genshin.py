"""Ten-pull card draws for a gacha game, rendered from an archive of pictures."""

from __future__ import annotations

import io
import random
import re
import threading
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

from PIL import Image

_FIVE_STAR_BIT = 1
_UINT64_MASK = (1 << 64) - 1
_PREFIX_LENGTH = len("Genshin/")
_NAME = re.compile(r"_(.*)\.png")

_CANVAS_SIZE = (1920, 1080)
_CANVAS_COLOUR = (50, 50, 50, 255)
_FIRST_CARD_X = 230
_CARD_STEP = 146
_REPLY_POSITION = (1270, 945)

_STAR_FILES = {"ThreeStar.png": 3, "FourStar.png": 4, "FiveStar.png": 5}
_REQUIRED = (
    "five_bg.jpg", "four_bg.jpg", "three_bg.jpg", "bg0.jpg", "Reply.png",
    "five", "five2", "Three", "four", "four2",
)


def is_five_star_mode(store: int) -> bool:
    """Whether a stored setting selects the five-star-only pool."""
    return store & _FIVE_STAR_BIT == 1


def set_five_star_mode(store: int, enabled: bool) -> int:
    """Return the stored setting with the five-star-only flag set or cleared."""
    if enabled:
        return (store | _FIVE_STAR_BIT) & _UINT64_MASK
    return store & (_UINT64_MASK ^ _FIVE_STAR_BIT)


def character_name(path: str) -> str:
    """Name of a character or weapon from its picture's file name."""
    found = _NAME.search(path)
    if found is None:
        raise ValueError(f"no name in file name: {path!r}")
    return found.group(1)


def reply_text(names: list[str], kind: int, previous: str) -> str:
    """Text listing five-star results: kind 1 for characters, 2 for weapons."""
    if kind == 1:
        header = "★五星角色★\n"
    elif kind == 2 and previous:
        header = "\n★五星武器★\n"
    else:
        header = "★五星武器★\n"
    return header + "".join(f"{character_name(name)} * " for name in names)


class _Card(NamedTuple):
    background: str
    hero: str
    star: str
    icon: str


@dataclass
class DrawResult:
    """Cards drawn in one go, in display order, and the text announcing them."""

    cards: list[_Card] = field(default_factory=list)
    text: str = ""
    five_star: bool = False

    @property
    def message(self) -> str:
        if self.five_star:
            return "恭喜你抽到了: \n" + self.text
        return "十连成功~"


class CardPool:
    """The pictures of a card archive and the running draw count."""

    def __init__(self, zip_path: str | Path) -> None:
        self.zip_path = Path(zip_path)
        self.total = 0
        self._lock = threading.Lock()
        self._tree: dict[str, list[str]] = {}
        self._members: dict[str, str] = {}
        self._stars: dict[int, str] = {}
        with zipfile.ZipFile(self.zip_path) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                name = info.filename[_PREFIX_LENGTH:]
                self._members[name] = info.filename
                cut = name.rfind("/")
                if cut < 0:
                    self._tree[name] = [name]
                    continue
                folder = name[:cut]
                if not folder:
                    continue
                self._tree.setdefault(folder, []).append(name)
                if folder == "gacha" and name[cut + 1:] in _STAR_FILES:
                    self._stars[_STAR_FILES[name[cut + 1:]]] = name

    def _check(self) -> None:
        missing = [key for key in _REQUIRED if not self._tree.get(key)]
        missing += [f"gacha star {rank}" for rank in (3, 4, 5) if rank not in self._stars]
        if missing:
            raise ValueError("card archive lacks: " + ", ".join(missing))

    def _icon(self, hero: str) -> str:
        start = hero.rfind("/") + 1
        end = hero.find("_")
        if end < start:
            raise ValueError(f"no element in file name: {hero!r}")
        name = hero[start:end] + ".png"
        entries = self._tree.get(name)
        if not entries:
            raise ValueError(f"card archive lacks icon {name!r}")
        return entries[0]

    def roll(
        self, count: int = 10, five_star_mode: bool = False, rng: Any = None
    ) -> DrawResult:
        """Draw ``count`` cards; every ninth ordinary draw starts with a five-star."""
        self._check()
        rng = rng if rng is not None else random.Random()
        fives: list[str] = []
        fours: list[str] = []
        three_arms: list[str] = []
        four_arms: list[str] = []
        five_arms: list[str] = []

        def pick(key: str) -> str:
            return rng.choice(self._tree[key])

        def five_star() -> None:
            if rng.randrange(2) == 0:
                fives.append(pick("five"))
            else:
                five_arms.append(pick("five2"))

        def four_star() -> None:
            if rng.randrange(2) == 0:
                fours.append(pick("four"))
            else:
                four_arms.append(pick("four2"))

        if self.total % 9 == 0:
            five_star()
            count -= 1

        if five_star_mode:
            for _ in range(count):
                five_star()
        else:
            for _ in range(count):
                chance = rng.randrange(1000)
                if chance <= 800:
                    three_arms.append(pick("Three"))
                elif chance <= 885:
                    fours.append(pick("four"))
                elif chance <= 970:
                    four_arms.append(pick("four2"))
                elif chance <= 985:
                    fives.append(pick("five"))
                else:
                    five_arms.append(pick("five2"))
            if not fours and not four_arms and three_arms:
                three_arms.pop()
                four_star()
            with self._lock:
                self.total += 1

        groups = (
            (fives, "five_bg.jpg", 5),
            (fours, "four_bg.jpg", 4),
            (five_arms, "five_bg.jpg", 5),
            (four_arms, "four_bg.jpg", 4),
            (three_arms, "three_bg.jpg", 3),
        )
        cards = [
            _Card(self._tree[background][0], hero, self._stars[rank], self._icon(hero))
            for heroes, background, rank in groups
            for hero in heroes
        ]
        result = DrawResult(cards=cards)
        if fives:
            result.text += reply_text(fives, 1, result.text)
            result.five_star = True
        if five_arms:
            result.text += reply_text(five_arms, 2, result.text)
            result.five_star = True
        return result

    def render(self, result: DrawResult) -> Image.Image:
        """Compose the picture of a draw."""
        canvas = Image.new("RGBA", _CANVAS_SIZE, _CANVAS_COLOUR)
        with zipfile.ZipFile(self.zip_path) as archive:
            def load(name: str) -> Image.Image:
                data = archive.read(self._members[name])
                return Image.open(io.BytesIO(data)).convert("RGBA")

            canvas = _over(canvas, load(self._tree["bg0.jpg"][0]), 0, 0)
            for position, card in enumerate(result.cards):
                x = _FIRST_CARD_X + _CARD_STEP * position
                for part in card:
                    canvas = _over(canvas, load(part), x, 0)
            canvas = _over(canvas, load(self._tree["Reply.png"][0]), *_REPLY_POSITION)
        return canvas


def _over(base: Image.Image, picture: Image.Image, x: int, y: int) -> Image.Image:
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    layer.paste(picture, (x, y))
    return Image.alpha_composite(base, layer)