"""Daily fortune slips drawn onto a background picture."""

from __future__ import annotations

import hashlib
import io
import json
import os
import zipfile
from pathlib import Path
from typing import Any, BinaryIO

from PIL import Image, ImageDraw, ImageFont

BACKGROUNDS: tuple[str, ...] = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌",
    "公主连结", "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师",
    "赛马娘", "东方归言录", "奇异恩典", "夏日口袋", "ASoul",
)
DEFAULT_KIND = "车万"

_COLUMN = 9
_GLYPH_PADDING = 10


def rows_num(total: int, div: int) -> int:
    """Number of groups of ``div`` needed to hold ``total`` items."""
    return -(-total // div)


def offset(total: int, now: int, distance: float) -> float:
    """Offset of the ``now``-th of ``total`` cells spaced ``distance`` apart."""
    if total % 2 == 0:
        return (now - total // 2 - 1) * distance
    return (now - total // 2 - 1.5) * distance


def layout_text(
    text: str, glyph_width: float, glyph_height: float
) -> list[tuple[str, float, float]]:
    """Place each character in vertical columns; returns (char, x, baseline y)."""
    width = glyph_width + _GLYPH_PADDING
    height = glyph_height + _GLYPH_PADDING
    chars = list(text)
    count = len(chars)
    columns = rows_num(count, _COLUMN)
    placed = []
    if columns == 2:
        div = rows_num(count, 2)
        for i, char in enumerate(chars):
            column = rows_num(i + 1, div)
            in_column = min(count - (column - 1) * div, div)
            row = i % div + 1
            if column == 2:
                row += _COLUMN - in_column
            placed.append(
                (char, -offset(columns, column, width) + 115, offset(_COLUMN, row, height) + 320.0)
            )
        return placed
    for i, char in enumerate(chars):
        column = rows_num(i + 1, _COLUMN)
        in_column = min(count - (column - 1) * _COLUMN, _COLUMN)
        row = i % _COLUMN + 1
        placed.append(
            (char, -offset(columns, column, width) + 115, offset(in_column, row, height) + 320.0)
        )
    return placed


def background_kind(setting: int) -> str:
    """Background set named by a stored setting, falling back to the default."""
    value = setting & 0xFF
    return BACKGROUNDS[value] if value < len(BACKGROUNDS) else DEFAULT_KIND


def background_setting(name: str) -> int:
    """Stored setting for a background set name."""
    try:
        return BACKGROUNDS.index(name) & 0xFF
    except ValueError:
        raise ValueError("没有这个底图哦～") from None


def cache_name(zip_path: str, index: int, title: str, content: str) -> str:
    """Hex digest naming the cached picture for a background and slip."""
    key = f"{zip_path}{index}{title}{content}"
    return hashlib.md5(key.encode("utf-8")).hexdigest()


def load_omikujis(path: str | os.PathLike[str]) -> list[dict[str, str]]:
    """Read the list of fortune slips, each with a title and a content."""
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def load_background(zip_path: str | os.PathLike[str], index: int) -> Image.Image:
    """Decode the ``index``-th entry of a background archive."""
    with zipfile.ZipFile(zip_path) as archive:
        entry = archive.infolist()[index]
        data = archive.read(entry)
    picture = Image.open(io.BytesIO(data))
    picture.load()
    return picture


def draw(
    background: Image.Image,
    title: str,
    content: str,
    font_path: str | os.PathLike[str],
    out: str | os.PathLike[str] | BinaryIO,
) -> int:
    """Draw a fortune slip on the background, write it as JPEG, return bytes written."""
    width, height = background.size
    canvas = Image.new("RGBA", (height, width))
    canvas.paste(background.convert("RGBA"), (0, 0))
    pen = ImageDraw.Draw(canvas)

    title_font = ImageFont.truetype(str(font_path), 45)
    title_width = pen.textlength(title, font=title_font)
    pen.text((140 - title_width / 2, 112), title, fill=(255, 255, 255, 255),
             font=title_font, anchor="ls")

    body_font = ImageFont.truetype(str(font_path), 23)
    glyph_width = pen.textlength("测", font=body_font)
    glyph_height = 23 * 72 / 96
    for char, x, y in layout_text(content, glyph_width, glyph_height):
        pen.text((x, y), char, fill=(0, 0, 0, 255), font=body_font, anchor="ls")

    buffer = io.BytesIO()
    canvas.convert("RGB").save(buffer, "JPEG", quality=70)
    data = buffer.getvalue()
    if isinstance(out, (str, os.PathLike)):
        Path(out).write_bytes(data)
    else:
        out.write(data)
    return len(data)


def _slip(omikujis: list[dict[str, Any]], index: int) -> tuple[str, str]:
    chosen = omikujis[index]
    return chosen.get("title", ""), chosen.get("content", "")