"""City epidemic statistics lookup."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import requests

TX_URL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)


@dataclass
class Area:
    """Statistics of one area and its sub-areas."""

    name: str = ""
    today_confirm: int = 0
    today_wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list[Area] = field(default_factory=list)


def parse_area(data: dict[str, Any]) -> Area:
    """Build an area tree from its JSON object."""
    today = data.get("today") or {}
    total = data.get("total") or {}
    return Area(
        name=data.get("name") or "",
        today_confirm=today.get("confirm") or 0,
        today_wzz_add=today.get("wzz_add"),
        now_confirm=total.get("nowConfirm") or 0,
        confirm=total.get("confirm") or 0,
        dead=total.get("dead") or 0,
        heal=total.get("heal") or 0,
        grade=total.get("grade") or "",
        wzz=total.get("wzz") or 0,
        children=[parse_area(child) for child in data.get("children") or [] if child],
    )


def find_city(area: Area | None, name: str) -> Area | None:
    """Search the tree depth first for an area with the given name."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def parse_report(payload: str | bytes | dict[str, Any]) -> tuple[Area, str]:
    """Return the root area and the last update time of a response document."""
    document = payload if isinstance(payload, dict) else json.loads(payload)
    shelf = ((document.get("data") or {}).get("diseaseh5Shelf")) or {}
    tree = shelf.get("areaTree") or []
    if not tree:
        raise ValueError("response holds no area tree")
    return parse_area(tree[0]), shelf.get("lastUpdateTime") or ""


def query_epidemic(
    city: str, url: str = TX_URL, session: Any = None
) -> tuple[Area | None, str]:
    """Fetch the statistics and return the city's area (or None) and the update time."""
    client = session if session is not None else requests
    response = client.get(url)
    response.raise_for_status()
    root, update_time = parse_report(response.content)
    return find_city(root, city), update_time


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report(area: Area, update_time: str) -> str:
    """Render the statistics message for a city."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增人数：{area.today_confirm}\n"
        f"现有确诊：{area.now_confirm}\n"
        f"累计确诊：{area.confirm}\n"
        f"治愈人数：{area.heal}\n"
        f"死亡人数：{area.dead}\n"
        f"无症状人数：{area.wzz}\n"
        f"新增无症状：{_show(area.today_wzz_add)}\n"
        f"更新时间：\n『{update_time}』"
    )