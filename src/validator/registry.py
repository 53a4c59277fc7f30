# -*- coding: utf-8 -*-
"""
地点登记表：校验器认可的地点 id 集合，以结构化数据传入。
文件格式为 JSON 数组，元素可以是地点对象（见 Location）或裸 id 字符串。
"""
import json
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from src.content.models import Location
from src.utils import get_logger


class LocationRegistry:
    """有序、去重的地点 id 集合；可附带地点详情。"""

    def __init__(self, locations: Optional[Iterable[Union[str, Location]]] = None) -> None:
        self._by_id: Dict[str, Optional[Location]] = {}
        for item in locations or []:
            if isinstance(item, Location):
                self._by_id[item.id] = item
            else:
                self._by_id.setdefault(str(item), None)

    @property
    def ids(self) -> List[str]:
        return list(self._by_id)

    def get(self, location_id: str) -> Optional[Location]:
        return self._by_id.get(location_id)

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._by_id

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"LocationRegistry({self.ids!r})"


def parse_location_registry(data: object) -> LocationRegistry:
    """从已解析的 JSON 构建登记表；结构不对时抛 ValueError。"""
    if not isinstance(data, list):
        raise ValueError(f"地点登记表应为 JSON 数组，实际为 {type(data).__name__}")
    items: List[Union[str, Location]] = []
    for i, entry in enumerate(data):
        if isinstance(entry, str):
            items.append(entry)
        elif isinstance(entry, dict):
            items.append(Location.model_validate(entry))
        else:
            raise ValueError(f"地点登记表第 {i} 项既不是 id 字符串也不是地点对象: {entry!r}")
    return LocationRegistry(items)


def load_location_registry(path: Union[str, Path]) -> LocationRegistry:
    """
    读取登记表文件。文件不存在时返回空登记表（此时所有地点引用都视为未知）。
    JSON 损坏或结构不对时抛异常，由调用方决定如何报告。
    """
    p = Path(path)
    if not p.is_file():
        get_logger().warning("未找到地点登记表: %s，按空登记表处理", p)
        return LocationRegistry()
    return parse_location_registry(json.loads(p.read_text(encoding="utf-8")))
