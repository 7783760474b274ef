"""逆文档频率（IDF）表。"""

from __future__ import annotations

import logging
import statistics
import warnings
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from ..storage.parser import parse_idf

logger = logging.getLogger(__name__)


class IDFTable:
    """提供词的 IDF 值，未收录的词取全表中位数。

    词表与中位数放在同一个不可变二元组里，替换只有一次属性赋值。
    """

    def __init__(self, rows: Iterable[Tuple[str, float]] = ()) -> None:
        self._state: Tuple[Mapping[str, float], float] = (MappingProxyType({}), 0.0)
        self._replace(rows)

    @property
    def median(self) -> float:
        return self._state[1]

    def get(self, term: str) -> float:
        idf, median = self._state
        return idf.get(term, median)

    def __contains__(self, term: object) -> bool:
        return term in self._state[0]

    def __len__(self) -> int:
        return len(self._state[0])

    def load(self, data: bytes) -> int:
        """以字节流整体替换 IDF 表；格式错误时抛出 LoadError，原表不变。"""

        rows = parse_idf(data)
        self._replace(rows)
        return len(self)

    def _replace(self, rows: Iterable[Tuple[str, float]]) -> None:
        idf = dict(rows)
        if idf:
            median = float(statistics.median(idf.values()))
        else:
            median = 0.0
        self._state = (MappingProxyType(idf), median)
        logger.debug("IDF 表：%d 个词，中位数 %.4f", len(idf), median)

    def warn_if_empty(self) -> None:
        if not self._state[0]:
            warnings.warn(
                "IDF 表为空，TF-IDF 权重将全部为 0。",
                RuntimeWarning,
            )
