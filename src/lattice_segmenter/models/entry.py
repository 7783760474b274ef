"""词典条目模型。"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DictEntry:
    """词典条目。

    说明：词频为 0 表示该词被显式删除，不再参与 DAG 构建。
    """

    word: str
    frequency: int
    tag: Optional[str] = None
