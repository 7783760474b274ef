"""共现图结构。"""

from typing import Dict, List


class CooccurrenceGraph:
    """无向带权图：只管词与词之间的共现次数。

    顶点按首次出现的顺序保存，排序时以此作为同分的先后。
    """

    def __init__(self) -> None:
        self.edges: Dict[str, Dict[str, float]] = {}

    def _ensure_node(self, term: str) -> None:
        self.edges.setdefault(term, {})

    def add_edge(self, left: str, right: str, weight: float = 1.0) -> None:
        """新增或强化一条边，两个方向同时累加；自环忽略。"""

        if left == right:
            return
        self._ensure_node(left)
        self._ensure_node(right)
        self.edges[left][right] = self.edges[left].get(right, 0.0) + weight
        self.edges[right][left] = self.edges[right].get(left, 0.0) + weight

    def get_edge(self, left: str, right: str) -> float:
        return self.edges.get(left, {}).get(right, 0.0)

    def neighbors(self, term: str) -> Dict[str, float]:
        return self.edges.get(term, {})

    def out_weight(self, term: str) -> float:
        return sum(self.edges.get(term, {}).values())

    def vertices(self) -> List[str]:
        return list(self.edges)

    def __len__(self) -> int:
        return len(self.edges)
