"""TextRank 关键词提取。"""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection, Dict, List, Set

from ..models.graph import CooccurrenceGraph
from ..models.token import Keyword
from .base import candidate_stream, normalize_allowed_pos, top_keywords, validate_top_k

if TYPE_CHECKING:
    from ..core.segmentation import ChineseSegmenter


class TextRank:
    """共现图上的迭代权重传播。

    窗口在完整词流上滑动（被过滤掉的词也占位置），
    窗口内两个都通过过滤的不同词之间的边权加 1。
    """

    def __init__(
        self,
        segmenter: "ChineseSegmenter",
        stop_words: Set[str],
        span: int = 5,
        damping: float = 0.85,
        iterations: int = 10,
        min_length: int = 2,
    ) -> None:
        self.segmenter = segmenter
        self.stop_words = stop_words
        self.span = span
        self.damping = damping
        self.iterations = iterations
        self.min_length = min_length

    def extract(self, text: str, top_k: int = 20, allowed_pos: Collection[str] = ()) -> List[Keyword]:
        validate_top_k(top_k)
        allowed = normalize_allowed_pos(allowed_pos)
        if not text:
            return []
        stream = candidate_stream(self.segmenter, text, allowed, self.stop_words, self.min_length)
        graph = self.build_graph(stream)
        if not len(graph):
            return []
        return top_keywords(self.rank(graph), top_k)

    def build_graph(self, stream: List[str | None]) -> CooccurrenceGraph:
        graph = CooccurrenceGraph()
        for index, term in enumerate(stream):
            if term is None:
                continue
            for other in stream[index + 1 : index + self.span]:
                if other is not None:
                    graph.add_edge(term, other)
        return graph

    def rank(self, graph: CooccurrenceGraph) -> Dict[str, float]:
        """同步迭代：w(v) = (1-d) + d * Σ e(u,v) / out(u) * w(u)，初值 1。"""

        vertices = graph.vertices()
        out_weights = {vertex: graph.out_weight(vertex) for vertex in vertices}
        weights = {vertex: 1.0 for vertex in vertices}
        for _ in range(self.iterations):
            updated: Dict[str, float] = {}
            for vertex in vertices:
                incoming = sum(
                    edge / out_weights[neighbor] * weights[neighbor]
                    for neighbor, edge in graph.neighbors(vertex).items()
                )
                updated[vertex] = (1.0 - self.damping) + self.damping * incoming
            weights = updated
        return weights
