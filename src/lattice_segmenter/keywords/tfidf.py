"""TF-IDF 关键词提取。"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Collection, List, Set

from ..frequency.idf import IDFTable
from ..models.token import Keyword
from .base import candidate_stream, normalize_allowed_pos, top_keywords, validate_top_k

if TYPE_CHECKING:
    from ..core.segmentation import ChineseSegmenter


class TFIDF:
    """词频 × 逆文档频率。

    词频按通过过滤的词次归一化；IDF 查表，未收录的词取中位数。
    """

    def __init__(
        self,
        segmenter: "ChineseSegmenter",
        idf: IDFTable,
        stop_words: Set[str],
        min_length: int = 2,
    ) -> None:
        self.segmenter = segmenter
        self.idf = idf
        self.stop_words = stop_words
        self.min_length = min_length

    def extract(self, text: str, top_k: int = 20, allowed_pos: Collection[str] = ()) -> List[Keyword]:
        validate_top_k(top_k)
        allowed = normalize_allowed_pos(allowed_pos)
        if not text:
            return []
        self.idf.warn_if_empty()
        terms = [
            term
            for term in candidate_stream(self.segmenter, text, allowed, self.stop_words, self.min_length)
            if term is not None
        ]
        if not terms:
            return []
        counts = Counter(terms)
        total = float(len(terms))
        weights = {term: count / total * self.idf.get(term) for term, count in counts.items()}
        return top_keywords(weights, top_k)
