"""关键词提取的公共约定与候选词过滤。"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Collection, Dict, FrozenSet, Iterable, List, Optional, Protocol, Set

from ..errors import InvalidArgument
from ..models.token import Keyword

if TYPE_CHECKING:
    from ..core.segmentation import ChineseSegmenter

_POS_SEPARATOR = re.compile(r"[\s,]+")


class KeywordExtractor(Protocol):
    """TF-IDF 与 TextRank 共同满足的提取约定。"""

    def extract(self, text: str, top_k: int = 20, allowed_pos: Collection[str] = ()) -> List[Keyword]:
        ...


def validate_top_k(top_k: int) -> int:
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
        raise InvalidArgument(f"top_k 必须是正整数: {top_k!r}")
    return top_k


def normalize_allowed_pos(allowed_pos: Iterable[str] | str | None) -> FrozenSet[str]:
    """词性过滤集合；空集合表示不过滤。字符串按逗号或空白拆分。"""

    if not allowed_pos:
        return frozenset()
    if isinstance(allowed_pos, str):
        return frozenset(part for part in _POS_SEPARATOR.split(allowed_pos) if part)
    return frozenset(allowed_pos)


def candidate_stream(
    segmenter: "ChineseSegmenter",
    text: str,
    allowed_pos: FrozenSet[str],
    stop_words: Set[str],
    min_length: int,
) -> List[Optional[str]]:
    """对全文分词，保留原有位置：通过过滤的位置是词，其余位置为 None。

    过滤规则：去空白后长度不足、小写后命中停用词、或词性不在允许集合中的词被剔除。
    """

    if allowed_pos:
        pairs = [(item.word, item.tag) for item in segmenter.tag(text, hmm=True)]
    else:
        pairs = [(word, "") for word in segmenter.cut(text, hmm=True)]

    stream: List[Optional[str]] = []
    for word, tag in pairs:
        term = word.strip()
        if len(term) < min_length or term.lower() in stop_words:
            stream.append(None)
        elif allowed_pos and tag not in allowed_pos:
            stream.append(None)
        else:
            stream.append(term)
    return stream


def top_keywords(weights: Dict[str, float], top_k: int) -> List[Keyword]:
    """按权重降序截取前 top_k 个；同分保持原有顺序。"""

    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [Keyword(term=term, weight=weight) for term, weight in ranked[:top_k]]
