"""最大概率路径：基于 DAG 的动态规划。"""

from __future__ import annotations

from math import log
from typing import TYPE_CHECKING, Dict, List, Tuple

from .dag import DAG

if TYPE_CHECKING:
    from ..storage.dictionary import Dictionary

Route = Dict[int, Tuple[float, int]]


def log_total(dictionary: "Dictionary") -> float:
    # 空词典时按 1 处理，所有候选得分相同，由平局规则退化为单字
    return log(max(dictionary.total_frequency, 1))


def calc_route(
    sentence: str,
    dag: DAG,
    dictionary: "Dictionary",
    exclude: str | None = None,
) -> Route:
    """从句尾向前计算每个位置到句尾的最大对数概率及其选择的终点。

    route[i] = max_j( log(freq(s[i:j]) or 1) - log(total) + route[j] )，
    得分相同取更小的 j（更短的词）。`exclude` 指定的词按未登录处理（词频 1）。
    """

    size = len(sentence)
    route: Route = {size: (0.0, size)}
    logtotal = log_total(dictionary)
    for idx in range(size - 1, -1, -1):
        best_score = 0.0
        best_end = -1
        for end in dag[idx]:
            word = sentence[idx:end]
            freq = 0 if word == exclude else dictionary.frequency(word)
            score = log(freq or 1) - logtotal + route[end][0]
            if best_end < 0 or score > best_score:
                best_score, best_end = score, end
        route[idx] = (best_score, best_end)
    return route


def route_words(sentence: str, route: Route) -> List[str]:
    words: List[str] = []
    idx = 0
    size = len(sentence)
    while idx < size:
        end = route[idx][1]
        words.append(sentence[idx:end])
        idx = end
    return words
