"""建议词频：让一个片段恰好能被整体切出的最小词频。"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..core.dag import build_dag
from ..core.route import calc_route, log_total

if TYPE_CHECKING:
    from ..storage.dictionary import Dictionary


def decomposition_logprob(dictionary: "Dictionary", segment: str) -> float:
    """把 `segment` 当作词典外的词，求其最优多词切分的对数概率（不用 HMM）。"""

    dag = build_dag(segment, dictionary)
    if len(segment) > 1:
        dag[0] = [end for end in dag[0] if end != len(segment)]
    route = calc_route(segment, dag, dictionary, exclude=segment)
    return route[0][0]


def suggest_frequency(dictionary: "Dictionary", segment: str) -> int:
    """不修改词典，返回使整词概率超过最优切分概率的最小词频。

    整词概率为 freq / total，切分概率为 exp(logprob)，
    因此取 floor(exp(logprob) * total) + 1。调用方负责持有词典锁。
    """

    logprob = decomposition_logprob(dictionary, segment)
    return int(math.exp(logprob + log_total(dictionary))) + 1
