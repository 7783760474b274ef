"""有向无环图（DAG）构建。"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from ..storage.dictionary import Dictionary

DAG = Dict[int, List[int]]


def build_dag(sentence: str, dictionary: "Dictionary") -> DAG:
    """对每个起点 i 记录所有成词的终点 j（不含），升序排列。

    - 向前扫描的长度以词典最长词为上限，且片段一旦不是任何词的前缀即停止；
    - i+1 单字边总是存在，保证每个位置都可达。
    """

    dag: DAG = {}
    size = len(sentence)
    limit = dictionary.max_word_length
    for start in range(size):
        ends = [start + 1]
        stop = min(size, start + limit)
        for end in range(start + 2, stop + 1):
            fragment = sentence[start:end]
            if not dictionary.is_prefix(fragment):
                break
            if fragment in dictionary:
                ends.append(end)
        dag[start] = ends
    return dag
