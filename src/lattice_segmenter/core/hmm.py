"""隐马尔可夫模型：未登录词切分与词性标注。

两个模型共享同一套思路：对数空间的 Viterbi 解码加回溯。
- 切分模型只有 B/M/E/S 四个状态，用于把词典切不开的单字串重新组合成新词；
- 词性模型的状态是 (位置, 词性) 二元组，这里只让它在已定的词边界内选择词性。
参数表都是预训练常量，载入一次后只读共享。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, Hashable, Iterator, List, Mapping, Sequence, Tuple

from ..storage.resources import DEFAULT_PACKAGE, pos_tables, segmentation_tables

# 缺失的发射/转移概率用一个极小的有限值代替，保证总能回溯出一条路径
MIN_FLOAT = -3.14e100

# 四状态模型中每个状态允许的前驱
PREV_STATUS: Dict[str, str] = {
    "B": "ES",
    "M": "MB",
    "S": "SE",
    "E": "BM",
}

RE_HAN = re.compile("([\u4E00-\u9FD5]+)")
RE_SKIP = re.compile(r"([a-zA-Z0-9]+(?:\.\d+)?%?)")


@dataclass(frozen=True)
class HMMParameters:
    """对数空间的初始、转移与发射概率表。"""

    start: Mapping[Hashable, float]
    trans: Mapping[Hashable, Mapping[Hashable, float]]
    emit: Mapping[Hashable, Mapping[str, float]]


def viterbi(observations: str, params: HMMParameters) -> Tuple[float, List[str]]:
    """四状态 Viterbi，返回 (最优对数概率, 状态序列)。"""

    states = "BMES"
    score: Dict[str, float] = {
        state: params.start.get(state, MIN_FLOAT) + params.emit.get(state, {}).get(observations[0], MIN_FLOAT)
        for state in states
    }
    backpointers: List[Dict[str, str]] = []
    for char in observations[1:]:
        current: Dict[str, float] = {}
        pointer: Dict[str, str] = {}
        for state in states:
            emit = params.emit.get(state, {}).get(char, MIN_FLOAT)
            best_prev = ""
            best_score = 0.0
            for prev in PREV_STATUS[state]:
                candidate = score[prev] + params.trans.get(prev, {}).get(state, MIN_FLOAT) + emit
                if not best_prev or candidate > best_score:
                    best_prev, best_score = prev, candidate
            current[state] = best_score
            pointer[state] = best_prev
        score = current
        backpointers.append(pointer)

    # 合法的结尾只有 E 或 S
    last = "E" if score["E"] >= score["S"] else "S"
    path = [last]
    for pointer in reversed(backpointers):
        path.append(pointer[path[-1]])
    path.reverse()
    return score[last], path


def states_to_words(sentence: str, states: Sequence[str]) -> Iterator[str]:
    begin, next_index = 0, 0
    for index, char in enumerate(sentence):
        position = states[index]
        if position == "B":
            begin = index
        elif position == "E":
            yield sentence[begin : index + 1]
            next_index = index + 1
        elif position == "S":
            yield char
            next_index = index + 1
    if next_index < len(sentence):
        yield sentence[next_index:]


class SegmentationHMM:
    """四状态模型：发现词典外的新词（人名、音译词等）。"""

    def __init__(self, params: HMMParameters) -> None:
        self.params = params

    def cut(self, text: str, force_split: Callable[[str], bool] | None = None) -> Iterator[str]:
        """切分一段未登录单字串。

        汉字段走 Viterbi；字母数字段（可带小数与百分号）整体输出；其余字符逐个输出。
        `force_split` 命中的新词会被拆回单字。
        """

        for block in RE_HAN.split(text):
            if not block:
                continue
            if RE_HAN.match(block):
                _, states = viterbi(block, self.params)
                for word in states_to_words(block, states):
                    if force_split is not None and len(word) > 1 and force_split(word):
                        yield from word
                    else:
                        yield word
                continue
            for piece in RE_SKIP.split(block):
                if not piece:
                    continue
                if RE_SKIP.match(piece):
                    yield piece
                else:
                    yield from piece


@dataclass(frozen=True)
class POSParameters(HMMParameters):
    """词性模型参数：额外带一张“字 → 候选状态”表用于剪枝。"""

    char_states: Mapping[str, Sequence[Tuple[str, str]]] = field(default_factory=dict)


def _positions(words: Sequence[str]) -> List[str]:
    positions: List[str] = []
    for word in words:
        if len(word) == 1:
            positions.append("S")
        else:
            positions.extend(["B"] + ["M"] * (len(word) - 2) + ["E"])
    return positions


class POSTagger:
    """在给定词边界内为每个词选择词性。

    每个字的位置（B/M/E/S）由词边界确定，Viterbi 只在词性维度上搜索；
    一个词的词性取其最后一个字所在状态的词性。
    """

    def __init__(self, params: POSParameters) -> None:
        self.params = params
        self._states_by_position: Dict[str, List[Tuple[str, str]]] = {}
        for state in sorted(params.emit):
            self._states_by_position.setdefault(state[0], []).append(state)

    def _candidates(self, char: str, position: str) -> List[Tuple[str, str]]:
        char_states = self.params.char_states
        states = [state for state in char_states.get(char, ()) if state[0] == position]
        return states or self._states_by_position.get(position, [])

    def tag_words(self, words: Sequence[str], default: str = "x") -> List[str]:
        if not words:
            return []
        text = "".join(words)
        positions = _positions(words)
        params = self.params

        score: Dict[Tuple[str, str], float] = {}
        for state in self._candidates(text[0], positions[0]):
            score[state] = params.start.get(state, MIN_FLOAT) + params.emit.get(state, {}).get(text[0], MIN_FLOAT)
        if not score:
            return [default for _ in words]
        backpointers: List[Dict[Tuple[str, str], Tuple[str, str]]] = []
        for index in range(1, len(text)):
            char = text[index]
            current: Dict[Tuple[str, str], float] = {}
            pointer: Dict[Tuple[str, str], Tuple[str, str]] = {}
            for state in self._candidates(char, positions[index]):
                emit = params.emit.get(state, {}).get(char, MIN_FLOAT)
                best_prev = None
                best_score = 0.0
                for prev, prev_score in score.items():
                    candidate = prev_score + params.trans.get(prev, {}).get(state, MIN_FLOAT) + emit
                    if best_prev is None or candidate > best_score:
                        best_prev, best_score = prev, candidate
                current[state] = best_score
                pointer[state] = best_prev
            if not current:
                return [default for _ in words]
            score = current
            backpointers.append(pointer)

        last = max(score, key=lambda state: (score[state], state))
        path = [last]
        for pointer in reversed(backpointers):
            path.append(pointer[path[-1]])
        path.reverse()

        tags: List[str] = []
        offset = 0
        for word in words:
            offset += len(word)
            tags.append(path[offset - 1][1])
        return tags


@lru_cache(maxsize=None)
def default_segmentation_model(package: str = DEFAULT_PACKAGE) -> SegmentationHMM:
    start, trans, emit = segmentation_tables(package)
    return SegmentationHMM(HMMParameters(start=start, trans=trans, emit=emit))


@lru_cache(maxsize=None)
def default_pos_tagger(package: str = DEFAULT_PACKAGE) -> POSTagger:
    start, trans, emit, char_states = pos_tables(package)
    return POSTagger(POSParameters(start=start, trans=trans, emit=emit, char_states=char_states))
