"""中文分词：精确、全、搜索三种模式，以及词性标注与带位置分词。"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..models.token import TaggedWord, Token, TokenizeMode
from ..storage.dictionary import Dictionary
from .dag import build_dag
from .hmm import POSTagger, SegmentationHMM, default_pos_tagger, default_segmentation_model
from .route import calc_route, route_words
from .text_utils import (
    RE_HAN_CUT_ALL,
    RE_HAN_DEFAULT,
    RE_SKIP_CUT_ALL,
    RE_SKIP_DEFAULT,
    classify_unknown,
    is_han,
    is_single_eng,
    iter_blocks,
)


class ChineseSegmenter:
    """词典 + DAG + 最大概率路径 + HMM 的分词入口。

    每个公开方法在词典锁内完成，整次调用看到同一份词典快照。
    HMM 模型按需加载：关闭 HMM 的调用不会触发参数表的载入。
    """

    def __init__(
        self,
        dictionary: Dictionary,
        hmm_model: SegmentationHMM | None = None,
        pos_tagger: POSTagger | None = None,
    ) -> None:
        self.dictionary = dictionary
        self._hmm_model = hmm_model
        self._pos_tagger = pos_tagger

    @property
    def hmm_model(self) -> SegmentationHMM:
        if self._hmm_model is None:
            self._hmm_model = default_segmentation_model()
        return self._hmm_model

    @property
    def pos_tagger(self) -> POSTagger:
        if self._pos_tagger is None:
            self._pos_tagger = default_pos_tagger()
        return self._pos_tagger

    def cut(self, text: str, hmm: bool = True) -> List[str]:
        """精确模式：一次切分，词之间不重叠，拼接后还原原文。"""

        if not text:
            return []
        with self.dictionary.locked():
            return list(self._cut(text, hmm))

    def cut_all(self, text: str) -> List[str]:
        """全模式：输出 DAG 上的每一条边，允许重叠，不做动态规划与 HMM。

        非汉字块按分隔符拆开后逐段输出，分隔符本身也保留。
        """

        if not text:
            return []
        words: List[str] = []
        with self.dictionary.locked():
            for block, matched in iter_blocks(text, RE_HAN_CUT_ALL):
                if not matched:
                    words.extend(piece for piece in RE_SKIP_CUT_ALL.split(block) if piece)
                    continue
                dag = build_dag(block, self.dictionary)
                for start in range(len(block)):
                    words.extend(block[start:end] for end in dag[start])
        return words

    def cut_for_search(self, text: str, hmm: bool = True) -> List[str]:
        """搜索模式：在精确模式基础上补充长词内部的词典词。"""

        return [token.word for token in self.tokenize(text, TokenizeMode.search, hmm)]

    def tokenize(
        self, text: str, mode: TokenizeMode = TokenizeMode.default, hmm: bool = True
    ) -> List[Token]:
        """带字符偏移的分词；精确模式下偏移恰好铺满原文。"""

        if not text:
            return []
        tokens: List[Token] = []
        offset = 0
        with self.dictionary.locked():
            for word in self._cut(text, hmm):
                if mode == TokenizeMode.search:
                    for start, end in self._search_spans(word):
                        tokens.append(Token(word=word[start:end], start=offset + start, end=offset + end))
                else:
                    tokens.append(Token(word=word, start=offset, end=offset + len(word)))
                offset += len(word)
        return tokens

    def tag(self, text: str, hmm: bool = True) -> List[TaggedWord]:
        """精确模式分词并标注词性。"""

        if not text:
            return []
        with self.dictionary.locked():
            words = list(self._cut(text, hmm))
            tags = self._tag_words(words, hmm)
        return [TaggedWord(word=word, tag=tag) for word, tag in zip(words, tags)]

    def _cut(self, text: str, hmm: bool) -> Iterator[str]:
        cut_block = self._cut_dag if hmm else self._cut_dag_no_hmm
        for block, matched in iter_blocks(text, RE_HAN_DEFAULT):
            if matched:
                yield from cut_block(block)
                continue
            for piece in RE_SKIP_DEFAULT.split(block):
                if not piece:
                    continue
                if RE_SKIP_DEFAULT.fullmatch(piece):
                    yield piece
                else:
                    # 标点等其余字符逐个输出
                    yield from piece

    def _best_words(self, block: str) -> List[str]:
        dag = build_dag(block, self.dictionary)
        return route_words(block, calc_route(block, dag, self.dictionary))

    def _cut_dag_no_hmm(self, block: str) -> Iterator[str]:
        # 连续的单个字母数字合并为一个词
        buffer = ""
        for word in self._best_words(block):
            if is_single_eng(word):
                buffer += word
                continue
            if buffer:
                yield buffer
                buffer = ""
            yield word
        if buffer:
            yield buffer

    def _cut_dag(self, block: str) -> Iterator[str]:
        # 收集连续单字，整串不在词典里时交给 HMM 重新组词
        buffer = ""
        for word in self._best_words(block):
            if len(word) == 1:
                buffer += word
                continue
            if buffer:
                yield from self._flush_singles(buffer)
                buffer = ""
            yield word
        if buffer:
            yield from self._flush_singles(buffer)

    def _flush_singles(self, buffer: str) -> Iterator[str]:
        if len(buffer) == 1:
            yield buffer
        elif buffer in self.dictionary:
            yield from buffer
        else:
            yield from self.hmm_model.cut(buffer, force_split=self.dictionary.is_deleted)

    def _search_spans(self, word: str) -> List[Tuple[int, int]]:
        """词内所有长度 ≥ 2 的词典子词（含自身），按起点、终点升序。"""

        spans = [(0, len(word))]
        if len(word) <= 2:
            return spans
        size = len(word)
        limit = self.dictionary.max_word_length
        for start in range(size - 1):
            for end in range(start + 2, min(size, start + limit) + 1):
                if end - start == size:
                    continue
                fragment = word[start:end]
                if not self.dictionary.is_prefix(fragment):
                    break
                if fragment in self.dictionary:
                    spans.append((start, end))
        spans.sort()
        return spans

    def _tag_words(self, words: Sequence[str], hmm: bool) -> List[str]:
        """词典词用词典词性；连续的无词性汉字词整段交给词性 HMM。"""

        tags: List[Optional[str]] = [None] * len(words)
        run: List[int] = []

        def flush() -> None:
            if not run:
                return
            run_words = [words[index] for index in run]
            if hmm:
                run_tags = self.pos_tagger.tag_words(run_words)
            else:
                run_tags = ["x"] * len(run_words)
            for index, tag in zip(run, run_tags):
                tags[index] = tag
            run.clear()

        for index, word in enumerate(words):
            tag = self.dictionary.tag(word) if word in self.dictionary else None
            if tag:
                flush()
                tags[index] = tag
            elif is_han(word):
                run.append(index)
            else:
                flush()
                tags[index] = classify_unknown(word)
        flush()
        return [tag or "x" for tag in tags]
