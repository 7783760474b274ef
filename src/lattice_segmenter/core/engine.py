"""分词引擎：持有词典句柄、HMM 模型、IDF 表与两个关键词提取器。"""

from __future__ import annotations

import logging
from typing import Collection, Dict, Iterable, List

from ..config import SegmenterConfig
from ..errors import InvalidArgument
from ..frequency.idf import IDFTable
from ..keywords import TFIDF, KeywordExtractor, TextRank
from ..models.token import Keyword, KeywordMethod, TaggedWord, Token, TokenizeMode
from ..storage import Dictionary, create_dictionary
from ..storage.resources import default_idf_rows
from .hmm import POSTagger, SegmentationHMM
from .segmentation import ChineseSegmenter

logger = logging.getLogger(__name__)


def _require_text(text: str) -> str:
    if not isinstance(text, str):
        raise InvalidArgument(f"文本必须是 str，实际为 {type(text).__name__}")
    return text


def _stop_word(word: str) -> str:
    if not isinstance(word, str) or not word:
        raise InvalidArgument(f"停用词必须是非空 str: {word!r}")
    return word.lower()


class Engine:
    """对外的全部操作都挂在这个上下文对象上，不依赖任何全局单例。

    词典是唯一的共享可变状态，读写都经由它自己的锁串行化。
    """

    def __init__(
        self,
        config: SegmenterConfig | None = None,
        *,
        dictionary: Dictionary | None = None,
        idf: IDFTable | None = None,
        hmm_model: SegmentationHMM | None = None,
        pos_tagger: POSTagger | None = None,
    ) -> None:
        self.config = config or SegmenterConfig()
        self.dictionary = dictionary if dictionary is not None else create_dictionary(self.config)
        if idf is None:
            idf = IDFTable()
            if self.config.load_default_idf:
                idf = IDFTable(default_idf_rows(self.config.resource_package, self.config.idf_resource))
        self.idf = idf
        self.segmenter = ChineseSegmenter(self.dictionary, hmm_model=hmm_model, pos_tagger=pos_tagger)
        # 两个提取器共享同一个停用词集合，增删对二者同时生效
        self.stop_words = set(self.config.stop_words)
        self.extractors: Dict[KeywordMethod, KeywordExtractor] = {
            KeywordMethod.tfidf: TFIDF(
                self.segmenter,
                self.idf,
                self.stop_words,
                min_length=self.config.keyword_min_length,
            ),
            KeywordMethod.textrank: TextRank(
                self.segmenter,
                self.stop_words,
                span=self.config.textrank_span,
                damping=self.config.textrank_damping,
                iterations=self.config.textrank_iterations,
                min_length=self.config.keyword_min_length,
            ),
        }

    # ---- 词典 ----

    def load_dictionary(self, data: bytes) -> None:
        self.dictionary.load(data)

    def add_word(self, word: str, frequency: int | None = None, tag: str | None = None) -> int:
        return self.dictionary.add_word(word, frequency, tag)

    def delete_word(self, word: str) -> int:
        return self.dictionary.delete_word(word)

    def suggest_frequency(self, segment: str) -> int:
        return self.dictionary.suggest_freq(segment)

    def reset_dictionary(self) -> None:
        self.dictionary.reset()
        logger.debug("词典已恢复为默认词典")

    # ---- 分词 ----

    def _hmm(self, hmm: bool | None) -> bool:
        return self.config.hmm if hmm is None else bool(hmm)

    def segment(self, text: str, hmm: bool | None = None) -> List[str]:
        return self.segmenter.cut(_require_text(text), self._hmm(hmm))

    def segment_all(self, text: str) -> List[str]:
        return self.segmenter.cut_all(_require_text(text))

    def segment_for_search(self, text: str, hmm: bool | None = None) -> List[str]:
        return self.segmenter.cut_for_search(_require_text(text), self._hmm(hmm))

    def tag(self, text: str, hmm: bool | None = None) -> List[TaggedWord]:
        return self.segmenter.tag(_require_text(text), self._hmm(hmm))

    def tokenize(
        self, text: str, mode: TokenizeMode | str = TokenizeMode.default, hmm: bool | None = None
    ) -> List[Token]:
        try:
            mode = TokenizeMode(mode)
        except ValueError as exc:
            raise InvalidArgument(f"未知的分词模式: {mode!r}") from exc
        return self.segmenter.tokenize(_require_text(text), mode, self._hmm(hmm))

    # ---- 关键词 ----

    def extract_keywords(
        self,
        text: str,
        top_k: int | None = None,
        allowed_pos: Collection[str] = (),
        method: KeywordMethod | str | None = None,
    ) -> List[Keyword]:
        try:
            method = KeywordMethod(method or self.config.keyword_method)
        except ValueError as exc:
            raise InvalidArgument(f"未知的关键词算法: {method!r}") from exc
        top_k = self.config.keyword_top_k if top_k is None else top_k
        return self.extractors[method].extract(_require_text(text), top_k, allowed_pos)

    def load_idf(self, data: bytes) -> int:
        return self.idf.load(data)

    def add_stop_word(self, word: str) -> None:
        self.stop_words.add(_stop_word(word))

    def remove_stop_word(self, word: str) -> None:
        self.stop_words.discard(_stop_word(word))

    def set_stop_words(self, words: Iterable[str]) -> None:
        """整体替换停用词：先建好新集合，再同时换给两个提取器。"""

        if isinstance(words, str):
            raise InvalidArgument("停用词需要字符串的集合，而不是单个字符串")
        stop_words = {_stop_word(word) for word in words}
        self.stop_words = stop_words
        for extractor in self.extractors.values():
            extractor.stop_words = stop_words
