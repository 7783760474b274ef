"""带锁的词典存储。"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterable, Iterator, Optional, Sequence, Set

from ..errors import InvalidArgument, LockError
from ..models.entry import DictEntry
from .parser import parse_dictionary
from .resources import default_dictionary_entries

logger = logging.getLogger(__name__)


class Dictionary:
    """词 → (词频, 词性) 映射，外加总词频、最长词长与前缀集合。

    并发约定：
    - 所有修改都在同一把可重入锁内完成，读者看不到“词条已改、总词频未改”的中间态；
    - 读取类方法本身不加锁，调用方用 `locked()` 包住一整次分词/提取，
      以便整次调用看到同一份快照。
    """

    def __init__(
        self,
        entries: Iterable[DictEntry] = (),
        *,
        lock_timeout: float = 30.0,
        default_loader: Callable[[], Sequence[DictEntry]] | None = None,
    ) -> None:
        self.lock_timeout = lock_timeout
        self._lock = threading.RLock()
        self._default_loader = default_loader or default_dictionary_entries
        self._freq: Dict[str, int] = {}
        self._tags: Dict[str, str] = {}
        self._prefixes: Set[str] = set()
        self._total = 0
        self._max_word_length = 0
        self._merge(entries)

    @contextmanager
    def locked(self) -> Iterator["Dictionary"]:
        """独占词典；超时未获取则抛出 LockError。"""

        timeout = self.lock_timeout if self.lock_timeout >= 0 else -1
        if not self._lock.acquire(timeout=timeout):
            raise LockError(f"等待词典锁超过 {self.lock_timeout} 秒")
        try:
            yield self
        finally:
            self._lock.release()

    @property
    def total_frequency(self) -> int:
        return self._total

    @property
    def max_word_length(self) -> int:
        return self._max_word_length

    def frequency(self, word: str) -> int:
        return self._freq.get(word, 0)

    def tag(self, word: str) -> Optional[str]:
        return self._tags.get(word)

    def entry(self, word: str) -> DictEntry | None:
        if word not in self._freq:
            return None
        return DictEntry(word=word, frequency=self._freq[word], tag=self._tags.get(word))

    def is_prefix(self, fragment: str) -> bool:
        return fragment in self._prefixes

    def is_deleted(self, word: str) -> bool:
        """词条存在但词频为 0：显式删除的词。"""

        return self._freq.get(word) == 0

    def __contains__(self, word: object) -> bool:
        # 只有正词频的词才算“在词典里”，词频 0 的词视为已删除
        return bool(self._freq.get(word))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._freq)

    def load(self, data: bytes) -> int:
        """载入用户词典字节流，返回合并的词条数。

        先在锁外完整解析，任何一行出错即抛出 LoadError 且不做任何合并；
        解析成功后才在锁内一次性合并。
        """

        entries = parse_dictionary(data)
        with self.locked():
            self._merge(entries)
        logger.debug("合并 %d 个用户词条，总词频 %d", len(entries), self._total)
        return len(entries)

    def add_word(self, word: str, frequency: int | None = None, tag: str | None = None) -> int:
        """新增或更新单个词，返回最终保存的词频。

        不给词频时取 max(已有词频, 建议词频)，保证该词能被整体切出。
        """

        if not isinstance(word, str) or not word:
            raise InvalidArgument("词不能为空")
        if frequency is not None and (isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 0):
            raise InvalidArgument(f"词频必须是非负整数: {frequency!r}")
        # 延迟导入：建议词频依赖分词核心，而分词核心只读本模块
        from ..frequency.suggest import suggest_frequency

        with self.locked():
            if frequency is None:
                frequency = max(self.frequency(word), suggest_frequency(self, word))
            self._merge([DictEntry(word=word, frequency=frequency, tag=tag or None)])
        return frequency

    def delete_word(self, word: str) -> int:
        return self.add_word(word, 0)

    def suggest_freq(self, segment: str) -> int:
        if not isinstance(segment, str) or not segment:
            raise InvalidArgument("待估计的片段不能为空")
        from ..frequency.suggest import suggest_frequency

        with self.locked():
            return suggest_frequency(self, segment)

    def reset(self) -> None:
        """丢弃全部词条并重新载入默认词典。"""

        started = time.perf_counter()
        entries = self._default_loader()
        with self.locked():
            self._clear()
            self._merge(entries)
        logger.debug(
            "词典已重置：%d 个词条，总词频 %d，耗时 %.3f 秒",
            len(self._freq),
            self._total,
            time.perf_counter() - started,
        )

    def _clear(self) -> None:
        self._freq = {}
        self._tags = {}
        self._prefixes = set()
        self._total = 0
        self._max_word_length = 0

    def _merge(self, entries: Iterable[DictEntry]) -> None:
        for entry in entries:
            word = entry.word
            previous = self._freq.get(word, 0)
            self._freq[word] = entry.frequency
            self._total += entry.frequency - previous
            if entry.tag:
                self._tags[word] = entry.tag
            if len(word) > self._max_word_length:
                self._max_word_length = len(word)
            for end in range(len(word), 0, -1):
                fragment = word[:end]
                if fragment in self._prefixes:
                    break
                self._prefixes.add(fragment)
