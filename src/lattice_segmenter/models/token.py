"""分词与关键词的输出模型。"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenizeMode(str, Enum):
    """带位置分词的模式。"""

    default = "default"
    search = "search"


class KeywordMethod(str, Enum):
    """关键词排序算法。"""

    tfidf = "tfidf"
    textrank = "textrank"


@dataclass(frozen=True)
class Token:
    """带字符偏移的词：start 含，end 不含，按字符而非字节计。"""

    word: str
    start: int
    end: int
    tag: Optional[str] = None


@dataclass(frozen=True)
class TaggedWord:
    word: str
    tag: str


@dataclass(frozen=True)
class Keyword:
    term: str
    weight: float
