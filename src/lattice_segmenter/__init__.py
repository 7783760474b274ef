"""基于词典 DAG 与 HMM 的中文分词、词性标注与关键词提取。"""

from .config import SegmenterConfig
from .core.engine import Engine
from .errors import InvalidArgument, LoadError, LockError, SegmenterError
from .models.token import Keyword, KeywordMethod, TaggedWord, Token, TokenizeMode
from .storage.dictionary import Dictionary

__all__ = [
    "Dictionary",
    "Engine",
    "InvalidArgument",
    "Keyword",
    "KeywordMethod",
    "LoadError",
    "LockError",
    "SegmenterConfig",
    "SegmenterError",
    "TaggedWord",
    "Token",
    "TokenizeMode",
]
