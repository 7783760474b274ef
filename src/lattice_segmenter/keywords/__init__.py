"""关键词提取：TF-IDF 与 TextRank。"""

from .base import KeywordExtractor
from .textrank import TextRank
from .tfidf import TFIDF

__all__ = ["KeywordExtractor", "TFIDF", "TextRank"]
