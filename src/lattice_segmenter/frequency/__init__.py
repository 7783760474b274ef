"""词频与逆文档频率相关工具。"""

from .idf import IDFTable
from .suggest import decomposition_logprob, suggest_frequency

__all__ = [
    "IDFTable",
    "decomposition_logprob",
    "suggest_frequency",
]
