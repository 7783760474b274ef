"""全局配置与默认参数。"""

from dataclasses import dataclass, field
from typing import FrozenSet

# 英文停用词：与中文词典无冲突，默认对两种关键词算法都生效
DEFAULT_STOP_WORDS: FrozenSet[str] = frozenset(
    (
        "the", "of", "is", "and", "to", "in", "that", "we", "for", "an", "are",
        "by", "be", "as", "on", "with", "can", "if", "from", "which", "you", "it",
        "this", "then", "at", "have", "all", "not", "one", "has", "or",
    )
)


@dataclass
class SegmenterConfig:
    """引擎可调参数集合。

    注意：这里的数值只是默认值，调用方可以按需覆盖后传给 Engine。
    """

    # 启动时是否载入打包的默认词典；关闭后从空词典开始
    load_default_dictionary: bool = True
    # 启动时是否载入打包的 IDF 表
    load_default_idf: bool = True
    # 打包资源所在的发行包与相对路径
    resource_package: str = "jieba"
    dictionary_resource: str = "dict.txt"
    idf_resource: str = "analyse/idf.txt"
    # 词典锁等待上限（秒），负数表示一直等待
    lock_timeout: float = 30.0
    # 未指定时是否启用 HMM 发现未登录词
    hmm: bool = True
    # 关键词提取默认算法与返回数量
    keyword_method: str = "tfidf"
    keyword_top_k: int = 20
    # 关键词候选的最短长度（按字符计）
    keyword_min_length: int = 2
    # TextRank 共现窗口、阻尼系数与迭代轮次
    textrank_span: int = 5
    textrank_damping: float = 0.85
    textrank_iterations: int = 10
    # 停用词（小写比较）
    stop_words: FrozenSet[str] = field(default_factory=lambda: DEFAULT_STOP_WORDS)
