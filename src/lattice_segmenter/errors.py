"""分词引擎的异常体系。"""

from __future__ import annotations


class SegmenterError(Exception):
    """所有分词引擎异常的根类型。"""


class LoadError(SegmenterError, ValueError):
    """词典或 IDF 表格式错误。

    出错时整次加载作废，已有的词典状态保持不变。
    """

    def __init__(self, message: str, lineno: int | None = None, line: str | None = None) -> None:
        self.lineno = lineno
        self.line = line
        if lineno is not None:
            message = f"{message}（第 {lineno} 行: {line!r}）"
        super().__init__(message)


class LockError(SegmenterError, RuntimeError):
    """共享词典锁未能在限定时间内获取。"""


class InvalidArgument(SegmenterError, ValueError):
    """参数非法，在任何计算开始之前拒绝。"""
