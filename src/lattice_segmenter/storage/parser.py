"""词典与 IDF 文本表的解析。

两种表都是“每行一条、空白分隔”的纯文本，空行与 # 开头的注释行忽略。
解析只产生新对象，不触碰任何共享状态：任意一行出错即整体作废。
"""

from __future__ import annotations

import math
import re
from typing import Iterator, List, Tuple

from ..errors import InvalidArgument, LoadError
from ..models.entry import DictEntry

COMMENT_MARKER = "#"

_FREQUENCY_PATTERN = re.compile(r"^[0-9]+$")


def decode_table(data: bytes, source: str = "<bytes>") -> str:
    """按 UTF-8 解码，并去掉可能存在的 BOM。"""

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgument(f"{source} 需要字节串，实际为 {type(data).__name__}")
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(f"{source} 不是合法的 UTF-8 文本") from exc
    return text.lstrip("\ufeff")


def iter_table_lines(text: str) -> Iterator[Tuple[int, str]]:
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        yield lineno, line


def parse_dictionary(data: bytes, source: str = "<bytes>") -> List[DictEntry]:
    """解析 `词 词频 [词性]` 格式的词典。"""

    entries: List[DictEntry] = []
    for lineno, line in iter_table_lines(decode_table(data, source)):
        fields = line.split()
        if len(fields) not in (2, 3):
            raise LoadError(f"{source} 字段数应为 2 或 3", lineno, line)
        word, freq_text = fields[0], fields[1]
        if not _FREQUENCY_PATTERN.match(freq_text):
            raise LoadError(f"{source} 词频必须是非负整数", lineno, line)
        tag = fields[2] if len(fields) == 3 else None
        entries.append(DictEntry(word=word, frequency=int(freq_text), tag=tag))
    return entries


def parse_idf(data: bytes, source: str = "<bytes>") -> List[Tuple[str, float]]:
    """解析 `词 idf` 格式的逆文档频率表。"""

    rows: List[Tuple[str, float]] = []
    for lineno, line in iter_table_lines(decode_table(data, source)):
        fields = line.split()
        if len(fields) != 2:
            raise LoadError(f"{source} 字段数应为 2", lineno, line)
        try:
            value = float(fields[1])
        except ValueError as exc:
            raise LoadError(f"{source} IDF 必须是数值", lineno, line) from exc
        if not math.isfinite(value):
            raise LoadError(f"{source} IDF 必须是有限值", lineno, line)
        rows.append((fields[0], value))
    return rows
