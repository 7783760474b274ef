"""文本分块与字符类别工具。"""

from __future__ import annotations

import re
from typing import Iterator, Tuple

# 精确模式：汉字与常见的字母数字符号连成一块交给词典切分
RE_HAN_DEFAULT = re.compile("([\u4E00-\u9FD5a-zA-Z0-9+#&\\._%\\-]+)")
# 块之间的空白：\r\n 视为一个整体，其余空白逐个
RE_SKIP_DEFAULT = re.compile("(\r\n|\\s)")
# 全模式只把汉字交给词典，其余按分隔符拆开，字母数字串与分隔符都原样输出
RE_HAN_CUT_ALL = re.compile("([\u4E00-\u9FD5]+)")
RE_SKIP_CUT_ALL = re.compile("([^a-zA-Z0-9+#\n])")

RE_HAN_CHAR = re.compile("[\u4E00-\u9FD5]")
RE_ENG_CHAR = re.compile("[a-zA-Z0-9]")


def iter_blocks(text: str, pattern: re.Pattern[str]) -> Iterator[Tuple[str, bool]]:
    """按正则切块，返回 (块, 是否为需要切分的块)，空块跳过。"""

    for block in pattern.split(text):
        if block:
            yield block, bool(pattern.fullmatch(block))


def is_han(text: str) -> bool:
    """判断一段文本是否全部是汉字。"""

    return bool(text) and all(RE_HAN_CHAR.match(char) for char in text)


def is_single_eng(word: str) -> bool:
    return len(word) == 1 and bool(RE_ENG_CHAR.match(word))


def classify_unknown(word: str) -> str:
    """词典外、非汉字词的词性：纯数字为 m，含字母数字为 eng，其余为 x。"""

    eng = 0
    digits = 0
    for char in word:
        if char.isascii() and char.isalnum():
            eng += 1
            if char.isdigit():
                digits += 1
    if eng == 0:
        return "x"
    if eng == digits:
        return "m"
    return "eng"
