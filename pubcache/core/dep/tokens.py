"""最小 Dart 词法切分

只提供 import 提取所需的分类：关键字 / 字符串字面量 / 标点 / 标识符。
空白与注释直接丢弃，不产出 token；无法识别的字符按单字符 OTHER 输出。
"""

from __future__ import annotations

import re
from dataclasses import dataclass

KEYWORD = "keyword"
STRING = "string"
PUNCTUATION = "punctuation"
IDENTIFIER = "identifier"
NUMBER = "number"
OTHER = "other"
EOF = "eof"

# 保留字 + 内建标识符（library / import / export 等在 Dart 中属于后者）
KEYWORDS = frozenset((
    "abstract", "as", "assert", "async", "await", "break", "case", "catch",
    "class", "const", "continue", "covariant", "default", "deferred", "do",
    "dynamic", "else", "enum", "export", "extends", "extension", "external",
    "factory", "false", "final", "finally", "for", "Function", "get", "hide",
    "if", "implements", "import", "in", "interface", "is", "late", "library",
    "mixin", "new", "null", "on", "operator", "part", "required", "rethrow",
    "return", "set", "show", "static", "super", "switch", "sync", "this",
    "throw", "true", "try", "typedef", "var", "void", "while", "with", "yield",
))

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<line_comment>//[^\n]*)
    |(?P<block_comment>/\*[\s\S]*?(?:\*/|\Z))
    |(?P<string>r?(?:'''[\s\S]*?'''|\"\"\"[\s\S]*?\"\"\"
        |'(?:\\.|[^'\\\n])*'|"(?:\\.|[^"\\\n])*"))
    |(?P<word>[A-Za-z_$][\w$]*)
    |(?P<number>0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
    |(?P<punct>[;:,.(){}\[\]<>=!?+\-*/%&|^~@#])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    offset: int = 0

    def is_keyword(self, word: str) -> bool:
        return self.kind == KEYWORD and self.lexeme == word

    def is_punct(self, char: str) -> bool:
        return self.kind == PUNCTUATION and self.lexeme == char


def tokenize(source: str) -> list[Token]:
    """切分源码，结果总以一个 EOF token 结尾"""
    tokens: list[Token] = []
    pos = 0
    end = len(source)
    while pos < end:
        m = _TOKEN_RE.match(source, pos)
        if m is None:
            tokens.append(Token(OTHER, source[pos], pos))
            pos += 1
            continue
        group = m.lastgroup
        text = m.group()
        if group == "string":
            tokens.append(Token(STRING, text, pos))
        elif group == "word":
            kind = KEYWORD if text in KEYWORDS else IDENTIFIER
            tokens.append(Token(kind, text, pos))
        elif group == "number":
            tokens.append(Token(NUMBER, text, pos))
        elif group == "punct":
            tokens.append(Token(PUNCTUATION, text, pos))
        # ws / 注释丢弃
        pos = m.end()
    tokens.append(Token(EOF, "", end))
    return tokens


def strip_matching_quotes(lexeme: str) -> str:
    """去掉字符串字面量两端成对的引号（含 r 前缀与三引号）"""
    s = lexeme[1:] if lexeme.startswith("r") else lexeme
    for quote in ("'''", '"""', "'", '"'):
        if len(s) >= 2 * len(quote) and s.startswith(quote) and s.endswith(quote):
            return s[len(quote):-len(quote)]
    return lexeme
