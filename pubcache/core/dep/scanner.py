"""源码 import 提取

两段式：
  1. extract_unsafe_imports: 原样收集源码开头 library/import 声明中的 URI
  2. filter_safe_packages: 只保留 package: 引用并清洗出包名

分开两步，调用方可以先审计全部 import，再决定信任哪些。
"""

from __future__ import annotations

from typing import Iterable

from pubcache.core.dep.tokens import EOF, STRING, Token, strip_matching_quotes, tokenize

PACKAGE_PREFIX = "package:"


def extract_unsafe_imports(source: str | None) -> set[str]:
    """收集源码开头 import 声明引用的全部 URI（未做任何安全过滤）

    只检查开头连续的 library / import 声明，遇到其他 token 即停止，
    与 "import 必须位于其他顶层声明之前" 的语法规则一致。
    """
    if not source:
        return set()

    tokens = tokenize(source)
    imports: set[str] = set()
    i = 0

    while tokens[i].kind != EOF:
        token = tokens[i]
        if token.is_keyword("library"):
            i = _consume_semi(tokens, i)
        elif token.is_keyword("import"):
            i += 1
            if tokens[i].kind == STRING:
                imports.add(strip_matching_quotes(tokens[i].lexeme))
            i = _consume_semi(tokens, i)
        else:
            break

    return imports


def filter_safe_packages(imports: Iterable[str]) -> set[str]:
    """从 import URI 中取出包名，防御性清洗

    package:foo/bar.dart -> foo；非 package: 的 URI 丢弃；
    ".." 一律删除，清洗后为空的丢弃。
    """
    result: set[str] = set()
    for uri in imports:
        if not uri.startswith(PACKAGE_PREFIX):
            continue
        name = uri[len(PACKAGE_PREFIX):]
        index = name.find("/")
        if index != -1:
            name = name[:index]
        name = name.replace("..", "")
        if name:
            result.add(name)
    return result


def _consume_semi(tokens: list[Token], i: int) -> int:
    """前进到下一个分号之后；没有分号则停在 EOF"""
    while not tokens[i].is_punct(";"):
        if tokens[i].kind == EOF:
            return i
        i += 1
    return i + 1
