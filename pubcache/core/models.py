"""核心数据模型

- PackageRef: 不可变的 (name, version) 二元组，构造时校验
- ResolvedSet: 一次解析调用的结果，有序且去重
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from pubcache.core.exceptions import ValidationError

_NAME_RE = re.compile(r"[A-Za-z0-9_]+")
_VERSION_RE = re.compile(r"[A-Za-z0-9_\-+.]+")


@dataclass(frozen=True, order=True)
class PackageRef:
    """包名 + 版本号

    name 只允许字母/数字/下划线，version 额外允许 - + .；
    两者都会拼进缓存目录名和下载 URL，所以构造时即校验，
    不存在 "部分合法" 的实例。
    """

    name: str
    version: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not _NAME_RE.fullmatch(self.name):
            raise ValidationError(f"invalid package name: {self.name!r}")
        if not isinstance(self.version, str) or not _VERSION_RE.fullmatch(self.version):
            raise ValidationError(f"invalid package version: {self.version!r}")

    @property
    def dir_name(self) -> str:
        """缓存目录名 / 归档文件名的公共部分"""
        return f"{self.name}-{self.version}"

    def __str__(self) -> str:
        return f"[{self.name}: {self.version}]"


class ResolvedSet:
    """一次解析得到的版本集合（有序、无重复），空集合合法"""

    __slots__ = ("_refs",)

    def __init__(self, refs: Iterable[PackageRef] = ()) -> None:
        seen: dict[PackageRef, None] = {}
        for ref in refs:
            seen.setdefault(ref, None)
        self._refs: tuple[PackageRef, ...] = tuple(seen)

    @classmethod
    def empty(cls) -> ResolvedSet:
        return cls()

    def names(self) -> list[str]:
        return [r.name for r in self._refs]

    def to_list(self) -> list[dict[str, str]]:
        """格式化为 [{name, version}] 供 CLI / Web 输出"""
        return [{"name": r.name, "version": r.version} for r in self._refs]

    def __iter__(self) -> Iterator[PackageRef]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)

    def __bool__(self) -> bool:
        return bool(self._refs)

    def __contains__(self, ref: object) -> bool:
        return ref in self._refs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolvedSet):
            return NotImplemented
        return self._refs == other._refs

    def __hash__(self) -> int:
        return hash(self._refs)

    def __repr__(self) -> str:
        return f"ResolvedSet({list(self._refs)!r})"

    def __str__(self) -> str:
        return "[" + ", ".join(str(r) for r in self._refs) + "]"
