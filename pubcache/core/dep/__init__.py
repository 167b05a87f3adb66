"""包解析与缓存

- scanner.py / tokens.py: 源码 import 提取
- lockfile.py / resolver.py: 外部 pub 解析与锁文件解析
- cache.py: (name, version) -> lib/ 磁盘缓存
- catalog.py: package: 引用到文件内容
"""

from pubcache.core.dep.cache import PackageCache
from pubcache.core.dep.catalog import PackageCatalog, split_reference
from pubcache.core.dep.resolver import PackageResolver
from pubcache.core.dep.scanner import extract_unsafe_imports, filter_safe_packages

__all__ = [
    "PackageCache",
    "PackageCatalog",
    "PackageResolver",
    "extract_unsafe_imports",
    "filter_safe_packages",
    "split_reference",
]
