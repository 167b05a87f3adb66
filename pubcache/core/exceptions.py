"""统一异常体系

所有业务异常继承 PubCacheError，替代散落的 ValueError / RuntimeError。
Web 层据 code 映射 HTTP 状态码，CLI 层据此输出友好提示。
"""

from __future__ import annotations


class PubCacheError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(PubCacheError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(PubCacheError):
    """输入数据校验失败（包名/版本号/URL 等）"""

    code = "VALIDATION_ERROR"


class ResolutionError(PubCacheError):
    """外部解析工具执行失败或超时

    与 "依赖集为空" 含义不同，调用方必须视为 "解析不可用"。
    """

    code = "RESOLUTION_ERROR"


class FetchError(PubCacheError):
    """包归档下载失败或归档损坏"""

    code = "FETCH_ERROR"


class InvalidReferenceError(PubCacheError):
    """package: 引用字符串格式不合法"""

    code = "INVALID_REFERENCE"


class PackageNotFoundError(PubCacheError):
    """包不在已解析的版本集中"""

    code = "PACKAGE_NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"package not found: {name}")
        self.name = name


class PackageFileNotFoundError(PubCacheError):
    """包内不存在该文件"""

    code = "FILE_NOT_FOUND"

    def __init__(self, reference: str) -> None:
        super().__init__(f"not found: {reference}")
        self.reference = reference


class PackageFileUnreadableError(PubCacheError):
    """包内文件不是合法的 UTF-8 文本"""

    code = "UNREADABLE_FILE"

    def __init__(self, reference: str) -> None:
        super().__init__(f"not a UTF-8 text file: {reference}")
        self.reference = reference
