"""pubcache - 包依赖解析与内容缓存

给定一段源码引用的包名集合，解析出兼容的传递依赖版本集，
将各包的 lib/ 内容落地到本地磁盘缓存，并按包内相对路径回读文件内容。
"""

__version__ = "0.1.0"
