"""ServiceContainer 单元测试"""

from __future__ import annotations

import pytest

import pubcache.core.config as cfgmod
from pubcache.core.pub import DisabledPub, Pub
from pubcache.services.container import (
    ServiceContainer,
    get_container,
    reset_container,
    set_container,
)


@pytest.fixture(autouse=True)
def _setup_config(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用独立的配置与容器"""
    monkeypatch.setattr(cfgmod, "_current", cfgmod.Config(cache_prefix="pubcache-ut-"))
    reset_container()
    yield
    reset_container()


class TestServiceContainer:
    def test_lazy_loading(self) -> None:
        c = ServiceContainer()
        assert len(c._instances) == 0
        _ = c.pub
        assert "pub" in c._instances
        c.close()

    def test_shared_instance(self) -> None:
        c = ServiceContainer()
        assert c.pub is c.pub
        c.close()

    def test_real_pub_by_default(self) -> None:
        c = ServiceContainer()
        pub = c.pub
        assert isinstance(pub, Pub)
        root = pub.cache_root
        assert root.is_dir()
        c.close()
        assert not root.exists()
        assert "pub" not in c._instances

    def test_disabled_by_config(self) -> None:
        c = ServiceContainer(config=cfgmod.Config(packages_enabled=False))
        assert isinstance(c.pub, DisabledPub)


class TestGetContainer:
    def test_singleton(self) -> None:
        assert get_container() is get_container()

    def test_reset(self) -> None:
        c1 = get_container()
        reset_container()
        assert get_container() is not c1

    def test_set_container(self) -> None:
        c = ServiceContainer(config=cfgmod.Config(packages_enabled=False))
        set_container(c)
        assert get_container() is c
