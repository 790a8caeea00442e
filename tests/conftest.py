import os
from typing import Callable, Dict, List, Tuple

import pytest

from vhostctl.core.config import Settings
from vhostctl.core.exceptions import CommandError
from vhostctl.services import ApacheService, HostsFile, NginxService

HOSTS_CONTENT = "127.0.0.1\tlocalhost\n::1\tlocalhost ip6-localhost\n"


class FakeRunner:
    """记录命令调用, 按前缀模拟失败或副作用"""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.failures: Dict[Tuple[str, ...], str] = {}
        self.effects: Dict[Tuple[str, ...], Callable[[List[str]], None]] = {}

    def fail(self, *prefix, message="command failed"):
        self.failures[tuple(prefix)] = message

    def on(self, *prefix, effect):
        self.effects[tuple(prefix)] = effect

    def called(self, *prefix) -> bool:
        return any(tuple(call[:len(prefix)]) == prefix for call in self.calls)

    async def __call__(self, args, check=True, timeout=None):
        args = list(args)
        self.calls.append(args)
        for prefix, message in self.failures.items():
            if tuple(args[:len(prefix)]) == prefix:
                raise CommandError(" ".join(args), message, 1)
        for prefix, effect in self.effects.items():
            if tuple(args[:len(prefix)]) == prefix:
                effect(args)
        return ""


@pytest.fixture(autouse=True)
def sudo_user(monkeypatch):
    monkeypatch.setenv("SUDO_USER", "alice")


@pytest.fixture
def settings(tmp_path):
    for name in ("www", "nginx/sites-available", "nginx/sites-enabled",
                 "apache2/sites-available", "apache2/sites-enabled"):
        (tmp_path / name).mkdir(parents=True)
    hosts = tmp_path / "hosts"
    hosts.write_text(HOSTS_CONTENT)
    return Settings(
        WWW_ROOT=str(tmp_path / "www"),
        HOSTS_FILE=str(hosts),
        NGINX_SITES_AVAILABLE=str(tmp_path / "nginx/sites-available"),
        NGINX_SITES_ENABLED=str(tmp_path / "nginx/sites-enabled"),
        APACHE_SITES_AVAILABLE=str(tmp_path / "apache2/sites-available"),
        APACHE_SITES_ENABLED=str(tmp_path / "apache2/sites-enabled"),
    )


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def hosts(settings):
    return HostsFile(settings.HOSTS_FILE)


@pytest.fixture
def nginx_service(settings, runner):
    return NginxService(settings=settings, runner=runner)


@pytest.fixture
def apache_runner(settings, runner):
    """模拟 a2ensite / a2dissite 对 sites-enabled 的修改"""
    def a2ensite(args):
        os.symlink(
            os.path.join(settings.APACHE_SITES_AVAILABLE, args[1]),
            os.path.join(settings.APACHE_SITES_ENABLED, args[1])
        )

    def a2dissite(args):
        os.remove(os.path.join(settings.APACHE_SITES_ENABLED, args[1]))

    runner.on("a2ensite", effect=a2ensite)
    runner.on("a2dissite", effect=a2dissite)
    return runner


@pytest.fixture
def apache_service(settings, apache_runner):
    return ApacheService(settings=settings, runner=apache_runner)
