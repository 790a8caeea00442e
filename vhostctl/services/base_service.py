import os
import shutil
from typing import Callable, Optional, Tuple

import aiofiles

from vhostctl.core.config import Settings, settings as default_settings
from vhostctl.core.exceptions import (
    CommandError,
    ConfigExistsError,
    ConfigInvalidError,
    MissingResourceError,
)
from vhostctl.core.logger import setup_logger
from vhostctl.schemas.vhost import Action, VhostResponse, VirtualHostRequest
from vhostctl.services.hosts_service import HostsFile
from vhostctl.services.server_control import ServerController
from vhostctl.utils.paths import resolve_document_root
from vhostctl.utils.privileges import invoking_user
from vhostctl.utils.shell import run_command

logger = setup_logger(__name__)

PLACEHOLDER_CONTENT = """<?php
// Temporary phpinfo for verification. Remove in production.
phpinfo();
"""


def _decline(prompt: str) -> bool:
    return False


class VirtualHostService:
    """
    虚拟主机服务基类

    Runs the create and delete sequences shared by every server flavour.
    Subclasses supply the config location, the template, enable/disable and
    the server control commands.

    Each step is awaited in order. A failing step raises and leaves the steps
    before it in place; nothing is rolled back.
    """

    flavour = "server"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        runner=None,
        hosts: Optional[HostsFile] = None,
        confirm: Optional[Callable[[str], bool]] = None
    ):
        self.settings = settings or default_settings
        self.runner = runner or run_command
        self.hosts = hosts or HostsFile(self.settings.HOSTS_FILE, self.settings.HOSTS_IP)
        self.confirm = confirm or _decline
        self.controller = ServerController(
            self.runner, self.service_name, self.test_command
        )

    # 子类实现
    @property
    def service_name(self) -> str:
        raise NotImplementedError

    @property
    def test_command(self):
        raise NotImplementedError

    def config_path(self, domain: str) -> str:
        raise NotImplementedError

    def enabled_path(self, domain: str) -> str:
        raise NotImplementedError

    def render_config(self, domain: str, root_dir: str) -> str:
        raise NotImplementedError

    def ownership(self, owner: str) -> Tuple[str, str]:
        raise NotImplementedError

    async def enable_site(self, domain: str):
        raise NotImplementedError

    async def disable_site(self, domain: str):
        raise NotImplementedError

    # 通用流程
    def document_root(self, request: VirtualHostRequest) -> str:
        return resolve_document_root(
            request.domain, request.root_override, self.settings.WWW_ROOT
        )

    def is_enabled(self, domain: str) -> bool:
        path = self.enabled_path(domain)
        return os.path.islink(path) or os.path.exists(path)

    async def execute(self, request: VirtualHostRequest) -> VhostResponse:
        """执行请求的操作"""
        if request.action == Action.create:
            return await self.create_site(request)
        return await self.delete_site(request)

    async def create_site(self, request: VirtualHostRequest) -> VhostResponse:
        """创建站点"""
        domain = request.domain
        root_dir = self.document_root(request)
        logger.info(f"Creating virtual host for {domain} with root {root_dir}")

        await self.ensure_document_root(root_dir)
        await self.set_ownership(root_dir)
        await self.write_placeholder(root_dir)
        config_path = await self.write_config(domain, root_dir)
        await self.enable_site(domain)
        await self.hosts.add_entry(domain)
        await self.reload_after_create(config_path)

        logger.info(f"Complete! Visit http://{domain}")
        return VhostResponse(
            success=True,
            message=f"Virtual host {domain} created",
            data={
                "domain": domain,
                "config_file": config_path,
                "root_path": root_dir
            }
        )

    async def delete_site(self, request: VirtualHostRequest) -> VhostResponse:
        """删除站点"""
        domain = request.domain
        root_dir = self.document_root(request)
        warnings = []
        logger.info(f"Removing virtual host {domain}")

        await self.disable_site(domain)

        config_path = self.config_path(domain)
        try:
            self.remove_config(config_path)
        except MissingResourceError as e:
            logger.warning(e.message)
            warnings.append(e.message)

        await self.hosts.remove_entry(domain)
        await self.reload_after_delete()
        root_removed = self.remove_document_root(root_dir)

        logger.info(f"Complete: {domain} removed")
        return VhostResponse(
            success=True,
            message=f"Virtual host {domain} removed",
            data={
                "domain": domain,
                "config_file": config_path,
                "root_path": root_dir,
                "root_removed": root_removed,
                "warnings": warnings
            }
        )

    async def ensure_document_root(self, root_dir: str):
        if not os.path.isdir(root_dir):
            os.makedirs(root_dir, mode=0o755)
            logger.info(f"Created directory {root_dir}")
        else:
            logger.info(f"Directory already exists: {root_dir}")
        os.chmod(root_dir, 0o755)

    async def set_ownership(self, root_dir: str):
        """
        设置站点目录属主

        The invoking user is tried first; if that chown fails the tree is
        handed to the web server user instead.
        """
        owner = await invoking_user(self.runner)
        user, group = self.ownership(owner)
        try:
            await self.runner(["chown", "-R", f"{user}:{group}", root_dir])
            logger.info(f"Set owner of {root_dir} to {user}:{group}")
        except CommandError as e:
            fallback = f"{self.settings.WEB_USER}:{self.settings.WEB_GROUP}"
            logger.warning(f"chown to {user}:{group} failed ({e.message}), using {fallback}")
            await self.runner(["chown", "-R", fallback, root_dir])
            logger.info(f"Set owner of {root_dir} to {fallback}")

    async def write_placeholder(self, root_dir: str):
        path = os.path.join(root_dir, self.settings.PLACEHOLDER_FILE)
        if os.path.exists(path):
            logger.info(f"{self.settings.PLACEHOLDER_FILE} already present")
            return
        async with aiofiles.open(path, 'w') as f:
            await f.write(PLACEHOLDER_CONTENT)
        logger.info(f"Added {self.settings.PLACEHOLDER_FILE} to {root_dir}")

    async def write_config(self, domain: str, root_dir: str) -> str:
        """写入站点配置, 已存在时拒绝覆盖"""
        config_path = self.config_path(domain)
        if os.path.lexists(config_path):
            raise ConfigExistsError(config_path)

        async with aiofiles.open(config_path, 'w') as f:
            await f.write(self.render_config(domain, root_dir))
        logger.info(f"Wrote {self.flavour} config to {config_path}")
        return config_path

    def remove_config(self, config_path: str):
        if not os.path.lexists(config_path):
            raise MissingResourceError(f"{self.flavour} config", config_path)
        os.remove(config_path)
        logger.info(f"Removed {config_path}")

    async def reload_after_create(self, config_path: str):
        ok, output = await self.controller.config_test()
        if not ok:
            raise ConfigInvalidError(config_path, output)
        await self.controller.reload()

    async def reload_after_delete(self):
        """
        删除后重载

        A failing config test here is usually some other site's config. The
        server is restarted anyway so it stops serving the removed host.
        """
        ok, _ = await self.controller.config_test()
        if ok:
            await self.controller.reload()
            return
        try:
            await self.controller.restart()
        except CommandError as e:
            logger.error(f"Restart of {self.service_name} failed: {e.message}")
        else:
            logger.info(f"Attempted to restart {self.service_name}")

    def remove_document_root(self, root_dir: str) -> bool:
        if not os.path.isdir(root_dir):
            logger.info(f"Webroot not found: {root_dir}")
            return False
        if os.path.normpath(root_dir) == os.path.normpath(self.settings.WWW_ROOT):
            logger.warning(f"Refusing to delete the web root itself: {root_dir}")
            return False
        if not self.confirm(f"Delete webroot {root_dir}?"):
            logger.info(f"Kept webroot {root_dir}")
            return False
        shutil.rmtree(root_dir)
        logger.info(f"Removed webroot {root_dir}")
        return True
