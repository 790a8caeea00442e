from typing import Sequence, Tuple

from vhostctl.core.exceptions import CommandError
from vhostctl.core.logger import setup_logger

logger = setup_logger(__name__)


class ServerController:
    """Web服务控制: 配置测试、重载、重启"""

    def __init__(self, runner, service: str, test_command: Sequence[str]):
        self.runner = runner
        self.service = service
        self.test_command = list(test_command)

    async def config_test(self) -> Tuple[bool, str]:
        """测试配置语法, 返回 (是否通过, 错误输出)"""
        try:
            await self.runner(self.test_command)
            return True, ""
        except CommandError as e:
            logger.error(f"{self.service} configuration test failed")
            return False, e.message

    async def restart(self):
        """重启服务"""
        await self.runner(["systemctl", "restart", self.service])
        logger.info(f"{self.service} restarted")

    async def reload(self):
        """重载服务, 失败时改为重启"""
        try:
            await self.runner(["systemctl", "reload", self.service])
            logger.info(f"{self.service} reloaded")
        except CommandError as e:
            logger.warning(f"{self.service} reload failed ({e.message}), restarting instead")
            await self.restart()
