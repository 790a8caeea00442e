import os
from typing import Optional

from vhostctl.core.exceptions import CommandError, NotPrivilegedError
from vhostctl.core.logger import setup_logger
from vhostctl.utils.shell import run_command

logger = setup_logger(__name__)


def require_root():
    """确保以root运行"""
    if os.geteuid() != 0:
        raise NotPrivilegedError()


async def invoking_user(runner=None) -> str:
    """获取通过sudo调用脚本的真实用户"""
    owner: Optional[str] = os.environ.get("SUDO_USER")
    if owner:
        return owner
    runner = runner or run_command
    try:
        owner = await runner(["logname"])
    except CommandError as e:
        logger.debug(f"logname unavailable: {e}")
        owner = None
    return owner or "root"
