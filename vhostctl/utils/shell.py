import asyncio
from typing import Sequence

from vhostctl.core.config import settings
from vhostctl.core.exceptions import CommandError
from vhostctl.core.logger import setup_logger

logger = setup_logger(__name__)


async def run_command(
    args: Sequence[str],
    check: bool = True,
    timeout: int = None
) -> str:
    """
    异步执行外部命令

    Args:
        args: 命令及参数
        check: 是否检查返回值
        timeout: 超时时间(秒)

    Returns:
        命令输出
    """
    command = " ".join(args)
    timeout = timeout or settings.COMMAND_TIMEOUT
    try:
        logger.debug(f"Running: {command}")
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise CommandError(command, f"timed out after {timeout}s")

        if check and process.returncode != 0:
            error_msg = stderr.decode().strip() or stdout.decode().strip()
            raise CommandError(command, error_msg, process.returncode)

        return stdout.decode().strip()

    except FileNotFoundError as e:
        logger.error(f"Command not found: {command}")
        raise CommandError(command, str(e))
    except CommandError as e:
        logger.error(str(e))
        raise
