import os
import shutil
from typing import List

import aiofiles

from vhostctl.core.logger import setup_logger

logger = setup_logger(__name__)


def _host_tokens(line: str) -> List[str]:
    """返回一行中 '#' 之前的所有字段"""
    return line.split("#", 1)[0].split()


class HostsFile:
    """
    hosts文件管理

    Line-oriented edits of a hosts file. Only lines that carry the managed
    domain are ever added or removed; everything else is written back
    untouched.
    """

    def __init__(self, path: str = "/etc/hosts", ip: str = "127.0.0.1"):
        self.path = path
        self.ip = ip

    @property
    def backup_path(self) -> str:
        return f"{self.path}.bak"

    async def read_lines(self) -> List[str]:
        if not os.path.exists(self.path):
            return []
        async with aiofiles.open(self.path, 'r') as f:
            content = await f.read()
        return content.splitlines(keepends=True)

    async def write_lines(self, lines: List[str]):
        async with aiofiles.open(self.path, 'w') as f:
            await f.write("".join(lines))

    def has_entry(self, lines: List[str], domain: str) -> bool:
        return any(_host_tokens(line) == [self.ip, domain] for line in lines)

    async def add_entry(self, domain: str) -> bool:
        """添加回环地址记录, 已存在时不重复添加"""
        lines = await self.read_lines()
        if self.has_entry(lines, domain):
            logger.info(f"{self.path} already contains {domain}")
            return False

        if lines and not lines[-1].endswith("\n"):
            lines[-1] += "\n"
        lines.append(f"{self.ip}\t{domain}\n")
        await self.write_lines(lines)
        logger.info(f"Added {domain} to {self.path}")
        return True

    async def remove_entry(self, domain: str) -> int:
        """
        删除包含该域名的记录

        A line is dropped only when one of its fields equals the domain, so
        removing ``example.test`` leaves ``www.example.test`` and
        ``example.testing`` alone. The previous file is kept as ``.bak``.
        """
        if not os.path.exists(self.path):
            logger.info(f"{self.path} not found, nothing to remove")
            return 0

        lines = await self.read_lines()
        kept = [line for line in lines if domain not in _host_tokens(line)]
        removed = len(lines) - len(kept)

        shutil.copy2(self.path, self.backup_path)
        await self.write_lines(kept)
        logger.info(
            f"Removed {removed} line(s) for {domain} from {self.path}. "
            f"Backup saved to {self.backup_path}"
        )
        return removed
