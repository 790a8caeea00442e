from typing import Optional


class VhostError(Exception):
    """虚拟主机操作错误"""
    exit_code = 1

    def __init__(self, message: str = "虚拟主机操作失败"):
        self.message = message
        super().__init__(self.message)


class NotPrivilegedError(VhostError, PermissionError):
    """需要root权限"""

    def __init__(self, message: str = "This script must be run as root (use sudo)"):
        super().__init__(message)


class UsageError(VhostError):
    """调用参数错误"""
    exit_code = 2


class ValidationError(VhostError):
    """域名格式错误"""
    pass


class ConfigExistsError(VhostError):
    """配置文件已存在"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config already exists at {path}")


class AlreadyEnabledError(VhostError):
    """站点已启用"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Site already enabled: {path}")


class ConfigInvalidError(VhostError):
    """配置测试失败"""

    def __init__(self, path: str, output: str = ""):
        self.path = path
        self.output = output
        message = f"Configuration test failed. Please check {path}"
        if output:
            message = f"{message}\n{output}"
        super().__init__(message)


class MissingResourceError(VhostError):
    """删除目标不存在"""

    def __init__(self, what: str, path: str):
        self.path = path
        super().__init__(f"{what} not found: {path}")


class CommandError(VhostError):
    """外部命令执行失败"""

    def __init__(self, command: str, message: str, returncode: Optional[int] = None):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command failed ({command}): {message}")
