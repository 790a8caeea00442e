import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from vhostctl.core.exceptions import UsageError, ValidationError

DOMAIN_PATTERN = r"^[A-Za-z0-9.-]+$"


class Action(str, Enum):
    """操作类型"""
    create = "create"
    delete = "delete"


class VirtualHostRequest(BaseModel):
    """虚拟主机请求"""
    action: Action
    domain: str = Field(pattern=DOMAIN_PATTERN)
    root_override: Optional[str] = None

    @field_validator("domain")
    @classmethod
    def domain_has_name(cls, v: str) -> str:
        # "." or "..." would resolve to the web root itself
        if not re.search(r"[A-Za-z0-9]", v):
            raise ValueError("domain needs at least one letter or digit")
        return v

    @classmethod
    def from_args(
        cls,
        action: Optional[str],
        domain: Optional[str],
        root_override: Optional[str] = None
    ) -> "VirtualHostRequest":
        """
        从命令行参数构建请求

        Action and domain are both required; a missing value or an unknown
        action is a usage error. A domain with characters outside
        ``[A-Za-z0-9.-]``, or with no letter or digit at all, is a validation
        error. Nothing is touched on disk.
        """
        if not action or not domain:
            raise UsageError("Action and domain are required")
        if action not in {a.value for a in Action}:
            raise UsageError("Action must be 'create' or 'delete'")
        try:
            return cls(action=action, domain=domain, root_override=root_override or None)
        except PydanticValidationError:
            raise ValidationError(
                f"Invalid domain {domain!r}: use letters, digits, '.' and '-' "
                f"with at least one letter or digit"
            )


class VhostResponse(BaseModel):
    """虚拟主机操作响应"""
    success: bool
    message: str
    data: Optional[dict] = None
