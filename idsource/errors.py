from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    """
    Назначение:
        Коды ошибок конфигурации и входных параметров CLI.
    """

    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_LOG_LEVEL = "INVALID_LOG_LEVEL"
    INVALID_OUTPUT_FORMAT = "INVALID_OUTPUT_FORMAT"
    INVALID_BOOLEAN = "INVALID_BOOLEAN"


@dataclass
class AppError(Exception):
    """
    Унифицированная ошибка приложения.
    """

    category: str
    code: str
    message: str
    retryable: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details or {},
        }


def configError(code: ErrorCode, message: str, **details: Any) -> AppError:
    return AppError(category="config", code=code.value, message=message, details=dict(details))


__all__ = ["AppError", "ErrorCode", "configError"]
