from __future__ import annotations

import json
from enum import Enum
from typing import Sequence

from .errors import ErrorCode, configError


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def parseOutputFormat(value: str | OutputFormat) -> OutputFormat:
    """
    Назначение:
        Нормализует формат вывода (text|json, регистр не важен).
    """
    if isinstance(value, OutputFormat):
        return value
    normalized = (value or "").strip().lower()
    try:
        return OutputFormat(normalized)
    except ValueError:
        raise configError(
            ErrorCode.INVALID_OUTPUT_FORMAT,
            f"Unsupported output format: {value}",
            allowed=[f.value for f in OutputFormat],
        ) from None


def renderIds(ids: Sequence[str], fmt: OutputFormat) -> str:
    """
    Назначение:
        Рендерит список идентификаторов для stdout.

    Выходные данные:
        str
            text: по одному идентификатору на строку (пустая строка для пустого списка);
            json: JSON-массив с отступом 2, non-ASCII без экранирования.
    """
    if fmt == OutputFormat.JSON:
        return json.dumps(list(ids), ensure_ascii=False, indent=2)
    return "\n".join(ids)


def renderCount(count: int, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.JSON:
        return json.dumps({"count": count})
    return str(count)
