from __future__ import annotations

import sys
from typing import BinaryIO, Iterator, Sequence, TextIO

PLACEHOLDER = "-"


def shouldReadStream(explicit: Sequence[str]) -> bool:
    """
    Назначение:
        Решает, нужно ли читать идентификаторы из потока вместо аргументов.

    Входные данные:
        explicit: Sequence[str]
            Идентификаторы, переданные явно (например, аргументы команды).

    Выходные данные:
        bool
            True, если список пуст или состоит ровно из одного '-'.
    """
    if len(explicit) == 0:
        return True
    return len(explicit) == 1 and explicit[0] == PLACEHOLDER


def _binaryBuffer(stream: TextIO) -> BinaryIO | None:
    try:
        return getattr(stream, "buffer", None)
    except ValueError:
        # detached TextIOWrapper
        return None


def _iterBinaryLines(buffer: BinaryIO) -> Iterator[str]:
    while True:
        try:
            raw = buffer.readline()
        except (OSError, ValueError):
            return
        if not raw:
            return
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError:
            return


def iterStreamLines(stream: TextIO) -> Iterator[str]:
    """
    Назначение:
        Лениво отдаёт строки потока до EOF.

    Поведение:
        - Если у потока есть бинарный .buffer (sys.stdin, TextIOWrapper), строки
          читаются байтами и декодируются как UTF-8 по одной: невалидная строка
          завершает чтение, строки до неё сохраняются.
        - Ошибка чтения (OSError, ValueError, в т.ч. UnicodeDecodeError и
          чтение закрытого потока) завершает последовательность так же, как EOF.
        - Ошибка не пробрасывается и не логируется, уже прочитанные строки сохраняются.
    """
    buffer = _binaryBuffer(stream)
    if buffer is not None:
        yield from _iterBinaryLines(buffer)
        return
    while True:
        try:
            line = stream.readline()
        except (OSError, ValueError):
            return
        if not line:
            return
        yield line


def readIdsFromStream(stream: TextIO) -> list[str]:
    """
    Назначение:
        Читает идентификаторы построчно: trim, пустые строки отбрасываются.
    """
    ids: list[str] = []
    for line in iterStreamLines(stream):
        value = line.strip()
        if value:
            ids.append(value)
    return ids


def resolveIds(explicit: Sequence[str], stream: TextIO | None = None) -> list[str]:
    """
    Назначение:
        Возвращает итоговый список идентификаторов: явные аргументы или stdin.

    Входные данные:
        explicit: Sequence[str]
            Явные идентификаторы. Пустой список или ['-'] включают чтение потока.
        stream: TextIO | None
            Источник строк; по умолчанию sys.stdin на момент вызова.

    Выходные данные:
        list[str]
            Новый список. Явные значения возвращаются без изменений
            (пустые строки, пробелы, дубликаты и порядок сохраняются).

    Алгоритм:
        - shouldReadStream(explicit) -> readIdsFromStream(stream or sys.stdin)
        - иначе list(explicit); поток при этом не трогается.
    """
    if shouldReadStream(explicit):
        return readIdsFromStream(stream if stream is not None else sys.stdin)
    return list(explicit)


__all__ = ["PLACEHOLDER", "iterStreamLines", "readIdsFromStream", "resolveIds", "shouldReadStream"]
