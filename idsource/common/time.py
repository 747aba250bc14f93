from __future__ import annotations


def getDurationMs(startMonotonic: float, endMonotonic: float) -> int:
    """
    Назначение:
        Считает длительность в миллисекундах по monotonic timestamps.

    Входные данные:
        startMonotonic: float
        endMonotonic: float

    Выходные данные:
        int
            Длительность в миллисекундах.
    """
    return int((endMonotonic - startMonotonic) * 1000)
