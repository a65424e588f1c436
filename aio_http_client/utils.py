import abc
import time


class Closable(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    async def close(self) -> None: ...


def perf_counter() -> float:
    return time.perf_counter()


def perf_counter_elapsed(started_at: float) -> float:
    return max(0.0, time.perf_counter() - started_at)
