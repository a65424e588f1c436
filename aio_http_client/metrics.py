import abc

from .base import Request


class MetricsCollector(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def collect(self, request: Request, outcome: str, elapsed_seconds: float) -> None:
        """Record one finished ``send``.

        ``outcome`` is the response status code, the kind of the raised HttpError or ``cancelled``.
        """


class NoopMetricsCollector(MetricsCollector):
    __slots__ = ()

    def collect(self, request: Request, outcome: str, elapsed_seconds: float) -> None:
        pass


NOOP_METRICS_COLLECTOR = NoopMetricsCollector()
