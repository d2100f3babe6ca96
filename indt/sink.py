from typing import Protocol, runtime_checkable


# write() may return None, which is taken to mean the whole chunk was accepted
@runtime_checkable
class Sink(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


@runtime_checkable
class TextSink(Protocol):
    def write(self, data: str, /) -> int | None: ...
