import logging
from contextlib import contextmanager
from typing import Generic, Iterable, Iterator, Self, TypeVar

from .errors import IndentUnderflowError
from .sink import Sink, TextSink

logger = logging.getLogger(__name__)

T = TypeVar("T", str, bytes)


class BaseIndentWriter(Generic[T]):
    """Wraps a sink and prefixes every line written through it.

    The prefix is ``unit * depth`` and is sent right before the first
    character of a line reaches the sink, so an empty write or a write that
    continues an unterminated line never emits one. Use :meth:`more` and
    :meth:`less` (or :meth:`indented`) to change the depth.

    ``write`` returns how many of the caller's characters the sink took,
    prefix characters excluded. When the sink takes less than it was
    offered, ``write`` stops there and the line state matches what was
    actually written, so retrying with the unwritten tail is safe.
    """

    newline: T
    default_unit: T

    sink: Sink | TextSink
    unit: T
    depth: int
    at_line_start: bool
    strict: bool
    indent_blank_lines: bool

    def __init__(
        self,
        sink: Sink | TextSink,
        unit: T | None = None,
        *,
        strict: bool = False,
        indent_blank_lines: bool = False,
    ):
        self.sink = sink
        self.unit = self._coerce_unit(self.default_unit if unit is None else unit)
        self.depth = 0
        self.at_line_start = True
        self.strict = strict
        self.indent_blank_lines = indent_blank_lines

        # prefix characters already sent for the line that is about to start
        self._prefix_written = 0

    @classmethod
    def from_style(cls, sink, step: int, symbol: T, **kwargs) -> Self:
        """Build a writer whose unit is ``symbol`` repeated ``step`` times."""
        return cls(sink, symbol * step, **kwargs)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.sink!r}, unit={self.unit!r}, "
            f"depth={self.depth})"
        )

    @property
    def prefix(self) -> T:
        return self.unit * self.depth

    def more(self) -> Self:
        self.depth += 1

        return self

    def less(self) -> Self:
        """Decrease the depth by one.

        At depth 0 this is a no-op, unless the writer was built with
        ``strict=True``, in which case :class:`IndentUnderflowError` is
        raised and the depth stays 0.
        """
        if self.depth == 0:
            if self.strict:
                raise IndentUnderflowError(self.depth)

            logger.debug("less() called at depth 0, staying at 0")
            return self

        self.depth -= 1

        return self

    @contextmanager
    def indented(self, levels: int = 1) -> Iterator[Self]:
        for _ in range(levels):
            self.more()

        try:
            yield self
        finally:
            for _ in range(levels):
                self.less()

    def write(self, data) -> int:
        data = self._coerce(data)
        committed = 0
        pos = 0
        end = len(data)

        try:
            while pos < end:
                if self.at_line_start and not self._write_prefix(data[pos : pos + 1]):
                    break

                nl = data.find(self.newline, pos)
                stop = end if nl == -1 else nl + 1
                n = self._write_chunk(data[pos:stop])
                committed += n
                pos += n

                if pos < stop:
                    break
        except BlockingIOError as exc:
            exc.characters_written = committed + exc.characters_written
            raise

        return committed

    def writeln(self, data: T | None = None) -> int:
        if data is None:
            return self.write(self.newline)

        return self.write(self._coerce(data) + self.newline)

    def writelines(self, lines: Iterable[T]):
        for line in lines:
            self.write(line)

    def flush(self):
        flush = getattr(self.sink, "flush", None)

        if flush is not None:
            flush()

    def _write_prefix(self, first: T) -> bool:
        if not self.depth:
            return True

        if first == self.newline and not self.indent_blank_lines:
            return True

        prefix = self.prefix

        while self._prefix_written < len(prefix):
            pending = prefix[self._prefix_written :]

            try:
                n = self._send(pending)
            except BlockingIOError as exc:
                self._prefix_written += getattr(exc, "characters_written", 0)
                exc.characters_written = 0
                raise

            self._prefix_written += n

            if n < len(pending):
                logger.debug(
                    "sink accepted %d of %d prefix characters", n, len(pending)
                )
                return False

        return True

    def _write_chunk(self, chunk: T) -> int:
        try:
            n = self._send(chunk)
        except BlockingIOError as exc:
            n = getattr(exc, "characters_written", 0)
            exc.characters_written = n
            self._commit(chunk[:n])
            raise

        if n < len(chunk):
            logger.debug("sink accepted %d of %d characters", n, len(chunk))

        self._commit(chunk[:n])

        return n

    def _commit(self, chunk: T):
        if not chunk:
            return

        self._prefix_written = 0
        self.at_line_start = chunk.endswith(self.newline)

    def _send(self, chunk: T) -> int:
        n = self.sink.write(chunk)

        return len(chunk) if n is None else n

    def _coerce(self, data) -> T:
        raise NotImplementedError

    def _coerce_unit(self, unit) -> T:
        return self._coerce(unit)


class IndentWriter(BaseIndentWriter[bytes]):
    """Indenting writer for binary sinks such as ``sys.stdout.buffer``.

    A ``str`` unit is encoded as UTF-8; written data must be bytes-like.
    """

    newline = b"\n"
    default_unit = b"    "

    sink: Sink

    def _coerce(self, data) -> bytes:
        if isinstance(data, bytes):
            return data

        if isinstance(data, (bytearray, memoryview)):
            return bytes(data)

        raise TypeError(
            f"a bytes-like object is required, not '{type(data).__name__}'"
        )

    def _coerce_unit(self, unit) -> bytes:
        if isinstance(unit, str):
            return unit.encode("utf-8")

        return self._coerce(unit)


class IndentTextWriter(BaseIndentWriter[str]):
    """Indenting writer for text sinks, usable as ``print(..., file=writer)``."""

    newline = "\n"
    default_unit = "    "

    sink: TextSink

    def _coerce(self, data) -> str:
        if isinstance(data, str):
            return data

        raise TypeError(f"write() argument must be str, not {type(data).__name__}")
