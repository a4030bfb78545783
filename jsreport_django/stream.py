"""
Buffering stream placed in front of the response body.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Protocol


logger = logging.getLogger(__name__)


class ResponseWriter(Protocol):
    """Destination for the transformed output."""

    def write(self, data: bytes) -> None:
        ...


class JsReportStream:
    """
    Collects everything written to the response and replaces it on close.

    Nothing reaches the underlying writer until close() has finished the
    transform. close() runs the transform at most once; the original body
    is discarded as soon as it starts.

    Usage:
        stream = JsReportStream(writer, transform, charset='utf-8')
        stream.write(b'<html>...')
        await stream.close()
    """

    def __init__(
        self,
        writer: ResponseWriter,
        transform: Callable[[str], Awaitable[bytes]],
        charset: Optional[str] = None,
    ):
        """
        Args:
            writer: Underlying response writer
            transform: Coroutine function turning captured text into output bytes
            charset: Encoding of the captured body (defaults to utf-8)
        """
        self._writer = writer
        self._transform = transform
        self._charset = charset or 'utf-8'
        self._buffer: Optional[List[bytes]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> None:
        if self._closed:
            raise ValueError("write to closed JsReportStream")
        if isinstance(data, str):
            data = data.encode(self._charset)
        self._buffer.append(bytes(data))

    async def close(self) -> None:
        """
        Transform the captured body and write the result.

        Raises:
            Any exception raised by the transform. Nothing is written in
            that case.
        """
        if self._closed:
            return
        self._closed = True

        text = b''.join(self._buffer).decode(self._charset, errors='replace')
        self._buffer = None
        logger.debug(f"Captured {len(text)} characters of response body")

        output = await self._transform(text)
        self._writer.write(output)
