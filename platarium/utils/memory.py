"""Scoped ownership of secret byte buffers."""

from types import TracebackType
from typing import Optional, Type, Union

from ..exceptions import ErrorKind, PlatariumError

__all__ = ["SecretBuffer"]


class SecretBuffer:
    """
    Mutable secret that is zeroed when its scope ends.

    Use as a context manager; the buffer is wiped on normal exit and when an
    exception propagates out of the ``with`` block.

    Only the buffer owned here can be cleared. Immutable ``bytes`` copies
    handed out by :meth:`bytes` live until garbage collection, so callers
    should keep them short-lived.

    Example:
        >>> with SecretBuffer(seed) as secret:
        ...     use(secret.view)
    """

    def __init__(self, data: Union[bytes, bytearray]) -> None:
        # A bytearray is adopted in place so the caller's buffer is the one wiped
        self._buffer = data if isinstance(data, bytearray) else bytearray(data)
        self._wiped = False

    @property
    def view(self) -> bytearray:
        """Underlying buffer."""
        if self._wiped:
            raise PlatariumError(ErrorKind.INVALID_ARGUMENT, "Secret buffer was already wiped")
        return self._buffer

    def bytes(self) -> bytes:
        """Immutable copy of the secret."""
        return bytes(self.view)

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        """Overwrite every byte with zero."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._wiped = True

    def __len__(self) -> int:
        return len(self._buffer)

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.wipe()

    def __repr__(self) -> str:
        state = "wiped" if self._wiped else "live"
        return f"SecretBuffer({len(self._buffer)} bytes, {state})"
