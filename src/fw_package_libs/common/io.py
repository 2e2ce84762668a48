# Copyright 2025 TIER IV, INC. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Common shared helpers for IO.

The package consumer scans the tar archive in a forward-only manner, so the
    underlying byte source must be re-created from offset zero for each scan.
    `RewindableSource` provides this over either a file on disk or an in-memory
    buffer.
"""

from __future__ import annotations

import io
from abc import abstractmethod
from pathlib import Path
from typing import IO, Union

from typing_extensions import Self

StrOrPath = Union[str, Path]
BytesLike = Union[bytes, bytearray, memoryview]


class RewindableSource:
    """A forward-only byte reader that can be reset to offset zero.

    `read` is only allowed after the first call to `reopen`.

    This class is NOT safe for multi-thread, each instance holds at most
        one open reader at a time.
    """

    def __init__(self) -> None:
        self._reader: IO[bytes] | None = None
        self._closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @abstractmethod
    def _open_reader(self) -> IO[bytes]:
        """Create a new reader positioned at offset zero of the backing medium."""
        raise NotImplementedError

    @property
    def closed(self) -> bool:
        return self._closed

    def reopen(self) -> Self:
        """Discard the current reader and start over from offset zero."""
        if self._closed:
            raise ValueError(f"{self!r} is already closed")
        self._release_reader()
        self._reader = self._open_reader()
        return self

    def read(self, size: int = -1) -> bytes:
        if self._reader is None:
            raise ValueError(f"{self!r} is not opened, call reopen first")
        return self._reader.read(size)

    def _release_reader(self) -> None:
        if self._reader is not None:
            _reader, self._reader = self._reader, None
            _reader.close()

    def close(self) -> None:
        self._release_reader()
        self._closed = True


class FileSource(RewindableSource):
    """Rewindable source backed by a file on disk.

    The file is opened again on every `reopen`, the previous file handle
        is closed before that. OSError from opening the file is not handled here.
    """

    def __init__(self, fpath: StrOrPath) -> None:
        super().__init__()
        self._fpath = Path(fpath)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._fpath}>"

    @property
    def fpath(self) -> Path:
        return self._fpath

    def _open_reader(self) -> IO[bytes]:
        return open(self._fpath, "rb")


class BufferSource(RewindableSource):
    """Rewindable source backed by an in-memory buffer.

    The buffer is never modified. `bytes` input is shared with the caller,
        other bytes-like input is copied once at construction.
    """

    def __init__(self, data: BytesLike) -> None:
        super().__init__()
        self._data = data if isinstance(data, bytes) else bytes(data)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {len(self._data)} bytes>"

    @property
    def size(self) -> int:
        return len(self._data)

    def _open_reader(self) -> IO[bytes]:
        return io.BytesIO(self._data)


def remove_file(_fpath: Path, *, ignore_error: bool = True) -> None:
    """Remove the regular file at <_fpath>, directory is never removed."""
    try:
        _fpath.unlink(missing_ok=True)
    except Exception:
        if not ignore_error:
            raise
