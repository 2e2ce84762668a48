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
"""Read firmware package without unpacking the whole package.

Firmware package is a plain(uncompressed) tar archive, which contains:
1. the manifest, stored as `./manifest.json`.
2. the firmware binary, stored as `./<file>` where `<file>` is specified in the manifest.

The entries are located by scanning the tar archive from the start, for each lookup.
"""

from __future__ import annotations

import logging
import tarfile
from contextlib import closing
from os import PathLike
from pathlib import Path
from typing import IO, Generator, Union

from typing_extensions import Self

from fw_package_libs.common.io import (
    BufferSource,
    BytesLike,
    FileSource,
    RewindableSource,
    StrOrPath,
    remove_file,
)
from fw_package_libs.v1.consts import DEFAULT_READ_SIZE, ENTRY_PREFIX, MANIFEST_FNAME
from fw_package_libs.v1.errors import (
    EntryNotFoundError,
    PackageReadError,
    PackageSourceError,
)
from fw_package_libs.v1.manifest.schema import FirmwareManifest

logger = logging.getLogger(__name__)

MANIFEST_ROLE = "manifest"
BINARY_ROLE = "firmware binary"


def entry_name_of(fname: str) -> str:
    return f"{ENTRY_PREFIX}{fname}"


def open_firmware_package(
    _input: Union[StrOrPath, BytesLike], *, read_chunk_size: int = DEFAULT_READ_SIZE
) -> FirmwarePackageConsumer:
    """Open a firmware package from a file path, or from an in-memory buffer."""
    if isinstance(_input, (str, PathLike)):
        return FirmwarePackageConsumer.from_file(
            _input, read_chunk_size=read_chunk_size
        )
    return FirmwarePackageConsumer.from_bytes(_input, read_chunk_size=read_chunk_size)


class FirmwarePackageConsumer:
    """Helper class for consuming a firmware package.

    The manifest is loaded and validated when the instance is created, if the
        package is not valid, an exception is raised and no instance is returned.

    This class is NOT safe for multi-thread, only one extraction can be
        in progress at a time for one instance.
    """

    def __init__(
        self,
        _source: RewindableSource,
        *,
        read_chunk_size: int = DEFAULT_READ_SIZE,
    ) -> None:
        self._source = _source
        self._chunk_size = read_chunk_size
        try:
            self._manifest = self._load_manifest()
        except Exception:
            _source.close()
            raise

    @classmethod
    def from_file(
        cls, fpath: StrOrPath, *, read_chunk_size: int = DEFAULT_READ_SIZE
    ) -> Self:
        return cls(FileSource(fpath), read_chunk_size=read_chunk_size)

    @classmethod
    def from_bytes(
        cls, data: BytesLike, *, read_chunk_size: int = DEFAULT_READ_SIZE
    ) -> Self:
        return cls(BufferSource(data), read_chunk_size=read_chunk_size)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def manifest(self) -> FirmwareManifest:
        return self._manifest

    @property
    def closed(self) -> bool:
        return self._source.closed

    def close(self) -> None:
        self._source.close()

    def _rewind(self) -> None:
        try:
            self._source.reopen()
        except OSError as e:
            raise PackageSourceError(f"can't open {self._source!r}: {e}") from e

    def _iter_entry(
        self, entry_name: str, *, role: str, desc: str
    ) -> Generator[bytes]:
        """Scan the package from the start, and stream the contents of <entry_name>.

        Only regular file entry with exactly the same name matches.
        """
        self._rewind()
        try:
            with tarfile.open(fileobj=self._source, mode="r|") as _tar:
                for _member in _tar:
                    if _member.name != entry_name or not _member.isfile():
                        continue

                    _entry_reader = _tar.extractfile(_member)
                    assert _entry_reader is not None  # regular file
                    while _chunk := _entry_reader.read(self._chunk_size):
                        yield _chunk
                    return
        except (tarfile.TarError, OSError) as e:
            raise PackageReadError(f"can't untar {desc}: {e!r}") from e

        raise EntryNotFoundError(
            f"can't untar {desc}: {entry_name} not found in package",
            role=role,
            entry_name=entry_name,
        )

    def _load_manifest(self) -> FirmwareManifest:
        _manifest_raw = b"".join(
            self._iter_entry(
                entry_name_of(MANIFEST_FNAME), role=MANIFEST_ROLE, desc=MANIFEST_ROLE
            )
        )
        _manifest = FirmwareManifest.parse_manifest(_manifest_raw)
        logger.debug(
            f"{self._source!r}: loaded manifest for {_manifest.name} {_manifest.version}"
        )
        return _manifest

    @property
    def binary_entry_name(self) -> str:
        return entry_name_of(self._manifest.file)

    def stream_binary(self) -> Generator[bytes]:
        """Stream the firmware binary from the package, chunk by chunk."""
        return self._iter_entry(
            self.binary_entry_name,
            role=BINARY_ROLE,
            desc=f"{BINARY_ROLE} {self._manifest.file}",
        )

    def extract_binary(self, sink: IO[bytes]) -> int:
        """Extract the firmware binary from the package and write it to <sink>.

        Can be called multiple times, each call scans the package from the start.

        Returns:
            The size of the firmware binary written to <sink>.
        """
        _written = 0
        with closing(self.stream_binary()) as _chunks:
            for _chunk in _chunks:
                try:
                    sink.write(_chunk)
                except OSError as e:
                    raise PackageReadError(
                        f"can't untar {BINARY_ROLE} {self._manifest.file}: {e!r}"
                    ) from e
                _written += len(_chunk)

        logger.debug(f"{self._source!r}: extracted {_written} bytes of firmware binary")
        return _written

    def save_binary(self, _save_dst: StrOrPath) -> Path:
        """Extract the firmware binary to <_save_dst>.

        The partially written <_save_dst> is removed if extraction failed.
        """
        with open(_save_dst, "wb") as _dst:
            try:
                self.extract_binary(_dst)
            except Exception:
                _dst.close()
                remove_file(Path(_save_dst))
                raise
        return Path(_save_dst)

    def list_entries(self) -> list[str]:
        """List the names of all entries in the package, in archive order."""
        self._rewind()
        try:
            with tarfile.open(fileobj=self._source, mode="r|") as _tar:
                return [_member.name for _member in _tar]
        except (tarfile.TarError, OSError) as e:
            raise PackageReadError(f"can't list package entries: {e!r}") from e
