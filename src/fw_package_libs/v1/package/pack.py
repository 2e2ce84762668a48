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
"""Helper functions for packing firmware package.

The output package is a plain tar archive with the following constrains:
1. the `./manifest.json` is the first entry, the firmware binary is the second entry.
2. all entries have fixed permission bit, owner and mtime set.

The package build is reproducible, the same package will always be
    generated from the same manifest and firmware binary.
"""

from __future__ import annotations

import io
import logging
import os
import tarfile
from pathlib import Path
from typing import IO

from fw_package_libs.common.io import BytesLike, StrOrPath, remove_file
from fw_package_libs.v1.consts import (
    DEFAULT_MTIME,
    DEFAULT_READ_SIZE,
    FILE_PERMISSION,
    MANIFEST_FNAME,
)
from fw_package_libs.v1.manifest.schema import FirmwareManifest
from fw_package_libs.v1.package.consumer import entry_name_of

logger = logging.getLogger(__name__)


def _regular_file_info(arcname: str, size: int) -> tarfile.TarInfo:
    _info = tarfile.TarInfo(name=arcname)
    _info.type = tarfile.REGTYPE
    _info.size = size
    _info.mtime = DEFAULT_MTIME
    _info.mode = FILE_PERMISSION
    _info.uid = _info.gid = 0
    _info.uname = _info.gname = ""
    return _info


def add_file(
    tar: tarfile.TarFile, src: IO[bytes], arcname: str, *, size: int
) -> None:
    """Add <size> bytes read from <src> as a regular file entry to the package."""
    tar.addfile(_regular_file_info(arcname, size), src)


def _write_package(
    tar: tarfile.TarFile, manifest: FirmwareManifest, binary: IO[bytes], size: int
) -> None:
    # the manifest MUST be validated before being packed
    manifest.check_required_fields()

    _manifest_raw = manifest.export_manifest().encode("utf-8")
    add_file(
        tar,
        io.BytesIO(_manifest_raw),
        entry_name_of(MANIFEST_FNAME),
        size=len(_manifest_raw),
    )
    add_file(tar, binary, entry_name_of(manifest.file), size=size)


def pack_firmware_package(
    manifest: FirmwareManifest,
    binary: StrOrPath,
    output: StrOrPath,
    *,
    rw_chunk_size: int = DEFAULT_READ_SIZE,
) -> Path:
    """Pack firmware package from <manifest> and firmware binary at <binary> to <output>.

    The firmware binary is stored with the `file` field of <manifest> as name,
        the file name of <binary> is not used.
    """
    output = Path(output)
    with open(binary, "rb") as _src:
        _size = os.fstat(_src.fileno()).st_size
        _tar = tarfile.open(output, mode="w", copybufsize=rw_chunk_size)
        try:
            with _tar:
                _write_package(_tar, manifest, _src, _size)
        except Exception:
            remove_file(output)
            raise

    logger.debug(f"packed {manifest.name} {manifest.version} to {output}")
    return output


def pack_firmware_package_to_bytes(
    manifest: FirmwareManifest, binary: BytesLike
) -> bytes:
    """Pack firmware package in memory from <manifest> and firmware binary contents."""
    _output = io.BytesIO()
    with tarfile.open(fileobj=_output, mode="w") as _tar:
        _binary = bytes(binary)
        _write_package(_tar, manifest, io.BytesIO(_binary), len(_binary))
    return _output.getvalue()
