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
"""Shared test fixtures for fw-package-libs tests."""

from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Any, Callable

import pytest

FIRMWARE_BINARY = bytes([0xDE, 0xAD, 0xBE, 0xEF])
FIRMWARE_MANIFEST: dict[str, Any] = {
    "name": "fw1",
    "version": "1.0",
    "file": "image.bin",
    "compatibility": {"hw": "boardA", "major_revs": ["1"]},
}


def build_tar(entries) -> bytes:
    """Build a plain tar archive in memory from (name, contents) pairs.

    dict contents are dumped as JSON, str contents are encoded as utf-8.
    """
    _output = io.BytesIO()
    with tarfile.open(fileobj=_output, mode="w") as tar:
        for _name, _contents in entries:
            if isinstance(_contents, dict):
                _contents = json.dumps(_contents)
            if isinstance(_contents, str):
                _contents = _contents.encode("utf-8")
            _info = tarfile.TarInfo(name=_name)
            _info.size = len(_contents)
            tar.addfile(_info, io.BytesIO(_contents))
    return _output.getvalue()


@pytest.fixture
def manifest_dict() -> dict[str, Any]:
    """Provide a deep copy of the sample manifest, free to be modified."""
    return json.loads(json.dumps(FIRMWARE_MANIFEST))


@pytest.fixture
def make_tar() -> Callable[..., bytes]:
    """Provide the factory that builds tar archive from (name, contents) pairs."""
    return build_tar


@pytest.fixture
def package_bytes() -> bytes:
    """Provide a valid firmware package in memory."""
    return build_tar(
        [
            ("./manifest.json", FIRMWARE_MANIFEST),
            ("./image.bin", FIRMWARE_BINARY),
        ]
    )


@pytest.fixture
def package_file(tmp_path: Path, package_bytes: bytes) -> Path:
    """Provide a valid firmware package on disk."""
    _package = tmp_path / "fw1.tar"
    _package.write_bytes(package_bytes)
    return _package


@pytest.fixture
def firmware_binary() -> bytes:
    """Provide the firmware binary stored in the sample package."""
    return FIRMWARE_BINARY
