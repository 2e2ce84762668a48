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
"""Errors raised when consuming a firmware package.

All errors are raised chained to the underlying cause.
"""

from __future__ import annotations


class FirmwarePackageError(Exception):
    """Base error for all firmware package related failures."""


class PackageSourceError(FirmwarePackageError):
    """The backing medium of the package cannot be accessed."""


class EntryNotFoundError(FirmwarePackageError):
    """A named entry is not present in the package."""

    def __init__(self, msg: str, *, role: str, entry_name: str) -> None:
        super().__init__(msg)
        self.role = role
        self.entry_name = entry_name


class PackageReadError(FirmwarePackageError):
    """Failed to read an entry from the package, or to write it to the sink."""


class ManifestDecodeError(FirmwarePackageError, ValueError):
    """The manifest is not a JSON object of the expected shape."""


class ManifestValidationError(FirmwarePackageError, ValueError):
    """A required field of the manifest is missing or invalid."""

    def __init__(self, msg: str, *, field: str) -> None:
        super().__init__(msg)
        self.field = field
