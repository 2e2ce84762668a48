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
"""Manifest of firmware package.

The manifest is the `manifest.json` file at the root of the firmware package,
    a JSON object with the following required fields:

    {
      "name": "<firmware name>",
      "version": "<firmware version>",
      "file": "<path of the firmware binary in the package>",
      "compatibility": {
        "hw": "<hardware identifier>",
        "major_revs": ["<major hardware revision>", ...]
      }
    }

Any other fields are kept as it is, but not interpreted by this lib.
"""

from __future__ import annotations

import json
from pathlib import PurePosixPath
from typing import Any, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from fw_package_libs.v1.errors import ManifestDecodeError, ManifestValidationError

# NOTE: the order matters, only the first missing field is reported.
REQUIRED_FIELDS = (
    "name",
    "version",
    "file",
    "compatibility.hw",
    "compatibility.major_revs",
)


class _ManifestModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _null_as_absent(cls, data: Any) -> Any:
        """Treat JSON null of a declared field the same as an absent field.

        Extra fields are kept as it is, including null ones.
        """
        if isinstance(data, dict):
            return {
                k: v
                for k, v in data.items()
                if not (v is None and k in cls.model_fields)
            }
        return data


class Compatibility(_ManifestModel):
    hw: str = ""
    major_revs: Tuple[str, ...] = ()

    @field_validator("major_revs", mode="before")
    @classmethod
    def _null_rev_as_empty(cls, data: Any) -> Any:
        if isinstance(data, list):
            return ["" if _rev is None else _rev for _rev in data]
        return data


class FirmwareManifest(_ManifestModel):
    name: str = ""
    version: str = ""
    file: str = ""
    compatibility: Compatibility = Field(default_factory=Compatibility)

    @classmethod
    def parse_manifest(cls, _input: Union[str, bytes]) -> Self:
        """Decode and validate the raw contents of a `manifest.json`.

        Raises:
            ManifestDecodeError: the input is not a JSON object of the expected shape.
            ManifestValidationError: a required field is missing or invalid.
        """
        try:
            _raw = json.loads(_input)
        except (ValueError, RecursionError) as e:
            raise ManifestDecodeError(f"can't decode manifest: {e}") from e

        if not isinstance(_raw, dict):
            raise ManifestDecodeError(
                f"can't decode manifest: expect a JSON object, get {type(_raw).__name__}"
            )

        try:
            _manifest = cls.model_validate(_raw)
        except ValidationError as e:
            raise ManifestDecodeError(f"can't decode manifest: {e}") from e

        _manifest.check_required_fields()
        return _manifest

    def _get_field(self, _key: str) -> Any:
        _obj = self
        for _attr in _key.split("."):
            _obj = getattr(_obj, _attr)
        return _obj

    def check_required_fields(self) -> None:
        for _key in REQUIRED_FIELDS:
            if not self._get_field(_key):
                raise ManifestValidationError(
                    f'missing "{_key}" in manifest', field=_key
                )

        # the firmware binary must be located inside the package
        _file = PurePosixPath(self.file)
        if _file.is_absolute() or ".." in _file.parts:
            raise ManifestValidationError(
                f'invalid "file" in manifest: {self.file} points outside the package',
                field="file",
            )

    def is_compatible_with(self, hw: str, major_rev: str) -> bool:
        """Check whether this firmware targets <hw> with major revision <major_rev>.

        Values are compared as plain strings.
        """
        _compat = self.compatibility
        return _compat.hw == hw and major_rev in _compat.major_revs

    def export_manifest(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(indent=indent)
