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
"""Build a firmware package from a manifest and a firmware binary."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fw_package_libs.v1.consts import DEFAULT_READ_SIZE
from fw_package_libs.v1.errors import FirmwarePackageError
from fw_package_libs.v1.manifest.schema import FirmwareManifest
from fw_package_libs.v1.package.pack import pack_firmware_package
from fw_package_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def pack_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    pack_arg_parser = sub_arg_parser.add_parser(
        name="pack",
        help=(_help_txt := "Pack a firmware binary with its manifest into a package"),
        description=_help_txt,
        parents=parent_parser,
    )
    pack_arg_parser.add_argument(
        "--manifest",
        help="The manifest.json describes the firmware binary.",
        required=True,
    )
    pack_arg_parser.add_argument(
        "--binary",
        help="The firmware binary to be packed.",
        required=True,
    )
    pack_arg_parser.add_argument(
        "--output",
        "-o",
        help="Save the firmware package to this file.",
        required=True,
    )
    pack_arg_parser.add_argument(
        "--rw-chunk-size",
        type=int,
        default=DEFAULT_READ_SIZE,
        help="Chunk size in bytes when copying the firmware binary.",
    )
    pack_arg_parser.set_defaults(handler=pack_cmd)


def pack_cmd(args: Namespace) -> None:
    logger.debug(f"calling {pack_cmd.__name__} with {args}")
    manifest_f, binary, output = (
        Path(args.manifest),
        Path(args.binary),
        Path(args.output),
    )
    if not manifest_f.is_file():
        exit_with_err_msg(f"{manifest_f} not found!")
    if not binary.is_file():
        exit_with_err_msg(f"{binary} not found!")

    try:
        _manifest = FirmwareManifest.parse_manifest(manifest_f.read_bytes())
    except FirmwarePackageError as e:
        exit_with_err_msg(f"{manifest_f} is not a valid manifest: {e}")

    print(f"Pack {_manifest.name} {_manifest.version} to {output} ...")
    pack_firmware_package(
        _manifest,
        binary,
        output,
        rw_chunk_size=getattr(args, "rw_chunk_size", DEFAULT_READ_SIZE),
    )
