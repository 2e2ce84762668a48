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
"""Extract the firmware binary from the firmware package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fw_package_libs.v1.errors import FirmwarePackageError
from fw_package_libs.v1.package.consumer import FirmwarePackageConsumer
from fw_package_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def extract_binary_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    extract_binary_arg_parser = sub_arg_parser.add_parser(
        name="extract-binary",
        help=(_help_txt := "Save the firmware binary from the firmware package"),
        description=_help_txt,
        parents=parent_parser,
    )
    extract_binary_arg_parser.add_argument(
        "--output",
        "-o",
        help="Save the firmware binary to this file.",
        required=True,
    )
    extract_binary_arg_parser.add_argument(
        "package",
        help="Points to a firmware package file.",
    )
    extract_binary_arg_parser.set_defaults(handler=extract_binary_cmd)


def extract_binary_cmd(args: Namespace) -> None:
    logger.debug(f"calling {extract_binary_cmd.__name__} with {args}")
    package, output = Path(args.package), Path(args.output)
    if not package.is_file():
        exit_with_err_msg(f"{package} is not a firmware package file!")
    if output.is_dir():
        exit_with_err_msg(f"{output} is a directory!")

    try:
        with FirmwarePackageConsumer.from_file(package) as consumer:
            _manifest = consumer.manifest
            print(
                f"Save firmware binary {_manifest.file} of "
                f"{_manifest.name} {_manifest.version} to {output} ..."
            )
            consumer.save_binary(output)
    except FirmwarePackageError as e:
        exit_with_err_msg(f"failed to extract firmware binary from {package}: {e}")
