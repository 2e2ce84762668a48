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
"""Print out the manifest of the firmware package."""

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


def inspect_manifest_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    inspect_manifest_arg_parser = sub_arg_parser.add_parser(
        name="inspect-manifest",
        help=(
            _help_txt := "Validate and print out the manifest of the firmware package"
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    inspect_manifest_arg_parser.add_argument(
        "--list-entries",
        action="store_true",
        help="Also print out the names of all entries in the package.",
    )
    inspect_manifest_arg_parser.add_argument(
        "package",
        help="Points to a firmware package file.",
    )
    inspect_manifest_arg_parser.set_defaults(handler=inspect_manifest_cmd)


def inspect_manifest_cmd(args: Namespace) -> None:
    logger.debug(f"calling {inspect_manifest_cmd.__name__} with {args}")
    package = Path(args.package)
    if not package.is_file():
        exit_with_err_msg(f"{package} is not a firmware package file!")

    try:
        with FirmwarePackageConsumer.from_file(package) as consumer:
            print(consumer.manifest.export_manifest(indent=2))
            if getattr(args, "list_entries", False):
                for _entry in consumer.list_entries():
                    print(_entry)
    except FirmwarePackageError as e:
        exit_with_err_msg(f"{package} is not a valid firmware package: {e}")
