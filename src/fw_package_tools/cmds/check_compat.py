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
"""Check whether the firmware package is compatible with the target hardware."""

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


def check_compat_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    check_compat_arg_parser = sub_arg_parser.add_parser(
        name="check-compat",
        help=(
            _help_txt := "Check if the firmware package targets the specified hardware"
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    check_compat_arg_parser.add_argument(
        "--hw",
        help="The hardware identifier of the target.",
        required=True,
    )
    check_compat_arg_parser.add_argument(
        "--major-rev",
        help="The major hardware revision of the target.",
        required=True,
    )
    check_compat_arg_parser.add_argument(
        "package",
        help="Points to a firmware package file.",
    )
    check_compat_arg_parser.set_defaults(handler=check_compat_cmd)


def check_compat_cmd(args: Namespace) -> None:
    logger.debug(f"calling {check_compat_cmd.__name__} with {args}")
    package = Path(args.package)
    if not package.is_file():
        exit_with_err_msg(f"{package} is not a firmware package file!")

    try:
        with FirmwarePackageConsumer.from_file(package) as consumer:
            _manifest = consumer.manifest
    except FirmwarePackageError as e:
        exit_with_err_msg(f"{package} is not a valid firmware package: {e}")

    _compat = _manifest.compatibility
    if not _manifest.is_compatible_with(args.hw, args.major_rev):
        exit_with_err_msg(
            f"{_manifest.name} {_manifest.version} targets {_compat.hw} "
            f"with major revisions {list(_compat.major_revs)}, "
            f"not compatible with {args.hw} rev {args.major_rev}"
        )
    print(
        f"{_manifest.name} {_manifest.version} is compatible with "
        f"{args.hw} rev {args.major_rev}."
    )
