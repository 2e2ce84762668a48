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

from __future__ import annotations

import logging
import sys
from typing import NoReturn

LOGGING_FORMAT = (
    "[%(asctime)s][%(levelname)s]-%(name)s:%(funcName)s:%(lineno)d,%(message)s"
)


def configure_logging(log_level):
    logging.basicConfig(level=logging.CRITICAL, format=LOGGING_FORMAT, force=True)
    _tool_logger = logging.getLogger("fw_package_tools")
    _tool_logger.setLevel(log_level)
    _libs_logger = logging.getLogger("fw_package_libs")
    _libs_logger.setLevel(log_level)


def exit_with_err_msg(err_msg: str, exit_code: int = 1) -> NoReturn:
    print(f"ERR: {err_msg}")
    sys.exit(exit_code)
