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
"""Consts related to firmware package."""

MANIFEST_FNAME = "manifest.json"
# all entries in the firmware package are stored with this prefix
ENTRY_PREFIX = "./"

DEFAULT_READ_SIZE = 1024**2  # 1MiB

# some constants that required for making a reproducible package build
DEFAULT_MTIME = 1230768000  # 2009-01-01T00:00:00Z
FILE_PERMISSION = 0o644
