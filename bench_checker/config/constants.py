# Copyright 2026 Cisco Systems, Inc.
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Constants for Bench Checker.
"""

from .. import __version__ as PACKAGE_VERSION


class BenchCheckerConstants:
    """Constants used throughout the evaluation engine."""

    VERSION = PACKAGE_VERSION

    # Audit probe execution
    DEFAULT_SHELL = "/bin/sh"
    DEFAULT_AUDIT_TIMEOUT = None  # no timeout unless configured
    DEFAULT_MAX_WORKERS = 1

    # Separator for list-valued flags, e.g. --tls-cipher-suites=a,b,c
    ARRAY_SEPARATOR = ","

    # Verdict states
    STATE_PASS = "PASS"
    STATE_FAIL = "FAIL"
    STATE_WARN = "WARN"
    STATE_INFO = "INFO"

    # Check types
    TYPE_MANUAL = "manual"
    TYPE_SKIP = "skip"

    # Environment variable names
    ENV_SHELL = "BENCH_CHECKER_SHELL"
    ENV_AUDIT_TIMEOUT = "BENCH_CHECKER_AUDIT_TIMEOUT"
    ENV_MAX_WORKERS = "BENCH_CHECKER_MAX_WORKERS"
