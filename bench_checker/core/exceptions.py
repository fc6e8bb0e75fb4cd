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

"""Bench Checker exceptions.

This module defines custom exceptions for check evaluation.
All exceptions inherit from BenchCheckerError for easy catching.

Only :class:`ProbeExecutionError` ever crosses the evaluation boundary, and
even then the check state machine folds it into the check's verdict rather
than letting it abort a scan.  Missing evidence and non-numeric comparison
input are ordinary ``False`` outcomes, not exceptions.

Example:
    >>> from bench_checker.core.audit_runner import AuditRunner
    >>> from bench_checker.core.exceptions import ProbeExecutionError
    >>>
    >>> runner = AuditRunner()
    >>>
    >>> try:
    ...     output = runner.run("stat -c %a /etc/shadow")
    ... except ProbeExecutionError as e:
    ...     print(f"Probe failed: {e}")
"""


class BenchCheckerError(Exception):
    """Base exception for all Bench Checker errors."""

    pass


class ProbeExecutionError(BenchCheckerError):
    """Raised when an audit probe cannot be started or exits non-zero.

    This can indicate:
    - A command that is not installed on the host ("not found")
    - A probe script that exits with a non-zero status
    - A shell that cannot be started
    - A probe killed after exceeding the configured timeout

    The captured output is kept on the exception so that it can be shown in
    the compliance report next to the probe text.
    """

    def __init__(
        self,
        probe: str,
        output: str = "",
        returncode: int | None = None,
        cause: str = "",
        timed_out: bool = False,
    ):
        self.probe = probe
        self.output = output
        self.returncode = returncode
        self.timed_out = timed_out
        if not cause:
            cause = f"exit status {returncode}" if returncode is not None else "unknown error"
        self.cause = cause
        super().__init__(f'failed to run: "{probe}", output: "{output}", error: {cause}')


class CheckDefinitionError(BenchCheckerError):
    """Raised when a check definition cannot be turned into a Check.

    This indicates:
    - An unreadable or malformed YAML file
    - A check without an ``id``
    - An unknown check type, binary operator or comparison operator
    """

    pass
