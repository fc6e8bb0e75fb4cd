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
Audit probe execution.

An audit probe is an opaque shell program: a single command, a pipeline, or
a multi-line script with function definitions.  The probe text is fed to the
shell on stdin, so anything the shell accepts interactively works as a probe.
stdout and stderr are captured as one stream in the order produced.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod

from ..config.config import Config
from ..config.constants import BenchCheckerConstants
from .exceptions import ProbeExecutionError

logger = logging.getLogger(__name__)


class BaseAuditRunner(ABC):
    """Abstract interface for running audit probes.

    Tests substitute a subclass that returns canned output, which keeps the
    test-expression logic independent of real process execution.
    """

    @abstractmethod
    def run(self, probe: str) -> str:
        """
        Run an audit probe.

        Args:
            probe: Command or script text

        Returns:
            Captured output of the probe

        Raises:
            ProbeExecutionError: If the probe could not run or exited non-zero
        """
        pass


class AuditRunner(BaseAuditRunner):
    """Runs audit probes in a subordinate shell."""

    def __init__(self, shell: str = BenchCheckerConstants.DEFAULT_SHELL, timeout: float | None = None):
        """
        Initialize audit runner.

        Args:
            shell: Shell executable that reads the probe from stdin
            timeout: Seconds before the probe is killed; None waits forever
        """
        self.shell = shell
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> AuditRunner:
        return cls(shell=config.shell, timeout=config.audit_timeout_seconds)

    def run(self, probe: str) -> str:
        probe = probe.strip()
        if not probe:
            return ""

        try:
            completed = subprocess.run(
                [self.shell],
                input=probe.encode("utf-8"),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            output = _decode(e.output)
            logger.debug("Probe timed out after %ss: %r", self.timeout, probe)
            raise ProbeExecutionError(
                probe, output=output, cause=f"timed out after {self.timeout}s", timed_out=True
            ) from e
        except OSError as e:
            logger.debug("Could not start shell %s: %s", self.shell, e)
            raise ProbeExecutionError(probe, cause=str(e)) from e

        output = _decode(completed.stdout)
        if completed.returncode != 0:
            logger.debug("Probe %r exited with status %d: %r", probe, completed.returncode, output)
            raise ProbeExecutionError(probe, output=output, returncode=completed.returncode)

        logger.debug("Command: %r", probe)
        logger.debug("Output: %r", output)
        return output


def _decode(raw: bytes | str | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="replace")


def run_audit(
    probe: str,
    shell: str = BenchCheckerConstants.DEFAULT_SHELL,
    timeout: float | None = None,
) -> str:
    """
    Convenience function to run one audit probe.

    Args:
        probe: Command or script text
        shell: Shell executable
        timeout: Optional timeout in seconds

    Returns:
        Captured output

    Raises:
        ProbeExecutionError: If the probe could not run or exited non-zero
    """
    return AuditRunner(shell=shell, timeout=timeout).run(probe)
