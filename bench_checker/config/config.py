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
Configuration class for Bench Checker.

Values are read from the environment unless passed explicitly, so a CLI
driver can layer its own flags (for example an audit timeout) on top.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import BenchCheckerConstants

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Configuration for Bench Checker.
    """

    # Audit probe execution
    shell: str = BenchCheckerConstants.DEFAULT_SHELL
    audit_timeout_seconds: float | None = BenchCheckerConstants.DEFAULT_AUDIT_TIMEOUT

    # Scan options
    max_workers: int = BenchCheckerConstants.DEFAULT_MAX_WORKERS

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        # Shell from environment (only if still at default)
        if self.shell == BenchCheckerConstants.DEFAULT_SHELL:
            if env_shell := os.getenv(BenchCheckerConstants.ENV_SHELL):
                self.shell = env_shell

        if self.audit_timeout_seconds is None:
            if env_timeout := os.getenv(BenchCheckerConstants.ENV_AUDIT_TIMEOUT):
                try:
                    timeout = float(env_timeout)
                except ValueError:
                    logger.warning(
                        "Ignoring invalid %s value: %s", BenchCheckerConstants.ENV_AUDIT_TIMEOUT, env_timeout
                    )
                else:
                    # Zero or negative means "no timeout"
                    self.audit_timeout_seconds = timeout if timeout > 0 else None

        if self.max_workers == BenchCheckerConstants.DEFAULT_MAX_WORKERS:
            if env_workers := os.getenv(BenchCheckerConstants.ENV_MAX_WORKERS):
                try:
                    self.max_workers = max(1, int(env_workers))
                except ValueError:
                    logger.warning(
                        "Ignoring invalid %s value: %s", BenchCheckerConstants.ENV_MAX_WORKERS, env_workers
                    )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            load_dotenv(config_file, override=True)

        return cls.from_env()
