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
Check definition loader.

Turns a YAML document into :class:`Check` objects:

.. code-block:: yaml

    checks:
      - id: "1.1.1"
        text: "Ensure that the --anonymous-auth argument is set to false"
        audit: "ps -ef | grep kube-apiserver | grep -v grep"
        type: ""          # "", manual or skip
        scored: true
        tests:
          bin_op: and     # and (default) or or
          test_items:
            - flag: "--anonymous-auth"
              compare:
                op: eq
                value: false
        remediation: "Set --anonymous-auth=false"

A bare top-level list of checks is accepted as well.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import CheckDefinitionError
from .models import Check

logger = logging.getLogger(__name__)


class _CheckLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric scalars as written.

    YAML 1.1 reads ``0644`` as the octal integer 420 and ``1.10`` as 1.1; check
    values are compared as text, so the original spelling must survive.
    """


def _construct_scalar_text(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


_CheckLoader.add_constructor("tag:yaml.org,2002:int", _construct_scalar_text)
_CheckLoader.add_constructor("tag:yaml.org,2002:float", _construct_scalar_text)


def _checks_from_data(data: Any, source: str) -> list[Check]:
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("checks") or []
    if not isinstance(data, list):
        raise CheckDefinitionError(f"Failed to load checks from {source}: expected a list of checks")

    checks = [Check.from_dict(entry) for entry in data]

    seen: set[str] = set()
    for check in checks:
        if check.id in seen:
            logger.warning("Duplicate check id '%s' in %s", check.id, source)
        seen.add(check.id)

    return checks


def load_checks_from_string(text: str, source: str = "<string>") -> list[Check]:
    """
    Load checks from YAML text.

    Args:
        text: YAML document
        source: Name used in error messages

    Returns:
        List of Check objects

    Raises:
        CheckDefinitionError: If the document is not a valid check list
    """
    try:
        data = yaml.load(text, Loader=_CheckLoader)
    except yaml.YAMLError as e:
        raise CheckDefinitionError(f"Failed to parse checks from {source}: {e}") from e
    return _checks_from_data(data, source)


def load_checks(path: str | Path) -> list[Check]:
    """
    Load checks from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        List of Check objects

    Raises:
        CheckDefinitionError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CheckDefinitionError(f"Failed to read checks from {path}: {e}") from e

    checks = load_checks_from_string(text, source=str(path))
    logger.debug("Loaded %d checks from %s", len(checks), path)
    return checks
