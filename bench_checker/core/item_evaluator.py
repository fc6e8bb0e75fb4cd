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
Test item evaluation: locate evidence in probe output and judge it.

Evidence grammar
~~~~~~~~~~~~~~~~

``flag`` items search the audit output.  The flag is present when its text
occurs anywhere in the output; its value is taken from the first occurrence:

.. code-block:: text

    --anonymous-auth=false     -> "false"
    PermitRootLogin: no        -> "no"
    max_log_file=8             -> "8"
    --profiling                -> "true"  (bare "--" flag)
    nodev                      -> "nodev" (bare token)

``path`` items parse the ``audit_config`` output as YAML (or JSON) and follow
a dotted path such as ``{.authentication.anonymous.enabled}`` or
``rules[0].name``.

``env`` items read a ``NAME=value`` line from the ``audit_env`` output.  An
item that declares both ``flag`` and ``env`` falls back to the environment
when the flag is absent, since many daemons accept either form.

An item without any evidence key is judged against the whole output.
"""

from __future__ import annotations

import logging
import re
from typing import Any, NamedTuple

import yaml

from .comparison import compare
from .models import TestItem

logger = logging.getLogger(__name__)

_PATH_TOKEN_RE = re.compile(r"([^.\[\]]+)|\[(\d+)\]")
_MISSING = object()


class Evidence(NamedTuple):
    """What was found for one evidence key."""

    found: bool
    value: str


class TestItemOutcome(NamedTuple):
    """Result of evaluating one test item."""

    passed: bool
    expected_result: str
    actual_value: str
    evidence_found: bool


def find_flag_value(flag: str, output: str) -> Evidence:
    """Locate *flag* in free-form output and extract its value."""
    if not output or not flag or flag not in output:
        return Evidence(False, "")

    match = re.search(re.escape(flag) + r"(=|: *)*(\S*) *", output)
    if match is None:
        return Evidence(False, "")

    value = match.group(2)
    if not value:
        # --bool-flag with no value means the flag is switched on
        value = "true" if flag.startswith("--") else flag
    return Evidence(True, value)


def find_env_value(name: str, output: str) -> Evidence:
    """Locate a ``NAME=value`` line in environment-style output."""
    if not output or not name:
        return Evidence(False, "")
    match = re.search(rf"^{re.escape(name)}=(.*)$", output, re.MULTILINE)
    if match is None or not match.group(1):
        return Evidence(False, "")
    return Evidence(True, match.group(1).rstrip("\r"))


def _render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(value, default_flow_style=True, sort_keys=False).strip()
    return str(value)


def lookup_path(document: Any, path: str) -> Any:
    """Follow a ``{.a.b[0]}``-style path through parsed YAML/JSON data."""
    path = path.strip()
    if path.startswith("{") and path.endswith("}"):
        path = path[1:-1]
    path = path.lstrip(".")
    if not path:
        return document

    tokens = []
    position = 0
    for match in _PATH_TOKEN_RE.finditer(path):
        # keys after the first are dot-separated, indexes follow directly
        separator = "." if match.group(1) is not None and position else ""
        if path[position : match.start()] != separator:
            break
        tokens.append(match)
        position = match.end()
    if position != len(path):
        logger.warning("Malformed lookup path: %s", path)
        return _MISSING

    current = document
    for match in tokens:
        key, index = match.group(1), match.group(2)
        if key is not None:
            if not isinstance(current, dict):
                return _MISSING
            if key not in current and key.isdigit() and int(key) in current:
                key = int(key)
            if key not in current:
                return _MISSING
            current = current[key]
        else:
            position = int(index)
            if not isinstance(current, list) or position >= len(current):
                return _MISSING
            current = current[position]
    return current


def find_path_value(path: str, output: str) -> Evidence:
    """Locate *path* in structured (YAML or JSON) output."""
    if not output or not path:
        return Evidence(False, "")
    try:
        document = yaml.safe_load(output)
    except yaml.YAMLError as e:
        logger.debug("Could not parse config output for path %s: %s", path, e)
        return Evidence(False, "")

    value = lookup_path(document, path)
    if value is _MISSING:
        return Evidence(False, "")
    return Evidence(True, _render_value(value))


class TestItemEvaluator:
    """Decides whether one test item is satisfied by probe output."""

    __test__ = False  # not a pytest class

    def find_evidence(self, item: TestItem, output: str, config_output: str = "", env_output: str = "") -> Evidence:
        if item.flag:
            evidence = find_flag_value(item.flag, output)
            if evidence.found or not item.env:
                return evidence
            return find_env_value(item.env, env_output)
        if item.path:
            return find_path_value(item.path, config_output)
        if item.env:
            return find_env_value(item.env, env_output)

        whole = output.rstrip()
        return Evidence(bool(whole), whole)

    def evaluate(
        self,
        item: TestItem,
        output: str,
        config_output: str = "",
        env_output: str = "",
        multiple: bool = False,
    ) -> TestItemOutcome:
        """
        Evaluate a test item and record the result on ``item.result``.

        Args:
            item: Test item to evaluate
            output: Audit probe output
            config_output: Output of the check's audit_config probe
            env_output: Output of the check's audit_env probe
            multiple: Require the item to hold on every line of *output*

        Returns:
            TestItemOutcome for this item
        """
        if multiple and (item.flag or not (item.path or item.env)):
            outcome = self._evaluate_lines(item, output, config_output, env_output)
        else:
            outcome = self._evaluate_once(item, output, config_output, env_output)
        item.result = outcome.passed
        return outcome

    def _evaluate_once(self, item: TestItem, output: str, config_output: str, env_output: str) -> TestItemOutcome:
        evidence = self.find_evidence(item, output, config_output, env_output)
        label = item.label or "output"

        if not item.set:
            return TestItemOutcome(not evidence.found, f"'{label}' is not present", evidence.value, evidence.found)

        if item.compare is None:
            return TestItemOutcome(evidence.found, f"'{label}' is present", evidence.value, evidence.found)

        outcome = compare(item.compare.op, evidence.value, item.compare.value, label)
        if not evidence.found:
            # Absence of evidence never satisfies a comparison
            return TestItemOutcome(False, outcome.expected_result, "", False)
        return TestItemOutcome(outcome.passed, outcome.expected_result, evidence.value, True)

    def _evaluate_lines(self, item: TestItem, output: str, config_output: str, env_output: str) -> TestItemOutcome:
        lines = [line for line in output.splitlines() if line.strip()]
        if not lines:
            outcome = self._evaluate_once(item, "", config_output, env_output)
            return outcome._replace(passed=False)

        outcomes = [self._evaluate_once(item, line, config_output, env_output) for line in lines]
        failed = next((o for o in outcomes if not o.passed), None)
        shown = failed or outcomes[0]
        return TestItemOutcome(
            passed=failed is None,
            expected_result=shown.expected_result,
            actual_value=shown.actual_value,
            evidence_found=any(o.evidence_found for o in outcomes),
        )
