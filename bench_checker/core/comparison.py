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
Typed comparison operators for test items.

Every operator fails closed: input it cannot interpret (a non-numeric value
for ``gt``, an invalid regex, a non-octal permission mask) yields ``False``
instead of raising, so a misbehaving probe never crashes a scan.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from ..config.constants import BenchCheckerConstants
from .models import CompareOp

logger = logging.getLogger(__name__)


class ComparisonOutcome(NamedTuple):
    """Result of applying one comparison operator."""

    passed: bool
    expected_result: str


def _to_int_pair(a: str, b: str) -> tuple[int, int] | None:
    try:
        return int(a.strip()), int(b.strip())
    except ValueError:
        return None


def _split_elements(value: str, sep: str = BenchCheckerConstants.ARRAY_SEPARATOR) -> list[str]:
    """Split a list-valued flag, ignoring one trailing separator."""
    if not value:
        return []
    if value.endswith(sep):
        value = value[: -len(sep)]
    return [part.strip() for part in value.split(sep)]


def _all_elements_valid(values: list[str], allowed: list[str]) -> bool:
    # An empty value list only matches an empty allowed list
    if not values:
        return not allowed
    allowed_set = set(allowed)
    return all(v in allowed_set for v in values)


def compare(op: CompareOp, flag_value: str, expected: str, flag_label: str = "") -> ComparisonOutcome:
    """
    Compare the value found for a test item against the expected value.

    Args:
        op: Comparison operator
        flag_value: Value extracted from probe output
        expected: Value from the check definition
        flag_label: Evidence key, used in the expected-result text

    Returns:
        ComparisonOutcome with the boolean result and a human-readable
        description of what was expected
    """
    if op == CompareOp.EQ or op == CompareOp.NOTEQ:
        lowered = flag_value.lower()
        # Booleans are compared case-insensitively (True / true / TRUE)
        if lowered in ("true", "false"):
            equal = lowered == expected.lower()
        else:
            equal = flag_value == expected
        if op == CompareOp.EQ:
            return ComparisonOutcome(equal, f"'{flag_label}' is equal to '{expected}'")
        return ComparisonOutcome(not equal, f"'{flag_label}' is not equal to '{expected}'")

    if op.is_numeric:
        pair = _to_int_pair(flag_value, expected)
        if pair is None:
            logger.debug("Not numeric value for flag %s: %r vs %r", flag_label, flag_value, expected)
            return ComparisonOutcome(False, f"Invalid Number(s) used for comparison: '{flag_value}' '{expected}'")
        a, b = pair
        if op == CompareOp.GT:
            return ComparisonOutcome(a > b, f"'{flag_label}' is greater than {expected}")
        if op == CompareOp.GTE:
            return ComparisonOutcome(a >= b, f"'{flag_label}' is greater or equal to {expected}")
        if op == CompareOp.LT:
            return ComparisonOutcome(a < b, f"'{flag_label}' is lower than {expected}")
        return ComparisonOutcome(a <= b, f"'{flag_label}' is lower or equal to {expected}")

    if op == CompareOp.HAS:
        return ComparisonOutcome(expected in flag_value, f"'{flag_label}' has '{expected}'")

    if op == CompareOp.NOTHAVE:
        return ComparisonOutcome(expected not in flag_value, f"'{flag_label}' does not have '{expected}'")

    if op == CompareOp.REGEX:
        text = f"'{flag_label}' matched by regex expression '{expected}'"
        try:
            return ComparisonOutcome(re.search(expected, flag_value) is not None, text)
        except re.error as e:
            logger.debug("Invalid regex %r for flag %s: %s", expected, flag_label, e)
            return ComparisonOutcome(False, text)

    if op == CompareOp.VALID_ELEMENTS:
        passed = _all_elements_valid(_split_elements(flag_value), _split_elements(expected))
        return ComparisonOutcome(passed, f"'{flag_label}' contains valid elements from '{expected}'")

    if op == CompareOp.BITMASK:
        try:
            requested = int(flag_value.strip(), 8)
            maximum = int(expected.strip(), 8)
        except ValueError:
            logger.debug("Not octal value for flag %s: %r vs %r", flag_label, flag_value, expected)
            return ComparisonOutcome(False, f"Invalid Number(s) used for comparison: '{flag_value}' '{expected}'")
        return ComparisonOutcome(
            (maximum & requested) == requested,
            f"'{flag_label}' has permissions {flag_value}, expected {expected} or more restrictive",
        )

    raise ValueError(f"Unhandled comparison operator: {op!r}")
