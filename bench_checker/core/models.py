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
Data models for benchmark checks and their test expressions.

A :class:`Check` is built once from configuration and may be evaluated many
times.  The ``state``/``actual_value``/``expected_result``/``reason`` fields on
a check and the ``result`` field on each :class:`TestItem` are an evaluation
result cache: every run overwrites them (see :meth:`Check.reset`), and they
are not part of the check's identity.  Two checks are the same check when
their ``id`` matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..config.constants import BenchCheckerConstants
from .exceptions import CheckDefinitionError


class State(str, Enum):
    """Verdict of an evaluated check."""

    PASS = BenchCheckerConstants.STATE_PASS
    FAIL = BenchCheckerConstants.STATE_FAIL
    WARN = BenchCheckerConstants.STATE_WARN
    INFO = BenchCheckerConstants.STATE_INFO


class CheckType(str, Enum):
    """How a check is evaluated."""

    NORMAL = ""  # probe is run and tests are evaluated
    MANUAL = BenchCheckerConstants.TYPE_MANUAL  # always WARN, a human has to verify
    SKIP = BenchCheckerConstants.TYPE_SKIP  # always INFO, probe never runs

    @classmethod
    def parse(cls, value: str | None) -> CheckType:
        if not value:
            return cls.NORMAL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise CheckDefinitionError(f"Unknown check type '{value}'") from None


class BinaryOp(str, Enum):
    """Logical operator combining the items of a test set."""

    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, value: str | None) -> BinaryOp:
        if not value:
            return cls.AND
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise CheckDefinitionError(f"Unknown binary operator '{value}'") from None


class CompareOp(str, Enum):
    """Comparison operators available to a test item."""

    EQ = "eq"
    NOTEQ = "noteq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    HAS = "has"
    NOTHAVE = "nothave"
    REGEX = "regex"
    VALID_ELEMENTS = "valid_elements"
    BITMASK = "bitmask"

    @classmethod
    def parse(cls, value: str) -> CompareOp:
        name = str(value).strip()
        if name == "regexMatch":
            return cls.REGEX
        try:
            return cls(name.lower())
        except ValueError:
            raise CheckDefinitionError(f"Unknown comparison operator '{value}'") from None

    @property
    def is_numeric(self) -> bool:
        return self in (CompareOp.GT, CompareOp.GTE, CompareOp.LT, CompareOp.LTE)


def _scalar_to_str(value: Any) -> str:
    """Render a YAML scalar the way it was most likely written."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(value: Any, name: str, default: bool) -> bool:
    """Read a boolean field; quoted 'true'/'false' are accepted, anything else is an error."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise CheckDefinitionError(f"{name} must be true or false, got {value!r}")


@dataclass
class Compare:
    """A typed comparison against the value found for a test item."""

    op: CompareOp
    value: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Compare:
        if "op" not in data:
            raise CheckDefinitionError("compare block is missing 'op'")
        return cls(op=CompareOp.parse(data["op"]), value=_scalar_to_str(data.get("value")))


@dataclass
class TestItem:
    """One atomic piece of evidence to look for in probe output.

    Exactly one evidence source is normally given: ``flag`` (searched in the
    audit output), ``path`` (looked up in the structured ``audit_config``
    output) or ``env`` (a ``NAME=value`` line in the ``audit_env`` output).
    ``set`` declares whether the evidence must be present (``True``) or
    absent (``False``).
    """

    __test__ = False  # not a pytest class

    flag: str = ""
    path: str = ""
    env: str = ""
    compare: Compare | None = None
    set: bool = True

    # Evaluation result cache
    result: bool | None = None

    @property
    def label(self) -> str:
        """The evidence key shown in expected-result text."""
        return self.flag or self.path or self.env

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestItem:
        if not isinstance(data, dict):
            raise CheckDefinitionError(f"test item must be a mapping, got {type(data).__name__}")
        compare_data = data.get("compare")
        compare = None
        if compare_data:
            if not isinstance(compare_data, dict):
                raise CheckDefinitionError(f"compare must be a mapping, got {type(compare_data).__name__}")
            compare = Compare.from_dict(compare_data)
        return cls(
            flag=_scalar_to_str(data.get("flag")),
            path=_scalar_to_str(data.get("path")),
            env=_scalar_to_str(data.get("env")),
            compare=compare,
            set=_parse_bool(data.get("set"), "set", True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "flag": self.flag,
            "path": self.path,
            "env": self.env,
            "compare": {"op": self.compare.op.value, "value": self.compare.value} if self.compare else None,
            "set": self.set,
            "result": self.result,
        }


@dataclass
class TestSet:
    """An ordered group of test items combined by one logical operator."""

    __test__ = False  # not a pytest class

    bin_op: BinaryOp = BinaryOp.AND
    test_items: list[TestItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestSet:
        items = data.get("test_items") or []
        if not isinstance(items, list):
            raise CheckDefinitionError("test_items must be a list")
        return cls(
            bin_op=BinaryOp.parse(data.get("bin_op")),
            test_items=[TestItem.from_dict(item) for item in items],
        )


@dataclass(eq=False)
class Check:
    """One evaluable compliance rule."""

    id: str
    text: str = ""
    type: CheckType = CheckType.NORMAL
    scored: bool = False
    audit: str = ""
    audit_config: str = ""
    audit_env: str = ""
    tests: TestSet | None = None
    remediation: str = ""
    # Evaluate every test item against each line of the audit output
    is_multiple: bool = False

    # Evaluation result cache
    state: State | None = None
    actual_value: str = ""
    expected_result: str = ""
    reason: str = ""
    audit_output: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Check):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def reset(self) -> None:
        """Clear every evaluation result so a new run starts from scratch."""
        self.state = None
        self.actual_value = ""
        self.expected_result = ""
        self.reason = ""
        self.audit_output = ""
        if self.tests is not None:
            for item in self.tests.test_items:
                item.result = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Check:
        """Build a check from a mapping shaped like a YAML check definition."""
        if not isinstance(data, dict):
            raise CheckDefinitionError(f"Check definition must be a mapping, got {type(data).__name__}")
        check_id = _scalar_to_str(data.get("id"))
        if not check_id:
            raise CheckDefinitionError("Check definition is missing 'id'")

        tests_data = data.get("tests")
        tests = None
        if tests_data is not None:
            if not isinstance(tests_data, dict):
                raise CheckDefinitionError(f"Check {check_id}: tests must be a mapping")
            try:
                tests = TestSet.from_dict(tests_data)
            except CheckDefinitionError as e:
                raise CheckDefinitionError(f"Check {check_id}: {e}") from e

        return cls(
            id=check_id,
            text=_scalar_to_str(data.get("text")),
            type=CheckType.parse(data.get("type")),
            scored=_parse_bool(data.get("scored"), "scored", False),
            audit=_scalar_to_str(data.get("audit")),
            audit_config=_scalar_to_str(data.get("audit_config")),
            audit_env=_scalar_to_str(data.get("audit_env")),
            tests=tests,
            remediation=_scalar_to_str(data.get("remediation")),
            is_multiple=_parse_bool(
                data.get("use_multiple_values", data.get("is_multiple")), "use_multiple_values", False
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the check and its latest results to a dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "type": self.type.value,
            "scored": self.scored,
            "state": self.state.value if self.state else None,
            "actual_value": self.actual_value,
            "expected_result": self.expected_result,
            "reason": self.reason,
            "remediation": self.remediation,
            "test_items": [item.to_dict() for item in self.tests.test_items] if self.tests else [],
        }
