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
Combine test item results into one boolean for a test set.

An empty test set evaluates to ``False`` under both AND and OR.  An empty
rule set means the check was never written properly, and a security check
must not certify a property it never tested.
"""

from __future__ import annotations

from typing import NamedTuple

from .item_evaluator import TestItemEvaluator
from .models import BinaryOp, TestSet

NO_TEST_ITEMS = "no test items defined"


class TestSetOutcome(NamedTuple):
    """Combined result of a test set."""

    passed: bool
    expected_result: str
    actual_value: str


class TestSetCombinator:
    """Evaluates every item of a test set and reduces them with its operator."""

    __test__ = False  # not a pytest class

    def __init__(self, evaluator: TestItemEvaluator | None = None):
        self.evaluator = evaluator or TestItemEvaluator()

    def evaluate(
        self,
        test_set: TestSet,
        output: str,
        config_output: str = "",
        env_output: str = "",
        multiple: bool = False,
    ) -> TestSetOutcome:
        """
        Evaluate a test set against probe output.

        Args:
            test_set: Test set to evaluate
            output: Audit probe output
            config_output: Output of the audit_config probe
            env_output: Output of the audit_env probe
            multiple: Evaluate items line by line

        Returns:
            TestSetOutcome with the combined boolean
        """
        if not test_set.test_items:
            return TestSetOutcome(False, NO_TEST_ITEMS, output.rstrip())

        # Every item is evaluated (no short-circuit) so each item.result is fresh
        outcomes = [
            self.evaluator.evaluate(item, output, config_output, env_output, multiple=multiple)
            for item in test_set.test_items
        ]
        results = [o.passed for o in outcomes]

        if test_set.bin_op == BinaryOp.OR:
            passed = any(results)
            joiner = " OR "
        else:
            passed = all(results)
            joiner = " AND "

        first = outcomes[0]
        actual_value = first.actual_value if first.evidence_found else output.rstrip()
        return TestSetOutcome(passed, joiner.join(o.expected_result for o in outcomes), actual_value)
