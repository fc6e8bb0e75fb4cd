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
Check evaluation: turn a check definition into a verdict.

Decision table
~~~~~~~~~~~~~~

.. code-block:: text

    type     scored  tests          outcome                    state
    -------  ------  -------------  -------------------------  -----
    MANUAL   -       -              -                          WARN
    SKIP     -       -              -                          INFO
    NORMAL   any     absent         -                          WARN
    NORMAL   False   present        combinator True            PASS
    NORMAL   False   present        combinator False           WARN
    NORMAL   True    present        combinator True            PASS
    NORMAL   True    present        combinator False, empty    FAIL
                                    set or probe failure

Scoring decides only how severe a failed verification is.  A check with no
tests at all is an authoring gap (WARN); a check whose tests evaluate false
is a compliance failure when scored.
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Iterable

from ..config.config import Config
from .audit_runner import AuditRunner, BaseAuditRunner
from .combinator import NO_TEST_ITEMS, TestSetCombinator
from .exceptions import ProbeExecutionError
from .models import Check, CheckType, State

logger = logging.getLogger(__name__)

REASON_SKIP = "Test marked as skip"
REASON_MANUAL = "Test marked as a manual test"
REASON_NO_TESTS = "No tests defined"
REASON_EMPTY_TESTS = "Test set has no test items"


class CheckStateMachine:
    """Evaluates checks and records the verdict on each one."""

    def __init__(self, runner: BaseAuditRunner | None = None, combinator: TestSetCombinator | None = None):
        """
        Initialize the state machine.

        Args:
            runner: Audit probe runner; defaults to a /bin/sh AuditRunner
            combinator: Test set combinator
        """
        self.runner = runner or AuditRunner()
        self.combinator = combinator or TestSetCombinator()

    @classmethod
    def from_config(cls, config: Config) -> CheckStateMachine:
        return cls(runner=AuditRunner.from_config(config))

    def run(self, check: Check) -> State:
        """
        Evaluate a check.

        Previous results on the check are discarded first, so running a check
        twice against the same probe output gives the same verdict.

        Args:
            check: Check to evaluate; its result fields are overwritten

        Returns:
            The verdict, also stored on ``check.state``
        """
        check.reset()

        if check.type == CheckType.SKIP:
            return self._finish(check, State.INFO, REASON_SKIP)

        if check.type == CheckType.MANUAL:
            return self._finish(check, State.WARN, REASON_MANUAL)

        if check.tests is None:
            return self._finish(check, State.WARN, REASON_NO_TESTS)

        if not check.tests.test_items:
            check.expected_result = NO_TEST_ITEMS
            return self._finish(check, self._failed_state(check), REASON_EMPTY_TESTS)

        try:
            output = self.runner.run(check.audit)
            config_output = self.runner.run(check.audit_config) if check.audit_config.strip() else ""
            env_output = self.runner.run(check.audit_env) if check.audit_env.strip() else ""
        except ProbeExecutionError as e:
            check.audit_output = e.output
            check.actual_value = e.output.rstrip()
            return self._finish(check, self._failed_state(check), str(e))
        except Exception as e:
            logger.warning("Audit probe for check %s failed unexpectedly: %s", check.id, e)
            return self._finish(check, self._failed_state(check), f"audit probe failed: {e}")

        check.audit_output = output
        try:
            outcome = self.combinator.evaluate(
                check.tests,
                output,
                config_output=config_output,
                env_output=env_output,
                multiple=check.is_multiple,
            )
        except Exception as e:
            logger.warning("Evaluation of check %s failed: %s", check.id, e)
            check.actual_value = output.rstrip()
            return self._finish(check, self._failed_state(check), f"test evaluation failed: {e}")

        check.expected_result = outcome.expected_result
        check.actual_value = outcome.actual_value
        if outcome.passed:
            return self._finish(check, State.PASS)
        return self._finish(check, self._failed_state(check))

    @staticmethod
    def _failed_state(check: Check) -> State:
        return State.FAIL if check.scored else State.WARN

    @staticmethod
    def _finish(check: Check, state: State, reason: str = "") -> State:
        check.state = state
        check.reason = reason
        return state


def summarize(checks: Iterable[Check]) -> dict[str, int]:
    """Count evaluated checks per state."""
    counts = {state.value: 0 for state in State}
    for check in checks:
        if check.state is not None:
            counts[check.state.value] += 1
    return counts


def run_checks(
    checks: Iterable[Check],
    machine: CheckStateMachine | None = None,
    max_workers: int = 1,
) -> list[Check]:
    """
    Evaluate many checks.

    Checks share no mutable state, so with ``max_workers > 1`` they are
    evaluated concurrently in a thread pool.  A failing check never stops
    its siblings from being evaluated.

    Args:
        checks: Checks to evaluate
        machine: State machine to use; a default one is built if omitted
        max_workers: Number of worker threads

    Returns:
        The evaluated checks, in input order
    """
    machine = machine or CheckStateMachine()
    checks = list(checks)

    if max_workers > 1 and len(checks) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            list(executor.map(machine.run, checks))
    else:
        for check in checks:
            machine.run(check)

    counts = summarize(checks)
    logger.info(
        "Evaluated %d checks: %d pass, %d fail, %d warn, %d info",
        len(checks),
        counts[State.PASS.value],
        counts[State.FAIL.value],
        counts[State.WARN.value],
        counts[State.INFO.value],
    )
    return checks
