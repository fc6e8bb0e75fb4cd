#!/usr/bin/env python3
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
Programmatic usage example - using Bench Checker as a Python library.

This example demonstrates:
1. Loading check definitions from YAML
2. Building a state machine from environment configuration
3. Evaluating checks and grouping verdicts
"""

import logging
from pathlib import Path

from bench_checker import CheckStateMachine, Config, State, load_checks, run_checks


def group_by_state(checks):
    """Group evaluated checks by verdict."""
    by_state = {}
    for check in checks:
        by_state.setdefault(check.state.value, []).append(check)
    return by_state


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    checks_path = Path(__file__).parent / "checks" / "node.yaml"
    checks = load_checks(checks_path)

    config = Config.from_env()
    machine = CheckStateMachine.from_config(config)

    print(f"Evaluating {len(checks)} checks from {checks_path.name}\n")
    run_checks(checks, machine, max_workers=config.max_workers)

    for check in checks:
        print(f"[{check.state.value}] {check.id} {check.text}")
        if check.state in (State.FAIL, State.WARN):
            if check.expected_result:
                print(f"    expected: {check.expected_result}")
                print(f"    actual:   {check.actual_value}")
            if check.reason:
                print(f"    reason:   {check.reason}")
            if check.remediation:
                print(f"    remediation: {check.remediation}")

    print()
    for state, grouped in sorted(group_by_state(checks).items()):
        print(f"{state}: {len(grouped)}")

    return 1 if any(c.state == State.FAIL for c in checks) else 0


if __name__ == "__main__":
    raise SystemExit(main())
