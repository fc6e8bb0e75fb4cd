# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from dotenv import load_dotenv

from bench_checker.core.audit_runner import BaseAuditRunner
from bench_checker.core.exceptions import ProbeExecutionError
from bench_checker.core.models import Check, TestItem, TestSet

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

project_root = Path(__file__).parent.parent
env_file = project_root / ".env"

if env_file.exists():
    load_dotenv(env_file)


# ---------------------------------------------------------------------------
# Fake probe runner
# ---------------------------------------------------------------------------


class FakeAuditRunner(BaseAuditRunner):
    """Returns canned output per probe instead of starting a shell.

    ``outputs`` maps probe text to output; a value that is a
    :class:`ProbeExecutionError` is raised instead.  Unknown probes return
    ``default``.  Every probe passed to :meth:`run` is recorded in ``calls``.
    """

    def __init__(self, outputs: dict[str, str | ProbeExecutionError] | None = None, default: str = ""):
        self.outputs = outputs or {}
        self.default = default
        self.calls: list[str] = []

    def run(self, probe: str) -> str:
        self.calls.append(probe)
        result = self.outputs.get(probe, self.default)
        if isinstance(result, ProbeExecutionError):
            raise result
        return result


@pytest.fixture
def fake_runner():
    """Factory fixture for :class:`FakeAuditRunner`."""

    def _make(outputs: dict[str, str | ProbeExecutionError] | None = None, default: str = "") -> FakeAuditRunner:
        return FakeAuditRunner(outputs, default)

    return _make


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_check():
    """Factory fixture for creating :class:`Check` objects with test items.

    Usage::

        check = make_check(
            audit="echo hello",
            items=[TestItem(flag="hello")],
            scored=True,
        )
    """
    _counter = [0]

    def _make(
        audit: str = "",
        items: list[TestItem] | None = None,
        scored: bool = True,
        **kwargs,
    ) -> Check:
        _counter[0] += 1
        tests = TestSet(test_items=items) if items is not None else None
        return Check(
            id=kwargs.pop("id", f"1.1.{_counter[0]}"),
            text=kwargs.pop("text", "Synthetic check"),
            audit=audit,
            scored=scored,
            tests=tests,
            **kwargs,
        )

    return _make


@pytest.fixture
def write_yaml(tmp_path: Path):
    """Write a YAML string to a temporary file and return its path."""
    _counter = [0]

    def _write(text: str) -> Path:
        _counter[0] += 1
        path = tmp_path / f"checks-{_counter[0]}.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
