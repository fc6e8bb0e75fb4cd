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
Bench Checker - evaluation core for host and cluster security benchmarks.
"""

__version__ = "0.1.0"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access."""
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "BenchCheckerConstants": (".config.constants", "BenchCheckerConstants"),
        "AuditRunner": (".core.audit_runner", "AuditRunner"),
        "BaseAuditRunner": (".core.audit_runner", "BaseAuditRunner"),
        "run_audit": (".core.audit_runner", "run_audit"),
        "CheckStateMachine": (".core.check_runner", "CheckStateMachine"),
        "run_checks": (".core.check_runner", "run_checks"),
        "TestSetCombinator": (".core.combinator", "TestSetCombinator"),
        "TestItemEvaluator": (".core.item_evaluator", "TestItemEvaluator"),
        "ProbeExecutionError": (".core.exceptions", "ProbeExecutionError"),
        "CheckDefinitionError": (".core.exceptions", "CheckDefinitionError"),
        "load_checks": (".core.loader", "load_checks"),
        "Check": (".core.models", "Check"),
        "CheckType": (".core.models", "CheckType"),
        "Compare": (".core.models", "Compare"),
        "CompareOp": (".core.models", "CompareOp"),
        "BinaryOp": (".core.models", "BinaryOp"),
        "State": (".core.models", "State"),
        "TestItem": (".core.models", "TestItem"),
        "TestSet": (".core.models", "TestSet"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Check",
    "CheckType",
    "Compare",
    "CompareOp",
    "BinaryOp",
    "State",
    "TestItem",
    "TestSet",
    "AuditRunner",
    "BaseAuditRunner",
    "run_audit",
    "CheckStateMachine",
    "run_checks",
    "TestSetCombinator",
    "TestItemEvaluator",
    "ProbeExecutionError",
    "CheckDefinitionError",
    "load_checks",
    "Config",
    "BenchCheckerConstants",
]
