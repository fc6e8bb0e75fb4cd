# Copyright 2026 Cisco Systems, Inc. and its affiliates
# SPDX-License-Identifier: Apache-2.0

"""Tests for check data models."""

import pytest

from bench_checker.core.exceptions import CheckDefinitionError
from bench_checker.core.models import (
    BinaryOp,
    Check,
    CheckType,
    Compare,
    CompareOp,
    State,
    TestItem,
    TestSet,
)


class TestEnums:
    def test_check_type_parse(self):
        assert CheckType.parse(None) == CheckType.NORMAL
        assert CheckType.parse("") == CheckType.NORMAL
        assert CheckType.parse("Manual") == CheckType.MANUAL
        assert CheckType.parse(" skip ") == CheckType.SKIP

    def test_check_type_unknown(self):
        with pytest.raises(CheckDefinitionError):
            CheckType.parse("automated")

    def test_binary_op_default(self):
        assert BinaryOp.parse(None) == BinaryOp.AND
        assert BinaryOp.parse("OR") == BinaryOp.OR

    def test_compare_op_parse(self):
        assert CompareOp.parse("noteq") == CompareOp.NOTEQ
        assert CompareOp.parse("regexMatch") == CompareOp.REGEX
        assert CompareOp.parse("valid_elements") == CompareOp.VALID_ELEMENTS

    def test_numeric_ops(self):
        assert {op for op in CompareOp if op.is_numeric} == {CompareOp.GT, CompareOp.GTE, CompareOp.LT, CompareOp.LTE}

    def test_state_values(self):
        assert [s.value for s in State] == ["PASS", "FAIL", "WARN", "INFO"]


class TestTestItem:
    def test_label_precedence(self):
        assert TestItem(flag="--a", path="{.b}", env="C").label == "--a"
        assert TestItem(path="{.b}", env="C").label == "{.b}"
        assert TestItem(env="C").label == "C"
        assert TestItem().label == ""

    def test_from_dict_defaults(self):
        item = TestItem.from_dict({"flag": "--profiling"})
        assert item.set is True
        assert item.compare is None
        assert item.result is None

    @pytest.mark.parametrize("entry", ["--flag", None, ["--flag"]])
    def test_item_must_be_mapping(self, entry):
        with pytest.raises(CheckDefinitionError, match="test item must be a mapping"):
            TestItem.from_dict(entry)

    @pytest.mark.parametrize("value, expected", [(False, False), ("false", False), ("FALSE", False), (" true ", True)])
    def test_set_accepts_booleans_and_their_text(self, value, expected):
        assert TestItem.from_dict({"flag": "x", "set": value}).set is expected

    @pytest.mark.parametrize("value", ["no", "0", 0, "absent"])
    def test_set_rejects_other_values(self, value):
        with pytest.raises(CheckDefinitionError, match="set must be true or false"):
            TestItem.from_dict({"flag": "x", "set": value})

    def test_compare_must_be_mapping(self):
        with pytest.raises(CheckDefinitionError):
            TestItem.from_dict({"flag": "x", "compare": "eq"})

    def test_to_dict(self):
        item = TestItem(flag="--a", compare=Compare(CompareOp.GTE, "10"), set=True)
        item.result = True
        assert item.to_dict() == {
            "flag": "--a",
            "path": "",
            "env": "",
            "compare": {"op": "gte", "value": "10"},
            "set": True,
            "result": True,
        }


class TestCheck:
    def test_identity_is_id(self):
        a = Check(id="1.1.1", text="first")
        b = Check(id="1.1.1", text="second", scored=True)
        assert a == b
        assert len({a, b}) == 1
        assert Check(id="1.1.2") != a

    def test_results_do_not_affect_identity(self):
        a = Check(id="1.1.1")
        b = Check(id="1.1.1")
        a.state = State.FAIL
        assert a == b

    def test_reset(self):
        item = TestItem(flag="--a", result=True)
        check = Check(id="1", tests=TestSet(test_items=[item]))
        check.state = State.PASS
        check.actual_value = "x"
        check.expected_result = "y"
        check.reason = "z"
        check.audit_output = "out"

        check.reset()

        assert check.state is None
        assert check.actual_value == check.expected_result == check.reason == check.audit_output == ""
        assert item.result is None

    def test_from_dict_accepts_is_multiple(self):
        assert Check.from_dict({"id": "1", "is_multiple": True}).is_multiple is True

    def test_to_dict(self):
        check = Check(id="1", text="t", scored=True, tests=TestSet(test_items=[TestItem(flag="f")]))
        check.state = State.WARN
        data = check.to_dict()
        assert data["id"] == "1"
        assert data["type"] == ""
        assert data["state"] == "WARN"
        assert data["test_items"][0]["flag"] == "f"

    def test_to_dict_without_tests(self):
        assert Check(id="1").to_dict()["test_items"] == []
        assert Check(id="1").to_dict()["state"] is None


class TestPublicApi:
    def test_lazy_exports(self):
        import bench_checker

        for name in bench_checker.__all__:
            assert getattr(bench_checker, name) is not None

    def test_unknown_attribute(self):
        import bench_checker

        with pytest.raises(AttributeError):
            bench_checker.NotAThing  # noqa: B018

    def test_version_constant(self):
        import bench_checker
        from bench_checker.config.constants import BenchCheckerConstants

        assert BenchCheckerConstants.VERSION == bench_checker.__version__
