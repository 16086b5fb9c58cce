"""Tests for the remediation plan selector."""

import pytest

from risk_audit.core.priority_fixes import PRIORITY_FIXES, select_fixes
from risk_audit.core.schemas_audit import GENERAL_VOLATILITY, RiskCategory


@pytest.mark.parametrize("category", list(RiskCategory))
def test_each_category_has_a_30_60_90_plan(category):
    fixes = select_fixes(category)
    assert [f.timeline for f in fixes] == ["30 Days", "60 Days", "90 Days"]


def test_accepts_category_value():
    fixes = select_fixes("Cash Flow")
    assert fixes[0].task == "Aggressively collect overdue Accounts Receivable"


def test_unknown_category_has_no_plan():
    assert select_fixes(GENERAL_VOLATILITY) == []


def test_returned_list_is_a_copy():
    fixes = select_fixes(RiskCategory.WORKFORCE)
    fixes.clear()
    assert len(PRIORITY_FIXES[RiskCategory.WORKFORCE]) == 3
    assert len(select_fixes(RiskCategory.WORKFORCE)) == 3
