from decimal import Decimal

from dealership.common.formatting import thousands, usd
from dealership.common.validators import FieldChecks, require_int


def test_usd():
    assert usd(Decimal("25000")) == "$25,000"
    assert usd(28045.0) == "$28,045"


def test_thousands():
    assert thousands(41205) == "41,205"


def test_field_checks_keep_going():
    checks = FieldChecks()

    assert checks.check(require_int, "x", "bad one") is None
    assert checks.check(require_int, "5", "bad two", min_value=10) is None
    assert checks.check(require_int, "12", "fine", min_value=10) == 12
    assert checks.errors == ["bad one", "bad two"]
