import math

import pytest

from perfstat.scale import NO_OP_SCALER, Scaler, common_scale, scale
from perfstat.units import UnitClass

D = UnitClass.DECIMAL
B = UnitClass.BINARY

CASES = [
    (D, 0, "0.000", "0.000"),
    (D, 1, "1.000", "1.000"),
    (D, -1, "-1.000", "-1.000"),
    (D, 9999500000000000, "9999.5T", "9999.5T"),
    (D, 999950000000000, "1000.0T", "999.9T"),
    (D, 99995000000000, "100.0T", "99.99T"),
    (D, 9999500000000, "10.00T", "9.999T"),
    (D, 999950000000, "1.000T", "999.9G"),
    (D, 99995000000, "100.0G", "99.99G"),
    (D, 9999500000, "10.00G", "9.999G"),
    (D, 999950000, "1.000G", "999.9M"),
    (D, 99995000, "100.0M", "99.99M"),
    (D, 9999500, "10.00M", "9.999M"),
    (D, 999950, "1.000M", "999.9k"),
    (D, 99995, "100.0k", "99.99k"),
    (D, 9999.5, "10.00k", "9.999k"),
    (D, 999.95, "1.000k", "999.9"),
    (D, 99.995, "100.0", "99.99"),
    (D, 9.9995, "10.00", "9.999"),
    (D, 0.99995, "1.000", "999.9m"),
    (D, 0.099995, "100.0m", "99.99m"),
    (D, 0.0099995, "10.00m", "9.999m"),
    (D, 0.00099995, "1.000m", "999.9µ"),
    (D, 0.000099995, "100.0µ", "99.99µ"),
    (D, 0.0000099995, "10.00µ", "9.999µ"),
    (D, 0.00000099995, "1.000µ", "999.9n"),
    (D, 0.000000099995, "100.0n", "99.99n"),
    (D, 0.0000000099995, "10.00n", "9.999n"),
    (D, 0.00000000099995, "1.000n", "0.9999n"),
    (D, math.nextafter(0.000000000099995, 1), "0.1000n", "0.09999n"),
    (D, 0.0000000000099995, "0.01000n", "0.009999n"),
    (D, math.nextafter(0.00000000000099995, 1), "0.001000n", "0.0009999n"),
    (D, 0.000000000000099995, "0.0001000n", "0.00009999n"),
    (D, 0.0000000000000099995, "0.00001000n", "0.000009999n"),
    (D, math.nextafter(0.00000000000000099995, 1), "0.000001000n", "0.0000009999n"),
    (D, -99995000000000, "-100.0T", "-99.99T"),
    (D, -0.0000000099995, "-10.00n", "-9.999n"),
    (B, 0, "0.000", "0.000"),
    (B, 1, "1.000", "1.000"),
    (B, -1, "-1.000", "-1.000"),
    (B, 0.99995 * (1 << 50), "1023.9Ti", "1023.9Ti"),
    (B, 99.995 * (1 << 40), "100.0Ti", "99.99Ti"),
    (B, 9.9995 * (1 << 40), "10.00Ti", "9.999Ti"),
    (B, 0.99995 * (1 << 40), "1.000Ti", "1023.9Gi"),
    (B, 99.995 * (1 << 30), "100.0Gi", "99.99Gi"),
    (B, 9.9995 * (1 << 30), "10.00Gi", "9.999Gi"),
    (B, 0.99995 * (1 << 30), "1.000Gi", "1023.9Mi"),
    (B, 99.995 * (1 << 20), "100.0Mi", "99.99Mi"),
    (B, 9.9995 * (1 << 20), "10.00Mi", "9.999Mi"),
    (B, 0.99995 * (1 << 20), "1.000Mi", "1023.9Ki"),
    (B, 99.995 * (1 << 10), "100.0Ki", "99.99Ki"),
    (B, 9.9995 * (1 << 10), "10.00Ki", "9.999Ki"),
    (B, 0.99995 * (1 << 10), "1.000Ki", "1023.9"),
    (B, 99.995 * (1 << 0), "100.0", "99.99"),
    (B, 9.9995 * (1 << 0), "10.00", "9.999"),
    (B, 0.99995, "1.000", "0.9999"),
    (B, 0.099995, "0.1000", "0.09999"),
    (B, 0.0099995, "0.01000", "0.009999"),
    (B, 0.00099995, "0.001000", "0.0009999"),
    (B, 0.000099995, "0.0001000", "0.00009999"),
    (B, 0.0000099995, "0.00001000", "0.000009999"),
    (B, 0.00000099995, "0.000001000", "0.0000009999"),
    (B, 0.00000009995, "0.0000001000", "0.0000000999"),
    (B, math.nextafter(0.00000000995, 1), "0.0000000100", "0.0000000099"),
    (B, 0.00000000095, "0.0000000010", "0.0000000009"),
    (B, 0.00000000005, "0.0000000001", "0.0000000000"),
    (B, 0.000000000009, "0.0000000000", "0.0000000000"),
]


@pytest.mark.parametrize("cls, num, want, want_pred", CASES)
def test_scale(cls, num, want, want_pred):
    num = float(num)
    assert scale(num, cls) == want
    pred = math.nextafter(num, 0)
    assert scale(pred, cls) == want_pred


@pytest.mark.parametrize(
    "val, want",
    [(1, "1"), (123456789, "123456789"), (123.456789, "123.456789")],
)
def test_no_op_scaler(val, want):
    assert NO_OP_SCALER.format(val) == want


def test_common_scale_uses_smallest_nonzero_value():
    scaler = common_scale([0.0, 5e9, 2500.0], UnitClass.DECIMAL)
    assert scaler == Scaler(2, 1e3, "k")
    assert scaler.format(5e9) == "5000000.00k"


def test_common_scale_all_zero():
    assert common_scale([0.0, 0.0], UnitClass.DECIMAL) == Scaler(3, 1.0, "")


def test_common_scale_rejects_bad_class():
    with pytest.raises(ValueError):
        common_scale([1.0], "bogus")


def test_scaler_format_appends_prefix():
    assert Scaler(1, 1024.0, "Ki").format(2048.0) == "2.0Ki"