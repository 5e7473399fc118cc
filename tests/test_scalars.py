import datetime
import decimal

import pytest
from pydantic import ValidationError

from normival.core.errors import ScalarRangeError, UnsupportedScalarError
from normival.core.presets import domain_names, get_domain
from normival.core.scalars import (
    INTEGERS,
    BoundableDomain,
    DateDomain,
    IntegerDomain,
    PassThroughDomain,
    require_boundable,
)


class TestIntegerDomain:
    @pytest.mark.parametrize(
        "bits,signed,minimum,maximum,name",
        [
            (8, True, -128, 127, "i8"),
            (8, False, 0, 255, "u8"),
            (16, True, -32768, 32767, "i16"),
            (32, False, 0, 2**32 - 1, "u32"),
            (64, True, -(2**63), 2**63 - 1, "i64"),
            (128, False, 0, 2**128 - 1, "u128"),
            (None, True, None, None, "int"),
            (None, False, 0, None, "nat"),
        ],
    )
    def test_ranges(self, bits, signed, minimum, maximum, name) -> None:
        domain = IntegerDomain(bits=bits, signed=signed)
        assert domain.minimum == minimum
        assert domain.maximum == maximum
        assert domain.name == name
        assert domain.is_finite()

    def test_rejects_unknown_width(self) -> None:
        with pytest.raises(ValidationError):
            IntegerDomain(bits=7)

    def test_successor_and_predecessor_are_inverse(self) -> None:
        domain = IntegerDomain(bits=8)
        for value in range(-127, 127):
            assert domain.predecessor(domain.successor(value)) == value

    def test_extremes_have_no_neighbour(self) -> None:
        domain = IntegerDomain(bits=8, signed=False)
        assert domain.successor(255) is None
        assert domain.predecessor(0) is None
        assert INTEGERS.successor(10**40) == 10**40 + 1

    def test_rejects_bool_and_float(self) -> None:
        with pytest.raises(UnsupportedScalarError):
            INTEGERS.validate_value(True)
        with pytest.raises(UnsupportedScalarError):
            INTEGERS.validate_value(1.5)

    def test_rejects_out_of_range(self) -> None:
        with pytest.raises(ScalarRangeError):
            IntegerDomain(bits=8).validate_value(128)
        with pytest.raises(ScalarRangeError):
            IntegerDomain(signed=False).validate_value(-1)

    def test_errors_are_builtin_subclasses(self) -> None:
        with pytest.raises(TypeError):
            INTEGERS.validate_value("3")
        with pytest.raises(ValueError):
            IntegerDomain(bits=8).validate_value(1000)

    def test_count_between(self) -> None:
        assert INTEGERS.count_between(1, 15) == 15
        assert INTEGERS.count_between(3, 2) == 0

    def test_domains_compare_by_value(self) -> None:
        assert IntegerDomain(bits=8) == IntegerDomain(bits=8)
        assert IntegerDomain(bits=8) != IntegerDomain(bits=8, signed=False)
        assert hash(IntegerDomain()) == hash(INTEGERS)


class TestDateDomain:
    def test_steps_one_day(self) -> None:
        domain = DateDomain()
        assert domain.successor(datetime.date(2024, 2, 28)) == (
            datetime.date(2024, 2, 29)
        )
        assert domain.predecessor(datetime.date(2024, 3, 1)) == (
            datetime.date(2024, 2, 29)
        )
        assert domain.successor(datetime.date.max) is None
        assert domain.predecessor(datetime.date.min) is None

    def test_rejects_datetime(self) -> None:
        with pytest.raises(UnsupportedScalarError):
            DateDomain().validate_value(datetime.datetime(2024, 1, 1))

    def test_parse_and_format(self) -> None:
        domain = DateDomain()
        value = domain.parse_value(" 2024-05-06 ")
        assert value == datetime.date(2024, 5, 6)
        assert domain.format_value(value) == "2024-05-06"

    def test_count_between(self) -> None:
        assert DateDomain().count_between(
            datetime.date(2024, 1, 1), datetime.date(2024, 12, 31)
        ) == 366


class TestPassThroughDomain:
    def test_is_not_boundable(self) -> None:
        domain = PassThroughDomain(value_type="float")
        assert not domain.is_finite()
        assert not isinstance(domain, BoundableDomain)
        with pytest.raises(UnsupportedScalarError, match="boundable"):
            require_boundable(domain, "size")

    def test_float_rejects_non_finite(self) -> None:
        domain = PassThroughDomain(value_type="float")
        assert domain.validate_value(1) == 1
        with pytest.raises(ScalarRangeError):
            domain.validate_value(float("inf"))
        with pytest.raises(ScalarRangeError):
            domain.validate_value(float("nan"))

    @pytest.mark.parametrize(
        "value_type,value",
        [
            ("str", 3),
            ("decimal", 1.5),
            ("datetime", datetime.date(2024, 1, 1)),
            ("float", "x"),
        ],
    )
    def test_rejects_wrong_type(self, value_type, value) -> None:
        with pytest.raises(UnsupportedScalarError):
            PassThroughDomain(value_type=value_type).validate_value(value)

    def test_parse_values(self) -> None:
        assert PassThroughDomain(value_type="decimal").parse_value(
            "1.25"
        ) == decimal.Decimal("1.25")
        assert PassThroughDomain(value_type="str").parse_value(" ab ") == "ab"
        with pytest.raises(ValueError):
            PassThroughDomain(value_type="decimal").parse_value("abc")

    def test_rejects_unknown_value_type(self) -> None:
        with pytest.raises(ValidationError):
            PassThroughDomain(value_type="complex")


class TestPresets:
    def test_lookup(self) -> None:
        assert get_domain("int") == INTEGERS
        assert get_domain(" U8 ") == IntegerDomain(bits=8, signed=False)
        assert get_domain("date") == DateDomain()
        assert get_domain("float") == PassThroughDomain(value_type="float")

    def test_every_name_resolves_to_matching_domain(self) -> None:
        for name in domain_names():
            assert get_domain(name).name == name

    def test_unknown_domain(self) -> None:
        with pytest.raises(ValueError, match="Unknown domain"):
            get_domain("complex")
