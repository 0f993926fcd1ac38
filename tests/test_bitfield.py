import enum

import pytest

from gbakit.bitfield import Bitfield, BoolField, EnumField, IntField


class Mode(enum.Enum):
    A = 0 << 4
    B = 1 << 4
    C = 2 << 4


class Sample(Bitfield, width=8):
    flag = BoolField(0)
    level = IntField(1, 3)
    mode = EnumField(Mode, 4, 5)
    top = BoolField(7)


def test_defaults_are_zero():
    s = Bitfield.replace(Sample())
    assert s.bits == 0
    assert s.flag is False
    assert s.level == 0
    assert s.mode is Mode.A


def test_bool_field_sets_single_bit():
    assert Bitfield.replace(Sample(), flag=True).bits == 1


def test_int_field_round_trip_and_isolation():
    for value in range(8):
        s = Bitfield.replace(Sample(), level=value)
        assert s.level == value
        assert s.flag is False
        assert s.top is False
        assert s.mode is Mode.A


def test_enum_field_round_trip():
    for member in Mode:
        s = Bitfield.replace(Sample(flag=True), mode=member)
        assert s.mode is member
        assert s.flag is True


def test_replace_leaves_original_unchanged():
    s = Sample(level=3)
    t = Bitfield.replace(s, level=5, top=True)
    assert s.level == 3
    assert s.top is False
    assert t.level == 5
    assert t.top is True


def test_replace_back_restores_equality():
    s = Sample(flag=True, level=6, mode=Mode.C)
    assert Bitfield.replace(Bitfield.replace(s, level=1), level=6) == s


def test_bits_round_trip():
    s = Sample(flag=True, level=4, mode=Mode.B, top=True)
    assert Bitfield.replace(Sample(s.bits)) == s
    assert int(s) == s.bits


def test_int_field_out_of_range():
    with pytest.raises(ValueError):
        Bitfield.replace(Sample(), level=8)
    with pytest.raises(ValueError):
        Bitfield.replace(Sample(), level=-1)


def test_int_field_rejects_non_int():
    with pytest.raises(TypeError):
        Bitfield.replace(Sample(), level="3")


def test_enum_field_rejects_wrong_type():
    with pytest.raises(TypeError):
        Bitfield.replace(Sample(), mode=16)


def test_invalid_enum_bit_pattern_raises_on_read():
    s = Bitfield.replace(Sample(0b0011_0000))
    assert s.bits == 0b0011_0000
    with pytest.raises(ValueError):
        _ = s.mode


def test_unknown_field():
    with pytest.raises(TypeError):
        Bitfield.replace(Sample(), nonexistent=1)


def test_bits_must_fit_width():
    with pytest.raises(ValueError):
        Bitfield.replace(Sample(1 << 8))
    with pytest.raises(ValueError):
        Bitfield.replace(Sample(-1))


def test_immutable():
    s = Bitfield.replace(Sample())
    with pytest.raises(AttributeError):
        s.flag = True
    with pytest.raises(AttributeError):
        s.other = 1
    assert s.flag is False


def test_equality_and_hash():
    a = Bitfield.replace(Sample(), level=2)
    b = Bitfield.replace(Sample(level=1), level=2)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_different_types_not_equal():
    class Other(Bitfield, width=8):
        flag = BoolField(0)

    other = Bitfield.replace(Other(1))
    sample = Bitfield.replace(Sample(1))
    assert other.bits == sample.bits
    assert (other == sample) is False


def test_field_outside_width_rejected():
    with pytest.raises(ValueError):

        class TooWide(Bitfield, width=8):
            big = BoolField(8)


def test_repr_names_fields():
    text = repr(Bitfield.replace(Sample(flag=True)))
    assert text.startswith("Sample(")
    assert "flag=True" in text
    assert "level=0" in text