import pytest

from gbakit.system import (
    DestAddrControl,
    DmaControl,
    DmaStartTiming,
    InterruptFlags,
    KeyInterruptControl,
    Keys,
    KeysLowActive,
    ResetFlags,
    SrcAddrControl,
    TimerControl,
)

KEY_NAMES = ["a", "b", "select", "start", "right", "left", "up", "down", "r", "l"]


def test_dma_defaults():
    d = DmaControl()
    assert d.dest_addr is DestAddrControl.INCREMENT
    assert d.src_addr is SrcAddrControl.INCREMENT
    assert d.start_time is DmaStartTiming.IMMEDIATELY
    assert d.enabled is False


@pytest.mark.parametrize("dest", list(DestAddrControl))
@pytest.mark.parametrize("src", list(SrcAddrControl))
def test_dma_address_controls_round_trip(dest, src):
    d = DmaControl(enabled=True).replace(dest_addr=dest, src_addr=src)
    assert d.dest_addr is dest
    assert d.src_addr is src
    assert d.enabled is True


@pytest.mark.parametrize("timing", list(DmaStartTiming))
def test_dma_start_timing_round_trip(timing):
    d = DmaControl(irq_when_done=True, start_time=timing)
    assert d.start_time is timing
    assert d.irq_when_done is True
    assert d.transfer_u32 is False


def test_dma_enum_values_are_pre_shifted():
    assert DmaControl(src_addr=SrcAddrControl.PROHIBITED).bits == 3 << 7
    assert DmaControl(start_time=DmaStartTiming.VBLANK).bits == 1 << 12
    assert DmaStartTiming(1 << 12) is DmaStartTiming.VBLANK


def test_dma_rejects_wrong_enum():
    with pytest.raises(TypeError):
        DmaControl(dest_addr=SrcAddrControl.FIXED)


def test_interrupt_flags_repr():
    assert repr(InterruptFlags(vblank=True, timer2=True)) == "InterruptFlags {vblank,timer2,}"
    assert repr(InterruptFlags()) == "InterruptFlags {}"


def test_interrupt_flags_or_and_xor():
    a = InterruptFlags(vblank=True, keypad=True)
    b = InterruptFlags(keypad=True, dma3=True)
    union = a | b
    assert union.vblank and union.keypad and union.dma3
    both = a & b
    assert both == InterruptFlags(keypad=True)
    diff = a ^ b
    assert diff == InterruptFlags(vblank=True, dma3=True)


def test_interrupt_flags_invert_sets_every_flag():
    inverted = ~InterruptFlags()
    assert inverted.vblank and inverted.gamepak and inverted.serial
    assert ~inverted == InterruptFlags()


def test_interrupt_flags_ops_reject_other_types():
    with pytest.raises(TypeError):
        InterruptFlags() | Keys()


@pytest.mark.parametrize("name", KEY_NAMES)
def test_keys_low_active_round_trip(name):
    keys = Keys(**{name: True})
    low = keys.to_low_active()
    assert getattr(low, f"{name}_released") is False
    assert Keys.from_low_active(low) == keys


def test_all_released_means_no_keys():
    released = KeysLowActive(**{f"{n}_released": True for n in KEY_NAMES})
    assert Keys.from_low_active(released) == Keys()
    assert Keys().to_low_active() == released


def test_x_signum():
    assert Keys().x_signum() == 0
    assert Keys(right=True).x_signum() == 1
    assert Keys(left=True).x_signum() == -1
    assert Keys(left=True, right=True).x_signum() == 1


def test_y_signum():
    assert Keys().y_signum() == 0
    assert Keys(down=True).y_signum() == 1
    assert Keys(up=True).y_signum() == -1
    assert Keys(up=True, down=True).y_signum() == 1


def test_key_interrupt_control_round_trip():
    k = KeyInterruptControl(a=True, start=True, enabled=True, require_all=True)
    assert k.a and k.start and k.enabled and k.require_all
    assert k.b is False
    assert KeyInterruptControl(k.bits) == k


def test_reset_flags_fields():
    r = ResetFlags(vram=True, all_other_io=True)
    assert r.vram is True
    assert r.all_other_io is True
    assert r.palram is False
    assert ResetFlags(r.bits) == r


def test_reset_flags_is_eight_bits():
    with pytest.raises(ValueError):
        ResetFlags(1 << 8)


def test_timer_control_round_trip():
    t = TimerControl().replace(prescaler_selection=3, enabled=True)
    assert t.prescaler_selection == 3
    assert t.enabled is True
    assert t.chained_counting is False
    with pytest.raises(ValueError):
        t.replace(prescaler_selection=4)


def test_timer_control_is_eight_bits():
    with pytest.raises(ValueError):
        TimerControl(1 << 8)