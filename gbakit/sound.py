"""Sound channel, FIFO and mixer register values."""

from __future__ import annotations

import enum

from gbakit.bitfield import Bitfield, BoolField, EnumField, IntField


class MixVolume(enum.Enum):
    """Volume of the PSG channels in the final mix, bits 0..=1."""

    PERCENT_25 = 0
    PERCENT_50 = 1
    PERCENT_100 = 2


class FifoControl(Bitfield, width=16):
    """Direct sound FIFO control and PSG mix volume."""

    mix_volume = EnumField(MixVolume, 0, 1)
    full_volume_a = BoolField(2)
    full_volume_b = BoolField(3)
    enable_right_a = BoolField(8)
    enable_left_a = BoolField(9)
    use_timer1_a = BoolField(10)
    enable_right_b = BoolField(12)
    enable_left_b = BoolField(13)
    use_timer1_b = BoolField(14)


class FifoReset(Bitfield, width=16):
    """FIFO reset bits for the two direct sound channels."""

    reset_a = BoolField(11)
    reset_b = BoolField(15)


class NoiseFrequencyControl(Bitfield, width=16):
    """Noise channel frequency and control."""

    div_ratio = IntField(0, 2)
    counter_width = BoolField(3)
    shift_frequency = IntField(4, 7)
    auto_stop = BoolField(14)
    restart = BoolField(15)


class NoiseLenEnv(Bitfield, width=16):
    """Noise channel length and envelope."""

    sound_length = IntField(0, 5)
    envelope_step = IntField(8, 10)
    envelope_increasing = BoolField(11)
    volume = IntField(12, 15)


class SampleBits(enum.Enum):
    """Output sample resolution, pre-shifted into bits 14..=15."""

    BITS_9 = 0 << 14
    BITS_8 = 1 << 14
    BITS_7 = 2 << 14
    BITS_6 = 3 << 14


class SoundBias(Bitfield, width=16):
    """Sound output bias and sample resolution."""

    bias = IntField(1, 9)
    sample_bits = EnumField(SampleBits, 14, 15)


class SoundControl(Bitfield, width=16):
    """PSG master volume and per-channel left/right enables."""

    right_volume = IntField(0, 2)
    left_volume = IntField(4, 6)
    tone1_right = BoolField(8)
    tone2_right = BoolField(9)
    wave_right = BoolField(10)
    noise_right = BoolField(11)
    tone1_left = BoolField(12)
    tone2_left = BoolField(13)
    wave_left = BoolField(14)
    noise_left = BoolField(15)


class SoundStatus(Bitfield, width=8):
    """Master sound enable and channel playing flags."""

    tone1_playing = BoolField(0)
    tone2_playing = BoolField(1)
    wave_playing = BoolField(2)
    noise_playing = BoolField(3)
    enabled = BoolField(7)


class ToneDutyLenEnv(Bitfield, width=16):
    """Tone channel duty, length and envelope."""

    sound_length = IntField(0, 5)
    wave_pattern = IntField(6, 7)
    envelope_step = IntField(8, 10)
    envelope_increasing = BoolField(11)
    volume = IntField(12, 15)


class ToneFrequencyControl(Bitfield, width=16):
    """Tone channel frequency and control."""

    frequency = IntField(0, 10)
    auto_stop = BoolField(14)
    restart = BoolField(15)


class ToneSweep(Bitfield, width=8):
    """Tone channel 1 frequency sweep."""

    sweep_shift = IntField(0, 2)
    frequency_decreasing = BoolField(3)
    sweep_time = IntField(4, 6)


class WaveControl(Bitfield, width=8):
    """Wave channel bank selection and playback."""

    two_banks = BoolField(5)
    use_bank1 = BoolField(6)
    playing = BoolField(7)


class WaveFrequencyControl(Bitfield, width=16):
    """Wave channel frequency and control."""

    frequency = IntField(0, 10)
    auto_stop = BoolField(14)
    restart = BoolField(15)


class WaveLenVolume(Bitfield, width=16):
    """Wave channel length and volume."""

    length = IntField(0, 7)
    volume = IntField(13, 14)
    force75 = BoolField(15)