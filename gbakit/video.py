"""Display, background, blending and sprite register values."""

from __future__ import annotations

import enum

from gbakit.bitfield import Bitfield, BoolField, EnumField, IntField


class BackgroundControl(Bitfield, width=16):
    """Background layer control register."""

    priority = IntField(0, 1)
    char_base_block = IntField(2, 3)
    mosaic = BoolField(6)
    is_8bpp = BoolField(7)
    screen_base_block = IntField(8, 12)
    affine_overflow_wrapped = BoolField(13)
    screen_size = IntField(14, 15)


class ColorSpecialEffect(enum.Enum):
    """Blend effect, stored pre-shifted into bits 6..=7."""

    NO_EFFECT = 0 << 6
    ALPHA_BLEND = 1 << 6
    BRIGHTNESS_INCREASE = 2 << 6
    BRIGHTNESS_DECREASE = 3 << 6


class BlendControl(Bitfield, width=16):
    """Color special effects control register."""

    bg0_1st_target = BoolField(0)
    bg1_1st_target = BoolField(1)
    bg2_1st_target = BoolField(2)
    bg3_1st_target = BoolField(3)
    obj_1st_target = BoolField(4)
    backdrop_1st_target = BoolField(5)
    effect = EnumField(ColorSpecialEffect, 6, 7)
    bg0_2nd_target = BoolField(8)
    bg1_2nd_target = BoolField(9)
    bg2_2nd_target = BoolField(10)
    bg3_2nd_target = BoolField(11)
    obj_2nd_target = BoolField(12)
    backdrop_2nd_target = BoolField(13)


class Color(Bitfield, width=16):
    """A 15-bit BGR color."""

    red = IntField(0, 4)
    green = IntField(5, 9)
    blue = IntField(10, 14)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        """Pack the three channels without masking, truncated to 16 bits."""
        return cls((blue << 10 | green << 5 | red) & 0xFFFF)


class DisplayControl(Bitfield, width=16):
    """Display control register."""

    display_mode = IntField(0, 2)
    display_frame1 = BoolField(4)
    hblank_interval_free = BoolField(5)
    obj_vram_1d = BoolField(6)
    forced_blank = BoolField(7)
    display_bg0 = BoolField(8)
    display_bg1 = BoolField(9)
    display_bg2 = BoolField(10)
    display_bg3 = BoolField(11)
    display_obj = BoolField(12)
    display_win0 = BoolField(13)
    display_win1 = BoolField(14)
    display_obj_win = BoolField(15)


class DisplayStatus(Bitfield, width=16):
    """Display status register."""

    is_vblank = BoolField(0)
    is_hblank = BoolField(1)
    is_vcount = BoolField(2)
    vblank_irq_enabled = BoolField(3)
    hblank_irq_enabled = BoolField(4)
    vcount_irq_enabled = BoolField(5)
    vcount = IntField(8, 15)


class MosaicSize(Bitfield, width=8):
    """Mosaic size for one of backgrounds or objects."""

    horizontal = IntField(0, 3)
    vertical = IntField(4, 7)


class ObjAttr0(Bitfield, width=16):
    """Object attribute 0."""

    y_pos = IntField(0, 7)
    affine = BoolField(8)
    double_disabled = BoolField(9)
    obj_mode = IntField(10, 11)
    mosaic = BoolField(12)
    use_palbank = BoolField(13)
    obj_shape = IntField(14, 15)


class ObjAttr1(Bitfield, width=16):
    """Object attribute 1; the flip bits share space with the affine index."""

    x_pos = IntField(0, 8)
    affine_index = IntField(9, 13)
    hflip = BoolField(12)
    vflip = BoolField(13)
    obj_size = IntField(14, 15)


class ObjAttr2(Bitfield, width=16):
    """Object attribute 2."""

    tile_index = IntField(0, 9)
    priority = IntField(10, 11)
    palbank_index = IntField(12, 15)


class WindowEnable(Bitfield, width=8):
    """Layers shown inside one window region."""

    bg0 = BoolField(0)
    bg1 = BoolField(1)
    bg2 = BoolField(2)
    bg3 = BoolField(3)
    obj = BoolField(4)
    effect = BoolField(5)