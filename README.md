# gbakit

Building blocks for GBA-style software, in plain Python with no third-party
dependencies:

- **Register types** (`gbakit.video`, `gbakit.system`, `gbakit.sound`):
  immutable 8- and 16-bit values with named bit fields, built on
  `gbakit.bitfield.Bitfield`.
- **Random numbers** (`gbakit.rng`): the 32-bit PCG generator `RNG`, the
  `Gen32` helpers it inherits, and `BoundedRandU16`.
- **Synchronisation** (`gbakit.sync`): `Static`, `RawMutex`, `Mutex` and
  `InitOnce`.
- **Save media** (`gbakit.save`, `gbakit.sram`): the `SaveAccess` front end
  over any `RawSaveAccess`, and a 32 KiB battery-backed SRAM implementation
  held in memory.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Register values

Each register type is a `Bitfield` subclass. Build one from raw bits, from
field values, or both. Every field is a readable attribute. Instances cannot
be changed in place; `replace(...)` returns a new value. `int(value)` and
`value.bits` give the raw integer.

```python
from gbakit.video import Color, DisplayControl
from gbakit.system import Keys, KeysLowActive, InterruptFlags

color = Color.from_rgb(31, 0, 0)
print(color.red, color.green, color.blue)  # 31 0 0

dispcnt = DisplayControl().replace(display_mode=3, display_bg2=True)
print(hex(int(dispcnt)))  # 0x403

keys = Keys.from_low_active(KeysLowActive(0b11_1110_1111))  # right pressed
print(keys.right, keys.x_signum(), keys.y_signum())  # True 1 0

irqs = InterruptFlags(vblank=True) | InterruptFlags(timer0=True)
print(irqs)  # InterruptFlags {vblank,timer0,}
```

Fields come in three kinds, defined in `gbakit.bitfield`:

- `BoolField(bit)` reads and writes a `bool`.
- `IntField(low, high)` covers bits `low` to `high` inclusive. A value
  outside the field's range raises `ValueError`, and a non-integer raises
  `TypeError`.
- `EnumField(enum_type, low, high)` holds an enum whose member values are
  already shifted into place. `BlendControl.effect` (a
  `ColorSpecialEffect`) and `DmaControl.dest_addr` are examples.

Assigning to an attribute raises `AttributeError`. Raw bits that do not fit
the register width raise `ValueError`.

`InterruptFlags` supports `&`, `|`, `^` and `~`. `Keys.to_low_active()` and
`Keys.from_low_active()` convert to and from the hardware's low-active form.

## Random numbers

```python
from gbakit.rng import RNG, BoundedRandU16

rng = RNG.seed(123, 321)
value = rng.next_u32()
die = rng.next_bounded(6) + 1      # bound must be 1..=0xFFFF

items = [1, 2, 3, 4, 5]
rng.shuffle(items)                 # in place; empty sequences raise ValueError
choice = rng.pick(items)

saved = rng.to_state()             # (state, inc)
restored = RNG.from_state(saved)

rng.jump(1000)                     # skip 1000 steps ahead
rng.jump(0xFFFF_FFFF)              # step back one

d20 = BoundedRandU16(20)
roll = d20.sample(rng)
```

`RNG.default()` seeds with the truncated `DEFAULT_PCG_SEED` and
`DEFAULT_PCG_INC` constants. `Gen32` also provides `next_u8`, `next_u64`,
`next_bool` and `next_color`; the last returns a random 15-bit `Color`.
`jump_lcg32(delta, state, mult, inc)` computes the state of any 32-bit LCG
`delta` steps ahead.

## Synchronisation

None of the locks ever blocks. If a lock is already held, `try_lock()`
returns `None` and `lock()` raises `AlreadyLockedError`. Guards are context
managers and can also be released with `release()`.

```python
from gbakit.sync import Mutex, InitOnce, Static

counter = Mutex(0)
with counter.lock() as guard:
    guard.value += 1

table = InitOnce()
data = table.get(lambda: list(range(10)))  # the initialiser runs only once

flag = Static(False)
old = flag.replace(True)
```

`InitOnce.try_get` stores nothing if the initialiser raises. The exception
propagates, and a later call tries again.

## Save media

```python
from gbakit.sram import use_sram, BatteryBackedAccess
from gbakit.save import SaveAccess

use_sram(BatteryBackedAccess())
access = SaveAccess()
access.prepare_write(500, 600)
access.write_and_verify(500, b"\x0a" * 100)
data = access.read(500, 100)
print(len(access), access.sector_size())  # 32768 1
```

`align_range(start, end)` returns the sector-aligned `range` that
`prepare_write(start, end)` would affect. On media that do not require it,
`prepare_write` does nothing.

`SaveAccess()` raises `NoMediaError` when no implementation is installed.
Accesses outside the media raise `OutOfBoundsError`, and a failed
`write_and_verify` raises `WriteError`. All of these are subclasses of
`SaveError`.

`lock_media()` takes the global media lock and raises `MediaInUseError` if it
is already held.

`BatteryBackedAccess` keeps its 32 KiB in memory. It can start from a given
32 KiB `bytes` value, and `SRAM_MARKER` holds the marker string emulators use
to recognise SRAM saves.

## What this package does not do

- It touches no real hardware. The register types only hold and decode
  values; nothing reads or writes memory-mapped I/O.
- The only save media implementation is SRAM. `MediaType` names flash and
  EEPROM kinds, but no accessor for them is included. To support other media,
  subclass `RawSaveAccess` and install it with `set_save_implementation`.
- There are no timer-driven timeouts for save operations.