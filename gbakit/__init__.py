"""Register bitfields, PCG random numbers, non-blocking locks and SRAM save media access."""

__version__ = "0.1.0"
__all__ = ["bitfield", "video", "system", "sound", "rng", "sync", "save", "sram"]