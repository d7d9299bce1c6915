"""Compact integer and TLV encoding, version words, time-weighted history, integer arrays, idle pools and idle queues."""

__version__ = "1.0.81"

__all__ = ["datapack", "version", "history", "intarray", "idlepool", "idlequeue"]