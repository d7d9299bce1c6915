"""Library version and helpers for packing versions into a single word."""

__all__ = [
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_MICRO",
    "VERSION_STRING",
    "VERSION",
    "version_word",
    "version_major",
    "version_minor",
    "version_micro",
    "version",
]

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_MICRO = 81
VERSION_STRING = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_MICRO}"


def version_word(major: int, minor: int, micro: int) -> int:
    """Pack a version into one integer: 7 bits major, 12 minor, 12 micro."""
    return ((major & 0x7F) << 24) | ((minor & 0xFFF) << 12) | (micro & 0xFFF)


def version_major(word: int) -> int:
    """Major part of a packed version."""
    return (word >> 24) & 0x7F


def version_minor(word: int) -> int:
    """Minor part of a packed version."""
    return (word >> 12) & 0xFFF


def version_micro(word: int) -> int:
    """Micro part of a packed version."""
    return word & 0xFFF


VERSION = version_word(VERSION_MAJOR, VERSION_MINOR, VERSION_MICRO)


def version() -> int:
    """The running library version as a packed word."""
    return version_word(VERSION_MAJOR, VERSION_MINOR, VERSION_MICRO)