"""Profile categories and their string forms."""

from __future__ import annotations

from enum import Enum, IntFlag
from typing import Union


class ProfileCategory(IntFlag):
    """Independent profiling categories; NONE disables, ALL enables every flag."""
    NOT_SET = 0x00000000
    NONE = 0x00000001
    ENERGY = 0x00000002
    TASK = 0x00000004
    LUSTRE = 0x00000008
    NETWORK = 0x00000010
    ALL = 0xFFFFFFFF


class ProfileInfo(str, Enum):
    """Values the host can read back through ``get``."""
    DIR = "dir"  # collector host string
    DEFAULT = "default"
    RUNNING = "running"


_NAMED_CATEGORIES = {
    "energy": ProfileCategory.ENERGY,
    "task": ProfileCategory.TASK,
    "lustre": ProfileCategory.LUSTRE,
    "filesystem": ProfileCategory.LUSTRE,
    "network": ProfileCategory.NETWORK,
}

_DISPLAY_ORDER = [
    (ProfileCategory.ENERGY, "Energy"),
    (ProfileCategory.TASK, "Task"),
    (ProfileCategory.LUSTRE, "Lustre"),
    (ProfileCategory.NETWORK, "Network"),
]


def profile_from_string(text: str | None) -> ProfileCategory:
    """Parse a profile selector such as ``"all"`` or ``"energy,task"``.

    Returns NOT_SET when the text is empty or holds any unrecognized token.
    """
    if not text:
        return ProfileCategory.NOT_SET

    tokens = [token.strip().lower() for token in text.split(",") if token.strip()]
    if tokens == ["none"]:
        return ProfileCategory.NONE
    if tokens == ["all"]:
        return ProfileCategory.ALL

    result = ProfileCategory.NOT_SET
    for token in tokens:
        flag = _NAMED_CATEGORIES.get(token)
        if flag is None:
            return ProfileCategory.NOT_SET
        result |= flag
    return result


def profile_to_string(profile: Union[ProfileCategory, int]) -> str:
    """Render a profile the way operators see it in configuration reports."""
    value = int(profile)
    if value == ProfileCategory.NOT_SET:
        return "NotSet"
    if value == ProfileCategory.ALL:
        return "All"
    if value == ProfileCategory.NONE:
        return "None"
    names = [label for flag, label in _DISPLAY_ORDER if value & flag]
    return ",".join(names)


def coerce_profile(value: Union[ProfileCategory, int, str, None]) -> ProfileCategory:
    """Accept a category, a raw bitmask or a selector string."""
    if value is None:
        return ProfileCategory.NOT_SET
    if isinstance(value, str):
        return profile_from_string(value)
    return ProfileCategory(int(value))
