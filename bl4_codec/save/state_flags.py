"""Bitmask stored in the ``state_flags`` field of inventory items."""
from dataclasses import dataclass

VALID = 1           # bit 0 - item exists
FAVORITE = 2        # bit 1
JUNK = 4            # bit 2
LABEL1 = 16         # bit 4
LABEL2 = 32         # bit 5
LABEL3 = 64         # bit 6
LABEL4 = 128        # bit 7
IN_BACKPACK = 512   # bit 9 - in backpack, not equipped

# Only one label can be set at a time
ALL_LABELS = FAVORITE | JUNK | LABEL1 | LABEL2 | LABEL3 | LABEL4


@dataclass(frozen=True)
class StateFlags:
    bits: int = 0

    @classmethod
    def backpack(cls) -> "StateFlags":
        return cls(VALID | IN_BACKPACK)

    @classmethod
    def equipped(cls) -> "StateFlags":
        return cls(VALID)

    bank = equipped

    def with_label(self, label: int) -> "StateFlags":
        """Sets one label, clearing the others. ``0`` clears all labels."""
        if label & ~ALL_LABELS:
            raise ValueError(f"{label:#x} is not a label bit")
        return StateFlags((self.bits & ~ALL_LABELS) | label)

    def with_favorite(self) -> "StateFlags":
        return self.with_label(FAVORITE)

    def with_junk(self) -> "StateFlags":
        return self.with_label(JUNK)

    def to_equipped(self) -> "StateFlags":
        return StateFlags(self.bits & ~IN_BACKPACK)

    def to_backpack(self) -> "StateFlags":
        return StateFlags(self.bits | IN_BACKPACK)

    @property
    def is_favorite(self) -> bool:
        return bool(self.bits & FAVORITE)

    @property
    def is_junk(self) -> bool:
        return bool(self.bits & JUNK)

    @property
    def is_in_backpack(self) -> bool:
        return bool(self.bits & IN_BACKPACK)

    @property
    def is_equipped(self) -> bool:
        return not self.is_in_backpack

    def __int__(self):
        return self.bits
