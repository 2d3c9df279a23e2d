from enum import auto

from squadboard.utils.types import EnumAutoStr


class UserAccountType(EnumAutoStr):
    REGULAR = auto()
    ADMIN = auto()
