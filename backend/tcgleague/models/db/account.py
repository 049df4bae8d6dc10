from enum import auto

from tcgleague.utils.types import EnumAutoStr


class UserAccountType(EnumAutoStr):
    PLAYER = auto()
    STORE = auto()
    ADMIN = auto()
