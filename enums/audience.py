from enum import Enum


class Audience(Enum):
    ADMIN = 1
    USER = 2
    COMMON = 3
