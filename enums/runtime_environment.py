from enum import Enum


class RuntimeEnvironment(Enum):
    DEV = "DEV"
    PROD = "PROD"
    TEST = "TEST"
