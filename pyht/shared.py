from sys import stderr
from typing import Any


# Smallest base capacity a table is ever built with; resizing below it is refused.
TABLE_MIN_BASE_SIZE = 53

# Load thresholds, in percent of capacity.
TABLE_GROW_LOAD = 70
TABLE_SHRINK_LOAD = 10

HT_PRIME_1 = 0x21914047
HT_PRIME_2 = 0x1B873593


def printf(format: str, *args: Any):
    print(format.format(*args), end="")


def printf_err(format: str, *args: Any):
    print(format.format(*args), end="", file=stderr)
