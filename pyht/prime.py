from math import isqrt


def is_prime(x: int) -> int:
    """Return 1 if x is prime, 0 if composite and -1 if x < 2."""
    if x < 2:
        return -1
    if x < 4:
        return 1
    if x % 2 == 0:
        return 0

    for i in range(3, isqrt(x) + 1, 2):
        if x % i == 0:
            return 0
    return 1


def next_prime(x: int) -> int:
    """Smallest prime >= x."""
    x = max(x, 2)
    while is_prime(x) != 1:
        x += 1
    return x
