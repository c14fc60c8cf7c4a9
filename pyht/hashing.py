from .shared import HT_PRIME_1, HT_PRIME_2


def hash_string(key: str, prime: int, modulus: int) -> int:
    """Polynomial hash of the utf-8 bytes of key, reduced by modulus.

    Horner form of sum(prime ** (n - 1 - i) * b[i]), taking the remainder
    after every byte so intermediate values stay below prime * modulus.
    Lone surrogates are encoded as-is so every str key can be hashed.
    """
    hash = 0
    for b in key.encode("utf-8", "surrogatepass"):
        hash = (hash * prime + b) % modulus
    return hash


def double_hash(key: str, capacity: int) -> tuple[int, int]:
    """First slot and step of key's probe sequence.

    The step is h_b + 1 with h_b < capacity - 1, so it is never zero and,
    for a prime capacity, the first `capacity` attempts visit every slot.
    """
    hash_a = hash_string(key, HT_PRIME_1, capacity)
    hash_b = hash_string(key, HT_PRIME_2, capacity - 1)
    return hash_a, hash_b + 1


def probe(key: str, capacity: int, attempt: int) -> int:
    start, step = double_hash(key, capacity)
    return (start + attempt * step) % capacity
