from dataclasses import dataclass

from .hashing import double_hash
from .prime import next_prime
from .shared import (
    TABLE_GROW_LOAD,
    TABLE_MIN_BASE_SIZE,
    TABLE_SHRINK_LOAD,
    printf,
)


Value = str | bytes


_debug_trace_resize = False


def set_debug_trace_resize(b: bool):
    global _debug_trace_resize
    _debug_trace_resize = b


class TableError(Exception):
    pass


class TableFullError(TableError):
    pass


class TableFreedError(TableError):
    pass


class TableAllocationError(MemoryError):
    pass


class ValueSizeError(ValueError):
    pass


@dataclass
class Entry:
    key: str
    value: Value


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Deleted:
    pass


@dataclass
class Occupied:
    entry: Entry


Slot = Empty | Occupied | Deleted

EMPTY = Empty()
DELETED = Deleted()


@dataclass(frozen=True)
class NotFound:
    pass


def _alloc_slots(capacity: int) -> list[Slot]:
    try:
        return [EMPTY] * capacity
    except MemoryError as e:
        raise TableAllocationError("cannot allocate slots", capacity) from e


def _check_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError("key is not str", key)
    return key


@dataclass
class Table:
    """Open-addressing map from str keys to str values.

    Collisions are resolved by double hashing over a prime number of slots.
    Removed entries leave a Deleted tombstone behind so probe sequences that
    ran through them stay intact; tombstones are only dropped when the table
    is rebuilt by resize().

    With value_size set, values are opaque blobs of exactly that many bytes.
    """

    count: int
    capacity: int
    base_capacity: int
    slots: list[Slot]
    value_size: int | None

    def __init__(
        self, value_size: int | None = None, base_capacity: int = TABLE_MIN_BASE_SIZE
    ) -> None:
        if value_size is not None and value_size <= 0:
            raise ValueError("value_size must be positive", value_size)

        self.value_size = value_size
        self.base_capacity = max(base_capacity, TABLE_MIN_BASE_SIZE)
        self.capacity = next_prime(self.base_capacity)
        self.count = 0
        self.slots = _alloc_slots(self.capacity)

    def insert(self, key: str, value: Value) -> None:
        self._check_live()
        entry = Entry(_check_key(key), self._check_value(value))
        self._insert_entry(entry)

    def search(self, key: str) -> Value | NotFound:
        self._check_live()
        index = self._find(_check_key(key))
        if index is None:
            return NotFound()

        slot = self.slots[index]
        assert isinstance(slot, Occupied)
        return slot.entry.value

    def contains(self, key: str) -> bool:
        return not isinstance(self.search(key), NotFound)

    def delete(self, key: str) -> bool:
        self._check_live()
        _check_key(key)

        load = self.count * 100 // self.capacity
        if load < TABLE_SHRINK_LOAD:
            self.shrink()

        index = self._find(key)
        if index is None:
            return False

        self.slots[index] = DELETED
        self.count -= 1
        return True

    def resize(self, base_capacity: int) -> None:
        self._check_live()
        if base_capacity < TABLE_MIN_BASE_SIZE:
            return

        fresh = Table(self.value_size, base_capacity)
        for slot in self.slots:
            if isinstance(slot, Occupied):
                fresh._insert_entry(slot.entry)

        if _debug_trace_resize:
            printf(
                "resize {0:d} -> {1:d} (count {2:d})\n",
                self.capacity,
                fresh.capacity,
                fresh.count,
            )

        self.base_capacity = fresh.base_capacity
        self.capacity = fresh.capacity
        self.count = fresh.count
        self.slots = fresh.slots

    def grow(self) -> None:
        self.resize(self.base_capacity * 2)

    def shrink(self) -> None:
        self.resize(self.base_capacity // 2)

    def free(self) -> None:
        self.count = 0
        self.capacity = 0
        self.base_capacity = 0
        self.slots = []

    def _insert_entry(self, item: Entry) -> None:
        load = self.count * 100 // self.capacity
        if load > TABLE_GROW_LOAD:
            self.grow()

        self._place(item)

    def _place(self, item: Entry) -> None:
        # Fill the first tombstone on the path only once the key is known
        # not to be stored further along.
        tombstone: int | None = None
        index, step = double_hash(item.key, self.capacity)

        for _ in range(self.capacity):
            match self.slots[index]:
                case Empty():
                    if tombstone is not None:
                        index = tombstone
                    self.slots[index] = Occupied(item)
                    self.count += 1
                    return
                case Deleted():
                    if tombstone is None:
                        tombstone = index
                case Occupied(entry=entry) if entry.key == item.key:
                    entry.value = item.value
                    return

            index = (index + step) % self.capacity

        if tombstone is None:
            raise TableFullError(item.key)
        self.slots[tombstone] = Occupied(item)
        self.count += 1

    def _find(self, key: str) -> int | None:
        index, step = double_hash(key, self.capacity)
        for _ in range(self.capacity):
            match self.slots[index]:
                case Empty():
                    return None
                case Occupied(entry=entry) if entry.key == key:
                    return index

            index = (index + step) % self.capacity
        return None

    def _check_live(self):
        if self.capacity == 0:
            raise TableFreedError("table has been freed")

    def _check_value(self, value: Value) -> Value:
        if self.value_size is None:
            if not isinstance(value, str):
                raise TypeError("value is not str", value)
            return value

        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("value is not bytes", value)
        blob = bytes(value)
        if len(blob) != self.value_size:
            raise ValueSizeError("wrong value size", self.value_size, len(blob))
        return blob


def new_table(value_size: int | None = None) -> Table:
    return Table(value_size)


def free_table(table: Table):
    table.free()
