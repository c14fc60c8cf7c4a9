from .shared import printf
from .table import Deleted, Empty, Occupied, Table


def dump_table(table: Table, name: str):
    printf(
        "== {0:s} == count {1:d} capacity {2:d} base {3:d}\n",
        name,
        table.count,
        table.capacity,
        table.base_capacity,
    )

    for index in range(len(table.slots)):
        dump_slot(table, index)


def dump_slot(table: Table, index: int):
    printf("{0:04d} ", index)
    match table.slots[index]:
        case Empty():
            printf("empty\n")
        case Deleted():
            printf("deleted\n")
        case Occupied(entry=entry):
            printf("occupied {0!r} -> {1!r}\n", entry.key, entry.value)
