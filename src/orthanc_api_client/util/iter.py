from collections.abc import Iterable
from typing import TypeVar

T = TypeVar('T')


def deduplicate(iterable: Iterable[T]) -> list[T]:
    """
    Remove the duplicate elements of an iterable, keeping the first occurrence of each element in
    its original position.
    """

    return list(dict.fromkeys(iterable))
