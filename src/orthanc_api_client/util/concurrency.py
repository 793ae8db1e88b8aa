from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TypeVar

T = TypeVar('T')
U = TypeVar('U')


def fan_out(function: Callable[[T], U], items: Iterable[T], max_workers: int) -> list[U]:
    """
    Apply a function to each item concurrently, using at most `max_workers` threads, and return
    the results in the order of the items.

    All the calls are waited for, even if some of them fail. If any call raised an exception, the
    exception of the first failed item is raised once all the calls are done.
    """

    items = list(items)
    if items == []:
        return []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        futures = [executor.submit(function, item) for item in items]
        wait(futures)

    return [future.result() for future in futures]
