"""
Utility functions and classes that are not specific to this project.
"""
from collections.abc import Callable
from collections.abc import Iterable
from typing import Generic
from typing import TypeVar

K = TypeVar('K')
V = TypeVar('V')

class LazyValue(Generic[V]):
    _value: V

    _value_getter: Callable[[], V]
    _loaded: bool

    def __init__(self, getter):
        self._value_getter = getter

        self._value = None
        self._loaded = False

    @property
    def value(self):
        if not self._loaded:
            self._value = self._value_getter()
            self._loaded = True

        return self._value


class MultikeyCache(Generic[K, V]):
    '''
    Cache where one value can be stored under several equivalent keys.

    None is a valid cached value, so known misses are not fetched again.
    '''
    _data_cache: dict[K, V]

    def __init__(self):
        self._data_cache = {}

    def get(
        self,
        equivalent_keys: Iterable[K],
        fetch: Callable[[], V]
    ) -> tuple[V, bool]:
        checked_keys = []
        found_cached = False

        for k in equivalent_keys:
            if k in self._data_cache:
                result = self._data_cache[k]
                found_cached = True
                break

            # Only append names AFTER they were not found
            checked_keys.append(k)
        else:
            # Only executes when loop did not break
            # Key not found. Value must be obtained.
            result = fetch()

        # Set all names for future look ups
        for k in checked_keys:
            self._data_cache[k] = result

        return result, found_cached

    @property
    def allvalues(self):
        return {v for v in self._data_cache.values() if v is not None}
