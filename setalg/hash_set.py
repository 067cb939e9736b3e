from __future__ import annotations

from collections import abc
from typing import Any, Callable, Iterator, TypeVar

from setalg.codec import ElementCodec
from setalg.utils.type import Self, undefined

_T = TypeVar('_T')


class HashSet(abc.MutableSet[_T]):
    """无序集合，元素需可哈希，内部以 `dict[_T, None]` 存储

    Notes
    -----
        迭代、 `to_list` 、 `search_all` 与 `encode` 的元素顺序均不作保证。

        该类型不是线程安全的，并发修改需要调用者自行加锁。
    """
    _m: dict[_T, None] | None = None

    def __init__(self, *initial: _T):
        self._m = {}
        self.add(*initial)

    @property
    def _storage(self) -> dict[_T, None]:
        # 未经过__init__构造的实例在首次访问时初始化
        if self._m is None:
            self._m = {}
        return self._m

    @classmethod
    def _from_iterable(cls, it):
        return cls(*it)

    @classmethod
    def from_json(cls, data: bytes | str, element_decoder: Callable[[Any], _T] | None = None) -> Self:
        ret = cls()
        ret.decode(data, element_decoder=element_decoder)
        return ret

    def add(self, *values: _T):
        storage = self._storage
        for v in values:
            storage[v] = None

    def remove(self, *values: _T):
        storage = self._storage
        for v in values:
            storage.pop(v, None)

    def discard(self, value: _T):
        self.remove(value)

    def clear(self):
        self._m = {}

    def contains(self, value: _T) -> bool:
        return value in self._storage

    def size(self) -> int:
        return len(self._storage)

    def is_empty(self) -> bool:
        return self.size() == 0

    def to_list(self) -> list[_T]:
        return list(self._storage)

    def clone(self) -> Self:
        ret = type(self)()
        ret._m = dict(self._storage)
        return ret

    def copy(self) -> Self:
        return self.clone()

    def equal(self, other: abc.Set) -> bool:
        if self.size() != len(other):
            return False

        return all(v in other for v in self._storage)

    def is_subset_of(self, other: abc.Set) -> bool:
        if self.size() > len(other):
            return False

        return all(v in other for v in self._storage)

    def is_superset_of(self, other: abc.Set) -> bool:
        if isinstance(other, HashSet):
            return other.is_subset_of(self)

        if len(other) > self.size():
            return False

        return all(v in self._storage for v in other)

    def union(self, other: abc.Set) -> Self:
        ret = self.clone()
        ret.add(*other)
        return ret

    def intersection(self, other: abc.Set) -> Self:
        return self._from_iterable(v for v in self._storage if v in other)

    def difference(self, other: abc.Set) -> Self:
        return self._from_iterable(v for v in self._storage if v not in other)

    def symmetric_difference(self, other: abc.Set) -> Self:
        ret = self.difference(other)
        ret.add(*(v for v in other if v not in self._storage))
        return ret

    def search_one(self, predicate: Callable[[_T], bool], default=undefined):
        """查找任意一个满足条件的元素

        Parameters
        ----------
        predicate
            判断谓词
        default
            未找到时的返回值，默认为 `undefined`

        Returns
        -------
        ret
            满足 `predicate` 的某个元素，存在多个时返回哪一个不作保证，不存在时返回 `default`

        Notes
        -----
            应使用 `ret is undefined` 判断是否找到，元素本身可能是 `None` 或 `0` 等值
        """
        for v in self._storage:
            if predicate(v):
                return v
        else:
            return default

    def search_all(self, predicate: Callable[[_T], bool]) -> list[_T]:
        return [v for v in self._storage if predicate(v)]

    def encode(self) -> bytes:
        """编码为json数组文本

        Returns
        -------
        ret
            utf-8编码的json数组

        Raises
        ------
        EncodingError
            集合中存在无法以json表示的元素
        """
        return ElementCodec.encode(self._storage)

    def decode(self, data: bytes | str, element_decoder: Callable[[Any], _T] | None = None):
        """从json数组文本中解码元素，并替换当前集合的全部内容

        Parameters
        ----------
        data
            json数组文本
        element_decoder
            将每个json值转换为元素的函数，参见 `ElementCodec.decode`

        Raises
        ------
        DecodingError
            `data` 不是合法的json数组，或其中的值无法转换为可哈希元素。
            解码在清空集合之前完成，因此失败时集合保持不变
        """
        elements = ElementCodec.decode(data, element_decoder=element_decoder)

        self.clear()
        self.add(*elements)

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[_T]:
        return iter(self._storage)

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.equal(other)

    def __le__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.is_subset_of(other)

    def __ge__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.is_superset_of(other)

    def __or__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other):
        if not isinstance(other, abc.Set):
            return NotImplemented
        return self.symmetric_difference(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self._storage)})"

    issubset = property(lambda self: self.is_subset_of)
    issuperset = property(lambda self: self.is_superset_of)
