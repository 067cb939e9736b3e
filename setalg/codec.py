from __future__ import annotations

import json
from typing import Any, Callable, Iterable

import numpy as np

from setalg.utils.type import get_type_name


class EncodingError(ValueError):
    def __init__(self, element_type: str, reason: str):
        super().__init__(element_type, reason)

    @property
    def element_type(self):
        return self.args[0]

    @property
    def reason(self):
        return self.args[1]

    def __str__(self):
        return f'Failed to encode element of type `{self.element_type}`: {self.reason}'


class DecodingError(ValueError):
    def __str__(self):
        return f'Failed to decode set elements: {self.args[0]}'


def register_encoder(*encoded_types):
    """注册元素编码器，用于将无法直接由json表示的元素转换为json可表示的对象

    Parameters
    ----------
    encoded_types
        编码器适用的元素类型，查找时会沿元素类型的MRO向上匹配
    """
    def wrapper(func):
        for t in encoded_types:
            ElementCodec.encoders[t] = func
        return func
    return wrapper


class ElementCodec:
    encoders: dict[type, Callable[[Any], Any]] = {}

    separators = (',', ':')
    allow_nan = False
    encoding = 'utf-8'

    @staticmethod
    def encode(elements: Iterable) -> bytes:
        """将元素编码为json数组文本

        Parameters
        ----------
        elements
            待编码的元素

        Returns
        -------
        ret
            utf-8编码的json数组，元素顺序不作保证

        Raises
        ------
        EncodingError
            存在无法以json表示的元素，原始异常保存在 `__cause__` 中
        """
        elements = list(elements)
        try:
            text = json.dumps(
                elements,
                default=ElementCodec.convert_to_encodable,
                separators=ElementCodec.separators,
                allow_nan=ElementCodec.allow_nan,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise EncodingError(ElementCodec._find_unencodable_type(elements), str(e)) from e

        return text.encode(ElementCodec.encoding)

    @staticmethod
    def decode(data: bytes | str, element_decoder: Callable[[Any], Any] | None = None) -> list:
        """将json数组文本解码为元素列表

        Parameters
        ----------
        data
            json数组文本
        element_decoder
            将每个json值转换为集合元素的函数，未指定时json数组会被递归转换为tuple，json对象则不被接受

        Returns
        -------
        ret
            解码得到的元素列表，保证所有元素均可哈希

        Raises
        ------
        DecodingError
            `data` 不是合法的json数组，或其中的值无法转换为可哈希元素
        """
        try:
            decoded = json.loads(data)
        except (TypeError, ValueError, RecursionError) as e:
            raise DecodingError(str(e)) from e

        if not isinstance(decoded, list):
            raise DecodingError(f'expected a json array, got `{get_type_name(decoded)}`.')

        if element_decoder is None:
            element_decoder = _freeze

        ret = []
        for i, item in enumerate(decoded):
            try:
                element = element_decoder(item)
                hash(element)
            except (TypeError, ValueError, RecursionError) as e:
                raise DecodingError(f'item at index {i} is not a valid element ({e}).') from e
            ret.append(element)

        return ret

    @staticmethod
    def convert_to_encodable(obj):
        for t in type(obj).__mro__:
            encoder = ElementCodec.encoders.get(t, None)
            if encoder is not None:
                return encoder(obj)

        raise TypeError(f'Object of type `{get_type_name(obj)}` is not json serializable.')

    @staticmethod
    def _find_unencodable_type(elements):
        for e in elements:
            try:
                json.dumps(
                    e,
                    default=ElementCodec.convert_to_encodable,
                    allow_nan=ElementCodec.allow_nan
                )
            except (TypeError, ValueError, RecursionError):
                return get_type_name(e)
        else:
            return 'unknown'


def _freeze(value):
    """将json值转换为可哈希对象，数组转为tuple
    """
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        raise TypeError('json objects are not hashable, specify `element_decoder` to convert them.')

    return value


@register_encoder(np.generic)
def _encode_numpy_scalar(obj: np.generic):
    return obj.item()
