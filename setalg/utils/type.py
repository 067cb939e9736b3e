from __future__ import annotations

import sys

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

Self = Self


class Dummy:
    def __init__(self, name):
        self.name = name

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        return isinstance(other, Dummy) and self.name == other.name

    def __repr__(self):
        return self.name


undefined = Dummy('undefined')


def get_type_name(obj):
    return type(obj).__name__
