"""
공개 입력(Instance)과 위트니스(Witness)
=======================================

만족 검사에 넘기는 할당(assignment)의 두 부분을 표현한다.

  - Instance: 공개 입력 x ∈ F^l
  - Witness: 비공개 입력 w (R1CS/CCS: F^{n-l-1}, Plonkish: F^{n-l})

둘 다 생성 시 원소들을 한 필드로 변환/검증하고, 이후에는 바뀌지 않는 튜플로 보관한다.
길이는 구조체(Structure)마다 다르므로 is_satisfied_by에서 구조체가 검사한다.

사용 예시:
    >>> x = Instance([35])
    >>> w = Witness([3, 9, 27, 30])
    >>> len(w)   # 4
"""

from arith.errors import check_length
from arith.field import check_same_field, infer_field, to_field


class _Assignment:
    """필드 원소 벡터 (불변)."""

    _label = "vector"

    def __init__(self, values, field=None):
        values = list(values)
        if field is None:
            field = infer_field(values)
        self._field = field
        self._values = tuple(to_field(v, field) for v in values)

    @property
    def values(self):
        return self._values

    @property
    def field(self):
        return self._field

    def check_against(self, length, field):
        """구조체가 요구하는 길이와 필드에 맞는지 확인한다.

        Raises:
            DimensionError: 길이가 다를 때
            ModulusMismatchError: 비어 있지 않은 벡터의 위수가 다를 때
        """
        check_length(self._label, self._values, length)
        if self._values:
            check_same_field(field, self._field)

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __eq__(self, other):
        if not isinstance(other, _Assignment):
            return NotImplemented
        return self._label == other._label and self._values == other._values

    def __hash__(self):
        return hash((self._label, self._values))

    def __repr__(self):
        return f"{type(self).__name__}([{', '.join(str(int(v)) for v in self._values)}])"


class Instance(_Assignment):
    """공개 입력 x."""

    _label = "x"

    @property
    def x(self):
        return self._values


class Witness(_Assignment):
    """비공개 위트니스 w."""

    _label = "w"

    @property
    def w(self):
        return self._values
