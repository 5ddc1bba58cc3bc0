"""
Plonkish 제약: 게이트 제약과 복사(copy) 제약
=============================================

**게이트 제약 (GateConstraint)**:
  각 행(row)마다 길이 t의 인덱스 벡터 Tᵢ가 있다. Tᵢ는 할당 벡터
  z = (w, x, selectors) 에서 게이트 다항식 g에 넣을 t개의 원소를 가리킨다.

    행 i 만족  ⇔  g(z[Tᵢ[0]], ..., z[Tᵢ[t−1]]) = 0

  인덱스는 모두 [0, n + e − 1] 범위여야 한다.

**복사 제약 (CopyConstraint)**:
  두 트레이스 셀 (행, 열)의 값이 같아야 한다는 제약. 셀의 열은 [0, n),
  행은 [0, m) 범위여야 한다. 셀의 값은 z[열]이므로 행은 값에 영향을
  주지 않는다 (CopyConstraint 참고).

  정규화(canonicalization):
    - 두 점을 (열, 행) 순서(열 우선, 행 보조)로 비교해 작은 쪽을 앞에 둔다.
    - (P, Q)와 (Q, P)는 같은 제약이므로 집합으로 중복을 제거한다.

  | 입력               | 저장                |
  |--------------------|---------------------|
  | ((2,4), (0,0))     | ((0,0), (2,4))      |
  | ((0,0), (2,4))     | (중복 → 제거)        |

사용 예시:
    >>> build_copy_constraints([((2, 4), (0, 0)), ((0, 0), (2, 4))], n=6, m=4)
    (CopyConstraint(Position(row=0, column=0), Position(row=2, column=4)),)
"""

from functools import total_ordering

from arith.errors import DomainError, check_length


# ─────────────────────────────────────────────────────────────────────
# 트레이스 위치
# ─────────────────────────────────────────────────────────────────────

@total_ordering
class Position:
    """트레이스 셀 (행, 열).

    정렬 순서는 열 우선, 행 보조이다.
    """

    def __init__(self, row, column):
        for name, value in (("row", row), ("column", column)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name}는 정수여야 합니다: {value!r}")
        self._row = row
        self._column = column

    @classmethod
    def coerce(cls, point):
        """Position 또는 (행, 열) 쌍을 Position으로 변환한다."""
        if isinstance(point, Position):
            return point
        row, column = point
        return cls(row, column)

    @property
    def row(self):
        return self._row

    @property
    def column(self):
        return self._column

    def sort_key(self):
        return (self._column, self._row)

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self):
        return hash(self.sort_key())

    def __iter__(self):
        return iter((self._row, self._column))

    def __repr__(self):
        return f"Position(row={self._row}, column={self._column})"


# ─────────────────────────────────────────────────────────────────────
# 게이트 제약
# ─────────────────────────────────────────────────────────────────────

class GateConstraint:
    """검증된 게이트 제약: 길이 t의 z 인덱스 벡터."""

    def __init__(self, indices, t, max_index):
        """게이트 제약을 검증하고 생성한다.

        Args:
            indices: z 인덱스 리스트
            t: 게이트 다항식의 변수 수
            max_index: 허용되는 최대 인덱스 (n + e − 1)

        Raises:
            DimensionError: len(indices) != t
            DomainError: 인덱스가 [0, max_index]를 벗어날 때
        """
        indices = tuple(indices)
        check_length("gate_constraint", indices, t)
        for k in indices:
            if not isinstance(k, int) or isinstance(k, bool):
                raise TypeError(f"게이트 인덱스는 정수여야 합니다: {k!r}")
            if not 0 <= k <= max_index:
                raise DomainError(f"게이트 인덱스 {k}가 [0, {max_index}] 범위를 벗어났습니다")
        self._indices = indices

    @property
    def indices(self):
        return self._indices

    def values(self, z):
        """z에서 이 게이트가 읽는 t개의 값."""
        return [z[k] for k in self._indices]

    def __len__(self):
        return len(self._indices)

    def __iter__(self):
        return iter(self._indices)

    def __eq__(self, other):
        if not isinstance(other, GateConstraint):
            return NotImplemented
        return self._indices == other._indices

    def __hash__(self):
        return hash(self._indices)

    def __repr__(self):
        return f"GateConstraint({list(self._indices)})"


# ─────────────────────────────────────────────────────────────────────
# 복사 제약
# ─────────────────────────────────────────────────────────────────────

class CopyConstraint:
    """정규화된 복사 제약 (left ≤ right).

    셀 (행, 열)의 값은 z[열]이다. 행은 범위 검사와 정규화에만 쓰이고
    만족 여부에는 영향을 주지 않는다. 그 결과:
      - ((0, 3), (2, 3)) 처럼 열이 같은 제약은 항상 만족한다
        (CCS 변환에서도 항상 0인 행이 된다).
      - ((0, 1), (0, 4)) 와 ((2, 1), (3, 4)) 는 같은 z[1] = z[4] 검사지만
        서로 다른 제약으로 저장되고, CCS 행도 각각 하나씩 생긴다.
    두 경우 모두 입력을 그대로 보존하며 제거하거나 합치지 않는다.
    """

    def __init__(self, p0, p1):
        p0, p1 = Position.coerce(p0), Position.coerce(p1)
        self._left, self._right = min(p0, p1), max(p0, p1)

    @property
    def left(self):
        return self._left

    @property
    def right(self):
        return self._right

    def __eq__(self, other):
        if not isinstance(other, CopyConstraint):
            return NotImplemented
        return (self._left, self._right) == (other._left, other._right)

    def __lt__(self, other):
        if not isinstance(other, CopyConstraint):
            return NotImplemented
        return (self._left, self._right) < (other._left, other._right)

    def __hash__(self):
        return hash((self._left, self._right))

    def __iter__(self):
        return iter((self._left, self._right))

    def __repr__(self):
        return f"CopyConstraint({self._left!r}, {self._right!r})"


def check_position(point, n, m):
    """트레이스 셀이 m×n 범위 안인지 확인한다.

    Raises:
        DomainError: 행이 [0, m) 또는 열이 [0, n)을 벗어날 때
    """
    if not 0 <= point.column < n:
        raise DomainError(f"복사 제약의 열 {point.column}이 [0, {n}) 범위를 벗어났습니다")
    if not 0 <= point.row < m:
        raise DomainError(f"복사 제약의 행 {point.row}이 [0, {m}) 범위를 벗어났습니다")


def build_copy_constraints(raw_constraints, n, m):
    """원시 복사 제약들을 검증·정규화·중복 제거한다.

    Args:
        raw_constraints: ((행, 열), (행, 열)) 쌍 또는 CopyConstraint의 iterable
        n: 열 수
        m: 행 수

    Returns:
        tuple[CopyConstraint]: 정렬된 고유 복사 제약

    Raises:
        DomainError: 셀이 트레이스 범위를 벗어날 때
    """
    unique = set()
    for raw in raw_constraints:
        p0, p1 = raw
        p0, p1 = Position.coerce(p0), Position.coerce(p1)
        check_position(p0, n, m)
        check_position(p1, n, m)
        unique.add(CopyConstraint(p0, p1))
    return tuple(sorted(unique))
