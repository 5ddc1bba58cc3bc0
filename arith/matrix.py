"""
공유 유틸리티: 희소 행렬(Sparse Matrix)과 벡터 연산
==================================================

R1CS / CCS / Plonkish 모듈에서 공유하는 선형대수 도구.

**SparseMatrix**:
  rows × cols 크기의 행렬을 0이 아닌 원소만 행(row)별로 저장한다 (CSR과 유사).
  행렬-벡터 곱은 저장된 원소만 순회하므로 비용이 O(nonzeros)이다.

    M·z 의 i번째 원소 = Σⱼ M[i][j] · z[j]

**벡터 연산**:
  - hadamard(u, v): 원소별 곱 u ∘ v
  - vector_add(u, v): 원소별 합
  - vector_scale(u, c): 스칼라곱 c · u
  - ones(m), zeros(m)

길이가 다른 벡터끼리 연산하면 zip처럼 조용히 잘라내지 않고 DimensionError를 던진다.

사용 예시:
    >>> A = SparseMatrix.from_dense([[1, 0], [0, 2]])
    >>> A.mul_vector([FR(3), FR(4)])   # [FR(3), FR(8)]
"""

from arith.errors import DimensionError, DomainError, check_length
from arith.field import FR, check_same_field, infer_field, to_field


# ─────────────────────────────────────────────────────────────────────
# SparseMatrix
# ─────────────────────────────────────────────────────────────────────

class SparseMatrix:
    """유한체 위의 희소 행렬 (불변).

    속성:
        rows: 행 수
        cols: 열 수
        field: 원소의 필드 (FieldElement 서브클래스)

    내부적으로 각 행을 ((열, 값), ...) 튜플로 저장한다. 값이 0인 원소는 저장하지 않는다.

    예시:
        >>> M = SparseMatrix(2, 3, [(0, 1, 5), (1, 2, 7)])
        >>> M.to_dense()   # [[0, 5, 0], [0, 0, 7]]
    """

    def __init__(self, rows, cols, entries=(), field=None):
        """희소 행렬을 생성한다.

        Args:
            rows: 행 수 (≥ 0)
            cols: 열 수 (≥ 0)
            entries: (행, 열, 값) 튜플의 iterable. 같은 위치가 여러 번 나오면 값을 더한다.
            field: 원소의 필드. None이면 값들로부터 추론한다 (없으면 FR).

        Raises:
            DimensionError: rows 또는 cols가 음수일 때
            DomainError: 위치가 행렬 범위를 벗어날 때
        """
        if rows < 0 or cols < 0:
            raise DimensionError(f"행렬 크기는 음수일 수 없습니다: {rows}×{cols}",
                                 name="shape", actual=(rows, cols))
        entries = list(entries)
        if field is None:
            field = infer_field(value for _, _, value in entries)
        self._rows_count = rows
        self._cols_count = cols
        self._field = field

        acc = {}
        for r, c, value in entries:
            if not (0 <= r < rows and 0 <= c < cols):
                raise DomainError(f"행렬 위치 ({r}, {c})가 {rows}×{cols} 범위를 벗어났습니다")
            value = to_field(value, field)
            acc[(r, c)] = acc[(r, c)] + value if (r, c) in acc else value

        row_lists = [[] for _ in range(rows)]
        for (r, c), value in sorted(acc.items()):
            if not value.is_zero():
                row_lists[r].append((c, value))
        self._data = tuple(tuple(row) for row in row_lists)

    @classmethod
    def from_dense(cls, dense, field=None, cols=None):
        """행 우선(row-major) 2차원 리스트로부터 행렬을 만든다.

        모든 행의 길이가 같은지(jagged 여부) 반드시 검사한다.

        Args:
            dense: 정수 또는 필드 원소의 2차원 리스트
            field: 원소의 필드 (None이면 추론)
            cols: 행이 없을 때 사용할 열 수 (기본 0)

        Raises:
            DimensionError: 행 길이가 서로 다를 때
        """
        dense = [list(row) for row in dense]
        width = len(dense[0]) if dense else (cols or 0)
        for i, row in enumerate(dense):
            if len(row) != width:
                raise DimensionError(
                    f"{i}번째 행의 길이가 {width}이어야 하지만 {len(row)}입니다 (jagged 행렬)",
                    name=f"row[{i}]", expected=width, actual=len(row),
                )
        if field is None:
            field = infer_field(value for row in dense for value in row)
        entries = [
            (i, j, value)
            for i, row in enumerate(dense)
            for j, value in enumerate(row)
            if value != 0
        ]
        return cls(len(dense), width, entries, field)

    @classmethod
    def coerce(cls, matrix, field=None):
        """SparseMatrix는 그대로(필드 검사만), 2차원 리스트는 from_dense로 변환한다."""
        if isinstance(matrix, SparseMatrix):
            if field is not None:
                check_same_field(field, matrix.field)
            return matrix
        return cls.from_dense(matrix, field)

    @property
    def rows(self):
        return self._rows_count

    @property
    def cols(self):
        return self._cols_count

    @property
    def shape(self):
        """(행 수, 열 수)."""
        return (self._rows_count, self._cols_count)

    @property
    def field(self):
        return self._field

    @property
    def nnz(self):
        """0이 아닌 원소의 수."""
        return sum(len(row) for row in self._data)

    def row(self, i):
        """i번째 행의 ((열, 값), ...) 튜플."""
        return self._data[i]

    def entries(self):
        """(행, 열, 값) 튜플을 행·열 순서로 순회한다."""
        for r, row in enumerate(self._data):
            for c, value in row:
                yield r, c, value

    def get(self, r, c):
        """M[r][c] (저장되지 않은 위치는 0)."""
        for col, value in self._data[r]:
            if col == c:
                return value
        return self._field.zero()

    def mul_vector(self, z):
        """행렬-벡터 곱 M·z.

        Args:
            z: 길이 cols의 필드 원소 리스트

        Returns:
            list: 길이 rows의 필드 원소 리스트

        Raises:
            DimensionError: len(z) != cols 일 때
        """
        check_length("z", z, self._cols_count)
        zero = self._field.zero()
        result = []
        for row in self._data:
            acc = zero
            for c, value in row:
                acc = acc + value * z[c]
            result.append(acc)
        return result

    def to_dense(self):
        """행 우선 2차원 리스트로 변환 (0 포함)."""
        dense = [[self._field.zero()] * self._cols_count for _ in range(self._rows_count)]
        for r, c, value in self.entries():
            dense[r][c] = value
        return dense

    def copy(self):
        """같은 내용의 새 행렬."""
        return SparseMatrix(self._rows_count, self._cols_count, self.entries(), self._field)

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (
            self.shape == other.shape
            and self._field.field_modulus == other.field.field_modulus
            and self._data == other._data
        )

    def __hash__(self):
        return hash((self.shape, self._data))

    def __repr__(self):
        return f"SparseMatrix({self._rows_count}×{self._cols_count}, nnz={self.nnz})"


def matrix_values(matrix):
    """SparseMatrix 또는 2차원 리스트의 원소들을 순회한다 (필드 추론용)."""
    if isinstance(matrix, SparseMatrix):
        return (value for _, _, value in matrix.entries())
    return (value for row in matrix for value in row)


# ─────────────────────────────────────────────────────────────────────
# 벡터 연산
# ─────────────────────────────────────────────────────────────────────

def _check_same_length(u, v):
    if len(u) != len(v):
        raise DimensionError(
            f"벡터 길이가 다릅니다: {len(u)} != {len(v)}",
            name="vector", expected=len(u), actual=len(v),
        )


def hadamard(u, v):
    """원소별 곱(Hadamard product) u ∘ v."""
    _check_same_length(u, v)
    return [a * b for a, b in zip(u, v)]


def vector_add(u, v):
    """원소별 합 u + v."""
    _check_same_length(u, v)
    return [a + b for a, b in zip(u, v)]


def vector_scale(u, scalar):
    """스칼라곱 scalar · u."""
    return [scalar * a for a in u]


def ones(length, field=FR):
    """모든 원소가 1인 벡터 (빈 Hadamard 곱의 항등원)."""
    return [field.one()] * length


def zeros(length, field=FR):
    """모든 원소가 0인 벡터."""
    return [field.zero()] * length


def is_zero_vector(u):
    return all(a.is_zero() for a in u)


def nonzero_positions(u):
    """0이 아닌 원소의 인덱스 리스트."""
    return [i for i, a in enumerate(u) if not a.is_zero()]
