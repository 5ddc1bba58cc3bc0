"""
R1CS (Rank-1 Constraint System)
===============================

계산을 세 행렬 A, B, C로 표현하는 산술화(arithmetization).

**만족 관계**:
    (A·z) ∘ (B·z) − C·z = 0,    z = (w, 1, x)

  - w: 위트니스 (길이 n − l − 1)
  - 1: 상수 슬롯
  - x: 공개 입력 (길이 l)
  - ∘: 원소별 곱 (Hadamard product)

**차원**:
  - n: z의 길이 (상수 슬롯과 공개 입력 포함) = 행렬의 열 수
  - m: 제약(constraint) 수 = 행렬의 행 수
  - l: 공개 입력 수 (n > l)
  - N: 행렬의 최대 비영(nonzero) 원소 수 (정보용)

**CCS로의 변환**:
  R1CS는 t=3, q=2, d=2, S=[{0,1}, {2}], c=[1, −1] 인 CCS와 같다.

예제 (x³ + x + 5 = 35, x = 3):
  | 제약 | A·z       | B·z | C·z  | 의미             |
  |------|-----------|-----|------|------------------|
  | 0    | x         | x   | x²   | x·x = x²         |
  | 1    | x²        | x   | x³   | x²·x = x³        |
  | 2    | x³ + x    | 1   | s    | (x³+x)·1 = s     |
  | 3    | s + 5     | 1   | out  | (s+5)·1 = out    |

사용 예시:
    >>> r1cs = R1CS(n=1, m=1, l=0, N=1, A=[[1]], B=[[1]], C=[[1]])
    >>> r1cs.is_satisfied_by(R1CSInstance([]), R1CSWitness([]))   # True
"""

import logging

from arith.assignment import Instance, Witness
from arith.ccs import CCS
from arith.errors import DimensionError, ShapeMismatchError
from arith.field import infer_field
from arith.matrix import SparseMatrix, hadamard, matrix_values, nonzero_positions


_logger = logging.getLogger(__name__)


class R1CSInstance(Instance):
    """R1CS 공개 입력 x ∈ F^l."""


class R1CSWitness(Witness):
    """R1CS 위트니스 w ∈ F^{n-l-1}."""


class R1CS:
    """R1CS 구조체 (불변).

    속성:
        n, m, l, N: 차원 (모듈 설명 참고)
        A, B, C: m×n SparseMatrix
        field: 원소의 필드
    """

    def __init__(self, n, m, l, N, A, B, C, field=None):
        """R1CS 구조체를 생성하고 모든 차원을 검증한다.

        Args:
            n: z 벡터 길이 (= 열 수)
            m: 제약 수 (= 행 수)
            l: 공개 입력 수
            N: 최대 비영 원소 수. None이면 세 행렬 중 최댓값으로 정한다.
            A, B, C: SparseMatrix 또는 2차원 리스트
            field: 원소의 필드 (None이면 행렬에서 추론)

        Raises:
            DimensionError: n ≤ l, 행렬 모양이 m×n이 아님, jagged 행
            ShapeMismatchError: A, B, C의 모양이 서로 다를 때
            ModulusMismatchError: 행렬들의 필드가 다를 때
        """
        if n <= l:
            raise DimensionError(f"n({n})은 l({l})보다 커야 합니다", name="n", expected=l + 1, actual=n)
        if l < 0 or m < 0:
            raise DimensionError(f"m과 l은 음수일 수 없습니다: m={m}, l={l}",
                                 name="m" if m < 0 else "l", actual=min(m, l))

        if field is None:
            field = infer_field(value for M in (A, B, C) for value in matrix_values(M))
        A, B, C = (SparseMatrix.coerce(M, field) for M in (A, B, C))

        shapes = (A.shape, B.shape, C.shape)
        if len(set(shapes)) != 1:
            raise ShapeMismatchError(f"A, B, C의 모양이 다릅니다: {shapes}", shapes=shapes)
        if A.shape != (m, n):
            raise DimensionError(
                f"행렬 모양이 {m}×{n}이어야 하지만 {A.rows}×{A.cols}입니다",
                name="shape", expected=(m, n), actual=A.shape,
            )

        self._n = n
        self._m = m
        self._l = l
        self._N = N if N is not None else max(M.nnz for M in (A, B, C))
        self._A = A
        self._B = B
        self._C = C
        self._field = field

    @property
    def n(self):
        return self._n

    @property
    def m(self):
        return self._m

    @property
    def l(self):
        return self._l

    @property
    def N(self):
        return self._N

    @property
    def A(self):
        return self._A

    @property
    def B(self):
        return self._B

    @property
    def C(self):
        return self._C

    @property
    def field(self):
        return self._field

    def z_vector(self, instance, witness):
        """z = (w, 1, x)를 조립한다.

        Raises:
            DimensionError: len(x) != l 또는 len(w) != n − l − 1
            ModulusMismatchError: 할당의 필드가 구조체와 다를 때
        """
        instance.check_against(self._l, self._field)
        witness.check_against(self._n - self._l - 1, self._field)
        return list(witness.values) + [self._field.one()] + list(instance.values)

    def residual(self, instance, witness):
        """잔차 벡터 (A·z) ∘ (B·z) − C·z (길이 m)."""
        z = self.z_vector(instance, witness)
        Az = self._A.mul_vector(z)
        Bz = self._B.mul_vector(z)
        Cz = self._C.mul_vector(z)
        return [ab - c for ab, c in zip(hadamard(Az, Bz), Cz)]

    def unsatisfied_rows(self, instance, witness):
        """만족하지 않는 제약(행)의 인덱스 리스트."""
        return nonzero_positions(self.residual(instance, witness))

    def is_satisfied_by(self, instance, witness):
        """(w, x)가 R1CS 관계를 만족하는지 확인한다.

        Args:
            instance: 공개 입력 (Instance)
            witness: 위트니스 (Witness)

        Returns:
            bool: 모든 행에서 (A·z)ᵢ·(B·z)ᵢ − (C·z)ᵢ = 0 이면 True

        Raises:
            DimensionError: 할당 길이가 맞지 않을 때 (계산 전에 검사)
        """
        failing = self.unsatisfied_rows(instance, witness)
        if failing:
            _logger.debug("R1CS unsatisfied: %d/%d rows fail, first=%d", len(failing), self._m, failing[0])
            return False
        return True

    def to_ccs(self):
        """같은 관계를 표현하는 CCS 구조체를 만든다.

        t=3, q=2, d=2, M=[A, B, C], S=[{0,1}, {2}], c=[1, −1].
        n, m, l, N은 그대로 유지되고, 같은 (x, w)가 그대로 쓰인다.

        Returns:
            CCS: 새 CCS 구조체 (행렬은 복사본)
        """
        one = self._field.one()
        return CCS(
            n=self._n, m=self._m, l=self._l, N=self._N,
            t=3, q=2, d=2,
            M=[self._A.copy(), self._B.copy(), self._C.copy()],
            S=[(0, 1), (2,)],
            c=[one, -one],
            field=self._field,
        )

    def __repr__(self):
        return f"R1CS(n={self._n}, m={self._m}, l={self._l}, N={self._N})"
