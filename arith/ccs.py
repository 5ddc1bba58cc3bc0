"""
CCS (Customizable Constraint System)
====================================

R1CS, Plonkish, AIR를 모두 포괄하는 일반화된 산술화.

**구조체**:
  - M₀, ..., M_{t−1}: m×n 행렬 t개
  - S₀, ..., S_{q−1}: [0, t−1] 위의 멀티셋 q개 (각 크기 ≤ d)
  - c₀, ..., c_{q−1}: 상수 q개

**만족 관계**:

    Σᵢ cᵢ · ∘_{j ∈ Sᵢ} (Mⱼ · z) = 0,    z = (w, 1, x)

  - ∘_{j ∈ Sᵢ}: 멀티셋 Sᵢ의 각 j에 대해 Mⱼ·z를 원소별로 곱한다.
    같은 인덱스가 두 번 나오면 그 행렬의 기여가 원소별로 제곱된다.
    빈 멀티셋의 곱은 모든 원소가 1인 벡터이다.
  - 결과는 길이 m의 벡터이며, 모든 원소가 0이면 만족.

**R1CS는 특수한 경우**:
    t=3, q=2, d=2, S=[{0,1}, {2}], c=[1, −1]
    → 1·(M₀z ∘ M₁z) + (−1)·(M₂z) = Az ∘ Bz − Cz

사용 예시:
    >>> ccs = r1cs.to_ccs()
    >>> ccs.is_satisfied_by(CCSInstance(x), CCSWitness(w))
    >>> ccs.evaluate(CCSInstance(x), CCSWitness(w))   # 길이 m의 결과 벡터
"""

import logging

from arith.assignment import Instance, Witness
from arith.errors import DimensionError, DomainError, ShapeMismatchError, check_length
from arith.field import infer_field, to_field
from arith.matrix import (
    SparseMatrix,
    hadamard,
    matrix_values,
    nonzero_positions,
    ones,
    vector_add,
    vector_scale,
    zeros,
)


_logger = logging.getLogger(__name__)


class CCSInstance(Instance):
    """CCS 공개 입력 x ∈ F^l."""


class CCSWitness(Witness):
    """CCS 위트니스 w ∈ F^{n-l-1}."""


class CCS:
    """CCS 구조체 (불변).

    속성:
        n, m, l, N: R1CS와 같은 의미의 차원
        t: 행렬 수
        q: 멀티셋(항) 수
        d: 멀티셋 크기의 상한
        M: m×n SparseMatrix 튜플 (길이 t)
        S: 정렬된 인덱스 튜플의 튜플 (길이 q)
        c: 필드 원소 튜플 (길이 q)
    """

    def __init__(self, n, m, l, N, t, q, d, M, S, c, field=None):
        """CCS 구조체를 생성하고 모든 불변식을 검증한다.

        검사 순서: n > l → len(M) = t → len(S) = q → len(c) = q
        → 멀티셋 원소 ∈ [0, t−1] → |Sᵢ| ≤ d → 각 Mⱼ 모양 = m×n.

        Raises:
            DimensionError: 차원 불일치 (err.name으로 "M", "S", "c" 등을 구분)
            DomainError: 멀티셋 원소가 [0, t−1]을 벗어날 때
            ShapeMismatchError: 행렬들의 모양이 서로 다를 때
        """
        if n <= l:
            raise DimensionError(f"n({n})은 l({l})보다 커야 합니다", name="n", expected=l + 1, actual=n)
        if min(m, l, t, q, d) < 0:
            raise DimensionError(
                f"차원은 음수일 수 없습니다: m={m}, l={l}, t={t}, q={q}, d={d}", name="dimensions",
            )

        M = list(M)
        S = [list(multiset) for multiset in S]
        c = list(c)
        check_length("M", M, t)
        check_length("S", S, q)
        check_length("c", c, q)

        for i, multiset in enumerate(S):
            for j in multiset:
                if not 0 <= j < t:
                    raise DomainError(f"S[{i}]의 원소 {j}가 [0, {t - 1}] 범위를 벗어났습니다")
            if len(multiset) > d:
                raise DimensionError(
                    f"S[{i}]의 크기 {len(multiset)}가 d({d})를 넘습니다",
                    name=f"S[{i}]", expected=d, actual=len(multiset),
                )

        if field is None:
            field = infer_field(c + [value for matrix in M for value in matrix_values(matrix)])
        M = [SparseMatrix.coerce(matrix, field) for matrix in M]
        shapes = tuple(matrix.shape for matrix in M)
        if len(set(shapes)) > 1:
            raise ShapeMismatchError(f"M 행렬들의 모양이 다릅니다: {shapes}", shapes=shapes)
        for j, matrix in enumerate(M):
            if matrix.shape != (m, n):
                raise DimensionError(
                    f"M[{j}]의 모양이 {m}×{n}이어야 하지만 {matrix.rows}×{matrix.cols}입니다",
                    name=f"M[{j}]", expected=(m, n), actual=matrix.shape,
                )

        self._n = n
        self._m = m
        self._l = l
        self._N = N if N is not None else max((matrix.nnz for matrix in M), default=0)
        self._t = t
        self._q = q
        self._d = d
        self._M = tuple(M)
        self._S = tuple(tuple(sorted(multiset)) for multiset in S)
        self._c = tuple(to_field(value, field) for value in c)
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
    def t(self):
        return self._t

    @property
    def q(self):
        return self._q

    @property
    def d(self):
        return self._d

    @property
    def M(self):
        return self._M

    @property
    def S(self):
        return self._S

    @property
    def c(self):
        return self._c

    @property
    def field(self):
        return self._field

    def z_vector(self, instance, witness):
        """z = (w, 1, x)를 조립한다 (길이 검사 포함)."""
        instance.check_against(self._l, self._field)
        witness.check_against(self._n - self._l - 1, self._field)
        return list(witness.values) + [self._field.one()] + list(instance.values)

    def evaluate(self, instance, witness):
        """Σᵢ cᵢ · ∘_{j∈Sᵢ} (Mⱼ·z) 를 계산한다.

        각 Mⱼ·z는 실제로 쓰이는 j에 대해 한 번만 계산한다.

        Args:
            instance: 공개 입력 x
            witness: 위트니스 w

        Returns:
            list: 길이 m의 결과 벡터

        Raises:
            DimensionError: 할당 길이가 맞지 않을 때 (산술 연산 전에 검사)
        """
        z = self.z_vector(instance, witness)
        products = {}
        result = zeros(self._m, self._field)
        for multiset, constant in zip(self._S, self._c):
            term = ones(self._m, self._field)
            for j in multiset:
                if j not in products:
                    products[j] = self._M[j].mul_vector(z)
                term = hadamard(term, products[j])
            result = vector_add(result, vector_scale(term, constant))
        return result

    def unsatisfied_rows(self, instance, witness):
        """결과 벡터가 0이 아닌 행의 인덱스 리스트."""
        return nonzero_positions(self.evaluate(instance, witness))

    def is_satisfied_by(self, instance, witness):
        """(w, x)가 CCS 관계를 만족하는지 확인한다.

        Returns:
            bool: 결과 벡터의 모든 원소가 0이면 True
        """
        failing = self.unsatisfied_rows(instance, witness)
        if failing:
            _logger.debug("CCS unsatisfied: %d/%d rows fail, first=%d", len(failing), self._m, failing[0])
            return False
        return True

    def __repr__(self):
        return (
            f"CCS(n={self._n}, m={self._m}, l={self._l}, N={self._N}, "
            f"t={self._t}, q={self._q}, d={self._d}, S={list(self._S)})"
        )
