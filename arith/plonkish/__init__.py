"""
Plonkish 산술화 (Plonkish Arithmetization)
==========================================

게이트 다항식과 트레이스 위의 제약으로 계산을 표현한다.

**구조체**:
  - n: 열 수 (위트니스 + 공개 입력)
  - m: 행(게이트 제약) 수
  - l: 공개 입력 수
  - e: 셀렉터 수
  - g: t변수 다항식 (단항식 q개, 차수 ≤ d)
  - selectors: 셀렉터 상수 벡터 (길이 e)
  - gate_constraints: 행마다 길이 t의 z 인덱스 벡터
  - copy_constraints: 같은 값을 가져야 하는 트레이스 셀 쌍

**할당 벡터**:
    z = (w, x, selectors),   w ∈ F^{n−l}, x ∈ F^l
  R1CS/CCS와 달리 상수 슬롯 1이 없다. 상수는 셀렉터가 공급한다.

**만족 조건**:
  1. 모든 행 i에서 g(z[Tᵢ[0]], ..., z[Tᵢ[t−1]]) = 0
  2. 모든 복사 제약 ((r₀, c₀), (r₁, c₁))에서 z[c₀] = z[c₁]

**표준 PLONK 게이트 예시** (t = 8):
    g(a, b, c, q_L, q_R, q_O, q_M, q_C) = q_L·a + q_R·b + q_O·c + q_M·a·b + q_C
  셀렉터 값(0, 1, −1, 5 ...)을 selectors에 두고, 각 행의 인덱스 벡터가
  배선 값과 셀렉터를 가리키게 한다. arith.circuits 참고.

사용 예시:
    >>> structure = PlonkishStructure(m, n, l, e, t, q, d, g, selectors, gates, copies)
    >>> structure.is_satisfied_by(PlonkishInstance(x), PlonkishWitness(w))
    >>> ccs = structure.to_ccs()
"""

import logging

from arith.assignment import Instance, Witness
from arith.errors import DimensionError, check_length
from arith.field import check_same_field, to_field
from arith.plonkish.constraints import GateConstraint, build_copy_constraints
from arith.plonkish.conversion import ccs_assignment, plonkish_to_ccs


_logger = logging.getLogger(__name__)


class PlonkishInstance(Instance):
    """Plonkish 공개 입력 x ∈ F^l."""


class PlonkishWitness(Witness):
    """Plonkish 위트니스 w ∈ F^{n−l}."""


class PlonkishStructure:
    """Plonkish 구조체 (불변).

    속성:
        m, n, l, e, t, q, d: 차원 (모듈 설명 참고)
        g: MultivariatePolynomial
        selectors: 필드 원소 튜플 (길이 e)
        gate_constraints: GateConstraint 튜플 (길이 m)
        copy_constraints: 정규화·중복 제거된 CopyConstraint 튜플
    """

    def __init__(self, m, n, l, e, t, q, d, g, selectors, gate_constraints,
                 copy_constraints=(), field=None):
        """Plonkish 구조체를 생성하고 모든 제약을 검증한다.

        Args:
            m: 행 수
            n: 열 수
            l: 공개 입력 수 (≤ n)
            e: 셀렉터 수
            t: g의 변수 수
            q: g의 단항식 수
            d: g의 최대 차수
            g: MultivariatePolynomial
            selectors: 길이 e의 정수/필드 원소 리스트
            gate_constraints: 길이 m의 인덱스 벡터 리스트 (각 길이 t, 원소 ≤ n+e−1)
            copy_constraints: ((행, 열), (행, 열)) 쌍 리스트
            field: 필드 (None이면 g의 필드)

        Raises:
            DimensionError: 차원 불일치 (deg g > d, len(selectors) != e 등)
            DomainError: 인덱스가 범위를 벗어날 때
        """
        if min(m, n, l, e, t, q, d) < 0:
            raise DimensionError(
                f"차원은 음수일 수 없습니다: m={m}, n={n}, l={l}, e={e}, t={t}, q={q}, d={d}",
                name="dimensions",
            )
        if l > n:
            raise DimensionError(f"l({l})은 n({n})보다 클 수 없습니다", name="l", expected=n, actual=l)

        if field is None:
            field = g.field
        check_same_field(field, g.field)
        if g.num_vars != t:
            raise DimensionError(f"g의 변수 수가 t({t})여야 하지만 {g.num_vars}입니다",
                                 name="g.num_vars", expected=t, actual=g.num_vars)
        if g.num_terms != q:
            raise DimensionError(f"g의 단항식 수가 q({q})여야 하지만 {g.num_terms}입니다",
                                 name="g.num_terms", expected=q, actual=g.num_terms)
        if g.degree > d:
            raise DimensionError(f"g의 차수 {g.degree}가 d({d})를 넘습니다",
                                 name="g.degree", expected=d, actual=g.degree)

        selectors = list(selectors)
        check_length("selectors", selectors, e)
        gate_constraints = list(gate_constraints)
        check_length("gate_constraints", gate_constraints, m)

        max_index = n + e - 1
        self._m = m
        self._n = n
        self._l = l
        self._e = e
        self._t = t
        self._q = q
        self._d = d
        self._g = g
        self._field = field
        self._selectors = tuple(to_field(s, field) for s in selectors)
        self._gate_constraints = tuple(GateConstraint(gate, t, max_index) for gate in gate_constraints)
        self._copy_constraints = build_copy_constraints(copy_constraints, n, m)

    @property
    def m(self):
        return self._m

    @property
    def n(self):
        return self._n

    @property
    def l(self):
        return self._l

    @property
    def e(self):
        return self._e

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
    def g(self):
        return self._g

    @property
    def field(self):
        return self._field

    @property
    def selectors(self):
        return self._selectors

    @property
    def gate_constraints(self):
        return self._gate_constraints

    @property
    def copy_constraints(self):
        return self._copy_constraints

    def z_vector(self, instance, witness):
        """z = (w, x, selectors)를 조립한다.

        Raises:
            DimensionError: len(x) != l 또는 len(w) != n − l
        """
        instance.check_against(self._l, self._field)
        witness.check_against(self._n - self._l, self._field)
        return list(witness.values) + list(instance.values) + list(self._selectors)

    def trace(self, instance, witness):
        """각 행의 게이트 입력값 표 (m × t)."""
        z = self.z_vector(instance, witness)
        return [gate.values(z) for gate in self._gate_constraints]

    def failing_gates(self, instance, witness):
        """g(...) ≠ 0 인 행의 인덱스 리스트."""
        return [
            row for row, values in enumerate(self.trace(instance, witness))
            if not self._g.evaluate(values).is_zero()
        ]

    def failing_copy_constraints(self, instance, witness):
        """두 셀의 값이 다른 복사 제약 리스트."""
        z = self.z_vector(instance, witness)
        return [
            cc for cc in self._copy_constraints
            if z[cc.left.column] != z[cc.right.column]
        ]

    def is_satisfied_by(self, instance, witness):
        """(w, x)가 모든 게이트 제약과 복사 제약을 만족하는지 확인한다.

        Returns:
            bool: 모든 행에서 g = 0 이고 모든 복사 제약이 성립하면 True

        Raises:
            DimensionError: 할당 길이가 맞지 않을 때 (평가 전에 검사)
        """
        gates = self.failing_gates(instance, witness)
        if gates:
            _logger.debug("Plonkish gates unsatisfied: rows %s", gates)
            return False
        copies = self.failing_copy_constraints(instance, witness)
        if copies:
            _logger.debug("Plonkish copy constraints unsatisfied: %s", copies)
            return False
        return True

    def to_ccs(self):
        """같은 관계를 표현하는 CCS 구조체 (arith.plonkish.conversion 참고)."""
        return plonkish_to_ccs(self)

    def ccs_assignment(self, instance, witness):
        """(x, w)를 to_ccs() 결과에 맞는 CCS 할당으로 다시 감싼다."""
        self.z_vector(instance, witness)
        return ccs_assignment(instance, witness)

    def __repr__(self):
        return (
            f"PlonkishStructure(m={self._m}, n={self._n}, l={self._l}, e={self._e}, "
            f"t={self._t}, q={self._q}, d={self._d}, copies={len(self._copy_constraints)})"
        )
