"""
기반 모듈: 다변수 다항식(Multivariate Polynomial)
=================================================

Plonkish 게이트 다항식 g(X₀, ..., X_{t-1})를 표현한다.

**표현**:
  단항식(monomial)들의 합. 각 단항식은 지수 벡터(길이 t)와 계수로 저장한다.

    g = Σₖ cₖ · ∏ᵥ X_v^{e_{k,v}}

  계수가 0인 단항식은 저장하지 않는다 (희소 표현).

**단항식 = 변수 인덱스의 멀티셋(multiset)**:
  X₀·X₁² 은 멀티셋 {0, 1, 1} 과 같다. CCS 변환에서 각 단항식이 그대로
  CCS 멀티셋 Sᵢ 와 상수 cᵢ 가 된다. monomials()가 이 형태로 돌려준다.

**차수**:
  단항식 차수의 최댓값. 영 다항식의 차수는 0으로 정의한다.

사용 예시:
    >>> a, b, c = (MultivariatePolynomial.variable(i, 3) for i in range(3))
    >>> g = a * b - c                 # a·b - c
    >>> g.evaluate([FR(3), FR(4), FR(12)])   # FR(0)
    >>> g.degree, g.num_terms         # (2, 2)
"""

from arith.errors import DimensionError, DomainError, check_length
from arith.field import FR, check_same_field, infer_field, to_field


class MultivariatePolynomial:
    """유한체 위의 t변수 다항식 (불변).

    예시:
        >>> g = MultivariatePolynomial.from_monomials(2, [(1, [0, 0]), (-1, [1])])
        >>> g                     # X0^2 - X1
        >>> g.evaluate([FR(3), FR(9)])   # FR(0)
    """

    def __init__(self, num_vars, terms=None, field=None):
        """다항식 생성.

        Args:
            num_vars: 변수 개수 t (≥ 0)
            terms: {지수 튜플: 계수} 딕셔너리. None이면 영 다항식.
            field: 계수의 필드 (None이면 계수로부터 추론, 없으면 FR)

        Raises:
            DimensionError: 지수 튜플 길이가 t가 아닐 때
            DomainError: 지수가 음수일 때
        """
        if num_vars < 0:
            raise DimensionError(f"변수 개수는 음수일 수 없습니다: {num_vars}",
                                 name="num_vars", actual=num_vars)
        terms = dict(terms or {})
        if field is None:
            field = infer_field(terms.values())
        self._num_vars = num_vars
        self._field = field

        normalized = {}
        for exps, coeff in terms.items():
            exps = tuple(exps)
            check_length("exponents", exps, num_vars)
            if any(e < 0 for e in exps):
                raise DomainError(f"지수는 음수일 수 없습니다: {exps}")
            coeff = to_field(coeff, field)
            normalized[exps] = normalized[exps] + coeff if exps in normalized else coeff
        self._terms = {e: c for e, c in normalized.items() if not c.is_zero()}

    # ── 생성 헬퍼 ──

    @classmethod
    def zero(cls, num_vars, field=FR):
        return cls(num_vars, {}, field)

    @classmethod
    def constant(cls, value, num_vars, field=None):
        """상수 다항식 g = value."""
        if field is None:
            field = infer_field([value])
        return cls(num_vars, {(0,) * num_vars: value}, field)

    @classmethod
    def variable(cls, index, num_vars, field=FR):
        """변수 X_index 하나로 이루어진 다항식."""
        if not 0 <= index < num_vars:
            raise DomainError(f"변수 인덱스 {index}가 [0, {num_vars - 1}] 범위를 벗어났습니다")
        exps = [0] * num_vars
        exps[index] = 1
        return cls(num_vars, {tuple(exps): field.one()}, field)

    @classmethod
    def from_monomials(cls, num_vars, monomials, field=None):
        """(계수, 변수 멀티셋) 리스트로부터 다항식을 만든다.

        Args:
            num_vars: 변수 개수 t
            monomials: [(계수, [변수 인덱스, ...]), ...]. 같은 인덱스를 반복하면 지수가 올라간다.
            field: 계수의 필드

        예시:
            >>> # 3·X0·X1 + 5
            >>> MultivariatePolynomial.from_monomials(2, [(3, [0, 1]), (5, [])])
        """
        monomials = [(coeff, list(variables)) for coeff, variables in monomials]
        if field is None:
            field = infer_field(coeff for coeff, _ in monomials)
        terms = {}
        for coeff, variables in monomials:
            exps = [0] * num_vars
            for v in variables:
                if not 0 <= v < num_vars:
                    raise DomainError(f"변수 인덱스 {v}가 [0, {num_vars - 1}] 범위를 벗어났습니다")
                exps[v] += 1
            exps = tuple(exps)
            coeff = to_field(coeff, field)
            terms[exps] = terms[exps] + coeff if exps in terms else coeff
        return cls(num_vars, terms, field)

    @classmethod
    def from_univariate(cls, coeffs, field=None):
        """단변수 계수 리스트 [c₀, c₁, ...] → c₀ + c₁·X + c₂·X² + ... (t = 1)."""
        coeffs = list(coeffs)
        if field is None:
            field = infer_field(coeffs)
        return cls(1, {(i,): c for i, c in enumerate(coeffs)}, field)

    # ── 속성 ──

    @property
    def num_vars(self):
        """변수 개수 t."""
        return self._num_vars

    @property
    def field(self):
        return self._field

    @property
    def num_terms(self):
        """0이 아닌 단항식의 수 (Plonkish의 q)."""
        return len(self._terms)

    @property
    def degree(self):
        """전체 차수 (단항식 차수의 최댓값). 영 다항식의 차수는 0."""
        if not self._terms:
            return 0
        return max(sum(exps) for exps in self._terms)

    @property
    def terms(self):
        """{지수 튜플: 계수} 딕셔너리의 사본."""
        return dict(self._terms)

    def is_zero(self):
        return not self._terms

    def constant_term(self):
        """상수항 (없으면 0)."""
        return self._terms.get((0,) * self._num_vars, self._field.zero())

    def monomials(self):
        """단항식들을 (계수, 변수 멀티셋 튜플) 형태로 돌려준다.

        X₀·X₁² → (c, (0, 1, 1)). 상수항은 빈 멀티셋 ().
        순서는 지수 튜플의 정렬 순서로 고정되어 있다 (결정적).

        Returns:
            list[tuple]: [(계수, 멀티셋), ...]
        """
        result = []
        for exps in sorted(self._terms):
            multiset = tuple(v for v, e in enumerate(exps) for _ in range(e))
            result.append((self._terms[exps], multiset))
        return result

    # ── 평가 ──

    def evaluate(self, point):
        """점 (a₀, ..., a_{t-1})에서 다항식을 평가한다.

        Args:
            point: 길이 t의 필드 원소 리스트

        Returns:
            FieldElement: g(point)

        Raises:
            DimensionError: len(point) != t 일 때
        """
        check_length("point", point, self._num_vars)
        result = self._field.zero()
        for exps, coeff in self._terms.items():
            term = coeff
            for value, e in zip(point, exps):
                if e:
                    term = term * value ** e
            result = result + term
        return result

    # ── 산술 연산 ──

    def _coerce(self, other):
        if isinstance(other, MultivariatePolynomial):
            if other.num_vars != self._num_vars:
                raise DimensionError(
                    f"변수 개수가 다른 다항식끼리 연산할 수 없습니다: {self._num_vars} != {other.num_vars}",
                    name="num_vars", expected=self._num_vars, actual=other.num_vars,
                )
            check_same_field(self._field, other.field)
            return other
        return MultivariatePolynomial.constant(to_field(other, self._field), self._num_vars, self._field)

    def __add__(self, other):
        other = self._coerce(other)
        terms = dict(self._terms)
        for exps, coeff in other._terms.items():
            terms[exps] = terms[exps] + coeff if exps in terms else coeff
        return MultivariatePolynomial(self._num_vars, terms, self._field)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return MultivariatePolynomial(
            self._num_vars, {e: -c for e, c in self._terms.items()}, self._field
        )

    def __sub__(self, other):
        return self + (-self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __mul__(self, other):
        """다항식 곱 또는 스칼라곱. 단항식 쌍마다 지수를 더한다."""
        other = self._coerce(other)
        terms = {}
        for e1, c1 in self._terms.items():
            for e2, c2 in other._terms.items():
                exps = tuple(a + b for a, b in zip(e1, e2))
                coeff = c1 * c2
                terms[exps] = terms[exps] + coeff if exps in terms else coeff
        return MultivariatePolynomial(self._num_vars, terms, self._field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __pow__(self, exponent):
        if exponent < 0:
            raise DomainError("음수 거듭제곱은 지원하지 않습니다")
        result = MultivariatePolynomial.constant(self._field.one(), self._num_vars, self._field)
        for _ in range(exponent):
            result = result * self
        return result

    def __eq__(self, other):
        if isinstance(other, int):
            other = MultivariatePolynomial.constant(other, self._num_vars, self._field)
        if not isinstance(other, MultivariatePolynomial):
            return NotImplemented
        return (
            self._num_vars == other.num_vars
            and self._field.field_modulus == other.field.field_modulus
            and self._terms == other._terms
        )

    def __hash__(self):
        return hash((self._num_vars, frozenset(self._terms.items())))

    def __repr__(self):
        parts = []
        for exps in sorted(self._terms, reverse=True):
            coeff = int(self._terms[exps])
            factors = []
            for v, e in enumerate(exps):
                if e == 1:
                    factors.append(f"X{v}")
                elif e > 1:
                    factors.append(f"X{v}^{e}")
            if not factors:
                parts.append(str(coeff))
            elif coeff == 1:
                parts.append("*".join(factors))
            else:
                parts.append(f"{coeff}*" + "*".join(factors))
        return "MPoly(" + " + ".join(parts) + ")" if parts else "MPoly(0)"
