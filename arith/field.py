"""
기반 모듈: 유한체(Finite Field) 원소
====================================

R1CS, CCS, Plonkish 전체에서 사용되는 소수체(prime field) 원소를 정의한다.

**FieldElement**:
  py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 그대로 사용하되,
  제약 시스템 검사에 필요한 세 가지를 보강한다.
  - 서로 다른 위수(modulus)의 원소를 섞으면 ModulusMismatchError
    (FQ는 상대 원소의 정수값을 조용히 가져다 쓴다)
  - 0의 역원/0으로 나누기는 FieldArithmeticError
    (FQ는 0을 돌려준다)
  - 해시 가능 (집합/딕셔너리 키로 사용)

  정수와의 비교는 대표값 n (0 ≤ n < p) 과만 같다: F5(3) == 3 이지만
  F5(3) != 8. 따라서 3 in {F5(3)} 도 성립한다.

**FR**:
  bn128 곡선의 스칼라 필드. 위수 p ≈ 2^254. 패키지 전체의 기본 필드.

**prime_field(p)**:
  임의의 위수 p에 대한 FieldElement 서브클래스를 만든다 (크기가 제한된 LRU 캐시).

사용 예시:
    >>> from arith.field import FR, prime_field
    >>> FR(3) * FR(7)          # FR(21)
    >>> F97 = prime_field(97)
    >>> F97(5) / F97(3)        # 3의 역원 × 5
"""

from functools import lru_cache

from py_ecc import bn128
from py_ecc.fields.field_elements import FQ

from arith.errors import DomainError, FieldArithmeticError, ModulusMismatchError


# ─────────────────────────────────────────────────────────────────────
# FieldElement
# ─────────────────────────────────────────────────────────────────────

class FieldElement(FQ):
    """위수가 명시된 소수체 원소 (0 ≤ n < p).

    직접 생성하지 않고 FR 또는 prime_field(p)가 만든 서브클래스를 사용한다.

    예시:
        >>> x = FR(3)
        >>> x * x             # FR(9)
        >>> x.inverse() * x   # FR(1)
        >>> FR(0).inverse()   # FieldArithmeticError
    """

    def __init__(self, val):
        if isinstance(val, FQ) and val.field_modulus != self.field_modulus:
            raise ModulusMismatchError(self.field_modulus, val.field_modulus)
        super().__init__(val)

    def _operand(self, other):
        """다른 피연산자의 정수값을 꺼낸다 (위수 검사 포함)."""
        if isinstance(other, FQ):
            if other.field_modulus != self.field_modulus:
                raise ModulusMismatchError(self.field_modulus, other.field_modulus)
            return other.n
        if isinstance(other, int):
            return other
        raise TypeError(f"int 또는 FieldElement가 필요합니다: {type(other)}")

    def __add__(self, other):
        return type(self)((self.n + self._operand(other)) % self.field_modulus)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return type(self)((self.n - self._operand(other)) % self.field_modulus)

    def __rsub__(self, other):
        return type(self)((self._operand(other) - self.n) % self.field_modulus)

    def __mul__(self, other):
        return type(self)((self.n * self._operand(other)) % self.field_modulus)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        divisor = type(self)(self._operand(other))
        return self * divisor.inverse()

    def __rtruediv__(self, other):
        return type(self)(self._operand(other)) * self.inverse()

    def __eq__(self, other):
        if isinstance(other, FQ):
            return other.field_modulus == self.field_modulus and self.n == other.n
        if isinstance(other, int):
            return self.n == other
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        # 정수와의 비교가 self.n == other 이므로 hash(F(3)) == hash(3)
        return hash(self.n)

    def inverse(self):
        """곱셈 역원 a⁻¹ (a · a⁻¹ = 1).

        Raises:
            FieldArithmeticError: a = 0 이거나 역원이 존재하지 않을 때
        """
        if self.n == 0:
            raise FieldArithmeticError("0의 역원은 존재하지 않습니다")
        try:
            return type(self)(pow(self.n, -1, self.field_modulus))
        except ValueError as exc:
            raise FieldArithmeticError(
                f"{self.n}은(는) 위수 {self.field_modulus}에서 역원이 없습니다"
            ) from exc

    def is_zero(self):
        """덧셈 항등원(0)인지 확인."""
        return self.n == 0

    @property
    def modulus(self):
        return self.field_modulus


# ─────────────────────────────────────────────────────────────────────
# 기본 필드 FR 및 필드 팩토리
# ─────────────────────────────────────────────────────────────────────

class FR(FieldElement):
    """bn128 스칼라 필드 위의 유한체 원소.

    속성:
        field_modulus: bn128 곡선 위수 (소수 p)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# prime_field가 기억하는 최대 서브클래스 수
PRIME_FIELD_CACHE_SIZE = 128


@lru_cache(maxsize=PRIME_FIELD_CACHE_SIZE)
def prime_field(modulus):
    """위수 modulus의 FieldElement 서브클래스를 반환한다.

    캐시는 최근 PRIME_FIELD_CACHE_SIZE개의 위수만 기억한다. 밀려난 위수로 다시
    호출하면 새 클래스가 만들어지지만, 필드 검사는 클래스가 아니라
    field_modulus를 비교하므로 이전 클래스의 원소와도 그대로 섞어 쓸 수 있다.
    bn128 곡선 위수를 넘기면 FR 자체를 돌려준다.

    위수가 소수인지는 검사하지 않는다. 소수가 아닌 위수에서는
    역원이 없는 원소가 생길 수 있고, 그 경우 inverse()가 오류를 던진다.

    Args:
        modulus: 위수 p (정수, p ≥ 2)

    Returns:
        type: FieldElement 서브클래스

    Raises:
        DomainError: p < 2 일 때

    예시:
        >>> F7 = prime_field(7)
        >>> F7(3) + F7(5)    # F7(1)
    """
    if not isinstance(modulus, int) or modulus < 2:
        raise DomainError(f"위수는 2 이상의 정수여야 합니다: {modulus!r}")
    if modulus == CURVE_ORDER:
        return FR
    return type(f"F{modulus}", (FieldElement,), {"field_modulus": modulus})


def to_field(value, field):
    """value를 field의 원소로 변환한다.

    Args:
        value: 정수 또는 FieldElement
        field: FieldElement 서브클래스

    Returns:
        FieldElement: field의 원소

    Raises:
        ModulusMismatchError: 이미 다른 위수의 원소일 때
        TypeError: 정수도 필드 원소도 아닐 때
    """
    if isinstance(value, FQ):
        if value.field_modulus != field.field_modulus:
            raise ModulusMismatchError(field.field_modulus, value.field_modulus)
        if type(value) is field:
            return value
        return field(value.n)
    if isinstance(value, int) and not isinstance(value, bool):
        return field(value)
    raise TypeError(f"정수 또는 필드 원소가 필요합니다: {value!r}")


def infer_field(values, default=None):
    """원소들의 공통 필드를 찾는다.

    FieldElement가 하나도 없으면 default (없으면 FR)를 돌려준다.

    Raises:
        ModulusMismatchError: 서로 다른 위수의 원소가 섞여 있을 때
    """
    field = None
    for value in values:
        if not isinstance(value, FQ):
            continue
        if field is None:
            field = type(value) if isinstance(value, FieldElement) else prime_field(value.field_modulus)
        elif value.field_modulus != field.field_modulus:
            raise ModulusMismatchError(field.field_modulus, value.field_modulus)
    if field is None:
        return default if default is not None else FR
    return field


def check_same_field(expected, actual):
    """두 필드의 위수가 같은지 확인한다."""
    if expected.field_modulus != actual.field_modulus:
        raise ModulusMismatchError(expected.field_modulus, actual.field_modulus)
