"""
제약 시스템 오류 계층 (Error Taxonomy)
======================================

R1CS / CCS / Plonkish 구조체를 만들거나 만족 여부를 검사할 때 발생하는 오류들.

**오류 종류**:
  | 클래스                 | 의미                                              |
  |------------------------|---------------------------------------------------|
  | DimensionError         | 선언된 차원(n, m, l, t, q, d)과 실제 길이 불일치  |
  | ShapeMismatchError     | 같은 모양이어야 하는 행렬들(A, B, C)의 모양 불일치 |
  | DomainError            | 인덱스가 허용 범위를 벗어남                       |
  | FieldArithmeticError   | 0의 역원 등 유한체 연산 오류                       |
  | ModulusMismatchError   | 서로 다른 위수(modulus)의 원소를 섞어 연산          |

모든 검증은 생성 시점에 즉시(eager) 수행된다. 잘못된 차원을 조용히 잘라내면
만족하지 않는 위트니스가 만족하는 것처럼 보일 수 있으므로 반드시 예외를 던진다.
"""


class ArithError(Exception):
    """이 패키지에서 발생하는 모든 오류의 기반 클래스."""


class DimensionError(ArithError, ValueError):
    """선언된 차원과 실제 컬렉션 길이가 맞지 않을 때.

    속성:
        name: 문제가 된 항목 이름 (예: "M", "S", "c", "w")
        expected: 기대한 값
        actual: 실제 값
    """

    def __init__(self, message, name=None, expected=None, actual=None):
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.actual = actual


class ShapeMismatchError(ArithError, ValueError):
    """같은 모양이어야 하는 행렬들의 모양이 다를 때."""

    def __init__(self, message, shapes=None):
        super().__init__(message)
        self.shapes = shapes


class DomainError(ArithError, ValueError):
    """인덱스나 값이 허용된 범위를 벗어날 때."""


class FieldArithmeticError(ArithError, ArithmeticError):
    """유한체 연산 오류 (0의 역원 등)."""


class ModulusMismatchError(FieldArithmeticError):
    """서로 다른 위수를 가진 원소끼리 연산하려 할 때."""

    def __init__(self, left, right):
        super().__init__(f"위수가 다른 원소끼리 연산할 수 없습니다: {left} != {right}")
        self.left = left
        self.right = right


def check_length(name, values, expected):
    """컬렉션 길이가 expected와 같은지 확인하고, 아니면 DimensionError.

    Args:
        name: 오류 메시지에 쓸 항목 이름
        values: 길이를 확인할 컬렉션
        expected: 기대 길이

    Raises:
        DimensionError: 길이가 다를 때
    """
    actual = len(values)
    if actual != expected:
        raise DimensionError(
            f"{name}의 길이가 {expected}이어야 하지만 {actual}입니다",
            name=name, expected=expected, actual=actual,
        )
