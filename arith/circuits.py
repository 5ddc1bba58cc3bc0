"""
예제 회로: x³ + x + 5 = 35 (x = 3)
===================================

같은 계산을 R1CS와 Plonkish 두 가지로 표현한다.

**R1CS** (m = 4, n = 6, l = 1):
  z = (w, 1, x) = (x, x², x³, s, 1, out) = (3, 9, 27, 30, 1, 35)

  | 제약 | A·z      | B·z | C·z  | 의미            |
  |------|----------|-----|------|-----------------|
  | 0    | x        | x   | x²   | x·x = x²        |
  | 1    | x²       | x   | x³   | x²·x = x³       |
  | 2    | x³ + x   | 1   | s    | x³ + x = s      |
  | 3    | s + 5    | 1   | out  | s + 5 = out     |

**Plonkish** (표준 PLONK 게이트, t = 8, q = 5, d = 3):
    g(a, b, c, q_L, q_R, q_O, q_M, q_C) = q_L·a + q_R·b + q_O·c + q_M·a·b + q_C

  z = (w, x, selectors) = (x, x², x³, s, x', out, 0, 1, −1, 5)
  인덱스:                 0   1   2   3  4   5    6  7   8  9

  | 행 | 유형    | a  | b  | c   | q_L | q_R | q_O | q_M | q_C |
  |----|---------|----|----|-----|-----|-----|-----|-----|-----|
  | 0  | mul     | x  | x  | x²  | 0   | 0   | −1  | 1   | 0   |
  | 1  | mul     | x² | x  | x³  | 0   | 0   | −1  | 1   | 0   |
  | 2  | add     | x³ | x' | s   | 1   | 1   | −1  | 0   | 0   |
  | 3  | add+c   | s  | x  | out | 1   | 0   | −1  | 0   | 5   |

  게이트 2는 x의 사본 x'(열 4)을 읽는다. 복사 제약 (행 2, 열 4) == (행 0, 열 0)이
  x' = x 를 강제한다.

사용 예시:
    >>> r1cs, x, w = x3_plus_x_plus_5_eq_35_r1cs()
    >>> r1cs.is_satisfied_by(x, w)   # True
"""

from arith.field import FR
from arith.plonkish import PlonkishInstance, PlonkishStructure, PlonkishWitness
from arith.polynomial import MultivariatePolynomial
from arith.r1cs import R1CS, R1CSInstance, R1CSWitness


# 표준 PLONK 게이트 변수 순서
PLONK_GATE_VARIABLES = ("a", "b", "c", "q_l", "q_r", "q_o", "q_m", "q_c")


def plonk_gate_polynomial(field=FR):
    """표준 PLONK 게이트 다항식 q_L·a + q_R·b + q_O·c + q_M·a·b + q_C (t = 8).

    변수 순서는 PLONK_GATE_VARIABLES를 따른다.
    """
    a, b, c, q_l, q_r, q_o, q_m, q_c = range(8)
    return MultivariatePolynomial.from_monomials(
        8,
        [
            (1, [q_l, a]),
            (1, [q_r, b]),
            (1, [q_o, c]),
            (1, [q_m, a, b]),
            (1, [q_c]),
        ],
        field,
    )


def x3_plus_x_plus_5_eq_35_r1cs(x=3, field=FR):
    """x³ + x + 5 = out 의 R1CS와 할당.

    Args:
        x: 비밀 입력 (기본값 3 → out = 35)
        field: 필드

    Returns:
        tuple: (r1cs, instance, witness)
    """
    A = [
        [1, 0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0],
        [1, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 5, 0],
    ]
    B = [
        [1, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 1, 0],
    ]
    C = [
        [0, 1, 0, 0, 0, 0],
        [0, 0, 1, 0, 0, 0],
        [0, 0, 0, 1, 0, 0],
        [0, 0, 0, 0, 0, 1],
    ]
    r1cs = R1CS(n=6, m=4, l=1, N=None, A=A, B=B, C=C, field=field)

    x = field(x)
    x2 = x * x            # 9
    x3 = x2 * x           # 27
    s = x3 + x            # 30
    out = s + field(5)    # 35
    return r1cs, R1CSInstance([out], field), R1CSWitness([x, x2, x3, s], field)


def x3_plus_x_plus_5_eq_35_plonkish(x=3, field=FR):
    """x³ + x + 5 = out 의 Plonkish 구조체와 할당.

    Args:
        x: 비밀 입력 (기본값 3 → out = 35)
        field: 필드

    Returns:
        tuple: (structure, instance, witness)
    """
    g = plonk_gate_polynomial(field)
    # 셀렉터 열: 6 → 0, 7 → 1, 8 → −1, 9 → 5
    zero, one, minus_one, five = 6, 7, 8, 9
    gates = [
        # a  b  c  q_L   q_R   q_O        q_M   q_C
        [0, 0, 1, zero, zero, minus_one, one, zero],
        [1, 0, 2, zero, zero, minus_one, one, zero],
        [2, 4, 3, one, one, minus_one, zero, zero],
        [3, 0, 5, one, zero, minus_one, zero, five],
    ]
    structure = PlonkishStructure(
        m=4, n=6, l=1, e=4, t=8, q=5, d=3,
        g=g,
        selectors=[0, 1, -1, 5],
        gate_constraints=gates,
        copy_constraints=[((2, 4), (0, 0))],
        field=field,
    )

    x = field(x)
    x2 = x * x
    x3 = x2 * x
    s = x3 + x
    out = s + field(5)
    witness = PlonkishWitness([x, x2, x3, s, x], field)
    return structure, PlonkishInstance([out], field), witness
