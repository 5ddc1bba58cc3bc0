import pytest

from arith.plonkish import PlonkishStructure
from arith.polynomial import MultivariatePolynomial


@pytest.fixture
def boolean_copy_structure():
    """g(X) = X² − X (불리언 검사), 두 열을 복사 제약으로 묶는다.

    m = 2, n = 2, l = 0, e = 0, t = 1
    행 0은 z[0], 행 1은 z[1]을 검사하고, (0, 0) == (1, 1).
    """
    g = MultivariatePolynomial.from_monomials(1, [(1, [0, 0]), (-1, [0])])
    return PlonkishStructure(
        m=2, n=2, l=0, e=0, t=1, q=2, d=2,
        g=g,
        selectors=[],
        gate_constraints=[[0], [1]],
        copy_constraints=[((0, 0), (1, 1))],
    )


@pytest.fixture
def constant_term_structure():
    """g(X) = X − 2 (상수항 있음) + 복사 제약 하나."""
    g = MultivariatePolynomial.from_monomials(1, [(1, [0]), (-2, [])])
    return PlonkishStructure(
        m=2, n=2, l=0, e=0, t=1, q=2, d=1,
        g=g,
        selectors=[],
        gate_constraints=[[0], [1]],
        copy_constraints=[((0, 0), (1, 1))],
    )


@pytest.fixture
def selector_structure():
    """g(X₀, X₁) = X₀ − X₁, 셀렉터와 공개 입력을 함께 쓴다.

    n = 2, l = 1, e = 1: z = (w₀, x₀, sel₀ = 5)
    행 0: w₀ − 5 = 0,  행 1: x₀ − 5 = 0
    """
    g = MultivariatePolynomial.from_monomials(2, [(1, [0]), (-1, [1])])
    return PlonkishStructure(
        m=2, n=2, l=1, e=1, t=2, q=2, d=1,
        g=g,
        selectors=[5],
        gate_constraints=[[0, 2], [1, 2]],
    )
