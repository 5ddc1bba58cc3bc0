import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from arith.field import prime_field
from arith.circuits import x3_plus_x_plus_5_eq_35_plonkish, x3_plus_x_plus_5_eq_35_r1cs


@pytest.fixture(scope="session")
def F5():
    """위수 5의 작은 필드 (손으로 검산 가능)."""
    return prime_field(5)


@pytest.fixture(scope="session")
def F97():
    return prime_field(97)


@pytest.fixture(scope="session")
def r1cs_example():
    """(r1cs, instance, witness): x³ + x + 5 = 35 R1CS."""
    return x3_plus_x_plus_5_eq_35_r1cs()


@pytest.fixture(scope="session")
def plonkish_example():
    """(structure, instance, witness): x³ + x + 5 = 35 Plonkish."""
    return x3_plus_x_plus_5_eq_35_plonkish()
