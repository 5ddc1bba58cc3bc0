"""
Plonkish → CCS conversion tests: arith/plonkish/conversion.py
"""
import pytest

from arith.ccs import CCSInstance, CCSWitness
from arith.field import FR
from arith.plonkish import PlonkishInstance, PlonkishStructure, PlonkishWitness
from arith.plonkish.conversion import ccs_assignment, ccs_column, plonkish_to_ccs
from arith.polynomial import MultivariatePolynomial


def same_answer(structure, x, w):
    """Plonkish 결과와 변환된 CCS 결과를 함께 돌려준다."""
    instance, witness = PlonkishInstance(x), PlonkishWitness(w)
    ccs = structure.to_ccs()
    return (
        structure.is_satisfied_by(instance, witness),
        ccs.is_satisfied_by(*structure.ccs_assignment(instance, witness)),
    )


class TestColumnMapping:
    def test_witness_columns_unchanged(self):
        assert [ccs_column(k, 6, 1) for k in range(5)] == [0, 1, 2, 3, 4]

    def test_public_columns_shift_past_constant(self):
        assert ccs_column(5, 6, 1) == 6

    def test_assignment_rewrap(self):
        x, w = ccs_assignment(PlonkishInstance([35]), PlonkishWitness([1, 2]))
        assert isinstance(x, CCSInstance)
        assert isinstance(w, CCSWitness)
        assert list(x) == [FR(35)]
        assert list(w) == [FR(1), FR(2)]


class TestExampleConversion:
    def test_dimensions(self, plonkish_example):
        structure, _, _ = plonkish_example
        ccs = plonkish_to_ccs(structure)
        assert (ccs.n, ccs.m, ccs.l) == (7, 5, 1)
        # 게이트 슬롯 8개 + 복사 제약 끝점 2개 (g에 상수항 없음)
        assert (ccs.t, ccs.q, ccs.d) == (10, 7, 3)
        assert ccs.S[-2:] == ((8,), (9,))
        assert ccs.c[-2:] == (FR(1), FR(-1))

    def test_selectors_become_constant_column(self, plonkish_example):
        structure, _, _ = plonkish_example
        ccs = structure.to_ccs()
        # 행 3의 q_C 슬롯(7)은 셀렉터 5를 상수 열(n − l = 5)에 둔다
        assert ccs.M[7].get(3, 5) == FR(5)
        # 행 0의 c 슬롯(2)은 z[1] = x² 을 가리킨다
        assert ccs.M[2].get(0, 1) == FR(1)

    def test_copy_row(self, plonkish_example):
        structure, _, _ = plonkish_example
        ccs = structure.to_ccs()
        assert ccs.M[8].row(4) == ((0, FR(1)),)
        assert ccs.M[9].row(4) == ((4, FR(1)),)

    @pytest.mark.parametrize("x,w,expected", [
        ([35], [3, 9, 27, 30, 3], True),
        ([35], [3, 9, 27, 30, 4], False),
        ([35], [3, 9, 26, 30, 3], False),
        ([36], [3, 9, 27, 30, 3], False),
        ([73], [4, 16, 64, 68, 4], True),
        ([73], [4, 16, 64, 68, 3], False),
    ])
    def test_equivalence(self, plonkish_example, x, w, expected):
        structure, _, _ = plonkish_example
        assert same_answer(structure, x, w) == (expected, expected)


class TestCopyRows:
    def test_copy_only_failure_detected(self, boolean_copy_structure):
        """게이트는 통과하고 복사 제약만 깨지는 할당도 CCS가 거부한다."""
        ccs = boolean_copy_structure.to_ccs()
        x, w = boolean_copy_structure.ccs_assignment(PlonkishInstance([]), PlonkishWitness([0, 1]))
        assert not ccs.is_satisfied_by(x, w)
        assert ccs.unsatisfied_rows(x, w) == [2]

    @pytest.mark.parametrize("w", [[0, 0], [1, 1], [0, 1], [1, 0], [2, 2]])
    def test_boolean_equivalence(self, boolean_copy_structure, w):
        plonkish, ccs = same_answer(boolean_copy_structure, [], w)
        assert plonkish is ccs

    def test_constant_term_does_not_leak(self, constant_term_structure):
        """상수항은 지시 행렬로 게이트 행에만 적용된다."""
        ccs = constant_term_structure.to_ccs()
        assert ccs.t == 4
        assert ccs.S == ((3,), (0,), (1,), (2,))
        assert ccs.c == (FR(-2), FR(1), FR(1), FR(-1))
        assert same_answer(constant_term_structure, [], [2, 2]) == (True, True)

    @pytest.mark.parametrize("w", [[2, 3], [3, 3], [0, 2]])
    def test_constant_term_equivalence(self, constant_term_structure, w):
        assert same_answer(constant_term_structure, [], w) == (False, False)


class TestWithoutCopies:
    def test_constant_term_uses_empty_multiset(self):
        g = MultivariatePolynomial.from_univariate([-2, 1])
        structure = PlonkishStructure(
            m=1, n=1, l=0, e=0, t=1, q=2, d=1,
            g=g, selectors=[], gate_constraints=[[0]],
        )
        ccs = structure.to_ccs()
        assert (ccs.t, ccs.m) == (1, 1)
        assert () in ccs.S
        assert same_answer(structure, [], [2]) == (True, True)
        assert same_answer(structure, [], [5]) == (False, False)

    def test_selectors_and_public_input(self, selector_structure):
        ccs = selector_structure.to_ccs()
        assert (ccs.n, ccs.l) == (3, 1)
        assert same_answer(selector_structure, [5], [5]) == (True, True)
        assert same_answer(selector_structure, [4], [5]) == (False, False)
        assert same_answer(selector_structure, [5], [4]) == (False, False)


def boolean_structure(copy_constraints):
    """g(X) = X² − X, 행 0은 z[0], 행 1은 z[1]을 검사한다."""
    g = MultivariatePolynomial.from_monomials(1, [(1, [0, 0]), (-1, [0])])
    return PlonkishStructure(
        m=2, n=2, l=0, e=0, t=1, q=2, d=2,
        g=g,
        selectors=[],
        gate_constraints=[[0], [1]],
        copy_constraints=copy_constraints,
    )


class TestCopyCellColumns:
    """복사 제약의 셀 값은 z[열]이다."""

    def test_same_column_always_holds(self):
        structure = boolean_structure([((0, 0), (1, 0))])
        assert len(structure.copy_constraints) == 1
        assert structure.to_ccs().m == 3
        # z[0] = 0, z[1] = 1 이어도 z[0] = z[0]
        assert same_answer(structure, [], [0, 1]) == (True, True)

    def test_rows_only_differ_kept_separately(self):
        structure = boolean_structure([((0, 0), (0, 1)), ((1, 0), (1, 1))])
        assert len(structure.copy_constraints) == 2
        assert structure.to_ccs().m == 4
        failing = structure.failing_copy_constraints(PlonkishInstance([]), PlonkishWitness([0, 1]))
        assert len(failing) == 2
        assert same_answer(structure, [], [0, 1]) == (False, False)
        assert same_answer(structure, [], [1, 1]) == (True, True)
