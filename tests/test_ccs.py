"""
CCS tests: arith/ccs.py
"""
import pytest

from arith.ccs import CCS, CCSInstance, CCSWitness
from arith.errors import DimensionError, DomainError, ShapeMismatchError
from arith.field import FR
from arith.r1cs import R1CSInstance, R1CSWitness


def square_ccs(S=((0, 0), ()), c=(1, -9), t=1, q=2, d=2, M=None):
    """n=2, m=1, l=0: z = (w, 1), 관계 w² − 9 = 0 (기본값)."""
    if M is None:
        M = [[[1, 0]]]
    return CCS(n=2, m=1, l=0, N=None, t=t, q=q, d=d, M=M, S=S, c=c)


# =====================================================================
# 만족 검사
# =====================================================================

class TestSatisfaction:
    @pytest.mark.parametrize("w,expected", [(3, True), (-3, True), (2, False), (0, False)])
    def test_repeated_index_squares(self, w, expected):
        """멀티셋 {0, 0}은 M₀·z를 원소별로 제곱한다."""
        ccs = square_ccs()
        assert ccs.is_satisfied_by(CCSInstance([]), CCSWitness([w])) is expected

    def test_empty_multiset_is_all_ones(self):
        ccs = CCS(n=1, m=2, l=0, N=None, t=1, q=1, d=0, M=[[[0], [0]]], S=[[]], c=[7])
        assert ccs.evaluate(CCSInstance([]), CCSWitness([])) == [FR(7), FR(7)]
        assert not ccs.is_satisfied_by(CCSInstance([]), CCSWitness([]))

    def test_zero_constant_satisfied(self):
        ccs = CCS(n=1, m=1, l=0, N=None, t=1, q=1, d=0, M=[[[5]]], S=[[]], c=[0])
        assert ccs.is_satisfied_by(CCSInstance([]), CCSWitness([]))

    def test_evaluate_length_is_m(self, r1cs_example):
        r1cs, x, w = r1cs_example
        ccs = r1cs.to_ccs()
        result = ccs.evaluate(CCSInstance(x.values), CCSWitness(w.values))
        assert result == [FR(0)] * r1cs.m

    def test_unsatisfied_rows(self, r1cs_example):
        r1cs, x, _ = r1cs_example
        ccs = r1cs.to_ccs()
        assert ccs.unsatisfied_rows(CCSInstance(x.values), CCSWitness([3, 9, 26, 30])) == [1, 2]

    def test_wrong_witness_length(self, r1cs_example):
        r1cs, x, _ = r1cs_example
        ccs = r1cs.to_ccs()
        with pytest.raises(DimensionError) as exc:
            ccs.is_satisfied_by(CCSInstance(x.values), CCSWitness([3, 9, 27, 30, 1]))
        assert exc.value.name == "w"


class TestR1CSEquivalence:
    """R1CS와 to_ccs() 결과는 모든 할당에 대해 같은 답을 낸다."""

    @pytest.mark.parametrize("x,w", [
        ([35], [3, 9, 27, 30]),
        ([35], [3, 9, 26, 30]),
        ([73], [4, 16, 64, 68]),
        ([35], [4, 16, 64, 68]),
        ([0], [0, 0, 0, 0]),
        ([5], [0, 0, 0, 0]),
    ])
    def test_same_answer(self, r1cs_example, x, w):
        r1cs, _, _ = r1cs_example
        ccs = r1cs.to_ccs()
        expected = r1cs.is_satisfied_by(R1CSInstance(x), R1CSWitness(w))
        assert ccs.is_satisfied_by(CCSInstance(x), CCSWitness(w)) is expected

    def test_residual_matches_evaluate(self, r1cs_example):
        r1cs, x, _ = r1cs_example
        w = [3, 9, 26, 30]
        ccs = r1cs.to_ccs()
        assert ccs.evaluate(CCSInstance(x.values), CCSWitness(w)) == \
            r1cs.residual(x, R1CSWitness(w))


# =====================================================================
# 생성 시 검증
# =====================================================================

class TestConstruction:
    def test_len_M_must_equal_t(self):
        with pytest.raises(DimensionError) as exc:
            square_ccs(t=2)
        assert exc.value.name == "M"

    def test_len_S_must_equal_q(self):
        with pytest.raises(DimensionError) as exc:
            square_ccs(q=3, c=(1, -9, 0))
        assert exc.value.name == "S"

    def test_len_c_must_equal_q(self):
        with pytest.raises(DimensionError) as exc:
            square_ccs(c=(1, -9, 0))
        assert exc.value.name == "c"

    def test_multiset_index_out_of_range(self):
        with pytest.raises(DomainError):
            square_ccs(S=((0, 1), ()))

    def test_multiset_cardinality_exceeds_d(self):
        with pytest.raises(DimensionError) as exc:
            square_ccs(d=1)
        assert exc.value.name == "S[0]"
        assert exc.value.expected == 1
        assert exc.value.actual == 2

    def test_matrix_shapes_differ(self):
        with pytest.raises(ShapeMismatchError):
            square_ccs(t=2, S=((0, 1), ()), M=[[[1, 0]], [[1, 0, 0]]])

    def test_matrix_not_m_by_n(self):
        with pytest.raises(DimensionError) as exc:
            square_ccs(M=[[[1, 0, 0]]])
        assert exc.value.name == "M[0]"

    def test_n_must_exceed_l(self):
        with pytest.raises(DimensionError):
            CCS(n=1, m=1, l=1, N=0, t=0, q=0, d=0, M=[], S=[], c=[])

    def test_multisets_normalized(self):
        ccs = square_ccs(S=((0, 0), ()), c=(1, -9))
        assert ccs.S == ((0, 0), ())
        assert ccs.c == (FR(1), FR(-9))
        assert ccs.N == 1

    def test_small_field(self, F5):
        ccs = CCS(n=2, m=1, l=0, N=None, t=1, q=2, d=2, M=[[[1, 0]]],
                  S=[[0, 0], []], c=[F5(1), F5(1)])
        # w² + 1 = 0 (mod 5): w = 2, 3
        assert ccs.field is F5
        assert ccs.is_satisfied_by(CCSInstance([], F5), CCSWitness([2], F5))
        assert not ccs.is_satisfied_by(CCSInstance([], F5), CCSWitness([1], F5))
