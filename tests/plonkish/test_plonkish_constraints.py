"""
Gate / copy constraint tests: arith/plonkish/constraints.py
"""
import pytest

from arith.errors import DimensionError, DomainError
from arith.plonkish.constraints import (
    CopyConstraint,
    GateConstraint,
    Position,
    build_copy_constraints,
)


# =====================================================================
# Position
# =====================================================================

class TestPosition:
    def test_column_major_order(self):
        """열이 먼저, 행은 보조 키."""
        assert Position(5, 0) < Position(0, 1)
        assert Position(0, 1) < Position(1, 1)

    def test_equality_and_hash(self):
        assert Position(2, 3) == Position(2, 3)
        assert len({Position(2, 3), Position(2, 3)}) == 1

    def test_coerce_tuple(self):
        p = Position.coerce((2, 4))
        assert (p.row, p.column) == (2, 4)
        assert tuple(p) == (2, 4)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            Position(0, 1.0)
        with pytest.raises(TypeError):
            Position(True, 0)


# =====================================================================
# CopyConstraint
# =====================================================================

class TestCopyConstraint:
    def test_canonical_order(self):
        cc = CopyConstraint((2, 4), (0, 0))
        assert cc.left == Position(0, 0)
        assert cc.right == Position(2, 4)

    def test_symmetric_pairs_equal(self):
        assert CopyConstraint((2, 4), (0, 0)) == CopyConstraint((0, 0), (2, 4))
        assert hash(CopyConstraint((2, 4), (0, 0))) == hash(CopyConstraint((0, 0), (2, 4)))

    def test_dedup(self):
        copies = build_copy_constraints([((2, 4), (0, 0)), ((0, 0), (2, 4))], n=6, m=4)
        assert copies == (CopyConstraint((0, 0), (2, 4)),)

    def test_sorted(self):
        copies = build_copy_constraints([((0, 3), (1, 3)), ((0, 1), (2, 0))], n=4, m=3)
        assert [(cc.left.row, cc.left.column) for cc in copies] == [(2, 0), (0, 3)]

    def test_column_out_of_range(self):
        with pytest.raises(DomainError):
            build_copy_constraints([((0, 0), (0, 6))], n=6, m=4)

    def test_row_out_of_range(self):
        with pytest.raises(DomainError):
            build_copy_constraints([((4, 0), (0, 0))], n=6, m=4)

    def test_negative_position(self):
        with pytest.raises(DomainError):
            build_copy_constraints([((-1, 0), (0, 0))], n=6, m=4)

    def test_empty(self):
        assert build_copy_constraints([], n=1, m=1) == ()


# =====================================================================
# GateConstraint
# =====================================================================

class TestGateConstraint:
    def test_values(self):
        gate = GateConstraint([2, 0], t=2, max_index=2)
        assert gate.values(["a", "b", "c"]) == ["c", "a"]
        assert len(gate) == 2
        assert list(gate) == [2, 0]

    def test_wrong_length(self):
        with pytest.raises(DimensionError) as exc:
            GateConstraint([0, 1, 2], t=2, max_index=5)
        assert exc.value.name == "gate_constraint"

    def test_index_out_of_range(self):
        with pytest.raises(DomainError):
            GateConstraint([0, 6], t=2, max_index=5)

    def test_negative_index(self):
        with pytest.raises(DomainError):
            GateConstraint([-1], t=1, max_index=5)

    def test_non_int_index(self):
        with pytest.raises(TypeError):
            GateConstraint(["0"], t=1, max_index=5)
