"""
Plonkish → CCS 변환
====================

Plonkish 구조체를 같은 관계를 표현하는 CCS 구조체로 바꾼다.

**할당 벡터 배치**:
  Plonkish:  z  = (w, x, selectors)      길이 n + e
  CCS:       z' = (w, 1, x)              길이 n + 1,  l' = l

  Plonkish 인덱스 k가 가리키는 CCS 열:
  | k 범위          | CCS 열       | 행렬 원소          |
  |-----------------|--------------|--------------------|
  | k < n − l       | k            | 1                  |
  | n − l ≤ k < n   | k + 1        | 1                  |
  | k ≥ n (셀렉터)  | n − l (상수) | selectors[k − n]   |

  셀렉터는 상수이므로 상수 슬롯 1에 셀렉터 값을 곱해 표현한다.

**게이트 행 (0 ≤ row < m)**:
  Mᵢ[row][col(Tᵣₒw[i])] 에 위 표의 값을 둔다 (i = 0..t−1).
  그러면 (Mᵢ·z')[row] = z[Tᵣₒw[i]] 가 되어 g의 i번째 입력이 된다.
  g의 각 단항식 c·∏ X_v^{e_v} 는 멀티셋 {v를 e_v번} 과 상수 c가 된다.

**복사 제약 행 (m ≤ row < m + r)**:
  복사 제약 하나마다 행 하나를 추가하고 z'[a] − z'[b] = 0 을 강제한다.
  - M_t: 왼쪽 끝점 열에 1
  - M_{t+1}: 오른쪽 끝점 열에 1
  - 항: +1·{t}, −1·{t+1}
  복사 행에서 게이트 행렬 Mᵢ는 0이므로 g의 비상수 단항식은 0이 된다.
  g에 상수항이 있으면 게이트 행에서만 1인 지시 행렬 M_{t+2}로 상수항을 곱해
  복사 행으로 새지 않게 한다.

사용 예시:
    >>> ccs = plonkish_to_ccs(structure)
    >>> x2, w2 = ccs_assignment(instance, witness)
    >>> ccs.is_satisfied_by(x2, w2) == structure.is_satisfied_by(instance, witness)
"""

import logging

from arith.ccs import CCS, CCSInstance, CCSWitness
from arith.matrix import SparseMatrix


_logger = logging.getLogger(__name__)


def ccs_column(index, n, l):
    """Plonkish z 인덱스 (k < n)를 CCS z' 열로 옮긴다."""
    return index if index < n - l else index + 1


def plonkish_to_ccs(structure):
    """Plonkish 구조체를 CCS 구조체로 변환한다.

    Args:
        structure: PlonkishStructure

    Returns:
        CCS: n' = n + 1, m' = m + (복사 제약 수), l' = l 인 CCS 구조체
    """
    n, m, l, t = structure.n, structure.m, structure.l, structure.t
    field = structure.field
    one = field.one()
    const_col = n - l
    copies = structure.copy_constraints
    r = len(copies)
    n_ccs = n + 1
    m_ccs = m + r

    # 게이트 슬롯 행렬 M_0 .. M_{t-1}
    slot_entries = [[] for _ in range(t)]
    for row, gate in enumerate(structure.gate_constraints):
        for i, k in enumerate(gate.indices):
            if k < n:
                slot_entries[i].append((row, ccs_column(k, n, l), one))
            else:
                slot_entries[i].append((row, const_col, structure.selectors[k - n]))
    matrices = [SparseMatrix(m_ccs, n_ccs, entries, field) for entries in slot_entries]

    multisets = []
    constants = []
    has_constant = not structure.g.constant_term().is_zero()
    indicator = t + 2
    for coeff, multiset in structure.g.monomials():
        if not multiset and r:
            multiset = (indicator,)
        multisets.append(multiset)
        constants.append(coeff)

    d = structure.d
    if r:
        left = [(m + j, ccs_column(cc.left.column, n, l), one) for j, cc in enumerate(copies)]
        right = [(m + j, ccs_column(cc.right.column, n, l), one) for j, cc in enumerate(copies)]
        matrices.append(SparseMatrix(m_ccs, n_ccs, left, field))
        matrices.append(SparseMatrix(m_ccs, n_ccs, right, field))
        multisets.extend([(t,), (t + 1,)])
        constants.extend([one, -one])
        if has_constant:
            gate_rows = [(row, const_col, one) for row in range(m)]
            matrices.append(SparseMatrix(m_ccs, n_ccs, gate_rows, field))
        d = max(d, 1)

    _logger.debug(
        "Plonkish -> CCS: m=%d (+%d copy rows), t=%d -> %d, q=%d",
        m, r, t, len(matrices), len(multisets),
    )
    return CCS(
        n=n_ccs, m=m_ccs, l=l, N=None,
        t=len(matrices), q=len(multisets), d=d,
        M=matrices, S=multisets, c=constants,
        field=field,
    )


def ccs_assignment(instance, witness):
    """Plonkish (x, w)를 plonkish_to_ccs 결과에 맞는 CCS 할당으로 다시 감싼다.

    CCS z' = (w, 1, x) 는 Plonkish의 w와 x를 그대로 쓴다.
    """
    return (
        CCSInstance(instance.values, instance.field),
        CCSWitness(witness.values, witness.field),
    )
