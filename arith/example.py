"""
산술화 데모: x³ + x + 5 = 35 (x = 3)
====================================

같은 계산을 R1CS, CCS, Plonkish로 표현하고 만족 여부를 확인한다.

실행:
    python -m arith.example

흐름:
    1. R1CS 구성 및 만족 검사
    2. R1CS → CCS 변환 후 같은 할당으로 검사
    3. Plonkish 구성 및 만족 검사 (게이트 + 복사 제약)
    4. Plonkish → CCS 변환 후 검사
    5. 잘못된 위트니스는 세 시스템 모두에서 거부되는지 확인
"""

import logging

from arith.ccs import CCSInstance, CCSWitness
from arith.circuits import (
    PLONK_GATE_VARIABLES,
    x3_plus_x_plus_5_eq_35_plonkish,
    x3_plus_x_plus_5_eq_35_r1cs,
)
from arith.plonkish import PlonkishWitness
from arith.r1cs import R1CSWitness


def _mark(ok):
    return "✓" if ok else "✗"


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("  R1CS / CCS / Plonkish Arithmetization Demo")
    print("  회로: x³ + x + 5 = 35 (x = 3)")
    print("=" * 60)

    # ── 1. R1CS ──
    print("\n[1] R1CS 구성...")
    r1cs, x, w = x3_plus_x_plus_5_eq_35_r1cs()
    print(f"    {r1cs}")
    print(f"    공개 입력 x: {[int(v) for v in x]}")
    print(f"    위트니스 w: {[int(v) for v in w]}")
    r1cs_ok = r1cs.is_satisfied_by(x, w)
    print(f"    만족 여부: {_mark(r1cs_ok)}")

    # ── 2. R1CS → CCS ──
    print("\n[2] R1CS → CCS 변환...")
    ccs = r1cs.to_ccs()
    print(f"    {ccs}")
    ccs_ok = ccs.is_satisfied_by(CCSInstance(x.values), CCSWitness(w.values))
    print(f"    만족 여부: {_mark(ccs_ok)}")

    # ── 3. Plonkish ──
    print("\n[3] Plonkish 구성...")
    structure, px, pw = x3_plus_x_plus_5_eq_35_plonkish()
    print(f"    {structure}")
    print(f"    g = {structure.g}   (변수 순서: {', '.join(PLONK_GATE_VARIABLES)})")
    for row, values in enumerate(structure.trace(px, pw)):
        print(f"      행 {row}: {[int(v) for v in values]}")
    for cc in structure.copy_constraints:
        print(f"    복사 제약: {cc}")
    plonkish_ok = structure.is_satisfied_by(px, pw)
    print(f"    만족 여부: {_mark(plonkish_ok)}")

    # ── 4. Plonkish → CCS ──
    print("\n[4] Plonkish → CCS 변환...")
    pccs = structure.to_ccs()
    print(f"    {pccs}")
    cx, cw = structure.ccs_assignment(px, pw)
    pccs_ok = pccs.is_satisfied_by(cx, cw)
    print(f"    만족 여부: {_mark(pccs_ok)}")

    # ── 5. 잘못된 위트니스 ──
    # x³ 자리에 26을 넣으면 모든 표현에서 실패해야 한다.
    print("\n[5] 잘못된 위트니스 (x³ = 26)...")
    bad_r1cs = R1CSWitness([3, 9, 26, 30])
    bad_plonkish = PlonkishWitness([3, 9, 26, 30, 3])
    rejected = [
        not r1cs.is_satisfied_by(x, bad_r1cs),
        not ccs.is_satisfied_by(CCSInstance(x.values), CCSWitness(bad_r1cs.values)),
        not structure.is_satisfied_by(px, bad_plonkish),
        not pccs.is_satisfied_by(*structure.ccs_assignment(px, bad_plonkish)),
    ]
    print(f"    R1CS 거부: {_mark(rejected[0])}, CCS 거부: {_mark(rejected[1])}")
    print(f"    Plonkish 거부: {_mark(rejected[2])}, CCS(Plonkish) 거부: {_mark(rejected[3])}")

    result = all([r1cs_ok, ccs_ok, plonkish_ok, pccs_ok] + rejected)
    print("\n" + "=" * 60)
    if result:
        print("  데모 완료: 모든 검사 통과!")
    else:
        print("  데모 완료: 일부 검사 실패")
    print("=" * 60)

    return result


if __name__ == "__main__":
    main()
