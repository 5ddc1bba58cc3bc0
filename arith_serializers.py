"""
제약 시스템 직렬화/역직렬화 헬퍼
================================

JSON 요청/응답에 쓸 수 있는 형태로 R1CS, CCS, Plonkish 객체를 변환한다.
필드 원소는 10진수 문자열로 주고받는다 (2^254 규모 정수가 JSON 숫자 정밀도를 넘기 때문).

**형식**:
  | 객체                 | JSON                                                    |
  |----------------------|---------------------------------------------------------|
  | 필드 원소            | "35"  (음수 정수 -1 도 입력으로 허용)                    |
  | SparseMatrix         | {"rows": 4, "cols": 6, "entries": [[0, 0, "1"], ...]}   |
  |                      | 또는 [[1, 0, ...], ...] (dense, 입력 전용)               |
  | MultivariatePolynomial | {"num_vars": 8, "terms": [["1", [3, 0]], ...]}        |
  | 복사 제약            | [[행, 열], [행, 열]]                                    |

구조체 JSON의 "modulus"는 출력에 항상 들어가고, 입력에서는 선택 사항이다
(field_from_payload 참고).

형식이 잘못된 입력은 PayloadError를 던진다 (라우트에서 400 BadRequest로 변환).
"""

from arith.ccs import CCS, CCSInstance, CCSWitness
from arith.errors import ModulusMismatchError
from arith.field import prime_field
from arith.matrix import SparseMatrix
from arith.plonkish import PlonkishInstance, PlonkishStructure, PlonkishWitness
from arith.polynomial import MultivariatePolynomial
from arith.r1cs import R1CS, R1CSInstance, R1CSWitness


class PayloadError(ValueError):
    """요청 JSON의 형식이 잘못되었을 때 (키 누락, 타입 오류)."""


def _require(data, key):
    if not isinstance(data, dict):
        raise PayloadError(f"JSON 객체가 필요합니다: {type(data).__name__}")
    if key not in data:
        raise PayloadError(f"필수 키 '{key}'가 없습니다")
    return data[key]


def _int(value, name):
    if isinstance(value, bool):
        raise PayloadError(f"{name}은(는) 정수여야 합니다: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            raise PayloadError(f"{name}을(를) 정수로 읽을 수 없습니다: {value!r}") from None
    raise PayloadError(f"{name}은(는) 정수여야 합니다: {value!r}")


def _list(value, name):
    if not isinstance(value, list):
        raise PayloadError(f"{name}은(는) 리스트여야 합니다")
    return value


# ─── 필드 ───

def _modulus_of(data):
    if isinstance(data, dict) and "modulus" in data:
        return _int(data["modulus"], "modulus")
    return None


def field_from_payload(data, default_modulus, structure=None):
    """요청의 필드를 고른다.

    serialize_* 는 구조체 안에 "modulus"를 기록하므로, 응답으로 받은 구조체를
    그대로 다시 보내도 같은 필드에서 검사된다.

    | 요청 "modulus" | 구조체 "modulus" | 결과                  |
    |----------------|------------------|-----------------------|
    | 없음           | 없음             | default_modulus       |
    | p              | 없음             | p                     |
    | 없음           | p                | p                     |
    | p              | p                | p                     |
    | p              | p' (≠ p)         | ModulusMismatchError  |
    """
    requested = _modulus_of(data)
    declared = _modulus_of(structure)
    if requested is not None and declared is not None and requested != declared:
        raise ModulusMismatchError(requested, declared)
    if declared is not None:
        return prime_field(declared)
    if requested is not None:
        return prime_field(requested)
    return prime_field(_int(default_modulus, "modulus"))


def serialize_fe(val):
    """FieldElement → str(int)"""
    return str(int(val))


def deserialize_fe(s, field):
    """str(int) 또는 int → field 원소"""
    return field(_int(s, "field element"))


def serialize_fe_list(lst):
    """list[FieldElement] → list[str]"""
    return [serialize_fe(v) for v in lst]


def deserialize_fe_list(data, field, name="vector"):
    """list[str] → list[FieldElement]"""
    return [deserialize_fe(s, field) for s in _list(data, name)]


# ─── SparseMatrix ───

def serialize_matrix(matrix):
    """SparseMatrix → {"rows", "cols", "entries": [[r, c, str], ...]}"""
    return {
        "rows": matrix.rows,
        "cols": matrix.cols,
        "entries": [[r, c, serialize_fe(v)] for r, c, v in matrix.entries()],
    }


def deserialize_matrix(data, field, name="matrix"):
    """희소 형식 dict 또는 dense 2차원 리스트 → SparseMatrix"""
    if isinstance(data, list):
        dense = [deserialize_fe_list(row, field, name) for row in data]
        return SparseMatrix.from_dense(dense, field)
    rows = _int(_require(data, "rows"), f"{name}.rows")
    cols = _int(_require(data, "cols"), f"{name}.cols")
    entries = []
    for entry in _list(_require(data, "entries"), f"{name}.entries"):
        if not isinstance(entry, list) or len(entry) != 3:
            raise PayloadError(f"{name}.entries 원소는 [행, 열, 값] 이어야 합니다: {entry!r}")
        r, c, v = entry
        entries.append((_int(r, "row"), _int(c, "column"), deserialize_fe(v, field)))
    return SparseMatrix(rows, cols, entries, field)


# ─── MultivariatePolynomial ───

def serialize_polynomial(poly):
    """MultivariatePolynomial → {"num_vars", "terms": [[str, [var, ...]], ...]}"""
    return {
        "num_vars": poly.num_vars,
        "terms": [[serialize_fe(coeff), list(multiset)] for coeff, multiset in poly.monomials()],
    }


def deserialize_polynomial(data, field):
    """{"num_vars", "terms"} → MultivariatePolynomial"""
    num_vars = _int(_require(data, "num_vars"), "g.num_vars")
    monomials = []
    for term in _list(_require(data, "terms"), "g.terms"):
        if not isinstance(term, list) or len(term) != 2:
            raise PayloadError(f"g.terms 원소는 [계수, [변수...]] 이어야 합니다: {term!r}")
        coeff, variables = term
        monomials.append((
            deserialize_fe(coeff, field),
            [_int(v, "variable") for v in _list(variables, "variables")],
        ))
    return MultivariatePolynomial.from_monomials(num_vars, monomials, field)


# ─── R1CS ───

def serialize_r1cs(r1cs):
    return {
        "modulus": str(r1cs.field.field_modulus),
        "n": r1cs.n,
        "m": r1cs.m,
        "l": r1cs.l,
        "N": r1cs.N,
        "A": serialize_matrix(r1cs.A),
        "B": serialize_matrix(r1cs.B),
        "C": serialize_matrix(r1cs.C),
    }


def deserialize_r1cs(data, field):
    N = data.get("N") if isinstance(data, dict) else None
    return R1CS(
        n=_int(_require(data, "n"), "n"),
        m=_int(_require(data, "m"), "m"),
        l=_int(_require(data, "l"), "l"),
        N=None if N is None else _int(N, "N"),
        A=deserialize_matrix(_require(data, "A"), field, "A"),
        B=deserialize_matrix(_require(data, "B"), field, "B"),
        C=deserialize_matrix(_require(data, "C"), field, "C"),
        field=field,
    )


# ─── CCS ───

def serialize_ccs(ccs):
    return {
        "modulus": str(ccs.field.field_modulus),
        "n": ccs.n,
        "m": ccs.m,
        "l": ccs.l,
        "N": ccs.N,
        "t": ccs.t,
        "q": ccs.q,
        "d": ccs.d,
        "M": [serialize_matrix(matrix) for matrix in ccs.M],
        "S": [list(multiset) for multiset in ccs.S],
        "c": serialize_fe_list(ccs.c),
    }


def deserialize_ccs(data, field):
    N = data.get("N") if isinstance(data, dict) else None
    return CCS(
        n=_int(_require(data, "n"), "n"),
        m=_int(_require(data, "m"), "m"),
        l=_int(_require(data, "l"), "l"),
        N=None if N is None else _int(N, "N"),
        t=_int(_require(data, "t"), "t"),
        q=_int(_require(data, "q"), "q"),
        d=_int(_require(data, "d"), "d"),
        M=[deserialize_matrix(matrix, field, f"M[{j}]")
           for j, matrix in enumerate(_list(_require(data, "M"), "M"))],
        S=[[_int(j, "S") for j in _list(multiset, "S")]
           for multiset in _list(_require(data, "S"), "S")],
        c=deserialize_fe_list(_require(data, "c"), field, "c"),
        field=field,
    )


# ─── Plonkish ───

def serialize_copy_constraint(cc):
    """CopyConstraint → [[행, 열], [행, 열]]"""
    return [[cc.left.row, cc.left.column], [cc.right.row, cc.right.column]]


def serialize_plonkish(structure):
    return {
        "modulus": str(structure.field.field_modulus),
        "m": structure.m,
        "n": structure.n,
        "l": structure.l,
        "e": structure.e,
        "t": structure.t,
        "q": structure.q,
        "d": structure.d,
        "g": serialize_polynomial(structure.g),
        "selectors": serialize_fe_list(structure.selectors),
        "gate_constraints": [list(gate.indices) for gate in structure.gate_constraints],
        "copy_constraints": [serialize_copy_constraint(cc) for cc in structure.copy_constraints],
    }


def _position(data):
    if not isinstance(data, list) or len(data) != 2:
        raise PayloadError(f"셀 위치는 [행, 열] 이어야 합니다: {data!r}")
    return (_int(data[0], "row"), _int(data[1], "column"))


def deserialize_plonkish(data, field):
    copies = []
    for pair in _list(data.get("copy_constraints", []) if isinstance(data, dict) else [],
                      "copy_constraints"):
        if not isinstance(pair, list) or len(pair) != 2:
            raise PayloadError(f"복사 제약은 [[행, 열], [행, 열]] 이어야 합니다: {pair!r}")
        copies.append((_position(pair[0]), _position(pair[1])))
    return PlonkishStructure(
        m=_int(_require(data, "m"), "m"),
        n=_int(_require(data, "n"), "n"),
        l=_int(_require(data, "l"), "l"),
        e=_int(_require(data, "e"), "e"),
        t=_int(_require(data, "t"), "t"),
        q=_int(_require(data, "q"), "q"),
        d=_int(_require(data, "d"), "d"),
        g=deserialize_polynomial(_require(data, "g"), field),
        selectors=deserialize_fe_list(_require(data, "selectors"), field, "selectors"),
        gate_constraints=[
            [_int(k, "gate index") for k in _list(gate, "gate_constraints")]
            for gate in _list(_require(data, "gate_constraints"), "gate_constraints")
        ],
        copy_constraints=copies,
        field=field,
    )


# ─── 할당 (Instance / Witness) ───

_ASSIGNMENT_TYPES = {
    "r1cs": (R1CSInstance, R1CSWitness),
    "ccs": (CCSInstance, CCSWitness),
    "plonkish": (PlonkishInstance, PlonkishWitness),
}


def serialize_assignment(instance, witness):
    """(Instance, Witness) → {"x": [...], "w": [...]}"""
    return {"x": serialize_fe_list(instance.values), "w": serialize_fe_list(witness.values)}


def deserialize_assignment(data, field, kind):
    """{"x": [...], "w": [...]} → (Instance, Witness)"""
    instance_type, witness_type = _ASSIGNMENT_TYPES[kind]
    x = deserialize_fe_list(_require(data, "x"), field, "x")
    w = deserialize_fe_list(_require(data, "w"), field, "w")
    return instance_type(x, field), witness_type(w, field)
