"""
산술화 Flask Blueprint: 제약 시스템 검사/변환 엔드포인트
========================================================

JSON 입력 / JSON 출력. 필드 원소는 10진수 문자열 (arith_serializers 참고).
필드는 구조체의 "modulus", 요청의 "modulus", app.config["ARITH_DEFAULT_MODULUS"] 순으로 정한다.
두 "modulus"가 서로 다르면 400 ModulusMismatchError.

| 메서드 | 경로                      | 응답                                                   |
|--------|---------------------------|--------------------------------------------------------|
| GET    | /arith/health             | {"status", "modulus"}                                  |
| GET    | /arith/examples/<name>    | 예제 구조체 + 할당 (r1cs, plonkish)                     |
| POST   | /arith/r1cs/check         | {"satisfied", "unsatisfied_rows"}                      |
| POST   | /arith/ccs/check          | {"satisfied", "unsatisfied_rows"}                      |
| POST   | /arith/plonkish/check     | {"satisfied", "failing_gates", "failing_copy_constraints"} |
| POST   | /arith/r1cs/to-ccs        | CCS 구조체                                             |
| POST   | /arith/plonkish/to-ccs    | CCS 구조체 (+ assignment가 주어지면 CCS 할당)           |

오류:
  - ArithError (차원/범위/필드 오류) → 400 {"error": 클래스 이름, "message"}
  - 형식이 잘못된 요청 → 400 {"error": "BadRequest", "message"}
  - 없는 예제 → 404
"""

from flask import Blueprint, current_app, jsonify, request

from arith.circuits import x3_plus_x_plus_5_eq_35_plonkish, x3_plus_x_plus_5_eq_35_r1cs
from arith.errors import ArithError

from arith_serializers import (
    PayloadError,
    field_from_payload,
    serialize_assignment, deserialize_assignment,
    serialize_ccs, deserialize_ccs,
    serialize_copy_constraint,
    serialize_plonkish, deserialize_plonkish,
    serialize_r1cs, deserialize_r1cs,
)

arith_bp = Blueprint('arith', __name__, url_prefix='/arith')


# ─── 요청 헬퍼 ───

def request_payload():
    """요청 JSON 본문 (dict가 아니면 PayloadError)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError("요청 본문은 JSON 객체여야 합니다")
    return data


def request_field(data, structure):
    """요청의 필드 (구조체 modulus, 요청 modulus, 앱 기본값 순)."""
    return field_from_payload(data, current_app.config["ARITH_DEFAULT_MODULUS"], structure)


def payload_section(data, key):
    """필수 하위 객체를 꺼낸다."""
    if key not in data:
        raise PayloadError(f"필수 키 '{key}'가 없습니다")
    return data[key]


# ──────────────────────────────────────────────────────────────
# 오류 처리
# ──────────────────────────────────────────────────────────────

@arith_bp.errorhandler(ArithError)
def handle_arith_error(exc):
    """제약 시스템 오류 → 400."""
    current_app.logger.info("arith error on %s: %s", request.path, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), 400


@arith_bp.errorhandler(PayloadError)
def handle_payload_error(exc):
    """요청 형식 오류 → 400 BadRequest."""
    current_app.logger.info("bad payload on %s: %s", request.path, exc)
    return jsonify({"error": "BadRequest", "message": str(exc)}), 400


# ──────────────────────────────────────────────────────────────
# 상태 / 예제
# ──────────────────────────────────────────────────────────────

@arith_bp.route("/health")
def health():
    """서비스 상태와 기본 위수."""
    return jsonify({
        "status": "ok",
        "modulus": str(current_app.config["ARITH_DEFAULT_MODULUS"]),
    })


@arith_bp.route("/examples/<name>")
def example(name):
    """x³+x+5=35 예제를 R1CS 또는 Plonkish 형식으로 돌려준다."""
    if name == "r1cs":
        r1cs, x, w = x3_plus_x_plus_5_eq_35_r1cs()
        return jsonify({
            "structure": serialize_r1cs(r1cs),
            "assignment": serialize_assignment(x, w),
        })
    if name == "plonkish":
        structure, x, w = x3_plus_x_plus_5_eq_35_plonkish()
        return jsonify({
            "structure": serialize_plonkish(structure),
            "assignment": serialize_assignment(x, w),
        })
    return jsonify({"error": "NotFound", "message": f"예제 '{name}'이(가) 없습니다"}), 404


# ──────────────────────────────────────────────────────────────
# 만족 검사
# ──────────────────────────────────────────────────────────────

@arith_bp.route("/r1cs/check", methods=["POST"])
def r1cs_check():
    """R1CS 만족 검사. 본문: {"structure", "assignment": {"x", "w"}}"""
    data = request_payload()
    section = payload_section(data, "structure")
    field = request_field(data, section)
    r1cs = deserialize_r1cs(section, field)
    x, w = deserialize_assignment(payload_section(data, "assignment"), field, "r1cs")
    failing = r1cs.unsatisfied_rows(x, w)
    return jsonify({"satisfied": not failing, "unsatisfied_rows": failing})


@arith_bp.route("/ccs/check", methods=["POST"])
def ccs_check():
    """CCS 만족 검사. 본문: {"structure", "assignment": {"x", "w"}}"""
    data = request_payload()
    section = payload_section(data, "structure")
    field = request_field(data, section)
    ccs = deserialize_ccs(section, field)
    x, w = deserialize_assignment(payload_section(data, "assignment"), field, "ccs")
    failing = ccs.unsatisfied_rows(x, w)
    return jsonify({"satisfied": not failing, "unsatisfied_rows": failing})


@arith_bp.route("/plonkish/check", methods=["POST"])
def plonkish_check():
    """Plonkish 만족 검사 (게이트 + 복사 제약)."""
    data = request_payload()
    section = payload_section(data, "structure")
    field = request_field(data, section)
    structure = deserialize_plonkish(section, field)
    x, w = deserialize_assignment(payload_section(data, "assignment"), field, "plonkish")
    gates = structure.failing_gates(x, w)
    copies = structure.failing_copy_constraints(x, w)
    return jsonify({
        "satisfied": not gates and not copies,
        "failing_gates": gates,
        "failing_copy_constraints": [serialize_copy_constraint(cc) for cc in copies],
    })


# ──────────────────────────────────────────────────────────────
# CCS 변환
# ──────────────────────────────────────────────────────────────

@arith_bp.route("/r1cs/to-ccs", methods=["POST"])
def r1cs_to_ccs():
    """R1CS → CCS. 할당은 그대로 쓰이므로 구조체만 돌려준다."""
    data = request_payload()
    section = payload_section(data, "structure")
    field = request_field(data, section)
    r1cs = deserialize_r1cs(section, field)
    return jsonify({"structure": serialize_ccs(r1cs.to_ccs())})


@arith_bp.route("/plonkish/to-ccs", methods=["POST"])
def plonkish_to_ccs():
    """Plonkish → CCS. assignment가 있으면 CCS 할당도 함께 돌려준다."""
    data = request_payload()
    section = payload_section(data, "structure")
    field = request_field(data, section)
    structure = deserialize_plonkish(section, field)
    result = {"structure": serialize_ccs(structure.to_ccs())}
    if "assignment" in data:
        x, w = deserialize_assignment(data["assignment"], field, "plonkish")
        result["assignment"] = serialize_assignment(*structure.ccs_assignment(x, w))
    return jsonify(result)
