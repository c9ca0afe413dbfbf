"""
PLONK 증명 바이트 직렬화/역직렬화
================================

**인코딩 규칙** (모두 빅엔디안):
  - 스칼라 FR: 32바이트, 정규형 (< r)
  - G1 점:     64바이트 (x ‖ y), 무한원점은 0 64바이트
  - u64:       8바이트

**Proof 레이아웃**:
  [a] [b] [c] [d] [z] [t_1] [t_2] [t_3] [t_4]      커밋먼트 9개
  [aw_opening] [saw_opening]                        열기 증명 2개
  a b c d                                           배선 평가값 4개
  σ1 σ2 σ3 z̄ω                                       순열 평가값 4개
  count(u64), { len(u64) ‖ 레이블 ‖ 스칼라 } × count 커스텀 평가값

역직렬화는 모든 점이 곡선 위에 있는지 다시 확인하고, 커스텀 평가값
레이블이 고정 순서와 정확히 같은지 검사한다.
"""

from py_ecc import bn128

from plonk_core.errors import SerializationError
from plonk_core.evaluations import (
    CustomEvaluations, PermutationEvaluations, ProofEvaluations, WireEvaluations,
)
from plonk_core.field import FR, CURVE_ORDER, FIELD_MODULUS, is_on_curve_g1
from plonk_core.proof import COMMITMENT_FIELDS, OPENING_FIELDS, Proof


SCALAR_SIZE = 32
POINT_SIZE = 64


# ─── FR ───

def serialize_scalar(value):
    """FR → 32바이트"""
    return (int(value) % CURVE_ORDER).to_bytes(SCALAR_SIZE, "big")


def deserialize_scalar(data):
    """32바이트 → FR (정규형이 아니면 SerializationError)"""
    if len(data) != SCALAR_SIZE:
        raise SerializationError(f"스칼라는 {SCALAR_SIZE}바이트여야 합니다: {len(data)}")
    value = int.from_bytes(data, "big")
    if value >= CURVE_ORDER:
        raise SerializationError("스칼라가 필드 위수 이상입니다")
    return FR(value)


# ─── G1 point ───

def serialize_point(point):
    """G1 점 → 64바이트 (무한원점은 0)"""
    if point is None:
        return b"\x00" * POINT_SIZE
    x, y = point
    return int(x).to_bytes(32, "big") + int(y).to_bytes(32, "big")


def deserialize_point(data):
    """64바이트 → G1 점 (곡선 밖이면 SerializationError)"""
    if len(data) != POINT_SIZE:
        raise SerializationError(f"점은 {POINT_SIZE}바이트여야 합니다: {len(data)}")
    if data == b"\x00" * POINT_SIZE:
        return None
    x = int.from_bytes(data[:32], "big")
    y = int.from_bytes(data[32:], "big")
    if x >= FIELD_MODULUS or y >= FIELD_MODULUS:
        raise SerializationError("점 좌표가 베이스 필드 위수 이상입니다")
    point = (bn128.FQ(x), bn128.FQ(y))
    if not is_on_curve_g1(point):
        raise SerializationError("점이 G1 곡선 위에 없습니다")
    return point


# ─── Reader ───

class _Reader:
    """바이트열을 앞에서부터 읽는다."""

    def __init__(self, data):
        self.data = bytes(data)
        self.offset = 0

    def take(self, size):
        end = self.offset + size
        if end > len(self.data):
            raise SerializationError(
                f"데이터가 부족합니다: 오프셋 {self.offset}에서 {size}바이트 필요"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u64(self):
        return int.from_bytes(self.take(8), "big")

    def scalar(self):
        return deserialize_scalar(self.take(SCALAR_SIZE))

    def point(self):
        return deserialize_point(self.take(POINT_SIZE))

    def finish(self):
        if self.offset != len(self.data):
            raise SerializationError(
                f"남은 바이트가 있습니다: {len(self.data) - self.offset}바이트"
            )


# ─── Proof ───

def serialize_proof(proof):
    """Proof → bytes"""
    out = bytearray()
    for name in COMMITMENT_FIELDS + OPENING_FIELDS:
        out.extend(serialize_point(getattr(proof, name)))

    wire = proof.evaluations.wire_evals
    perm = proof.evaluations.perm_evals
    for value in (wire.a_eval, wire.b_eval, wire.c_eval, wire.d_eval,
                  perm.left_sigma_eval, perm.right_sigma_eval,
                  perm.out_sigma_eval, perm.permutation_eval):
        out.extend(serialize_scalar(value))

    custom = proof.evaluations.custom_evals.items()
    out.extend(len(custom).to_bytes(8, "big"))
    for label, value in custom:
        encoded = label.encode()
        out.extend(len(encoded).to_bytes(8, "big"))
        out.extend(encoded)
        out.extend(serialize_scalar(value))
    return bytes(out)


def deserialize_proof(data):
    """bytes → Proof

    Raises:
        SerializationError: 길이 부족, 비정규 스칼라, 곡선 밖의 점,
            커스텀 레이블 불일치, 남은 바이트
    """
    reader = _Reader(data)
    points = {name: reader.point() for name in COMMITMENT_FIELDS + OPENING_FIELDS}

    wire_evals = WireEvaluations(*(reader.scalar() for _ in range(4)))
    perm_evals = PermutationEvaluations(*(reader.scalar() for _ in range(4)))

    count = reader.u64()
    if count != len(CustomEvaluations.LABELS):
        raise SerializationError(
            f"커스텀 평가값은 {len(CustomEvaluations.LABELS)}개여야 합니다: {count}"
        )
    custom = {}
    for expected in CustomEvaluations.LABELS:
        length = reader.u64()
        if length != len(expected):
            raise SerializationError(f"커스텀 평가값 레이블 길이 불일치: {expected}")
        label = reader.take(length)
        if label != expected.encode():
            raise SerializationError(
                f"커스텀 평가값 레이블 불일치: {label!r} (기대값 {expected})"
            )
        custom[expected] = reader.scalar()
    reader.finish()

    evaluations = ProofEvaluations(wire_evals, perm_evals, CustomEvaluations(**custom))
    return Proof(evaluations=evaluations, **points)
