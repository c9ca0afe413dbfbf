"""
KZG10 다항식 커밋먼트 스킴
=========================

**커밋먼트**:
  C = Σᵢ cᵢ · [τⁱ]₁ = p(τ)·G1

**일괄 열기 (batch opening)**:
  같은 점 z에서 여러 다항식을 한 번에 연다. 챌린지 v로 선형결합한
  p(x) = Σ vⁱ·pᵢ(x) 하나에 대해서만 증인 π = [(p(x) - p(z)) / (x - z)]₁ 을
  만든다. 검증자는 커밋먼트와 평가값을 같은 vⁱ로 결합한 뒤

      e(C - y·G1, G2) == e(π, [τ]₂ - z·[1]₂)

  한 번의 페어링 등식으로 확인한다.

**오류 구분**:
  check는 페어링 등식의 참/거짓만 bool로 돌려준다. 길이가 맞지 않거나
  키 또는 증인 점이 손상된 경우는 판정할 수 없는 상태이므로 SchemeFault로
  중단한다.

사용 예시:
    >>> C = commit(poly, ck)
    >>> pi = open(ck, [poly], FR(7), FR(1))
    >>> check(ok, [C], FR(7), [poly.evaluate(FR(7))], pi, FR(1))  # True
"""

from plonk_core.errors import SchemeFault
from plonk_core.field import (
    FR, ec_mul, ec_add, ec_neg, ec_msm, ec_pairing, is_on_curve_g1, is_on_curve_g2,
)
from plonk_core.polynomial import divide_by_linear


def commit(poly, committer_key):
    """다항식을 KZG 커밋한다.

    Raises:
        ValueError: 다항식 차수가 커밋 키의 최대 차수를 초과할 때
    """
    if poly.degree > committer_key.max_degree:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 커밋 키 최대 차수 "
            f"{committer_key.max_degree}를 초과합니다"
        )
    return ec_msm(committer_key.powers_of_g[: len(poly.coeffs)], poly.coeffs)


def multi_scalar_mul(points, scalars):
    """커밋먼트의 동형 결합 Σ scalars[i]·points[i]."""
    return ec_msm(points, scalars)


def _combine(items, challenge):
    """Σ challengeⁱ · items[i] (FR 또는 Polynomial)"""
    acc = None
    power = FR(1)
    for item in items:
        term = item * power
        acc = term if acc is None else acc + term
        power = power * challenge
    return acc


def create_witness(poly, point, committer_key):
    """p(z)의 열기 증인 π = commit((p(x) - p(z)) / (x - z))."""
    if not isinstance(point, FR):
        point = FR(point)
    quotient, _ = divide_by_linear(poly, point)
    return commit(quotient, committer_key)


def open(committer_key, polys, point, challenge):
    """여러 다항식을 같은 점에서 일괄로 연다.

    Args:
        committer_key: CommitterKey
        polys: Polynomial 리스트
        point: 평가 점 z
        challenge: 결합 챌린지 v

    Returns:
        G1 점: Σ vⁱ·pᵢ 의 열기 증인
    """
    return create_witness(_combine(polys, challenge), point, committer_key)


def verify_opening(commitment, proof, point, evaluation, opening_key):
    """단일 열기 증명 검증: e(C - y·G1, G2) == e(π, [τ]₂ - z·[1]₂)"""
    if not isinstance(point, FR):
        point = FR(point)
    if not isinstance(evaluation, FR):
        evaluation = FR(evaluation)

    tau_minus_z_h = ec_add(opening_key.beta_h, ec_neg(ec_mul(opening_key.h, point)))
    c_minus_y = ec_add(commitment, ec_neg(ec_mul(opening_key.g, evaluation)))

    lhs = ec_pairing(opening_key.h, c_minus_y)
    rhs = ec_pairing(tau_minus_z_h, proof)
    return lhs == rhs


def check(opening_key, commitments, point, evaluations, proof, challenge):
    """일괄 열기 검사.

    Returns:
        bool: 페어링 등식 성립 여부

    Raises:
        SchemeFault: 입력 길이 불일치, 키 손상, 증인 점이 곡선 밖일 때
    """
    if not commitments:
        raise SchemeFault("검사할 커밋먼트가 없습니다")
    if len(commitments) != len(evaluations):
        raise SchemeFault(
            f"커밋먼트 {len(commitments)}개와 평가값 {len(evaluations)}개의 길이가 다릅니다"
        )
    if opening_key.g is None or opening_key.h is None or opening_key.beta_h is None:
        raise SchemeFault("열기 키가 손상되었습니다")
    if not is_on_curve_g1(opening_key.g):
        raise SchemeFault("열기 키의 G1 생성자가 곡선 위에 없습니다")
    if not (is_on_curve_g2(opening_key.h) and is_on_curve_g2(opening_key.beta_h)):
        raise SchemeFault("열기 키의 G2 점이 곡선 위에 없습니다")
    if not is_on_curve_g1(proof):
        raise SchemeFault("열기 증인이 곡선 위에 없습니다")

    combined_commitment = multi_scalar_mul(
        commitments, [challenge ** i for i in range(len(commitments))]
    )
    combined_evaluation = _combine(evaluations, challenge)
    return verify_opening(combined_commitment, proof, point, combined_evaluation, opening_key)
