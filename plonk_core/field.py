"""
PLONK 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
========================================================

PLONK 코어 전체에서 사용되는 대수적 도구를 정의한다.

**유한체 FR**:
  bn128(BN254) 곡선의 스칼라 필드. 모든 다항식 연산, 챌린지, 평가값의
  기본 산술 단위이다.
  - 위수 r ≈ 2^254, 소수체
  - r - 1 = 2^28 × m (m은 홀수) → TWO_ADICITY = 28

**타원곡선 연산**:
  공개 API의 점 표현은 py_ecc.bn128의 아핀 좌표 (x, y) 이며, 무한원점은 None.
  스칼라 곱, 다중 스칼라 곱, 페어링은 내부적으로 py_ecc.optimized_bn128
  (Jacobian 좌표)에서 계산한 뒤 아핀 좌표로 되돌린다.

사용 예시:
    >>> from plonk_core.field import FR, G1, ec_mul
    >>> FR(3) * FR(7)       # FR(21)
    >>> ec_mul(G1, 5)       # 5·G1
"""

from py_ecc import bn128
from py_ecc import optimized_bn128 as optimized
from py_ecc.fields import bn128_FQ as FQ


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    예시:
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
        >>> FR(-1) == FR(CURVE_ORDER - 1)   # True
    """
    field_modulus = bn128.curve_order


# 스칼라 필드 위수
CURVE_ORDER = bn128.curve_order

# 베이스 필드 위수 (점 좌표의 범위)
FIELD_MODULUS = bn128.field_modulus

# r - 1 을 나누는 2의 최대 지수
TWO_ADICITY = 28

# FR*의 생성자. 단위근 유도와 코셋 이동(coset shift)에 사용한다.
MULTIPLICATIVE_GENERATOR = FR(5)


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# 무한원점 (항등원)
Z1 = None


def _is_g2(point):
    return isinstance(point[0], bn128.FQ2)


def _to_optimized(point, g2=False):
    """아핀 점 → optimized_bn128 Jacobian 점."""
    if point is None:
        return optimized.Z2 if g2 else optimized.Z1
    x, y = point
    if _is_g2(point):
        return (
            optimized.FQ2([int(c) for c in x.coeffs]),
            optimized.FQ2([int(c) for c in y.coeffs]),
            optimized.FQ2.one(),
        )
    return (optimized.FQ(int(x)), optimized.FQ(int(y)), optimized.FQ.one())


def _from_optimized(point):
    """optimized_bn128 Jacobian 점 → 아핀 점 (무한원점은 None)."""
    if optimized.is_inf(point):
        return None
    x, y = optimized.normalize(point)
    if isinstance(x, optimized.FQ2):
        return (
            bn128.FQ2([int(c) for c in x.coeffs]),
            bn128.FQ2([int(c) for c in y.coeffs]),
        )
    return (bn128.FQ(int(x)), bn128.FQ(int(y)))


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 아핀 점 (None이면 무한원점)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point
    """
    if point is None:
        return None
    scalar = int(scalar) % CURVE_ORDER
    return _from_optimized(optimized.multiply(_to_optimized(point), scalar))


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_msm(points, scalars):
    """다중 스칼라 곱: Σ scalars[i] · points[i] (G1).

    Jacobian 좌표에서 누적한 뒤 마지막에 한 번만 아핀으로 정규화한다.

    Raises:
        ValueError: points와 scalars의 길이가 다를 때
    """
    if len(points) != len(scalars):
        raise ValueError(
            f"점 {len(points)}개와 스칼라 {len(scalars)}개의 길이가 다릅니다"
        )
    acc = optimized.Z1
    for point, scalar in zip(points, scalars):
        scalar = int(scalar) % CURVE_ORDER
        if point is None or scalar == 0:
            continue
        acc = optimized.add(acc, optimized.multiply(_to_optimized(point), scalar))
    return _from_optimized(acc)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc의 인자 순서를 따라 (G2, G1) 순서로 받는다.
    """
    return optimized.pairing(
        _to_optimized(g2_point, g2=True), _to_optimized(g1_point)
    )


def is_on_curve_g1(point):
    """G1 점의 유효성 검사 (좌표 정규형 + 곡선 방정식).

    bn128 G1의 코팩터는 1이므로 곡선 위의 점은 곧 부분군의 원소이다.
    """
    if point is None:
        return True
    x, y = point
    if not (0 <= int(x) < FIELD_MODULUS and 0 <= int(y) < FIELD_MODULUS):
        return False
    return bn128.is_on_curve(point, bn128.b)


def is_on_curve_g2(point):
    """G2 점의 유효성 검사 (곡선 방정식 + 부분군)."""
    if point is None:
        return True
    if not bn128.is_on_curve(point, bn128.b2):
        return False
    return optimized.is_inf(
        optimized.multiply(_to_optimized(point, g2=True), CURVE_ORDER)
    )


# ─────────────────────────────────────────────────────────────────────
# 일괄 역원 (Batch Inversion)
# ─────────────────────────────────────────────────────────────────────

def batch_inverse(values):
    """Montgomery 트릭으로 여러 원소의 역원을 한 번의 나눗셈으로 구한다.

    0인 원소는 건너뛰고 그대로 0으로 남긴다.

    Args:
        values: FR 원소 리스트

    Returns:
        list[FR]: 각 원소의 역원 (0은 0)

    예시:
        >>> batch_inverse([FR(2), FR(0), FR(4)])   # [1/2, 0, 1/4]
    """
    prefix = []
    acc = FR(1)
    for v in values:
        prefix.append(acc)
        if v != 0:
            acc = acc * v

    inv = FR(1) / acc
    result = [FR(0)] * len(values)
    for i in range(len(values) - 1, -1, -1):
        v = values[i]
        if v == 0:
            continue
        result[i] = inv * prefix[i]
        inv = inv * v
    return result


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    생성자 g = 5에 대해 ω = g^((r-1)/n). ω^n = 1이고 ω^k ≠ 1 (0 < k < n).

    Args:
        n: 단위근의 차수 (2의 거듭제곱, ≤ 2^TWO_ADICITY)

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^TWO_ADICITY를 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << TWO_ADICITY):
        raise ValueError(f"n은 2^{TWO_ADICITY} 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)
    return MULTIPLICATIVE_GENERATOR ** ((CURVE_ORDER - 1) // n)


def get_roots_of_unity(n):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
