"""
PLONK Structured Reference String (SRS)
=======================================

KZG10 커밋먼트의 범용 공개 파라미터와 그로부터 잘라낸 키.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 powers: [G2, τ·G2]
  }

**trim**:
  회로 크기에 맞춰 SRS를 잘라 두 키를 만든다.
  - CommitterKey: 커밋/열기에 필요한 G1 거듭제곱 (prover 쪽)
  - OpeningKey:   검증에 필요한 G1, G2, τ·G2 (verifier 쪽)

여기서는 테스트용으로 seed에서 τ를 결정론적으로 유도한다. 실제
시스템에서는 MPC 세레모니 결과를 사용해야 한다.

사용 예시:
    >>> srs = SRS.generate(max_degree=64, seed=42)
    >>> ck, ok = srs.trim(32)
"""

import hashlib
import secrets

from plonk_core.field import FR, G1, G2, ec_mul, CURVE_ORDER


def _sample_tau(seed):
    """seed 가 주어지면 SHA-256(str(seed)) 에서, 아니면 secrets 로 τ 를 뽑는다."""
    if seed is None:
        return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)
    digest = hashlib.sha256(str(seed).encode()).digest()
    return FR(int.from_bytes(digest, "big"))


class CommitterKey:
    """커밋 키: [G1, τ·G1, ..., τ^d·G1]"""

    def __init__(self, powers_of_g):
        self.powers_of_g = powers_of_g

    @property
    def max_degree(self):
        return len(self.powers_of_g) - 1


class OpeningKey:
    """열기 검증 키 (g = G1, h = G2, beta_h = τ·G2)."""

    def __init__(self, g, h, beta_h):
        self.g = g
        self.h = h
        self.beta_h = beta_h


class SRS:
    """범용 공개 파라미터. g1_powers 는 d + 1 개, g2_powers 는 [G2, τ·G2]."""

    def __init__(self, g1_powers, g2_powers, max_degree):
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.max_degree = max_degree

    @classmethod
    def generate(cls, max_degree, seed=None):
        """차수 max_degree 까지 커밋할 수 있는 SRS 를 만든다.

        배선, 누적자, σ, 몫 조각이 모두 차수 n-1 이하이므로 회로 도메인
        크기 n 이면 충분하다.
        """
        tau = _sample_tau(seed)
        g1_powers = [ec_mul(G1, tau ** i) for i in range(max_degree + 1)]
        return cls(g1_powers, [G2, ec_mul(G2, tau)], max_degree)

    def trim(self, degree):
        """(CommitterKey, OpeningKey)

        Raises:
            ValueError: degree 가 SRS 최대 차수를 넘을 때
        """
        if degree > self.max_degree:
            raise ValueError(
                f"요청 차수 {degree}가 SRS 최대 차수 {self.max_degree}를 초과합니다"
            )
        return (
            CommitterKey(self.g1_powers[: degree + 1]),
            OpeningKey(self.g1_powers[0], *self.g2_powers),
        )
