"""
PLONK Fiat-Shamir 트랜스크립트
==============================

SHA-256 체이닝 트랜스크립트. 상태는 `레이블 ‖ 인코딩된 값` 을 이어 붙인
바이트열이고, 챌린지를 뽑을 때마다 다이제스트가 상태 뒤에 붙는다.

  FR      32바이트 빅엔디안
  G1 점   x ‖ y 64바이트, 무한원점(None)은 0 64바이트
  int     u64 8바이트 빅엔디안 (도메인 크기, 공개 입력 인덱스)

**챌린지 순서** (증명 한 번):
  w_l, w_r, w_o, w_4 → β, γ
  z → α, 범위/논리/고정기저/가변기저 분리 챌린지
  t_1..t_4 → 평가 점 z
  평가값들 → aw 챌린지 → saw 챌린지

사용 예시:
    >>> t = Transcript(b"my-circuit")
    >>> t.append(b"w_l", a_comm)
    >>> beta = t.challenge_scalar(b"beta")
"""

import hashlib

from plonk_core.field import FR, CURVE_ORDER


def _encode(value):
    if isinstance(value, FR):
        return (int(value) % CURVE_ORDER).to_bytes(32, "big")
    if value is None:
        return bytes(64)
    if isinstance(value, tuple):
        return b"".join(int(coord).to_bytes(32, "big") for coord in value)
    if isinstance(value, int):
        return value.to_bytes(8, "big")
    raise TypeError(f"트랜스크립트에 추가할 수 없는 타입: {type(value).__name__}")


class Transcript:
    """Prover 와 Verifier 가 같은 레이블, 같은 순서로 호출하면 같은 챌린지를 얻는다."""

    def __init__(self, label=b"plonk"):
        self.state = bytearray(label)

    def append(self, label, value):
        """FR, G1 점(또는 None), int 를 레이블과 함께 흡수한다.

        Raises:
            TypeError: 지원하지 않는 타입
        """
        encoded = _encode(value)
        self.state += label
        self.state += encoded

    def challenge_scalar(self, label):
        self.state += label
        digest = hashlib.sha256(self.state).digest()
        self.state += digest
        return FR(int.from_bytes(digest, "big"))
