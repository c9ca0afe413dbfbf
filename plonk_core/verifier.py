"""
PLONK Verifier
==============

검증 키와 KZG 열기 키를 들고 증명을 판정한다.

  1. 트랜스크립트 시드: 프로토콜 레이블 → 검증 키 → 0이 아닌 공개 입력
  2. Proof.verify: 트랜스크립트 재현, r0, 선형화 커밋먼트, 일괄 열기 검사 2회

**결과**:
  - Verifier.verify: 통과하면 None, 거부하면 ProofVerificationError
  - verify: 통과/거부를 bool 로 돌려준다. 설정 오류(InvalidEvalDomainSize)와
    중단 계열(SchemeFault, DegenerateTranscriptError)은 그대로 전파된다.

사용 예시:
    >>> verify(proof, verifier_key, opening_key, circuit.public_inputs())  # True
"""

import logging

from plonk_core.errors import ProofVerificationError

logger = logging.getLogger(__name__)


class Verifier:
    """하나의 회로에 대한 verifier.

    속성:
        verifier_key: VerifierKey
        opening_key: KZG OpeningKey
        label: 트랜스크립트 도메인 분리 레이블 (prover 와 같아야 한다)
    """

    def __init__(self, verifier_key, opening_key, label=b"plonk"):
        self.verifier_key = verifier_key
        self.opening_key = opening_key
        self.label = label

    def verify(self, proof, public_inputs):
        """증명을 검증한다.

        Raises:
            ProofVerificationError: 증명 거부
        """
        transcript = self.verifier_key.statement_transcript(self.label, public_inputs)
        logger.debug("검증 시작: 도메인 크기 %d", self.verifier_key.n)
        proof.verify(self.verifier_key, transcript, self.opening_key, public_inputs)
        logger.debug("검증 통과")


def verify(proof, verifier_key, opening_key, public_inputs, label=b"plonk"):
    """PLONK 증명을 검증하고 bool 을 반환한다.

    Args:
        proof: Proof
        verifier_key: VerifierKey
        opening_key: KZG OpeningKey
        public_inputs: 행 인덱스 순서의 조밀 공개 입력 벡터
        label: 트랜스크립트 레이블

    Returns:
        bool: 검증 성공 여부
    """
    try:
        Verifier(verifier_key, opening_key, label).verify(proof, public_inputs)
    except ProofVerificationError as exc:
        logger.debug("증명 거부: %s", exc)
        return False
    return True
