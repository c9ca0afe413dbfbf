"""
PLONK 코어 예외 정의
====================

두 계열로 나뉜다.

**PlonkError 계열** (호출자가 판정할 수 있는 실패):
  - InvalidEvalDomainSize: 필드의 2-adicity를 넘는 도메인 요청 (설정 오류)
  - ProofVerificationError: 일괄 열기 검사가 False (증명 거부)
  - SerializationError: 잘못된 증명 바이트열

**RuntimeError 계열** (중단, abort):
  - SchemeFault: 커밋먼트 스킴 내부 오류 (키 손상 등)
  - DegenerateTranscriptError: β == γ (트랜스크립트 구현 손상)

중단 계열은 PlonkError를 상속하지 않으므로 ``except PlonkError`` 로
잡히지 않는다.
"""


class PlonkError(Exception):
    """PLONK 코어의 기본 예외."""


class InvalidEvalDomainSize(PlonkError):
    """평가 도메인 크기가 필드의 2-adicity를 초과한다.

    속성:
        log_size_of_group: 요청된 도메인 크기의 log2
        adicity: 필드가 지원하는 최대 log2 크기
    """

    def __init__(self, log_size_of_group, adicity):
        self.log_size_of_group = log_size_of_group
        self.adicity = adicity
        super().__init__(
            f"도메인 크기 2^{log_size_of_group}이 필드의 2-adicity "
            f"2^{adicity}를 초과합니다"
        )


class ProofVerificationError(PlonkError):
    """증명 검증 실패 (명제가 거짓이거나 증명이 손상됨)."""


class SerializationError(PlonkError):
    """증명 바이트열을 해석할 수 없다."""


class SchemeFault(RuntimeError):
    """커밋먼트 스킴 내부 오류. 검증 결과가 아닌 환경/설정 문제이다."""


class DegenerateTranscriptError(RuntimeError):
    """β와 γ 챌린지가 같다. 트랜스크립트 구현이 손상되었다."""
