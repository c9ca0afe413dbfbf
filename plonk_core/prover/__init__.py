"""
PLONK Prover: 5-라운드 프로토콜 오케스트레이터
================================================

  ┌──────────────────────────────────────────────────────────┐
  │  Round 1: 배선 다항식 커밋                                 │
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁, [d]₁               │
  ├──────────────────────────────────────────────────────────┤
  │  Round 2: 순열 누적자 z(x) 커밋                            │
  │  Verifier → Prover: β, γ                                  │
  │  Prover → Verifier: [z]₁                                  │
  ├──────────────────────────────────────────────────────────┤
  │  Round 3: 몫 다항식 t(x) 커밋                              │
  │  Verifier → Prover: α, 분리 챌린지 4개                     │
  │  Prover → Verifier: [t_1]₁, [t_2]₁, [t_3]₁, [t_4]₁        │
  ├──────────────────────────────────────────────────────────┤
  │  Round 4: 평가값 + 선형화 다항식                            │
  │  Verifier → Prover: z                                     │
  │  Prover → Verifier: ProofEvaluations                      │
  ├──────────────────────────────────────────────────────────┤
  │  Round 5: 일괄 KZG 열기 증명                               │
  │  Verifier → Prover: aw, saw 챌린지                         │
  │  Prover → Verifier: aw_opening, saw_opening               │
  └──────────────────────────────────────────────────────────┘

트랜스크립트 순서는 Proof.verify 와 정확히 같다.

사용 예시:
    >>> from plonk_core.prover import prove
    >>> proof = prove(circuit, prover_key, committer_key, b"test")
"""

import logging

from plonk_core.proof import Proof
from plonk_core.prover import round1, round2, round3, round4, round5

logger = logging.getLogger(__name__)


class ProverState:
    """라운드 간 공유되는 Prover 상태.

    속성 (입력):
        circuit: Circuit
        prover_key: ProverKey
        committer_key: CommitterKey
        transcript: 시드된 Transcript
        public_inputs: 길이 n 의 조밀 공개 입력 벡터

    속성 (라운드 간 생성):
        a_poly, b_poly, c_poly, d_poly: 배선 다항식 (Round 1)
        z_poly: 순열 누적자 (Round 2)
        t_chunks: 몫 다항식 조각 4개 (Round 3)
        evaluations, lin_poly: 평가값과 선형화 다항식 (Round 4)
        beta, gamma, alpha, separation_challenges, z_challenge: 챌린지
    """

    def __init__(self, circuit, prover_key, committer_key, transcript):
        self.circuit = circuit
        self.prover_key = prover_key
        self.committer_key = committer_key
        self.transcript = transcript

        self.n = prover_key.n
        self.domain = prover_key.domain
        self.public_inputs = circuit.public_inputs(self.n)

        self.a_poly = None
        self.b_poly = None
        self.c_poly = None
        self.d_poly = None
        self.z_poly = None
        self.t_chunks = None
        self.evaluations = None
        self.lin_poly = None

        self.beta = None
        self.gamma = None
        self.alpha = None
        self.separation_challenges = None
        self.z_challenge = None

        self.proof = Proof()


def prove(circuit, prover_key, committer_key, label=b"plonk"):
    """PLONK 5-라운드 프로토콜을 실행하여 증명을 생성한다.

    Args:
        circuit: 전처리에 쓴 것과 같은 구조의 Circuit (배선 값 포함)
        prover_key: ProverKey
        committer_key: CommitterKey
        label: 트랜스크립트 도메인 분리 레이블 (verifier 와 같아야 한다)

    Returns:
        Proof

    Raises:
        ValueError: 회로 행 수가 전처리 도메인을 넘을 때
        DegenerateTranscriptError: β == γ
    """
    if circuit.n > prover_key.n:
        raise ValueError(
            f"회로 행 수 {circuit.n}가 전처리 도메인 크기 {prover_key.n}를 초과합니다"
        )

    transcript = prover_key.verifier_key.statement_transcript(
        label, circuit.public_inputs(prover_key.n)
    )
    state = ProverState(circuit, prover_key, committer_key, transcript)
    logger.debug("증명 생성 시작: 도메인 크기 %d", state.n)

    round1.execute(state)
    round2.execute(state)
    round3.execute(state)
    round4.execute(state)
    round5.execute(state)

    logger.debug("증명 생성 완료")
    return state.proof
