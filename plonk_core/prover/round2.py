"""
PLONK Prover Round 2: 순열 누적자 z(x) 커밋먼트
===============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: β, γ                        │
  │  Prover → Verifier: [z]₁                        │
  └─────────────────────────────────────────────────┘

β 를 뽑아 트랜스크립트에 추가한 뒤 γ 를 뽑는다. 둘이 같으면 트랜스크립트가
손상된 것이므로 중단한다.

z(ω⁰) = 1
z(ω^{i+1}) = z(ω^i) · ∏ₖ (wₖ + β·kₖ·ω^i + γ) / (wₖ + β·σₖ(ω^i) + γ)
"""

from plonk_core.errors import DegenerateTranscriptError
from plonk_core.kzg import commit
from plonk_core.permutation import compute_accumulator
from plonk_core.polynomial import Polynomial


def execute(state):
    """Round 2를 실행한다."""
    transcript = state.transcript

    beta = transcript.challenge_scalar(b"beta")
    transcript.append(b"beta", beta)
    gamma = transcript.challenge_scalar(b"gamma")
    transcript.append(b"gamma", gamma)
    if beta == gamma:
        raise DegenerateTranscriptError("β와 γ 챌린지가 같습니다")

    state.beta = beta
    state.gamma = gamma

    z_evals = compute_accumulator(
        state.domain.elements(),
        state.circuit.wire_values(state.n),
        state.prover_key.sigma_evals,
        beta,
        gamma,
    )
    state.z_poly = Polynomial(state.domain.ifft(z_evals))
    state.proof.z_comm = commit(state.z_poly, state.committer_key)

    transcript.append(b"z", state.proof.z_comm)
