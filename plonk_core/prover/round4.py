"""
PLONK Prover Round 4: 평가값과 선형화 다항식
============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: 평가 점 z                    │
  │  Prover → Verifier: ProofEvaluations            │
  └─────────────────────────────────────────────────┘

z 에서 배선/시그마/셀렉터를, z·ω 에서 누적자와 a, b, d 를 평가해
트랜스크립트에 추가하고, 다음 라운드에서 열 선형화 다항식 r(X) 를 만든다.
"""

from plonk_core import linearisation


def execute(state):
    """Round 4를 실행한다."""
    state.z_challenge = state.transcript.challenge_scalar(b"z")

    state.evaluations = linearisation.compute_evaluations(
        state.domain,
        state.prover_key,
        state.z_challenge,
        state.a_poly,
        state.b_poly,
        state.c_poly,
        state.d_poly,
        state.z_poly,
    )
    state.evaluations.append_to_transcript(state.transcript)
    state.proof.evaluations = state.evaluations

    state.lin_poly = linearisation.compute(
        state.domain,
        state.prover_key,
        state.alpha,
        state.beta,
        state.gamma,
        state.separation_challenges,
        state.z_challenge,
        state.z_poly,
        state.t_chunks,
        state.evaluations,
    )
