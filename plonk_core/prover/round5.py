"""
PLONK Prover Round 5: 일괄 KZG 열기 증명
========================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: aw, saw 챌린지               │
  │  Prover → Verifier: aw_opening, saw_opening     │
  └─────────────────────────────────────────────────┘

aw:  {r, σ1, σ2, σ3, a, b, c, d} 를 z 에서 한 번에 연다.
saw: {z, a, b, d} 를 z·ω 에서 한 번에 연다.
"""

from plonk_core import kzg


def execute(state):
    """Round 5를 실행한다."""
    transcript = state.transcript
    sigmas = state.prover_key.sigmas

    aw_challenge = transcript.challenge_scalar(b"aggregate_witness")
    aw_polys = [
        state.lin_poly,
        sigmas[0],
        sigmas[1],
        sigmas[2],
        state.a_poly,
        state.b_poly,
        state.c_poly,
        state.d_poly,
    ]

    saw_challenge = transcript.challenge_scalar(b"aggregate_witness")
    saw_polys = [state.z_poly, state.a_poly, state.b_poly, state.d_poly]

    state.proof.aw_opening = kzg.open(
        state.committer_key, aw_polys, state.z_challenge, aw_challenge,
    )
    state.proof.saw_opening = kzg.open(
        state.committer_key, saw_polys, state.z_challenge * state.domain.group_gen,
        saw_challenge,
    )
