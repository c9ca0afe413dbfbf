"""
PLONK Prover Round 3: 몫 다항식 t(x) 커밋먼트
=============================================

  ┌─────────────────────────────────────────────────┐
  │  Verifier → Prover: α, 분리 챌린지 4개           │
  │  Prover → Verifier: [t_1]₁ .. [t_4]₁            │
  └─────────────────────────────────────────────────┘

t(X) 는 4n 코셋에서 계산되므로 계수가 최대 4n 개이다. 이를 n 개씩 잘라

  t(X) = t_1(X) + Xⁿ·t_2(X) + X²ⁿ·t_3(X) + X³ⁿ·t_4(X)

로 나누고 조각마다 커밋한다.
"""

import logging

from plonk_core import quotient
from plonk_core.field import FR
from plonk_core.gates import CUSTOM_GATES
from plonk_core.kzg import commit
from plonk_core.polynomial import Polynomial

logger = logging.getLogger(__name__)


def execute(state):
    """Round 3을 실행한다."""
    transcript = state.transcript
    n = state.n

    state.alpha = transcript.challenge_scalar(b"alpha")
    state.separation_challenges = [
        transcript.challenge_scalar(gate.challenge_label) for gate in CUSTOM_GATES
    ]

    pi_poly = Polynomial(state.domain.ifft(state.public_inputs))

    t_poly = quotient.compute(
        state.domain,
        state.prover_key,
        state.z_poly,
        state.a_poly,
        state.b_poly,
        state.c_poly,
        state.d_poly,
        pi_poly,
        state.alpha,
        state.beta,
        state.gamma,
        state.separation_challenges,
    )
    logger.debug("몫 다항식 차수 %d (도메인 크기 %d)", t_poly.degree, n)

    coeffs = t_poly.coeffs + [FR(0)] * (4 * n - len(t_poly.coeffs))
    state.t_chunks = [Polynomial(coeffs[k * n:(k + 1) * n]) for k in range(4)]

    comms = [commit(chunk, state.committer_key) for chunk in state.t_chunks]
    state.proof.t_1_comm, state.proof.t_2_comm, state.proof.t_3_comm, state.proof.t_4_comm = comms

    transcript.append(b"t_1", state.proof.t_1_comm)
    transcript.append(b"t_2", state.proof.t_2_comm)
    transcript.append(b"t_3", state.proof.t_3_comm)
    transcript.append(b"t_4", state.proof.t_4_comm)
