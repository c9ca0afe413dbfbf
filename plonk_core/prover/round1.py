"""
PLONK Prover Round 1: 배선(Witness) 다항식 커밋먼트
===================================================

  ┌─────────────────────────────────────────────────┐
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁, [d]₁      │
  └─────────────────────────────────────────────────┘

1. 행별 배선 값 (길이 n, 패딩 행은 0) 을 IFFT 로 보간한다.
2. 네 다항식을 KZG 커밋하고 w_l, w_r, w_o, w_4 레이블로 트랜스크립트에 추가한다.

몫 다항식 t(X) 의 차수를 4n 미만으로 유지하기 위해 블라인딩은 하지 않는다.
"""

from plonk_core.kzg import commit
from plonk_core.polynomial import Polynomial


def execute(state):
    """Round 1을 실행한다."""
    domain = state.domain
    a_vals, b_vals, c_vals, d_vals = state.circuit.wire_values(state.n)

    state.a_poly = Polynomial(domain.ifft(a_vals))
    state.b_poly = Polynomial(domain.ifft(b_vals))
    state.c_poly = Polynomial(domain.ifft(c_vals))
    state.d_poly = Polynomial(domain.ifft(d_vals))

    ck = state.committer_key
    state.proof.a_comm = commit(state.a_poly, ck)
    state.proof.b_comm = commit(state.b_poly, ck)
    state.proof.c_comm = commit(state.c_poly, ck)
    state.proof.d_comm = commit(state.d_poly, ck)

    state.transcript.append(b"w_l", state.proof.a_comm)
    state.transcript.append(b"w_r", state.proof.b_comm)
    state.transcript.append(b"w_o", state.proof.c_comm)
    state.transcript.append(b"w_4", state.proof.d_comm)
