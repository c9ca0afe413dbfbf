"""
선형화 다항식 (Linearisation Polynomial)
========================================

평가 점 z 에서 배선/셀렉터/순열 값을 스칼라로 고정하면 전체 항등식은
커밋먼트의 선형결합으로 표현된다. prover는 그 선형결합에 해당하는
다항식 r(X) 를 직접 만들고, verifier는 같은 결합을 커밋먼트 위에서 만든다.

  r(X) = Arithmetic(q_m..q_c 다항식, 평가값)
       + Σ 커스텀 위젯: 셀렉터 다항식 · constraints(평가값)
       + z(X)·(α·∏(w̄+β·k·z+γ) + α²·L1(z)) + σ4(X)·(-α·β·z̄ω·∏(w̄+β·σ̄+γ))
       - Z_H(z)·(t1(X) + zⁿ·t2(X) + z²ⁿ·t3(X) + z³ⁿ·t4(X))

정직한 prover라면 r(z) = -r0 이다 (r0 는 verifier 가 계산하는 상수항).
"""

from plonk_core.evaluations import (
    CustomEvaluations, PermutationEvaluations, ProofEvaluations, WireEvaluations,
)
from plonk_core.gates import Arithmetic, CUSTOM_GATES
from plonk_core import permutation
from plonk_core.proof import compute_first_lagrange_evaluation


def compute_evaluations(domain, prover_key, z_challenge, a_poly, b_poly, c_poly, d_poly, z_poly):
    """평가 점 z (다음 행 값은 z·ω) 에서의 ProofEvaluations 를 만든다."""
    shifted_z = z_challenge * domain.group_gen
    selectors = prover_key.selectors
    sigmas = prover_key.sigmas

    wire_evals = WireEvaluations(
        a_poly.evaluate(z_challenge),
        b_poly.evaluate(z_challenge),
        c_poly.evaluate(z_challenge),
        d_poly.evaluate(z_challenge),
    )
    perm_evals = PermutationEvaluations(
        sigmas[0].evaluate(z_challenge),
        sigmas[1].evaluate(z_challenge),
        sigmas[2].evaluate(z_challenge),
        z_poly.evaluate(shifted_z),
    )
    custom_evals = CustomEvaluations(
        q_arith_eval=selectors["q_arith"].evaluate(z_challenge),
        q_c_eval=selectors["q_c"].evaluate(z_challenge),
        q_l_eval=selectors["q_l"].evaluate(z_challenge),
        q_r_eval=selectors["q_r"].evaluate(z_challenge),
        a_next_eval=a_poly.evaluate(shifted_z),
        b_next_eval=b_poly.evaluate(shifted_z),
        d_next_eval=d_poly.evaluate(shifted_z),
    )
    return ProofEvaluations(wire_evals, perm_evals, custom_evals)


def compute(domain, prover_key, alpha, beta, gamma, separation_challenges,
            z_challenge, z_poly, t_chunks, evaluations):
    """선형화 다항식 r(X) 를 계산한다.

    Args:
        domain: 크기 n 의 EvaluationDomain
        prover_key: ProverKey
        alpha, beta, gamma: 챌린지
        separation_challenges: CUSTOM_GATES 순서의 분리 챌린지
        z_challenge: 평가 점 z
        z_poly: 순열 누적자
        t_chunks: [t1, t2, t3, t4]
        evaluations: compute_evaluations 의 결과

    Returns:
        Polynomial: r(X)
    """
    selectors = prover_key.selectors
    wit_vals = evaluations.wire_evals.witness_values()
    custom_vals = evaluations.custom_evals

    lin = Arithmetic.linearisation_term(selectors, evaluations)
    for gate, challenge in zip(CUSTOM_GATES, separation_challenges):
        lin = lin + gate.linearisation_term(
            selectors[gate.selector], challenge, wit_vals, custom_vals,
        )

    vanishing_poly_eval = domain.evaluate_vanishing_polynomial(z_challenge)
    l1_eval = compute_first_lagrange_evaluation(domain, vanishing_poly_eval, z_challenge)
    lin = lin + permutation.linearisation_term(
        z_poly, prover_key.sigmas[3], z_challenge, evaluations,
        alpha, beta, gamma, l1_eval,
    )

    # zⁿ = Z_H(z) + 1
    z_challenge_to_n = vanishing_poly_eval + 1
    scalar = -vanishing_poly_eval
    for chunk in t_chunks:
        lin = lin + chunk * scalar
        scalar = scalar * z_challenge_to_n
    return lin
