"""
몫 다항식 (Quotient Polynomial) 계산
====================================

모든 행의 게이트 항등식과 순열 항등식이 성립하면 그 합은 H 위에서 0이므로
Z_H(X) 로 나누어 떨어진다. 그 몫 t(X) 의 존재가 곧 증명의 핵심이다.

**4n 코셋에서 계산하는 이유**:
  t(X) 의 차수는 최대 4n - 5 이므로 4n 개의 점이면 충분하다. H 위에서는
  Z_H 가 0이므로 코셋 g·H₄ₙ 에서 점별로 나눈다.

**다음 행 읽기**:
  ω₄ₙ⁴ = ωₙ 이므로 4n 코셋 벡터에서 인덱스 i + 4 가 다음 행이다.
  a, b, d, z 벡터 끝에 앞의 4개 값을 덧붙여 i + 4 가 범위를 넘지 않게 한다.

**점별 항등식**:
  gate(i) = arith + PI + Σ 커스텀 위젯 selector · constraints
  perm(i) = α·(grand product 재귀식) + (z - 1)·α²·L1
  t(i)    = (gate(i) + perm(i)) / Z_H(i)
"""

import logging

from plonk_core.domain import EvaluationDomain
from plonk_core.evaluations import CustomEvaluations
from plonk_core.field import FR
from plonk_core.gates import Arithmetic, CUSTOM_GATES, WitnessValues
from plonk_core.permutation import quotient_term as permutation_quotient_term
from plonk_core.polynomial import Polynomial

logger = logging.getLogger(__name__)


def _wrap(values):
    """벡터 끝에 앞의 4개 값을 덧붙인다 (i + 4 = 다음 행)."""
    return values + values[:4]


def compute(domain, prover_key, z_poly, a_poly, b_poly, c_poly, d_poly,
            public_inputs_poly, alpha, beta, gamma, separation_challenges):
    """몫 다항식 t(X) 를 계수 형태로 계산한다.

    Args:
        domain: 크기 n 의 EvaluationDomain
        prover_key: ProverKey
        z_poly: 순열 누적자 z(X)
        a_poly, b_poly, c_poly, d_poly: 배선 다항식
        public_inputs_poly: PI(X)
        alpha, beta, gamma: 챌린지
        separation_challenges: CUSTOM_GATES 순서의 분리 챌린지
            (범위, 논리, 고정기저, 가변기저)

    Returns:
        Polynomial: t(X)

    Raises:
        InvalidEvalDomainSize: 4n 이 필드의 2-adicity 를 넘을 때
    """
    domain_4n = EvaluationDomain(4 * domain.size)
    logger.debug("몫 다항식: 4n 코셋 크기 %d", domain_4n.size)

    z_eval_4n = _wrap(domain_4n.coset_fft(z_poly))
    a_eval_4n = _wrap(domain_4n.coset_fft(a_poly))
    b_eval_4n = _wrap(domain_4n.coset_fft(b_poly))
    c_eval_4n = domain_4n.coset_fft(c_poly)
    d_eval_4n = _wrap(domain_4n.coset_fft(d_poly))

    gate_constraints = _compute_gate_constraint_satisfiability(
        domain_4n, prover_key, separation_challenges,
        a_eval_4n, b_eval_4n, c_eval_4n, d_eval_4n, public_inputs_poly,
    )
    permutation = _compute_permutation_checks(
        domain, domain_4n, prover_key,
        a_eval_4n, b_eval_4n, c_eval_4n, d_eval_4n, z_eval_4n,
        alpha, beta, gamma,
    )

    quotient = []
    for i in range(domain_4n.size):
        numerator = gate_constraints[i] + permutation[i]
        quotient.append(numerator / prover_key.v_h_coset_4n[i])

    return Polynomial(domain_4n.coset_ifft(quotient))


def _compute_gate_constraint_satisfiability(domain_4n, prover_key, separation_challenges,
                                            a_eval_4n, b_eval_4n, c_eval_4n, d_eval_4n,
                                            pi_poly):
    """게이트 항등식의 4n 코셋 평가값."""
    pi_eval_4n = domain_4n.coset_fft(pi_poly)
    cosets = prover_key.selector_cosets
    arithmetic_cosets = [cosets[name] for name in Arithmetic.selectors]

    result = []
    for i in range(domain_4n.size):
        wit_vals = WitnessValues(a_eval_4n[i], b_eval_4n[i], c_eval_4n[i], d_eval_4n[i])
        custom_vals = CustomEvaluations(
            q_arith_eval=cosets["q_arith"][i],
            q_c_eval=cosets["q_c"][i],
            q_l_eval=cosets["q_l"][i],
            q_r_eval=cosets["q_r"][i],
            a_next_eval=a_eval_4n[i + 4],
            b_next_eval=b_eval_4n[i + 4],
            d_next_eval=d_eval_4n[i + 4],
        )

        arithmetic = Arithmetic.quotient_term(
            *(values[i] for values in arithmetic_cosets),
            cosets["q_arith"][i],
            wit_vals,
        )
        total = arithmetic + pi_eval_4n[i]
        for gate, challenge in zip(CUSTOM_GATES, separation_challenges):
            total = total + gate.quotient_term(
                cosets[gate.selector][i], challenge, wit_vals, custom_vals,
            )
        result.append(total)
    return result


def _compute_permutation_checks(domain, domain_4n, prover_key,
                                a_eval_4n, b_eval_4n, c_eval_4n, d_eval_4n, z_eval_4n,
                                alpha, beta, gamma):
    """순열 항등식의 4n 코셋 평가값."""
    l1_poly_alpha = compute_first_lagrange_poly_scaled(domain, alpha * alpha)
    l1_alpha_sq_evals = domain_4n.coset_fft(l1_poly_alpha)
    sigma_cosets = prover_key.sigma_cosets

    result = []
    for i in range(domain_4n.size):
        wit_vals = WitnessValues(a_eval_4n[i], b_eval_4n[i], c_eval_4n[i], d_eval_4n[i])
        result.append(permutation_quotient_term(
            prover_key.coset_points[i],
            wit_vals,
            z_eval_4n[i],
            z_eval_4n[i + 4],
            [sigma[i] for sigma in sigma_cosets],
            alpha,
            l1_alpha_sq_evals[i],
            beta,
            gamma,
        ))
    return result


def compute_first_lagrange_poly_scaled(domain, scale):
    """scale · L1(X): H 위에서 첫 점만 scale, 나머지는 0인 다항식."""
    evals = [FR(0)] * domain.size
    evals[0] = scale
    return Polynomial(domain.ifft(evals))
