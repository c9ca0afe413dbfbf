"""
PLONK 순열 인자 (Permutation Argument)
======================================

배선 복사 제약을 순열 σ로 인코딩하고 Grand Product 누적자 z(x)로 증명한다.

**코셋 식별자**:
  4n개의 배선 위치를 네 코셋으로 나눈다.
  - a 배선: H            (ω^i)
  - b 배선: K1·H         (K1·ω^i)
  - c 배선: K2·H         (K2·ω^i)
  - d 배선: K3·H         (K3·ω^i)
  K1, K2, K3 는 서로 다른 코셋을 주는 상수이다.

**Grand Product**:
  z(ω⁰) = 1
  z(ω^{i+1}) = z(ω^i) · ∏ₖ (wₖ + β·kₖ·ω^i + γ) / (wₖ + β·σₖ(ω^i) + γ)

**몫 다항식 항** (한 점 X):
  α·z(X)·∏ₖ(wₖ + β·kₖ·X + γ)
  - α·z(Xω)·∏ₖ(wₖ + β·σₖ(X) + γ)
  + (z(X) - 1)·α²·L1(X)

**선형화**:
  [z]₁  스칼라: α·∏ₖ(w̄ₖ + β·kₖ·z + γ) + α²·L1(z)
  [σ4]₁ 스칼라: -α·β·z̄ω·∏_{k<3}(w̄ₖ + β·σ̄ₖ + γ)
"""

from plonk_core.field import FR, batch_inverse


K1 = FR(7)
K2 = FR(13)
K3 = FR(17)

# a, b, c, d 배선의 코셋 식별자
WIRE_COSETS = (FR(1), K1, K2, K3)


def compute_sigma_evaluations(wire_vars, n, domain_elements):
    """변수 순환(cycle)으로 σ1..σ4 의 도메인 평가값을 만든다.

    같은 변수를 가리키는 배선 위치들은 하나의 순환을 이룬다. 각 위치의 σ는
    순환에서 다음 위치의 식별값 kₖ·ω^row 이다. 순환이 없는 위치(패딩 행)는
    자기 자신을 가리킨다.

    Args:
        wire_vars: 배선별 변수 인덱스 리스트 4개 [a_vars, b_vars, c_vars, d_vars]
        n: 도메인 크기
        domain_elements: [1, ω, ..., ω^{n-1}]

    Returns:
        list: 길이 n 의 FR 리스트 4개
    """
    sigmas = [
        [WIRE_COSETS[wire] * domain_elements[row] for row in range(n)]
        for wire in range(4)
    ]

    cycles = {}
    for wire, variables in enumerate(wire_vars):
        for row, var in enumerate(variables):
            cycles.setdefault(var, []).append((wire, row))

    for positions in cycles.values():
        for k, (wire, row) in enumerate(positions):
            next_wire, next_row = positions[(k + 1) % len(positions)]
            sigmas[wire][row] = WIRE_COSETS[next_wire] * domain_elements[next_row]

    return sigmas


def compute_accumulator(domain_elements, wire_values, sigma_evals, beta, gamma):
    """순열 누적자 z 의 도메인 평가값 [z(ω⁰), ..., z(ω^{n-1})].

    분모는 batch_inverse 로 한 번에 역원을 구한다.
    """
    n = len(domain_elements)
    numerators = []
    denominators = []
    for i in range(n):
        x = domain_elements[i]
        num = FR(1)
        den = FR(1)
        for wire in range(4):
            w = wire_values[wire][i]
            num = num * (w + beta * WIRE_COSETS[wire] * x + gamma)
            den = den * (w + beta * sigma_evals[wire][i] + gamma)
        numerators.append(num)
        denominators.append(den)

    inverses = batch_inverse(denominators)

    z = [FR(1)]
    for i in range(n - 1):
        z.append(z[-1] * numerators[i] * inverses[i])
    return z


def quotient_term(x, wit_vals, z_eval, z_next_eval, sigma_vals, alpha, l1_alpha_sq, beta, gamma):
    """4n 코셋의 한 점에서의 순열 항."""
    wires = (wit_vals.a_val, wit_vals.b_val, wit_vals.c_val, wit_vals.d_val)

    identity = alpha * z_eval
    for w, k in zip(wires, WIRE_COSETS):
        identity = identity * (w + beta * k * x + gamma)

    copy = alpha * z_next_eval
    for w, sigma in zip(wires, sigma_vals):
        copy = copy * (w + beta * sigma + gamma)

    boundary = (z_eval - FR(1)) * l1_alpha_sq
    return identity - copy + boundary


def _accumulator_scalar(evaluations, z_challenge, alpha, beta, gamma, l1_eval):
    wit = evaluations.wire_evals
    beta_z = beta * z_challenge
    result = alpha
    for w, k in zip((wit.a_eval, wit.b_eval, wit.c_eval, wit.d_eval), WIRE_COSETS):
        result = result * (w + beta_z * k + gamma)
    return result + l1_eval * alpha * alpha


def _fourth_sigma_scalar(evaluations, alpha, beta, gamma):
    wit = evaluations.wire_evals
    perm = evaluations.perm_evals
    q_0 = wit.a_eval + beta * perm.left_sigma_eval + gamma
    q_1 = wit.b_eval + beta * perm.right_sigma_eval + gamma
    q_2 = wit.c_eval + beta * perm.out_sigma_eval + gamma
    return -(q_0 * q_1 * q_2 * beta * perm.permutation_eval * alpha)


def linearisation_term(z_poly, fourth_sigma_poly, z_challenge, evaluations,
                       alpha, beta, gamma, l1_eval):
    """prover 쪽 선형화 항: z(X)·스칼라 + σ4(X)·스칼라."""
    z_scalar = _accumulator_scalar(evaluations, z_challenge, alpha, beta, gamma, l1_eval)
    sigma_scalar = _fourth_sigma_scalar(evaluations, alpha, beta, gamma)
    return z_poly * z_scalar + fourth_sigma_poly * sigma_scalar


def extend_linearisation_commitment(scalars, points, evaluations, z_challenge,
                                    alpha, beta, gamma, l1_eval,
                                    z_comm, fourth_sigma_comm):
    """verifier 쪽 선형화 커밋먼트에 [z]₁, [σ4]₁ 항을 추가한다."""
    scalars.append(_accumulator_scalar(evaluations, z_challenge, alpha, beta, gamma, l1_eval))
    points.append(z_comm)

    scalars.append(_fourth_sigma_scalar(evaluations, alpha, beta, gamma))
    points.append(fourth_sigma_comm)
