"""
PLONK 증명 (Proof) 과 검증 알고리즘
===================================

**Proof 구성**:
  - 커밋먼트 9개: a, b, c, d (배선), z (순열 누적자), t_1..t_4 (몫 조각)
  - 열기 증명 2개: aw_opening (z 에서), saw_opening (z·ω 에서)
  - ProofEvaluations

**검증 순서** (prover 의 트랜스크립트 순서와 정확히 같아야 한다):

  ┌──────────────────────────────────────────────────────────────┐
  │ 1. [a], [b], [c], [d] 추가 → β, γ  (β == γ 이면 중단)          │
  │ 2. [z] 추가 → α, 범위/논리/고정기저/가변기저 분리 챌린지        │
  │ 3. [t_1..t_4] 추가 → 평가 점 z                                 │
  │ 4. Z_H(z), L1(z), r0 계산                                      │
  │ 5. 평가값 추가 → 선형화 커밋먼트 [r]                            │
  │ 6. aw 챌린지: {[r], [σ1], [σ2], [σ3], [a], [b], [c], [d]} @ z   │
  │ 7. saw 챌린지: {[z], [a], [b], [d]} @ z·ω                       │
  │ 8. 두 일괄 열기 검사가 모두 참이어야 통과                        │
  └──────────────────────────────────────────────────────────────┘

  r0 = PI(z) - B - C
    B = (a+βσ1+γ)(b+βσ2+γ)(c+βσ3+γ)·(d+γ)·z̄ω·α
    C = L1(z)·α²

사용 예시:
    >>> transcript = Transcript(b"test")
    >>> verifier_key.seed_transcript(transcript)
    >>> proof.verify(verifier_key, transcript, opening_key, public_inputs)
"""

from plonk_core import kzg
from plonk_core import permutation
from plonk_core.domain import EvaluationDomain
from plonk_core.errors import DegenerateTranscriptError, ProofVerificationError
from plonk_core.field import FR, batch_inverse
from plonk_core.gates import Arithmetic, CUSTOM_GATES


COMMITMENT_FIELDS = (
    "a_comm", "b_comm", "c_comm", "d_comm", "z_comm",
    "t_1_comm", "t_2_comm", "t_3_comm", "t_4_comm",
)
OPENING_FIELDS = ("aw_opening", "saw_opening")


class Proof:
    """PLONK 증명 데이터 컨테이너.

    Round 1: a_comm, b_comm, c_comm, d_comm
    Round 2: z_comm
    Round 3: t_1_comm, t_2_comm, t_3_comm, t_4_comm
    Round 4: evaluations (ProofEvaluations)
    Round 5: aw_opening, saw_opening
    """

    def __init__(self, a_comm=None, b_comm=None, c_comm=None, d_comm=None,
                 z_comm=None, t_1_comm=None, t_2_comm=None, t_3_comm=None,
                 t_4_comm=None, aw_opening=None, saw_opening=None, evaluations=None):
        self.a_comm = a_comm
        self.b_comm = b_comm
        self.c_comm = c_comm
        self.d_comm = d_comm
        self.z_comm = z_comm
        self.t_1_comm = t_1_comm
        self.t_2_comm = t_2_comm
        self.t_3_comm = t_3_comm
        self.t_4_comm = t_4_comm
        self.aw_opening = aw_opening
        self.saw_opening = saw_opening
        self.evaluations = evaluations

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        for name in COMMITMENT_FIELDS + OPENING_FIELDS:
            if getattr(self, name) != getattr(other, name):
                return False
        return self.evaluations == other.evaluations

    def verify(self, verifier_key, transcript, opening_key, public_inputs):
        """증명을 검증한다.

        Args:
            verifier_key: VerifierKey
            transcript: 문맥(레이블, 검증 키, 공개 입력)으로 미리 시드된 Transcript
            opening_key: KZG OpeningKey
            public_inputs: 행 인덱스 순서의 조밀 공개 입력 벡터

        Raises:
            InvalidEvalDomainSize: n 이 필드의 2-adicity 를 넘을 때
            ProofVerificationError: 일괄 열기 검사가 거짓일 때
            DegenerateTranscriptError: β == γ
            SchemeFault: 커밋먼트 스킴 내부 오류
            ValueError: 공개 입력 벡터가 도메인보다 길 때
        """
        domain = EvaluationDomain(verifier_key.n)
        if len(public_inputs) > domain.size:
            raise ValueError(
                f"공개 입력 길이 {len(public_inputs)}가 도메인 크기 {domain.size}를 초과합니다"
            )
        public_inputs = [v if isinstance(v, FR) else FR(v) for v in public_inputs]

        transcript.append(b"w_l", self.a_comm)
        transcript.append(b"w_r", self.b_comm)
        transcript.append(b"w_o", self.c_comm)
        transcript.append(b"w_4", self.d_comm)

        beta = transcript.challenge_scalar(b"beta")
        transcript.append(b"beta", beta)
        gamma = transcript.challenge_scalar(b"gamma")
        transcript.append(b"gamma", gamma)
        if beta == gamma:
            raise DegenerateTranscriptError("β와 γ 챌린지가 같습니다")

        transcript.append(b"z", self.z_comm)

        alpha = transcript.challenge_scalar(b"alpha")
        separation_challenges = [
            transcript.challenge_scalar(gate.challenge_label) for gate in CUSTOM_GATES
        ]

        transcript.append(b"t_1", self.t_1_comm)
        transcript.append(b"t_2", self.t_2_comm)
        transcript.append(b"t_3", self.t_3_comm)
        transcript.append(b"t_4", self.t_4_comm)

        z_challenge = transcript.challenge_scalar(b"z")

        z_h_eval = domain.evaluate_vanishing_polynomial(z_challenge)
        l1_eval = compute_first_lagrange_evaluation(domain, z_h_eval, z_challenge)

        r0 = self._compute_r0(
            domain, public_inputs, alpha, beta, gamma, z_challenge, l1_eval,
            self.evaluations.perm_evals.permutation_eval,
        )

        self.evaluations.append_to_transcript(transcript)

        lin_comm = self._compute_linearisation_commitment(
            domain, alpha, beta, gamma, separation_challenges, z_challenge,
            l1_eval, verifier_key,
        )

        wire = self.evaluations.wire_evals
        perm = self.evaluations.perm_evals
        custom = self.evaluations.custom_evals

        aw_challenge = transcript.challenge_scalar(b"aggregate_witness")
        aw_commits = [
            lin_comm,
            verifier_key.left_sigma,
            verifier_key.right_sigma,
            verifier_key.out_sigma,
            self.a_comm,
            self.b_comm,
            self.c_comm,
            self.d_comm,
        ]
        aw_evals = [
            -r0,
            perm.left_sigma_eval,
            perm.right_sigma_eval,
            perm.out_sigma_eval,
            wire.a_eval,
            wire.b_eval,
            wire.c_eval,
            wire.d_eval,
        ]

        saw_challenge = transcript.challenge_scalar(b"aggregate_witness")
        saw_commits = [self.z_comm, self.a_comm, self.b_comm, self.d_comm]
        saw_evals = [
            perm.permutation_eval,
            custom.a_next_eval,
            custom.b_next_eval,
            custom.d_next_eval,
        ]

        if not kzg.check(opening_key, aw_commits, z_challenge, aw_evals,
                         self.aw_opening, aw_challenge):
            raise ProofVerificationError("z 에서의 일괄 열기 검사 실패")
        if not kzg.check(opening_key, saw_commits, z_challenge * domain.element(1),
                         saw_evals, self.saw_opening, saw_challenge):
            raise ProofVerificationError("z·ω 에서의 일괄 열기 검사 실패")

    def _compute_r0(self, domain, public_inputs, alpha, beta, gamma,
                    z_challenge, l1_eval, z_hat_eval):
        """선형화 항등식의 상수항 r0 = PI(z) - B - C."""
        pi_eval = compute_barycentric_eval(public_inputs, z_challenge, domain)

        alpha_sq = alpha * alpha
        wire = self.evaluations.wire_evals
        perm = self.evaluations.perm_evals

        # a + β·σ1 + γ
        b_0 = wire.a_eval + beta * perm.left_sigma_eval + gamma
        # b + β·σ2 + γ
        b_1 = wire.b_eval + beta * perm.right_sigma_eval + gamma
        # c + β·σ3 + γ
        b_2 = wire.c_eval + beta * perm.out_sigma_eval + gamma
        # (d + γ)·z̄ω·α
        b_3 = (wire.d_eval + gamma) * z_hat_eval * alpha

        b = b_0 * b_1 * b_2 * b_3
        c = l1_eval * alpha_sq
        return pi_eval - b - c

    def _compute_linearisation_commitment(self, domain, alpha, beta, gamma,
                                          separation_challenges, z_challenge,
                                          l1_eval, verifier_key):
        """선형화 커밋먼트 [r]₁ 를 다중 스칼라 곱으로 만든다."""
        scalars = []
        points = []
        selector_commitments = verifier_key.selector_commitments

        Arithmetic.extend_linearisation_commitment(
            selector_commitments, self.evaluations, scalars, points,
        )
        for gate, challenge in zip(CUSTOM_GATES, separation_challenges):
            gate.extend_linearisation_commitment(
                selector_commitments[gate.selector], challenge,
                self.evaluations, scalars, points,
            )
        permutation.extend_linearisation_commitment(
            scalars, points, self.evaluations, z_challenge,
            alpha, beta, gamma, l1_eval,
            self.z_comm, verifier_key.fourth_sigma,
        )

        vanishing_poly_eval = domain.evaluate_vanishing_polynomial(z_challenge)
        # zⁿ = Z_H(z) + 1
        z_challenge_to_n = vanishing_poly_eval + 1

        t_1_scalar = -vanishing_poly_eval
        t_2_scalar = t_1_scalar * z_challenge_to_n
        t_3_scalar = t_2_scalar * z_challenge_to_n
        t_4_scalar = t_3_scalar * z_challenge_to_n
        scalars.extend([t_1_scalar, t_2_scalar, t_3_scalar, t_4_scalar])
        points.extend([self.t_1_comm, self.t_2_comm, self.t_3_comm, self.t_4_comm])

        return kzg.multi_scalar_mul(points, scalars)


def compute_first_lagrange_evaluation(domain, z_h_eval, z_challenge):
    """L1(z) = Z_H(z) / (n·(z - 1))

    ∏_{i=1}^{n-1} (1 - ω^i) = n 과 ∏_{i=1}^{n-1} (X - ω^i) = (Xⁿ - 1)/(X - 1)
    두 등식에서 나온 닫힌 형태이다.
    """
    denom = FR(domain.size) * (z_challenge - FR(1))
    return z_h_eval / denom


def compute_barycentric_eval(evaluations, point, domain):
    """H 위 평가값 벡터로 정의되는 다항식의 point 에서의 값.

    Σᵢ vᵢ·Lᵢ(point),  Lᵢ(X) = Z_H(X) / (n·(ω⁻ⁱ·X - 1))

    0 인 항목은 기여가 없으므로 분모 계산에서 제외한다.
    """
    numerator = domain.evaluate_vanishing_polynomial(point) * domain.size_inv

    non_zero = [i for i, value in enumerate(evaluations) if value != FR(0)]
    denominators = [
        domain.group_gen_inv ** i * point - FR(1) for i in non_zero
    ]
    inverses = batch_inverse(denominators)

    result = FR(0)
    for i, inv in zip(non_zero, inverses):
        result = result + evaluations[i] * inv
    return result * numerator
