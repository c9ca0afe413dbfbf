"""
증명 평가값 레코드 (Proof Evaluations)
======================================

Round 4에서 prover가 평가 점 z (또는 z·ω)에서 계산해 증명에 싣는 값들.

  - WireEvaluations:        a(z), b(z), c(z), d(z)
  - PermutationEvaluations: σ1(z), σ2(z), σ3(z), z(z·ω)
  - CustomEvaluations:      q_arith(z), q_c(z), q_l(z), q_r(z),
                            a(z·ω), b(z·ω), d(z·ω)

커스텀 평가값은 고정된 필드와 고정된 순서(LABELS)를 가진 닫힌 레코드이다.
prover와 verifier는 모두 append_to_transcript 하나로 트랜스크립트에
추가하므로 순서가 어긋날 수 없다.
"""

from plonk_core.gates import WitnessValues


class WireEvaluations:
    """배선 다항식 평가값 a(z), b(z), c(z), d(z)."""

    def __init__(self, a_eval, b_eval, c_eval, d_eval):
        self.a_eval = a_eval
        self.b_eval = b_eval
        self.c_eval = c_eval
        self.d_eval = d_eval

    def witness_values(self):
        return WitnessValues(self.a_eval, self.b_eval, self.c_eval, self.d_eval)

    def __eq__(self, other):
        if not isinstance(other, WireEvaluations):
            return NotImplemented
        return (self.a_eval, self.b_eval, self.c_eval, self.d_eval) == (
            other.a_eval, other.b_eval, other.c_eval, other.d_eval
        )


class PermutationEvaluations:
    """순열 평가값: 세 시그마 다항식의 z 에서의 값과 누적자의 z·ω 에서의 값."""

    def __init__(self, left_sigma_eval, right_sigma_eval, out_sigma_eval, permutation_eval):
        self.left_sigma_eval = left_sigma_eval
        self.right_sigma_eval = right_sigma_eval
        self.out_sigma_eval = out_sigma_eval
        self.permutation_eval = permutation_eval

    def __eq__(self, other):
        if not isinstance(other, PermutationEvaluations):
            return NotImplemented
        return (
            self.left_sigma_eval, self.right_sigma_eval,
            self.out_sigma_eval, self.permutation_eval,
        ) == (
            other.left_sigma_eval, other.right_sigma_eval,
            other.out_sigma_eval, other.permutation_eval,
        )


class CustomEvaluations:
    """커스텀 게이트가 읽는 평가값 (닫힌 레코드).

    LABELS 의 순서가 트랜스크립트 추가 순서이자 직렬화 순서이다.
    """

    LABELS = (
        "q_arith_eval",
        "q_c_eval",
        "q_l_eval",
        "q_r_eval",
        "a_next_eval",
        "b_next_eval",
        "d_next_eval",
    )

    def __init__(self, q_arith_eval, q_c_eval, q_l_eval, q_r_eval,
                 a_next_eval, b_next_eval, d_next_eval):
        self.q_arith_eval = q_arith_eval
        self.q_c_eval = q_c_eval
        self.q_l_eval = q_l_eval
        self.q_r_eval = q_r_eval
        self.a_next_eval = a_next_eval
        self.b_next_eval = b_next_eval
        self.d_next_eval = d_next_eval

    def items(self):
        """[(레이블, 값), ...] LABELS 순서."""
        return [(label, getattr(self, label)) for label in self.LABELS]

    def __eq__(self, other):
        if not isinstance(other, CustomEvaluations):
            return NotImplemented
        return self.items() == other.items()


class ProofEvaluations:
    """증명에 포함되는 전체 평가값."""

    def __init__(self, wire_evals, perm_evals, custom_evals):
        self.wire_evals = wire_evals
        self.perm_evals = perm_evals
        self.custom_evals = custom_evals

    def append_to_transcript(self, transcript):
        """배선 → 시그마 → 누적자 → 커스텀 순서로 트랜스크립트에 추가한다."""
        transcript.append(b"a_eval", self.wire_evals.a_eval)
        transcript.append(b"b_eval", self.wire_evals.b_eval)
        transcript.append(b"c_eval", self.wire_evals.c_eval)
        transcript.append(b"d_eval", self.wire_evals.d_eval)

        transcript.append(b"left_sig_eval", self.perm_evals.left_sigma_eval)
        transcript.append(b"right_sig_eval", self.perm_evals.right_sigma_eval)
        transcript.append(b"out_sig_eval", self.perm_evals.out_sigma_eval)
        transcript.append(b"perm_eval", self.perm_evals.permutation_eval)

        for label, value in self.custom_evals.items():
            transcript.append(label.encode(), value)

    def __eq__(self, other):
        if not isinstance(other, ProofEvaluations):
            return NotImplemented
        return (
            self.wire_evals == other.wire_evals
            and self.perm_evals == other.perm_evals
            and self.custom_evals == other.custom_evals
        )
