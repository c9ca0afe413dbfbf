"""
게이트 위젯 테스트: gates.py

손으로 만든 한 행(현재 행 + 다음 행 값)에 대해 각 위젯의 제약식이
만족하면 0, 어긋나면 0이 아닌지 확인한다.
"""
import pytest

from conftest import custom_evals, on_baby_jubjub
from plonk_core.evaluations import (
    PermutationEvaluations, ProofEvaluations, WireEvaluations,
)
from plonk_core.field import FR, G1
from plonk_core.gates import (
    Arithmetic, Range, Logic, FixedBaseScalarMul, CurveAddition, CUSTOM_GATES,
    WitnessValues, delta, edwards_add,
)
from plonk_core.polynomial import Polynomial


SEP = FR(987654321)


def wit(a, b, c, d):
    return WitnessValues(*(v if isinstance(v, FR) else FR(v) for v in (a, b, c, d)))


# =====================================================================
# 공통 헬퍼
# =====================================================================

class TestHelpers:
    @pytest.mark.parametrize("f", [0, 1, 2, 3])
    def test_delta_zero_on_quads(self, f):
        assert delta(FR(f)) == FR(0)

    @pytest.mark.parametrize("f", [4, 5, -1, 100])
    def test_delta_nonzero_outside(self, f):
        assert delta(FR(f)) != FR(0)

    def test_base_point_on_curve(self, jubjub_base):
        assert on_baby_jubjub(jubjub_base)

    def test_edwards_identity(self, jubjub_base):
        assert edwards_add(jubjub_base, (FR(0), FR(1))) == jubjub_base

    def test_edwards_closure(self, jubjub_base):
        doubled = edwards_add(jubjub_base, jubjub_base)
        assert on_baby_jubjub(doubled)
        x, y = jubjub_base
        assert edwards_add(jubjub_base, (-x, y)) == (FR(0), FR(1))

    def test_challenge_order(self):
        labels = [gate.challenge_label for gate in CUSTOM_GATES]
        assert labels == [
            b"range separation challenge",
            b"logic separation challenge",
            b"fixed base separation challenge",
            b"variable base separation challenge",
        ]


# =====================================================================
# Arithmetic
# =====================================================================

class TestArithmetic:
    def test_dummy_rows(self):
        # 6·7 + 2·6 + 3·7 + 4·(-20) + 1 + 4 = 0
        term = Arithmetic.quotient_term(
            FR(1), FR(2), FR(3), FR(4), FR(1), FR(4), FR(1), wit(6, 7, -20, 1),
        )
        assert term == FR(0)

    def test_q_arith_scales(self):
        args = (FR(1), FR(0), FR(0), FR(-1), FR(0), FR(0))
        assert Arithmetic.quotient_term(*args, FR(1), wit(3, 4, 11, 0)) == FR(1)
        assert Arithmetic.quotient_term(*args, FR(5), wit(3, 4, 11, 0)) == FR(5)
        assert Arithmetic.quotient_term(*args, FR(0), wit(3, 4, 11, 0)) == FR(0)

    def test_linearisation_matches_quotient_term(self):
        values = {name: FR(i + 2) for i, name in enumerate(Arithmetic.selectors)}
        q_arith = FR(3)
        evaluations = ProofEvaluations(
            WireEvaluations(FR(5), FR(6), FR(7), FR(8)),
            PermutationEvaluations(FR(0), FR(0), FR(0), FR(0)),
            custom_evals(q_arith_eval=q_arith),
        )
        polys = {name: Polynomial([v]) for name, v in values.items()}
        lin = Arithmetic.linearisation_term(polys, evaluations)
        expected = Arithmetic.quotient_term(
            *(values[name] for name in Arithmetic.selectors), q_arith,
            evaluations.wire_evals.witness_values(),
        )
        assert lin.evaluate(FR(99)) == expected

    def test_extend_linearisation_commitment(self):
        commitments = {name: G1 for name in Arithmetic.selectors}
        evaluations = ProofEvaluations(
            WireEvaluations(FR(1), FR(2), FR(3), FR(4)),
            PermutationEvaluations(FR(0), FR(0), FR(0), FR(0)),
            custom_evals(q_arith_eval=1),
        )
        scalars, points = [], []
        Arithmetic.extend_linearisation_commitment(commitments, evaluations, scalars, points)
        assert scalars == [FR(2), FR(1), FR(2), FR(3), FR(4), FR(1)]
        assert len(points) == 6


# =====================================================================
# Range
# =====================================================================

class TestRange:
    def test_valid_quads(self):
        # d=0 → c=3 → b=14 → a=57 → d_next=228
        term = Range.quotient_term(FR(1), SEP, wit(57, 14, 3, 0), custom_evals(d_next_eval=228))
        assert term == FR(0)

    def test_quad_out_of_range(self):
        term = Range.quotient_term(FR(1), SEP, wit(64, 16, 4, 0), custom_evals(d_next_eval=256))
        assert term != FR(0)

    def test_bad_next_accumulator(self):
        term = Range.quotient_term(FR(1), SEP, wit(57, 14, 3, 0), custom_evals(d_next_eval=232))
        assert term != FR(0)

    def test_selector_off(self):
        term = Range.quotient_term(FR(0), SEP, wit(64, 16, 4, 0), custom_evals(d_next_eval=256))
        assert term == FR(0)


# =====================================================================
# Logic
# =====================================================================

QUAD_PAIRS = [(x, y) for x in range(4) for y in range(4)]


class TestLogic:
    @pytest.mark.parametrize("quad_a, quad_b", QUAD_PAIRS)
    def test_xor(self, quad_a, quad_b):
        custom = custom_evals(
            a_next_eval=quad_a, b_next_eval=quad_b,
            d_next_eval=quad_a ^ quad_b, q_c_eval=-1,
        )
        term = Logic.quotient_term(FR(1), SEP, wit(0, 0, quad_a * quad_b, 0), custom)
        assert term == FR(0)

    @pytest.mark.parametrize("quad_a, quad_b", QUAD_PAIRS)
    def test_and(self, quad_a, quad_b):
        custom = custom_evals(
            a_next_eval=quad_a, b_next_eval=quad_b,
            d_next_eval=quad_a & quad_b, q_c_eval=1,
        )
        term = Logic.quotient_term(FR(1), SEP, wit(0, 0, quad_a * quad_b, 0), custom)
        assert term == FR(0)

    def test_accumulated_row(self):
        # a: 2 → 2·4+1, b: 3 → 3·4+2, d: 1 → 1·4+(1^2)
        custom = custom_evals(a_next_eval=9, b_next_eval=14, d_next_eval=7, q_c_eval=-1)
        term = Logic.quotient_term(FR(1), SEP, wit(2, 3, 2, 1), custom)
        assert term == FR(0)

    def test_wrong_result(self):
        custom = custom_evals(a_next_eval=2, b_next_eval=3, d_next_eval=2, q_c_eval=-1)
        term = Logic.quotient_term(FR(1), SEP, wit(0, 0, 6, 0), custom)
        assert term != FR(0)

    def test_wrong_product(self):
        custom = custom_evals(a_next_eval=2, b_next_eval=3, d_next_eval=1, q_c_eval=-1)
        term = Logic.quotient_term(FR(1), SEP, wit(0, 0, 5, 0), custom)
        assert term != FR(0)


# =====================================================================
# FixedBaseScalarMul
# =====================================================================

def _fixed_base_row(acc, base, acc_bit, bit):
    x_beta, y_beta = base
    bit_fr = FR(bit)
    step = (x_beta * bit_fr, y_beta if bit else FR(1))
    nxt = edwards_add(acc, step)
    wit_vals = wit(acc[0], acc[1], bit_fr * x_beta * y_beta, acc_bit)
    custom = custom_evals(
        q_l_eval=x_beta, q_r_eval=y_beta, q_c_eval=x_beta * y_beta,
        a_next_eval=nxt[0], b_next_eval=nxt[1],
        d_next_eval=FR(acc_bit) * FR(2) + bit_fr,
    )
    return wit_vals, custom


class TestFixedBaseScalarMul:
    @pytest.mark.parametrize("bit", [-1, 0, 1])
    def test_step_from_identity(self, jubjub_base, bit):
        wit_vals, custom = _fixed_base_row((FR(0), FR(1)), jubjub_base, 0, bit)
        assert FixedBaseScalarMul.quotient_term(FR(1), SEP, wit_vals, custom) == FR(0)

    @pytest.mark.parametrize("bit", [-1, 0, 1])
    def test_step_from_accumulated_point(self, jubjub_base, bit):
        acc = edwards_add(jubjub_base, jubjub_base)
        wit_vals, custom = _fixed_base_row(acc, jubjub_base, 5, bit)
        assert FixedBaseScalarMul.quotient_term(FR(1), SEP, wit_vals, custom) == FR(0)

    def test_bit_out_of_range(self, jubjub_base):
        wit_vals, custom = _fixed_base_row((FR(0), FR(1)), jubjub_base, 0, 1)
        custom.d_next_eval = FR(2)
        assert FixedBaseScalarMul.quotient_term(FR(1), SEP, wit_vals, custom) != FR(0)

    def test_wrong_next_point(self, jubjub_base):
        wit_vals, custom = _fixed_base_row((FR(0), FR(1)), jubjub_base, 0, 1)
        custom.b_next_eval = custom.b_next_eval + FR(1)
        assert FixedBaseScalarMul.quotient_term(FR(1), SEP, wit_vals, custom) != FR(0)

    def test_wrong_xy_alpha(self, jubjub_base):
        wit_vals, custom = _fixed_base_row((FR(0), FR(1)), jubjub_base, 0, 1)
        wit_vals.c_val = wit_vals.c_val + FR(1)
        assert FixedBaseScalarMul.quotient_term(FR(1), SEP, wit_vals, custom) != FR(0)


# =====================================================================
# CurveAddition
# =====================================================================

class TestCurveAddition:
    def test_valid_addition(self, jubjub_base):
        p1 = jubjub_base
        p2 = edwards_add(jubjub_base, jubjub_base)
        x3, y3 = edwards_add(p1, p2)
        custom = custom_evals(a_next_eval=x3, b_next_eval=y3, d_next_eval=p1[0] * p2[1])
        term = CurveAddition.quotient_term(FR(1), SEP, wit(p1[0], p1[1], p2[0], p2[1]), custom)
        assert term == FR(0)

    def test_wrong_sum(self, jubjub_base):
        p1 = jubjub_base
        p2 = edwards_add(jubjub_base, jubjub_base)
        x3, y3 = edwards_add(p1, p2)
        custom = custom_evals(a_next_eval=x3, b_next_eval=y3 + FR(1), d_next_eval=p1[0] * p2[1])
        term = CurveAddition.quotient_term(FR(1), SEP, wit(p1[0], p1[1], p2[0], p2[1]), custom)
        assert term != FR(0)

    def test_wrong_cross_product(self, jubjub_base):
        p1 = jubjub_base
        x3, y3 = edwards_add(p1, p1)
        custom = custom_evals(a_next_eval=x3, b_next_eval=y3, d_next_eval=FR(0))
        term = CurveAddition.quotient_term(FR(1), SEP, wit(p1[0], p1[1], p1[0], p1[1]), custom)
        assert term != FR(0)


# =====================================================================
# 선형화 일관성
# =====================================================================

class TestCustomLinearisation:
    @pytest.mark.parametrize("gate", CUSTOM_GATES)
    def test_linearisation_matches_quotient_term(self, gate):
        wit_vals = wit(11, 22, 33, 44)
        custom = custom_evals(
            q_arith_eval=1, q_c_eval=5, q_l_eval=6, q_r_eval=7,
            a_next_eval=8, b_next_eval=9, d_next_eval=10,
        )
        selector = FR(3)
        lin = gate.linearisation_term(Polynomial([selector]), SEP, wit_vals, custom)
        assert lin.evaluate(FR(12)) == gate.quotient_term(selector, SEP, wit_vals, custom)

    @pytest.mark.parametrize("gate", CUSTOM_GATES)
    def test_extend_linearisation_commitment(self, gate):
        evaluations = ProofEvaluations(
            WireEvaluations(FR(11), FR(22), FR(33), FR(44)),
            PermutationEvaluations(FR(0), FR(0), FR(0), FR(0)),
            custom_evals(q_c_eval=5, a_next_eval=8, b_next_eval=9, d_next_eval=10),
        )
        scalars, points = [], []
        gate.extend_linearisation_commitment(G1, SEP, evaluations, scalars, points)
        assert points == [G1]
        assert scalars == [gate.constraints(
            SEP, evaluations.wire_evals.witness_values(), evaluations.custom_evals,
        )]
