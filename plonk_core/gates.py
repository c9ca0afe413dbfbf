"""
PLONK 게이트 제약 위젯 (Gate Constraint Widgets)
=================================================

한 행(row)의 배선 값 a, b, c, d 와 다음 행 값(a_next, b_next, d_next)에
대한 항등식들. 모든 위젯은 순수 함수이며 같은 식을 세 곳에서 쓴다.

  - quotient_term:      4n 코셋의 한 점에서 selector · constraints
  - linearisation_term: 셀렉터 다항식 · constraints(평가값)  (prover)
  - extend_linearisation_commitment:
                        [셀렉터]₁ 에 constraints(평가값) 스칼라를 붙인다 (verifier)

**위젯 목록** (닫힌 집합, CUSTOM_GATES 순서 = 분리 챌린지 순서):

  | 위젯                | 셀렉터      | 확인하는 내용                         |
  |---------------------|-------------|---------------------------------------|
  | Arithmetic          | q_arith     | q_m·ab + q_l·a + q_r·b + q_o·c + q_4·d + q_c |
  | Range               | q_range     | 4진 누적자의 각 자리가 {0,1,2,3}       |
  | Logic               | q_logic     | 4진 자리별 AND(q_c=1) / XOR(q_c=-1)   |
  | FixedBaseScalarMul  | q_fixed     | 고정 기저점 스칼라곱의 한 단계         |
  | CurveAddition       | q_variable  | 트위스트 에드워즈 점 덧셈              |

분리 챌린지 κ = sep² 의 거듭제곱으로 한 위젯 안의 여러 검사를 묶는다.

**내장 곡선 (Baby Jubjub)**:
  a·x² + y² = 1 + d·x²·y²  (a = 168700, d = 168696), bn128 스칼라 필드 위.
"""

from plonk_core.field import FR


# 트위스트 에드워즈 곡선 계수 (Baby Jubjub)
COEFF_A = FR(168700)
COEFF_D = FR(168696)


class WitnessValues:
    """한 점에서의 배선 값 (a, b, c, d)."""

    def __init__(self, a_val, b_val, c_val, d_val):
        self.a_val = a_val
        self.b_val = b_val
        self.c_val = c_val
        self.d_val = d_val


def delta(f):
    """f ∈ {0, 1, 2, 3} 이면 0: f·(f-1)·(f-2)·(f-3)"""
    f_1 = f - FR(1)
    f_2 = f - FR(2)
    f_3 = f - FR(3)
    return f * f_1 * f_2 * f_3


def delta_xor_and(a, b, w, c, q_c):
    """4진 자리 a, b 와 곱 w = a·b 에 대해 c가 AND(q_c=1) 또는 XOR(q_c=-1) 이면 0.

    a, b ∈ {0,1,2,3} 범위의 16개 경우를 하나의 다항식으로 보간한 식이다.
    """
    nine = FR(9)
    two = FR(2)
    three = FR(3)
    four = FR(4)
    eighteen = FR(18)
    eighty_one = FR(81)
    eighty_three = FR(83)

    f = w * (w * (four * w - eighteen * (a + b) + eighty_one)
             + eighteen * (a * a + b * b)
             - eighty_one * (a + b)
             + eighty_three)
    e = three * (a + b + c) - two * f
    selector_term = q_c * (nine * c - three * (a + b))
    return e + selector_term


def edwards_add(p1, p2):
    """Baby Jubjub 위의 점 덧셈 (x, y) 튜플, FR 좌표.

    x3 = (x1·y2 + y1·x2) / (1 + d·x1·x2·y1·y2)
    y3 = (y1·y2 - a·x1·x2) / (1 - d·x1·x2·y1·y2)
    """
    x1, y1 = p1
    x2, y2 = p2
    t = COEFF_D * x1 * x2 * y1 * y2
    x3 = (x1 * y2 + y1 * x2) / (FR(1) + t)
    y3 = (y1 * y2 - COEFF_A * x1 * x2) / (FR(1) - t)
    return (x3, y3)


# ─────────────────────────────────────────────────────────────────────
# 산술 게이트
# ─────────────────────────────────────────────────────────────────────

class Arithmetic:
    """q_arith · (q_m·a·b + q_l·a + q_r·b + q_o·c + q_4·d + q_c)

    공개 입력 PI(x)는 이 항 바깥에서 더해진다.
    """

    selectors = ("q_m", "q_l", "q_r", "q_o", "q_4", "q_c")

    @staticmethod
    def quotient_term(q_m, q_l, q_r, q_o, q_4, q_c, q_arith, wit_vals):
        a = wit_vals.a_val
        b = wit_vals.b_val
        return q_arith * (
            q_m * a * b
            + q_l * a
            + q_r * b
            + q_o * wit_vals.c_val
            + q_4 * wit_vals.d_val
            + q_c
        )

    @staticmethod
    def scalars(evaluations):
        """[q_m], [q_l], [q_r], [q_o], [q_4], [q_c] 에 곱할 스칼라."""
        wit = evaluations.wire_evals
        q_arith = evaluations.custom_evals.q_arith_eval
        return [
            wit.a_eval * wit.b_eval * q_arith,
            wit.a_eval * q_arith,
            wit.b_eval * q_arith,
            wit.c_eval * q_arith,
            wit.d_eval * q_arith,
            q_arith,
        ]

    @classmethod
    def linearisation_term(cls, selector_polys, evaluations):
        """Σ 셀렉터 다항식 · 스칼라 (prover 쪽 선형화 항)."""
        result = None
        for name, scalar in zip(cls.selectors, cls.scalars(evaluations)):
            term = selector_polys[name] * scalar
            result = term if result is None else result + term
        return result

    @classmethod
    def extend_linearisation_commitment(cls, selector_commitments, evaluations, scalars, points):
        scalars.extend(cls.scalars(evaluations))
        points.extend(selector_commitments[name] for name in cls.selectors)


# ─────────────────────────────────────────────────────────────────────
# 커스텀 게이트 공통 인터페이스
# ─────────────────────────────────────────────────────────────────────

class GateConstraint:
    """커스텀 게이트 위젯의 공통 동작.

    하위 클래스는 selector, challenge_label, constraints 만 정의한다.
    custom_vals 는 a_next_eval, b_next_eval, d_next_eval, q_l_eval,
    q_r_eval, q_c_eval 속성을 가진 CustomEvaluations 이다.
    """

    selector = None
    challenge_label = None

    @staticmethod
    def constraints(separation_challenge, wit_vals, custom_vals):
        raise NotImplementedError

    @classmethod
    def quotient_term(cls, selector, separation_challenge, wit_vals, custom_vals):
        return selector * cls.constraints(separation_challenge, wit_vals, custom_vals)

    @classmethod
    def linearisation_term(cls, selector_poly, separation_challenge, wit_vals, custom_vals):
        return selector_poly * cls.constraints(separation_challenge, wit_vals, custom_vals)

    @classmethod
    def extend_linearisation_commitment(cls, selector_commitment, separation_challenge,
                                        evaluations, scalars, points):
        scalars.append(cls.constraints(
            separation_challenge,
            evaluations.wire_evals.witness_values(),
            evaluations.custom_evals,
        ))
        points.append(selector_commitment)


class Range(GateConstraint):
    """4진 범위 게이트.

    한 행에서 d → c → b → a → d_next 순서로 누적자가 acc' = 4·acc + quad 로
    자라며, 각 quad 가 {0,1,2,3} 안에 있는지 확인한다.
    """

    selector = "q_range"
    challenge_label = b"range separation challenge"

    @staticmethod
    def constraints(separation_challenge, wit_vals, custom_vals):
        four = FR(4)
        kappa = separation_challenge * separation_challenge
        kappa_sq = kappa * kappa
        kappa_cu = kappa_sq * kappa

        b_1 = delta(wit_vals.c_val - four * wit_vals.d_val)
        b_2 = delta(wit_vals.b_val - four * wit_vals.c_val) * kappa
        b_3 = delta(wit_vals.a_val - four * wit_vals.b_val) * kappa_sq
        b_4 = delta(custom_vals.d_next_eval - four * wit_vals.a_val) * kappa_cu
        return (b_1 + b_2 + b_3 + b_4) * separation_challenge


class Logic(GateConstraint):
    """4진 자리별 AND / XOR 게이트.

    a, b, d 누적자의 다음 자리 quad 를 뽑고 c = quad_a · quad_b 인지,
    quad_d 가 AND(q_c = 1) 또는 XOR(q_c = -1) 결과인지 확인한다.
    """

    selector = "q_logic"
    challenge_label = b"logic separation challenge"

    @staticmethod
    def constraints(separation_challenge, wit_vals, custom_vals):
        four = FR(4)
        kappa = separation_challenge * separation_challenge
        kappa_sq = kappa * kappa
        kappa_cu = kappa_sq * kappa
        kappa_qu = kappa_cu * kappa

        a = custom_vals.a_next_eval - four * wit_vals.a_val
        c_0 = delta(a)

        b = custom_vals.b_next_eval - four * wit_vals.b_val
        c_1 = delta(b) * kappa

        d = custom_vals.d_next_eval - four * wit_vals.d_val
        c_2 = delta(d) * kappa_sq

        w = wit_vals.c_val
        c_3 = (w - a * b) * kappa_cu

        c_4 = delta_xor_and(a, b, w, d, custom_vals.q_c_eval) * kappa_qu

        return (c_0 + c_1 + c_2 + c_3 + c_4) * separation_challenge


class FixedBaseScalarMul(GateConstraint):
    """고정 기저점 스칼라곱의 한 단계.

    배선: a, b = 누적 점 (x, y), c = bit·x_β·y_β, d = 누적 스칼라
    셀렉터: q_l = x_β, q_r = y_β, q_c = x_β·y_β  (이 단계의 기저점)
    다음 행: a_next, b_next = 누적 점 + bit·기저점, d_next = 2·d + bit
    """

    selector = "q_fixed"
    challenge_label = b"fixed base separation challenge"

    @staticmethod
    def constraints(separation_challenge, wit_vals, custom_vals):
        kappa = separation_challenge * separation_challenge
        kappa_sq = kappa * kappa
        kappa_cu = kappa_sq * kappa

        x_beta = custom_vals.q_l_eval
        y_beta = custom_vals.q_r_eval

        acc_x = wit_vals.a_val
        acc_x_next = custom_vals.a_next_eval
        acc_y = wit_vals.b_val
        acc_y_next = custom_vals.b_next_eval

        xy_alpha = wit_vals.c_val

        accumulated_bit = wit_vals.d_val
        accumulated_bit_next = custom_vals.d_next_eval
        bit = accumulated_bit_next - accumulated_bit - accumulated_bit

        # bit ∈ {-1, 0, 1}
        bit_consistency = (bit - FR(1)) * bit * (bit + FR(1))

        y_alpha = bit * bit * (y_beta - FR(1)) + FR(1)
        x_alpha = x_beta * bit

        xy_consistency = (bit * custom_vals.q_c_eval - xy_alpha) * kappa

        x_3 = acc_x_next
        lhs = x_3 + x_3 * xy_alpha * acc_x * acc_y * COEFF_D
        rhs = acc_x * y_alpha + acc_y * x_alpha
        x_acc_consistency = (lhs - rhs) * kappa_sq

        y_3 = acc_y_next
        lhs = y_3 - y_3 * xy_alpha * acc_x * acc_y * COEFF_D
        rhs = acc_y * y_alpha - acc_x * x_alpha * COEFF_A
        y_acc_consistency = (lhs - rhs) * kappa_cu

        checks = bit_consistency + x_acc_consistency + y_acc_consistency + xy_consistency
        return checks * separation_challenge


class CurveAddition(GateConstraint):
    """트위스트 에드워즈 점 덧셈 (x1, y1) + (x2, y2) = (x3, y3).

    배선: a = x1, b = y1, c = x2, d = y2
    다음 행: a_next = x3, b_next = y3, d_next = x1·y2
    """

    selector = "q_variable"
    challenge_label = b"variable base separation challenge"

    @staticmethod
    def constraints(separation_challenge, wit_vals, custom_vals):
        x_1 = wit_vals.a_val
        x_3 = custom_vals.a_next_eval
        y_1 = wit_vals.b_val
        y_3 = custom_vals.b_next_eval
        x_2 = wit_vals.c_val
        y_2 = wit_vals.d_val
        x1_y2 = custom_vals.d_next_eval

        kappa = separation_challenge * separation_challenge

        xy_consistency = x_1 * y_2 - x1_y2

        y1_x2 = y_1 * x_2
        y1_y2 = y_1 * y_2
        x1_x2 = x_1 * x_2

        x3_lhs = x1_y2 + y1_x2
        x3_rhs = x_3 + x_3 * COEFF_D * x1_y2 * y1_x2
        x3_consistency = (x3_lhs - x3_rhs) * kappa

        y3_lhs = y1_y2 - COEFF_A * x1_x2
        y3_rhs = y_3 - y_3 * COEFF_D * x1_y2 * y1_x2
        y3_consistency = (y3_lhs - y3_rhs) * kappa * kappa

        return (xy_consistency + x3_consistency + y3_consistency) * separation_challenge


# 분리 챌린지를 뽑는 순서와 같다.
CUSTOM_GATES = (Range, Logic, FixedBaseScalarMul, CurveAddition)
