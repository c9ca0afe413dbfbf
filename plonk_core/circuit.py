"""
PLONK 회로 표현 (Circuit Representation)
========================================

4-배선 PLONK 산술화: 계산을 행(row) 단위 게이트와 변수로 표현한다.

**게이트 구조**:
  각 행은 배선 a, b, c, d (변수 인덱스) 와 11개의 셀렉터를 가진다.

    q_arith·(q_m·ab + q_l·a + q_r·b + q_o·c + q_4·d + q_c) + PI = 0
    + q_range·Range + q_logic·Logic + q_fixed·FixedBase + q_variable·CurveAdd

  커스텀 게이트는 다음 행의 a, b, d 값을 함께 읽는다.

**변수와 복사 제약**:
  같은 변수를 여러 배선에 놓으면 그 위치들이 하나의 순환(cycle)이 되어
  순열 인자로 값이 같음을 강제한다. 따로 copy constraint 를 적을 필요가 없다.

**생성 시 추가되는 행**:
  - 0행: zero 변수를 0으로 고정
  - 1, 2행: 더미 산술 제약 (셀렉터 다항식이 영 다항식이 되지 않도록)

  | 행 | q_m | q_l | q_r | q_o | q_4 | q_c | a   | b  | c   | d    |
  |----|-----|-----|-----|-----|-----|-----|-----|----|-----|------|
  | 1  | 1   | 2   | 3   | 4   | 1   | 4   | 6   | 7  | -20 | 1    |
  | 2  | 1   | 1   | 1   | 1   | 1   | 127 | -20 | 6  | 7   | zero |

사용 예시:
    >>> circuit = Circuit()
    >>> x = circuit.add_input(3)
    >>> x2 = circuit.add_multiplication_gate(x, x)
    >>> circuit.range_gate(x2, 8)
    >>> circuit.check()   # True
"""

import secrets

from plonk_core.field import FR, CURVE_ORDER
from plonk_core.domain import next_power_of_2
from plonk_core.evaluations import CustomEvaluations
from plonk_core.gates import (
    Arithmetic, CUSTOM_GATES, WitnessValues, edwards_add,
)


SELECTOR_NAMES = (
    "q_m", "q_l", "q_r", "q_o", "q_4", "q_c", "q_arith",
    "q_range", "q_logic", "q_fixed", "q_variable",
)


def _fr(value):
    return value if isinstance(value, FR) else FR(value)


class Gate:
    """회로의 한 행.

    속성:
        a, b, c, d: 배선 변수 인덱스
        pi: 이 행의 공개 입력 값 (없으면 0)
        q_m, q_l, ..., q_variable: 셀렉터 (FR)
    """

    def __init__(self, a, b, c, d, pi=0, **selectors):
        unknown = set(selectors) - set(SELECTOR_NAMES)
        if unknown:
            raise ValueError(f"알 수 없는 셀렉터: {sorted(unknown)}")
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.pi = _fr(pi)
        for name in SELECTOR_NAMES:
            setattr(self, name, _fr(selectors.get(name, 0)))

    def wires(self):
        return (self.a, self.b, self.c, self.d)


class Circuit:
    """PLONK 4-배선 회로 빌더.

    속성:
        variables: 변수 값 리스트 (FR)
        gates: Gate 리스트
        zero_var: 0으로 고정된 변수의 인덱스
    """

    def __init__(self):
        self.variables = []
        self.gates = []
        self.zero_var = self.add_input(0)
        self.constrain_to_constant(self.zero_var, 0)
        self.add_dummy_constraints()

    @property
    def n(self):
        """행 수 (패딩 전)."""
        return len(self.gates)

    @property
    def domain_size(self):
        """행 수 이상인 가장 작은 2의 거듭제곱."""
        return next_power_of_2(len(self.gates))

    # ── 변수 ────────────────────────────────────────────────────────

    def add_input(self, value):
        """새 변수(witness)를 추가하고 인덱스를 반환한다."""
        self.variables.append(_fr(value))
        return len(self.variables) - 1

    def value(self, var):
        return self.variables[var]

    # ── 기본 게이트 ─────────────────────────────────────────────────

    def add_gate(self, a, b, c, d, pi=0, **selectors):
        """행 하나를 그대로 추가하고 행 인덱스를 반환한다."""
        self.gates.append(Gate(a, b, c, d, pi=pi, **selectors))
        return len(self.gates) - 1

    def add_dummy_constraints(self):
        """셀렉터 다항식이 0이 되지 않도록 만족 가능한 산술 행 두 개를 추가한다."""
        var_six = self.add_input(6)
        var_one = self.add_input(1)
        var_seven = self.add_input(7)
        var_min_twenty = self.add_input(-20)

        self.add_gate(
            var_six, var_seven, var_min_twenty, var_one,
            q_m=1, q_l=2, q_r=3, q_o=4, q_c=4, q_4=1, q_arith=1,
        )
        self.add_gate(
            var_min_twenty, var_six, var_seven, self.zero_var,
            q_m=1, q_l=1, q_r=1, q_o=1, q_c=127, q_4=1, q_arith=1,
        )

    def constrain_to_constant(self, var, constant):
        """var == constant:  a - constant = 0"""
        constant = _fr(constant)
        return self.add_gate(
            var, var, var, var, q_l=1, q_c=-constant, q_arith=1,
        )

    def add_addition_gate(self, a, b):
        """c = a + b 인 새 변수를 만든다."""
        c = self.add_input(self.value(a) + self.value(b))
        self.add_gate(a, b, c, self.zero_var, q_l=1, q_r=1, q_o=-1, q_arith=1)
        return c

    def add_multiplication_gate(self, a, b):
        """c = a · b 인 새 변수를 만든다."""
        c = self.add_input(self.value(a) * self.value(b))
        self.add_gate(a, b, c, self.zero_var, q_m=1, q_o=-1, q_arith=1)
        return c

    def add_constant_gate(self, a, constant):
        """c = a + constant 인 새 변수를 만든다."""
        constant = _fr(constant)
        c = self.add_input(self.value(a) + constant)
        self.add_gate(
            a, self.zero_var, c, self.zero_var, q_l=1, q_o=-1, q_c=constant, q_arith=1,
        )
        return c

    def add_public_input_gate(self, value):
        """공개 입력 변수를 만든다:  -a + PI = 0

        PI 벡터의 이 행 위치에 value 가 놓인다.
        """
        value = _fr(value)
        var = self.add_input(value)
        self.add_gate(
            var, self.zero_var, self.zero_var, self.zero_var,
            pi=value, q_l=-1, q_arith=1,
        )
        return var

    def assert_equal(self, a, b):
        """a == b:  a - b = 0"""
        return self.add_gate(
            a, b, self.zero_var, self.zero_var, q_l=1, q_r=-1, q_arith=1,
        )

    # ── 커스텀 게이트 ───────────────────────────────────────────────

    def range_gate(self, var, num_bits):
        """var < 2^num_bits 임을 4진 누적자로 증명한다.

        한 행이 네 자리(quad)를 소비하며 누적자는 d → c → b → a → 다음 행 d
        순서로 acc' = 4·acc + quad 로 자란다. 마지막 행의 d 는 var 자신이다.
        자리 수가 4의 배수가 되도록 앞쪽에 채운 자리의 누적자는 zero 변수이다.

        Raises:
            ValueError: num_bits 가 양의 짝수가 아닐 때
        """
        if num_bits <= 0 or num_bits % 2 != 0:
            raise ValueError(f"num_bits는 양의 짝수여야 합니다: {num_bits}")

        pad = (-(num_bits // 2)) % 4
        num_quads = num_bits // 2 + pad
        value = int(self.value(var))

        accumulators = [self.zero_var] * (pad + 1)
        acc = 0
        for k in range(num_quads):
            quad = (value >> (2 * (num_quads - 1 - k))) & 3
            acc = 4 * acc + quad
            if k >= pad:
                accumulators.append(self.add_input(acc))

        for j in range(num_quads // 4):
            self.add_gate(
                accumulators[4 * j + 3],
                accumulators[4 * j + 2],
                accumulators[4 * j + 1],
                accumulators[4 * j],
                q_range=1,
            )
        self.add_gate(self.zero_var, self.zero_var, self.zero_var, var)

    def logic_gate(self, a, b, num_bits, is_xor):
        """a XOR b 또는 a AND b 의 하위 num_bits 비트를 계산하는 변수를 만든다.

        행 k 는 k번째 누적자 (a, b, d) 와 다음 자리 quad 의 곱 c 를 가진다.
        마지막 행의 a, b 는 입력 변수, d 는 결과 변수이다.

        Raises:
            ValueError: num_bits 가 양의 짝수가 아닐 때
        """
        if num_bits <= 0 or num_bits % 2 != 0:
            raise ValueError(f"num_bits는 양의 짝수여야 합니다: {num_bits}")

        num_quads = num_bits // 2
        a_value = int(self.value(a))
        b_value = int(self.value(b))
        q_c = -1 if is_xor else 1

        acc_a = acc_b = acc_d = 0
        a_var = b_var = d_var = self.zero_var
        for k in range(num_quads):
            shift = 2 * (num_quads - 1 - k)
            quad_a = (a_value >> shift) & 3
            quad_b = (b_value >> shift) & 3
            quad_d = (quad_a ^ quad_b) if is_xor else (quad_a & quad_b)

            product = self.add_input(quad_a * quad_b)
            self.add_gate(a_var, b_var, product, d_var, q_logic=1, q_c=q_c)

            acc_a = 4 * acc_a + quad_a
            acc_b = 4 * acc_b + quad_b
            acc_d = 4 * acc_d + quad_d
            if k < num_quads - 1:
                a_var = self.add_input(acc_a)
                b_var = self.add_input(acc_b)
            d_var = self.add_input(acc_d)

        self.add_gate(a, b, self.zero_var, d_var)
        return d_var

    def xor_gate(self, a, b, num_bits):
        return self.logic_gate(a, b, num_bits, is_xor=True)

    def and_gate(self, a, b, num_bits):
        return self.logic_gate(a, b, num_bits, is_xor=False)

    def fixed_base_scalar_mul(self, scalar, base, num_bits):
        """scalar · base 를 계산하는 점 변수 (x, y) 를 만든다.

        스칼라를 NAF (자리 ∈ {-1, 0, 1}) 로 분해하고 최상위 자리부터 한 행에
        한 자리씩 누적한다. 행 i 의 셀렉터 q_l, q_r, q_c 는 그 자리의 기저점
        2^k·base 의 (x, y, x·y) 이다.

        Args:
            scalar: 스칼라 변수
            base: Baby Jubjub 점 (x, y) (FR 좌표)
            num_bits: 스칼라 비트 수. 행 수는 num_bits + 1 로 고정된다.

        Raises:
            ValueError: 스칼라의 NAF 가 num_bits + 1 자리를 넘을 때
        """
        num_digits = num_bits + 1
        digits = _naf(int(self.value(scalar)))
        if len(digits) > num_digits:
            raise ValueError(f"스칼라가 {num_bits}비트를 초과합니다")
        digits = digits + [0] * (num_digits - len(digits))
        digits.reverse()

        powers = [(_fr(base[0]), _fr(base[1]))]
        for _ in range(num_digits - 1):
            powers.append(edwards_add(powers[-1], powers[-1]))
        powers.reverse()

        one = self.add_input(1)
        self.constrain_to_constant(one, 1)

        acc_point = (FR(0), FR(1))
        acc_scalar = FR(0)
        x_var, y_var, s_var = self.zero_var, one, self.zero_var
        for digit, (x_beta, y_beta) in zip(digits, powers):
            bit = FR(digit)
            xy_alpha = self.add_input(bit * x_beta * y_beta)
            self.add_gate(
                x_var, y_var, xy_alpha, s_var,
                q_l=x_beta, q_r=y_beta, q_c=x_beta * y_beta, q_fixed=1,
            )
            acc_point = edwards_add(acc_point, (x_beta * bit, y_beta if digit else FR(1)))
            acc_scalar = acc_scalar + acc_scalar + bit
            x_var = self.add_input(acc_point[0])
            y_var = self.add_input(acc_point[1])
            s_var = self.add_input(acc_scalar)

        self.add_gate(x_var, y_var, self.zero_var, scalar)
        return x_var, y_var

    def point_addition_gate(self, p1, p2):
        """(x1, y1) + (x2, y2) 점 변수를 만든다.

        두 행을 쓴다: 첫 행 (x1, y1, x2, y2), 다음 행 (x3, y3, 0, x1·y2).
        """
        x1, y1 = p1
        x2, y2 = p2
        x3_value, y3_value = edwards_add(
            (self.value(x1), self.value(y1)), (self.value(x2), self.value(y2))
        )
        x3 = self.add_input(x3_value)
        y3 = self.add_input(y3_value)
        x1_y2 = self.add_input(self.value(x1) * self.value(y2))

        self.add_gate(x1, y1, x2, y2, q_variable=1)
        self.add_gate(x3, y3, self.zero_var, x1_y2)
        return x3, y3

    # ── 패딩과 테이블 ───────────────────────────────────────────────

    def pad_to(self, rows):
        """셀렉터가 모두 0인 행을 추가해 rows 행을 채운다."""
        while len(self.gates) < rows:
            z = self.zero_var
            self.add_gate(z, z, z, z)

    def wire_vars(self):
        """배선별 변수 인덱스 리스트 [a_vars, b_vars, c_vars, d_vars]."""
        return [[g.wires()[w] for g in self.gates] for w in range(4)]

    def wire_values(self, n):
        """배선별 값 리스트 4개 (길이 n, 부족한 행은 0)."""
        padding = [FR(0)] * (n - len(self.gates))
        return [
            [self.variables[g.wires()[w]] for g in self.gates] + padding
            for w in range(4)
        ]

    def selector_values(self, name, n):
        """셀렉터 name 의 행별 값 (길이 n)."""
        return [getattr(g, name) for g in self.gates] + [FR(0)] * (n - len(self.gates))

    def public_inputs(self, n=None):
        """행 인덱스로 정렬된 조밀(dense) 공개 입력 벡터. 0 항목을 허용한다."""
        n = self.domain_size if n is None else n
        return [g.pi for g in self.gates] + [FR(0)] * (n - len(self.gates))

    # ── 만족 여부 ───────────────────────────────────────────────────

    def check(self):
        """모든 행이 산술 및 커스텀 게이트 항등식을 만족하는지 확인한다.

        커스텀 게이트의 하위 제약들은 κ 거듭제곱으로 묶여 있으므로 분리
        챌린지를 매번 무작위로 뽑는다. 고정값이면 하위 제약끼리 상쇄될 수 있다.
        """
        n = self.domain_size
        a, b, c, d = self.wire_values(n)
        selectors = {name: self.selector_values(name, n) for name in SELECTOR_NAMES}
        pi = self.public_inputs(n)
        separation_challenge = FR(secrets.randbelow(CURVE_ORDER - 1) + 1)

        for i in range(n):
            j = (i + 1) % n
            wit = WitnessValues(a[i], b[i], c[i], d[i])
            custom = CustomEvaluations(
                q_arith_eval=selectors["q_arith"][i],
                q_c_eval=selectors["q_c"][i],
                q_l_eval=selectors["q_l"][i],
                q_r_eval=selectors["q_r"][i],
                a_next_eval=a[j],
                b_next_eval=b[j],
                d_next_eval=d[j],
            )
            arith = Arithmetic.quotient_term(
                *(selectors[name][i] for name in Arithmetic.selectors),
                selectors["q_arith"][i],
                wit,
            )
            if arith + pi[i] != FR(0):
                return False
            for gate in CUSTOM_GATES:
                term = gate.quotient_term(selectors[gate.selector][i], separation_challenge, wit, custom)
                if term != FR(0):
                    return False
        return True

    # ── 예제 회로 ───────────────────────────────────────────────────

    @staticmethod
    def x3_plus_x_plus_5_eq_35(x_value=3):
        """예제 회로: x³ + x + 5 = 35, 결과 35를 공개 입력으로 둔다.

          x²       = x · x
          x³       = x² · x
          x³ + x   = x³ + x
          out      = (x³ + x) + 5
          out      == PI (35)
        """
        circuit = Circuit()
        x = circuit.add_input(x_value)
        x2 = circuit.add_multiplication_gate(x, x)
        x3 = circuit.add_multiplication_gate(x2, x)
        s = circuit.add_addition_gate(x3, x)
        out = circuit.add_constant_gate(s, 5)
        public = circuit.add_public_input_gate(35)
        circuit.assert_equal(out, public)
        return circuit


def _naf(k):
    """정수 k 의 NAF 자리 (최하위 자리부터, 각 자리 ∈ {-1, 0, 1})."""
    digits = []
    while k > 0:
        if k & 1:
            digit = 2 - (k & 3)
            k -= digit
        else:
            digit = 0
        digits.append(digit)
        k >>= 1
    return digits
