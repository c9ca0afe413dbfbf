"""
PLONK 기반 모듈: 계수 표현 다항식과 NTT
=======================================

  Polynomial        FR 계수 리스트 [c₀, c₁, ...] (최고차 0 계수는 잘라낸다)
  fft / ifft        radix-2 NTT, 비트 반전 후 제자리 버터플라이
  divide_by_linear  p(x) / (x - z) 조립제법, KZG 열기 증인에 사용
  lagrange_basis    L_i(x) 직접 보간 (닫힌 형태 평가식 검증용)

도메인과 코셋 래퍼는 domain.py에 있다.

사용 예시:
    >>> p = Polynomial([1, 2, 3])      # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))              # FR(17)
    >>> q, r = divide_by_linear(p, FR(2))
"""

from itertools import zip_longest

from plonk_core.field import FR


def _fr(value):
    return value if isinstance(value, FR) else FR(value)


def _strip(coeffs):
    end = len(coeffs)
    while end > 1 and coeffs[end - 1] == FR(0):
        end -= 1
    return coeffs[:end] or [FR(0)]


class Polynomial:
    """FR 위의 다항식.

    배선 a..d, 셀렉터, σ1..σ4, 누적자 z, 몫 t, 선형화 r 이 모두 이 형태로
    다뤄진다. 영 다항식은 [FR(0)] 이며 차수 0 으로 취급한다.
    """

    def __init__(self, coeffs=()):
        self.coeffs = _strip([_fr(c) for c in coeffs])

    @classmethod
    def one(cls):
        return cls([1])

    @classmethod
    def vanishing(cls, n):
        """Z_H(x) = xⁿ - 1"""
        return cls([-1] + [0] * (n - 1) + [1])

    @property
    def degree(self):
        return len(self.coeffs) - 1

    def evaluate(self, point):
        point = _fr(point)
        acc = FR(0)
        for c in self.coeffs[::-1]:
            acc = acc * point + c
        return acc

    def shift(self, factor):
        """p(factor·x): i 번째 계수에 factorⁱ 를 곱한다."""
        out = []
        power = FR(1)
        for c in self.coeffs:
            out.append(c * power)
            power = power * factor
        return Polynomial(out)

    # ── 연산자 ──────────────────────────────────────────────────────

    @staticmethod
    def _coerce(other):
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, (int, FR)):
            return Polynomial([other])
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Polynomial(
            [x + y for x, y in zip_longest(self.coeffs, other.coeffs, fillvalue=FR(0))]
        )

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Polynomial(
            [x - y for x, y in zip_longest(self.coeffs, other.coeffs, fillvalue=FR(0))]
        )

    def __rsub__(self, other):
        return -self + other

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs])

    def __mul__(self, other):
        """스칼라곱 또는 O(n·m) 다항식 곱."""
        if isinstance(other, (int, FR)):
            scalar = _fr(other)
            return Polynomial([c * scalar for c in self.coeffs])
        if not isinstance(other, Polynomial):
            return NotImplemented
        out = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, x in enumerate(self.coeffs):
            if x == FR(0):
                continue
            for j, y in enumerate(other.coeffs):
                out[i + j] += x * y
        return Polynomial(out)

    __rmul__ = __mul__

    def __eq__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return False
        return self.coeffs == other.coeffs

    def __repr__(self):
        return f"Polynomial(degree={self.degree}, coeffs={[int(c) for c in self.coeffs]})"


# ─────────────────────────────────────────────────────────────────────
# NTT
# ─────────────────────────────────────────────────────────────────────

def _bit_reversed(values):
    n = len(values)
    bits = n.bit_length() - 1
    out = list(values)
    for i in range(n):
        j = int(format(i, f"0{bits}b")[::-1], 2) if bits else 0
        if i < j:
            out[i], out[j] = out[j], out[i]
    return out


def fft(coeffs, omega):
    """계수 [c₀..c_{n-1}] 를 1, ω, ..., ω^{n-1} 에서 평가한다.

    n 은 2의 거듭제곱, ω 는 n차 원시 단위근이어야 한다.
    """
    n = len(coeffs)
    if n & (n - 1):
        raise ValueError(f"FFT 길이는 2의 거듭제곱이어야 합니다: {n}")
    values = _bit_reversed([_fr(c) for c in coeffs])

    size = 2
    while size <= n:
        half = size // 2
        step = omega ** (n // size)
        for start in range(0, n, size):
            w = FR(1)
            for k in range(start, start + half):
                t = w * values[k + half]
                values[k], values[k + half] = values[k] + t, values[k] - t
                w = w * step
        size *= 2
    return values


def ifft(evals, omega):
    """fft 의 역변환: (1/n) · fft(evals, ω⁻¹)"""
    n_inv = FR(1) / FR(len(evals))
    return [c * n_inv for c in fft(evals, FR(1) / omega)]


# ─────────────────────────────────────────────────────────────────────
# 나눗셈
# ─────────────────────────────────────────────────────────────────────

def divide_by_linear(poly, point):
    """p(x) = (x - point)·q(x) + r 를 조립제법으로 계산한다.

    Returns:
        tuple: (q Polynomial, r FR). r 은 p(point) 와 같다.
    """
    point = _fr(point)
    carry = FR(0)
    out = []
    for c in poly.coeffs[::-1]:
        carry = carry * point + c
        out.append(carry)
    remainder = out.pop()
    return Polynomial(out[::-1]), remainder


def lagrange_basis(points, i):
    """L_i(x) = ∏_{j≠i} (x - x_j) / (x_i - x_j)"""
    numerator = Polynomial.one()
    denominator = FR(1)
    for j, x_j in enumerate(points):
        if j != i:
            numerator = numerator * Polynomial([-x_j, 1])
            denominator = denominator * (points[i] - x_j)
    return numerator * (FR(1) / denominator)
