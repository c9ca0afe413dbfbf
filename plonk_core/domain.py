"""
PLONK 기반 모듈: 평가 도메인 (Evaluation Domain)
=================================================

radix-2 곱셈 부분군 H = {1, ω, ω², ..., ω^(n-1)} 위의 평가 도메인.

**크기 규칙**:
  요청한 계수 개수 이상인 가장 작은 2의 거듭제곱으로 올림한다.
  log2(n)이 필드의 TWO_ADICITY(28)를 넘으면 해당 크기의 단위근이 없으므로
  InvalidEvalDomainSize를 던진다.

**코셋 (Coset)**:
  g·H = {g, gω, gω², ...} (g = MULTIPLICATIVE_GENERATOR = 5).
  몫 다항식은 Z_H가 0이 되지 않는 코셋 위에서 나눗셈을 수행해야 하므로
  4n 도메인의 코셋 FFT/IFFT를 사용한다.

사용 예시:
    >>> domain = EvaluationDomain(200)
    >>> domain.size          # 256
    >>> domain.evaluate_vanishing_polynomial(FR(3))   # 3^256 - 1
"""

from plonk_core.errors import InvalidEvalDomainSize
from plonk_core.field import FR, TWO_ADICITY, MULTIPLICATIVE_GENERATOR, get_root_of_unity
from plonk_core.polynomial import Polynomial, fft, ifft


def next_power_of_2(n):
    """n 이상인 가장 작은 2의 거듭제곱을 반환한다 (n ≤ 1 이면 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


class EvaluationDomain:
    """크기 n (2의 거듭제곱)의 radix-2 평가 도메인.

    속성:
        size: 도메인 크기 n
        log_size_of_group: log2(n)
        group_gen: 원시 n차 단위근 ω
        group_gen_inv: ω⁻¹
        size_inv: n⁻¹
        coset_shift: 코셋 이동 원소 g

    Raises:
        InvalidEvalDomainSize: log2(n) > TWO_ADICITY
    """

    def __init__(self, num_coeffs):
        size = next_power_of_2(num_coeffs)
        log_size = size.bit_length() - 1
        if log_size > TWO_ADICITY:
            raise InvalidEvalDomainSize(log_size, TWO_ADICITY)

        self.size = size
        self.log_size_of_group = log_size
        self.group_gen = get_root_of_unity(size)
        self.group_gen_inv = FR(1) / self.group_gen
        self.size_inv = FR(1) / FR(size)
        self.coset_shift = MULTIPLICATIVE_GENERATOR

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"EvaluationDomain(size={self.size})"

    def element(self, i):
        """i번째 원소 ω^i."""
        return self.group_gen ** (i % self.size)

    def elements(self):
        """[1, ω, ω², ..., ω^(n-1)]"""
        result = []
        current = FR(1)
        for _ in range(self.size):
            result.append(current)
            current = current * self.group_gen
        return result

    def coset_elements(self):
        """[g, gω, gω², ..., gω^(n-1)]"""
        return [self.coset_shift * w for w in self.elements()]

    # ── 변환 ────────────────────────────────────────────────────────

    def _pad(self, values):
        values = list(values)
        if len(values) > self.size:
            raise ValueError(
                f"입력 길이 {len(values)}가 도메인 크기 {self.size}를 초과합니다"
            )
        return values + [FR(0)] * (self.size - len(values))

    def fft(self, coeffs):
        """계수(또는 Polynomial) → H 위의 평가값."""
        if isinstance(coeffs, Polynomial):
            coeffs = coeffs.coeffs
        return fft(self._pad(coeffs), self.group_gen)

    def ifft(self, evals):
        """H 위의 평가값 → 계수 리스트."""
        return ifft(self._pad(evals), self.group_gen)

    def coset_fft(self, coeffs):
        """계수 → 코셋 g·H 위의 평가값.

        p(g·x) 를 만든 뒤 일반 FFT를 수행한다.
        """
        if not isinstance(coeffs, Polynomial):
            coeffs = Polynomial(self._pad(coeffs))
        shifted = coeffs.shift(self.coset_shift)
        return fft(self._pad(shifted.coeffs), self.group_gen)

    def coset_ifft(self, evals):
        """코셋 g·H 위의 평가값 → 계수 리스트."""
        coeffs = Polynomial(ifft(self._pad(evals), self.group_gen))
        return self._pad(coeffs.shift(FR(1) / self.coset_shift).coeffs)

    # ── 소거 다항식 ──────────────────────────────────────────────────

    def evaluate_vanishing_polynomial(self, tau):
        """Z_H(τ) = τ^n - 1"""
        return tau ** self.size - FR(1)

    def vanishing_polynomial(self):
        """Z_H(x) = x^n - 1 (계수 형태)"""
        return Polynomial.vanishing(self.size)
