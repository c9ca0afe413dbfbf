"""
PLONK 전처리기 (Preprocessor)
=============================

회로 구조가 정해지면 셀렉터 다항식과 순열 다항식을 한 번만 계산하고
커밋한다. 결과는 두 개의 읽기 전용 키로 나뉜다.

**ProverKey** (다항식 원본 + 4n 코셋 평가값):
  - 셀렉터 11개: q_m, q_l, q_r, q_o, q_4, q_c, q_arith,
                 q_range, q_logic, q_fixed, q_variable
  - 순열 다항식 4개: σ1, σ2, σ3, σ4
  - 4n 코셋 점 g·ω₄ₙ^i 와 그 위의 Z_H 값

**VerifierKey** (커밋먼트만):
  - n, 셀렉터 커밋먼트 11개, 순열 커밋먼트 4개
  - seed_transcript: 위 값들을 고정된 순서로 트랜스크립트에 추가한다

사용 예시:
    >>> ck, ok = SRS.generate(64, seed=1).trim(64)
    >>> prover_key, verifier_key = preprocess(circuit, ck)
"""

import logging

from plonk_core.circuit import SELECTOR_NAMES
from plonk_core.domain import EvaluationDomain
from plonk_core.field import FR
from plonk_core.kzg import commit
from plonk_core.permutation import compute_sigma_evaluations
from plonk_core.polynomial import Polynomial
from plonk_core.transcript import Transcript

logger = logging.getLogger(__name__)


class ProverKey:
    """prover 전용 전처리 데이터.

    속성:
        n: 도메인 크기
        domain: 크기 n 의 EvaluationDomain
        domain_4n: 크기 4n 의 EvaluationDomain
        selectors: 셀렉터 이름 → Polynomial
        selector_cosets: 셀렉터 이름 → 4n 코셋 평가값
        sigma_evals: σ1..σ4 의 H 위 평가값
        sigmas: [σ1, σ2, σ3, σ4] Polynomial
        sigma_cosets: σ1..σ4 의 4n 코셋 평가값
        coset_points: [g·ω₄ₙ^i]
        v_h_coset_4n: [Z_H(g·ω₄ₙ^i)]
        verifier_key: 같은 회로의 VerifierKey (트랜스크립트 시드용)
    """

    def __init__(self, domain, domain_4n, selectors, sigma_evals, sigmas, verifier_key):
        self.n = domain.size
        self.domain = domain
        self.domain_4n = domain_4n
        self.selectors = selectors
        self.sigma_evals = sigma_evals
        self.sigmas = sigmas
        self.verifier_key = verifier_key

        self.selector_cosets = {
            name: domain_4n.coset_fft(poly) for name, poly in selectors.items()
        }
        self.sigma_cosets = [domain_4n.coset_fft(poly) for poly in sigmas]
        self.coset_points = domain_4n.coset_elements()

        # (g·ω₄ₙ^i)^n = gⁿ · ω₄^i 이므로 네 값이 반복된다.
        g_n = domain_4n.coset_shift ** self.n
        omega_4 = domain_4n.group_gen ** self.n
        cycle = [g_n * omega_4 ** k - FR(1) for k in range(4)]
        self.v_h_coset_4n = [cycle[i % 4] for i in range(domain_4n.size)]


class VerifierKey:
    """verifier 전용 전처리 데이터 (커밋먼트만).

    속성:
        n: 도메인 크기
        selector_commitments: 셀렉터 이름 → G1 점
        sigma_commitments: [[σ1]₁, [σ2]₁, [σ3]₁, [σ4]₁]
    """

    def __init__(self, n, selector_commitments, sigma_commitments):
        self.n = n
        self.selector_commitments = selector_commitments
        self.sigma_commitments = sigma_commitments

    @property
    def left_sigma(self):
        return self.sigma_commitments[0]

    @property
    def right_sigma(self):
        return self.sigma_commitments[1]

    @property
    def out_sigma(self):
        return self.sigma_commitments[2]

    @property
    def fourth_sigma(self):
        return self.sigma_commitments[3]

    def seed_transcript(self, transcript):
        """n → 셀렉터 커밋먼트 (SELECTOR_NAMES 순) → σ1..σ4 순서로 추가한다."""
        transcript.append(b"n", self.n)
        for name in SELECTOR_NAMES:
            transcript.append(name.encode(), self.selector_commitments[name])
        for label, comm in zip((b"sigma_1", b"sigma_2", b"sigma_3", b"sigma_4"),
                               self.sigma_commitments):
            transcript.append(label, comm)

    def statement_transcript(self, label, public_inputs):
        """증명 한 번을 위한 트랜스크립트: 레이블 → 검증 키 → 공개 입력.

        공개 입력은 0 이 아닌 항목만 (행 인덱스, 값) 쌍으로 추가한다.
        prover 와 verifier 가 같은 함수를 쓴다.
        """
        transcript = Transcript(label)
        self.seed_transcript(transcript)
        for index, value in enumerate(public_inputs):
            value = value if isinstance(value, FR) else FR(value)
            if value != FR(0):
                transcript.append(b"pi_index", index)
                transcript.append(b"pi", value)
        return transcript


def preprocess(circuit, committer_key):
    """회로를 전처리하여 (ProverKey, VerifierKey) 를 만든다.

    단계:
    1. 도메인: 행 수 → 2의 거듭제곱 n, 그리고 4n 코셋 도메인
    2. 셀렉터: 행별 값을 IFFT 로 다항식화 + KZG 커밋
    3. 순열: 변수 순환에서 σ1..σ4 평가값 → 다항식화 + KZG 커밋

    Raises:
        InvalidEvalDomainSize: n 또는 4n 이 필드의 2-adicity 를 넘을 때
        ValueError: 커밋 키의 차수가 n - 1 보다 작을 때
    """
    domain = EvaluationDomain(circuit.n)
    domain_4n = EvaluationDomain(4 * domain.size)
    n = domain.size
    logger.debug("전처리: 행 %d개, 도메인 크기 %d", circuit.n, n)

    selectors = {}
    selector_commitments = {}
    for name in SELECTOR_NAMES:
        poly = Polynomial(domain.ifft(circuit.selector_values(name, n)))
        selectors[name] = poly
        selector_commitments[name] = commit(poly, committer_key)

    sigma_evals = compute_sigma_evaluations(circuit.wire_vars(), n, domain.elements())
    sigmas = [Polynomial(domain.ifft(evals)) for evals in sigma_evals]
    sigma_commitments = [commit(poly, committer_key) for poly in sigmas]

    verifier_key = VerifierKey(n, selector_commitments, sigma_commitments)
    prover_key = ProverKey(domain, domain_4n, selectors, sigma_evals, sigmas, verifier_key)
    logger.debug("전처리 완료: 셀렉터 %d개, 순열 다항식 4개", len(selectors))
    return prover_key, verifier_key
