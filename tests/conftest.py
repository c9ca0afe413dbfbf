import sys
import os
import random

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from plonk_core.circuit import Circuit
from plonk_core.evaluations import CustomEvaluations
from plonk_core.field import FR, G1, CURVE_ORDER, TWO_ADICITY, ec_mul
from plonk_core.gates import COEFF_A, COEFF_D
from plonk_core.preprocessor import preprocess
from plonk_core.prover import prove
from plonk_core.srs import SRS


# ─────────────────────────────────────────────────────────────────────
# Baby Jubjub 점 유도 (테스트 전용)
# ─────────────────────────────────────────────────────────────────────

def fr_sqrt(value):
    """Tonelli-Shanks: FR 제곱근 (없으면 None).

    r - 1 = 2^28 · q, 비이차잉여 5 를 사용한다.
    """
    if value == FR(0):
        return FR(0)
    if value ** ((CURVE_ORDER - 1) // 2) != FR(1):
        return None

    q = (CURVE_ORDER - 1) >> TWO_ADICITY
    m = TWO_ADICITY
    c = FR(5) ** q
    t = value ** q
    x = value ** ((q + 1) // 2)
    while t != FR(1):
        i = 0
        t2 = t
        while t2 != FR(1):
            t2 = t2 * t2
            i += 1
        b = c ** (1 << (m - i - 1))
        x = x * b
        c = b * b
        t = t * c
        m = i
    return x


def baby_jubjub_point(start=2):
    """a·x² + y² = 1 + d·x²·y² 위의 점을 y = start, start+1, ... 에서 찾는다."""
    y = FR(start)
    while True:
        x_sq = (FR(1) - y * y) / (COEFF_A - COEFF_D * y * y)
        x = fr_sqrt(x_sq)
        if x is not None and x != FR(0):
            return (x, y)
        y = y + FR(1)


def on_baby_jubjub(point):
    x, y = point
    return COEFF_A * x * x + y * y == FR(1) + COEFF_D * x * x * y * y


# ─────────────────────────────────────────────────────────────────────
# 공용 헬퍼
# ─────────────────────────────────────────────────────────────────────

def custom_evals(**overrides):
    """0으로 채운 CustomEvaluations 에 일부 값만 덮어쓴다."""
    values = {label: FR(0) for label in CustomEvaluations.LABELS}
    values.update({k: v if isinstance(v, FR) else FR(v) for k, v in overrides.items()})
    return CustomEvaluations(**values)


def random_g1_point(rng=random):
    """무작위 G1 점을 생성한다."""
    return ec_mul(G1, FR(rng.randint(1, CURVE_ORDER - 1)))


def build_all_gates_circuit():
    """모든 게이트 종류를 쓰는 회로.

      - x³ + x + 5 = 35 (공개 입력 35)
      - 200 < 2^8 범위 증명
      - 8비트 XOR / AND
      - 고정 기저점 스칼라곱 11·P (4비트)
      - 가변 기저점 덧셈 11·P + 11·P
    """
    circuit = Circuit.x3_plus_x_plus_5_eq_35()

    x = circuit.add_input(200)
    circuit.range_gate(x, 8)

    a = circuit.add_input(0b10110110)
    b = circuit.add_input(0b01101100)
    circuit.xor_gate(a, b, 8)
    circuit.and_gate(a, b, 8)

    scalar = circuit.add_input(11)
    point = circuit.fixed_base_scalar_mul(scalar, baby_jubjub_point(), 4)
    circuit.point_addition_gate(point, point)
    return circuit


def setup_pipeline(circuit, seed):
    """SRS → preprocess → prove 를 한 번에 실행한다."""
    n = circuit.domain_size
    srs = SRS.generate(max_degree=n, seed=seed)
    committer_key, opening_key = srs.trim(n)
    prover_key, verifier_key = preprocess(circuit, committer_key)
    proof = prove(circuit, prover_key, committer_key, b"test")
    return {
        "circuit": circuit,
        "srs": srs,
        "committer_key": committer_key,
        "opening_key": opening_key,
        "prover_key": prover_key,
        "verifier_key": verifier_key,
        "proof": proof,
        "public_inputs": circuit.public_inputs(verifier_key.n),
    }


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def jubjub_base():
    return baby_jubjub_point()


@pytest.fixture(scope="session")
def all_gates_pipeline():
    """모든 게이트 회로의 전체 파이프라인 데이터 (세션당 한 번)."""
    return setup_pipeline(build_all_gates_circuit(), seed=12345)


@pytest.fixture(scope="session")
def x3_pipeline():
    """x³ + x + 5 = 35 회로의 전체 파이프라인 데이터."""
    return setup_pipeline(Circuit.x3_plus_x_plus_5_eq_35(), seed=777)
