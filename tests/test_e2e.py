"""
PLONK Verifier & End-to-End Integration Tests
=============================================

전체 파이프라인(circuit -> SRS -> preprocess -> prove -> verify)을 테스트한다.

테스트 범위:
  - 완전성: 모든 게이트 종류를 쓰는 회로, x³ + x + 5 = 35
  - 건전성: 증명의 필드 하나만 바꿔도 ProofVerificationError
  - 공개 입력 / 트랜스크립트 레이블 / 검증 키 불일치
  - 중단 계열 오류: SchemeFault, DegenerateTranscriptError
  - 200행으로 패딩한 빈 회로 + 직렬화 왕복
"""

import copy
import random

import pytest
from py_ecc import bn128

from conftest import random_g1_point, setup_pipeline
from plonk_core.circuit import Circuit
from plonk_core.errors import (
    DegenerateTranscriptError, InvalidEvalDomainSize, ProofVerificationError,
    SchemeFault,
)
from plonk_core.evaluations import CustomEvaluations
from plonk_core.field import FR, CURVE_ORDER, TWO_ADICITY
from plonk_core.preprocessor import VerifierKey
from plonk_core.proof import COMMITMENT_FIELDS, OPENING_FIELDS
from plonk_core.prover import prove
from plonk_core.serialization import serialize_proof, deserialize_proof
from plonk_core.transcript import Transcript
from plonk_core.verifier import Verifier, verify


def _verify(d, proof=None, public_inputs=None, label=b"test"):
    return verify(
        d["proof"] if proof is None else proof,
        d["verifier_key"],
        d["opening_key"],
        d["public_inputs"] if public_inputs is None else public_inputs,
        label,
    )


# ─────────────────────────────────────────────────────────────────────
# Completeness
# ─────────────────────────────────────────────────────────────────────

class TestE2EPipeline:
    def test_all_gates_circuit_passes(self, all_gates_pipeline):
        assert _verify(all_gates_pipeline) is True

    def test_x3_circuit_passes(self, x3_pipeline):
        assert _verify(x3_pipeline) is True

    def test_verifier_object(self, all_gates_pipeline):
        d = all_gates_pipeline
        verifier = Verifier(d["verifier_key"], d["opening_key"], b"test")
        verifier.verify(d["proof"], d["public_inputs"])

    def test_proof_has_all_fields(self, all_gates_pipeline):
        proof = all_gates_pipeline["proof"]
        for name in COMMITMENT_FIELDS + OPENING_FIELDS:
            assert getattr(proof, name) is not None, name
        assert proof.evaluations is not None

    def test_verify_is_deterministic(self, x3_pipeline):
        assert _verify(x3_pipeline) == _verify(x3_pipeline) == True

    def test_prove_is_deterministic(self, x3_pipeline):
        d = x3_pipeline
        again = prove(d["circuit"], d["prover_key"], d["committer_key"], b"test")
        assert again == d["proof"]

    def test_verifier_key_domain(self, all_gates_pipeline):
        assert all_gates_pipeline["verifier_key"].n == 32


# ─────────────────────────────────────────────────────────────────────
# Soundness: 단일 필드 변조
# ─────────────────────────────────────────────────────────────────────

EVALUATION_FIELDS = (
    [("wire_evals", name) for name in ("a_eval", "b_eval", "c_eval", "d_eval")]
    + [("perm_evals", name) for name in (
        "left_sigma_eval", "right_sigma_eval", "out_sigma_eval", "permutation_eval",
    )]
    + [("custom_evals", name) for name in CustomEvaluations.LABELS]
)


class TestSoundnessScalarTampering:
    """평가값 하나를 바꾸면 검증이 실패해야 한다."""

    @pytest.mark.parametrize("record, field_name", EVALUATION_FIELDS)
    def test_tampered_evaluation_fails(self, all_gates_pipeline, record, field_name):
        d = all_gates_pipeline
        tampered = copy.deepcopy(d["proof"])
        target = getattr(tampered.evaluations, record)
        setattr(target, field_name, getattr(target, field_name) + FR(1))
        assert _verify(d, proof=tampered) is False, f"{field_name} 변조 후에도 검증이 통과했습니다"

    def test_tampered_evaluation_raises(self, all_gates_pipeline):
        d = all_gates_pipeline
        tampered = copy.deepcopy(d["proof"])
        tampered.evaluations.wire_evals.a_eval = tampered.evaluations.wire_evals.a_eval + FR(1)
        verifier = Verifier(d["verifier_key"], d["opening_key"], b"test")
        with pytest.raises(ProofVerificationError):
            verifier.verify(tampered, d["public_inputs"])


class TestSoundnessCommitmentTampering:
    """커밋먼트나 열기 증명(G1 점)을 바꾸면 검증이 실패해야 한다."""

    @pytest.mark.parametrize("field_name", COMMITMENT_FIELDS + OPENING_FIELDS)
    def test_tampered_point_fails(self, all_gates_pipeline, field_name):
        d = all_gates_pipeline
        tampered = copy.deepcopy(d["proof"])
        setattr(tampered, field_name, random_g1_point(random.Random(field_name)))
        assert _verify(d, proof=tampered) is False, f"{field_name} 변조 후에도 검증이 통과했습니다"

    def test_swapped_commitments_fail(self, all_gates_pipeline):
        d = all_gates_pipeline
        tampered = copy.deepcopy(d["proof"])
        tampered.a_comm, tampered.b_comm = tampered.b_comm, tampered.a_comm
        assert _verify(d, proof=tampered) is False


class TestStatementMismatch:
    def test_wrong_public_input(self, x3_pipeline):
        d = x3_pipeline
        public_inputs = [FR(36) if v == FR(35) else v for v in d["public_inputs"]]
        assert _verify(d, public_inputs=public_inputs) is False

    def test_public_input_moved(self, x3_pipeline):
        d = x3_pipeline
        public_inputs = list(d["public_inputs"])
        public_inputs.insert(0, public_inputs.pop())
        assert _verify(d, public_inputs=public_inputs) is False

    def test_empty_public_inputs(self, x3_pipeline):
        d = x3_pipeline
        assert _verify(d, public_inputs=[]) is False

    def test_int_public_inputs(self, x3_pipeline):
        d = x3_pipeline
        assert _verify(d, public_inputs=[int(v) for v in d["public_inputs"]]) is True

    def test_negative_int_public_inputs(self, x3_pipeline):
        d = x3_pipeline
        public_inputs = [int(v) - CURVE_ORDER if v != FR(0) else 0 for v in d["public_inputs"]]
        assert _verify(d, public_inputs=public_inputs) is True

    def test_public_inputs_longer_than_domain(self, x3_pipeline):
        d = x3_pipeline
        n = d["verifier_key"].n
        public_inputs = list(d["public_inputs"]) + [FR(0)] * (n + 1 - len(d["public_inputs"]))
        with pytest.raises(ValueError):
            _verify(d, public_inputs=public_inputs)

    def test_wrong_label(self, x3_pipeline):
        assert _verify(x3_pipeline, label=b"other") is False

    def test_other_circuit_key(self, all_gates_pipeline, x3_pipeline):
        d = dict(all_gates_pipeline)
        d["verifier_key"] = x3_pipeline["verifier_key"]
        d["public_inputs"] = x3_pipeline["public_inputs"]
        assert _verify(d) is False


# ─────────────────────────────────────────────────────────────────────
# 중단 계열 오류
# ─────────────────────────────────────────────────────────────────────

class TestAborts:
    def test_off_curve_opening_is_scheme_fault(self, all_gates_pipeline):
        d = all_gates_pipeline
        tampered = copy.deepcopy(d["proof"])
        tampered.aw_opening = (bn128.FQ(1), bn128.FQ(1))
        with pytest.raises(SchemeFault):
            _verify(d, proof=tampered)

    def test_degenerate_transcript_prover(self, x3_pipeline, monkeypatch):
        d = x3_pipeline
        monkeypatch.setattr(Transcript, "challenge_scalar", lambda self, label: FR(7))
        with pytest.raises(DegenerateTranscriptError):
            prove(d["circuit"], d["prover_key"], d["committer_key"], b"test")

    def test_degenerate_transcript_verifier(self, x3_pipeline, monkeypatch):
        d = x3_pipeline
        monkeypatch.setattr(Transcript, "challenge_scalar", lambda self, label: FR(7))
        with pytest.raises(DegenerateTranscriptError):
            _verify(d)

    def test_domain_beyond_adicity(self, x3_pipeline):
        d = dict(x3_pipeline)
        vk = d["verifier_key"]
        d["verifier_key"] = VerifierKey(
            1 << (TWO_ADICITY + 1), vk.selector_commitments, vk.sigma_commitments,
        )
        with pytest.raises(InvalidEvalDomainSize):
            _verify(d)
        verifier = Verifier(d["verifier_key"], d["opening_key"], b"test")
        with pytest.raises(InvalidEvalDomainSize):
            verifier.verify(d["proof"], d["public_inputs"])

    def test_circuit_larger_than_key(self, x3_pipeline):
        d = x3_pipeline
        circuit = Circuit.x3_plus_x_plus_5_eq_35()
        circuit.pad_to(d["prover_key"].n + 1)
        with pytest.raises(ValueError):
            prove(circuit, d["prover_key"], d["committer_key"], b"test")


# ─────────────────────────────────────────────────────────────────────
# 빈 회로 (200행 패딩)
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def padded():
    circuit = Circuit()
    circuit.pad_to(200)
    return setup_pipeline(circuit, seed=200)


class TestPaddedEmptyCircuit:
    def test_domain_size(self, padded):
        assert padded["verifier_key"].n == 256
        assert all(v == FR(0) for v in padded["public_inputs"])

    def test_serialize_then_verify(self, padded):
        restored = deserialize_proof(serialize_proof(padded["proof"]))
        assert restored == padded["proof"]
        assert _verify(padded, proof=restored) is True

    def test_empty_public_input_vector(self, padded):
        assert _verify(padded, public_inputs=[]) is True
