"""
Proof Engine Tests
Tests for core/engine/proof_engine.py

Covers the reference vector, determinism, permutation invariance,
campaign domain separation, tamper rejection and duplicate handling.
"""
import random

import pytest

from core.engine import DuplicatePolicy, EngineConfig, ProofEngine, generate, verify
from core.schemas.errors import EmptyTreeError, EncodingError
from core.schemas.proof import GenerationResult

from fixtures.common import (
    ADDR_1,
    ADDR_2,
    ADDR_3,
    ADDR_4,
    ADDR_5,
    CAMPAIGN_0_LEAVES,
    CAMPAIGN_0_PROOFS,
    CAMPAIGN_0_ROOT,
    CAMPAIGN_1_LEAVES,
    CAMPAIGN_1_PROOF_ADDR_2,
    CAMPAIGN_1_ROOT,
    FIVE_RECIPIENT_ROOT,
    REFERENCE_RECIPIENTS,
    SINGLE_LEAF_CAMPAIGN_7,
    make_recipients,
)


class TestReferenceVector:
    """The three-recipient vector shared with the on-chain verifier."""

    def test_campaign_0_root(self):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        assert result.root == CAMPAIGN_0_ROOT
        assert result.total_recipients == 3

    def test_campaign_0_leaves_sorted(self):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        assert result.leaves == sorted(CAMPAIGN_0_LEAVES.values())

    def test_campaign_0_proofs(self):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        for address, expected in CAMPAIGN_0_PROOFS.items():
            entry = result.proofs[address]
            assert entry.proof == expected
            assert entry.leaf == CAMPAIGN_0_LEAVES[address]

    def test_campaign_1_root(self):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=1)
        assert result.root == CAMPAIGN_1_ROOT
        assert result.proofs[ADDR_2].proof == CAMPAIGN_1_PROOF_ADDR_2
        assert result.proofs[ADDR_2].leaf == CAMPAIGN_1_LEAVES[ADDR_2]

    def test_five_recipients(self):
        recipients = REFERENCE_RECIPIENTS + [
            {"address": ADDR_4, "tokenId": 3, "amount": 1},
            {"address": ADDR_5, "tokenId": 3, "amount": 2},
        ]
        result = generate(recipients, campaign_id=0)
        assert result.root == FIVE_RECIPIENT_ROOT
        for entry in result.proofs.values():
            assert verify(entry.leaf, entry.proof, result.root)

    def test_proof_entry_fields(self):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        entry = result.proofs[ADDR_3]
        assert entry.token_id == "2"
        assert entry.amount == "150"

    def test_wire_format_camel_case(self):
        data = generate(REFERENCE_RECIPIENTS, campaign_id=0).to_dict()
        assert data["campaignId"] == "0"
        assert data["totalRecipients"] == 3
        assert data["proofs"][ADDR_1]["tokenId"] == "1"
        assert data["claims"][0]["tokenId"] == "1"

    def test_wire_campaign_id_matches_artifacts(self):
        cid = 2**200 + 1
        result = generate(REFERENCE_RECIPIENTS, campaign_id=cid)
        assert result.campaign_id == cid
        data = result.to_dict()
        assert data["campaignId"] == str(cid)
        assert GenerationResult.model_validate(data).campaign_id == cid


class TestDeterminism:

    def test_repeated_runs_identical(self):
        first = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        second = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        assert first.to_dict() == second.to_dict()

    def test_permutation_invariant(self):
        recipients = make_recipients(11)
        baseline = generate(recipients, campaign_id=4)

        shuffled = list(recipients)
        random.Random(1234).shuffle(shuffled)
        result = generate(shuffled, campaign_id=4)

        assert result.root == baseline.root
        assert result.leaves == baseline.leaves
        assert result.claims == baseline.claims
        for address, entry in baseline.proofs.items():
            assert result.proofs[address] == entry


class TestDomainSeparation:

    def test_campaign_changes_every_leaf(self):
        c0 = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        c1 = generate(REFERENCE_RECIPIENTS, campaign_id=1)
        assert c0.root != c1.root
        assert set(c0.leaves).isdisjoint(c1.leaves)

    def test_proof_not_valid_in_other_campaign(self):
        c0 = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        c1 = generate(REFERENCE_RECIPIENTS, campaign_id=1)
        entry = c0.proofs[ADDR_1]
        assert verify(entry.leaf, entry.proof, c0.root)
        assert not verify(entry.leaf, entry.proof, c1.root)


class TestVerification:

    def test_every_claim_verifies(self):
        engine = ProofEngine()
        result = engine.generate(make_recipients(17), campaign_id=9)
        for claim in result.claims:
            assert engine.verify(claim.leaf, claim.proof, result.root)

    def test_tampered_amount_rejected(self):
        """A proof for amount 100 does not verify a leaf claiming 101."""
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        forged = generate(
            [{"address": ADDR_1, "tokenId": 1, "amount": 101}], campaign_id=0
        ).leaves[0]
        assert not verify(forged, result.proofs[ADDR_1].proof, result.root)

    @pytest.mark.parametrize("position", [0, 1])
    def test_tampered_sibling_rejected(self, position):
        result = generate(REFERENCE_RECIPIENTS, campaign_id=0)
        entry = result.proofs[ADDR_1]
        bad = list(entry.proof)
        node = bad[position]
        bad[position] = node[:-1] + ("0" if node[-1] != "0" else "1")
        assert not verify(entry.leaf, bad, result.root)

    def test_malformed_never_raises(self):
        assert verify("0x1234", [], CAMPAIGN_0_ROOT) is False
        assert verify(CAMPAIGN_0_LEAVES[ADDR_1], ["garbage"], CAMPAIGN_0_ROOT) is False


class TestEdgeCases:

    def test_single_recipient(self):
        result = generate([{"address": ADDR_1, "tokenId": 1, "amount": 100}], campaign_id=7)
        assert result.root == SINGLE_LEAF_CAMPAIGN_7
        assert result.proofs[ADDR_1].proof == []
        assert verify(result.root, [], result.root)

    def test_empty_input_raises(self):
        with pytest.raises(EmptyTreeError):
            generate([], campaign_id=0)

    def test_bad_recipient_aborts(self):
        recipients = REFERENCE_RECIPIENTS + [{"address": "0xnope", "tokenId": 1, "amount": 1}]
        with pytest.raises(EncodingError) as exc_info:
            generate(recipients, campaign_id=0)
        assert exc_info.value.details["index"] == 3

    def test_wrong_record_type(self):
        with pytest.raises(EncodingError):
            generate([("0x" + "11" * 20, 1, 100)], campaign_id=0)

    @pytest.mark.parametrize("campaign_id", [-1, 2**256, "abc", 1.0])
    def test_bad_campaign_id(self, campaign_id):
        with pytest.raises(EncodingError):
            generate(REFERENCE_RECIPIENTS, campaign_id=campaign_id)

    def test_zero_amount_allowed(self):
        result = generate([{"address": ADDR_1, "tokenId": 0, "amount": 0}], campaign_id=0)
        assert isinstance(result, GenerationResult)


class TestDuplicates:
    """Duplicate address and duplicate (address, tokenId) handling."""

    def test_same_address_several_tokens_all_claimable(self):
        recipients = [
            {"address": ADDR_1, "tokenId": 1, "amount": 100},
            {"address": ADDR_1, "tokenId": 2, "amount": 50},
            {"address": ADDR_2, "tokenId": 1, "amount": 200},
        ]
        result = generate(recipients, campaign_id=0)

        assert len(result.claims) == 3
        assert len(result.proofs) == 2
        # Address-keyed view keeps the later record
        assert result.proofs[ADDR_1].token_id == "2"

        for claim in result.claims_for(ADDR_1):
            assert verify(claim.leaf, claim.proof, result.root)
        assert result.find_claim(ADDR_1, 1).amount == "100"

    def test_last_write_wins(self):
        recipients = [
            {"address": ADDR_1, "tokenId": 1, "amount": 100},
            {"address": ADDR_1, "tokenId": 1, "amount": 999},
        ]
        result = generate(recipients, campaign_id=0)
        assert len(result.claims) == 1
        assert result.claims[0].amount == "999"
        assert result.total_recipients == 2
        assert verify(result.claims[0].leaf, result.claims[0].proof, result.root)

    def test_reject_policy(self):
        engine = ProofEngine(EngineConfig(duplicate_policy=DuplicatePolicy.REJECT))
        recipients = [
            {"address": ADDR_1, "tokenId": 1, "amount": 100},
            {"address": ADDR_1.upper().replace("0X", "0x"), "tokenId": 1, "amount": 5},
        ]
        with pytest.raises(EncodingError, match="Duplicate"):
            engine.generate(recipients, campaign_id=0)

    def test_policy_from_value(self):
        assert EngineConfig.from_value("reject").duplicate_policy is DuplicatePolicy.REJECT
        with pytest.raises(ValueError, match="Unknown duplicate policy"):
            EngineConfig.from_value("first_wins")

    def test_claims_sorted(self):
        recipients = [
            {"address": ADDR_3, "tokenId": 2, "amount": 1},
            {"address": ADDR_1, "tokenId": 5, "amount": 1},
            {"address": ADDR_1, "tokenId": 1, "amount": 1},
        ]
        result = generate(recipients, campaign_id=0)
        keys = [(c.address, int(c.token_id)) for c in result.claims]
        assert keys == [(ADDR_1, 1), (ADDR_1, 5), (ADDR_3, 2)]
