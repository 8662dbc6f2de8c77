"""Tests for DonationRecord / TopicReceipt serialization."""

import json

from hboost.ledger import DonationRecord, LedgerGateway, TopicReceipt


class TestDonationRecord:
    def test_to_json_is_compact(self) -> None:
        record = DonationRecord(recipient="0.0.777", usd_value=12.5, tx_id="tx-1")
        assert record.to_json() == '{"recipient":"0.0.777","usdValue":12.5,"txId":"tx-1"}'

    def test_from_dict(self) -> None:
        record = DonationRecord.from_dict(
            {"recipient": "0.0.777", "usdValue": 5, "txId": "tx-2", "extra": "ignored"}
        )
        assert record == DonationRecord(recipient="0.0.777", usd_value=5, tx_id="tx-2")

    def test_json_matches_dict(self) -> None:
        record = DonationRecord(recipient="r", usd_value=1, tx_id="t")
        assert json.loads(record.to_json()) == record.to_dict()


class TestTopicReceipt:
    def test_to_dict(self) -> None:
        receipt = TopicReceipt(sequence_number="42", transaction_id="0.0.1@1.2")
        assert receipt.to_dict() == {"sequenceNumber": "42", "transactionId": "0.0.1@1.2"}


class TestLedgerGatewayProtocol:
    def test_structural_match(self) -> None:
        class Fake:
            async def submit_message(self, topic_id, message):
                return TopicReceipt("1", "tx")

            async def close(self):
                pass

        assert isinstance(Fake(), LedgerGateway)
        assert not isinstance(object(), LedgerGateway)
