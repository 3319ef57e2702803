"""
Frame Exporter Tests
====================

Tests for build_transfer_frames and its compatibility with the importer.
"""

import json

import pytest

from account_transfer.models.account import AccountRecord
from account_transfer.models.state import TransferPhase
from account_transfer.scanning import decode_frame
from account_transfer.transfer import (
    AccountTransferSession,
    build_transfer_frames,
    encode_account_payload,
)

from conftest import AUTH_TOKEN, DOMAIN, TRANSFER_ID, sha512_hex


def export(account, **kwargs):
    return build_transfer_frames(
        account,
        transfer_id=TRANSFER_ID,
        authentication_token=AUTH_TOKEN,
        domain=DOMAIN,
        **kwargs,
    )


class TestBuildTransferFrames:
    """Tests for the exported frame layout."""

    def test_configuration_page(self, sample_account):
        frames = export(sample_account, chunk_size=64)
        configuration = json.loads(decode_frame(frames[0]).payload)

        assert frames[0].startswith("100")
        assert configuration["total_pages"] == len(frames)
        assert configuration["transfer_id"] == TRANSFER_ID
        assert configuration["user_id"] == sample_account.user_id
        assert configuration["domain"] == DOMAIN
        assert configuration["authentication_token"] == AUTH_TOKEN
        assert configuration["hash"] == sha512_hex(encode_account_payload(sample_account))

    def test_data_pages_rebuild_payload(self, sample_account):
        frames = export(sample_account, chunk_size=64)
        decoded = [decode_frame(text) for text in frames[1:]]

        assert [frame.page for frame in decoded] == list(range(1, len(frames)))
        assert all(len(frame.payload) <= 64 for frame in decoded)
        assert b"".join(frame.payload for frame in decoded) == encode_account_payload(sample_account)

    def test_default_chunk_size_fits_one_page(self, sample_account):
        frames = export(sample_account)
        assert len(frames) == 2

    def test_version_tag(self, sample_account):
        frames = export(sample_account, chunk_size=64, version="2")
        assert all(text.startswith("2") for text in frames)

    def test_too_many_pages(self):
        account = AccountRecord(user_id="u", fingerprint="f", armored_key="k" * 600)
        with pytest.raises(ValueError):
            export(account, chunk_size=2)

    def test_non_ascii_is_escaped(self):
        account = AccountRecord(user_id="u", fingerprint="f", armored_key="zażółć")
        payload = encode_account_payload(account)

        assert payload.isascii()
        assert json.loads(payload)["armored_key"] == "zażółć"


class TestRoundTrip:
    """Tests for exporter output fed to the importing session."""

    @pytest.mark.parametrize("chunk_size", [16, 64, 1462])
    def test_session_rebuilds_account(self, sample_account, chunk_size):
        session = AccountTransferSession()

        for text in export(sample_account, chunk_size=chunk_size):
            update = session.process_payload(text)

        assert update.phase == TransferPhase.COMPLETE
        assert update.account == sample_account

    def test_non_ascii_key_survives(self):
        account = AccountRecord(user_id="u", fingerprint="f", armored_key="zażółć gęślą jaźń")
        session = AccountTransferSession()

        for text in export(account, chunk_size=16):
            update = session.process_payload(text)

        assert update.account == account
