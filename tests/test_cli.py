"""
Command Line Interface Tests
============================

Tests for the import and export subcommands.
"""

import json

import pytest

from account_transfer.cli import main

from conftest import ARMORED_KEY, AUTH_TOKEN, DOMAIN, TRANSFER_ID, USER_ID


FINGERPRINT = "03f60e958f4cb29723acdf761353b5b15d9b054f"


@pytest.fixture
def exported_frames(tmp_path, capsys):
    """Frames printed by the export subcommand, one per line."""
    key_file = tmp_path / "key.asc"
    key_file.write_text(ARMORED_KEY, encoding="utf-8", newline="")

    code = main([
        "export",
        "--user-id", USER_ID,
        "--fingerprint", FINGERPRINT,
        "--key-file", str(key_file),
        "--domain", DOMAIN,
        "--transfer-id", TRANSFER_ID,
        "--token", AUTH_TOKEN,
        "--chunk-size", "64",
    ])
    assert code == 0
    return capsys.readouterr().out.splitlines()


def write_scans(tmp_path, lines):
    path = tmp_path / "scans.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


class TestExport:
    """Tests for the export subcommand."""

    def test_one_frame_per_line(self, exported_frames):
        assert len(exported_frames) > 2
        assert exported_frames[0].startswith("100")
        assert exported_frames[1].startswith("101")

    @pytest.mark.parametrize("chunk_size", ["-5", "0", "8", "5000", "many"])
    def test_chunk_size_out_of_bounds(self, tmp_path, capsys, chunk_size):
        key_file = tmp_path / "key.asc"
        key_file.write_text(ARMORED_KEY, encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main([
                "export",
                "--user-id", USER_ID,
                "--fingerprint", FINGERPRINT,
                "--key-file", str(key_file),
                "--domain", DOMAIN,
                "--transfer-id", TRANSFER_ID,
                "--token", AUTH_TOKEN,
                "--chunk-size", chunk_size,
            ])

        assert exc_info.value.code == 2
        assert "chunk size must be an integer in 16..4096" in capsys.readouterr().err


class TestImport:
    """Tests for the import subcommand."""

    def test_import_exported_frames(self, tmp_path, capsys, exported_frames):
        scans = write_scans(tmp_path, exported_frames)

        assert main(["import", scans]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary == {
            "user_id": USER_ID,
            "fingerprint": FINGERPRINT,
            "domain": DOMAIN,
            "transfer_id": TRANSFER_ID,
        }

    def test_noisy_capture_order(self, tmp_path, capsys, exported_frames):
        """Garbage, blank lines, repeats and early pages are skipped."""
        noisy = ["!garbage", "", exported_frames[2], exported_frames[0]]
        for frame in exported_frames[1:]:
            noisy.extend([frame, frame])
        scans = write_scans(tmp_path, noisy)

        assert main(["import", scans]) == 0
        assert json.loads(capsys.readouterr().out)["user_id"] == USER_ID

    def test_incomplete_transfer(self, tmp_path, capsys, exported_frames):
        scans = write_scans(tmp_path, exported_frames[:-1])

        assert main(["import", scans]) == 1
        assert f"missing page {len(exported_frames) - 1}" in capsys.readouterr().err

    def test_tampered_transfer(self, tmp_path, capsys, exported_frames):
        page_one = exported_frames[1]
        tampered = list(exported_frames)
        tampered[1] = page_one[:5] + "v" + page_one[6:]
        scans = write_scans(tmp_path, tampered)

        assert main(["import", scans]) == 1
        assert "Transfer failed" in capsys.readouterr().err
