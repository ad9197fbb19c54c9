"""
Test suite for the command-line interface
"""

import pytest

from httpsig_sdk.cli import main, parse_header_arguments

from conftest import TEST_DATE

URL = "https://www.example.com/foo?param=value&pet=dog"


def sign(capsys, key, *extra):
    exit_code = main([
        "sign", "--key-id", "Test", "--key", key, "--url", URL, "-X", "POST",
        "-H", f"Date: {TEST_DATE}", "-H", "Host: example.com", *extra
    ])
    assert exit_code == 0
    return capsys.readouterr().out.strip()


class TestSignCommand:
    """Test the sign subcommand"""

    def test_prints_signature_header(self, capsys, hmac_key):
        output = sign(capsys, hmac_key, "--headers", "(request-target) host date")
        assert output.startswith('Signature: keyId="Test",algorithm="hmac-sha256",headers="(request-target) host date"')

    def test_prints_authorization_header(self, capsys, hmac_key):
        output = sign(capsys, hmac_key, "--authorization")
        assert output.startswith('Authorization: Signature keyId="Test"')

    def test_key_file(self, capsys, tmp_path, hmac_key):
        key_file = tmp_path / "key.b64"
        key_file.write_text(hmac_key + "\n", encoding="utf-8")

        assert main(["sign", "--key-id", "Test", "--key-file", str(key_file), "--url", URL,
                     "-H", f"Date: {TEST_DATE}"]) == 0
        assert capsys.readouterr().out.startswith("Signature: ")

    def test_missing_header_fails(self, capsys, hmac_key):
        exit_code = main(["sign", "--key-id", "Test", "--key", hmac_key, "--url", URL])
        assert exit_code == 1
        assert "Missing required header 'date'" in capsys.readouterr().err

    def test_add_date(self, capsys, hmac_key):
        assert main(["sign", "--key-id", "Test", "--key", hmac_key, "--url", URL, "--add-date"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Date: ")
        assert lines[1].startswith("Signature: ")


class TestVerifyCommand:
    """Test the verify subcommand"""

    def test_round_trip(self, capsys, hmac_key):
        header = sign(capsys, hmac_key, "--headers", "(request-target) host date")
        exit_code = main([
            "verify", "--key", hmac_key, "--url", URL, "-X", "POST",
            "-H", f"Date: {TEST_DATE}", "-H", "Host: example.com", "-H", header,
            "--allow-algorithm", "hmac-sha256", "--require", "(request-target)",
        ])
        assert exit_code == 0
        assert "VERIFIED" in capsys.readouterr().out

    def test_wrong_key(self, capsys, hmac_key):
        header = sign(capsys, hmac_key)
        exit_code = main([
            "verify", "--key", "b3RoZXI=", "--url", URL, "-X", "POST",
            "-H", f"Date: {TEST_DATE}", "-H", header,
        ])
        assert exit_code == 1
        assert "FAILED" in capsys.readouterr().out

    def test_clock_skew_error_reports_status(self, capsys, hmac_key):
        header = sign(capsys, hmac_key)
        exit_code = main([
            "verify", "--key", hmac_key, "--url", URL, "-X", "POST",
            "-H", f"Date: {TEST_DATE}", "-H", header, "--clock-skew", "60",
        ])
        assert exit_code == 1
        assert "status: 400" in capsys.readouterr().err


class TestInspectCommand:
    """Test the inspect subcommand"""

    def test_shows_signing_string(self, capsys, hmac_key):
        header = sign(capsys, hmac_key, "--headers", "(request-target) host")
        assert main(["inspect", "--url", URL, "-X", "POST", "-H", "Host: example.com", "-H", header]) == 0

        output = capsys.readouterr().out
        assert "Key ID: Test" in output
        assert "Algorithm: hmac-sha256" in output
        assert "(request-target): post /foo?param=value&pet=dog\nhost: example.com" in output

    def test_no_signature(self, capsys):
        assert main(["inspect", "--url", URL]) == 1
        assert "NO_SIGNATURE_HEADER_FOUND" in capsys.readouterr().err


class TestArguments:
    """Test argument handling"""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().out

    def test_parse_header_arguments(self):
        assert parse_header_arguments(["Host: example.com", "X-Date:  now "]) == {
            "Host": "example.com",
            "X-Date": "now",
        }
        with pytest.raises(ValueError):
            parse_header_arguments(["no separator"])
