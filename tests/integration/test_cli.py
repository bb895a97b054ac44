"""
End-to-end tests for the command-line interface.
"""

import json

import pytest

from gs1_identifiers.__main__ import main


def run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr()


class TestValidateCommand:
    """Tests for 'validate'."""

    def test_valid_urn(self, capsys):
        code, out = run(capsys, "validate", "urn:epc:id:sgtin:0614141.812345.400")
        assert code == 0
        assert "status: valid" in out.out
        assert "validator: SGTIN" in out.out

    def test_invalid_urn(self, capsys):
        code, out = run(capsys, "validate", "urn:epc:id:sgtin:0614141.812345")
        assert code == 1
        assert "Invalid SGTIN" in out.err

    def test_digital_link_with_lookup(self, capsys):
        code, out = run(capsys, "--json", "validate", "https://id.gs1.org/gtin/80614141123458/ser/400")
        assert code == 0
        payload = json.loads(out.out)
        assert payload["result"]["identifier"] == "https://id.gs1.org/01/80614141123458/21/400"

    def test_digital_link_with_gcp_length(self, capsys):
        code, _ = run(capsys, "validate", "https://id.gs1.org/00/012345678901234567",
                      "--gcp-length", "6", "--no-check-digit")
        assert code == 0

    def test_wrong_check_digit(self, capsys):
        code, out = run(capsys, "--json", "validate", "https://id.gs1.org/01/80614141123459/21/400",
                        "--gcp-length", "7")
        assert code == 1
        assert "check digit" in json.loads(out.out)["error"]

    def test_data_attributes_need_all_keys(self, capsys):
        uri = "https://id.gs1.org/01/09520123456788?3103=000195"
        assert run(capsys, "validate", uri, "--gcp-length", "7")[0] == 1
        assert run(capsys, "validate", uri, "--gcp-length", "7", "--all-keys")[0] == 0

    def test_not_recognized(self, capsys):
        code, out = run(capsys, "validate", "urn:example:thing:1")
        assert code == 1
        assert "not recognized" in out.err


class TestConversionCommands:
    """Tests for 'to-urn', 'to-dl', 'bare' and 'cbv'."""

    def test_to_dl(self, capsys):
        code, out = run(capsys, "to-dl", "urn:epc:id:sscc:0614141.1234567890")
        assert code == 0
        assert out.out.strip() == "https://id.gs1.org/00/106141412345678908"

    def test_to_urn(self, capsys):
        code, out = run(capsys, "to-urn", "https://id.gs1.org/414/0614141123452/254/400")
        assert code == 0
        assert out.out.strip() == "urn:epc:id:sgln:0614141.12345.400"

    def test_to_urn_full_record(self, capsys):
        code, out = run(capsys, "--json", "to-urn", "https://example.com/01/80614141123458/21/400",
                        "--gcp-length", "7", "--full")
        assert code == 0
        record = json.loads(out.out)["result"]
        assert record["asURN"] == "urn:epc:id:sgtin:0614141.812345.400"
        assert record["canonicalDL"] == "https://id.gs1.org/01/80614141123458/21/400"

    def test_to_urn_unknown_gcp(self, capsys):
        code, out = run(capsys, "to-urn", "https://id.gs1.org/01/01111111111116/21/1")
        assert code == 1
        assert "GCP length not found" in out.err

    def test_bare(self, capsys):
        code, out = run(capsys, "bare", "https://ref.gs1.org/cbv/BizStep-shipping")
        assert code == 0
        assert out.out.strip() == "shipping"

    def test_cbv(self, capsys):
        code, out = run(capsys, "cbv", "in_transit", "--field", "disposition", "--format", "webUri")
        assert code == 0
        assert out.out.strip() == "https://ref.gs1.org/cbv/Disp-in_transit"


class TestDigitalLinkCommands:
    """Tests for 'normalize', 'parse' and 'gcp'."""

    def test_normalize(self, capsys):
        code, out = run(capsys, "normalize", "https://id.gs1.org/gtin/09506000164908/lot/ABC123")
        assert code == 0
        assert out.out.strip() == "https://id.gs1.org/01/09506000164908/10/ABC123"

    def test_parse_json(self, capsys):
        code, out = run(capsys, "--json", "parse", "https://id.gs1.org/01/09520123456788?17=180426", "--meta")
        assert code == 0
        assert json.loads(out.out)["result"] == {
            "protocol": "https",
            "domain": "id.gs1.org",
            "port": "443",
            "01": "09520123456788",
            "17": "180426",
        }

    def test_parse_error(self, capsys):
        code, _ = run(capsys, "parse", "not a url")
        assert code == 1

    def test_gcp_uri(self, capsys):
        code, out = run(capsys, "gcp", "https://id.gs1.org/01/09520123456788")
        assert code == 0
        assert out.out.strip() == "7"

    def test_gcp_key(self, capsys):
        code, out = run(capsys, "gcp", "4512345678901")
        assert code == 0
        assert out.out.strip() == "9"

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([])
