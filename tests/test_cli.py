"""Command-line interface."""

import json

from click.testing import CliRunner

from fiscal_receipts.cli import cli


def _write(tmp_path, html):
    path = tmp_path / "receipt.html"
    path.write_text(html, encoding="utf-8")
    return str(path)


class TestParseCommand:

    def test_json_output(self, tmp_path, sample_html):
        result = CliRunner().invoke(cli, ["parse", "--json", _write(tmp_path, sample_html)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["fn"] == "7384440800215290"
        assert data["receiptNumber"] == "2271"
        assert data["card"] == 1250.0

    def test_reads_stdin(self, sample_html):
        result = CliRunner().invoke(cli, ["parse", "--json", "-"], input=sample_html)
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["fd"] == "2271"

    def test_summary_output(self, tmp_path, sample_html):
        result = CliRunner().invoke(cli, ["parse", _write(tmp_path, sample_html)])
        assert result.exit_code == 0, result.output
        assert "7733046721" in result.output
        assert "Positions" in result.output

    def test_malformed_document_fails(self, tmp_path, three_section_html):
        result = CliRunner().invoke(cli, ["parse", _write(tmp_path, three_section_html)])
        assert result.exit_code == 1
        assert "malformed receipt document" in result.output

    def test_lenient_reports_diagnostics(self, tmp_path, three_section_html):
        result = CliRunner().invoke(cli, ["parse", "--lenient", _write(tmp_path, three_section_html)])
        assert result.exit_code == 0, result.output
        assert "missing_section" in result.output


class TestQrCommand:

    def test_prints_cheque(self, tmp_path, sample_html):
        result = CliRunner().invoke(cli, ["qr", _write(tmp_path, sample_html)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["fp"] == "1305261358"

    def test_no_qr(self, tmp_path):
        result = CliRunner().invoke(cli, ["qr", _write(tmp_path, "<p>nothing</p>")])
        assert result.exit_code == 1
        assert "No QR code found" in result.output


class TestInputEncoding:

    def _write_cp1251(self, tmp_path, html):
        path = tmp_path / "receipt-cp1251.html"
        path.write_bytes(html.encode("cp1251"))
        return str(path)

    def test_encoding_option(self, tmp_path, sample_html):
        path = self._write_cp1251(tmp_path, sample_html)
        result = CliRunner().invoke(cli, ["parse", "--json", "--encoding", "cp1251", path])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["receiptNumber"] == "2271"
        assert data["cashier"] == "Конова Светлана Николаевна"

    def test_undecodable_input_fails_cleanly(self, tmp_path, sample_html):
        path = self._write_cp1251(tmp_path, sample_html)
        result = CliRunner().invoke(cli, ["parse", "--json", path])
        assert result.exit_code == 1
        assert "cannot decode input as utf-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_unknown_encoding_fails_cleanly(self, tmp_path, sample_html):
        result = CliRunner().invoke(cli, ["qr", "--encoding", "no-such-codec", _write(tmp_path, sample_html)])
        assert result.exit_code == 1
        assert "cannot decode input as no-such-codec" in result.output
