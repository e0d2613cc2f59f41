"""End-to-end tests for the command-line interface with a stubbed ENA client."""

import json
from unittest import mock

import pytest
from conftest import FakeENAClient, make_record
from typer.testing import CliRunner

from ena_fetch import __version__
from ena_fetch.cli.app import app
from ena_fetch.exceptions import RequestError

runner = CliRunner()

REPORTS = {
    "SRR0000001": [
        make_record("SRR0000001", ["h/1_1", "h/1_2"], [10, 20], ["a", "b"])
    ],
    "ERR0000002": [
        make_record("ERR0000002", ["h/2", "h/2_1", "h/2_2"], [1, 2, 3], ["c", "d", "e"])
    ],
    "DRR0000003": [make_record("DRR0000003", ["h/3"], [5], ["f"])],
    "SRR0000004": [
        make_record(
            "SRR0000004", ["w", "x", "y", "z"], [1, 2, 3, 4], ["1", "2", "3", "4"]
        )
    ],
}


@pytest.fixture
def client():
    fake = FakeENAClient(dict(REPORTS))
    with mock.patch("ena_fetch.cli.app.ENAPortalClient", return_value=fake) as factory:
        fake.factory = factory
        yield fake


class TestInputs:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_requires_accession_or_file(self, client):
        result = runner.invoke(app, [])
        assert result.exit_code == 2
        assert client.calls == []

    def test_invalid_direct_accession_rejects_invocation(self, client):
        result = runner.invoke(app, ["-a", "SRR0000001", "-a", "1234567"])
        assert result.exit_code == 2
        assert client.calls == []

    def test_file_input_skips_invalid_lines(self, client, tmp_path):
        path = tmp_path / "accessions.txt"
        path.write_text("run_accession\nSRR0000001\nDRR0000003\n")
        result = runner.invoke(app, ["-f", str(path), "-o", str(tmp_path / "out.json")])
        assert result.exit_code == 0
        assert sorted(client.calls) == ["DRR0000003", "SRR0000001"]

    def test_unreadable_file_exits_with_one(self, client, tmp_path):
        result = runner.invoke(app, ["-f", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert client.calls == []

    def test_direct_and_file_accessions_are_combined(self, client, tmp_path):
        path = tmp_path / "accessions.txt"
        path.write_text("SRR0000001\nDRR0000003\n")
        result = runner.invoke(
            app, ["-a", "SRR0000001", "-f", str(path), "-o", str(tmp_path / "o.json")]
        )
        assert result.exit_code == 0
        assert sorted(client.calls) == ["DRR0000003", "SRR0000001"]

    def test_num_requests_is_clamped(self, client, tmp_path):
        result = runner.invoke(
            app, ["-a", "SRR0000001", "-n", "11", "-o", str(tmp_path / "o.json")]
        )
        assert result.exit_code == 0
        assert client.factory.call_args.args[1] == 10


class TestOutput:
    def test_json_is_sorted_and_normalized(self, client):
        result = runner.invoke(app, ["-a", "SRR0000001", "-a", "ERR0000002"])
        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert [run["accession"] for run in document] == ["ERR0000002", "SRR0000001"]
        assert [r["url"] for r in document[0]["reads"]] == [
            "ftp://h/2_1",
            "ftp://h/2_2",
        ]

    def test_keep_single_end(self, client):
        result = runner.invoke(app, ["-a", "ERR0000002", "--keep-single-end"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)[0]["reads"]) == 3

    def test_csv_rows(self, client):
        result = runner.invoke(app, ["-a", "SRR0000001", "--format", "csv"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "accession,url,md5,bytes",
            "SRR0000001,ftp://h/1_1,a,10",
            "SRR0000001,ftp://h/1_2,b,20",
        ]

    def test_csv_long(self, client):
        result = runner.invoke(app, ["-a", "DRR0000003", "-F", "csv-long"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[1:] == [
            "DRR0000003,url_se,ftp://h/3",
            "DRR0000003,md5_se,f",
            "DRR0000003,bytes_se,5",
        ]

    def test_output_file(self, client, tmp_path):
        out = tmp_path / "runs.csv"
        result = runner.invoke(app, ["-a", "SRR0000001", "-F", "csv-wide", "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text().splitlines()[1] == (
            "SRR0000001,,,,ftp://h/1_1,a,10,ftp://h/1_2,b,20"
        )

    def test_empty_result_is_success(self, client):
        result = runner.invoke(app, ["-a", "SRR9999999"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_failed_accession_does_not_fail_the_run(self, client, tmp_path):
        client.reports["ERR0000002"] = RequestError("boom")
        out = tmp_path / "runs.json"
        result = runner.invoke(
            app, ["-a", "SRR0000001", "-a", "ERR0000002", "-o", str(out)]
        )
        assert result.exit_code == 0
        assert [run["accession"] for run in json.loads(out.read_text())] == [
            "SRR0000001"
        ]

    def test_summary(self, client, tmp_path):
        result = runner.invoke(
            app, ["-a", "SRR0000001", "--summary", "-o", str(tmp_path / "o.json")]
        )
        assert result.exit_code == 0


class TestStructuralErrors:
    @pytest.mark.parametrize("output_format", ["csv-wide", "csv-long"])
    def test_unsupported_read_count_exits_with_one(self, client, output_format):
        result = runner.invoke(
            app, ["-a", "SRR0000001", "-a", "SRR0000004", "-F", output_format]
        )
        assert result.exit_code == 1
        assert "accession," not in result.stdout

    def test_single_end_run_in_wide_format_needs_keep_single_end(self, client):
        result = runner.invoke(app, ["-a", "DRR0000003", "-F", "csv-wide"])
        assert result.exit_code == 1

        result = runner.invoke(app, ["-a", "DRR0000003", "-F", "csv-wide", "-s"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[1] == "DRR0000003,ftp://h/3,f,5,,,,,,"

    def test_json_accepts_any_read_count(self, client):
        result = runner.invoke(app, ["-a", "SRR0000004"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)[0]["reads"]) == 4


def test_config_file_defaults(client, tmp_path):
    config = tmp_path / "ena-fetch.ini"
    config.write_text("[DEFAULT]\noutput_format = csv\n")
    result = runner.invoke(app, ["-a", "SRR0000001", "-c", str(config)])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "accession,url,md5,bytes"


def test_invalid_config_file_exits_with_one(client, tmp_path):
    config = tmp_path / "ena-fetch.ini"
    config.write_text("[DEFAULT]\noutput_format = xml\n")
    result = runner.invoke(app, ["-a", "SRR0000001", "-c", str(config)])
    assert result.exit_code == 1
    assert client.calls == []
