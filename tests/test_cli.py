"""
Tests for the command-line front end.
"""

from site_analysis import cli
from site_analysis.dto import APIResponse, ErrorInfo, ResponseMeta


class FakeClient:
    """Stands in for AnalysisClient, recording calls."""

    calls = []
    response = None

    def __init__(self, base_url=None):
        self.base_url = base_url

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def lookup_dns(self, domain, record_type="A"):
        FakeClient.calls.append(("dns", domain, record_type))
        return FakeClient.response

    async def analyze_headers(self, url):
        FakeClient.calls.append(("headers", url))
        return FakeClient.response


def use_fake_client(monkeypatch, response):
    FakeClient.calls = []
    FakeClient.response = response
    monkeypatch.setattr(cli, "AnalysisClient", FakeClient)


def test_prepare_input():
    assert cli.prepare_input("domain", "https://Example.com/x") == "example.com"
    assert cli.prepare_input("domain", "not a domain") is None
    assert cli.prepare_input("url", "example.com") == "https://example.com"


def test_invalid_domain_exits_without_request(monkeypatch, capsys):
    use_fake_client(monkeypatch, None)

    code = cli.main(["dns", "not_a_domain"])

    assert code == cli.EXIT_INVALID_INPUT
    assert FakeClient.calls == []
    assert "Please enter a valid domain name" in capsys.readouterr().out


def test_dns_command_normalizes_and_renders(monkeypatch, capsys):
    response = APIResponse(
        success=True,
        data={
            "domain": "example.com",
            "recordType": "MX",
            "records": [{"name": "example.com", "type": "MX", "TTL": 300, "data": "10 mail.example.com."}],
        },
        meta=ResponseMeta(timestamp="2024-06-01T12:00:00.000Z", cached=True),
    )
    use_fake_client(monkeypatch, response)

    code = cli.main(["dns", "Example.com", "--type", "mx"])

    assert code == cli.EXIT_OK
    assert FakeClient.calls == [("dns", "example.com", "MX")]
    out = capsys.readouterr().out
    assert "mail.example.com" in out
    assert "Served from cache" in out


def test_failed_check_exits_1(monkeypatch, capsys):
    use_fake_client(monkeypatch, APIResponse(success=False, error=ErrorInfo(message="Headers analysis failed")))

    code = cli.main(["headers", "example.com"])

    assert code == cli.EXIT_FAILED
    assert FakeClient.calls == [("headers", "https://example.com")]
    assert "Headers analysis failed" in capsys.readouterr().out


def test_common_options_after_subcommand(monkeypatch, capsys):
    response = APIResponse(
        success=True,
        data={"url": "https://example.com", "securityHeaders": [], "securityScore": 0},
        meta=ResponseMeta(timestamp="2024-06-01T12:00:00.000Z"),
    )
    use_fake_client(monkeypatch, response)

    code = cli.main(["headers", "example.com", "--json", "--api-url", "http://api.test"])

    assert code == cli.EXIT_OK
    assert FakeClient.calls == [("headers", "https://example.com")]
    out = capsys.readouterr().out
    assert '"success": true' in out
    assert '"securityScore": 0' in out


def test_common_options_before_subcommand_are_kept():
    parser = cli.build_parser()

    before = parser.parse_args(["--json", "--api-url", "http://api.test", "dns", "example.com"])
    default = parser.parse_args(["dns", "example.com"])

    assert before.json is True
    assert before.api_url == "http://api.test"
    assert default.json is False
    assert default.api_url == cli.settings.api_base_url
    assert parser.parse_args(["dns", "example.com", "--json"]).json is True
