"""Tests for the command-line client."""

import io
import json

import httpx
import pytest

from shortlink.cli import EXIT_FAILED, EXIT_OK, EXIT_UNAVAILABLE, ShortlinkCLI, build_parser


@pytest.fixture
def cli(backend, resolver):
    return ShortlinkCLI(backend=backend, resolver=resolver, out=io.StringIO(), err=io.StringIO())


def output(stream):
    return json.loads(stream.getvalue())


@pytest.mark.asyncio
class TestShortlinkCLI:
    """Test CLI commands against the fake backend."""

    async def test_shorten(self, cli, fake_backend):
        fake_backend.on("POST", "/api/v1/urls/shorten", httpx.Response(
            200, json={"slug": "Ab3Z", "shortUrl": "http://short.test/Ab3Z"},
        ))

        assert await cli.shorten("https://example.com", "Ab3Z") == EXIT_OK
        assert output(cli.out)["short_url"] == "http://short.test/Ab3Z"

    async def test_shorten_invalid(self, cli, fake_backend):
        assert await cli.shorten("https://example.com", "abc") == EXIT_FAILED
        assert output(cli.err)["alias_error"]
        assert fake_backend.requests == []

    async def test_shorten_rejected(self, cli, fake_backend):
        fake_backend.on("POST", "/api/v1/urls/shorten", httpx.Response(409, json={"message": "Slug taken"}))

        assert await cli.shorten("https://example.com", "Ab3Z") == EXIT_FAILED
        assert output(cli.err)["error"] == "Slug taken"

    async def test_resolve(self, cli, fake_backend):
        fake_backend.on("GET", "/Ab3Z", httpx.Response(302, headers={"Location": "https://example.com/x"}))

        assert await cli.resolve("Ab3Z") == EXIT_OK
        assert output(cli.out)["target"] == "https://example.com/x"

    async def test_resolve_missing(self, cli):
        assert await cli.resolve("Zz9Z") == EXIT_FAILED

    async def test_resolve_unavailable(self, cli, fake_backend):
        fake_backend.on("GET", "/Ab3Z", httpx.ConnectError("refused"))

        assert await cli.resolve("Ab3Z") == EXIT_UNAVAILABLE

    async def test_top(self, cli, fake_backend, sample_rows):
        fake_backend.on("GET", "/api/v1/urls/top", httpx.Response(200, json=sample_rows))

        assert await cli.top("all-time", 2) == EXIT_OK
        data = output(cli.out)
        assert [u["slug"] for u in data["urls"]] == ["Ef5X", "Ab3Z"]

    async def test_top_bad_range(self, cli, fake_backend):
        assert await cli.top("forever", 2) == EXIT_FAILED
        assert fake_backend.requests == []

    async def test_list(self, cli, fake_backend, sample_rows):
        fake_backend.on("GET", "/api/v1/urls/all", httpx.Response(200, json=sample_rows))

        assert await cli.list_urls("example.com") == EXIT_OK
        assert output(cli.out)["count"] == 2


class TestCheckAndParser:
    """Test local validation and argument parsing."""

    def test_check_valid(self, cli):
        assert cli.check("https://example.com", "Ab3Z") == EXIT_OK
        assert output(cli.out)["can_submit"] is True

    def test_check_invalid(self, cli):
        assert cli.check("ftp://example.com") == EXIT_FAILED

    def test_parser(self):
        args = build_parser().parse_args(["top", "--range", "7d", "--limit", "3"])

        assert args.command == "top"
        assert args.range_ == "7d"
        assert args.limit == 3
