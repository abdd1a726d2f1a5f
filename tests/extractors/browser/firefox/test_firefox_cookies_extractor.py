"""Tests for the Firefox cookies export pipeline."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from core.netscape import render_cookie_file
from extractors.browser.firefox import CookieExportRequest, FirefoxCookiesExtractor
from extractors.browser.firefox._parsers import CookieRecord
from extractors.exceptions import CookieStoreNotFoundError, StorageAccessError

HEADER_LINES = 5  # four comment lines plus the blank separator


@pytest.fixture
def no_default_roots():
    """Keep discovery away from the real home directory."""
    with patch(
        "extractors.browser.firefox.cookies.extractor.candidate_profile_roots",
        return_value=[],
    ):
        yield


class TestFirefoxCookiesExtractor:
    """Tests for locate → query → format."""

    def test_empty_hosts_no_discovery_no_output(self):
        stdout = io.StringIO()
        extractor = FirefoxCookiesExtractor(stdout=stdout)

        with patch("extractors.browser.firefox.cookies.extractor.find_cookie_store") as find, \
                patch("extractors.browser.firefox.cookies.extractor.query_cookies") as query:
            count = extractor.run(CookieExportRequest(hosts=[]))

        assert count == 0
        assert stdout.getvalue() == ""
        find.assert_not_called()
        query.assert_not_called()

    def test_filters_hosts_from_discovered_store(self, cookies_db, no_default_roots):
        stdout = io.StringIO()
        request = CookieExportRequest(
            hosts=["a.com", "c.com"],
            profile_roots=[cookies_db.parent.parent],
        )

        count = FirefoxCookiesExtractor(stdout=stdout).run(request)

        lines = stdout.getvalue().splitlines()[HEADER_LINES:]
        assert count == 3
        assert len(lines) == 3
        assert {line.split("\t")[0] for line in lines} == {"a.com", "c.com"}
        for line in lines:
            fields = line.split("\t")
            assert len(fields) == 7
            assert fields[1] == "TRUE"
            assert fields[3] == "FALSE"

    def test_explicit_cookie_file_skips_discovery(self, cookies_db):
        stdout = io.StringIO()
        request = CookieExportRequest(hosts=["b.com"], cookie_file=cookies_db)

        with patch("extractors.browser.firefox.cookies.extractor.find_cookie_store") as find:
            FirefoxCookiesExtractor(stdout=stdout).run(request)

        find.assert_not_called()
        assert stdout.getvalue() == render_cookie_file(
            [CookieRecord(host="b.com", path="/", expiry=1893456000, name="tracker", value="zzz")]
        )

    def test_not_found_raises(self, tmp_path, no_default_roots):
        request = CookieExportRequest(hosts=["a.com"], profile_roots=[tmp_path / "missing"])

        with pytest.raises(CookieStoreNotFoundError, match="cookie db not found"):
            FirefoxCookiesExtractor(stdout=io.StringIO()).run(request)

    def test_storage_error_writes_nothing(self, tmp_path):
        out = tmp_path / "out.txt"
        request = CookieExportRequest(
            hosts=["a.com"],
            output=out,
            cookie_file=tmp_path / "missing.sqlite",
        )

        with pytest.raises(StorageAccessError):
            FirefoxCookiesExtractor().run(request)

        assert not out.exists()

    def test_file_output_equals_stdout(self, cookies_db, tmp_path):
        out = tmp_path / "cookies.txt"
        stdout = io.StringIO()

        FirefoxCookiesExtractor().run(
            CookieExportRequest(hosts=["a.com"], output=out, cookie_file=cookies_db)
        )
        FirefoxCookiesExtractor(stdout=stdout).run(
            CookieExportRequest(hosts=["a.com"], cookie_file=cookies_db)
        )

        assert out.read_text(encoding="utf-8") == stdout.getvalue()

    def test_real_flags(self, cookies_db):
        stdout = io.StringIO()
        request = CookieExportRequest(hosts=["a.com"], cookie_file=cookies_db, real_flags=True)

        FirefoxCookiesExtractor(stdout=stdout).run(request)

        lines = stdout.getvalue().splitlines()[HEADER_LINES:]
        assert {line.split("\t")[3] for line in lines} == {"TRUE"}

    def test_configured_roots_searched_first(self, tmp_path):
        extractor = FirefoxCookiesExtractor()
        request = CookieExportRequest(hosts=["a.com"], profile_roots=[tmp_path])

        with patch(
            "extractors.browser.firefox.cookies.extractor.candidate_profile_roots",
            return_value=[Path("/default"), tmp_path],
        ):
            roots = extractor.search_roots(request)

        assert roots == [tmp_path, Path("/default")]
