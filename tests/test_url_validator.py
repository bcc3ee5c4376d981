import pytest

from quotalink_app.validators.url import UrlValidator


@pytest.fixture
def validator():
    return UrlValidator()


@pytest.mark.parametrize("url", [
    "example.com",
    "https://example.com",
    "http://sub.domain-name.co.uk/path/to/page",
    "localhost",
    "http://localhost:8080",
    "example.com:443/search?q=python&page=2#top",
    "  example.com  ",
    "example.com/price$list;v=1?cur=$",
])
def test_accepts(validator, url):
    assert validator.validate(url)


@pytest.mark.parametrize("url", [
    None,
    "",
    "   ",
    "example",
    "-example.com",
    "example-.com",
    "exa mple.com",
    "ftp://example.com",
    "example.com:0",
    "example.com:080",
    "http://",
])
def test_rejects(validator, url):
    assert not validator.validate(url)


def test_normalize_adds_https(validator):
    assert validator.normalize(" example.com ") == "https://example.com"


def test_normalize_keeps_scheme(validator):
    assert validator.normalize("http://example.com") == "http://example.com"
    assert validator.normalize("https://example.com") == "https://example.com"
