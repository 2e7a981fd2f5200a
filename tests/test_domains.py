import pytest

from devproxy.domains import DomainPair, normalize


def test_bare_domain_gets_www_form():
    pair = normalize("smartseraina.ch")
    assert pair == DomainPair(with_www="www.smartseraina.ch", without_www="smartseraina.ch")


def test_www_domain_keeps_prefix():
    pair = normalize("www.smartseraina.ch")
    assert pair.with_www == "www.smartseraina.ch"
    assert pair.without_www == "smartseraina.ch"


@pytest.mark.parametrize("domain", ["example.com", "www.example.com", "api.example.com", "www.www.example.com", ""])
def test_normalizing_the_www_member_is_idempotent(domain):
    pair = normalize(domain)
    assert normalize(pair.with_www) == pair


@pytest.mark.parametrize("domain", ["example.com", "www.example.com", "sub.example.co.uk"])
def test_normalizing_the_bare_member_is_idempotent(domain):
    pair = normalize(domain)
    assert normalize(pair.without_www) == pair


def test_input_is_not_validated_or_cleaned():
    pair = normalize(" Example.COM ")
    assert pair.without_www == " Example.COM "
    assert pair.with_www == "www. Example.COM "


def test_iteration_order_is_www_first():
    assert list(normalize("example.com")) == ["www.example.com", "example.com"]
