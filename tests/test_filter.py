import pytest

from linksift.filter import (
    Excludes,
    Filter,
    Includes,
    is_example_domain,
    is_false_positive,
    is_unsupported_domain,
)

V4_PRIVATE_CLASS_A = "http://10.0.0.1"
V4_PRIVATE_CLASS_B = "http://172.16.0.1"
V4_PRIVATE_CLASS_C = "http://192.168.0.1"
V4_LOOPBACK = "http://127.0.0.1"
V6_LOOPBACK = "http://[::1]"
V4_LINK_LOCAL_1 = "http://169.254.0.1"
V4_LINK_LOCAL_2 = "http://169.254.10.1:8080"
V6_MAPPED_V4_PRIVATE_CLASS_A = "http://[::ffff:10.0.0.1]"
V6_MAPPED_V4_LINK_LOCAL = "http://[::ffff:169.254.0.1]"

NO_EXAMPLES = frozenset()


def make_filter(**kwargs):
    kwargs.setdefault("example_domains", NO_EXAMPLES)
    return Filter(**kwargs)


def test_exclude_loopback_ips():
    flt = make_filter(exclude_loopback_ips=True)
    assert flt.is_excluded("https://[::1]")
    assert flt.is_excluded("https://127.0.0.1/8")


def test_includes_and_excludes_empty():
    assert not make_filter().is_excluded("https://example.com")


def test_false_positives():
    flt = make_filter()
    assert flt.is_excluded("http://www.w3.org/1999/xhtml")
    assert flt.is_excluded("http://schemas.openxmlformats.org/markup-compatibility/2006")
    assert not flt.is_excluded("https://example.com")


def test_overwrite_false_positives():
    flt = make_filter(includes=Includes([r"http://www.w3.org/1999/xhtml"]))
    assert not flt.is_excluded("http://www.w3.org/1999/xhtml")


def test_include_regex():
    flt = make_filter(includes=Includes([r"foo.example.com"]))
    assert not flt.is_excluded("https://foo.example.com")
    assert flt.is_excluded("https://bar.example.com")
    assert flt.is_excluded("https://example.com")


def test_exclude_mail_by_default():
    flt = make_filter()
    assert flt.is_excluded("mailto:mail@example.com")
    assert flt.is_excluded("mailto:someone@example.com")
    assert not flt.is_excluded("http://bar.dev")


def test_include_mail():
    flt = make_filter(include_mail=True)
    assert not flt.is_excluded("mailto:mail@example.com")
    assert not flt.is_excluded("mailto:someone@example.com")
    assert not flt.is_excluded("http://bar.dev")


def test_exclude_regex():
    excludes = Excludes([r"github.com", r"[a-z]+\.(org|net)", r"@example.com"])
    flt = make_filter(excludes=excludes)
    assert flt.is_excluded("https://github.com")
    assert flt.is_excluded("http://exclude.org")
    assert flt.is_excluded("mailto:mail@example.com")
    assert not flt.is_excluded("http://bar.dev")
    assert flt.is_excluded("mailto:someone@example.com")


def test_exclude_include_regex():
    flt = make_filter(
        includes=Includes([r"foo.example.com"]),
        excludes=Excludes([r"example.com"]),
    )
    assert not flt.is_excluded("https://foo.example.com")
    assert flt.is_excluded("https://example.com")
    assert flt.is_excluded("https://bar.example.com")


@pytest.mark.parametrize(
    "url",
    [
        V4_PRIVATE_CLASS_A,
        V4_PRIVATE_CLASS_B,
        V4_PRIVATE_CLASS_C,
        V4_LINK_LOCAL_1,
        V4_LINK_LOCAL_2,
        V4_LOOPBACK,
        V6_LOOPBACK,
        "http://localhost",
    ],
)
def test_excludes_no_private_ips_by_default(url):
    assert not make_filter().is_excluded(url)


@pytest.mark.parametrize("url", [V4_PRIVATE_CLASS_A, V4_PRIVATE_CLASS_B, V4_PRIVATE_CLASS_C])
def test_exclude_private_ips(url):
    assert make_filter(exclude_private_ips=True).is_excluded(url)


@pytest.mark.parametrize("url", [V4_LINK_LOCAL_1, V4_LINK_LOCAL_2])
def test_exclude_link_local(url):
    assert make_filter(exclude_link_local_ips=True).is_excluded(url)


@pytest.mark.parametrize("url", [V4_LOOPBACK, V6_LOOPBACK, "http://localhost"])
def test_exclude_loopback(url):
    assert make_filter(exclude_loopback_ips=True).is_excluded(url)


def test_exclude_ip_v4_mapped_ip_v6_not_supported():
    flt = make_filter(exclude_private_ips=True, exclude_link_local_ips=True)
    assert not flt.is_excluded(V6_MAPPED_V4_PRIVATE_CLASS_A)
    assert not flt.is_excluded(V6_MAPPED_V4_LINK_LOCAL)


def test_ip_predicates_only_apply_to_their_kind():
    flt = make_filter(exclude_private_ips=True)
    assert not flt.is_ip_excluded(V4_LOOPBACK)
    assert not flt.is_ip_excluded(V4_LINK_LOCAL_1)
    assert flt.is_ip_excluded(V4_PRIVATE_CLASS_B)


def test_host_excluded_only_for_localhost():
    flt = make_filter(exclude_loopback_ips=True)
    assert flt.is_host_excluded("http://localhost:8080/path")
    assert not flt.is_host_excluded("http://localhost.dev")


def test_scheme_excluded():
    flt = make_filter(schemes={"https"})
    assert flt.is_scheme_excluded("http://bar.dev")
    assert not flt.is_scheme_excluded("https://bar.dev")
    assert flt.is_excluded("http://bar.dev")
    assert not flt.is_excluded("https://bar.dev")


def test_no_schemes_excludes_no_scheme():
    assert not make_filter().is_scheme_excluded("ftp://bar.dev")


def test_mail_excluded():
    assert make_filter().is_mail_excluded("mailto:someone@example.com")
    assert not make_filter(include_mail=True).is_mail_excluded("mailto:someone@example.com")
    assert not make_filter().is_mail_excluded("https://bar.dev")


def test_example_domains_excluded_by_default():
    flt = Filter(include_mail=True)
    assert flt.is_excluded("https://example.com")
    assert flt.is_excluded("https://foo.example.org/page")
    assert flt.is_excluded("mailto:someone@example.com")
    assert not flt.is_excluded("https://www.rust-lang.org/")
    assert not flt.is_excluded("https://github.com/rust-lang/rust")


def test_is_example_domain():
    assert is_example_domain("https://example.net/a")
    assert is_example_domain("https://sub.example.edu")
    assert is_example_domain("mailto:someone@example.com")
    assert not is_example_domain("https://bar.dev")
    assert not is_example_domain("http://10.0.0.1")
    assert not is_example_domain("https://example.com", frozenset())


def test_is_unsupported_domain():
    assert is_unsupported_domain("https://twitter.com/someone")
    assert is_unsupported_domain("https://mobile.twitter.com/someone")
    assert not is_unsupported_domain("https://bar.dev")
    assert make_filter().is_excluded("https://twitter.com/someone")


def test_is_false_positive():
    assert is_false_positive("https://ogp.me/ns#")
    assert is_false_positive("http://schemas.microsoft.com/office")
    assert not is_false_positive("https://bar.dev/http://www.w3.org/2000/svg")


def test_regex_sets():
    assert Includes().is_empty()
    assert not Excludes(["a"]).is_empty()
    assert Excludes([r"\d+"]).is_match("page42")
    assert not Includes([r"^x"]).is_match("yx")


def test_empty_pattern_sets_behave_like_none():
    flt = make_filter(includes=Includes(), excludes=Excludes())
    assert not flt.is_excluded("https://bar.dev")
    assert flt.is_excluded("http://www.w3.org/2000/svg")