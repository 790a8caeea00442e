import pytest

from vhostctl.core.exceptions import UsageError, ValidationError
from vhostctl.schemas.vhost import Action, VirtualHostRequest


def test_from_args():
    request = VirtualHostRequest.from_args("create", "example.test", "myapp")
    assert request.action == Action.create
    assert request.domain == "example.test"
    assert request.root_override == "myapp"


def test_empty_root_is_none():
    assert VirtualHostRequest.from_args("delete", "example.test", "").root_override is None


@pytest.mark.parametrize("action,domain", [
    (None, "example.test"),
    ("create", None),
    ("create", ""),
    ("update", "example.test"),
    ("Create", "example.test"),
])
def test_usage_errors(action, domain):
    with pytest.raises(UsageError) as exc:
        VirtualHostRequest.from_args(action, domain)
    assert exc.value.exit_code == 2


@pytest.mark.parametrize("domain", [
    "exa mple.test",
    "example.test;rm",
    "example_test",
    "例子.test",
    "../etc",
    "example.test\n",
    ".",
    "...",
    "-",
    ".-.",
])
def test_invalid_domain(domain):
    """测试域名验证"""
    with pytest.raises(ValidationError) as exc:
        VirtualHostRequest.from_args("create", domain)
    assert exc.value.exit_code == 1


@pytest.mark.parametrize("domain", ["example.test", "my-site.example.com", "localhost", "a1.b2"])
def test_valid_domain(domain):
    assert VirtualHostRequest.from_args("create", domain).domain == domain
