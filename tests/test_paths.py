import pytest

from vhostctl.utils.paths import resolve_document_root


@pytest.mark.parametrize("domain,override,expected", [
    ("example.test", None, "/var/www/exampletest"),
    ("example.test", "", "/var/www/exampletest"),
    ("example.test", "myapp", "/var/www/myapp"),
    ("example.test", "sites/one", "/var/www/sites/one"),
    ("example.test", "/srv/site", "/srv/site"),
    ("a.b.c.example.test", None, "/var/www/abcexampletest"),
    ("localhost", None, "/var/www/localhost"),
])
def test_resolve_document_root(domain, override, expected):
    assert resolve_document_root(domain, override) == expected


def test_custom_base_dir():
    assert resolve_document_root("example.test", base_dir="/srv/www") == "/srv/www/exampletest"


def test_same_root_for_create_and_delete():
    first = resolve_document_root("my-site.example.test", "app")
    second = resolve_document_root("my-site.example.test", "app")
    assert first == second == "/var/www/app"
