import pytest

from sigscanner.core.models import HTTPResponse
from sigscanner.signatures.model import Check


SIGNATURES_YAML = """
plugins:
  - endpoints: ["/wp-login.php", "/blog/wp-login.php"]
    follow_redirects: false
    checks:
      - name: wordpress-login
        all_match: ["WordPress"]
        match: ["wp-submit", "user_login"]
        status_code: 200
        headers: ["X-Powered-By:PHP"]
        severity: high
        description: WordPress login page exposed
        remediation: Restrict access to the login page
      - name: wordpress-readme
        match: ["WordPress"]
        status_code: 200
        severity: info
        description: WordPress banner
        remediation: Remove the banner
  - endpoints: ["/.git/config"]
    follow_redirects: true
    checks:
      - name: git-config
        match: ["[core]"]
        no_match: ["<html"]
        status_code: 200
        no_headers: ["Content-Type:text/html"]
        severity: high
        description: Git configuration exposed
        remediation: Deny access to .git
"""


@pytest.fixture
def signatures_yaml():
    return SIGNATURES_YAML


@pytest.fixture
def signatures_file(tmp_path):
    path = tmp_path / "signatures.yaml"
    path.write_text(SIGNATURES_YAML, encoding="utf-8")
    return str(path)


@pytest.fixture
def make_check():
    def _make(**kwargs):
        base = dict(
            must_match_one=["x"], status_code=200, name="test",
            severity="high", description="d", remediation="r",
        )
        base.update(kwargs)
        return Check(**base)
    return _make


@pytest.fixture
def make_response():
    def _make(status_code=200, body=b"x", header=None):
        return HTTPResponse(status_code=status_code, body=body, header=header or {})
    return _make
