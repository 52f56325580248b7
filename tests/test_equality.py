import re

from kas import EqualityChecks


def test_same_form():
	r = EqualityChecks().compare("ab", "ba")
	assert r.equal and r.stage == "form"


def test_stripped_form():
	r = EqualityChecks().compare("(1-x)^2", "(x-1)^2")
	assert r.equal and r.stage == "strip"


def test_fingerprint_refutes():
	r = EqualityChecks().compare("x+1", "x+2")
	assert not r.equal and r.stage == "fingerprint"


def test_symbolic_certificate():
	checks = EqualityChecks()
	r = checks.compare("sin(x)^2+cos(x)^2", "1")
	assert r.equal and r.stage == "symbolic"
	r = checks.compare("(x+1)^2", "x^2+2x+1")
	assert r.equal and r.stage == "symbolic"


def test_parse_failure():
	r = EqualityChecks().compare("(((", "x")
	assert not r.equal and r.stage == "parse"
	assert "unmatched" in r.message


def test_canonical_key():
	checks = EqualityChecks()
	assert checks.canonical_key("ba") == "ab"
	assert checks.canonical_key("x)") is None
	assert checks.canonical_key("(1-x)(-6x-1)", strip=True) == "(-1+x)(1+6x)"


def test_fingerprint_shape(p):
	checks = EqualityChecks()
	fp = checks.numeric_fingerprint(p("2x"))
	assert re.fullmatch(r"[0-9a-f]{16}", fp)
	assert fp == checks.numeric_fingerprint(p("x+x"))


def test_fingerprint_reports_non_finite(p, capsys):
	EqualityChecks().numeric_fingerprint(p("1/(x-1)"))
	assert "numeric_fingerprint: non-finite" in capsys.readouterr().out


def test_symbolic_equal(p):
	checks = EqualityChecks()
	assert checks.symbolic_equal(p("x-x"), p("0"))
	assert not checks.symbolic_equal(p("x"), p("y"))
