import pytest

from kas import Engine, parse


def expr_of(text):
	p = parse(text)
	assert p.ok, p.message
	return p.expr


@pytest.fixture
def engine():
	return Engine()


@pytest.fixture
def p():
	return expr_of
