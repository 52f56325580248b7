from kas import Engine, Expr, Mul, Num, Pow, Var


def test_canonical_form(engine, p):
	assert engine.canonical_form("ba") == "ab"
	assert engine.canonical_form(p("x+x")) == "2x"
	assert engine.canonical_form("(((") is None


def test_same_form(engine):
	assert engine.same_form("(x-1)(6x+1)", "(1+6x)(x-1)")
	assert not engine.same_form("-(6x+1)(1-x)", "(6x+1)(x-1)")
	assert engine.same_form("-(6x+1)(1-x)", "(6x+1)(x-1)", strip=True)
	assert not engine.same_form("(((", "x")


def test_canonical_tree(engine, p):
	assert engine.canonical(p("x*x")) == Pow(Var("x"), Num(2))


def test_compare_delegates(engine):
	assert engine.compare("2x", "x+x").equal


def test_parse_result(engine):
	r = engine.parse("3x")
	assert r.ok
	assert isinstance(r.expr, Expr)
	assert r.expr == Mul((Num(3), Var("x")))


def test_expression_queries(p):
	e = p("y*sin(x)+x^2")
	assert e.get_vars() == ("x", "y")
	assert e.has(Pow)
	assert not p("x+y").has(Pow)
