import pytest

from ExpressionEngine import error as E
from ExpressionEngine.Registry import Delimiter, TokenKind
from ExpressionEngine.Tokenizer import tokenize


def kinds(tokens):
    return [token.kind for token in tokens]


def texts(tokens):
    return [token.text for token in tokens]


def test_simple_infix():
    tokens = tokenize("2 + 3 * 4")
    assert texts(tokens) == ["2", "+", "3", "*", "4"]
    assert kinds(tokens) == [TokenKind.NUMBER, TokenKind.OPERATOR, TokenKind.NUMBER,
                             TokenKind.OPERATOR, TokenKind.NUMBER]


def test_positions_point_at_source():
    tokens = tokenize("12 + sin(3)")
    assert [token.position for token in tokens] == [0, 3, 5, 8, 9, 10]


def test_leading_minus_is_part_of_literal():
    assert texts(tokenize("-3 + 1")) == ["-3", "+", "1"]


def test_minus_after_number_is_subtraction():
    tokens = tokenize("5-3")
    assert texts(tokens) == ["5", "-", "3"]
    assert tokens[1].kind == TokenKind.OPERATOR


@pytest.mark.parametrize("expression, literal", [
    ("(-3)", "-3"),
    ("2*-3", "-3"),
    ("2^-1", "-1"),
    ("max(2,-3)", "-3"),
    ("√-4", "-4"),
])
def test_minus_in_unary_position(expression, literal):
    assert literal in texts(tokenize(expression))


def test_leading_plus_is_unary_plus():
    tokens = tokenize("+5")
    assert kinds(tokens) == [TokenKind.UNARY_PLUS, TokenKind.NUMBER]


def test_plus_after_number_is_addition():
    assert tokenize("1+5")[1].kind == TokenKind.OPERATOR


def test_delimiter_families():
    tokens = tokenize("{[()]}")
    assert [token.family for token in tokens] == [
        Delimiter.BRACE, Delimiter.BRACKET, Delimiter.PAREN,
        Delimiter.PAREN, Delimiter.BRACKET, Delimiter.BRACE,
    ]


def test_special_symbols():
    assert kinds(tokenize("√4!%")) == [TokenKind.RADICAL, TokenKind.NUMBER,
                                       TokenKind.FACTORIAL, TokenKind.PERCENT]


@pytest.mark.parametrize("expression, expected", [
    ("2pi", ["2", "*", "pi"]),
    ("2sin(0)", ["2", "*", "sin", "(", "0", ")"]),
    ("2(3)", ["2", "*", "(", "3", ")"]),
    ("(2)3", ["(", "2", ")", "*", "3"]),
    ("(2)(3)", ["(", "2", ")", "*", "(", "3", ")"]),
    ("(1)pi", ["(", "1", ")", "*", "pi"]),
    ("pi(2)", ["pi", "*", "(", "2", ")"]),
    ("2√4", ["2", "*", "√", "4"]),
])
def test_implicit_multiplication(expression, expected):
    assert texts(tokenize(expression)) == expected


def test_identifier_with_digits():
    tokens = tokenize("log10(1)")
    assert tokens[0].text == "log10"
    assert tokens[0].kind == TokenKind.FUNCTION
    assert texts(tokenize("pi3")) == ["pi", "*", "3"]
    assert texts(tokenize("2pi3")) == ["2", "*", "pi", "*", "3"]


def test_function_call_gets_no_implicit_multiplication():
    assert "*" not in texts(tokenize("sin(1)"))


def test_identifiers_are_case_sensitive():
    assert tokenize("nCr(5,2)")[0].kind == TokenKind.FUNCTION
    with pytest.raises(E.InvalidExpression):
        tokenize("ncr(5,2)")


def test_unknown_identifier_reports_name_and_position():
    with pytest.raises(E.InvalidExpression) as info:
        tokenize("2 + foo(1)")
    assert "foo" in info.value.message
    assert info.value.position == 4
    assert info.value.code == "1001"


def test_double_dot_literal_rejected():
    with pytest.raises(E.InvalidExpression) as info:
        tokenize("1..2")
    assert info.value.code == "1003"


@pytest.mark.parametrize("expression", ["-", "(-)", ".", "1+."])
def test_literal_without_digits_rejected(expression):
    with pytest.raises(E.InvalidExpression):
        tokenize(expression)


def test_decimal_literals():
    assert texts(tokenize(".5 + 5.")) == [".5", "+", "5."]


def test_invalid_character():
    with pytest.raises(E.InvalidExpression) as info:
        tokenize("2 & 3")
    assert info.value.position == 2
    assert info.value.kind == E.ErrorKind.INVALID_EXPRESSION


def test_whitespace_is_ignored():
    assert texts(tokenize("  1 \t+\n2 ")) == ["1", "+", "2"]
