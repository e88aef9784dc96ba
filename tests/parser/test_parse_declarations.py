import pytest

from wic.exceptions import ErrorCode, ParseError, ValidationError, WiError
from wic.model import ValueKind, Variable
from wic.parser import parse_wi


def declared(source, name):
    return parse_wi(source).find_variable(name)


# --- 1. Valid declarations ---


@pytest.mark.parametrize(
    "source, kind, value",
    [
        pytest.param("let x = 1;", ValueKind.I64, 1, id="integer"),
        pytest.param("let x = 5;", ValueKind.I64, 5, id="five"),
        pytest.param("let x = 5.0;", ValueKind.F64, 5.0, id="float"),
        pytest.param('let x = "hello";', ValueKind.STRING, "hello", id="string"),
        pytest.param("let x = 127 as i8;", ValueKind.I8, 127, id="annotated_i8"),
        pytest.param("let x = 5 as f32;", ValueKind.F32, 5.0, id="integer_as_float"),
        pytest.param("let x = 4.0 as u16;", ValueKind.U16, 4, id="integral_float_as_integer"),
        pytest.param('let x = "c" as char;', ValueKind.CHAR, "c", id="annotated_char"),
        pytest.param("let x = 1 + 2;", ValueKind.I64, 3, id="addition"),
        pytest.param("let x = 10 - 4;", ValueKind.I64, 6, id="subtraction"),
        pytest.param("let x = 2.5 * 2;", ValueKind.F64, 5.0, id="float_multiplication"),
        pytest.param("let x = 8 / 2;", ValueKind.I64, 4, id="integral_division"),
        pytest.param("let x = 7.0 / 2;", ValueKind.F64, 3.5, id="float_division"),
        pytest.param("let x = 2 - 5;", ValueKind.I64, -3, id="negative_result"),
        pytest.param("let x = 6 * 7 as u8;", ValueKind.U8, 42, id="annotated_expression"),
        pytest.param("let x = 1 +;", ValueKind.I64, 1, id="operator_without_right_operand"),
        pytest.param("let x = 0.00001;", ValueKind.F64, 0.00001, id="small_float_literal"),
        pytest.param("let x = 10000000000000000.0;", ValueKind.F64, 1e16, id="large_float_literal"),
        pytest.param("let x = 0.5 / 100000.0;", ValueKind.F64, 0.5 / 100000.0, id="small_float_result"),
        pytest.param("let x = 9007199254740993 / 1;", ValueKind.I64, 9007199254740993, id="exact_integer_division"),
        pytest.param("let x = 9223372036854775807 / 1;", ValueKind.I64, 9223372036854775807, id="i64_max_divided"),
    ],
)
def test_single_declaration(source, kind, value):
    variable = declared(source, "x")

    assert isinstance(variable, Variable)
    assert variable.name == "x"
    assert variable.type is kind
    assert variable.value == value
    assert type(variable.value) is type(value)


def test_declarations_keep_source_order():
    program = parse_wi("let a = 1;\nlet b = 2.5;\nlet c = \"three\";\n")
    assert [(node.name, node.type, node.value) for node in program.body] == [
        ("a", ValueKind.I64, 1),
        ("b", ValueKind.F64, 2.5),
        ("c", ValueKind.STRING, "three"),
    ]


def test_references_to_earlier_declarations():
    program = parse_wi("let x = 6; let y = x * 3; let z = 1 + y;")

    assert program.find_variable("y").value == 18
    assert program.find_variable("z").value == 19


def test_reference_on_its_own_copies_the_value():
    program = parse_wi('let greeting = "hi"; let copy = greeting;')

    copy = program.find_variable("copy")
    assert copy.type is ValueKind.STRING
    assert copy.value == "hi"


def test_un_annotated_kind_follows_the_value_text():
    program = parse_wi("let small = 10 as u8; let sum = small + 1; let f = 1.5; let g = f + 0.5;")

    # A computed whole number falls back to the default integer kind
    assert program.find_variable("sum").type is ValueKind.I64
    assert program.find_variable("sum").value == 11
    assert program.find_variable("g").type is ValueKind.F64
    assert program.find_variable("g").value == 2.0


def test_declarations_across_lines_and_comments():
    source = """
    // configuration
    let width = 640;
    let height = 480; /* pixels */
    let area = width * height;
    """
    assert declared(source, "area").value == 307200


def test_comments_do_not_change_the_tree():
    plain = parse_wi("let x = 1 + 2;").to_dict()
    commented = parse_wi("let /* a */ x = 1 // b\n + 2;").to_dict()
    assert commented == plain


# --- 2. Errors ---


@pytest.mark.parametrize(
    "source, error_type, expected_code, expected_position",
    [
        pytest.param("let x = 300 as i8;", ValidationError, ErrorCode.INVALID_VALUE, 8, id="value_out_of_range"),
        pytest.param("let x = -1 as u8;", ParseError, ErrorCode.VARIABLE_NOT_FOUND, 8, id="leading_operator_is_a_name"),
        pytest.param("let x = 1.5 as i32;", ValidationError, ErrorCode.INVALID_VALUE, 8, id="fraction_as_integer"),
        pytest.param("let x = 2 - 5 as u8;", ValidationError, ErrorCode.INVALID_VALUE, 8, id="negative_as_unsigned"),
        pytest.param('let x = "ab" as char;', ValidationError, ErrorCode.INVALID_VALUE, 8, id="string_as_char"),
        pytest.param("let x = 7 / 2;", ValidationError, ErrorCode.INVALID_VALUE, 10, id="integer_division_with_remainder"),
        pytest.param("let x = 1 / 0;", ValidationError, ErrorCode.DIVISION_BY_ZERO, 10, id="division_by_zero"),
        pytest.param('let x = 1 + "a";', ParseError, ErrorCode.ARGUMENT_KIND_MISMATCH, 10, id="argument_kind_mismatch"),
        pytest.param('let x = "a" + "b";', ParseError, ErrorCode.VARIABLE_NOT_FOUND, 12, id="strings_have_no_operators"),
        pytest.param("let x = 1 2;", ParseError, ErrorCode.IRREDUCIBLE_EXPRESSION, 8, id="two_values"),
        pytest.param("let x = 2 + 3 + 4;", ParseError, ErrorCode.IRREDUCIBLE_EXPRESSION, 8, id="chained_operators"),
        pytest.param("let x = y;", ParseError, ErrorCode.VARIABLE_NOT_FOUND, 8, id="unknown_name"),
        pytest.param("let x = ;", ParseError, ErrorCode.MISSING_VALUE, 0, id="missing_value"),
        pytest.param("let x = as i8;", ParseError, ErrorCode.MISSING_VALUE, 0, id="descriptor_without_value"),
        pytest.param("let x = 5 as;", ParseError, ErrorCode.UNEXPECTED_TYPE_DESCRIPTOR, 10, id="descriptor_without_kind"),
        pytest.param("let x = 5 as i8 as i16;", ParseError, ErrorCode.UNEXPECTED_TYPE_DESCRIPTOR, 10, id="two_descriptors"),
        pytest.param('let x = 5 as "i8";', ParseError, ErrorCode.INVALID_TYPE_DESCRIPTOR, 13, id="quoted_kind"),
        pytest.param("let x = 5 as i128;", ParseError, ErrorCode.UNKNOWN_KIND, 13, id="unknown_kind"),
        pytest.param("let x = (1);", ParseError, ErrorCode.INCALCULABLE_TOKEN, 8, id="parenthesis_in_value"),
        pytest.param("let x = 1, 2;", ParseError, ErrorCode.INCALCULABLE_TOKEN, 9, id="separator_in_value"),
        pytest.param("let = 5;", ParseError, ErrorCode.EXPECTED_TOKENS, 4, id="missing_name"),
        pytest.param("let x 5;", ParseError, ErrorCode.EXPECTED_TOKENS, 4, id="missing_assigner"),
        pytest.param("let x = y", ParseError, ErrorCode.UNEXPECTED_END, 9, id="missing_terminator"),
        pytest.param("let", ParseError, ErrorCode.UNEXPECTED_END, 3, id="only_keyword"),
        pytest.param("= 5;", ParseError, ErrorCode.UNEXPECTED_TOKEN, 0, id="stray_assigner"),
        pytest.param("x;", ParseError, ErrorCode.UNEXPECTED_TOKEN, 0, id="bare_identifier"),
        pytest.param("let x = 1; let x = 2;", ParseError, ErrorCode.DUPLICATE_NAME, 15, id="duplicate_name"),
    ],
)
def test_declaration_errors(source, error_type, expected_code, expected_position):
    with pytest.raises(error_type) as excinfo:
        parse_wi(source)
    assert excinfo.value.code == expected_code
    assert excinfo.value.position == expected_position


def test_error_message_names_the_duplicate():
    with pytest.raises(WiError) as excinfo:
        parse_wi("let total = 1;\nlet total = 2;")
    assert excinfo.value.message == "Variable total already defined."


def test_first_error_stops_parsing():
    with pytest.raises(WiError) as excinfo:
        parse_wi("let x = y; let z = 300 as i8;")
    assert excinfo.value.code == ErrorCode.VARIABLE_NOT_FOUND
