import pytest

from dgb_rpcutil.argspec import ArgSpec, ArgType, CommandSpec
from dgb_rpcutil.errors import ErrorCategory, SchemaInvariantViolation, UnsupportedSchemaShape
from dgb_rpcutil.help import (
    render_arguments,
    render_help,
    render_signature,
    render_structure,
    render_token,
)


def test_signature_groups_trailing_optional_arguments() -> None:
    args = [
        ArgSpec("required_a", ArgType.NUM),
        ArgSpec("optional_b", ArgType.NUM, optional=True),
        ArgSpec("optional_c", ArgType.BOOL, optional=True),
    ]

    assert render_signature("foo", args) == "foo required_a ( optional_b optional_c )\n"


def test_signature_without_optional_arguments_has_no_markers() -> None:
    args = [ArgSpec("txid", ArgType.STR_HEX), ArgSpec("verbose", ArgType.BOOL)]

    assert render_signature("getrawtransaction", args) == 'getrawtransaction "txid" verbose\n'


def test_signature_without_arguments() -> None:
    assert render_signature("getblockcount", []) == "getblockcount\n"


def test_signature_all_optional() -> None:
    args = [ArgSpec("minconf", ArgType.NUM, optional=True)]

    assert render_signature("getbalance", args) == "getbalance ( minconf )\n"


def test_required_after_optional_is_a_schema_defect() -> None:
    args = [
        ArgSpec("optional_a", ArgType.STR, optional=True),
        ArgSpec("required_b", ArgType.STR),
    ]

    with pytest.raises(SchemaInvariantViolation) as excinfo:
        render_signature("foo", args)

    assert excinfo.value.category is ErrorCategory.INTERNAL
    assert "required_b" in str(excinfo.value)


@pytest.mark.parametrize(
    ("arg_type", "expected"),
    [
        (ArgType.STR, '"x"'),
        (ArgType.STR_HEX, '"x"'),
        (ArgType.NUM, "x"),
        (ArgType.AMOUNT, "x"),
        (ArgType.BOOL, "x"),
    ],
)
def test_scalar_tokens(arg_type: ArgType, expected: str) -> None:
    assert render_token(ArgSpec("x", arg_type)) == expected


def test_array_token_renders_child_template() -> None:
    arg = ArgSpec("keys", ArgType.ARR, children=[ArgSpec("x", ArgType.STR)])

    assert render_token(arg) == '["x",...]'


def test_object_tokens() -> None:
    fields = [
        ArgSpec("txid", ArgType.STR_HEX),
        ArgSpec("vout", ArgType.NUM),
        ArgSpec("amount", ArgType.AMOUNT),
    ]

    assert render_token(ArgSpec("input", ArgType.OBJ, children=fields)) == (
        '{"txid":"hex","vout":n,"amount":amount}'
    )
    assert render_token(ArgSpec("outputs", ArgType.OBJ_USER_KEYS, children=fields[:1])) == (
        '{"txid":"hex",...}'
    )


def test_array_of_objects_token() -> None:
    arg = ArgSpec(
        "inputs",
        ArgType.ARR,
        children=[
            ArgSpec(
                "input",
                ArgType.OBJ,
                children=[ArgSpec("txid", ArgType.STR_HEX), ArgSpec("vout", ArgType.NUM)],
            )
        ],
    )

    assert render_token(arg) == '[{"txid":"hex","vout":n},...]'


@pytest.mark.parametrize(
    ("arg_type", "expected"),
    [
        (ArgType.STR, '"f":"str"'),
        (ArgType.STR_HEX, '"f":"hex"'),
        (ArgType.NUM, '"f":n'),
        (ArgType.AMOUNT, '"f":amount'),
        (ArgType.BOOL, '"f":bool'),
    ],
)
def test_scalar_structures(arg_type: ArgType, expected: str) -> None:
    assert render_structure(ArgSpec("f", arg_type)) == expected


def test_array_structure() -> None:
    arg = ArgSpec("addresses", ArgType.ARR, children=[ArgSpec("address", ArgType.STR)])

    assert render_structure(arg) == '"addresses":["address",...]'


@pytest.mark.parametrize("arg_type", [ArgType.OBJ, ArgType.OBJ_USER_KEYS])
def test_object_inside_object_is_unsupported(arg_type: ArgType) -> None:
    inner = ArgSpec("inner", arg_type, children=[ArgSpec("a", ArgType.NUM)])
    outer = ArgSpec("outer", ArgType.OBJ, children=[inner])

    with pytest.raises(UnsupportedSchemaShape):
        render_structure(inner)
    with pytest.raises(UnsupportedSchemaShape):
        render_token(outer)


def test_scalar_arguments_cannot_have_children() -> None:
    with pytest.raises(SchemaInvariantViolation):
        ArgSpec("n", ArgType.NUM, children=[ArgSpec("x", ArgType.NUM)])


@pytest.mark.parametrize("child_count", [0, 2])
def test_arrays_need_exactly_one_template(child_count: int) -> None:
    children = [ArgSpec(f"c{i}", ArgType.STR) for i in range(child_count)]

    with pytest.raises(SchemaInvariantViolation):
        ArgSpec("arr", ArgType.ARR, children=children)


def test_empty_object_is_allowed() -> None:
    assert render_token(ArgSpec("options", ArgType.OBJ)) == "{}"


def test_command_spec_to_string_and_help() -> None:
    command = CommandSpec(
        "sendtoaddress",
        [
            ArgSpec("address", ArgType.STR, description="The destination."),
            ArgSpec("amount", ArgType.AMOUNT),
            ArgSpec("comment", ArgType.STR, optional=True),
        ],
        description="Send an amount to a given address.",
    )

    assert command.to_string() == 'sendtoaddress "address" amount ( "comment" )\n'
    assert render_arguments(command.args) == (
        '1. "address"  (string, required) The destination.\n'
        "2. amount  (numeric or string, required)\n"
        '3. "comment"  (string, optional)'
    )
    text = render_help(command)
    assert text.startswith(command.to_string())
    assert "\nSend an amount to a given address.\n" in text
    assert "\nArguments:\n1. " in text
