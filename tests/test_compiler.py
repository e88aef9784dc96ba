import json
import os

import pytest

from wic.compiler import CompilationPipeline, compile_wi
from wic.config.config import DUMP_FILES
from wic.exceptions import ErrorCode, InternalCompilerError, LexError, ParseError
from wic.lexer import Token
from wic.model import Program

SCRIPT = 'let x = 2 * 21;\nlet label = "answer";\nshow(x, label)\n'


def test_full_pipeline_returns_the_program():
    program = compile_wi(SCRIPT)

    assert isinstance(program, Program)
    assert program.find_variable("x").value == 42
    assert program.calls[0].function_name == "show"


def test_stop_after_tokens_returns_the_token_sequence():
    tokens = compile_wi(SCRIPT, stop_after_stage="tokens")

    assert all(isinstance(token, Token) for token in tokens)
    assert len(tokens) == 18


def test_pipeline_keeps_stage_artifacts():
    pipeline = CompilationPipeline(SCRIPT)
    program = pipeline.run()

    assert list(pipeline.artifacts) == ["tokens", "tree"]
    assert pipeline.artifacts["tree"] is program
    assert pipeline.file_path == "<stdin>"


def test_dumps_every_requested_stage(tmp_path, capsys):
    compile_wi(SCRIPT, dump_stages=["tokens", "tree"], output_dir=str(tmp_path))

    tokens = json.loads((tmp_path / DUMP_FILES["tokens"]).read_text())
    tree = json.loads((tmp_path / DUMP_FILES["tree"]).read_text())

    assert tokens[0] == {"type": "declaration", "position": 0}
    assert tokens[1] == {"type": "identifier", "position": 4, "value": "x"}
    assert tree["body"][0] == {"node": "variable", "name": "x", "type": "i64", "value": 42}
    assert tree["body"][2] == {
        "node": "call",
        "function_name": "show",
        "arguments": [{"node": "reference", "name": "x"}, {"node": "reference", "name": "label"}],
    }
    assert "--- Saving artifact 'tree'" in capsys.readouterr().out


def test_only_requested_stages_are_dumped(tmp_path):
    compile_wi(SCRIPT, dump_stages=["tree"], output_dir=str(tmp_path))

    assert not (tmp_path / DUMP_FILES["tokens"]).exists()
    assert (tmp_path / DUMP_FILES["tree"]).exists()


def test_dump_creates_the_output_directory(tmp_path):
    output_dir = tmp_path / "build" / "debug"
    compile_wi(SCRIPT, dump_stages=["tokens"], stop_after_stage="tokens", output_dir=str(output_dir))

    assert os.path.exists(output_dir / DUMP_FILES["tokens"])


def test_front_end_errors_propagate():
    with pytest.raises(LexError) as excinfo:
        compile_wi('let s = "open')
    assert excinfo.value.code == ErrorCode.UNTERMINATED_STRING

    with pytest.raises(ParseError) as excinfo:
        compile_wi("let x = 1 2;")
    assert excinfo.value.code == ErrorCode.IRREDUCIBLE_EXPRESSION


def test_unexpected_failures_become_internal_errors(monkeypatch):
    def broken(*args, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr("wic.compiler.parse_tokens", broken)
    with pytest.raises(InternalCompilerError, match="An unexpected internal error occurred"):
        compile_wi(SCRIPT)
