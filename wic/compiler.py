import json
import os
from typing import Any, Dict, List, Optional

from .config.config import DUMP_FILES
from .exceptions import InternalCompilerError, WiError
from .lexer.lexer import tokenize
from .parser.core.parser import parse_tokens
from .utils import CompilerArtifactEncoder


class CompilationPipeline:
    """
    Runs the front end stage by stage: source text to tokens, tokens to the
    program tree. The artifact of each stage is the input of the next one and
    can be dumped to its well-known JSON file.
    """

    def __init__(
        self,
        source_content: str,
        file_path: Optional[str] = None,
        dump_stages: Optional[List[str]] = None,
        stop_after_stage: Optional[str] = None,
        output_dir: Optional[str] = None,
    ):
        self.source_content = source_content
        self.file_path = os.path.abspath(file_path) if file_path else "<stdin>"
        self.dump_stages = dump_stages or []
        self.stop_after_stage = stop_after_stage
        self.output_dir = output_dir or os.getcwd()
        self.artifacts: Dict[str, Any] = {}
        self.results: List[Any] = []

    def run(self) -> Any:
        try:
            # --- Stage 1: Lexing ---
            self._run_simple_stage("tokens", tokenize, self.source_content)
            if self.stop_after_stage == "tokens":
                return self.results[-1]

            # --- Stage 2: Parsing ---
            self._run_simple_stage("tree", parse_tokens, self.results[-1], self.source_content)
            return self.results[-1]

        except WiError:
            raise
        except Exception as e:
            raise InternalCompilerError(f"An unexpected internal error occurred: {e}") from e

    def _run_simple_stage(self, name: str, func, *args, **kwargs) -> Any:
        """Runs a single function as a stage, storing and returning its result."""
        result = func(*args, **kwargs)
        self.artifacts[name] = result
        self.results.append(result)
        if name in self.dump_stages:
            self.save_artifact(name, result)
        return result

    def save_artifact(self, name: str, data: Any) -> str:
        """Writes a stage artifact to its well-known dump file and returns the path."""
        output_path = os.path.join(self.output_dir, DUMP_FILES[name])
        print(f"--- Saving artifact '{name}' to {output_path} ---")
        os.makedirs(self.output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=False, cls=CompilerArtifactEncoder)
        return output_path


def compile_wi(
    source_content: str,
    file_path: Optional[str] = None,
    dump_stages: Optional[List[str]] = None,
    stop_after_stage: Optional[str] = None,
    output_dir: Optional[str] = None,
):
    """High-level entry point for the front-end pipeline."""
    pipeline = CompilationPipeline(source_content, file_path, dump_stages, stop_after_stage, output_dir)
    return pipeline.run()
