import argparse
import os
import sys
import time

from .compiler import compile_wi
from .config.config import DUMP_FILES
from .diagnostics import Severity, abort, report
from .exceptions import WiError
from .model import Program, Variable, VariableReference
from .utils import TerminalColors


def _describe_operand(operand) -> str:
    if isinstance(operand, VariableReference):
        return operand.name
    return repr(operand.value)


def _describe_node(node) -> str:
    if isinstance(node, Variable):
        return f"let {node.name}: {node.type.value} = {node.value!r}"
    return f"{node.function_name}({', '.join(_describe_operand(arg) for arg in node.arguments)})"


def main():
    start_time = time.perf_counter()

    # This provides a single source of truth for stage names and their order.
    STAGE_MAP = {
        "1": ("tokens", "Token Sequence"),
        "2": ("tree", "Program Tree"),
    }

    stage_help_text = "Run up to a specific stage. "
    for key, (name, desc) in STAGE_MAP.items():
        stage_help_text += f"'{key}' for {desc}. "
    stage_help_text += "Omitting this flag runs the full front end."

    parser = argparse.ArgumentParser(description="Tokenize and parse a .wi file into its program tree.")
    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="The path to the input .wi file. Omit to read from stdin.",
    )
    parser.add_argument("-c", "--compile", type=str, choices=STAGE_MAP.keys(), help=stage_help_text)
    parser.add_argument(
        "-d",
        "--dump",
        action="store_true",
        help=f"Write the debug artifacts ({', '.join(DUMP_FILES.values())}) of every stage that runs.",
    )
    parser.add_argument("-o", "--output-dir", dest="output_dir", help="Directory for the debug artifacts. Defaults to the current directory.")
    parser.add_argument("-vv", "--verbose", action="store_true", help="Print the compiler trace of a fatal error.")

    args = parser.parse_args()

    if not args.input_file and sys.stdin.isatty():
        parser.error("input_file is required when not reading from a pipe.")

    script_path_for_display = args.input_file or "stdin"
    print(f"--- Compiling {script_path_for_display} ---")

    script_content = ""
    try:
        # --- Read Input ---
        if not args.input_file:
            script_content = sys.stdin.read()
            input_file_path_abs = None
        else:
            input_file_path_abs = os.path.abspath(args.input_file)
            with open(input_file_path_abs, "r", encoding="utf-8") as f:
                script_content = f.read()

        stop_after_stage, stage_desc = STAGE_MAP[args.compile] if args.compile else (None, None)
        dump_stages = [name for name, _ in STAGE_MAP.values()] if args.dump else []

        result = compile_wi(
            script_content,
            file_path=input_file_path_abs,
            dump_stages=dump_stages,
            stop_after_stage=stop_after_stage,
            output_dir=args.output_dir,
        )

        # --- Handle Output ---
        if isinstance(result, Program):
            for node in result.body:
                print(f"  {_describe_node(node)}")
            print(f"\n{TerminalColors.GREEN}--- Compilation Successful ---{TerminalColors.RESET}")
            report(f"{len(result.variables)} declaration(s), {len(result.calls)} call(s).", Severity.INFO, stream=sys.stdout)
        else:
            print(f"\n{TerminalColors.GREEN}--- Compilation to stage '{args.compile} ({stage_desc})' successful ---{TerminalColors.RESET}")
            report(f"{len(result)} token(s).", Severity.INFO, stream=sys.stdout)

    # --- Error Handling ---
    except WiError as e:
        print(f"\n{TerminalColors.RED}--- COMPILATION ERROR ---{TerminalColors.RESET}", file=sys.stderr)
        abort(e, script_content, file_name=script_path_for_display, verbose=args.verbose)
    except FileNotFoundError:
        print(
            f"{TerminalColors.RED}ERROR: Script file '{script_path_for_display}' not found.{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except Exception as e:
        print(
            f"\n{TerminalColors.RED}--- UNEXPECTED COMPILER ERROR ---{TerminalColors.RESET}",
            file=sys.stderr,
        )
        print("This may be a bug in the compiler. Please report it.", file=sys.stderr)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    finally:
        end_time = time.perf_counter()
        duration = end_time - start_time
        print(f"\n{TerminalColors.CYAN}--- Total Execution Time: {duration:.4f} seconds ---{TerminalColors.RESET}")


if __name__ == "__main__":
    main()
