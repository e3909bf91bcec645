#!/usr/bin/env python3
"""Project-specific lint rules that ruff does not cover.

Rules:
1. no-class-tests: test files use module-level functions, apart from
   Hypothesis ``RuleBasedStateMachine.TestCase`` exports
2. import-in-function: library code imports at module level only
3. mutable-default: no list/dict/set default arguments
4. no-print: library code reports through logging, never print()
5. todo-needs-issue: TODO/FIXME comments carry an issue reference
6. shared-random: library code never calls the module-level ``random``
   functions; every draw goes through an explicit ``random.Random``

Usage: python scripts/extra_lints.py [ROOT]
"""

import ast
import re
import sys
from dataclasses import dataclass
from pathlib import Path

LINTED_DIRECTORIES = ("src", "tests")

# random.Random and random.SystemRandom construct generators; anything else on
# the module draws from the hidden process-wide instance.
ALLOWED_RANDOM_ATTRIBUTES = frozenset({"Random", "SystemRandom"})

TODO_PATTERN = re.compile(r"#\s*(TODO|FIXME)(?!:\s*\w+-\d+)", re.IGNORECASE)


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


class LintVisitor(ast.NodeVisitor):
    """Walks one module and records rule violations."""

    def __init__(self, file: Path) -> None:
        self.file = file
        self.errors: list[LintError] = []
        self._is_test_file = file.name.startswith("test_") or file.name == "conftest.py"
        self._function_depth = 0

    def _add_error(self, node: ast.AST, rule: str, message: str) -> None:
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        self.errors.append(LintError(self.file, lineno, col_offset, rule, message))

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if self._is_test_file and node.name.startswith("Test"):
            is_state_machine_export = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not is_state_machine_export:
                self._add_error(
                    node,
                    "no-class-tests",
                    f"Class-based test '{node.name}' found. Use functions.",
                )
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for default in node.args.defaults + node.args.kw_defaults:
            if default is not None and _is_mutable_default(default):
                self._add_error(
                    default,
                    "mutable-default",
                    "Mutable default argument. Use None instead.",
                )
        self._function_depth += 1
        self.generic_visit(node)
        self._function_depth -= 1

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def _check_import(self, node: ast.Import | ast.ImportFrom) -> None:
        if self._function_depth > 0 and not self._is_test_file:
            self._add_error(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )
        self.generic_visit(node)

    visit_Import = _check_import
    visit_ImportFrom = _check_import

    def visit_Call(self, node: ast.Call) -> None:
        if not self._is_test_file:
            func = node.func
            if isinstance(func, ast.Name) and func.id == "print":
                self._add_error(
                    node,
                    "no-print",
                    "Use logging instead of print() in library code.",
                )
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
                and func.attr not in ALLOWED_RANDOM_ATTRIBUTES
            ):
                self._add_error(
                    node,
                    "shared-random",
                    f"random.{func.attr}() uses the shared generator. "
                    "Draw from an explicit random.Random instead.",
                )
        self.generic_visit(node)


def _is_mutable_default(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in ("list", "dict", "set")
    )


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    errors: list[LintError] = []
    for i, line in enumerate(source.splitlines(), 1):
        match = TODO_PATTERN.search(line)
        if match:
            msg = f"{match.group(1)} needs issue reference (e.g., TODO: PROJ-123)."
            errors.append(LintError(file, i, match.start(), "todo-needs-issue", msg))
    return errors


def lint_source(path: Path, source: str) -> list[LintError]:
    """Lint ``source`` as if it were the contents of ``path``."""
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def lint_file(path: Path) -> list[LintError]:
    return lint_source(path, path.read_text())


def lint_tree(root: Path) -> list[LintError]:
    """Lint every Python file under the linted directories of ``root``."""
    errors: list[LintError] = []
    for directory in LINTED_DIRECTORIES:
        dir_path = root / directory
        if not dir_path.exists():
            continue
        for py_file in sorted(dir_path.rglob("*.py")):
            errors.extend(lint_file(py_file))
    return sorted(errors, key=lambda e: (str(e.file), e.line, e.column))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    root = Path(args[0]) if args else Path()
    errors = lint_tree(root)

    if errors:
        for error in errors:
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
