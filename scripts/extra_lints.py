#!/usr/bin/env python3
"""Custom linting rules for the weighted alias sampler.

Rules:
1. No class-based tests in test files (use module-level functions)
2. No imports inside functions
3. No mutable default arguments
4. No print() statements in source code (use logging)
5. No TODO/FIXME comments without issue references
6. Sampler weights are only stored through ``_commit`` (or ``__init__``),
   so every stored weight has passed the admission policy and every
   change rebuilds the alias table
7. The alias table module uses integer arithmetic only: no true division
   and no float literals

Usage: python scripts/extra_lints.py [paths...]
"""

import ast
import re
import sys
from dataclasses import dataclass
from pathlib import Path

WEIGHT_ATTRIBUTES = frozenset({"_weights", "_table"})
WEIGHT_WRITERS = frozenset({"__init__", "_commit"})
LIST_MUTATORS = frozenset(
    {"append", "extend", "insert", "pop", "remove", "clear", "sort", "reverse"}
)
INTEGER_ONLY_MODULES = frozenset({"alias_table.py"})


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


def _is_self_attribute(node: ast.AST, names: frozenset[str]) -> bool:
    return (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == "self"
        and node.attr in names
    )


class LintVisitor(ast.NodeVisitor):
    """AST visitor that checks for lint violations."""

    def __init__(self, file: Path, source: str) -> None:
        self.file = file
        self.source = source
        self.errors: list[LintError] = []
        self._is_test_file = file.name.startswith("test_")
        self._integer_only = file.name in INTEGER_ONLY_MODULES
        self._function_stack: list[str] = []

    def _add_error(self, node: ast.AST, rule: str, message: str) -> None:
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        self.errors.append(LintError(self.file, lineno, col_offset, rule, message))

    def _may_write_weights(self) -> bool:
        return bool(self._function_stack) and self._function_stack[-1] in WEIGHT_WRITERS

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        # Rule 1: No class-based tests (except Hypothesis stateful tests)
        if self._is_test_file and node.name.startswith("Test"):
            is_hypothesis_stateful = any(
                isinstance(base, ast.Attribute) and base.attr == "TestCase"
                for base in node.bases
            )
            if not is_hypothesis_stateful:
                msg = f"Class-based test '{node.name}' found. Use functions."
                self._add_error(node, "no-class-tests", msg)
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        # Rule 3: No mutable default arguments
        for default in node.args.defaults + node.args.kw_defaults:
            if default is not None and self._is_mutable_default(default):
                msg = "Mutable default argument. Use None instead."
                self._add_error(default, "mutable-default", msg)

        self._function_stack.append(node.name)
        self.generic_visit(node)
        self._function_stack.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_function(node)

    def _is_mutable_default(self, node: ast.expr) -> bool:
        """Check if a default value is a mutable type."""
        if isinstance(node, (ast.List, ast.Dict, ast.Set)):
            return True
        is_mutable_call = (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in ("list", "dict", "set")
        )
        return is_mutable_call

    def _check_import(self, node: ast.Import | ast.ImportFrom) -> None:
        # Rule 2: No imports inside functions (except in test files)
        if self._function_stack and not self._is_test_file:
            self._add_error(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )
        self.generic_visit(node)

    def visit_Import(self, node: ast.Import) -> None:
        self._check_import(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        self._check_import(node)

    def _check_weight_target(self, target: ast.AST) -> None:
        # Rule 6: weights and table are only replaced by the commit path
        if self._is_test_file or self._may_write_weights():
            return
        targets = target.elts if isinstance(target, ast.Tuple) else [target]
        for t in targets:
            if isinstance(t, ast.Subscript):
                t = t.value
            if _is_self_attribute(t, WEIGHT_ATTRIBUTES):
                self._add_error(
                    t,
                    "weight-outside-commit",
                    f"'self.{t.attr}' assigned outside _commit.",
                )

    def visit_Assign(self, node: ast.Assign) -> None:
        for target in node.targets:
            self._check_weight_target(target)
        self.generic_visit(node)

    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        self._check_weight_target(node.target)
        self.generic_visit(node)

    def visit_AugAssign(self, node: ast.AugAssign) -> None:
        self._check_weight_target(node.target)
        self.generic_visit(node)

    def visit_BinOp(self, node: ast.BinOp) -> None:
        # Rule 7: integer arithmetic in the alias table
        if self._integer_only and isinstance(node.op, ast.Div):
            self._add_error(
                node, "float-arithmetic", "True division in integer-only module."
            )
        self.generic_visit(node)

    def visit_Constant(self, node: ast.Constant) -> None:
        if self._integer_only and isinstance(node.value, float):
            self._add_error(
                node, "float-arithmetic", "Float literal in integer-only module."
            )
        self.generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        # Rule 4: No print() in source code (not test files)
        is_print = isinstance(node.func, ast.Name) and node.func.id == "print"
        if not self._is_test_file and is_print:
            self._add_error(
                node,
                "no-print",
                "Use logging instead of print() in source code.",
            )
        # Rule 6: no in-place mutation of the stored weights either
        func = node.func
        if (
            not self._is_test_file
            and not self._may_write_weights()
            and isinstance(func, ast.Attribute)
            and func.attr in LIST_MUTATORS
            and _is_self_attribute(func.value, WEIGHT_ATTRIBUTES)
        ):
            self._add_error(
                node,
                "weight-outside-commit",
                f"'self.{func.value.attr}.{func.attr}()' outside _commit.",
            )
        # Rule 7: float() conversions in the alias table
        if (
            self._integer_only
            and isinstance(func, ast.Name)
            and func.id == "float"
        ):
            self._add_error(
                node, "float-arithmetic", "float() in integer-only module."
            )
        self.generic_visit(node)


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    """Rule 5: Check for TODO/FIXME without issue references."""
    errors: list[LintError] = []
    todo_pattern = re.compile(r"#\s*(TODO|FIXME)(?!:\s*\w+-\d+)", re.IGNORECASE)

    for i, line in enumerate(source.splitlines(), 1):
        match = todo_pattern.search(line)
        if match:
            msg = f"{match.group(1)} needs issue reference (e.g., TODO: PROJ-123)."
            errors.append(LintError(file, i, match.start(), "todo-needs-issue", msg))
    return errors


def lint_file(path: Path) -> list[LintError]:
    """Lint a single file and return any errors."""
    try:
        source = path.read_text()
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path, source)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def lint_paths(paths: list[Path]) -> list[LintError]:
    """Lint every Python file under ``paths``."""
    errors: list[LintError] = []
    for dir_path in paths:
        if dir_path.is_file():
            errors.extend(lint_file(dir_path))
            continue
        if not dir_path.exists():
            continue
        for py_file in sorted(dir_path.rglob("*.py")):
            errors.extend(lint_file(py_file))
    return sorted(errors, key=lambda e: (str(e.file), e.line, e.column))


def main(argv: list[str] | None = None) -> int:
    """Run linting on all Python files in src and tests."""
    args = sys.argv[1:] if argv is None else argv
    paths = [Path(a) for a in args] or [Path("src"), Path("tests")]
    errors = lint_paths(paths)

    if errors:
        for error in errors:
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
