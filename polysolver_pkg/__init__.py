"""Polysolver package: expression evaluation and polynomial equation solving."""

__all__ = [
    "config",
    "types",
    "rational",
    "complex_value",
    "parser",
    "equation_parser",
    "closed_form",
    "root_finder",
    "symbolic",
    "formatting",
    "linear_system",
    "solver",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "solve_equation",
    "solve_system",
    "process_input",
]
