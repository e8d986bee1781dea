from typing import List

from monkey.types import Error


class MonkeyError(Exception):
    """Exception used to surface a Monkey runtime error outside the evaluator."""
    def __init__(self, err: Error):
        super().__init__(f"MonkeyError: {err.message}")
        self.err = err


class ParseError(Exception):
    """Raised by the convenience entry points when parsing reported diagnostics."""
    def __init__(self, errors: List[str]):
        super().__init__('parser errors:\n' + '\n'.join(f"\t{msg}" for msg in errors))
        self.errors = errors
