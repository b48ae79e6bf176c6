from types import MappingProxyType
from typing import Callable, Dict, Iterable, Optional, Sequence

from urlmapping.routing.pattern_compiler import compile_pattern
from urlmapping.routing.variable_types import VariableType

NOT_FOUND_NAME = "404_NOT_FOUND"


class MatchResult:
    """Outcome of matching one path.

    Every successful match builds its own instance, so results are never
    shared between requests.
    """

    def __init__(
        self,
        name: str,
        variables: Dict[str, object],
        handler: Optional[Callable] = None,
        pattern: Optional[str] = None,
        outcome=None,
    ):
        self._name = name
        self._variables = MappingProxyType(dict(variables))
        self._handler = handler
        self._pattern = pattern
        self._outcome = outcome

    @property
    def name(self) -> str:
        return self._name

    @property
    def variables(self):
        return self._variables

    @property
    def handler(self) -> Optional[Callable]:
        return self._handler

    @property
    def pattern(self) -> Optional[str]:
        return self._pattern

    @property
    def outcome(self):
        return self._outcome

    @property
    def is_not_found(self) -> bool:
        return self._name == NOT_FOUND_NAME

    def is_(self, name: str) -> bool:
        return self._name == name

    def variable(self, name: str, default=None):
        return self._variables.get(name, default)

    def with_outcome(self, outcome) -> "MatchResult":
        return MatchResult(
            name=self._name,
            variables=self._variables,
            handler=self._handler,
            pattern=self._pattern,
            outcome=outcome,
        )

    def to_dict(self):
        return {
            "name": self._name,
            "not_found": self.is_not_found,
            "variables": dict(self._variables),
        }

    def __repr__(self):
        return f"MatchResult(name={self._name!r}, variables={dict(self._variables)!r})"


NOT_FOUND = MatchResult(name=NOT_FOUND_NAME, variables={})


class Route:
    def __init__(
        self,
        name: Optional[str],
        pattern: str,
        handler: Optional[Callable] = None,
        types: Iterable = (),
        default_type: VariableType = VariableType.STRING,
    ):
        compiled = compile_pattern(pattern, types, default_type)
        self._name = name or ""
        self._pattern = pattern
        self._handler = handler
        self._regex = compiled.regex
        self._variable_names = compiled.variable_names
        self._variable_types = compiled.variable_types
        self._has_trailing_slash = pattern.endswith("/")

    @property
    def name(self) -> str:
        return self._name

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def handler(self) -> Optional[Callable]:
        return self._handler

    @property
    def regex(self):
        return self._regex

    @property
    def variable_names(self):
        return self._variable_names

    @property
    def variable_types(self):
        return self._variable_types

    @property
    def has_trailing_slash(self) -> bool:
        return self._has_trailing_slash

    def fullmatch(self, path: str):
        return self._regex.fullmatch(path)

    def extract_variables(self, captured: Sequence[str]) -> Dict[str, object]:
        variables = {}
        for name, variable_type, value in zip(
            self._variable_names, self._variable_types, captured
        ):
            variables[name] = variable_type.parse(name, value)
        return variables

    def to_match_result(self, captured: Sequence[str]) -> MatchResult:
        return MatchResult(
            name=self._name,
            variables=self.extract_variables(captured),
            handler=self._handler,
            pattern=self._pattern,
        )

    def __eq__(self, other):
        if not isinstance(other, Route):
            return NotImplemented
        return self._regex.pattern == other._regex.pattern and (
            self._handler == other._handler
        )

    def __hash__(self):
        return hash((self._regex.pattern, self._handler))

    def __repr__(self):
        return f"Route(name={self._name!r}, pattern={self._pattern!r})"
