import logging
import re
from typing import Iterable, Pattern, Tuple

from urlmapping.errors import InvalidRegistration
from urlmapping.routing.variable_types import VariableType

LOGGER = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{([A-Za-z_$][A-Za-z0-9_$]*)\}")


class CompiledPattern:
    def __init__(
        self,
        regex: Pattern,
        variable_names: Tuple[str, ...],
        variable_types: Tuple[VariableType, ...],
    ):
        self.regex = regex
        self.variable_names = variable_names
        self.variable_types = variable_types

    def fullmatch(self, path: str):
        return self.regex.fullmatch(path)


def compile_pattern(
    pattern: str,
    types: Iterable = (),
    default_type: VariableType = VariableType.STRING,
) -> CompiledPattern:
    """Turn a url pattern with {name} placeholders into an anchored regex.

    The i-th placeholder is bound to types[i], or to default_type when fewer
    types than placeholders are given. Literal text is escaped.
    """
    if not isinstance(pattern, str):
        raise InvalidRegistration(f"Url pattern must be a string, got {pattern!r}")

    declared_types = [VariableType.of(declared) for declared in types]
    default_type = VariableType.of(default_type)

    names = []
    bound_types = []
    parts = []
    position = 0
    for placeholder in PLACEHOLDER.finditer(pattern):
        name = placeholder.group(1)
        if name in names:
            raise InvalidRegistration(
                f"Variable '{name}' is used more than once in '{pattern}'"
            )
        index = len(names)
        variable_type = (
            declared_types[index] if index < len(declared_types) else default_type
        )
        names.append(name)
        bound_types.append(variable_type)
        parts.append(re.escape(pattern[position : placeholder.start()]))
        parts.append(f"({variable_type.fragment})")
        position = placeholder.end()
    parts.append(re.escape(pattern[position:]))

    if len(declared_types) > len(names):
        LOGGER.warning(
            f"Pattern '{pattern}' declares {len(declared_types)} types for "
            f"{len(names)} variables, extra types are ignored"
        )

    return CompiledPattern(
        regex=re.compile("".join(parts)),
        variable_names=tuple(names),
        variable_types=tuple(bound_types),
    )
