import math
from enum import Enum

from urlmapping.errors import TypeConversionError, UnsupportedType

INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class VariableType(Enum):
    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"

    @property
    def fragment(self) -> str:
        return FRAGMENTS[self]

    def parse(self, name: str, value: str):
        return PARSERS[self](name, value)

    @classmethod
    def of(cls, declared) -> "VariableType":
        """Normalise a declared type to a VariableType.

        Accepts a member, its value or an alias ("int", "bool", ...), or one of
        the python types str, int, float and bool. decimal.Decimal is rejected
        because decimal variables are parsed as floats.
        """
        if isinstance(declared, cls):
            return declared
        if isinstance(declared, str):
            variable_type = ALIASES.get(declared.lower())
        else:
            try:
                variable_type = PYTHON_TYPES.get(declared)
            except TypeError:
                variable_type = None
        if variable_type is None:
            raise UnsupportedType(declared)
        return variable_type


def _parse_string(name, value):
    return value


def _bounded_int(maximum):
    def parse(name, value):
        try:
            result = int(value, 10)
        except ValueError as e:
            raise TypeConversionError(name, value, _TYPES_BY_MAX[maximum], str(e))
        if result > maximum:
            raise TypeConversionError(
                name, value, _TYPES_BY_MAX[maximum], "numeric overflow"
            )
        return result

    return parse


def _parse_decimal(name, value):
    try:
        result = float(value)
    except ValueError as e:
        raise TypeConversionError(name, value, VariableType.DECIMAL, str(e))
    if not math.isfinite(result):
        raise TypeConversionError(name, value, VariableType.DECIMAL, "numeric overflow")
    return result


def _parse_boolean(name, value):
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise TypeConversionError(name, value, VariableType.BOOLEAN)


_TYPES_BY_MAX = {INT32_MAX: VariableType.INTEGER, INT64_MAX: VariableType.LONG}

FRAGMENTS = {
    VariableType.STRING: r"[^/]+",
    VariableType.INTEGER: r"[0-9]+",
    VariableType.LONG: r"[0-9]+",
    VariableType.DECIMAL: r"[0-9]+(?:\.[0-9]+)?",
    VariableType.BOOLEAN: r"(?i:true|false)",
}

PARSERS = {
    VariableType.STRING: _parse_string,
    VariableType.INTEGER: _bounded_int(INT32_MAX),
    VariableType.LONG: _bounded_int(INT64_MAX),
    VariableType.DECIMAL: _parse_decimal,
    VariableType.BOOLEAN: _parse_boolean,
}

ALIASES = {
    "string": VariableType.STRING,
    "str": VariableType.STRING,
    "integer": VariableType.INTEGER,
    "int": VariableType.INTEGER,
    "long": VariableType.LONG,
    "decimal": VariableType.DECIMAL,
    "float": VariableType.DECIMAL,
    "boolean": VariableType.BOOLEAN,
    "bool": VariableType.BOOLEAN,
}

PYTHON_TYPES = {
    str: VariableType.STRING,
    int: VariableType.INTEGER,
    float: VariableType.DECIMAL,
    bool: VariableType.BOOLEAN,
}
