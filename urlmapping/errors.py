class RoutingError(Exception):
    pass


class InvalidRegistration(RoutingError, ValueError):
    pass


class UnsupportedType(RoutingError, TypeError):
    def __init__(self, declared_type):
        self.declared_type = declared_type
        name = getattr(declared_type, "__name__", repr(declared_type))
        super().__init__(f"Unsupported type {name}")


class UnsupportedMethod(RoutingError, ValueError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"{str(method).upper()} is not supported.")


class TypeConversionError(RoutingError, ValueError):
    def __init__(self, name: str, value: str, variable_type, reason: str = ""):
        self.name = name
        self.value = value
        self.variable_type = variable_type
        message = f"Cannot convert variable '{name}' value '{value}' to {variable_type.value}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
