from urlmapping.app import App
from urlmapping.errors import (
    InvalidRegistration,
    RoutingError,
    TypeConversionError,
    UnsupportedMethod,
    UnsupportedType,
)
from urlmapping.http_handler.exception_handler import (
    ExceptionHandler,
    LoggingExceptionHandler,
)
from urlmapping.http_handler.response import HTTPResponse
from urlmapping.routing.route import NOT_FOUND, NOT_FOUND_NAME, MatchResult, Route
from urlmapping.routing.route_table import RouteTable
from urlmapping.routing.router import HTTPMethod, Router
from urlmapping.routing.variable_types import VariableType

__version__ = "0.1.0"
