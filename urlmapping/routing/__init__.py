from urlmapping.routing.route import NOT_FOUND, NOT_FOUND_NAME, MatchResult, Route
from urlmapping.routing.route_table import RouteTable
from urlmapping.routing.router import HTTPMethod, Router
from urlmapping.routing.variable_types import VariableType
