import logging
from typing import Callable, Optional

from urlmapping.errors import InvalidRegistration
from urlmapping.routing.route import NOT_FOUND, MatchResult, Route
from urlmapping.routing.variable_types import VariableType

LOGGER = logging.getLogger(__name__)


class RouteTable:
    """Ordered routes for a single HTTP method.

    Routes are tried in registration order and the first match wins.
    register() is not thread-safe and belongs to application startup;
    match() and dispatch() only read the current snapshot of routes and can be
    called concurrently once registration is done.
    """

    def __init__(
        self,
        use_trailing_slash_match: bool = True,
        default_type: VariableType = VariableType.STRING,
    ):
        self.use_trailing_slash_match = use_trailing_slash_match
        self.default_type = VariableType.of(default_type)
        self._routes = ()

    @property
    def routes(self):
        return self._routes

    def __len__(self):
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)

    def register(
        self,
        name: Optional[str],
        pattern: str,
        handler: Optional[Callable] = None,
        *types,
    ) -> "RouteTable":
        if handler is None and not name:
            raise InvalidRegistration(
                "A name is required when registering without a handler, "
                "otherwise a match cannot be told apart from another"
            )
        if isinstance(pattern, str) and not pattern.startswith("/"):
            pattern = "/" + pattern

        route = Route(name, pattern, handler, types, self.default_type)
        if route in self._routes:
            LOGGER.warning(f"Ignoring duplicate registration of {route!r}")
            return self
        self._routes = self._routes + (route,)
        return self

    def _arrange_path(self, path: str, pattern_has_trailing_slash: bool) -> str:
        if not self.use_trailing_slash_match:
            return path
        path_has_trailing_slash = path.endswith("/")
        if path_has_trailing_slash and not pattern_has_trailing_slash:
            return path[:-1]
        if not path_has_trailing_slash and pattern_has_trailing_slash:
            return path + "/"
        return path

    def match(self, path: Optional[str]) -> MatchResult:
        if path is None:
            path = ""
        for route in self._routes:
            match = route.fullmatch(
                self._arrange_path(path, route.has_trailing_slash)
            )
            if match:
                return route.to_match_result(match.groups())

        LOGGER.debug(f"Path '{path}' didn't match any registered pattern")
        return NOT_FOUND

    def dispatch(self, path: Optional[str], *handler_args) -> MatchResult:
        result = self.match(path)
        if result.handler is None:
            return result
        LOGGER.debug(f"Handling request for '{result.name}', {result.pattern}")
        return result.with_outcome(result.handler(*handler_args, result))
