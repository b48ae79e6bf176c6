import importlib
import logging
import logging.config
import os
import sys
from typing import Dict, List, Union

import click
import orjson
import uvicorn
import uvloop

import urlmapping
from urlmapping.app import App
from urlmapping.errors import RoutingError, UnsupportedMethod
from urlmapping.routing.router import Router

TRACE_LOG_LEVEL = 5
LOG_LEVELS: Dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE_LOG_LEVEL,
}
LOG_LEVEL_CHOICES = click.Choice(list(LOG_LEVELS.keys()))

LOGGER = logging.getLogger("urlmapping")


def logging_config(log_level: str = "info") -> dict:
    level = LOG_LEVELS[log_level]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(name)s %(message)s",
                "use_colors": None,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "urlmapping": {
                "handlers": ["default"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(log_level: Union[str, None]):
    logging.addLevelName(TRACE_LOG_LEVEL, "TRACE")
    logging.config.dictConfig(logging_config(log_level or "info"))


def load_module(module_path: str):
    components = module_path.split(":")
    if len(components) != 2:
        LOGGER.error(
            f"Invalid module path, path should contain exactly one colon. You passed: {module_path}"
        )
        return None
    module_path = components[0]
    variable_name = components[1]

    try:
        module = importlib.import_module(module_path)
    except ImportError:
        LOGGER.exception(f"Failed to import module '{module_path}'")
        return None

    if hasattr(module, variable_name):
        return getattr(module, variable_name)
    LOGGER.error(f"Module '{module_path}' does not contain attribute '{variable_name}'")
    return None


def load_router(module_path: str) -> Union[Router, None]:
    current_dir = os.getcwd()
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

    loaded = load_module(module_path)
    if isinstance(loaded, App):
        return loaded.router
    if isinstance(loaded, Router):
        return loaded
    if loaded is not None:
        LOGGER.error(f"'{module_path}' is neither a Router nor an App")
    return None


async def serve_app(server: uvicorn.Server):
    await server.serve()


def print_version(
    ctx: click.Context, param: click.Parameter, value: bool, click=click
) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"urlmapping {urlmapping.__version__}")
    ctx.exit()


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
    help="Display the urlmapping version and exit.",
)
@click.option(
    "--log-level",
    type=LOG_LEVEL_CHOICES,
    default=None,
    help="Log level. [default: info]",
    show_default=True,
)
@click.pass_context
def main(ctx: click.Context, log_level: str):
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@main.command()
@click.option(
    "--app",
    type=str,
    required=True,
    help="Name of the module containing the ASGI application. Format: module_path.module_name:app_name",
)
@click.option("--host", type=str, help="Bind socket to this host.", default="127.0.0.1")
@click.option("--port", type=int, help="Bind socket to this port.", default=8000)
@click.option("--uds", type=str, default=None, help="Bind to a UNIX domain socket.")
@click.option(
    "--fd", type=int, default=None, help="Bind to socket from this file descriptor."
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload.")
@click.option(
    "--reload-dir",
    "reload_dirs",
    multiple=True,
    default=None,
    help="Set reload directories explicitly, instead of using the current working"
    " directory.",
    type=click.Path(exists=True),
)
@click.option(
    "--env-file",
    type=click.Path(exists=True),
    default=None,
    help="Environment configuration file.",
    show_default=True,
)
@click.option(
    "--proxy-headers/--no-proxy-headers",
    is_flag=True,
    default=True,
    help="Enable/Disable X-Forwarded-Proto, X-Forwarded-For, X-Forwarded-Port to "
    "populate remote address info.",
)
@click.option(
    "--forwarded-allow-ips",
    type=str,
    default=None,
    help="Comma separated list of IPs to trust with proxy headers. Defaults to"
    " the $FORWARDED_ALLOW_IPS environment variable if available, or '127.0.0.1'.",
)
@click.option(
    "--root-path",
    type=str,
    default="",
    help="Set the ASGI 'root_path' for applications submounted below a given URL path.",
)
@click.option(
    "--limit-concurrency",
    type=int,
    default=None,
    help="Maximum number of concurrent connections or tasks to allow, before issuing"
    " HTTP 503 responses.",
)
@click.option(
    "--timeout-keep-alive",
    type=int,
    default=5,
    help="Close Keep-Alive connections if no new data is received within this timeout.",
    show_default=True,
)
@click.option(
    "--header",
    "headers",
    multiple=True,
    help="Specify custom default HTTP response headers as a Name:Value pair",
)
@click.pass_context
def serve(
    ctx: click.Context,
    app: str,
    host: str,
    port: int,
    uds: str,
    fd: int,
    reload: bool,
    reload_dirs: List[str],
    env_file: str,
    proxy_headers: bool,
    forwarded_allow_ips: str,
    root_path: str,
    limit_concurrency: int,
    timeout_keep_alive: int,
    headers: List[str],
):
    current_dir = os.getcwd()
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

    loaded_app = load_module(app)
    if not loaded_app:
        sys.exit(1)

    log_level = ctx.obj.get("log_level")
    config = uvicorn.Config(
        app=app if reload else loaded_app,
        loop="uvloop",
        host=host,
        port=port,
        uds=uds,
        fd=fd,
        reload=reload,
        reload_dirs=reload_dirs or None,
        env_file=env_file,
        log_level=log_level,
        log_config=logging_config(log_level or "info"),
        proxy_headers=proxy_headers,
        forwarded_allow_ips=forwarded_allow_ips,
        root_path=root_path,
        limit_concurrency=limit_concurrency,
        timeout_keep_alive=timeout_keep_alive,
        headers=[header.split(":", 1) for header in headers],
    )
    server = uvicorn.Server(config)

    uvloop.install()
    uvloop.run(serve_app(server))


@main.command()
@click.option(
    "--router",
    "router_path",
    type=str,
    required=True,
    help="Router or App to inspect. Format: module_path.module_name:attribute",
)
def routes(router_path: str):
    router = load_router(router_path)
    if router is None:
        sys.exit(1)

    for method, route in router.routes():
        types = ", ".join(
            f"{name}: {variable_type.value}"
            for name, variable_type in zip(route.variable_names, route.variable_types)
        )
        click.echo(f"{method.value:<8} {route.pattern:<40} {route.name or '-'} {types}")


@main.command()
@click.option(
    "--router",
    "router_path",
    type=str,
    required=True,
    help="Router or App to match against. Format: module_path.module_name:attribute",
)
@click.argument("method")
@click.argument("path")
def match(router_path: str, method: str, path: str):
    router = load_router(router_path)
    if router is None:
        sys.exit(1)

    try:
        result = router.match(method, path)
    except UnsupportedMethod as e:
        click.echo(str(e), err=True)
        sys.exit(2)
    except RoutingError as e:
        click.echo(str(e), err=True)
        sys.exit(3)

    click.echo(orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2).decode())
    if result.is_not_found:
        sys.exit(1)
