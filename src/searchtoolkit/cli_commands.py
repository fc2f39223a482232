# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

import json
import logging
import os

import click
from dotenv import load_dotenv

from searchtoolkit.common.exceptions import SearchToolkitException
from searchtoolkit.services.web_search_service import WebSearchService
from searchtoolkit.toolkit import create_injector


LOG_LEVEL_ENV = "SEARCHTOOLKIT_LOG_LEVEL"

# arguments the CLI fills from the environment when they are not given
ENV_ARGUMENTS = {
    "bing_search": {"api_key": "BING_SEARCH_API_KEY"},
    "brave_search": {"api_key": "BRAVE_SEARCH_API_KEY"},
    "google_search": {
        "api_key": "GOOGLE_SEARCH_API_KEY",
        "search_engine_id": "GOOGLE_SEARCH_ENGINE_ID",
    },
    "perplexity_search": {"api_key": "PERPLEXITY_API_KEY"},
}


def parse_arg_option(raw: str) -> tuple[str, object]:
    """Parses key=value; the value is read as JSON when it is valid JSON."""
    key, separator, value = raw.partition("=")
    if not separator or not key.strip():
        raise click.BadParameter(f"expected key=value, got '{raw}'", param_hint="--arg")

    try:
        return key.strip(), json.loads(value)
    except ValueError:
        return key.strip(), value


def build_arguments(tool_name: str, args_json: str | None, arg_options: tuple[str, ...]) -> dict:
    arguments = {}
    if args_json:
        try:
            arguments = json.loads(args_json)
        except ValueError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--args")
        if not isinstance(arguments, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--args")

    for raw in arg_options:
        key, value = parse_arg_option(raw)
        arguments[key] = value

    for name, env_var in ENV_ARGUMENTS.get(tool_name, {}).items():
        if name not in arguments and os.getenv(env_var):
            arguments[name] = os.getenv(env_var)

    return arguments


def get_web_search_service(ctx: click.Context) -> WebSearchService:
    try:
        return create_injector().get(WebSearchService)
    except SearchToolkitException as e:
        logging.error(f"Invalid configuration: {e}")
        ctx.fail(str(e))


@click.group()
@click.option("--log-level",
              default=lambda: os.getenv(LOG_LEVEL_ENV, "WARNING"),
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level (env: SEARCHTOOLKIT_LOG_LEVEL)")
def cli(log_level):
    """Web search tools behind one calling convention."""
    logging.basicConfig(level=log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@cli.command("list-tools")
@click.option("--json", "as_json", is_flag=True, help="Print the full catalog as JSON")
@click.pass_context
def list_tools(ctx, as_json):
    """Lists the available search tools."""
    tools = get_web_search_service(ctx).list_tools()

    if as_json:
        click.echo(json.dumps(tools, indent=2, ensure_ascii=False))
        return

    for tool in tools:
        required = ", ".join(tool["inputSchema"].get("required", []))
        click.echo(f"{tool['name']}  (required: {required})")
        click.echo(f"    {tool['description']}")


@cli.command("call")
@click.argument("tool_name")
@click.option("--args", "args_json", default=None, help="Arguments as a JSON object")
@click.option("--arg", "arg_options", multiple=True, help="One argument as key=value (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result envelope")
@click.pass_context
def call_tool(ctx, tool_name, args_json, arg_options, as_json):
    """Invokes TOOL_NAME once and prints its result."""
    arguments = build_arguments(tool_name, args_json, arg_options)
    result = get_web_search_service(ctx).call_tool(tool_name, arguments)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(result.text, err=bool(result.is_error))

    if result.is_error:
        ctx.exit(1)


def main():
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()
