import asyncio
import json
import logging
import typing as t

import click

from .core.client import MCPClient
from .errors import MCPError, SchemaError
from .schema.initialization import InitializeResult
from .schema.tools import CallToolResult
from .utils.config import ClientConfig, TransportConfig

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_client(url: str, config: ClientConfig) -> MCPClient:
    return MCPClient(url, config=config)


def _parse_headers(raw_headers: t.Iterable[str], token: t.Optional[str]) -> t.Dict[str, str]:
    headers: t.Dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {raw!r}", param_hint="--header")
        headers[name.strip()] = value.strip()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _parse_arguments(pairs: t.Iterable[str], json_args: t.Optional[str]) -> t.Dict[str, t.Any]:
    arguments: t.Dict[str, t.Any] = {}
    if json_args:
        try:
            loaded = json.loads(json_args)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(str(exc), param_hint="--json-args") from exc
        if not isinstance(loaded, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--json-args")
        arguments.update(loaded)
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--arg")
        try:
            arguments[key] = json.loads(value)
        except json.JSONDecodeError:
            arguments[key] = value
    return arguments


def _describe_server(result: t.Any) -> str:
    try:
        info = InitializeResult.from_dict(result).server_info
    except SchemaError:
        return json.dumps(result)
    return f"{info.name} {info.version}"


def _print_progress(params: t.Dict[str, t.Any]) -> None:
    progress = params.get("progress")
    total = params.get("total")
    line = f"[progress] {progress}" if total is None else f"[progress] {progress}/{total}"
    if params.get("message"):
        line += f" {params['message']}"
    click.echo(line)


async def _list_tools(url: str, config: ClientConfig) -> None:
    click.echo(f"Connecting to MCP server: {url}")
    async with create_client(url, config) as client:
        await client.connect()
        click.echo("Initializing connection...")
        result = await client.initialize()
        click.echo(f"Connected! Server info: {_describe_server(result)}")

        click.echo("Listing available tools...")
        tools = await client.list_tools()
        if not tools:
            click.echo("\nNo tools found")
            return
        click.echo(f"\nFound {len(tools)} tools:")
        for index, tool in enumerate(tools, start=1):
            click.echo(f"\n{index}. {tool.name}")
            click.echo(f"   Description: {tool.description or '-'}")
            if tool.input_schema.properties is not None:
                click.echo(f"   Parameters: {', '.join(tool.input_schema.parameter_names) or 'none'}")


async def _call_tool(url: str, config: ClientConfig, name: str, arguments: t.Dict[str, t.Any]) -> bool:
    async with create_client(url, config) as client:
        await client.connect()
        await client.initialize()
        result = await client.call_tool(name, arguments, on_progress=_print_progress)

    if result is None:
        click.echo("No result received")
        return True
    try:
        call_result = CallToolResult.from_dict(result)
    except SchemaError:
        click.echo(json.dumps(result, indent=2))
        return True
    for block in call_result.content:
        if block.type == "text":
            click.echo(block.text)
        else:
            click.echo(json.dumps(block.to_dict()))
    if call_result.structured_content is not None:
        click.echo(json.dumps(call_result.structured_content, indent=2))
    return not call_result.is_error


@click.group()
@click.option("--header", "-H", "headers", multiple=True, help="Extra request header as 'Name: value'")
@click.option("--token", envvar="MCP_BEARER_TOKEN", default=None, help="Bearer token for the Authorization header")
@click.option("--timeout", default=30.0, show_default=True, type=float, help="HTTP timeout in seconds")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def main(ctx: click.Context, headers: t.Tuple[str, ...], token: t.Optional[str], timeout: float, log_level: str) -> None:
    """Talk to an MCP server over HTTP."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = ClientConfig(
        transport=TransportConfig(timeout_seconds=timeout, headers=_parse_headers(headers, token)),
    )


@main.command("tools")
@click.argument("url")
@click.pass_obj
def tools_command(config: ClientConfig, url: str) -> None:
    """Initialize against URL and list the server's tools."""
    try:
        asyncio.run(_list_tools(url, config))
    except MCPError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command("call")
@click.argument("url")
@click.argument("name")
@click.option("--arg", "-a", "pairs", multiple=True, help="Tool argument as key=value (value parsed as JSON if possible)")
@click.option("--json-args", default=None, help="Tool arguments as a JSON object")
@click.pass_obj
def call_command(config: ClientConfig, url: str, name: str, pairs: t.Tuple[str, ...], json_args: t.Optional[str]) -> None:
    """Initialize against URL and call tool NAME, printing progress and content."""
    arguments = _parse_arguments(pairs, json_args)
    try:
        ok = asyncio.run(_call_tool(url, config, name, arguments))
    except MCPError as exc:
        raise click.ClickException(str(exc)) from exc
    if not ok:
        raise click.ClickException(f"tool {name!r} reported an error")


if __name__ == "__main__":
    main()
