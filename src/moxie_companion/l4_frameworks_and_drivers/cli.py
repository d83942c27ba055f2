"""CLI entry point for moxie-companion."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from moxie_companion import __version__


def _load_container(ctx: click.Context):
    """Build the DependencyContainer once per invocation from the group's options."""
    if 'container' in ctx.obj:
        return ctx.obj['container']

    from moxie_companion.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from moxie_companion.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        InfraConfig,
        build_app_config,
    )
    from moxie_companion.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: httpx/pydantic wiring not loaded on --help
        DependencyContainer,
    )

    overrides: dict = {}
    if ctx.obj.get('provider'):
        overrides.setdefault('chat', {})['provider'] = ctx.obj['provider']
    if ctx.obj.get('model'):
        overrides.setdefault('chat', {})['model'] = ctx.obj['model']

    try:
        raw = YamlConfigLoader().load_raw(ctx.obj.get('config_path'), overrides=overrides or None)
        config = build_app_config(raw)
        infra = InfraConfig.model_validate(raw)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    container = DependencyContainer(config, infra=infra)
    ctx.obj['container'] = container
    return container


@click.group(invoke_without_command=True)
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option('-p', '--provider', default=None, help='Provider id to use (ollama, groq, gemini, ...).')
@click.option('-m', '--model', default=None, help='Model to request instead of the provider default.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path, provider, model):
    """moxie -- desktop companion for the Moxie robot: chat, usage and server tools."""
    ctx.ensure_object(dict)
    ctx.obj.update(config_path=config_path, provider=provider, model=model)
    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


@cli.command()
@click.pass_context
def chat(ctx):
    """Open the chat TUI (default)."""
    container = _load_container(ctx)

    from moxie_companion.l4_frameworks_and_drivers.apps.chat import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for one-shot commands
        ChatApp,
    )

    app = ChatApp(
        chat=container.chat,
        data_dir=container.data_dir,
        usage_log=container.usage_log,
        api_key_lookup=container.api_key_for,
    )
    app.run()


@cli.command()
@click.argument('prompt')
@click.pass_context
def ask(ctx, prompt):
    """Send one PROMPT and print the reply."""
    if not prompt.strip():
        raise click.BadParameter('must not be blank.', param_hint="'PROMPT'")
    container = _load_container(ctx)
    controller = container.chat

    async def _ask() -> bool:
        sent = controller.send_message(prompt)
        await controller.gateway.drain()
        return sent

    sent = asyncio.run(_ask())

    if controller.last_error:
        click.echo(f'Error: {controller.last_error}', err=True)
        sys.exit(1)
    if not sent or not controller.turns or controller.turns[-1].role != 'assistant':
        click.echo('Error: no reply received', err=True)
        sys.exit(1)
    click.echo(controller.turns[-1].content)
    if controller.last_tokens is not None:
        tokens = controller.last_tokens
        click.echo(
            f'[{tokens.model}: {tokens.input_tokens}→{tokens.output_tokens} tokens, ~${controller.session_cost:.6f}]',
            err=True,
        )


@cli.command()
@click.pass_context
def providers(ctx):
    """List supported providers and whether each is ready to use."""
    from moxie_companion.l2_use_cases import provider_registry  # noqa: PLC0415 -- deferred: not needed for --help

    container = _load_container(ctx)
    current = container.gateway.current_provider
    for provider in provider_registry.PROVIDERS:
        marker = '*' if provider.id == current else ' '
        if not provider.requires_api_key:
            key_state = 'no key needed'
        elif container.api_key_for(provider.id):
            key_state = 'key configured'
        else:
            key_state = 'key missing'
        click.echo(f'{marker} {provider.id:<10} {provider.display_name:<10} {provider.default_model:<28} {key_state}')
        click.echo(f'    {provider.info}')


@cli.command()
@click.option('--export', 'export_path', default=None, type=click.Path(dir_okay=False), help='Write all records to CSV.')
@click.option('--prune', 'prune_days', default=None, type=click.IntRange(min=0), help='Drop records older than N days.')
@click.option('--child', 'child_id', default=None, help='Only summarize records for this child.')
@click.pass_context
def usage(ctx, export_path, prune_days, child_id):
    """Show token spend, optionally pruning or exporting the usage log."""
    usage_log = _load_container(ctx).usage_log

    if prune_days is not None:
        removed = usage_log.prune(older_than_days=prune_days)
        click.echo(f'Pruned {removed} record(s) older than {prune_days} days.')

    summary = usage_log.summary(child_id=child_id)
    click.echo(f'Today:        ${summary.today_cost:.4f}')
    click.echo(f'Last 7 days:  ${summary.week_cost:.4f}')
    click.echo(f'Last 30 days: ${summary.month_cost:.4f}')
    click.echo(f'Total tokens: {summary.total_tokens}')
    click.echo(f'Sessions:     {summary.total_sessions}')
    click.echo(f'Top model:    {summary.most_used_model or "-"}')
    click.echo(f'Top child:    {summary.most_active_child or "-"}')

    if export_path:
        path = usage_log.export_csv(Path(export_path), usage_log.records(child_id=child_id))
        click.echo(f'Exported to {path}')


@cli.command()
@click.pass_context
def games(ctx):
    """Show aggregate learning-game statistics."""
    stats = _load_container(ctx).games.stats()
    click.echo(f'Games played:     {stats.total_games_played}')
    click.echo(f'Total points:     {stats.total_points}')
    click.echo(f'Best score:       {stats.best_score}')
    click.echo(f'Average accuracy: {stats.average_accuracy:.0%}')


@cli.group()
def server():
    """Manage the local OpenMoxie server container."""


def _run_server_action(ctx: click.Context, action: str) -> None:
    from moxie_companion.l1_entities.errors import ContainerRuntimeError  # noqa: PLC0415 -- deferred: not needed for --help

    controller = _load_container(ctx).server
    try:
        status = getattr(controller, action)()
    except ContainerRuntimeError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)
    click.echo(status.message)


@server.command('status')
@click.pass_context
def server_status(ctx):
    """Report Docker and container state."""
    _run_server_action(ctx, 'refresh_status')


@server.command('start')
@click.pass_context
def server_start(ctx):
    """Start the server container, creating it if needed."""
    _run_server_action(ctx, 'start')


@server.command('stop')
@click.pass_context
def server_stop(ctx):
    """Stop the server container."""
    _run_server_action(ctx, 'stop')


@server.command('restart')
@click.pass_context
def server_restart(ctx):
    """Restart the server container."""
    _run_server_action(ctx, 'restart')


@server.command('update')
@click.pass_context
def server_update(ctx):
    """Pull the latest server image and recreate the container."""
    _run_server_action(ctx, 'update')
