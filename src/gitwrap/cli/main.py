"""Main CLI entry point."""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

import click
from rich.prompt import Prompt
from rich.table import Table

from .. import __version__
from ..auth.oauth import TokenAcquirer
from ..core import conflicts, resolve, commit as commit_files, init_repository, open_repository
from ..core import parse_paths, push as push_branch, stage, status as read_status
from ..git.integration import GitIntegration
from ..models.types import ResolutionChoice
from ..utils.config import Config, DEFAULT_CONFIG_FILE
from ..utils.errors import ConfigurationError, GitWrapError
from ..utils.logger import Logger, console


class LenientCommand(click.Command):
    """Command that ignores surplus arguments instead of failing with a usage error."""

    def __init__(self, *args, **kwargs):
        settings = dict(kwargs.get('context_settings') or {})
        settings.setdefault('ignore_unknown_options', True)
        settings.setdefault('allow_extra_args', True)
        kwargs['context_settings'] = settings
        super().__init__(*args, **kwargs)

    def invoke(self, ctx):
        if ctx.args:
            Logger.warning(f"Ignoring extra arguments: {' '.join(ctx.args)}")
        return super().invoke(ctx)


class DispatchGroup(click.Group):
    """Command group that reports unknown commands instead of exiting on them."""

    command_class = LenientCommand

    def list_commands(self, ctx):
        return list(self.commands)

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is None:
            return _unknown_command(cmd_name, self.list_commands(ctx))
        return command


def _unknown_command(name: str, available) -> click.Command:
    def report(args):
        Logger.error(f"Unknown command: {name}")
        Logger.error(f"Available commands: {', '.join(available)}")
        _exit_on_failure(click.get_current_context())

    return click.Command(
        name,
        callback=report,
        params=[click.Argument(['args'], nargs=-1)],
        context_settings={'ignore_unknown_options': True},
        hidden=True,
    )


def _exit_on_failure(ctx: click.Context):
    if ctx.obj['config'].strict_exit:
        ctx.exit(1)


def _fail(ctx: click.Context, error: Union[GitWrapError, str]):
    """Report a failed command; the process still exits 0 unless strict_exit is set."""
    Logger.error(str(error))
    _exit_on_failure(ctx)


def _repository(ctx: click.Context) -> Optional[GitIntegration]:
    result = open_repository(".", ctx.obj['config'].git)
    if not result.ok:
        _fail(ctx, result.error)
        return None
    return result.value


@click.group(cls=DispatchGroup, invoke_without_command=True)
@click.option('--config', '-c', 'config_path', help='Path to config file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug mode')
@click.version_option(version=__version__, prog_name="gitwrap")
@click.pass_context
def cli(ctx, config_path, verbose, debug):
    """gitwrap - stage, commit, push and resolve conflicts from the command line.

    Every command except init works on the repository in the current directory.
    """
    ctx.ensure_object(dict)

    # Load configuration
    path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE)
    config_error = None
    try:
        config_obj = Config.load(path)
    except ConfigurationError as e:
        config_obj = Config()
        config_error = e

    # Override with command line options
    config_obj.verbose = verbose or config_obj.verbose
    config_obj.debug = debug or config_obj.debug

    # Setup logging
    log_file = Path(config_obj.log_file) if config_obj.log_file else None
    Logger.setup_logger(debug=config_obj.debug or config_obj.verbose, log_file=log_file)
    if config_error:
        Logger.error(f"{config_error}; using defaults")
    elif config_path and not path.exists():
        Logger.warning(f"Config file not found: {path}; using defaults")

    ctx.obj['config'] = config_obj

    if ctx.invoked_subcommand is None:
        Logger.error("No command provided. Usage: gitwrap <command> [options]")
        Logger.error(f"Available commands: {', '.join(ctx.command.list_commands(ctx))}")
        _exit_on_failure(ctx)


@cli.command()
@click.argument('path', required=False)
@click.pass_context
def init(ctx, path):
    """Create a repository at PATH."""
    if not path:
        _fail(ctx, "Repository path required for init command.")
        return

    result = init_repository(path, ctx.obj['config'].git)
    if not result.ok:
        _fail(ctx, result.error)
        return
    Logger.success(f"Initialized empty Git repository at {path}")


@cli.command()
@click.argument('files', required=False)
@click.pass_context
def add(ctx, files):
    """Stage FILES (comma-separated)."""
    paths = parse_paths(files)
    if not paths:
        _fail(ctx, "File paths required for add command.")
        return

    repo = _repository(ctx)
    if repo is None:
        return

    result = stage(repo, paths)
    if not result.ok:
        _fail(ctx, result.error)
        return
    Logger.success("Files added to the index successfully!")


@cli.command()
@click.argument('files', required=False)
@click.argument('message', required=False)
@click.pass_context
def commit(ctx, files, message):
    """Stage FILES (comma-separated) and commit them with MESSAGE."""
    paths = parse_paths(files)
    if not paths or message is None:
        _fail(ctx, "File paths and commit message required for commit command.")
        return

    repo = _repository(ctx)
    if repo is None:
        return

    result = commit_files(repo, paths, message)
    if not result.ok:
        _fail(ctx, result.error)
        return
    Logger.success("Changes committed successfully!")
    Logger.info(f"Commit: {result.value[:8]}")


@cli.command()
@click.argument('remote_url', required=False)
@click.argument('token', required=False)
@click.pass_context
def push(ctx, remote_url, token):
    """Push the current branch to REMOTE_URL using TOKEN."""
    if not remote_url or not token:
        _fail(ctx, "Remote repo URL and token required for push command.")
        return

    repo = _repository(ctx)
    if repo is None:
        return

    result = push_branch(repo, remote_url, token)
    if not result.ok:
        _fail(ctx, result.error)
        return
    Logger.success("Push successful")


@cli.command()
@click.pass_context
def status(ctx):
    """Show untracked, modified and conflicting files."""
    repo = _repository(ctx)
    if repo is None:
        return

    result = read_status(repo)
    if not result.ok:
        _fail(ctx, result.error)
        return

    snapshot = result.value
    sections = [
        ("Untracked files:", snapshot.untracked),
        ("Tracked files:", snapshot.modified),
        ("Conflicting files:", snapshot.conflicting),
    ]
    for title, paths in sections:
        if paths:
            Logger.print(title, style="bold")
            for path in sorted(paths):
                Logger.print(f"  {path}")


@cli.command('resolve')
@click.pass_context
def resolve_command(ctx):
    """Resolve merge conflicts interactively."""
    repo = _repository(ctx)
    if repo is None:
        return

    result = conflicts(repo)
    if not result.ok:
        _fail(ctx, result.error)
        return

    paths = result.value
    if not paths:
        Logger.info("No conflicts detected.")
        return

    Logger.info("Conflicts detected.")
    Logger.info("Conflicted files:")
    for path in sorted(paths):
        Logger.print(f"  {path}")

    Logger.info("Choose conflict resolution option:")
    for option in ResolutionChoice:
        Logger.print(f"{option.value}. {option.label}")

    try:
        raw = Prompt.ask("Choice", console=console)
    except EOFError:
        raw = None

    choice = ResolutionChoice.from_input(raw)
    if choice is None:
        _fail(ctx, "Invalid choice. No action taken.")
        return

    outcome = resolve(repo, paths, choice)
    if not outcome.ok:
        _fail(ctx, outcome.error)
        return
    Logger.success("Conflicts resolved successfully.")


@cli.command()
@click.argument('client_id', required=False)
@click.argument('client_secret', required=False)
@click.pass_context
def auth(ctx, client_id, client_secret):
    """Obtain a GitHub OAuth2 token through the browser."""
    oauth = ctx.obj['config'].oauth
    oauth = replace(
        oauth,
        client_id=client_id or oauth.client_id,
        client_secret=client_secret or oauth.client_secret,
    )

    try:
        token = TokenAcquirer(oauth).acquire()
    except GitWrapError as e:
        _fail(ctx, e)
        return
    Logger.print(f"Token received: {token.access_token}")


@cli.command('config')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    config = ctx.obj['config']

    table = Table(show_header=True, header_style="bold")
    table.add_column("Section")
    table.add_column("Key")
    table.add_column("Value")

    # OAuth config
    table.add_row("oauth", "client_id", config.oauth.client_id or "unset")
    table.add_row("oauth", "client_secret", "********" if config.oauth.client_secret else "unset")
    table.add_row("oauth", "scope", config.oauth.scope)
    table.add_row("oauth", "redirect_uri", config.oauth.redirect_uri)
    table.add_row("oauth", "timeout", f"{config.oauth.timeout:g}s")

    # Git config
    table.add_row("git", "executable", config.git.executable)
    table.add_row("git", "author_name", config.git.author_name or "default")
    table.add_row("git", "author_email", config.git.author_email or "default")

    table.add_row("", "strict_exit", str(config.strict_exit))
    table.add_row("", "log_file", config.log_file or "none")

    console.print(table)


def main():
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        Logger.error(f"Unexpected error: {e}")
        if Logger._debug_mode:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
