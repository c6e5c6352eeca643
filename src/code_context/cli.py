import asyncio
import json
import sys
from pathlib import Path

import click
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from .context.context_manager import ContextManager
from .context.models import CursorPosition, RequestType
from .exceptions import ContextManagerError
from .utils.config import ConfigManager, load_config
from .utils.logging import configure_logging

console = Console()

REQUEST_TYPES = [request.value for request in RequestType]

# Fields of each request-specific context holding code to display
CODE_FIELDS = ('relevant_code', 'code_to_explain', 'code_to_fix', 'code_to_document')


@click.group()
@click.option('--debug', '-d', is_flag=True, help='Show debug logging')
@click.pass_context
def main(ctx, debug):
    """Code Context - Inspect the context handed to AI-assist features."""
    config = load_config()
    level = 'DEBUG' if debug or config.ui.show_debug_info else config.ui.log_level
    configure_logging(level)
    if not config.ui.use_colors:
        console.no_color = True
    ctx.obj = config


def _validate_project(path: str) -> Path:
    project_path = Path(path).resolve()
    if not project_path.exists():
        console.print(f"[red]Error: Path '{path}' does not exist[/red]")
        sys.exit(1)
    if not project_path.is_dir():
        console.print(f"[red]Error: Path '{path}' is not a directory[/red]")
        sys.exit(1)
    return project_path


def _build_tree(branch: Tree, nodes: list, max_depth: int, depth: int = 0):
    for node in nodes:
        if node.is_directory:
            child = branch.add(f"📁 [bold]{node.name}[/bold]")
            if depth + 1 < max_depth:
                _build_tree(child, node.children or [], max_depth, depth + 1)
        else:
            branch.add(f"{node.name} [dim]({node.language})[/dim]")


def _lexer_name(language: str) -> str:
    """Pygments lexer alias for a language tag, ``text`` when there is none."""
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return "text"
    return language


@main.command()
@click.argument('path', default='.')
@click.option('--depth', default=3, help='Levels of the structure tree to display')
@click.option('--json', 'as_json', is_flag=True, help='Print the project context as JSON')
@click.pass_obj
def analyze(config, path, depth, as_json):
    """Analyze a project and show its context."""
    project_path = _validate_project(path)
    manager = ContextManager(config=config)

    try:
        project = asyncio.run(manager.analyze_project(str(project_path)))
    except ContextManagerError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(project.to_dict(), indent=2))
        return

    console.print(Panel.fit(
        f"[bold blue]Code Context[/bold blue]\n"
        f"Project: [green]{project_path}[/green]\n"
        f"Language: [yellow]{project.language}[/yellow]",
        border_style="blue"
    ))

    if project.dependencies:
        table = Table(title="Dependencies")
        table.add_column("Ecosystem", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Version", style="yellow")
        for ecosystem, record in project.dependencies.items():
            if ecosystem == 'npm':
                for section, deps in record.items():
                    for name, version in deps.items():
                        table.add_row(f"npm ({section})", name, str(version))
            else:
                for name, version in record.items():
                    table.add_row(ecosystem, name, str(version))
        console.print(table)

    if project.config_files:
        console.print(f"[dim]Config files: {', '.join(project.config_files)}[/dim]")

    tree = Tree(f"[bold]{project_path.name}[/bold]")
    _build_tree(tree, project.structure, depth)
    console.print(tree)


@main.command()
@click.argument('path')
@click.argument('file')
@click.option('--request-type', '-r', type=click.Choice(REQUEST_TYPES), default=None, help='Tailor the context to a request')
@click.option('--row', type=int, default=None, help='Cursor row (0-based)')
@click.option('--column', type=int, default=0, help='Cursor column (0-based)')
@click.option('--include-history', is_flag=True, help='Include editor history')
@click.option('--json', 'as_json', is_flag=True, help='Print the composed context as JSON')
@click.pass_obj
def context(config, path, file, request_type, row, column, include_history, as_json):
    """Compose the AI context for FILE inside the project at PATH."""
    project_path = _validate_project(path)
    file_path = Path(file)
    if not file_path.is_absolute():
        file_path = project_path / file_path

    manager = ContextManager(config=config)
    cursor = CursorPosition(row=row, column=column) if row is not None else None

    async def compose():
        await manager.initialize(str(project_path))
        content = await manager.filesystem.read_file(str(file_path))
        await manager.update_file_context(str(file_path), content, cursor_position=cursor)
        return manager.get_ai_context(include_history=include_history, request_type=request_type)

    try:
        composed = asyncio.run(compose())
    except ContextManagerError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(composed.to_dict(), indent=2))
        return

    console.print(Panel.fit(
        f"[bold blue]Code Context[/bold blue]\n"
        f"File: [green]{file_path}[/green] ([yellow]{composed.file.language}[/yellow])\n"
        f"Focus: [magenta]{getattr(composed, 'focus', 'none')}[/magenta]\n"
        f"AI ready: [cyan]{composed.ai_capabilities}[/cyan]",
        border_style="blue"
    ))

    for field_name in CODE_FIELDS:
        code = getattr(composed, field_name, None)
        if code:
            console.print(f"\n[bold]{field_name.replace('_', ' ').title()}:[/bold]")
            console.print(Syntax(code, _lexer_name(composed.file.language or 'text'), line_numbers=True))

    patterns = getattr(composed, 'patterns', None)
    if patterns is not None:
        console.print(f"[dim]Imports: {len(patterns.imports)}  Declarations: {len(patterns.declarations)}[/dim]")
    for field_name in ('related_files', 'related_dependencies'):
        values = getattr(composed, field_name, None)
        if values is not None:
            console.print(f"[dim]{field_name.replace('_', ' ').title()}: {', '.join(values) or 'none'}[/dim]")
    standards = getattr(composed, 'project_standards', None)
    if standards is not None:
        console.print(f"[dim]Style guide: {standards.style_guide}  Testing: {standards.testing_framework}[/dim]")


@main.command('config')
@click.pass_obj
def show_config(config):
    """Display current configuration."""
    console.print("\n[bold blue]⚙️  Current Configuration[/bold blue]\n")

    tree = Tree("[bold]Configuration[/bold]")

    context_branch = tree.add("📂 Context")
    context_branch.add(f"Max Depth: [cyan]{config.context.max_depth}[/cyan]")
    context_branch.add(f"Excluded Dirs: [dim]{', '.join(config.context.excluded_dirs)}[/dim]")
    context_branch.add(f"Cache Size: [green]{config.context.max_cache_size}[/green] entries")
    context_branch.add(f"Cache Max Age: [green]{config.context.cache_max_age:g}[/green]s")
    context_branch.add(f"History Limit: [yellow]{config.context.history_limit}[/yellow]")
    context_branch.add(f"Completion Window: [yellow]{config.context.completion_window_lines}[/yellow] lines")
    context_branch.add(f"Fallback Tail: [yellow]{config.context.fallback_tail_lines}[/yellow] lines")
    context_branch.add(f"Max Related Files: [yellow]{config.context.max_related_files}[/yellow]")

    ai_branch = tree.add("🧠 AI Settings")
    ai_branch.add(f"Model: [yellow]{config.ai.model}[/yellow]")
    ai_branch.add(f"API Key: [red]{'Set' if config.ai.api_key else 'Not Set'}[/red]")
    ai_branch.add(f"Vertex AI: [magenta]{config.ai.use_vertexai}[/magenta]")

    ui_branch = tree.add("🎨 UI Settings")
    ui_branch.add(f"Show Debug Info: [magenta]{config.ui.show_debug_info}[/magenta]")
    ui_branch.add(f"Use Colors: [magenta]{config.ui.use_colors}[/magenta]")
    ui_branch.add(f"Log Level: [cyan]{config.ui.log_level}[/cyan]")

    console.print(tree)
    console.print("\n[dim]Environment variables take precedence over .env files[/dim]")


@main.command('init-env')
@click.option('--project', 'project_specific', is_flag=True, help='Write .env in the current directory')
def init_env(project_specific):
    """Create a sample .env file."""
    target = ConfigManager().create_sample_env(project_specific)
    console.print(f"Sample .env file created at: {target}")


if __name__ == "__main__":
    main()
