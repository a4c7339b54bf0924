#!/usr/bin/env python3
"""
Resume Rendering CLI

Lists catalog templates, dumps composed layout trees and exports resumes.

Commands:
    templates - List the template catalog
    tree      - Print the composed layout tree as JSON
    export    - Render a resume to LaTeX source or PDF

Examples:\n

    render_resume.py templates                                     # List templates

    render_resume.py tree data/resumes/ada.yaml --template classic  # Dump layout tree

    render_resume.py export data/resumes/ada.yaml -o ada.pdf -b pdf # Compile to PDF
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vita.contexts.rendering import RenderBackendError, get_backend
from vita.contexts.rendering.logger import setup_rendering_logger
from vita.contexts.templating import get_template, list_templates, load_resume
from vita.contexts.templating.logger import setup_templating_logger
from vita.contexts.templating.template_registry import get_template_config

load_dotenv()
LOGS_PATH = Path(os.getenv("VITA_LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Compose and export resumes with the VITA template catalog",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("templates")
def templates_command():
    """List catalog templates with their layout types."""
    typer.secho("\nTemplates:", fg=typer.colors.BLUE, bold=True)
    for template_id in list_templates():
        config = get_template_config(template_id)
        typer.echo(f"  {template_id:<15} {config.name:<15} {config.layout_type.value}")
    typer.echo("")


@app.command("tree")
def tree_command(
    resume_path: Annotated[Path, typer.Argument(help="Resume YAML/JSON file")],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (default: resume meta, then ats)"),
    ] = None,
    indent: Annotated[int, typer.Option("--indent", help="JSON indentation")] = 2,
):
    """
    Print the composed layout tree as JSON.

    Examples:\n

        $ render_resume.py tree data/resumes/ada.yaml -t multicolumn
    """
    resume = load_resume(resume_path)
    tree = get_template(template_id or resume.meta.template_id).build_tree(resume)
    typer.echo(json.dumps(tree.to_dict(), indent=indent, ensure_ascii=False))


@app.command("export")
def export_command(
    resume_path: Annotated[Path, typer.Argument(help="Resume YAML/JSON file")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (default: <resume>.tex or .pdf)"),
    ] = None,
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (default: resume meta, then ats)"),
    ] = None,
    backend_name: Annotated[
        Optional[str],
        typer.Option("--backend", "-b", help="Render backend: latex or pdf"),
    ] = None,
    log: Annotated[
        bool,
        typer.Option("--log", help="Write a session log under VITA_LOGS_PATH"),
    ] = False,
):
    """
    Render a resume to LaTeX source or PDF.

    Examples:\n

        $ render_resume.py export data/resumes/ada.yaml                 # LaTeX source

        $ render_resume.py export data/resumes/ada.yaml -b pdf -t glow   # PDF
    """
    try:
        backend = get_backend(backend_name)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if log:
        log_dir = LOGS_PATH / f"export_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        setup_templating_logger(log_dir, template_id or "")
        setup_rendering_logger(log_dir)

    resume = load_resume(resume_path)
    template = get_template(template_id or resume.meta.template_id)

    suffix = ".pdf" if backend.name == "pdf" else ".tex"
    output = output or resume_path.with_suffix(suffix)

    typer.secho(f"\nExporting: {resume_path}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template.config.id}")
    typer.echo(f"Backend: {backend.name}")

    try:
        data = template.export(resume, backend)
    except RenderBackendError as e:
        typer.secho(f"✗ Export failed: {e}", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    output.write_bytes(data)
    typer.secho(f"✓ Wrote {len(data)} bytes to {output}\n", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
