"""
Aplicación CLI de tf-ebs-attach.

Solo compone comandos; la lógica vive en ebsattach.core.

Terraform permite importar instancias AWS y volúmenes EBS, pero no el recurso
sintético "aws_volume_attachment", que no tiene contraparte identificable en AWS.
Esta herramienta lo añade al terraform.tfstate calculando el mismo id que
generaría Terraform.
"""

from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ebsattach import __version__
from ebsattach.core.attachment import injector
from ebsattach.core.diff import DeltaKind, count_changes, diff_documents, format_plain, render_diff, to_rich_text
from ebsattach.core.errors import AttachError, ConfigError
from ebsattach.core.runtime import (
    STDIO,
    ColorMode,
    Settings,
    dump_state,
    load_settings,
    read_state,
    write_state,
)
from ebsattach.core.state import Location, StateDocument, to_json

app = typer.Typer(
    name="tf-ebs-attach",
    help="Importa un aws_volume_attachment (EBS) en el estado de Terraform",
    add_completion=False,
    no_args_is_help=True,
)

# Mensajes y errores a stderr; stdout queda solo para JSON o diff
console = Console(stderr=True)


def _fail(error: AttachError) -> NoReturn:
    console.print(f"[red]✘ {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


def _settings() -> Settings:
    try:
        return load_settings()
    except AttachError as e:
        _fail(e)


def _report(document: StateDocument, location: Location, att_name: str) -> None:
    record = document.modules[location.module_index].resources[injector.attachment_key(att_name)]
    console.print(
        f"[dim]Módulo {location.module_index}: instancia {escape(location.instance_id)}, "
        f"volumen {escape(location.volume_id)} → {escape(record.primary.id)}[/dim]"
    )


def _diff_console(mode: ColorMode) -> Console:
    if mode is ColorMode.YES:
        return Console(force_terminal=True, highlight=False)
    return Console(highlight=False)


@app.command()
def show(
    inst_id: str = typer.Argument(..., metavar="INST-ID", help="Id de la instancia EC2 (i-abcd123)"),
    vol_name: str = typer.Argument(..., metavar="VOL-NAME", help='Nombre del recurso "aws_ebs_volume"'),
    vol_id: str = typer.Argument(..., metavar="VOL-ID", help="Id del volumen EBS (vol-abcd123)"),
    att_name: str = typer.Argument(..., metavar="ATT-NAME", help='Nombre del recurso "aws_volume_attachment"'),
    dev: str = typer.Argument(..., metavar="DEV", help='Valor de "device_name" del aws_volume_attachment'),
):
    """
    Muestra el recurso que se insertaría para la instancia y el volumen dados

    No usa archivo de estado.

    Ejemplo: tf-ebs-attach show i-abc123 mysrv_dsk0 vol-123abc mysrv_dsk0_att /dev/sdg
    """
    # show no depende del estado: con configuración inválida usa la indentación por defecto
    try:
        indent = load_settings().indent
    except ConfigError as e:
        console.print(f"[yellow]⚠️ {escape(str(e))}; se usa la configuración por defecto[/yellow]")
        indent = Settings().indent
    result = injector.show(inst_id, vol_name, vol_id, att_name, dev)
    typer.echo(to_json(result, indent))


@app.command("import")
def import_cmd(
    inst_name: str = typer.Argument(..., metavar="INST-NAME", help='Nombre del recurso "aws_instance"'),
    vol_name: str = typer.Argument(..., metavar="VOL-NAME", help='Nombre del recurso "aws_ebs_volume"'),
    att_name: str = typer.Argument(..., metavar="ATT-NAME", help='Nombre del recurso "aws_volume_attachment"'),
    dev: str = typer.Argument(..., metavar="DEV", help='Valor de "device_name" del aws_volume_attachment'),
    input_file: Optional[str] = typer.Option(
        None, "--input", "-i", help="Estado de entrada ('-' = stdin) [por defecto: terraform.tfstate]"
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Estado de salida ('-' = stdout) [por defecto: terraform.tfstate]"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Muestra el módulo y el id calculado"),
):
    """
    Lee el estado, localiza INST-NAME y VOL-NAME y añade el adjunto ATT-NAME

    Si no hay un módulo que contenga ambos recursos no se escribe nada.

    Ejemplo: tf-ebs-attach import mysrv mysrv_dsk0 mysrv_dsk0_attch /dev/sdg
    """
    settings = _settings()
    source = input_file or settings.state_file
    destination = output_file or settings.state_file

    try:
        document, _ = read_state(source)
        location = injector.inject(document, inst_name, vol_name, att_name, dev)
        if verbose:
            _report(document, location, att_name)
        write_state(destination, document, settings.indent)
    except AttachError as e:
        _fail(e)

    if destination != STDIO:
        console.print(
            f"[green]✔ {escape(injector.attachment_key(att_name))} añadido a {escape(destination)}[/green]"
        )


@app.command()
def diff(
    inst_name: str = typer.Argument(..., metavar="INST-NAME", help='Nombre del recurso "aws_instance"'),
    vol_name: str = typer.Argument(..., metavar="VOL-NAME", help='Nombre del recurso "aws_ebs_volume"'),
    att_name: str = typer.Argument(..., metavar="ATT-NAME", help='Nombre del recurso "aws_volume_attachment"'),
    dev: str = typer.Argument(..., metavar="DEV", help='Valor de "device_name" del aws_volume_attachment'),
    input_file: Optional[str] = typer.Option(
        None, "--input", "-i", help="Estado de entrada ('-' = stdin) [por defecto: terraform.tfstate]"
    ),
    color: Optional[ColorMode] = typer.Option(
        None, "--color", "-c", case_sensitive=False, help="Salida con colores [por defecto: auto]"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Muestra el módulo y un resumen de cambios"),
):
    """
    Muestra el diff que produciría import sobre el estado de entrada

    Nunca escribe el estado.

    Ejemplo: tf-ebs-attach diff -i foo.state mysrv mysrv_dsk0 mysrv_dsk0_attch /dev/sdg
    """
    settings = _settings()
    source = input_file or settings.state_file
    mode = color or settings.color

    try:
        document, original = read_state(source)
        location = injector.inject(document, inst_name, vol_name, att_name, dev)
        left, delta = diff_documents(original, dump_state(document, settings.indent))
    except AttachError as e:
        _fail(e)

    lines = render_diff(left, delta)
    if mode is ColorMode.NO:
        typer.echo(format_plain(lines), nl=False)
    else:
        _diff_console(mode).print(to_rich_text(lines), soft_wrap=True, end="")

    if verbose:
        _report(document, location, att_name)
        counts = count_changes(delta)
        console.print(
            f"[dim]{counts[DeltaKind.ADDED]} añadidos, {counts[DeltaKind.REMOVED]} eliminados, "
            f"{counts[DeltaKind.MODIFIED]} modificados[/dim]"
        )


@app.command()
def version():
    """Muestra la versión de tf-ebs-attach"""
    Console().print(Panel.fit(
        "[bold cyan]tf-ebs-attach[/bold cyan]\n"
        "[dim]Importa aws_volume_attachment en terraform.tfstate[/dim]\n\n"
        f"[bold]Versión:[/bold] {__version__}",
        border_style="cyan"
    ))


def main():
    app()
