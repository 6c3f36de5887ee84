"""
Command-line interface for pdfsigstrip.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from pdfsigstrip import __version__
from pdfsigstrip.config import load_settings
from pdfsigstrip.core.utils import configure_logging
from pdfsigstrip.exceptions import PdfSigStripError
from pdfsigstrip.service import SignatureRemovalService
from pdfsigstrip.storage import create_storage
from pdfsigstrip.stripper import get_signature_info, strip_file

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show progress logging')
def cli(verbose):
    """
    pdfsigstrip - Remove digital signatures from PDF files.
    """
    configure_logging("INFO" if verbose else "WARNING")


@cli.command(name="strip")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_pdf', type=click.Path(dir_okay=False))
def strip_command(input_pdf, output_pdf):
    """
    Write an unsigned copy of INPUT_PDF to OUTPUT_PDF.

    Example:

        pdfsigstrip strip assinado.pdf sem-certificado.pdf
    """
    try:
        report = strip_file(input_pdf, output_pdf)
    except PdfSigStripError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    console.print(
        f"[bold green]✓ Removed {report.fields_removed} signature field(s) "
        f"and {report.annotations_removed} annotation(s)[/bold green]"
    )
    for name in report.removed_fields:
        console.print(f"  • {name}")
    if report.sig_flags_cleared:
        console.print("[dim]AcroForm SigFlags cleared[/dim]")
    console.print(f"[dim]Output: {output_pdf}[/dim]")


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def inspect_command(input_pdf):
    """
    Display the signature artifacts found in INPUT_PDF.
    """
    try:
        info = get_signature_info(input_pdf)
    except PdfSigStripError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title=f"Signatures: {info.path.name if info.path else input_pdf}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Pages", str(info.num_pages))
    table.add_row("Signature fields", ", ".join(info.signature_fields) or "-")
    table.add_row("Signature widgets", str(info.signature_widgets))
    table.add_row("SigFlags", "-" if info.sig_flags is None else str(info.sig_flags))
    table.add_row("Signed", "Yes" if info.is_signed else "No")

    console.print(table)


@cli.command(name="remove-signature")
@click.option('--bucket', '-b', required=True, help='Bucket holding the signed PDF')
@click.option('--path', '-p', 'key', required=True, help='Object key of the signed PDF')
def remove_signature_command(bucket, key):
    """
    Download a signed PDF, strip it and upload it under sem-certificado/.

    The storage backend is chosen by PDFSIGSTRIP_STORAGE (s3 or local).
    """
    try:
        service = SignatureRemovalService(create_storage(load_settings()))
        result = service.process(bucket, key)
    except PdfSigStripError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    console.print(f"[bold green]✓ Output:[/bold green] {result.output.key}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
