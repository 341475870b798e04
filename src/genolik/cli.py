"""
CLI Entry Point: Exposes the genolik codec and index math via command line.

GL fields start with a minus sign, so pass them after ``--``::

    $ genolik convert --from gl --to pl -- -10.50,-1.25,-5.11
    93,0,39
"""

import logging
import re

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codec import LikelihoodCodec
from .config import CodecConfig
from .core.counts import num_likelihoods
from .core.ploidy import PloidyIndex
from .exceptions import GenolikError
from .likelihoods import GenotypeLikelihoods
from .models.core import FieldFormat
from .quality import QualityCalculator, phred_scaled
from .utils.logging import setup_logging, timed

app = typer.Typer(help="genolik: genotype likelihood codec and index math")

logger = logging.getLogger(__name__)

_error_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging"),
    log_file: str | None = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """
    genolik: genotype likelihood codec and index math
    """
    setup_logging(verbose=verbose, log_file=log_file)


def _fail(error: Exception) -> typer.Exit:
    _error_console.print(f"[bold red]Error: {escape(str(error))}[/bold red]", highlight=False)
    return typer.Exit(code=1)


def _parse_alleles(text: str) -> list[int]:
    try:
        return [int(token) for token in re.split(r"[,/|]", text)]
    except ValueError as e:
        raise typer.BadParameter(f"Expected allele indices such as 0,1 or 0/1, got {text!r}") from e


def _load(field: str, source: FieldFormat, codec: LikelihoodCodec) -> GenotypeLikelihoods:
    if source is FieldFormat.GL:
        return GenotypeLikelihoods.from_gl_field(field, codec=codec)
    return GenotypeLikelihoods.from_pl_field(field, codec=codec)


@app.command()
def version():
    """Print the genolik version."""
    typer.echo(f"py-genolik {__version__}")


@app.command()
def convert(
    field: str = typer.Argument(..., help="GL or PL field, e.g. 93,0,39"),
    source: FieldFormat = typer.Option(FieldFormat.PL, "--from", help="Encoding of FIELD"),
    target: FieldFormat = typer.Option(FieldFormat.GL, "--to", help="Encoding to write"),
    gl_precision: int = typer.Option(2, "--gl-precision", help="Decimal places of GL output"),
):
    """
    Convert a likelihood field between the GL and PL encodings.
    """
    try:
        codec = LikelihoodCodec(CodecConfig(gl_precision=gl_precision))
        likelihoods = _load(field, source, codec)
    except (GenolikError, ValidationError) as e:
        raise _fail(e) from e

    if target is FieldFormat.GL:
        typer.echo(likelihoods.as_gl_string())
    else:
        typer.echo(likelihoods.as_pl_string())


@app.command()
def gq(
    field: str = typer.Argument(..., help="GL or PL field"),
    source: FieldFormat = typer.Option(FieldFormat.PL, "--from", help="Encoding of FIELD"),
    index: int | None = typer.Option(None, "--index", "-i", help="Likelihood index of the genotype"),
    alleles: str | None = typer.Option(None, "--alleles", "-a", help="Called allele indices, e.g. 1/2"),
):
    """
    Print the log10 and Phred-scaled quality of one genotype.
    """
    if (index is None) == (alleles is None):
        raise typer.BadParameter("Give exactly one of --index or --alleles")

    try:
        likelihoods = _load(field, source, LikelihoodCodec())
        if index is not None:
            quality = likelihoods.log10_gq(index)
        else:
            quality = likelihoods.log10_gq_of_alleles(_parse_alleles(alleles))
    except GenolikError as e:
        raise _fail(e) from e

    logger.debug("Quality of %s in %s: %s", index if index is not None else alleles, field, quality)
    typer.echo(f"log10_gq\t{quality:.6g}")
    typer.echo(f"gq\t{phred_scaled(quality):.6g}")


@app.command()
def alleles(
    index: int = typer.Argument(..., help="Likelihood index"),
    ploidy: int = typer.Option(2, "--ploidy", "-p", help="Genotype ploidy"),
    max_allele: int | None = typer.Option(
        None, "--max-allele", help="Reject genotypes using a higher allele index"
    ),
):
    """
    Print the allele combination stored at a likelihood index.
    """
    try:
        combination = PloidyIndex(max_allele_index=max_allele).get_alleles(index, ploidy)
    except GenolikError as e:
        raise _fail(e) from e
    typer.echo("/".join(str(allele) for allele in combination))


@app.command()
def index(
    alleles: str = typer.Argument(..., help="Allele indices, e.g. 0/1/1 or 0,1,1"),
):
    """
    Print the likelihood index of an allele combination.
    """
    try:
        typer.echo(str(PloidyIndex().genotype_index(_parse_alleles(alleles))))
    except GenolikError as e:
        raise _fail(e) from e


@app.command()
def count(
    n_alleles: int = typer.Option(..., "--alleles", "-n", help="Number of alleles, reference included"),
    ploidy: int = typer.Option(2, "--ploidy", "-p", help="Genotype ploidy"),
):
    """
    Print the number of genotype likelihoods of a site.
    """
    try:
        typer.echo(str(num_likelihoods(n_alleles, ploidy)))
    except GenolikError as e:
        raise _fail(e) from e


@app.command()
def table(
    n_alleles: int = typer.Option(..., "--alleles", "-n", help="Number of alleles, reference included"),
    ploidy: int = typer.Option(2, "--ploidy", "-p", help="Genotype ploidy"),
    field: str | None = typer.Option(None, "--field", "-f", help="Likelihoods to show per genotype"),
    source: FieldFormat = typer.Option(FieldFormat.PL, "--from", help="Encoding of --field"),
):
    """
    List every genotype of a site in likelihood order.
    """
    ploidy_index = PloidyIndex()
    calculator = QualityCalculator(ploidy_index)
    try:
        with timed(f"Enumerating genotypes for {n_alleles} alleles, ploidy {ploidy}", logger):
            combinations = ploidy_index.enumerate_combinations(n_alleles, ploidy)
        likelihoods = None
        if field is not None:
            likelihoods = _load(field, source, LikelihoodCodec())
    except GenolikError as e:
        raise _fail(e) from e

    if likelihoods is not None and not likelihoods.is_missing:
        if not likelihoods.has_expected_length(n_alleles, ploidy):
            raise _fail(
                ValueError(
                    f"Field has {len(likelihoods)} likelihoods, expected {len(combinations)}"
                )
            )

    grid = Table(title=f"{n_alleles} alleles, ploidy {ploidy}")
    grid.add_column("Index", justify="right")
    grid.add_column("Genotype")
    if likelihoods is not None:
        grid.add_column("Log10 likelihood", justify="right")
        grid.add_column("PL", justify="right")
        grid.add_column("Log10 GQ", justify="right")

    vector = likelihoods.as_vector() if likelihoods is not None else None
    pls = likelihoods.as_pls() if likelihoods is not None else None
    for i, combination in enumerate(combinations):
        row = [str(i), "/".join(str(allele) for allele in combination)]
        if likelihoods is not None:
            if vector is None:
                row += [".", ".", "."]
            else:
                quality = calculator.quality_of(vector, i)
                row += [f"{vector[i]:.2f}", str(pls[i]), f"{quality:.4f}"]
        grid.add_row(*row)

    Console().print(grid)


if __name__ == "__main__":
    app()
