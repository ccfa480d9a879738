# -*- coding: utf-8 -*-
"""
Gamut: Colour transforms for mixed-gamut surface compositing
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: Inspection CLI

    gamut csc BT.709 BT.2020 --luminance-scale 1.0
    gamut ycbcr BT.2020 --bpc-mul 64.06158 --limited-range --decode
    gamut gamma ST2084 0.58 --decode
    gamut curves
    gamut colorspaces
    gamut shader hlg_oetf hlg_eotf
"""

from typing import List, NoReturn, Optional, Sequence

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from gamut_about import metadata_summary
from gamut_colorspace import COLORSPACES, Chromaticity
from gamut_csc import ConeResponse, csc_matrix
from gamut_matrix import Matrix4
from gamut_shaders import SNIPPETS, transfer_function_source
from gamut_transfer import (
    GAMMA_COEFFS,
    degamma,
    gamma,
    lookup_degamma,
    lookup_gamma,
)
from gamut_ycbcr import COLOR_ENCODINGS, rgb_to_ycbcr_matrix, ycbcr_to_rgb_matrix

app = typer.Typer(help="Inspect colour-space, YCbCr and transfer-function math.")
console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


def _require(name: str, table: Sequence[str], what: str) -> None:
    if name not in table:
        _fail(f"unknown {what} '{name}'. Known: {', '.join(table)}")


def _matrix_table(title: str, m: Matrix4) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 1))
    for _ in range(4):
        table.add_column(justify="right", style="white")
    for row in np.asarray(m):
        table.add_row(*(f"{v:+.6f}" for v in row))
    return table


@app.command()
def csc(
    dst: str = typer.Argument(..., help="Destination colorspace name."),
    src: str = typer.Argument(..., help="Source colorspace name."),
    luminance_scale: float = typer.Option(
        1.0, "--luminance-scale", "-l", help="Uniform gain after conversion."
    ),
    von_kries: bool = typer.Option(
        False, "--von-kries", help="Adapt with von Kries instead of Bradford."
    ),
) -> None:
    """Print the linear RGB(src) -> RGB(dst) conversion matrix."""
    _require(dst, list(COLORSPACES), "colorspace")
    _require(src, list(COLORSPACES), "colorspace")
    cone = ConeResponse.VON_KRIES if von_kries else ConeResponse.BRADFORD
    m = csc_matrix(COLORSPACES[dst], COLORSPACES[src], luminance_scale, cone)
    console.print(_matrix_table(f"{src} -> {dst}", m))


@app.command()
def ycbcr(
    encoding: str = typer.Argument(..., help="YCbCr encoding name."),
    bpc_mul: float = typer.Option(1.0, "--bpc-mul", help="Bit-depth multiplier."),
    full_range: bool = typer.Option(
        False, "--full-range/--limited-range", help="Quantization range."
    ),
    decode: bool = typer.Option(
        False, "--decode", help="Print YCbCr -> RGB instead of RGB -> YCbCr."
    ),
) -> None:
    """Print an RGB <-> YCbCr matrix."""
    _require(encoding, list(COLOR_ENCODINGS), "encoding")
    if not bpc_mul > 0.0:
        _fail(f"--bpc-mul must be positive, got {bpc_mul}")
    e = COLOR_ENCODINGS[encoding]
    builder = ycbcr_to_rgb_matrix if decode else rgb_to_ycbcr_matrix
    direction = "YCbCr -> RGB" if decode else "RGB -> YCbCr"
    quant = "full" if full_range else "limited"
    console.print(_matrix_table(f"{encoding} {direction} ({quant})",
                                builder(e, bpc_mul, full_range)))


@app.command(name="gamma")
def gamma_command(
    curve: str = typer.Argument(..., help="Transfer curve name."),
    value: float = typer.Argument(..., help="Sample value."),
    decode: bool = typer.Option(
        False, "--decode", help="Decode (encoded -> linear) instead of encode."
    ),
) -> None:
    """Evaluate one transfer curve on one sample."""
    _require(curve, list(GAMMA_COEFFS), "transfer curve")
    if decode:
        result = degamma(lookup_degamma(curve), value)
    else:
        result = gamma(lookup_gamma(curve), value)
    console.print(f"{curve} {'degamma' if decode else 'gamma'}({value}) = {result:.9f}")


@app.command()
def curves() -> None:
    """List every built-in transfer curve, encode and decode records."""
    table = Table(title="Transfer Curves", box=None, padding=(0, 1))
    table.add_column("Name", style="bold cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Dir", style="dim")
    for col in ("p", "a", "knee", "linear"):
        table.add_column(col, justify="right")

    for name in GAMMA_COEFFS:
        for label, c in (("enc", lookup_gamma(name)), ("dec", lookup_degamma(name))):
            table.add_row(name, c.kind.name, label,
                          f"{c.p:.6f}", f"{c.a:.6f}",
                          f"{c.knee:.6f}", f"{c.linear:.6f}")
    console.print(table)


@app.command()
def colorspaces() -> None:
    """List every built-in colorspace."""
    table = Table(title="Colorspaces", box=None, padding=(0, 1))
    table.add_column("Name", style="bold cyan")
    table.add_column("White", style="dim")
    for col in ("R", "G", "B"):
        table.add_column(col, style="dim")

    def fmt(xy: Chromaticity) -> str:
        return f"{xy[0]:.4f}, {xy[1]:.4f}"

    for cs in COLORSPACES.values():
        table.add_row(cs.name, f"{cs.whitepoint_name} ({fmt(cs.whitepoint)})",
                      fmt(cs.r), fmt(cs.g), fmt(cs.b))
    console.print(table)


@app.command()
def shader(
    names: Optional[List[str]] = typer.Argument(
        None, help="Snippet names; all transfer functions when omitted."
    ),
) -> None:
    """Print GLSL transfer-function source."""
    for name in names or []:
        _require(name, list(SNIPPETS), "shader snippet")
    typer.echo(transfer_function_source(*(names or [])), nl=False)


@app.command()
def version() -> None:
    """Print project metadata."""
    meta = metadata_summary()
    console.print(f"[bold]{meta['title']}[/bold] {meta['version']} ({meta['license']})")


if __name__ == "__main__":
    app()
