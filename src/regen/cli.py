"""Typer-based command line interface for string generation.

The ``gen`` command parses a pattern, draws ``--count`` strings from it and
prints them separated by ``--separator``.  Options given on the command line
override the YAML configuration.

Exit codes
----------
0 success
2 pattern error (invalid syntax or unsupported construct)
4 configuration error
5 generation error (unsupported node, invariant violation)
6 strict mode and generation stopped early at an end-of-text marker
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import SecretStr, ValidationError

from .config import ConfigModel, load_config
from .gen.generator import StringGenerator
from .utils.errors import GenerationError, PatternError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="regen",
    help="Random strings from regular expressions. Use 'regen gen PATTERN'.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    count: int | None,
    seed: str | None,
    secure: bool,
    unbound_max: int | None,
    multiline: bool,
    dotall: bool,
    separator: str | None,
    strict: bool | None,
) -> ConfigModel:
    """Return a copy of ``cfg`` with CLI overrides applied."""

    new_cfg = cfg.model_copy(deep=True)
    if count is not None:
        new_cfg.output.count = count
    if separator is not None:
        new_cfg.output.separator = separator
    if strict is not None:
        new_cfg.output.strict = strict
    if unbound_max is not None:
        new_cfg.generation.unbound_max = unbound_max
    if multiline and "MULTILINE" not in new_cfg.generation.flags:
        new_cfg.generation.flags.append("MULTILINE")
    if dotall and "DOTALL" not in new_cfg.generation.flags:
        new_cfg.generation.flags.append("DOTALL")
    if seed is not None:
        new_cfg.random.seed = SecretStr(seed)
    if secure:
        new_cfg.random.source = "secure"
    return new_cfg


@app.callback()
def main() -> None:
    """Entry point for the regen command group."""
    pass


@app.command()
def gen(  # noqa: PLR0913
    pattern: str = typer.Argument(..., help="Regular expression in Python syntax"),
    count: Optional[int] = typer.Option(  # noqa: B008
        None, "--count", "-n", min=1, help="Number of strings to generate"
    ),
    seed: Optional[str] = typer.Option(  # noqa: B008
        None, "--seed", help="Seed for reproducible output"
    ),
    secure: bool = typer.Option(  # noqa: B008
        False, "--secure", help="Draw from a cryptographically secure source"
    ),
    unbound_max: Optional[int] = typer.Option(  # noqa: B008
        None, "--unbound-max", min=0, help="Extra repetitions for *, + and {n,}"
    ),
    multiline: bool = typer.Option(  # noqa: B008
        False, "--multiline", "-m", help="Treat ^ and $ as line anchors"
    ),
    dotall: bool = typer.Option(False, "--dotall", "-s", help="Let . emit newlines"),  # noqa: B008
    separator: Optional[str] = typer.Option(  # noqa: B008
        None, "--separator", help="Text printed between generated strings"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    strict: bool | None = typer.Option(  # noqa: B008
        None,
        "--strict/--no-strict",
        help="Exit non-zero when an end-of-text marker stops generation early",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug messages to stderr"
    ),
) -> list[str]:
    """Generate random strings matching ``pattern``."""

    configure_logging(verbose)

    try:
        cfg = load_config(config_path)
    except (ValidationError, Exception) as exc:  # pragma: no cover - diverse
        _safe_exit(4, str(exc).splitlines()[0])

    cfg = _apply_overrides(
        cfg,
        count=count,
        seed=seed,
        secure=secure,
        unbound_max=unbound_max,
        multiline=multiline,
        dotall=dotall,
        separator=separator,
        strict=strict,
    )
    if verbose:
        flags = ",".join(cfg.generation.flags) or "none"
        typer.echo(f"Loaded config (source={cfg.random.source}, flags={flags})", err=True)

    try:
        generator = StringGenerator.from_config(cfg, pattern=pattern)
    except ValueError as exc:
        _safe_exit(4, str(exc))

    outputs: list[str] = []
    stopped = 0
    try:
        for result in generator.iter_strings(pattern, cfg.output.count):
            outputs.append(result.text)
            stopped += result.stopped
    except PatternError as exc:
        _safe_exit(2, str(exc))
    except GenerationError as exc:
        msg = str(exc)
        if verbose:
            msg = f"{type(exc).__name__}: {msg}"
        _safe_exit(5, msg)

    typer.echo(cfg.output.separator.join(outputs))
    if verbose:
        typer.echo(f"Generated {len(outputs)} strings, {stopped} stopped early", err=True)

    if cfg.output.strict and stopped:
        _safe_exit(6, f"{stopped} of {len(outputs)} strings stopped at an end-of-text marker")

    return outputs
