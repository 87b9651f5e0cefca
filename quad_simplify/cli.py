"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from quad_simplify.animation import animate, save_gif
from quad_simplify.config import SimplifyConfig
from quad_simplify.image_io import ImageIOError, load_image, save_image
from quad_simplify.model import Model

app = typer.Typer(
    name="quad-simplify",
    help="Approximate images with a quadtree of flat-coloured rectangles.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger("quad_simplify")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _quality_metric(source: np.ndarray, approx: np.ndarray) -> float:
    s = source.reshape(-1, 3).astype(np.float64)
    a = approx.reshape(-1, 3).astype(np.float64)
    return float(np.mean(np.sqrt(np.sum((s - a) ** 2, axis=1))))


def _simplify_one(source: Path, output: Path, cfg: SimplifyConfig) -> None:
    """Simplify *source* into *output* (plus a sibling GIF when enabled)."""
    t0 = time.perf_counter()
    pixels, (orig_w, orig_h) = load_image(source, cfg.max_side)
    h, w = pixels.shape[:2]
    logger.info("Source: %dx%d, analysed at %dx%d", orig_w, orig_h, w, h)

    model = Model(pixels, cfg)
    if cfg.gif:
        frames = animate(model, cfg.iterations, width=orig_w, height=orig_h)
        save_gif(frames, output.with_suffix(".gif"), cfg.gif_duration)
    else:
        model.run(cfg.iterations)

    result = model.render(orig_w, orig_h)
    save_image(result, output)

    err = _quality_metric(pixels, model.render(padding=False))
    console.print(
        f"  [green]✓[/green] {output.name}  "
        f"[dim]{len(model.leaves)} quads  splits={model.steps}"
        f"  avg error={model.average_error():.2f}  rgb dist={err:.1f}"
        f"  time={time.perf_counter() - t0:.1f}s[/dim]"
    )


# Defaults come from SimplifyConfig - single source of truth
_DEFAULTS = SimplifyConfig()


# -- single-image command ----------------------------------------------

@app.command()
def simplify(
    source: Path = typer.Argument(..., help="Path to the input image"),
    output: Path = typer.Option(
        Path("output.png"), "--output", "-o", help="Name of the output image",
    ),
    iterations: int = typer.Option(
        _DEFAULTS.iterations, "--iters", "-n",
        help="Number of times the algorithm splits a quad",
    ),
    padding: bool = typer.Option(
        _DEFAULTS.padding, "--padding", "-p", help="Add padding between quads",
    ),
    gif: bool = typer.Option(
        _DEFAULTS.gif, "--gif", "-g", help="Also save an animated GIF",
    ),
    gif_frames: int = typer.Option(
        _DEFAULTS.gif_frames, "--gif-frames", help="Frames in the GIF (0 = every step)",
    ),
    max_side: int | None = typer.Option(
        _DEFAULTS.max_side, "--max-side", "-m",
        help="Downscale the longest side before analysis",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Simplify a single image."""
    _setup_logging(verbose)

    cfg = SimplifyConfig(
        iterations=iterations,
        padding=padding,
        gif=gif,
        gif_frames=gif_frames,
        max_side=max_side,
    )
    output.parent.mkdir(parents=True, exist_ok=True)

    console.print("Simplifying image...")
    try:
        _simplify_one(source, output, cfg)
    except ImageIOError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    iterations: int = typer.Option(_DEFAULTS.iterations, "--iters", "-n"),
    padding: bool = typer.Option(_DEFAULTS.padding, "--padding", "-p"),
    gif: bool = typer.Option(_DEFAULTS.gif, "--gif", "-g"),
    gif_frames: int = typer.Option(_DEFAULTS.gif_frames, "--gif-frames"),
    max_side: int | None = typer.Option(_DEFAULTS.max_side, "--max-side", "-m"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Simplify every image in INPUT_DIR and write results to OUTPUT_DIR."""
    _setup_logging(verbose)

    cfg = SimplifyConfig(
        iterations=iterations,
        padding=padding,
        gif=gif,
        gif_frames=gif_frames,
        max_side=max_side,
        input_dir=input_dir,
        output_dir=output_dir,
    )

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    output_dir.mkdir(parents=True, exist_ok=True)

    console.print(Panel.fit(
        f"[bold]QUAD SIMPLIFY[/bold]\n"
        f"Iterations: {cfg.iterations}  |  Padding: {cfg.padding}\n"
        f"GIF: {cfg.gif}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    failed = 0
    for idx, img_path in enumerate(images, 1):
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        out = output_dir / f"{img_path.stem}_quads.{cfg.output_format}"
        try:
            _simplify_one(img_path, out, cfg)
        except ImageIOError as exc:
            failed += 1
            logger.error("%s", exc)

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]"
        + (f"  [red]({failed} failed)[/red]" if failed else ""),
        border_style="green",
    ))
    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
