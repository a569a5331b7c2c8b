"""CLI entry point for the auto prompt architect."""

import asyncio
import json
import logging
import typer
from pathlib import Path
from typing import Optional
from enum import Enum

from . import __version__
from .config import PROVIDERS, config
from .errors import ScenePlanError

app = typer.Typer(
    name="apa",
    help="Turn a video idea into scene-by-scene prompts for text-to-video models",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apa version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Auto Prompt Architect - plan 8-second scenes from a video idea."""
    pass


class Provider(str, Enum):
    """Generation backends."""
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"


def _echo_error(error: ScenePlanError, as_json: bool = False) -> None:
    report = error.to_dict()
    if as_json:
        typer.echo(json.dumps(report, ensure_ascii=False))
        return
    typer.echo(f"❌ [{report['kind']}] {report['error']}")
    if report["hint"]:
        typer.echo(f"   {report['hint']}")


@app.command()
def scenes(
    duration: str = typer.Argument(
        ...,
        help="Duration such as '30s', '1 phút', '2m 30s' or '45'"
    ),
    json_errors: bool = typer.Option(
        False,
        "--json-errors",
        help="Print errors as one JSON object"
    ),
) -> None:
    """Show how many scenes a duration needs, without calling a model."""
    from .duration import SCENE_WINDOW_SECONDS, format_duration, parse_duration, scene_count

    try:
        seconds = parse_duration(duration)
    except ScenePlanError as e:
        _echo_error(e, as_json=json_errors)
        raise typer.Exit(1)

    typer.echo(f"⏱️  Duration: {format_duration(seconds)} ({seconds:g}s)")
    typer.echo(f"   Scenes: {scene_count(seconds)} × {SCENE_WINDOW_SECONDS}s")


@app.command()
def plan(
    idea: str = typer.Argument(
        ...,
        help="Creative idea or concept for the video"
    ),
    duration: str = typer.Option(
        ...,
        "--duration",
        "-d",
        help="Target duration, e.g. '30s', '1 phút', '2m 30s'"
    ),
    provider: Optional[Provider] = typer.Option(
        None,
        "--provider",
        "-p",
        help=f"Generation backend ({', '.join(PROVIDERS)}). Defaults to APA_PROVIDER"
    ),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key for the provider. Defaults to GEMINI_API_KEY / ANTHROPIC_API_KEY"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model override for the provider"
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        help="Visual style for every scene (defaults to APA_VISUAL_STYLE)"
    ),
    output: Path = typer.Option(
        Path("video_scenes.json"),
        "--output",
        "-o",
        help="Output file path (.json, .yaml or .yml)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    json_errors: bool = typer.Option(
        False,
        "--json-errors",
        help="Print errors as one JSON object"
    ),
) -> None:
    """Generate scene prompts from a creative idea using AI."""
    from .agents import PlanInput, ScenePlanner
    from .services import create_gateway

    setup_logging(verbose)

    provider_name = provider.value if provider else config.provider
    try:
        key = api_key or config.api_key_for(provider_name)
        gateway = create_gateway(provider_name, model=model)
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    typer.echo(f"🎬 Planning: {idea}")
    typer.echo(f"   Duration: {duration}")
    typer.echo(f"   Using {gateway.name} model: {gateway.model}")

    planner = ScenePlanner(gateway=gateway, visual_style=style)

    try:
        scene_map = asyncio.run(
            planner.run(PlanInput(idea=idea, duration=duration, style=style), key)
        )
    except ScenePlanError as e:
        _echo_error(e, as_json=json_errors)
        raise typer.Exit(1)

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        scene_map.save(output)
        typer.echo(f"\n✅ Scenes saved: {output}")
    except OSError as e:
        typer.echo(f"❌ Error saving scenes: {e}")
        raise typer.Exit(1)

    total = len(scene_map)
    typer.echo("\n📽️  Scene breakdown:")
    for index, key_name in enumerate(scene_map.keys(), start=1):
        typer.echo(f"   [{key_name} {index}/{total}] {scene_map.summary(key_name)}")


@app.command()
def show(
    path: Path = typer.Argument(
        Path("video_scenes.json"),
        help="Scene file written by 'apa plan'",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Also check every scene against the full scene schema"
    ),
) -> None:
    """Show the scenes in a saved scene file."""
    import yaml
    from pydantic import ValidationError
    from .models import SceneMap

    try:
        scene_map = SceneMap.from_file(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"❌ Error loading scenes: {e}")
        raise typer.Exit(1)

    total = len(scene_map)
    typer.echo(f"📁 {path}: {total} scene(s)")

    invalid = 0
    for index, key_name in enumerate(scene_map.keys(), start=1):
        typer.echo(f"   [{key_name} {index}/{total}] {scene_map.summary(key_name)}")
        if strict:
            try:
                scene_map.parsed(key_name)
            except ValidationError as e:
                invalid += 1
                typer.echo(f"      ⚠️  {e.error_count()} schema error(s)")

    if invalid:
        typer.echo(f"\n⚠️  {invalid} scene(s) do not match the scene schema")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
