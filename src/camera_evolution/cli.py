import click

from . import catalog, orchestrator
from .encoder import IMAGE_FORMATS
from .errors import PipelineError


@click.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.argument("output_path", type=click.Path())
@click.option(
    "--era",
    default=catalog.era_ids()[0],
    type=click.Choice(catalog.era_ids(), case_sensitive=False),
    help="The photographic era to render.",
)
@click.option(
    "--format",
    "aspect",
    default="square",
    type=click.Choice(catalog.format_ids(), case_sensitive=False),
    help="Output aspect format.",
)
@click.option(
    "--output-format",
    "image_format",
    default="jpeg",
    type=click.Choice(IMAGE_FORMATS, case_sensitive=False),
    help="Encoded image format. JPEG is written at quality 95.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for grain, scratches, dust and noise. Unseeded by default.",
)
@click.option(
    "--jobs",
    type=int,
    default=None,
    help="Worker processes when INPUT_PATH is a directory.",
)
@click.option(
    "--gallery",
    "gallery_dir",
    type=click.Path(file_okay=False),
    envvar="CAMERA_EVOLUTION_GALLERY",
    help="Gallery directory to add captures to.",
)
def main(input_path, output_path, era, aspect, image_format, seed, jobs, gallery_dir):
    """
    Renders a frame (or a directory of frames) through a photographic era.
    """
    era_def = catalog.get_era(era)
    click.echo(f"Capturing {input_path} as {era_def.label}...")

    try:
        artifacts = orchestrator.process_path(
            input_path=input_path,
            output_path=output_path,
            era=era_def.id,
            aspect=aspect,
            jobs=jobs,
            logger_func=click.echo,
            image_format=image_format.lower(),
            seed=seed,
            gallery_dir=gallery_dir,
        )
    except (PipelineError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Successfully saved {len(artifacts)} capture(s) to {output_path}")


if __name__ == "__main__":
    main()
