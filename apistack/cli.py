"""
Click CLI for rendering an API deployment manifest.
"""

import logging
import sys
from typing import Optional

import click

from .builder import create
from .capabilities.database import DatabaseSize
from .emit import FORMATS, ManifestEmitter
from .errors import ApiStackError
from .settings import BuildContext, Settings, is_valid_deployment_id, new_deployment_id
from .tags import parse_labels


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (repeatable)")
def main(verbose: int):
    """
    apistack - Declarative builder for API deployments.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s", stream=sys.stderr)


@main.command("render")
@click.option("--name", required=True, help="API name (DNS label)")
@click.option("--image", required=True, help="Container image")
@click.option("--port", type=int, required=True, help="Container port")
@click.option("--replicas", type=int, default=1, show_default=True, help="Replica count")
@click.option("--database", "database_size", type=click.Choice([s.value for s in DatabaseSize]),
              help="Attach a managed database of this size")
@click.option("--env", "env", multiple=True, help="Environment variable 'KEY=value' (repeatable)")
@click.option("--label", "labels", multiple=True, help="Extra label 'key=value' (repeatable)")
@click.option("--namespace", help="Target namespace (defaults to APISTACK_NAMESPACE)")
@click.option("--deployment-id", help="Deployment ID (generated when omitted)")
@click.option("--format", "output_format", type=click.Choice(FORMATS), default="yaml", show_default=True,
              help="Manifest format")
def render_cmd(name: str, image: str, port: int, replicas: int, database_size: Optional[str], env: tuple,
               labels: tuple, namespace: Optional[str], deployment_id: Optional[str], output_format: str):
    """
    Build the deployment and print its manifest with secrets redacted.
    """
    deployment_id = deployment_id or new_deployment_id()
    if not is_valid_deployment_id(deployment_id):
        click.echo(f"Invalid deployment ID: {deployment_id}", err=True)
        sys.exit(1)

    try:
        extra_labels = parse_labels(list(labels))
        env_values = {}
        for item in env:
            if "=" not in item:
                raise ValueError(f"Invalid env format: {item}. Expected 'KEY=value'")
            key, value = item.split("=", 1)
            env_values[key] = value
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    try:
        context = BuildContext(
            settings=Settings.from_env(),
            namespace=namespace,
            deployment_id=deployment_id,
            extra_labels=extra_labels,
        )
        builder = create(name, image, port, replicas)
        if database_size:
            builder.attach_managed_database(size=database_size)
        if env_values:
            builder.set_environment(env_values, label="cli")
        builder.build(context, emitter=ManifestEmitter(sys.stdout, fmt=output_format))
    except ApiStackError as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
