#!/usr/bin/env python3
"""
Create the SageMaker model and endpoint configuration the controller launches
the endpoint from. Reads ENDPOINT_NAME, ENDPOINT_CONFIG_NAME, IMAGE_URI,
MODEL_DATA_URL, EXECUTION_ROLE_ARN (and optionally MODEL_NAME, INSTANCE_TYPE,
INSTANCE_COUNT, AWS_REGION) from the environment or .env.
Prints ENDPOINT_CONFIG_NAME for .env.
"""
import sys

from tts_endpoint.core.config import get_settings
from tts_endpoint.core.errors import ControllerError
from tts_endpoint.core.logging import configure_logging
from tts_endpoint.services.provider_factory import build_endpoint_provider


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, "readable")
    config = settings.launch_config()

    missing = config.missing_fields()
    if missing:
        names = ", ".join(name.upper() for name in missing)
        print(f"Set {names} (e.g. in .env).", file=sys.stderr)
        sys.exit(1)

    print(
        f"Using image: {config.image_uri} model: {config.model_data_url} "
        f"instance: {config.instance_count} x {config.instance_type}",
        file=sys.stderr,
    )
    provider = build_endpoint_provider(settings)
    try:
        result = provider.create_launch_config(config)
    except ControllerError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        sys.exit(1)

    for kind in result["existing"]:
        print(f"{kind} already exists; left unchanged", file=sys.stderr)
    for kind in result["created"]:
        print(f"Created {kind}: {result.get(f'{kind}_arn')}", file=sys.stderr)
    print(f"ENDPOINT_CONFIG_NAME={config.config_name}")


if __name__ == "__main__":
    main()
