"""Process entry point with Datadog tracing enabled."""

import ddtrace.auto  # noqa: F401

from transcription_gateway.main import main


def run():
    """Starts the gateway."""
    main()


if __name__ == "__main__":
    run()
