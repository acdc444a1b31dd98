"""Application entry point for the Study Sphere backend server."""

from studysphere.app import App
from studysphere.config import Config
from studysphere.logging import setup_logging
from studysphere.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    run_server(App(config), config)


if __name__ == "__main__":
    main()
