"""
Command line entrypoint: python -m leaderboard --config leaderboard.yaml
"""
import argparse
import logging
import signal
import sys

import uvicorn

from leaderboard.config import DEFAULT_CONFIG_PATH, VERSION, ConfigError, load_config
from leaderboard.core.shutdown import ShutdownCoordinator
from leaderboard.main import create_app


logger = logging.getLogger("leaderboard")


class GracefulServer(uvicorn.Server):
    """uvicorn server that tells the coordinator about termination signals"""

    def __init__(self, config: uvicorn.Config, coordinator: ShutdownCoordinator):
        super().__init__(config)
        self.coordinator = coordinator

    def handle_exit(self, sig, frame) -> None:
        self.coordinator.request_shutdown(signal.Signals(sig).name)
        super().handle_exit(sig, frame)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="leaderboard", description="Competition leaderboard server")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_PATH, help="config file path")
    parser.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info(f"Reading configuration from {args.config}")
    try:
        settings = load_config(args.config)
    except ConfigError as e:
        logger.error(f"❌ {e}")
        return 1

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.listen.address,
        port=settings.listen.port,
        log_config=None,
    )
    logger.info(f"Listening on {settings.listen.address}:{settings.listen.port}")
    GracefulServer(config, app.state.coordinator).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
