import logging
import sys

import yaml

from engine.app import GameApp
from engine.narrative.loader import StoryFormatError
from engine.resources import AssetError
from engine.settings import load_settings

logger = logging.getLogger("run")

# Raised while loading settings, story or images; none can be recovered from
STARTUP_ERRORS = (AssetError, StoryFormatError, yaml.YAMLError)

def main():
    try:
        cfg = load_settings()
    except (ValueError, yaml.YAMLError) as e:
        logging.basicConfig()
        logger.critical("cannot read settings: %s", e)
        sys.exit(1)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        app = GameApp(cfg)
    except STARTUP_ERRORS as e:
        logger.critical("cannot start: %s", e)
        sys.exit(1)
    app.run()

if __name__ == "__main__":
    main()
