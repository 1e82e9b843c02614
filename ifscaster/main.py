from ifscaster import config
from ifscaster.engine import Engine
from ifscaster.logging_config import setup_logging


def main() -> None:
    cfg = config.load_config()
    setup_logging(cfg.log_level, cfg.log_file)
    engine = Engine(cfg)
    engine.run()


if __name__ == "__main__":
    main()
