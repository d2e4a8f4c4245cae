"""
Main entry point for the student administration system.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AppConfig, load_config
from .core.exceptions import ConfigurationError, UnrecoverableConnectionError
from .core.factory import StudentFactory
from .core.lang import LangEntry, LangSource
from .persistence import ConnectionProviderFactory, SimplePersistenceExecutor, StudentRepository
from .ui import StudentConsole


logger = logging.getLogger(__name__)


class StudentAdministrationApplication:
    """Wires configuration, persistence and the console together."""
    
    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()
        self._lang = LangSource(self._config.lang_file)
        self._executor = SimplePersistenceExecutor(
            ConnectionProviderFactory.create_provider(self._config.database_url),
            max_attempts=self._config.max_reconnect_attempts,
            retry_delay_ms=self._config.reconnect_delay_ms,
        )
        self._repository = StudentRepository(self._executor, StudentFactory())
    
    @property
    def config(self) -> AppConfig:
        return self._config
    
    @property
    def executor(self) -> SimplePersistenceExecutor:
        return self._executor
    
    @property
    def repository(self) -> StudentRepository:
        return self._repository
    
    @property
    def title(self) -> str:
        return self._lang.get_translation(LangEntry.GUI_TITLE)
    
    def start(self) -> None:
        """Connect to the database and load the stored students."""
        logger.info("Connecting to %s", self._config.database_url)
        self._executor.connect()
        self._repository.load_from_database()
        logger.info("%s started with %d students", self.title, len(self._repository))
    
    def run(self) -> None:
        StudentConsole(self._repository, self._lang).run()
    
    def stop(self) -> None:
        self._executor.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student Administration System")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--database", type=str, help="Database URL, e.g. sqlite:///students.db")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    
    try:
        overrides = {"database_url": args.database} if args.database else None
        config = load_config(args.config, overrides=overrides)
        logging.basicConfig(
            level=getattr(logging, config.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        app = StudentAdministrationApplication(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2
    
    try:
        app.start()
        app.run()
    except UnrecoverableConnectionError as e:
        print(f"Could not reach the database after {e.attempts} attempts. Exiting.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        app.stop()
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
