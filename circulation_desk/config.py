import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = _flag("DEBUG")

    # Logging; blank means DEBUG when debug is on, WARNING otherwise
    log_level: str = os.getenv("LOG_LEVEL", "")

    # Display
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "$")
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain")

    # Start with the demo catalog and roster
    seed_demo_data: bool = _flag("SEED_DEMO_DATA")

    def __post_init__(self):
        if not self.log_level:
            self.log_level = "DEBUG" if self.debug else "WARNING"


settings = Settings()
