import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

SUPPORTED_BACKENDS = ("sqlite", "mysql")


@dataclass
class DatabaseSettings:
    """Connection parameters handed to the storage gateway."""

    backend: str = "sqlite"
    # SQLite
    db_file: str = "library.db"
    # MySQL
    host: str = "localhost"
    port: int = 3306
    name: str = "library_db"
    user: str = "root"
    password: Optional[str] = ""


@dataclass
class Settings:
    # Veritabanı Ayarları
    db_backend: str = os.getenv("LIBRARY_DB_BACKEND", "sqlite").lower()
    db_file: str = os.getenv("LIBRARY_DB_FILE", "library.db")
    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: int = int(os.getenv("DB_PORT", "3306"))
    db_name: str = os.getenv("DB_NAME", "library_db")
    db_user: str = os.getenv("DB_USER", "root")
    db_password: Optional[str] = os.getenv("DB_PASSWORD", "")

    # Günlük Ayarları
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "E-Library")
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()

    def database(self) -> DatabaseSettings:
        return DatabaseSettings(
            backend=self.db_backend,
            db_file=self.db_file,
            host=self.db_host,
            port=self.db_port,
            name=self.db_name,
            user=self.db_user,
            password=self.db_password,
        )


settings = Settings()
