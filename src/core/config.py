"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/firma) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import Credentials
from core.errors import ConfigurationError

DEFAULT_API_BASE = "https://gateway.marvel.com:443/v1/public/"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "marvel-explorer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "marvel-explorer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "marvel-explorer"
    return Path.home() / ".config" / "marvel-explorer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# marvel-explorer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.

    Las credenciales se leen de `MARVEL_KEY` y `MARVEL_SECRET_KEY`.
    """

    model_config = SettingsConfigDict(
        env_prefix="MARVEL_",
        extra="ignore",
        case_sensitive=False,
        # El último archivo gana: el .env del proyecto (dev) pisa al global de usuario.
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    key: str | None = Field(
        default=None,
        description="Clave pública de la API (se envía como `apikey`).",
    )
    secret_key: SecretStr | None = Field(
        default=None,
        description="Clave privada; solo se usa para calcular el hash.",
    )
    api_base: str = Field(
        default=DEFAULT_API_BASE,
        min_length=8,
        description="URL base de la API pública.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="marvel-explorer/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def credentials(self) -> Credentials:
        """Devuelve las credenciales o falla si falta alguna clave."""

        secret = self.secret_key.get_secret_value() if self.secret_key else ""
        if not self.key or not secret:
            raise ConfigurationError(
                "Missing API credentials: set MARVEL_KEY and MARVEL_SECRET_KEY "
                "(or run `marvel-explorer doctor setup-keys`)."
            )
        return Credentials(public_key=self.key, private_key=secret)


def load_settings() -> AppSettings:
    """Carga `AppSettings`; un valor inválido se traduce a `ConfigurationError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
