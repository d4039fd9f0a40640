"""Configuration du serveur de quiz (pydantic-settings).

Les valeurs par défaut conviennent pour une partie locale. Toutes peuvent
être surchargées par l'environnement (préfixe ``TRIVIA_``) ou un fichier
``.env``, par exemple::

    TRIVIA_PORT=8080
    TRIVIA_TIMER_SECONDS=30
    TRIVIA_QUESTIONS_SOURCE="https://example.org/questions.json"
"""

from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from .paths import QUESTIONS_PATH


class Settings(BaseSettings):
    APP_NAME: str = "Trivia Live"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Fichier local ou URL http(s) de la banque de questions
    QUESTIONS_SOURCE: str = str(QUESTIONS_PATH)

    # Règles de jeu
    TIMER_SECONDS: int = 20
    POINTS_CORRECT: int = 10
    POINTS_BUZZ_BONUS: int = 5
    MAX_PLAYERS: int = 6

    # "*" ou liste séparée par des virgules
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="TRIVIA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_allowed_origins(self) -> str | List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return "*"
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# instance unique importable partout
settings = Settings()
