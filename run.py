#!/usr/bin/env python3
"""
Script de démarrage du serveur de quiz
"""
import uvicorn

from trivia.main import app
from trivia.settings import settings

if __name__ == "__main__":
    print(f"Démarrage du serveur {settings.APP_NAME}...")
    print(f"Socket.IO et API disponibles sur: http://localhost:{settings.PORT}")

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )
