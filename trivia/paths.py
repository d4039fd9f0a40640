"""Chemins communs du serveur de quiz."""

from __future__ import annotations

from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT_DIR / "data"
QUESTIONS_PATH = DATA_DIR / "questions.json"
