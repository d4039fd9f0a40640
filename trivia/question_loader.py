"""Chargement de la banque de questions (fichier JSON local ou URL).

Format attendu: une liste d'objets
``{"question": str, "options": {"A": str, ...} | [str, ...], "correct": str}``.
"""

from __future__ import annotations

import json
import logging
import string
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .scoring import normalize_answer
from .state import Question

logger = logging.getLogger(__name__)


def parse_question(record: Any) -> Optional[Question]:
    """Construit une Question à partir d'un enregistrement JSON, ou None."""
    if not isinstance(record, dict):
        return None
    prompt = str(record.get("question") or "").strip()
    correct = normalize_answer(record.get("correct"))
    if not prompt or correct is None:
        return None

    raw_options = record.get("options") or {}
    options: Dict[str, str] = {}
    if isinstance(raw_options, dict):
        for key, text in raw_options.items():
            options[str(key).strip().upper()] = str(text)
    elif isinstance(raw_options, list):
        for key, text in zip(string.ascii_uppercase, raw_options):
            options[key] = str(text)
    return Question(question=prompt, options=options, correct=correct)


def parse_questions(data: Any) -> List[Question]:
    if not isinstance(data, list):
        raise ValueError("question bank must be a JSON list")
    result: List[Question] = []
    for i, record in enumerate(data):
        question = parse_question(record)
        if question is None:
            logger.warning("Question #%d ignorée (enregistrement invalide)", i)
            continue
        result.append(question)
    return result


def fetch_remote_questions(url: str) -> List[Question]:
    resp = requests.get(url, timeout=10)
    resp.raise_for_status()
    return parse_questions(resp.json())


def read_questions_file(json_path: str) -> List[Question]:
    with open(json_path, encoding="utf-8") as f:
        return parse_questions(json.load(f))


def load_questions(source: str) -> List[Question]:
    """Charge les questions; en cas d'échec retourne une liste vide."""
    try:
        if source.startswith(("http://", "https://")):
            questions = fetch_remote_questions(source)
        else:
            questions = read_questions_file(source)
    except (requests.RequestException, OSError, ValueError) as e:
        logger.warning("Echec du chargement des questions depuis %s: %s", source, e)
        return []
    logger.info("%d questions chargées depuis %s", len(questions), source)
    return questions


class QuestionBank:
    """Fournisseur de questions consommé par la session."""

    def __init__(self, source: str | Path) -> None:
        self.source = str(source)

    def load(self) -> List[Question]:
        return load_questions(self.source)
